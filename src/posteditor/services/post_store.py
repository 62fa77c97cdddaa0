"""File-backed post persistence.

Each post is one YAML document, ``<posts_dir>/<slug>.yaml``, written with
the temp-file-rename pattern so a failed save never leaves a truncated post.
"""

import asyncio
import os
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import structlog
import yaml
from pydantic import ValidationError

from posteditor.models.post import POST_ATTRIBUTES, Post, Tag
from posteditor.services.exceptions import PersistenceError, PostNotFoundError

logger = structlog.get_logger()


def atomic_write(path: Path, content: str) -> None:
    """
    Atomically write content to file with temp-file-rename pattern.

    Args:
        path: Target file path
        content: Content to write

    Raises:
        OSError: On file I/O errors
    """
    temp_path = path.parent / f".{path.name}.tmp.{os.getpid()}"

    try:
        temp_path.write_text(content, encoding="utf-8")

        with open(temp_path, "r+", encoding="utf-8") as f:
            f.flush()
            os.fsync(f.fileno())

        # On POSIX systems, this is atomic even if target exists
        temp_path.replace(path)

        logger.debug("atomic_write_success", path=str(path), size=len(content))

    except Exception as e:
        if temp_path.exists():
            temp_path.unlink()
        logger.error("atomic_write_failed", path=str(path), error=str(e))
        raise


class PostRecord:
    """A post plus its tags, with change tracking against the stored copy.

    New records report themselves dirty until their first save; use
    :meth:`changed_field_names` to see what was actually edited.
    """

    def __init__(
        self,
        store: "PostStore",
        post: Post,
        tags: Optional[List[Tag]] = None,
        persisted: bool = False,
    ):
        self.store = store
        self.post = post
        self.tags: List[Tag] = list(tags or [])
        self.path = store.path_for(post.slug)
        self._persisted = persisted
        self._snapshot = post.model_dump()

    @property
    def is_new(self) -> bool:
        return not self._persisted

    @property
    def is_dirty(self) -> bool:
        return self.is_new or bool(self.changed_field_names())

    def changed_field_names(self) -> Set[str]:
        """Attributes whose value differs from the last saved (or initial) one."""
        current = self.post.model_dump()
        return {name for name, value in current.items() if self._snapshot.get(name) != value}

    def field_values(self) -> Dict[str, Any]:
        return self.post.model_dump()

    def get(self, name: str) -> Any:
        return getattr(self.post, name)

    def set(self, name: str, value: Any) -> None:
        """Set a post attribute (validated).

        Raises:
            AttributeError: If the post has no such attribute
            ValidationError: If the value is invalid for the attribute
        """
        if name not in POST_ATTRIBUTES:
            raise AttributeError(f"Post has no attribute {name!r}")
        setattr(self.post, name, value)

    def tag_names(self) -> List[str]:
        return [tag.name for tag in self.tags]

    def add_tag(self, name: str) -> Tag:
        """Add a client-generated tag (no id until saved)."""
        tag = Tag(name=name)
        self.tags.append(tag)
        return tag

    def remove_tag(self, name: str) -> None:
        self.tags = [tag for tag in self.tags if tag.name != name]

    def _document(self) -> tuple[Dict[str, Any], List[Tag]]:
        stored_tags = []
        created = []
        for tag in self.tags:
            if tag.id is None:
                tag = Tag(id=uuid.uuid4().hex, name=tag.name)
                created.append(tag)
            stored_tags.append(tag)

        document = self.post.model_dump()
        document["tags"] = [tag.model_dump() for tag in stored_tags]
        return document, created

    async def save(self) -> Dict[str, Any]:
        """Write the post to the store.

        Client-generated tags are stored with fresh ids; the stored copies are
        appended to :attr:`tags` next to the id-less originals, which the
        caller is expected to remove.

        Returns:
            Fields updated by the store ("tags" holds the stored tag list)

        Raises:
            PersistenceError: If the document could not be written
        """
        document, created = self._document()
        await asyncio.to_thread(self.store.write, self.post.slug, document)

        known_ids = {tag.id for tag in self.tags if tag.id is not None}
        self.tags.extend(tag for tag in created if tag.id not in known_ids)
        self._persisted = True
        self._snapshot = self.post.model_dump()

        logger.info("post_saved", slug=self.post.slug, status=self.post.status, new_tags=len(created))
        return {"tags": [Tag(**tag) for tag in document["tags"]], "status": self.post.status}


class PostStore:
    """Directory of YAML post documents.

    Args:
        posts_dir: Directory holding the documents (created on first write)
    """

    def __init__(self, posts_dir: Path):
        self.posts_dir = Path(posts_dir)

    def path_for(self, slug: str) -> Path:
        return self.posts_dir / f"{slug}.yaml"

    def exists(self, slug: str) -> bool:
        return self.path_for(slug).exists()

    def create(self, slug: str, title: str = "") -> PostRecord:
        """Start a new, unsaved post."""
        logger.info("post_created", slug=slug)
        return PostRecord(self, Post(slug=slug, title=title))

    def load(self, slug: str) -> PostRecord:
        """
        Load a stored post.

        Raises:
            PostNotFoundError: If no document exists for the slug
            PersistenceError: If the document is unreadable or invalid
        """
        path = self.path_for(slug)
        if not path.exists():
            raise PostNotFoundError(slug)

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            tags = [Tag(**tag) for tag in data.pop("tags", None) or []]
            post = Post(**data)
        except (OSError, yaml.YAMLError, ValidationError, TypeError) as e:
            logger.error("post_load_failed", slug=slug, error=str(e))
            raise PersistenceError(slug, f"Could not load post ({e})") from e

        logger.info("post_loaded", slug=slug, tags=len(tags))
        return PostRecord(self, post, tags, persisted=True)

    def write(self, slug: str, document: Dict[str, Any]) -> None:
        """
        Write a post document.

        Raises:
            PersistenceError: On file I/O errors
        """
        try:
            self.posts_dir.mkdir(parents=True, exist_ok=True)
            content = yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
            atomic_write(self.path_for(slug), content)
        except OSError as e:
            raise PersistenceError(slug, f"Could not save post ({e})") from e

    def list_slugs(self) -> List[str]:
        if not self.posts_dir.exists():
            return []
        return sorted(path.stem for path in self.posts_dir.glob("*.yaml"))
