"""Editing-session controller.

Owns one post's editing session and wires the change tracker, the image
reference patcher and the collaborators (text buffer, persistence,
notifications) together.
"""

from pathlib import Path
from typing import Callable, Optional

import structlog

from posteditor.models.config import EditorConfig
from posteditor.models.session import EditingSession, Line, ReplacementSpan
from posteditor.services.collaborators import Notifier, PersistedEntity, TextBuffer
from posteditor.services.exceptions import PersistenceError, UploadError
from posteditor.services.uploads import ImageUploader
from posteditor.tracking.fields import FieldChangeDetector
from posteditor.tracking.tracker import ChangeTracker
from posteditor.uploads.markers import find_marker_line
from posteditor.uploads.patcher import ImageReferencePatcher

logger = structlog.get_logger()

SAVE_TYPES = ("publish", "draft")


class EditorController:
    """Controller for one open post.

    Args:
        post: Persistence collaborator for the post being edited
        notifier: Receives save success and failure messages
        config: Editor configuration (defaults if None)
        buffer: Text buffer, if already available (see attach_buffer)

    Example:
        >>> controller = EditorController(store.load("hello"), notifier)
        >>> controller.attach_buffer(editor)
        >>> controller.is_dirty
        False
    """

    def __init__(
        self,
        post: PersistedEntity,
        notifier: Notifier,
        config: Optional[EditorConfig] = None,
        buffer: Optional[TextBuffer] = None,
    ):
        self.post = post
        self.notifier = notifier
        self.config = config or EditorConfig()

        # Only set_save_type changes the status a save will write
        self.will_publish = post.get("status") == "published"

        self.buffer: Optional[TextBuffer] = None
        self.patcher: Optional[ImageReferencePatcher] = None
        self.uploads_in_flight = 0

        self.session = EditingSession(baseline_tags=self._tag_names())
        self.tracker = ChangeTracker(
            self.session,
            FieldChangeDetector(),
            watched=self.config.watched_inputs,
            refresh=self._refresh_session,
        )

        if buffer is not None:
            self.attach_buffer(buffer)

    def _tag_names(self) -> list[str]:
        return [tag.name for tag in self.post.tags]

    def _refresh_session(self, session: EditingSession) -> None:
        """Pull live inputs from the collaborators into the session."""
        markdown = self.post.get("markdown")
        session.live_content = self.buffer.get_plain_content() if self.buffer is not None else markdown
        session.baseline_content = markdown
        session.live_tags = self._tag_names()
        session.live_fields = self.post.field_values()
        session.is_persisted = not self.post.is_new
        session.tracked_field_dirty = self.post.is_dirty
        session.changed_fields = set(self.post.changed_field_names())

    @property
    def is_dirty(self) -> bool:
        return self.tracker.read()

    def attach_buffer(
        self,
        buffer: TextBuffer,
        resolve_anchor: Optional[Callable[[str], Optional[Line]]] = None,
    ) -> None:
        """Connect the text buffer that holds the post body.

        Args:
            buffer: Text buffer collaborator
            resolve_anchor: Maps an upload anchor to its line; defaults to
                looking up the anchor's marker in the buffer
        """
        self.buffer = buffer
        self.patcher = ImageReferencePatcher(
            buffer,
            resolve_anchor or self._find_anchor_line,
            placeholder_target=self.config.placeholder_target,
        )
        self.tracker.notify("live_content")

    def _find_anchor_line(self, anchor_id: str) -> Optional[Line]:
        buffer = self.buffer
        lines = (buffer.get_line(number).text for number in range(buffer.get_line_count()))
        line_number = find_marker_line(lines, anchor_id)
        if line_number is None:
            return None
        return buffer.get_line(line_number)

    def add_tag(self, name: str) -> None:
        self.post.add_tag(name)
        self.tracker.notify("live_tags")

    def remove_tag(self, name: str) -> None:
        self.post.remove_tag(name)
        self.tracker.notify("live_tags")

    def set_save_type(self, new_type: str) -> None:
        """Choose whether the next save publishes the post or keeps it a draft.

        Unknown save types are ignored.
        """
        if new_type == "publish":
            self.will_publish = True
        elif new_type == "draft":
            self.will_publish = False
        else:
            logger.warning("invalid_save_type", save_type=new_type, valid=list(SAVE_TYPES))

    def update_tags(self) -> None:
        """Drop client-generated tags (no id) once the store returned stored copies."""
        stale = [tag for tag in self.post.tags if tag.id is None]
        if stale:
            self.post.tags = [tag for tag in self.post.tags if tag.id is not None]
            logger.debug("client_tags_removed", count=len(stale))

    async def save(self) -> Optional[PersistedEntity]:
        """Save the post with the current editor content.

        On failure the error is passed to the notifier and the post's markdown
        and status are restored, so the dirty state is left alone.

        Returns:
            The saved post, or None if the save failed
        """
        status = "published" if self.will_publish else "draft"
        previous = {name: self.post.get(name) for name in ("markdown", "status")}

        if self.buffer is not None:
            self.post.set("markdown", self.buffer.get_plain_content())
        self.post.set("status", status)

        try:
            await self.post.save()
        except PersistenceError as e:
            for name, value in previous.items():
                self.post.set(name, value)
            logger.error("post_save_failed", slug=e.slug, error=str(e))
            self.notifier.show_error(e)
            return None

        # Tag cleanup looks like a tag change; the session is clean regardless
        self.update_tags()
        self.session.baseline_tags = self._tag_names()
        self.tracker.force_clear()

        self.notifier.show_success(f"Post status saved as {self.post.get('status')}.")
        return self.post

    def disable_editor(self) -> None:
        if self.buffer is not None:
            self.buffer.disable()

    def enable_editor(self) -> None:
        if self.buffer is not None:
            self.buffer.enable()

    def handle_image_upload(self, anchor_id: str, url: str) -> Optional[ReplacementSpan]:
        """Write an uploaded image's URL into the line its anchor points at.

        Returns:
            The replaced span, or None when the line had no image syntax
        """
        if self.patcher is None:
            logger.warning("image_upload_without_buffer", anchor_id=anchor_id)
            return None

        span = self.patcher.patch(anchor_id, url)
        if span is not None:
            self.tracker.notify("live_content")
        return span

    async def upload_image(
        self,
        anchor_id: str,
        source: Path,
        uploader: ImageUploader,
    ) -> Optional[ReplacementSpan]:
        """Upload an image and patch its reference into the editor.

        The editor is read-only while the upload runs, so the anchor's line
        number cannot drift. It is re-enabled, whatever the outcome, once no
        other upload is still running.
        """
        self.uploads_in_flight += 1
        self.disable_editor()
        try:
            url = await uploader.upload(source)
        except UploadError as e:
            logger.error("image_upload_failed", anchor_id=anchor_id, path=e.path, error=str(e))
            self.notifier.show_error(e)
            return None
        finally:
            self.uploads_in_flight -= 1
            if self.uploads_in_flight == 0:
                self.enable_editor()

        return self.handle_image_upload(anchor_id, url)

    def unload_dirty_message(self) -> str:
        """Warning text for leaving the editor with unsaved changes."""
        return self.config.unload_message

    def unload_warning(self) -> Optional[str]:
        """The unload warning if there are unsaved changes, else None."""
        if self.is_dirty:
            return self.unload_dirty_message()
        return None
