"""Local image uploads."""

import asyncio
import shutil
import uuid
from pathlib import Path

import structlog

from posteditor.services.exceptions import UploadError

logger = structlog.get_logger()


class ImageUploader:
    """Copy images into the site's image directory.

    Args:
        images_dir: Directory images are copied into (created on demand)
        base_url: URL prefix under which images_dir is served
    """

    def __init__(self, images_dir: Path, base_url: str = "/content/images"):
        self.images_dir = Path(images_dir)
        self.base_url = base_url.rstrip("/")

    def _copy(self, source: Path) -> str:
        if not source.is_file():
            raise UploadError(str(source), "Image file not found")

        name = f"{source.stem}-{uuid.uuid4().hex[:8]}{source.suffix.lower()}"
        try:
            self.images_dir.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, self.images_dir / name)
        except OSError as e:
            raise UploadError(str(source), f"Could not copy image ({e})") from e
        return name

    async def upload(self, source: Path) -> str:
        """Upload an image file.

        Args:
            source: Local image path

        Returns:
            URL of the uploaded image

        Raises:
            UploadError: If the file is missing or could not be copied
        """
        name = await asyncio.to_thread(self._copy, Path(source).expanduser())
        url = f"{self.base_url}/{name}"
        logger.info("image_uploaded", source=str(source), url=url)
        return url
