"""Product image file storage.

Stores uploaded images under generated unique names inside a single
directory on the local filesystem.
"""

from pathlib import Path, PurePath
from uuid import uuid4

import aiofiles
import aiofiles.os
import structlog

from app.infrastructure.config import settings

logger = structlog.get_logger()


class ImageStore:
    """Filesystem store for product images.

    Example usage:
        store = ImageStore("product-images")
        store.ensure_directory()
        name = await store.save("photo.jpg", data)
    """

    def __init__(self, root: str | Path) -> None:
        """Initialize store.

        Args:
            root: Directory that holds the images.
        """
        self.root = Path(root)

    def ensure_directory(self) -> None:
        """Create the storage directory if it does not exist.

        Raises:
            OSError: If the directory cannot be created.
        """
        self.root.mkdir(parents=True, exist_ok=True)
        logger.info("Image storage ready", path=str(self.root.resolve()))

    @staticmethod
    def generate_name(original_filename: str | None) -> str:
        """Build a unique stored name ``<uuid>_<original-filename>``.

        Directory components of the client supplied name are dropped.
        """
        basename = PurePath((original_filename or "").replace("\\", "/")).name or "image"
        return f"{uuid4()}_{basename}"

    def path_for(self, stored_name: str) -> Path:
        """Resolve a stored name to its path inside the storage directory.

        Raises:
            ValueError: If the name escapes the storage directory.
        """
        if PurePath(stored_name).name != stored_name or stored_name in ("", ".", ".."):
            raise ValueError(f"Invalid image name: {stored_name!r}")
        return self.root / stored_name

    async def save(self, original_filename: str | None, data: bytes) -> str:
        """Write image bytes under a generated unique name.

        Args:
            original_filename: Filename supplied by the client.
            data: Image content.

        Returns:
            The stored filename.

        Raises:
            OSError: If the file cannot be written.
        """
        stored_name = self.generate_name(original_filename)
        async with aiofiles.open(self.path_for(stored_name), "wb") as f:
            await f.write(data)

        logger.info("Image stored", image=stored_name, size=len(data))
        return stored_name

    async def exists(self, stored_name: str) -> bool:
        """Check whether an image is present."""
        try:
            path = self.path_for(stored_name)
        except ValueError:
            return False
        return await aiofiles.os.path.isfile(path)

    async def delete(self, stored_name: str) -> bool:
        """Remove a stored image.

        Returns:
            True if a file was removed, False if it did not exist.
        """
        try:
            await aiofiles.os.remove(self.path_for(stored_name))
        except FileNotFoundError:
            return False

        logger.info("Image deleted", image=stored_name)
        return True


_image_store: ImageStore | None = None


def get_image_store() -> ImageStore:
    """Get the process-wide image store."""
    global _image_store
    if _image_store is None:
        _image_store = ImageStore(settings.image_storage_path)
    return _image_store
