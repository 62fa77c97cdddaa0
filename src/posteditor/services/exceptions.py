"""Custom exceptions for Posteditor services."""


class PersistenceError(Exception):
    """Raised when a post could not be written to or read from the store.

    Attributes:
        slug: Slug of the affected post
        message: Human-readable error message
    """

    def __init__(self, slug: str, message: str = "Could not save post"):
        """Initialize PersistenceError.

        Args:
            slug: Slug of the affected post
            message: Human-readable error message
        """
        self.slug = slug
        self.message = message
        super().__init__(f"{message}: {slug}")


class PostNotFoundError(PersistenceError):
    """Raised when loading a post that has no stored document."""

    def __init__(self, slug: str):
        super().__init__(slug, "Post not found")


class UploadError(Exception):
    """Raised when an image could not be uploaded.

    Attributes:
        path: Path of the file being uploaded
        message: Human-readable error message
    """

    def __init__(self, path: str, message: str = "Image upload failed"):
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")
