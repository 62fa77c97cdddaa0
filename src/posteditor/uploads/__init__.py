"""Inline image upload support."""

from posteditor.uploads.patcher import ImageReferencePatcher

__all__ = ["ImageReferencePatcher"]
