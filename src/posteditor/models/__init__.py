"""Pydantic data models for Posteditor."""

from posteditor.models.session import EditingSession, Line, ReplacementSpan, UploadPlacement
from posteditor.models.post import Post, Tag

__all__ = [
    "EditingSession",
    "Line",
    "Post",
    "ReplacementSpan",
    "Tag",
    "UploadPlacement",
]
