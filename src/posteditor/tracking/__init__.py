"""Unsaved-change tracking for editing sessions."""

from posteditor.tracking.tags import TagSetDiffer
from posteditor.tracking.content import ContentDiffer
from posteditor.tracking.fields import FieldChangeDetector
from posteditor.tracking.tracker import ChangeTracker, DEFAULT_WATCHED_INPUTS

__all__ = [
    "ChangeTracker",
    "ContentDiffer",
    "DEFAULT_WATCHED_INPUTS",
    "FieldChangeDetector",
    "TagSetDiffer",
]
