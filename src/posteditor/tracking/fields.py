"""Session-level dirty detection."""

from typing import Optional

import structlog

from posteditor.models.session import EditingSession
from posteditor.tracking.content import ContentDiffer
from posteditor.tracking.tags import TagSetDiffer

logger = structlog.get_logger()


class FieldChangeDetector:
    """Decide whether an editing session has unsaved changes.

    Checks run in a fixed order and stop at the first hit:

    1. Tag names differ from ``baseline_tags``. The new names become the
       baseline, so the same tag change is reported once.
    2. Editor content differs from the saved markdown.
    3. For a post that was never saved, any attribute the persistence layer
       reports as changed. Its blanket dirty flag is always set for new
       posts, so it can't be used here.
    4. For a saved post, the persistence layer's dirty flag.
    """

    def __init__(
        self,
        tag_differ: Optional[TagSetDiffer] = None,
        content_differ: Optional[ContentDiffer] = None,
    ):
        self.tag_differ = tag_differ or TagSetDiffer()
        self.content_differ = content_differ or ContentDiffer()

    def is_dirty(self, session: EditingSession) -> bool:
        """Evaluate the session's dirty state.

        Side effect: when the tag names changed, ``session.baseline_tags`` is
        replaced with a copy of ``session.live_tags``.

        Args:
            session: Session to evaluate

        Returns:
            True if the session has unsaved changes
        """
        if not self.tag_differ.equal(session.live_tags, session.baseline_tags):
            logger.debug(
                "dirty_tags_changed",
                previous=session.baseline_tags,
                current=session.live_tags,
            )
            session.baseline_tags = list(session.live_tags)
            return True

        if self.content_differ.changed(session.live_content, session.baseline_content):
            logger.debug("dirty_content_changed")
            return True

        if not session.is_persisted:
            if session.changed_fields:
                logger.debug("dirty_fields_changed", fields=sorted(session.changed_fields))
                return True
            return False

        if session.tracked_field_dirty:
            logger.debug("dirty_persisted_flag")
            return True

        return False
