"""Reactive dirty flag for an editing session."""

import copy
from typing import Any, Callable, Dict, Iterable, Optional

import structlog

from posteditor.models.session import EditingSession
from posteditor.tracking.fields import FieldChangeDetector

logger = structlog.get_logger()


# Session attributes a tracker can watch
WATCHABLE_INPUTS: tuple[str, ...] = (
    "live_tags",
    "live_content",
    "live_fields",
    "tracked_field_dirty",
    "changed_fields",
)

DEFAULT_WATCHED_INPUTS: tuple[str, ...] = WATCHABLE_INPUTS


class ChangeTracker:
    """Derived ``dirty`` flag for one editing session.

    The flag is recomputed through a :class:`FieldChangeDetector` on
    :meth:`read` whenever a watched input differs from the snapshot taken at
    the previous computation, or after :meth:`notify` named a watched input.
    The baselines (tags and content) and the persisted flag are always part
    of the snapshot, so a save or a memoized tag change is picked up by the
    next read.

    Args:
        session: Session whose state is tracked
        detector: Dirty-state policy (default FieldChangeDetector())
        watched: Names of session inputs that invalidate the flag
        refresh: Optional callable that pulls live inputs into the session
            before each read
    """

    def __init__(
        self,
        session: EditingSession,
        detector: Optional[FieldChangeDetector] = None,
        watched: Iterable[str] = DEFAULT_WATCHED_INPUTS,
        refresh: Optional[Callable[[EditingSession], None]] = None,
    ):
        self.session = session
        self.detector = detector or FieldChangeDetector()
        self.watched = tuple(watched)
        unknown = [name for name in self.watched if name not in WATCHABLE_INPUTS]
        if unknown:
            raise ValueError(f"Cannot watch unknown session inputs: {unknown}")

        self._refresh = refresh
        self._dirty = False
        self._stale = True
        self._snapshot: Optional[Dict[str, Any]] = None

    def _take_snapshot(self) -> Dict[str, Any]:
        snapshot = {name: copy.deepcopy(getattr(self.session, name)) for name in self.watched}
        snapshot["baseline_tags"] = list(self.session.baseline_tags)
        snapshot["baseline_content"] = self.session.baseline_content
        snapshot["is_persisted"] = self.session.is_persisted
        return snapshot

    def notify(self, name: str) -> None:
        """Signal that a session input changed.

        Args:
            name: Input name; ignored unless it is watched
        """
        if name in self.watched:
            self._stale = True

    def read(self) -> bool:
        """Return the current dirty flag, recomputing it if stale.

        Recomputation may update ``session.baseline_tags`` (see
        :meth:`FieldChangeDetector.is_dirty`).
        """
        if self._refresh is not None:
            self._refresh(self.session)

        snapshot = self._take_snapshot()
        if self._stale or snapshot != self._snapshot:
            self._snapshot = snapshot
            self._stale = False
            self._dirty = self.detector.is_dirty(self.session)
            logger.debug("dirty_state_recomputed", dirty=self._dirty)

        return self._dirty

    @property
    def dirty(self) -> bool:
        return self.read()

    def force_clear(self) -> None:
        """Mark the session clean.

        The current inputs become the comparison snapshot, so changes made
        before this call (tag cleanup after a save) don't flip the flag back.
        """
        if self._refresh is not None:
            self._refresh(self.session)

        self._snapshot = self._take_snapshot()
        self._stale = False
        self._dirty = False
        logger.debug("dirty_state_cleared")
