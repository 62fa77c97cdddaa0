"""Rewrite an image's link target once its upload completes.

Users may keep typing image syntax while an upload runs, so the line is read
fresh when the upload finishes and re-parsed; no offsets from upload start
are reused.
"""

import re
from typing import Callable, Optional

import structlog

from posteditor.models.session import Line, ReplacementSpan, UploadPlacement
from posteditor.services.collaborators import TextBuffer

logger = structlog.get_logger()

# Image link target: "(" right after "![alt]", up to the first ")" or end of line
LINK_TARGET_PATTERN = re.compile(r"!\[[^\]\n]*\]\(([^)\n]*)\)?")
IMAGE_ALT_TEXT_PATTERN = re.compile(r"!\[[^\]\n]*\]")


class ImageReferencePatcher:
    """Point an image's markdown link target at an uploaded file.

    Args:
        buffer: Text buffer the edits are issued through
        resolve_anchor: Maps an upload anchor id to the line it belongs to
            (None when the anchor can't be found)
        placeholder_target: Link target inserted when the image has no
            parentheses yet
    """

    def __init__(
        self,
        buffer: TextBuffer,
        resolve_anchor: Callable[[str], Optional[Line]],
        placeholder_target: str = "http://",
    ):
        self.buffer = buffer
        self.resolve_anchor = resolve_anchor
        self.placeholder = f"({placeholder_target})"

    def resolve(
        self,
        line: Line,
        anchor_id: str,
        replacement_text: str = "",
    ) -> Optional[ReplacementSpan]:
        """Find the span of ``line`` that should receive the uploaded URL.

        - ``![alt](target)``: the span is ``target``. A missing ``)`` extends
          the span to the end of the line.
        - ``![alt]``: the placeholder is inserted after the image's ``]`` and
          the span is the placeholder's interior.
        - Anything else: None, and the buffer is left untouched.

        Args:
            line: Line read at upload completion
            anchor_id: Upload anchor, for logging
            replacement_text: Text the span will be replaced with

        Returns:
            Span to replace, or None when the line has nowhere to attach
        """
        line_number = self.buffer.line_number_of(line)

        match = LINK_TARGET_PATTERN.search(line.text)
        if match:
            span = ReplacementSpan(
                line_number=line_number,
                start_col=match.start(1),
                end_col=match.end(1),
                replacement_text=replacement_text,
            )
            logger.debug("image_target_found", anchor_id=anchor_id, start=span.start_col, end=span.end_col)
            return span

        match = IMAGE_ALT_TEXT_PATTERN.search(line.text)
        if match:
            insert_at = (line_number, match.end())
            self.buffer.replace_range(self.placeholder, insert_at, insert_at)
            span = ReplacementSpan(
                line_number=line_number,
                start_col=match.end() + 1,
                end_col=match.end() + len(self.placeholder) - 1,
                replacement_text=replacement_text,
            )
            logger.debug("image_placeholder_inserted", anchor_id=anchor_id, start=span.start_col, end=span.end_col)
            return span

        logger.debug("image_anchor_unattachable", anchor_id=anchor_id, line=line_number)
        return None

    def apply(self, span: ReplacementSpan) -> None:
        """Select the span and replace it with its replacement text."""
        self.buffer.set_selection(span.start, span.end)
        self.buffer.replace_selection(span.replacement_text)

    def locate(self, anchor_id: str) -> Optional[UploadPlacement]:
        """Find the line an upload anchor currently points at."""
        line = self.resolve_anchor(anchor_id)
        if line is None:
            logger.debug("image_anchor_missing", anchor_id=anchor_id)
            return None
        return UploadPlacement(anchor_id=anchor_id, line_number=self.buffer.line_number_of(line))

    def patch(self, anchor_id: str, url: str) -> Optional[ReplacementSpan]:
        """Write ``url`` into the image syntax on the anchor's line.

        Returns:
            The applied span, or None if nothing could be patched
        """
        placement = self.locate(anchor_id)
        if placement is None:
            return None

        line = self.buffer.get_line(placement.line_number)
        span = self.resolve(line, anchor_id, replacement_text=url)
        if span is None:
            return None

        self.apply(span)
        logger.info("image_reference_patched", anchor_id=anchor_id, line=span.line_number, url=url)
        return span
