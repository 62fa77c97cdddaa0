"""Image upload markers.

An image line awaiting an upload is prefixed with a marker such as
``{<3>}``. The matching upload anchor is ``image_upload_3``. Markers are
editor-only and are stripped from the content that gets saved or compared.
"""

import re
from typing import Iterable, Optional

MARKER_PATTERN = re.compile(r"^\{<(\d+)>\}", re.MULTILINE)
ANCHOR_PREFIX = "image_upload_"


def strip_markers(text: str) -> str:
    """Remove all upload markers from text."""
    return MARKER_PATTERN.sub("", text)


def marker_for(marker_id: int) -> str:
    return f"{{<{marker_id}>}}"


def anchor_for(marker_id: int) -> str:
    return f"{ANCHOR_PREFIX}{marker_id}"


def marker_id_from_anchor(anchor_id: str) -> Optional[int]:
    """Extract the marker number from an anchor id.

    Returns:
        Marker number, or None if the anchor id is malformed
    """
    if not anchor_id.startswith(ANCHOR_PREFIX):
        return None
    suffix = anchor_id[len(ANCHOR_PREFIX):]
    if not suffix.isdigit():
        return None
    return int(suffix)


def find_marker_line(lines: Iterable[str], anchor_id: str) -> Optional[int]:
    """Find the line number carrying the marker for an anchor.

    Args:
        lines: Editor lines, in order
        anchor_id: Upload anchor id (e.g. "image_upload_3")

    Returns:
        0-based line number, or None if no line carries the marker
    """
    marker_id = marker_id_from_anchor(anchor_id)
    if marker_id is None:
        return None

    prefix = marker_for(marker_id)
    for number, text in enumerate(lines):
        if text.startswith(prefix):
            return number
    return None


def next_marker_id(text: str) -> int:
    """Return a marker number not yet used in text."""
    used = [int(m) for m in MARKER_PATTERN.findall(text)]
    return max(used, default=0) + 1

