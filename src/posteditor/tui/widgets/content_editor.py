"""ContentEditor widget for editing a post's markdown body.

The widget doubles as the controller's text buffer: it exposes line access,
selection and range replacement, and read-only toggling while uploads run.
"""

from typing import Union

from textual.widgets import TextArea
from textual.widgets.text_area import Selection

from posteditor.models.session import Line
from posteditor.services.collaborators import Location
from posteditor.uploads.markers import (
    MARKER_PATTERN,
    anchor_for,
    marker_for,
    next_marker_id,
    strip_markers,
)


class ContentEditor(TextArea):
    """Multi-line markdown editor for the post body."""

    def __init__(
        self,
        *args,
        **kwargs
    ):
        """Initialize ContentEditor."""
        super().__init__("", *args, id="content-editor", **kwargs)
        self.can_focus = True
        self.show_line_numbers = True

    def load_content(self, content: str) -> None:
        """Load content into the editor.

        Args:
            content: Text content to load
        """
        self.text = content

    def get_content(self) -> str:
        """Get current content, upload markers included."""
        return self.text

    def get_plain_content(self) -> str:
        """Get current content with upload markers stripped."""
        return strip_markers(self.text)

    def get_line(self, line_number: int) -> Line:
        return Line(number=line_number, text=self.document.get_line(line_number))

    def get_line_count(self) -> int:
        return self.document.line_count

    def line_number_of(self, line_or_ref: Union[Line, int]) -> int:
        if isinstance(line_or_ref, Line):
            return line_or_ref.number
        return int(line_or_ref)

    def set_selection(self, start: Location, end: Location) -> None:
        self.selection = Selection(start, end)

    def replace_range(self, text: str, start: Location, end: Location) -> None:
        self.replace(text, start, end)

    def replace_selection(self, text: str) -> None:
        start, end = sorted(self.selection)
        self.replace(text, start, end)

    def disable(self) -> None:
        """Block keyboard edits (programmatic edits still apply)."""
        self.read_only = True

    def enable(self) -> None:
        self.read_only = False

    def mark_line(self, line_number: int) -> str:
        """Ensure a line carries an upload marker.

        Args:
            line_number: Line the upload belongs to

        Returns:
            Upload anchor id for the line's marker
        """
        match = MARKER_PATTERN.match(self.document.get_line(line_number))
        if match:
            return anchor_for(int(match.group(1)))

        marker_id = next_marker_id(self.text)
        self.replace(marker_for(marker_id), (line_number, 0), (line_number, 0))
        return anchor_for(marker_id)
