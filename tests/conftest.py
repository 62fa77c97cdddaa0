"""Shared test fixtures for all test modules."""

import pytest

from posteditor.models.session import Line
from posteditor.services.post_store import PostStore
from posteditor.uploads.markers import strip_markers


class FakeTextBuffer:
    """In-memory text buffer recording the edits issued through it."""

    def __init__(self, text: str = ""):
        self.lines = text.split("\n")
        self.selection = ((0, 0), (0, 0))
        self.enabled = True
        self.edits = []

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def get_plain_content(self) -> str:
        return strip_markers(self.text)

    def get_line(self, line_number):
        return Line(number=line_number, text=self.lines[line_number])

    def get_line_count(self):
        return len(self.lines)

    def line_number_of(self, line_or_ref):
        if isinstance(line_or_ref, Line):
            return line_or_ref.number
        return int(line_or_ref)

    def set_selection(self, start, end):
        self.selection = (start, end)

    def replace_range(self, text, start, end):
        # Single-line edits only
        assert start[0] == end[0]
        row = start[0]
        line = self.lines[row]
        self.lines[row] = line[:start[1]] + text + line[end[1]:]
        self.edits.append((text, start, end))

    def replace_selection(self, text):
        start, end = sorted(self.selection)
        self.replace_range(text, start, end)

    def disable(self):
        self.enabled = False

    def enable(self):
        self.enabled = True


class RecordingNotifier:
    """Notifier that remembers what it was asked to show."""

    def __init__(self):
        self.successes = []
        self.errors = []

    def show_success(self, message):
        self.successes.append(message)

    def show_error(self, error):
        self.errors.append(error)


@pytest.fixture
def make_buffer():
    """Factory for FakeTextBuffer instances."""
    return FakeTextBuffer


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def store(tmp_path):
    """PostStore rooted in a temporary directory."""
    return PostStore(tmp_path / "posts")
