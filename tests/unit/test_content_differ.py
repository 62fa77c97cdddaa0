"""Tests for editor content comparison."""

from posteditor.tracking.content import ContentDiffer


class TestContentDiffer:
    """Test cases for ContentDiffer.changed."""

    def test_identical_content_unchanged(self):
        assert not ContentDiffer().changed("# Title\n\nBody", "# Title\n\nBody")

    def test_edited_content_changed(self):
        assert ContentDiffer().changed("# Title\n\nBody!", "# Title\n\nBody")

    def test_trailing_whitespace_is_a_change(self):
        """No whitespace normalization is performed."""
        assert ContentDiffer().changed("Body ", "Body")

    def test_line_endings_are_a_change(self):
        assert ContentDiffer().changed("a\r\nb", "a\nb")

    def test_empty_strings_unchanged(self):
        assert not ContentDiffer().changed("", "")
