"""StatusPanel widget showing save state and save type."""

from textual.widgets import Static


class StatusPanel(Static):
    """One-line status: unsaved changes and what the next save will do."""

    def __init__(self, *args, **kwargs):
        super().__init__("", *args, id="status-panel", **kwargs)
        self.status_text = ""

    def update_status(self, dirty: bool, will_publish: bool, slug: str = "") -> None:
        """Refresh the status line.

        Args:
            dirty: Whether the post has unsaved changes
            will_publish: Whether the next save publishes the post
            slug: Post slug shown at the start of the line
        """
        state = "● Unsaved changes" if dirty else "Saved"
        mode = "Save: publish" if will_publish else "Save: draft"
        parts = [part for part in (slug, state, mode) if part]
        self.status_text = " | ".join(parts)
        self.update(self.status_text)
