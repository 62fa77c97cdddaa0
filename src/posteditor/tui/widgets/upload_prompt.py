"""Modal prompt asking for the image file to upload."""

from typing import Optional

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Label


class UploadPrompt(ModalScreen[Optional[str]]):
    """Ask for an image path; dismisses with the path, or None on escape."""

    DEFAULT_CSS = """
    UploadPrompt {
        align: center middle;
    }

    #upload-dialog {
        width: 60;
        height: auto;
        border: solid $accent;
        padding: 1 2;
    }
    """

    BINDINGS = [("escape", "cancel", "Cancel")]

    def compose(self) -> ComposeResult:
        with Vertical(id="upload-dialog"):
            yield Label("Image file to upload:")
            yield Input(placeholder="~/Pictures/photo.png", id="upload-path")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        path = event.value.strip()
        self.dismiss(path or None)

    def action_cancel(self) -> None:
        self.dismiss(None)
