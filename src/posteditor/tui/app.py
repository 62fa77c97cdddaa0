"""Main Posteditor TUI Application.

A single-screen editor for one post. The app is the controller's notifier
and hosts the ContentEditor that serves as its text buffer.

Key bindings (all take priority over the editor's own bindings):
- ctrl+s: save
- ctrl+p / ctrl+d: next save publishes / keeps the post a draft
- ctrl+u: upload an image into the cursor line
- ctrl+q: quit (the first press warns if there are unsaved changes)
"""

from pathlib import Path
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, TextArea
import structlog

from posteditor.controller import EditorController
from posteditor.models.config import EditorConfig
from posteditor.services.collaborators import PersistedEntity
from posteditor.services.uploads import ImageUploader
from posteditor.tui.widgets import ContentEditor, StatusPanel, UploadPrompt

logger = structlog.get_logger()


class PostEditorApp(App):
    """Terminal editor for a single post."""

    TITLE = "Posteditor"
    ENABLE_COMMAND_PALETTE = False

    DEFAULT_CSS = """
    #status-panel {
        height: 1;
        padding: 0 1;
        background: $boost;
    }

    ContentEditor {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("ctrl+s", "save", "Save", priority=True),
        Binding("ctrl+p", "save_type('publish')", "Publish", priority=True),
        Binding("ctrl+d", "save_type('draft')", "Draft", priority=True),
        Binding("ctrl+u", "upload_image", "Upload image", priority=True),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        post: PersistedEntity,
        uploader: ImageUploader,
        config: Optional[EditorConfig] = None,
        **kwargs
    ):
        """Initialize the editor app.

        Args:
            post: Post to edit
            uploader: Image uploader used by ctrl+u
            config: Editor configuration (defaults if None)
        """
        super().__init__(**kwargs)
        self.post = post
        self.uploader = uploader
        self.controller = EditorController(post, notifier=self, config=config)
        self._quit_warned = False

    def compose(self) -> ComposeResult:
        yield Header()
        yield StatusPanel()
        yield ContentEditor()
        yield Footer()

    def on_mount(self) -> None:
        """Load the post body and hand the editor to the controller."""
        editor = self.query_one(ContentEditor)
        editor.load_content(self.post.get("markdown"))
        self.controller.attach_buffer(editor)
        self.sub_title = self.post.get("title") or self.post.get("slug")
        editor.focus()
        self.refresh_status()

    # Notifier

    def show_success(self, message: str) -> None:
        self.notify(message)

    def show_error(self, error: Exception) -> None:
        self.notify(str(error), title="Error", severity="error")

    def refresh_status(self) -> None:
        self.query_one(StatusPanel).update_status(
            dirty=self.controller.is_dirty,
            will_publish=self.controller.will_publish,
            slug=self.post.get("slug"),
        )

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self.controller.tracker.notify("live_content")
        self._quit_warned = False
        self.refresh_status()

    async def action_save(self) -> None:
        await self.controller.save()
        self.refresh_status()

    def action_save_type(self, new_type: str) -> None:
        self.controller.set_save_type(new_type)
        self.refresh_status()

    def action_upload_image(self) -> None:
        """Mark the cursor line and ask which image to upload into it."""
        editor = self.query_one(ContentEditor)
        row, _ = editor.cursor_location
        anchor_id = editor.mark_line(row)

        def start_upload(path: Optional[str]) -> None:
            if not path:
                logger.debug("image_upload_cancelled", anchor_id=anchor_id)
                return
            self.run_worker(self._upload(anchor_id, Path(path)), group="uploads")

        self.push_screen(UploadPrompt(), callback=start_upload)

    async def _upload(self, anchor_id: str, path: Path) -> None:
        await self.controller.upload_image(anchor_id, path, self.uploader)
        self.refresh_status()

    async def action_quit(self) -> None:
        """Quit, warning once if there are unsaved changes."""
        warning = self.controller.unload_warning()
        if warning and not self._quit_warned:
            self._quit_warned = True
            self.notify(warning, title="Unsaved changes", severity="warning", timeout=10)
            return
        self.exit()
