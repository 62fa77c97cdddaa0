"""Widgets for the post editor."""

from posteditor.tui.widgets.content_editor import ContentEditor
from posteditor.tui.widgets.status_panel import StatusPanel
from posteditor.tui.widgets.upload_prompt import UploadPrompt

__all__ = ["ContentEditor", "StatusPanel", "UploadPrompt"]
