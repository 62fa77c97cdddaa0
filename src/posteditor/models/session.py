"""Editing session and text-location models."""

from typing import Any, Dict, List, Set

from pydantic import BaseModel, Field, model_validator


class EditingSession(BaseModel):
    """State of one open post editing session, as seen by the change tracker.

    Live values are pulled from the text buffer and the persistence
    collaborator; baselines describe the post as last saved or loaded.
    """

    live_fields: Dict[str, Any] = Field(
        default_factory=dict,
        description="Current values of the post's scalar attributes"
    )

    live_tags: List[str] = Field(
        default_factory=list,
        description="Current tag names, in display order"
    )

    live_content: str = Field(
        default="",
        description="Current editable text with image markers stripped"
    )

    baseline_content: str = Field(
        default="",
        description="The post's markdown attribute as last saved"
    )

    is_persisted: bool = Field(
        default=False,
        description="Whether the post has ever been saved to the store"
    )

    baseline_tags: List[str] = Field(
        default_factory=list,
        description="Tag names as of last save/load (or last observed tag change)"
    )

    tracked_field_dirty: bool = Field(
        default=False,
        description="The persistence layer's own dirty flag"
    )

    changed_fields: Set[str] = Field(
        default_factory=set,
        description="Attribute names the persistence layer reports as changed"
    )

    model_config = {"frozen": False}  # Refreshed in place on every read


class Line(BaseModel):
    """One line of editor text."""

    number: int = Field(..., ge=0, description="0-based line number")
    text: str = Field(default="", description="Line text without the newline")

    model_config = {"frozen": True}


class UploadPlacement(BaseModel):
    """Where an uploaded image's placeholder lives, resolved at completion time."""

    anchor_id: str = Field(..., description="Upload anchor identifier (e.g. image_upload_3)")
    line_number: int = Field(..., ge=0, description="Line holding the anchor's marker")

    model_config = {"frozen": True}


class ReplacementSpan(BaseModel):
    """Half-open column range [start_col, end_col) on one line, plus its replacement."""

    line_number: int = Field(..., ge=0)
    start_col: int = Field(..., ge=0)
    end_col: int = Field(..., ge=0)
    replacement_text: str = Field(default="")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_range(self) -> "ReplacementSpan":
        """Reject spans whose end precedes their start."""
        if self.end_col < self.start_col:
            raise ValueError(
                f"end_col ({self.end_col}) must not precede start_col ({self.start_col})"
            )
        return self

    @property
    def start(self) -> tuple[int, int]:
        """Start location as a (row, column) tuple."""
        return (self.line_number, self.start_col)

    @property
    def end(self) -> tuple[int, int]:
        """End location as a (row, column) tuple."""
        return (self.line_number, self.end_col)

    @property
    def length(self) -> int:
        return self.end_col - self.start_col
