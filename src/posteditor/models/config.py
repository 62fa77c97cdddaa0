"""Configuration models for Posteditor."""

from pathlib import Path
from typing import Tuple

import yaml
from pydantic import BaseModel, Field, field_validator

from posteditor.tracking.tracker import DEFAULT_WATCHED_INPUTS, WATCHABLE_INPUTS


DEFAULT_UNLOAD_MESSAGE = (
    "==============================\n\n"
    "Hey there! It looks like you're in the middle of writing"
    " something and you haven't saved all of your content."
    "\n\nSave before you go!\n\n"
    "=============================="
)


class EditorConfig(BaseModel):
    """Configuration for change tracking and the editor surface."""

    watched_inputs: Tuple[str, ...] = Field(
        default=DEFAULT_WATCHED_INPUTS,
        description="Session inputs whose changes trigger a dirty-state recomputation"
    )

    placeholder_target: str = Field(
        default="http://",
        min_length=1,
        description="Link target inserted into bare image syntax while an upload is pending"
    )

    unload_message: str = Field(
        default=DEFAULT_UNLOAD_MESSAGE,
        description="Warning shown when leaving the editor with unsaved changes"
    )

    @field_validator("watched_inputs")
    @classmethod
    def validate_watched_inputs(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Only session inputs the tracker knows about may be watched."""
        unknown = [name for name in v if name not in WATCHABLE_INPUTS]
        if unknown:
            raise ValueError(
                f"Unknown watched inputs: {', '.join(unknown)}\n"
                f"Valid inputs are: {', '.join(WATCHABLE_INPUTS)}"
            )
        return v

    model_config = {"frozen": True}


class StorageConfig(BaseModel):
    """Configuration for where posts and uploaded images live."""

    posts_dir: str = Field(
        default="~/posts",
        description="Directory holding one YAML document per post"
    )

    images_dir: str = Field(
        default="~/posts/images",
        description="Directory uploaded images are copied into"
    )

    images_url: str = Field(
        default="/content/images",
        description="URL prefix written into markdown for uploaded images"
    )

    @field_validator("posts_dir", "images_dir")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ so the rest of the app deals with absolute paths."""
        return str(Path(v).expanduser())

    @field_validator("images_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    model_config = {"frozen": True}


class Config(BaseModel):
    """Root configuration for Posteditor."""

    editor: EditorConfig = Field(default_factory=EditorConfig, description="Editor settings")
    storage: StorageConfig = Field(default_factory=StorageConfig, description="Storage settings")

    @classmethod
    def load(cls, path: Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            path: Path to config.yaml file

        Returns:
            Validated Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If YAML is invalid or validation fails
        """
        if not path.exists():
            raise FileNotFoundError(
                f"Configuration file not found at {path}\n\n"
                f"Please create the file with the following format:\n\n"
                f"editor:\n"
                f"  placeholder_target: http://\n\n"
                f"storage:\n"
                f"  posts_dir: ~/posts\n"
                f"  images_dir: ~/posts/images\n"
                f"  images_url: /content/images\n"
            )

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    model_config = {"frozen": True}
