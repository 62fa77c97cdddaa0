"""Post and Tag models persisted by the post store."""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class Tag(BaseModel):
    """A post tag. Tags created in the editor have no id until saved."""

    id: Optional[str] = Field(
        default=None,
        description="Store-assigned identifier (None for client-generated tags)"
    )

    name: str = Field(..., min_length=1, description="Tag name as displayed")

    model_config = {"frozen": True}


class Post(BaseModel):
    """Scalar attributes of a post."""

    title: str = Field(default="", description="Post title")
    slug: str = Field(..., min_length=1, description="URL slug, also the file stem")
    markdown: str = Field(default="", description="Post body as saved")
    status: Literal["draft", "published"] = Field(
        default="draft",
        description="Publication status"
    )

    model_config = {"frozen": False, "validate_assignment": True}


# Attribute names tracked for change detection, in declaration order
POST_ATTRIBUTES: tuple[str, ...] = tuple(Post.model_fields)
