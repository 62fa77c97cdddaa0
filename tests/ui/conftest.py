"""Shared fixtures for UI tests."""

import pytest

from posteditor.services.uploads import ImageUploader


@pytest.fixture
def saved_post(store):
    """A stored post with a short body and one tag."""
    store.write("hello-world", {
        "title": "Hello",
        "slug": "hello-world",
        "markdown": "# Hello\n\n![cat]",
        "status": "draft",
        "tags": [{"id": "tag-1", "name": "intro"}],
    })
    return store.load("hello-world")


@pytest.fixture
def uploader(tmp_path):
    return ImageUploader(tmp_path / "images", base_url="/content/images")
