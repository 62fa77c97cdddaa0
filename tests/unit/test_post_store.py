"""Tests for the file-backed post store."""

import pytest
import yaml

from posteditor.models.post import Tag
from posteditor.services.exceptions import PersistenceError, PostNotFoundError
from posteditor.services.post_store import atomic_write


class TestAtomicWrite:

    def test_creates_new_file(self, tmp_path):
        target = tmp_path / "post.yaml"
        atomic_write(target, "title: Test\n")

        assert target.read_text() == "title: Test\n"

    def test_overwrites_existing_file(self, tmp_path):
        target = tmp_path / "post.yaml"
        target.write_text("old")

        atomic_write(target, "new")
        assert target.read_text() == "new"

    def test_no_temp_file_left_behind(self, tmp_path):
        target = tmp_path / "post.yaml"
        atomic_write(target, "content")

        assert [p.name for p in tmp_path.iterdir()] == ["post.yaml"]

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(OSError):
            atomic_write(tmp_path / "missing" / "post.yaml", "content")


class TestPostRecord:

    def test_new_record_is_new_and_dirty(self, store):
        record = store.create("fresh")

        assert record.is_new
        assert record.is_dirty
        assert record.changed_field_names() == set()

    def test_changed_field_names(self, store):
        record = store.create("fresh", title="Original")
        record.set("title", "Renamed")
        record.set("markdown", "Body")

        assert record.changed_field_names() == {"title", "markdown"}

    def test_setting_same_value_is_not_a_change(self, store):
        record = store.create("fresh", title="Same")
        record.set("title", "Same")

        assert record.changed_field_names() == set()

    def test_set_unknown_attribute(self, store):
        with pytest.raises(AttributeError):
            store.create("fresh").set("author", "me")

    def test_set_invalid_status(self, store):
        with pytest.raises(Exception):  # Pydantic ValidationError
            store.create("fresh").set("status", "archived")

    def test_add_and_remove_tags(self, store):
        record = store.create("fresh")
        record.add_tag("python")
        record.add_tag("async")
        record.remove_tag("python")

        assert record.tag_names() == ["async"]
        assert record.tags[0].id is None

    @pytest.mark.asyncio
    async def test_save_writes_document(self, store):
        record = store.create("fresh", title="Fresh")
        record.set("markdown", "# Fresh\n\nBody")
        record.add_tag("python")

        await record.save()

        data = yaml.safe_load(store.path_for("fresh").read_text())
        assert data["title"] == "Fresh"
        assert data["markdown"] == "# Fresh\n\nBody"
        assert data["status"] == "draft"
        assert data["tags"][0]["name"] == "python"
        assert data["tags"][0]["id"]

    @pytest.mark.asyncio
    async def test_save_marks_persisted_and_clean(self, store):
        record = store.create("fresh")
        record.set("title", "Fresh")

        await record.save()

        assert not record.is_new
        assert not record.is_dirty
        assert record.changed_field_names() == set()

    @pytest.mark.asyncio
    async def test_save_appends_stored_tags(self, store):
        record = store.create("fresh")
        record.add_tag("python")

        updated = await record.save()

        assert [tag.name for tag in record.tags] == ["python", "python"]
        assert record.tags[0].id is None
        assert record.tags[1].id is not None
        assert updated["tags"] == [record.tags[1]]

    @pytest.mark.asyncio
    async def test_save_keeps_existing_tag_ids(self, store):
        store.write("kept", {"slug": "kept", "tags": [{"id": "t1", "name": "intro"}]})
        record = store.load("kept")

        await record.save()

        assert record.tags == [Tag(id="t1", name="intro")]

    @pytest.mark.asyncio
    async def test_save_failure_raises_persistence_error(self, tmp_path):
        from posteditor.services.post_store import PostStore

        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        record = PostStore(blocker).create("fresh")

        with pytest.raises(PersistenceError):
            await record.save()
        assert record.is_new


class TestPostStore:

    def test_load_round_trips_saved_fields(self, store):
        store.write("hello", {
            "title": "Hello",
            "slug": "hello",
            "markdown": "Body",
            "status": "published",
            "tags": [{"id": "t1", "name": "intro"}],
        })

        record = store.load("hello")

        assert record.get("title") == "Hello"
        assert record.get("status") == "published"
        assert record.tag_names() == ["intro"]
        assert not record.is_new
        assert not record.is_dirty

    def test_load_missing_post(self, store):
        with pytest.raises(PostNotFoundError):
            store.load("nope")

    def test_load_invalid_document(self, store):
        store.posts_dir.mkdir(parents=True)
        store.path_for("broken").write_text("status: [unclosed\n")

        with pytest.raises(PersistenceError):
            store.load("broken")

    def test_load_invalid_status(self, store):
        store.write("odd", {"slug": "odd", "status": "scheduled"})

        with pytest.raises(PersistenceError):
            store.load("odd")

    def test_list_slugs(self, store):
        assert store.list_slugs() == []

        store.write("b-post", {"slug": "b-post"})
        store.write("a-post", {"slug": "a-post"})

        assert store.list_slugs() == ["a-post", "b-post"]

    def test_exists(self, store):
        assert not store.exists("a-post")
        store.write("a-post", {"slug": "a-post"})
        assert store.exists("a-post")
