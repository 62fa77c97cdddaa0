"""Unit tests for the CLI commands."""

import pytest
import yaml
from click.testing import CliRunner

from posteditor.cli import cli


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Config pointing storage at tmp_path; logs go to a temporary home."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        "storage": {
            "posts_dir": str(tmp_path / "posts"),
            "images_dir": str(tmp_path / "images"),
        }
    }))
    return path


def test_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "Posteditor v0.1.0" in result.output


def test_no_command_shows_help():
    result = CliRunner().invoke(cli, [])

    assert result.exit_code == 0
    assert "Usage:" in result.output


def test_list_empty(config_file, tmp_path):
    result = CliRunner().invoke(cli, ["--config", str(config_file), "list"])

    assert result.exit_code == 0
    assert "No posts in" in result.output


def test_new_no_edit_creates_post(config_file, tmp_path):
    result = CliRunner().invoke(
        cli, ["--config", str(config_file), "new", "hello", "--title", "Hello", "--no-edit"]
    )

    assert result.exit_code == 0, result.output
    data = yaml.safe_load((tmp_path / "posts" / "hello.yaml").read_text())
    assert data["title"] == "Hello"
    assert data["status"] == "draft"


def test_new_existing_post_fails(config_file):
    runner = CliRunner()
    runner.invoke(cli, ["--config", str(config_file), "new", "hello", "--no-edit"])

    result = runner.invoke(cli, ["--config", str(config_file), "new", "hello", "--no-edit"])

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_list_shows_posts(config_file, tmp_path):
    posts = tmp_path / "posts"
    posts.mkdir()
    (posts / "hello.yaml").write_text(yaml.safe_dump({
        "slug": "hello",
        "title": "Hello",
        "status": "published",
        "tags": [{"id": "t1", "name": "intro"}],
    }))

    result = CliRunner().invoke(cli, ["--config", str(config_file), "list"])

    assert result.exit_code == 0
    assert "hello" in result.output
    assert "published" in result.output
    assert "[intro]" in result.output


def test_list_reports_unreadable_post(config_file, tmp_path):
    posts = tmp_path / "posts"
    posts.mkdir()
    (posts / "broken.yaml").write_text("status: [unclosed\n")

    result = CliRunner().invoke(cli, ["--config", str(config_file), "list"])

    assert result.exit_code == 1
    assert "unreadable" in result.output


def test_edit_missing_post(config_file):
    result = CliRunner().invoke(cli, ["--config", str(config_file), "edit", "nope"])

    assert result.exit_code == 1
    assert "Post not found" in result.output


def test_invalid_config(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    path = tmp_path / "config.yaml"
    path.write_text("editor:\n  watched_inputs: [bogus]\n")

    result = CliRunner().invoke(cli, ["--config", str(path), "list"])

    assert result.exit_code == 1
    assert "Configuration validation failed" in result.output
