#!/usr/bin/env python3
"""Posteditor CLI - Write markdown posts in the terminal.

This is the main entry point for the Posteditor command-line tool.
"""

import sys
from pathlib import Path
from typing import Optional

import click

from posteditor import __version__
from posteditor.config import ConfigManager
from posteditor.services.exceptions import PersistenceError
from posteditor.services.post_store import PostRecord, PostStore
from posteditor.services.uploads import ImageUploader
from posteditor.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file (default: ~/.config/posteditor/config.yaml)",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.option("--version", is_flag=True, help="Show version and exit")
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: bool, version: bool):
    """Posteditor - Write and publish markdown posts.

    Tracks unsaved changes while you edit and patches uploaded image URLs
    straight into the markdown.
    """
    if version:
        click.echo(f"Posteditor v{__version__}")
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)

    configure_logging(verbose=verbose)

    try:
        config_mgr = ConfigManager.load_from_path(config) if config else ConfigManager.load_default()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config_mgr
    ctx.obj["store"] = PostStore(Path(config_mgr.storage.posts_dir))


def run_editor(ctx: click.Context, post: PostRecord) -> None:
    """Open a post in the terminal editor."""
    from posteditor.tui.app import PostEditorApp

    config_mgr: ConfigManager = ctx.obj["config"]
    uploader = ImageUploader(
        Path(config_mgr.storage.images_dir),
        base_url=config_mgr.storage.images_url,
    )
    app = PostEditorApp(post, uploader, config=config_mgr.editor)
    logger.info("editor_opened", slug=post.post.slug, new=post.is_new)
    app.run()


@cli.command()
@click.argument("slug")
@click.option("--title", default="", help="Post title")
@click.option("--no-edit", is_flag=True, help="Save the empty post without opening the editor")
@click.pass_context
def new(ctx: click.Context, slug: str, title: str, no_edit: bool):
    """Create a new post named SLUG."""
    store: PostStore = ctx.obj["store"]

    if store.exists(slug):
        click.echo(f"Error: Post '{slug}' already exists (use 'posteditor edit {slug}')", err=True)
        ctx.exit(1)

    post = store.create(slug, title=title)

    if no_edit:
        import asyncio

        try:
            asyncio.run(post.save())
        except PersistenceError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        click.echo(f"Created {store.path_for(slug)}")
        return

    run_editor(ctx, post)


@cli.command()
@click.argument("slug")
@click.pass_context
def edit(ctx: click.Context, slug: str):
    """Open the post named SLUG in the editor."""
    store: PostStore = ctx.obj["store"]

    try:
        post = store.load(slug)
    except PersistenceError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    run_editor(ctx, post)


@cli.command(name="list")
@click.pass_context
def list_posts(ctx: click.Context):
    """List stored posts with their status and tags."""
    store: PostStore = ctx.obj["store"]
    slugs = store.list_slugs()

    if not slugs:
        click.echo(f"No posts in {store.posts_dir}")
        return

    failed = False
    for slug in slugs:
        try:
            post = store.load(slug)
        except PersistenceError as e:
            click.echo(f"{slug:30} (unreadable: {e.message})", err=True)
            failed = True
            continue

        tags = ", ".join(post.tag_names())
        line = f"{slug:30} {post.post.status:10} {post.post.title}"
        if tags:
            line += f"  [{tags}]"
        click.echo(line)

    if failed:
        ctx.exit(1)


def main():
    """Entry point for the posteditor console script."""
    cli(obj={})


if __name__ == "__main__":
    sys.exit(main())
