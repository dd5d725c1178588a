"""CLI interface for posttree.

Command-line tool for rendering navigation lists from a JSON site file.
"""

import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, NoReturn

import click

from posttree.config import HIDDEN_ROOT_POLICIES, Config
from posttree.core.errors import PostTreeError
from posttree.core.items import TreeNode
from posttree.core.navigation import build_context, render
from posttree.core.types import ItemId
from posttree.loader import SiteLoader


@click.group()
def cli() -> None:
    """posttree - navigation lists for hierarchical content."""


def _selection_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by commands that select and shape a tree."""
    options = [
        click.argument("item_id", type=int),
        click.option(
            "--config",
            "-c",
            "config_path",
            type=click.Path(exists=True, path_type=Path),
            default=None,
            help="Path to configuration file (default: auto-discover posttree.toml)",
        ),
        click.option(
            "--site",
            "-s",
            "source",
            type=click.Path(exists=True, path_type=Path, dir_okay=False),
            default=None,
            help="JSON site file (overrides config)",
        ),
        click.option(
            "--only-descendants/--ancestors",
            default=None,
            help="Root the tree at the item instead of its top ancestor (overrides config)",
        ),
        click.option(
            "--full-tree/--pruned",
            default=None,
            help="Show every branch instead of only the path to the item (overrides config)",
        ),
        click.option(
            "--hidden-key",
            default=None,
            help="Flag name marking items hidden from navigation (overrides config)",
        ),
        click.option(
            "--hidden-root",
            type=click.Choice(HIDDEN_ROOT_POLICIES),
            default=None,
            help="Show a hidden root anyway or fail (overrides config)",
        ),
        click.option(
            "--verbose",
            "-v",
            is_flag=True,
            help="Enable debug logging",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _load_config(
    config_path: Path | None,
    source: Path | None,
    only_descendants: bool | None,
    full_tree: bool | None,
    hidden_key: str | None,
    hidden_root: str | None,
    marker: str | None = None,
) -> Config:
    config = Config.load(config_path)
    return config.with_overrides(
        source=source,
        only_descendants=only_descendants,
        full_tree=full_tree,
        current_item_marker=marker,
        hidden_filter_key=hidden_key,
        hidden_root=hidden_root,  # type: ignore[arg-type]
    )


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


@cli.command(name="render")
@_selection_options
@click.option(
    "--marker",
    default=None,
    help="Class added to the current item's link (overrides config)",
)
def render_command(
    item_id: int,
    config_path: Path | None,
    source: Path | None,
    only_descendants: bool | None,
    full_tree: bool | None,
    hidden_key: str | None,
    hidden_root: str | None,
    verbose: bool,
    marker: str | None,
) -> None:
    """Render navigation markup for ITEM_ID."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = _load_config(
            config_path, source, only_descendants, full_tree, hidden_key, hidden_root, marker
        )
        site = SiteLoader(config.site.source).load()
        markup = render(ItemId(item_id), site, config.render_options())
    except (PostTreeError, FileNotFoundError, ValueError) as e:
        _fail(str(e))

    click.echo(markup, nl=False)


@cli.command(name="tree")
@_selection_options
def tree_command(
    item_id: int,
    config_path: Path | None,
    source: Path | None,
    only_descendants: bool | None,
    full_tree: bool | None,
    hidden_key: str | None,
    hidden_root: str | None,
    verbose: bool,
) -> None:
    """Print an indented outline of the navigation tree for ITEM_ID."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = _load_config(
            config_path, source, only_descendants, full_tree, hidden_key, hidden_root
        )
        site = SiteLoader(config.site.source).load()
        context = build_context(ItemId(item_id), site, config.render_options())
    except (PostTreeError, FileNotFoundError, ValueError) as e:
        _fail(str(e))

    _print_outline(context.tree, context.current.id)


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover posttree.toml)",
)
@click.option(
    "--site",
    "-s",
    "source",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="JSON site file (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
def serve(
    config_path: Path | None,
    source: Path | None,
    host: str | None,
    port: int | None,
) -> None:
    """Serve navigation markup over HTTP."""
    from posttree.server import run_server

    try:
        config = Config.load(config_path).with_overrides(source=source, host=host, port=port)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Site file: {config.site.source}")

    run_server(config)


def _print_outline(node: TreeNode, current_id: ItemId, depth: int = 0) -> None:
    marker = " *" if node.item.id == current_id else ""
    click.echo(f"{'  ' * depth}{node.item.title} [{node.item.id}]{marker}")
    for child in node.children:
        _print_outline(child, current_id, depth + 1)


if __name__ == "__main__":
    cli()
