"""CLI entry point for Taskigt."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from taskigt import __version__
from taskigt.config import ConfigManager
from taskigt.models.config import Config, default_config_path
from taskigt.services.document_session import DocumentSession
from taskigt.services.exceptions import StorageError
from taskigt.services.storage import DocumentStorage, atomic_write
from taskigt.utils.logging import configure_logging, get_logger
from taskigt_outline import README, InvalidItemIdError, ItemKind, ItemTree, parse_document


logger = get_logger(__name__)
console = Console()

KIND_CHOICES = {kind.symbol: kind for kind in ItemKind if kind is not ItemKind.BLANK}


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from config_path or ~/.config/taskigt/config.yaml.

    Returns:
        Validated Config instance

    Raises:
        click.ClickException: If config is unreadable or validation fails
    """
    if config_path is None:
        config_path = default_config_path()

    try:
        return ConfigManager.load_from_path(config_path).config
    except PermissionError as e:
        raise click.ClickException(str(e))
    except ValueError as e:
        raise click.ClickException(str(e))


def read_document_text(path: Path) -> str:
    """Read a document file, reporting failures as CLI errors."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("document_read_error", path=str(path), error=str(e))
        raise click.ClickException(f"Could not read {path}: {e}")


def load_document(path: Path, title: Optional[str] = None) -> ItemTree:
    """
    Read and parse a document file.

    Args:
        path: Document file
        title: Document title (default: file name without extension)

    Returns:
        Parsed item tree

    Raises:
        click.ClickException: If the file cannot be read
    """
    tree = parse_document(title or path.stem, read_document_text(path))
    logger.info("document_loaded", path=str(path), items=len(tree) - 1)
    return tree


def build_rich_tree(tree: ItemTree, folded: set[int]) -> Tree:
    """Build a rich Tree showing item ids, collapsing folded items."""
    root = Tree(f"[bold]{escape(tree.title())}[/bold] [dim]#{tree.root()}[/dim]")

    def add_children(node: Tree, item_id: int) -> None:
        item = tree.item(item_id)
        if item_id in folded and not tree.is_leaf(item_id):
            node.add("[dim]\\[...][/dim]")
            return
        for child_id in item.children_ids:
            child = tree.item(child_id)
            if child.kind is ItemKind.BLANK:
                continue
            branch = node.add(f"{escape(child.display())} [dim]#{child_id}[/dim]")
            add_children(branch, child_id)

    add_children(root, tree.root())
    return root


def _storage(ctx: click.Context) -> DocumentStorage:
    config = load_config(ctx.obj["config_path"])
    return DocumentStorage(Path(config.storage.directory))


def _write_output(text: str, output: Optional[Path]) -> None:
    if output is None:
        click.echo(text, nl=False)
        return
    try:
        atomic_write(output, text)
    except OSError as e:
        raise click.ClickException(f"Could not write {output}: {e}")
    click.echo(f"Wrote {output}", err=True)


@click.group()
@click.version_option(version=__version__, prog_name="taskigt")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to configuration file (default: ~/.config/taskigt/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path]):
    """Taskigt: typed outline notes in plain text."""
    configure_logging()
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.command("format")
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--in-place", is_flag=True, help="Rewrite the file instead of printing")
def format_command(document: Path, in_place: bool):
    """
    Print a document in canonical form.

    Indentation is normalized to two spaces per level and every line gets
    a marker followed by one space.

    Examples:
        taskigt format notes.txt
        taskigt format --in-place notes.txt
    """
    tree = load_document(document)
    _write_output(DocumentSession(tree).as_text(), document if in_place else None)


@cli.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--fold", "fold_ids", type=int, multiple=True, help="Collapse the item with this id (repeatable)")
@click.option("--fold-all", is_flag=True, help="Collapse every item")
@click.option("--tree", "as_tree", is_flag=True, help="Show the item tree with ids")
def show(document: Path, fold_ids: tuple[int, ...], fold_all: bool, as_tree: bool):
    """
    Show a document, optionally with folded items.

    Use --tree to find the ids to pass to --fold.

    Examples:
        taskigt show --tree notes.txt
        taskigt show --fold 3 --fold 7 notes.txt
    """
    session = DocumentSession(load_document(document))

    try:
        if fold_all:
            session.fold_offspring(session.tree.root())
        for item_id in fold_ids:
            session.fold(item_id)
    except InvalidItemIdError as e:
        raise click.ClickException(str(e))

    if as_tree:
        console.print(build_rich_tree(session.tree, session.folded))
    else:
        click.echo(session.as_folded_text(), nl=False)


@cli.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("other", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--under", "parent_id", type=int, default=0, show_default=True, help="Id of the item to insert below")
@click.option(
    "--kind",
    type=click.Choice(sorted(KIND_CHOICES)),
    default=ItemKind.INFO.symbol,
    show_default=True,
    help="Marker of the inserted item",
)
@click.option("--in-place", is_flag=True, help="Rewrite DOCUMENT instead of printing")
def insert(document: Path, other: Path, parent_id: int, kind: str, in_place: bool):
    """
    Insert OTHER as a new item of DOCUMENT.

    OTHER's file name becomes the new item's text and its items become
    the new item's children.

    Examples:
        taskigt insert --under 3 --kind '?' plan.txt ideas.txt
    """
    session = DocumentSession(load_document(document))
    other_text = read_document_text(other)
    try:
        session.insert_document(parent_id, other.stem, other_text, KIND_CHOICES[kind])
    except InvalidItemIdError as e:
        raise click.ClickException(str(e))

    _write_output(session.as_text(), document if in_place else None)


@cli.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--title", help="Title to save under (default: file name without extension)")
@click.pass_context
def save(ctx: click.Context, document: Path, title: Optional[str]):
    """
    Save a document to the document store.

    Examples:
        taskigt save notes.txt
        taskigt save --title "Work items" notes.txt
    """
    storage = _storage(ctx)
    session = DocumentSession(load_document(document, title))
    try:
        session.save(storage)
    except StorageError as e:
        raise click.ClickException(str(e))

    click.echo(f"Saved '{session.title}' to {storage.path_for(session.title)}")


@cli.command()
@click.argument("title")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the document to this file instead of printing",
)
@click.pass_context
def restore(ctx: click.Context, title: str, output: Optional[Path]):
    """
    Restore a saved document by title.

    Examples:
        taskigt restore "Work items"
        taskigt restore "Work items" -o work.txt
    """
    storage = _storage(ctx)
    session = DocumentSession(ItemTree.new(title))
    try:
        session.restore(storage, title)
    except StorageError as e:
        raise click.ClickException(str(e))

    _write_output(session.as_text(), output)


@cli.command("list")
@click.pass_context
def list_command(ctx: click.Context):
    """List titles of saved documents."""
    storage = _storage(ctx)
    titles = storage.list_titles()
    if not titles:
        click.echo("No saved documents.")
        return
    for title in titles:
        click.echo(title)


@cli.command("import")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--title", help="Title to save under (default: document.pasted_title from config)")
@click.pass_context
def import_command(ctx: click.Context, source, title: Optional[str]):
    """
    Import pasted text (stdin or SOURCE) into the document store.

    Any text is accepted; lines without a marker become informational items.
    An existing document with the same title is overwritten.

    Examples:
        pbpaste | taskigt import --title "Meeting notes"
    """
    config = load_config(ctx.obj["config_path"])
    storage = DocumentStorage(Path(config.storage.directory))
    session = DocumentSession.from_config(config.document)
    session.load_text(source.read(), title)
    try:
        session.save(storage)
    except StorageError as e:
        raise click.ClickException(str(e))

    click.echo(f"Imported {session.title} ({len(session.tree.descendants(session.tree.root()))} items)")


@cli.command()
@click.option("--save", "save_it", is_flag=True, help="Also store it under document.default_title")
@click.pass_context
def readme(ctx: click.Context, save_it: bool):
    """Print the built-in help document."""
    if not save_it:
        click.echo(README, nl=False)
        return

    config = load_config(ctx.obj["config_path"])
    session = DocumentSession.from_config(config.document)
    try:
        session.save(DocumentStorage(Path(config.storage.directory)))
    except StorageError as e:
        raise click.ClickException(str(e))
    click.echo(session.as_text(), nl=False)


def main():
    """Main entry point for setuptools console script."""
    cli()


if __name__ == "__main__":
    main()
