"""Whole-document parsing and rendering.

A Taskigt document is one item per line, nested by indentation in units of
two spaces:

    - dude
      * sweet
      ? what

Any text is a valid document. Lines without a marker become informational
items and irregular indentation attaches a line to the nearest shallower
item seen so far. Rendering a parsed canonical document reproduces it
byte for byte.
"""

from typing import AbstractSet, Optional

import structlog

from taskigt_outline.item import Item, ItemKind
from taskigt_outline.tree import ROOT, ItemTree

logger = structlog.get_logger()

INDENT_SIZE = 2
INDENT = " " * INDENT_SIZE
FOLD_PLACEHOLDER = "[...]"


def split_lines(text: str) -> list[str]:
    """Split text into lines on LF or CRLF; a final terminator adds no empty line."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_line(line: str) -> tuple[int, Item]:
    """Split one source line into its indentation level and item.

    Args:
        line: Raw line (without terminator)

    Returns:
        Tuple of (indent_level, item). Whitespace-only lines yield a BLANK
        item at level 0.
    """
    stripped = line.lstrip()
    if not stripped:
        return 0, Item.leaf(ItemKind.BLANK, "")

    spaces = len(line) - len(stripped)
    return spaces // INDENT_SIZE, Item.parse(stripped)


def parse_document(title: str, text: str) -> ItemTree:
    """Parse document text into an item tree.

    The parent of each line is looked up in a table of candidate parents per
    indentation level, filled in as lines are read: an item at level N is the
    candidate for level N + 1. When no candidate is recorded for a line's
    level, the nearest shallower candidate is used, falling back to the root.
    Blank lines hang below the most recent item so they render in place, and
    leave the table alone.

    Args:
        title: Document title, stored as the root's text
        text: Document content

    Returns:
        Parsed tree (root only for empty text)
    """
    tree = ItemTree.new(title)
    candidates: dict[int, int] = {}
    last_item = ROOT

    for line in split_lines(text):
        level, item = parse_line(line)

        if item.kind is ItemKind.BLANK:
            tree.add_child(last_item, item)
            continue

        parent = _nearest_candidate(candidates, level)
        item_id = tree.add_child(parent, item)
        last_item = item_id

        # Deeper candidates belong to a finished branch
        for stale in [key for key in candidates if key > level + 1]:
            del candidates[stale]
        candidates[level + 1] = item_id

    logger.debug("document_parsed", title=title, items=len(tree) - 1)
    return tree


def _nearest_candidate(candidates: dict[int, int], level: int) -> int:
    shallower = [key for key in candidates if key <= level]
    if not shallower:
        return ROOT
    return candidates[max(shallower)]


def render_text(tree: ItemTree, start: int = ROOT) -> str:
    """Render the subtree below start as document text.

    start itself is not rendered (for the root, the title is kept
    separately). Its children are rendered one indentation unit in, which
    is the canonical layout of a saved document.

    Args:
        tree: Tree to render
        start: Id whose descendants are rendered

    Returns:
        Document text, one line per item, each terminated by a newline
    """
    return _render(tree, start, folded=frozenset())


def render_folded(
    tree: ItemTree,
    folded: AbstractSet[int],
    start: int = ROOT,
) -> str:
    """Render like render_text, collapsing folded items.

    A folded item with sub-items is followed by a single placeholder line
    in place of its whole subtree. Blank lines alone do not count as
    sub-items. Only for display; the fold set never changes the tree or
    the canonical text.

    Args:
        tree: Tree to render
        folded: Ids of collapsed items
        start: Id whose descendants are rendered

    Returns:
        Display text
    """
    return _render(tree, start, folded=folded)


def _render(tree: ItemTree, start: int, folded: AbstractSet[int]) -> str:
    lines: list[str] = []

    def render_item(item_id: int, level: int, display_item: bool) -> None:
        item = tree.nodes[item_id]
        if display_item:
            if item.kind is ItemKind.BLANK:
                lines.append("")
            else:
                lines.append(INDENT * (level - 1) + item.display())

        if item_id in folded and not tree.is_leaf(item_id):
            lines.append(INDENT * level + FOLD_PLACEHOLDER)
            return

        for child_id in item.children_ids:
            render_item(child_id, level + 1, True)

    tree.item(start)
    render_item(start, 1, False)
    return "".join(f"{line}\n" for line in lines)


def render_document(tree: ItemTree, folded: Optional[AbstractSet[int]] = None) -> str:
    """Render a whole document from the root, optionally fold-aware."""
    if folded:
        return render_folded(tree, folded)
    return render_text(tree)
