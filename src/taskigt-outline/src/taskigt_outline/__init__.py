"""Taskigt outline engine - Parse, edit and render Taskigt documents.

A Taskigt document is plain text where every line is a typed item
(``? * # - |`` markers) nested by two-space indentation. This package turns
such text into an id-addressed item tree and back.

Key features:
- Forgiving parser: any text is a valid document
- Arena tree with stable integer ids (safe to hold across edits)
- Subtree grafting with id renumbering
- Canonical rendering (byte-identical round trip) and fold-aware rendering

Example:
    >>> from taskigt_outline import parse_document, render_text
    >>> tree = parse_document("the doc", "- dude\\n  * sweet\\n  ? what")
    >>> tree.nodes[1].text
    'dude'
    >>> render_text(tree)
    '  - dude\\n    * sweet\\n    ? what\\n'
"""

from taskigt_outline.item import Item, ItemKind, display, parse_item, parse_kind, symbol
from taskigt_outline.tree import ROOT, InvalidItemIdError, ItemTree, subtree
from taskigt_outline.codec import (
    parse_document,
    render_document,
    render_folded,
    render_text,
)
from taskigt_outline.readme import README, README_TITLE

__version__ = "0.1.0"

__all__ = [
    "Item",
    "ItemKind",
    "ItemTree",
    "InvalidItemIdError",
    "ROOT",
    "README",
    "README_TITLE",
    "display",
    "parse_document",
    "parse_item",
    "parse_kind",
    "render_document",
    "render_folded",
    "render_text",
    "subtree",
    "symbol",
]
