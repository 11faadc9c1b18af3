"""Typed items and their single-line text form.

Each line of a Taskigt document starts with a one-character marker that
encodes the item's kind, followed by a space and free text:

    ? planned    * doing    # done    - info    | verbatim

Parsing at this level never fails: a line without a recognized marker is an
informational item carrying the whole line as its text.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ItemKind(Enum):
    """Kind of an outline item, valued by its marker symbol."""

    PLANNED = "?"
    DOING = "*"
    DONE = "#"
    INFO = "-"
    VERBATIM = "|"
    # Structural placeholder for an empty source line (no marker)
    BLANK = ""

    @property
    def symbol(self) -> str:
        """Marker character used when parsing and rendering."""
        return self.value


MARKERS: dict[str, ItemKind] = {
    kind.symbol: kind for kind in ItemKind if kind is not ItemKind.BLANK
}


def symbol(kind: ItemKind) -> str:
    """Return the marker character for a kind."""
    return kind.symbol


def parse_kind(line: str) -> tuple[ItemKind, str]:
    """Split a leading marker off a line.

    Args:
        line: Line content with indentation already removed

    Returns:
        Tuple of (kind, remainder). When the first character is not a marker
        (or the line is empty) the kind is INFO and the line is returned as is.

    Examples:
        >>> parse_kind("* write tests")
        (<ItemKind.DOING: '*'>, ' write tests')
        >>> parse_kind("no marker")
        (<ItemKind.INFO: '-'>, 'no marker')
    """
    kind = MARKERS.get(line[:1])
    if kind is None:
        return ItemKind.INFO, line
    return kind, line[1:]


@dataclass
class Item:
    """Single node of an outline.

    Attributes:
        kind: Item kind (decides the marker)
        text: Content after the marker and its separating space
        children_ids: Child ids in display order
        syntax: Optional syntax tag for verbatim items. Only set at
                construction time, never recovered by parsing.
    """

    kind: ItemKind
    text: str
    children_ids: list[int] = field(default_factory=list)
    syntax: Optional[str] = None

    @classmethod
    def leaf(cls, kind: ItemKind, text: str, syntax: Optional[str] = None) -> "Item":
        """Create a childless item."""
        return cls(kind=kind, text=text, syntax=syntax)

    @classmethod
    def parse(cls, line: str) -> "Item":
        """Parse a single (unindented) line into a childless item.

        Exactly one space after the marker is treated as the separator;
        a marker directly followed by text keeps all of the text.

        Examples:
            >>> Item.parse("? what")
            Item(kind=<ItemKind.PLANNED: '?'>, text='what', children_ids=[], syntax=None)
            >>> Item.parse("-myitem").text
            'myitem'
        """
        kind, rest = parse_kind(line)
        if rest.startswith(" "):
            rest = rest[1:]
        return cls.leaf(kind, rest)

    def display(self) -> str:
        """Canonical single-line form: marker, one space, text."""
        if self.kind is ItemKind.BLANK:
            return ""
        return f"{self.kind.symbol} {self.text}"


def parse_item(line: str) -> Item:
    """Parse a single line into a childless item (see Item.parse)."""
    return Item.parse(line)


def display(item: Item) -> str:
    """Render an item in its single-line form (see Item.display)."""
    return item.display()
