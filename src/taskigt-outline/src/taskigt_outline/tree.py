"""Arena-backed item tree.

Items live in a flat list and refer to each other by integer id, so nodes can
be addressed from the outside (UI, fold sets) without holding references into
the structure. Id 0 is always the root, which carries the document title.

Ids are handed out monotonically and never reused: removing a node only
detaches it from its parent, and the detached id becomes an invalid handle.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional

import structlog

from taskigt_outline.item import Item, ItemKind

logger = structlog.get_logger()

ROOT = 0


class InvalidItemIdError(IndexError):
    """Raised when an id does not refer to an attached item of the tree.

    Passing such an id is a caller bug, so the operation is aborted before
    anything is modified.

    Attributes:
        item_id: The offending id
        message: Human-readable error message
    """

    def __init__(self, item_id: int, message: str = "No such item in tree"):
        self.item_id = item_id
        self.message = message
        super().__init__(f"{message}: {item_id}")


@dataclass
class ItemTree:
    """Tree of items addressed by stable integer ids.

    Attributes:
        nodes: Item storage, indexed by id
        parents: Parent id per item (None for the root and detached items)
    """

    nodes: list[Item] = field(default_factory=list)
    parents: list[Optional[int]] = field(default_factory=list)

    @classmethod
    def new(cls, title: str) -> "ItemTree":
        """Create a tree holding only the root item."""
        return cls(nodes=[Item.leaf(ItemKind.INFO, title)], parents=[None])

    def __len__(self) -> int:
        """Number of ids allocated so far (including detached ones)."""
        return len(self.nodes)

    def root(self) -> int:
        return ROOT

    def title(self) -> str:
        return self.nodes[ROOT].text

    def set_title(self, title: str) -> None:
        self.nodes[ROOT].text = title

    def item(self, item_id: int) -> Item:
        """Get the item for an id.

        Raises:
            InvalidItemIdError: If the id is unknown or detached
        """
        self._require(item_id)
        return self.nodes[item_id]

    def children(self, item_id: int) -> list[int]:
        """Child ids of an item, in display order."""
        return list(self.item(item_id).children_ids)

    def parent(self, item_id: int) -> Optional[int]:
        """Direct parent of an item; None only for the root."""
        self._require(item_id)
        return self.parents[item_id]

    def is_leaf(self, item_id: int) -> bool:
        """Check whether an item has no sub-items.

        Blank lines kept below an item are layout, not sub-items.
        """
        return all(
            self.nodes[child_id].kind is ItemKind.BLANK
            for child_id in self.item(item_id).children_ids
        )

    def is_attached(self, item_id: int) -> bool:
        """Check whether an id refers to an item that is part of the tree."""
        if not 0 <= item_id < len(self.nodes):
            return False
        return item_id == ROOT or self.parents[item_id] is not None

    def _require(self, item_id: int) -> None:
        if not self.is_attached(item_id):
            raise InvalidItemIdError(item_id)

    def add_child(self, parent: int, child: Item) -> int:
        """Append a new item as the last child of parent.

        Returns:
            Id of the new item
        """
        self._require(parent)
        new_id = self._allocate(parent, child)
        self.nodes[parent].children_ids.append(new_id)
        return new_id

    def add_child_at(self, parent: int, position: int, child: Item) -> int:
        """Insert a new item at position among parent's children.

        Positions past the end append instead of failing.

        Returns:
            Id of the new item
        """
        self._require(parent)
        new_id = self._allocate(parent, child)
        siblings = self.nodes[parent].children_ids
        if position >= len(siblings):
            siblings.append(new_id)
        else:
            siblings.insert(position, new_id)
        return new_id

    def _allocate(self, parent: int, child: Item) -> int:
        new_id = len(self.nodes)
        self.nodes.append(child)
        self.parents.append(parent)
        return new_id

    def remove_if_leaf(self, item_id: int) -> bool:
        """Detach an item from its parent if it has no sub-items.

        Blank lines below the item move up to the parent, in the item's
        place, so they keep their position in the document. The root is
        never removed.

        Returns:
            True if the item was removed, False if it has sub-items (or is
            the root) and the tree was left untouched
        """
        self._require(item_id)
        if item_id == ROOT:
            logger.warning("remove_root_rejected")
            return False

        if not self.is_leaf(item_id):
            return False

        item = self.nodes[item_id]
        parent = self.parents[item_id]
        siblings = self.nodes[parent].children_ids
        position = siblings.index(item_id)
        siblings[position:position + 1] = item.children_ids
        for blank_id in item.children_ids:
            self.parents[blank_id] = parent
        item.children_ids = []
        self.parents[item_id] = None
        return True

    def replace_from_text(self, item_id: int, line: str) -> None:
        """Re-parse an edited line into an existing item, keeping its children.

        Editing the root changes the title (the root has no marker line).
        """
        self._require(item_id)
        if item_id == ROOT:
            self.set_title(line)
            return

        edited = Item.parse(line)
        item = self.nodes[item_id]
        item.kind = edited.kind
        item.text = edited.text
        item.syntax = None

    def append(
        self,
        parent: int,
        kind: ItemKind,
        other: "ItemTree",
        syntax: Optional[str] = None,
    ) -> int:
        """Graft a whole tree as the last child of parent.

        Every id of other is shifted by the current size of this tree. The
        grafted root is re-typed to kind but keeps its text and children.
        other is drained: its items now belong to this tree only.

        Args:
            parent: Attachment point in this tree
            kind: Kind given to the grafted root
            other: Donor tree
            syntax: Syntax tag for the grafted root (verbatim items)

        Returns:
            Id of the grafted root in this tree

        Raises:
            InvalidItemIdError: If parent is not in this tree
            ValueError: If other is this tree or has no root
        """
        self._require(parent)
        if other is self:
            raise ValueError("Cannot graft a tree into itself")
        if not other.nodes:
            raise ValueError("Cannot graft an empty tree")

        offset = len(self.nodes)
        other._shift_ids(offset)

        self.nodes.extend(other.nodes)
        self.parents.extend(
            None if parent_id is None else parent_id + offset
            for parent_id in other.parents
        )

        grafted = offset
        self.parents[grafted] = parent
        self.nodes[parent].children_ids.append(grafted)

        grafted_root = self.nodes[grafted]
        grafted_root.kind = kind
        grafted_root.syntax = syntax

        logger.debug(
            "tree_grafted",
            parent=parent,
            grafted_root=grafted,
            size=len(other.nodes),
        )

        other.nodes = []
        other.parents = []
        return grafted

    def _shift_ids(self, offset: int) -> None:
        """Add offset to every child reference, visiting each node once.

        Depth-first from the root. Child lists are read before they are
        rewritten, so the stack only ever holds pre-shift ids, which are
        still valid positions in self.nodes. Detached items are leaves and
        have nothing to rewrite.
        """
        stack = [ROOT]
        visited: set[int] = set()
        while stack:
            node_id = stack.pop()
            if node_id in visited:
                raise ValueError(f"Item {node_id} reachable twice, tree is malformed")
            visited.add(node_id)

            item = self.nodes[node_id]
            stack.extend(item.children_ids)
            item.children_ids = [child_id + offset for child_id in item.children_ids]

    def walk(self, start: int = ROOT) -> Iterator[tuple[int, int]]:
        """Yield (id, depth) pairs in pre-order, starting with start at depth 0."""
        self._require(start)
        stack = [(start, 0)]
        while stack:
            node_id, depth = stack.pop()
            yield node_id, depth
            children = self.nodes[node_id].children_ids
            stack.extend((child_id, depth + 1) for child_id in reversed(children))

    def descendants(self, item_id: int) -> list[int]:
        """All ids below item_id, in pre-order (item_id itself excluded)."""
        return [node_id for node_id, depth in self.walk(item_id) if depth > 0]

    def check_invariants(self) -> list[str]:
        """Check the structural invariants of the tree.

        Returns:
            List of problems found (empty when the tree is well-formed)
        """
        problems = []
        if not self.nodes:
            return ["tree has no root"]
        if self.parents[ROOT] is not None:
            problems.append("root has a parent")

        seen: set[int] = set()
        stack = [ROOT]
        while stack:
            node_id = stack.pop()
            if node_id in seen:
                problems.append(f"item {node_id} is reachable twice (cycle or shared child)")
                continue
            seen.add(node_id)

            children = self.nodes[node_id].children_ids
            if len(set(children)) != len(children):
                problems.append(f"item {node_id} has duplicate children")
            for child_id in children:
                if not 0 <= child_id < len(self.nodes):
                    problems.append(f"item {node_id} references missing child {child_id}")
                    continue
                if self.parents[child_id] != node_id:
                    problems.append(
                        f"item {child_id} is a child of {node_id} "
                        f"but its parent link is {self.parents[child_id]}"
                    )
                stack.append(child_id)

        for node_id, parent_id in enumerate(self.parents):
            if parent_id is not None and node_id not in seen:
                problems.append(f"item {node_id} has parent {parent_id} but is unreachable")

        return problems


def subtree(text: str, children: Optional[list[tuple[ItemKind, ItemTree]]] = None) -> ItemTree:
    """Build a tree from a root text and (kind, tree) children.

    Each child tree is grafted under the new root with its kind, in order.

    Example:
        >>> doc = subtree("the doc", [
        ...     (ItemKind.INFO, subtree("dude", [
        ...         (ItemKind.DOING, subtree("sweet")),
        ...     ])),
        ... ])
        >>> [doc.nodes[i].text for i, _ in doc.walk()]
        ['the doc', 'dude', 'sweet']
    """
    tree = ItemTree.new(text)
    for kind, child in children or []:
        tree.append(tree.root(), kind, child)
    return tree
