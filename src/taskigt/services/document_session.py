"""Editing session: the current document, its fold state and user intents.

A front end (terminal UI, web view, CLI) turns user actions into calls on a
DocumentSession, addressing items by the ids the session's tree handed out.
"""

from typing import Optional

import structlog

from taskigt.models.config import DocumentConfig
from taskigt.services.storage import DocumentStorage
from taskigt_outline import (
    README,
    README_TITLE,
    Item,
    ItemKind,
    ItemTree,
    parse_document,
    render_folded,
    render_text,
)

logger = structlog.get_logger()


class DocumentSession:
    """Current document plus the set of folded (collapsed) items.

    Attributes:
        tree: Document being edited
        folded: Ids whose subtrees are collapsed in the view. Presentation
                only, never saved.
    """

    def __init__(self, tree: Optional[ItemTree] = None, pasted_title: str = "Pasted"):
        """Start a session.

        Args:
            tree: Document to edit (default: the built-in README)
            pasted_title: Title given to documents loaded from text
        """
        self.tree = tree if tree is not None else parse_document(README_TITLE, README)
        self.folded: set[int] = set()
        self.pasted_title = pasted_title

    @classmethod
    def from_config(cls, document_config: DocumentConfig) -> "DocumentSession":
        """Start a session on the README, titled and configured from document settings."""
        tree = parse_document(document_config.default_title, README)
        return cls(tree, pasted_title=document_config.pasted_title)

    @property
    def title(self) -> str:
        return self.tree.title()

    # Item tree manipulation

    def edit(self, item_id: int, value: str) -> None:
        """Replace an item's line with edited text.

        Clearing the text deletes the item (when it has no children).
        """
        if value:
            logger.info("item_edited", item_id=item_id, value=value)
            self.tree.replace_from_text(item_id, value)
        else:
            self.delete(item_id)

    def edit_title(self, title: str) -> None:
        logger.info("title_edited", title=title)
        self.tree.set_title(title)

    def delete(self, item_id: int) -> bool:
        """Delete an item if it has no sub-items.

        Returns:
            True if the item was removed
        """
        removed = self.tree.remove_if_leaf(item_id)
        if removed:
            self.folded.discard(item_id)
            logger.info("item_deleted", item_id=item_id)
        return removed

    def add(self, parent_id: int, position: Optional[int] = None) -> int:
        """Add an empty informational item below parent.

        Args:
            parent_id: Parent item
            position: Index among the parent's children (default: last)

        Returns:
            Id of the new item
        """
        if position is None:
            position = len(self.tree.children(parent_id))
        logger.info("item_added", parent_id=parent_id, position=position)
        return self.tree.add_child_at(parent_id, position, Item.leaf(ItemKind.INFO, ""))

    def insert_document(
        self,
        parent_id: int,
        title: str,
        text: str,
        kind: ItemKind = ItemKind.INFO,
    ) -> int:
        """Parse text as a document and graft it as a new item below parent.

        The inserted document's title becomes the text of the new item and
        its items become that item's children.

        Returns:
            Id of the new item
        """
        grafted = self.tree.append(parent_id, kind, parse_document(title, text))
        logger.info("document_inserted", parent_id=parent_id, item_id=grafted, title=title)
        return grafted

    # Folding

    def is_folded(self, item_id: int) -> bool:
        return item_id in self.folded

    def toggle_fold(self, item_id: int) -> bool:
        """Fold an expanded item or expand a folded one.

        Returns:
            True if the item is folded afterwards
        """
        self.tree.item(item_id)
        if item_id in self.folded:
            self.folded.remove(item_id)
        else:
            self.folded.add(item_id)
        logger.info("fold_toggled", item_id=item_id, folded=item_id in self.folded)
        return item_id in self.folded

    def fold(self, item_id: int) -> None:
        """Fold an item, leaving it folded if it already is."""
        self.tree.item(item_id)
        self.folded.add(item_id)
        logger.info("item_folded", item_id=item_id)

    def fold_offspring(self, item_id: int, and_self: bool = False) -> None:
        """Fold every item below item_id (and item_id itself if and_self)."""
        below = self.tree.descendants(item_id)
        if and_self:
            self.folded.add(item_id)
        self.folded.update(below)

    def expand_offspring(self, item_id: int, and_self: bool = False) -> None:
        """Expand every item below item_id (and item_id itself if and_self)."""
        below = self.tree.descendants(item_id)
        if and_self:
            self.folded.discard(item_id)
        self.folded.difference_update(below)

    # Text views

    def as_text(self) -> str:
        """Canonical document text (what gets saved and exported)."""
        return render_text(self.tree)

    def as_folded_text(self) -> str:
        """Document text with folded subtrees collapsed."""
        return render_folded(self.tree, self.folded)

    # Save / restore / import

    def save(self, storage: DocumentStorage) -> None:
        """Save the document under its current title."""
        storage.save(self.title, self.as_text())

    def restore(self, storage: DocumentStorage, title: str) -> None:
        """Replace the document with the one saved under title.

        The current document is kept if the restore fails.

        Raises:
            DocumentNotFoundError: If nothing was saved under title
            StorageError: If the saved document cannot be read
        """
        content = storage.restore(title)
        self._replace(parse_document(title, content))
        logger.info("document_restored", title=title)

    def load_text(self, text: str, title: Optional[str] = None) -> None:
        """Replace the document with pasted text (overwrites the current one)."""
        title = title or self.pasted_title
        self._replace(parse_document(title, text))
        logger.info("document_loaded_from_text", title=title, size=len(text))

    def _replace(self, tree: ItemTree) -> None:
        self.tree = tree
        self.folded = set()
