"""Tests for document parsing and rendering."""

import pytest

from taskigt_outline.codec import (
    FOLD_PLACEHOLDER,
    parse_document,
    parse_line,
    render_document,
    render_folded,
    render_text,
    split_lines,
)
from taskigt_outline.item import Item, ItemKind
from taskigt_outline.readme import README
from taskigt_outline.tree import ROOT, subtree


class TestParseLine:
    """Tests for single line indentation handling."""

    def test_indent_levels(self):
        """Test two columns per indentation level."""
        assert parse_line("- top")[0] == 0
        assert parse_line("  - one")[0] == 1
        assert parse_line("   - still one")[0] == 1
        assert parse_line("    - two")[0] == 2

    def test_whitespace_only_line_is_blank(self):
        """Test blank lines become blank placeholders."""
        level, item = parse_line("    ")
        assert level == 0
        assert item.kind is ItemKind.BLANK


class TestSplitLines:
    """Tests for line splitting."""

    def test_trailing_newline_adds_no_line(self):
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_crlf(self):
        assert split_lines("a\r\nb") == ["a", "b"]

    def test_empty(self):
        assert split_lines("") == []


class TestParseDocument:
    """Tests for parse_document."""

    def test_parse_empty(self):
        """Test empty text gives a root-only tree."""
        tree = parse_document("the doc", "")
        assert tree == subtree("the doc")
        assert tree.children(ROOT) == []

    def test_parse_document(self):
        """Test the canonical nested example."""
        tree = parse_document("the doc", "- dude\n  * sweet\n  ? what")
        expected = subtree("the doc", [
            (ItemKind.INFO, subtree("dude", [
                (ItemKind.DOING, subtree("sweet")),
                (ItemKind.PLANNED, subtree("what")),
            ])),
        ])
        assert tree == expected
        assert tree.title() == "the doc"

    def test_skipped_level_attaches_to_nearest_shallower(self):
        """Test a level-2 line right after a level-0 line nests under it."""
        tree = parse_document("doc", "- a\n    * b")
        assert tree.children(ROOT) == [1]
        assert tree.children(1) == [2]
        assert tree.item(2) == Item.leaf(ItemKind.DOING, "b")

    def test_indented_first_line_goes_to_root(self):
        """Test documents may start indented."""
        tree = parse_document("doc", "    - deep start\n- top")
        assert tree.children(ROOT) == [1, 2]

    def test_dedent_discards_finished_branch(self):
        """Test a new sibling branch does not reuse stale deeper parents."""
        text = "- a\n    * a-deep\n- c\n    * c-deep"
        tree = parse_document("doc", text)
        assert tree.children(ROOT) == [1, 3]
        assert tree.children(1) == [2]
        assert tree.children(3) == [4]

    def test_unmarked_lines_are_info(self):
        """Test arbitrary text parses without errors."""
        tree = parse_document("notes", "just some text\n  more text")
        assert tree.item(1).text == "just some text"
        assert tree.item(2).text == "more text"
        assert tree.parent(2) == 1

    def test_blank_line_stays_in_place(self):
        """Test blank lines hang below the previous item."""
        tree = parse_document("doc", "  - a\n\n    - b\n")
        assert tree.children(1) == [2, 3]
        assert tree.item(2).kind is ItemKind.BLANK
        assert tree.item(3).text == "b"

    def test_leading_blank_line_goes_to_root(self):
        tree = parse_document("doc", "\n  - a\n")
        assert tree.children(ROOT) == [1, 2]
        assert tree.item(1).kind is ItemKind.BLANK

    def test_parsed_tree_is_well_formed(self):
        """Test parsing keeps the tree invariants."""
        tree = parse_document("readme", README)
        assert tree.check_invariants() == []


class TestRenderText:
    """Tests for canonical rendering."""

    def test_render_nested(self):
        """Test root children are indented one unit."""
        tree = parse_document("the doc", "- dude\n  * sweet\n  ? what")
        assert render_text(tree) == "  - dude\n    * sweet\n    ? what\n"

    def test_render_empty(self):
        assert render_text(parse_document("doc", "")) == ""

    def test_render_from_inner_item(self):
        """Test rendering below a non-root item."""
        tree = parse_document("doc", "- a\n  - b\n    - c")
        assert render_text(tree, start=1) == "  - b\n    - c\n"

    def test_render_blank_lines(self):
        """Test blank placeholders render as bare newlines."""
        text = "  - a\n\n  - b\n"
        assert render_text(parse_document("doc", text)) == text

    def test_readme_is_well_formatted(self):
        """Test the bundled README survives a round trip unchanged."""
        assert render_text(parse_document("readme", README)) == README

    @pytest.mark.parametrize(
        "text",
        [
            "- dude\n  * sweet\n  ? what",
            "- a\n    * b",
            "plain\n  text\n\n    | verbatim\n# done",
            "? x\n\n\n  - y\n      - z\n",
        ],
    )
    def test_parse_render_parse(self, text):
        """Test re-parsing the rendered text gives the same tree."""
        tree = parse_document("doc", text)
        assert parse_document("doc", render_text(tree)) == tree

    def test_render_built_tree(self):
        """Test rendering a tree built by grafting."""
        doc = subtree("doc", [
            (ItemKind.DONE, subtree("ship it", [
                (ItemKind.VERBATIM, subtree("release notes")),
            ])),
        ])
        assert render_text(doc) == "  # ship it\n    | release notes\n"


class TestRenderFolded:
    """Tests for fold-aware rendering."""

    @pytest.fixture
    def tree(self):
        return parse_document("doc", "- a\n  - a1\n    - a1x\n- b\n  - b1")

    def test_no_folds_matches_canonical(self, tree):
        assert render_folded(tree, set()) == render_text(tree)

    def test_folded_subtree_is_replaced(self, tree):
        """Test a folded item shows one placeholder for its subtree."""
        text = render_folded(tree, {1})
        assert text == f"  - a\n    {FOLD_PLACEHOLDER}\n  - b\n    - b1\n"

    def test_folded_leaf_has_no_placeholder(self, tree):
        """Test folding a childless item changes nothing."""
        assert render_folded(tree, {3}) == render_text(tree)

    def test_folded_item_with_only_blank_lines(self):
        """Test blank lines stay visible and get no placeholder."""
        tree = parse_document("doc", "  - a\n\n  - b\n")
        assert render_folded(tree, {1}) == "  - a\n\n  - b\n"

    def test_folded_item_hides_blank_lines_of_sub_items(self):
        tree = parse_document("doc", "  - a\n    - a1\n\n  - b\n")
        assert render_folded(tree, {1}) == f"  - a\n    {FOLD_PLACEHOLDER}\n  - b\n"

    def test_folded_root(self, tree):
        """Test folding the root collapses the document."""
        assert render_folded(tree, {ROOT}) == f"  {FOLD_PLACEHOLDER}\n"

    def test_folding_does_not_touch_tree(self, tree):
        """Test canonical text is unaffected by the fold set."""
        canonical = render_text(tree)
        render_folded(tree, {1, 4})
        assert render_text(tree) == canonical
        assert render_document(tree) == canonical

    def test_render_document_with_folds(self, tree):
        assert render_document(tree, folded={4}) == render_folded(tree, {4})
