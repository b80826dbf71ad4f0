"""Unit tests for block classification.

WHY: Classification decides whether a block is a table, a name map, or
dialogue. A wrong shape either drops dialogue from the transcript or
pairs unrelated strings into a bogus name table.

HOW: Tests build RawBlocks directly and check each shape rule and each
fatal pairing case.
"""

import pytest

from vnscript_converter.core.classifier import classify_block, classify_blocks
from vnscript_converter.core.errors import ArchiveFormatError
from vnscript_converter.core.ir import (
    DialogueLine,
    DialogueLines,
    InlineText,
    RawBlock,
    SequenceIndex,
    TextList,
    TextMap,
)

FOUR_TEXTS = [InlineText("a"), InlineText("b"), InlineText("c"), InlineText("d")]


class TestTextBlocks:
    """All-text blocks become TextList, or TextMap under the mapping name."""

    def test_text_list_preserves_order(self):
        block = classify_block(RawBlock("_misc", 5, list(FOUR_TEXTS)))
        assert block.payload == TextList(["a", "b", "c", "d"])
        assert block.name == "_misc"
        assert block.id == 5

    def test_mapping_block_pairs_items(self):
        block = classify_block(RawBlock("[name2]", 5, list(FOUR_TEXTS)))
        assert isinstance(block.payload, TextMap)
        assert block.payload.entries == {"a": "b", "c": "d"}

    def test_mapping_name_is_exact(self):
        """Case or spelling variants of the mapping name stay lists."""
        block = classify_block(RawBlock("[NAME2]", 5, list(FOUR_TEXTS)))
        assert isinstance(block.payload, TextList)

    def test_odd_mapping_block_is_fatal(self):
        with pytest.raises(ArchiveFormatError, match="odd number of items"):
            classify_block(RawBlock("[name2]", 5, FOUR_TEXTS[:3]))

    def test_empty_block_is_empty_list(self):
        assert classify_block(RawBlock("[empty]", 1, [])).payload == TextList([])


class TestDialogueBlocks:
    """Blocks with indices become strict (index, text) pairs."""

    def test_pairs_become_lines(self):
        raw = RawBlock("ac_01", 1, [
            SequenceIndex(0), InlineText("Hello"),
            SequenceIndex(1), InlineText("Bye"),
        ])
        payload = classify_block(raw).payload
        assert isinstance(payload, DialogueLines)
        assert payload.lines == [
            DialogueLine(text="Hello", source_index=0, speaker=None),
            DialogueLine(text="Bye", source_index=1, speaker=None),
        ]

    def test_any_block_name_with_indices_is_dialogue(self):
        raw = RawBlock("_sys", 1, [SequenceIndex(0), InlineText("x")])
        assert isinstance(classify_block(raw).payload, DialogueLines)

    def test_text_before_index_is_fatal(self):
        raw = RawBlock("ac_01", 1, [InlineText("Hello"), SequenceIndex(0)])
        with pytest.raises(ArchiveFormatError, match="expected \\(index, text\\)"):
            classify_block(raw)

    def test_two_texts_after_index_is_fatal(self):
        raw = RawBlock("ac_01", 1, [
            SequenceIndex(0), InlineText("a"), InlineText("b"), InlineText("c"),
        ])
        with pytest.raises(ArchiveFormatError):
            classify_block(raw)

    def test_unpaired_trailing_item_is_fatal(self):
        raw = RawBlock("ac_01", 1, [SequenceIndex(0), InlineText("a"), SequenceIndex(1)])
        with pytest.raises(ArchiveFormatError, match="unpaired"):
            classify_block(raw)


class TestClassifyBlocks:
    def test_order_preserved(self):
        raws = [RawBlock("_a", 1, []), RawBlock("_b", 2, []), RawBlock("_c", 3, [])]
        assert [b.name for b in classify_blocks(raws)] == ["_a", "_b", "_c"]
