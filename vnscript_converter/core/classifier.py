"""Classify raw blocks into typed payloads.

WHY: A RawBlock is just a name and a list of untyped items. The shape
of its content (plain list, key/value table, or numbered dialogue) is
only visible from the item pattern and the block name.

HOW: Inspect the item kinds. All-text blocks become a TextList, except
the mapping block, whose items pair up into a TextMap. Anything with
sequence indices must be a strict alternation of (index, text) and
becomes DialogueLines.

RULES:
- All InlineText + MAPPING_BLOCK_NAME → TextMap (even count required)
- All InlineText otherwise → TextList, order preserved
- Mixed → consecutive (SequenceIndex, InlineText) pairs, no leftovers
- Dialogue speakers start unset (None)
- Each block is classified independently
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from vnscript_converter.config import MAPPING_BLOCK_NAME
from vnscript_converter.core.errors import ArchiveFormatError
from vnscript_converter.core.ir import (
    Block,
    DialogueLine,
    DialogueLines,
    InlineText,
    Item,
    Payload,
    RawBlock,
    SequenceIndex,
    TextList,
    TextMap,
)


def _pair_mapping(raw: RawBlock) -> TextMap:
    texts = [item.text for item in raw.items]  # all InlineText here
    if len(texts) % 2 != 0:
        raise ArchiveFormatError(
            "mapping block '{}' has an odd number of items ({})".format(raw.name, len(texts))
        )
    entries: Dict[str, str] = {}
    for i in range(0, len(texts), 2):
        entries[texts[i]] = texts[i + 1]
    return TextMap(entries)


def _pair_dialogue(raw: RawBlock) -> DialogueLines:
    if len(raw.items) % 2 != 0:
        raise ArchiveFormatError(
            "dialogue block '{}' has an unpaired trailing item ({} items)".format(
                raw.name, len(raw.items),
            )
        )

    lines: List[DialogueLine] = []
    for i in range(0, len(raw.items), 2):
        index, text = raw.items[i], raw.items[i + 1]
        if not (isinstance(index, SequenceIndex) and isinstance(text, InlineText)):
            raise ArchiveFormatError(
                "dialogue block '{}': items {} and {} are {!r}, {!r}; "
                "expected (index, text)".format(raw.name, i, i + 1, index, text)
            )
        lines.append(DialogueLine(text=text.text, source_index=index.value))
    return DialogueLines(lines)


def _all_text(items: List[Item]) -> bool:
    return all(isinstance(item, InlineText) for item in items)


def classify_block(raw: RawBlock) -> Block:
    """Convert a RawBlock into a Block with a typed payload.

    Raises:
        ArchiveFormatError: On an odd mapping block or a broken dialogue pair.
    """
    payload: Payload
    if _all_text(raw.items):
        if raw.name == MAPPING_BLOCK_NAME:
            payload = _pair_mapping(raw)
        else:
            payload = TextList([item.text for item in raw.items])
    else:
        payload = _pair_dialogue(raw)
    return Block(name=raw.name, id=raw.id, payload=payload)


def classify_blocks(raws: Iterable[RawBlock]) -> List[Block]:
    """Classify every raw block, preserving order."""
    return [classify_block(raw) for raw in raws]
