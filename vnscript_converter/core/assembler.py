"""Block assembly: group archive tokens into named raw blocks.

WHY: The token stream has no type tags. Which tokens open a block,
which tokens are dialogue position markers, and where the raw block id
bytes sit must all be inferred from naming conventions. This module is
the bridge between the flat token stream and RawBlock records.

HOW: After validating and skipping the 4-byte magic header, walk the
TokenStream once. A block-start token opens a new RawBlock and is
followed by a raw u32 id. Every other token is an item of the open
block: a six-digit token is a SequenceIndex, anything else InlineText.
A running expected-index counter (local state, reset per block) checks
that indices are contiguous from 0.

RULES:
- Block start: name starts with "[" or "_", or is a story block
- Story block: ASCII case-insensitive prefix "ac_" or "ac2_"
- Sequence index: exactly 6 ASCII digits, value == expected counter
- An item before the first block is fatal
- Magic must be 0x0A or 0x0E (little-endian u32)
"""

from __future__ import annotations

import logging
import re
import struct
from typing import List, Optional

from vnscript_converter.config import (
    ACCEPTED_MAGIC_NUMBERS,
    BLOCK_START_PREFIXES,
    MAGIC_SIZE,
    SEQUENCE_INDEX_DIGITS,
    STORY_BLOCK_PREFIXES,
    ascii_lower,
)
from vnscript_converter.core.errors import ArchiveFormatError
from vnscript_converter.core.ir import InlineText, Item, RawBlock, SequenceIndex
from vnscript_converter.core.tokenizer import TokenStream

logger = logging.getLogger(__name__)

# Exactly SEQUENCE_INDEX_DIGITS ASCII digits; str.isdigit() would also
# accept full-width and other Unicode digits.
_SEQUENCE_INDEX_RE = re.compile(r"[0-9]{%d}" % SEQUENCE_INDEX_DIGITS)


def is_story_block(name: str) -> bool:
    """Return True for scene blocks that carry reconcilable dialogue."""
    return ascii_lower(name).startswith(STORY_BLOCK_PREFIXES)


def is_block_start(token: str) -> bool:
    """Return True if token names a new block rather than an item."""
    return token.startswith(BLOCK_START_PREFIXES) or is_story_block(token)


def is_sequence_index(token: str) -> bool:
    """Return True if token is a six-digit dialogue position marker."""
    return _SEQUENCE_INDEX_RE.fullmatch(token) is not None


def validate_magic(data: bytes) -> int:
    """Read and check the archive's leading magic number.

    Returns:
        The magic value (0x0A or 0x0E).

    Raises:
        ArchiveFormatError: If the buffer is too short or the value is unknown.
    """
    if len(data) < MAGIC_SIZE:
        raise ArchiveFormatError(
            "archive too short for magic header ({} bytes)".format(len(data))
        )
    (magic,) = struct.unpack_from("<I", data, 0)
    if magic not in ACCEPTED_MAGIC_NUMBERS:
        raise ArchiveFormatError("unknown magic {:#x}".format(magic))
    return magic


def _parse_item(token: str, expected_index: int, block: RawBlock) -> Item:
    """Turn an item token into a SequenceIndex or InlineText.

    Raises:
        ArchiveFormatError: If an index token is not the expected value.
    """
    if not is_sequence_index(token):
        return InlineText(token)

    index = int(token)
    if index != expected_index:
        raise ArchiveFormatError(
            "block '{}': sequence index {} out of order, expected {}".format(
                block.name, index, expected_index,
            )
        )
    return SequenceIndex(index)


def assemble_blocks(data: bytes) -> List[RawBlock]:
    """Assemble the archive's token stream into raw blocks.

    Args:
        data: The complete archive file contents, magic header included.

    Returns:
        RawBlock objects in stream order.

    Raises:
        ArchiveFormatError: On any violation of the block grammar.
    """
    magic = validate_magic(data)
    logger.debug("Archive magic %#x, %d bytes", magic, len(data))

    stream = TokenStream(data, offset=MAGIC_SIZE)
    blocks: List[RawBlock] = []
    current: Optional[RawBlock] = None
    expected_index = 0

    for token in stream:
        if is_block_start(token):
            current = RawBlock(name=token, id=stream.read_u32())
            blocks.append(current)
            expected_index = 0
            continue

        if current is None:
            raise ArchiveFormatError(
                "item {!r} at offset {} appears before any block".format(
                    token, stream.position,
                )
            )

        item = _parse_item(token, expected_index, current)
        if isinstance(item, SequenceIndex):
            expected_index += 1
        current.items.append(item)

    logger.debug("Assembled %d raw blocks", len(blocks))
    return blocks
