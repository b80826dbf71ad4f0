"""Speaker reconciliation against external reference transcripts.

WHY: Dialogue lines in the archive have no speaker. Reference
transcripts have speakers but also contain choice-menu messages that
never appear in the archive's dialogue blocks. Those messages are
listed in the archive's selection block; once they are filtered out,
the reference lines up one-to-one with the block's dialogue.

HOW: Build the exclusion set from the selection block. For every story
block with DialogueLines, find its reference transcript, drop excluded
messages, check the lengths match, then copy speakers across by
position. Dialogue lines are updated in place.

RULES:
- No selection block → warning, every speaker stays unset
- Only story blocks (ac_ / ac2_ prefix) with DialogueLines are touched
- Filtered reference length must equal the line count, otherwise fatal
- Entry without a name → AnonymousSpeaker; with a name → NamedSpeaker
- Matching is by position only; message text is not compared
- No usable reference file → that block's speakers stay unset
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import FrozenSet, List, Optional, Sequence

from vnscript_converter.config import SELECTION_BLOCK_NAME
from vnscript_converter.core.assembler import is_story_block
from vnscript_converter.core.errors import ArchiveFormatError, ReferenceMismatchError
from vnscript_converter.core.ir import (
    AnonymousSpeaker,
    Block,
    DialogueLines,
    Diagnostic,
    NamedSpeaker,
    SpeakerIdentity,
    TextList,
)
from vnscript_converter.core.reference import ReferenceEntry, find_reference

logger = logging.getLogger(__name__)


def find_block(blocks: Sequence[Block], name: str) -> Optional[Block]:
    """Return the first block with the given name, or None."""
    for block in blocks:
        if block.name == name:
            return block
    return None


def load_exclusion_set(blocks: Sequence[Block]) -> Optional[FrozenSet[str]]:
    """Build the set of selection messages to filter out of references.

    Returns:
        The messages of the selection block, or None if there is none.

    Raises:
        ArchiveFormatError: If the selection block is not a TextList.
    """
    block = find_block(blocks, SELECTION_BLOCK_NAME)
    if block is None:
        return None
    if not isinstance(block.payload, TextList):
        raise ArchiveFormatError(
            "selection block '{}' is not a text list".format(block.name)
        )
    return frozenset(block.payload.items)


def filter_reference(
    entries: Sequence[ReferenceEntry],
    exclusions: FrozenSet[str],
) -> List[ReferenceEntry]:
    """Drop entries whose message exactly matches an excluded message."""
    return [entry for entry in entries if entry.message not in exclusions]


def speaker_from_entry(entry: ReferenceEntry) -> SpeakerIdentity:
    if entry.speaker_name is None:
        return AnonymousSpeaker()
    return NamedSpeaker(entry.speaker_name)


def assign_speakers(
    block: Block,
    entries: Sequence[ReferenceEntry],
    path: Optional[Path] = None,
) -> None:
    """Copy speakers from filtered reference entries onto a dialogue block.

    Raises:
        ReferenceMismatchError: If the entry count differs from the line count.
    """
    if not isinstance(block.payload, DialogueLines):
        raise ArchiveFormatError("block '{}' has no dialogue lines".format(block.name))
    lines = block.payload.lines
    if len(entries) != len(lines):
        raise ReferenceMismatchError(block.name, len(lines), len(entries), path)

    for line, entry in zip(lines, entries):
        line.speaker = speaker_from_entry(entry)


def reconcile_speakers(
    blocks: Sequence[Block],
    reference_dirs: Sequence[Path],
) -> List[Diagnostic]:
    """Fill in dialogue speakers from reference transcripts.

    Args:
        blocks: Classified blocks; dialogue lines are updated in place.
        reference_dirs: Directories to search for reference files, in order.

    Returns:
        Diagnostics: warnings for a missing selection block or unusable
        reference files, and one "reference-used" info per matched block.

    Raises:
        ArchiveFormatError: If the selection block has the wrong shape.
        ReferenceMismatchError: If a filtered reference has the wrong length.
    """
    exclusions = load_exclusion_set(blocks)
    if exclusions is None:
        return [Diagnostic(
            level="warning",
            code="selection-missing",
            message="selection block '{}' not found; speakers left unset".format(
                SELECTION_BLOCK_NAME,
            ),
        )]

    diagnostics: List[Diagnostic] = []
    for block in blocks:
        if not is_story_block(block.name) or not isinstance(block.payload, DialogueLines):
            continue

        entries, path, attempts = find_reference(block.name, reference_dirs)
        diagnostics.extend(attempts)
        if entries is None:
            logger.debug("No reference for block %s; speakers left unset", block.name)
            continue

        assign_speakers(block, filter_reference(entries, exclusions), path)
        diagnostics.append(Diagnostic(
            level="info",
            code="reference-used",
            message="used reference file '{}'".format(path),
            block=block.name,
            path=path,
        ))

    return diagnostics
