"""Canonical name translation for reconciled speakers.

WHY: Reference transcripts spell speakers the way the game's raw data
does. The archive's mapping block pairs those raw names with the
display names players actually see.

HOW: Read the mapping block's TextMap, then rewrite every NamedSpeaker
whose name is a key. Names with no entry are left alone and reported
once each.

RULES:
- No mapping block → warning, speakers unchanged
- AnonymousSpeaker and unset (None) speakers are never touched
- Untranslated names are deduplicated, reported in first-seen order
- Applying the translation again is a no-op when keys and values are disjoint
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from vnscript_converter.config import MAPPING_BLOCK_NAME
from vnscript_converter.core.errors import ArchiveFormatError
from vnscript_converter.core.ir import Block, DialogueLines, Diagnostic, NamedSpeaker, TextMap
from vnscript_converter.core.reconciler import find_block


def load_name_mapping(blocks: Sequence[Block]) -> Optional[Dict[str, str]]:
    """Return the mapping block's entries, or None if there is none.

    Raises:
        ArchiveFormatError: If the mapping block is not a TextMap.
    """
    block = find_block(blocks, MAPPING_BLOCK_NAME)
    if block is None:
        return None
    if not isinstance(block.payload, TextMap):
        raise ArchiveFormatError(
            "mapping block '{}' is not a key/value table".format(block.name)
        )
    return dict(block.payload.entries)


def translate_speakers(blocks: Sequence[Block]) -> List[Diagnostic]:
    """Replace raw speaker names with their canonical names, in place.

    Returns:
        A "mapping-missing" warning, or one "untranslated-speaker"
        warning per distinct name missing from the mapping.
    """
    mapping = load_name_mapping(blocks)
    if mapping is None:
        return [Diagnostic(
            level="warning",
            code="mapping-missing",
            message="name mapping block '{}' not found; speakers left untranslated".format(
                MAPPING_BLOCK_NAME,
            ),
        )]

    # dict keeps first-seen order
    untranslated: Dict[str, None] = {}
    for block in blocks:
        if not isinstance(block.payload, DialogueLines):
            continue
        for line in block.payload.lines:
            if not isinstance(line.speaker, NamedSpeaker):
                continue
            translated = mapping.get(line.speaker.name)
            if translated is None:
                untranslated.setdefault(line.speaker.name)
            else:
                line.speaker = NamedSpeaker(translated)

    return [
        Diagnostic(
            level="warning",
            code="untranslated-speaker",
            message="unable to translate character '{}'".format(name),
        )
        for name in untranslated
    ]
