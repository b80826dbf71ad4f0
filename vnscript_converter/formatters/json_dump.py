"""Structured JSON dump of every block.

WHY: Translation tools and scripts want the whole archive, tables
included, in a machine-readable form. The dump keeps each block's name
and payload shape but hides internal bookkeeping (block ids, sequence
indices).

HOW: Each block becomes {"name", "type", "data"} where type is "List",
"Map" or "Scripts". Speaker identities are encoded here: anonymous →
"", named → the name, unset → no "speaker" key. The output is validated
with jsonschema against block_dump_schema.json before returning.

RULES:
- Block order and line order are preserved
- Block.id and DialogueLine.source_index are never written
- Anonymous speaker serializes as the empty string
- Unset speaker omits the "speaker" key entirely
- Output is pretty-printed (2-space indent), UTF-8, non-ASCII kept as is
- Validate output against the schema before returning; raise on failure
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import jsonschema

from vnscript_converter.core.ir import (
    AnonymousSpeaker,
    Block,
    DialogueLine,
    DialogueLines,
    NamedSpeaker,
    TextList,
    TextMap,
)
from vnscript_converter.formatters.base import BaseFormatter, FormatterOutput

_SCHEMA_PATH = Path(__file__).resolve().parent / "block_dump_schema.json"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def _get_schema() -> Dict[str, Any]:
    """Load the dump schema once and cache it at module level."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _line_to_dict(line: DialogueLine) -> Dict[str, str]:
    record: Dict[str, str] = {}
    if isinstance(line.speaker, AnonymousSpeaker):
        record["speaker"] = ""
    elif isinstance(line.speaker, NamedSpeaker):
        record["speaker"] = line.speaker.name
    record["text"] = line.text
    return record


def block_to_dict(block: Block) -> Dict[str, Any]:
    """Convert one Block to its dump record."""
    payload = block.payload
    data: Any
    if isinstance(payload, TextList):
        kind = "List"
        data = list(payload.items)
    elif isinstance(payload, TextMap):
        kind = "Map"
        data = dict(payload.entries)
    elif isinstance(payload, DialogueLines):
        kind = "Scripts"
        data = [_line_to_dict(line) for line in payload.lines]
    else:
        raise TypeError("unknown payload type: {!r}".format(type(payload)))
    return {"name": block.name, "type": kind, "data": data}


class JsonDumpFormatter(BaseFormatter):
    """Formatter that dumps all blocks as schema-validated JSON."""

    @property
    def name(self) -> str:
        return "JSON dump"

    def format(self, blocks: Sequence[Block]) -> List[FormatterOutput]:
        """Serialize all blocks.

        Raises:
            jsonschema.ValidationError: If the dump does not match the schema.
        """
        records = [block_to_dict(block) for block in blocks]
        jsonschema.validate(instance=records, schema=_get_schema())
        return [
            FormatterOutput(
                suffix=".json",
                content=json.dumps(records, indent=2, ensure_ascii=False),
                media_type="application/json",
            )
        ]
