"""Shared test fixtures for the vnscript_converter test suite.

WHY: Most test modules need archive bytes, classified blocks, or
reference transcript files. Centralizing the builders here keeps each
test focused on the behavior it checks.

HOW: build_archive() encodes (name, id, items) tuples into the binary
archive layout. Fixtures provide a sample archive covering every block
shape, and a writer for reference transcript JSON files.

RULES:
- Sequence indices are written as six-digit strings ("000000")
- Block ids are encoded little-endian u32 right after the block name
- Reference files are written into tmp_path subdirectories
"""

import json
import struct
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest

from vnscript_converter.config import ascii_lower
from vnscript_converter.core.ir import (
    Block,
    DialogueLine,
    DialogueLines,
    TextList,
    TextMap,
)


def build_archive(
    blocks: Sequence[Tuple[str, int, Sequence[str]]],
    magic: int = 0x0A,
) -> bytes:
    """Encode blocks into archive bytes: magic, then name\\0 id items\\0..."""
    out = bytearray(struct.pack("<I", magic))
    for name, block_id, items in blocks:
        out += name.encode("utf-8") + b"\x00"
        out += struct.pack("<I", block_id)
        for item in items:
            out += item.encode("utf-8") + b"\x00"
    return bytes(out)


def dialogue_block(name: str, texts: Sequence[str], block_id: int = 1) -> Block:
    """A DialogueLines block with unset speakers."""
    lines = [DialogueLine(text=t, source_index=i) for i, t in enumerate(texts)]
    return Block(name=name, id=block_id, payload=DialogueLines(lines))


def selection_block(messages: Sequence[str]) -> Block:
    return Block(name="[selection]", id=0, payload=TextList(list(messages)))


def mapping_block(entries: Dict[str, str]) -> Block:
    return Block(name="[name2]", id=0, payload=TextMap(dict(entries)))


# ---------------------------------------------------------------------------
# Sample archive: a selection list, a name table, two scenes, a misc list
# ---------------------------------------------------------------------------

SAMPLE_BLOCKS: List[Tuple[str, int, List[str]]] = [
    ("[selection]", 100, ["Go left", "Go right"]),
    ("[name2]", 101, ["hero_raw", "Hero", "mage_raw", "Mage"]),
    ("_system", 102, ["Save", "Load", "Quit"]),
    ("ac_01", 200, ["000000", "Good morning.", "000001", "The sun rose.", "000002", "Let's go."]),
    ("AC2_02", 201, ["000000", "Who's there?"]),
]


@pytest.fixture
def sample_archive() -> bytes:
    """Archive bytes with every block shape."""
    return build_archive(SAMPLE_BLOCKS)


@pytest.fixture
def write_reference(tmp_path):
    """Return a writer: write_reference(dir_name, block_name, entries) -> Path.

    entries is a list of (name_or_None, message) tuples. A None name
    omits the "name" key entirely.
    """

    def _write(
        dir_name: str,
        block_name: str,
        entries: Sequence[Tuple[Optional[str], str]],
    ) -> Path:
        directory = tmp_path / dir_name
        directory.mkdir(exist_ok=True)
        records: List[Dict[str, Any]] = []
        for name, message in entries:
            record: Dict[str, Any] = {"message": message}
            if name is not None:
                record["name"] = name
            records.append(record)
        path = directory / (ascii_lower(block_name) + ".json")
        path.write_text(json.dumps(records, ensure_ascii=False), encoding="utf-8")
        return path

    return _write
