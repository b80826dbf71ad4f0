"""Configuration constants, reserved block names, and .env loading.

WHY: Centralizes the archive format's magic values and naming
conventions so they are easy to find and update. The block grammar has
no type tags; everything hinges on these names and prefixes, so they
are plain data rather than buried in parsing logic.

HOW: python-dotenv loads the .env file on import. Constants are
module-level values. Environment variables provide CLI defaults for
reference directories, output formats, and log level.

RULES:
- ACCEPTED_MAGIC_NUMBERS lists the only archive versions we can parse
- Story block prefixes are compared ASCII case-insensitively
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os
import string
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Archive format
# ---------------------------------------------------------------------------

ACCEPTED_MAGIC_NUMBERS: frozenset[int] = frozenset({0x0A, 0x0E})
"""Little-endian u32 values accepted as the archive header."""

MAGIC_SIZE = 4
BLOCK_ID_SIZE = 4
SEPARATOR = 0x00

SEQUENCE_INDEX_DIGITS = 6
"""Dialogue position markers are exactly this many ASCII digits."""

BLOCK_START_PREFIXES: tuple[str, ...] = ("[", "_")
STORY_BLOCK_PREFIXES: tuple[str, ...] = ("ac_", "ac2_")

# ---------------------------------------------------------------------------
# Reserved block names
# ---------------------------------------------------------------------------

SELECTION_BLOCK_NAME = "[selection]"
"""Block listing choice-menu messages absent from the dialogue stream."""

MAPPING_BLOCK_NAME = "[name2]"
"""Block pairing raw character names with their canonical display names."""

REFERENCE_FILE_EXTENSION = ".json"

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

# ---------------------------------------------------------------------------
# Environment defaults
# ---------------------------------------------------------------------------

DEFAULT_FORMATS = os.getenv("VNSCRIPT_FORMATS", "json")
LOG_LEVEL = os.getenv("VNSCRIPT_LOG_LEVEL", "INFO").upper()


def ascii_lower(name: str) -> str:
    """Lowercase ASCII letters only; other characters keep their case."""
    return name.translate(_ASCII_LOWER)


def parse_formats(value: str) -> list[str]:
    """Split a comma-separated format selector string.

    RULES:
    - Whitespace around each selector is stripped
    - Empty entries are dropped ("json,,md" -> ["json", "md"])
    """
    return [part.strip() for part in value.split(",") if part.strip()]


def load_reference_dirs() -> list[Path]:
    """Load default reference directories from VNSCRIPT_REFERENCE_DIRS.

    WHY: Reference transcripts usually live in the same place for every
    run; an environment default saves repeating --reference-dir.

    HOW: Split the variable on os.pathsep, preserving order.

    RULES:
    - Returns an empty list when the variable is unset or blank
    - Order is significant: earlier directories win
    """
    raw = os.getenv("VNSCRIPT_REFERENCE_DIRS", "").strip()
    if not raw:
        return []
    return [Path(part) for part in raw.split(os.pathsep) if part.strip()]
