"""Reference transcript model and discovery.

WHY: The archive's dialogue lines carry no speaker. Fan-made or dumped
reference transcripts (one JSON file per scene) do. This module finds
the transcript for a scene across several directories and parses it
into typed entries.

HOW: ReferenceEntry is a pydantic model, so a transcript with missing
fields or wrong types fails validation instead of producing half-read
data. find_reference() tries each directory in order and returns the
first file that both reads and parses, collecting a Diagnostic for
every attempt that fails.

RULES:
- File name: <block name, ASCII letters lowercased>.json
- JSON layout: a list of {"name": str | null, "message": str}
- Only the "name" key sets the speaker; unknown keys are ignored
- "name" is optional; a missing or null name means an anonymous line
- The first readable and valid file wins; later directories are skipped
- Failed attempts never raise; they come back as warning Diagnostics
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from vnscript_converter.config import REFERENCE_FILE_EXTENSION, ascii_lower
from vnscript_converter.core.ir import Diagnostic

logger = logging.getLogger(__name__)


class ReferenceEntry(BaseModel):
    """One line of a reference transcript."""

    speaker_name: Optional[str] = Field(
        default=None,
        alias="name",
        description="Speaker name as written in the reference; absent for narration.",
    )
    message: str = Field(description="The line's message text.")


_TRANSCRIPT_ADAPTER = TypeAdapter(List[ReferenceEntry])


def parse_reference(content: bytes) -> List[ReferenceEntry]:
    """Parse reference transcript JSON into entries.

    Raises:
        pydantic.ValidationError: If the JSON is malformed or mis-shaped.
    """
    return _TRANSCRIPT_ADAPTER.validate_json(content)


def reference_filename(block_name: str) -> str:
    """Return the reference file name for a block, e.g. 'ac_01.json'."""
    return ascii_lower(block_name) + REFERENCE_FILE_EXTENSION


def find_reference(
    block_name: str,
    reference_dirs: Sequence[Path],
) -> Tuple[Optional[List[ReferenceEntry]], Optional[Path], List[Diagnostic]]:
    """Locate and parse the reference transcript for one block.

    Args:
        block_name: Name of the story block, case as in the archive.
        reference_dirs: Directories to search, in priority order.

    Returns:
        (entries, path, diagnostics). entries and path are None when no
        directory yielded a usable file; diagnostics lists each failed
        attempt.
    """
    diagnostics: List[Diagnostic] = []
    filename = reference_filename(block_name)

    for directory in reference_dirs:
        path = Path(directory) / filename
        try:
            content = path.read_bytes()
        except OSError as exc:
            diagnostics.append(Diagnostic(
                level="warning",
                code="reference-unreadable",
                message="failed to read reference file '{}': {}".format(path, exc),
                block=block_name,
                path=path,
            ))
            continue

        try:
            entries = parse_reference(content)
        except ValidationError as exc:
            diagnostics.append(Diagnostic(
                level="warning",
                code="reference-invalid",
                message="failed to parse reference file '{}': {} error(s)".format(
                    path, exc.error_count(),
                ),
                block=block_name,
                path=path,
            ))
            continue

        logger.debug("Loaded %d reference entries from %s", len(entries), path)
        return entries, path, diagnostics

    return None, None, diagnostics
