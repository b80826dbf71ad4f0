"""Sequential extraction pipeline: bytes in, reconciled blocks out.

WHY: The CLI and the tests both need the same ordered run of stages.
Keeping the order here means the CLI only deals with files, streams
and formatters.

HOW: assemble → classify → reconcile speakers → translate names. Each
stage runs to completion before the next begins. Diagnostics from the
two best-effort stages are concatenated in the order they happened.

RULES:
- Fatal errors propagate unchanged (ArchiveFormatError, ReferenceMismatchError)
- Reference directories are consulted in the given order
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from vnscript_converter.core.assembler import assemble_blocks
from vnscript_converter.core.classifier import classify_blocks
from vnscript_converter.core.ir import Block, DialogueLines, Diagnostic
from vnscript_converter.core.reconciler import reconcile_speakers
from vnscript_converter.core.translator import translate_speakers


@dataclass
class Extraction:
    """Result of a full extraction run.

    RULES:
    - blocks: classified blocks in archive order, speakers filled in
    - diagnostics: reconciler diagnostics followed by translator diagnostics
    """

    blocks: List[Block]
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def reference_dependencies(self) -> List[str]:
        """Names of dialogue blocks, i.e. blocks a reference file can serve."""
        return [
            block.name for block in self.blocks
            if isinstance(block.payload, DialogueLines)
        ]


def extract(data: bytes, reference_dirs: Sequence[Path] = ()) -> Extraction:
    """Run the full pipeline over an archive's bytes.

    Args:
        data: Complete archive contents, magic header included.
        reference_dirs: Directories holding reference transcripts, in priority order.

    Returns:
        Extraction with the final blocks and all recoverable diagnostics.
    """
    blocks = classify_blocks(assemble_blocks(data))
    diagnostics = reconcile_speakers(blocks, reference_dirs)
    diagnostics.extend(translate_speakers(blocks))
    return Extraction(blocks=blocks, diagnostics=diagnostics)
