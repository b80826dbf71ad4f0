"""Readable dialogue transcript formatter (Markdown / plain text).

WHY: Proofreaders want to read the scenes, not the tables. This
formatter flattens only the dialogue blocks into a simple transcript:
one heading per scene, then each line with its speaker above it.

HOW: Skip every block that is not DialogueLines. For each dialogue
block write "# <name>" and a blank line, then for every line the named
speaker on its own line (when there is one), the text, and a blank
line.

RULES:
- TextList and TextMap blocks are skipped entirely
- Anonymous and unset speakers produce no name line
- Markdown and plain text share the same layout; only the suffix differs
"""

from __future__ import annotations

from typing import List, Sequence

from vnscript_converter.core.ir import Block, DialogueLines, NamedSpeaker
from vnscript_converter.formatters.base import BaseFormatter, FormatterOutput


def render_transcript(blocks: Sequence[Block]) -> str:
    """Flatten dialogue blocks into the readable transcript text."""
    parts: List[str] = []
    for block in blocks:
        if not isinstance(block.payload, DialogueLines):
            continue

        parts.append("# {}\n\n".format(block.name))
        for line in block.payload.lines:
            if isinstance(line.speaker, NamedSpeaker):
                parts.append(line.speaker.name)
                parts.append("\n")
            parts.append(line.text)
            parts.append("\n\n")
    return "".join(parts)


class MarkdownTranscriptFormatter(BaseFormatter):
    """Dialogue-only transcript with Markdown headings."""

    suffix = ".md"
    media_type = "text/markdown"

    @property
    def name(self) -> str:
        return "Markdown transcript"

    def format(self, blocks: Sequence[Block]) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                suffix=self.suffix,
                content=render_transcript(blocks),
                media_type=self.media_type,
            )
        ]


class PlainTextTranscriptFormatter(MarkdownTranscriptFormatter):
    """Same transcript as Markdown, saved as .txt."""

    suffix = ".txt"
    media_type = "text/plain"

    @property
    def name(self) -> str:
        return "Plain text transcript"
