"""Abstract base formatter and output container.

WHY: Every output format consumes the same list of classified blocks
but produces different file content. This base class enforces a
consistent interface so the CLI can work with any formatter generically.

HOW: BaseFormatter is an ABC with two requirements: a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list; current formatters return one item
- ``suffix`` is a file extension with its dot, e.g. ``".json"``
- The caller is responsible for prepending the output base path
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence

from vnscript_converter.core.ir import Block


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: Extension appended to the output base path,
                e.g. ``".md"`` → ``"script.md"``.
        content: The file content as text.
        media_type: MIME type for the content, e.g. ``"application/json"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Markdown transcript'."""

    @abstractmethod
    def format(self, blocks: Sequence[Block]) -> List[FormatterOutput]:
        """Convert classified blocks into one or more output files.

        Args:
            blocks: Reconciled blocks in archive order.

        Returns:
            List of FormatterOutput objects.
        """
