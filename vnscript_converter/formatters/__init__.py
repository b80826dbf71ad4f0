"""Output formatter registry: pluggable format hub.

WHY: The CLI needs a single lookup to find the right formatter for each
--formats selector. A central dict makes it trivial to add new formats:
create the formatter class, import it here, add one line.

HOW: FORMATTERS maps selector keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["json"]()``.

RULES:
- Keys are the selectors accepted by --formats and double as file extensions
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from vnscript_converter.formatters.json_dump import JsonDumpFormatter
from vnscript_converter.formatters.transcript import (
    MarkdownTranscriptFormatter,
    PlainTextTranscriptFormatter,
)

if TYPE_CHECKING:
    from vnscript_converter.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "json": JsonDumpFormatter,
    "md": MarkdownTranscriptFormatter,
    "txt": PlainTextTranscriptFormatter,
}
