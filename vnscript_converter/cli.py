"""Command-line interface for the script archive converter.

WHY: Users need a simple way to turn a script archive into a JSON dump
or a readable transcript from the terminal. The CLI wires together the
full pipeline: archive loading, block assembly and classification,
speaker reconciliation, formatter output, and file saving.

HOW: Uses argparse to accept an input archive, reference directories,
output format selection and an output base path. Progress messages go
to stdout; diagnostics (missing references, untranslated names, fatal
errors) go through logging to stderr. Every output is rendered in
memory first, then all files are written.

RULES:
- Positional argument: input archive path
- --reference-dir is repeatable; order is search priority
- --formats: comma-separated formatter keys (default: VNSCRIPT_FORMATS)
- Output naming: output base with its extension replaced per format
  (script.dat → script.json, script.md), overwriting existing files
- Unknown formats are rejected before the archive is read
- A fatal error exits with status 1 and writes no output files
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from vnscript_converter.config import (
    DEFAULT_FORMATS,
    LOG_LEVEL,
    load_reference_dirs,
    parse_formats,
)
from vnscript_converter.core.ir import Diagnostic
from vnscript_converter.core.pipeline import Extraction, extract
from vnscript_converter.formatters import FORMATTERS
from vnscript_converter.formatters.base import FormatterOutput

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a progress message to stdout.

    WHY: Progress and diagnostics go to separate streams so warnings can
    be captured or filtered independently.

    RULES:
    - All progress messages go to stdout
    - Always flush after writing
    """
    print(msg, file=sys.stdout, flush=True)


def _fail(msg: str) -> None:
    logger.error("Error: %s", msg)
    sys.exit(1)


def _report(diagnostics: List[Diagnostic]) -> None:
    """Present pipeline diagnostics: infos as progress, warnings as log records."""
    for diagnostic in diagnostics:
        if diagnostic.level == "info":
            _status("  {}".format(diagnostic.message))
        else:
            logger.warning("!!! %s", diagnostic.message)


def _validate_formats(format_keys: List[str]) -> None:
    for key in format_keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            _fail("Unsupported format '{}'. Available formats: {}".format(key, available))
    if not format_keys:
        _fail("No output format selected.")


def _render(extraction: Extraction, format_keys: List[str]) -> List[FormatterOutput]:
    """Run every selected formatter before anything touches the disk."""
    outputs: List[FormatterOutput] = []
    for key in format_keys:
        formatter = FORMATTERS[key]()
        _status("  Running {} formatter...".format(formatter.name))
        outputs.extend(formatter.format(extraction.blocks))
    return outputs


def _save_output(output: FormatterOutput, base: Path) -> Path:
    """Write one formatter output as a sibling of the output base path."""
    path = base.with_suffix(output.suffix)
    path.write_text(output.content, encoding="utf-8")
    return path


def _run_pipeline(args: argparse.Namespace) -> None:
    """Execute the full extraction pipeline for one archive.

    RULES:
    - Validate formats and input before any work
    - Reference dirs: explicit flags, else VNSCRIPT_REFERENCE_DIRS
    - Fatal pipeline errors (ValueError subclasses) exit 1 without output
    """
    format_keys = parse_formats(args.formats)
    _validate_formats(format_keys)

    input_path = Path(args.input_file).resolve()
    if not input_path.is_file():
        _fail("File not found: {}".format(input_path))

    if args.output:
        base = Path(args.output)
    else:
        base = input_path.with_suffix("")
    if not base.parent.is_dir():
        _fail("Output directory does not exist: {}".format(base.parent))

    reference_dirs = [Path(d) for d in args.reference_dir] if args.reference_dir else load_reference_dirs()

    _status("Reading {}...".format(input_path.name))
    data = input_path.read_bytes()

    try:
        _status("Extracting blocks...")
        extraction = extract(data, reference_dirs)
        _report(extraction.diagnostics)
        _status("  {} blocks".format(len(extraction.blocks)))
        for name in extraction.reference_dependencies:
            _status("  Reference dependency: {}".format(name))

        _status("Formatting output...")
        outputs = _render(extraction, format_keys)
    except ValueError as e:
        # Archive structure or reference mismatch: nothing has been written
        _fail(str(e))

    saved: List[Path] = []
    for output in outputs:
        path = _save_output(output, base)
        saved.append(path)
        _status("  Saved: {}".format(path))

    _status("")
    _status("Done! Saved {} file(s)".format(len(saved)))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    RULES:
    - Positional: input_file (required)
    - Optional: --reference-dir (repeatable), --formats, --output
    """
    parser = argparse.ArgumentParser(
        prog="vnscript_converter",
        description="Extract dialogue and tables from a script archive and "
                    "produce a JSON dump and/or readable transcripts.",
    )

    parser.add_argument(
        "input_file",
        help="Path to the script archive.",
    )

    parser.add_argument(
        "--reference-dir",
        action="append",
        default=None,
        help="Directory of reference transcripts (<block>.json). "
             "Can be specified multiple times; earlier directories win.",
    )

    parser.add_argument(
        "--formats",
        default=DEFAULT_FORMATS,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: %(default)s.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output",
        default=None,
        help="Output base path; each format replaces its extension "
             "(default: input path without extension).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    - An unknown VNSCRIPT_LOG_LEVEL exits 1 like any other fatal error
    """
    level = logging.getLevelName(LOG_LEVEL)
    logging.basicConfig(
        level=level if isinstance(level, int) else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )
    if not isinstance(level, int):
        _fail("Invalid log level '{}' in VNSCRIPT_LOG_LEVEL".format(LOG_LEVEL))
    parser = build_parser()
    args = parser.parse_args(argv)
    _run_pipeline(args)


if __name__ == "__main__":
    main()
