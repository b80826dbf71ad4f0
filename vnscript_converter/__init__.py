"""Visual-novel script archive converter: dialogue and table extraction.

WHY: The engine's script archive is a flat stream of NUL-terminated
strings with no type tags. Translators and editors need the dialogue
grouped per scene, with speaker names, and the lookup tables as real
lists and maps. This package rebuilds that structure and converts it
to a structured JSON dump or a readable transcript.

HOW: Four-stage pipeline: tokenize + assemble (core.tokenizer,
core.assembler), classify (core.classifier), reconcile speakers from
reference transcripts (core.reconciler, core.translator), then format
(pluggable formatters).

RULES:
- All formatters consume the same list of Block objects
- Adding a new output format = one new formatter module, no core changes
- Malformed archive structure is fatal; missing reference data is not
"""

__version__ = "0.1.0"
