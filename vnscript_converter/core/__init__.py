"""Core archive parsing, classification and speaker reconciliation.

WHY: The core package holds the algorithmic heart of the converter:
rebuilding typed blocks from the untyped archive stream and attaching
speaker identities to dialogue lines. Formatters and the CLI only
consume its output.

HOW: ir.py defines the data structures, tokenizer.py and assembler.py
build raw blocks from bytes, classifier.py types them, reconciler.py
and translator.py fill in speakers, pipeline.py runs the stages in
order.

RULES:
- IR dataclasses are the contract; change with care
- Core modules never print; recoverable problems come back as Diagnostics
- Fatal structure errors raise ArchiveFormatError / ReferenceMismatchError
"""
