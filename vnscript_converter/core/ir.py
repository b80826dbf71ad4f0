"""Intermediate representation dataclasses for archive blocks.

WHY: The archive is a flat token stream with no type tags. Downstream
stages (speaker reconciliation, name translation, formatters) need
named blocks with a typed payload. The IR provides that single,
well-typed form and decouples parsing from formatting.

HOW: Dataclasses form a small hierarchy:
  SequenceIndex / InlineText: the two untyped item kinds seen while assembling
  RawBlock: name, id and items straight from the stream
  TextList / TextMap / DialogueLines: the three payload shapes
  DialogueLine: one spoken line with optional speaker
  AnonymousSpeaker / NamedSpeaker: the speaker identity variants
  Block: the classified, externally visible record
  Diagnostic: a recoverable problem reported by a pipeline stage

RULES:
- Block order and item order from the stream are preserved end to end
- Block.id is set once at assembly and never written by a formatter
- DialogueLine.speaker is None until a reference transcript supplies it
- AnonymousSpeaker is a known "no name" speaker, distinct from None (unknown)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union


@dataclass(frozen=True)
class SequenceIndex:
    """A six-digit dialogue position marker, already parsed to int."""

    value: int


@dataclass(frozen=True)
class InlineText:
    """Any item token that is not a sequence index."""

    text: str


Item = Union[SequenceIndex, InlineText]


@dataclass
class RawBlock:
    """A block as read from the stream, before classification.

    RULES:
    - name: the block-start token text
    - id: little-endian u32 that followed the name in the stream
    - items: in stream order; indices are contiguous from 0
    """

    name: str
    id: int
    items: List[Item] = field(default_factory=list)


@dataclass(frozen=True)
class AnonymousSpeaker:
    """The reference transcript names no speaker (narration, monologue)."""


@dataclass(frozen=True)
class NamedSpeaker:
    """A speaker with a name, raw or translated through the mapping block."""

    name: str


SpeakerIdentity = Union[AnonymousSpeaker, NamedSpeaker]


@dataclass
class DialogueLine:
    """One dialogue line from a story block.

    RULES:
    - text: the inline text that followed the sequence index
    - source_index: the sequence index value (internal, never rendered)
    - speaker: None until reconciled; AnonymousSpeaker or NamedSpeaker after
    """

    text: str
    source_index: Optional[int] = None
    speaker: Optional[SpeakerIdentity] = None


@dataclass
class TextList:
    """An all-text block kept as an ordered list."""

    items: List[str] = field(default_factory=list)


@dataclass
class TextMap:
    """An all-text block whose items pair up as key/value."""

    entries: Dict[str, str] = field(default_factory=dict)


@dataclass
class DialogueLines:
    """A block of (index, text) pairs."""

    lines: List[DialogueLine] = field(default_factory=list)


Payload = Union[TextList, TextMap, DialogueLines]


@dataclass
class Block:
    """A classified archive block.

    WHY: This is what the reconciler, translator and formatters work on.

    RULES:
    - name: original block name, case preserved
    - id: archive block id, kept for bookkeeping only
    - payload: exactly one of TextList, TextMap, DialogueLines
    """

    name: str
    id: int
    payload: Payload


@dataclass
class Diagnostic:
    """A recoverable problem (or notable event) reported by a stage.

    WHY: Reconciliation and translation continue on partial failure.
    Instead of printing, they return these records and let the caller
    decide where and how to present them.

    RULES:
    - level: "info" for progress events, "warning" for degraded data
    - code: stable kebab-case identifier, e.g. "reference-unreadable"
    - block / path: set when the diagnostic concerns one block or file
    """

    level: str
    code: str
    message: str
    block: Optional[str] = None
    path: Optional[Path] = None
