"""Fatal error types raised by the core pipeline.

WHY: A malformed archive or a reference transcript that disagrees with
the archive means our reading of the stream is wrong. Continuing would
silently produce misattributed dialogue, so these abort the run.

RULES:
- Both types subclass ValueError so callers can catch them together
- Messages name the offending block or byte offset
"""

from __future__ import annotations


class ArchiveFormatError(ValueError):
    """Raised when the archive stream violates the block grammar.

    Covers a bad magic number, a missing separator, a truncated block id,
    an out-of-order sequence index, an item before the first block, an
    odd-length mapping block, a broken dialogue pair, or a reserved block
    with the wrong payload shape.
    """


class ReferenceMismatchError(ValueError):
    """Raised when a filtered reference transcript has the wrong length.

    WHY: Speakers are assigned by position only. If the filtered
    transcript and the dialogue block differ in length, every speaker
    after the first divergence would be wrong.

    RULES:
    - Always carries the block name, line count and reference count
    """

    def __init__(self, block_name: str, expected: int, actual: int, path: object = None) -> None:
        self.block_name = block_name
        self.expected = expected
        self.actual = actual
        self.path = path
        where = " ({})".format(path) if path is not None else ""
        super().__init__(
            "Reference transcript for block '{}'{} has {} entries after "
            "filtering, but the block has {} dialogue lines".format(
                block_name, where, actual, expected,
            )
        )
