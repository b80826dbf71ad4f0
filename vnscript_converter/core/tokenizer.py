"""Zero-byte separated token stream over the archive buffer.

WHY: The archive body is a run of NUL-terminated UTF-8 strings, with
the occasional raw 4-byte block id wedged between them. The assembler
needs to pull strings one at a time and, after a block name, pull the
raw id bytes before string reading resumes.

HOW: TokenStream keeps a byte offset into an immutable buffer. Each
next() decodes the longest valid UTF-8 prefix of the bytes up to the
next zero byte, checks that a zero byte follows it, and steps past the
separator. read_u32() consumes four raw little-endian bytes.

RULES:
- Decoding never raises: invalid bytes end the token early
- The byte right after the token must be 0x00, otherwise the run aborts
- The stream is lazy, finite and non-restartable
- Iteration stops when the offset reaches the end of the buffer
"""

from __future__ import annotations

import struct

from vnscript_converter.config import BLOCK_ID_SIZE, SEPARATOR
from vnscript_converter.core.errors import ArchiveFormatError

_U32_LE = struct.Struct("<I")


def decode_prefix(chunk: bytes) -> str:
    """Decode the longest valid UTF-8 prefix of chunk.

    WHY: Some archives contain stray non-UTF-8 bytes. Rather than
    failing in the decoder, we keep what decodes and let the separator
    check decide whether the stream is still well-formed.

    HOW: Try a strict decode; on failure, decode only the bytes before
    the error position (which are valid by definition).
    """
    try:
        return chunk.decode("utf-8")
    except UnicodeDecodeError as exc:
        return chunk[:exc.start].decode("utf-8")


class TokenStream:
    """Iterator over NUL-terminated text tokens in an archive buffer.

    Args:
        data: The complete archive contents.
        offset: Byte offset where tokens start (after the magic header).
    """

    def __init__(self, data: bytes, offset: int = 0) -> None:
        self._data = data
        self._pos = offset

    @property
    def position(self) -> int:
        """Current byte offset into the buffer."""
        return self._pos

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def __iter__(self) -> TokenStream:
        return self

    def __next__(self) -> str:
        if self.at_end:
            raise StopIteration

        end = self._data.find(SEPARATOR, self._pos)
        if end == -1:
            end = len(self._data)
        token = decode_prefix(self._data[self._pos:end])

        separator_pos = self._pos + len(token.encode("utf-8"))
        if separator_pos >= len(self._data) or self._data[separator_pos] != SEPARATOR:
            raise ArchiveFormatError(
                "expected separator at offset {} after token {!r}".format(separator_pos, token)
            )

        self._pos = separator_pos + 1
        return token

    def read_u32(self) -> int:
        """Consume four raw bytes as a little-endian unsigned 32-bit int.

        Raises:
            ArchiveFormatError: If fewer than four bytes remain.
        """
        if self._pos + BLOCK_ID_SIZE > len(self._data):
            raise ArchiveFormatError(
                "truncated block id at offset {}: {} byte(s) left".format(
                    self._pos, len(self._data) - self._pos,
                )
            )
        (value,) = _U32_LE.unpack_from(self._data, self._pos)
        self._pos += BLOCK_ID_SIZE
        return value
