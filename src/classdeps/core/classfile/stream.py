from __future__ import annotations

"""
Sequential Class File Stream.

Wraps a binary file object and exposes the big-endian primitives of the class
file format. Reads are strictly forward: skipping consumes bytes instead of
seeking, so the decoder works on any readable stream, pipes included.
"""

import re
from typing import BinaryIO

from classdeps.domain.errors import MalformedClassFileError

_SURROGATE_PAIR = re.compile("[\ud800-\udbff][\udc00-\udfff]")


class ClassFileStream:
    """Forward-only reader of unsigned big-endian values."""

    def __init__(self, source: BinaryIO) -> None:
        self._source = source
        self.position = 0

    def read(self, size: int) -> bytes:
        """
        Consume exactly ``size`` bytes.

        Raises:
            MalformedClassFileError: If the stream ends early.
        """
        data = self._source.read(size) if size else b""
        if len(data) != size:
            raise MalformedClassFileError(
                f"Unexpected end of stream at byte {self.position}: "
                f"expected {size} bytes, got {len(data)}."
            )
        self.position += size
        return data

    def skip(self, size: int) -> None:
        self.read(size)

    def u1(self) -> int:
        return self.read(1)[0]

    def u2(self) -> int:
        return int.from_bytes(self.read(2), "big")

    def u4(self) -> int:
        return int.from_bytes(self.read(4), "big")

    def utf8(self) -> str:
        """Read a length-prefixed modified UTF-8 string."""
        length = self.u2()
        return decode_modified_utf8(self.read(length))


def decode_modified_utf8(raw: bytes) -> str:
    """
    Decode the JVM's modified UTF-8 encoding.

    NUL is stored as the two-byte sequence ``C0 80`` and supplementary
    characters as two encoded UTF-16 surrogates. Adjacent high/low surrogates
    are joined into one code point; an unpaired surrogate is kept as is, since
    a string literal may legally hold one.

    Raises:
        MalformedClassFileError: If the bytes are not valid modified UTF-8.
    """
    try:
        text = raw.replace(b"\xc0\x80", b"\x00").decode("utf-8", errors="surrogatepass")
    except UnicodeDecodeError as e:
        raise MalformedClassFileError(f"Invalid UTF8 constant: {e}") from e
    return _SURROGATE_PAIR.sub(_join_surrogates, text)


def _join_surrogates(match: re.Match) -> str:
    high, low = match.group()
    return chr(0x10000 + ((ord(high) - 0xD800) << 10) + (ord(low) - 0xDC00))
