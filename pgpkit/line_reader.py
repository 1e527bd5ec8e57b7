"""A reader that skips line breaks while remembering where they were."""

from __future__ import annotations

import io
from typing import BinaryIO

_LINE_BREAKS = frozenset(b"\r\n")


class LineReader:
    """Reads bytes from a seekable binary stream, dropping ``\\r`` and ``\\n``.

    The positions of the line breaks seen so far are kept so that relative
    seeks can be expressed in terms of the visible (break-free) data.
    """

    def __init__(self, inner: BinaryIO) -> None:
        self._inner = inner
        self._lines: list[int] = []
        self._last_stored_pos = 0

    @property
    def lines(self) -> list[int]:
        """Positions in the underlying stream at which line breaks were found."""
        return list(self._lines)

    def into_inner(self) -> BinaryIO:
        """Return the wrapped stream."""
        return self._inner

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` raw bytes and return them without line breaks.

        If a chunk consists only of line breaks, more is read until something
        else is found or the stream ends. An empty result means end of stream.
        """
        if size == 0:
            return b""
        while True:
            start = self._inner.tell()
            chunk = self._inner.read(size)
            if not chunk:
                return b""
            kept = bytearray()
            for index, byte in enumerate(chunk):
                if byte in _LINE_BREAKS:
                    position = start + index
                    # Only record breaks beyond what was already seen, as the
                    # stream may be revisited after seeking back.
                    if position > self._last_stored_pos:
                        self._lines.append(position)
                        self._last_stored_pos = position
                else:
                    kept.append(byte)
            if kept:
                return bytes(kept)

    def read_exact(self, size: int) -> bytes:
        """Read exactly ``size`` bytes, raising :class:`EOFError` if the data runs out."""
        buf = bytearray()
        while len(buf) < size:
            chunk = self.read(size - len(buf))
            if not chunk:
                raise EOFError(f"expected {size} bytes, got {len(buf)}")
            buf += chunk
        return bytes(buf)

    def seek(self, offset: int, whence: int = io.SEEK_CUR) -> int:
        """Move relative to the current position, skipping known line breaks.

        Only relative seeks (``io.SEEK_CUR``) are supported. Returns the new
        position in the underlying stream.
        """
        if whence != io.SEEK_CUR:
            raise io.UnsupportedOperation("only relative seeks are supported")

        current = self._inner.tell()
        target = current + offset
        if target < 0:
            raise ValueError("new position is negative")

        if offset < 0:
            for position in reversed(self._lines):
                if position < target:
                    break
                if position < current:
                    target -= 1
        else:
            for position in self._lines:
                if position > target:
                    break
                if position > current:
                    target += 1

        return self._inner.seek(target, io.SEEK_SET)