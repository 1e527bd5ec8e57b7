"""The two-octet additive checksum and the SHA-1 checksum."""

from __future__ import annotations

import hashlib
from typing import BinaryIO

from .errors import ensure_eq


class SimpleChecksum:
    """Running sum of all octets modulo 65536."""

    def __init__(self) -> None:
        self._sum = 0

    def update(self, data: bytes) -> None:
        """Add ``data`` to the checksum."""
        self._sum = (self._sum + sum(data)) & 0xFFFF

    def write(self, data: bytes) -> int:
        """Add ``data`` to the checksum and return its length."""
        self.update(data)
        return len(data)

    def finish(self) -> int:
        """Return the checksum as an integer."""
        return self._sum

    def finalize(self) -> bytes:
        """Return the checksum as two big-endian octets."""
        return self._sum.to_bytes(2, "big")

    def to_writer(self, writer: BinaryIO) -> None:
        """Write the two checksum octets to ``writer``."""
        writer.write(self.finalize())


def calculate_simple(data: bytes) -> int:
    """Return the simple checksum of ``data``."""
    checksum = SimpleChecksum()
    checksum.update(data)
    return checksum.finish()


def simple(actual: bytes, data: bytes) -> None:
    """Check that the first two octets of ``actual`` are the checksum of ``data``."""
    expected = calculate_simple(data).to_bytes(2, "big")
    ensure_eq(bytes(actual[:2]), expected, "invalid simple checksum")


def simple_to_writer(data: bytes, writer: BinaryIO) -> None:
    """Write the simple checksum of ``data`` to ``writer``."""
    checksum = SimpleChecksum()
    checksum.update(data)
    checksum.to_writer(writer)


def calculate_sha1(data: bytes) -> bytes:
    """Return the 20-octet SHA-1 digest of ``data``."""
    return hashlib.sha1(data).digest()[:20]