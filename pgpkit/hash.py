"""Hash algorithm identifiers and incremental hashers."""

from __future__ import annotations

import hashlib
from enum import IntEnum
from typing import Any, Callable

from Crypto.Hash import RIPEMD160

from .errors import UnimplementedError, UnsupportedError


class Hasher:
    """An incremental hash computation."""

    def __init__(self, state: Any) -> None:
        self._state = state

    def update(self, data: bytes) -> None:
        """Feed ``data`` into the hash."""
        self._state.update(data)

    def write(self, data: bytes) -> int:
        """Feed ``data`` into the hash and return its length."""
        self.update(data)
        return len(data)

    def finish(self) -> bytes:
        """Return the digest of everything fed so far."""
        return self._state.digest()


class HashAlgorithm(IntEnum):
    """Hash algorithm identifiers."""

    NONE = 0
    MD5 = 1
    SHA1 = 2
    RIPEMD160 = 3
    SHA2_256 = 8
    SHA2_384 = 9
    SHA2_512 = 10
    SHA2_224 = 11
    SHA3_256 = 12
    SHA3_512 = 14
    PRIVATE10 = 110
    """Do not use; exists only for compatibility."""

    @classmethod
    def default(cls) -> "HashAlgorithm":
        return cls.SHA2_256

    def _factory(self) -> Callable[[], Any] | None:
        return _FACTORIES.get(self)

    def new_hasher(self) -> Hasher:
        """Create a new hasher for this algorithm."""
        factory = self._factory()
        if factory is None:
            raise UnimplementedError(f"hasher {self.name}")
        return Hasher(factory())

    def digest(self, data: bytes) -> bytes:
        """Return the digest of ``data``."""
        if self is HashAlgorithm.PRIVATE10:
            raise UnsupportedError("Private10 should not be used")
        factory = self._factory()
        if factory is None:
            raise UnimplementedError(f"hasher: {self.name}")
        state = factory()
        state.update(data)
        return state.digest()

    def digest_size(self) -> int:
        """Return the digest size in octets, or 0 if the algorithm has none."""
        factory = self._factory()
        return 0 if factory is None else factory().digest_size


_FACTORIES: dict[HashAlgorithm, Callable[[], Any]] = {
    HashAlgorithm.MD5: hashlib.md5,
    HashAlgorithm.SHA1: hashlib.sha1,
    HashAlgorithm.RIPEMD160: RIPEMD160.new,
    HashAlgorithm.SHA2_256: hashlib.sha256,
    HashAlgorithm.SHA2_384: hashlib.sha384,
    HashAlgorithm.SHA2_512: hashlib.sha512,
    HashAlgorithm.SHA2_224: hashlib.sha224,
    HashAlgorithm.SHA3_256: hashlib.sha3_256,
    HashAlgorithm.SHA3_512: hashlib.sha3_512,
}