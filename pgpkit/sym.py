"""Symmetric ciphers in the OpenPGP CFB mode and in regular CFB mode."""

from __future__ import annotations

import os
from enum import IntEnum
from typing import Callable

from Crypto.Cipher import AES, CAST, DES, Blowfish

from .checksum import calculate_sha1
from .errors import (
    CfbInvalidKeyIvLengthError,
    MdcError,
    MessageError,
    UnimplementedError,
    ensure,
    ensure_eq,
)

RandFunc = Callable[[int], bytes]
BlockEncryptor = Callable[[bytes], bytes]

# MDC is a one-octet packet tag, a one-octet length and a 20-octet SHA-1 hash.
_MDC_LEN = 22
_MDC_TAG = 0xD3
_MDC_BODY_LEN = 0x14


class SymmetricKeyAlgorithm(IntEnum):
    """Symmetric key algorithm identifiers."""

    PLAINTEXT = 0
    IDEA = 1
    TRIPLE_DES = 2
    CAST5 = 3
    BLOWFISH = 4
    AES128 = 7
    AES192 = 8
    AES256 = 9
    TWOFISH = 10
    CAMELLIA128 = 11
    CAMELLIA192 = 12
    CAMELLIA256 = 13
    PRIVATE10 = 110
    """Do not use; exists only for compatibility."""

    @classmethod
    def default(cls) -> "SymmetricKeyAlgorithm":
        return cls.AES128

    def block_size(self) -> int:
        """The size of a single block in octets."""
        return _BLOCK_SIZES[self]

    def key_size(self) -> int:
        """The size of a key in octets."""
        return _KEY_SIZES[self]

    def _block_encryptor(self, key: bytes, iv: bytes, verb: str) -> BlockEncryptor:
        """Return the raw block encryption function for ``key``, checking ``iv``."""
        if self is SymmetricKeyAlgorithm.IDEA:
            raise UnimplementedError(f"IDEA {verb}")
        if self in _CAMELLIA_BITS:
            raise UnimplementedError(f"Camellia {_CAMELLIA_BITS[self]} not yet available")
        if self is SymmetricKeyAlgorithm.PRIVATE10:
            raise UnimplementedError(
                "Private10 should not be used, and only exist for compatability"
            )
        key = bytes(key)
        if len(iv) != self.block_size():
            raise CfbInvalidKeyIvLengthError()
        return _ENCRYPTOR_FACTORIES[self](key)

    def decrypt(self, key: bytes, ciphertext: bytes) -> bytes:
        """Decrypt in OpenPGP CFB mode with resynchronisation and a zero IV."""
        iv = bytes(self.block_size())
        return self.decrypt_with_iv(key, iv, ciphertext, True)[1]

    def decrypt_protected(self, key: bytes, ciphertext: bytes) -> bytes:
        """Decrypt in OpenPGP CFB mode with a zero IV and check the trailing MDC."""
        iv = bytes(self.block_size())
        prefix, res = self.decrypt_with_iv(key, iv, ciphertext, False)
        if len(res) < _MDC_LEN:
            raise MdcError()

        data, mdc = res[:-_MDC_LEN], res[-_MDC_LEN:]
        sha1 = calculate_sha1(prefix + data + mdc[:2])
        if mdc[0] != _MDC_TAG or mdc[1] != _MDC_BODY_LEN or mdc[2:] != sha1:
            raise MdcError()
        return data

    def decrypt_with_iv(
        self, key: bytes, iv: bytes, ciphertext: bytes, resync: bool
    ) -> tuple[bytes, bytes]:
        """Decrypt in OpenPGP CFB mode, returning the decrypted prefix and data.

        The prefix is ``block_size + 2`` octets whose last two repeat the two
        before them; that repetition is checked as a quick test of the key.
        """
        bs = self.block_size()
        data = bytes(ciphertext)
        ensure(bs + 2 < len(data), "invalid ciphertext")

        if self is SymmetricKeyAlgorithm.PLAINTEXT:
            return data[: bs + 2], data[bs + 2 :]

        encrypt_block = self._block_encryptor(key, iv, "decrypt")
        plain = _cfb_decrypt(encrypt_block, bytes(iv), data, bs)
        prefix, rest = plain[: bs + 2], plain[bs + 2 :]

        ensure_eq(prefix[bs - 2], prefix[bs], "cfb decrypt, quick check part 1")
        ensure_eq(prefix[bs - 1], prefix[bs + 1], "cfb decrypt, quick check part 2")
        if resync:
            raise UnimplementedError("CFB resync is not here")
        return prefix, rest

    def decrypt_with_iv_regular(self, key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
        """Decrypt in regular CFB mode and return the plaintext."""
        data = bytes(ciphertext)
        if self is SymmetricKeyAlgorithm.PLAINTEXT:
            return data
        encrypt_block = self._block_encryptor(key, iv, "decrypt")
        return _cfb_decrypt(encrypt_block, bytes(iv), data, self.block_size())

    def _prefix(self, rng: RandFunc) -> bytes:
        bs = self.block_size()
        ensure(bs >= 2, f"invalid block size for encryption: {bs}")
        random_part = bytes(rng(bs))
        ensure_eq(len(random_part), bs, "random source returned too few octets")
        return random_part + random_part[bs - 2 : bs]

    def encrypt_with_rng(self, rng: RandFunc, key: bytes, plaintext: bytes) -> bytes:
        """Encrypt in OpenPGP CFB mode with resynchronisation and a zero IV."""
        iv = bytes(self.block_size())
        data = self._prefix(rng) + bytes(plaintext)
        return self.encrypt_with_iv(key, iv, data, True)

    def encrypt(self, key: bytes, plaintext: bytes) -> bytes:
        """Like :meth:`encrypt_with_rng`, using the system random source."""
        return self.encrypt_with_rng(os.urandom, key, plaintext)

    def encrypt_protected_with_rng(
        self, rng: RandFunc, key: bytes, plaintext: bytes
    ) -> bytes:
        """Encrypt in OpenPGP CFB mode with a zero IV, appending an MDC."""
        data = self._prefix(rng) + bytes(plaintext) + bytes((_MDC_TAG, _MDC_BODY_LEN))
        data += calculate_sha1(data)
        iv = bytes(self.block_size())
        return self.encrypt_with_iv(key, iv, data, False)

    def encrypt_protected(self, key: bytes, plaintext: bytes) -> bytes:
        """Like :meth:`encrypt_protected_with_rng`, using the system random source."""
        return self.encrypt_protected_with_rng(os.urandom, key, plaintext)

    def encrypt_with_iv(
        self, key: bytes, iv: bytes, ciphertext: bytes, resync: bool
    ) -> bytes:
        """Encrypt prefix and data in OpenPGP CFB mode and return the result."""
        bs = self.block_size()
        data = bytes(ciphertext)
        ensure(len(data) >= bs + 2, "invalid ciphertext")

        if self is SymmetricKeyAlgorithm.PLAINTEXT:
            return data
        if self is SymmetricKeyAlgorithm.PRIVATE10:
            raise MessageError("Private10 should not be used, and only exist for compatability")

        encrypt_block = self._block_encryptor(key, iv, "encrypt")
        if resync:
            raise UnimplementedError("CFB resync is not here")
        return _cfb_encrypt(encrypt_block, bytes(iv), data, bs)

    def encrypt_with_iv_regular(self, key: bytes, iv: bytes, plaintext: bytes) -> bytes:
        """Encrypt in regular CFB mode and return the ciphertext."""
        data = bytes(plaintext)
        if self is SymmetricKeyAlgorithm.PLAINTEXT:
            return data
        encrypt_block = self._block_encryptor(key, iv, "encrypt")
        return _cfb_encrypt(encrypt_block, bytes(iv), data, self.block_size())

    def new_session_key(self, rng: RandFunc | None = None) -> bytes:
        """Generate a random session key of :meth:`key_size` octets."""
        return bytes((rng or os.urandom)(self.key_size()))


_BLOCK_SIZES = {
    SymmetricKeyAlgorithm.PLAINTEXT: 0,
    SymmetricKeyAlgorithm.IDEA: 8,
    SymmetricKeyAlgorithm.TRIPLE_DES: 8,
    SymmetricKeyAlgorithm.CAST5: 8,
    SymmetricKeyAlgorithm.BLOWFISH: 8,
    SymmetricKeyAlgorithm.AES128: 16,
    SymmetricKeyAlgorithm.AES192: 16,
    SymmetricKeyAlgorithm.AES256: 16,
    SymmetricKeyAlgorithm.TWOFISH: 16,
    SymmetricKeyAlgorithm.CAMELLIA128: 16,
    SymmetricKeyAlgorithm.CAMELLIA192: 16,
    SymmetricKeyAlgorithm.CAMELLIA256: 16,
    SymmetricKeyAlgorithm.PRIVATE10: 0,
}

_KEY_SIZES = {
    SymmetricKeyAlgorithm.PLAINTEXT: 0,
    SymmetricKeyAlgorithm.IDEA: 16,
    SymmetricKeyAlgorithm.TRIPLE_DES: 24,
    SymmetricKeyAlgorithm.CAST5: 16,
    SymmetricKeyAlgorithm.BLOWFISH: 16,
    SymmetricKeyAlgorithm.AES128: 16,
    SymmetricKeyAlgorithm.AES192: 24,
    SymmetricKeyAlgorithm.AES256: 32,
    SymmetricKeyAlgorithm.TWOFISH: 32,
    SymmetricKeyAlgorithm.CAMELLIA128: 16,
    SymmetricKeyAlgorithm.CAMELLIA192: 24,
    SymmetricKeyAlgorithm.CAMELLIA256: 32,
    SymmetricKeyAlgorithm.PRIVATE10: 0,
}

_CAMELLIA_BITS = {
    SymmetricKeyAlgorithm.CAMELLIA128: 128,
    SymmetricKeyAlgorithm.CAMELLIA192: 192,
    SymmetricKeyAlgorithm.CAMELLIA256: 256,
}


def _xor(data: bytes, keystream: bytes) -> bytes:
    size = len(data)
    value = int.from_bytes(data, "big") ^ int.from_bytes(keystream[:size], "big")
    return value.to_bytes(size, "big")


def _cfb_encrypt(encrypt_block: BlockEncryptor, iv: bytes, data: bytes, bs: int) -> bytes:
    out = bytearray()
    feedback = iv
    for start in range(0, len(data), bs):
        block = _xor(data[start : start + bs], encrypt_block(feedback))
        out += block
        feedback = block
    return bytes(out)


def _cfb_decrypt(encrypt_block: BlockEncryptor, iv: bytes, data: bytes, bs: int) -> bytes:
    out = bytearray()
    feedback = iv
    for start in range(0, len(data), bs):
        block = data[start : start + bs]
        out += _xor(block, encrypt_block(feedback))
        feedback = block
    return bytes(out)


def _require_key_length(key: bytes, allowed: range | tuple[int, ...]) -> None:
    if len(key) not in allowed:
        raise CfbInvalidKeyIvLengthError()


def _aes(size: int) -> Callable[[bytes], BlockEncryptor]:
    def factory(key: bytes) -> BlockEncryptor:
        _require_key_length(key, (size,))
        return AES.new(key, AES.MODE_ECB).encrypt

    return factory


def _triple_des(key: bytes) -> BlockEncryptor:
    _require_key_length(key, (24,))
    first, second, third = (DES.new(key[i : i + 8], DES.MODE_ECB) for i in (0, 8, 16))
    return lambda block: third.encrypt(second.decrypt(first.encrypt(block)))


def _cast5(key: bytes) -> BlockEncryptor:
    _require_key_length(key, range(5, 17))
    return CAST.new(key, CAST.MODE_ECB).encrypt


def _blowfish(key: bytes) -> BlockEncryptor:
    _require_key_length(key, range(4, 57))
    return Blowfish.new(key, Blowfish.MODE_ECB).encrypt


def _twofish(key: bytes) -> BlockEncryptor:
    _require_key_length(key, (16, 24, 32))
    return _Twofish(key).encrypt_block


# --- Twofish -----------------------------------------------------------------

_MASK32 = 0xFFFFFFFF
_RHO = 0x01010101

_Q0_T = (
    (8, 1, 7, 13, 6, 15, 3, 2, 0, 11, 5, 9, 14, 12, 10, 4),
    (14, 12, 11, 8, 1, 2, 3, 5, 15, 4, 10, 6, 7, 0, 9, 13),
    (11, 10, 5, 14, 6, 13, 9, 0, 12, 8, 15, 3, 2, 4, 7, 1),
    (13, 7, 15, 4, 1, 2, 6, 14, 9, 11, 3, 0, 8, 5, 12, 10),
)
_Q1_T = (
    (2, 8, 11, 13, 15, 7, 6, 14, 3, 1, 9, 4, 0, 10, 12, 5),
    (1, 14, 2, 11, 4, 12, 3, 7, 6, 13, 10, 5, 15, 9, 0, 8),
    (4, 12, 7, 5, 1, 6, 9, 10, 0, 14, 13, 8, 2, 11, 3, 15),
    (11, 9, 5, 1, 12, 3, 13, 14, 6, 4, 7, 15, 2, 0, 8, 10),
)

_MDS = (
    (0x01, 0xEF, 0x5B, 0x5B),
    (0x5B, 0xEF, 0xEF, 0x01),
    (0xEF, 0x5B, 0x01, 0xEF),
    (0xEF, 0x01, 0xEF, 0x5B),
)
_RS = (
    (0x01, 0xA4, 0x55, 0x87, 0x5A, 0x58, 0xDB, 0x9E),
    (0xA4, 0x56, 0x82, 0xF3, 0x1E, 0xC6, 0x68, 0xE5),
    (0x02, 0xA1, 0xFC, 0xC1, 0x47, 0xAE, 0x3D, 0x19),
    (0xA4, 0x55, 0x87, 0x5A, 0x58, 0xDB, 0x9E, 0x03),
)
_MDS_POLY = 0x169
_RS_POLY = 0x14D


def _ror4(x: int) -> int:
    return ((x >> 1) | (x << 3)) & 0xF


def _build_q(tables: tuple[tuple[int, ...], ...]) -> tuple[int, ...]:
    t0, t1, t2, t3 = tables

    def permute(x: int) -> int:
        a0, b0 = x >> 4, x & 0xF
        a1, b1 = a0 ^ b0, (a0 ^ _ror4(b0) ^ (8 * a0)) & 0xF
        a2, b2 = t0[a1], t1[b1]
        a3, b3 = a2 ^ b2, (a2 ^ _ror4(b2) ^ (8 * a2)) & 0xF
        return (t3[b3] << 4) | t2[a3]

    return tuple(permute(x) for x in range(256))


def _gf_mul(a: int, b: int, poly: int) -> int:
    result = 0
    while b:
        if b & 1:
            result ^= a
        a <<= 1
        if a & 0x100:
            a ^= poly
        b >>= 1
    return result


_Q0 = _build_q(_Q0_T)
_Q1 = _build_q(_Q1_T)

# For each byte position: the q-boxes applied at key levels 3, 2, 1, 0 and last.
_Q_ORDER = (
    (_Q1, _Q1, _Q0, _Q0, _Q1),
    (_Q0, _Q1, _Q1, _Q0, _Q0),
    (_Q0, _Q0, _Q0, _Q1, _Q1),
    (_Q1, _Q0, _Q1, _Q1, _Q0),
)

_MDS_COLUMNS = tuple(
    tuple(
        sum(_gf_mul(_MDS[row][column], y, _MDS_POLY) << (8 * row) for row in range(4))
        for y in range(256)
    )
    for column in range(4)
)


def _rol(x: int, n: int) -> int:
    return ((x << n) | (x >> (32 - n))) & _MASK32


def _ror(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & _MASK32


def _h_byte(x: int, position: int, words: list[int]) -> int:
    order = _Q_ORDER[position]
    shift = 8 * position
    for level in reversed(range(len(words))):
        x = order[3 - level][x] ^ ((words[level] >> shift) & 0xFF)
    return order[4][x]


def _h(x: int, words: list[int]) -> int:
    result = 0
    for position in range(4):
        y = _h_byte((x >> (8 * position)) & 0xFF, position, words)
        result ^= _MDS_COLUMNS[position][y]
    return result


class _Twofish:
    """Twofish block encryption with a 128-, 192- or 256-bit key."""

    def __init__(self, key: bytes) -> None:
        k = len(key) // 8
        words = [int.from_bytes(key[4 * i : 4 * i + 4], "little") for i in range(2 * k)]
        even, odd = words[0::2], words[1::2]

        s_words = []
        for i in range(k):
            chunk = key[8 * i : 8 * i + 8]
            s_bytes = (
                _xor_all(_gf_mul(coef, octet, _RS_POLY) for coef, octet in zip(row, chunk))
                for row in _RS
            )
            s_words.append(sum(b << (8 * j) for j, b in enumerate(s_bytes)))
        s_words.reverse()

        self._subkeys: list[int] = []
        for i in range(20):
            a = _h(2 * i * _RHO, even)
            b = _rol(_h((2 * i + 1) * _RHO, odd), 8)
            self._subkeys.append((a + b) & _MASK32)
            self._subkeys.append(_rol((a + 2 * b) & _MASK32, 9))

        self._sboxes = tuple(
            tuple(_MDS_COLUMNS[position][_h_byte(x, position, s_words)] for x in range(256))
            for position in range(4)
        )

    def _g(self, x: int) -> int:
        s0, s1, s2, s3 = self._sboxes
        return s0[x & 0xFF] ^ s1[(x >> 8) & 0xFF] ^ s2[(x >> 16) & 0xFF] ^ s3[x >> 24]

    def encrypt_block(self, block: bytes) -> bytes:
        keys = self._subkeys
        r0, r1, r2, r3 = (
            int.from_bytes(block[4 * i : 4 * i + 4], "little") ^ keys[i] for i in range(4)
        )
        for rnd in range(16):
            t0 = self._g(r0)
            t1 = self._g(_rol(r1, 8))
            f0 = (t0 + t1 + keys[2 * rnd + 8]) & _MASK32
            f1 = (t0 + 2 * t1 + keys[2 * rnd + 9]) & _MASK32
            r2 = _ror(r2 ^ f0, 1)
            r3 = _rol(r3, 1) ^ f1
            r0, r1, r2, r3 = r2, r3, r0, r1
        out = (r2 ^ keys[4], r3 ^ keys[5], r0 ^ keys[6], r1 ^ keys[7])
        return b"".join(word.to_bytes(4, "little") for word in out)


def _xor_all(values) -> int:
    result = 0
    for value in values:
        result ^= value
    return result


_ENCRYPTOR_FACTORIES: dict[SymmetricKeyAlgorithm, Callable[[bytes], BlockEncryptor]] = {
    SymmetricKeyAlgorithm.TRIPLE_DES: _triple_des,
    SymmetricKeyAlgorithm.CAST5: _cast5,
    SymmetricKeyAlgorithm.BLOWFISH: _blowfish,
    SymmetricKeyAlgorithm.AES128: _aes(16),
    SymmetricKeyAlgorithm.AES192: _aes(24),
    SymmetricKeyAlgorithm.AES256: _aes(32),
    SymmetricKeyAlgorithm.TWOFISH: _twofish,
}