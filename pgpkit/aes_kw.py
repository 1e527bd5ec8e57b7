"""AES key wrap and unwrap as defined in RFC 3394."""

from __future__ import annotations

from Crypto.Cipher import AES

from .errors import MessageError, ensure_eq

_IV = b"\xa6" * 8
_ROUNDS = 6
_BLOCK = 8


def _new_cipher(key: bytes):
    bits = len(key) * 8
    if bits not in (128, 192, 256):
        raise MessageError(f"invalid aes key size: {bits}")
    return AES.new(bytes(key), AES.MODE_ECB)


def _blocks(data: bytes) -> list[bytes]:
    return [data[start : start + _BLOCK] for start in range(0, len(data), _BLOCK)]


def _xor_counter(block: bytes, counter: int) -> bytes:
    return (int.from_bytes(block, "big") ^ counter).to_bytes(_BLOCK, "big")


def wrap(key: bytes, data: bytes) -> bytes:
    """Wrap ``data`` (a multiple of 8 octets) with the AES key ``key``."""
    data = bytes(data)
    ensure_eq(len(data) % _BLOCK, 0, "data must be a multiple of 64bit")
    cipher = _new_cipher(key)

    registers = _blocks(data)
    n = len(registers)
    a = _IV
    for j in range(_ROUNDS):
        for i, register in enumerate(registers):
            b = cipher.encrypt(a + register)
            a = _xor_counter(b[:_BLOCK], n * j + i + 1)
            registers[i] = b[_BLOCK:]

    return a + b"".join(registers)


def unwrap(key: bytes, data: bytes) -> bytes:
    """Unwrap ``data`` with the AES key ``key``, checking its integrity."""
    data = bytes(data)
    ensure_eq(len(data) % _BLOCK, 0, "data must be a multiple of 64bit")
    cipher = _new_cipher(key)
    if not data:
        raise MessageError("invalid input")

    a, *registers = _blocks(data)
    n = len(registers)
    for j in reversed(range(_ROUNDS)):
        for i in reversed(range(n)):
            a = _xor_counter(a, n * j + i + 1)
            b = cipher.decrypt(a + registers[i])
            a = b[:_BLOCK]
            registers[i] = b[_BLOCK:]

    if a != _IV:
        raise MessageError("failed integrity check")
    return b"".join(registers)