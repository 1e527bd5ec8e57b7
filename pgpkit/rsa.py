"""RSA encryption and signatures with PKCS#1 v1.5 padding."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, Sequence

from Crypto.PublicKey import RSA

from .errors import RSAError, ensure_eq
from .hash import HashAlgorithm

RandFunc = Callable[[int], bytes]

_MAX_MODULUS_BITS = 4096
_MIN_PUBLIC_EXPONENT = 2
_MAX_PUBLIC_EXPONENT = (1 << 33) - 1
_DEFAULT_EXPONENT = 65537

_DIGEST_INFO: dict[HashAlgorithm, bytes] = {
    HashAlgorithm.MD5: bytes.fromhex("3020300c06082a864886f70d020505000410"),
    HashAlgorithm.SHA1: bytes.fromhex("3021300906052b0e03021a05000414"),
    HashAlgorithm.RIPEMD160: bytes.fromhex("3021300906052b2403020105000414"),
    HashAlgorithm.SHA2_224: bytes.fromhex("302d300d06096086480165030402040500041c"),
    HashAlgorithm.SHA2_256: bytes.fromhex("3031300d060960864801650304020105000420"),
    HashAlgorithm.SHA2_384: bytes.fromhex("3041300d060960864801650304020205000430"),
    HashAlgorithm.SHA2_512: bytes.fromhex("3051300d060960864801650304020305000440"),
    HashAlgorithm.SHA3_256: bytes.fromhex("3031300d060960864801650304020805000420"),
    HashAlgorithm.SHA3_512: bytes.fromhex("3051300d060960864801650304020a05000440"),
}


@dataclass(frozen=True)
class RsaPublicParams:
    """Public RSA values as big-endian integers without leading zeros."""

    n: bytes
    e: bytes


@dataclass(frozen=True)
class RsaSecretParams:
    """Secret RSA values; ``u`` is the inverse of ``p`` modulo ``q``."""

    d: bytes = field(repr=False)
    p: bytes = field(repr=False)
    q: bytes = field(repr=False)
    u: bytes = field(repr=False)


@dataclass(frozen=True)
class RsaPrivateKey:
    """An RSA private key."""

    n: int
    e: int
    d: int = field(repr=False)
    p: int = field(repr=False)
    q: int = field(repr=False)


def _to_mpi(value: int) -> bytes:
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def _modulus_len(n: int) -> int:
    return (n.bit_length() + 7) // 8


def _public_key(n_bytes: bytes, e_bytes: bytes) -> tuple[int, int]:
    n = int.from_bytes(n_bytes, "big")
    e = int.from_bytes(e_bytes, "big")
    if n <= 0:
        raise RSAError("invalid modulus")
    if n.bit_length() > _MAX_MODULUS_BITS:
        raise RSAError("modulus too large")
    if e < _MIN_PUBLIC_EXPONENT:
        raise RSAError("public exponent too small")
    if e > _MAX_PUBLIC_EXPONENT:
        raise RSAError("public exponent too large")
    return n, e


def _nonzero_random(count: int, rng: RandFunc) -> bytes:
    out = bytearray()
    while len(out) < count:
        out += bytes(b for b in rng(count - len(out)) if b)
    return bytes(out)


def _signature_payload(hash_algorithm: HashAlgorithm, hashed: bytes) -> bytes:
    prefix = _DIGEST_INFO.get(hash_algorithm)
    if prefix is None:
        return hashed
    if len(hashed) != hash_algorithm.digest_size():
        raise RSAError("input must be hashed")
    return prefix + hashed


def _signature_block(payload: bytes, k: int) -> bytes:
    if len(payload) + 11 > k:
        raise RSAError("message too long")
    return b"\x00\x01" + b"\xff" * (k - len(payload) - 3) + b"\x00" + payload


def decrypt(private_key: RsaPrivateKey, mpis: Sequence[bytes], fingerprint: bytes = b"") -> bytes:
    """Decrypt the single MPI in ``mpis`` and strip the PKCS#1 v1.5 padding."""
    ensure_eq(len(mpis), 1, "invalid input")
    n = private_key.n
    k = _modulus_len(n)
    c = int.from_bytes(bytes(mpis[0]), "big")
    if c >= n:
        raise RSAError("decryption error")

    em = pow(c, private_key.d, n).to_bytes(k, "big")
    separator = em.find(b"\x00", 2)
    if em[0] != 0 or em[1] != 2 or separator < 10:
        raise RSAError("decryption error")
    return em[separator + 1 :]


def encrypt(
    n: bytes, e: bytes, plaintext: bytes, rng: RandFunc | None = None
) -> list[bytes]:
    """Encrypt ``plaintext`` to the public key ``(n, e)`` with PKCS#1 v1.5 padding."""
    modulus, exponent = _public_key(n, e)
    k = _modulus_len(modulus)
    plaintext = bytes(plaintext)
    if len(plaintext) > k - 11:
        raise RSAError("message too long")

    padding = _nonzero_random(k - len(plaintext) - 3, rng or os.urandom)
    em = b"\x00\x02" + padding + b"\x00" + plaintext
    c = pow(int.from_bytes(em, "big"), exponent, modulus)
    return [c.to_bytes(k, "big")]


def generate_key(
    bit_size: int, rng: RandFunc | None = None
) -> tuple[RsaPublicParams, RsaSecretParams]:
    """Generate an RSA key pair of ``bit_size`` bits with public exponent 65537."""
    try:
        key = RSA.generate(bit_size, randfunc=rng, e=_DEFAULT_EXPONENT)
    except ValueError as exc:
        raise RSAError(str(exc)) from exc

    p, q = int(key.p), int(key.q)
    u = pow(p, -1, q)
    return (
        RsaPublicParams(n=_to_mpi(int(key.n)), e=_to_mpi(int(key.e))),
        RsaSecretParams(d=_to_mpi(int(key.d)), p=_to_mpi(p), q=_to_mpi(q), u=_to_mpi(u)),
    )


def verify(
    n: bytes, e: bytes, hash_algorithm: HashAlgorithm, hashed: bytes, sig: bytes
) -> None:
    """Check a PKCS#1 v1.5 signature, raising :class:`RSAError` if it is invalid."""
    modulus, exponent = _public_key(n, e)
    k = _modulus_len(modulus)
    sig = bytes(sig)
    if len(sig) != k:
        raise RSAError("verification error")
    s = int.from_bytes(sig, "big")
    if s >= modulus:
        raise RSAError("verification error")

    expected = _signature_block(_signature_payload(hash_algorithm, bytes(hashed)), k)
    if pow(s, exponent, modulus).to_bytes(k, "big") != expected:
        raise RSAError("verification error")


def sign(key: RsaPrivateKey, hash_algorithm: HashAlgorithm, digest: bytes) -> list[bytes]:
    """Sign ``digest`` with PKCS#1 v1.5 padding."""
    k = _modulus_len(key.n)
    em = _signature_block(_signature_payload(hash_algorithm, bytes(digest)), k)
    s = pow(int.from_bytes(em, "big"), key.d, key.n)
    return [s.to_bytes(k, "big")]