"""Identifiers of AEAD and public-key algorithms."""

from __future__ import annotations

from enum import IntEnum


class AeadAlgorithm(IntEnum):
    """Available AEAD algorithms."""

    NONE = 0
    EAX = 1
    OCB = 2

    @classmethod
    def default(cls) -> "AeadAlgorithm":
        return cls.NONE


class PublicKeyAlgorithm(IntEnum):
    """Public-key algorithm identifiers."""

    RSA = 1
    """RSA (encrypt and sign)."""
    RSA_ENCRYPT = 2
    """Deprecated: RSA (encrypt only)."""
    RSA_SIGN = 3
    """Deprecated: RSA (sign only)."""
    ELGAMAL_SIGN = 16
    DSA = 17
    ECDH = 18
    ECDSA = 19
    ELGAMAL = 20
    """Deprecated: Elgamal (encrypt and sign)."""
    DIFFIE_HELLMAN = 21
    EDDSA = 22
    PRIVATE_100 = 100
    PRIVATE_101 = 101
    PRIVATE_102 = 102
    PRIVATE_103 = 103
    PRIVATE_104 = 104
    PRIVATE_105 = 105
    PRIVATE_106 = 106
    PRIVATE_107 = 107
    PRIVATE_108 = 108
    PRIVATE_109 = 109
    PRIVATE_110 = 110