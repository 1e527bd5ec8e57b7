"""Elliptic curves known to OpenPGP and their OID encodings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .algorithms import PublicKeyAlgorithm


@dataclass(frozen=True)
class _CurveInfo:
    standard_name: str
    oid_str: str
    nbits: int
    alias: str | None
    pubkey_algo: PublicKeyAlgorithm | None


class ECCCurve(Enum):
    """A named elliptic curve."""

    CURVE25519 = "Curve25519"
    ED25519 = "Ed25519"
    P256 = "P256"
    P384 = "P384"
    P521 = "P521"
    BRAINPOOL_P256R1 = "BrainpoolP256r1"
    BRAINPOOL_P384R1 = "BrainpoolP384r1"
    BRAINPOOL_P512R1 = "BrainpoolP512r1"
    SECP256K1 = "Secp256k1"

    @property
    def _info(self) -> _CurveInfo:
        return _CURVES[self]

    def standard_name(self) -> str:
        """Standard name of the curve."""
        return self._info.standard_name

    def oid_str(self) -> str:
        """Dotted OID of the curve."""
        return self._info.oid_str

    def nbits(self) -> int:
        """Nominal bit length of the curve."""
        return self._info.nbits

    def alias(self) -> str | None:
        """Alternative name of the curve, if it has one."""
        return self._info.alias

    def pubkey_algo(self) -> PublicKeyAlgorithm | None:
        """Required algorithm, or ``None`` for ECDSA/ECDH curves."""
        return self._info.pubkey_algo

    def oid(self) -> bytes:
        """DER encoding of the OID value, the first two arcs combined."""
        first, second, *rest = (int(part) for part in self.oid_str().split("."))
        arcs = [first * 40 + second, *rest]
        return b"".join(asn1_der_object_id_val_enc(arc) for arc in arcs)

    def __str__(self) -> str:
        return self.standard_name()


_CURVES = {
    ECCCurve.CURVE25519: _CurveInfo(
        "Curve25519", "1.3.6.1.4.1.3029.1.5.1", 255, "cv25519", PublicKeyAlgorithm.ECDH
    ),
    ECCCurve.ED25519: _CurveInfo(
        "Ed25519", "1.3.6.1.4.1.11591.15.1", 255, "ed25519", PublicKeyAlgorithm.EDDSA
    ),
    ECCCurve.P256: _CurveInfo("NIST P-256", "1.2.840.10045.3.1.7", 256, "nistp256", None),
    ECCCurve.P384: _CurveInfo("NIST P-384", "1.3.132.0.34", 384, "nistp384", None),
    ECCCurve.P521: _CurveInfo("NIST P-521", "1.3.132.0.35", 521, "nistp521", None),
    ECCCurve.BRAINPOOL_P256R1: _CurveInfo(
        "brainpoolP256r1", "1.3.36.3.3.2.8.1.1.7", 256, None, None
    ),
    ECCCurve.BRAINPOOL_P384R1: _CurveInfo(
        "brainpoolP384r1", "1.3.36.3.3.2.8.1.1.11", 384, None, None
    ),
    ECCCurve.BRAINPOOL_P512R1: _CurveInfo(
        "brainpool5126r1", "1.3.36.3.3.2.8.1.1.13", 512, None, None
    ),
    ECCCurve.SECP256K1: _CurveInfo("secp256k1", "1.3.132.0.10", 256, None, None),
}


def ecc_curve_from_oid(oid: bytes) -> ECCCurve | None:
    """Return the curve whose encoded OID equals ``oid``, or ``None``."""
    oid = bytes(oid)
    return next((curve for curve in ECCCurve if curve.oid() == oid), None)


def asn1_der_object_id_val_enc(val: int) -> bytes:
    """Encode one OID arc in base 128, high bit set on all but the last byte."""
    out = [val & 0x7F]
    val >>= 7
    while val > 0:
        out.append(0x80 | (val & 0x7F))
        val >>= 7
    return bytes(reversed(out))