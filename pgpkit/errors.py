"""Error types raised throughout the package, plus small assertion helpers."""

from __future__ import annotations

from typing import Any, ClassVar


class PgpError(Exception):
    """Base class of every error raised by this package.

    Each subclass carries a stable numeric ``code`` and a message template.
    Subclasses that describe a condition in more detail accept it as the
    single ``detail`` argument.
    """

    code: ClassVar[int] = -1
    template: ClassVar[str] = "{detail}"

    def __init__(self, detail: Any = None) -> None:
        self.detail = detail
        super().__init__(self.template.format(detail=detail))


class ParsingError(PgpError):
    code = 0
    template = "failed to parse {detail!r}"


class InvalidInputError(PgpError):
    code = 1
    template = "invalid input"


class IncompleteError(PgpError):
    code = 2
    template = "incomplete input: {detail!r}"


class InvalidArmorWrappersError(PgpError):
    code = 3
    template = "invalid armor wrappers"


class InvalidChecksumError(PgpError):
    code = 4
    template = "invalid crc24 checksum"


class Base64DecodeError(PgpError):
    code = 5
    template = "failed to decode base64 {detail!r}"


class RequestedSizeTooLargeError(PgpError):
    code = 6
    template = "requested data size is larger than the packet body"


class NoMatchingPacketError(PgpError):
    code = 7
    template = "no matching packet found"


class TooManyPacketsError(PgpError):
    code = 8
    template = "more than one matching packet was found"


class RSAError(PgpError):
    code = 9
    template = "rsa error: {detail!r}"


class PgpIOError(PgpError):
    code = 10
    template = "io error: {detail!r}"


class MissingPacketsError(PgpError):
    code = 11
    template = "missing packets"


class InvalidKeyLengthError(PgpError):
    code = 12
    template = "invalid key length"


class BlockModeError(PgpError):
    code = 13
    template = "block mode error"


class MissingKeyError(PgpError):
    code = 14
    template = "missing key"


class CfbInvalidKeyIvLengthError(PgpError):
    code = 15
    template = "cfb: invalid key iv length"


class UnimplementedError(PgpError):
    code = 16
    template = "Not yet implemented: {detail}"


class UnsupportedError(PgpError):
    code = 17
    template = "Unsupported: {detail}"


class MessageError(PgpError):
    code = 18
    template = "{detail}"


class PacketError(PgpError):
    code = 19
    template = "Invalid Packet {detail!r}"


class PacketIncompleteError(PgpError):
    code = 20
    template = "Incomplete Packet"


class UnpadError(PgpError):
    code = 21
    template = "Unpadding failed"


class PadError(PgpError):
    code = 22
    template = "Padding failed"


class Utf8Error(PgpError):
    code = 23
    template = "Utf8 {detail!r}"


class ParseIntError(PgpError):
    code = 24
    template = "ParseInt {detail!r}"


class InvalidPacketContentError(PgpError):
    """Wraps another error found while reading a packet's content."""

    code = 25
    template = "Invalid Packet Content {detail!r}"

    def __init__(self, detail: Any = None) -> None:
        super().__init__(detail)
        if isinstance(detail, BaseException):
            self.__cause__ = detail


class Ed25519SignatureError(PgpError):
    code = 26
    template = "Ed25519 {detail!r}"


class MdcError(PgpError):
    code = 27
    template = "Modification Detection Code error"


def ensure(condition: Any, message: Any) -> None:
    """Raise :class:`MessageError` with ``message`` unless ``condition`` holds."""
    if not condition:
        raise MessageError(str(message))


def ensure_eq(left: Any, right: Any, message: Any = None) -> None:
    """Raise :class:`MessageError` describing both sides unless ``left == right``."""
    if left == right:
        return
    text = f"assertion failed: `(left == right)`\n  left: `{left!r}`,\n right: `{right!r}`"
    if message is not None:
        text = f"{text}: {message}"
    raise MessageError(text)