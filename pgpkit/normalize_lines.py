"""Normalisation of line endings to a single style."""

from __future__ import annotations

import re
from enum import Enum
from typing import overload

_BREAKS_BYTES = re.compile(rb"\r\n|\r|\n")
_BREAKS_STR = re.compile(r"\r\n|\r|\n")


class LineBreak(Enum):
    """A line-ending style."""

    LF = b"\n"
    CR = b"\r"
    CRLF = b"\r\n"


@overload
def normalize(data: bytes, line_break: LineBreak) -> bytes: ...


@overload
def normalize(data: str, line_break: LineBreak) -> str: ...


def normalize(data, line_break):
    """Replace every line ending in ``data`` with ``line_break``.

    ``\\r\\n`` counts as one line ending; a lone ``\\r`` or ``\\n`` counts as
    one as well. Text in gives text out, bytes in give bytes out.
    """
    if isinstance(data, str):
        return _BREAKS_STR.sub(line_break.value.decode("ascii"), data)
    return _BREAKS_BYTES.sub(line_break.value, bytes(data))