import hashlib
import io

import pytest

from pgpkit.checksum import (
    SimpleChecksum,
    calculate_sha1,
    calculate_simple,
    simple,
    simple_to_writer,
)
from pgpkit.errors import MessageError

DATA = bytes(range(256)) * 3


def test_wraps_modulo_65536():
    assert calculate_simple(bytes([1]) * 70000) == 4464


def test_incremental_equals_one_shot():
    checksum = SimpleChecksum()
    checksum.update(DATA[:100])
    checksum.update(DATA[100:])
    assert checksum.finish() == calculate_simple(DATA)


def test_write_returns_length():
    checksum = SimpleChecksum()
    assert checksum.write(DATA) == len(DATA)
    assert checksum.finish() == calculate_simple(DATA)


def test_finalize_is_big_endian_of_finish():
    checksum = SimpleChecksum()
    checksum.update(DATA)
    assert int.from_bytes(checksum.finalize(), "big") == checksum.finish()


def test_simple_accepts_correct_checksum():
    out = io.BytesIO()
    simple_to_writer(DATA, out)
    simple(out.getvalue() + b"trailing", DATA)
    assert len(out.getvalue()) == 2


def test_simple_rejects_wrong_checksum():
    good = calculate_simple(DATA)
    bad = ((good + 1) & 0xFFFF).to_bytes(2, "big")
    with pytest.raises(MessageError, match="invalid simple checksum"):
        simple(bad, DATA)


def test_to_writer_matches_finalize():
    checksum = SimpleChecksum()
    checksum.update(DATA)
    out = io.BytesIO()
    checksum.to_writer(out)
    assert out.getvalue() == checksum.finalize()


def test_sha1():
    result = calculate_sha1(DATA)
    assert result == hashlib.sha1(DATA).digest()
    assert len(result) == 20