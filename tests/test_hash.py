import hashlib

import pytest

from pgpkit.errors import UnimplementedError, UnsupportedError
from pgpkit.hash import HashAlgorithm

SUPPORTED = [
    HashAlgorithm.MD5,
    HashAlgorithm.SHA1,
    HashAlgorithm.RIPEMD160,
    HashAlgorithm.SHA2_256,
    HashAlgorithm.SHA2_384,
    HashAlgorithm.SHA2_512,
    HashAlgorithm.SHA2_224,
    HashAlgorithm.SHA3_256,
    HashAlgorithm.SHA3_512,
]

DATA = b"The quick brown fox jumps over the lazy dog" * 7


def test_default():
    assert HashAlgorithm.default() is HashAlgorithm.SHA2_256


def test_known_vectors():
    assert HashAlgorithm.SHA1.digest(b"abc").hex() == "a9993e364706816aba3e25717850c26c9cd0d89d"
    assert HashAlgorithm.RIPEMD160.digest(b"abc").hex() == "8eb208f7e05d987a9b044a8e98c6b087f15a0bfc"
    assert HashAlgorithm.MD5.digest(b"").hex() == "d41d8cd98f00b204e9800998ecf8427e"


@pytest.mark.parametrize(
    "algorithm,name",
    [
        (HashAlgorithm.SHA2_256, "sha256"),
        (HashAlgorithm.SHA2_512, "sha512"),
        (HashAlgorithm.SHA3_256, "sha3_256"),
    ],
)
def test_matches_hashlib(algorithm, name):
    assert algorithm.digest(DATA) == hashlib.new(name, DATA).digest()


def test_digest_size_matches_output():
    assert HashAlgorithm.SHA2_384.digest_size() == 48
    assert HashAlgorithm.MD5.digest_size() == 16
    for algorithm in SUPPORTED:
        assert algorithm.digest_size() == len(algorithm.digest(DATA))


def test_incremental_hasher_matches_digest():
    hasher = HashAlgorithm.SHA1.new_hasher()
    hasher.update(b"ab")
    hasher.write(b"c")
    assert hasher.finish().hex() == "a9993e364706816aba3e25717850c26c9cd0d89d"
    for algorithm in SUPPORTED:
        hasher = algorithm.new_hasher()
        hasher.update(DATA[:10])
        assert hasher.write(DATA[10:]) == len(DATA) - 10
        assert hasher.finish() == algorithm.digest(DATA)


def test_none_is_unimplemented():
    with pytest.raises(UnimplementedError):
        HashAlgorithm.NONE.digest(DATA)
    with pytest.raises(UnimplementedError):
        HashAlgorithm.NONE.new_hasher()


def test_private10_is_unsupported():
    with pytest.raises(UnsupportedError):
        HashAlgorithm.PRIVATE10.digest(DATA)


def test_digest_size_of_unsupported_is_zero():
    assert HashAlgorithm.NONE.digest_size() == 0
    assert HashAlgorithm.PRIVATE10.digest_size() == 0