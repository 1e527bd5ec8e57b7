import pytest

from pgpkit.algorithms import AeadAlgorithm, PublicKeyAlgorithm


def test_aead_default_is_none():
    assert AeadAlgorithm.default() is AeadAlgorithm.NONE


def test_aead_from_value():
    assert AeadAlgorithm(2) is AeadAlgorithm.OCB


def test_aead_unknown_value():
    with pytest.raises(ValueError):
        AeadAlgorithm(3)


def test_public_key_from_value():
    assert PublicKeyAlgorithm(22) is PublicKeyAlgorithm.EDDSA


def test_public_key_round_trip():
    for algorithm in PublicKeyAlgorithm:
        assert PublicKeyAlgorithm(int(algorithm)) is algorithm


def test_public_key_reserved_gap():
    with pytest.raises(ValueError):
        PublicKeyAlgorithm(5)