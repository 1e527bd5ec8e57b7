import hashlib

import pytest

from pgpkit.errors import MessageError, RSAError
from pgpkit.hash import HashAlgorithm
from pgpkit.rsa import (
    RsaPrivateKey,
    decrypt,
    encrypt,
    generate_key,
    sign,
    verify,
)


def _int(value):
    return int.from_bytes(value, "big")


def _minimal(value):
    number = _int(value)
    return number.to_bytes((number.bit_length() + 7) // 8, "big")


@pytest.fixture(scope="module")
def keypair():
    public, secret = generate_key(1024)
    private = RsaPrivateKey(
        n=_int(public.n),
        e=_int(public.e),
        d=_int(secret.d),
        p=_int(secret.p),
        q=_int(secret.q),
    )
    return public, secret, private


def test_generated_params_are_consistent(keypair):
    public, secret, _ = keypair
    n, p, q, u = _int(public.n), _int(secret.p), _int(secret.q), _int(secret.u)
    assert n == p * q
    assert (u * p) % q == 1
    assert n.bit_length() == 1024
    assert public.e == b"\x01\x00\x01"


def test_generated_params_have_no_leading_zero(keypair):
    public, secret, _ = keypair
    assert len(public.n) == 128
    assert public.n == _minimal(public.n)
    assert secret.d == _minimal(secret.d)
    assert secret.p == _minimal(secret.p)


def test_generate_key_rejects_tiny_size():
    with pytest.raises(RSAError):
        generate_key(256)


def test_encrypt_decrypt_round_trip(keypair):
    public, _, private = keypair
    message = b"session key material"
    ciphertexts = encrypt(public.n, public.e, message)
    assert len(ciphertexts) == 1
    assert len(ciphertexts[0]) == 128
    assert decrypt(private, ciphertexts, b"") == message


def test_encrypt_is_deterministic_with_fixed_rng(keypair):
    public, _, private = keypair
    rng = lambda count: b"\x07" * count
    first = encrypt(public.n, public.e, b"abc", rng)
    second = encrypt(public.n, public.e, b"abc", rng)
    assert first == second
    assert decrypt(private, first, b"") == b"abc"


def test_encrypt_padding_skips_zero_random_bytes(keypair):
    public, _, private = keypair
    rng = lambda count: b"\x00\x05" * count
    ciphertexts = encrypt(public.n, public.e, b"xyz", rng)
    em = pow(_int(ciphertexts[0]), private.d, private.n).to_bytes(128, "big")
    assert em[:2] == b"\x00\x02"
    assert em[-4:] == b"\x00xyz"
    assert set(em[2:-4]) == {5}


def test_encrypt_rejects_too_long_message(keypair):
    public, _, _ = keypair
    with pytest.raises(RSAError, match="message too long"):
        encrypt(public.n, public.e, bytes(118))


def test_encrypt_accepts_longest_message(keypair):
    public, _, private = keypair
    message = bytes(range(117))
    assert decrypt(private, encrypt(public.n, public.e, message), b"") == message


def test_encrypt_rejects_small_exponent(keypair):
    public, _, _ = keypair
    with pytest.raises(RSAError, match="exponent too small"):
        encrypt(public.n, b"\x01", b"data")


def test_decrypt_requires_exactly_one_mpi(keypair):
    public, _, private = keypair
    ciphertext = encrypt(public.n, public.e, b"data")[0]
    with pytest.raises(MessageError, match="invalid input"):
        decrypt(private, [ciphertext, ciphertext], b"")
    with pytest.raises(MessageError):
        decrypt(private, [], b"")


def test_decrypt_rejects_garbage(keypair):
    _, _, private = keypair
    with pytest.raises(RSAError, match="decryption error"):
        decrypt(private, [b"\x01\x02\x03"], b"")


def test_decrypt_rejects_value_above_modulus(keypair):
    _, _, private = keypair
    with pytest.raises(RSAError):
        decrypt(private, [b"\xff" * 129], b"")


@pytest.mark.parametrize(
    "algorithm",
    [
        HashAlgorithm.MD5,
        HashAlgorithm.SHA1,
        HashAlgorithm.RIPEMD160,
        HashAlgorithm.SHA2_224,
        HashAlgorithm.SHA2_256,
        HashAlgorithm.SHA2_384,
        HashAlgorithm.SHA2_512,
        HashAlgorithm.SHA3_256,
        HashAlgorithm.SHA3_512,
    ],
)
def test_sign_verify_round_trip(keypair, algorithm):
    public, _, private = keypair
    digest = algorithm.digest(b"hello world")
    signatures = sign(private, algorithm, digest)
    assert len(signatures) == 1
    assert len(signatures[0]) == 128
    verify(public.n, public.e, algorithm, digest, signatures[0])
    other = algorithm.digest(b"hello world!")
    with pytest.raises(RSAError, match="verification error"):
        verify(public.n, public.e, algorithm, other, signatures[0])


def test_sign_is_deterministic(keypair):
    _, _, private = keypair
    digest = hashlib.sha256(b"msg").digest()
    first = sign(private, HashAlgorithm.SHA2_256, digest)[0]
    second = sign(private, HashAlgorithm.SHA2_256, digest)[0]
    assert first == second
    em = pow(_int(first), private.e, private.n).to_bytes(128, "big")
    assert em[:2] == b"\x00\x01"
    assert em.endswith(digest)


def test_signature_block_structure(keypair):
    _, _, private = keypair
    digest = hashlib.sha1(b"msg").digest()
    signature = sign(private, HashAlgorithm.SHA1, digest)[0]
    em = pow(_int(signature), private.e, private.n).to_bytes(128, "big")
    assert em[:2] == b"\x00\x01"
    assert em.endswith(digest)
    assert b"\x2b\x0e\x03\x02\x1a" in em


def test_sign_without_hash_prefix(keypair):
    public, _, private = keypair
    raw = b"raw payload"
    signature = sign(private, HashAlgorithm.NONE, raw)[0]
    verify(public.n, public.e, HashAlgorithm.NONE, raw, signature)
    em = pow(_int(signature), private.e, private.n).to_bytes(128, "big")
    assert em.endswith(b"\x00" + raw)


def test_sign_rejects_wrong_digest_length(keypair):
    _, _, private = keypair
    with pytest.raises(RSAError, match="input must be hashed"):
        sign(private, HashAlgorithm.SHA2_256, b"short")


def test_verify_rejects_tampered_signature(keypair):
    public, _, private = keypair
    digest = hashlib.sha256(b"data").digest()
    signature = bytearray(sign(private, HashAlgorithm.SHA2_256, digest)[0])
    signature[10] ^= 0x40
    with pytest.raises(RSAError):
        verify(public.n, public.e, HashAlgorithm.SHA2_256, digest, bytes(signature))


def test_verify_rejects_wrong_length_signature(keypair):
    public, _, private = keypair
    digest = hashlib.sha256(b"data").digest()
    signature = sign(private, HashAlgorithm.SHA2_256, digest)[0]
    with pytest.raises(RSAError, match="verification error"):
        verify(public.n, public.e, HashAlgorithm.SHA2_256, digest, signature[1:])


def test_verify_rejects_other_hash_algorithm(keypair):
    public, _, private = keypair
    digest = hashlib.sha256(b"data").digest()
    signature = sign(private, HashAlgorithm.SHA2_256, digest)[0]
    with pytest.raises(RSAError):
        verify(public.n, public.e, HashAlgorithm.SHA3_256, digest, signature)