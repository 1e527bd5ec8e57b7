# pgpkit

Low-level building blocks for working with OpenPGP data in Python.

## What it provides

- `pgpkit.sym` — `SymmetricKeyAlgorithm` with OpenPGP CFB encryption and
  decryption, including the MDC-protected variant (`encrypt_protected` /
  `decrypt_protected`) and plain CFB (`encrypt_with_iv_regular` /
  `decrypt_with_iv_regular`).
- `pgpkit.aes_kw` — AES key wrap and unwrap (`wrap`, `unwrap`) for 128, 192 and
  256-bit key-encryption keys.
- `pgpkit.rsa` — PKCS#1 v1.5 RSA `encrypt`, `decrypt`, `sign`, `verify` and
  `generate_key`.
- `pgpkit.hash` — `HashAlgorithm`, with one-shot `digest` and incremental
  `Hasher` objects.
- `pgpkit.checksum` — the two-octet `SimpleChecksum` and the SHA-1 checksum.
- `pgpkit.ecc_curve` — `ECCCurve`, with names, OIDs and bit sizes, plus
  `ecc_curve_from_oid`.
- `pgpkit.algorithms` — `PublicKeyAlgorithm` and `AeadAlgorithm` identifiers.
- `pgpkit.normalize_lines` — `normalize` line endings to a `LineBreak` style.
- `pgpkit.line_reader` — `LineReader`, a seekable reader that skips line breaks.
- `pgpkit.errors` — `PgpError` and its subclasses, raised wherever an operation
  fails.

## Installation

```
pip install pgpkit
```

## Examples

Symmetric encryption with a modification detection code:

```python
from pgpkit.sym import SymmetricKeyAlgorithm

alg = SymmetricKeyAlgorithm.AES128
key = bytes(alg.key_size())
ciphertext = alg.encrypt_protected(key, b"hello")
assert alg.decrypt_protected(key, ciphertext) == b"hello"
```

AES key wrap:

```python
from pgpkit.aes_kw import wrap, unwrap

kek = bytes(range(16))
wrapped = wrap(kek, bytes(16))
assert unwrap(kek, wrapped) == bytes(16)
```

Hashing:

```python
from pgpkit.hash import HashAlgorithm

digest = HashAlgorithm.SHA2_256.digest(b"data")
assert len(digest) == HashAlgorithm.SHA2_256.digest_size()
```

Line-ending normalization:

```python
from pgpkit.normalize_lines import LineBreak, normalize

assert normalize(b"a\r\nb\rc", LineBreak.LF) == b"a\nb\nc"
```

Errors are raised as subclasses of `pgpkit.errors.PgpError`; a failed integrity
check in `decrypt_protected`, for instance, raises `MdcError`.

## Running the tests

```
pip install "pgpkit[test]"
pytest
```