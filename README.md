# dilithium_kara

A pure-Python implementation of the Dilithium post-quantum digital signature
scheme in its three security modes (2, 3 and 5). Polynomial products on the
key generation, signing and verification paths are computed with recursive
Karatsuba multiplication modulo `x^256 + 1`. An NTT module is included as
well, but the scheme does not use it.

Signing is deterministic by default. Pass `randomized=True` to draw the
masking seed from the operating system instead.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

```python
from dilithium_kara.sign import BadSignatureError, Dilithium

scheme = Dilithium(mode=2, randomized=False)
pk, sk = scheme.keypair()

message = b"attack at dawn"

# Detached signature
sig = scheme.signature(message, sk)
scheme.verify(sig, message, pk)  # raises BadSignatureError if invalid

# Attached signature: signature followed by the message
signed = scheme.sign(message, sk)
assert scheme.open(signed, pk) == message
```

`keypair()` returns the encoded public key and the encoded secret key as
`bytes`. Passing a 32-byte `seed` to `keypair` derives the keys from that
seed, so the same seed always gives the same key pair. Without a seed, one is
drawn with `os.urandom`.

`verify` and `open` raise `BadSignatureError` (a `ValueError`) when a
signature has the wrong length, is not canonically encoded, is out of bounds
or does not match. Malformed key lengths raise `ValueError`.

## Sizes

`dilithium_kara.params.params_for(mode)` returns a frozen `Params` record with
the constants of a mode and the byte lengths of its encodings
(`public_key_bytes`, `secret_key_bytes`, `signature_bytes`). An unsupported
mode raises `ValueError`.

| Mode | Public key | Secret key | Signature |
|------|-----------:|-----------:|----------:|
| 2    | 1312       | 2528       | 2420      |
| 3    | 1952       | 4000       | 3293      |
| 5    | 2592       | 4864       | 4595      |

## Modules

- `params`: mode constants and derived sizes
- `reduce`, `rounding`: arithmetic modulo `Q` and rounding into high and low bits
- `symmetric`: SHAKE128/SHAKE256 streams (`XofStream`) keyed with a seed and a nonce
- `ntt`: forward and inverse number-theoretic transform
- `karatsuba`: polynomial multiplication in `Z_Q[x]/(x^256 + 1)`
- `bitpack`: coefficient bit packing
- `poly`, `polyvec`: the immutable `Poly` type, polynomial vectors and sampling
- `packing`: key and signature encodings (`SecretKey`, `Signature`, `MalformedSignatureError`)
- `sign`: the `Dilithium` class for key generation, signing and verification

## What it does not do

There is no command-line tool and no key storage: keys and signatures are
plain `bytes` for the caller to keep. Only the SHAKE-based variant is
available; there is no AES-based stream option.

Pure Python is slow. A key generation or a signature takes a noticeable
fraction of a second or more, and nothing here is constant-time. This package
is meant for study and experimentation, not for production use.