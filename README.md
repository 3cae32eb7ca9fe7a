# amclsym

Symmetric building blocks written in plain Python, with no third-party
dependencies:

- `amclsym.aes` — the AES block cipher (16, 24 and 32-byte keys) with
  ECB, CBC, CFB, OFB and CTR modes of operation (`Aes`, `Mode`).
- `amclsym.gcm` — AES-GCM authenticated encryption (`Gcm`, `GcmStatus`,
  `GcmStateError`).
- `amclsym.octet` — a byte string with a fixed capacity, plus hex and
  base64 conversions (`Octet`).

These are reference implementations meant to give byte-for-byte
compatible results with other implementations of the same algorithms.
They are not hardened against timing attacks and are slow compared with
native libraries.

## Installation

```
pip install amclsym
```

For running the test suite:

```
pip install "amclsym[test]"
pytest
```

## AES

`Aes(mode, key, iv=None)` builds the key schedule for a 16, 24 or 32-byte
key; any other length raises `ValueError`. The IV, when given, must be at
least 16 bytes; its first 16 bytes load the feedback register. Without
an IV (and always in ECB mode) the register is all zeros.

```python
from amclsym.aes import Aes, Mode

key = bytes(range(16))
iv = bytes(16)

enc = Aes(Mode.CBC, key, iv)
ciphertext = enc.encrypt(bytes(16))

dec = Aes(Mode.CBC, key, iv)
assert dec.decrypt(ciphertext) == bytes(16)
```

- `ecb_encrypt(block)` / `ecb_decrypt(block)` transform exactly one
  16-byte block, whatever the mode.
- `encrypt(block)` / `decrypt(block)` process one unit in the current
  mode. ECB and CBC need exactly 16 bytes. The CFB, OFB and CTR modes
  (`Mode.CFB1`, `Mode.OFB8`, `Mode.CTR16` and so on) need at least
  `mode.segment` bytes; only the first `mode.segment` bytes are
  transformed and the rest of the input is returned unchanged.
- In CFB modes, the register bytes shifted out by the last call are
  left in the `fell_off` attribute as a big-endian integer.
- `reset(mode, iv=None)` changes the mode and reloads the register;
  `register()` returns its current contents.
- `end()` wipes the key schedules and the register.

## AES-GCM

```python
from amclsym.gcm import Gcm

key = bytes(16)
nonce = bytes(12)

g = Gcm(key, nonce)
g.add_header(b"header data")
ciphertext = g.add_plain(b"attack at dawn")
tag = g.finish()

d = Gcm(key, nonce)
d.add_header(b"header data")
plaintext = d.add_cipher(ciphertext)
assert d.finish() == tag
```

A 12-byte IV is used directly with a 32-bit counter; an IV of any other
length is first hashed with GHASH. `finish()` returns the full 16-byte
tag; comparing tags on decryption is left to the caller.

Headers come first, then data. Any number of `add_header` calls whose
data is a multiple of 16 bytes may be followed by one shorter one; the
same holds for `add_plain`/`add_cipher`. Calls made out of order —
headers after data, more data after a chunk whose length is not a
multiple of 16, or `finish` twice — raise `GcmStateError`. The current
stage is available as `status`, a `GcmStatus`.

## Octet strings

An `Octet` holds at most `max_len` bytes; appending beyond its capacity
truncates silently.

```python
from amclsym.octet import Octet

o = Octet.from_hex("000102030405", 32)
o.append_string("abc")
o.append_int(258, 2)          # big-endian: 01 02
print(o.to_hex(), o.to_base64(), len(o))
```

- Appending: `append_bytes`, `append_string` (one byte per character,
  Latin-1), `append_octet`, `append_byte(value, repeat)`,
  `append_int(value, length)`.
- Editing: `shift_left(n)`, `chop(n)` (truncates and returns the tail as
  a new `Octet`), `pad(n)` (left-pads with zeros; raises `ValueError`
  if the octet is longer than `n` or `n` exceeds the capacity),
  `xor(other)`, `xor_byte(value)`, `copy_from(other)`, `empty()`,
  `clear()`.
- Comparison: `==` against another `Octet` or bytes, and
  `ncompare(other, n)`, a constant-time comparison of the first `n`
  bytes.
- Conversion: `bytes(o)`, `to_hex()`, `to_base64()`, `to_str()`, and the
  class methods `from_hex(text, max_len=None)` and
  `from_base64(text, max_len=None)`. `from_hex` treats non-hex digits as
  zero; `from_base64` ignores white space and rejects other invalid
  input.
- `output()` prints the contents as hex with a newline;
  `output_string()` prints them as characters without one.

## What this package does not do

There are no hash functions, HMAC, key derivation (KDF2, PBKDF2) or
padded CBC helpers here, and no public-key algorithms. The package
offers no command-line tool; it is a library only.