"""AES-GCM authenticated encryption.

Calls must follow this order: any number of ``add_header`` calls whose data
is a multiple of 16 bytes, optionally one final shorter header, then any
number of ``add_plain``/``add_cipher`` calls of multiples of 16 bytes,
optionally one final shorter one, then ``finish`` to obtain the 16-byte tag.
"""

from __future__ import annotations

import enum

from amclsym.aes import BLOCK_SIZE, Aes, Mode

_R = 0xE1 << 120
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


class GcmStatus(enum.Enum):
    ACCEPTING_HEADER = 0
    ACCEPTING_CIPHER = 1
    NOT_ACCEPTING_MORE = 2
    FINISHED = 3


class GcmStateError(RuntimeError):
    """Raised when data is added out of the permitted order."""


def _gf_mul(x: int, h: int) -> int:
    """Multiply in GF(2^128) using the GCM bit ordering."""
    z = 0
    v = h
    for bit in range(127, -1, -1):
        if (x >> bit) & 1:
            z ^= v
        v = (v >> 1) ^ _R if v & 1 else v >> 1
    return z


def _blocks(data: bytes):
    for start in range(0, len(data), BLOCK_SIZE):
        yield data[start:start + BLOCK_SIZE]


class Gcm:
    """One GCM encryption or decryption under a 16, 24 or 32 byte AES key."""

    def __init__(self, key: bytes, iv: bytes) -> None:
        iv = bytes(iv)
        self._aes = Aes(Mode.ECB, bytes(key))
        self._h = int.from_bytes(self._aes.ecb_encrypt(bytes(BLOCK_SIZE)), "big")
        self._x = 0
        self._len_a = 0
        self._len_c = 0
        if len(iv) == 12:
            self._counter = bytearray(iv + (1).to_bytes(4, "big"))
        else:
            self._absorb(iv)
            self._len_c = len(iv)
            self._wrap()
            self._counter = bytearray(self._x.to_bytes(16, "big"))
            self._x = 0
            self._len_c = 0
        self._y0 = bytes(self._counter)
        self.status = GcmStatus.ACCEPTING_HEADER

    def _absorb(self, data: bytes) -> None:
        for chunk in _blocks(data):
            self._x ^= int.from_bytes(chunk.ljust(BLOCK_SIZE, b"\0"), "big")
            self._x = _gf_mul(self._x, self._h)

    def _wrap(self) -> None:
        lengths = (((self._len_a * 8) & _MASK64) << 64) | ((self._len_c * 8) & _MASK64)
        self._x = _gf_mul(self._x ^ lengths, self._h)

    def _ctr(self, data: bytes) -> bytes:
        out = bytearray()
        for chunk in _blocks(data):
            value = (int.from_bytes(self._counter[12:], "big") + 1) & _MASK32
            self._counter[12:] = value.to_bytes(4, "big")
            stream = self._aes.ecb_encrypt(bytes(self._counter))
            out += bytes(a ^ b for a, b in zip(chunk, stream))
        return bytes(out)

    def _enter_cipher(self) -> None:
        if self.status is GcmStatus.ACCEPTING_HEADER:
            self.status = GcmStatus.ACCEPTING_CIPHER
        if self.status is not GcmStatus.ACCEPTING_CIPHER:
            raise GcmStateError(f"cannot add data in state {self.status.name}")

    def _after_cipher(self, length: int) -> None:
        self._len_c += length
        if length % BLOCK_SIZE:
            self.status = GcmStatus.NOT_ACCEPTING_MORE

    def add_header(self, header: bytes) -> None:
        """Authenticate header data without encrypting it."""
        if self.status is not GcmStatus.ACCEPTING_HEADER:
            raise GcmStateError(f"cannot add header in state {self.status.name}")
        header = bytes(header)
        self._absorb(header)
        self._len_a += len(header)
        if len(header) % BLOCK_SIZE:
            self.status = GcmStatus.ACCEPTING_CIPHER

    def add_plain(self, plain: bytes) -> bytes:
        """Encrypt and authenticate plaintext; return the ciphertext."""
        self._enter_cipher()
        cipher = self._ctr(bytes(plain))
        self._absorb(cipher)
        self._after_cipher(len(cipher))
        return cipher

    def add_cipher(self, cipher: bytes) -> bytes:
        """Authenticate and decrypt ciphertext; return the plaintext."""
        self._enter_cipher()
        cipher = bytes(cipher)
        self._absorb(cipher)
        plain = self._ctr(cipher)
        self._after_cipher(len(cipher))
        return plain

    def finish(self) -> bytes:
        """Complete the computation and return the 16-byte tag."""
        if self.status is GcmStatus.FINISHED:
            raise GcmStateError("GCM computation already finished")
        self._wrap()
        mask = self._aes.ecb_encrypt(self._y0)
        tag = bytes(a ^ b for a, b in zip(mask, self._x.to_bytes(16, "big")))
        self._x = 0
        self._y0 = bytes(BLOCK_SIZE)
        self.status = GcmStatus.FINISHED
        self._aes.end()
        return tag