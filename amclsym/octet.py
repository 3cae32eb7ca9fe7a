"""Bounded byte strings ("octets") with append, compare and encoding helpers."""

from __future__ import annotations

import base64
import hmac
import string
from collections.abc import Iterable

_HEX = frozenset(string.hexdigits)


def _as_bytes(data: Octet | bytes | bytearray | Iterable[int]) -> bytes:
    return bytes(data)


def _nibble(ch: str) -> int:
    return int(ch, 16) if ch in _HEX else 0


class Octet:
    """A byte string that never grows beyond ``max_len`` bytes.

    Appending operations silently truncate once the capacity is reached.
    """

    __hash__ = None  # mutable

    def __init__(self, max_len: int, data: bytes | Iterable[int] = b"") -> None:
        if max_len < 0:
            raise ValueError("octet capacity must not be negative")
        self.max_len = max_len
        self._val = bytearray()
        self.append_bytes(data)

    def __bytes__(self) -> bytes:
        return bytes(self._val)

    def __len__(self) -> int:
        return len(self._val)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Octet):
            return self._val == other._val
        if isinstance(other, (bytes, bytearray, memoryview)):
            return bytes(self._val) == bytes(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Octet(max_len={self.max_len}, data={bytes(self._val)!r})"

    @property
    def room(self) -> int:
        """Number of bytes that can still be appended."""
        return self.max_len - len(self._val)

    def output(self) -> None:
        """Print the contents as lower-case hex followed by a newline."""
        print(self.to_hex())

    def output_string(self) -> None:
        """Print the contents as characters, without a trailing newline."""
        print(self.to_str(), end="")

    def append_string(self, text: str) -> None:
        """Append the characters of text, one byte each; truncates if no room."""
        self.append_bytes(text.encode("latin-1"))

    def append_bytes(self, data: bytes | Iterable[int]) -> None:
        """Append raw bytes; truncates if no room."""
        self._val += _as_bytes(data)[: self.room]

    def append_octet(self, other: Octet | None) -> None:
        """Append another octet; truncates at capacity. None is ignored."""
        if other is not None:
            self.append_bytes(other)

    def append_byte(self, value: int, repeat: int = 1) -> None:
        """Append the byte value repeat times; truncates if no room."""
        count = max(0, min(repeat, self.room))
        self._val += bytes([value & 0xFF]) * count

    def append_int(self, value: int, length: int) -> None:
        """Append value as a big-endian integer of length bytes.

        Nothing happens if length is not positive or there is no room.
        """
        n = len(self._val) + length
        if n > self.max_len or length <= 0:
            return
        self._val += bytes(length)
        i = n
        while value > 0 and i > 0:
            i -= 1
            self._val[i] = value % 256
            value //= 256

    def ncompare(self, other: Octet | bytes, n: int) -> bool:
        """True if the first n bytes of both are equal (constant time)."""
        theirs = _as_bytes(other)
        if n > len(theirs) or n > len(self._val):
            return False
        return hmac.compare_digest(bytes(self._val[:n]), theirs[:n])

    def shift_left(self, n: int) -> None:
        """Drop the leftmost n bytes."""
        if n >= len(self._val):
            self._val.clear()
            return
        del self._val[:n]

    def xor(self, other: Octet | bytes) -> None:
        """XOR the common leading bytes of other into this octet."""
        for i, b in enumerate(_as_bytes(other)[: len(self._val)]):
            self._val[i] ^= b

    def xor_byte(self, value: int) -> None:
        """XOR every byte with value."""
        value &= 0xFF
        self._val[:] = bytes(b ^ value for b in self._val)

    def empty(self) -> None:
        """Set the length to zero."""
        self._val.clear()

    def clear(self) -> None:
        """Zeroise the contents and set the length to zero."""
        for i in range(len(self._val)):
            self._val[i] = 0
        self._val.clear()

    def pad(self, n: int) -> None:
        """Left-pad with zero bytes to exactly n bytes."""
        if len(self._val) > n or n > self.max_len:
            raise ValueError(f"cannot pad {len(self._val)} bytes to {n} (capacity {self.max_len})")
        self._val[:0] = bytes(n - len(self._val))

    def copy_from(self, other: Octet | bytes) -> None:
        """Replace the contents with other's; truncates if no room."""
        self.clear()
        self._val += _as_bytes(other)[: self.max_len]

    def chop(self, n: int) -> Octet:
        """Truncate to n bytes and return the removed tail as a new octet."""
        if n >= len(self._val):
            return Octet(0)
        rest = bytes(self._val[n:])
        del self._val[n:]
        return Octet(len(rest), rest)

    def to_base64(self) -> str:
        """Standard padded base64 encoding of the contents."""
        return base64.b64encode(bytes(self._val)).decode("ascii")

    @classmethod
    def from_base64(cls, text: str, max_len: int | None = None) -> Octet:
        """Decode base64 text, ignoring white space; truncated to max_len."""
        cleaned = "".join(text.split())
        data = base64.b64decode(cleaned, validate=True)
        return cls(len(data) if max_len is None else max_len, data)

    def to_hex(self) -> str:
        """Lower-case hex encoding of the contents."""
        return bytes(self._val).hex()

    @classmethod
    def from_hex(cls, text: str, max_len: int | None = None) -> Octet:
        """Decode hex text; non-hex digits count as zero and an odd tail gets a zero nibble."""
        out = bytearray()
        chars = iter(text)
        for hi in chars:
            lo = next(chars, "0")
            out.append(_nibble(hi) * 16 + _nibble(lo))
        return cls(len(out) if max_len is None else max_len, out)

    def to_str(self) -> str:
        """The contents as a string, one character per byte."""
        return bytes(self._val).decode("latin-1")