"""AES block cipher with ECB, CBC, CFB, OFB and CTR modes of operation."""

from __future__ import annotations

import enum
from collections.abc import Sequence

BLOCK_SIZE = 16
_NB = 4
_MASK32 = 0xFFFFFFFF


class Mode(enum.Enum):
    """Modes of operation; the CFB/OFB/CTR suffix is the segment size in bytes."""

    ECB = "ecb"
    CBC = "cbc"
    CFB1 = "cfb1"
    CFB2 = "cfb2"
    CFB4 = "cfb4"
    OFB1 = "ofb1"
    OFB2 = "ofb2"
    OFB4 = "ofb4"
    OFB8 = "ofb8"
    OFB16 = "ofb16"
    CTR1 = "ctr1"
    CTR2 = "ctr2"
    CTR4 = "ctr4"
    CTR8 = "ctr8"
    CTR16 = "ctr16"

    @property
    def segment(self) -> int:
        """Number of bytes processed per call."""
        if self in (Mode.ECB, Mode.CBC):
            return BLOCK_SIZE
        return int(self.value[3:])

    @property
    def family(self) -> str:
        return self.value[:3]


def _xtime(a: int) -> int:
    a <<= 1
    if a & 0x100:
        a ^= 0x11B
    return a


def _build_tables():
    ptab = [1] * 256
    for i in range(1, 256):
        prev = ptab[i - 1]
        ptab[i] = prev ^ _xtime(prev)
    ltab = [0] * 256
    for i, p in enumerate(ptab):
        ltab[p] = i

    def bmul(x: int, y: int) -> int:
        if x and y:
            return ptab[(ltab[x] + ltab[y]) % 255]
        return 0

    def rot8(b: int, n: int) -> int:
        return ((b << n) | (b >> (8 - n))) & 0xFF

    fbsub = [0] * 256
    for x in range(256):
        y = ptab[255 - ltab[x]] if x else 0
        fbsub[x] = y ^ rot8(y, 1) ^ rot8(y, 2) ^ rot8(y, 3) ^ rot8(y, 4) ^ 0x63
    rbsub = [0] * 256
    for x, s in enumerate(fbsub):
        rbsub[s] = x

    ftable = [
        int.from_bytes(bytes((bmul(2, s), s, s, bmul(3, s))), "little")
        for s in fbsub
    ]
    rtable = [
        int.from_bytes(
            bytes((bmul(0xE, s), bmul(0x9, s), bmul(0xD, s), bmul(0xB, s))),
            "little",
        )
        for s in rbsub
    ]
    rco = [1]
    while len(rco) < 16:
        rco.append(_xtime(rco[-1]) & 0xFF)
    return bmul, fbsub, rbsub, ftable, rtable, rco


_bmul, _FBSUB, _RBSUB, _FTABLE, _RTABLE, _RCO = _build_tables()
_INCO = (0xB, 0xD, 0x9, 0xE)


def _pack(b: Sequence[int]) -> int:
    return b[0] | (b[1] << 8) | (b[2] << 16) | (b[3] << 24)


def _unpack(a: int) -> bytes:
    return (a & _MASK32).to_bytes(4, "little")


def _rotl8(x: int) -> int:
    return ((x << 8) | (x >> 24)) & _MASK32


def _rotl16(x: int) -> int:
    return ((x << 16) | (x >> 16)) & _MASK32


def _rotl24(x: int) -> int:
    return ((x << 24) | (x >> 8)) & _MASK32


def _sub_byte(a: int) -> int:
    return _pack([_FBSUB[b] for b in _unpack(a)])


def _product(x: int, y: int) -> int:
    result = 0
    for a, b in zip(_unpack(x), _unpack(y)):
        result ^= _bmul(a, b)
    return result


def _inv_mix_col(x: int) -> int:
    b = [0] * 4
    m = _pack(_INCO)
    for idx in (3, 2, 1, 0):
        b[idx] = _product(m, x)
        m = _rotl24(m)
    return _pack(b)


def _increment(counter: bytearray) -> None:
    for i in range(BLOCK_SIZE):
        counter[i] = (counter[i] + 1) & 0xFF
        if counter[i]:
            break


class Aes:
    """An AES instance keyed with a 16, 24 or 32 byte key."""

    def __init__(self, mode: Mode, key: bytes, iv: bytes | None = None) -> None:
        nk = len(key) // 4
        if len(key) % 4 or nk not in (4, 6, 8):
            raise ValueError("AES key must be 16, 24 or 32 bytes long")
        nr = 6 + nk
        self.nk = nk
        self.nr = nr
        self.fell_off = 0
        self._f = bytearray(BLOCK_SIZE)
        self.mode = Mode.ECB
        self.reset(mode, iv)

        n = _NB * (nr + 1)
        fkey = [0] * n
        for i in range(nk):
            fkey[i] = _pack(key[4 * i:4 * i + 4])
        j, k = nk, 0
        while j < n:
            fkey[j] = fkey[j - nk] ^ _sub_byte(_rotl24(fkey[j - 1])) ^ _RCO[k]
            if nk <= 6:
                for i in range(1, nk):
                    if i + j >= n:
                        break
                    fkey[i + j] = fkey[i + j - nk] ^ fkey[i + j - 1]
            else:
                for i in range(1, 4):
                    if i + j >= n:
                        break
                    fkey[i + j] = fkey[i + j - nk] ^ fkey[i + j - 1]
                if j + 4 < n:
                    fkey[j + 4] = fkey[j + 4 - nk] ^ _sub_byte(fkey[j + 3])
                for i in range(5, nk):
                    if i + j >= n:
                        break
                    fkey[i + j] = fkey[i + j - nk] ^ fkey[i + j - 1]
            j += nk
            k += 1

        rkey = [0] * n
        for j in range(_NB):
            rkey[j + n - _NB] = fkey[j]
        for i in range(_NB, n - _NB, _NB):
            k = n - _NB - i
            for j in range(_NB):
                rkey[k + j] = _inv_mix_col(fkey[i + j])
        for j in range(n - _NB, n):
            rkey[j - n + _NB] = fkey[j]
        self._fkey = fkey
        self._rkey = rkey

    def reset(self, mode: Mode, iv: bytes | None = None) -> None:
        """Set the mode and reload the feedback register from iv (zeros if none)."""
        self.mode = mode
        self._f = bytearray(BLOCK_SIZE)
        if mode is not Mode.ECB and iv is not None:
            if len(iv) < BLOCK_SIZE:
                raise ValueError("IV must be at least 16 bytes long")
            self._f[:] = iv[:BLOCK_SIZE]

    def register(self) -> bytes:
        """Current contents of the feedback register."""
        return bytes(self._f)

    @staticmethod
    def _check_block(block: bytes) -> None:
        if len(block) != BLOCK_SIZE:
            raise ValueError("AES block must be exactly 16 bytes")

    def _rounds(self, block: bytes, keys: list[int], table: list[int],
                sbox: list[int], order: tuple[int, int, int]) -> bytes:
        self._check_block(block)
        x = [_pack(block[4 * i:4 * i + 4]) ^ keys[i] for i in range(_NB)]
        o1, o2, o3 = order
        k = _NB
        for _ in range(1, self.nr):
            x = [
                keys[k + i]
                ^ table[x[i] & 0xFF]
                ^ _rotl8(table[(x[(i + o1) % 4] >> 8) & 0xFF])
                ^ _rotl16(table[(x[(i + o2) % 4] >> 16) & 0xFF])
                ^ _rotl24(table[x[(i + o3) % 4] >> 24])
                for i in range(_NB)
            ]
            k += 4
        y = [
            keys[k + i]
            ^ sbox[x[i] & 0xFF]
            ^ _rotl8(sbox[(x[(i + o1) % 4] >> 8) & 0xFF])
            ^ _rotl16(sbox[(x[(i + o2) % 4] >> 16) & 0xFF])
            ^ _rotl24(sbox[x[(i + o3) % 4] >> 24])
            for i in range(_NB)
        ]
        return b"".join(_unpack(w) for w in y)

    def ecb_encrypt(self, block: bytes) -> bytes:
        """Encrypt a single 16-byte block."""
        return self._rounds(block, self._fkey, _FTABLE, _FBSUB, (1, 2, 3))

    def ecb_decrypt(self, block: bytes) -> bytes:
        """Decrypt a single 16-byte block."""
        return self._rounds(block, self._rkey, _RTABLE, _RBSUB, (3, 2, 1))

    def _segment_input(self, block: bytes) -> bytearray:
        size = self.mode.segment
        if self.mode.family in ("ecb", "cbc"):
            self._check_block(block)
        elif len(block) < size:
            raise ValueError(f"{self.mode.name} needs at least {size} bytes")
        return bytearray(block)

    def _stream(self, buff: bytearray, decrypting: bool) -> bytes:
        size = self.mode.segment
        family = self.mode.family
        if family == "cfb":
            self.fell_off = int.from_bytes(self._f[:size], "big")
            keystream = self.ecb_encrypt(bytes(self._f))
            self._f[:BLOCK_SIZE - size] = self._f[size:]
            for j in range(size):
                if decrypting:
                    self._f[BLOCK_SIZE - size + j] = buff[j]
                    buff[j] ^= keystream[j]
                else:
                    buff[j] ^= keystream[j]
                    self._f[BLOCK_SIZE - size + j] = buff[j]
        elif family == "ofb":
            self._f[:] = self.ecb_encrypt(bytes(self._f))
            for j in range(size):
                buff[j] ^= self._f[j]
        else:
            keystream = self.ecb_encrypt(bytes(self._f))
            for j in range(size):
                buff[j] ^= keystream[j]
            _increment(self._f)
        return bytes(buff)

    def encrypt(self, block: bytes) -> bytes:
        """Encrypt one block or segment in the current mode and return the result."""
        buff = self._segment_input(block)
        self.fell_off = 0
        if self.mode is Mode.ECB:
            return self.ecb_encrypt(bytes(buff))
        if self.mode is Mode.CBC:
            out = self.ecb_encrypt(bytes(a ^ b for a, b in zip(buff, self._f)))
            self._f[:] = out
            return out
        return self._stream(buff, decrypting=False)

    def decrypt(self, block: bytes) -> bytes:
        """Decrypt one block or segment in the current mode and return the result."""
        buff = self._segment_input(block)
        self.fell_off = 0
        if self.mode is Mode.ECB:
            return self.ecb_decrypt(bytes(buff))
        if self.mode is Mode.CBC:
            previous = bytes(self._f)
            self._f[:] = buff
            plain = self.ecb_decrypt(bytes(buff))
            return bytes(a ^ b for a, b in zip(plain, previous))
        return self._stream(buff, decrypting=True)

    def end(self) -> None:
        """Wipe the key schedules and the feedback register."""
        self._fkey = [0] * len(self._fkey)
        self._rkey = [0] * len(self._rkey)
        self._f = bytearray(BLOCK_SIZE)
        self.fell_off = 0