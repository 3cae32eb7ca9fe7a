import base64
import binascii

import pytest
from hypothesis import given, strategies as st

from amclsym.octet import Octet


def test_init_truncates_to_capacity():
    o = Octet(3, b"abcdef")
    assert bytes(o) == b"abc"
    assert len(o) == 3


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        Octet(-1)


def test_append_bytes_truncates():
    o = Octet(5, b"ab")
    o.append_bytes(b"cdefg")
    assert bytes(o) == b"abcde"


def test_append_string():
    o = Octet(40)
    o.append_string("M0ng00se")
    assert bytes(o) == b"M0ng00se"
    assert o.to_str() == "M0ng00se"


def test_append_octet_fills_to_max():
    o = Octet(4, b"xy")
    o.append_octet(Octet(10, b"123456"))
    assert bytes(o) == b"xy12"
    o.append_octet(None)
    assert bytes(o) == b"xy12"


def test_append_byte_repeat():
    o = Octet(6, b"\x01")
    o.append_byte(0, 3)
    assert bytes(o) == b"\x01\x00\x00\x00"
    o.append_byte(7, 10)
    assert bytes(o) == b"\x01\x00\x00\x00\x07\x07"


def test_append_int_big_endian():
    o = Octet(8, b"\x01")
    o.append_int(0x0203, 2)
    assert bytes(o) == b"\x01\x02\x03"
    o.append_int(1, 4)
    assert bytes(o) == b"\x01\x02\x03\x00\x00\x00\x01"


def test_append_int_without_room_or_length_is_noop():
    o = Octet(3, b"\xaa")
    o.append_int(5, 4)
    o.append_int(5, 0)
    assert bytes(o) == b"\xaa"


def test_equality():
    assert Octet(10, b"abc") == Octet(3, b"abc")
    assert Octet(10, b"abc") == b"abc"
    assert not (Octet(10, b"abc") == Octet(10, b"abd"))
    assert not (Octet(10, b"ab") == Octet(10, b"abc"))


def test_ncompare():
    a = Octet(10, b"abcdef")
    assert a.ncompare(Octet(10, b"abcxyz"), 3)
    assert not a.ncompare(Octet(10, b"abcxyz"), 4)
    assert not a.ncompare(Octet(10, b"ab"), 3)


def test_shift_left():
    o = Octet(10, b"abcdef")
    o.shift_left(2)
    assert bytes(o) == b"cdef"
    o.shift_left(10)
    assert len(o) == 0


def test_xor_common_prefix():
    o = Octet(10, b"\x0f\x0f\x0f")
    o.xor(b"\xff\xf0")
    assert bytes(o) == b"\xf0\xff\x0f"


def test_xor_byte_twice_restores():
    o = Octet(10, b"hello")
    o.xor_byte(0x36)
    assert bytes(o) != b"hello"
    o.xor_byte(0x36)
    assert bytes(o) == b"hello"


def test_pad_and_errors():
    o = Octet(6, b"\x01\x02")
    o.pad(5)
    assert bytes(o) == b"\x00\x00\x00\x01\x02"
    with pytest.raises(ValueError):
        o.pad(4)
    with pytest.raises(ValueError):
        o.pad(7)


def test_copy_from_truncates():
    o = Octet(3, b"zz")
    o.copy_from(Octet(10, b"abcdef"))
    assert bytes(o) == b"abc"


def test_chop():
    o = Octet(10, b"abcdef")
    tail = o.chop(2)
    assert bytes(o) == b"ab"
    assert bytes(tail) == b"cdef"
    assert len(o.chop(5)) == 0
    assert bytes(o) == b"ab"


def test_empty_and_clear():
    o = Octet(5, b"abc")
    o.empty()
    assert len(o) == 0
    o.append_bytes(b"xyz")
    o.clear()
    assert bytes(o) == b""


@given(st.binary(max_size=64))
def test_base64_matches_standard_and_round_trips(data):
    o = Octet(len(data), data)
    text = o.to_base64()
    assert text == base64.b64encode(data).decode()
    assert Octet.from_base64(text) == data


def test_base64_ignores_white_space_and_truncates():
    text = "aGVs\nbG8g\td29y bGQ="
    assert bytes(Octet.from_base64(text)) == b"hello world"
    assert bytes(Octet.from_base64(text, 5)) == b"hello"


def test_base64_invalid_raises():
    with pytest.raises(binascii.Error):
        Octet.from_base64("a$b=")


@given(st.binary(max_size=64))
def test_hex_round_trip(data):
    o = Octet(len(data), data)
    assert o.to_hex() == data.hex()
    assert Octet.from_hex(o.to_hex()) == data


def test_from_hex_odd_and_non_hex():
    assert bytes(Octet.from_hex("ABc")) == b"\xab\xc0"
    assert bytes(Octet.from_hex("zz1g")) == b"\x00\x10"


def test_output(capsys):
    o = Octet(4, b"\x00\x01\xfe")
    o.output()
    o.output_string()
    out = capsys.readouterr().out
    assert out == "0001fe\n" + b"\x00\x01\xfe".decode("latin-1")