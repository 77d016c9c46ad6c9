import struct

import pytest

from flaretx.errors import ParseError, ParserError
from flaretx.reader import Reader


def test_read_integers_big_endian():
    data = b"\x45" + struct.pack(">H", 0x1234) + struct.pack(">I", 0x12345678) + struct.pack(">Q", 2**64 - 1)
    reader = Reader(data)
    assert reader.read_u8() == 0x45
    assert reader.read_u16() == 0x1234
    assert reader.read_u32() == 0x12345678
    assert reader.read_u64() == 2**64 - 1
    assert reader.at_end()


@pytest.mark.parametrize("value", [0, 1, 255, 2**32, 2**63 + 7])
def test_u64_round_trip(value):
    assert Reader(struct.pack(">Q", value)).read_u64() == value


def test_read_bytes_and_offset():
    reader = Reader(bytes.fromhex("451234561234567890"))
    assert reader.read_bytes(1) == b"\x45"
    assert reader.read_bytes(3) == bytes.fromhex("123456")
    assert reader.offset == 4
    assert reader.remaining == 5


def test_peek_does_not_advance():
    reader = Reader(b"abcdef")
    assert reader.peek(3) == b"abc"
    assert reader.offset == 0


def test_skip_advances():
    reader = Reader(b"abcdef")
    reader.skip(4)
    assert reader.read_bytes(2) == b"ef"
    assert reader.at_end()


@pytest.mark.parametrize("method", ["read_u16", "read_u32", "read_u64"])
def test_short_buffer_raises_and_keeps_offset(method):
    reader = Reader(b"\x01")
    with pytest.raises(ParseError) as info:
        getattr(reader, method)()
    assert info.value.error is ParserError.UNEXPECTED_BUFFER_END
    assert reader.offset == 0


def test_require_and_skip_past_end():
    reader = Reader(b"xyz")
    reader.require(3)
    with pytest.raises(ParseError) as info:
        reader.skip(4)
    assert info.value.error is ParserError.UNEXPECTED_BUFFER_END
    assert reader.offset == 0


def test_reader_from_offset():
    reader = Reader(b"\x00\x00\x07", offset=2)
    assert reader.read_u8() == 7
    assert reader.at_end()


def test_empty_reader_is_at_end():
    reader = Reader(b"")
    assert reader.at_end()
    with pytest.raises(ParseError):
        reader.read_u8()