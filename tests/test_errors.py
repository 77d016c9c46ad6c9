import pytest

from flaretx.errors import ParseError, ParserError, describe


@pytest.mark.parametrize(
    "error, text",
    [
        (ParserError.OK, "No error"),
        (ParserError.NO_DATA, "No more data"),
        (ParserError.UNEXPECTED_BUFFER_END, "Unexpected buffer end"),
        (ParserError.DUPLICATED_FIELD, "Unexpected duplicated field"),
        (ParserError.UNEXPECTED_CHAIN, "Unexpected chain"),
        (ParserError.MISSING_FIELD, "missing field"),
        (ParserError.DISPLAY_IDX_OUT_OF_RANGE, "display index out of range"),
        (ParserError.DISPLAY_PAGE_OUT_OF_RANGE, "display page out of range"),
    ],
)
def test_describe_known_codes(error, text):
    assert describe(error) == text


@pytest.mark.parametrize(
    "error",
    [ParserError.UNEXPECTED_NETWORK, ParserError.INVALID_CODEC, ParserError.UNEXPECTED_THRESHOLD],
)
def test_describe_unlisted_codes(error):
    assert describe(error) == "Unrecognized error code"


def test_parse_error_carries_code_and_message():
    exc = ParseError(ParserError.UNEXPECTED_CHAIN)
    assert exc.error is ParserError.UNEXPECTED_CHAIN
    assert str(exc) == "Unexpected chain"


def test_parse_error_with_detail():
    exc = ParseError(ParserError.UNEXPECTED_BUFFER_END, "need 4 bytes")
    assert exc.detail == "need 4 bytes"
    assert str(exc).startswith("Unexpected buffer end")
    assert "need 4 bytes" in str(exc)


def test_parse_error_is_raisable():
    with pytest.raises(ParseError, match="Unrecognized error code") as info:
        raise ParseError(ParserError.INVALID_CODEC)
    assert info.value.error is ParserError.INVALID_CODEC
    assert str(info.value) == describe(ParserError.INVALID_CODEC)