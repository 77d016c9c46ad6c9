"""Parser error codes and the exception that carries them."""

from __future__ import annotations

from enum import Enum, auto


class ParserError(Enum):
    """Every failure the transaction parser can report."""

    OK = auto()
    NO_DATA = auto()
    INIT_CONTEXT_EMPTY = auto()
    UNEXPECTED_BUFFER_END = auto()
    UNEXPECTED_VERSION = auto()
    UNEXPECTED_CHARACTERS = auto()
    UNEXPECTED_FIELD = auto()
    DUPLICATED_FIELD = auto()
    VALUE_OUT_OF_RANGE = auto()
    UNEXPECTED_CHAIN = auto()
    MISSING_FIELD = auto()
    DISPLAY_IDX_OUT_OF_RANGE = auto()
    DISPLAY_PAGE_OUT_OF_RANGE = auto()
    UNEXPECTED_ERROR = auto()
    UNKNOWN_TRANSACTION = auto()
    UNEXPECTED_NETWORK = auto()
    INVALID_CODEC = auto()
    UNEXPECTED_UNPARSED_BYTES = auto()
    UNEXPECTED_NUMBER_ITEMS = auto()
    UNEXPECTED_TYPE_ID = auto()
    UNEXPECTED_OUTPUT_LOCKED = auto()
    UNEXPECTED_THRESHOLD = auto()
    UNEXPECTED_TYPE = auto()
    INVALID_TIME_STAMP = auto()
    INVALID_STAKE_AMOUNT = auto()
    UNEXPECTED_DATA_LEN = auto()


_DESCRIPTIONS = {
    ParserError.OK: "No error",
    ParserError.NO_DATA: "No more data",
    ParserError.INIT_CONTEXT_EMPTY: "Initialized empty context",
    ParserError.UNEXPECTED_BUFFER_END: "Unexpected buffer end",
    ParserError.UNEXPECTED_VERSION: "Unexpected version",
    ParserError.UNEXPECTED_CHARACTERS: "Unexpected characters",
    ParserError.UNEXPECTED_FIELD: "Unexpected field",
    ParserError.DUPLICATED_FIELD: "Unexpected duplicated field",
    ParserError.VALUE_OUT_OF_RANGE: "Value out of range",
    ParserError.UNEXPECTED_CHAIN: "Unexpected chain",
    ParserError.MISSING_FIELD: "missing field",
    ParserError.DISPLAY_IDX_OUT_OF_RANGE: "display index out of range",
    ParserError.DISPLAY_PAGE_OUT_OF_RANGE: "display page out of range",
}

_UNRECOGNIZED = "Unrecognized error code"


def describe(error: ParserError) -> str:
    """Return the human-readable description of an error code."""
    return _DESCRIPTIONS.get(error, _UNRECOGNIZED)


class ParseError(Exception):
    """Raised when a transaction cannot be parsed or displayed."""

    def __init__(self, error: ParserError, detail: str | None = None) -> None:
        self.error = error
        self.detail = detail
        message = describe(error)
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)