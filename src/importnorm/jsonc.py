#!/usr/bin/env python3
"""Tolerant JSON for tsconfig.json / jsconfig.json files.

TypeScript configuration files allow ``//`` and ``/* */`` comments and
trailing commas. Both are blanked out with spaces of the same length before
handing the text to :mod:`json`, so every reported offset still points into
the original file.

Example:
    >>> parse_jsonc('{"compilerOptions": {"baseUrl": "."},}  // root')
    ({'compilerOptions': {'baseUrl': '.'}}, [])
    >>> parse_jsonc('{"a": }')
    (None, [ParseError(offset=6, length=1, code=<ParseErrorCode.VALUE_EXPECTED: 'ValueExpected'>)])
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple


class ParseErrorCode(Enum):
    """Kinds of parse errors reported for a configuration file."""

    INVALID_SYMBOL = "InvalidSymbol"
    PROPERTY_NAME_EXPECTED = "PropertyNameExpected"
    VALUE_EXPECTED = "ValueExpected"
    COLON_EXPECTED = "ColonExpected"
    COMMA_EXPECTED = "CommaExpected"
    END_OF_FILE_EXPECTED = "EndOfFileExpected"
    UNEXPECTED_END_OF_STRING = "UnexpectedEndOfString"
    UNEXPECTED_END_OF_COMMENT = "UnexpectedEndOfComment"
    INVALID_ESCAPE_CHARACTER = "InvalidEscapeCharacter"
    INVALID_CHARACTER = "InvalidCharacter"


@dataclass(frozen=True)
class ParseError:
    """A single parse error.

    Attributes:
        offset: Character offset into the original text.
        length: Number of characters the error spans.
        code: What went wrong.
    """

    offset: int
    length: int
    code: ParseErrorCode

    def __str__(self) -> str:
        return f"{self.code.value} at offset {self.offset} (length {self.length})"


# json decoder message prefix -> error code, checked in order
_MESSAGE_CODES = [
    ("Expecting property name", ParseErrorCode.PROPERTY_NAME_EXPECTED),
    ("Expecting ':'", ParseErrorCode.COLON_EXPECTED),
    ("Expecting ','", ParseErrorCode.COMMA_EXPECTED),
    ("Expecting value", ParseErrorCode.VALUE_EXPECTED),
    ("Extra data", ParseErrorCode.END_OF_FILE_EXPECTED),
    ("Unterminated string", ParseErrorCode.UNEXPECTED_END_OF_STRING),
    ("Invalid \\u", ParseErrorCode.INVALID_ESCAPE_CHARACTER),
    ("Invalid \\escape", ParseErrorCode.INVALID_ESCAPE_CHARACTER),
    ("Invalid control character", ParseErrorCode.INVALID_CHARACTER),
    ("Illegal trailing comma before end of object", ParseErrorCode.PROPERTY_NAME_EXPECTED),
    ("Illegal trailing comma before end of array", ParseErrorCode.VALUE_EXPECTED),
]


def _classify(message: str) -> ParseErrorCode:
    for prefix, code in _MESSAGE_CODES:
        if message.startswith(prefix):
            return code
    return ParseErrorCode.INVALID_SYMBOL


def _skip_string(text: str, start: int) -> int:
    """Return the index just past the string literal opening at ``start``."""
    i = start + 1
    while i < len(text):
        char = text[i]
        if char == "\\":
            i += 2
            continue
        if char == '"' or char == "\n":
            return i + 1
        i += 1
    return len(text)


def _blank(chars: List[str], start: int, end: int) -> None:
    for i in range(start, end):
        if chars[i] not in "\r\n":
            chars[i] = " "


def strip_comments(text: str) -> Tuple[str, List[ParseError]]:
    """Replace comments with whitespace, keeping line breaks and offsets.

    Returns:
        Tuple of (stripped text, errors). The only possible error is an
        unterminated block comment.
    """
    chars = list(text)
    errors: List[ParseError] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == '"':
            i = _skip_string(text, i)
        elif text.startswith("//", i):
            end = text.find("\n", i)
            end = len(text) if end == -1 else end
            _blank(chars, i, end)
            i = end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                errors.append(
                    ParseError(i, len(text) - i, ParseErrorCode.UNEXPECTED_END_OF_COMMENT)
                )
                _blank(chars, i, len(text))
                break
            _blank(chars, i, end + 2)
            i = end + 2
        else:
            i += 1
    return "".join(chars), errors


# Last non-blank character of a value that a trailing comma may follow
_VALUE_ENDS = '"0123456789el}]'


def strip_trailing_commas(text: str) -> str:
    """Replace commas that end a non-empty object or array with a space.

    A comma is only blanked when it follows a value and is directly followed
    by ``}`` or ``]``, so ``{,}`` and ``[1,,]`` stay invalid. Expects comments
    to be stripped already.
    """
    chars = list(text)
    last = ""
    i = 0
    while i < len(text):
        char = text[i]
        if char == '"':
            i = _skip_string(text, i)
            last = '"'
            continue
        if char == "," and last and last in _VALUE_ENDS:
            j = i + 1
            while j < len(text) and text[j].isspace():
                j += 1
            if j < len(text) and text[j] in "}]":
                chars[i] = " "
        if not char.isspace():
            last = char
        i += 1
    return "".join(chars)


class _ConstantError(ValueError):
    def __init__(self, name: str):
        super().__init__(f"Invalid constant {name}")
        self.name = name


def _reject_constant(name: str) -> Any:
    raise _ConstantError(name)


def _find_token(text: str, token: str) -> int:
    """Offset of the first ``token`` outside string literals."""
    i = 0
    while i < len(text):
        if text[i] == '"':
            i = _skip_string(text, i)
        elif text.startswith(token, i):
            return i
        else:
            i += 1
    return 0


def parse_jsonc(text: str) -> Tuple[Optional[Any], List[ParseError]]:
    """Parse JSON with comments and trailing commas.

    ``NaN`` and ``Infinity`` are rejected as invalid symbols, as in strict
    JSON.

    Args:
        text: Raw file contents.

    Returns:
        Tuple of (parsed value, errors). On any error the value is None and
        the list holds at least one entry.
    """
    if text.startswith("\ufeff"):
        text = " " + text[1:]

    stripped, errors = strip_comments(text)
    if errors:
        return None, errors

    try:
        return json.loads(strip_trailing_commas(stripped), parse_constant=_reject_constant), []
    except _ConstantError as e:
        offset = _find_token(stripped, e.name)
        return None, [ParseError(offset, len(e.name), ParseErrorCode.INVALID_SYMBOL)]
    except json.JSONDecodeError as e:
        length = 1 if e.pos < len(text) else 0
        return None, [ParseError(e.pos, length, _classify(e.msg))]
