# json_lexer.py
# Scanner: turns JSON text into tokens, one at a time, on demand.
#
# =============================================================================
#  SCANNER IMPLEMENTATION
# =============================================================================
#
# scan(text, pos) is a pure function: it returns the token starting at or
# after pos together with the position just past it. The parser threads that
# position through its calls, so nothing is tokenized ahead of need and the
# scanner keeps no state between calls. Once pos reaches the end of the text
# every call yields EOF.
#
# Whitespace and number literals are matched with compiled regexes; string
# bodies are consumed in regex chunks between escapes so that errors can be
# pinned to the exact offending character.
# =============================================================================

import math
import re
from enum import Enum
from typing import Any, Iterator, NamedTuple, Tuple

from json_errors import ErrorKind, ParseError


# ---------------------------------------------------------------------------
# TOKEN RECORD
# ---------------------------------------------------------------------------
class TokenKind(Enum):
    LBRACE   = "'{'"
    RBRACE   = "'}'"
    LBRACKET = "'['"
    RBRACKET = "']'"
    COLON    = "':'"
    COMMA    = "','"
    STRING   = "string"
    NUMBER   = "number"
    TRUE     = "'true'"
    FALSE    = "'false'"
    NULL     = "'null'"
    EOF      = "end of input"

    def __str__(self) -> str:
        return self.value


class Token(NamedTuple):
    """
    Immutable token record: (kind, value, pos).

    value is the decoded payload for STRING (str) and NUMBER (float) and
    None for every other kind. pos is the offset of the token's first
    character; for EOF it is len(text).
    """
    kind: TokenKind
    value: Any
    pos: int


# ---------------------------------------------------------------------------
# REGEX BLUEPRINT
# ---------------------------------------------------------------------------
_WHITESPACE_RE   = re.compile(r"[ \t\n\r]*")
_NUMBER_RE       = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
_WORD_RE         = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_STRING_CHUNK_RE = re.compile(r'[^"\\\x00-\x1f]*')
_HEX4_RE         = re.compile(r"[0-9a-fA-F]{4}")

_PUNCTUATION = {
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
}
_KEYWORDS = {
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "null": TokenKind.NULL,
}
_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
_NUMBER_START = frozenset("-+.0123456789")
_NUMBER_CHARS = frozenset("0123456789.eE+-")


# ---------------------------------------------------------------------------
# SCANNER ENTRY POINTS
# ---------------------------------------------------------------------------
def skip_whitespace(text: str, pos: int) -> int:
    """Return the first position at or after pos that is not JSON whitespace."""
    return _WHITESPACE_RE.match(text, pos).end()


def scan(text: str, pos: int) -> Tuple[Token, int]:
    """
    Return (token, next_pos) for the first token at or after pos.

    Raises ParseError for a malformed literal or a character that cannot
    start any token.
    """
    pos = skip_whitespace(text, pos)
    if pos >= len(text):
        return Token(TokenKind.EOF, None, len(text)), len(text)

    ch = text[pos]
    kind = _PUNCTUATION.get(ch)
    if kind is not None:
        return Token(kind, None, pos), pos + 1
    if ch == '"':
        value, end = _scan_string(text, pos)
        return Token(TokenKind.STRING, value, pos), end
    if ch in _NUMBER_START:
        value, end = _scan_number(text, pos)
        return Token(TokenKind.NUMBER, value, pos), end
    if ch.isalpha() or ch == "_":
        return _scan_keyword(text, pos)

    raise ParseError(ErrorKind.UNEXPECTED_TOKEN, f"unexpected character {ch!r}", text, pos)


def lex(text: str) -> Iterator[Token]:
    """
    Lazily yield every token of text, ending with a single EOF token.
    """
    pos = 0
    while True:
        token, pos = scan(text, pos)
        yield token
        if token.kind is TokenKind.EOF:
            return


# ---------------------------------------------------------------------------
# KEYWORDS
# ---------------------------------------------------------------------------
def _scan_keyword(text: str, pos: int) -> Tuple[Token, int]:
    m = _WORD_RE.match(text, pos)
    if m is None:
        # A non-ASCII letter: not the start of any keyword.
        raise ParseError(ErrorKind.INVALID_LITERAL, f"invalid literal {text[pos]!r}", text, pos)
    word = m.group()
    kind = _KEYWORDS.get(word)
    if kind is None:
        raise ParseError(
            ErrorKind.INVALID_LITERAL,
            f"invalid literal {word!r} - expected 'true', 'false' or 'null'",
            text, pos,
        )
    return Token(kind, None, pos), m.end()


# ---------------------------------------------------------------------------
# NUMBERS
# ---------------------------------------------------------------------------
def _scan_number(text: str, pos: int) -> Tuple[float, int]:
    m = _NUMBER_RE.match(text, pos)
    if m is None:
        raise ParseError(ErrorKind.INVALID_NUMBER, f"invalid number starting with {text[pos]!r}", text, pos)
    end = m.end()
    # The grammar match is greedy; any number character left over means the
    # literal was malformed (leading zero, dangling '.', bare exponent...).
    if end < len(text) and text[end] in _NUMBER_CHARS:
        raise ParseError(
            ErrorKind.INVALID_NUMBER,
            f"invalid number {text[pos:end + 1]!r}",
            text, end,
        )
    value = float(m.group())
    if math.isinf(value):
        raise ParseError(ErrorKind.INVALID_NUMBER, f"number out of range {m.group()!r}", text, pos)
    return value, end


# ---------------------------------------------------------------------------
# STRINGS
# ---------------------------------------------------------------------------
def _scan_string(text: str, pos: int) -> Tuple[str, int]:
    """
    Decode the string literal whose opening quote is at pos.

    Returns the decoded value and the position after the closing quote.
    Failure offsets point at the offending character, or at len(text) when
    the literal runs off the end of the input.
    """
    chunks = []
    end = len(text)
    i = pos + 1
    while True:
        m = _STRING_CHUNK_RE.match(text, i)
        chunks.append(m.group())
        i = m.end()
        if i >= end:
            raise ParseError(ErrorKind.INVALID_STRING, "unterminated string", text, end)
        ch = text[i]
        if ch == '"':
            return "".join(chunks), i + 1
        if ch != "\\":
            raise ParseError(
                ErrorKind.INVALID_STRING,
                f"invalid control character {ch!r} in string",
                text, i,
            )
        if i + 1 >= end:
            raise ParseError(ErrorKind.INVALID_STRING, "unterminated string", text, end)
        esc = text[i + 1]
        if esc == "u":
            decoded, i = _scan_unicode_escape(text, i)
            chunks.append(decoded)
            continue
        decoded = _ESCAPES.get(esc)
        if decoded is None:
            raise ParseError(ErrorKind.INVALID_STRING, f"invalid escape '\\{esc}'", text, i)
        chunks.append(decoded)
        i += 2


def _read_hex4(text: str, i: int) -> int:
    # i points at the backslash of a \uXXXX escape.
    m = _HEX4_RE.match(text, i + 2)
    if m is None:
        if i + 6 > len(text) and _HEX4_RE.fullmatch(text[i + 2:].ljust(4, "0")):
            raise ParseError(ErrorKind.INVALID_STRING, "unterminated string", text, len(text))
        raise ParseError(
            ErrorKind.INVALID_STRING,
            f"invalid unicode escape {text[i:i + 6]!r}",
            text, i,
        )
    return int(m.group(), 16)


def _scan_unicode_escape(text: str, i: int) -> Tuple[str, int]:
    """
    Decode the \\uXXXX escape at i, joining a high surrogate with the low
    surrogate escape that must follow it.
    """
    code = _read_hex4(text, i)
    if 0xDC00 <= code <= 0xDFFF:
        raise ParseError(ErrorKind.INVALID_STRING, f"unpaired surrogate {text[i:i + 6]!r}", text, i)
    if not 0xD800 <= code <= 0xDBFF:
        return chr(code), i + 6

    j = i + 6
    if text.startswith("\\u", j):
        low = _read_hex4(text, j)
        if 0xDC00 <= low <= 0xDFFF:
            return chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)), j + 6
    raise ParseError(ErrorKind.INVALID_STRING, f"unpaired surrogate {text[i:i + 6]!r}", text, i)
