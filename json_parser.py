# json_parser.py
# Recursive-descent JSON parser and json-debug command-line wrapper.
#
# =============================================================================
#  PARSER IMPLEMENTATION: DESCENT WITH AN EXPLICIT CONTAINER STACK
# =============================================================================
#
# Grammar:
#
#   value  := object | array | string | number | 'true' | 'false' | 'null'
#   object := '{' ( string ':' value ( ',' string ':' value )* )? '}'
#   array  := '[' ( value ( ',' value )* )? ']'
#
# Scalar productions are one method each and consume exactly their token.
# Objects and arrays are opened by _open_object/_open_array and closed by
# the loop in parse_value, which keeps every open container on a list
# instead of the call stack. Nesting is therefore bounded only by max_depth,
# never by the interpreter's recursion limit or by how deep the caller's
# own stack already is.
#
# Tokens are pulled from the scanner one at a time through a single-slot
# lookahead; the scanner position is threaded through the Parser.
#
# Duplicate object keys are all retained, in source order.
# =============================================================================

import argparse
import logging
import sys
from typing import List, Optional

from json_errors import ErrorKind, ParseError
from json_lexer import Token, TokenKind, lex, scan, skip_whitespace
from json_values import (
    FALSE,
    NULL,
    TRUE,
    JsonArray,
    JsonNumber,
    JsonObject,
    JsonString,
    Value,
    format_tree,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
DEPTH_LIMIT_DEFAULT = 512

_VALUE_EXPECTED = "value (object, array, string, number, 'true', 'false' or 'null')"


# ---------------------------------------------------------------------------
# OPEN CONTAINER RECORD
# ---------------------------------------------------------------------------
class _OpenContainer:
    """
    An object or array whose opening bracket has been consumed but whose
    closing bracket has not. Objects also hold the key awaiting its value.
    """

    __slots__ = ("close", "members", "key")

    def __init__(self, close: TokenKind):
        self.close = close
        self.members: list = []
        self.key: Optional[str] = None

    @property
    def is_object(self) -> bool:
        return self.close is TokenKind.RBRACE

    def add(self, value: Value):
        if self.is_object:
            self.members.append((self.key, value))
            self.key = None
        else:
            self.members.append(value)

    def build(self) -> Value:
        return JsonObject(self.members) if self.is_object else JsonArray(self.members)


# ---------------------------------------------------------------------------
# PARSER
# ---------------------------------------------------------------------------
class Parser:
    """
    Single-use parser over one input text.

    Holds the scan position and at most one pending lookahead token. Every
    failure is raised as ParseError on first detection.
    """

    def __init__(self, text: str, max_depth: int = DEPTH_LIMIT_DEFAULT):
        self._text = text
        self._max_depth = max_depth
        self._pos = 0
        self._pending: Optional[Token] = None

    # -- token plumbing -----------------------------------------------------

    def peek(self) -> Token:
        if self._pending is None:
            self._pending, self._pos = scan(self._text, self._pos)
        return self._pending

    def advance(self) -> Token:
        token = self.peek()
        self._pending = None
        return token

    def _expect(self, *kinds: TokenKind) -> Token:
        token = self.advance()
        if token.kind in kinds:
            return token
        raise self._unexpected(token, " or ".join(str(k) for k in kinds))

    def _unexpected(self, token: Token, expected: str) -> ParseError:
        if token.kind is TokenKind.EOF:
            return ParseError(
                ErrorKind.UNEXPECTED_END_OF_INPUT,
                f"unexpected end of input - expected {expected}",
                self._text, token.pos,
            )
        return ParseError(
            ErrorKind.UNEXPECTED_TOKEN,
            f"unexpected token {token.kind} - expected {expected}",
            self._text, token.pos,
        )

    def _check_depth(self, token: Token, depth: int):
        if depth > self._max_depth:
            raise ParseError(
                ErrorKind.NESTING_TOO_DEEP,
                f"nesting depth exceeds limit of {self._max_depth}",
                self._text, token.pos,
            )

    # -- productions ----------------------------------------------------------

    def parse(self) -> Value:
        """Parse one top-level value and require nothing but whitespace after it."""
        value = self.parse_value()
        end = skip_whitespace(self._text, self._pos)
        if end < len(self._text):
            raise ParseError(
                ErrorKind.TRAILING_DATA,
                "extra data after top-level value",
                self._text, end,
            )
        return value

    def parse_value(self) -> Value:
        """
        Parse one complete value of any kind.

        Each pass of the outer loop starts a value. A scalar or an empty
        container is complete at once and is handed up through the stack:
        added to its parent, after which the parent either takes ',' and
        wants another member (back to the outer loop) or takes its closing
        bracket and becomes the completed value one level up.
        """
        stack: List[_OpenContainer] = []
        while True:
            token = self.peek()
            if token.kind is TokenKind.LBRACE:
                value = self._open_object(stack)
            elif token.kind is TokenKind.LBRACKET:
                value = self._open_array(stack)
            else:
                value = self._parse_scalar(token)
            if value is None:
                continue

            while stack:
                top = stack[-1]
                top.add(value)
                if self._expect(TokenKind.COMMA, top.close).kind is TokenKind.COMMA:
                    if top.is_object:
                        top.key = self._parse_key()
                    break
                stack.pop()
                value = top.build()
            else:
                return value

    def _parse_scalar(self, token: Token) -> Value:
        kind = token.kind
        if kind is TokenKind.STRING:
            return self.parse_string()
        if kind is TokenKind.NUMBER:
            return self.parse_number()
        if kind is TokenKind.TRUE or kind is TokenKind.FALSE:
            return self.parse_bool()
        if kind is TokenKind.NULL:
            return self.parse_null()
        raise self._unexpected(token, _VALUE_EXPECTED)

    def _open_object(self, stack: List[_OpenContainer]) -> Optional[JsonObject]:
        """
        Consume '{' and either the closing '}' (returning the empty object)
        or the first key and ':' (pushing the object and returning None).
        """
        self._check_depth(self._expect(TokenKind.LBRACE), len(stack) + 1)
        if self.peek().kind is TokenKind.RBRACE:
            self.advance()
            return JsonObject(())
        container = _OpenContainer(TokenKind.RBRACE)
        container.key = self._parse_key()
        stack.append(container)
        return None

    def _open_array(self, stack: List[_OpenContainer]) -> Optional[JsonArray]:
        self._check_depth(self._expect(TokenKind.LBRACKET), len(stack) + 1)
        if self.peek().kind is TokenKind.RBRACKET:
            self.advance()
            return JsonArray(())
        stack.append(_OpenContainer(TokenKind.RBRACKET))
        return None

    def _parse_key(self) -> str:
        key = self._expect(TokenKind.STRING).value
        self._expect(TokenKind.COLON)
        return key

    def parse_object(self) -> JsonObject:
        """Parse a value that must be an object."""
        token = self.peek()
        if token.kind is not TokenKind.LBRACE:
            raise self._unexpected(token, str(TokenKind.LBRACE))
        return self.parse_value()

    def parse_array(self) -> JsonArray:
        """Parse a value that must be an array."""
        token = self.peek()
        if token.kind is not TokenKind.LBRACKET:
            raise self._unexpected(token, str(TokenKind.LBRACKET))
        return self.parse_value()

    def parse_string(self) -> JsonString:
        return JsonString(self._expect(TokenKind.STRING).value)

    def parse_number(self) -> JsonNumber:
        return JsonNumber(self._expect(TokenKind.NUMBER).value)

    def parse_bool(self):
        token = self._expect(TokenKind.TRUE, TokenKind.FALSE)
        return TRUE if token.kind is TokenKind.TRUE else FALSE

    def parse_null(self):
        self._expect(TokenKind.NULL)
        return NULL


# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def parse(text: str, *, max_depth: int = DEPTH_LIMIT_DEFAULT) -> Value:
    """
    Parse JSON text into a value tree.

    Exactly one top-level value of any kind is accepted, optionally
    surrounded by whitespace. Raises ParseError on the first lexical or
    grammatical violation; nothing is recovered or accumulated.
    """
    if not isinstance(text, str):
        raise TypeError(f"JSON text must be str, not {type(text).__name__}")
    if max_depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {max_depth}")

    logger.debug("parsing %d characters (max_depth=%d)", len(text), max_depth)
    try:
        value = Parser(text, max_depth).parse()
    except ParseError as exc:
        logger.debug("parse failed [%s]: %s", exc.kind.name, exc)
        raise
    logger.debug("parsed top-level %s", type(value).__name__)
    return value


# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _format_token(token: Token) -> str:
    line = f"{token.pos:>6}  {token.kind.name}"
    if token.value is not None:
        line += f"  {token.value!r}"
    return line


def _cli(argv: List[str]) -> int:
    """
    Command-line interface: parse text from a flag or a file and print the
    value tree.

    Exit status is 0 on success, 1 on a parse or read failure, and 2 on a
    usage error (argparse).
    """
    ap = argparse.ArgumentParser(prog="json-debug", description="Parse JSON and print its value tree")
    source = ap.add_mutually_exclusive_group(required=True)
    source.add_argument("-s", "--string", help="JSON text to parse")
    source.add_argument("-f", "--file", help="JSON file to parse")
    ap.add_argument("--tokens", action="store_true", help="dump the token stream instead of the tree")
    ap.add_argument("--max-depth", type=int, default=DEPTH_LIMIT_DEFAULT)
    ap.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.max_depth < 1:
        ap.error("--max-depth must be at least 1")

    if args.string is not None:
        data = args.string
    else:
        try:
            with open(args.file, "r", encoding="utf-8") as fh:
                data = fh.read()
        except (OSError, UnicodeDecodeError) as exc:
            print(f"error: cannot read {args.file}: {exc}", file=sys.stderr)
            return 1

    try:
        if args.tokens:
            for token in lex(data):
                print(_format_token(token))
        else:
            print(format_tree(parse(data, max_depth=args.max_depth)))
    except ParseError as exc:
        print(f"error: {exc.kind.value}: {exc}", file=sys.stderr)
        return 1
    return 0


def main() -> int:
    return _cli(sys.argv[1:])


# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    sys.exit(main())
