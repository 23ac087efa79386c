# json_errors.py
# Error taxonomy shared by the scanner and the parser.
#
# =============================================================================
#  ERROR MODEL
# =============================================================================
#
# Every failure the core can report is a ParseError carrying one ErrorKind
# from a closed set, the character offset where it was detected, and the
# line/column derived from that offset. The first failure aborts the parse.
# =============================================================================

from enum import Enum


# ---------------------------------------------------------------------------
# ERROR KINDS
# ---------------------------------------------------------------------------
class ErrorKind(Enum):
    UNEXPECTED_END_OF_INPUT = "unexpected end of input"
    UNEXPECTED_TOKEN        = "unexpected token"
    INVALID_NUMBER          = "invalid number"
    INVALID_STRING          = "invalid string"
    INVALID_LITERAL         = "invalid literal"
    TRAILING_DATA           = "trailing data"
    NESTING_TOO_DEEP        = "nesting too deep"


# ---------------------------------------------------------------------------
# POSITION HELPERS
# ---------------------------------------------------------------------------
def line_col(text: str, pos: int):
    """
    Translate a 0-based character offset into a 1-based (line, column) pair.

    An offset equal to len(text) is valid and points just past the last
    character, which is where end-of-input failures are reported.
    """
    lineno = text.count("\n", 0, pos) + 1
    colno = pos - (text.rfind("\n", 0, pos) + 1) + 1
    return lineno, colno


# ---------------------------------------------------------------------------
# EXCEPTION
# ---------------------------------------------------------------------------
class ParseError(ValueError):
    """
    Raised for any lexical or grammatical violation in the input.

    Attributes (read-only):
        kind:   ErrorKind of the failure
        msg:    human-readable description, without position
        pos:    0-based character offset into the input
        lineno: 1-based line of pos
        colno:  1-based column of pos
    """

    __slots__ = ("_kind", "_msg", "_pos", "_lineno", "_colno")

    def __init__(self, kind: ErrorKind, msg: str, text: str, pos: int):
        lineno, colno = line_col(text, pos)
        super().__init__(f"{msg}: line {lineno} column {colno} (char {pos})")
        self._kind = kind
        self._msg = msg
        self._pos = pos
        self._lineno = lineno
        self._colno = colno

    def __reduce__(self):
        # The source text is not kept, so rebuild from the resolved position.
        return (_restore, (self._kind, self._msg, self._pos, self._lineno, self._colno))

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def msg(self) -> str:
        return self._msg

    @property
    def pos(self) -> int:
        return self._pos

    @property
    def lineno(self) -> int:
        return self._lineno

    @property
    def colno(self) -> int:
        return self._colno



def _restore(kind: ErrorKind, msg: str, pos: int, lineno: int, colno: int) -> ParseError:
    err = ParseError.__new__(ParseError)
    ValueError.__init__(err, f"{msg}: line {lineno} column {colno} (char {pos})")
    err._kind = kind
    err._msg = msg
    err._pos = pos
    err._lineno = lineno
    err._colno = colno
    return err
