import pytest

from json_errors import ErrorKind, ParseError
from json_lexer import Token, TokenKind, lex, scan


def kinds(text):
    return [tok.kind for tok in lex(text)]

def test_punctuation_with_and_without_spaces():
    expected = [
        TokenKind.COLON, TokenKind.COMMA, TokenKind.LBRACKET,
        TokenKind.RBRACKET, TokenKind.RBRACE, TokenKind.LBRACE, TokenKind.EOF,
    ]
    assert kinds("\t: , [\n] }{\n \r ") == expected
    assert kinds(":,[]}{") == expected

def test_literals_carry_decoded_payloads():
    toks = list(lex('"hi" -1.5 true false null'))
    assert toks == [
        Token(TokenKind.STRING, "hi", 0),
        Token(TokenKind.NUMBER, -1.5, 5),
        Token(TokenKind.TRUE, None, 10),
        Token(TokenKind.FALSE, None, 15),
        Token(TokenKind.NULL, None, 21),
        Token(TokenKind.EOF, None, 25),
    ]

@pytest.mark.parametrize("text", ["", " \t \n \r "])
def test_blank_input_is_eof(text):
    assert list(lex(text)) == [Token(TokenKind.EOF, None, len(text))]

def test_eof_repeats_on_every_call():
    tok, pos = scan("  ", 0)
    assert tok.kind is TokenKind.EOF and pos == 2
    tok, pos = scan("  ", pos)
    assert tok.kind is TokenKind.EOF and pos == 2

def test_scan_threads_position():
    text = '[ "a" ]'
    tok, pos = scan(text, 0)
    assert tok == Token(TokenKind.LBRACKET, None, 0) and pos == 1
    tok, pos = scan(text, pos)
    assert tok == Token(TokenKind.STRING, "a", 2) and pos == 5
    tok, pos = scan(text, pos)
    assert tok == Token(TokenKind.RBRACKET, None, 6) and pos == 7

def test_lex_is_lazy():
    tokens = lex("[1, @")
    assert next(tokens).kind is TokenKind.LBRACKET
    assert next(tokens).kind is TokenKind.NUMBER
    assert next(tokens).kind is TokenKind.COMMA
    with pytest.raises(ParseError):
        next(tokens)

@pytest.mark.parametrize("text", ["nugget", "True", "NULL", "tru", "nullx", "nullfalse", "true1", "été"])
def test_keywords_must_match_whole_word_exactly(text):
    with pytest.raises(ParseError) as ei:
        list(lex(text))
    assert ei.value.kind is ErrorKind.INVALID_LITERAL
    assert ei.value.pos == 0

def test_keyword_followed_by_punctuation():
    assert kinds("[true,null]") == [
        TokenKind.LBRACKET, TokenKind.TRUE, TokenKind.COMMA,
        TokenKind.NULL, TokenKind.RBRACKET, TokenKind.EOF,
    ]

@pytest.mark.parametrize("text", ["@", "'a'", "\x00", "\u00a0", "#"])
def test_unexpected_character(text):
    with pytest.raises(ParseError) as ei:
        scan(text, 0)
    assert ei.value.kind is ErrorKind.UNEXPECTED_TOKEN
    assert "unexpected character" in str(ei.value)

def test_token_kind_display():
    assert str(TokenKind.LBRACE) == "'{'"
    assert str(TokenKind.EOF) == "end of input"
