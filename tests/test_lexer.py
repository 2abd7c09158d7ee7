import pytest
from hypothesis import given
from hypothesis import strategies as st

from kadom.kadom_constants import TokenKind, keywords
from kadom.kadom_errors import ScanError
from kadom.kadom_lexer import CharacterStream, Lexer, ScannedLiteral, Token, scan


def kinds(source: str) -> list[TokenKind]:
    return [tok.kind for tok in scan(source)]


def test_single_char_tokens() -> None:
    code = "( ) { } , . - + ; * /"
    expected = [
        TokenKind.LEFT_PAREN,
        TokenKind.RIGHT_PAREN,
        TokenKind.LEFT_BRACE,
        TokenKind.RIGHT_BRACE,
        TokenKind.COMMA,
        TokenKind.DOT,
        TokenKind.MINUS,
        TokenKind.PLUS,
        TokenKind.SEMICOLON,
        TokenKind.STAR,
        TokenKind.SLASH,
        TokenKind.EOF,
    ]
    assert kinds(code) == expected


def test_one_or_two_char_operators() -> None:
    assert kinds("! != = == < <= > >=") == [
        TokenKind.BANG,
        TokenKind.BANG_EQUAL,
        TokenKind.EQUAL,
        TokenKind.EQUAL_EQUAL,
        TokenKind.LESS,
        TokenKind.LESS_EQUAL,
        TokenKind.GREATER,
        TokenKind.GREATER_EQUAL,
        TokenKind.EOF,
    ]


def test_maximal_munch_without_spaces() -> None:
    assert kinds("!==") == [TokenKind.BANG_EQUAL, TokenKind.EQUAL, TokenKind.EOF]
    assert kinds("<==") == [TokenKind.LESS_EQUAL, TokenKind.EQUAL, TokenKind.EOF]


def test_ends_with_single_empty_eof() -> None:
    tokens = scan("")
    assert len(tokens) == 1
    assert tokens[0].kind == TokenKind.EOF
    assert tokens[0].lexeme == ""
    assert tokens[0].line == 1


def test_eof_carries_last_line() -> None:
    tokens = scan("1\n2\n")
    assert tokens[-1] == Token(TokenKind.EOF, "", None, 3)


def test_number_token() -> None:
    tok = scan("123")[0]
    assert tok.kind == TokenKind.NUMBER
    assert tok.lexeme == "123"
    assert tok.literal == ScannedLiteral("float", 123.0)


def test_fractional_number_token() -> None:
    tok = scan("45.67")[0]
    assert tok.lexeme == "45.67"
    assert tok.literal is not None
    assert tok.literal.value == 45.67


def test_trailing_dot_is_not_part_of_number() -> None:
    tokens = scan("1.")
    assert [t.kind for t in tokens] == [TokenKind.NUMBER, TokenKind.DOT, TokenKind.EOF]
    assert tokens[0].lexeme == "1"


def test_leading_dot_is_not_part_of_number() -> None:
    assert kinds(".5") == [TokenKind.DOT, TokenKind.NUMBER, TokenKind.EOF]


def test_no_exponent_notation() -> None:
    tokens = scan("1e5")
    assert [(t.kind, t.lexeme) for t in tokens[:2]] == [
        (TokenKind.NUMBER, "1"),
        (TokenKind.IDENTIFIER, "e5"),
    ]


def test_negative_number_is_minus_then_number() -> None:
    assert kinds("-3") == [TokenKind.MINUS, TokenKind.NUMBER, TokenKind.EOF]


def test_string_token() -> None:
    tok = scan('"hello world"')[0]
    assert tok.kind == TokenKind.STRING
    assert tok.lexeme == '"hello world"'
    assert tok.literal == ScannedLiteral("string", "hello world")


def test_empty_string_token() -> None:
    tok = scan('""')[0]
    assert tok.literal == ScannedLiteral("string", "")


def test_escaped_quote_does_not_close_string() -> None:
    tokens = scan(r'"say \"hi\"";')
    assert tokens[0].kind == TokenKind.STRING
    assert tokens[1].kind == TokenKind.SEMICOLON


def test_multiline_string_line_numbers() -> None:
    tokens = scan('"a\nb" x')
    assert tokens[0].line == 1
    assert tokens[0].literal == ScannedLiteral("string", "a\nb")
    assert tokens[1].line == 2


def test_unterminated_string_single_error() -> None:
    with pytest.raises(ScanError) as exc:
        scan('print 1;\n"never closed\nmore')
    assert exc.value.errors == ["Unterminated string starting on line 2"]


def test_identifier_token() -> None:
    tok = scan("my_Var1")[0]
    assert tok.kind == TokenKind.IDENTIFIER
    assert tok.lexeme == "my_Var1"
    assert tok.literal == ScannedLiteral("identifier", "my_Var1")


def test_leading_underscore_identifier() -> None:
    assert scan("_x")[0].kind == TokenKind.IDENTIFIER


@pytest.mark.parametrize("word", sorted(keywords))  # type: ignore[misc]
def test_keywords(word: str) -> None:
    tok = scan(word)[0]
    assert tok.kind == keywords[word]
    assert tok.literal is None


def test_keyword_prefix_is_identifier() -> None:
    assert scan("variable")[0].kind == TokenKind.IDENTIFIER
    assert scan("Print")[0].kind == TokenKind.IDENTIFIER


def test_comment_skipped_to_end_of_line() -> None:
    tokens = scan("// print 1; var x = 2;\nprint 3;")
    assert [t.lexeme for t in tokens] == ["print", "3", ";", ""]
    assert tokens[0].line == 2


def test_comment_at_end_of_input() -> None:
    assert kinds("1; // trailing") == [
        TokenKind.NUMBER,
        TokenKind.SEMICOLON,
        TokenKind.EOF,
    ]


def test_slash_is_division_when_not_comment() -> None:
    assert kinds("4 / 2") == [
        TokenKind.NUMBER,
        TokenKind.SLASH,
        TokenKind.NUMBER,
        TokenKind.EOF,
    ]


def test_whitespace_and_line_counting() -> None:
    tokens = scan("a\r\n\tb\n\n c")
    assert [t.line for t in tokens] == [1, 2, 4, 4]


def test_unknown_characters_collected() -> None:
    with pytest.raises(ScanError) as exc:
        scan("@ 1;\n# 2;")
    assert exc.value.errors == [
        "Unexpected character '@' on line 1",
        "Unexpected character '#' on line 2",
    ]
    assert str(exc.value) == (
        "Unexpected character '@' on line 1\nUnexpected character '#' on line 2"
    )


def test_errors_keep_scanning_to_the_end() -> None:
    lexer = Lexer(CharacterStream('$ print "oops'))
    with pytest.raises(ScanError):
        lexer.tokenize()
    assert lexer.errors == [
        "Unexpected character '$' on line 1",
        "Unterminated string starting on line 1",
    ]


def test_token_str_and_repr() -> None:
    tok = scan("12.5")[0]
    assert str(tok) == "NUMBER 12.5 12.5"
    assert repr(tok) == "Token(NUMBER, '12.5')"
    assert str(scan("")[0]) == "EOF  None"


def test_token_hash_and_eq() -> None:
    a = Token(TokenKind.PLUS, "+", None, 1)
    b = Token(TokenKind.PLUS, "+", None, 1)
    assert a == b
    assert hash(a) == hash(b)
    assert a != Token(TokenKind.PLUS, "+", None, 2)
    assert a != "+"


def test_character_stream_read_past_end() -> None:
    stream = CharacterStream("a")
    assert stream.next() == "a"
    assert stream.peek() == ""
    with pytest.raises(Exception):
        stream.next()


@given(st.from_regex(r"[A-Za-z_][A-Za-z0-9_]{0,12}", fullmatch=True))  # type: ignore[misc]
def test_identifiers_scan_whole(word: str) -> None:
    tok = scan(word)[0]
    assert tok.lexeme == word
    expected = keywords.get(word, TokenKind.IDENTIFIER)
    assert tok.kind == expected


@given(st.integers(min_value=0, max_value=10**12))  # type: ignore[misc]
def test_integers_scan_as_floats(n: int) -> None:
    tok = scan(str(n))[0]
    assert tok.literal == ScannedLiteral("float", float(n))


@given(st.text(max_size=40))  # type: ignore[misc]
def test_random_input_only_raises_scan_error(source: str) -> None:
    try:
        tokens = scan(source)
    except ScanError as e:
        assert e.errors
    else:
        assert tokens[-1].kind == TokenKind.EOF
        assert sum(t.kind == TokenKind.EOF for t in tokens) == 1
