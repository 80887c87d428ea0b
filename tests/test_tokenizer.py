import pytest

from scicalc.normalizer import normalize
from scicalc.tokenizer import Token, TokenizerError, TokenType, tokenize, untokenize
from scicalc.utils import format_number


@pytest.mark.parametrize(
    "text, expected",
    [
        pytest.param("1+2", "1+2"),
        pytest.param("2×3÷4−1", "2*3/4-1"),
        pytest.param("π", "pi"),
        pytest.param("-5", "0-5"),
        pytest.param("(-5)+3", "(0-5)+3"),
        pytest.param("2-5", "2-5"),
        pytest.param("--5", "0--5"),
        pytest.param("2(3)", "2*(3)"),
        pytest.param("2 (3)", "2*(3)"),
        pytest.param("3pi", "3*pi"),
        pytest.param("3π", "3*pi"),
        pytest.param("2 sin(0)", "2*sin(0)"),
        pytest.param("(1)2", "(1)*2"),
        pytest.param("(1)e", "(1)*e"),
        pytest.param("(1)(2)", "(1)(2)"),
        pytest.param("sqrt16", "sqrt16"),
    ],
)
def test_normalize(text: str, expected: str) -> None:
    assert normalize(text) == expected


@pytest.mark.parametrize(
    "code, expected",
    [
        pytest.param(
            "12.5+.5",
            [
                Token(TokenType.NUMBER, "12.5"),
                Token(TokenType.OPERATOR, "+"),
                Token(TokenType.NUMBER, ".5"),
            ],
        ),
        pytest.param("2.", [Token(TokenType.NUMBER, "2"), Token(TokenType.DOT, ".")]),
        pytest.param("1.2.3", [Token(TokenType.NUMBER, "1.2"), Token(TokenType.NUMBER, ".3")]),
        pytest.param(
            "exp(1)",
            [
                Token(TokenType.IDENTIFIER, "exp"),
                Token(TokenType.BRACKET_OPEN, "("),
                Token(TokenType.NUMBER, "1"),
                Token(TokenType.BRACKET_CLOSE, ")"),
            ],
        ),
        pytest.param(" 5 ! ", [Token(TokenType.NUMBER, "5"), Token(TokenType.BANG, "!")]),
        pytest.param("2^3%4", [
            Token(TokenType.NUMBER, "2"),
            Token(TokenType.OPERATOR, "^"),
            Token(TokenType.NUMBER, "3"),
            Token(TokenType.OPERATOR, "%"),
            Token(TokenType.NUMBER, "4"),
        ]),
        pytest.param("", []),
    ],
)
def test_tokenize(code: str, expected: list[Token]) -> None:
    assert tokenize(code) == expected


def test_tokenize_unexpected_character() -> None:
    with pytest.raises(TokenizerError) as exc_info:
        tokenize("2$3")
    assert exc_info.value.error_char_idx == 1
    assert str(exc_info.value) == "\n".join(["[Tokenizer error] Unexpected character: '$'", "2$3", " ^"])


def test_untokenize() -> None:
    assert untokenize(tokenize("( 1+2 ) * 3!")) == "(1 + 2) * 3!"


@pytest.mark.parametrize(
    "value, expected",
    [
        pytest.param(14.0, "14"),
        pytest.param(100.0, "100"),
        pytest.param(-2.5, "-2.5"),
        pytest.param(0.0, "0"),
        pytest.param(-0.0, "0"),
        pytest.param(5e-05, "0.00005"),
        pytest.param(1e17, "100000000000000000"),
        pytest.param(1.25e-7, "0.000000125"),
    ],
)
def test_format_number_is_positional(value: float, expected: str) -> None:
    assert format_number(value) == expected
    assert float(tokenize(expected.lstrip("-"))[0].lexeme) == abs(value)
