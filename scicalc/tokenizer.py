import enum
import re
from dataclasses import dataclass

from scicalc.utils import PrintableEnum


@dataclass
class TokenizerError(Exception):
    errmsg: str
    code: str
    error_char_idx: int

    def __str__(self) -> str:
        print_start_idx = max(0, self.error_char_idx - 10)
        print_ellipsis_pre = print_start_idx > 0
        print_end_idx = min(len(self.code), self.error_char_idx + 10)
        print_ellipsis_post = print_end_idx < len(self.code)
        return "\n".join(
            [
                f"[Tokenizer error] {self.errmsg}",
                (
                    ("..." if print_ellipsis_pre else "")
                    + f"{self.code[print_start_idx:print_end_idx]}"
                    + ("..." if print_ellipsis_post else "")
                ),
                " " * (self.error_char_idx - print_start_idx + (3 if print_ellipsis_pre else 0)) + "^",
            ]
        )


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    IDENTIFIER = enum.auto()
    OPERATOR = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    BANG = enum.auto()
    DOT = enum.auto()


@dataclass
class Token:
    type: TokenType
    lexeme: str

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


SINGLE_CHAR_TOKENS = {
    "+": TokenType.OPERATOR,
    "-": TokenType.OPERATOR,
    "*": TokenType.OPERATOR,
    "/": TokenType.OPERATOR,
    "%": TokenType.OPERATOR,
    "^": TokenType.OPERATOR,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
    "!": TokenType.BANG,
    ".": TokenType.DOT,
}


def _is_ascii_digit(s: str) -> bool:
    return "0" <= s <= "9"


def _is_ascii_letter(s: str) -> bool:
    return "a" <= s <= "z" or "A" <= s <= "Z"


def _starts_number(code: str, i: int) -> bool:
    if _is_ascii_digit(code[i]):
        return True
    return code[i] == "." and i + 1 < len(code) and _is_ascii_digit(code[i + 1])


def _number_end(code: str, i: int) -> int:
    """Digits, then an optional fraction that must carry at least one digit ('2.' is '2' and a stray '.')"""
    j = i
    while j < len(code) and _is_ascii_digit(code[j]):
        j += 1
    if j + 1 < len(code) and code[j] == "." and _is_ascii_digit(code[j + 1]):
        j += 1
        while j < len(code) and _is_ascii_digit(code[j]):
            j += 1
    return j


def tokenize(code: str) -> list[Token]:
    i = 0
    tokens: list[Token] = []
    while i < len(code):
        if _starts_number(code, i):
            number_end_idx = _number_end(code, i)
            tokens.append(Token(type=TokenType.NUMBER, lexeme=code[i:number_end_idx]))
            i = number_end_idx - 1  # to account for += 1 later
        elif _is_ascii_letter(code[i]):
            ident_end_idx = i + 1
            while ident_end_idx < len(code) and _is_ascii_letter(code[ident_end_idx]):
                ident_end_idx += 1
            tokens.append(Token(type=TokenType.IDENTIFIER, lexeme=code[i:ident_end_idx]))
            i = ident_end_idx - 1  # to account for += 1 later
        elif code[i] in SINGLE_CHAR_TOKENS:
            tokens.append(Token(type=SINGLE_CHAR_TOKENS[code[i]], lexeme=code[i]))
        elif code[i].isspace():
            pass
        else:
            raise TokenizerError(f"Unexpected character: {code[i]!r}", code=code, error_char_idx=i)
        i += 1

    return tokens


def untokenize(tokens: list[Token]) -> str:
    result = " ".join(t.lexeme for t in tokens)

    # ( 1 + 2 ) => (1 + 2)
    result = re.sub(r"\(\s+", "(", result)
    result = re.sub(r"\s+\)", ")", result)

    # 5 ! => 5!, 4 ^ 5 => 4^5
    result = re.sub(r"\s+!", "!", result)
    result = re.sub(r"\s+\^\s+", "^", result)
    return result
