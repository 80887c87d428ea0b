from dataclasses import dataclass

from scicalc.builtins import BUILTIN_FUNCS, CONSTANTS, OPERATORS, Associativity
from scicalc.tokenizer import Token, TokenType, untokenize
from scicalc.utils import format_number


@dataclass
class ParserError(Exception):
    errmsg: str
    tokens: list[Token]
    error_token_idx: int

    def __str__(self) -> str:
        parsed_tokens = self.tokens[: self.error_token_idx]
        filler_whitespace = " " * len(untokenize(parsed_tokens)) + (" " if parsed_tokens else "")
        return "\n".join([f"Parser error: {self.errmsg}", untokenize(self.tokens), filler_whitespace + "^"])


@dataclass(frozen=True)
class BinaryOp:
    symbol: str


@dataclass(frozen=True)
class FunctionCall:
    name: str


@dataclass(frozen=True)
class Factorial:
    pass


RPNElement = float | BinaryOp | FunctionCall | Factorial


def format_rpn(rpn: list[RPNElement]) -> str:
    parts = []
    for element in rpn:
        if isinstance(element, float):
            parts.append(format_number(element))
        elif isinstance(element, BinaryOp):
            parts.append(element.symbol)
        elif isinstance(element, FunctionCall):
            parts.append(element.name)
        else:
            parts.append("!")
    return " ".join(parts)


def _pops_before(stacked: Token, incoming: str) -> bool:
    if stacked.type is not TokenType.OPERATOR:
        return False
    stacked_info = OPERATORS[stacked.lexeme]
    incoming_info = OPERATORS[incoming]
    return stacked_info.precedence > incoming_info.precedence or (
        stacked_info.precedence == incoming_info.precedence and incoming_info.associativity is Associativity.LEFT
    )


def _stacked_to_rpn(token: Token) -> RPNElement:
    if token.type is TokenType.OPERATOR:
        return BinaryOp(token.lexeme)
    return FunctionCall(token.lexeme)


def to_rpn(tokens: list[Token]) -> list[RPNElement]:
    """Shunting-yard: infix tokens to postfix order.

    Functions wait on the operator stack until the bracket closing their
    argument is seen; `!` is postfix and goes straight to the output.
    """
    output: list[RPNElement] = []
    # (token, index in tokens) so an unclosed bracket can be pointed at
    stack: list[tuple[Token, int]] = []
    for i, token in enumerate(tokens):
        if token.type is TokenType.NUMBER:
            output.append(float(token.lexeme))
        elif token.type is TokenType.IDENTIFIER:
            if token.lexeme in CONSTANTS:
                output.append(CONSTANTS[token.lexeme])
            elif token.lexeme in BUILTIN_FUNCS:
                stack.append((token, i))
            else:
                raise ParserError(f"Unknown identifier {token.lexeme!r}", tokens=tokens, error_token_idx=i)
        elif token.type is TokenType.BANG:
            output.append(Factorial())
        elif token.type is TokenType.OPERATOR:
            while stack and _pops_before(stack[-1][0], token.lexeme):
                output.append(_stacked_to_rpn(stack.pop()[0]))
            stack.append((token, i))
        elif token.type is TokenType.BRACKET_OPEN:
            stack.append((token, i))
        elif token.type is TokenType.BRACKET_CLOSE:
            while stack and stack[-1][0].type is not TokenType.BRACKET_OPEN:
                output.append(_stacked_to_rpn(stack.pop()[0]))
            if stack:
                stack.pop()
            if stack and stack[-1][0].type is TokenType.IDENTIFIER:
                output.append(_stacked_to_rpn(stack.pop()[0]))
        else:
            raise ParserError(f"Unexpected {token.type}", tokens=tokens, error_token_idx=i)

    while stack:
        token, i = stack.pop()
        if token.type is TokenType.BRACKET_OPEN:
            raise ParserError("Unclosed bracket", tokens=tokens, error_token_idx=i)
        output.append(_stacked_to_rpn(token))

    return output
