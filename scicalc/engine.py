"""Calculator core entry point.

`evaluate` runs raw calculator text through normalizer -> tokenizer ->
shunting-yard parser -> RPN evaluator and never raises for bad input:
every stage error is returned as a `Failure` tagged with its kind.
"""

import enum
import logging
from dataclasses import dataclass, field

from scicalc.normalizer import normalize
from scicalc.parser import ParserError, RPNElement, to_rpn
from scicalc.runtime import (
    CalcRuntimeError,
    MathDomainError,
    ResidualValuesError,
    StackUnderflowError,
    evaluate_rpn,
)
from scicalc.tokenizer import Token, TokenizerError, tokenize
from scicalc.utils import PrintableEnum

logger = logging.getLogger(__name__)


class FailureKind(PrintableEnum):
    LEXICAL = enum.auto()
    SYNTAX = enum.auto()
    UNDERFLOW = enum.auto()
    RESIDUAL = enum.auto()
    DOMAIN = enum.auto()


@dataclass
class Failure:
    kind: FailureKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


@dataclass
class Trace:
    expression: str
    normalized: str = ""
    tokens: list[Token] = field(default_factory=list)
    rpn: list[RPNElement] = field(default_factory=list)
    result: float | Failure = 0.0


def _failure_kind(error: Exception) -> FailureKind:
    if isinstance(error, TokenizerError):
        return FailureKind.LEXICAL
    elif isinstance(error, ParserError):
        return FailureKind.SYNTAX
    elif isinstance(error, StackUnderflowError):
        return FailureKind.UNDERFLOW
    elif isinstance(error, ResidualValuesError):
        return FailureKind.RESIDUAL
    elif isinstance(error, MathDomainError):
        return FailureKind.DOMAIN
    elif isinstance(error, CalcRuntimeError):
        # an RPN element the evaluator has no rule for
        return FailureKind.SYNTAX
    else:
        raise TypeError(f"Not a calculator error: {error!r}")


def trace(expression: str) -> Trace:
    """Evaluate keeping every intermediate stage, for diagnostics"""
    t = Trace(expression=expression)
    if not expression.strip():
        t.result = 0.0
        return t
    try:
        t.normalized = normalize(expression)
        t.tokens = tokenize(t.normalized)
        t.rpn = to_rpn(t.tokens)
        t.result = evaluate_rpn(t.rpn)
    except (TokenizerError, ParserError, CalcRuntimeError) as e:
        kind = _failure_kind(e)
        logger.info("Rejected %r (%s): %s", expression, kind, e.errmsg)
        t.result = Failure(kind=kind, message=str(e))
    else:
        logger.debug("%r -> %r -> %r", expression, t.normalized, t.result)
    return t


def evaluate(expression: str) -> float | Failure:
    return trace(expression).result
