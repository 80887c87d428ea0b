import logging
import math
from dataclasses import dataclass

from scicalc.builtins import BUILTIN_FUNCS, OPERATORS, factorial
from scicalc.parser import BinaryOp, Factorial, FunctionCall, RPNElement

logger = logging.getLogger(__name__)


@dataclass
class CalcRuntimeError(Exception):
    errmsg: str

    def __str__(self) -> str:
        return f"[Runtime error] {self.errmsg}"


class StackUnderflowError(CalcRuntimeError):
    pass


class ResidualValuesError(CalcRuntimeError):
    pass


class MathDomainError(CalcRuntimeError):
    pass


def _pop(stack: list[float], op_name: str) -> float:
    if not stack:
        raise StackUnderflowError(f"{op_name} is missing an operand")
    return stack.pop()


def evaluate_rpn(rpn: list[RPNElement]) -> float:
    stack: list[float] = []
    for element in rpn:
        if isinstance(element, float):
            stack.append(element)
            continue
        try:
            if isinstance(element, Factorial):
                stack.append(factorial(_pop(stack, "Factorial")))
            elif isinstance(element, FunctionCall):
                stack.append(BUILTIN_FUNCS[element.name](_pop(stack, element.name)))
            elif isinstance(element, BinaryOp):
                right = _pop(stack, f"Operator {element.symbol!r}")
                left = _pop(stack, f"Operator {element.symbol!r}")
                stack.append(OPERATORS[element.symbol].fn(left, right))
            else:
                raise CalcRuntimeError(f"Unexpected RPN element: {element!r}")
        except (ArithmeticError, ValueError) as e:
            raise MathDomainError(f"{element} failed: {e}") from e

    if len(stack) != 1:
        raise ResidualValuesError(f"Expected a single value, {len(stack)} left on the stack")

    result = stack[0]
    if not math.isfinite(result):
        raise MathDomainError(f"Result is not a finite number: {result}")
    logger.debug("RPN of %d elements reduced to %r", len(rpn), result)
    return result
