import enum
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping

from scicalc.utils import PrintableEnum

UnaryFunc = Callable[[float], float]
BinaryFunc = Callable[[float, float], float]


class Associativity(PrintableEnum):
    LEFT = enum.auto()
    RIGHT = enum.auto()


@dataclass(frozen=True)
class OperatorInfo:
    precedence: int
    associativity: Associativity
    fn: BinaryFunc


OPERATORS: Mapping[str, OperatorInfo] = MappingProxyType(
    {
        "+": OperatorInfo(2, Associativity.LEFT, lambda a, b: a + b),
        "-": OperatorInfo(2, Associativity.LEFT, lambda a, b: a - b),
        "*": OperatorInfo(3, Associativity.LEFT, lambda a, b: a * b),
        "/": OperatorInfo(3, Associativity.LEFT, lambda a, b: a / b),
        # "b percent of a", not modulo
        "%": OperatorInfo(3, Associativity.LEFT, lambda a, b: a * b / 100),
        "^": OperatorInfo(4, Associativity.RIGHT, math.pow),
    }
)

CONSTANTS: Mapping[str, float] = MappingProxyType({"pi": math.pi, "e": math.e})

_builtin_funcs: dict[str, UnaryFunc] = dict()
BUILTIN_FUNCS: Mapping[str, UnaryFunc] = MappingProxyType(_builtin_funcs)


def register_builtin_func(name: str):
    def decorator(fn: UnaryFunc) -> UnaryFunc:
        if name in _builtin_funcs:
            raise ValueError(f"Built-in function {name!r} is already registered")
        _builtin_funcs[name] = fn
        return fn

    return decorator


for _name, _fn in [
    ("sqrt", math.sqrt),
    ("sin", math.sin),
    ("cos", math.cos),
    ("tan", math.tan),
    ("log", math.log10),
    ("ln", math.log),
    ("asin", math.asin),
    ("acos", math.acos),
    ("atan", math.atan),
    ("sinh", math.sinh),
    ("cosh", math.cosh),
    ("tanh", math.tanh),
    ("exp", math.exp),
]:
    register_builtin_func(_name)(_fn)


def factorial(n: float) -> float:
    """Factorial of floor(n); NaN for negative input, inf once a float can't hold the result"""
    if math.isnan(n) or n < 0:
        return math.nan
    if math.isinf(n) or math.floor(n) > 170:
        return math.inf
    return float(math.factorial(math.floor(n)))
