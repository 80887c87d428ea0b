"""Calculator session state owned by a front end.

The core (`scicalc.engine`) is stateless; everything a user accumulates
while using the calculator (the expression being typed, the last result,
the memory register, the history list) lives on a `CalculatorSession`.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Callable, Optional

from scicalc.builtins import CONSTANTS
from scicalc.engine import Failure, evaluate
from scicalc.utils import format_number

logger = logging.getLogger(__name__)

ERROR_DISPLAY = "Error"
DEFAULT_HISTORY_LIMIT = 50

_TRAILING_NUMBER = re.compile(r"(\d*\.?\d+)\s*$")
_TRAILING_NEGATED = re.compile(r"\(-(\d*\.?\d+)\)\s*$")
_TRAILING_OPERAND = re.compile(r"(\d*\.?\d+|pi|e)\s*$")


@dataclass
class HistoryEntry:
    expr: str
    value: float

    def to_dict(self) -> dict:
        return {"expr": self.expr, "value": self.value}

    @classmethod
    def from_dict(cls, d: dict) -> "HistoryEntry":
        return cls(expr=str(d["expr"]), value=float(d["value"]))


class CalculatorSession:
    def __init__(
        self,
        history: Optional[list[HistoryEntry]] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        on_history_change: Optional[Callable[[list[HistoryEntry]], None]] = None,
    ):
        self.expression = ""
        self.display = ""
        self.last_result: Optional[float] = None
        self.memory = 0.0
        self.history_limit = history_limit
        self.history: list[HistoryEntry] = list(history or [])[:history_limit]
        self.on_history_change = on_history_change

    def _history_changed(self) -> None:
        if self.on_history_change is not None:
            self.on_history_change(self.history)

    def _show_result(self, value: float) -> None:
        self.display = format_number(value)
        self.last_result = value

    # editing

    def set_expression(self, text: str) -> None:
        self.expression = text

    def append(self, text: str) -> None:
        self.expression += text

    def clear(self) -> None:
        self.expression = ""
        self.display = ""

    def backspace(self) -> None:
        self.expression = self.expression[:-1]

    def ans(self) -> None:
        if self.last_result is not None:
            self.append(format_number(self.last_result))

    # evaluation

    def equals(self) -> float | Failure:
        result = evaluate(self.expression)
        if isinstance(result, Failure):
            self.display = ERROR_DISPLAY
            return result
        self._show_result(result)
        self.history.insert(0, HistoryEntry(expr=self.expression, value=result))
        del self.history[self.history_limit :]
        self._history_changed()
        return result

    def percent(self) -> None:
        """Turn the trailing number into a fraction (50 -> 0.5); with no trailing number, type the % operator"""
        m = _TRAILING_NUMBER.search(self.expression)
        if m:
            num = float(m.group(1))
            self.expression = self.expression[: m.start()] + format_number(num / 100)
        else:
            self.append("%")

    def negate(self) -> None:
        negated = _TRAILING_NEGATED.search(self.expression)
        m = _TRAILING_NUMBER.search(self.expression)
        if negated:
            self.expression = self.expression[: negated.start()] + negated.group(1)
        elif m:
            num = float(m.group(1))
            self.expression = self.expression[: m.start()] + f"({format_number(-num)})"
        elif self.expression.startswith("-"):
            self.expression = self.expression[1:]
        else:
            self.expression = "-" + self.expression

    def _apply_to_operand(self, fn: Callable[[float], float]) -> None:
        m = _TRAILING_OPERAND.search(self.expression)
        if m:
            operand = m.group(1)
            num = CONSTANTS[operand] if operand in CONSTANTS else float(operand)
        elif self.last_result is not None:
            num = self.last_result
        else:
            return

        try:
            value = fn(num)
        except ArithmeticError as e:
            logger.info("Cannot apply %s to %r: %s", fn.__name__, num, e)
            self.display = ERROR_DISPLAY
            return
        if not math.isfinite(value):
            self.display = ERROR_DISPLAY
            return

        if m:
            self.expression = self.expression[: m.start()] + format_number(value)
        else:
            self.expression = format_number(value)
        self._show_result(value)

    def reciprocal(self) -> None:
        def reciprocal(x: float) -> float:
            return 1 / x

        self._apply_to_operand(reciprocal)

    def square(self) -> None:
        def square(x: float) -> float:
            return x * x

        self._apply_to_operand(square)

    # memory register

    def memory_clear(self) -> None:
        self.memory = 0.0

    def memory_recall(self) -> None:
        self.set_expression(format_number(self.memory))
        self.display = ""

    def memory_add(self) -> None:
        result = evaluate(self.expression)
        if not isinstance(result, Failure):
            self.memory += result

    def memory_subtract(self) -> None:
        result = evaluate(self.expression)
        if not isinstance(result, Failure):
            self.memory -= result

    # history

    def use_history(self, index: int) -> None:
        entry = self.history[index]
        self.set_expression(entry.expr)
        self._show_result(entry.value)

    def delete_history(self, index: int) -> None:
        del self.history[index]
        self._history_changed()

    def clear_history(self) -> None:
        self.history.clear()
        self._history_changed()
