import enum
import math
from decimal import Decimal


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def format_number(value: float) -> str:
    """Render a result the way it goes back into expression text: 14.0 -> '14', 5e-05 -> '0.00005'

    The tokenizer has no exponent syntax, so finite values are always written positionally.
    """
    if not math.isfinite(value):
        return repr(value)
    if value == 0:
        return "0"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
