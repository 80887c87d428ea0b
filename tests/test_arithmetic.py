import math

import pytest

from scicalc.engine import Failure, FailureKind, evaluate


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("", 0.0),
        pytest.param("   ", 0.0),
        pytest.param("1", 1.0),
        pytest.param("-1", -1.0),
        pytest.param("1+2", 3.0),
        pytest.param("(1+2)", 3.0),
        pytest.param("-(1+2)", -3.0),
        pytest.param("(((1)))", 1.0),
        pytest.param("1 * 4 + 5", 9.0),
        pytest.param("2+3*4", 14.0),
        pytest.param("10 / 5 / 2 / 2", 0.5),
        pytest.param("10-3-2", 5.0),
        pytest.param("10 + 2 * (5 + 3 - 1)", 24.0),
        pytest.param("2^3^2", 512.0),
        pytest.param("-2^2", -4.0),
        pytest.param("2^(-1)", 0.5),
        pytest.param("(-5)+3", -2.0),
        pytest.param("-5+3", -2.0),
        # implicit multiplication
        pytest.param("2(3)", 6.0),
        pytest.param("2 (3)", 6.0),
        pytest.param("(1+2)3", 9.0),
        pytest.param("2sqrt(9)", 6.0),
        # glyphs
        pytest.param("2×3÷4−1", 0.5),
        # percent-of operator
        pytest.param("200%10", 20.0),
        pytest.param("2+10%50", 7.0),
        # factorial
        pytest.param("5!", 120.0),
        pytest.param("0!", 1.0),
        pytest.param("3.7!", 6.0),
        pytest.param("(2+1)!", 6.0),
        pytest.param("2+3!", 8.0),
        # funcs
        pytest.param("sqrt(16)", 4.0),
        pytest.param("sqrt16", 4.0),
        pytest.param("sin(0)", 0.0),
        pytest.param("sin 0", 0.0),
        pytest.param("cos(0)", 1.0),
        pytest.param("log(1000)", 3.0),
        pytest.param("exp(0)", 1.0),
        pytest.param("tanh(0)+cosh(0)", 1.0),
        # unmatched closing bracket is ignored
        pytest.param("2+3)", 5.0),
    ],
)
def test_eval_arithmetic(code: str, expected_ret_val: float) -> None:
    assert evaluate(code) == pytest.approx(expected_ret_val)


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("3pi", 3 * math.pi),
        pytest.param("2π", 2 * math.pi),
        pytest.param("π", math.pi),
        pytest.param("e", math.e),
        pytest.param("ln(e)", 1.0),
        pytest.param("exp(1)", math.e),
        pytest.param("sin(pi/2)", 1.0),
        pytest.param("atan(1)*4", math.pi),
        pytest.param("(1+2)pi", 3 * math.pi),
        pytest.param("170.5!", float(math.factorial(170))),
    ],
)
def test_eval_constants(code: str, expected_ret_val: float) -> None:
    assert evaluate(code) == pytest.approx(expected_ret_val)


@pytest.mark.parametrize(
    "code, kind",
    [
        pytest.param("2$3", FailureKind.LEXICAL),
        pytest.param("2²", FailureKind.LEXICAL),
        pytest.param("foo(2)", FailureKind.SYNTAX),
        pytest.param("2.", FailureKind.SYNTAX),
        pytest.param("(2+3", FailureKind.SYNTAX),
        pytest.param("2+", FailureKind.UNDERFLOW),
        pytest.param("*3", FailureKind.UNDERFLOW),
        pytest.param("--5", FailureKind.UNDERFLOW),
        pytest.param("2^-1", FailureKind.UNDERFLOW),
        # percent as a trailing operator has no right operand
        pytest.param("50%", FailureKind.UNDERFLOW),
        pytest.param("2 3", FailureKind.RESIDUAL),
        pytest.param("1.2.3", FailureKind.RESIDUAL),
        pytest.param("()", FailureKind.RESIDUAL),
        pytest.param("(2)(3)", FailureKind.RESIDUAL),
        pytest.param("1/0", FailureKind.DOMAIN),
        pytest.param("0^(-1)", FailureKind.DOMAIN),
        pytest.param("(-1)!", FailureKind.DOMAIN),
        pytest.param("171!", FailureKind.DOMAIN),
        pytest.param("sqrt(-1)", FailureKind.DOMAIN),
        pytest.param("(-8)^(1/3)", FailureKind.DOMAIN),
        pytest.param("log(0)", FailureKind.DOMAIN),
        pytest.param("ln(-1)", FailureKind.DOMAIN),
        pytest.param("10^400", FailureKind.DOMAIN),
        pytest.param("exp(1000)", FailureKind.DOMAIN),
    ],
)
def test_eval_failure(code: str, kind: FailureKind) -> None:
    result = evaluate(code)
    assert isinstance(result, Failure)
    assert result.kind is kind
    assert result.message


def test_evaluate_is_repeatable() -> None:
    first = evaluate("2(3+4)^2/7")
    assert first == 14.0
    for _ in range(3):
        assert evaluate("2(3+4)^2/7") == first
        assert isinstance(evaluate("2+"), Failure)
