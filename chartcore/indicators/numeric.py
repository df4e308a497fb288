"""
Decimal arithmetic boundary for the indicator engine.

Window sums are exact: they run in a context sized to their inputs.
Everything else runs under ENGINE_CONTEXT (28 significant digits,
round-half-even), except that a mean keeps at least the digits of its widest
input. The square root in population_stddev is taken at SQRT_PRECISION
digits and rounded back to ENGINE_CONTEXT once.
"""
from decimal import Context, Decimal, InvalidOperation, ROUND_HALF_EVEN, localcontext
from numbers import Integral, Real
from typing import Iterable, Sequence, Tuple, Union

from ..shared.defaults import DECIMAL_PRECISION, SQRT_PRECISION

ENGINE_CONTEXT = Context(prec=DECIMAL_PRECISION, rounding=ROUND_HALF_EVEN)
SQRT_CONTEXT = Context(prec=SQRT_PRECISION, rounding=ROUND_HALF_EVEN)

Numeric = Union[Decimal, int, float, str]


def to_decimal(value: Numeric) -> Decimal:
    """
    Convert a number to Decimal without binary-float drift.

    Floats go through their shortest repr ("0.1" -> Decimal("0.1")).
    Non-finite values are rejected.
    """
    if isinstance(value, bool):
        raise TypeError("bool is not a numeric value")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(float(value)))
    elif isinstance(value, str):
        try:
            result = Decimal(value)
        except InvalidOperation:
            raise ValueError(f"Not a decimal number: {value!r}") from None
    elif isinstance(value, Integral):
        result = Decimal(int(value))
    elif isinstance(value, Real):
        result = Decimal(repr(float(value)))
    else:
        raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")
    if not result.is_finite():
        raise ValueError(f"Value must be finite, got {value!r}")
    return result


def to_decimals(values: Iterable[Numeric]) -> Tuple[Decimal, ...]:
    """Convert an input column to a tuple of finite Decimals."""
    return tuple(to_decimal(v) for v in values)


def _sum_context(values: Sequence[Decimal]) -> Context:
    # Wide enough to hold every partial sum without rounding
    if not values:
        return ENGINE_CONTEXT
    top = max(v.adjusted() for v in values)
    bottom = min(v.as_tuple().exponent for v in values)
    prec = top - bottom + 1 + len(values).bit_length()
    return Context(prec=max(DECIMAL_PRECISION, prec), rounding=ROUND_HALF_EVEN)


def exact_sum(values: Sequence[Decimal]) -> Decimal:
    """Sum with no rounding at all, however many digits the inputs carry."""
    with localcontext(_sum_context(values)):
        total = Decimal(0)
        for v in values:
            total += v
        return total


def working_context(values: Iterable[Decimal]) -> Context:
    """ENGINE_CONTEXT, widened to the significant digits of the widest value."""
    widest = max((len(v.as_tuple().digits) for v in values), default=0)
    if widest <= DECIMAL_PRECISION:
        return ENGINE_CONTEXT
    return Context(prec=widest, rounding=ROUND_HALF_EVEN)


def mean(values: Sequence[Decimal]) -> Decimal:
    """
    Arithmetic mean: direct sum of the window divided by its length.

    The division is the only rounding step. It keeps at least as many
    significant digits as the widest input, so the mean of a constant
    window is that constant.
    """
    total = exact_sum(values)
    with localcontext(working_context(values)):
        return total / len(values)


def population_stddev(values: Sequence[Decimal], center: Decimal) -> Decimal:
    """
    Population standard deviation of values around center (their mean).

    Variance is computed in the engine context; the square root is taken at
    extended precision and rounded back once.
    """
    with localcontext(ENGINE_CONTEXT):
        variance = exact_sum([(v - center) * (v - center) for v in values]) / len(values)
    root = variance.sqrt(context=SQRT_CONTEXT)
    return ENGINE_CONTEXT.plus(root)


__all__ = [
    'ENGINE_CONTEXT',
    'SQRT_CONTEXT',
    'to_decimal',
    'to_decimals',
    'exact_sum',
    'working_context',
    'mean',
    'population_stddev',
]
