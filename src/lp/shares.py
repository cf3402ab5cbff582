"""Share and reserve arithmetic shared by both aggregators.

Everything stays in Decimal. Division runs in a wide local context so that
intermediate quotients are not cut to the default 28 digits. Zero total
shares raises ZeroDivisionError instead of producing Infinity.
"""

from decimal import (
    ROUND_HALF_UP,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    localcontext,
)

PERCENT_PLACES = 7
_PERCENT_QUANT = Decimal(1).scaleb(-PERCENT_PLACES)  # 0.0000001
_PRECISION = 80

_CTX = Context(
    prec=_PRECISION,
    rounding=ROUND_HALF_UP,
    traps=[DivisionByZero, InvalidOperation],
)


def to_decimal(value: Decimal | int | str) -> Decimal:
    """Coerce a ledger/backend quantity to Decimal. Floats are refused."""
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"refusing lossy quantity type {type(value).__name__}")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value).strip())


def _divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator == 0:
        raise ZeroDivisionError("total LP shares is zero")
    with localcontext(_CTX):
        return numerator / denominator


def lp_percentage(balance: Decimal | int | str, total_shares: Decimal | int | str) -> Decimal:
    """balance / total_shares * 100, rounded half-up to 7 decimal places."""
    with localcontext(_CTX):
        scaled = to_decimal(balance) * 100
    share = _divide(scaled, to_decimal(total_shares))
    with localcontext(_CTX):
        return share.quantize(_PERCENT_QUANT, rounding=ROUND_HALF_UP)


def my_reserve(
    balance: Decimal | int | str,
    reserve: Decimal | int | str,
    total_shares: Decimal | int | str,
) -> Decimal:
    """User entitlement to one reserve: balance * reserve / total_shares."""
    with localcontext(_CTX):
        product = to_decimal(balance) * to_decimal(reserve)
    return _divide(product, to_decimal(total_shares))


def format_decimal(value: Decimal) -> str:
    """Plain notation without trailing zeros: 50.0000000 -> '50', 1E-7 -> '0.0000001'."""
    if value == 0:
        return "0"
    with localcontext(_CTX):
        return format(value.normalize(), "f")
