from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_CENT = Decimal("0.01")


def to_amount(value: float | int | str | Decimal) -> Decimal:
    if isinstance(value, bool):
        raise ValueError("amount must be a number")
    try:
        amount = Decimal(str(value))
    except ArithmeticError as exc:
        raise ValueError(f"invalid amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"invalid amount: {value!r}")
    return amount.quantize(_CENT, rounding=ROUND_HALF_UP)


def line_total(price: float | int | str | Decimal, quantity: int) -> Decimal:
    return to_amount(Decimal(str(price)) * quantity)


def sum_amounts(amounts: list[Decimal]) -> Decimal:
    return to_amount(sum(amounts, Decimal("0")))
