"""Helpers for converting currency amounts between units and cents."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

_CENTS_PER_UNIT = Decimal(100)

Number = Union[Decimal, int, str]


def to_cents(amount: Number) -> int:
    """Return ``amount`` in whole units as an integer number of cents.

    Half cents round away from zero so ``"0.005"`` becomes ``1``.
    """

    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    return int((value * _CENTS_PER_UNIT).to_integral_value(rounding=ROUND_HALF_UP))


def from_cents(cents: int | None) -> Decimal:
    """Return a cent count as a two-place :class:`~decimal.Decimal`."""

    return (Decimal(cents or 0) / _CENTS_PER_UNIT).quantize(Decimal("0.01"))
