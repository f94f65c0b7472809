"""
Stock levels for shop listings.

A listing either has no stock limit or a finite number of copies left.
The database keeps the classic nullable column (NULL = unlimited); code
above the model layer works with ``Stock`` values so "no limit" and
"none left" can't be confused.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Unlimited:
    """Listing never runs out."""

    def __str__(self):
        return 'unlimited'


@dataclass(frozen=True)
class Limited:
    """Listing with ``quantity`` copies left."""

    quantity: int

    def __post_init__(self):
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError(f"quantity must be an integer, got {self.quantity!r}")
        if self.quantity < 0:
            raise ValueError(f"quantity cannot be negative, got {self.quantity}")

    def __str__(self):
        return str(self.quantity)


Stock = Union[Unlimited, Limited]

UNLIMITED = Unlimited()


def from_db(value: Optional[int]) -> Stock:
    return UNLIMITED if value is None else Limited(value)


def to_db(stock: Stock) -> Optional[int]:
    return None if isinstance(stock, Unlimited) else stock.quantity
