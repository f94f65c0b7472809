"""
Currency Converter
==================

Lossless arithmetic over the three-denomination wallet used by players and
shops (gold, silver and copper pieces).

Every operation goes through a single linear base unit, the copper piece::

    1 GP = 10 SP = 100 CP

Values are immutable. Each operation returns a fresh ``Currency`` instead of
modifying its input, and every result coming out of ``from_base_units`` is in
normalized form (as many gold as fit, then silver, then copper).

Insufficient funds is an ordinary outcome here, not an error: ``subtract``
returns ``None`` and ``can_afford`` returns ``False``. Only malformed values
(negative denominations, unknown denomination codes) raise ``ValueError``.

Example:
    Paying for a 3 GP item from a 5 GP wallet::

        from apps.purchases import currency

        wallet = currency.Currency(gp=5)
        price = currency.from_single(3, 'gp')

        change = currency.subtract(wallet, price)
        currency.format_currency(change)  # '2 GP'
"""

from dataclasses import dataclass
from typing import NewType, Optional

from django.db import models


# Total value expressed in copper pieces. Only produced by to_base_units so a
# raw denomination count is never mistaken for a converted total.
CopperAmount = NewType('CopperAmount', int)


class Denomination(models.TextChoices):
    COPPER = 'cp', 'Copper Pieces'
    SILVER = 'sp', 'Silver Pieces'
    GOLD = 'gp', 'Gold Pieces'


DENOMINATION_VALUES = {
    Denomination.COPPER: 1,
    Denomination.SILVER: 10,
    Denomination.GOLD: 100,
}


@dataclass(frozen=True)
class Currency:
    """An amount of money split over gold, silver and copper pieces."""

    gp: int = 0
    sp: int = 0
    cp: int = 0

    def __post_init__(self):
        for name in ('gp', 'sp', 'cp'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} cannot be negative, got {value}")

    def __str__(self):
        return format_currency(self)

    def as_dict(self):
        return {'gp': self.gp, 'sp': self.sp, 'cp': self.cp}


@dataclass(frozen=True)
class ItemCost:
    """
    Canonical catalog price: an amount in a single denomination.

    Attributes:
        amount: Non-negative number of coins.
        denomination: One of ``'cp'``, ``'sp'`` or ``'gp'``.
    """

    amount: int
    denomination: str

    def __post_init__(self):
        if self.denomination not in DENOMINATION_VALUES:
            raise ValueError(f"Unknown denomination: {self.denomination!r}")
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValueError(f"amount must be an integer, got {self.amount!r}")
        if self.amount < 0:
            raise ValueError(f"amount cannot be negative, got {self.amount}")

    def to_currency(self) -> Currency:
        return from_single(self.amount, self.denomination)

    def sell_price(self, modifier: float = 0.5) -> 'ItemCost':
        """
        Price a shop pays to buy this item back.

        The amount is scaled by ``modifier`` and floored, staying in the
        original denomination (a 5 SP item sells for 2 SP at 0.5, not 25 CP).
        """
        return ItemCost(int(self.amount * modifier), self.denomination)

    def __str__(self):
        return f"{self.amount} {self.denomination.upper()}"


def to_base_units(currency: Currency) -> CopperAmount:
    """Total value of ``currency`` in copper pieces."""
    return CopperAmount(
        currency.gp * DENOMINATION_VALUES[Denomination.GOLD]
        + currency.sp * DENOMINATION_VALUES[Denomination.SILVER]
        + currency.cp * DENOMINATION_VALUES[Denomination.COPPER]
    )


def from_base_units(total: CopperAmount) -> Currency:
    """
    Greedy decomposition of a copper total, highest denomination first.

    ``from_base_units(237)`` is ``Currency(gp=2, sp=3, cp=7)``.

    Raises:
        ValueError: If ``total`` is negative.
    """
    gp, remaining = divmod(total, DENOMINATION_VALUES[Denomination.GOLD])
    sp, cp = divmod(remaining, DENOMINATION_VALUES[Denomination.SILVER])
    return Currency(gp=gp, sp=sp, cp=cp)


def can_afford(wallet: Currency, price: Currency) -> bool:
    return to_base_units(wallet) >= to_base_units(price)


def subtract(wallet: Currency, price: Currency) -> Optional[Currency]:
    """
    Take ``price`` out of ``wallet``, making change as needed.

    Returns:
        The normalized remainder, or ``None`` when the wallet cannot cover
        the price. Never returns a negative amount.
    """
    if not can_afford(wallet, price):
        return None
    return from_base_units(CopperAmount(to_base_units(wallet) - to_base_units(price)))


def add(wallet: Currency, amount: Currency) -> Currency:
    return from_base_units(CopperAmount(to_base_units(wallet) + to_base_units(amount)))


def compare(a: Currency, b: Currency) -> int:
    """Return -1, 0 or 1 as ``a`` is worth less than, equal to or more than ``b``."""
    difference = to_base_units(a) - to_base_units(b)
    return (difference > 0) - (difference < 0)


def normalize(currency: Currency) -> Currency:
    """Exchange coins up into the highest denominations (100 CP becomes 1 GP)."""
    return from_base_units(to_base_units(currency))


def convert_to(currency: Currency, denomination: str) -> float:
    """Total value of ``currency`` expressed in a single denomination."""
    return to_base_units(currency) / DENOMINATION_VALUES[Denomination(denomination)]


def format_currency(currency: Currency) -> str:
    """
    Human-readable amount, highest denomination first.

    Zero denominations are skipped; an empty wallet reads ``'0 CP'``.
    """
    parts = []
    if currency.gp > 0:
        parts.append(f"{currency.gp} GP")
    if currency.sp > 0:
        parts.append(f"{currency.sp} SP")
    if currency.cp > 0:
        parts.append(f"{currency.cp} CP")
    return ', '.join(parts) or '0 CP'


def from_single(amount: int, denomination: str) -> Currency:
    """Place ``amount`` entirely in one denomination."""
    denomination = Denomination(denomination)
    return Currency(
        gp=amount if denomination == Denomination.GOLD else 0,
        sp=amount if denomination == Denomination.SILVER else 0,
        cp=amount if denomination == Denomination.COPPER else 0,
    )


def empty() -> Currency:
    return Currency()


def is_empty(currency: Currency) -> bool:
    return currency.gp == 0 and currency.sp == 0 and currency.cp == 0
