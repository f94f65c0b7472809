"""
Stock and till store.

Row-locked primitives used by purchase settlement. Every function runs in
its own (possibly nested) transaction and locks the row it changes with
``select_for_update`` so concurrent trades against the same listing or the
same till serialize instead of overwriting each other.
"""

from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.purchases.currency import Currency, add, subtract
from apps.shops.models import Shop, ShopItem
from apps.shops.stock import Stock, from_db, to_db

from .exceptions import ShopNotFoundError, ShopItemNotFoundError


def _lock_item(item_id: UUID) -> ShopItem:
    try:
        return ShopItem.objects.select_for_update().get(id=item_id)
    except ShopItem.DoesNotExist:
        raise ShopItemNotFoundError(f"Shop item with ID {item_id} not found")


def _lock_shop(shop_id: UUID) -> Shop:
    try:
        return Shop.objects.select_for_update().get(id=shop_id)
    except Shop.DoesNotExist:
        raise ShopNotFoundError(f"Shop with ID {shop_id} not found")


def decrease_stock_atomically(item_id: UUID, amount: int = 1) -> bool:
    """
    Take ``amount`` copies off a listing if enough are left.

    Returns:
        True if decremented (or the listing is unlimited), False if the
        listing has fewer than ``amount`` copies.

    Raises:
        ShopItemNotFoundError: If the listing doesn't exist
    """
    with transaction.atomic():
        item = _lock_item(item_id)

        if item.stock is None:
            return True
        if item.stock < amount:
            return False

        item.stock -= amount
        item.save(update_fields=['stock', 'updated_at'])
        return True


def increase_stock(item_id: UUID, amount: int = 1) -> None:
    """Put ``amount`` copies back. No-op for unlimited listings."""
    with transaction.atomic():
        item = _lock_item(item_id)

        if item.stock is None:
            return

        item.stock += amount
        item.save(update_fields=['stock', 'updated_at'])


def get_stock(item_id: UUID) -> Optional[Stock]:
    """Current stock of a listing, or None if the listing doesn't exist."""
    row = ShopItem.objects.filter(id=item_id).values('stock').first()
    if row is None:
        return None
    return from_db(row['stock'])


def set_stock(item_id: UUID, stock: Stock) -> ShopItem:
    """Overwrite a listing's stock (DM restock)."""
    with transaction.atomic():
        item = _lock_item(item_id)
        item.stock = to_db(stock)
        item.save(update_fields=['stock', 'updated_at'])
        return item


def get_till(shop_id: UUID) -> Currency:
    try:
        return Shop.objects.get(id=shop_id).till
    except Shop.DoesNotExist:
        raise ShopNotFoundError(f"Shop with ID {shop_id} not found")


def persist_till_currency(shop_id: UUID, currency: Currency) -> None:
    """Overwrite the shop's till."""
    with transaction.atomic():
        shop = _lock_shop(shop_id)
        shop.set_currency(currency)
        shop.save(update_fields=Shop.CURRENCY_FIELDS + ['updated_at'])


def credit_till(shop_id: UUID, amount: Currency) -> Currency:
    """Add ``amount`` to the till under a row lock; returns the new till."""
    with transaction.atomic():
        shop = _lock_shop(shop_id)
        new_till = add(shop.till, amount)
        shop.set_currency(new_till)
        shop.save(update_fields=Shop.CURRENCY_FIELDS + ['updated_at'])
        return new_till


def debit_till(shop_id: UUID, amount: Currency) -> Optional[Currency]:
    """
    Take ``amount`` out of the till under a row lock.

    Returns:
        The new till, or None if the till can't cover ``amount`` (nothing
        is written in that case).
    """
    with transaction.atomic():
        shop = _lock_shop(shop_id)
        new_till = subtract(shop.till, amount)
        if new_till is None:
            return None
        shop.set_currency(new_till)
        shop.save(update_fields=Shop.CURRENCY_FIELDS + ['updated_at'])
        return new_till
