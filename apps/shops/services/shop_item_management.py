"""
Shop listing service.

Listings put library items on sale in a shop, with an optional price
override and stock limit.
"""

from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.catalog.services import get_library_item
from apps.purchases.currency import ItemCost
from apps.shops.models import ShopItem
from apps.shops.stock import Stock, UNLIMITED, to_db

from .exceptions import (
    ShopItemNotFoundError,
    ShopItemLimitExceededError,
    AlreadyIndependentError,
    NotIndependentError,
    InsufficientPermissionsError,
)
from .shop_management import lock_owned_shop


# Marks an update argument that was not given (None is a real value here)
UNCHANGED = object()


def _lock_owned_item(shop_item_id: UUID, dm: User) -> ShopItem:
    try:
        item = (
            ShopItem.objects
            .select_for_update()
            .select_related('market', 'library_item')
            .get(id=shop_item_id)
        )
    except ShopItem.DoesNotExist:
        raise ShopItemNotFoundError(f"Shop item with ID {shop_item_id} not found")

    if item.market.dm_id != dm.id:
        raise InsufficientPermissionsError("Only the market's DM can manage this listing")
    return item


@transaction.atomic
def add_item_to_shop(
    *,
    shop_id: UUID,
    dm: User,
    library_item_id: UUID,
    price: Optional[ItemCost] = None,
    stock: Stock = UNLIMITED
) -> ShopItem:
    """
    List a library item in a shop.

    Args:
        shop_id: Shop to list the item in
        dm: User adding the item (must run the market)
        library_item_id: Item from the DM's own library
        price: Optional override of the library cost
        stock: Limited(n) or UNLIMITED

    Returns:
        Created ShopItem

    Raises:
        ShopNotFoundError: If shop doesn't exist
        InsufficientPermissionsError: If user is not the market's DM
        LibraryItemNotFoundError: If the item isn't in this DM's library
        ShopItemLimitExceededError: If the shop lists ITEMS_PER_SHOP items
    """
    shop = lock_owned_shop(shop_id, dm)
    library_item = get_library_item(item_id=library_item_id, dm=dm)

    if ShopItem.objects.filter(shop=shop).count() >= settings.ITEMS_PER_SHOP:
        raise ShopItemLimitExceededError(
            f"This shop has reached the maximum limit of {settings.ITEMS_PER_SHOP} items. "
            f"Please remove some items before adding new ones."
        )

    return ShopItem.objects.create(
        shop=shop,
        market_id=shop.market_id,
        library_item=library_item,
        price_amount=price.amount if price else None,
        price_denomination=price.denomination if price else '',
        stock=to_db(stock),
    )


def get_shop_item(*, shop_item_id: UUID) -> ShopItem:
    try:
        return (
            ShopItem.objects
            .select_related('shop', 'market', 'library_item')
            .get(id=shop_item_id)
        )
    except ShopItem.DoesNotExist:
        raise ShopItemNotFoundError(f"Shop item with ID {shop_item_id} not found")


def list_items_for_shop(*, shop_id: UUID) -> QuerySet:
    return (
        ShopItem.objects
        .filter(shop_id=shop_id)
        .select_related('library_item')
        .order_by('created_at')
    )


def list_items_for_market(*, market_id: UUID) -> QuerySet:
    return (
        ShopItem.objects
        .filter(market_id=market_id)
        .select_related('shop', 'library_item')
        .order_by('shop__order', 'created_at')
    )


@transaction.atomic
def update_shop_item(
    *,
    shop_item_id: UUID,
    dm: User,
    price=UNCHANGED,
    stock=UNCHANGED,
    custom_data=UNCHANGED
) -> ShopItem:
    """
    Change a listing's price override, stock or snapshot data.

    Pass ``price=None`` to drop the override and ``stock=UNLIMITED`` to
    remove the stock limit. ``custom_data`` can only be edited on
    independent listings.

    Raises:
        NotIndependentError: If custom_data is given for a linked listing
    """
    item = _lock_owned_item(shop_item_id, dm)
    update_fields = ['updated_at']

    if price is not UNCHANGED:
        item.price_amount = price.amount if price else None
        item.price_denomination = price.denomination if price else ''
        update_fields += ['price_amount', 'price_denomination']

    if stock is not UNCHANGED:
        item.stock = to_db(stock)
        update_fields.append('stock')

    if custom_data is not UNCHANGED:
        if not item.is_independent:
            raise NotIndependentError(
                "Make the item independent before editing its details"
            )
        item.custom_data = custom_data
        update_fields.append('custom_data')

    item.save(update_fields=update_fields)
    return item


@transaction.atomic
def make_item_independent(*, shop_item_id: UUID, dm: User) -> ShopItem:
    """
    Detach a listing from library updates by snapshotting the library item.

    Raises:
        AlreadyIndependentError: If the listing is already independent
    """
    item = _lock_owned_item(shop_item_id, dm)

    if item.is_independent:
        raise AlreadyIndependentError("Item is already independent")

    item.custom_data = item.library_item.snapshot()
    item.is_independent = True
    item.save(update_fields=['custom_data', 'is_independent', 'updated_at'])
    return item


@transaction.atomic
def remove_item_from_shop(*, shop_item_id: UUID, dm: User) -> None:
    """Remove a listing. The library item is not touched."""
    item = _lock_owned_item(shop_item_id, dm)
    item.delete()
