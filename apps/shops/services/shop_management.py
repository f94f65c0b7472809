"""
Shop management service.

Handles shop CRUD and ordering within a market. Only the market's DM can
change its shops.
"""

from typing import List
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.markets.models import Market
from apps.shops.models import Shop

from .exceptions import (
    ShopNotFoundError,
    ShopLimitExceededError,
    InvalidShopOrderError,
    InsufficientPermissionsError,
)


UPDATABLE_FIELDS = {'name', 'description', 'location', 'category', 'shopkeeper', 'tags'}


def _lock_owned_market(market_id: UUID, dm: User) -> Market:
    try:
        market = Market.objects.select_for_update().get(id=market_id)
    except Market.DoesNotExist:
        raise ShopNotFoundError(f"Market with ID {market_id} not found")

    if market.dm_id != dm.id:
        raise InsufficientPermissionsError("Only the market's DM can manage its shops")
    return market


def lock_owned_shop(shop_id: UUID, dm: User) -> Shop:
    """Lock a shop row and check the user runs its market."""
    try:
        shop = Shop.objects.select_for_update().select_related('market').get(id=shop_id)
    except Shop.DoesNotExist:
        raise ShopNotFoundError(f"Shop with ID {shop_id} not found")

    if shop.market.dm_id != dm.id:
        raise InsufficientPermissionsError("Only the market's DM can manage this shop")
    return shop


@transaction.atomic
def create_shop(*, market_id: UUID, dm: User, name: str, **fields) -> Shop:
    """
    Create a shop at the end of a market's shop order.

    The till starts empty.

    Args:
        market_id: Market the shop belongs to
        dm: User creating the shop (must run the market)
        name: Shop name
        **fields: description, location, category, shopkeeper, tags

    Returns:
        Created Shop instance

    Raises:
        ShopNotFoundError: If market doesn't exist
        InsufficientPermissionsError: If user is not the market's DM
        ShopLimitExceededError: If the market has SHOPS_PER_MARKET shops
    """
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise TypeError(f"Unexpected fields: {', '.join(sorted(unknown))}")

    market = _lock_owned_market(market_id, dm)

    count = Shop.objects.filter(market=market).count()
    if count >= settings.SHOPS_PER_MARKET:
        raise ShopLimitExceededError(
            f"This market has reached the maximum limit of {settings.SHOPS_PER_MARKET} shops"
        )

    return Shop.objects.create(market=market, name=name, order=count, **fields)


def get_shop(*, shop_id: UUID) -> Shop:
    try:
        return Shop.objects.select_related('market').get(id=shop_id)
    except Shop.DoesNotExist:
        raise ShopNotFoundError(f"Shop with ID {shop_id} not found")


def list_shops_for_market(*, market_id: UUID) -> QuerySet:
    return Shop.objects.filter(market_id=market_id).order_by('order', 'created_at')


@transaction.atomic
def update_shop(*, shop_id: UUID, dm: User, **changes) -> Shop:
    """Update shop details. Till and order have their own operations."""
    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise TypeError(f"Unexpected fields: {', '.join(sorted(unknown))}")

    shop = lock_owned_shop(shop_id, dm)

    for field, value in changes.items():
        setattr(shop, field, value)

    shop.save(update_fields=list(changes) + ['updated_at'])
    return shop


@transaction.atomic
def reorder_shops(*, market_id: UUID, dm: User, shop_ids: List[UUID]) -> List[Shop]:
    """
    Set the display order of a market's shops.

    Args:
        market_id: Market whose shops are reordered
        dm: User performing the reorder
        shop_ids: Every shop of the market, in the new order

    Returns:
        The shops in their new order

    Raises:
        InvalidShopOrderError: If shop_ids isn't exactly the market's shops
    """
    market = _lock_owned_market(market_id, dm)

    shops = {shop.id: shop for shop in Shop.objects.select_for_update().filter(market=market)}

    if len(shop_ids) != len(set(shop_ids)) or set(shop_ids) != set(shops):
        raise InvalidShopOrderError("Order must list every shop of the market exactly once")

    ordered = []
    for position, shop_id in enumerate(shop_ids):
        shop = shops[shop_id]
        shop.order = position
        ordered.append(shop)

    Shop.objects.bulk_update(ordered, ['order'])
    return ordered


@transaction.atomic
def delete_shop(*, shop_id: UUID, dm: User) -> None:
    """
    Delete a shop.

    Its listings go with it; the library items they point to stay.
    """
    shop = lock_owned_shop(shop_id, dm)
    shop.delete()
