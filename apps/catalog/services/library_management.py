"""
Item library service.

A DM's library is the source of truth for item data; shop listings point
at library items and follow their edits until made independent.
"""

import logging
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.db.models import Q, QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.catalog.models import LibraryItem
from apps.shops.models import ShopItem

from .exceptions import (
    LibraryItemNotFoundError,
    LibraryLimitExceededError,
    InvalidItemCostError,
)

logger = logging.getLogger(__name__)


UPDATABLE_FIELDS = {
    'name',
    'item_type',
    'description',
    'weight',
    'cost_amount',
    'cost_denomination',
    'source',
    'official_id',
    'ruleset',
    'tags',
    'image_url',
    'details',
}


def _check_cost_pair(amount, denomination):
    if (amount is None) != (not denomination):
        raise InvalidItemCostError(
            "Cost needs both an amount and a denomination, or neither"
        )


@transaction.atomic
def create_library_item(*, dm: User, name: str, **fields) -> LibraryItem:
    """
    Add an item to a DM's library.

    The DM row is locked while counting so two concurrent creations cannot
    both squeeze past the limit.

    Args:
        dm: Owner of the library
        name: Item name
        **fields: Any of the other LibraryItem fields

    Returns:
        Created LibraryItem

    Raises:
        LibraryLimitExceededError: If the library holds ITEMS_PER_LIBRARY items
        InvalidItemCostError: If cost amount and denomination don't match up
    """
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise TypeError(f"Unexpected fields: {', '.join(sorted(unknown))}")

    _check_cost_pair(fields.get('cost_amount'), fields.get('cost_denomination', ''))

    User.objects.select_for_update().get(id=dm.id)
    count = LibraryItem.objects.filter(dm=dm).count()

    if count >= settings.ITEMS_PER_LIBRARY:
        raise LibraryLimitExceededError(
            f"You have reached the maximum limit of {settings.ITEMS_PER_LIBRARY} "
            f"items in your library. Please delete some items before creating new ones."
        )

    item = LibraryItem.objects.create(dm=dm, name=name, **fields)

    if count + 1 >= settings.ITEM_LIBRARY_WARNING_THRESHOLD:
        logger.warning(
            "DM %s library is nearly full (%d/%d items)",
            dm.id, count + 1, settings.ITEMS_PER_LIBRARY
        )

    return item


def get_library_item(*, item_id: UUID, dm: Optional[User] = None) -> LibraryItem:
    """
    Get a library item, optionally restricted to one DM's library.

    Raises:
        LibraryItemNotFoundError: If missing or owned by another DM
    """
    queryset = LibraryItem.objects.all()
    if dm is not None:
        queryset = queryset.filter(dm=dm)

    try:
        return queryset.get(id=item_id)
    except LibraryItem.DoesNotExist:
        raise LibraryItemNotFoundError(f"Library item with ID {item_id} not found")


def list_library_items(
    *,
    dm: User,
    item_type: Optional[str] = None,
    source: Optional[str] = None,
    search: Optional[str] = None
) -> QuerySet:
    """List a DM's library, optionally filtered by type, source and name."""
    queryset = LibraryItem.objects.filter(dm=dm)

    if item_type:
        queryset = queryset.filter(item_type=item_type)
    if source:
        queryset = queryset.filter(source=source)
    if search:
        queryset = queryset.filter(name__icontains=search)

    return queryset.order_by('name')


@transaction.atomic
def update_library_item(*, item_id: UUID, dm: User, **changes) -> LibraryItem:
    """
    Update a library item. Linked (non-independent) listings see the change.

    Raises:
        LibraryItemNotFoundError: If missing or owned by another DM
        InvalidItemCostError: If the resulting cost is half set
    """
    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise TypeError(f"Unexpected fields: {', '.join(sorted(unknown))}")

    try:
        item = LibraryItem.objects.select_for_update().get(id=item_id, dm=dm)
    except LibraryItem.DoesNotExist:
        raise LibraryItemNotFoundError(f"Library item with ID {item_id} not found")

    for field, value in changes.items():
        setattr(item, field, value)

    _check_cost_pair(item.cost_amount, item.cost_denomination)

    item.save(update_fields=list(changes) + ['updated_at'])
    return item


@transaction.atomic
def delete_library_item(*, item_id: UUID, dm: User) -> int:
    """
    Delete a library item and remove it from every shop that lists it.

    Returns:
        Number of shop listings removed
    """
    try:
        item = LibraryItem.objects.select_for_update().get(id=item_id, dm=dm)
    except LibraryItem.DoesNotExist:
        raise LibraryItemNotFoundError(f"Library item with ID {item_id} not found")

    removed, _ = ShopItem.objects.filter(library_item=item).delete()
    item.delete()

    if removed:
        logger.info("Deleted library item %s and %d shop listings", item_id, removed)
    return removed


def get_item_usage_count(*, item_id: UUID) -> int:
    """Number of shop listings using this library item."""
    return ShopItem.objects.filter(library_item_id=item_id).count()


def is_item_in_active_market(*, item_id: UUID) -> bool:
    """True if the item is listed in a shop of a market that is currently open."""
    return ShopItem.objects.filter(
        Q(market__active_until__isnull=True) | Q(market__active_until__gt=timezone.now()),
        library_item_id=item_id,
        market__is_active=True,
    ).exists()
