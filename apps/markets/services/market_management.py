"""
Market management service.

Handles market CRUD, access codes and the timed activation window.
A DM may have at most one active market; closing a market removes the
player sessions inside it.
"""

import logging
import secrets
from datetime import timedelta
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction, IntegrityError
from django.db.models import QuerySet
from django.utils import timezone
from django.utils.text import slugify

from apps.accounts.models import User
from apps.markets.models import Market
from apps.players.services import delete_market_sessions

from .exceptions import (
    MarketNotFoundError,
    MarketLimitExceededError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


def generate_access_code(name: str) -> str:
    """Build a player-facing code such as ``goblin-bazaar-4f9c2a``."""
    slug = slugify(name)[:50] or 'market'
    return f"{slug}-{secrets.token_hex(3)}"


def create_market(
    *,
    dm: User,
    name: str,
    description: str = '',
    max_retries: int = 5
) -> Market:
    """
    Create a new (inactive) market for a DM.

    Args:
        dm: User who runs the market
        name: Market name
        description: Optional description
        max_retries: Maximum attempts to generate a unique access code

    Returns:
        Created Market instance

    Raises:
        MarketLimitExceededError: If the DM is at MARKETS_PER_DM
        RuntimeError: If cannot generate unique access code after retries
    """
    if Market.objects.filter(dm=dm).count() >= settings.MARKETS_PER_DM:
        raise MarketLimitExceededError(
            f"You can have at most {settings.MARKETS_PER_DM} markets"
        )

    # Retry logic outside transaction to handle access code collisions
    for attempt in range(max_retries):
        access_code = generate_access_code(name)

        try:
            with transaction.atomic():
                return Market.objects.create(
                    dm=dm,
                    name=name,
                    description=description,
                    access_code=access_code,
                )
        except IntegrityError:
            if attempt == max_retries - 1:
                raise RuntimeError(
                    f"Failed to generate unique access code after {max_retries} attempts"
                )
            continue

    raise RuntimeError("Unexpected error in market creation")


def get_market_by_id(*, market_id: UUID) -> Market:
    try:
        return Market.objects.select_related('dm').get(id=market_id)
    except Market.DoesNotExist:
        raise MarketNotFoundError(f"Market with ID {market_id} not found")


def get_market_by_access_code(*, access_code: str) -> Market:
    """
    Look up a market the way a player does.

    Raises:
        MarketNotFoundError: If no market has this code or it is not open
    """
    market = Market.objects.filter(access_code=access_code, is_active=True).first()
    if market is None or not market.is_open:
        raise MarketNotFoundError("Market not found or not currently active")
    return market


def list_markets_for_dm(*, dm: User) -> QuerySet:
    return Market.objects.filter(dm=dm).order_by('-created_at')


def _lock_owned_market(market_id: UUID, dm: User) -> Market:
    try:
        market = Market.objects.select_for_update().get(id=market_id)
    except Market.DoesNotExist:
        raise MarketNotFoundError(f"Market with ID {market_id} not found")

    if market.dm_id != dm.id:
        raise InsufficientPermissionsError("Only the market's DM can change it")
    return market


def _close(market: Market) -> None:
    market.is_active = False
    market.active_until = None
    market.save(update_fields=['is_active', 'active_until', 'updated_at'])
    removed = delete_market_sessions(market_id=market.id)
    logger.info("Closed market %s, removed %d player sessions", market.id, removed)


@transaction.atomic
def update_market(
    *,
    market_id: UUID,
    dm: User,
    name: Optional[str] = None,
    description: Optional[str] = None
) -> Market:
    """Update market details (DM only). The access code never changes."""
    market = _lock_owned_market(market_id, dm)

    update_fields = ['updated_at']

    if name is not None:
        market.name = name
        update_fields.append('name')

    if description is not None:
        market.description = description
        update_fields.append('description')

    market.save(update_fields=update_fields)

    return market


@transaction.atomic
def activate_market(
    *,
    market_id: UUID,
    dm: User,
    hours: Optional[int] = None
) -> Market:
    """
    Open a market to players for a limited time.

    Any other active market of the same DM is closed first.

    Args:
        market_id: UUID of the market
        dm: DM performing the activation
        hours: Length of the window (defaults to MARKET_ACTIVATION_HOURS)

    Returns:
        The activated Market

    Raises:
        MarketNotFoundError: If market doesn't exist
        InsufficientPermissionsError: If user is not the market's DM
    """
    market = _lock_owned_market(market_id, dm)

    others = (
        Market.objects
        .select_for_update()
        .filter(dm=dm, is_active=True)
        .exclude(id=market.id)
    )
    for other in others:
        _close(other)

    if hours is None:
        hours = settings.MARKET_ACTIVATION_HOURS

    market.is_active = True
    market.active_until = timezone.now() + timedelta(hours=hours)
    market.save(update_fields=['is_active', 'active_until', 'updated_at'])

    logger.info("Activated market %s until %s", market.id, market.active_until)
    return market


@transaction.atomic
def deactivate_market(*, market_id: UUID, dm: User) -> Market:
    """Close a market now and drop its player sessions."""
    market = _lock_owned_market(market_id, dm)
    _close(market)
    return market


@transaction.atomic
def delete_market(*, market_id: UUID, dm: User) -> None:
    """
    Delete a market (DM only).

    Cascading deletes remove its shops, their listings and all player
    sessions. Library items are owned by the DM and stay.
    """
    market = _lock_owned_market(market_id, dm)
    market.delete()


@transaction.atomic
def expire_markets(*, now=None) -> int:
    """
    Close every market whose activation window has passed.

    Returns:
        Number of markets closed
    """
    now = now or timezone.now()
    expired = (
        Market.objects
        .select_for_update()
        .filter(is_active=True, active_until__lte=now)
    )

    count = 0
    for market in expired:
        _close(market)
        count += 1

    if count:
        logger.info("Expired %d markets", count)
    return count


def get_shareable_url(*, access_code: str, base_url: Optional[str] = None) -> str:
    """Player-facing URL for a market."""
    base_url = (base_url or settings.FRONTEND_BASE_URL).rstrip('/')
    return f"{base_url}/market/{access_code}"
