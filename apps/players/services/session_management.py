"""
Player session service.

Players enter an open market by access code and a name, bring a wallet,
and leave a trail of activity the DM can watch.
"""

import logging
from typing import Iterable, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.markets.models import Market
from apps.players.models import ActivityKind, PlayerSession, SessionActivity, SessionHolding
from apps.purchases.currency import Currency, empty

from .exceptions import (
    MarketNotOpenError,
    SessionNotFoundError,
    SessionEndedError,
)

logger = logging.getLogger(__name__)


def join_market(
    *,
    access_code: str,
    player_name: str,
    wallet: Optional[Currency] = None
) -> PlayerSession:
    """
    Enter a market as a player.

    Args:
        access_code: The market's player-facing code
        player_name: Name shown to the DM
        wallet: Coins the player brings (defaults to empty)

    Returns:
        New PlayerSession

    Raises:
        MarketNotOpenError: If no open market has this code
    """
    market = Market.objects.filter(access_code=access_code, is_active=True).first()
    if market is None or not market.is_open:
        raise MarketNotOpenError("Market not found or not currently active")

    session = PlayerSession(market=market, player_name=player_name)
    session.set_currency(wallet or empty())
    session.save()

    logger.info("Player %r joined market %s", player_name, market.id)
    return session


def get_session(*, session_id: UUID) -> PlayerSession:
    try:
        return PlayerSession.objects.select_related('market').get(id=session_id)
    except PlayerSession.DoesNotExist:
        raise SessionNotFoundError(f"Session with ID {session_id} not found")


def lock_session(session_id: UUID) -> PlayerSession:
    """Lock a session row for a read-modify-write of its wallet."""
    try:
        return (
            PlayerSession.objects
            .select_for_update()
            .select_related('market')
            .get(id=session_id)
        )
    except PlayerSession.DoesNotExist:
        raise SessionNotFoundError(f"Session with ID {session_id} not found")


@transaction.atomic
def update_wallet(*, session_id: UUID, wallet: Currency) -> PlayerSession:
    """Overwrite a player's wallet."""
    session = lock_session(session_id)

    if session.is_ended:
        raise SessionEndedError("This session has ended")

    session.set_currency(wallet)
    session.last_active_at = timezone.now()
    session.save(update_fields=PlayerSession.CURRENCY_FIELDS + ['last_active_at'])
    return session


def record_activity(
    *,
    session: PlayerSession,
    kind: str,
    item_name: str = '',
    quantity: int = 1
) -> SessionActivity:
    """Append an entry to the session's log and mark the player active."""
    activity = SessionActivity.objects.create(
        session=session,
        kind=kind,
        item_name=item_name,
        quantity=quantity,
    )
    PlayerSession.objects.filter(id=session.id).update(last_active_at=timezone.now())
    return activity


def get_holding_quantity(*, session_id: UUID, shop_item_id: UUID) -> int:
    """How many copies of a listing the player owns."""
    holding = SessionHolding.objects.filter(session_id=session_id, shop_item_id=shop_item_id).first()
    return holding.quantity if holding else 0


@transaction.atomic
def add_holding(*, session: PlayerSession, shop_item_id: UUID, quantity: int = 1) -> SessionHolding:
    """Give the player ``quantity`` more copies of a listing."""
    holding, _ = (
        SessionHolding.objects
        .select_for_update()
        .get_or_create(session=session, shop_item_id=shop_item_id)
    )
    holding.quantity += quantity
    holding.save(update_fields=['quantity', 'updated_at'])
    return holding


@transaction.atomic
def take_holding(*, session: PlayerSession, shop_item_id: UUID, quantity: int = 1) -> bool:
    """
    Remove copies of a listing from the player's holdings.

    Returns:
        False (and changes nothing) if the player owns fewer than ``quantity``
    """
    holding = (
        SessionHolding.objects
        .select_for_update()
        .filter(session=session, shop_item_id=shop_item_id)
        .first()
    )
    if holding is None or holding.quantity < quantity:
        return False

    holding.quantity -= quantity
    if holding.quantity == 0:
        holding.delete()
    else:
        holding.save(update_fields=['quantity', 'updated_at'])
    return True


@transaction.atomic
def end_session(*, session_id: UUID) -> PlayerSession:
    """
    Player leaves the market. The session stays visible to the DM.

    Raises:
        SessionEndedError: If the player already left
    """
    session = lock_session(session_id)

    if session.is_ended:
        raise SessionEndedError("This session has already ended")

    record_activity(session=session, kind=ActivityKind.END_SESSION)
    session.ended_at = timezone.now()
    session.save(update_fields=['ended_at'])
    return session


def list_market_sessions(*, market_id: UUID) -> QuerySet:
    """Sessions in a market, most recently active first."""
    return (
        PlayerSession.objects
        .filter(market_id=market_id)
        .prefetch_related('activities')
        .order_by('-last_active_at')
    )


def format_activity(activities: Iterable[SessionActivity]) -> str:
    """
    One-line activity summary for the DM.

    Buys read ``+Name``, sells ``-Name``, quantities above one are added in
    parentheses and leaving the market shows as ``❮``.
    """
    parts = []
    for activity in activities:
        if activity.kind == ActivityKind.END_SESSION:
            parts.append('❮')
            continue
        prefix = '+' if activity.kind == ActivityKind.BUY else '-'
        quantity = f" ({activity.quantity})" if activity.quantity > 1 else ''
        parts.append(f"{prefix}{activity.item_name}{quantity}")

    return ', '.join(parts) or 'No activity yet'


def delete_market_sessions(*, market_id: UUID) -> int:
    """
    Drop every session in a market (the market was closed).

    Returns:
        Number of sessions deleted
    """
    _, per_model = PlayerSession.objects.filter(market_id=market_id).delete()
    return per_model.get(PlayerSession._meta.label, 0)
