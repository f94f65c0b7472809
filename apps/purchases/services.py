"""
Purchase settlement.

Moves one item between a player and a shop: the player's wallet, the
shop's till and the listing's stock all change, or none of them do.
Players can only sell back what they hold.

Stock is reserved (or released) before any money moves because the stock
store is the only step that can be refused by another concurrent trade.
Money arithmetic can't fail after a successful afford-check, so the
compensation paths below only run if the store changed under us.

``PurchaseSettlementService`` is the pure core and only talks to a store
object (by default ``apps.shops.services.stock``). ``buy_for_session`` and
``sell_for_session`` wrap it for the HTTP layer: they lock the player's
session, persist the new wallet and log the trade.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction

from apps.players.models import ActivityKind
from apps.players.services import (
    lock_session,
    update_wallet,
    record_activity,
    add_holding,
    get_holding_quantity,
    take_holding,
    SessionNotFoundError as PlayerSessionNotFoundError,
)
from apps.shops.models import ShopItem
from apps.shops.services import stock as stock_store
from apps.shops.stock import Unlimited

from .currency import Currency, ItemCost, add, can_afford, subtract
from .exceptions import SessionNotFoundError, ListingNotFoundError

logger = logging.getLogger(__name__)


DEFAULT_SELL_PRICE_MODIFIER = 0.5


@dataclass(frozen=True)
class PurchaseResult:
    """Outcome of a buy or sell. Business failures have ``success=False``."""

    success: bool
    message: str
    new_wallet: Optional[Currency] = None
    new_till: Optional[Currency] = None


@dataclass(frozen=True)
class StockStatus:
    in_stock: bool
    quantity: Optional[int]


class PurchaseSettlementService:
    """
    Settles single-item trades against a stock and till store.

    The store must provide ``decrease_stock_atomically``, ``increase_stock``,
    ``get_stock``, ``get_till``, ``credit_till`` and ``debit_till`` with the
    semantics of ``apps.shops.services.stock``.
    """

    def __init__(self, store=None):
        self.store = store or stock_store

    def purchase(
        self,
        *,
        item_id: UUID,
        shop_id: UUID,
        item_name: str,
        cost: Optional[ItemCost],
        wallet: Currency
    ) -> PurchaseResult:
        """
        Player buys one copy of an item.

        Args:
            item_id: Listing to take stock from
            shop_id: Shop whose till receives the money
            item_name: Name used in the confirmation message
            cost: Price of the item, None if it has none
            wallet: Buyer's current wallet

        Returns:
            PurchaseResult; on success ``new_wallet`` is for the caller to
            persist and ``new_till`` is already stored.
        """
        if cost is None:
            return PurchaseResult(False, "Item has no price set")

        price = cost.to_currency()

        if not can_afford(wallet, price):
            return PurchaseResult(False, "You cannot afford this item")

        taken = False
        try:
            if not self.store.decrease_stock_atomically(item_id, 1):
                return PurchaseResult(False, "This item is out of stock")
            taken = True

            new_wallet = subtract(wallet, price)
            if new_wallet is None:
                return self._compensate(self.store.increase_stock, item_id)

            new_till = self.store.credit_till(shop_id, price)
        except Exception as e:
            logger.exception("Purchase of item %s failed", item_id)
            if taken:
                self._compensate(self.store.increase_stock, item_id)
            return PurchaseResult(False, f"Purchase failed: {e}")

        logger.info("Sold %s (%s) from shop %s", item_name, cost, shop_id)
        return PurchaseResult(
            True,
            f"Successfully purchased {item_name}!",
            new_wallet=new_wallet,
            new_till=new_till,
        )

    def sell(
        self,
        *,
        item_id: UUID,
        shop_id: UUID,
        item_name: str,
        cost: Optional[ItemCost],
        wallet: Currency,
        modifier: float = DEFAULT_SELL_PRICE_MODIFIER
    ) -> PurchaseResult:
        """
        Player sells one copy of an item back to the shop.

        The shop pays ``floor(cost.amount * modifier)`` in the cost's own
        denomination.
        """
        if cost is None:
            return PurchaseResult(False, "Cannot determine sell price")

        try:
            sell_price = cost.sell_price(modifier).to_currency()

            if not can_afford(self.store.get_till(shop_id), sell_price):
                return PurchaseResult(False, "The shop cannot afford to buy this item")

            self.store.increase_stock(item_id, 1)
            new_wallet = add(wallet, sell_price)

            new_till = self.store.debit_till(shop_id, sell_price)
            if new_till is None:
                return self._compensate(self.store.decrease_stock_atomically, item_id)
        except Exception as e:
            logger.exception("Sale of item %s failed", item_id)
            return PurchaseResult(False, f"Sell failed: {e}")

        logger.info("Bought back %s (%s) at shop %s", item_name, sell_price, shop_id)
        return PurchaseResult(
            True,
            f"Successfully sold {item_name}!",
            new_wallet=new_wallet,
            new_till=new_till,
        )

    def check_stock(self, item_id: UUID) -> StockStatus:
        """Unlimited: (True, None). Limited: (n > 0, n). Missing: (False, 0)."""
        stock = self.store.get_stock(item_id)

        if stock is None:
            return StockStatus(in_stock=False, quantity=0)
        if isinstance(stock, Unlimited):
            return StockStatus(in_stock=True, quantity=None)
        return StockStatus(in_stock=stock.quantity > 0, quantity=stock.quantity)

    def _compensate(self, undo, item_id: UUID) -> PurchaseResult:
        """Undo the stock step of a trade whose money step failed."""
        try:
            restored = undo(item_id, 1)
        except Exception:
            logger.error("Could not restore stock for item %s", item_id, exc_info=True)
            return PurchaseResult(False, "Transaction failed: stock could not be restored")

        if restored is False:
            logger.error("Could not restore stock for item %s: not enough stock", item_id)
            return PurchaseResult(False, "Transaction failed: stock could not be restored")

        return PurchaseResult(False, "Transaction failed")


# =============================================================================
# Player trades
# =============================================================================

def _load_trade(session_id: UUID, shop_item_id: UUID):
    try:
        session = lock_session(session_id)
    except PlayerSessionNotFoundError:
        raise SessionNotFoundError()

    item = (
        ShopItem.objects
        .select_related('library_item')
        .filter(id=shop_item_id, market_id=session.market_id)
        .first()
    )
    if item is None:
        raise ListingNotFoundError()

    return session, item


def _closed_reason(session) -> Optional[str]:
    if session.is_ended:
        return "This session has ended"
    if not session.market.is_open:
        return "This market is closed"
    return None


@transaction.atomic
def buy_for_session(
    *,
    session_id: UUID,
    shop_item_id: UUID,
    settlement: Optional[PurchaseSettlementService] = None
) -> PurchaseResult:
    """
    A player buys one copy of a listing in their market.

    Raises:
        SessionNotFoundError: If the session doesn't exist
        ListingNotFoundError: If the listing isn't in the session's market
    """
    session, item = _load_trade(session_id, shop_item_id)

    reason = _closed_reason(session)
    if reason:
        return PurchaseResult(False, reason)

    settlement = settlement or PurchaseSettlementService()
    result = settlement.purchase(
        item_id=item.id,
        shop_id=item.shop_id,
        item_name=item.display_name,
        cost=item.effective_cost,
        wallet=session.wallet,
    )

    if result.success:
        update_wallet(session_id=session.id, wallet=result.new_wallet)
        add_holding(session=session, shop_item_id=item.id)
        record_activity(session=session, kind=ActivityKind.BUY, item_name=item.display_name)
    else:
        # Discard any partial store writes of the failed trade
        transaction.set_rollback(True)

    return result


@transaction.atomic
def sell_for_session(
    *,
    session_id: UUID,
    shop_item_id: UUID,
    modifier: Optional[float] = None,
    settlement: Optional[PurchaseSettlementService] = None
) -> PurchaseResult:
    """
    A player sells one copy of a listing back to its shop. Only copies the
    player bought in this session can be sold.

    Raises:
        SessionNotFoundError: If the session doesn't exist
        ListingNotFoundError: If the listing isn't in the session's market
    """
    session, item = _load_trade(session_id, shop_item_id)

    reason = _closed_reason(session)
    if reason:
        return PurchaseResult(False, reason)

    if get_holding_quantity(session_id=session.id, shop_item_id=item.id) < 1:
        return PurchaseResult(False, "You don't own this item")

    if modifier is None:
        modifier = settings.DEFAULT_SELL_PRICE_MODIFIER

    settlement = settlement or PurchaseSettlementService()
    result = settlement.sell(
        item_id=item.id,
        shop_id=item.shop_id,
        item_name=item.display_name,
        cost=item.effective_cost,
        wallet=session.wallet,
        modifier=modifier,
    )

    if result.success:
        update_wallet(session_id=session.id, wallet=result.new_wallet)
        take_holding(session=session, shop_item_id=item.id)
        record_activity(session=session, kind=ActivityKind.SELL, item_name=item.display_name)
    else:
        # Discard any partial store writes of the failed trade
        transaction.set_rollback(True)

    return result


def check_stock(*, shop_item_id: UUID) -> StockStatus:
    return PurchaseSettlementService().check_stock(shop_item_id)
