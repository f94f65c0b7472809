"""
Unit tests for PurchaseSettlementService against an in-memory store.

Tests cover:
- Buy and sell happy paths
- Business refusals (funds, stock, till)
- Stock compensation when the money step fails
- Store errors surfacing as failed results
"""

import pytest
from uuid import uuid4
from unittest.mock import patch

from apps.purchases.currency import Currency, ItemCost
from apps.purchases.services import PurchaseSettlementService, StockStatus

from .fakes import InMemoryStore


@pytest.fixture
def settlement(store):
    return PurchaseSettlementService(store=store)


class TestPurchase:

    def test_buy_success(self, settlement, store, item_id, shop_id):
        result = settlement.purchase(
            item_id=item_id,
            shop_id=shop_id,
            item_name='Lantern',
            cost=ItemCost(3, 'gp'),
            wallet=Currency(gp=5),
        )

        assert result.success is True
        assert result.message == 'Successfully purchased Lantern!'
        assert result.new_wallet == Currency(gp=2)
        assert result.new_till == Currency(gp=13)
        assert store.stock[item_id] == 4
        assert store.tills[shop_id] == Currency(gp=13)

    def test_buy_makes_change(self, settlement, item_id, shop_id):
        result = settlement.purchase(
            item_id=item_id,
            shop_id=shop_id,
            item_name='Candle',
            cost=ItemCost(1, 'cp'),
            wallet=Currency(gp=1),
        )

        assert result.new_wallet == Currency(sp=9, cp=9)

    def test_buy_cannot_afford(self, settlement, store, item_id, shop_id):
        result = settlement.purchase(
            item_id=item_id,
            shop_id=shop_id,
            item_name='Lantern',
            cost=ItemCost(3, 'gp'),
            wallet=Currency(sp=29),
        )

        assert result.success is False
        assert result.message == 'You cannot afford this item'
        assert result.new_wallet is None
        assert store.stock[item_id] == 5
        assert store.tills[shop_id] == Currency(gp=10)

    def test_buy_out_of_stock(self, shop_id):
        item_id = uuid4()
        store = InMemoryStore(stock={item_id: 0}, tills={shop_id: Currency(gp=10)})
        settlement = PurchaseSettlementService(store=store)

        result = settlement.purchase(
            item_id=item_id,
            shop_id=shop_id,
            item_name='Lantern',
            cost=ItemCost(3, 'gp'),
            wallet=Currency(gp=5),
        )

        assert result.success is False
        assert result.message == 'This item is out of stock'
        assert store.tills[shop_id] == Currency(gp=10)

    def test_buy_unlimited_stock(self, shop_id):
        item_id = uuid4()
        store = InMemoryStore(stock={item_id: None}, tills={shop_id: Currency()})
        settlement = PurchaseSettlementService(store=store)

        result = settlement.purchase(
            item_id=item_id,
            shop_id=shop_id,
            item_name='Water',
            cost=ItemCost(1, 'cp'),
            wallet=Currency(cp=1),
        )

        assert result.success is True
        assert result.new_wallet == Currency()
        assert store.stock[item_id] is None

    def test_buy_without_price(self, settlement, store, item_id, shop_id):
        result = settlement.purchase(
            item_id=item_id,
            shop_id=shop_id,
            item_name='Mystery',
            cost=None,
            wallet=Currency(gp=5),
        )

        assert result.success is False
        assert result.message == 'Item has no price set'
        assert store.stock[item_id] == 5

    def test_buy_store_error(self, settlement, shop_id):
        result = settlement.purchase(
            item_id=uuid4(),
            shop_id=shop_id,
            item_name='Ghost',
            cost=ItemCost(1, 'gp'),
            wallet=Currency(gp=5),
        )

        assert result.success is False
        assert result.message.startswith('Purchase failed: ')

    def test_buy_restores_stock_when_till_fails(self, item_id, shop_id):
        class JammedTillStore(InMemoryStore):
            def credit_till(self, shop_id, amount):
                raise RuntimeError("till jammed")

        store = JammedTillStore(stock={item_id: 5}, tills={shop_id: Currency(gp=10)})

        result = PurchaseSettlementService(store=store).purchase(
            item_id=item_id,
            shop_id=shop_id,
            item_name='Lantern',
            cost=ItemCost(3, 'gp'),
            wallet=Currency(gp=5),
        )

        assert result.success is False
        assert result.message == 'Purchase failed: till jammed'
        assert store.stock[item_id] == 5
        assert store.tills[shop_id] == Currency(gp=10)


class TestSell:

    def test_sell_success(self, settlement, store, item_id, shop_id):
        result = settlement.sell(
            item_id=item_id,
            shop_id=shop_id,
            item_name='Shield',
            cost=ItemCost(4, 'gp'),
            wallet=Currency(sp=5),
        )

        assert result.success is True
        assert result.message == 'Successfully sold Shield!'
        assert result.new_wallet == Currency(gp=2, sp=5)
        assert result.new_till == Currency(gp=8)
        assert store.stock[item_id] == 6

    def test_sell_modifier(self, settlement, item_id, shop_id):
        result = settlement.sell(
            item_id=item_id,
            shop_id=shop_id,
            item_name='Shield',
            cost=ItemCost(10, 'gp'),
            wallet=Currency(),
            modifier=0.25,
        )

        assert result.new_wallet == Currency(gp=2)

    def test_sell_till_too_poor(self, settlement, store, item_id, shop_id):
        result = settlement.sell(
            item_id=item_id,
            shop_id=shop_id,
            item_name='Crown',
            cost=ItemCost(100, 'gp'),
            wallet=Currency(),
        )

        assert result.success is False
        assert result.message == 'The shop cannot afford to buy this item'
        assert store.stock[item_id] == 5
        assert store.tills[shop_id] == Currency(gp=10)

    def test_sell_without_price(self, settlement, item_id, shop_id):
        result = settlement.sell(
            item_id=item_id,
            shop_id=shop_id,
            item_name='Mystery',
            cost=None,
            wallet=Currency(),
        )

        assert result.success is False
        assert result.message == 'Cannot determine sell price'

    def test_sell_store_error(self, store, item_id):
        settlement = PurchaseSettlementService(store=store)

        result = settlement.sell(
            item_id=item_id,
            shop_id=uuid4(),
            item_name='Shield',
            cost=ItemCost(4, 'gp'),
            wallet=Currency(),
        )

        assert result.success is False
        assert result.message.startswith('Sell failed: ')

    def test_sell_with_negative_modifier(self, settlement, store, item_id, shop_id):
        result = settlement.sell(
            item_id=item_id,
            shop_id=shop_id,
            item_name='Shield',
            cost=ItemCost(4, 'gp'),
            wallet=Currency(),
            modifier=-1,
        )

        assert result.success is False
        assert result.message.startswith('Sell failed: ')
        assert store.stock[item_id] == 5
        assert store.tills[shop_id] == Currency(gp=10)


class TestCompensation:
    """The till changed between the afford-check and the debit."""

    class RacingStore(InMemoryStore):
        def debit_till(self, shop_id, amount):
            return None

    class BrokenRestoreStore(RacingStore):
        def decrease_stock_atomically(self, item_id, amount=1):
            raise RuntimeError("database went away")

    class EmptyRestoreStore(RacingStore):
        def decrease_stock_atomically(self, item_id, amount=1):
            return False

    def _sell(self, store, item_id, shop_id):
        return PurchaseSettlementService(store=store).sell(
            item_id=item_id,
            shop_id=shop_id,
            item_name='Shield',
            cost=ItemCost(4, 'gp'),
            wallet=Currency(),
        )

    def test_stock_restored(self, item_id, shop_id):
        store = self.RacingStore(stock={item_id: 5}, tills={shop_id: Currency(gp=10)})

        result = self._sell(store, item_id, shop_id)

        assert result.success is False
        assert result.message == 'Transaction failed'
        assert store.stock[item_id] == 5

    def test_restore_raises(self, item_id, shop_id):
        store = self.BrokenRestoreStore(stock={item_id: 5}, tills={shop_id: Currency(gp=10)})

        result = self._sell(store, item_id, shop_id)

        assert result.success is False
        assert result.message == 'Transaction failed: stock could not be restored'

    def test_restore_refused(self, item_id, shop_id):
        store = self.EmptyRestoreStore(stock={item_id: 5}, tills={shop_id: Currency(gp=10)})

        result = self._sell(store, item_id, shop_id)

        assert result.message == 'Transaction failed: stock could not be restored'


class TestPurchaseCompensation:
    """The wallet can't cover the price after the stock was taken."""

    class BrokenRestoreStore(InMemoryStore):
        def increase_stock(self, item_id, amount=1):
            raise RuntimeError("database went away")

    def _buy(self, store, item_id, shop_id):
        return PurchaseSettlementService(store=store).purchase(
            item_id=item_id,
            shop_id=shop_id,
            item_name='Lantern',
            cost=ItemCost(3, 'gp'),
            wallet=Currency(gp=5),
        )

    def test_stock_restored(self, store, item_id, shop_id):
        with patch('apps.purchases.services.subtract', return_value=None) as mock_subtract:
            result = self._buy(store, item_id, shop_id)

        assert result.success is False
        assert result.message == 'Transaction failed'
        assert store.stock[item_id] == 5
        assert store.tills[shop_id] == Currency(gp=10)
        mock_subtract.assert_called_once()

    def test_restore_raises(self, item_id, shop_id):
        store = self.BrokenRestoreStore(stock={item_id: 5}, tills={shop_id: Currency(gp=10)})

        with patch('apps.purchases.services.subtract', return_value=None):
            result = self._buy(store, item_id, shop_id)

        assert result.success is False
        assert result.message == 'Transaction failed: stock could not be restored'
        assert store.stock[item_id] == 4
        assert store.tills[shop_id] == Currency(gp=10)


class TestCheckStock:

    def test_limited(self, settlement, item_id):
        assert settlement.check_stock(item_id) == StockStatus(in_stock=True, quantity=5)

    def test_sold_out(self, shop_id):
        item_id = uuid4()
        store = InMemoryStore(stock={item_id: 0})

        status = PurchaseSettlementService(store=store).check_stock(item_id)
        assert status == StockStatus(in_stock=False, quantity=0)

    def test_unlimited(self):
        item_id = uuid4()
        store = InMemoryStore(stock={item_id: None})

        status = PurchaseSettlementService(store=store).check_stock(item_id)
        assert status == StockStatus(in_stock=True, quantity=None)

    def test_missing(self, settlement):
        assert settlement.check_stock(uuid4()) == StockStatus(in_stock=False, quantity=0)
