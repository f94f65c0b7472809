import pytest
from datetime import timedelta
from uuid import uuid4
from django.utils import timezone
from rest_framework.test import APIClient
from apps.accounts.models import User
from apps.catalog.models import LibraryItem
from apps.markets.models import Market
from apps.players.models import PlayerSession, SessionHolding
from apps.purchases.currency import Currency
from apps.shops.models import Shop, ShopItem

from .fakes import InMemoryStore


@pytest.fixture
def item_id():
    return uuid4()


@pytest.fixture
def shop_id():
    return uuid4()


@pytest.fixture
def store(item_id, shop_id):
    """One listing with 5 in stock, one shop with 10 GP."""
    return InMemoryStore(stock={item_id: 5}, tills={shop_id: Currency(gp=10)})


# =============================================================================
# Database fixtures for the trade endpoints
# =============================================================================

@pytest.fixture
def api_client():
    """Players are anonymous; no credentials."""
    return APIClient()


@pytest.fixture
def dm(db):
    return User.objects.create_user(
        email='dm@example.com',
        password='TestPass123!',
        display_name='Dungeon Master',
    )


@pytest.fixture
def market(dm):
    """A market open for the next hour."""
    return Market.objects.create(
        dm=dm,
        name='Harbor Market',
        access_code='harbor-market-abc123',
        is_active=True,
        active_until=timezone.now() + timedelta(hours=1),
    )


@pytest.fixture
def shop(market):
    """A shop with 10 GP in the till."""
    return Shop.objects.create(market=market, name='Smithy', gp=10)


@pytest.fixture
def dagger(dm):
    return LibraryItem.objects.create(dm=dm, name='Dagger', cost_amount=2, cost_denomination='gp')


@pytest.fixture
def listing(shop, dagger):
    """Daggers at 2 GP, one left."""
    return ShopItem.objects.create(shop=shop, market=shop.market, library_item=dagger, stock=1)


@pytest.fixture
def player_session(market):
    """A player with 5 GP."""
    return PlayerSession.objects.create(market=market, player_name='Mialee', gp=5)


@pytest.fixture
def holding(player_session, listing):
    """The player already owns one dagger from this listing."""
    return SessionHolding.objects.create(session=player_session, shop_item=listing, quantity=1)
