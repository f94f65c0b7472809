import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from apps.accounts.models import User
from apps.catalog.models import LibraryItem
from apps.markets.models import Market
from apps.players.models import PlayerSession
from apps.shops.models import Shop, ShopItem


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
def closed_market(dm):
    return Market.objects.create(dm=dm, name='Closed', access_code='closed-000000')


@pytest.fixture
def shop(market):
    return Shop.objects.create(market=market, name='Fishmonger', gp=5)


@pytest.fixture
def listing(shop, dm):
    rope = LibraryItem.objects.create(
        dm=dm,
        name='Hempen Rope',
        description='50 feet',
        cost_amount=1,
        cost_denomination='gp',
    )
    return ShopItem.objects.create(shop=shop, market=shop.market, library_item=rope, stock=2)


@pytest.fixture
def player_session(market):
    """A player with 3 GP."""
    return PlayerSession.objects.create(market=market, player_name='Mialee', gp=3)
