import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.catalog.models import LibraryItem, ItemType, ItemSource
from apps.markets.models import Market
from apps.shops.models import Shop, ShopItem


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def dm(db):
    """Create and return a test DM."""
    return User.objects.create_user(
        email='dm@example.com',
        password='TestPass123!',
        display_name='Dungeon Master',
    )


@pytest.fixture
def other_dm(db):
    """Create and return a second DM."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other DM',
    )


@pytest.fixture
def authenticated_client(api_client, dm):
    """Return API client authenticated as the DM."""
    refresh = RefreshToken.for_user(dm)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def longsword(dm):
    """An official weapon costing 15 GP."""
    return LibraryItem.objects.create(
        dm=dm,
        name='Longsword',
        item_type=ItemType.WEAPON,
        cost_amount=15,
        cost_denomination='gp',
        weight=3,
        source=ItemSource.OFFICIAL,
        official_id='longsword',
        details={'damage': '1d8 slashing'},
    )


@pytest.fixture
def rope(dm):
    """Custom gear costing 1 GP."""
    return LibraryItem.objects.create(
        dm=dm,
        name='Hempen Rope',
        cost_amount=1,
        cost_denomination='gp',
        tags=['utility'],
    )


@pytest.fixture
def market(dm):
    return Market.objects.create(dm=dm, name='Bazaar', access_code='bazaar-abc123')


@pytest.fixture
def shop(market):
    return Shop.objects.create(market=market, name='Smithy')


@pytest.fixture
def listing(shop, longsword):
    """The longsword listed in the smithy."""
    return ShopItem.objects.create(shop=shop, market=shop.market, library_item=longsword)


@pytest.fixture
def open_market(market):
    market.is_active = True
    market.active_until = timezone.now() + timedelta(hours=1)
    market.save()
    return market
