import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.catalog.models import LibraryItem, ItemType
from apps.markets.models import Market
from apps.shops.models import Shop, ShopItem, ShopCategory


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
def other_client(other_dm):
    """Return API client authenticated as the second DM."""
    client = APIClient()
    refresh = RefreshToken.for_user(other_dm)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def market(dm):
    return Market.objects.create(dm=dm, name='Bazaar', access_code='bazaar-abc123')


@pytest.fixture
def shop(market):
    """A blacksmith with 10 GP in the till."""
    return Shop.objects.create(
        market=market,
        name='Smithy',
        category=ShopCategory.BLACKSMITH,
        shopkeeper='Hilda',
        gp=10,
        order=0,
    )


@pytest.fixture
def second_shop(market):
    return Shop.objects.create(market=market, name='Apothecary', order=1)


@pytest.fixture
def longsword(dm):
    return LibraryItem.objects.create(
        dm=dm,
        name='Longsword',
        item_type=ItemType.WEAPON,
        cost_amount=15,
        cost_denomination='gp',
    )


@pytest.fixture
def other_library_item(other_dm):
    return LibraryItem.objects.create(dm=other_dm, name='Stolen Goods')


@pytest.fixture
def listing(shop, longsword):
    """Longsword in the smithy, three in stock."""
    return ShopItem.objects.create(
        shop=shop,
        market=shop.market,
        library_item=longsword,
        stock=3,
    )


@pytest.fixture
def unlimited_listing(shop, longsword):
    return ShopItem.objects.create(shop=shop, market=shop.market, library_item=longsword)
