import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.markets.models import Market
from apps.players.models import PlayerSession


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
    """Create and return a DM who runs none of the fixtures' markets."""
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
    """Return API client authenticated as the other DM."""
    client = APIClient()
    refresh = RefreshToken.for_user(other_dm)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def market(dm):
    """An inactive market."""
    return Market.objects.create(
        dm=dm,
        name='Goblin Bazaar',
        description='Smells of cabbage',
        access_code='goblin-bazaar-abc123',
    )


@pytest.fixture
def active_market(dm):
    """A market open for the next three hours."""
    return Market.objects.create(
        dm=dm,
        name='Harbor Market',
        access_code='harbor-market-def456',
        is_active=True,
        active_until=timezone.now() + timedelta(hours=3),
    )


@pytest.fixture
def player_session(active_market):
    """A player inside the active market."""
    return PlayerSession.objects.create(
        market=active_market,
        player_name='Tordek',
        gp=10,
    )
