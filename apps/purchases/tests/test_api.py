import pytest
from datetime import timedelta
from uuid import uuid4
from unittest.mock import patch
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from apps.players.models import ActivityKind
from apps.purchases.currency import Currency
from apps.purchases.services import PurchaseResult


# =============================================================================
# Buy Tests
# =============================================================================

@pytest.mark.django_db
class TestBuy:
    """Tests for POST /api/purchases/buy/"""

    def test_buy_success(self, api_client, player_session, listing, shop):
        url = reverse('purchases:buy')
        data = {'session': str(player_session.id), 'shop_item': str(listing.id)}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['new_wallet']['display'] == '3 GP'
        assert response.data['new_till']['display'] == '12 GP'

        player_session.refresh_from_db()
        shop.refresh_from_db()
        listing.refresh_from_db()
        assert player_session.wallet == Currency(gp=3)
        assert shop.till == Currency(gp=12)
        assert listing.stock == 0
        assert player_session.activities.get().kind == ActivityKind.BUY
        assert player_session.holdings.get(shop_item=listing).quantity == 1

    def test_buy_sold_out(self, api_client, player_session, listing):
        listing.stock = 0
        listing.save()

        url = reverse('purchases:buy')
        data = {'session': str(player_session.id), 'shop_item': str(listing.id)}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert response.data['message'] == 'This item is out of stock'
        assert response.data['new_wallet'] is None

    def test_buy_too_poor(self, api_client, player_session, listing):
        player_session.gp = 1
        player_session.save()

        url = reverse('purchases:buy')
        data = {'session': str(player_session.id), 'shop_item': str(listing.id)}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'You cannot afford this item'
        listing.refresh_from_db()
        assert listing.stock == 1

    def test_failed_trade_rolls_back_store_writes(self, api_client, player_session, listing, shop):
        """Stock taken before a failing till update is put back."""
        url = reverse('purchases:buy')
        data = {'session': str(player_session.id), 'shop_item': str(listing.id)}

        with patch(
            'apps.shops.services.stock.credit_till',
            side_effect=RuntimeError('till jammed'),
        ):
            response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'Purchase failed: till jammed'

        listing.refresh_from_db()
        player_session.refresh_from_db()
        assert listing.stock == 1
        assert player_session.wallet == Currency(gp=5)
        assert not player_session.holdings.exists()

    def test_buy_after_session_ended(self, api_client, player_session, listing):
        player_session.ended_at = timezone.now()
        player_session.save()

        url = reverse('purchases:buy')
        data = {'session': str(player_session.id), 'shop_item': str(listing.id)}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'This session has ended'

    def test_buy_in_expired_market(self, api_client, player_session, listing, market):
        market.active_until = timezone.now() - timedelta(minutes=1)
        market.save()

        url = reverse('purchases:buy')
        data = {'session': str(player_session.id), 'shop_item': str(listing.id)}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'This market is closed'

    def test_unknown_session(self, api_client, listing):
        url = reverse('purchases:buy')
        data = {'session': str(uuid4()), 'shop_item': str(listing.id)}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_listing_from_other_market(self, api_client, player_session):
        url = reverse('purchases:buy')
        data = {'session': str(player_session.id), 'shop_item': str(uuid4())}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_bad_input(self, api_client, db):
        url = reverse('purchases:buy')
        response = api_client.post(url, {'session': 'not-a-uuid'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'shop_item' in response.data


# =============================================================================
# Sell Tests
# =============================================================================

@pytest.mark.django_db
class TestSell:
    """Tests for POST /api/purchases/sell/"""

    def test_sell_success(self, api_client, player_session, listing, shop, holding):
        url = reverse('purchases:sell')
        data = {'session': str(player_session.id), 'shop_item': str(listing.id)}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['new_wallet']['display'] == '6 GP'
        assert response.data['new_till']['display'] == '9 GP'

        listing.refresh_from_db()
        assert listing.stock == 2
        assert player_session.activities.get().kind == ActivityKind.SELL
        assert not player_session.holdings.exists()

    def test_sell_till_too_poor(self, api_client, player_session, listing, shop, holding):
        shop.gp = 0
        shop.save()

        url = reverse('purchases:sell')
        data = {'session': str(player_session.id), 'shop_item': str(listing.id)}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'The shop cannot afford to buy this item'
        holding.refresh_from_db()
        assert holding.quantity == 1

    def test_sell_uses_settings_modifier(self, api_client, player_session, listing, holding, settings):
        settings.DEFAULT_SELL_PRICE_MODIFIER = 1.0

        url = reverse('purchases:sell')
        data = {'session': str(player_session.id), 'shop_item': str(listing.id)}
        response = api_client.post(url, data, format='json')

        assert response.data['new_wallet']['display'] == '7 GP'

    def test_sell_item_not_owned(self, api_client, player_session, listing, shop):
        url = reverse('purchases:sell')
        data = {'session': str(player_session.id), 'shop_item': str(listing.id)}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == "You don't own this item"

        player_session.refresh_from_db()
        shop.refresh_from_db()
        listing.refresh_from_db()
        assert player_session.wallet == Currency(gp=5)
        assert shop.till == Currency(gp=10)
        assert listing.stock == 1
        assert not player_session.activities.exists()

    def test_cannot_sell_more_than_held(self, api_client, player_session, listing, shop, holding):
        url = reverse('purchases:sell')
        data = {'session': str(player_session.id), 'shop_item': str(listing.id)}

        codes = [api_client.post(url, data, format='json').status_code for _ in range(5)]

        assert codes == [200, 400, 400, 400, 400]
        player_session.refresh_from_db()
        shop.refresh_from_db()
        listing.refresh_from_db()
        assert player_session.wallet == Currency(gp=6)
        assert shop.till == Currency(gp=9)
        assert listing.stock == 2

    def test_buy_then_sell_back(self, api_client, player_session, listing, shop):
        data = {'session': str(player_session.id), 'shop_item': str(listing.id)}

        bought = api_client.post(reverse('purchases:buy'), data, format='json')
        sold = api_client.post(reverse('purchases:sell'), data, format='json')

        assert bought.status_code == status.HTTP_200_OK
        assert sold.status_code == status.HTTP_200_OK
        assert sold.data['new_wallet']['display'] == '4 GP'

        listing.refresh_from_db()
        assert listing.stock == 1
        assert not player_session.holdings.exists()


# =============================================================================
# Stock Tests
# =============================================================================

@pytest.mark.django_db
class TestStock:
    """Tests for GET /api/purchases/stock/{id}/"""

    def test_limited_stock(self, api_client, listing):
        url = reverse('purchases:stock', kwargs={'shop_item_id': listing.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'in_stock': True, 'quantity': 1}

    def test_unlimited_stock(self, api_client, listing):
        listing.stock = None
        listing.save()

        url = reverse('purchases:stock', kwargs={'shop_item_id': listing.id})
        response = api_client.get(url)

        assert response.data == {'in_stock': True, 'quantity': None}

    def test_missing_listing(self, api_client, db):
        url = reverse('purchases:stock', kwargs={'shop_item_id': uuid4()})
        response = api_client.get(url)

        assert response.data == {'in_stock': False, 'quantity': 0}


def test_purchase_result_defaults():
    result = PurchaseResult(False, 'nope')
    assert result.new_wallet is None
    assert result.new_till is None
