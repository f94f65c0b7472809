import pytest
from uuid import uuid4
from django.urls import reverse
from rest_framework import status

from apps.players.models import PlayerSession, SessionHolding


# =============================================================================
# Market entry Tests
# =============================================================================

@pytest.mark.django_db
class TestMarketEntry:
    """Tests for /api/players/market/{code}/"""

    def test_market_detail(self, api_client, market, shop):
        url = reverse('players:market-detail', kwargs={'access_code': market.access_code})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Harbor Market'
        assert [s['name'] for s in response.data['shops']] == ['Fishmonger']

    def test_closed_market_hidden(self, api_client, closed_market):
        url = reverse('players:market-detail', kwargs={'access_code': closed_market.access_code})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_join(self, api_client, market):
        url = reverse('players:join', kwargs={'access_code': market.access_code})
        data = {'player_name': 'Lidda', 'wallet': {'gp': 4, 'sp': 12}}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['player_name'] == 'Lidda'
        assert response.data['wallet']['gp'] == 4
        assert response.data['wallet']['sp'] == 12
        assert PlayerSession.objects.filter(market=market).count() == 1

    def test_join_requires_name(self, api_client, market):
        url = reverse('players:join', kwargs={'access_code': market.access_code})
        response = api_client.post(url, {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_join_closed_market(self, api_client, closed_market):
        url = reverse('players:join', kwargs={'access_code': closed_market.access_code})
        response = api_client.post(url, {'player_name': 'Late'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_shop_detail(self, api_client, market, shop, listing):
        url = reverse(
            'players:shop-detail',
            kwargs={'access_code': market.access_code, 'shop_id': shop.id}
        )
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        item = response.data['items'][0]
        assert item['name'] == 'Hempen Rope'
        assert item['description'] == '50 feet'
        assert item['cost']['display'] == '1 GP'
        assert item['stock'] == 2

    def test_shop_detail_wrong_market(self, api_client, market):
        url = reverse(
            'players:shop-detail',
            kwargs={'access_code': market.access_code, 'shop_id': uuid4()}
        )
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Session Tests
# =============================================================================

@pytest.mark.django_db
class TestSession:
    """Tests for /api/players/sessions/{id}/"""

    def test_session_detail(self, api_client, player_session):
        url = reverse('players:session-detail', kwargs={'session_id': player_session.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['wallet']['display'] == '3 GP'
        assert response.data['activity_summary'] == 'No activity yet'
        assert response.data['holdings'] == []

    def test_session_lists_holdings(self, api_client, player_session, listing):
        SessionHolding.objects.create(session=player_session, shop_item=listing, quantity=2)

        url = reverse('players:session-detail', kwargs={'session_id': player_session.id})
        response = api_client.get(url)

        holding = response.data['holdings'][0]
        assert holding['item_name'] == 'Hempen Rope'
        assert holding['quantity'] == 2
        assert holding['shop_item'] == listing.id

    def test_session_not_found(self, api_client, db):
        url = reverse('players:session-detail', kwargs={'session_id': uuid4()})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_set_wallet(self, api_client, player_session):
        url = reverse('players:session-detail', kwargs={'session_id': player_session.id})
        response = api_client.put(url, {'gp': 1, 'cp': 5}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['wallet']['display'] == '1 GP, 5 CP'

    def test_end_session(self, api_client, player_session):
        url = reverse('players:session-end', kwargs={'session_id': player_session.id})
        response = api_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['ended_at'] is not None
        assert response.data['activity_summary'] == '❮'

        response = api_client.post(url)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
