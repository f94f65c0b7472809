import pytest
from django.urls import reverse
from rest_framework import status

from apps.catalog.models import LibraryItem
from apps.shops.models import ShopItem


# =============================================================================
# Library CRUD Tests
# =============================================================================

@pytest.mark.django_db
class TestLibraryCRUD:
    """Tests for /api/library/"""

    def test_list_requires_auth(self, api_client):
        url = reverse('catalog:library-item-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_list_library(self, authenticated_client, longsword, rope):
        url = reverse('catalog:library-item-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        names = [item['name'] for item in response.data['results']]
        assert names == ['Hempen Rope', 'Longsword']

    def test_list_filter_by_type(self, authenticated_client, longsword, rope):
        url = reverse('catalog:library-item-list')
        response = authenticated_client.get(url, {'type': 'weapon'})

        assert response.data['count'] == 1
        assert response.data['results'][0]['cost_display'] == '15 GP'

    def test_list_search(self, authenticated_client, longsword, rope):
        url = reverse('catalog:library-item-list')
        response = authenticated_client.get(url, {'search': 'sword'})

        assert response.data['count'] == 1
        assert response.data['results'][0]['name'] == 'Longsword'

    def test_create_item(self, authenticated_client, dm):
        url = reverse('catalog:library-item-list')
        data = {
            'name': 'Shield',
            'item_type': 'armor',
            'cost_amount': 10,
            'cost_denomination': 'gp',
            'tags': ['defense'],
            'details': {'ac_bonus': 2},
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['cost_display'] == '10 GP'
        assert LibraryItem.objects.filter(dm=dm, name='Shield').exists()

    def test_create_item_half_cost(self, authenticated_client):
        url = reverse('catalog:library-item-list')
        response = authenticated_client.post(url, {'name': 'Odd', 'cost_amount': 3}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_create_item_bad_tags(self, authenticated_client):
        url = reverse('catalog:library-item-list')
        response = authenticated_client.post(url, {'name': 'Odd', 'tags': [1, 2]}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'tags' in response.data

    def test_update_item(self, authenticated_client, longsword):
        url = reverse('catalog:library-item-detail', kwargs={'pk': longsword.id})
        response = authenticated_client.patch(url, {'cost_amount': 20}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['cost_display'] == '20 GP'

    def test_other_dm_cannot_see_item(self, api_client, other_dm, longsword):
        api_client.force_authenticate(user=other_dm)
        url = reverse('catalog:library-item-detail', kwargs={'pk': longsword.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_item_removes_listings(self, authenticated_client, longsword, listing):
        url = reverse('catalog:library-item-detail', kwargs={'pk': longsword.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not ShopItem.objects.filter(id=listing.id).exists()


@pytest.mark.django_db
class TestItemUsage:

    def test_usage(self, authenticated_client, longsword, listing, open_market):
        url = reverse('catalog:library-item-usage', kwargs={'pk': longsword.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'usage_count': 1, 'in_active_market': True}
