from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'shops'

router = DefaultRouter()
router.register(r'shops', views.ShopViewSet, basename='shop')
router.register(r'shop-items', views.ShopItemViewSet, basename='shop-item')

urlpatterns = [
    # Shop ViewSet routes
    # GET    /api/shops/?market={id}       - List shops of a market
    # POST   /api/shops/                   - Create shop
    # PATCH  /api/shops/{id}/              - Update shop
    # DELETE /api/shops/{id}/              - Delete shop
    # POST   /api/shops/reorder/           - Set shop order
    # GET    /api/shops/{id}/till/         - Read till
    # PUT    /api/shops/{id}/till/         - Overwrite till

    # Listing routes
    # GET    /api/shop-items/?shop={id}             - List items in a shop
    # POST   /api/shop-items/                       - Add library item to shop
    # PATCH  /api/shop-items/{id}/                  - Price override / stock
    # DELETE /api/shop-items/{id}/                  - Remove from shop
    # POST   /api/shop-items/{id}/make_independent/ - Detach from library
    # POST   /api/shop-items/{id}/restock/          - Overwrite stock

    path('', include(router.urls)),
]
