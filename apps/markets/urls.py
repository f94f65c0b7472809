from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'markets'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.MarketViewSet, basename='market')

urlpatterns = [
    # Market ViewSet routes
    # GET    /api/markets/              - List DM's markets
    # POST   /api/markets/              - Create market
    # GET    /api/markets/{id}/         - Get market details
    # PATCH  /api/markets/{id}/         - Update market
    # DELETE /api/markets/{id}/         - Delete market

    # Custom market actions
    # POST   /api/markets/{id}/activate/    - Open to players for a few hours
    # POST   /api/markets/{id}/deactivate/  - Close and end player sessions
    # GET    /api/markets/{id}/sessions/    - Players inside the market

    path('', include(router.urls)),
]
