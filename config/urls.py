"""
URL configuration for config project.

DM-facing endpoints require a JWT; player-facing endpoints under
``/api/players/`` and ``/api/purchases/`` are anonymous and keyed by the
player's session id.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenRefreshView

from config.views import health_check

urlpatterns = [
    # Health check (for Render)
    path('api/health/', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/', include('apps.accounts.urls')),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # DM endpoints
    path('api/markets/', include('apps.markets.urls')),
    path('api/library/', include('apps.catalog.urls')),
    path('api/', include('apps.shops.urls')),

    # Player endpoints
    path('api/players/', include('apps.players.urls')),
    path('api/purchases/', include('apps.purchases.urls')),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
