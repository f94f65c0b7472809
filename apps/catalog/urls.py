from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'catalog'

router = DefaultRouter()
router.register(r'', views.LibraryItemViewSet, basename='library-item')

urlpatterns = [
    # GET    /api/library/              - List library (?type=&source=&search=)
    # POST   /api/library/              - Create item
    # GET    /api/library/{id}/         - Item details
    # PATCH  /api/library/{id}/         - Update item
    # DELETE /api/library/{id}/         - Delete item (and its shop listings)
    # GET    /api/library/{id}/usage/   - Listing count / active market check
    path('', include(router.urls)),
]
