from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    LibraryItemSerializer,
    LibraryItemListSerializer,
    ItemUsageSerializer,
)
from .services import (
    create_library_item,
    list_library_items,
    update_library_item,
    delete_library_item,
    get_item_usage_count,
    is_item_in_active_market,
    # Exceptions
    LibraryLimitExceededError,
    InvalidItemCostError,
)


class LibraryPagination(PageNumberPagination):
    """Custom pagination for the item library."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    parameters=[
        OpenApiParameter('type', str, description='Filter by item type'),
        OpenApiParameter('source', str, description='Filter by source (official, custom, modified)'),
        OpenApiParameter('search', str, description='Search by name'),
    ],
)
class LibraryItemViewSet(viewsets.ModelViewSet):
    """
    ViewSet for the DM's item library.

    list: Get library items (filterable)
    create: Add an item to the library
    retrieve: Get a library item
    update: Update a library item
    partial_update: Partially update a library item
    destroy: Delete a library item and its shop listings
    """

    serializer_class = LibraryItemSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = LibraryPagination

    def get_queryset(self):
        """Return only the user's library, filtered by query params."""
        params = self.request.query_params
        return list_library_items(
            dm=self.request.user,
            item_type=params.get('type'),
            source=params.get('source'),
            search=params.get('search'),
        )

    def get_serializer_class(self):
        if self.action == 'list':
            return LibraryItemListSerializer
        return LibraryItemSerializer

    def create(self, request, *args, **kwargs):
        """Add an item to the library."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            item = create_library_item(dm=request.user, **serializer.validated_data)
        except (LibraryLimitExceededError, InvalidItemCostError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(LibraryItemSerializer(item).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update a library item; linked shop listings follow."""
        partial = kwargs.pop('partial', False)
        item = self.get_object()
        serializer = self.get_serializer(item, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            item = update_library_item(
                item_id=item.id,
                dm=request.user,
                **serializer.validated_data
            )
        except InvalidItemCostError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(LibraryItemSerializer(item).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a library item."""
        item = self.get_object()
        delete_library_item(item_id=item.id, dm=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: ItemUsageSerializer})
    @action(detail=True, methods=['get'])
    def usage(self, request, pk=None):
        """How many shops list this item, and whether any is open right now."""
        item = self.get_object()
        return Response({
            'usage_count': get_item_usage_count(item_id=item.id),
            'in_active_market': is_item_in_active_market(item_id=item.id),
        })
