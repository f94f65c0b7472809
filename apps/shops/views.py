from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.catalog.services import LibraryItemNotFoundError
from apps.purchases.serializers import CurrencySerializer

from .models import Shop, ShopItem
from .permissions import IsMarketDM
from .serializers import (
    ShopSerializer,
    ShopWriteSerializer,
    ReorderShopsSerializer,
    ShopItemSerializer,
    ShopItemWriteSerializer,
    RestockSerializer,
)
from .services import (
    create_shop,
    update_shop,
    reorder_shops,
    delete_shop,
    add_item_to_shop,
    update_shop_item,
    make_item_independent,
    remove_item_from_shop,
    # Exceptions
    ShopsServiceError,
    ShopNotFoundError,
    InsufficientPermissionsError,
)
from .services import stock as stock_store
from .stock import UNLIMITED


class ShopPagination(PageNumberPagination):
    """Custom pagination for shops and listings."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _error_response(error):
    """Map a shops service error onto an HTTP response."""
    if isinstance(error, (ShopNotFoundError, LibraryItemNotFoundError)):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, InsufficientPermissionsError):
        code = status.HTTP_403_FORBIDDEN
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(error)}, status=code)


@extend_schema(parameters=[OpenApiParameter('market', str, description='Filter by market ID')])
class ShopViewSet(viewsets.ModelViewSet):
    """
    ViewSet for shops inside the DM's markets.

    list: Get shops (optionally ?market=<id>)
    create: Create a shop in a market
    retrieve: Get a shop
    update / partial_update: Edit shop details
    destroy: Delete a shop and its listings
    """

    serializer_class = ShopSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ShopPagination

    def get_queryset(self):
        """Return only shops in markets the user runs."""
        queryset = Shop.objects.filter(
            market__dm=self.request.user
        ).select_related('market')

        market_id = self.request.query_params.get('market')
        if market_id:
            queryset = queryset.filter(market_id=market_id)
        return queryset.order_by('order', 'created_at')

    def get_serializer_class(self):
        if self.action in ['create', 'update', 'partial_update']:
            return ShopWriteSerializer
        return ShopSerializer

    def get_permissions(self):
        if self.action in ['update', 'partial_update', 'destroy', 'till']:
            return [IsAuthenticated(), IsMarketDM()]
        return [IsAuthenticated()]

    def create(self, request, *args, **kwargs):
        """Create a new shop at the end of the market's order."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data.copy()
        market_id = data.pop('market', None)
        if market_id is None:
            return Response({'error': 'market is required'}, status=status.HTTP_400_BAD_REQUEST)

        try:
            shop = create_shop(market_id=market_id, dm=request.user, **data)
        except ShopsServiceError as e:
            return _error_response(e)

        return Response(ShopSerializer(shop).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        shop = self.get_object()
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data.copy()
        data.pop('market', None)

        try:
            shop = update_shop(shop_id=shop.id, dm=request.user, **data)
        except ShopsServiceError as e:
            return _error_response(e)

        return Response(ShopSerializer(shop).data)

    def destroy(self, request, *args, **kwargs):
        shop = self.get_object()
        try:
            delete_shop(shop_id=shop.id, dm=request.user)
        except ShopsServiceError as e:
            return _error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=ReorderShopsSerializer, responses={200: ShopSerializer(many=True)})
    @action(detail=False, methods=['post'])
    def reorder(self, request):
        """Set the display order of all shops in a market."""
        serializer = ReorderShopsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            shops = reorder_shops(
                market_id=serializer.validated_data['market'],
                dm=request.user,
                shop_ids=serializer.validated_data['shop_ids'],
            )
        except ShopsServiceError as e:
            return _error_response(e)

        return Response(ShopSerializer(shops, many=True).data)

    @extend_schema(request=CurrencySerializer, responses={200: CurrencySerializer})
    @action(detail=True, methods=['get', 'put'])
    def till(self, request, pk=None):
        """Read or overwrite the shop's till."""
        shop = self.get_object()

        if request.method == 'PUT':
            serializer = CurrencySerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            stock_store.persist_till_currency(shop.id, serializer.save())

        return Response(CurrencySerializer(stock_store.get_till(shop.id)).data)


@extend_schema(
    parameters=[
        OpenApiParameter('shop', str, description='Filter by shop ID'),
        OpenApiParameter('market', str, description='Filter by market ID'),
    ],
)
class ShopItemViewSet(viewsets.ModelViewSet):
    """
    ViewSet for shop listings.

    list: Get listings (?shop=<id> or ?market=<id>)
    create: List a library item in a shop
    retrieve: Get a listing
    update / partial_update: Change price override, stock or snapshot data
    destroy: Remove a listing (library item stays)
    """

    serializer_class = ShopItemSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ShopPagination

    def get_queryset(self):
        """Return only listings in markets the user runs."""
        queryset = ShopItem.objects.filter(
            market__dm=self.request.user
        ).select_related('market', 'shop', 'library_item')

        params = self.request.query_params
        if params.get('shop'):
            queryset = queryset.filter(shop_id=params['shop'])
        if params.get('market'):
            queryset = queryset.filter(market_id=params['market'])
        return queryset.order_by('created_at')

    def get_serializer_class(self):
        if self.action in ['create', 'update', 'partial_update']:
            return ShopItemWriteSerializer
        return ShopItemSerializer

    def get_permissions(self):
        if self.action in ['update', 'partial_update', 'destroy', 'make_independent', 'restock']:
            return [IsAuthenticated(), IsMarketDM()]
        return [IsAuthenticated()]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if 'shop' not in data or 'library_item' not in data:
            return Response(
                {'error': 'shop and library_item are required'},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            item = add_item_to_shop(
                shop_id=data['shop'],
                dm=request.user,
                library_item_id=data['library_item'],
                price=data.get('price'),
                stock=data.get('stock', UNLIMITED),
            )
        except (ShopsServiceError, LibraryItemNotFoundError) as e:
            return _error_response(e)

        return Response(ShopItemSerializer(item).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        item = self.get_object()
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        changes = {
            key: value
            for key, value in serializer.validated_data.items()
            if key in ('price', 'stock', 'custom_data')
        }

        try:
            item = update_shop_item(shop_item_id=item.id, dm=request.user, **changes)
        except ShopsServiceError as e:
            return _error_response(e)

        return Response(ShopItemSerializer(item).data)

    def destroy(self, request, *args, **kwargs):
        item = self.get_object()
        try:
            remove_item_from_shop(shop_item_id=item.id, dm=request.user)
        except ShopsServiceError as e:
            return _error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: ShopItemSerializer})
    @action(detail=True, methods=['post'])
    def make_independent(self, request, pk=None):
        """Snapshot the library item so later library edits don't affect this listing."""
        item = self.get_object()
        try:
            item = make_item_independent(shop_item_id=item.id, dm=request.user)
        except ShopsServiceError as e:
            return _error_response(e)
        return Response(ShopItemSerializer(item).data)

    @extend_schema(request=RestockSerializer, responses={200: ShopItemSerializer})
    @action(detail=True, methods=['post'])
    def restock(self, request, pk=None):
        """Overwrite the listing's stock (null for unlimited)."""
        item = self.get_object()
        serializer = RestockSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = stock_store.set_stock(item.id, serializer.validated_data['stock'])
        return Response(ShopItemSerializer(item).data)
