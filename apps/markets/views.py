from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.players.serializers import PlayerSessionSerializer
from apps.players.services import list_market_sessions

from .models import Market
from .permissions import IsMarketDM
from .serializers import (
    MarketSerializer,
    MarketCreateSerializer,
    MarketListSerializer,
    ActivateMarketSerializer,
)
from .services import (
    create_market,
    update_market,
    activate_market,
    deactivate_market,
    delete_market,
    # Exceptions
    MarketLimitExceededError,
    InsufficientPermissionsError,
)


class MarketPagination(PageNumberPagination):
    """Custom pagination for markets."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class MarketViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Market CRUD operations.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Get the DM's markets
    create: Create a new market
    retrieve: Get a specific market
    update: Update a market
    partial_update: Partially update a market
    destroy: Delete a market with its shops and sessions
    """

    serializer_class = MarketSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = MarketPagination

    def get_queryset(self):
        """Return only markets the user runs."""
        return Market.objects.filter(dm=self.request.user).order_by('-created_at')

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return MarketListSerializer
        elif self.action in ['create', 'update', 'partial_update']:
            return MarketCreateSerializer
        return MarketSerializer

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['update', 'partial_update', 'destroy']:
            return [IsAuthenticated(), IsMarketDM()]
        return [IsAuthenticated()]

    def create(self, request, *args, **kwargs):
        """Create a new market."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            market = create_market(
                dm=request.user,
                name=serializer.validated_data['name'],
                description=serializer.validated_data.get('description', ''),
            )
        except MarketLimitExceededError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = MarketSerializer(market, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update market name or description."""
        partial = kwargs.pop('partial', False)
        market = self.get_object()
        serializer = self.get_serializer(market, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            market = update_market(
                market_id=market.id,
                dm=request.user,
                **serializer.validated_data
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(MarketSerializer(market, context={'request': request}).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a market."""
        market = self.get_object()
        try:
            delete_market(market_id=market.id, dm=request.user)
            return Response(status=status.HTTP_204_NO_CONTENT)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    @extend_schema(request=ActivateMarketSerializer, responses={200: MarketSerializer})
    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated, IsMarketDM])
    def activate(self, request, pk=None):
        """Open the market to players (closes the DM's other active market)."""
        market = self.get_object()
        serializer = ActivateMarketSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        market = activate_market(
            market_id=market.id,
            dm=request.user,
            hours=serializer.validated_data.get('hours'),
        )
        return Response(MarketSerializer(market, context={'request': request}).data)

    @extend_schema(request=None, responses={200: MarketSerializer})
    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated, IsMarketDM])
    def deactivate(self, request, pk=None):
        """Close the market and end every player session in it."""
        market = self.get_object()
        market = deactivate_market(market_id=market.id, dm=request.user)
        return Response(MarketSerializer(market, context={'request': request}).data)

    @extend_schema(responses={200: PlayerSessionSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def sessions(self, request, pk=None):
        """Players currently inside the market."""
        market = self.get_object()
        sessions = list_market_sessions(market_id=market.id)
        serializer = PlayerSessionSerializer(sessions, many=True)
        return Response(serializer.data)
