from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.markets.services import get_market_by_access_code, MarketNotFoundError
from apps.purchases.currency import Currency
from apps.purchases.serializers import CurrencySerializer
from apps.shops.models import Shop
from apps.shops.serializers import PublicShopSerializer

from .serializers import (
    PlayerSessionSerializer,
    JoinMarketSerializer,
    PublicMarketSerializer,
)
from .services import (
    join_market,
    get_session,
    update_wallet,
    end_session,
    # Exceptions
    MarketNotOpenError,
    SessionNotFoundError,
    SessionEndedError,
)


@extend_schema(
    responses={200: PublicMarketSerializer},
    description="Open market by access code, with its shops.",
    tags=['players'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def market_detail(request, access_code):
    """Market a player is entering."""
    try:
        market = get_market_by_access_code(access_code=access_code)
    except MarketNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(PublicMarketSerializer(market).data)


@extend_schema(
    request=JoinMarketSerializer,
    responses={201: PlayerSessionSerializer},
    description="Enter an open market with a name and a wallet.",
    tags=['players'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def join(request, access_code):
    """Start a player session."""
    serializer = JoinMarketSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    wallet_data = serializer.validated_data.get('wallet')
    wallet = Currency(**wallet_data) if wallet_data else None

    try:
        session = join_market(
            access_code=access_code,
            player_name=serializer.validated_data['player_name'],
            wallet=wallet,
        )
    except MarketNotOpenError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(PlayerSessionSerializer(session).data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: PublicShopSerializer},
    description="A shop of an open market, with its listings.",
    tags=['players'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def shop_detail(request, access_code, shop_id):
    """Shop inventory as players see it."""
    try:
        market = get_market_by_access_code(access_code=access_code)
    except MarketNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    shop = Shop.objects.filter(id=shop_id, market=market).prefetch_related('items__library_item').first()
    if shop is None:
        return Response({'error': 'Shop not found'}, status=status.HTTP_404_NOT_FOUND)

    return Response(PublicShopSerializer(shop).data)


@extend_schema(
    methods=['GET'],
    responses={200: PlayerSessionSerializer},
    description="Player session with wallet and activity.",
    tags=['players'],
)
@extend_schema(
    methods=['PUT'],
    request=CurrencySerializer,
    responses={200: PlayerSessionSerializer},
    description="Overwrite the player's wallet.",
    tags=['players'],
)
@api_view(['GET', 'PUT'])
@permission_classes([AllowAny])
def session_detail(request, session_id):
    """Read a session, or set its wallet."""
    try:
        if request.method == 'PUT':
            serializer = CurrencySerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            session = update_wallet(session_id=session_id, wallet=serializer.save())
        else:
            session = get_session(session_id=session_id)
    except SessionNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except SessionEndedError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(PlayerSessionSerializer(session).data)


@extend_schema(
    request=None,
    responses={200: PlayerSessionSerializer},
    description="Leave the market.",
    tags=['players'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def end(request, session_id):
    """End a player session."""
    try:
        session = end_session(session_id=session_id)
    except SessionNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except SessionEndedError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(PlayerSessionSerializer(session).data)
