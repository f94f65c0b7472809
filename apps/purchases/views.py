from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import (
    BuyInputSerializer,
    SellInputSerializer,
    PurchaseResultSerializer,
    StockStatusSerializer,
)
from .services import buy_for_session, sell_for_session, check_stock


def _result_response(result):
    code = status.HTTP_200_OK if result.success else status.HTTP_400_BAD_REQUEST
    return Response(PurchaseResultSerializer(result).data, status=code)


@extend_schema(
    request=BuyInputSerializer,
    responses={200: PurchaseResultSerializer, 400: PurchaseResultSerializer},
    description="Player buys one copy of a shop item.",
    tags=['purchases'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def buy(request):
    """Buy an item from a shop."""
    serializer = BuyInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = buy_for_session(
        session_id=serializer.validated_data['session'],
        shop_item_id=serializer.validated_data['shop_item'],
    )
    return _result_response(result)


@extend_schema(
    request=SellInputSerializer,
    responses={200: PurchaseResultSerializer, 400: PurchaseResultSerializer},
    description="Player sells one copy of a shop item back to the shop.",
    tags=['purchases'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def sell(request):
    """Sell an item to a shop."""
    serializer = SellInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = sell_for_session(
        session_id=serializer.validated_data['session'],
        shop_item_id=serializer.validated_data['shop_item'],
    )
    return _result_response(result)


@extend_schema(
    responses={200: StockStatusSerializer},
    description="Current stock of a shop item.",
    tags=['purchases'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def stock(request, shop_item_id):
    status_ = check_stock(shop_item_id=shop_item_id)
    return Response(StockStatusSerializer(status_).data)
