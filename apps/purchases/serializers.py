from rest_framework import serializers

from .currency import Currency, format_currency


# =============================================================================
# Currency
# =============================================================================

class CurrencySerializer(serializers.Serializer):
    """A wallet or till as three coin counts."""

    gp = serializers.IntegerField(min_value=0, default=0)
    sp = serializers.IntegerField(min_value=0, default=0)
    cp = serializers.IntegerField(min_value=0, default=0)

    def to_representation(self, instance):
        return {
            'gp': instance.gp,
            'sp': instance.sp,
            'cp': instance.cp,
            'display': format_currency(instance),
        }

    def create(self, validated_data):
        return Currency(**validated_data)


# =============================================================================
# Input Serializers
# =============================================================================

class BuyInputSerializer(serializers.Serializer):
    """Player buys one copy of a listing."""

    session = serializers.UUIDField()
    shop_item = serializers.UUIDField()


class SellInputSerializer(serializers.Serializer):
    """Player sells one copy of a listing back to its shop."""

    session = serializers.UUIDField()
    shop_item = serializers.UUIDField()


# =============================================================================
# Output Serializers
# =============================================================================

class PurchaseResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    new_wallet = CurrencySerializer(allow_null=True, required=False)
    new_till = CurrencySerializer(allow_null=True, required=False)


class StockStatusSerializer(serializers.Serializer):
    in_stock = serializers.BooleanField()
    quantity = serializers.IntegerField(allow_null=True)
