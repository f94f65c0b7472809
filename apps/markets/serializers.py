from rest_framework import serializers
from .models import Market
from .services import get_shareable_url


class MarketSerializer(serializers.ModelSerializer):
    """Main serializer for markets."""

    is_open = serializers.BooleanField(read_only=True)
    shareable_url = serializers.SerializerMethodField()
    shop_count = serializers.SerializerMethodField()

    class Meta:
        model = Market
        fields = [
            'id',
            'name',
            'description',
            'access_code',
            'is_active',
            'active_until',
            'is_open',
            'shareable_url',
            'shop_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'access_code',
            'is_active',
            'active_until',
            'created_at',
            'updated_at',
        ]

    def get_shareable_url(self, obj):
        return get_shareable_url(access_code=obj.access_code)

    def get_shop_count(self, obj):
        return obj.shops.count()


class MarketCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating and editing markets."""

    class Meta:
        model = Market
        fields = ['name', 'description']


class MarketListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    is_open = serializers.BooleanField(read_only=True)

    class Meta:
        model = Market
        fields = [
            'id',
            'name',
            'access_code',
            'is_active',
            'active_until',
            'is_open',
            'created_at',
        ]
        read_only_fields = fields


class ActivateMarketSerializer(serializers.Serializer):
    hours = serializers.IntegerField(required=False, min_value=1, max_value=72)
