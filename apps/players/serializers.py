from rest_framework import serializers

from apps.markets.models import Market
from apps.purchases.serializers import CurrencySerializer
from apps.shops.models import Shop

from .models import PlayerSession, SessionActivity, SessionHolding
from .services import format_activity


class SessionActivitySerializer(serializers.ModelSerializer):

    class Meta:
        model = SessionActivity
        fields = ['kind', 'item_name', 'quantity', 'created_at']
        read_only_fields = fields


class SessionHoldingSerializer(serializers.ModelSerializer):
    item_name = serializers.CharField(source='shop_item.display_name', read_only=True)

    class Meta:
        model = SessionHolding
        fields = ['shop_item', 'item_name', 'quantity']
        read_only_fields = fields


class PlayerSessionSerializer(serializers.ModelSerializer):
    """Session with wallet, holdings and activity log."""

    wallet = serializers.SerializerMethodField()
    activities = SessionActivitySerializer(many=True, read_only=True)
    holdings = SessionHoldingSerializer(many=True, read_only=True)
    activity_summary = serializers.SerializerMethodField()

    class Meta:
        model = PlayerSession
        fields = [
            'id',
            'market',
            'player_name',
            'wallet',
            'entered_at',
            'last_active_at',
            'ended_at',
            'holdings',
            'activities',
            'activity_summary',
        ]
        read_only_fields = fields

    def get_wallet(self, obj):
        return CurrencySerializer(obj.wallet).data

    def get_activity_summary(self, obj):
        return format_activity(obj.activities.all())


class JoinMarketSerializer(serializers.Serializer):
    player_name = serializers.CharField(max_length=100)
    wallet = CurrencySerializer(required=False)


class PublicShopSummarySerializer(serializers.ModelSerializer):

    class Meta:
        model = Shop
        fields = ['id', 'name', 'description', 'location', 'category', 'shopkeeper', 'tags']
        read_only_fields = fields


class PublicMarketSerializer(serializers.ModelSerializer):
    """What a player sees on entering the market URL."""

    shops = serializers.SerializerMethodField()

    class Meta:
        model = Market
        fields = ['id', 'name', 'description', 'access_code', 'active_until', 'shops']
        read_only_fields = fields

    def get_shops(self, obj):
        shops = obj.shops.order_by('order', 'created_at')
        return PublicShopSummarySerializer(shops, many=True).data
