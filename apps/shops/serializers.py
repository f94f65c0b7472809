from rest_framework import serializers

from apps.purchases.currency import Denomination, ItemCost
from apps.purchases.serializers import CurrencySerializer
from apps.shops.stock import UNLIMITED, Limited

from .models import Shop, ShopItem, ShopCategory


def _cost_data(cost):
    if cost is None:
        return None
    return {'amount': cost.amount, 'denomination': cost.denomination, 'display': str(cost)}


# =============================================================================
# Shops
# =============================================================================

class ShopSerializer(serializers.ModelSerializer):
    """Main serializer for shops."""

    till = serializers.SerializerMethodField()
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = Shop
        fields = [
            'id',
            'market',
            'name',
            'description',
            'location',
            'category',
            'shopkeeper',
            'tags',
            'till',
            'order',
            'item_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_till(self, obj):
        return CurrencySerializer(obj.till).data

    def get_item_count(self, obj):
        return obj.items.count()


class ShopWriteSerializer(serializers.Serializer):
    """Create/update input. ``market`` is required on create only."""

    market = serializers.UUIDField(required=False)
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True)
    location = serializers.CharField(required=False, allow_blank=True, max_length=200)
    category = serializers.ChoiceField(choices=ShopCategory.choices, required=False)
    shopkeeper = serializers.CharField(required=False, allow_blank=True, max_length=200)
    tags = serializers.ListField(child=serializers.CharField(), required=False)


class ReorderShopsSerializer(serializers.Serializer):
    market = serializers.UUIDField()
    shop_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)


# =============================================================================
# Shop items
# =============================================================================

class ShopItemSerializer(serializers.ModelSerializer):
    """Listing as the DM sees it."""

    display_name = serializers.CharField(read_only=True)
    effective_cost = serializers.SerializerMethodField()

    class Meta:
        model = ShopItem
        fields = [
            'id',
            'shop',
            'market',
            'library_item',
            'display_name',
            'price_amount',
            'price_denomination',
            'effective_cost',
            'stock',
            'is_independent',
            'custom_data',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_effective_cost(self, obj):
        return _cost_data(obj.effective_cost)


class PublicShopItemSerializer(serializers.ModelSerializer):
    """Listing as a player sees it."""

    name = serializers.CharField(source='display_name', read_only=True)
    cost = serializers.SerializerMethodField()
    item_type = serializers.SerializerMethodField()
    description = serializers.SerializerMethodField()

    class Meta:
        model = ShopItem
        fields = ['id', 'name', 'item_type', 'description', 'cost', 'stock']
        read_only_fields = fields

    def _source(self, obj):
        if obj.is_independent and obj.custom_data is not None:
            return obj.custom_data
        return {
            'item_type': obj.library_item.item_type,
            'description': obj.library_item.description,
        }

    def get_cost(self, obj):
        return _cost_data(obj.effective_cost)

    def get_item_type(self, obj):
        return self._source(obj).get('item_type')

    def get_description(self, obj):
        return self._source(obj).get('description', '')


class PublicShopSerializer(serializers.ModelSerializer):
    """Shop with its listings, for players browsing a market."""

    till = serializers.SerializerMethodField()
    items = PublicShopItemSerializer(many=True, read_only=True)

    class Meta:
        model = Shop
        fields = [
            'id',
            'name',
            'description',
            'location',
            'category',
            'shopkeeper',
            'tags',
            'till',
            'items',
        ]
        read_only_fields = fields

    def get_till(self, obj):
        return CurrencySerializer(obj.till).data


class ShopItemWriteSerializer(serializers.Serializer):
    """
    Create/update input for listings.

    ``stock`` null means unlimited. A price override needs both amount and
    denomination; send both as null to clear it.
    """

    shop = serializers.UUIDField(required=False)
    library_item = serializers.UUIDField(required=False)
    price_amount = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    price_denomination = serializers.ChoiceField(
        choices=Denomination.choices,
        required=False,
        allow_null=True,
        allow_blank=True
    )
    stock = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    custom_data = serializers.JSONField(required=False)

    def validate(self, attrs):
        has_amount = 'price_amount' in attrs
        has_denomination = 'price_denomination' in attrs
        if has_amount != has_denomination:
            raise serializers.ValidationError({
                'price_amount': 'Price needs both an amount and a denomination'
            })

        if has_amount:
            amount = attrs.pop('price_amount')
            denomination = attrs.pop('price_denomination')
            if (amount is None) != (not denomination):
                raise serializers.ValidationError({
                    'price_amount': 'Price needs both an amount and a denomination'
                })
            attrs['price'] = ItemCost(amount, denomination) if amount is not None else None

        if 'stock' in attrs:
            quantity = attrs['stock']
            attrs['stock'] = UNLIMITED if quantity is None else Limited(quantity)

        return attrs


class RestockSerializer(serializers.Serializer):
    stock = serializers.IntegerField(min_value=0, allow_null=True)

    def validate_stock(self, value):
        return UNLIMITED if value is None else Limited(value)
