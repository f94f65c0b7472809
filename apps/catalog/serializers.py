from rest_framework import serializers
from .models import LibraryItem


class LibraryItemSerializer(serializers.ModelSerializer):
    """Serializer for library items."""

    cost_display = serializers.SerializerMethodField()

    class Meta:
        model = LibraryItem
        fields = [
            'id',
            'name',
            'item_type',
            'description',
            'weight',
            'cost_amount',
            'cost_denomination',
            'cost_display',
            'source',
            'official_id',
            'ruleset',
            'tags',
            'image_url',
            'details',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_cost_display(self, obj):
        cost = obj.cost
        return str(cost) if cost else None

    def validate_tags(self, value):
        if not isinstance(value, list) or not all(isinstance(tag, str) for tag in value):
            raise serializers.ValidationError('Tags must be a list of strings')
        return value

    def validate_details(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError('Details must be an object')
        return value


class LibraryItemListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    cost_display = serializers.SerializerMethodField()

    class Meta:
        model = LibraryItem
        fields = [
            'id',
            'name',
            'item_type',
            'source',
            'cost_amount',
            'cost_denomination',
            'cost_display',
            'tags',
        ]
        read_only_fields = fields

    def get_cost_display(self, obj):
        cost = obj.cost
        return str(cost) if cost else None


class ItemUsageSerializer(serializers.Serializer):
    usage_count = serializers.IntegerField()
    in_active_market = serializers.BooleanField()
