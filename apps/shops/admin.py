from django.contrib import admin
from apps.shops.models import Shop, ShopItem


class ShopItemInline(admin.TabularInline):
    """Inline admin for shop listings."""
    model = ShopItem
    extra = 0
    fields = ['market', 'library_item', 'price_amount', 'price_denomination', 'stock', 'is_independent']
    raw_id_fields = ['market', 'library_item']


@admin.register(Shop)
class ShopAdmin(admin.ModelAdmin):
    """Admin interface for Shops."""

    list_display = ['name', 'market', 'category', 'get_till', 'order', 'created_at']
    list_filter = ['category']
    search_fields = ['name', 'shopkeeper', 'market__name']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ShopItemInline]
    ordering = ['market', 'order']

    def get_till(self, obj):
        """Display till."""
        return str(obj.till)
    get_till.short_description = 'Till'


@admin.register(ShopItem)
class ShopItemAdmin(admin.ModelAdmin):
    """Admin interface for Shop listings."""

    list_display = ['display_name', 'shop', 'get_cost', 'stock', 'is_independent']
    list_filter = ['is_independent']
    search_fields = ['library_item__name', 'shop__name']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['library_item', 'shop', 'market']

    def get_cost(self, obj):
        """Display effective price."""
        cost = obj.effective_cost
        return str(cost) if cost else '-'
    get_cost.short_description = 'Price'

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('shop', 'library_item')
