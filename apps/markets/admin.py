from django.contrib import admin
from apps.markets.models import Market


@admin.register(Market)
class MarketAdmin(admin.ModelAdmin):
    """Admin interface for Markets."""

    list_display = [
        'name',
        'dm',
        'shop_count',
        'is_active',
        'active_until',
        'access_code',
        'created_at'
    ]
    list_filter = ['is_active', 'created_at']
    search_fields = ['name', 'description', 'dm__email', 'access_code']
    readonly_fields = ['access_code', 'created_at', 'updated_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'description', 'dm')
        }),
        ('Player Access', {
            'fields': ('access_code', 'is_active', 'active_until')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def shop_count(self, obj):
        """Show number of shops."""
        return obj.shops.count()
    shop_count.short_description = 'Shops'
