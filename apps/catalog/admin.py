from django.contrib import admin
from apps.catalog.models import LibraryItem


@admin.register(LibraryItem)
class LibraryItemAdmin(admin.ModelAdmin):
    """Admin interface for library items."""

    list_display = ['name', 'dm', 'item_type', 'source', 'get_cost', 'created_at']
    list_filter = ['item_type', 'source', 'ruleset']
    search_fields = ['name', 'description', 'dm__email']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['name']

    def get_cost(self, obj):
        """Display canonical price."""
        cost = obj.cost
        return str(cost) if cost else '-'
    get_cost.short_description = 'Cost'

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('dm')
