from django.contrib import admin
from apps.players.models import PlayerSession, SessionActivity, SessionHolding
from apps.players.services import format_activity


class SessionActivityInline(admin.TabularInline):
    """Inline admin for a session's activity log."""
    model = SessionActivity
    extra = 0
    fields = ['kind', 'item_name', 'quantity', 'created_at']
    readonly_fields = ['created_at']


class SessionHoldingInline(admin.TabularInline):
    model = SessionHolding
    extra = 0
    fields = ['shop_item', 'quantity']
    raw_id_fields = ['shop_item']


@admin.register(PlayerSession)
class PlayerSessionAdmin(admin.ModelAdmin):
    """Admin interface for Player sessions."""

    list_display = ['player_name', 'market', 'get_wallet', 'get_activity', 'last_active_at', 'ended_at']
    search_fields = ['player_name', 'market__name']
    readonly_fields = ['entered_at']
    inlines = [SessionHoldingInline, SessionActivityInline]
    ordering = ['-last_active_at']

    def get_wallet(self, obj):
        return str(obj.wallet)
    get_wallet.short_description = 'Wallet'

    def get_activity(self, obj):
        return format_activity(obj.activities.all())
    get_activity.short_description = 'Activity'

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('market').prefetch_related('activities')
