# ==========================================
# apps/players/models.py
# ==========================================

from django.db import models
from django.utils import timezone
import uuid

from apps.purchases.models import CurrencyHolder


class ActivityKind(models.TextChoices):
    BUY = 'buy', 'Bought'
    SELL = 'sell', 'Sold'
    END_SESSION = 'end_session', 'Left the market'


class PlayerSession(CurrencyHolder):
    """
    A player inside an open market. The inherited coin fields are the
    player's wallet. Players have no account; the session id is their key.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    market = models.ForeignKey('markets.Market', on_delete=models.CASCADE, related_name='player_sessions')
    player_name = models.CharField(max_length=100)
    entered_at = models.DateTimeField(auto_now_add=True)
    last_active_at = models.DateTimeField(default=timezone.now)
    ended_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'player_sessions'
        indexes = [
            models.Index(fields=['market', 'last_active_at'], name='sessions_market_active_idx'),
        ]
        ordering = ['-last_active_at']

    def __str__(self):
        return f"{self.player_name} in {self.market.name}"

    @property
    def wallet(self):
        return self.currency

    @property
    def is_ended(self):
        return self.ended_at is not None


class SessionActivity(models.Model):
    """One entry in a player's trading log."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    session = models.ForeignKey(PlayerSession, on_delete=models.CASCADE, related_name='activities')
    kind = models.CharField(max_length=20, choices=ActivityKind.choices)
    item_name = models.CharField(max_length=200, blank=True)
    quantity = models.PositiveIntegerField(default=1)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'session_activities'
        ordering = ['created_at']

    def __str__(self):
        return f"{self.session.player_name}: {self.kind} {self.item_name}"


class SessionHolding(models.Model):
    """
    Copies of a listing a player currently owns. Only owned items can be
    sold back, one row per (session, listing).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    session = models.ForeignKey(PlayerSession, on_delete=models.CASCADE, related_name='holdings')
    shop_item = models.ForeignKey('shops.ShopItem', on_delete=models.CASCADE, related_name='holdings')
    quantity = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'session_holdings'
        constraints = [
            models.UniqueConstraint(fields=['session', 'shop_item'], name='unique_session_holding'),
        ]

    def __str__(self):
        return f"{self.session.player_name}: {self.quantity} x {self.shop_item_id}"
