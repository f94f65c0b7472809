# ==========================================
# apps/shops/models.py
# ==========================================

from django.db import models
import uuid

from apps.purchases.currency import Denomination, ItemCost
from apps.purchases.models import CurrencyHolder

from .stock import from_db


class ShopCategory(models.TextChoices):
    GENERAL = 'general', 'General Store'
    BLACKSMITH = 'blacksmith', 'Blacksmith'
    ARMORER = 'armorer', 'Armorer'
    FLETCHER = 'fletcher', 'Fletcher'
    LEATHERWORKER = 'leatherworker', 'Leatherworker'
    MAGIC = 'magic', 'Magic Shop'
    ALCHEMIST = 'alchemist', 'Alchemist'
    TRINKET = 'trinket', 'Trinket Shop'
    TAVERN = 'tavern', 'Tavern'
    TEMPLE = 'temple', 'Temple'
    MARKET = 'market', 'Market Stall'
    TOOLSHOP = 'toolshop', 'Tool Shop'
    LIBRARY = 'library', 'Library'
    GUILDHALL = 'guildhall', 'Guildhall'
    INN = 'inn', 'Inn'
    STABLE = 'stable', 'Stable'
    OTHER = 'other', 'Other'


class Shop(CurrencyHolder):
    """A shop inside a market. The inherited coin fields are its till."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    market = models.ForeignKey('markets.Market', on_delete=models.CASCADE, related_name='shops')
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    location = models.CharField(max_length=200, blank=True)
    category = models.CharField(max_length=20, choices=ShopCategory.choices, default=ShopCategory.GENERAL)
    shopkeeper = models.CharField(max_length=200, blank=True)
    tags = models.JSONField(default=list, blank=True)
    order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'shops'
        indexes = [
            models.Index(fields=['market', 'order'], name='shops_market_order_idx'),
        ]
        ordering = ['order', 'created_at']

    def __str__(self):
        return self.name

    @property
    def till(self):
        return self.currency


class ShopItem(models.Model):
    """
    A library item listed in a shop.

    Linked listings read name and cost from the library item. Independent
    listings keep a snapshot in ``custom_data`` and ignore later library
    edits. ``stock`` NULL means unlimited.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shop = models.ForeignKey(Shop, on_delete=models.CASCADE, related_name='items')
    market = models.ForeignKey('markets.Market', on_delete=models.CASCADE, related_name='shop_items')
    library_item = models.ForeignKey(
        'catalog.LibraryItem',
        on_delete=models.CASCADE,
        related_name='shop_listings'
    )

    # Optional price override
    price_amount = models.PositiveIntegerField(null=True, blank=True)
    price_denomination = models.CharField(max_length=2, choices=Denomination.choices, blank=True)

    stock = models.PositiveIntegerField(null=True, blank=True)
    is_independent = models.BooleanField(default=False)
    custom_data = models.JSONField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'shop_items'
        indexes = [
            models.Index(fields=['shop', 'created_at'], name='shop_items_shop_idx'),
            models.Index(fields=['market'], name='shop_items_market_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.display_name} @ {self.shop.name}"

    @property
    def price(self):
        if self.price_amount is None or not self.price_denomination:
            return None
        return ItemCost(self.price_amount, self.price_denomination)

    @property
    def effective_cost(self):
        """Price override, else the (snapshot or library) item cost."""
        if self.price is not None:
            return self.price
        if self.is_independent and self.custom_data is not None:
            cost = self.custom_data.get('cost')
            return ItemCost(cost['amount'], cost['denomination']) if cost else None
        return self.library_item.cost

    @property
    def display_name(self):
        if self.is_independent and self.custom_data is not None:
            return self.custom_data.get('name', self.library_item.name)
        return self.library_item.name

    @property
    def stock_level(self):
        return from_db(self.stock)
