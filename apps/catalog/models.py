# ==========================================
# apps/catalog/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
import uuid

from apps.purchases.currency import Denomination, ItemCost


class ItemType(models.TextChoices):
    WEAPON = 'weapon', 'Weapon'
    ARMOR = 'armor', 'Armor'
    TOOL = 'tool', 'Tool'
    CONSUMABLE = 'consumable', 'Consumable'
    GEAR = 'gear', 'Adventuring Gear'
    MAGIC = 'magic', 'Magic Item'
    TREASURE = 'treasure', 'Treasure'
    OTHER = 'other', 'Other'


class ItemSource(models.TextChoices):
    OFFICIAL = 'official', 'Official'
    CUSTOM = 'custom', 'Custom'
    MODIFIED = 'modified', 'Modified Official'


class Ruleset(models.TextChoices):
    RULES_2014 = '2014', '2014 Rules'
    RULES_2024 = '2024', '2024 Rules'
    HOMEBREW = 'homebrew', 'Homebrew'


class LibraryItem(models.Model):
    """An item in a DM's personal library, reusable across shops."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    dm = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='library_items')
    name = models.CharField(max_length=200, db_index=True)
    item_type = models.CharField(max_length=20, choices=ItemType.choices, default=ItemType.GEAR)
    description = models.TextField(blank=True)
    weight = models.FloatField(null=True, blank=True, validators=[MinValueValidator(0)])

    # Canonical price; both empty means "no price set"
    cost_amount = models.PositiveIntegerField(null=True, blank=True)
    cost_denomination = models.CharField(max_length=2, choices=Denomination.choices, blank=True)

    source = models.CharField(max_length=20, choices=ItemSource.choices, default=ItemSource.CUSTOM)
    official_id = models.CharField(max_length=100, blank=True)
    ruleset = models.CharField(max_length=10, choices=Ruleset.choices, blank=True)
    tags = models.JSONField(default=list, blank=True)
    image_url = models.URLField(max_length=500, blank=True)

    # Type-specific fields: damage dice, armor class, rarity, uses...
    details = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'library_items'
        indexes = [
            models.Index(fields=['dm', 'item_type'], name='library_dm_type_idx'),
            models.Index(fields=['dm', 'source'], name='library_dm_source_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def cost(self):
        if self.cost_amount is None or not self.cost_denomination:
            return None
        return ItemCost(self.cost_amount, self.cost_denomination)

    def snapshot(self):
        """Plain-data copy of the item, stored on listings made independent."""
        cost = self.cost
        return {
            'name': self.name,
            'item_type': self.item_type,
            'description': self.description,
            'weight': self.weight,
            'cost': {'amount': cost.amount, 'denomination': cost.denomination} if cost else None,
            'source': self.source,
            'ruleset': self.ruleset,
            'tags': list(self.tags),
            'image_url': self.image_url,
            'details': dict(self.details),
        }
