# ==========================================
# apps/markets/models.py
# ==========================================

from django.db import models
from django.utils import timezone
import uuid


class Market(models.Model):
    """A DM's collection of shops that players enter with an access code."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    dm = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='markets')
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    access_code = models.CharField(max_length=64, unique=True, editable=False)

    # Activation window
    is_active = models.BooleanField(default=False)
    active_until = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'markets'
        indexes = [
            models.Index(fields=['dm', 'created_at'], name='markets_dm_created_idx'),
            models.Index(fields=['is_active', 'active_until'], name='markets_active_until_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    @property
    def is_open(self):
        """Active and still inside its activation window."""
        if not self.is_active:
            return False
        return self.active_until is None or self.active_until > timezone.now()
