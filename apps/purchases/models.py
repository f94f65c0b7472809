from django.db import models

from .currency import Currency


class CurrencyHolder(models.Model):
    """
    Abstract model for anything that holds coins (a shop till, a player wallet).

    The three denominations are stored as they were last written; reads
    always go through ``currency`` so callers get a fresh immutable value.
    """

    CURRENCY_FIELDS = ['gp', 'sp', 'cp']

    gp = models.PositiveIntegerField(default=0)
    sp = models.PositiveIntegerField(default=0)
    cp = models.PositiveIntegerField(default=0)

    class Meta:
        abstract = True

    @property
    def currency(self):
        return Currency(gp=self.gp, sp=self.sp, cp=self.cp)

    def set_currency(self, currency):
        """Overwrite the stored coins with ``currency`` (does not save)."""
        self.gp = currency.gp
        self.sp = currency.sp
        self.cp = currency.cp
