"""
Management command to close markets whose activation window has passed.

Usage:
    python manage.py expire_markets

Meant to be run periodically (cron, Render cron job). Expiry also happens
lazily: players can never enter a market past its ``active_until``.
"""

from django.core.management.base import BaseCommand

from apps.markets.services import expire_markets


class Command(BaseCommand):
    help = 'Deactivate markets whose activation window has passed'

    def handle(self, *args, **options):
        count = expire_markets()
        self.stdout.write(self.style.SUCCESS(f'Expired {count} market(s)'))
