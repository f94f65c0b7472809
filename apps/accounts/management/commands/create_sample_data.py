"""
Management command to create sample data for testing the API.

Usage:
    python manage.py create_sample_data [--clear]

This creates:
- 2 users (admin, a demo DM)
- A library of common adventuring items
- One market with three shops, already open to players
- Shop listings with a mix of price overrides and stock limits
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User
from apps.catalog.models import LibraryItem, ItemType, ItemSource
from apps.catalog.services import create_library_item
from apps.markets.models import Market
from apps.markets.services import create_market, activate_market
from apps.purchases.currency import Currency, ItemCost
from apps.shops.models import ShopCategory
from apps.shops.services import create_shop, add_item_to_shop
from apps.shops.services import stock as stock_store
from apps.shops.stock import UNLIMITED, Limited


LIBRARY = [
    # name, type, amount, denomination, weight
    ('Longsword', ItemType.WEAPON, 15, 'gp', 3),
    ('Dagger', ItemType.WEAPON, 2, 'gp', 1),
    ('Shortbow', ItemType.WEAPON, 25, 'gp', 2),
    ('Arrows (20)', ItemType.WEAPON, 1, 'gp', 1),
    ('Chain Mail', ItemType.ARMOR, 75, 'gp', 55),
    ('Shield', ItemType.ARMOR, 10, 'gp', 6),
    ('Potion of Healing', ItemType.CONSUMABLE, 50, 'gp', 0.5),
    ('Rations (1 day)', ItemType.CONSUMABLE, 5, 'sp', 2),
    ('Torch', ItemType.GEAR, 1, 'cp', 1),
    ('Hempen Rope (50 ft)', ItemType.GEAR, 1, 'gp', 10),
    ("Thieves' Tools", ItemType.TOOL, 25, 'gp', 1),
    ('Ale (mug)', ItemType.CONSUMABLE, 4, 'cp', None),
]

SHOPS = [
    # name, category, shopkeeper, till, items (name, price override, stock)
    (
        'The Anvil',
        ShopCategory.BLACKSMITH,
        'Hilda Ironfist',
        Currency(gp=150),
        [
            ('Longsword', None, Limited(2)),
            ('Dagger', None, UNLIMITED),
            ('Chain Mail', ItemCost(70, 'gp'), Limited(1)),
            ('Shield', None, Limited(3)),
        ],
    ),
    (
        'Bottled Wonders',
        ShopCategory.ALCHEMIST,
        'Zook the Gnome',
        Currency(gp=80, sp=5),
        [
            ('Potion of Healing', None, Limited(5)),
            ("Thieves' Tools", ItemCost(30, 'gp'), Limited(1)),
        ],
    ),
    (
        'The Drunken Dragon',
        ShopCategory.TAVERN,
        'Old Marta',
        Currency(sp=40, cp=120),
        [
            ('Ale (mug)', None, UNLIMITED),
            ('Rations (1 day)', None, UNLIMITED),
            ('Torch', None, Limited(20)),
            ('Hempen Rope (50 ft)', None, Limited(4)),
        ],
    ),
]


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        library = self.create_library(users['dm'])
        market = self.create_market(users['dm'], library)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (superuser)')
        self.stdout.write('  dm@example.com / password123')
        self.stdout.write('')
        self.stdout.write(f'Player access code: {market.access_code}')

    def clear_data(self):
        """Clear all sample data from the database."""
        Market.objects.all().delete()
        LibraryItem.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()
        User.objects.filter(email='admin@example.com').delete()

    def create_users(self):
        """Create test users."""
        self.stdout.write('  Creating users...')

        admin, _ = User.objects.get_or_create(
            email='admin@example.com',
            defaults={
                'display_name': 'Admin User',
                'is_staff': True,
                'is_superuser': True,
            }
        )
        admin.set_password('admin123')
        admin.save()

        dm, _ = User.objects.get_or_create(
            email='dm@example.com',
            defaults={'display_name': 'Demo DM'}
        )
        dm.set_password('password123')
        dm.save()

        return {'admin': admin, 'dm': dm}

    def create_library(self, dm):
        """Create the DM's item library."""
        self.stdout.write('  Creating library items...')

        library = {}
        for name, item_type, amount, denomination, weight in LIBRARY:
            existing = LibraryItem.objects.filter(dm=dm, name=name).first()
            if existing:
                library[name] = existing
                continue

            library[name] = create_library_item(
                dm=dm,
                name=name,
                item_type=item_type,
                cost_amount=amount,
                cost_denomination=denomination,
                weight=weight,
                source=ItemSource.OFFICIAL,
                ruleset='2014',
            )

        return library

    def create_market(self, dm, library):
        """Create an open market with stocked shops."""
        self.stdout.write('  Creating market and shops...')

        market = create_market(
            dm=dm,
            name='Saltmarsh Harbor Market',
            description='Stalls along the docks, open while the tide is out.',
        )

        for name, category, shopkeeper, till, items in SHOPS:
            shop = create_shop(
                market_id=market.id,
                dm=dm,
                name=name,
                category=category,
                shopkeeper=shopkeeper,
            )
            stock_store.persist_till_currency(shop.id, till)

            for item_name, price, stock in items:
                add_item_to_shop(
                    shop_id=shop.id,
                    dm=dm,
                    library_item_id=library[item_name].id,
                    price=price,
                    stock=stock,
                )

        return activate_market(market_id=market.id, dm=dm)
