from django.db import migrations, models
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('markets', '0001_initial'),
        ('catalog', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Shop',
            fields=[
                ('gp', models.PositiveIntegerField(default=0)),
                ('sp', models.PositiveIntegerField(default=0)),
                ('cp', models.PositiveIntegerField(default=0)),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('location', models.CharField(blank=True, max_length=200)),
                ('category', models.CharField(choices=[('general', 'General Store'), ('blacksmith', 'Blacksmith'), ('armorer', 'Armorer'), ('fletcher', 'Fletcher'), ('leatherworker', 'Leatherworker'), ('magic', 'Magic Shop'), ('alchemist', 'Alchemist'), ('trinket', 'Trinket Shop'), ('tavern', 'Tavern'), ('temple', 'Temple'), ('market', 'Market Stall'), ('toolshop', 'Tool Shop'), ('library', 'Library'), ('guildhall', 'Guildhall'), ('inn', 'Inn'), ('stable', 'Stable'), ('other', 'Other')], default='general', max_length=20)),
                ('shopkeeper', models.CharField(blank=True, max_length=200)),
                ('tags', models.JSONField(blank=True, default=list)),
                ('order', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('market', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='shops', to='markets.market')),
            ],
            options={
                'db_table': 'shops',
                'ordering': ['order', 'created_at'],
                'indexes': [
                    models.Index(fields=['market', 'order'], name='shops_market_order_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ShopItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('price_amount', models.PositiveIntegerField(blank=True, null=True)),
                ('price_denomination', models.CharField(blank=True, choices=[('cp', 'Copper Pieces'), ('sp', 'Silver Pieces'), ('gp', 'Gold Pieces')], max_length=2)),
                ('stock', models.PositiveIntegerField(blank=True, null=True)),
                ('is_independent', models.BooleanField(default=False)),
                ('custom_data', models.JSONField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('library_item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='shop_listings', to='catalog.libraryitem')),
                ('market', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='shop_items', to='markets.market')),
                ('shop', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='shops.shop')),
            ],
            options={
                'db_table': 'shop_items',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['shop', 'created_at'], name='shop_items_shop_idx'),
                    models.Index(fields=['market'], name='shop_items_market_idx'),
                ],
            },
        ),
    ]
