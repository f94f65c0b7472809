from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='LibraryItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(db_index=True, max_length=200)),
                ('item_type', models.CharField(choices=[('weapon', 'Weapon'), ('armor', 'Armor'), ('tool', 'Tool'), ('consumable', 'Consumable'), ('gear', 'Adventuring Gear'), ('magic', 'Magic Item'), ('treasure', 'Treasure'), ('other', 'Other')], default='gear', max_length=20)),
                ('description', models.TextField(blank=True)),
                ('weight', models.FloatField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(0)])),
                ('cost_amount', models.PositiveIntegerField(blank=True, null=True)),
                ('cost_denomination', models.CharField(blank=True, choices=[('cp', 'Copper Pieces'), ('sp', 'Silver Pieces'), ('gp', 'Gold Pieces')], max_length=2)),
                ('source', models.CharField(choices=[('official', 'Official'), ('custom', 'Custom'), ('modified', 'Modified Official')], default='custom', max_length=20)),
                ('official_id', models.CharField(blank=True, max_length=100)),
                ('ruleset', models.CharField(blank=True, choices=[('2014', '2014 Rules'), ('2024', '2024 Rules'), ('homebrew', 'Homebrew')], max_length=10)),
                ('tags', models.JSONField(blank=True, default=list)),
                ('image_url', models.URLField(blank=True, max_length=500)),
                ('details', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('dm', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='library_items', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'library_items',
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['dm', 'item_type'], name='library_dm_type_idx'),
                    models.Index(fields=['dm', 'source'], name='library_dm_source_idx'),
                ],
            },
        ),
    ]
