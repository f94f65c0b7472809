from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('markets', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='PlayerSession',
            fields=[
                ('gp', models.PositiveIntegerField(default=0)),
                ('sp', models.PositiveIntegerField(default=0)),
                ('cp', models.PositiveIntegerField(default=0)),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('player_name', models.CharField(max_length=100)),
                ('entered_at', models.DateTimeField(auto_now_add=True)),
                ('last_active_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('ended_at', models.DateTimeField(blank=True, null=True)),
                ('market', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='player_sessions', to='markets.market')),
            ],
            options={
                'db_table': 'player_sessions',
                'ordering': ['-last_active_at'],
                'indexes': [
                    models.Index(fields=['market', 'last_active_at'], name='sessions_market_active_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='SessionActivity',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('kind', models.CharField(choices=[('buy', 'Bought'), ('sell', 'Sold'), ('end_session', 'Left the market')], max_length=20)),
                ('item_name', models.CharField(blank=True, max_length=200)),
                ('quantity', models.PositiveIntegerField(default=1)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('session', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='activities', to='players.playersession')),
            ],
            options={
                'db_table': 'session_activities',
                'ordering': ['created_at'],
            },
        ),
    ]
