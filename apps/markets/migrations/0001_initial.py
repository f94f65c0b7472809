from django.conf import settings
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
            name='Market',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('access_code', models.CharField(editable=False, max_length=64, unique=True)),
                ('is_active', models.BooleanField(default=False)),
                ('active_until', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('dm', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='markets', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'markets',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['dm', 'created_at'], name='markets_dm_created_idx'),
                    models.Index(fields=['is_active', 'active_until'], name='markets_active_until_idx'),
                ],
            },
        ),
    ]
