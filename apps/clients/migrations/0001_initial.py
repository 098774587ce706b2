# Generated manually for the clients app

import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Client',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(db_index=True, max_length=200)),
                ('city', models.CharField(max_length=120)),
                ('neighborhood', models.CharField(max_length=120)),
                ('street', models.CharField(max_length=200)),
                ('street_number', models.CharField(max_length=20)),
                ('phone', models.CharField(max_length=40)),
                ('tax_id', models.CharField(max_length=32, unique=True)),
                ('tax_id_digits', models.CharField(db_index=True, editable=False, max_length=32)),
                ('benefits', models.JSONField(default=list)),
                ('registered_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'loyalty_clients',
                'ordering': ['-registered_at'],
                'indexes': [models.Index(fields=['registered_at'], name='loyalty_cli_registered_idx')],
            },
        ),
    ]
