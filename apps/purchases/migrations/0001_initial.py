# Generated manually for the purchases app

import uuid
from decimal import Decimal
import django.utils.timezone
from django.core.validators import MinValueValidator
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Purchase',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('client_name', models.CharField(db_index=True, max_length=200)),
                ('client_tax_id', models.CharField(db_index=True, max_length=32)),
                ('purchased_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
            ],
            options={
                'db_table': 'loyalty_purchases',
                'ordering': ['-purchased_at'],
                'indexes': [
                    models.Index(fields=['client_name', 'purchased_at'], name='loyalty_pur_client_date_idx'),
                    models.Index(fields=['purchased_at'], name='loyalty_pur_date_idx'),
                ],
            },
        ),
    ]
