from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid


class Purchase(models.Model):
    """
    Loyalty purchase record.

    Client name and tax id are copied at creation time rather than linked,
    so later edits to the client leave the purchase history untouched.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Denormalized client identity
    client_name = models.CharField(max_length=200, db_index=True)
    client_tax_id = models.CharField(max_length=32, db_index=True)

    purchased_at = models.DateTimeField(default=timezone.now)
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    class Meta:
        db_table = 'loyalty_purchases'
        indexes = [
            models.Index(fields=['client_name', 'purchased_at'], name='loyalty_pur_client_date_idx'),
            models.Index(fields=['purchased_at'], name='loyalty_pur_date_idx'),
        ]
        ordering = ['-purchased_at']

    def __str__(self):
        return f"{self.client_name} - {self.amount} ({self.purchased_at:%Y-%m-%d %H:%M})"
