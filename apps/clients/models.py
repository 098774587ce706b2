from django.core.exceptions import ValidationError
from django.db import models
import uuid
import re


REQUIRED_BENEFITS = 3


class Benefit(models.TextChoices):
    PRODUCT_DISCOUNT = 'product_discount', '3% to 8% discount on products'
    FREE_SHIPPING = 'free_shipping', 'Free shipping on deliveries'
    POINTS_PROGRAM = 'points_program', 'Points program'
    POOL_TECHNICAL_SUPPORT = 'pool_technical_support', 'Technical support for pools and products'
    PRIORITY_SERVICE = 'priority_service', 'Priority service'


class Client(models.Model):
    """Loyalty program client."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, db_index=True)

    # Address
    city = models.CharField(max_length=120)
    neighborhood = models.CharField(max_length=120)
    street = models.CharField(max_length=200)
    street_number = models.CharField(max_length=20)

    phone = models.CharField(max_length=40)
    tax_id = models.CharField(max_length=32, unique=True)
    tax_id_digits = models.CharField(max_length=32, db_index=True, editable=False)

    # Ordered list of exactly three Benefit values
    benefits = models.JSONField(default=list)

    registered_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'loyalty_clients'
        indexes = [
            models.Index(fields=['registered_at'], name='loyalty_cli_registered_idx'),
        ]
        ordering = ['-registered_at']

    def __str__(self):
        return f"{self.name} ({self.tax_id})"

    def save(self, *args, **kwargs):
        self.tax_id_digits = self.digits_only(self.tax_id)
        super().save(*args, **kwargs)

    def clean(self):
        errors = validate_benefits(self.benefits)
        if errors:
            raise ValidationError({'benefits': errors})

    @staticmethod
    def digits_only(value):
        """Strip everything but digits (tax ids are typed with or without punctuation)."""
        return re.sub(r'[^0-9]', '', value or '')

    def get_benefit_labels(self):
        labels = dict(Benefit.choices)
        return [labels.get(benefit, benefit) for benefit in self.benefits]

    def has_benefit(self, benefit):
        return benefit in (self.benefits or [])


def validate_benefits(benefits):
    """Return a list of error messages for a benefit selection (empty when valid)."""
    if not isinstance(benefits, (list, tuple)):
        return ['Benefits must be a list.']

    errors = []
    if len(benefits) != REQUIRED_BENEFITS:
        errors.append(f'Exactly {REQUIRED_BENEFITS} benefits must be selected.')

    unknown = [b for b in benefits if b not in Benefit.values]
    if unknown:
        errors.append(f"Unknown benefits: {', '.join(map(str, unknown))}.")

    if len(set(map(str, benefits))) != len(benefits):
        errors.append('The same benefit cannot be selected twice.')

    return errors
