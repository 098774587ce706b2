from rest_framework import serializers
from .models import Purchase
from .services import format_currency, parse_raw_digits


# =============================================================================
# Input Serializers
# =============================================================================

class PurchaseFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for purchase listing.

    Query Parameters:
        client_name (str): Only purchases of this client (exact name);
            without it the recent feed is returned
    """

    client_name = serializers.CharField(max_length=200, required=False)


class PurchaseCreateSerializer(serializers.Serializer):
    """
    Validate a direct ledger write.

    Fields:
        client_name (str): Client name to copy into the record
        client_tax_id (str): Client tax id to copy into the record
        amount (decimal): Non-negative amount in major units
    """

    client_name = serializers.CharField(max_length=200)
    client_tax_id = serializers.CharField(max_length=32)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)


class AmountInputSerializer(serializers.Serializer):
    """
    Validate the purchase form inputs.

    Fields:
        client (UUID): Selected client, optional for a quote
        amount_raw (str): Raw amount field contents, read as cents
    """

    client = serializers.UUIDField(required=False, allow_null=True)
    amount_raw = serializers.CharField(required=False, allow_blank=True, default='', trim_whitespace=False)

    def validate_amount_raw(self, value):
        """The typed amount must fit a purchase record."""
        max_digits = Purchase._meta.get_field('amount').max_digits
        digits = parse_raw_digits(value).canonical.replace('.', '').lstrip('0')
        if len(digits) > max_digits:
            raise serializers.ValidationError(
                f"Ensure the amount has no more than {max_digits} digits."
            )
        return value


# =============================================================================
# Output Serializers
# =============================================================================

class PurchaseSerializer(serializers.ModelSerializer):
    """Main serializer for purchases."""

    amount_display = serializers.SerializerMethodField()

    class Meta:
        model = Purchase
        fields = [
            'id',
            'client_name',
            'client_tax_id',
            'purchased_at',
            'amount',
            'amount_display',
        ]
        read_only_fields = fields

    def get_amount_display(self, obj):
        return format_currency(obj.amount)


class DiscountQuoteSerializer(serializers.Serializer):
    """Serializer for a discount band (least discounted = 3% off, most = 8% off)."""

    least_discounted = serializers.DecimalField(max_digits=14, decimal_places=2)
    most_discounted = serializers.DecimalField(max_digits=14, decimal_places=2)
    span = serializers.IntegerField()
    suggested = serializers.IntegerField()
    display = serializers.SerializerMethodField()

    def get_display(self, obj):
        return obj.as_display()


class AmountQuoteSerializer(serializers.Serializer):
    """Serializer for the purchase form preview."""

    display = serializers.CharField(allow_blank=True)
    amount = serializers.CharField(allow_blank=True)
    discount = DiscountQuoteSerializer(allow_null=True)


class PurchaseSummarySerializer(serializers.Serializer):
    """Serializer for the landing-page summary."""

    count = serializers.IntegerField()
    today_total = serializers.DecimalField(max_digits=14, decimal_places=2)
    today_total_display = serializers.SerializerMethodField()
    average = serializers.DecimalField(max_digits=14, decimal_places=2)
    average_display = serializers.SerializerMethodField()
    purchases = PurchaseSerializer(many=True)

    def get_today_total_display(self, obj):
        return format_currency(obj['today_total'])

    def get_average_display(self, obj):
        return format_currency(obj['average'])


class RegistrationResultSerializer(serializers.Serializer):
    """Serializer for the outcome of a purchase registration."""

    success = serializers.BooleanField(source='ok')
    message = serializers.CharField()
    code = serializers.CharField()
    redirect_to = serializers.CharField(allow_null=True)
    redirect_delay = serializers.FloatField()
    data = PurchaseSerializer(source='purchase', allow_null=True)
