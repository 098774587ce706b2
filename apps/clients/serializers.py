from rest_framework import serializers
from .models import Client, Benefit, REQUIRED_BENEFITS
from apps.purchases.serializers import PurchaseSerializer
from apps.purchases.services import format_currency


class ClientSerializer(serializers.ModelSerializer):
    """Main serializer for clients."""

    benefit_labels = serializers.SerializerMethodField()
    has_product_discount = serializers.SerializerMethodField()

    class Meta:
        model = Client
        fields = [
            'id',
            'name',
            'city',
            'neighborhood',
            'street',
            'street_number',
            'phone',
            'tax_id',
            'benefits',
            'benefit_labels',
            'has_product_discount',
            'registered_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_benefit_labels(self, obj):
        return obj.get_benefit_labels()

    def get_has_product_discount(self, obj):
        return obj.has_benefit(Benefit.PRODUCT_DISCOUNT)


class ClientListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for the client table."""

    class Meta:
        model = Client
        fields = [
            'id',
            'name',
            'tax_id',
            'city',
            'phone',
            'benefits',
            'registered_at',
        ]
        read_only_fields = fields


class ClientWriteSerializer(serializers.Serializer):
    """
    Validate client registration and edit payloads.

    Benefits may be sent as a ``benefits`` list or as the three separate
    ``benefit1``/``benefit2``/``benefit3`` form fields.
    """

    name = serializers.CharField(max_length=200)
    city = serializers.CharField(max_length=120)
    neighborhood = serializers.CharField(max_length=120)
    street = serializers.CharField(max_length=200)
    street_number = serializers.CharField(max_length=20)
    phone = serializers.CharField(max_length=40)
    tax_id = serializers.CharField(max_length=32)
    benefits = serializers.ListField(
        child=serializers.ChoiceField(choices=Benefit.choices),
        required=False,
    )
    benefit1 = serializers.ChoiceField(choices=Benefit.choices, required=False, write_only=True)
    benefit2 = serializers.ChoiceField(choices=Benefit.choices, required=False, write_only=True)
    benefit3 = serializers.ChoiceField(choices=Benefit.choices, required=False, write_only=True)

    def validate(self, attrs):
        """Fold the separate benefit fields into the benefits list."""
        separate = [attrs.pop(f'benefit{i}', None) for i in range(1, REQUIRED_BENEFITS + 1)]
        if 'benefits' not in attrs and any(separate):
            attrs['benefits'] = [benefit for benefit in separate if benefit]

        if not self.partial and 'benefits' not in attrs:
            raise serializers.ValidationError({
                'benefits': f'Exactly {REQUIRED_BENEFITS} benefits must be selected.'
            })

        return attrs


class ClientLookupSerializer(serializers.Serializer):
    """Validate query parameters of the single-client lookups."""

    tax_id = serializers.CharField(max_length=32, required=False)
    name = serializers.CharField(max_length=200, required=False)


class ClientPurchaseHistorySerializer(serializers.Serializer):
    """Serializer for a client's purchase history page."""

    client = ClientSerializer()
    purchases = PurchaseSerializer(many=True)
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_display = serializers.SerializerMethodField()

    def get_total_display(self, obj):
        return format_currency(obj['total'])
