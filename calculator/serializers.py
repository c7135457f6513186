from decimal import Decimal
from rest_framework import serializers

from .models import TurnoverEntry
from .services.tax.config import TAX_DISCLAIMER


# ======================================================
# Calculator input serializers
# Range checks are left to the tax engine so a negative amount surfaces
# as InvalidInputError rather than a silently clamped value.
class PITInputSerializer(serializers.Serializer):
    gross_annual_income = serializers.DecimalField(
        max_digits=18, decimal_places=2,
        help_text="Total annual income before deductions, in Naira"
    )
    annual_rent_paid = serializers.DecimalField(
        max_digits=18, decimal_places=2,
        required=False, default=Decimal('0.00'),
        help_text="Rent paid in the tax year, in Naira (relief only)"
    )


class VATInputSerializer(serializers.Serializer):
    amount = serializers.DecimalField(
        max_digits=18, decimal_places=2,
        help_text="Transaction amount in Naira"
    )
    inclusive = serializers.BooleanField(
        required=False, default=False,
        help_text="Whether the amount already contains VAT"
    )


# ======================================================
# Calculator result serializers
class BandChargeSerializer(serializers.Serializer):
    rate = serializers.DecimalField(max_digits=5, decimal_places=2)
    lower = serializers.DecimalField(max_digits=18, decimal_places=2)
    upper = serializers.DecimalField(max_digits=18, decimal_places=2, allow_null=True)
    amount = serializers.DecimalField(max_digits=18, decimal_places=2)
    tax = serializers.DecimalField(max_digits=18, decimal_places=2)


class PITResultSerializer(serializers.Serializer):
    """
    Personal Income Tax result (Nigeria Tax Act 2025).

    - First ₦800,000 of taxable income is exempt once income exceeds it
    - Rent relief capped at 20% of gross, ₦500,000 and rent paid
    """
    gross_income = serializers.DecimalField(max_digits=18, decimal_places=2)
    relief = serializers.DecimalField(
        max_digits=18, decimal_places=2,
        help_text="Rent relief applied in Naira"
    )
    taxable = serializers.DecimalField(
        max_digits=18, decimal_places=2,
        help_text="Income subject to tax after relief in Naira"
    )
    tax = serializers.DecimalField(
        max_digits=18, decimal_places=2,
        help_text="Personal Income Tax payable in Naira"
    )
    effective_rate = serializers.DecimalField(
        max_digits=5, decimal_places=2,
        help_text="Tax as a percentage of gross income (0-100)"
    )
    breakdown = BandChargeSerializer(many=True)
    disclaimer = serializers.SerializerMethodField()

    def get_disclaimer(self, obj) -> str:
        return TAX_DISCLAIMER


class VATResultSerializer(serializers.Serializer):
    vat_amount = serializers.DecimalField(
        max_digits=18, decimal_places=2,
        help_text="VAT component in Naira"
    )
    base_amount = serializers.DecimalField(
        max_digits=18, decimal_places=2,
        help_text="Amount excluding VAT in Naira"
    )
    total_amount = serializers.DecimalField(
        max_digits=18, decimal_places=2,
        help_text="Amount including VAT in Naira"
    )
    inclusive = serializers.BooleanField()


class TaxEstimateSerializer(serializers.Serializer):
    """
    Annual PIT estimate built from recorded business income.
    All monetary values are output in Naira (NGN).
    """
    tax_year = serializers.IntegerField()
    period_start = serializers.DateField()
    period_end = serializers.DateField()
    total_income = serializers.DecimalField(max_digits=18, decimal_places=2)
    income_entries = serializers.IntegerField()
    annual_rent_paid = serializers.DecimalField(max_digits=18, decimal_places=2)
    pit = PITResultSerializer()
    vat_payable = serializers.DecimalField(
        max_digits=18, decimal_places=2, allow_null=True,
        help_text="VAT on recorded income at 7.5% (null unless vat_enabled)"
    )


# ======================================================
# Turnover watchdog serializers
class TurnoverEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = TurnoverEntry
        fields = [
            'id', 'entry_type', 'amount', 'description', 'date',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_description(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Description is required.")
        return value

    def create(self, validated_data):
        # Automatically set user from request context
        validated_data['user'] = self.context['request'].user
        return super().create(validated_data)


class TurnoverStatusSerializer(serializers.Serializer):
    total = serializers.DecimalField(max_digits=18, decimal_places=2)
    threshold = serializers.DecimalField(max_digits=18, decimal_places=2)
    remaining = serializers.DecimalField(max_digits=18, decimal_places=2)
    percentage = serializers.DecimalField(max_digits=4, decimal_places=1)
    threshold_reached = serializers.BooleanField()
    income_count = serializers.IntegerField()
    excluded_count = serializers.IntegerField()


class DeadlineSerializer(serializers.Serializer):
    date = serializers.DateField()
    title = serializers.CharField()
    description = serializers.CharField()
    type = serializers.CharField()


class TaxEstimateQuerySerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=1, max_value=9999)
    annual_rent_paid = serializers.DecimalField(
        max_digits=18, decimal_places=2,
        required=False, default=Decimal('0.00')
    )
    vat_enabled = serializers.BooleanField(required=False, default=False)
