"""
Serializers for the operations bounded context.
Handles validation and transformation between API and ORM layers.
"""

import re
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction
from rest_framework import serializers

from apps.operations.infrastructure.persistence.models import (
    Payment,
    PurchaseOrder,
    SalesLineItem,
    SalesOrder,
)

YEAR_MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")
RATE_QUANTUM = Decimal("0.000001")
MAX_RATE = Decimal("1000000000000")


def _stored_rate(name: str, value: Decimal) -> Decimal:
    """Round a positive rate to the stored six decimals, never down to zero."""
    if value <= 0:
        raise serializers.ValidationError(f"{name} must be a positive number")
    if value >= MAX_RATE:
        raise serializers.ValidationError(f"{name} is too large")
    return max(value.quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP), RATE_QUANTUM)


class ExchangeRatesSerializer(serializers.Serializer):
    """Settings API body: {"jpyPerUsd": 150, "vndPerUsd": 25000}."""

    jpyPerUsd = serializers.DecimalField(
        source="jpy_per_usd",
        max_digits=None,
        decimal_places=None,
        coerce_to_string=False,
        error_messages={"invalid": "jpyPerUsd must be a positive number"},
    )
    vndPerUsd = serializers.DecimalField(
        source="vnd_per_usd",
        max_digits=None,
        decimal_places=None,
        coerce_to_string=False,
        error_messages={"invalid": "vndPerUsd must be a positive number"},
    )
    updatedAt = serializers.CharField(source="updated_at", read_only=True, allow_null=True)

    def validate_jpyPerUsd(self, value):
        return _stored_rate("jpyPerUsd", value)

    def validate_vndPerUsd(self, value):
        return _stored_rate("vndPerUsd", value)


class PurchaseOrderSerializer(serializers.ModelSerializer):
    class Meta:
        model = PurchaseOrder
        fields = [
            "id",
            "purchase_order_id",
            "order_date",
            "delivery_date",
            "supplier",
            "currency",
            "amount",
            "note",
            "ordered",
            "delivered",
            "paid",
            "order_sent",
            "delivery_received",
            "invoice_received",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_supplier(self, value: str) -> str:
        return value.strip()


class SalesLineItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = SalesLineItem
        fields = [
            "id",
            "product_code",
            "product_name",
            "order_quantity",
            "shipped_quantity",
            "unit_price",
        ]
        read_only_fields = ["id"]


class SalesOrderSerializer(serializers.ModelSerializer):
    items = SalesLineItemSerializer(many=True, required=False)

    class Meta:
        model = SalesOrder
        fields = [
            "id",
            "sales_order_id",
            "order_no",
            "order_date",
            "delivery_date",
            "customer_name",
            "customer_region",
            "currency",
            "note",
            "items",
            "shipped",
            "delivered",
            "paid",
            "order_received",
            "delivery_sent",
            "invoice_sent",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_customer_name(self, value: str) -> str:
        return value.strip()

    @transaction.atomic
    def create(self, validated_data):
        items = validated_data.pop("items", [])
        order = SalesOrder.objects.create(**validated_data)
        SalesLineItem.objects.bulk_create(
            [SalesLineItem(sales_order=order, **item) for item in items]
        )
        return order

    @transaction.atomic
    def update(self, instance, validated_data):
        items = validated_data.pop("items", None)
        instance = super().update(instance, validated_data)
        # Line items are replaced wholesale when provided
        if items is not None:
            instance.items.all().delete()
            SalesLineItem.objects.bulk_create(
                [SalesLineItem(sales_order=instance, **item) for item in items]
            )
        return instance


class PaymentSerializer(serializers.ModelSerializer):
    year_month = serializers.CharField(max_length=7, required=False)

    class Meta:
        model = Payment
        fields = [
            "id",
            "payment_id",
            "year_month",
            "transfer_destination_name",
            "category",
            "content",
            "amount",
            "currency",
            "payment_method",
            "payment_date",
            "status",
            "note",
            "is_fixed_cost",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_year_month(self, value: str) -> str:
        if not YEAR_MONTH_PATTERN.match(value):
            raise serializers.ValidationError("year_month must be in YYYY-MM format")
        return value

    def validate(self, attrs):
        # The month partition defaults to the payment date's month
        if not attrs.get("year_month") and not (self.instance and self.instance.year_month):
            payment_date = attrs.get("payment_date")
            if payment_date is None:
                raise serializers.ValidationError(
                    {"year_month": "year_month is required when payment_date is not set"}
                )
            attrs["year_month"] = f"{payment_date.year:04d}-{payment_date.month:02d}"
        return attrs
