"""
Django ORM models for persistence.
Infrastructure layer: technical storage detail.
"""

import uuid
from decimal import Decimal

from django.db import models


class BaseModel(models.Model):

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Currency(models.TextChoices):
    USD = "USD", "US Dollar"
    VND = "VND", "Vietnamese Dong"
    JPY = "JPY", "Japanese Yen"


DEFAULT_SETTINGS_KEY = "DEFAULT"


class OrganizationSettings(BaseModel):
    """
    Organisation-wide settings.
    Exchange rates are stored as "1 USD = X JPY / X VND".
    """

    settings_key = models.CharField(max_length=50, unique=True, default=DEFAULT_SETTINGS_KEY)
    jpy_per_usd = models.DecimalField(max_digits=18, decimal_places=6, null=True, blank=True)
    vnd_per_usd = models.DecimalField(max_digits=18, decimal_places=6, null=True, blank=True)
    default_currency = models.CharField(max_length=3, choices=Currency.choices, default=Currency.USD)

    class Meta:
        verbose_name_plural = "organization settings"

    def __str__(self):
        return f"{self.settings_key} | 1 USD = {self.jpy_per_usd} JPY / {self.vnd_per_usd} VND"


class PurchaseOrder(BaseModel):

    purchase_order_id = models.CharField(max_length=32, unique=True)
    order_date = models.DateField(db_index=True)
    delivery_date = models.DateField(null=True, blank=True)
    supplier = models.CharField(max_length=200, db_index=True)
    currency = models.CharField(max_length=3, choices=Currency.choices, default=Currency.USD)
    amount = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0"))
    note = models.TextField(blank=True, default="")

    ordered = models.BooleanField(default=False)
    delivered = models.BooleanField(default=False)
    paid = models.BooleanField(default=False)

    order_sent = models.BooleanField(
        default=False,
        help_text="Purchase order document issued to the supplier.",
    )
    delivery_received = models.BooleanField(default=False)
    invoice_received = models.BooleanField(default=False)

    class Meta:
        ordering = ["-order_date", "purchase_order_id"]

    def __str__(self):
        return f"{self.purchase_order_id} | {self.supplier} | {self.currency} {self.amount}"


class SalesOrder(BaseModel):

    sales_order_id = models.CharField(max_length=32, unique=True)
    order_no = models.CharField(max_length=64, blank=True, default="")
    order_date = models.DateField(db_index=True)
    delivery_date = models.DateField(null=True, blank=True)
    customer_name = models.CharField(max_length=200, db_index=True)
    customer_region = models.CharField(max_length=100, blank=True, default="")
    currency = models.CharField(max_length=3, choices=Currency.choices, default=Currency.USD)
    note = models.TextField(blank=True, default="")

    shipped = models.BooleanField(default=False)
    delivered = models.BooleanField(default=False)
    paid = models.BooleanField(default=False)

    order_received = models.BooleanField(
        default=False,
        help_text="Customer purchase order document received.",
    )
    delivery_sent = models.BooleanField(default=False)
    invoice_sent = models.BooleanField(default=False)

    class Meta:
        ordering = ["-order_date", "sales_order_id"]

    def __str__(self):
        return f"{self.sales_order_id} | {self.customer_name} | {self.currency}"


class SalesLineItem(BaseModel):

    sales_order = models.ForeignKey(
        SalesOrder,
        related_name="items",
        on_delete=models.CASCADE,
    )
    product_code = models.CharField(max_length=64)
    product_name = models.CharField(max_length=200, blank=True, default="")
    order_quantity = models.DecimalField(max_digits=18, decimal_places=3, default=Decimal("0"))
    shipped_quantity = models.DecimalField(max_digits=18, decimal_places=3, default=Decimal("0"))
    unit_price = models.DecimalField(max_digits=18, decimal_places=4, default=Decimal("0"))

    class Meta:
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.product_code} x {self.order_quantity} @ {self.unit_price}"


class PaymentStatus(models.TextChoices):
    PAID = "paid", "Paid"
    UNPAID = "unpaid", "Unpaid"


class Payment(BaseModel):

    payment_id = models.CharField(max_length=32, unique=True)
    year_month = models.CharField(
        max_length=7,
        db_index=True,
        help_text="Month partition in YYYY-MM form.",
    )
    transfer_destination_name = models.CharField(max_length=200, blank=True, default="")
    category = models.CharField(max_length=100, blank=True, default="")
    content = models.CharField(max_length=200, blank=True, default="")
    amount = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0"))
    currency = models.CharField(max_length=3, choices=Currency.choices, default=Currency.USD)
    payment_method = models.CharField(max_length=50, blank=True, default="")
    payment_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=10, choices=PaymentStatus.choices, default=PaymentStatus.UNPAID)
    note = models.TextField(blank=True, default="")
    is_fixed_cost = models.BooleanField(default=False)

    class Meta:
        ordering = ["-year_month", "payment_id"]

    def __str__(self):
        return f"{self.payment_id} | {self.year_month} | {self.category} | {self.currency} {self.amount}"
