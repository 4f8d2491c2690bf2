import uuid
from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="OrganizationSettings",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("settings_key", models.CharField(default="DEFAULT", max_length=50, unique=True)),
                ("jpy_per_usd", models.DecimalField(blank=True, decimal_places=6, max_digits=18, null=True)),
                ("vnd_per_usd", models.DecimalField(blank=True, decimal_places=6, max_digits=18, null=True)),
                (
                    "default_currency",
                    models.CharField(
                        choices=[("USD", "US Dollar"), ("VND", "Vietnamese Dong"), ("JPY", "Japanese Yen")],
                        default="USD",
                        max_length=3,
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "organization settings",
            },
        ),
        migrations.CreateModel(
            name="PurchaseOrder",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("purchase_order_id", models.CharField(max_length=32, unique=True)),
                ("order_date", models.DateField(db_index=True)),
                ("delivery_date", models.DateField(blank=True, null=True)),
                ("supplier", models.CharField(db_index=True, max_length=200)),
                (
                    "currency",
                    models.CharField(
                        choices=[("USD", "US Dollar"), ("VND", "Vietnamese Dong"), ("JPY", "Japanese Yen")],
                        default="USD",
                        max_length=3,
                    ),
                ),
                ("amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=18)),
                ("note", models.TextField(blank=True, default="")),
                ("ordered", models.BooleanField(default=False)),
                ("delivered", models.BooleanField(default=False)),
                ("paid", models.BooleanField(default=False)),
                (
                    "order_sent",
                    models.BooleanField(default=False, help_text="Purchase order document issued to the supplier."),
                ),
                ("delivery_received", models.BooleanField(default=False)),
                ("invoice_received", models.BooleanField(default=False)),
            ],
            options={
                "ordering": ["-order_date", "purchase_order_id"],
            },
        ),
        migrations.CreateModel(
            name="SalesOrder",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("sales_order_id", models.CharField(max_length=32, unique=True)),
                ("order_no", models.CharField(blank=True, default="", max_length=64)),
                ("order_date", models.DateField(db_index=True)),
                ("delivery_date", models.DateField(blank=True, null=True)),
                ("customer_name", models.CharField(db_index=True, max_length=200)),
                ("customer_region", models.CharField(blank=True, default="", max_length=100)),
                (
                    "currency",
                    models.CharField(
                        choices=[("USD", "US Dollar"), ("VND", "Vietnamese Dong"), ("JPY", "Japanese Yen")],
                        default="USD",
                        max_length=3,
                    ),
                ),
                ("note", models.TextField(blank=True, default="")),
                ("shipped", models.BooleanField(default=False)),
                ("delivered", models.BooleanField(default=False)),
                ("paid", models.BooleanField(default=False)),
                (
                    "order_received",
                    models.BooleanField(default=False, help_text="Customer purchase order document received."),
                ),
                ("delivery_sent", models.BooleanField(default=False)),
                ("invoice_sent", models.BooleanField(default=False)),
            ],
            options={
                "ordering": ["-order_date", "sales_order_id"],
            },
        ),
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("payment_id", models.CharField(max_length=32, unique=True)),
                (
                    "year_month",
                    models.CharField(db_index=True, help_text="Month partition in YYYY-MM form.", max_length=7),
                ),
                ("transfer_destination_name", models.CharField(blank=True, default="", max_length=200)),
                ("category", models.CharField(blank=True, default="", max_length=100)),
                ("content", models.CharField(blank=True, default="", max_length=200)),
                ("amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=18)),
                (
                    "currency",
                    models.CharField(
                        choices=[("USD", "US Dollar"), ("VND", "Vietnamese Dong"), ("JPY", "Japanese Yen")],
                        default="USD",
                        max_length=3,
                    ),
                ),
                ("payment_method", models.CharField(blank=True, default="", max_length=50)),
                ("payment_date", models.DateField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("paid", "Paid"), ("unpaid", "Unpaid")],
                        default="unpaid",
                        max_length=10,
                    ),
                ),
                ("note", models.TextField(blank=True, default="")),
                ("is_fixed_cost", models.BooleanField(default=False)),
            ],
            options={
                "ordering": ["-year_month", "payment_id"],
            },
        ),
        migrations.CreateModel(
            name="SalesLineItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("product_code", models.CharField(max_length=64)),
                ("product_name", models.CharField(blank=True, default="", max_length=200)),
                ("order_quantity", models.DecimalField(decimal_places=3, default=Decimal("0"), max_digits=18)),
                ("shipped_quantity", models.DecimalField(decimal_places=3, default=Decimal("0"), max_digits=18)),
                ("unit_price", models.DecimalField(decimal_places=4, default=Decimal("0"), max_digits=18)),
                (
                    "sales_order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="operations.salesorder",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
            },
        ),
    ]
