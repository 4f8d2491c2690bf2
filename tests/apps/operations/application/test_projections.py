import pytest
from decimal import Decimal
from datetime import date

from apps.operations.application.projections import (
    UNASSIGNED_PARTNER,
    project_payment,
    project_purchase_order,
    project_sales_order,
    sales_order_amount,
)
from apps.operations.infrastructure.persistence.models import (
    Payment,
    PaymentStatus,
    PurchaseOrder,
    SalesLineItem,
    SalesOrder,
)


@pytest.mark.django_db
class TestProjections:
    """Tests for the record -> AggregationRow projections."""

    def test_purchase_order(self):
        order = PurchaseOrder.objects.create(
            purchase_order_id="PO-0001",
            order_date=date(2025, 6, 5),
            supplier="  Tokyo Resin  ",
            currency="JPY",
            amount=Decimal("15000"),
            order_sent=True,
        )

        row = project_purchase_order(order)

        assert row.id == "PO-0001"
        assert row.date == "2025-06-05"
        assert row.partner == "Tokyo Resin"
        assert row.currency == "JPY"
        assert row.amount == Decimal("15000")
        assert row.confirmed is True

    def test_sales_order_amount_sums_line_items(self):
        order = SalesOrder.objects.create(
            sales_order_id="SO-0001",
            order_date=date(2025, 6, 10),
            customer_name="Hanoi Trading ",
            currency="USD",
        )
        SalesLineItem.objects.create(
            sales_order=order, product_code="V-100", order_quantity=Decimal("10"), unit_price=Decimal("2.5")
        )
        SalesLineItem.objects.create(
            sales_order=order, product_code="V-200", order_quantity=Decimal("4"), unit_price=Decimal("10")
        )

        assert sales_order_amount(order) == Decimal("65")

        row = project_sales_order(order)

        assert row.id == "SO-0001"
        assert row.partner == "Hanoi Trading"
        assert row.amount == Decimal("65")
        assert row.confirmed is False

    def test_sales_order_without_items(self):
        order = SalesOrder.objects.create(
            sales_order_id="SO-0002",
            order_date=date(2025, 6, 10),
            customer_name="Hanoi Trading",
            order_received=True,
        )

        row = project_sales_order(order)

        assert row.amount == Decimal("0")
        assert row.confirmed is True

    def test_payment(self):
        payment = Payment.objects.create(
            payment_id="PM-0001",
            year_month="2025-06",
            category=" Rent ",
            amount=Decimal("500"),
            currency="USD",
            payment_date=date(2025, 6, 25),
            status=PaymentStatus.PAID,
        )

        row = project_payment(payment)

        assert row.date == "2025-06-25"
        assert row.partner == "Rent"
        assert row.confirmed is True

    def test_payment_without_category_or_date(self):
        payment = Payment.objects.create(
            payment_id="PM-0002",
            year_month="2025-06",
            amount=Decimal("1"),
        )

        row = project_payment(payment)

        assert row.partner == UNASSIGNED_PARTNER
        assert row.date == ""
        assert row.confirmed is False
