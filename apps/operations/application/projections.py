"""
Projection of domain records into AggregationRow.
Each record type names its date, partner and milestone differently.
"""

from decimal import Decimal

from apps.operations.domain.models import AggregationRow
from apps.operations.infrastructure.persistence.models import (
    Payment,
    PaymentStatus,
    PurchaseOrder,
    SalesOrder,
)

UNASSIGNED_PARTNER = "(unassigned)"


def _format_date(value) -> str:
    if not value:
        return ""
    if isinstance(value, str):
        return value
    return value.isoformat()


def project_purchase_order(order: PurchaseOrder) -> AggregationRow:
    return AggregationRow(
        id=order.purchase_order_id,
        date=_format_date(order.order_date),
        partner=order.supplier.strip(),
        currency=order.currency,
        amount=order.amount,
        confirmed=order.order_sent,
    )


def sales_order_amount(order: SalesOrder) -> Decimal:
    """Ordered quantity times unit price, summed over the line items."""
    return sum(
        (item.order_quantity * item.unit_price for item in order.items.all()),
        Decimal("0"),
    )


def project_sales_order(order: SalesOrder) -> AggregationRow:
    return AggregationRow(
        id=order.sales_order_id,
        date=_format_date(order.order_date),
        partner=order.customer_name.strip(),
        currency=order.currency,
        amount=sales_order_amount(order),
        confirmed=order.order_received,
    )


def project_payment(payment: Payment) -> AggregationRow:
    # Payments are grouped by cost category rather than by payee
    return AggregationRow(
        id=payment.payment_id,
        date=_format_date(payment.payment_date),
        partner=payment.category.strip() or UNASSIGNED_PARTNER,
        currency=payment.currency,
        amount=payment.amount,
        confirmed=payment.status == PaymentStatus.PAID,
    )
