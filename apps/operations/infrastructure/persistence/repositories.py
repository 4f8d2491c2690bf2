"""
Repository pattern implementation.
Abstracts database access to decouple domain logic from persistence.
"""

from decimal import Decimal
from typing import List, Optional

from apps.operations.domain.models import ExchangeRates
from apps.operations.domain.services import parse_date_input
from apps.operations.infrastructure.persistence.models import (
    DEFAULT_SETTINGS_KEY,
    OrganizationSettings,
    Payment,
    PurchaseOrder,
    SalesOrder,
)


class SettingsRepository:
    """Repository for OrganizationSettings aggregate."""

    @staticmethod
    def get(settings_key: str = DEFAULT_SETTINGS_KEY) -> Optional[OrganizationSettings]:
        """Get a settings row by key."""
        return OrganizationSettings.objects.filter(settings_key=settings_key).first()

    @staticmethod
    def get_exchange_rates(settings_key: str = DEFAULT_SETTINGS_KEY) -> Optional[ExchangeRates]:
        """
        Get stored exchange rates as a domain object, unvalidated.
        Returns None when no settings row exists yet.
        """
        item = SettingsRepository.get(settings_key)
        if item is None:
            return None
        return ExchangeRates(
            jpy_per_usd=item.jpy_per_usd,
            vnd_per_usd=item.vnd_per_usd,
            updated_at=item.updated_at.isoformat() if item.updated_at else None,
        )

    @staticmethod
    def update_exchange_rates(
        jpy_per_usd: Decimal,
        vnd_per_usd: Decimal,
        settings_key: str = DEFAULT_SETTINGS_KEY
    ) -> OrganizationSettings:
        """Upsert the exchange rates; created_at is only set on first write."""
        item, _ = OrganizationSettings.objects.update_or_create(
            settings_key=settings_key,
            defaults={
                "jpy_per_usd": jpy_per_usd,
                "vnd_per_usd": vnd_per_usd,
            },
        )
        return item


class PurchaseOrderRepository:
    """Repository for PurchaseOrder aggregate."""

    @staticmethod
    def list_in_range(start_date: str = "", end_date: str = "") -> List[PurchaseOrder]:
        """Purchase orders whose order date falls in the range; empty bounds are open."""
        queryset = PurchaseOrder.objects.all()
        start = parse_date_input(start_date)
        end = parse_date_input(end_date)
        if start:
            queryset = queryset.filter(order_date__gte=start)
        if end:
            queryset = queryset.filter(order_date__lte=end)
        return list(queryset.order_by("order_date", "purchase_order_id"))


class SalesOrderRepository:
    """Repository for SalesOrder aggregate."""

    @staticmethod
    def list_in_range(start_date: str = "", end_date: str = "") -> List[SalesOrder]:
        """Sales orders with their line items prefetched."""
        queryset = SalesOrder.objects.prefetch_related("items")
        start = parse_date_input(start_date)
        end = parse_date_input(end_date)
        if start:
            queryset = queryset.filter(order_date__gte=start)
        if end:
            queryset = queryset.filter(order_date__lte=end)
        return list(queryset.order_by("order_date", "sales_order_id"))


class PaymentRepository:
    """Repository for Payment aggregate."""

    @staticmethod
    def list_for_months(month_keys: Optional[List[str]] = None) -> List[Payment]:
        """
        Payments stored under any of the given YYYY-MM partitions.
        None means every partition; an empty list matches nothing.
        """
        queryset = Payment.objects.all()
        if month_keys is not None:
            if not month_keys:
                return []
            queryset = queryset.filter(year_month__in=month_keys)
        return list(queryset.order_by("year_month", "payment_id"))

