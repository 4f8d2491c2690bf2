import pytest
from decimal import Decimal
from datetime import date
from io import StringIO
from unittest.mock import MagicMock, patch

from django.core.management import call_command
from django.core.management.base import CommandError

from apps.operations.application.tasks import build_aggregation_report
from apps.operations.infrastructure.persistence.models import OrganizationSettings, PurchaseOrder


@pytest.fixture
def purchase_orders(db):
    PurchaseOrder.objects.create(
        purchase_order_id="PO-1",
        order_date=date(2025, 6, 5),
        supplier="Tokyo Resin",
        currency="JPY",
        amount=Decimal("15000"),
        order_sent=True,
    )
    PurchaseOrder.objects.create(
        purchase_order_id="PO-2",
        order_date=date(2025, 6, 20),
        supplier="Tokyo Resin",
        currency="USD",
        amount=Decimal("100"),
    )


@pytest.mark.django_db
class TestBuildAggregationReportTask:
    """Tests for the build_aggregation_report Celery task."""

    def test_success_with_default_rates(self, purchase_orders):
        result = build_aggregation_report("purchase_orders", "2025-06-01", "2025-06-30")

        assert result["success"] is True
        report = result["report"]
        assert report["count"] == 2
        assert report["total_usd"] == "200.000000"
        assert report["buckets"][0]["key"] == "2025-06"
        assert report["rate_note"] == "1 USD = 150 JPY / 25,000 VND"

    def test_uses_stored_rates(self, purchase_orders):
        OrganizationSettings.objects.create(jpy_per_usd=Decimal("100"), vnd_per_usd=Decimal("25000"))

        result = build_aggregation_report("purchase_orders", "2025-06-01", "2025-06-30")

        assert result["report"]["total_usd"] == "250.000000"

    def test_display_currency_and_unit(self, purchase_orders):
        result = build_aggregation_report("purchase_orders", "2025-06-01", "2025-06-30", "week", "JPY")

        report = result["report"]
        assert report["display_currency"] == "JPY"
        assert report["total"] == "30000.000000"
        assert [b["key"] for b in report["buckets"]] == ["2025-06-02", "2025-06-16"]

    def test_unknown_feature(self):
        result = build_aggregation_report("invoices", "2025-06-01", "2025-06-30")

        assert result["success"] is False
        assert "Unknown feature" in result["message"]

    def test_invalid_date(self):
        result = build_aggregation_report("payments", "2025/06/01", "2025-06-30")

        assert result["success"] is False
        assert "Invalid date format" in result["message"]

    def test_reversed_dates(self):
        result = build_aggregation_report("payments", "2025-07-01", "2025-06-30")

        assert result["success"] is False
        assert "date_from must be before" in result["message"]

    def test_compact_dates_are_rejected(self, purchase_orders):
        result = build_aggregation_report("purchase_orders", "20250601", "20250630")

        assert result["success"] is False
        assert "Invalid date format" in result["message"]

    def test_range_is_passed_through_normalized(self, purchase_orders):
        PurchaseOrder.objects.create(
            purchase_order_id="PO-OLD",
            order_date=date(2024, 6, 5),
            supplier="Tokyo Resin",
            currency="USD",
            amount=Decimal("909"),
        )

        result = build_aggregation_report("purchase_orders", "2025-6-1", "2025-06-31")

        report = result["report"]
        assert report["start_date"] == "2025-06-01"
        assert report["end_date"] == "2025-07-01"
        assert report["count"] == 2

    def test_invalid_unit(self):
        result = build_aggregation_report("payments", "2025-06-01", "2025-06-30", unit="year")

        assert result["success"] is False


@pytest.mark.django_db
class TestBuildReportCommand:
    """Tests for the build_report management command."""

    def test_sync_prints_summary(self, purchase_orders):
        out = StringIO()

        call_command(
            "build_report",
            "--feature=purchase_orders",
            "--from=2025-06-01",
            "--to=2025-06-30",
            "--sync",
            stdout=out,
        )

        output = out.getvalue()
        assert "2 rows, total USD 200" in output
        assert "2025-06:" in output

    @patch('apps.operations.management.commands.build_report.build_aggregation_report')
    def test_dispatches_task(self, mock_task):
        mock_task.delay.return_value = MagicMock(id="task-123")
        out = StringIO()

        call_command(
            "build_report",
            "--feature=payments",
            "--from=2025-06-01",
            "--to=2025-06-30",
            "--currency=JPY",
            stdout=out,
        )

        mock_task.delay.assert_called_once_with("payments", "2025-06-01", "2025-06-30", "month", "JPY")
        assert "task-123" in out.getvalue()

    @patch('apps.operations.management.commands.build_report.build_aggregation_report')
    def test_dispatches_normalized_dates(self, mock_task):
        mock_task.delay.return_value = MagicMock(id="task-456")

        call_command("build_report", "--feature=payments", "--from=2025-6-1", "--to=2025-6-30", stdout=StringIO())

        mock_task.delay.assert_called_once_with("payments", "2025-06-01", "2025-06-30", "month", "USD")

    def test_invalid_date(self):
        with pytest.raises(CommandError, match="Invalid date format"):
            call_command("build_report", "--feature=payments", "--from=06/01/2025", "--to=2025-06-30", "--sync")

    def test_compact_dates_are_rejected(self):
        with pytest.raises(CommandError, match="Invalid date format"):
            call_command("build_report", "--feature=payments", "--from=20250601", "--to=20250630", "--sync")

    def test_reversed_dates(self):
        with pytest.raises(CommandError, match="date_from must be before"):
            call_command("build_report", "--feature=payments", "--from=2025-07-01", "--to=2025-06-30", "--sync")
