"""
Celery tasks for background processing.
"""

import logging
from typing import Dict

from celery import shared_task

from apps.operations.application.dto import AggregationRequestDTO
from apps.operations.application.reports import AggregationReportService, Feature
from apps.operations.domain.services import format_date_input, parse_date_input

logger = logging.getLogger(__name__)


@shared_task(name="build_aggregation_report")
def build_aggregation_report(
    feature: str,
    date_from_str: str,
    date_to_str: str,
    unit: str = "month",
    display_currency: str = "USD",
) -> Dict:
    """
    Build an aggregation report for one feature and date range.

    Args:
        feature: purchase_orders, sales_orders or payments
        date_from_str: Start date in YYYY-MM-DD format
        date_to_str: End date in YYYY-MM-DD format
        unit: day, week or month
        display_currency: USD, JPY or VND

    Returns:
        Dict with operation results and the serialized report
    """
    if feature not in Feature.CHOICES:
        return {
            "success": False,
            "message": f"Unknown feature '{feature}'. Use one of: {', '.join(Feature.CHOICES)}",
        }

    date_from = parse_date_input(date_from_str)
    date_to = parse_date_input(date_to_str)
    if date_from is None or date_to is None:
        return {
            "success": False,
            "message": "Invalid date format. Use YYYY-MM-DD",
        }

    if date_from > date_to:
        return {
            "success": False,
            "message": "date_from must be before or equal to date_to",
        }

    logger.info("Building %s report from %s to %s by %s", feature, date_from_str, date_to_str, unit)

    request = AggregationRequestDTO(
        feature=feature,
        start_date=format_date_input(date_from),
        end_date=format_date_input(date_to),
        unit=unit,
        display_currency=display_currency,
    )
    try:
        report = AggregationReportService().build(request)
    except ValueError as e:
        return {
            "success": False,
            "message": str(e),
        }

    return {
        "success": True,
        "report": report.to_dict(),
    }
