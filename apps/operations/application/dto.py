"""
Data Transfer Objects for the application layer.
DTOs decouple internal domain models from external API contracts.
"""

from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional


def _jsonable(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value.quantize(Decimal("0.000001")))
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


@dataclass
class ExchangeRatesDTO:
    """Exchange rates data transfer object."""
    jpy_per_usd: Decimal
    vnd_per_usd: Decimal
    updated_at: Optional[str] = None


@dataclass
class AggregationRequestDTO:
    """Request DTO for an aggregation report."""
    feature: str
    start_date: str
    end_date: str
    unit: str = "month"
    display_currency: str = "USD"
    partners: List[str] = field(default_factory=list)
    confirmed_only: bool = False


@dataclass
class BucketReportDTO:
    """One period row of the report."""
    key: str
    label: str
    sort_key: int
    count: int
    partner_count: int
    confirmed_count: int
    unconfirmed_count: int
    total_usd: Decimal
    total: Decimal
    average: Decimal
    currency_totals: Dict[str, Decimal]


@dataclass
class PartnerReportDTO:
    """One partner row of the report."""
    partner: str
    count: int
    confirmed_count: int
    unconfirmed_count: int
    total_usd: Decimal
    total: Decimal
    average: Decimal
    currency_totals: Dict[str, Decimal]


@dataclass
class ChartSliceDTO:
    """Pie chart slice; percent of the grand total."""
    label: str
    value: Decimal
    percent: Decimal


@dataclass
class AggregationReportDTO:
    """Result DTO for an aggregation report, totals in display_currency."""
    feature: str
    start_date: str
    end_date: str
    unit: str
    display_currency: str
    rates: ExchangeRatesDTO
    rate_note: str
    count: int
    partner_count: int
    confirmed_count: int
    unconfirmed_count: int
    total_usd: Decimal
    total: Decimal
    average: Decimal
    formatted_total: str
    currency_totals: Dict[str, Decimal]
    buckets: List[BucketReportDTO]
    partners: List[PartnerReportDTO]
    chart_slices: List[ChartSliceDTO]

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation; decimals become strings with 6 places."""
        return _jsonable(asdict(self))
