"""
Pure domain entities (POPOs).
No dependency on Django or the ORM.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class CurrencyCode(str, Enum):
    USD = "USD"
    VND = "VND"
    JPY = "JPY"


class GroupUnit(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class ExchangeRates:
    """
    How many JPY and VND one USD buys.

    Instances coming from outside (settings store, remote API) may carry
    invalid values; run them through ExchangeRateNormalizer before converting.
    """

    jpy_per_usd: Decimal
    vnd_per_usd: Decimal
    updated_at: str | None = None


DEFAULT_EXCHANGE_RATES = ExchangeRates(
    jpy_per_usd=Decimal("150"),
    vnd_per_usd=Decimal("25000"),
)


@dataclass(frozen=True)
class AggregationRow:
    """One purchase order, sales order or payment in a currency-agnostic shape."""

    id: str | int
    date: str
    partner: str
    currency: str
    amount: Decimal
    confirmed: bool


@dataclass(frozen=True)
class PeriodBucket:

    key: str
    label: str
    sort_key: int


@dataclass
class BucketSummary:

    key: str
    label: str
    sort_key: int
    count: int = 0
    confirmed_count: int = 0
    unconfirmed_count: int = 0
    total_usd: Decimal = Decimal("0")
    currency_totals: dict[str, Decimal] = field(default_factory=dict)
    partners: set[str] = field(default_factory=set)

    @property
    def partner_count(self) -> int:
        return len(self.partners)


@dataclass
class PartnerSummary:

    partner: str
    count: int = 0
    confirmed_count: int = 0
    unconfirmed_count: int = 0
    total_usd: Decimal = Decimal("0")
    currency_totals: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class AggregationResult:

    rates: ExchangeRates
    unit: GroupUnit
    buckets: list[BucketSummary]
    partners: list[PartnerSummary]
    count: int
    confirmed_count: int
    unconfirmed_count: int
    total_usd: Decimal
    currency_totals: dict[str, Decimal]
    partner_count: int
