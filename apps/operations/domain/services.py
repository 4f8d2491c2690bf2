"""
Domain services - Core business logic.
Currency normalization and period aggregation over transactional rows.
Everything here is pure and synchronous: no ORM, no network.
"""

import calendar
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any

from apps.operations.domain.models import (
    DEFAULT_EXCHANGE_RATES,
    AggregationResult,
    AggregationRow,
    BucketSummary,
    CurrencyCode,
    ExchangeRates,
    GroupUnit,
    PartnerSummary,
    PeriodBucket,
)

WEEK_START = calendar.MONDAY
WEEK_LABEL_SEPARATOR = " 〜 "


def to_decimal(value: Any) -> Decimal | None:
    """
    Coerce a loosely typed number into a Decimal.

    Returns None for booleans, None and anything that does not parse.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation:
            return None
    return None


def parse_date_input(value: str | None) -> date | None:
    """
    Parse a YYYY-MM-DD calendar date.

    Year, month and day must all be non-zero integers, otherwise None is
    returned. Out-of-range months and days roll over into the following
    months, so 2025-02-30 is 2025-03-02.

    Example:
        >>> parse_date_input("2025-6-5")
        datetime.date(2025, 6, 5)
        >>> parse_date_input("2025-02-30")
        datetime.date(2025, 3, 2)
        >>> parse_date_input("2025-00-05") is None
        True
    """
    if not value or not isinstance(value, str):
        return None

    parts = value.split("-")
    if len(parts) < 3:
        return None

    try:
        year, month, day = (int(part) for part in parts[:3])
    except ValueError:
        return None

    if not year or not month or not day:
        return None

    year, month_index = divmod(year * 12 + month - 1, 12)
    try:
        return date(year, month_index + 1, 1) + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def format_date_input(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def local_midnight_millis(value: date) -> int:
    return int(datetime.combine(value, time.min).timestamp() * 1000)


def current_month_range(today: date | None = None) -> tuple[str, str]:
    """First day of the current month through today, both formatted."""
    if today is None:
        today = date.today()
    return format_date_input(today.replace(day=1)), format_date_input(today)


def month_keys_between(start_date: str, end_date: str) -> list[str]:
    """
    Enumerate the YYYY-MM keys covering start_date..end_date.

    Reversed bounds are swapped; an unparseable bound yields no keys.
    """
    start = parse_date_input(start_date)
    end = parse_date_input(end_date)
    if start is None or end is None:
        return []

    start_month = start.replace(day=1)
    end_month = end.replace(day=1)
    if start_month > end_month:
        start_month, end_month = end_month, start_month

    keys = []
    cursor = start_month
    while cursor <= end_month:
        keys.append(f"{cursor.year:04d}-{cursor.month:02d}")
        if cursor.month == 12:
            cursor = cursor.replace(year=cursor.year + 1, month=1)
        else:
            cursor = cursor.replace(month=cursor.month + 1)
    return keys


class ExchangeRateNormalizer:
    """
    Guarantees a usable rate pair.

    Each rate is validated on its own; a missing, non-numeric, non-finite or
    non-positive value is replaced by the matching default. Never raises.
    """

    FIELDS = (
        ("jpy_per_usd", "jpyPerUsd"),
        ("vnd_per_usd", "vndPerUsd"),
    )

    def __init__(self, defaults: ExchangeRates = DEFAULT_EXCHANGE_RATES):
        self.defaults = defaults

    @staticmethod
    def _read(rates: Any, attribute: str, alias: str) -> Any:
        if rates is None:
            return None
        if isinstance(rates, Mapping):
            return rates.get(attribute, rates.get(alias))
        return getattr(rates, attribute, None)

    @staticmethod
    def _valid_rate(value: Any) -> Decimal | None:
        rate = to_decimal(value)
        if rate is None or not rate.is_finite() or rate <= 0:
            return None
        return rate

    def normalize(self, rates: ExchangeRates | Mapping[str, Any] | None = None) -> ExchangeRates:
        values = {}
        for attribute, alias in self.FIELDS:
            rate = self._valid_rate(self._read(rates, attribute, alias))
            values[attribute] = rate if rate is not None else getattr(self.defaults, attribute)

        updated_at = self._read(rates, "updated_at", "updatedAt")
        return ExchangeRates(updated_at=updated_at, **values)


class CurrencyConverter:
    """
    Static-rate conversion between USD and JPY/VND.

    USD and unrecognized codes are returned unchanged. No rounding happens here.
    """

    @staticmethod
    def _rate_for(currency: str | None, rates: ExchangeRates) -> Decimal | None:
        code = (currency or "").upper()
        if code == CurrencyCode.JPY.value:
            return to_decimal(rates.jpy_per_usd)
        if code == CurrencyCode.VND.value:
            return to_decimal(rates.vnd_per_usd)
        return None

    def to_usd(self, amount: Decimal | int | float, currency: str | None, rates: ExchangeRates) -> Decimal:
        value = to_decimal(amount)
        rate = self._rate_for(currency, rates)
        if rate is None:
            return value
        return value / rate

    def from_usd(self, amount: Decimal | int | float, currency: str | None, rates: ExchangeRates) -> Decimal:
        value = to_decimal(amount)
        rate = self._rate_for(currency, rates)
        if rate is None:
            return value
        return value * rate


class DateRangeFilter:

    def is_within_range(self, target: str, start_date: str = "", end_date: str = "") -> bool:
        """
        Inclusive range check on calendar dates.

        An empty (or unparseable) bound leaves that side open; an unparseable
        target is never within range.
        """
        target_date = parse_date_input(target)
        if target_date is None:
            return False

        start = parse_date_input(start_date) if start_date else None
        end = parse_date_input(end_date) if end_date else None

        if start is not None and target_date < start:
            return False
        if end is not None and target_date > end:
            return False
        return True


class PeriodBucketer:
    """Assigns dates to day, week or month buckets."""

    def __init__(self, week_start: int = WEEK_START):
        self.week_start = week_start

    def week_bounds(self, value: date) -> tuple[date, date]:
        start = value - timedelta(days=(value.weekday() - self.week_start) % 7)
        return start, start + timedelta(days=6)

    def bucket(self, value: str, unit: GroupUnit | str) -> PeriodBucket | None:
        unit = GroupUnit(unit)
        parsed = parse_date_input(value)
        if parsed is None:
            return None

        if unit is GroupUnit.DAY:
            key = format_date_input(parsed)
            return PeriodBucket(key=key, label=key, sort_key=local_midnight_millis(parsed))

        if unit is GroupUnit.WEEK:
            start, end = self.week_bounds(parsed)
            key = format_date_input(start)
            label = f"{key}{WEEK_LABEL_SEPARATOR}{format_date_input(end)}"
            return PeriodBucket(key=key, label=label, sort_key=local_midnight_millis(start))

        month_start = parsed.replace(day=1)
        key = f"{parsed.year:04d}-{parsed.month:02d}"
        return PeriodBucket(key=key, label=key, sort_key=local_midnight_millis(month_start))


def _add_currency(totals: dict[str, Decimal], currency: str, amount: Decimal) -> None:
    code = (currency or "").upper()
    totals[code] = totals.get(code, Decimal("0")) + amount


class AggregationEngine:
    """
    Composes range filtering, conversion and bucketing into summaries.

    Input rows are never mutated and no state survives a call, so the engine
    can be re-run whenever rates or rows change.
    """

    def __init__(
        self,
        converter: CurrencyConverter | None = None,
        date_filter: DateRangeFilter | None = None,
        bucketer: PeriodBucketer | None = None,
    ):
        self.converter = converter or CurrencyConverter()
        self.date_filter = date_filter or DateRangeFilter()
        self.bucketer = bucketer or PeriodBucketer()

    def aggregate(
        self,
        rows: Iterable[AggregationRow],
        rates: ExchangeRates,
        unit: GroupUnit | str = GroupUnit.MONTH,
        start_date: str = "",
        end_date: str = "",
        partners: Iterable[str] | None = None,
        confirmed_only: bool = False,
    ) -> AggregationResult:
        """
        Aggregate rows into per-bucket and per-partner USD summaries.

        Args:
            rows: Projected transactional rows
            rates: Rates used for USD conversion
            unit: Bucket size (day, week or month)
            start_date: Inclusive lower bound, empty for unbounded
            end_date: Inclusive upper bound, empty for unbounded
            partners: Restrict to these exact partner names when given
            confirmed_only: Drop rows whose confirmed flag is False

        Returns:
            AggregationResult with buckets ascending by sort key and partners
            descending by total (ties by name)
        """
        unit = GroupUnit(unit)
        selected = set(partners) if partners else None

        buckets: dict[str, BucketSummary] = {}
        partner_map: dict[str, PartnerSummary] = {}
        currency_totals: dict[str, Decimal] = {}
        total_usd = Decimal("0")
        count = confirmed_count = 0
        partner_names: set[str] = set()

        for row in rows:
            if confirmed_only and not row.confirmed:
                continue
            if selected is not None and row.partner not in selected:
                continue
            if not self.date_filter.is_within_range(row.date, start_date, end_date):
                continue

            amount = to_decimal(row.amount)
            if amount is None or not amount.is_finite():
                amount = Decimal("0")
            amount_usd = self.converter.to_usd(amount, row.currency, rates)

            count += 1
            confirmed_count += 1 if row.confirmed else 0
            total_usd += amount_usd
            _add_currency(currency_totals, row.currency, amount)
            if row.partner:
                partner_names.add(row.partner)

            partner = partner_map.get(row.partner)
            if partner is None:
                partner = partner_map[row.partner] = PartnerSummary(partner=row.partner)
            self._accumulate(partner, row, amount, amount_usd)

            period = self.bucketer.bucket(row.date, unit)
            if period is None:
                continue
            bucket = buckets.get(period.key)
            if bucket is None:
                bucket = buckets[period.key] = BucketSummary(
                    key=period.key,
                    label=period.label,
                    sort_key=period.sort_key,
                )
            self._accumulate(bucket, row, amount, amount_usd)
            if row.partner:
                bucket.partners.add(row.partner)

        return AggregationResult(
            rates=rates,
            unit=unit,
            buckets=sorted(buckets.values(), key=lambda b: b.sort_key),
            partners=sorted(partner_map.values(), key=lambda p: (-p.total_usd, p.partner)),
            count=count,
            confirmed_count=confirmed_count,
            unconfirmed_count=count - confirmed_count,
            total_usd=total_usd,
            currency_totals=currency_totals,
            partner_count=len(partner_names),
        )

    @staticmethod
    def _accumulate(summary: BucketSummary | PartnerSummary, row: AggregationRow, amount: Decimal, amount_usd: Decimal) -> None:
        summary.count += 1
        if row.confirmed:
            summary.confirmed_count += 1
        else:
            summary.unconfirmed_count += 1
        summary.total_usd += amount_usd
        _add_currency(summary.currency_totals, row.currency, amount)
