import pytest
from datetime import date, datetime

from apps.operations.domain.models import GroupUnit, PeriodBucket
from apps.operations.domain.services import (
    DateRangeFilter,
    PeriodBucketer,
    current_month_range,
    format_date_input,
    month_keys_between,
    parse_date_input,
)


def millis(year, month, day):
    return int(datetime(year, month, day).timestamp() * 1000)


class TestParseDateInput:

    def test_parses_padded_and_unpadded(self):
        assert parse_date_input("2025-06-05") == date(2025, 6, 5)
        assert parse_date_input("2025-6-5") == date(2025, 6, 5)

    @pytest.mark.parametrize("value", [
        "", None, "2025", "2025-06", "2025-00-10", "2025-06-00", "0000-06-10",
        "abcd-ef-gh", "20250601", "2025-xx-01",
    ])
    def test_unparseable(self, value):
        assert parse_date_input(value) is None

    @pytest.mark.parametrize("value, expected", [
        ("2025-02-30", date(2025, 3, 2)),
        ("2025-13-01", date(2026, 1, 1)),
        ("2024-02-30", date(2024, 3, 1)),
        ("2025-06-31", date(2025, 7, 1)),
        ("2025-12-32", date(2026, 1, 1)),
    ])
    def test_out_of_range_parts_roll_over(self, value, expected):
        assert parse_date_input(value) == expected

    def test_format_date_input(self):
        assert format_date_input(date(2025, 1, 2)) == "2025-01-02"

    def test_current_month_range(self):
        assert current_month_range(date(2025, 6, 18)) == ("2025-06-01", "2025-06-18")


class TestDateRangeFilter:

    def test_inside_range(self):
        assert DateRangeFilter().is_within_range("2025-06-15", "2025-06-01", "2025-06-30") is True

    def test_after_range(self):
        assert DateRangeFilter().is_within_range("2025-07-01", "2025-06-01", "2025-06-30") is False

    def test_before_range(self):
        assert DateRangeFilter().is_within_range("2025-05-31", "2025-06-01", "2025-06-30") is False

    def test_bounds_are_inclusive(self):
        date_filter = DateRangeFilter()

        assert date_filter.is_within_range("2025-06-01", "2025-06-01", "2025-06-30") is True
        assert date_filter.is_within_range("2025-06-30", "2025-06-01", "2025-06-30") is True

    def test_empty_target_is_never_within(self):
        assert DateRangeFilter().is_within_range("", "2025-06-01", "2025-06-30") is False
        assert DateRangeFilter().is_within_range("", "", "") is False

    def test_empty_bounds_are_open(self):
        date_filter = DateRangeFilter()

        assert date_filter.is_within_range("1999-01-01", "", "2025-06-30") is True
        assert date_filter.is_within_range("2099-12-31", "2025-06-01", "") is True
        assert date_filter.is_within_range("2025-06-15", "", "") is True

    def test_compares_dates_not_strings(self):
        # "2025-6-9" > "2025-06-10" as strings
        assert DateRangeFilter().is_within_range("2025-6-9", "2025-06-01", "2025-06-10") is True


class TestPeriodBucketer:

    def test_day_bucket(self):
        bucket = PeriodBucketer().bucket("2025-6-5", GroupUnit.DAY)

        assert bucket == PeriodBucket(key="2025-06-05", label="2025-06-05", sort_key=millis(2025, 6, 5))

    def test_week_bucket_starts_monday(self):
        bucket = PeriodBucketer().bucket("2025-06-11", "week")

        assert bucket.key == "2025-06-09"
        assert bucket.label == "2025-06-09 〜 2025-06-15"
        assert bucket.sort_key == millis(2025, 6, 9)

    def test_same_week_same_key(self):
        bucketer = PeriodBucketer()

        assert bucketer.bucket("2025-06-11", "week").key == bucketer.bucket("2025-06-15", "week").key
        assert bucketer.bucket("2025-06-09", "week").key == bucketer.bucket("2025-06-15", "week").key
        assert bucketer.bucket("2025-06-16", "week").key == "2025-06-16"

    def test_week_crossing_year(self):
        bucket = PeriodBucketer().bucket("2026-01-01", "week")

        assert bucket.key == "2025-12-29"
        assert bucket.label == "2025-12-29 〜 2026-01-04"

    def test_week_start_is_configurable(self):
        bucket = PeriodBucketer(week_start=6).bucket("2025-06-11", "week")

        assert bucket.key == "2025-06-08"

    def test_month_bucket(self):
        bucketer = PeriodBucketer()

        assert bucketer.bucket("2025-01-31", "month").key == "2025-01"
        assert bucketer.bucket("2025-02-01", "month").key == "2025-02"
        assert bucketer.bucket("2025-02-01", "month").sort_key == millis(2025, 2, 1)
        assert bucketer.bucket("2025-02-17", "month").label == "2025-02"

    def test_every_day_of_a_week_shares_a_key(self):
        bucketer = PeriodBucketer()
        keys = {bucketer.bucket(f"2025-06-{day:02d}", "week").key for day in range(9, 16)}

        assert keys == {"2025-06-09"}

    def test_unparseable_date(self):
        assert PeriodBucketer().bucket("not-a-date", "day") is None
        assert PeriodBucketer().bucket("", "month") is None

    def test_unknown_unit(self):
        with pytest.raises(ValueError):
            PeriodBucketer().bucket("2025-06-11", "year")

    def test_sort_keys_are_chronological(self):
        bucketer = PeriodBucketer()

        assert bucketer.bucket("2025-06-09", "week").sort_key < bucketer.bucket("2025-06-16", "week").sort_key
        assert bucketer.bucket("2024-12-31", "month").sort_key < bucketer.bucket("2025-01-01", "month").sort_key


class TestMonthKeysBetween:

    def test_single_month(self):
        assert month_keys_between("2025-06-01", "2025-06-30") == ["2025-06"]

    def test_across_year(self):
        assert month_keys_between("2024-11-15", "2025-02-01") == ["2024-11", "2024-12", "2025-01", "2025-02"]

    def test_reversed_bounds(self):
        assert month_keys_between("2025-03-01", "2025-01-31") == ["2025-01", "2025-02", "2025-03"]

    def test_unparseable_bound(self):
        assert month_keys_between("", "2025-01-31") == []
