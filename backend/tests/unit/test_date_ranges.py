"""
Unit tests for report period resolution.

Covers named periods (today/week/month), explicit months with 0-based
indexes, half-open boundaries and the picker options.
"""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from barbershop.core import config
from barbershop.core.exceptions import InvalidMonth, InvalidPeriod, ReportingError
from barbershop.domain.entities import DateRange
from barbershop.services.date_ranges import (
    PERIODS,
    first_instant_of_month,
    month_options,
    resolve_month,
    resolve_named,
    year_options,
)
from factories.report_factories import at

SAO_PAULO = ZoneInfo("America/Sao_Paulo")


@pytest.mark.services
class TestResolveNamed:
    def test_today_covers_one_calendar_day(self, now):
        today = resolve_named("today", now)

        assert today.start == at(2025, 8, 20)
        assert today.end == at(2025, 8, 21)

    def test_week_starts_on_monday(self, now):
        week = resolve_named("week", now)

        # 2025-08-20 is a Wednesday
        assert week.start == at(2025, 8, 18)
        assert week.start.weekday() == 0
        assert week.end == at(2025, 8, 25)

    def test_week_on_sunday_belongs_to_previous_monday(self):
        sunday = at(2025, 8, 24, 23, 59)

        week = resolve_named("week", sunday)

        assert week.start == at(2025, 8, 18)
        assert week.end == at(2025, 8, 25)

    def test_week_crossing_month_boundary(self):
        week = resolve_named("week", at(2025, 10, 1, 9))

        assert week.start == at(2025, 9, 29)
        assert week.end == at(2025, 10, 6)

    def test_month_covers_whole_month(self, now):
        month = resolve_named("month", now)

        assert month.start == at(2025, 8, 1)
        assert month.end == at(2025, 9, 1)

    def test_month_in_december_rolls_to_next_year(self):
        month = resolve_named("month", at(2024, 12, 31, 23, 59))

        assert month.start == at(2024, 12, 1)
        assert month.end == at(2025, 1, 1)

    def test_now_is_always_inside_its_ranges(self, now):
        for tag in PERIODS:
            assert resolve_named(tag, now).contains(now)

    def test_period_contains_today_and_week(self, now):
        today = resolve_named("today", now)
        week = resolve_named("week", now)
        month = resolve_named("month", now)

        assert week.start <= today.start and today.end <= week.end
        assert month.start <= today.start and today.end <= month.end

    def test_midnight_belongs_to_the_new_day(self):
        midnight = at(2025, 8, 21)

        yesterday = resolve_named("today", midnight - timedelta(microseconds=1))
        today = resolve_named("today", midnight)

        assert not yesterday.contains(midnight)
        assert today.contains(midnight)
        assert yesterday.end == today.start

    def test_ranges_keep_the_timezone_of_now(self):
        local_now = datetime(2025, 3, 10, 8, 0, tzinfo=SAO_PAULO)

        today = resolve_named("today", local_now)

        assert today.start == datetime(2025, 3, 10, tzinfo=SAO_PAULO)
        assert today.start.tzinfo is SAO_PAULO

    def test_naive_now_yields_naive_ranges(self):
        month = resolve_named("month", datetime(2025, 2, 14, 12))

        assert month.start == datetime(2025, 2, 1)
        assert month.end == datetime(2025, 3, 1)
        assert month.start.tzinfo is None

    @pytest.mark.parametrize("tag", ["year", "", "TODAY", None])
    def test_unknown_tag_raises(self, now, tag):
        with pytest.raises(InvalidPeriod) as excinfo:
            resolve_named(tag, now)

        assert excinfo.value.period == tag


@pytest.mark.services
class TestResolveMonth:
    def test_month_index_is_zero_based(self):
        january = resolve_month(2025, 0)

        assert january.start == datetime(2025, 1, 1)
        assert january.end == datetime(2025, 2, 1)

    def test_december_rolls_over(self):
        december = resolve_month(2024, 11)

        assert december.start == datetime(2024, 12, 1)
        assert december.end == datetime(2025, 1, 1)

    def test_leap_february(self):
        february = resolve_month(2024, 1)

        assert february.end - february.start == timedelta(days=29)

    def test_uses_timezone_of_now(self, now):
        march = resolve_month(2025, 2, now)

        assert march.start == at(2025, 3, 1)
        assert march.end == at(2025, 4, 1)

    def test_consecutive_months_share_boundary(self):
        for index in range(11):
            assert resolve_month(2025, index).end == resolve_month(2025, index + 1).start

    @pytest.mark.parametrize("month_index", [-1, 12, 13, 100])
    def test_out_of_range_index_raises(self, month_index):
        with pytest.raises(InvalidMonth) as excinfo:
            resolve_month(2025, month_index)

        assert excinfo.value.month_index == month_index

    @pytest.mark.parametrize("month_index", ["3", 2.0, True, None])
    def test_non_integer_index_raises(self, month_index):
        with pytest.raises(InvalidMonth):
            resolve_month(2025, month_index)

    def test_invalid_month_is_a_reporting_error(self):
        with pytest.raises(ReportingError):
            resolve_month(2025, 12)

    @pytest.mark.parametrize("year", [0, 9999, -5])
    def test_unrepresentable_year_raises(self, year):
        with pytest.raises(ReportingError):
            resolve_month(year, 5)


@pytest.mark.services
class TestPickerOptions:
    def test_month_options_are_zero_to_eleven(self):
        assert month_options() == list(range(12))

    def test_year_options_default_to_configured_count(self, now):
        years = year_options(now)

        assert len(years) == config.REPORT_YEARS_BACK
        assert years[0] == 2025
        assert years == sorted(years, reverse=True)

    def test_year_options_with_explicit_count(self, now):
        assert year_options(now, 5) == [2025, 2024, 2023, 2022, 2021]

    def test_year_options_follow_config(self, now, monkeypatch):
        monkeypatch.setattr(config, "REPORT_YEARS_BACK", 2)

        assert year_options(now) == [2025, 2024]


@pytest.mark.services
def test_first_instant_of_month(now):
    assert first_instant_of_month(now) == at(2025, 8, 1)


@pytest.mark.unit
class TestDateRange:
    def test_contains_is_half_open(self):
        date_range = DateRange(at(2025, 8, 1), at(2025, 9, 1))

        assert date_range.contains(at(2025, 8, 1))
        assert date_range.contains(at(2025, 8, 31, 23, 59, 59, 999999))
        assert not date_range.contains(at(2025, 9, 1))

    def test_empty_range_is_rejected(self):
        with pytest.raises(ValueError):
            DateRange(at(2025, 8, 1), at(2025, 8, 1))
