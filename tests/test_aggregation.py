from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from expense_calculator.aggregation import (
    AggregationResult,
    CostConfiguration,
    DateInterval,
    Weekday,
    aggregate,
    iter_days,
    week_anchor,
    weekday_of,
)

MONDAY = date(2024, 1, 1)


def _flat(workday=100, weekend=50):
    return CostConfiguration.flat(workday, weekend)


def _by_weekday(result):
    return {bucket.weekday: bucket for bucket in result.day_buckets}


def test_full_week_flat_rates():
    result = aggregate(DateInterval(MONDAY, date(2024, 1, 7)), _flat())
    buckets = _by_weekday(result)

    assert [b.weekday for b in result.day_buckets] == list(Weekday)
    assert all(b.occurrence_count == 1 for b in result.day_buckets)
    for day in (Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY):
        assert buckets[day].total_cost == 100
    assert buckets[Weekday.SATURDAY].total_cost == 50
    assert buckets[Weekday.SUNDAY].total_cost == 50
    assert result.total_cost == 600
    assert result.total_week_count == 1
    week = result.week_buckets[0]
    assert week.week_index == 1
    assert week.day_count == 7
    assert week.total_cost == 600
    assert week.start_date == MONDAY
    assert week.end_date == date(2024, 1, 7)


def test_two_full_weeks_starting_monday():
    result = aggregate(DateInterval(MONDAY, MONDAY + timedelta(days=13)), _flat())
    assert result.total_week_count == 2
    assert [w.day_count for w in result.week_buckets] == [7, 7]
    assert [w.week_index for w in result.week_buckets] == [1, 2]
    assert result.week_buckets[1].start_date == date(2024, 1, 8)


def test_custom_rates_only_fridays_charged():
    rates = {day: 0 for day in Weekday}
    rates[Weekday.FRIDAY] = 200
    # 1-22 February 2024 contains Fridays 2, 9 and 16
    result = aggregate(DateInterval(date(2024, 2, 1), date(2024, 2, 22)), CostConfiguration.custom(rates))
    buckets = _by_weekday(result)

    assert result.total_cost == 600
    assert buckets[Weekday.FRIDAY].occurrence_count == 3
    assert buckets[Weekday.FRIDAY].total_cost == 600
    assert all(b.total_cost == 0 for day, b in buckets.items() if day is not Weekday.FRIDAY)


@pytest.mark.parametrize(
    "interval",
    [
        DateInterval(date(2024, 1, 10), date(2024, 1, 9)),
        DateInterval(None, date(2024, 1, 9)),
        DateInterval(date(2024, 1, 9), None),
        DateInterval(),
        None,
    ],
)
def test_malformed_interval_yields_empty_result(interval):
    result = aggregate(interval, _flat())
    assert result.is_empty
    assert result.day_buckets == ()
    assert result.week_buckets == ()
    assert result.total_cost == 0
    assert result.total_day_count == 0
    assert result.total_week_count == 0


def test_missing_configuration_yields_empty_result():
    assert aggregate(DateInterval(MONDAY, MONDAY), None) == AggregationResult.empty()


def test_single_day_interval():
    wednesday = date(2024, 1, 3)
    result = aggregate(DateInterval(wednesday, wednesday), _flat())

    incremented = [b for b in result.day_buckets if b.occurrence_count]
    assert len(incremented) == 1
    assert incremented[0].weekday is Weekday.WEDNESDAY
    assert result.total_week_count == 1
    assert result.week_buckets[0].day_count == 1
    assert result.total_cost == 100


def test_totals_agree_for_many_intervals():
    config = CostConfiguration.custom({
        Weekday.MONDAY: "0.1",
        Weekday.TUESDAY: 0.2,
        Weekday.WEDNESDAY: 3,
        Weekday.THURSDAY: "12.35",
        Weekday.FRIDAY: 0,
        Weekday.SATURDAY: 7.7,
        Weekday.SUNDAY: "0.3",
    })
    for offset in range(7):
        start = MONDAY + timedelta(days=offset)
        for length in (1, 2, 6, 7, 8, 15, 31, 60):
            end = start + timedelta(days=length - 1)
            result = aggregate(DateInterval(start, end), config)

            day_total = sum(b.total_cost for b in result.day_buckets)
            week_total = sum(w.total_cost for w in result.week_buckets)
            assert day_total == week_total == result.total_cost

            expected_days = (end - start).days + 1
            assert sum(b.occurrence_count for b in result.day_buckets) == expected_days
            assert sum(w.day_count for w in result.week_buckets) == expected_days
            assert result.total_day_count == expected_days


def test_fractional_rates_sum_exactly():
    result = aggregate(DateInterval(MONDAY, date(2024, 1, 3)), CostConfiguration.flat(0.1, 0))
    assert result.total_cost == Decimal("0.3")
    assert result.week_buckets[0].total_cost == Decimal("0.3")


def test_aggregate_is_idempotent():
    interval = DateInterval(date(2024, 3, 5), date(2024, 4, 17))
    config = _flat(12.5, 3)
    assert aggregate(interval, config) == aggregate(interval, config)


def test_weekend_never_charged_workday_rate():
    result = aggregate(DateInterval(date(2024, 1, 1), date(2024, 3, 31)), _flat(workday=999, weekend=1))
    for bucket in result.day_buckets:
        if bucket.weekday in (Weekday.SATURDAY, Weekday.SUNDAY):
            assert bucket.unit_cost == 1
        else:
            assert bucket.unit_cost == 999


def test_truncated_first_and_last_weeks():
    # Thursday 1 February to Thursday 22 February 2024
    result = aggregate(DateInterval(date(2024, 2, 1), date(2024, 2, 22)), _flat())

    assert [w.day_count for w in result.week_buckets] == [4, 7, 7, 4]
    first, last = result.week_buckets[0], result.week_buckets[-1]
    assert (first.start_date, first.end_date) == (date(2024, 2, 1), date(2024, 2, 4))
    assert (last.start_date, last.end_date) == (date(2024, 2, 19), date(2024, 2, 22))
    # Thu + Fri at 100, Sat + Sun at 50
    assert first.total_cost == 300
    assert first.average_unit_cost == 75


def test_week_index_starts_at_one_regardless_of_calendar_week():
    result = aggregate(DateInterval(date(2024, 11, 30), date(2024, 12, 2)), _flat())
    assert [w.week_index for w in result.week_buckets] == [1, 2]
    assert [w.day_count for w in result.week_buckets] == [2, 1]


def test_year_boundary_week_stays_together():
    # Monday 30 December 2024 to Sunday 5 January 2025 is one Mon-Sun week
    result = aggregate(DateInterval(date(2024, 12, 30), date(2025, 1, 5)), _flat())
    assert result.total_week_count == 1
    assert result.week_buckets[0].day_count == 7


def test_missing_custom_rates_default_to_zero():
    config = CostConfiguration.custom({"vendredi": 10})
    assert config.rate_for(Weekday.MONDAY) == 0
    assert config.rate_for(Weekday.FRIDAY) == 10


def test_negative_rates_are_applied_as_given():
    config = _flat(workday=-10, weekend=5)
    result = aggregate(DateInterval(MONDAY, date(2024, 1, 7)), config)
    assert result.total_cost == -40
    assert config.negative_rate_days() == [
        Weekday.MONDAY,
        Weekday.TUESDAY,
        Weekday.WEDNESDAY,
        Weekday.THURSDAY,
        Weekday.FRIDAY,
    ]


def test_flat_mode_ignores_custom_rates():
    config = CostConfiguration(
        use_custom_rates=False,
        workday_rate=10,
        weekend_rate=20,
        custom_rates={Weekday.MONDAY: 1000},
    )
    assert config.rate_for(Weekday.MONDAY) == 10


def test_datetime_endpoints_are_reduced_to_dates():
    interval = DateInterval(datetime(2024, 1, 1, 23, 30), datetime(2024, 1, 2, 0, 15))
    assert interval.start == date(2024, 1, 1)
    assert interval.day_count == 2
    assert aggregate(interval, _flat()).total_day_count == 2


def test_weekday_lookup_and_week_anchor():
    assert weekday_of(date(2024, 1, 7)) is Weekday.SUNDAY
    assert weekday_of(date(2024, 1, 6)) is Weekday.SATURDAY
    assert weekday_of(MONDAY) is Weekday.MONDAY
    assert week_anchor(date(2024, 1, 7)) == MONDAY
    assert week_anchor(MONDAY) == MONDAY
    assert list(iter_days(MONDAY, MONDAY)) == [MONDAY]


def test_weekday_parse():
    assert Weekday.parse("Vendredi") is Weekday.FRIDAY
    assert Weekday.parse("friday") is Weekday.FRIDAY
    assert Weekday.parse(Weekday.SUNDAY) is Weekday.SUNDAY
    with pytest.raises(ValueError):
        Weekday.parse("funday")


def test_unparseable_and_nan_rates_count_as_zero():
    config = CostConfiguration.flat('abc', float('nan'))
    assert config.workday_rate == 0
    assert config.weekend_rate == 0
    assert config.negative_rate_days() == []

    custom = CostConfiguration.custom({Weekday.MONDAY: 'NaN', Weekday.FRIDAY: '12.5'})
    assert custom.rate_for(Weekday.MONDAY) == 0
    assert custom.rate_for(Weekday.FRIDAY) == Decimal('12.5')
    result = aggregate(DateInterval(MONDAY, date(2024, 1, 7)), custom)
    assert result.total_cost == Decimal('12.5')
