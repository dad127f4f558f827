"""Date-range-to-cost aggregation for the expense calculator.

This module holds the only computational logic of the application: given an
inclusive date interval and a cost configuration it enumerates the calendar
days, buckets them by weekday and by Monday-anchored week, and produces the
totals rendered by the page.  Everything here is a pure function of its
inputs so that it can be unit tested and reused outside Streamlit (see
``scripts/expense_report.py``).

Amounts are carried as :class:`decimal.Decimal` so that the weekday totals
and the weekly totals, which partition the same day costs in a different
order, always add up to exactly the same grand total.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

from loguru import logger

Rate = Union[int, float, str, Decimal]

ZERO = Decimal("0")


class Weekday(Enum):
    """Days of the week, keyed in Monday-first order with their French label."""

    MONDAY = "lundi"
    TUESDAY = "mardi"
    WEDNESDAY = "mercredi"
    THURSDAY = "jeudi"
    FRIDAY = "vendredi"
    SATURDAY = "samedi"
    SUNDAY = "dimanche"

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_weekend(self) -> bool:
        return self in (Weekday.SATURDAY, Weekday.SUNDAY)

    @classmethod
    def parse(cls, value: Union["Weekday", str]) -> "Weekday":
        """Resolve an enum member, an enum name or a French label."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        try:
            return cls[text.upper()]
        except KeyError:
            pass
        try:
            return cls(text.lower())
        except ValueError:
            raise ValueError(f"Unknown weekday: {value!r}") from None


# Index 0 is Sunday, matching ``date.isoweekday() % 7``.
_WEEKDAYS_FROM_SUNDAY: Tuple[Weekday, ...] = (
    Weekday.SUNDAY,
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
)


def _to_decimal(value: Optional[Rate]) -> Decimal:
    """Rate as a Decimal; missing, unparseable or non-finite rates count as zero."""
    if value is None:
        return ZERO
    if isinstance(value, float):
        value = repr(value)
    try:
        number = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return ZERO
    return number if number.is_finite() else ZERO


def _to_date(value: Optional[Union[date, datetime]]) -> Optional[date]:
    # pandas.Timestamp subclasses datetime, so this covers widget values too
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class CostConfiguration:
    """Cost model: flat workday/weekend rates or one rate per weekday.

    ``use_custom_rates`` selects which of the two is applied.  Rates are not
    validated; a negative rate is applied as given.
    """

    use_custom_rates: bool = False
    workday_rate: Decimal = ZERO
    weekend_rate: Decimal = ZERO
    custom_rates: Mapping[Weekday, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "workday_rate", _to_decimal(self.workday_rate))
        object.__setattr__(self, "weekend_rate", _to_decimal(self.weekend_rate))
        rates = {day: ZERO for day in Weekday}
        for key, rate in (self.custom_rates or {}).items():
            rates[Weekday.parse(key)] = _to_decimal(rate)
        object.__setattr__(self, "custom_rates", rates)

    @classmethod
    def flat(cls, workday_rate: Optional[Rate] = None, weekend_rate: Optional[Rate] = None) -> "CostConfiguration":
        return cls(
            use_custom_rates=False,
            workday_rate=_to_decimal(workday_rate),
            weekend_rate=_to_decimal(weekend_rate),
        )

    @classmethod
    def custom(cls, rates: Mapping[Union[Weekday, str], Optional[Rate]]) -> "CostConfiguration":
        return cls(use_custom_rates=True, custom_rates=dict(rates))

    def rate_for(self, weekday: Weekday) -> Decimal:
        """Unit cost charged for one occurrence of ``weekday``."""
        if self.use_custom_rates:
            return self.custom_rates[weekday]
        return self.weekend_rate if weekday.is_weekend else self.workday_rate

    def negative_rate_days(self) -> List[Weekday]:
        return [day for day in Weekday if self.rate_for(day) < 0]


@dataclass(frozen=True)
class DateInterval:
    """Inclusive calendar interval; either endpoint may still be missing."""

    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _to_date(self.start))
        object.__setattr__(self, "end", _to_date(self.end))

    @property
    def is_valid(self) -> bool:
        return self.start is not None and self.end is not None and self.start <= self.end

    @property
    def day_count(self) -> int:
        if not self.is_valid:
            return 0
        return (self.end - self.start).days + 1


@dataclass(frozen=True)
class DayBucket:
    weekday: Weekday
    occurrence_count: int
    unit_cost: Decimal
    total_cost: Decimal


@dataclass(frozen=True)
class WeekBucket:
    week_index: int
    start_date: date
    end_date: date
    day_count: int
    average_unit_cost: Decimal
    total_cost: Decimal


@dataclass(frozen=True)
class AggregationResult:
    day_buckets: Tuple[DayBucket, ...] = ()
    week_buckets: Tuple[WeekBucket, ...] = ()
    total_cost: Decimal = ZERO
    total_day_count: int = 0
    total_week_count: int = 0
    start: Optional[date] = None
    end: Optional[date] = None

    @classmethod
    def empty(cls) -> "AggregationResult":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.total_day_count == 0


def weekday_of(day: date) -> Weekday:
    return _WEEKDAYS_FROM_SUNDAY[day.isoweekday() % 7]


def week_anchor(day: date) -> date:
    """Monday of the Mon–Sun week containing ``day``."""
    return day - timedelta(days=day.weekday())


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date from ``start`` to ``end`` inclusive, ascending."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


@dataclass
class _WeekAccumulator:
    index: int
    anchor: date
    first_day: date
    last_day: date
    day_count: int = 0
    total: Decimal = ZERO

    def to_bucket(self) -> WeekBucket:
        average = self.total / self.day_count if self.day_count else ZERO
        return WeekBucket(
            week_index=self.index,
            start_date=self.first_day,
            end_date=self.last_day,
            day_count=self.day_count,
            average_unit_cost=average,
            total_cost=self.total,
        )


def aggregate(
    interval: Optional[DateInterval],
    config: Optional[CostConfiguration],
) -> AggregationResult:
    """Compute the weekday and weekly cost breakdown of ``interval``.

    An interval with a missing endpoint, an end before its start, or a
    missing configuration yields :meth:`AggregationResult.empty` rather
    than an error.
    """
    if interval is None or config is None or not interval.is_valid:
        return AggregationResult.empty()

    counts: Dict[Weekday, int] = {day: 0 for day in Weekday}
    weeks: List[_WeekAccumulator] = []

    for day in iter_days(interval.start, interval.end):
        weekday = weekday_of(day)
        counts[weekday] += 1
        unit_cost = config.rate_for(weekday)

        anchor = week_anchor(day)
        if not weeks or weeks[-1].anchor != anchor:
            weeks.append(_WeekAccumulator(index=len(weeks) + 1, anchor=anchor, first_day=day, last_day=day))
        week = weeks[-1]
        week.last_day = day
        week.day_count += 1
        week.total += unit_cost

    day_buckets = tuple(
        DayBucket(
            weekday=weekday,
            occurrence_count=count,
            unit_cost=config.rate_for(weekday),
            total_cost=config.rate_for(weekday) * count,
        )
        for weekday, count in counts.items()
    )
    week_buckets = tuple(week.to_bucket() for week in weeks)
    total_cost = sum((bucket.total_cost for bucket in day_buckets), ZERO)
    total_days = sum(counts.values())

    logger.debug(
        f"Aggregated {total_days} days over {len(week_buckets)} weeks "
        f"({interval.start} -> {interval.end}, custom={config.use_custom_rates}): total={total_cost}"
    )
    return AggregationResult(
        day_buckets=day_buckets,
        week_buckets=week_buckets,
        total_cost=total_cost,
        total_day_count=total_days,
        total_week_count=len(week_buckets),
        start=interval.start,
        end=interval.end,
    )
