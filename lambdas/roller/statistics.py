"""Statistics over a caller-supplied roll history.

The history itself lives outside the engine; these functions only read a list
of RollResults and summarize it.
"""

import re
from collections import Counter, defaultdict
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field

from shared.models import RollResult
from shared.utils import round_percentage, utc_now

DICE_TYPE_PATTERN = re.compile(r"(\d+)?d(\d+)", re.IGNORECASE)


class TimeFilter(str, Enum):
    """Which part of the history to summarize."""

    TODAY = "today"
    SESSION = "session"
    ALL = "all"


class BasicMetrics(BaseModel):
    """Totals across all rolls."""

    total_rolls: int
    average_result: float
    min_result: int
    max_result: int
    total_sum: int


class CriticalStats(BaseModel):
    """Natural 20/1 counts over plain d20 rolls."""

    nat20_count: int = 0
    nat20_percentage: float = 0.0
    nat1_count: int = 0
    nat1_percentage: float = 0.0
    total_d20_rolls: int = 0


class DistributionEntry(BaseModel):
    """How often a total was rolled."""

    value: int
    count: int
    percentage: float


class DiceTypeStat(BaseModel):
    """Usage of one die type across the history."""

    dice_type: str
    count: int
    average_result: float


class StatisticsData(BaseModel):
    """Full statistics snapshot."""

    basic: BasicMetrics
    critical: CriticalStats
    distribution: list[DistributionEntry]
    dice_types: list[DiceTypeStat]
    time_filter: TimeFilter
    last_updated: datetime = Field(default_factory=utc_now)


def _as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def filter_rolls(
    rolls: list[RollResult],
    time_filter: TimeFilter,
    session_start: datetime | None = None,
    now: datetime | None = None,
) -> list[RollResult]:
    """Select the rolls covered by a time filter.

    Args:
        rolls: Roll history
        time_filter: Filter to apply
        session_start: Start of the current session, used by SESSION. Without
            it SESSION behaves like ALL. Naive datetimes (here and on the
            rolls) are read as UTC.
        now: Reference time for TODAY (defaults to current UTC time)

    Returns:
        Matching rolls in their original order
    """
    if time_filter == TimeFilter.TODAY:
        today = _as_utc(now or utc_now()).date()
        return [roll for roll in rolls if _as_utc(roll.timestamp).date() == today]
    if time_filter == TimeFilter.SESSION and session_start is not None:
        start = _as_utc(session_start)
        return [roll for roll in rolls if _as_utc(roll.timestamp) >= start]
    return list(rolls)


def calculate_basic_metrics(rolls: list[RollResult]) -> BasicMetrics:
    """Count, average, min, max and sum of the roll totals."""
    if not rolls:
        return BasicMetrics(
            total_rolls=0, average_result=0.0, min_result=0, max_result=0, total_sum=0
        )

    totals = [roll.total for roll in rolls]
    total_sum = sum(totals)
    return BasicMetrics(
        total_rolls=len(rolls),
        average_result=round(total_sum / len(rolls), 2),
        min_result=min(totals),
        max_result=max(totals),
        total_sum=total_sum,
    )


def is_plain_d20_roll(roll: RollResult) -> bool:
    """Check whether a roll is a single kept d20 with no modifier.

    Advantage rolls qualify: they have one group with exactly one kept die.
    """
    if len(roll.group_results) != 1 or roll.modifier != 0:
        return False

    group = roll.group_results[0]
    active = [die for die in group.rolls if not die.is_dropped]
    if len(active) != 1 or not 1 <= active[0].value <= 20:
        return False

    sides = {g.sides for g in roll.expression.groups}
    return sides == {20}


def calculate_critical_stats(rolls: list[RollResult]) -> CriticalStats:
    """Natural 20 and natural 1 frequencies among plain d20 rolls."""
    d20_rolls = [roll for roll in rolls if is_plain_d20_roll(roll)]
    if not d20_rolls:
        return CriticalStats()

    kept = [
        next(die.value for die in roll.group_results[0].rolls if not die.is_dropped)
        for roll in d20_rolls
    ]
    nat20_count = kept.count(20)
    nat1_count = kept.count(1)

    return CriticalStats(
        nat20_count=nat20_count,
        nat20_percentage=round_percentage(nat20_count, len(d20_rolls)),
        nat1_count=nat1_count,
        nat1_percentage=round_percentage(nat1_count, len(d20_rolls)),
        total_d20_rolls=len(d20_rolls),
    )


def calculate_distribution(rolls: list[RollResult]) -> list[DistributionEntry]:
    """Frequency of each total, sorted by value."""
    counts = Counter(roll.total for roll in rolls)
    return [
        DistributionEntry(
            value=value,
            count=count,
            percentage=round_percentage(count, len(rolls)),
        )
        for value, count in sorted(counts.items())
    ]


def extract_dice_types(notation: str) -> list[str]:
    """Die types mentioned in a notation string.

    "2d20kh1 + 3d6 +5" -> ["d20", "d6"]
    """
    types: list[str] = []
    for match in DICE_TYPE_PATTERN.finditer(notation):
        dice_type = f"d{match.group(2)}"
        if dice_type not in types:
            types.append(dice_type)
    return types


def calculate_dice_type_analysis(rolls: list[RollResult]) -> list[DiceTypeStat]:
    """Per-die-type usage, most used first.

    A roll counts once for every distinct die type in its notation; the
    average is over the totals of those rolls.
    """
    totals_by_type: dict[str, list[int]] = defaultdict(list)
    for roll in rolls:
        for dice_type in extract_dice_types(roll.notation):
            totals_by_type[dice_type].append(roll.total)

    stats = [
        DiceTypeStat(
            dice_type=dice_type,
            count=len(totals),
            average_result=round(sum(totals) / len(totals), 2),
        )
        for dice_type, totals in totals_by_type.items()
    ]
    return sorted(stats, key=lambda stat: stat.count, reverse=True)


def calculate_statistics(
    rolls: list[RollResult],
    time_filter: TimeFilter = TimeFilter.ALL,
    session_start: datetime | None = None,
    now: datetime | None = None,
) -> StatisticsData | None:
    """Summarize a roll history.

    Args:
        rolls: Roll history
        time_filter: Part of the history to include
        session_start: Start of the current session (for SESSION)
        now: Reference time for TODAY

    Returns:
        StatisticsData, or None if no rolls match the filter
    """
    selected = filter_rolls(rolls, time_filter, session_start=session_start, now=now)
    if not selected:
        return None

    return StatisticsData(
        basic=calculate_basic_metrics(selected),
        critical=calculate_critical_stats(selected),
        distribution=calculate_distribution(selected),
        dice_types=calculate_dice_type_analysis(selected),
        time_filter=time_filter,
    )
