"""Score records: daily results, podium entries and player statistics."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date

from scoreboard.dates import SUNDAY, day_of_week


@dataclass(frozen=True)
class PlayerResult:
    """One player's result for a day.

    Attributes:
        name: Player name; the durable key for a player across all records.
        time: Seconds spent on the daily puzzle, 0 when nothing was recorded.
        bonus_time: Seconds spent on the Sunday bonus puzzle, 0 on other days.
        total_time: ``time + bonus_time``. Zero means the player did not play.
    """

    name: str
    time: int = 0
    bonus_time: int = 0
    total_time: int = 0

    @property
    def played(self) -> bool:
        return self.total_time > 0

    @classmethod
    def from_dict(cls, data: Mapping) -> PlayerResult:
        return cls(
            name=data.get("name", ""),
            time=coerce_seconds(data.get("time")),
            bonus_time=coerce_seconds(data.get("bonusTime")),
            total_time=coerce_seconds(data.get("totalTime")),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "time": self.time,
            "bonusTime": self.bonus_time,
            "totalTime": self.total_time,
        }


@dataclass(frozen=True)
class DayRecord:
    """All results submitted for one calendar day.

    Attributes:
        date: Canonical ``YYYY-MM-DD`` key.
        day_of_week: Weekday stored at submission time, 0 = Sunday. Rankings
            read this field instead of recomputing it from ``date``.
        results: One entry per participating player, in submission order.
    """

    date: str
    day_of_week: int
    results: tuple[PlayerResult, ...] = ()

    @property
    def has_play(self) -> bool:
        """True when at least one player recorded a positive time."""
        return any(r.played for r in self.results)

    @classmethod
    def from_dict(cls, data: Mapping) -> DayRecord:
        return cls(
            date=data.get("date", ""),
            day_of_week=data.get("dayOfWeek", -1),
            results=tuple(
                PlayerResult.from_dict(r) for r in data.get("results") or ()
            ),
        )

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "dayOfWeek": self.day_of_week,
            "results": [r.to_dict() for r in self.results],
        }


# Map of YYYY-MM-DD key to the record for that day.
Snapshot = Mapping[str, DayRecord]


@dataclass(frozen=True)
class PodiumEntry:
    """Aggregated standing of one player over a week or a month."""

    name: str
    wins: int = 0
    total_time: int = 0
    games_played: int = 0


@dataclass(frozen=True)
class TimePoint:
    date: str
    time: int


@dataclass(frozen=True)
class PlayerStats:
    """Lifetime statistics for one player.

    ``best_time`` and ``avg_time`` hold ``"N/A"`` until the player has at
    least one positive time.
    """

    name: str
    wins: int = 0
    podiums: int = 0
    best_time: int | str = "N/A"
    avg_time: str = "N/A"
    time_history: tuple[TimePoint, ...] = field(default_factory=tuple)


def snapshot_from_dict(data: Mapping) -> dict[str, DayRecord]:
    """Build a snapshot from its JSON document form."""
    return {key: DayRecord.from_dict(value) for key, value in data.items()}


def snapshot_to_dict(snapshot: Snapshot) -> dict[str, dict]:
    return {key: record.to_dict() for key, record in snapshot.items()}


def coerce_seconds(value) -> int:
    """Turn a form value into non-negative whole seconds.

    Blank, absent and non-numeric values become 0; negatives are clamped.
    """
    if value is None or value == "":
        return 0
    try:
        seconds = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, seconds)


def build_day_record(
    day: date, roster: list[str], times: Mapping[str, Mapping]
) -> DayRecord:
    """Build the record a submission produces for ``day``.

    Every roster player gets a result; players missing from ``times`` get a
    zero (did not play) result. Bonus time only counts on Sundays.
    """
    weekday = day_of_week(day)
    is_sunday = weekday == SUNDAY
    results = []
    for name in roster:
        entry = times.get(name) or {}
        time = coerce_seconds(entry.get("time"))
        bonus_time = coerce_seconds(entry.get("bonusTime")) if is_sunday else 0
        results.append(
            PlayerResult(
                name=name,
                time=time,
                bonus_time=bonus_time,
                total_time=time + bonus_time,
            )
        )
    return DayRecord(date=day.isoformat(), day_of_week=weekday, results=tuple(results))
