"""Daily, weekly and monthly podiums."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from scoreboard.dates import SUNDAY, parse_day, week_days
from scoreboard.records import DayRecord, PlayerResult, PodiumEntry, Snapshot

SUNDAY_WEIGHT = 3
WEEKDAY_WEIGHT = 1


def _day_sort_key(result: PlayerResult) -> tuple:
    return (
        not result.played,  # players with a time first
        result.total_time if result.played else 0,  # faster is better
        result.name,  # alphabetical among ties and among non-players
    )


def rank_day(record: DayRecord | None) -> list[PlayerResult] | None:
    """Rank every result of a single day.

    Sort order (best first):
      1. Results with a positive total time before results without one
      2. Lower total time (ascending)
      3. Name (ascending), which orders the non-players and breaks ties

    Returns None when the record is missing, has no results, or nobody
    recorded a positive time.
    """
    if record is None or not record.results or not record.has_play:
        return None
    return sorted(record.results, key=_day_sort_key)


def _podium_sort_key(entry: PodiumEntry) -> tuple:
    return (-entry.wins, -entry.games_played, entry.total_time, entry.name)


def _aggregate(
    roster: list[str], records: Iterable[DayRecord]
) -> tuple[dict[str, dict], set[str]]:
    """Accumulate wins, time and games for roster players over ``records``.

    Returns the per-player totals and the names seen on any day that had a
    winner (whether or not that player recorded a time).
    """
    totals = {name: {"wins": 0, "total_time": 0, "games_played": 0} for name in roster}
    active: set[str] = set()

    for record in records:
        ranked = rank_day(record)
        if ranked is None:
            continue

        winner = ranked[0]
        if winner.played and winner.name in totals:
            weight = SUNDAY_WEIGHT if record.day_of_week == SUNDAY else WEEKDAY_WEIGHT
            totals[winner.name]["wins"] += weight

        for result in record.results:
            if result.played and result.name in totals:
                totals[result.name]["total_time"] += result.total_time
                totals[result.name]["games_played"] += 1
            active.add(result.name)

    return totals, active


def _podium(totals: dict[str, dict], names: Iterable[str]) -> list[PodiumEntry]:
    """Build podium entries for ``names`` in standings order.

    Sort order (best first):
      1. More wins (Sunday wins count three times)
      2. More games played
      3. Lower total time
      4. Name (ascending)
    """
    entries = [PodiumEntry(name=name, **totals[name]) for name in names]
    entries.sort(key=_podium_sort_key)
    return entries


def rank_week(
    roster: list[str] | None, snapshot: Snapshot, reference: date
) -> list[PodiumEntry] | None:
    """Rank the roster over the Monday-Sunday week containing ``reference``.

    Only roster players that appear in at least one record of the week are
    included. Returns None when there is no roster yet.
    """
    if roster is None:
        return None

    records = (snapshot.get(day.isoformat()) for day in week_days(reference))
    totals, active = _aggregate(roster, records)
    return _podium(totals, (name for name in totals if name in active))


def rank_month(
    roster: list[str] | None, snapshot: Snapshot, reference: date
) -> list[PodiumEntry] | None:
    """Rank the whole roster over the calendar month of ``reference``.

    Unlike the weekly podium, every roster player is listed even without a
    single game in the month. Returns None when there is no roster yet.
    """
    if roster is None:
        return None

    def in_month(record: DayRecord) -> bool:
        day = parse_day(record.date)
        return (
            day is not None
            and day.year == reference.year
            and day.month == reference.month
        )

    totals, _ = _aggregate(roster, (r for r in snapshot.values() if in_month(r)))
    return _podium(totals, totals)
