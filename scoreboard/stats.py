"""Lifetime statistics for a single player."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from scoreboard.dates import display_day, parse_day
from scoreboard.records import PlayerStats, Snapshot, TimePoint

NOT_AVAILABLE = "N/A"


def compute_player_stats(name: str | None, snapshot: Snapshot | None) -> PlayerStats | None:
    """Scan every record in ``snapshot`` and summarise ``name``'s games.

    A day counts when the player has a positive total time. The player's
    rank that day comes from a plain ascending sort on total time that keeps
    submission order on ties (it is deliberately not ``rank_day``'s order),
    so a win is rank 1 and a podium is rank 3 or better.

    Returns None when either argument is missing.
    """
    if not name or snapshot is None:
        return None

    wins = 0
    podiums = 0
    best_time = None
    total_time = 0
    games = 0
    history = []

    for record in snapshot.values():
        if not record.results:
            continue

        ordered = sorted(record.results, key=lambda r: r.total_time)
        position = next(
            (i for i, r in enumerate(ordered) if r.name == name), None
        )
        if position is None or not ordered[position].played:
            continue

        result = ordered[position]
        rank = position + 1
        if rank == 1:
            wins += 1
        if rank <= 3:
            podiums += 1

        best_time = result.total_time if best_time is None else min(best_time, result.total_time)
        total_time += result.total_time
        games += 1

        day = parse_day(record.date)
        if day is not None:
            history.append((day, result.total_time))

    # Display dates drop the year, so order by the real date.
    history.sort(key=lambda point: point[0])

    return PlayerStats(
        name=name,
        wins=wins,
        podiums=podiums,
        best_time=NOT_AVAILABLE if best_time is None else best_time,
        avg_time=_rounded_mean(total_time, games),
        time_history=tuple(
            TimePoint(date=display_day(day), time=time) for day, time in history
        ),
    )


def _rounded_mean(total: int, count: int) -> str:
    if count == 0:
        return NOT_AVAILABLE
    mean = Decimal(total) / Decimal(count)
    return str(mean.quantize(Decimal(1), rounding=ROUND_HALF_UP))
