"""
Unit tests for scoreboard/stats.py: lifetime player statistics.

Tests cover:
- Missing arguments and empty history
- Wins and podiums from the plain ascending time sort
- Best and average time (average rounded half up, as a string)
- Chronological time history across year boundaries
"""

from scoreboard.records import DayRecord, PlayerResult, PlayerStats, TimePoint
from scoreboard.stats import compute_player_stats


def result(name, total):
    return PlayerResult(name=name, time=total, total_time=total)


def record(day, *results):
    return DayRecord(date=day, day_of_week=1, results=tuple(results))


def snap(*records):
    return {r.date: r for r in records}


# ---------------------------------------------------------------------------
# Missing input / empty history
# ---------------------------------------------------------------------------


class TestPlayerStatsEmpty:
    def test_empty_snapshot_gives_sentinels(self):
        assert compute_player_stats("X", {}) == PlayerStats(
            name="X",
            wins=0,
            podiums=0,
            best_time="N/A",
            avg_time="N/A",
            time_history=(),
        )

    def test_missing_name_returns_none(self):
        assert compute_player_stats(None, {}) is None
        assert compute_player_stats("", {}) is None

    def test_missing_snapshot_returns_none(self):
        assert compute_player_stats("X", None) is None

    def test_player_with_only_zero_times_has_no_stats(self):
        scores = snap(record("2026-10-12", result("X", 0), result("A", 100)))
        stats = compute_player_stats("X", scores)
        assert stats.best_time == "N/A"
        assert stats.avg_time == "N/A"
        assert stats.time_history == ()

    def test_record_without_results_is_skipped(self):
        scores = snap(record("2026-10-12"))
        assert compute_player_stats("X", scores).wins == 0


# ---------------------------------------------------------------------------
# Wins and podiums
# ---------------------------------------------------------------------------


class TestPlayerStatsRanks:
    def test_wins_podiums_best_and_average(self):
        scores = snap(
            record("2026-10-12", result("X", 100), result("A", 200)),
            record("2026-10-13", result("A", 50), result("B", 60), result("X", 70)),
            record(
                "2026-10-14",
                result("A", 10),
                result("B", 20),
                result("C", 30),
                result("X", 40),
            ),
        )
        stats = compute_player_stats("X", scores)
        assert stats.wins == 1
        assert stats.podiums == 2
        assert stats.best_time == 40
        assert stats.avg_time == "70"

    def test_zero_time_entries_sort_ahead_of_the_player(self):
        # The plain ascending sort puts a non-player (0s) in first place.
        scores = snap(record("2026-10-12", result("A", 0), result("X", 100)))
        stats = compute_player_stats("X", scores)
        assert stats.wins == 0
        assert stats.podiums == 1

    def test_equal_times_keep_submission_order(self):
        scores = snap(
            record("2026-10-12", result("A", 100), result("X", 100)),
            record("2026-10-13", result("X", 100), result("A", 100)),
        )
        assert compute_player_stats("X", scores).wins == 1

    def test_absent_days_do_not_count(self):
        scores = snap(
            record("2026-10-12", result("A", 100)),
            record("2026-10-13", result("X", 90)),
        )
        stats = compute_player_stats("X", scores)
        assert stats.wins == 1
        assert len(stats.time_history) == 1


# ---------------------------------------------------------------------------
# Averages and history
# ---------------------------------------------------------------------------


class TestPlayerStatsHistory:
    def test_average_rounds_half_up(self):
        scores = snap(
            record("2026-10-12", result("X", 101)),
            record("2026-10-13", result("X", 102)),
        )
        assert compute_player_stats("X", scores).avg_time == "102"

    def test_average_rounds_down_below_half(self):
        scores = snap(
            record("2026-10-12", result("X", 100)),
            record("2026-10-13", result("X", 100)),
            record("2026-10-14", result("X", 101)),
        )
        assert compute_player_stats("X", scores).avg_time == "100"

    def test_history_is_chronological_across_years(self):
        scores = snap(
            record("2026-01-05", result("X", 80)),
            record("2025-12-30", result("X", 95)),
            record("2026-01-02", result("X", 70)),
        )
        stats = compute_player_stats("X", scores)
        assert stats.time_history == (
            TimePoint(date="30/12", time=95),
            TimePoint(date="02/01", time=70),
            TimePoint(date="05/01", time=80),
        )

    def test_history_uses_total_time(self):
        scores = snap(
            DayRecord(
                date="2026-10-18",
                day_of_week=0,
                results=(PlayerResult("X", time=60, bonus_time=40, total_time=100),),
            )
        )
        assert compute_player_stats("X", scores).time_history[0].time == 100

    def test_same_input_gives_same_output(self):
        scores = snap(record("2026-10-12", result("X", 100), result("A", 90)))
        assert compute_player_stats("X", scores) == compute_player_stats("X", scores)
