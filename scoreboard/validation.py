"""Checks run before a submission or a roster change is saved."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from scoreboard.records import Snapshot, coerce_seconds

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 20


def has_any_non_zero_time(times: Mapping[str, Mapping], is_sunday: bool) -> bool:
    """Return True if at least one player entered a positive time.

    ``times`` maps player name to ``{"time": ..., "bonusTime": ...}``; blank
    or absent values count as zero and bonus time only counts on Sundays.
    """
    for entry in times.values():
        entry = entry or {}
        total = coerce_seconds(entry.get("time"))
        if is_sunday:
            total += coerce_seconds(entry.get("bonusTime"))
        if total > 0:
            return True
    return False


def validate_player_name(name: str, others: Iterable[str] = ()) -> str | None:
    """Return an error message for an unusable player name, or None."""
    stripped = name.strip()
    if not stripped:
        return "Name cannot be empty"
    if len(stripped) < MIN_NAME_LENGTH:
        return f"Name must have at least {MIN_NAME_LENGTH} characters"
    if len(stripped) > MAX_NAME_LENGTH:
        return f"Name must have at most {MAX_NAME_LENGTH} characters"

    lowered = stripped.lower()
    if any(other.strip().lower() == lowered for other in others):
        return "Name already exists"
    return None


def validate_roster(names: list[str]) -> dict[str, str]:
    """Validate a whole roster.

    Returns a map of error key to message: ``"player-<index>"`` for a bad
    name and ``"general"`` for an empty roster. An empty map means valid.
    """
    errors: dict[str, str] = {}
    for index, name in enumerate(names):
        others = names[:index] + names[index + 1 :]
        error = validate_player_name(name, others)
        if error:
            errors[f"player-{index}"] = error

    if not names:
        errors["general"] = "Add at least one player"
    return errors


def player_has_records(name: str, snapshot: Snapshot | None) -> bool:
    """True if ``name`` recorded a positive time on any day."""
    if not snapshot:
        return False
    return any(
        result.name == name and result.played
        for record in snapshot.values()
        for result in record.results
    )
