"""Roster, score and permission state, optionally backed by a JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from scoreboard.records import DayRecord, snapshot_from_dict, snapshot_to_dict

logger = logging.getLogger(__name__)

scores: dict[str, DayRecord] = {}
roster: list[str] | None = None
allowed_users: set[str] = set()
data_file: Path | None = None


def reset() -> None:
    """Forget all state, including the configured data file."""
    global roster, data_file
    scores.clear()
    allowed_users.clear()
    roster = None
    data_file = None


def snapshot() -> dict[str, DayRecord]:
    """Return a copy of the scores so callers cannot mutate the store."""
    return dict(scores)


def get_day_record(day: str) -> DayRecord | None:
    """Look up the record for a ``YYYY-MM-DD`` key. Returns None if absent."""
    return scores.get(day)


def put_day_record(day: str, record: DayRecord) -> None:
    """Insert or replace the record for ``day``. The last write wins."""
    scores[day] = record
    save()


def get_roster() -> list[str] | None:
    return list(roster) if roster is not None else None


def set_roster(names: list[str]) -> None:
    global roster
    roster = list(names)
    save()


def is_allowed(email: str | None) -> bool:
    return bool(email) and email.strip().lower() in allowed_users


def grant_access(email: str) -> None:
    """Allow ``email`` to write. No-op if it already can."""
    allowed_users.add(email.strip().lower())
    save()


def load(path: Path) -> None:
    """Use ``path`` as the data file and load its contents if it exists.

    A missing file starts an empty store. An unreadable or corrupt file is
    logged and also starts an empty store; it is overwritten on next save.
    """
    global roster, data_file
    data_file = path
    if not path.exists():
        logger.info("Store: no data file at %s, starting empty", path)
        return

    try:
        document = json.loads(path.read_text())
        loaded_scores = snapshot_from_dict(document.get("scores") or {})
    except (OSError, ValueError, AttributeError):
        logger.exception("Store: could not read %s, starting empty", path)
        return

    scores.clear()
    scores.update(loaded_scores)
    players = document.get("players")
    if players is not None and not isinstance(players, list):
        logger.warning("Store: ignoring malformed player list in %s", path)
        players = None
    roster = list(players) if players is not None else None
    allowed_users.update(e.lower() for e in document.get("allowedUsers") or ())
    logger.info(
        "Store: loaded %d day record(s) and %s from %s",
        len(scores),
        f"{len(roster)} player(s)" if roster is not None else "no roster",
        path,
    )


def save() -> None:
    """Write the store to the data file. No-op when none is configured."""
    if data_file is None:
        return
    document = {
        "players": roster,
        "scores": snapshot_to_dict(scores),
        "allowedUsers": sorted(allowed_users),
    }
    data_file.parent.mkdir(parents=True, exist_ok=True)
    tmp = data_file.with_suffix(data_file.suffix + ".tmp")
    tmp.write_text(json.dumps(document, indent=2, ensure_ascii=False))
    tmp.replace(data_file)
