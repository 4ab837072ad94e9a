"""FastAPI application: REST routes and the WebSocket snapshot feed."""

import logging
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import date

from fastapi import Depends, FastAPI, WebSocket
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from scoreboard import store
from scoreboard.auth import require_admin, require_writer
from scoreboard.config import get_settings
from scoreboard.dates import SUNDAY, day_of_week, month_label, week_range_label
from scoreboard.ranking import rank_day, rank_month, rank_week
from scoreboard.records import build_day_record, snapshot_to_dict
from scoreboard.stats import compute_player_stats
from scoreboard.validation import (
    has_any_non_zero_time,
    player_has_records,
    validate_roster,
)
from scoreboard.ws import publish_snapshot, websocket_handler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load settings and stored data on startup."""
    settings = get_settings()
    logging.getLogger("scoreboard").setLevel(settings.log_level)

    store.reset()
    if settings.data_file is not None:
        store.load(settings.data_file)
    store.allowed_users.update(settings.allowed_users)
    logger.info(
        "Startup: %d allowed writer(s), data file %s",
        len(store.allowed_users),
        settings.data_file or "disabled",
    )
    yield
    logger.info("Shutdown: scoreboard stopped")


app = FastAPI(title="Queens Scoreboard", lifespan=lifespan)


class TimeEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    time: int | float | str | None = None
    bonus_time: int | float | str | None = Field(default=None, alias="bonusTime")


class ScoreSubmission(BaseModel):
    times: dict[str, TimeEntry] = {}


class RosterUpdate(BaseModel):
    names: list[str]


class GrantRequest(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        v = v.strip().lower()
        if not v or "@" not in v:
            raise ValueError("A valid e-mail is required")
        return v


# --- Players ---


@app.get("/api/players")
async def api_get_players():
    return {"players": store.get_roster()}


@app.put("/api/players")
async def api_set_players(body: RosterUpdate, user: str = Depends(require_writer)):
    errors = validate_roster(body.names)
    if errors:
        return JSONResponse(
            {"error": "Invalid player list", "errors": errors}, status_code=400
        )

    names = [name.strip() for name in body.names]
    store.set_roster(names)
    logger.info("Roster updated by %s: %s", user, ", ".join(names))
    await publish_snapshot()
    return {"players": names}


@app.get("/api/players/{name}/stats")
async def api_player_stats(name: str):
    return asdict(compute_player_stats(name, store.snapshot()))


@app.get("/api/players/{name}/records")
async def api_player_has_records(name: str):
    return {"name": name, "has_records": player_has_records(name, store.snapshot())}


# --- Scores ---


@app.get("/api/scores")
async def api_get_scores():
    return snapshot_to_dict(store.snapshot())


@app.get("/api/scores/{day}")
async def api_get_score(day: date):
    record = store.get_day_record(day.isoformat())
    if record is None:
        return JSONResponse({"error": "No scores for this day"}, status_code=404)
    return record.to_dict()


@app.put("/api/scores/{day}")
async def api_put_score(
    day: date, body: ScoreSubmission, user: str = Depends(require_writer)
):
    roster = store.get_roster()
    if roster is None:
        return JSONResponse({"error": "Set up the players first"}, status_code=409)

    times = {
        name: entry.model_dump(by_alias=True)
        for name, entry in body.times.items()
        if name in roster
    }
    if not has_any_non_zero_time(times, day_of_week(day) == SUNDAY):
        return JSONResponse(
            {"error": "Enter the time of at least one player"}, status_code=400
        )

    record = build_day_record(day, roster, times)
    store.put_day_record(record.date, record)
    logger.info("Scores for %s saved by %s", record.date, user)
    await publish_snapshot()
    return record.to_dict()


# --- Podiums ---


@app.get("/api/podium/daily/{day}")
async def api_daily_podium(day: date):
    podium = rank_day(store.get_day_record(day.isoformat()))
    return {
        "date": day.isoformat(),
        "podium": [r.to_dict() for r in podium] if podium is not None else None,
    }


@app.get("/api/podium/weekly/{day}")
async def api_weekly_podium(day: date):
    podium = rank_week(store.get_roster(), store.snapshot(), day)
    return {
        "range": week_range_label(day),
        "podium": [asdict(e) for e in podium] if podium is not None else None,
    }


@app.get("/api/podium/monthly/{day}")
async def api_monthly_podium(day: date):
    podium = rank_month(store.get_roster(), store.snapshot(), day)
    return {
        "month": month_label(day),
        "podium": [asdict(e) for e in podium] if podium is not None else None,
    }


# --- Permissions ---


@app.post("/api/allowed-users", dependencies=[Depends(require_admin)])
async def api_grant_access(body: GrantRequest):
    store.grant_access(body.email)
    logger.info("Write access granted to %s", body.email)
    return {"message": f"{body.email} can now submit scores", "email": body.email}


# --- WebSocket ---


@app.websocket("/ws")
async def ws_endpoint(ws: WebSocket):
    await websocket_handler(ws)
