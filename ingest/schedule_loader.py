"""Load the festival schedule document from disk or over HTTP."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import requests

from ingest.schemas import DaySchedule, Event, ScheduleData

logger = logging.getLogger(__name__)


class ScheduleLoadError(RuntimeError):
    """Raised when the schedule document cannot be read or parsed."""


def parse_schedule(data: Any) -> ScheduleData:
    """Build a :class:`ScheduleData` from the decoded JSON document.

    Only the overall shape is checked. Optional fields (``dateRange``,
    ``description``) default to ``None`` and a missing ``venue`` becomes an
    empty venue list.
    """
    if not isinstance(data, dict) or not isinstance(data.get("schedule"), list):
        raise ScheduleLoadError("schedule document must be an object with a 'schedule' list")

    days = []
    for day in data["schedule"]:
        events = tuple(_parse_event(item) for item in day.get("events", []))
        days.append(
            DaySchedule(
                date=day.get("date", ""),
                events=events,
                date_range=day.get("dateRange"),
            )
        )
    return ScheduleData(
        event_name=data.get("eventName", ""),
        tagline=data.get("tagline", ""),
        schedule=tuple(days),
    )


def _parse_event(item: dict[str, Any]) -> Event:
    venue = item.get("venue", ())
    if isinstance(venue, list):
        venue = tuple(venue)
    return Event(
        name=item.get("name", ""),
        time=item.get("time", ""),
        venue=venue,
        description=item.get("description"),
    )


def load_schedule(path: str | Path) -> ScheduleData:
    """Load the schedule from a local JSON file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ScheduleLoadError(f"Cannot read schedule file {path}") from exc
    except json.JSONDecodeError as exc:
        raise ScheduleLoadError(f"Schedule file {path} is not valid JSON") from exc

    schedule = parse_schedule(data)
    logger.info("Loaded %d day(s) from %s", len(schedule.schedule), path)
    return schedule


def fetch_schedule(url: str, timeout: int = 30) -> ScheduleData:
    """Fetch the schedule document from ``url``."""
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as exc:
        raise ScheduleLoadError(f"Failed to fetch schedule from {url}") from exc
    except ValueError as exc:
        raise ScheduleLoadError(f"Schedule at {url} is not valid JSON") from exc

    schedule = parse_schedule(data)
    logger.info("Fetched %d day(s) from %s", len(schedule.schedule), url)
    return schedule


def load_configured_schedule(path: str | Path, url: str | None = None) -> ScheduleData:
    """Prefer the remote document when ``url`` is set, else read ``path``."""
    if url:
        return fetch_schedule(url)
    return load_schedule(path)
