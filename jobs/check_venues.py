"""Report which schedule venues can be placed on the map."""
from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path

from api.settings import SCHEDULE_PATH, SCHEDULE_URL
from ingest.schedule_loader import ScheduleLoadError, load_configured_schedule
from venues.aggregator import aggregate_venues, unresolved_venues

logger = logging.getLogger(__name__)
if os.getenv("SCHEDULE_DEBUG"):
    logging.basicConfig(level=logging.INFO, format="%(message)s")


def export_venues(venues, path: str | Path) -> None:
    """Write the aggregated venues as JSON."""
    Path(path).write_text(
        json.dumps(
            [
                {
                    "venueName": v.venue_name,
                    "lat": v.lat,
                    "lng": v.lng,
                    "events": [{"name": e.name, "date": e.date, "time": e.time} for e in v.events],
                }
                for v in venues
            ],
            indent=2,
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )


def run(path: str | Path = SCHEDULE_PATH, url: str | None = SCHEDULE_URL, output: str | None = None) -> int:
    """Print the venue report; return the number of unresolved venues."""
    try:
        schedule = load_configured_schedule(path, url)
    except ScheduleLoadError as exc:
        print("❌ Failed to load schedule:", exc)
        raise SystemExit(1)

    venues = aggregate_venues(schedule)
    missing = unresolved_venues(schedule)

    print(f"{schedule.event_name}: {len(venues)} venue(s) on the map")
    for venue in venues:
        print(f"  ✅ {venue.venue_name} ({venue.lat}, {venue.lng}): {len(venue.events)} event(s)")
    for name in missing:
        print(f"  ⚠️  {name}: no coordinates")

    if output:
        export_venues(venues, output)
        print(f"Wrote {len(venues)} venue(s) -> {output}")
    return len(missing)


def main() -> None:
    parser = argparse.ArgumentParser(description="Check venue coordinates for the schedule")
    parser.add_argument("--schedule", default=str(SCHEDULE_PATH), help="Schedule JSON file")
    parser.add_argument("--url", default=SCHEDULE_URL, help="Fetch the schedule from this URL instead")
    parser.add_argument("--output", help="Write the aggregated venues to this JSON file")
    parser.add_argument("--strict", action="store_true", help="Exit non-zero when a venue is unresolved")
    args = parser.parse_args()

    missing = run(args.schedule, args.url, args.output)
    if args.strict and missing:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
