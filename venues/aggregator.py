"""Group schedule events by the venue they take place at."""
from __future__ import annotations

import logging

from ingest.schemas import ScheduleData, VenueEvent, VenueWithEvents

from .resolver import is_placeholder, resolve_coordinates

logger = logging.getLogger(__name__)


def aggregate_venues(schedule: ScheduleData) -> list[VenueWithEvents]:
    """Build one :class:`VenueWithEvents` per distinct resolvable venue.

    Events listing several venues are counted at each of them. Placeholder
    and unresolvable venues are skipped. Venues keep first-appearance order
    and their events keep schedule order.
    """
    by_venue: dict[str, VenueWithEvents] = {}
    for day in schedule.schedule:
        for event in day.events:
            for venue in event.venues:
                if is_placeholder(venue):
                    continue
                coords = resolve_coordinates(venue)
                if coords is None:
                    logger.debug("No coordinates for venue %r, skipping", venue)
                    continue
                if venue not in by_venue:
                    by_venue[venue] = VenueWithEvents(venue_name=venue, location=coords)
                by_venue[venue].events.append(
                    VenueEvent(name=event.name, date=day.date, time=event.time)
                )
    return list(by_venue.values())


def unresolved_venues(schedule: ScheduleData) -> list[str]:
    """Announced venue names that have no entry in the coordinate table."""
    missing: list[str] = []
    for day in schedule.schedule:
        for event in day.events:
            for venue in event.venues:
                if is_placeholder(venue) or venue in missing:
                    continue
                if resolve_coordinates(venue) is None:
                    missing.append(venue)
    return missing
