"""Date and location filters over the aggregated venue list."""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional

from ingest.schemas import DaySchedule, ScheduleData, VenueWithEvents
from venues.resolver import is_resolvable


def filter_by_date(venues: Iterable[VenueWithEvents], date: Optional[str]) -> list[VenueWithEvents]:
    """Keep only events on ``date``; venues left without events are dropped."""
    if not date:
        return list(venues)
    filtered = []
    for venue in venues:
        events = [event for event in venue.events if event.date == date]
        if events:
            filtered.append(replace(venue, events=events))
    return filtered


def filter_by_location(venues: Iterable[VenueWithEvents], location: Optional[str]) -> list[VenueWithEvents]:
    if not location:
        return list(venues)
    return [venue for venue in venues if venue.venue_name == location]


def apply_filters(
    venues: Iterable[VenueWithEvents],
    date: Optional[str] = None,
    location: Optional[str] = None,
) -> list[VenueWithEvents]:
    """Intersect the date and location filters. Empty values do not restrict."""
    return filter_by_location(filter_by_date(venues, date), location)


def location_options(schedule: ScheduleData) -> list[str]:
    """Sorted, distinct names of every venue that can be shown on the map."""
    names = set()
    for day in schedule.schedule:
        for event in day.events:
            for venue in event.venues:
                if is_resolvable(venue):
                    names.add(venue)
    return sorted(names)


def date_options(schedule: ScheduleData) -> list[str]:
    """Distinct schedule dates in dataset order."""
    return list(dict.fromkeys(schedule.dates()))


def filter_days(schedule: ScheduleData, date: Optional[str]) -> list[DaySchedule]:
    """Day sections to list for the current date selection."""
    return [day for day in schedule.schedule if not date or day.date == date]
