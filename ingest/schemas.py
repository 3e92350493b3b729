"""Shared data models for the festival schedule."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class Location:
    """Latitude/longitude pair as understood by the map provider."""

    lat: float
    lng: float

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class Event:
    """A single scheduled event, as published in the dataset."""

    name: str
    time: str
    venue: Union[str, tuple[str, ...]]
    description: Optional[str] = None

    @property
    def venues(self) -> list[str]:
        """Return the venue(s) of the event as a list."""
        if isinstance(self.venue, str):
            return [self.venue]
        return list(self.venue)

    @property
    def primary_venue(self) -> str:
        """First listed venue; used for map focus of co-located events."""
        venues = self.venues
        return venues[0] if venues else ""

    @property
    def venue_label(self) -> str:
        return " & ".join(self.venues)


@dataclass(frozen=True)
class DaySchedule:
    """All events of one festival day."""

    date: str
    events: tuple[Event, ...] = ()
    date_range: Optional[str] = None


@dataclass(frozen=True)
class ScheduleData:
    """The whole static dataset."""

    event_name: str
    tagline: str
    schedule: tuple[DaySchedule, ...] = ()

    def dates(self) -> list[str]:
        return [day.date for day in self.schedule]

    def day(self, date: str) -> Optional[DaySchedule]:
        for day in self.schedule:
            if day.date == date:
                return day
        return None

    def to_dict(self) -> dict:
        """Serialize back to the input document shape."""
        days = []
        for day in self.schedule:
            events = []
            for event in day.events:
                item = {
                    "name": event.name,
                    "time": event.time,
                    "venue": event.venue if isinstance(event.venue, str) else list(event.venue),
                }
                if event.description is not None:
                    item["description"] = event.description
                events.append(item)
            entry = {"date": day.date, "events": events}
            if day.date_range is not None:
                entry["dateRange"] = day.date_range
            days.append(entry)
        return {"eventName": self.event_name, "tagline": self.tagline, "schedule": days}


@dataclass(frozen=True)
class VenueEvent:
    """Reference to one event held at a venue."""

    name: str
    date: str
    time: str


@dataclass
class VenueWithEvents:
    """A resolvable venue together with every event held there."""

    venue_name: str
    location: Location
    events: list[VenueEvent] = field(default_factory=list)

    @property
    def lat(self) -> float:
        return self.location.lat

    @property
    def lng(self) -> float:
        return self.location.lng

    def dates(self) -> list[str]:
        """Distinct event dates, sorted."""
        return sorted({event.date for event in self.events})

    def events_on(self, date: str) -> list[VenueEvent]:
        return [event for event in self.events if event.date == date]


@dataclass(frozen=True)
class SelectedEvent:
    """The event currently focused by the user."""

    event: Event
    date: str
    location: Optional[Location] = None

    @property
    def name(self) -> str:
        return self.event.name

    @property
    def venues(self) -> list[str]:
        return self.event.venues
