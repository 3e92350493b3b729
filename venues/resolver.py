"""Resolve free-text venue names to map coordinates.

Resolution is a plain lookup against a fixed table of known Cebu venues:
an exact key match first, then the first key (in table order) that appears
inside the venue name, ignoring case. Anything else is unresolvable and is
left off the map.
"""
from __future__ import annotations

from typing import Optional

from ingest.schemas import Event, Location

PLACEHOLDER_PATTERNS = ("TBA", "to be announced", "Venue to be announced")

# Insertion order matters for the substring fallback.
VENUE_COORDINATES: dict[str, Location] = {
    "SM Seaside Cebu": Location(lat=10.2791, lng=123.8585),
    "GMall": Location(lat=10.3127, lng=123.8854),
    "Basilica del Sto. Nino": Location(lat=10.2929, lng=123.9021),
    "Fuente Osmeña": Location(lat=10.3116, lng=123.8913),
    "Plaza Independencia": Location(lat=10.2925, lng=123.9021),
    "Cebu City Sports Complex": Location(lat=10.3095, lng=123.8862),
    "MCIAA T1": Location(lat=10.3075, lng=123.9789),
    "Ayala Center Cebu": Location(lat=10.3187, lng=123.9048),
    "SM City Cebu": Location(lat=10.3119, lng=123.9178),
    "Basilica Minore del Sto. Niño": Location(lat=10.2929, lng=123.9021),
    "Mandaue City": Location(lat=10.3231, lng=123.9223),
    "SRP": Location(lat=10.2674, lng=123.8805),
    "Pacific Grand Ballroom": Location(lat=10.3142, lng=123.9163),
}


def is_placeholder(text: str) -> bool:
    """Return True if ``text`` says the detail is not announced yet."""
    lower = text.lower()
    return any(pattern.lower() in lower for pattern in PLACEHOLDER_PATTERNS)


def resolve_coordinates(
    venue: str, table: Optional[dict[str, Location]] = None
) -> Optional[Location]:
    """Look up the coordinates of ``venue``.

    Args:
        venue: Venue name as written in the schedule.
        table: Name to coordinate table, defaults to ``VENUE_COORDINATES``.

    Returns:
        The matching :class:`Location` or ``None`` when no key matches.
    """
    table = VENUE_COORDINATES if table is None else table
    if venue in table:
        return table[venue]

    venue_lower = venue.lower()
    for key, coords in table.items():
        if key.lower() in venue_lower:
            return coords
    return None


def is_resolvable(venue: str) -> bool:
    """A venue can go on the map: announced and present in the table."""
    return not is_placeholder(venue) and resolve_coordinates(venue) is not None


def is_actionable(event: Event) -> bool:
    """Whether clicking ``event`` may focus the map on it."""
    venue = event.primary_venue
    return (
        not is_placeholder(venue)
        and not is_placeholder(event.time)
        and resolve_coordinates(venue) is not None
    )
