"""Selection and focus state of the schedule map view.

The view is either showing no selection or focused on one event. Focusing an
event re-centers the map on its venue, but only once the map control has
reported that it is ready; earlier camera commands are dropped.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol

from api.settings import DEFAULT_ZOOM, FOCUS_ZOOM, MAP_CENTER
from ingest.schemas import Event, Location, SelectedEvent, VenueWithEvents
from venues.resolver import is_actionable, resolve_coordinates

from .filters import apply_filters

logger = logging.getLogger(__name__)


class MapControl(Protocol):
    """Camera commands accepted by the map provider."""

    def pan_to(self, location: Location) -> None:
        ...

    def set_zoom(self, zoom: int) -> None:
        ...


@dataclass
class Viewport:
    """Map control that records the camera the browser map starts from."""

    center: Location = MAP_CENTER
    zoom: int = DEFAULT_ZOOM

    def pan_to(self, location: Location) -> None:
        self.center = location

    def set_zoom(self, zoom: int) -> None:
        self.zoom = zoom


@dataclass
class MapViewState:
    """Filters, focused event and map readiness for one view."""

    selected_date: str = ""
    selected_location: str = ""
    selected_event: Optional[SelectedEvent] = None
    map: Optional[MapControl] = field(default=None, repr=False)

    @property
    def map_ready(self) -> bool:
        return self.map is not None

    def map_loaded(self, control: MapControl) -> None:
        """Readiness callback of the map provider."""
        self.map = control

    def select_date(self, date: Optional[str]) -> None:
        self.selected_date = date or ""

    def select_location(self, location: Optional[str]) -> None:
        self.selected_location = location or ""

    def click_event(self, event: Event, date: str) -> bool:
        """Focus ``event`` if it is actionable.

        Returns True when the event became the focused event.
        """
        if not is_actionable(event):
            logger.debug("Ignoring click on non-actionable event %r", event.name)
            return False

        location = resolve_coordinates(event.primary_venue)
        self.selected_event = SelectedEvent(event=event, date=date, location=location)
        if location is not None:
            self._focus(location)
        return True

    def click_marker(self, venue: VenueWithEvents) -> None:
        self._focus(venue.location)

    def close_popup(self) -> None:
        self.selected_event = None

    def _focus(self, location: Location) -> None:
        if self.map is None:
            return
        self.map.pan_to(location)
        self.map.set_zoom(FOCUS_ZOOM)

    def is_focused(self, event: Event, date: str) -> bool:
        selected = self.selected_event
        return selected is not None and selected.event == event and selected.date == date

    def marker_visible(self, venue: VenueWithEvents) -> bool:
        """All markers show until an event is focused, then only its venues."""
        if self.selected_event is None:
            return True
        return venue.venue_name in self.selected_event.venues

    def popup_open(self, venue: VenueWithEvents) -> bool:
        if self.selected_location == venue.venue_name:
            return True
        return self.selected_event is not None and venue.venue_name in self.selected_event.venues

    def filtered_venues(self, venues: Iterable[VenueWithEvents]) -> list[VenueWithEvents]:
        return apply_filters(venues, self.selected_date, self.selected_location)
