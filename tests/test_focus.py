import os
import sys
from unittest.mock import Mock

# Ensure the project root is on the import path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from api.settings import DEFAULT_ZOOM, FOCUS_ZOOM, MAP_CENTER
from ingest.schemas import Event, Location, VenueWithEvents
from venues.resolver import VENUE_COORDINATES
from views.focus import MapViewState, Viewport

MASS = Event(name="Opening Mass", time="6:00 AM", venue="Basilica del Sto. Nino")
PARADE = Event(name="Parade", time="8:00 AM", venue=("Cebu City Sports Complex", "Plaza Independencia"))
SECRET = Event(name="Secret Show", time="9:00 PM", venue="Undisclosed venue TBA")
LATE = Event(name="Hubo Rites", time="TBA", venue="Basilica del Sto. Nino")


def venue(name):
    return VenueWithEvents(venue_name=name, location=VENUE_COORDINATES[name])


def test_initial_state():
    state = MapViewState()
    assert state.selected_event is None
    assert not state.map_ready


def test_click_event_before_map_ready_focuses_without_camera():
    state = MapViewState()
    assert state.click_event(MASS, "2025-01-15")
    assert state.selected_event.name == "Opening Mass"
    assert state.selected_event.date == "2025-01-15"
    assert state.selected_event.location == Location(lat=10.2929, lng=123.9021)

    # commands issued before readiness are not replayed later
    control = Mock()
    state.map_loaded(control)
    control.pan_to.assert_not_called()


def test_click_event_recenters_ready_map():
    state = MapViewState()
    control = Mock()
    state.map_loaded(control)
    state.click_event(MASS, "2025-01-15")
    control.pan_to.assert_called_once_with(Location(lat=10.2929, lng=123.9021))
    control.set_zoom.assert_called_once_with(FOCUS_ZOOM)


def test_non_actionable_events_are_ignored():
    state = MapViewState()
    control = Mock()
    state.map_loaded(control)
    assert not state.click_event(SECRET, "2025-01-15")
    assert not state.click_event(LATE, "2025-01-19")
    assert state.selected_event is None
    control.pan_to.assert_not_called()


def test_multi_venue_event_uses_first_venue():
    state = MapViewState()
    viewport = Viewport()
    state.map_loaded(viewport)
    state.click_event(PARADE, "2025-01-18")
    assert viewport.center == VENUE_COORDINATES["Cebu City Sports Complex"]
    assert viewport.zoom == FOCUS_ZOOM


def test_click_marker_keeps_focused_event():
    state = MapViewState()
    viewport = Viewport()
    state.map_loaded(viewport)
    state.click_event(MASS, "2025-01-15")
    state.click_marker(venue("SRP"))
    assert viewport.center == VENUE_COORDINATES["SRP"]
    assert state.selected_event.name == "Opening Mass"


def test_click_marker_before_ready_is_noop():
    state = MapViewState()
    state.click_marker(venue("SRP"))
    assert state.selected_event is None


def test_close_popup_clears_focus():
    state = MapViewState()
    state.click_event(MASS, "2025-01-15")
    state.close_popup()
    assert state.selected_event is None


def test_marker_visibility():
    state = MapViewState()
    assert state.marker_visible(venue("SRP"))
    state.click_event(PARADE, "2025-01-18")
    assert state.marker_visible(venue("Cebu City Sports Complex"))
    assert state.marker_visible(venue("Plaza Independencia"))
    assert not state.marker_visible(venue("SRP"))


def test_popup_open_for_selected_location_or_focused_venue():
    state = MapViewState()
    assert not state.popup_open(venue("SRP"))
    state.select_location("SRP")
    assert state.popup_open(venue("SRP"))
    state.click_event(MASS, "2025-01-15")
    assert state.popup_open(venue("Basilica del Sto. Nino"))
    assert not state.popup_open(venue("GMall"))


def test_is_focused_matches_event_and_date():
    state = MapViewState()
    state.click_event(MASS, "2025-01-15")
    assert state.is_focused(MASS, "2025-01-15")
    assert not state.is_focused(MASS, "2025-01-16")


def test_select_filters_and_filtered_venues():
    venues = [venue("SRP"), venue("GMall")]
    state = MapViewState()
    state.select_location("GMall")
    assert [v.venue_name for v in state.filtered_venues(venues)] == ["GMall"]
    state.select_location(None)
    assert state.selected_location == ""
    assert len(state.filtered_venues(venues)) == 2


def test_viewport_defaults():
    viewport = Viewport()
    assert viewport.center == MAP_CENTER
    assert viewport.zoom == DEFAULT_ZOOM
