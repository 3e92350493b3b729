import os
import sys

# Ensure the project root is on the import path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from ingest.schedule_loader import parse_schedule
from ingest.schemas import Location, VenueEvent
from venues.aggregator import aggregate_venues, unresolved_venues


def make_schedule(days):
    return parse_schedule({"eventName": "Test Fest", "tagline": "", "schedule": days})


def test_only_resolvable_venues_are_aggregated():
    schedule = make_schedule([
        {"date": "2025-01-15", "events": [
            {"name": "A", "time": "9:00 AM", "venue": "GMall"},
            {"name": "B", "time": "10:00 AM", "venue": "IT Park, Lahug"},
        ]},
    ])
    venues = aggregate_venues(schedule)
    assert [v.venue_name for v in venues] == ["GMall"]


def test_placeholder_venue_excluded():
    schedule = make_schedule([
        {"date": "2025-01-15", "events": [
            {"name": "Secret Show", "time": "9:00 PM", "venue": "Undisclosed venue TBA"},
        ]},
    ])
    assert aggregate_venues(schedule) == []


def test_placeholder_excluded_even_when_it_contains_a_table_key():
    schedule = make_schedule([
        {"date": "2025-01-15", "events": [
            {"name": "Pop-up", "time": "9:00 PM", "venue": "SM City Cebu (exact spot TBA)"},
        ]},
    ])
    assert aggregate_venues(schedule) == []


def test_opening_mass_example():
    schedule = make_schedule([
        {"date": "2025-01-15", "events": [
            {"name": "Opening Mass", "time": "6:00 AM", "venue": "Basilica del Sto. Nino"},
        ]},
    ])
    [venue] = aggregate_venues(schedule)
    assert venue.venue_name == "Basilica del Sto. Nino"
    assert venue.location == Location(lat=10.2929, lng=123.9021)
    assert venue.events == [VenueEvent(name="Opening Mass", date="2025-01-15", time="6:00 AM")]


def test_multi_venue_event_counted_at_each_venue():
    schedule = make_schedule([
        {"date": "2025-01-18", "events": [
            {"name": "Parade", "time": "8:00 AM", "venue": ["Cebu City Sports Complex", "Plaza Independencia"]},
        ]},
    ])
    venues = aggregate_venues(schedule)
    assert [v.venue_name for v in venues] == ["Cebu City Sports Complex", "Plaza Independencia"]
    assert all(v.events[0].name == "Parade" for v in venues)


def test_events_collected_across_days_in_order():
    schedule = make_schedule([
        {"date": "2025-01-10", "events": [{"name": "Novena", "time": "4:00 AM", "venue": "GMall"}]},
        {"date": "2025-01-11", "events": [
            {"name": "Concert", "time": "8:00 PM", "venue": "SRP"},
            {"name": "Sale", "time": "10:00 AM", "venue": "GMall"},
        ]},
    ])
    venues = aggregate_venues(schedule)
    assert [v.venue_name for v in venues] == ["GMall", "SRP"]
    gmall = venues[0]
    assert [(e.name, e.date) for e in gmall.events] == [("Novena", "2025-01-10"), ("Sale", "2025-01-11")]
    assert gmall.dates() == ["2025-01-10", "2025-01-11"]


def test_venues_keyed_by_exact_name():
    schedule = make_schedule([
        {"date": "2025-01-10", "events": [
            {"name": "A", "time": "1:00 PM", "venue": "GMall"},
            {"name": "B", "time": "2:00 PM", "venue": "GMall Cebu"},
        ]},
    ])
    venues = aggregate_venues(schedule)
    assert [v.venue_name for v in venues] == ["GMall", "GMall Cebu"]
    assert venues[0].location == venues[1].location


def test_unresolved_venues():
    schedule = make_schedule([
        {"date": "2025-01-10", "events": [
            {"name": "A", "time": "1:00 PM", "venue": "IT Park"},
            {"name": "B", "time": "2:00 PM", "venue": ["GMall", "IT Park"]},
            {"name": "C", "time": "3:00 PM", "venue": "Venue to be announced"},
            {"name": "D", "time": "4:00 PM", "venue": "Pier 1"},
        ]},
    ])
    assert unresolved_venues(schedule) == ["IT Park", "Pier 1"]
