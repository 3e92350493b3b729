"""Render the schedule page: event list, filters and the venue map."""
from __future__ import annotations

import json
from html import escape
from typing import List, Optional
from urllib.parse import urlencode

from api.settings import FOCUS_ZOOM
from ingest.schemas import ScheduleData, VenueWithEvents
from venues.resolver import is_actionable

from .filters import date_options, filter_days, location_options
from .focus import MapViewState, Viewport
from .formatting import day_heading, option_label, popup_heading


def focus_key(date: str, index: int) -> str:
    """Identifier of the ``index``-th event of ``date`` in page links."""
    return f"{date}/{index}"


def render_popup(venue: VenueWithEvents) -> str:
    """Info window body: the venue's events grouped by date."""
    sections = ""
    for d in venue.dates():
        items = ""
        for event in venue.events_on(d):
            items += (
                f'<div class="popup-event"><p class="popup-name">{escape(event.name)}</p>'
                f'<p class="popup-time">Time: {escape(event.time)}</p></div>'
            )
        sections += f'<div class="popup-day"><p class="popup-date">{escape(popup_heading(d))}</p>{items}</div>'
    return f'<div class="popup"><h3>{escape(venue.venue_name)}</h3><div class="popup-body">{sections}</div></div>'


def map_payload(
    venues: List[VenueWithEvents],
    state: MapViewState,
    viewport: Viewport,
    close_url: Optional[str] = None,
) -> dict:
    """Data handed to the map provider's script.

    ``closeUrl`` is the page without the focused event, loaded when a popup
    is closed; it is null when nothing is focused.
    """
    markers = []
    for venue in state.filtered_venues(venues):
        markers.append({
            "venueName": venue.venue_name,
            "position": venue.location.to_dict(),
            "visible": state.marker_visible(venue),
            "popupOpen": state.popup_open(venue),
            "popupHtml": render_popup(venue),
        })
    return {
        "center": viewport.center.to_dict(),
        "zoom": viewport.zoom,
        "markers": markers,
        "closeUrl": close_url,
    }


def selected_focus_key(schedule: ScheduleData, state: MapViewState) -> Optional[str]:
    """Focus key of the focused event, or None when nothing is focused."""
    selected = state.selected_event
    if selected is None:
        return None
    day = schedule.day(selected.date)
    if day is None:
        return None
    for index, event in enumerate(day.events):
        if event == selected.event:
            return focus_key(day.date, index)
    return None


def _page_url(state: MapViewState, **overrides: str) -> str:
    params = {"date": state.selected_date, "location": state.selected_location}
    params.update(overrides)
    query = urlencode({k: v for k, v in params.items() if v})
    return f"/?{query}" if query else "/"


def _select(name: str, all_label: str, options: list[tuple[str, str]], selected: str) -> str:
    html = f'<select name="{name}" onchange="this.form.submit()"><option value="">{all_label}</option>'
    for value, label in options:
        attr = " selected" if value == selected else ""
        html += f'<option value="{escape(value)}"{attr}>{escape(label)}</option>'
    return html + "</select>"


def render_event_list(schedule: ScheduleData, state: MapViewState) -> str:
    sections = ""
    for day in filter_days(schedule, state.selected_date):
        rows = ""
        for index, event in enumerate(day.events):
            body = (
                f'<h3>{escape(event.name)}</h3>'
                f'<p class="time">Time: {escape(event.time)}</p>'
                f'<p class="venue">Venue: {escape(event.venue_label)}</p>'
            )
            if event.description:
                body += f'<p class="description">{escape(event.description)}</p>'

            if is_actionable(event):
                classes = "event clickable"
                if state.is_focused(event, day.date):
                    classes += " selected"
                href = _page_url(state, focus=focus_key(day.date, index))
                rows += f'<a class="{classes}" href="{escape(href)}">{body}</a>\n'
            else:
                rows += f'<div class="event disabled">{body}</div>\n'

        range_label = f'<p class="date-range">{escape(day.date_range)}</p>' if day.date_range else ""
        sections += f"""
        <section class="day">
            <h2>{escape(day_heading(day.date))}</h2>
            {range_label}
            <div class="events">{rows}</div>
        </section>
        """
    return sections


def render_page(
    schedule: ScheduleData,
    venues: List[VenueWithEvents],
    state: MapViewState,
    *,
    maps_api_key: str = "",
) -> str:
    """Return the full HTML document for the current view state.

    ``state.map`` must be a :class:`Viewport` for the focused camera to be
    embedded; otherwise the default camera is used.
    """
    viewport = state.map if isinstance(state.map, Viewport) else Viewport()
    focused = selected_focus_key(schedule, state)
    close_url = _page_url(state) if focused else None
    payload = json.dumps(map_payload(venues, state, viewport, close_url)).replace("</", "<\\/")

    date_select = _select(
        "date", "All Dates",
        [(d, option_label(d)) for d in date_options(schedule)],
        state.selected_date,
    )
    location_select = _select(
        "location", "All Locations",
        [(name, name) for name in location_options(schedule)],
        state.selected_location,
    )
    focus_input = (
        f'<input type="hidden" name="focus" value="{escape(focused)}">' if focused else ""
    )
    maps_src = "https://maps.googleapis.com/maps/api/js?" + urlencode(
        {"key": maps_api_key, "callback": "initMap"}
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(schedule.event_name)} Events</title>
    <style>
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}
        body {{
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif;
            height: 100vh;
            display: flex;
            flex-direction: column;
            color: #1a1a1a;
        }}
        header {{ text-align: center; padding: 16px; box-shadow: 0 1px 2px rgba(0,0,0,0.08); }}
        header h1 {{ font-size: 1.5em; font-weight: 700; }}
        header p {{ color: #666; }}
        .content {{ display: flex; flex: 1; overflow: hidden; }}
        .sidebar {{ width: 33%; overflow-y: auto; border-right: 1px solid #ddd; padding: 16px; }}
        select {{ width: 100%; padding: 8px; margin-bottom: 16px; border: 1px solid #ccc; border-radius: 4px; }}
        .day {{ border: 1px solid #ddd; border-radius: 8px; padding: 16px; margin-bottom: 16px; }}
        .day h2 {{ font-size: 1.1em; margin-bottom: 12px; }}
        .date-range {{ color: #666; font-size: 0.85em; margin-bottom: 8px; }}
        .event {{ display: block; padding: 12px; margin-bottom: 8px; border-radius: 4px; background: #f7f7f7; color: inherit; text-decoration: none; }}
        .event h3 {{ font-size: 1em; font-weight: 500; }}
        .event p {{ font-size: 0.875em; color: #555; }}
        .event.clickable:hover {{ background: #eee; }}
        .event.selected {{ background: #eff6ff; border: 1px solid #bfdbfe; }}
        .event.disabled {{ opacity: 0.75; }}
        #map {{ flex: 1; }}
        .popup h3 {{ font-weight: 600; }}
        .popup-body {{ margin-top: 8px; max-height: 160px; overflow-y: auto; }}
        .popup-day {{ margin-bottom: 12px; }}
        .popup-date {{ font-weight: 500; font-size: 0.875em; }}
        .popup-event {{ margin-left: 8px; font-size: 0.875em; }}
    </style>
</head>
<body>
    <header>
        <h1>{escape(schedule.event_name)}</h1>
        <p>{escape(schedule.tagline)}</p>
    </header>
    <div class="content">
        <div class="sidebar">
            <form method="get" action="/">
                {date_select}
                {location_select}
                {focus_input}
            </form>
            {render_event_list(schedule, state)}
        </div>
        <div id="map"></div>
    </div>
    <script id="map-data" type="application/json">{payload}</script>
    <script>
        function initMap() {{
            const data = JSON.parse(document.getElementById("map-data").textContent);
            const map = new google.maps.Map(document.getElementById("map"), {{
                center: data.center,
                zoom: data.zoom,
            }});
            data.markers.forEach((m) => {{
                const marker = new google.maps.Marker({{
                    position: m.position,
                    map: map,
                    visible: m.visible,
                    title: m.venueName,
                }});
                const info = new google.maps.InfoWindow({{ content: m.popupHtml }});
                info.addListener("closeclick", () => {{
                    if (data.closeUrl) {{
                        window.location.assign(data.closeUrl);
                    }}
                }});
                marker.addListener("click", () => {{
                    map.panTo(m.position);
                    map.setZoom({FOCUS_ZOOM});
                }});
                if (m.popupOpen) {{
                    info.open({{ map: map, anchor: marker }});
                }}
            }});
        }}
    </script>
    <script async src="{escape(maps_src)}"></script>
</body>
</html>"""
