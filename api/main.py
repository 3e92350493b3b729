"""FastAPI application serving the festival schedule and venue map."""
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

from api import settings
from ingest.schedule_loader import ScheduleLoadError, load_configured_schedule
from ingest.schemas import ScheduleData, VenueWithEvents
from venues.aggregator import aggregate_venues
from views.filters import apply_filters, date_options, location_options
from views.focus import MapViewState, Viewport
from views.render import render_page

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.API_TITLE,
    description="Festival event schedule with an interactive venue map",
    version=settings.API_VERSION,
)


class LocationModel(BaseModel):
    lat: float
    lng: float


class VenueEventModel(BaseModel):
    name: str
    date: str
    time: str


class VenueModel(BaseModel):
    """A resolvable venue and the events held there."""
    venueName: str
    lat: float
    lng: float
    events: List[VenueEventModel]


class SelectedEventModel(BaseModel):
    """An event with its day and the coordinates of its first venue."""
    name: str
    time: str
    venue: List[str]
    description: Optional[str] = None
    date: str
    location: Optional[LocationModel] = None
    actionable: bool


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    version: str


def get_schedule(request: Request) -> ScheduleData:
    """Return the dataset, loading it on first use."""
    schedule = getattr(request.app.state, "schedule", None)
    if schedule is None:
        schedule = load_configured_schedule(settings.SCHEDULE_PATH, settings.SCHEDULE_URL)
        request.app.state.schedule = schedule
        logger.info("Schedule %r ready", schedule.event_name)
    return schedule


def _venue_model(venue: VenueWithEvents) -> VenueModel:
    return VenueModel(
        venueName=venue.venue_name,
        lat=venue.lat,
        lng=venue.lng,
        events=[VenueEventModel(name=e.name, date=e.date, time=e.time) for e in venue.events],
    )


def _health(status: str) -> HealthResponse:
    return HealthResponse(
        status=status,
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.API_VERSION,
    )


def build_view_state(
    schedule: ScheduleData,
    date: Optional[str] = None,
    location: Optional[str] = None,
    focus: Optional[str] = None,
) -> MapViewState:
    """Replay the query-string selections onto a fresh view state."""
    state = MapViewState()
    state.map_loaded(Viewport(center=settings.MAP_CENTER, zoom=settings.DEFAULT_ZOOM))
    state.select_date(date)
    state.select_location(location)

    if focus:
        day_date, _, raw_index = focus.rpartition("/")
        day = schedule.day(day_date)
        if day is not None and raw_index.isdigit() and int(raw_index) < len(day.events):
            state.click_event(day.events[int(raw_index)], day.date)
        else:
            logger.info("Ignoring unknown focus %r", focus)
    return state


@app.exception_handler(ScheduleLoadError)
async def schedule_unavailable(request: Request, exc: ScheduleLoadError):
    logger.error("Schedule not available: %s", exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return _health("healthy")


@app.get("/live", response_model=HealthResponse)
async def liveness_check():
    """Liveness check endpoint for container orchestration."""
    return _health("alive")


@app.get("/ready", response_model=HealthResponse)
def readiness_check(request: Request):
    """Ready once the schedule dataset has been loaded."""
    try:
        get_schedule(request)
    except ScheduleLoadError as exc:
        logger.error("Schedule not available: %s", exc)
        return JSONResponse(status_code=503, content=_health("not_ready").model_dump())
    return _health("ready")


@app.get("/", response_class=HTMLResponse)
def schedule_page(
    date: Optional[str] = None,
    location: Optional[str] = None,
    focus: Optional[str] = None,
    schedule: ScheduleData = Depends(get_schedule),
):
    """Schedule list and venue map for the selected date, location and event."""
    state = build_view_state(schedule, date, location, focus)
    return render_page(
        schedule,
        aggregate_venues(schedule),
        state,
        maps_api_key=settings.GOOGLE_MAPS_API_KEY,
    )


@app.get("/api")
async def api_info():
    """Service information."""
    return {
        "name": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/api/schedule")
def schedule_document(schedule: ScheduleData = Depends(get_schedule)) -> Dict:
    """The dataset in its published document shape."""
    return schedule.to_dict()


@app.get("/api/dates", response_model=List[str])
def list_dates(schedule: ScheduleData = Depends(get_schedule)):
    return date_options(schedule)


@app.get("/api/locations", response_model=List[str])
def list_locations(schedule: ScheduleData = Depends(get_schedule)):
    return location_options(schedule)


@app.get("/api/venues", response_model=List[VenueModel])
def list_venues(
    date: Optional[str] = None,
    location: Optional[str] = None,
    schedule: ScheduleData = Depends(get_schedule),
):
    """
    Venues with their events, filtered by date and/or venue name.

    Venues left without events by the date filter are omitted.
    """
    venues = apply_filters(aggregate_venues(schedule), date, location)
    return [_venue_model(venue) for venue in venues]


@app.get("/api/events/{date}/{index}", response_model=SelectedEventModel)
def event_detail(date: str, index: int, schedule: ScheduleData = Depends(get_schedule)):
    """Focus details for the ``index``-th event of a day."""
    day = schedule.day(date)
    if day is None or not 0 <= index < len(day.events):
        raise HTTPException(status_code=404, detail=f"No event {index} on {date}")

    event = day.events[index]
    state = MapViewState()
    actionable = state.click_event(event, day.date)
    location = state.selected_event.location if actionable else None
    return SelectedEventModel(
        name=event.name,
        time=event.time,
        venue=event.venues,
        description=event.description,
        date=day.date,
        location=LocationModel(**location.to_dict()) if location else None,
        actionable=actionable,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
