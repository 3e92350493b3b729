"""Environment configuration for the schedule map service."""
from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from ingest.schemas import Location

load_dotenv()

BASE_PATH = Path(__file__).resolve().parent.parent
DEFAULT_SCHEDULE = BASE_PATH / "data" / "schedule.json"

SCHEDULE_PATH = Path(os.getenv("SCHEDULE_PATH", str(DEFAULT_SCHEDULE)))
SCHEDULE_URL = os.getenv("SCHEDULE_URL") or None
GOOGLE_MAPS_API_KEY = os.getenv("GOOGLE_MAPS_API_KEY", "")

API_TITLE = "Festival Schedule Map"
API_VERSION = "1.0.0"

# Cebu City
MAP_CENTER = Location(lat=10.3157, lng=123.8854)
DEFAULT_ZOOM = 13
FOCUS_ZOOM = 15

if os.getenv("SCHEDULE_DEBUG"):
    logging.basicConfig(level=logging.INFO, format="%(message)s")
