#!/usr/bin/env python3
"""
Run the schedule map with uvicorn.

Usage:
    python start_api.py                   # http://0.0.0.0:8001
    python start_api.py --port 8080 --reload
"""

import argparse
import os

import uvicorn
from dotenv import load_dotenv


def main():
    load_dotenv()
    parser = argparse.ArgumentParser(description="Serve the festival schedule map")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8001)
    parser.add_argument("--reload", action="store_true", help="Restart when source files change")
    args = parser.parse_args()

    if not os.getenv("GOOGLE_MAPS_API_KEY"):
        print("⚠️  GOOGLE_MAPS_API_KEY is not set, the map will not load")
    print(f"📍 http://{args.host}:{args.port}  (API docs at /docs)")

    options = {"host": args.host, "port": args.port, "log_level": "info"}
    if args.reload:
        options.update(reload=True, reload_dirs=["api", "ingest", "venues", "views"])
    uvicorn.run("api.main:app", **options)


if __name__ == "__main__":
    main()
