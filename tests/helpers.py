"""Shared fixtures: build and seed an app_usage database."""
import datetime
from typing import Optional
from usagestats.db import get_cursor


def create_usage_db(db_path: str) -> None:
    """Create the app_usage table as the window tracker lays it out."""
    with get_cursor(db_path) as cur:
        cur.execute("""
            CREATE TABLE IF NOT EXISTS app_usage (
                id INTEGER PRIMARY KEY,
                timestamp TEXT NOT NULL,
                app_name TEXT NOT NULL,
                window_title TEXT,
                event_type TEXT NOT NULL
            )
        """)
        cur.execute("""
            CREATE INDEX IF NOT EXISTS idx_app_usage_timestamp
            ON app_usage(timestamp)
        """)


def insert_app_event(db_path: str, app_name: str, event_type: str,
                     timestamp: datetime.datetime,
                     window_title: Optional[str] = None) -> None:
    """Insert one switch event with a naive local timestamp."""
    with get_cursor(db_path) as cur:
        cur.execute("""
            INSERT INTO app_usage (timestamp, app_name, window_title, event_type)
            VALUES (?, ?, ?, ?)
        """, (timestamp.isoformat(timespec="seconds"), app_name, window_title or "", event_type))
