"""Repository for application switch events."""
import datetime
from typing import List, Optional
from ..models import AppEvent
from .connection import get_cursor


class UsageRepository:
    """
    Reads the app_usage table.

    Rows are written by the window tracker that records application
    switches; this package only reads them.
    """

    SWITCH_TO = "switch_to"
    SWITCH_FROM = "switch_from"

    def __init__(self, db_path: Optional[str] = None) -> None:
        self.db_path = db_path

    def find_events_in_period(self, start: datetime.datetime,
                              end: datetime.datetime) -> List[AppEvent]:
        """Find all events in [start, end), oldest first."""
        with get_cursor(self.db_path) as cur:
            cur.execute("""
                SELECT id, timestamp, app_name, event_type, window_title
                FROM app_usage
                WHERE timestamp >= ? AND timestamp < ?
                ORDER BY timestamp ASC, id ASC
            """, (start.isoformat(), end.isoformat()))

            return [AppEvent(id=r[0], timestamp=r[1], app_name=r[2],
                             event_type=r[3], window_title=r[4] or "")
                    for r in cur.fetchall()]

    def find_last_event_before(self, before: datetime.datetime) -> Optional[AppEvent]:
        """Find the most recent event strictly before a given time."""
        with get_cursor(self.db_path) as cur:
            cur.execute("""
                SELECT id, timestamp, app_name, event_type, window_title
                FROM app_usage
                WHERE timestamp < ?
                ORDER BY timestamp DESC, id DESC
                LIMIT 1
            """, (before.isoformat(),))

            row = cur.fetchone()
            if row:
                return AppEvent(id=row[0], timestamp=row[1], app_name=row[2],
                                event_type=row[3], window_title=row[4] or "")
            return None
