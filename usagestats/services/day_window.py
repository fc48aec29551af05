"""Calendar-day window calculation."""
import calendar
import datetime
from typing import Any, Callable, Optional
from ..errors import InvalidArgumentError
from ..models import TimeWindow

MIN_YEAR = 1000
MAX_YEAR = 9999


def _require_int(field: str, value: Any) -> int:
    """Reject anything that is not a plain integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(field, f"expected an integer, got {value!r}")
    return value


class DayWindowCalculator:
    """
    Converts a calendar day into a half-open millisecond window.

    The window runs from local midnight of the day to local midnight of
    the next calendar day, each converted separately so days with a clock
    transition keep their real length. Invalid dates are rejected, never
    normalized into a neighbouring month.

    Args:
        today: Returns the current local date; used for omitted components
        tz: Time zone of the calendar (default: process local time)
    """

    def __init__(self, today: Callable[[], datetime.date] = datetime.date.today,
                 tz: Optional[datetime.tzinfo] = None) -> None:
        self.today = today
        self.tz = tz

    def day_window(self, year: Optional[int] = None, month: Optional[int] = None,
                   day: Optional[int] = None) -> TimeWindow:
        """
        Get [start_of_day, start_of_next_day) for a date.

        Omitted components are taken from today, so a day that is valid
        for one month can be rejected for another: `month=2` on the 31st
        fails on 'day' even though no day was passed. The message then
        lists the components taken from today.

        Raises:
            InvalidArgumentError: naming 'year', 'month' or 'day'
        """
        current = self.today()
        defaulted = [name for name, value in (("year", year), ("month", month), ("day", day))
                     if value is None]
        year = current.year if year is None else _require_int("year", year)
        month = current.month if month is None else _require_int("month", month)
        day = current.day if day is None else _require_int("day", day)

        if not MIN_YEAR <= year <= MAX_YEAR:
            raise InvalidArgumentError("year", f"{year} is not a 4-digit year")
        if not 1 <= month <= 12:
            raise InvalidArgumentError("month", f"{month} is not between 1 and 12")
        days_in_month = calendar.monthrange(year, month)[1]
        if not 1 <= day <= days_in_month:
            raise InvalidArgumentError(
                "day", f"{year}-{month:02d} has {days_in_month} days, got {day}"
                + (f" ({', '.join(defaulted)} taken from today)" if defaulted else "")
            )

        start_date = datetime.date(year, month, day)
        try:
            end_date = start_date + datetime.timedelta(days=1)
        except OverflowError:
            raise InvalidArgumentError("day", f"{start_date.isoformat()} has no next day")

        return TimeWindow(self._midnight_ms(start_date), self._midnight_ms(end_date))

    def _midnight_ms(self, day: datetime.date) -> int:
        """Epoch milliseconds of local midnight at the start of `day`."""
        midnight = datetime.datetime.combine(day, datetime.time.min, tzinfo=self.tz)
        return int(round(midnight.timestamp() * 1000))
