"""Day-of-week and week-of-month lookup tables."""

import math
from types import MappingProxyType

from ..models import DayOrdinal
from .date_utils import DateLike, coerce_date

# Sunday-first, matching the index used by the rest of the platform
DAY_CODES: tuple[str, ...] = ("SU", "MO", "TU", "WE", "TH", "FR", "SA")

DAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

DAY_NAME_BY_CODE = MappingProxyType(dict(zip(DAY_CODES, DAY_NAMES)))

ORDINAL_LABELS = MappingProxyType({1: "1st", 2: "2nd", 3: "3rd", 4: "4th", 5: "5th"})


def ordinal_label(nth: int) -> str:
    """Return ``1st``..``5th``, ``last`` for -1 and ``2nd to last`` style for other negatives."""
    if nth == -1:
        return "last"
    if nth < 0:
        return f"{ordinal_label(-nth)} to last"
    return ORDINAL_LABELS.get(nth, f"{nth}th")


def get_day_ordinal(value: DateLike) -> DayOrdinal:
    """Describe the weekday of a date and its position within the month.

    ``nth`` is ``ceil(day_of_month / 7)``, so the 2nd is always in the first
    week and the 29th-31st fall in the fifth.

    Args:
        value: Calendar date or ``YYYY-MM-DD`` string

    Returns:
        DayOrdinal, e.g. day_code "TU", day_index 2, nth 1 for 2024-01-02
    """
    day = coerce_date(value)
    # isoweekday: Monday=1 .. Sunday=7
    day_index = day.isoweekday() % 7
    return DayOrdinal(
        day_code=DAY_CODES[day_index],
        day_index=day_index,
        nth=math.ceil(day.day / 7),
        day_name=DAY_NAMES[day_index],
    )
