"""Data models for recurring event expansion."""

from datetime import date, datetime, time
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Content fields an instance override may replace; everything else is
# inherited from the parent event unchanged.
OVERRIDABLE_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "location_name",
    "location_address",
    "location_city",
    "location_state",
    "location_zip",
    "is_virtual",
    "virtual_link",
    "start_time",
    "end_time",
    "max_attendees",
    "rsvp_deadline",
)


class EventStatus(str, Enum):
    """Lifecycle status of an authored event."""

    DRAFT = "draft"
    PUBLISHED = "published"
    CANCELLED = "cancelled"


class EndType(str, Enum):
    """How a recurring series ends."""

    NEVER = "never"
    DATE = "date"
    COUNT = "count"


class Event(BaseModel):
    """An authored event, recurring or not.

    ``start_date`` is the anchor of the series. ``rrule`` is ``None`` for a
    single-instance event. Columns the engine does not know about are kept
    as extra fields and carried into expanded instances untouched.
    """

    id: Union[str, int]
    start_date: date = Field(..., description="Anchor date (first occurrence)")
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    rrule: Optional[str] = Field(default=None, description="Recurrence rule string")

    title: str = ""
    description: Optional[str] = None
    location_name: Optional[str] = None
    location_address: Optional[str] = None
    location_city: Optional[str] = None
    location_state: Optional[str] = None
    location_zip: Optional[str] = None
    is_virtual: bool = False
    virtual_link: Optional[str] = None
    max_attendees: Optional[int] = None
    rsvp_deadline: Optional[datetime] = None

    status: EventStatus = EventStatus.PUBLISHED

    model_config = ConfigDict(extra="allow", frozen=True)


class EventInstanceOverride(BaseModel):
    """Sparse per-occurrence exception for a recurring event.

    ``instance_date`` is the date the base rule produces, not the date the
    occurrence is moved to. ``None`` fields inherit from the parent event.
    """

    event_id: Union[str, int]
    instance_date: date

    title: Optional[str] = None
    description: Optional[str] = None
    location_name: Optional[str] = None
    location_address: Optional[str] = None
    location_city: Optional[str] = None
    location_state: Optional[str] = None
    location_zip: Optional[str] = None
    is_virtual: Optional[bool] = None
    virtual_link: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    max_attendees: Optional[int] = None
    rsvp_deadline: Optional[datetime] = None

    is_cancelled: bool = False

    model_config = ConfigDict(extra="ignore", frozen=True)

    def explicit_fields(self) -> dict[str, object]:
        """Return the overridable fields that are explicitly set."""
        return {
            name: getattr(self, name)
            for name in OVERRIDABLE_FIELDS
            if getattr(self, name) is not None
        }


class ExpandedInstance(Event):
    """One concrete occurrence ready for rendering. Never persisted."""

    instance_date: date
    is_recurring: bool = False
    is_cancelled: bool = False


class RuleOptions(BaseModel):
    """End condition and custom parameters for building a rule string."""

    end_type: EndType = EndType.NEVER
    end_date: Optional[date] = None
    count: Optional[int] = Field(default=None, ge=1, description="Number of occurrences")

    # Only consulted for the "custom" preset
    custom_freq: Optional[str] = Field(default=None, description="WEEKLY or MONTHLY")
    custom_interval: Optional[int] = None
    custom_by_day: list[str] = Field(default_factory=list)
    custom_monthly_position: Optional[str] = Field(
        default=None, description="Ordinal day token such as 2TU or -1FR"
    )

    model_config = ConfigDict(use_enum_values=True)


class EndCondition(BaseModel):
    """End condition recovered from a stored rule string."""

    end_type: EndType = EndType.NEVER
    end_date: Optional[date] = None
    count: Optional[int] = None

    model_config = ConfigDict(use_enum_values=True)


class Preset(BaseModel):
    """A selectable recurrence choice."""

    key: str
    label: str

    model_config = ConfigDict(frozen=True)


class DayOrdinal(BaseModel):
    """Weekday and week-of-month position of a calendar date."""

    day_code: str
    day_index: int = Field(..., ge=0, le=6, description="0 = Sunday")
    nth: int = Field(..., ge=1, le=5)
    day_name: str

    model_config = ConfigDict(frozen=True)
