from __future__ import annotations

"""Scheduling and status derivation for the weekly planner.

Everything here is a pure function over in-memory records:
 - day filtering and chronological ordering of a day's activities,
 - wraparound day navigation,
 - time-window status classification (past / now / future),
 - template <-> draft activity projections.

Times are zero-padded "HH:mm" strings, so plain string comparison orders
them chronologically within a day.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
import re
from typing import Any, Iterable, Mapping, Optional

from .models import (
    Activity,
    Template,
    DEFAULT_CATEGORY,
    DEFAULT_COLOR,
    DEFAULT_START,
    DEFAULT_END,
)

_HHMM_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class ValidationError(ValueError):
    pass


class Status(str, Enum):
    PAST = "past"
    NOW = "now"
    FUTURE = "future"


# --- Validation ---------------------------------------------------------

def is_valid_hhmm(value: Any) -> bool:
    return isinstance(value, str) and bool(_HHMM_RE.match(value))


def _require_title(payload: Mapping[str, Any]) -> str:
    title = payload.get("title")
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("title is required")
    return title.strip()


def _optional_text(payload: Mapping[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be text")
    return value


def validate_activity_fields(payload: Mapping[str, Any]) -> Activity:
    """Check a create-activity payload (wire names) and build an Activity.

    ``endTime`` is not required to follow ``startTime``.
    """
    title = _require_title(payload)
    start = payload.get("startTime")
    end = payload.get("endTime")
    if not is_valid_hhmm(start):
        raise ValidationError("startTime must be HH:mm")
    if not is_valid_hhmm(end):
        raise ValidationError("endTime must be HH:mm")
    day = payload.get("dayOfWeek")
    if isinstance(day, bool) or not isinstance(day, int) or not (0 <= day <= 6):
        raise ValidationError("dayOfWeek must be an integer 0-6")
    return Activity(
        id=None,
        title=title,
        start_time=start,
        end_time=end,
        day_of_week=day,
        category=_optional_text(payload, "category"),
        color=_optional_text(payload, "color"),
        completed=False,
    )


def validate_template_fields(payload: Mapping[str, Any]) -> Template:
    return Template(
        id=None,
        title=_require_title(payload),
        category=_optional_text(payload, "category"),
        color=_optional_text(payload, "color"),
    )


# --- Clock helpers ------------------------------------------------------

def day_of_week(dt: datetime) -> int:
    """Sunday=0 .. Saturday=6."""
    return dt.isoweekday() % 7


def hhmm(dt: datetime) -> str:
    return f"{dt.hour:02d}:{dt.minute:02d}"


# --- Day filter & navigation -------------------------------------------

def activities_for_day(activities: Iterable[Activity], day: int) -> list[Activity]:
    # sorted() is stable, equal start times keep their source order
    return sorted(
        (a for a in activities if a.day_of_week == day),
        key=lambda a: a.start_time,
    )


def next_day(day: int) -> int:
    return (day + 1) % 7


def previous_day(day: int) -> int:
    return (day - 1 + 7) % 7


# --- Status -------------------------------------------------------------

def activity_status(activity: Activity, current_day: int, current_time: str) -> Status:
    # Any other day, including ones already gone this week, counts as future.
    if activity.day_of_week != current_day:
        return Status.FUTURE
    if current_time > activity.end_time:
        return Status.PAST
    if activity.start_time <= current_time <= activity.end_time:
        return Status.NOW
    return Status.FUTURE


@dataclass(slots=True, frozen=True)
class ActivityCard:
    activity: Activity
    status: Status
    dimmed: bool
    label: Optional[str]  # "Now", "Ended" or None


def card_for(activity: Activity, current_day: int, current_time: str) -> ActivityCard:
    status = activity_status(activity, current_day, current_time)
    label: Optional[str] = None
    if status is Status.NOW:
        label = "Now"
    elif status is Status.PAST and not activity.completed:
        label = "Ended"
    return ActivityCard(
        activity=activity,
        status=status,
        dimmed=activity.completed or status is Status.PAST,
        label=label,
    )


def toggled(activity: Activity) -> Activity:
    return replace(activity, completed=not activity.completed)


# --- Drafts & templates -------------------------------------------------

@dataclass(slots=True, frozen=True)
class Draft:
    """Values of the new-activity form before submission."""

    title: str
    start_time: str
    end_time: str
    day_of_week: int
    category: str = DEFAULT_CATEGORY
    color: str = DEFAULT_COLOR

    def to_payload(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "dayOfWeek": self.day_of_week,
            "category": self.category,
            "color": self.color,
        }


def default_draft(day: int) -> Draft:
    return Draft(title="", start_time=DEFAULT_START, end_time=DEFAULT_END, day_of_week=day)


def draft_from_template(template: Template, day: int, current: Draft | None = None) -> Draft:
    """Pre-fill a draft from a template for the selected day.

    Templates carry no times; the current draft's start/end are kept.
    """
    base = current or default_draft(day)
    return replace(
        base,
        title=template.title,
        category=template.category or DEFAULT_CATEGORY,
        color=template.color or DEFAULT_COLOR,
        day_of_week=day,
    )


def template_from_activity(activity: Activity) -> Template:
    return Template(
        id=None,
        title=activity.title,
        category=activity.category,
        color=activity.color,
    )


__all__ = [
    "ValidationError",
    "Status",
    "ActivityCard",
    "Draft",
    "is_valid_hhmm",
    "validate_activity_fields",
    "validate_template_fields",
    "day_of_week",
    "hhmm",
    "activities_for_day",
    "next_day",
    "previous_day",
    "activity_status",
    "card_for",
    "toggled",
    "default_draft",
    "draft_from_template",
    "template_from_activity",
]
