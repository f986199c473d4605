from __future__ import annotations

"""Dataclass models representing planner records and their wire format."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional


DAYS = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]

COLORS = [
    "bg-blue-100 text-blue-700 border-blue-200",
    "bg-emerald-100 text-emerald-700 border-emerald-200",
    "bg-violet-100 text-violet-700 border-violet-200",
    "bg-amber-100 text-amber-700 border-amber-200",
    "bg-rose-100 text-rose-700 border-rose-200",
    "bg-indigo-100 text-indigo-700 border-indigo-200",
]

CATEGORIES = ["General", "Work", "Health", "Social", "Personal"]

DEFAULT_CATEGORY = CATEGORIES[0]
DEFAULT_COLOR = COLORS[0]
DEFAULT_START = "09:00"
DEFAULT_END = "10:00"


@dataclass(slots=True)
class Activity:
    id: Optional[int]
    title: str
    start_time: str  # HH:mm
    end_time: str  # HH:mm
    day_of_week: int  # 0-6, Sunday=0
    category: Optional[str] = None
    color: Optional[str] = None
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "dayOfWeek": self.day_of_week,
            "category": self.category,
            "color": self.color,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Activity":
        return cls(
            id=data.get("id"),
            title=data["title"],
            start_time=data["startTime"],
            end_time=data["endTime"],
            day_of_week=int(data["dayOfWeek"]),
            category=data.get("category"),
            color=data.get("color"),
            completed=bool(data.get("completed", False)),
        )


@dataclass(slots=True)
class Template:
    id: Optional[int]
    title: str
    category: Optional[str] = None
    color: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Template":
        return cls(
            id=data.get("id"),
            title=data["title"],
            category=data.get("category"),
            color=data.get("color"),
        )


__all__ = [
    "Activity",
    "Template",
    "DAYS",
    "COLORS",
    "CATEGORIES",
    "DEFAULT_CATEGORY",
    "DEFAULT_COLOR",
    "DEFAULT_START",
    "DEFAULT_END",
]
