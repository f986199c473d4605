from __future__ import annotations

"""PlannerStore holds the client-side view state and talks to the API.

State is an immutable ``PlannerState``; every transition goes through the pure
``reduce(state, action)`` function. The store performs the API call first and
only dispatches the matching action when it succeeded, so a failed call leaves
the previous state in place (apart from ``last_error``).
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
import logging
from typing import Any, Callable, Mapping, Optional, Union

from PyQt6.QtCore import QObject, pyqtSignal

from .api_client import PlannerApiClient, PlannerApiError
from .models import Activity, Template
from .schedule import (
    ActivityCard,
    Draft,
    ValidationError,
    activities_for_day,
    card_for,
    day_of_week,
    default_draft,
    draft_from_template,
    next_day,
    previous_day,
    template_from_activity,
    toggled,
    validate_activity_fields,
    validate_template_fields,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class PlannerState:
    selected_day: int
    draft: Draft
    activities: tuple[Activity, ...] = ()
    templates: tuple[Template, ...] = ()
    draft_open: bool = False
    templates_open: bool = False
    loading: bool = True
    last_error: Optional[str] = None


def initial_state(selected_day: int) -> PlannerState:
    return PlannerState(selected_day=selected_day, draft=default_draft(selected_day))


# --- Actions ----------------------------------------------------------------

@dataclass(frozen=True)
class Loaded:
    activities: tuple[Activity, ...]
    templates: tuple[Template, ...]


@dataclass(frozen=True)
class Failed:
    message: str


@dataclass(frozen=True)
class SelectDay:
    day: int


@dataclass(frozen=True)
class NextDay:
    pass


@dataclass(frozen=True)
class PreviousDay:
    pass


@dataclass(frozen=True)
class OpenDraft:
    pass


@dataclass(frozen=True)
class CloseDraft:
    pass


@dataclass(frozen=True)
class UpdateDraft:
    changes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DraftSubmitted:
    pass


@dataclass(frozen=True)
class OpenTemplates:
    pass


@dataclass(frozen=True)
class CloseTemplates:
    pass


@dataclass(frozen=True)
class UseTemplate:
    template: Template


@dataclass(frozen=True)
class ActivityToggled:
    activity_id: int


@dataclass(frozen=True)
class ActivityRemoved:
    activity_id: int


@dataclass(frozen=True)
class TemplateRemoved:
    template_id: int


Action = Union[
    Loaded, Failed, SelectDay, NextDay, PreviousDay, OpenDraft, CloseDraft,
    UpdateDraft, DraftSubmitted, OpenTemplates, CloseTemplates, UseTemplate,
    ActivityToggled, ActivityRemoved, TemplateRemoved,
]


def reduce(state: PlannerState, action: Action) -> PlannerState:
    if isinstance(action, Loaded):
        return replace(
            state,
            activities=tuple(action.activities),
            templates=tuple(action.templates),
            loading=False,
            last_error=None,
        )
    if isinstance(action, Failed):
        return replace(state, loading=False, last_error=action.message)
    if isinstance(action, SelectDay):
        if not 0 <= action.day <= 6:
            raise ValueError(f"day must be 0-6, got {action.day}")
        return replace(state, selected_day=action.day)
    if isinstance(action, NextDay):
        return replace(state, selected_day=next_day(state.selected_day))
    if isinstance(action, PreviousDay):
        return replace(state, selected_day=previous_day(state.selected_day))
    if isinstance(action, OpenDraft):
        return replace(
            state,
            draft=replace(state.draft, day_of_week=state.selected_day),
            draft_open=True,
        )
    if isinstance(action, CloseDraft):
        return replace(state, draft_open=False)
    if isinstance(action, UpdateDraft):
        return replace(state, draft=replace(state.draft, **dict(action.changes)))
    if isinstance(action, DraftSubmitted):
        # Only the title is cleared; times, category and color carry over.
        return replace(state, draft=replace(state.draft, title=""), draft_open=False)
    if isinstance(action, OpenTemplates):
        return replace(state, templates_open=True)
    if isinstance(action, CloseTemplates):
        return replace(state, templates_open=False)
    if isinstance(action, UseTemplate):
        return replace(
            state,
            draft=draft_from_template(action.template, state.selected_day, state.draft),
            templates_open=False,
            draft_open=True,
        )
    if isinstance(action, ActivityToggled):
        return replace(
            state,
            activities=tuple(
                toggled(a) if a.id == action.activity_id else a for a in state.activities
            ),
            last_error=None,
        )
    if isinstance(action, ActivityRemoved):
        return replace(
            state,
            activities=tuple(a for a in state.activities if a.id != action.activity_id),
            last_error=None,
        )
    if isinstance(action, TemplateRemoved):
        return replace(
            state,
            templates=tuple(t for t in state.templates if t.id != action.template_id),
            last_error=None,
        )
    raise TypeError(f"unknown action: {action!r}")


# --- Store ------------------------------------------------------------------

class PlannerStore(QObject):
    changed = pyqtSignal()
    error = pyqtSignal(str)

    def __init__(
        self,
        client: PlannerApiClient,
        selected_day: Optional[int] = None,
        time_provider: Optional[Callable[[], datetime]] = None,
    ):
        super().__init__()
        self._client = client
        if selected_day is None:
            selected_day = day_of_week((time_provider or datetime.now)())
        self._state = initial_state(selected_day)

    @property
    def state(self) -> PlannerState:
        return self._state

    def dispatch(self, action: Action) -> PlannerState:
        self._state = reduce(self._state, action)
        self.changed.emit()
        return self._state

    def _fail(self, what: str, exc: Exception) -> None:
        message = f"Failed to {what}: {exc}"
        logger.error(message)
        self.dispatch(Failed(message))
        self.error.emit(message)

    # --- Loading --------------------------------------------------------
    def load(self) -> bool:
        try:
            activities = self._client.get_activities()
            templates = self._client.get_templates()
        except PlannerApiError as e:
            self._fail("load data", e)
            return False
        self.dispatch(Loaded(tuple(activities), tuple(templates)))
        return True

    # --- Activities -----------------------------------------------------
    def open_draft(self) -> None:
        self.dispatch(OpenDraft())

    def close_draft(self) -> None:
        self.dispatch(CloseDraft())

    def update_draft(self, **changes: Any) -> None:
        self.dispatch(UpdateDraft(changes))

    def submit_draft(self) -> bool:
        draft = self._state.draft
        try:
            validate_activity_fields(draft.to_payload())
        except ValidationError as e:
            self.error.emit(str(e))
            return False
        try:
            new_id = self._client.add_activity(draft)
        except PlannerApiError as e:
            self._fail("add activity", e)
            return False
        logger.info("activity added", extra={"_json_id": new_id})
        self.load()
        self.dispatch(DraftSubmitted())
        return True

    def toggle(self, activity_id: int) -> bool:
        try:
            self._client.toggle_activity(activity_id)
        except PlannerApiError as e:
            self._fail("toggle activity", e)
            return False
        self.dispatch(ActivityToggled(activity_id))
        return True

    def delete_activity(self, activity_id: int) -> bool:
        try:
            self._client.delete_activity(activity_id)
        except PlannerApiError as e:
            self._fail("delete activity", e)
            return False
        self.dispatch(ActivityRemoved(activity_id))
        return True

    # --- Templates ------------------------------------------------------
    def open_templates(self) -> None:
        self.dispatch(OpenTemplates())

    def close_templates(self) -> None:
        self.dispatch(CloseTemplates())

    def save_as_template(self, activity: Activity) -> bool:
        return self._add_template(template_from_activity(activity))

    def create_template(self, title: str, category: str | None = None, color: str | None = None) -> bool:
        try:
            template = validate_template_fields({"title": title, "category": category, "color": color})
        except ValidationError as e:
            self.error.emit(str(e))
            return False
        return self._add_template(template)

    def _add_template(self, template: Template) -> bool:
        try:
            self._client.add_template(template)
        except PlannerApiError as e:
            self._fail("save template", e)
            return False
        self.load()
        return True

    def use_template(self, template: Template) -> Draft:
        return self.dispatch(UseTemplate(template)).draft

    def delete_template(self, template_id: int) -> bool:
        try:
            self._client.delete_template(template_id)
        except PlannerApiError as e:
            self._fail("delete template", e)
            return False
        self.dispatch(TemplateRemoved(template_id))
        return True

    # --- Day navigation -------------------------------------------------
    def select_day(self, day: int) -> None:
        self.dispatch(SelectDay(day))

    def next_day(self) -> None:
        self.dispatch(NextDay())

    def previous_day(self) -> None:
        self.dispatch(PreviousDay())

    # --- Access ---------------------------------------------------------
    def day_activities(self) -> list[Activity]:
        return activities_for_day(self._state.activities, self._state.selected_day)

    def day_view(self, current_day: int, current_time: str) -> list[ActivityCard]:
        """Cards for the selected day; an empty list is the empty state."""
        return [card_for(a, current_day, current_time) for a in self.day_activities()]


__all__ = [
    "PlannerStore",
    "PlannerState",
    "initial_state",
    "reduce",
    "Loaded",
    "Failed",
    "SelectDay",
    "NextDay",
    "PreviousDay",
    "OpenDraft",
    "CloseDraft",
    "UpdateDraft",
    "DraftSubmitted",
    "OpenTemplates",
    "CloseTemplates",
    "UseTemplate",
    "ActivityToggled",
    "ActivityRemoved",
    "TemplateRemoved",
]
