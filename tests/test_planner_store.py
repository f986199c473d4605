from datetime import datetime

import httpx
import pytest

from weekly_planner.api_client import PlannerApiClient, PlannerApiConfig
from weekly_planner.models import Activity, Template, COLORS
from weekly_planner.planner_store import (
    ActivityToggled,
    Failed,
    Loaded,
    NextDay,
    OpenDraft,
    PlannerStore,
    PreviousDay,
    SelectDay,
    UseTemplate,
    initial_state,
    reduce,
)
from weekly_planner.schedule import Status


def _act(id, start, day, completed=False):
    return Activity(id=id, title=f"a{id}", start_time=start, end_time="23:00", day_of_week=day, completed=completed)


# --- Reducer ----------------------------------------------------------------

def test_reduce_is_pure():
    state = initial_state(3)
    after = reduce(state, NextDay())
    assert state.selected_day == 3
    assert after.selected_day == 4


def test_reduce_day_navigation_wraps():
    state = initial_state(6)
    assert reduce(state, NextDay()).selected_day == 0
    assert reduce(initial_state(0), PreviousDay()).selected_day == 6
    with pytest.raises(ValueError):
        reduce(state, SelectDay(7))


def test_reduce_loaded_clears_loading_and_error():
    state = reduce(initial_state(1), Failed("boom"))
    assert state.loading is False and state.last_error == "boom"
    state = reduce(state, Loaded((_act(1, "09:00", 1),), ()))
    assert state.last_error is None and len(state.activities) == 1


def test_reduce_toggle_only_touches_target():
    state = reduce(initial_state(1), Loaded((_act(1, "09:00", 1), _act(2, "10:00", 1)), ()))
    state = reduce(state, ActivityToggled(2))
    assert [a.completed for a in state.activities] == [False, True]


def test_reduce_use_template_opens_prefilled_draft():
    state = reduce(initial_state(5), OpenDraft())
    state = reduce(state, UseTemplate(Template(id=1, title="Run", category=None, color=None)))
    assert state.draft_open and not state.templates_open
    assert state.draft.title == "Run"
    assert state.draft.category == "General"
    assert state.draft.color == COLORS[0]
    assert state.draft.day_of_week == 5


# --- Store against the in-process API -------------------------------------

@pytest.fixture()
def store(api, qtbot):
    s = PlannerStore(api, selected_day=2)
    s.load()
    return s


def test_initial_day_defaults_to_today(api, qtbot):
    s = PlannerStore(api, time_provider=lambda: datetime(2025, 1, 5, 8, 0))  # Sunday
    assert s.state.selected_day == 0
    assert s.state.draft.day_of_week == 0


def test_submit_draft_creates_and_reloads(store, qtbot):
    store.open_draft()
    store.update_draft(title="Piano", start_time="17:00", end_time="18:00", category="Personal")
    with qtbot.waitSignal(store.changed):
        assert store.submit_draft() is True
    state = store.state
    assert [a.title for a in state.activities] == ["Piano"]
    assert state.activities[0].completed is False
    assert state.activities[0].day_of_week == 2
    assert state.draft_open is False
    assert state.draft.title == ""
    assert state.draft.start_time == "17:00"


def test_submit_invalid_draft_never_reaches_server(store, qtbot):
    store.open_draft()
    with qtbot.waitSignal(store.error) as blocker:
        assert store.submit_draft() is False
    assert "title" in blocker.args[0]
    assert store.state.activities == ()
    assert store.state.draft_open is True


def test_toggle_and_delete(store, qtbot):
    store.update_draft(title="Walk")
    store.submit_draft()
    [activity] = store.state.activities
    assert store.toggle(activity.id)
    assert store.state.activities[0].completed is True
    assert store.toggle(activity.id)
    assert store.state.activities[0].completed is False
    assert store.delete_activity(activity.id)
    assert store.state.activities == ()


def test_templates_flow(store, qtbot):
    store.update_draft(title="Swim", category="Health", color=COLORS[1])
    store.submit_draft()
    assert store.save_as_template(store.state.activities[0])
    assert store.save_as_template(store.state.activities[0])
    assert [t.title for t in store.state.templates] == ["Swim", "Swim"]

    store.next_day()
    store.open_templates()
    draft = store.use_template(store.state.templates[0])
    assert draft.day_of_week == 3
    assert (draft.title, draft.category, draft.color) == ("Swim", "Health", COLORS[1])
    assert store.state.templates_open is False and store.state.draft_open is True

    assert store.delete_template(store.state.templates[0].id)
    assert len(store.state.templates) == 1


def test_create_template_requires_title(store, qtbot):
    with qtbot.waitSignal(store.error):
        assert store.create_template("  ") is False
    assert store.create_template("Meditate", category="Personal")
    assert store.state.templates[0].title == "Meditate"


def test_day_view_statuses(store, qtbot):
    for title, start, end in [("Late", "20:00", "21:00"), ("Early", "06:00", "07:00"), ("Mid", "12:00", "13:00")]:
        store.update_draft(title=title, start_time=start, end_time=end)
        store.submit_draft()
    cards = store.day_view(2, "12:30")
    assert [c.activity.title for c in cards] == ["Early", "Mid", "Late"]
    assert [c.status for c in cards] == [Status.PAST, Status.NOW, Status.FUTURE]
    assert [c.label for c in cards] == ["Ended", "Now", None]
    store.select_day(4)
    assert store.day_view(2, "12:30") == []


# --- Failures ---------------------------------------------------------------

def _failing_client():
    def handler(request: httpx.Request):
        if request.method == "GET":
            return httpx.Response(200, json=[])
        raise httpx.ConnectError("down", request=request)

    return PlannerApiClient(PlannerApiConfig(base_url="http://planner.test/api"), transport=httpx.MockTransport(handler))


def test_failed_calls_keep_previous_state(qtbot):
    store = PlannerStore(_failing_client(), selected_day=1)
    assert store.load()
    store.dispatch(Loaded((_act(1, "09:00", 1),), (Template(id=4, title="T"),)))
    before = store.state

    with qtbot.waitSignal(store.error):
        assert store.toggle(1) is False
    assert store.delete_activity(1) is False
    assert store.delete_template(4) is False
    store.update_draft(title="New")
    assert store.submit_draft() is False

    assert store.state.activities == before.activities
    assert store.state.templates == before.templates
    assert store.state.last_error.startswith("Failed to add activity")


def test_failed_load_reports_error(qtbot):
    def handler(request: httpx.Request):
        return httpx.Response(500, text="storage unavailable")

    client = PlannerApiClient(PlannerApiConfig(base_url="http://planner.test/api"), transport=httpx.MockTransport(handler))
    store = PlannerStore(client, selected_day=1)
    assert store.load() is False
    assert store.state.loading is False
    assert "500" in store.state.last_error
