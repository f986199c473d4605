import json
import logging

import pytest

from weekly_planner.logging_setup import ConsoleFormatter, configure_logging, planner_fields
from weekly_planner.repositories import list_activities, list_templates
from weekly_planner.seed import seed_basic_data


def test_seed_only_fills_empty_store(db):
    assert seed_basic_data(db, day=4) is True
    assert seed_basic_data(db) is False
    activities = list_activities(db)
    assert len(activities) == 3
    assert {a.day_of_week for a in activities} == {4}
    assert len(list_templates(db)) == 2


def _record(msg, **fields):
    record = logging.LogRecord("weekly_planner.server", logging.INFO, __file__, 1, msg, None, None)
    for k, v in fields.items():
        setattr(record, f"_json_{k}", v)
    return record


def test_planner_fields_strip_prefix():
    assert planner_fields(_record("activity deleted", id=4, day=2)) == {"id": 4, "day": 2}


def test_console_line_carries_fields():
    line = ConsoleFormatter().format(_record("activity toggled", id=7))
    assert line == "INFO: activity toggled  id=7"
    assert ConsoleFormatter().format(_record("api ready")) == "INFO: api ready"


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in saved[0]:
        root.addHandler(h)
    root.setLevel(saved[1])


def test_server_log_is_json(tmp_path, restore_root_logging):
    logfile = configure_logging(tmp_path)
    assert logfile == tmp_path / "logs" / "server.log"
    logging.getLogger("weekly_planner.server").info("activity created", extra={"_json_id": 7, "_json_day": 3})
    for h in restore_root_logging.handlers:
        h.flush()
    records = [json.loads(line) for line in logfile.read_text(encoding="utf-8").splitlines()]
    assert records[0]["component"] == "server"
    assert records[-1]["msg"] == "activity created"
    assert (records[-1]["id"], records[-1]["day"]) == (7, 3)


def test_client_log_quiets_http_libraries(tmp_path, restore_root_logging):
    logfile = configure_logging(tmp_path, "DEBUG", component="client")
    assert logfile.name == "client.log"
    assert logging.getLogger("httpx").level == logging.WARNING
    logging.getLogger("weekly_planner.planner_store").error("Failed to load data: down")
    for h in restore_root_logging.handlers:
        h.flush()
    assert "Failed to load data" in logfile.read_text(encoding="utf-8")
