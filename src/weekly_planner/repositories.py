from __future__ import annotations

"""Repository helper functions for CRUD operations."""

import sqlite3

from .database_manager import DatabaseManager
from .models import Activity, Template


# --- Generic helpers -------------------------------------------------------

def _last_row_id(cur: sqlite3.Cursor) -> int:
    return int(cur.lastrowid)  # type: ignore[arg-type]


def _row_to_activity(row: sqlite3.Row) -> Activity:
    return Activity(
        id=row["id"],
        title=row["title"],
        start_time=row["start_time"],
        end_time=row["end_time"],
        day_of_week=row["day_of_week"],
        category=row["category"],
        color=row["color"],
        completed=bool(row["completed"]),
    )


def _row_to_template(row: sqlite3.Row) -> Template:
    return Template(
        id=row["id"],
        title=row["title"],
        category=row["category"],
        color=row["color"],
    )


# --- Activities -------------------------------------------------------------

def create_activity(db: DatabaseManager, activity: Activity) -> Activity:
    cur = db.execute(
        """
        INSERT INTO activities (title, start_time, end_time, day_of_week, category, color)
        VALUES (?,?,?,?,?,?)
        """,
        (
            activity.title,
            activity.start_time,
            activity.end_time,
            activity.day_of_week,
            activity.category,
            activity.color,
        ),
    )
    activity.id = _last_row_id(cur)
    activity.completed = False
    return activity


def get_activity(db: DatabaseManager, activity_id: int) -> Activity | None:
    row = db.query_one("SELECT * FROM activities WHERE id=?", (activity_id,))
    if not row:
        return None
    return _row_to_activity(row)


def list_activities(db: DatabaseManager) -> list[Activity]:
    rows = db.query_all("SELECT * FROM activities ORDER BY start_time, id")
    return [_row_to_activity(r) for r in rows]


def toggle_activity(db: DatabaseManager, activity_id: int) -> None:
    db.execute("UPDATE activities SET completed = 1 - completed WHERE id=?", (activity_id,))


def delete_activity(db: DatabaseManager, activity_id: int) -> None:
    db.execute("DELETE FROM activities WHERE id=?", (activity_id,))


# --- Templates --------------------------------------------------------------

def create_template(db: DatabaseManager, template: Template) -> Template:
    cur = db.execute(
        "INSERT INTO templates (title, category, color) VALUES (?,?,?)",
        (template.title, template.category, template.color),
    )
    template.id = _last_row_id(cur)
    return template


def get_template(db: DatabaseManager, template_id: int) -> Template | None:
    row = db.query_one("SELECT * FROM templates WHERE id=?", (template_id,))
    if not row:
        return None
    return _row_to_template(row)


def list_templates(db: DatabaseManager) -> list[Template]:
    rows = db.query_all("SELECT * FROM templates ORDER BY id")
    return [_row_to_template(r) for r in rows]


def delete_template(db: DatabaseManager, template_id: int) -> None:
    db.execute("DELETE FROM templates WHERE id=?", (template_id,))


__all__ = [
    # Activities
    "create_activity",
    "get_activity",
    "list_activities",
    "toggle_activity",
    "delete_activity",
    # Templates
    "create_template",
    "get_template",
    "list_templates",
    "delete_template",
]
