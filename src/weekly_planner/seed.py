"""Seed data helper for development convenience."""

from .database_manager import DatabaseManager
from .models import Activity, Template, COLORS
from .repositories import create_activity, create_template


def seed_basic_data(db: DatabaseManager, day: int = 1) -> bool:
    if db.query_one("SELECT id FROM activities LIMIT 1"):
        return False  # Already seeded
    create_activity(db, Activity(id=None, title="Morning run", start_time="07:00", end_time="07:45", day_of_week=day, category="Health", color=COLORS[1]))
    create_activity(db, Activity(id=None, title="Deep work", start_time="09:00", end_time="11:30", day_of_week=day, category="Work", color=COLORS[0]))
    create_activity(db, Activity(id=None, title="Call family", start_time="19:00", end_time="19:30", day_of_week=day, category="Social", color=COLORS[4]))
    create_template(db, Template(id=None, title="Reading", category="Personal", color=COLORS[2]))
    create_template(db, Template(id=None, title="Gym", category="Health", color=COLORS[1]))
    return True

__all__ = ["seed_basic_data"]
