from __future__ import annotations

"""Runtime configuration read from ``WEEKLY_PLANNER_*`` environment variables."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping, Optional

ENV_PREFIX = "WEEKLY_PLANNER_"
DEFAULT_HOME = Path.home() / ".weekly_planner"
DB_FILENAME = "timetable.sqlite"


@dataclass(slots=True)
class PlannerConfig:
    home: Path = DEFAULT_HOME
    host: str = "127.0.0.1"
    port: int = 3000
    api_url: Optional[str] = None
    tick_seconds: int = 30
    log_level: str = "INFO"

    @property
    def db_path(self) -> Path:
        return self.home / DB_FILENAME

    @property
    def base_url(self) -> str:
        return self.api_url or f"http://{self.host}:{self.port}/api"


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


def load_config(env: Mapping[str, str] | None = None) -> PlannerConfig:
    if env is None:
        env = os.environ
    home = env.get(ENV_PREFIX + "HOME")
    return PlannerConfig(
        home=Path(home).expanduser() if home else DEFAULT_HOME,
        host=env.get(ENV_PREFIX + "HOST") or "127.0.0.1",
        port=_int_env(env, "PORT", 3000),
        api_url=env.get(ENV_PREFIX + "API_URL") or None,
        tick_seconds=_int_env(env, "TICK_SECONDS", 30),
        log_level=(env.get(ENV_PREFIX + "LOG_LEVEL") or "INFO").upper(),
    )


__all__ = ["PlannerConfig", "load_config", "ENV_PREFIX"]
