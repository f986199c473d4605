from __future__ import annotations

"""Command line entry points: run the API server or follow the week from a terminal."""

import logging
import signal
import sys
from dataclasses import dataclass
from typing import Iterable, Optional

import click
from PyQt6.QtCore import QCoreApplication, QTimer

from . import __version__
from .api_client import PlannerApiClient, PlannerApiConfig
from .config import PlannerConfig, load_config
from .database_manager import DBConfig, DatabaseManager
from .logging_setup import configure_logging
from .models import DAYS
from .planner_store import PlannerStore
from .schedule import ActivityCard
from .seed import seed_basic_data
from .server import create_app
from .status_ticker import StatusTicker

APP_NAME = "Weekly Planner"

# Lets the interpreter run between ticks so Ctrl-C is handled promptly.
SIGNAL_POLL_MS = 250

_log = logging.getLogger(__name__)


@dataclass(slots=True)
class ClientState:
    config: PlannerConfig
    client: PlannerApiClient
    store: PlannerStore
    ticker: StatusTicker


def get_client_state(config: PlannerConfig, day: Optional[int] = None) -> ClientState:
    client = PlannerApiClient(PlannerApiConfig(base_url=config.base_url))
    store = PlannerStore(client, selected_day=day)
    ticker = StatusTicker(interval_seconds=config.tick_seconds)
    return ClientState(config=config, client=client, store=store, ticker=ticker)


def format_card(card: ActivityCard) -> str:
    a = card.activity
    check = "x" if a.completed else " "
    line = f"[{check}] {a.start_time}-{a.end_time}  {a.title}"
    if a.category:
        line += f"  ({a.category})"
    if card.label:
        line += f"  <{card.label}>"
    return line


def render_day(day: int, cards: Iterable[ActivityCard]) -> list[str]:
    lines = [DAYS[day]]
    body = [format_card(c) for c in cards]
    if not body:
        body = [f"No activities scheduled for {DAYS[day]}"]
    return lines + body


@click.group()
@click.version_option(__version__)
@click.pass_context
def main(ctx: click.Context):
    """Weekly Planner - weekly schedule of timed activities."""
    try:
        ctx.obj = load_config()
    except ValueError as e:
        raise click.ClickException(str(e))


@main.command()
@click.option("--host", default=None, help="Interface to bind (default from config)")
@click.option("--port", type=int, default=None, help="Port to listen on (default 3000)")
@click.option("--seed", is_flag=True, help="Insert sample data into an empty store")
@click.pass_obj
def serve(config: PlannerConfig, host: Optional[str], port: Optional[int], seed: bool):
    """Run the REST API."""
    configure_logging(config.home, config.log_level, component="server")
    if host:
        config.host = host
    if port:
        config.port = port
    app = create_app(config)
    if seed:
        db = DatabaseManager(DBConfig(path=config.db_path))
        try:
            if seed_basic_data(db):
                _log.info("sample data inserted")
        finally:
            db.close()
    _log.info("serving", extra={"_json_host": config.host, "_json_port": config.port})
    app.run(host=config.host, port=config.port)


@main.command()
@click.option("--day", type=click.IntRange(0, 6), default=None, help="Day of week, Sunday=0 (default today)")
@click.pass_obj
def agenda(config: PlannerConfig, day: Optional[int]):
    """Print one day's activities with their current status."""
    configure_logging(config.home, config.log_level, component="client")
    state = get_client_state(config, day)
    try:
        if not state.store.load():
            raise click.ClickException(state.store.state.last_error or "could not load activities")
        current_day, current_time = state.ticker.now()
        for line in render_day(state.store.state.selected_day, state.store.day_view(current_day, current_time)):
            click.echo(line)
    finally:
        state.client.close()


@main.command()
@click.pass_obj
def watch(config: PlannerConfig):
    """Reprint today's agenda on every clock tick until interrupted."""
    configure_logging(config.home, config.log_level, component="client")
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    state = get_client_state(config)
    if not state.store.load():
        state.client.close()
        raise click.ClickException(state.store.state.last_error or "could not load activities")

    def on_tick(current_day: int, current_time: str) -> None:
        if state.store.state.selected_day != current_day:
            state.store.select_day(current_day)
        click.clear()
        click.echo(f"{APP_NAME}  {current_time}")
        for line in render_day(current_day, state.store.day_view(current_day, current_time)):
            click.echo(line)

    poll = QTimer()
    poll.setInterval(SIGNAL_POLL_MS)
    poll.timeout.connect(lambda: None)

    state.ticker.tick.connect(on_tick)
    app.aboutToQuit.connect(state.ticker.stop)
    previous_handler = signal.signal(signal.SIGINT, lambda *_: app.quit())
    poll.start()
    state.ticker.start()
    try:
        app.exec()
    finally:
        poll.stop()
        state.ticker.stop()
        app.aboutToQuit.disconnect(state.ticker.stop)
        signal.signal(signal.SIGINT, previous_handler)
        state.client.close()
        _log.info("watch stopped")


if __name__ == "__main__":  # pragma: no cover
    main()
