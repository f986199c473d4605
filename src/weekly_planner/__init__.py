"""Weekly activity planner: REST API, client store and status engine."""

__version__ = "0.1.0"
