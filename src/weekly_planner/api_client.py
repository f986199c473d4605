from __future__ import annotations

"""HTTP client for the planner REST API.

A thin wrapper around ``httpx.Client``. Calls are never retried; every
transport failure or error status surfaces as ``PlannerApiError`` so the
caller can log it and keep its previous state. Tests inject an
``httpx.MockTransport``.
"""

from dataclasses import dataclass
import logging
from typing import Any, Optional

import httpx

from .models import Activity, Template
from .schedule import Draft

logger = logging.getLogger(__name__)


class PlannerApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class PlannerApiConfig:
    base_url: str
    timeout: float = 10.0


class PlannerApiClient:
    def __init__(self, config: PlannerApiConfig, transport: httpx.BaseTransport | None = None):
        self._config = config
        self._client = httpx.Client(
            base_url=config.base_url.rstrip("/"),
            timeout=config.timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "PlannerApiClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # Public API ---------------------------------------------------------
    def get_activities(self) -> list[Activity]:
        return [Activity.from_dict(d) for d in self._request("GET", "/activities")]

    def add_activity(self, draft: Draft) -> int:
        return int(self._request("POST", "/activities", json=draft.to_payload())["id"])

    def toggle_activity(self, activity_id: int) -> None:
        self._request("PATCH", f"/activities/{activity_id}/toggle")

    def delete_activity(self, activity_id: int) -> None:
        self._request("DELETE", f"/activities/{activity_id}")

    def get_templates(self) -> list[Template]:
        return [Template.from_dict(d) for d in self._request("GET", "/templates")]

    def add_template(self, template: Template) -> int:
        body = {"title": template.title, "category": template.category, "color": template.color}
        return int(self._request("POST", "/templates", json=body)["id"])

    def delete_template(self, template_id: int) -> None:
        self._request("DELETE", f"/templates/{template_id}")

    # Internal -----------------------------------------------------------
    def _request(self, method: str, path: str, json: Any = None) -> Any:
        try:
            resp = self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.debug("request error", extra={"_json_path": path})
            raise PlannerApiError(f"{method} {path} failed: {e}") from e
        if resp.status_code >= 400:
            message = resp.text
            try:
                data = resp.json()
            except ValueError:
                data = None
            if isinstance(data, dict) and data.get("error"):
                message = str(data["error"])
            raise PlannerApiError(
                f"{method} {path} -> HTTP {resp.status_code}: {message[:200]}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise PlannerApiError(f"{method} {path} returned invalid JSON") from e


__all__ = ["PlannerApiClient", "PlannerApiConfig", "PlannerApiError"]
