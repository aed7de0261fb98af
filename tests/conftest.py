"""
Shared fixtures: an in-memory stand-in for the Harvest v2 API served through
``httpx.MockTransport``, so no test ever reaches the network.
"""

import asyncio
import json
import os
import sys
from typing import Any, Dict, Optional

import httpx
import pytest

# Ensure project root is on sys.path so package imports resolve in tests
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from harvest_mcp.dispatcher import Dispatcher  # noqa: E402
from harvest_mcp.harvest import HarvestClient  # noqa: E402

ACCOUNT_ID = "123456"
ACCESS_TOKEN = "test-token"


def _json(status: int, body: Any) -> httpx.Response:
    return httpx.Response(status, json=body)


class FakeHarvest:
    """Tiny Harvest imitation: enough state for the tools to round-trip."""

    def __init__(self) -> None:
        self.requests: list = []
        self.user = {"id": 1782884, "first_name": "Ada", "last_name": "Lovelace",
                     "email": "ada@example.com", "is_active": True, "is_admin": True}
        self.clients = {"5735776": {"id": 5735776, "name": "ABC Corp", "is_active": True}}
        self.projects = {
            "12345": {"id": 12345, "name": "Website Redesign", "code": "WR",
                      "is_active": True, "client": {"id": 5735776, "name": "ABC Corp"}},
        }
        self.tasks = {"67890": {"id": 67890, "name": "Development", "is_active": True}}
        self.time_entries: Dict[int, Dict[str, Any]] = {
            98765: self._entry(98765, "12345", "67890", "2024-01-19", 1.0, "Kickoff", False),
            98766: self._entry(98766, "12345", "67890", "2024-01-20", 0.5, "Standup", True),
        }
        self._next_id = 500000

    def _entry(self, entry_id, project_id, task_id, spent_date, hours, notes, running):
        return {
            "id": entry_id,
            "spent_date": spent_date,
            "hours": hours,
            "notes": notes,
            "is_running": running,
            "timer_started_at": "2024-01-20T09:00:00Z" if running else None,
            "user": {"id": self.user["id"], "name": "Ada Lovelace"},
            "project": {"id": int(project_id), "name": self.projects.get(str(project_id), {}).get("name")},
            "task": {"id": int(task_id), "name": self.tasks.get(str(task_id), {}).get("name")},
        }

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith("/v2"):
            path = path[len("/v2"):]
        parts = [p for p in path.split("/") if p]
        method = request.method
        body = json.loads(request.content) if request.content else None

        if parts == ["users", "me"]:
            return _json(200, self.user)
        if parts == ["users"]:
            return _json(200, {"users": [self.user], "page": 1, "total_pages": 1})
        if parts == ["users", "me", "project_assignments"]:
            return _json(200, {"project_assignments": [
                {"id": 1, "project": self.projects["12345"], "is_active": True},
            ]})
        if parts == ["clients"]:
            return _json(200, {"clients": list(self.clients.values())})
        if parts == ["tasks"]:
            return _json(200, {"tasks": list(self.tasks.values())})
        if parts == ["reports", "time", "team"]:
            return _json(200, {"results": [
                {"user_id": self.user["id"], "user_name": "Ada Lovelace", "total_hours": 12.5},
            ]})
        if parts[:1] == ["projects"]:
            return self._projects(parts[1:])
        if parts[:1] == ["time_entries"]:
            return self._time_entries(method, parts[1:], body)
        return _json(404, {"status": 404, "error": "Not Found"})

    def _projects(self, rest) -> httpx.Response:
        if not rest:
            return _json(200, {"projects": list(self.projects.values()), "page": 1})
        project = self.projects.get(rest[0])
        if project is None:
            return _json(404, {"status": 404, "error": "Not Found"})
        if rest[1:] == ["task_assignments"]:
            return _json(200, {"task_assignments": [
                {"id": 7, "task": self.tasks["67890"], "is_active": True, "billable": True},
            ]})
        return _json(200, project)

    def _time_entries(self, method, rest, body) -> httpx.Response:
        if not rest:
            if method == "POST":
                self._next_id += 1
                hours = body.get("hours")
                entry = self._entry(self._next_id, body["project_id"], body["task_id"],
                                    body["spent_date"], hours if hours is not None else 0.0,
                                    body.get("notes"), hours is None)
                self.time_entries[entry["id"]] = entry
                return _json(201, entry)
            return _json(200, {"time_entries": list(self.time_entries.values()), "page": 1})

        entry = self.time_entries.get(int(rest[0])) if rest[0].isdigit() else None
        if entry is None:
            return _json(404, {"status": 404, "error": "Not Found"})
        action = rest[1] if len(rest) > 1 else None

        if action == "stop":
            if not entry["is_running"]:
                return _json(422, {"message": "Cannot stop a time entry that is not running"})
            entry.update(is_running=False, timer_started_at=None)
            return _json(200, entry)
        if action == "restart":
            if entry["is_running"]:
                return _json(422, {"message": "Cannot restart a running time entry"})
            entry.update(is_running=True, timer_started_at="2024-01-20T09:00:00Z")
            return _json(200, entry)
        if method == "PATCH":
            entry.update({k: v for k, v in (body or {}).items() if k in ("hours", "notes", "spent_date")})
            return _json(200, entry)
        if method == "DELETE":
            del self.time_entries[entry["id"]]
            return httpx.Response(200)
        return _json(200, entry)

    # helpers for assertions
    @property
    def last_request(self) -> Optional[httpx.Request]:
        return self.requests[-1] if self.requests else None


@pytest.fixture
def fake_harvest():
    return FakeHarvest()


@pytest.fixture
def harvest_client(fake_harvest):
    client = HarvestClient(ACCOUNT_ID, ACCESS_TOKEN, transport=httpx.MockTransport(fake_harvest))
    yield client
    asyncio.run(client.aclose())


@pytest.fixture
def dispatcher(harvest_client):
    return Dispatcher(harvest_client)
