"""Async client for the Harvest v2 REST API."""
import logging
from typing import Any, Mapping

import httpx

from . import config

log = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Harvest MCP Server (harvest-mcp)"


class HarvestAPIError(Exception):
    """Raised for any non-2xx response from Harvest."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query_string(options: Mapping[str, Any] | None = None) -> str:
    """Render ``options`` as ``?k=v&...``, skipping ``None`` values.

    Returns an empty string when nothing is left to send.
    """
    if not options:
        return ""
    params = httpx.QueryParams(
        [(key, _query_value(value)) for key, value in options.items() if value is not None]
    )
    query = str(params)
    return f"?{query}" if query else ""


class HarvestClient:
    """One method per Harvest endpoint; every call is a single HTTP request."""

    def __init__(
        self,
        account_id: str,
        access_token: str,
        user_agent: str | None = None,
        base_url: str = config.BASE_URL,
        timeout: float = config.TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not account_id:
            raise ValueError("account_id is required")
        if not access_token:
            raise ValueError("access_token is required")
        self.account_id = account_id
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "Authorization": f"Bearer {access_token}",
            "Harvest-Account-ID": account_id,
            "User-Agent": self.user_agent,
        }
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def __aenter__(self) -> "HarvestClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # --- request plumbing ---------------------------------------------------
    async def _request(
        self,
        method: str,
        endpoint: str,
        options: Mapping[str, Any] | None = None,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        url = f"{self.base_url}{endpoint}{build_query_string(options)}"
        merged = {**self.headers, **(headers or {})}
        kwargs: dict[str, Any] = {"headers": merged}
        if json is not None:
            kwargs["json"] = json

        r = await self._http.request(method, url, **kwargs)
        log.debug("%s %s -> %s", method, endpoint, r.status_code)

        if not r.is_success:
            raise HarvestAPIError(r.status_code, self._error_message(r))
        if not r.content:
            return None
        return r.json()

    @staticmethod
    def _error_message(r: httpx.Response) -> str:
        message = f"Harvest API error: {r.status_code} {r.reason_phrase}"
        try:
            body = r.json()
        except ValueError:
            return message
        if isinstance(body, dict) and body.get("message"):
            message += f" - {body['message']}"
        return message

    # --- time entries -------------------------------------------------------
    async def list_time_entries(self, options: Mapping[str, Any] | None = None) -> dict:
        return await self._request("GET", "/time_entries", options)

    async def get_time_entry(self, entry_id: str) -> dict:
        return await self._request("GET", f"/time_entries/{entry_id}")

    async def create_time_entry(self, data: Mapping[str, Any]) -> dict:
        return await self._request("POST", "/time_entries", json=dict(data))

    async def update_time_entry(self, entry_id: str, data: Mapping[str, Any]) -> dict:
        return await self._request("PATCH", f"/time_entries/{entry_id}", json=dict(data))

    async def delete_time_entry(self, entry_id: str) -> Any:
        return await self._request("DELETE", f"/time_entries/{entry_id}")

    # --- timers -------------------------------------------------------------
    async def restart_timer(self, entry_id: str) -> dict:
        return await self._request("PATCH", f"/time_entries/{entry_id}/restart")

    async def stop_timer(self, entry_id: str) -> dict:
        return await self._request("PATCH", f"/time_entries/{entry_id}/stop")

    # --- projects & tasks ---------------------------------------------------
    async def list_projects(self, options: Mapping[str, Any] | None = None) -> dict:
        return await self._request("GET", "/projects", options)

    async def get_project(self, project_id: str) -> dict:
        return await self._request("GET", f"/projects/{project_id}")

    async def list_tasks(self, options: Mapping[str, Any] | None = None) -> dict:
        return await self._request("GET", "/tasks", options)

    async def get_task(self, task_id: str) -> dict:
        return await self._request("GET", f"/tasks/{task_id}")

    # --- users & clients ----------------------------------------------------
    async def list_users(self, options: Mapping[str, Any] | None = None) -> dict:
        return await self._request("GET", "/users", options)

    async def get_user(self, user_id: str) -> dict:
        return await self._request("GET", f"/users/{user_id}")

    async def get_current_user(self) -> dict:
        return await self._request("GET", "/users/me")

    async def list_clients(self, options: Mapping[str, Any] | None = None) -> dict:
        return await self._request("GET", "/clients", options)

    async def get_client(self, client_id: str) -> dict:
        return await self._request("GET", f"/clients/{client_id}")

    # --- reports & assignments ----------------------------------------------
    async def time_report(self, options: Mapping[str, Any] | None = None) -> dict:
        return await self._request("GET", "/reports/time/team", options)

    async def list_project_assignments(self, options: Mapping[str, Any] | None = None) -> dict:
        return await self._request("GET", "/users/me/project_assignments", options)

    async def list_task_assignments(
        self, project_id: str, options: Mapping[str, Any] | None = None
    ) -> dict:
        return await self._request("GET", f"/projects/{project_id}/task_assignments", options)
