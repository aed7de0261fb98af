import asyncio
import json
import logging

import httpx
import pytest

from harvest_mcp.dispatcher import Dispatcher, render
from harvest_mcp.harvest import HarvestClient
from harvest_mcp.tools import TOOLS

from conftest import ACCESS_TOKEN, ACCOUNT_ID

MINIMAL_ARGS = {
    "harvest_list_time_entries": {},
    "harvest_create_time_entry": {"project_id": "12345", "task_id": "67890", "spent_date": "2024-01-20"},
    "harvest_update_time_entry": {"id": "98765", "notes": "Updated"},
    "harvest_delete_time_entry": {"id": "98765"},
    "harvest_restart_timer": {"id": "98765"},
    "harvest_stop_timer": {"id": "98766"},
    "harvest_list_projects": {},
    "harvest_get_project": {"id": "12345"},
    "harvest_list_tasks": {},
    "harvest_get_current_user": {},
    "harvest_list_users": {},
    "harvest_list_clients": {},
    "harvest_time_report": {"from": "2024-01-01", "to": "2024-01-31"},
    "harvest_list_project_assignments": {},
    "harvest_list_task_assignments": {"project_id": "12345"},
    "about": {},
    "version": {},
}


def call(dispatcher, name, arguments=None):
    return asyncio.run(dispatcher.call(name, arguments))


def test_minimal_args_cover_every_tool():
    assert set(MINIMAL_ARGS) == {t.name for t in TOOLS}


@pytest.mark.parametrize("name", list(MINIMAL_ARGS))
def test_every_tool_succeeds_with_minimal_arguments(dispatcher, name):
    result = call(dispatcher, name, MINIMAL_ARGS[name])
    assert result.is_error is False
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    if name == "harvest_delete_time_entry":
        assert result.text == "Time entry 98765 deleted successfully"
    elif name == "about":
        assert result.text.startswith("# Harvest MCP Server")
    else:
        json.loads(result.text)


@pytest.mark.parametrize("name", ["nope", "harvest_list_invoices", ""])
def test_unknown_tool(dispatcher, name):
    result = call(dispatcher, name, {})
    assert result.is_error is True
    assert result.text == f"Unknown tool: {name}"


def test_success_is_indented_json(dispatcher):
    result = call(dispatcher, "harvest_get_current_user")
    assert result.text.startswith("{\n  ")


def test_create_time_entry_scenario(dispatcher):
    result = call(dispatcher, "harvest_create_time_entry", {
        "project_id": "12345", "task_id": "67890", "spent_date": "2024-01-20", "hours": 2.5,
    })
    assert result.is_error is False
    entry = json.loads(result.text)
    assert entry["hours"] == 2.5
    assert entry["is_running"] is False
    assert entry["project"]["id"] == 12345
    assert entry["task"]["id"] == 67890


def test_create_then_fetch_round_trip(dispatcher, harvest_client):
    created = json.loads(call(dispatcher, "harvest_create_time_entry", {
        "project_id": "12345", "task_id": "67890", "spent_date": "2024-01-20", "hours": 1.5,
    }).text)
    fetched = asyncio.run(harvest_client.get_time_entry(str(created["id"])))
    assert fetched["project"]["id"] == 12345
    assert fetched["task"]["id"] == 67890
    assert fetched["spent_date"] == "2024-01-20"


def test_stop_timer_that_is_not_running(dispatcher):
    result = call(dispatcher, "harvest_stop_timer", {"id": "98765"})
    assert result.is_error is True
    assert result.text.startswith("Error: Harvest API error: 422")
    assert "Cannot stop" in result.text


def test_get_missing_project(dispatcher):
    result = call(dispatcher, "harvest_get_project", {"id": "99999999"})
    assert result.is_error is True
    assert result.text == "Error: Harvest API error: 404 Not Found"


def test_get_project_twice_is_identical(dispatcher):
    first = call(dispatcher, "harvest_get_project", {"id": "12345"})
    second = call(dispatcher, "harvest_get_project", {"id": "12345"})
    assert first.text == second.text


def test_update_sends_id_in_path_and_rest_as_body(dispatcher, fake_harvest):
    call(dispatcher, "harvest_update_time_entry", {"id": "98765", "hours": 3.25, "notes": "Done"})
    request = fake_harvest.last_request
    assert request.method == "PATCH"
    assert request.url.path == "/v2/time_entries/98765"
    assert json.loads(request.content) == {"hours": 3.25, "notes": "Done"}


def test_task_assignments_forward_project_id_as_query_too(dispatcher, fake_harvest):
    call(dispatcher, "harvest_list_task_assignments", {"project_id": "12345", "is_active": True})
    url = fake_harvest.last_request.url
    assert url.path == "/v2/projects/12345/task_assignments"
    assert url.query == b"project_id=12345&is_active=true"


def test_query_follows_caller_argument_order(dispatcher, fake_harvest):
    call(dispatcher, "harvest_list_time_entries", {"to": "2024-01-31", "from": "2024-01-01", "project_id": "1"})
    assert fake_harvest.last_request.url.query == b"to=2024-01-31&from=2024-01-01&project_id=1"


def test_create_body_follows_caller_argument_order(dispatcher, fake_harvest):
    args = {"notes": "Standup", "hours": 0.5, "spent_date": "2024-01-20", "task_id": "67890", "project_id": "12345"}
    call(dispatcher, "harvest_create_time_entry", args)
    assert list(json.loads(fake_harvest.last_request.content)) == list(args)


def test_relative_dates_are_resolved_before_sending(dispatcher, fake_harvest):
    from datetime import date

    call(dispatcher, "harvest_create_time_entry", {"project_id": "12345", "task_id": "67890", "spent_date": "today"})
    assert json.loads(fake_harvest.last_request.content)["spent_date"] == date.today().isoformat()


def test_missing_required_argument_never_reaches_harvest(dispatcher, fake_harvest):
    result = call(dispatcher, "harvest_create_time_entry", {"project_id": "12345"})
    assert result.is_error is True
    assert result.text.startswith("Error: Invalid arguments for harvest_create_time_entry:")
    assert "task_id" in result.text
    assert "spent_date" in result.text
    assert fake_harvest.requests == []


def test_time_report_requires_a_range(dispatcher):
    result = call(dispatcher, "harvest_time_report", {"user_id": "1"})
    assert result.is_error is True
    assert "from" in result.text


def test_network_error_becomes_error_result():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = HarvestClient(ACCOUNT_ID, ACCESS_TOKEN, transport=httpx.MockTransport(handler))
    result = call(Dispatcher(client), "harvest_list_projects", {})
    assert result.is_error is True
    assert result.text == "Error: connection refused"


def test_exception_without_message_uses_class_name(harvest_client):
    from dataclasses import replace

    async def boom(client, params):
        raise RuntimeError()

    tool = replace(TOOLS[0], handler=boom)
    result = call(Dispatcher(harvest_client, tools=[tool]), tool.name, {})
    assert result.text == "Error: RuntimeError"


def test_about_and_version_work_without_harvest():
    dispatcher = Dispatcher(None)
    assert call(dispatcher, "about", {"tool": "harvest_stop_timer"}).text.startswith("# harvest_stop_timer")
    assert json.loads(call(dispatcher, "version").text)["harvestApiVersion"] == "v2"


def test_failure_after_cancellation_is_logged(caplog):
    from harvest_mcp.tools.base import NoParams, Tool

    async def scenario():
        release = asyncio.Event()

        async def slow(client, params):
            await release.wait()
            raise RuntimeError("boom")

        tool = Tool(name="slow", description="", category="Test", params=NoParams, handler=slow)
        outer = asyncio.ensure_future(Dispatcher(None, tools=[tool]).call("slow", {}))
        await asyncio.sleep(0)
        outer.cancel()
        with pytest.raises(asyncio.CancelledError):
            await outer
        release.set()
        for _ in range(3):
            await asyncio.sleep(0)

    with caplog.at_level(logging.WARNING, logger="harvest_mcp.dispatcher"):
        asyncio.run(scenario())
    assert "slow failed after its caller went away: boom" in caplog.text


def test_non_ascii_text_is_not_escaped():
    assert render({"name": "Café Münster"}) == '{\n  "name": "Café Münster"\n}'
