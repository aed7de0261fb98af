# Time entry and timer tools
from pydantic import Field

from .base import IsoDate, Paginated, Tool, ToolParams

CATEGORY = "Time Tracking"


class ListTimeEntries(Paginated):
    user_id:    str | None = Field(None, description="Filter by user ID")
    project_id: str | None = Field(None, description="Filter by project ID")
    from_:      IsoDate | None = Field(None, alias="from", description="Start date (YYYY-MM-DD)")
    to:         IsoDate | None = Field(None, description="End date (YYYY-MM-DD)")


class CreateTimeEntry(ToolParams):
    project_id: str = Field(..., description="Project ID")
    task_id:    str = Field(..., description="Task ID")
    spent_date: IsoDate = Field(..., description="Date of the entry (YYYY-MM-DD)")
    hours:      float | None = Field(None, description="Hours worked")
    notes:      str | None = Field(None, description="Notes for the time entry")


class UpdateTimeEntry(ToolParams):
    id:         str = Field(..., description="Time entry ID")
    project_id: str | None = Field(None, description="Project ID")
    task_id:    str | None = Field(None, description="Task ID")
    spent_date: IsoDate | None = Field(None, description="Date of the entry (YYYY-MM-DD)")
    hours:      float | None = Field(None, description="Hours worked")
    notes:      str | None = Field(None, description="Notes for the time entry")


class DeleteTimeEntry(ToolParams):
    id: str = Field(..., description="Time entry ID to delete")


class TimerTarget(ToolParams):
    id: str = Field(..., description="Time entry ID")


async def list_time_entries(client, params: ListTimeEntries):
    return await client.list_time_entries(params.payload())


async def create_time_entry(client, params: CreateTimeEntry):
    return await client.create_time_entry(params.payload())


async def update_time_entry(client, params: UpdateTimeEntry):
    body = params.payload()
    entry_id = body.pop("id")
    return await client.update_time_entry(entry_id, body)


async def delete_time_entry(client, params: DeleteTimeEntry):
    await client.delete_time_entry(params.id)
    return f"Time entry {params.id} deleted successfully"


async def restart_timer(client, params: TimerTarget):
    return await client.restart_timer(params.id)


async def stop_timer(client, params: TimerTarget):
    return await client.stop_timer(params.id)


tools = [
    Tool(
        name="harvest_list_time_entries",
        description="List time entries with optional filters",
        category=CATEGORY,
        params=ListTimeEntries,
        handler=list_time_entries,
        purpose=(
            "Retrieve time entries from your Harvest account, optionally narrowed "
            "by user, project and date range, with pagination."
        ),
        examples=(
            {},
            {"from": "2024-01-15", "to": "2024-01-21"},
            {"project_id": "12345", "page": 1, "per_page": 25},
        ),
        response=(
            "An object with `time_entries` (array) plus pagination fields "
            "(`per_page`, `total_pages`, `total_entries`, `page`, `links`). Each entry "
            "carries id, hours, notes, spent_date, project, task, user and timer "
            "status (`is_running`, `timer_started_at`)."
        ),
    ),
    Tool(
        name="harvest_create_time_entry",
        description="Create a new time entry",
        category=CATEGORY,
        params=CreateTimeEntry,
        handler=create_time_entry,
        purpose=(
            "Log work against a project and task. Provide `hours` to record a "
            "finished duration, or omit it to start a running timer."
        ),
        examples=(
            {"project_id": "12345", "task_id": "67890", "spent_date": "2024-01-20",
             "hours": 2.5, "notes": "Worked on API integration"},
            {"project_id": "12345", "task_id": "67890", "spent_date": "2024-01-20",
             "notes": "Starting work on feature development"},
        ),
        response=(
            "The created time entry: `id`, `hours` (0 when a timer was started), "
            "`is_running`, `timer_started_at`, and the `project`, `task` and `user` objects."
        ),
        tips=(
            "- Use harvest_list_projects to find project_id\n"
            "- Use harvest_list_task_assignments to find a task_id valid for the project\n"
            "- Omit hours to create a running timer entry"
        ),
        errors=(
            "- Missing project_id, task_id or spent_date\n"
            "- Task not assigned to the project (422 from Harvest)"
        ),
    ),
    Tool(
        name="harvest_update_time_entry",
        description="Update an existing time entry",
        category=CATEGORY,
        params=UpdateTimeEntry,
        handler=update_time_entry,
        purpose="Change hours, notes, project, task or date of an existing time entry.",
        examples=(
            {"id": "98765", "hours": 3.25, "notes": "Completed API integration and testing"},
            {"id": "98765", "project_id": "54321", "task_id": "09876"},
            {"id": "98765", "spent_date": "2024-01-19"},
        ),
        response="The updated time entry with all current values.",
        tips=(
            "- Only pass the fields you want to change\n"
            "- Stop a running timer before editing its hours\n"
            "- Use harvest_list_time_entries to find entry IDs"
        ),
    ),
    Tool(
        name="harvest_delete_time_entry",
        description="Delete a time entry",
        category=CATEGORY,
        params=DeleteTimeEntry,
        handler=delete_time_entry,
        purpose="Permanently remove a time entry. This cannot be undone.",
        examples=({"id": "98765"},),
        response='A confirmation message: "Time entry {id} deleted successfully"',
        tips=(
            "- Consider harvest_update_time_entry instead of deleting\n"
            "- Verify the entry ID before deletion"
        ),
        errors="- Entry not found (404)\n- Entry belongs to a locked or approved timesheet",
    ),
    Tool(
        name="harvest_restart_timer",
        description="Restart a stopped time entry timer",
        category=CATEGORY,
        params=TimerTarget,
        handler=restart_timer,
        purpose=(
            "Resume timing on a stopped entry: `is_running` becomes true and "
            "`timer_started_at` is set to now."
        ),
        examples=({"id": "98765"},),
        response="The updated time entry with `is_running: true` and the previous hours kept.",
        tips=(
            "1. Find a stopped entry with harvest_list_time_entries\n"
            "2. Restart it with harvest_restart_timer\n"
            "3. Stop it with harvest_stop_timer when done"
        ),
        errors=(
            "- Entry not found: invalid ID\n"
            "- Timer already running: cannot restart a running timer\n"
            "- Another timer running: stop the other timer first"
        ),
    ),
    Tool(
        name="harvest_stop_timer",
        description="Stop a running time entry timer",
        category=CATEGORY,
        params=TimerTarget,
        handler=stop_timer,
        purpose=(
            "Stop a running entry. Harvest adds the elapsed time to the entry's "
            "hours, rounded to the account's rounding settings."
        ),
        examples=({"id": "98765"},),
        response=(
            "The updated time entry with `is_running: false`, `timer_started_at: null` "
            "and the recalculated `hours`."
        ),
        tips=(
            "1. Start with harvest_create_time_entry (no hours) or harvest_restart_timer\n"
            "2. Stop with harvest_stop_timer\n"
            "3. Optionally add notes with harvest_update_time_entry"
        ),
        errors="- Entry not found: invalid ID\n- Timer not running: cannot stop a stopped timer",
    ),
]
