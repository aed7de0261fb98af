# Reporting and assignment tools
from pydantic import Field

from .base import ActivePaginated, IsoDate, Paginated, Tool

CATEGORY = "Reporting & Assignments"


class TimeReport(Paginated):
    from_:      IsoDate = Field(..., alias="from", description="Start date (YYYY-MM-DD)")
    to:         IsoDate = Field(..., description="End date (YYYY-MM-DD)")
    user_id:    str | None = Field(None, description="Filter by user ID")
    project_id: str | None = Field(None, description="Filter by project ID")
    client_id:  str | None = Field(None, description="Filter by client ID")


class ListTaskAssignments(ActivePaginated):
    project_id: str = Field(..., description="Project ID")


async def time_report(client, params: TimeReport):
    return await client.time_report(params.payload())


async def list_project_assignments(client, params: Paginated):
    return await client.list_project_assignments(params.payload())


async def list_task_assignments(client, params: ListTaskAssignments):
    # project_id is both the path segment and a query option
    return await client.list_task_assignments(params.project_id, params.payload())


tools = [
    Tool(
        name="harvest_time_report",
        description="Get time report for a date range",
        category=CATEGORY,
        params=TimeReport,
        handler=time_report,
        purpose="Summarise tracked time per team member over a date range.",
        examples=(
            {"from": "2024-01-01", "to": "2024-01-31"},
            {"from": "2024-01-15", "to": "2024-01-21", "user_id": "12345"},
            {"from": "2024-01-01", "to": "2024-01-31", "project_id": "67890"},
        ),
        response=(
            "An object with `results` (array) plus pagination fields. Each row has "
            "user_id, user_name, total_hours, billable_hours, currency and billable_amount."
        ),
        tips="- Combine user, project and client filters for targeted reports",
        errors="- Missing from or to\n- from after to (422 from Harvest)",
    ),
    Tool(
        name="harvest_list_project_assignments",
        description="List project assignments for the current user",
        category=CATEGORY,
        params=Paginated,
        handler=list_project_assignments,
        purpose="See which projects you can log time against.",
        examples=({}, {"page": 1, "per_page": 25}),
        response=(
            "An object with `project_assignments` (array). Each assignment has id, "
            "project, client, hourly_rate, budget, is_active and its task_assignments."
        ),
        tips="- The fastest way to find valid project_id values for time entries",
    ),
    Tool(
        name="harvest_list_task_assignments",
        description="List task assignments for a project",
        category=CATEGORY,
        params=ListTaskAssignments,
        handler=list_task_assignments,
        purpose="See which tasks are available for time tracking on one project.",
        examples=({"project_id": "12345"}, {"project_id": "12345", "page": 1, "per_page": 50}),
        response=(
            "An object with `task_assignments` (array). Each assignment has id, task, "
            "is_active, billable, hourly_rate and budget."
        ),
        tips=(
            "1. harvest_list_project_assignments to find the project\n"
            "2. harvest_list_task_assignments to find its tasks\n"
            "3. harvest_create_time_entry with both IDs"
        ),
        errors="- Project not found (404)",
    ),
]
