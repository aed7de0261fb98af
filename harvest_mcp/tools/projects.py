# Project and task tools
from pydantic import Field

from .base import ActivePaginated, Tool, ToolParams

CATEGORY = "Project Management"


class ListProjects(ActivePaginated):
    client_id: str | None = Field(None, description="Filter by client ID")


class GetProject(ToolParams):
    id: str = Field(..., description="Project ID")


async def list_projects(client, params: ListProjects):
    return await client.list_projects(params.payload())


async def get_project(client, params: GetProject):
    return await client.get_project(params.id)


async def list_tasks(client, params: ActivePaginated):
    return await client.list_tasks(params.payload())


tools = [
    Tool(
        name="harvest_list_projects",
        description="List all projects",
        category=CATEGORY,
        params=ListProjects,
        handler=list_projects,
        purpose="Find projects to log time against, optionally filtered by client or status.",
        examples=(
            {"is_active": True},
            {"client_id": "12345", "is_active": True},
            {"page": 1, "per_page": 25},
        ),
        response=(
            "An object with `projects` (array) plus pagination fields. Each project "
            "has id, name, code, is_active, client, budget and rate information."
        ),
        tips=(
            "- harvest_create_time_entry needs a project_id from here\n"
            "- Pair with harvest_list_task_assignments to get valid tasks"
        ),
    ),
    Tool(
        name="harvest_get_project",
        description="Get details of a specific project",
        category=CATEGORY,
        params=GetProject,
        handler=get_project,
        purpose="Fetch one project including budget, rates and client.",
        examples=({"id": "12345"},),
        response=(
            "The project object: id, name, code, notes, is_active, is_billable, "
            "is_fixed_fee, client, budget settings, hourly_rate, starts_on, ends_on."
        ),
        tips="- Use harvest_list_projects first to find project IDs",
        errors="- Project not found (404)",
    ),
    Tool(
        name="harvest_list_tasks",
        description="List all tasks",
        category=CATEGORY,
        params=ActivePaginated,
        handler=list_tasks,
        purpose="List the account's task catalogue.",
        examples=({"is_active": True}, {"page": 1, "per_page": 50}),
        response=(
            "An object with `tasks` (array) plus pagination fields. Each task has id, "
            "name, billable_by_default, is_active, is_default and hourly_rate."
        ),
        tips=(
            "- Tasks are global but only usable on projects they are assigned to\n"
            "- Use harvest_list_task_assignments for the tasks of one project"
        ),
    ),
]
