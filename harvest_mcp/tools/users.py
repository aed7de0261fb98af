# User and client tools
from .base import ActivePaginated, NoParams, Tool

CATEGORY = "User Management"


async def get_current_user(client, params: NoParams):
    return await client.get_current_user()


async def list_users(client, params: ActivePaginated):
    return await client.list_users(params.payload())


async def list_clients(client, params: ActivePaginated):
    return await client.list_clients(params.payload())


tools = [
    Tool(
        name="harvest_get_current_user",
        description="Get information about the authenticated user",
        category=CATEGORY,
        params=NoParams,
        handler=get_current_user,
        purpose="Show the account behind the access token: identity, role and settings.",
        examples=({},),
        response=(
            "The user object: id, first_name, last_name, email, is_active, is_admin, "
            "is_contractor, timezone, weekly_capacity, default_hourly_rate, cost_rate."
        ),
        tips=(
            "- Quick check that authentication works\n"
            "- Gives the user_id used to filter time entries"
        ),
    ),
    Tool(
        name="harvest_list_users",
        description="List all users in the account",
        category=CATEGORY,
        params=ActivePaginated,
        handler=list_users,
        purpose="List the people in the account for filtering and reporting.",
        examples=({"is_active": True}, {"page": 1, "per_page": 25}),
        response="An object with `users` (array) plus pagination fields.",
    ),
    Tool(
        name="harvest_list_clients",
        description="List all clients",
        category=CATEGORY,
        params=ActivePaginated,
        handler=list_clients,
        purpose="List clients, e.g. to filter projects by client.",
        examples=({"is_active": True}, {}),
        response=(
            "An object with `clients` (array) plus pagination fields. Each client has "
            "id, name, is_active, address and currency."
        ),
        tips="- Pass a client_id to harvest_list_projects to narrow projects",
    ),
]
