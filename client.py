import json, os, sys
import readline  # noqa: F401  (line editing for input())

import openai
import requests
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

MCP_URL = os.getenv("HARVEST_MCP_URL", "http://localhost:8000")
MODEL   = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

# Tools that change data in Harvest ask for confirmation first
CONFIRM_TOOLS = {
    "harvest_create_time_entry",
    "harvest_update_time_entry",
    "harvest_delete_time_entry",
    "harvest_restart_timer",
    "harvest_stop_timer",
}

SYSTEM_PROMPT = (
    "You are an assistant that tracks time in Harvest. Use the harvest_* tools to "
    "look up projects, tasks and time entries before creating or changing anything. "
    "Dates are YYYY-MM-DD; 'today' and 'yesterday' are also accepted."
)


def fetch_functions() -> list[dict]:
    """OpenAI function schemas built from the server's tool catalogue."""
    r = requests.get(f"{MCP_URL}/tools", timeout=10)
    r.raise_for_status()
    return [
        {
            "type": "function",
            "function": {
                "name": tool["name"],
                "description": tool["description"],
                "parameters": tool["inputSchema"],
            },
        }
        for tool in r.json()["tools"]
    ]


def call_tool(name: str, args: dict) -> dict:
    r = requests.post(f"{MCP_URL}/tools/call", json={"name": name, "arguments": args}, timeout=60)
    r.raise_for_status()
    return r.json()


def confirm(name: str, args: dict) -> bool:
    print("\n" + "=" * 60)
    print(f"📋 CONFIRM {name}")
    print("=" * 60)
    for key, value in args.items():
        print(f"  {key}: {value}")
    print("=" * 60)
    answer = input("Proceed? [y/N]: ").strip().lower()
    return answer in ("y", "yes", "confirm", "ok", "proceed")


def run_tool_call(tool_call) -> str:
    name = tool_call.function.name
    args = json.loads(tool_call.function.arguments or "{}")
    print(f"↳ {name} {args}")

    if name in CONFIRM_TOOLS and not confirm(name, args):
        print("❌ Cancelled.")
        return "The user cancelled this action."

    try:
        res = call_tool(name, args)
    except requests.RequestException as e:
        print(f"❌ MCP server error: {e}")
        return f"Error: {e}"

    text = res["content"][0]["text"]
    if res.get("isError"):
        print(f"❌ {text}")
    return text


def chat(client: openai.OpenAI, functions: list[dict], messages: list, user_input: str) -> None:
    messages.append({"role": "user", "content": user_input})
    while True:
        resp = client.chat.completions.create(
            model=MODEL,
            messages=messages,
            tools=functions,
            tool_choice="auto",
        )
        msg = resp.choices[0].message
        messages.append(msg)

        if not msg.tool_calls:
            print(msg.content)
            return

        for tool_call in msg.tool_calls:
            messages.append({
                "role": "tool",
                "tool_call_id": tool_call.id,
                "content": run_tool_call(tool_call),
            })


def main() -> None:
    if not os.getenv("OPENAI_API_KEY"):
        print("❌ OpenAI API key not found!")
        print("Please set your OpenAI API key in your .env file:")
        print("OPENAI_API_KEY=your-api-key-here")
        sys.exit(1)

    try:
        functions = fetch_functions()
    except requests.RequestException as e:
        print(f"❌ Could not reach the Harvest MCP server at {MCP_URL}: {e}")
        sys.exit(1)

    client = openai.OpenAI()
    messages: list = [{"role": "system", "content": SYSTEM_PROMPT}]
    try:
        while True:
            chat(client, functions, messages, input("You: "))
    except (EOFError, KeyboardInterrupt):
        sys.exit()


if __name__ == "__main__":
    main()
