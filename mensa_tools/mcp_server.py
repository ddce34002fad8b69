# =============================================================================
# mensa_tools/mcp_server.py  —  FastMCP Tool Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines the two MCP tools the agent can call.  Each tool is a thin
#   wrapper around mensa/ logic: it validates arguments, delegates, and
#   formats the result as a JSON text payload.
#
# HOW IT WORKS (the flow):
#   1. The agent decides it needs canteen data (e.g., "what's for lunch?")
#   2. It calls a tool by name via MCP (e.g., "get_mensa_menu")
#   3. FastMCP routes the call to the decorated function below
#   4. The function calls the payload builder, which calls mensa/ logic
#   5. The agent receives a JSON string
#
# PAYLOAD BUILDERS vs TOOLS:
#   list_facilities() and lookup_menu() build the payload dicts and take
#   their collaborators as arguments.  The @mcp.tool() functions only bind
#   them to the process-wide directory/fetcher and handle logging.  Tests
#   call the builders directly with fake HTTP transports.
#
# NO EXCEPTIONS CROSS THIS FILE:
#   Every failure becomes {"success": false, "error": "..."}.
#
# RUNNING THIS SERVER:
#     a) stdio (default):  python -m mensa_tools.mcp_server
#     b) sse / http:       MENSA_MCP_TRANSPORT=http python -m mensa_tools.mcp_server
#   The chat agent (mensa_agent/) launches (a) as a subprocess.
# =============================================================================

import json
import logging
import sys
from dataclasses import asdict
from datetime import date as Date
from typing import Optional

from dotenv import load_dotenv
from fastmcp import FastMCP

from mensa.config import Settings, get_settings
from mensa.eat_api import EatApiClient
from mensa.errors import MensaError, NotFoundError
from mensa.facilities import FacilityDirectory, filter_facilities
from mensa.menu import MenuFetcher, get_current_date
from mensa.models import MenuResult

load_dotenv()

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because with the stdio transport the MCP messages travel
# over STDOUT.  A log line on stdout would corrupt the JSON-RPC stream.
#
#   CYAN   → incoming requests (tool name + parameters)
#   YELLOW → intermediate status
#   GREEN  → response JSON
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> str:
    """Log the payload as compact JSON in GREEN, then return it as tool text."""
    logging.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(result, separators=(',', ':'), ensure_ascii=False)}{_RESET}")
    return json.dumps(result, indent=2, ensure_ascii=False)


def _failure(error: MensaError) -> dict:
    return MenuResult.failure(error).to_dict()


# =============================================================================
# Payload builders
# =============================================================================
async def list_facilities(directory: FacilityDirectory, filter: Optional[str] = None) -> dict:
    """Build the get_mensa_facilities payload."""
    try:
        facilities = await directory.get_facilities()
    except MensaError as e:
        return _failure(e)

    matches = filter_facilities(facilities, filter)
    payload = {
        "total": len(matches),
        "facilities": [asdict(f) for f in matches],
    }
    if filter:
        payload["filter"] = filter
    return payload


async def lookup_menu(
    directory: FacilityDirectory,
    menus: MenuFetcher,
    api_name: str,
    date: Optional[str] = None,
    today: Optional[Date] = None,
) -> dict:
    """Build the get_mensa_menu payload.

    ``date`` defaults to ``today`` (itself defaulting to the configured
    clock).  The api name must match a known facility exactly.
    """
    if not date:
        date = today.isoformat() if today is not None else get_current_date(tz=get_settings().tz)

    try:
        facility = await directory.find_facility(api_name)
    except MensaError as e:
        return _failure(e)

    if facility is None:
        return _failure(NotFoundError(
            f"Facility with API name '{api_name}' not found. "
            "Use get_mensa_facilities to see available facilities."
        ))

    result = await menus.get_mensa_menu(api_name, date)
    if result.success and result.data is not None:
        result.data.facility_name = facility.name
        result.data.location = facility.location
    return result.to_dict()


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("munich-mensa")

_api = EatApiClient.from_settings(get_settings())
_directory = FacilityDirectory(_api)
_menus = MenuFetcher(_api)


# =============================================================================
# TOOL 1: get_mensa_facilities
# =============================================================================
@mcp.tool()
async def get_mensa_facilities(filter: Optional[str] = None) -> str:
    """List the canteens, cafeterias and bistros of the Studierendenwerk München.

    WHEN TO CALL THIS: Before get_mensa_menu if you do not already know the
    facility's api_name, or when the user asks where they can eat.

    Args:
        filter: Optional text matched case-insensitively against the
            facility name or address (e.g., "garching"). Defaults to all
            facilities.

    Returns:
        JSON with:
          - total: number of facilities returned
          - facilities: list of {name, location, api_name, coordinates,
            open_hours, queue_status}
          - filter: echoed back when given

        Pass a facility's api_name value as the apiName argument of
        get_mensa_menu.
    """
    _log_request("get_mensa_facilities", filter=filter)
    payload = await list_facilities(_directory, filter)
    if "total" in payload:
        _log_status(f"{payload['total']} facilities match")
    return _log_response("get_mensa_facilities", payload)


# =============================================================================
# TOOL 2: get_mensa_menu
# =============================================================================
# The parameter is called apiName (not api_name) to keep the published tool
# schema stable for existing clients.
# =============================================================================
@mcp.tool()
async def get_mensa_menu(apiName: str, date: Optional[str] = None) -> str:
    """Get the dishes served at one facility on one day.

    WHEN TO CALL THIS: When the user asks what is on the menu. Menus are
    published per week; weekends, holidays and weeks far in the future
    usually have no data.

    Args:
        apiName: The "api_name" value of a facility returned by
            get_mensa_facilities (e.g., "mensa-arcisstr"). Case-sensitive.
        date: Date in YYYY-MM-DD format (e.g., "2025-05-25"). Defaults to
            today.

    Returns:
        JSON with success=true and data {date, facility, facility_name,
        location, menu: [{name, category, labels, price}]}, or
        success=false with an error message and error_type.
    """
    _log_request("get_mensa_menu", apiName=apiName, date=date)
    payload = await lookup_menu(_directory, _menus, apiName, date)
    if payload.get("success"):
        _log_status(f"{len(payload['data']['menu'])} dishes found")
    return _log_response("get_mensa_menu", payload)


# =============================================================================
# Server entry point
# =============================================================================
def run(settings: Optional[Settings] = None) -> None:
    """Start the server on the configured transport."""
    settings = settings or get_settings()
    if settings.mcp_transport == "stdio":
        mcp.run()
    else:
        _log_status(f"Serving over {settings.mcp_transport} on {settings.mcp_host}:{settings.mcp_port}")
        mcp.run(transport=settings.mcp_transport, host=settings.mcp_host, port=settings.mcp_port)


if __name__ == "__main__":
    run()
