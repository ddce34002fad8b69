"""Tests for the MCP tool layer."""

import json
from datetime import date

import httpx
import pytest
from fastmcp import Client

from mensa.facilities import FacilityDirectory
from mensa.menu import MenuFetcher
from mensa_tools import mcp_server
from mensa_tools.mcp_server import list_facilities, lookup_menu

from tests.conftest import make_api


@pytest.fixture
def directory(api):
    return FacilityDirectory(api)


@pytest.fixture
def menus(api):
    return MenuFetcher(api)


# ---------------------------------------------------------------------------
# list_facilities
# ---------------------------------------------------------------------------

class TestListFacilities:

    @pytest.mark.asyncio
    async def test_all_facilities(self, directory):
        payload = await list_facilities(directory)

        assert payload["total"] == 3
        assert "filter" not in payload
        first = payload["facilities"][0]
        assert first["api_name"] == "mensa-arcisstr"
        assert first["coordinates"] == {"latitude": 48.147420, "longitude": 11.567220}
        assert first["open_hours"]["fri"] == {"start": "11:00", "end": "13:30"}

    @pytest.mark.asyncio
    async def test_filter_is_echoed(self, directory):
        payload = await list_facilities(directory, "garching")

        assert payload["total"] == 1
        assert payload["filter"] == "garching"
        assert payload["facilities"][0]["name"] == "Mensa Garching"

    @pytest.mark.asyncio
    async def test_upstream_failure_becomes_payload(self):
        directory = FacilityDirectory(make_api(lambda request: httpx.Response(502)))

        payload = await list_facilities(directory)

        assert payload == {
            "success": False,
            "error": "Failed to fetch facilities: HTTP error 502: Bad Gateway",
            "error_type": "fetch_error",
        }


# ---------------------------------------------------------------------------
# lookup_menu
# ---------------------------------------------------------------------------

class TestLookupMenu:

    @pytest.mark.asyncio
    async def test_enriches_success_with_facility(self, directory, menus):
        payload = await lookup_menu(directory, menus, "mensa-garching", "2025-06-16")

        assert payload["success"] is True
        data = payload["data"]
        assert data["facility"] == "mensa-garching"
        assert data["facility_name"] == "Mensa Garching"
        assert data["location"] == "Boltzmannstraße 19, Garching"
        assert len(data["menu"]) == 3

    @pytest.mark.asyncio
    async def test_unknown_facility(self, directory, menus, recorder):
        payload = await lookup_menu(directory, menus, "MENSA-GARCHING", "2025-06-16")

        assert payload["success"] is False
        assert payload["error_type"] == "not_found"
        assert "Facility with API name 'MENSA-GARCHING' not found" in payload["error"]
        assert recorder.calls == ["/enums/canteens.json"]

    @pytest.mark.asyncio
    async def test_date_defaults_to_today(self, directory, menus):
        payload = await lookup_menu(directory, menus, "mensa-garching", today=date(2025, 6, 16))

        assert payload["success"] is True
        assert payload["data"]["date"] == "2025-06-16"

    @pytest.mark.asyncio
    async def test_menu_failure_is_passed_through(self, directory, menus):
        payload = await lookup_menu(directory, menus, "mensa-garching", "2025-06-22")

        assert payload["success"] is False
        assert payload["error_type"] == "not_found"
        assert "data" not in payload

    @pytest.mark.asyncio
    async def test_directory_failure_becomes_payload(self):
        api = make_api(lambda request: httpx.Response(500))

        payload = await lookup_menu(FacilityDirectory(api), MenuFetcher(api), "mensa-garching", "2025-06-16")

        assert payload["success"] is False
        assert payload["error_type"] == "fetch_error"


# ---------------------------------------------------------------------------
# MCP surface
# ---------------------------------------------------------------------------

def _input_schema(tool) -> dict:
    dumped = tool.model_dump()
    return dumped.get("input_schema") or dumped["inputSchema"]


class TestServer:

    @pytest.mark.asyncio
    async def test_registers_both_tools(self):
        async with Client(mcp_server.mcp) as client:
            tools = await client.list_tools()

        by_name = {tool.name: tool for tool in tools}
        assert set(by_name) == {"get_mensa_facilities", "get_mensa_menu"}
        schema = _input_schema(by_name["get_mensa_menu"])
        assert set(schema["properties"]) == {"apiName", "date"}
        required = schema.get("required", [])
        assert "apiName" in required
        assert "date" not in required

    @pytest.mark.asyncio
    async def test_tool_returns_json_text(self, monkeypatch, directory):
        monkeypatch.setattr(mcp_server, "_directory", directory)

        async with Client(mcp_server.mcp) as client:
            result = await client.call_tool("get_mensa_facilities", {"filter": "stubistro"})

        payload = json.loads(result.content[0].text)
        assert payload["total"] == 1
        assert payload["facilities"][0]["api_name"] == "stubistro-goethestr"

    @pytest.mark.asyncio
    async def test_menu_tool_reports_unknown_facility(self, monkeypatch, directory, menus):
        monkeypatch.setattr(mcp_server, "_directory", directory)
        monkeypatch.setattr(mcp_server, "_menus", menus)

        async with Client(mcp_server.mcp) as client:
            result = await client.call_tool("get_mensa_menu", {"apiName": "nope", "date": "2025-06-16"})

        payload = json.loads(result.content[0].text)
        assert payload["success"] is False
        assert payload["error_type"] == "not_found"

    @pytest.mark.asyncio
    async def test_facility_listing_explains_which_key_to_pass(self):
        async with Client(mcp_server.mcp) as client:
            tools = {tool.name: tool for tool in await client.list_tools()}

        listing = tools["get_mensa_facilities"].description
        assert "api_name" in listing
        assert "apiName" in listing
        assert "api_name" in tools["get_mensa_menu"].description
