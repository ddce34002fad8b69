# =============================================================================
# mensa_agent/assistant.py  —  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the Google ADK agent: an LLM (any provider LiteLlm supports,
#   OpenRouter by default) plus the mensa MCP server as its only toolset.
#
#   ┌───────────────────────────────┐        ┌─────────────────────────┐
#   │  Google ADK Agent             │  MCP   │  FastMCP server         │
#   │  prompt + LiteLlm model       │──────▶│  mensa_tools.mcp_server │
#   └───────────────────────────────┘ stdio  │  • get_mensa_facilities │
#                                            │  • get_mensa_menu       │
#                                            └─────────────────────────┘
#
# MCP CONNECTION:
#   ADK starts the server as a subprocess ("uv run python -m
#   mensa_tools.mcp_server") from the project root and speaks MCP over its
#   stdin/stdout.  "uv run" makes the subprocess use the project's .venv.
# =============================================================================

import os
from typing import Optional

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from mensa.config import Settings, get_settings
from mensa.week_dates import today
from mensa_agent.prompt import get_mensa_assistant_prompt

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def create_mcp_toolset() -> MCPToolset:
    """Connect to the mensa MCP server over stdio."""
    return MCPToolset(
        connection_params=StdioServerParameters(
            command="uv",
            args=["run", "python", "-m", "mensa_tools.mcp_server"],
            cwd=PROJECT_ROOT,
        ),
    )


def create_agent(settings: Optional[Settings] = None) -> Agent:
    """Create the Munich mensa assistant agent.

    The model string comes from MENSA_AGENT_MODEL (LiteLlm format, e.g.
    "openrouter/openai/gpt-4o"); LiteLlm reads the provider's API key from
    the environment.
    """
    settings = settings or get_settings()

    return Agent(
        name="munich_mensa_assistant",
        model=LiteLlm(model=settings.agent_model),
        instruction=get_mensa_assistant_prompt(today(tz=settings.tz)),
        tools=[create_mcp_toolset()],
    )
