# =============================================================================
# mensa_tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool server.
#
# ARCHITECTURAL ROLE:
#   mensa_tools/ is the translation layer between the MCP protocol and the
#   mensa/ business logic.  The tools:
#     1. Take typed arguments from the agent
#     2. Delegate to the facility directory / menu fetcher
#     3. Return JSON text the LLM can read
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT talk HTTP or compute weeks (that's in mensa/)
#   - They do NOT know about Google ADK (the agent/ layer does)
# =============================================================================
