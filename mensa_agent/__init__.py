# =============================================================================
# mensa_agent/__init__.py
# =============================================================================
# This package contains the Google ADK agent configuration.
#
# ARCHITECTURAL ROLE:
#   The agent is the coordinator.  It receives a question ("Where can I get
#   vegan food in Garching today?"), decides which MCP tools to call, and
#   writes the answer.  It holds no canteen logic itself:
#     mensa_agent/ → orchestration only
#     mensa_tools/ → MCP wrappers only
#     mensa/       → actual logic
# =============================================================================
