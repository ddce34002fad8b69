# =============================================================================
# mensa/__init__.py
# =============================================================================
# This package contains ALL business logic for the Munich Mensa tools.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports Google ADK, FastMCP, or any orchestration
#   framework.  The only third-party imports are httpx (talking to the
#   eat-api) and pydantic (checking what the eat-api sends back).
#
# Layout:
#   models.py      → dataclasses for facilities, menus and tool results
#   errors.py      → the exception taxonomy every failure maps onto
#   config.py      → Settings loaded from environment variables
#   week_dates.py  → ISO week arithmetic (the eat-api is organised by week)
#   eat_api.py     → async HTTP client + upstream JSON schemas
#   facilities.py  → facility directory with a process-wide cache
#   menu.py        → daily menu lookup
# =============================================================================
