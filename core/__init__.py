# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL business logic for the home assistant agent:
# data models, the error taxonomy, tool argument schemas, the room
# temperature store, the weather/search adapters, and configuration.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports Google ADK, FastMCP, or any orchestration
#   framework.  Every module here can be imported and tested with no model
#   session and no network access.
# =============================================================================
