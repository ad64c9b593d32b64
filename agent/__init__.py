# =============================================================================
# agent/__init__.py
# =============================================================================
# This package owns the conversation side of the home assistant.
#
#   prompt.py      System instructions and the opening greeting
#   session.py     SessionOrchestrator: the connect -> greet -> serve lifecycle
#                  and the ConversationTransport contract it drives
#   home_agent.py  Google ADK agent + RegistryTool bridge to the tool registry
#   console.py     ConversationTransport for a terminal session
#
# WHAT THE AGENT IS NOT:
#   - It is NOT the tool implementations (that's tools/ and core/)
#   - It does NOT validate arguments or touch the room store
# =============================================================================
