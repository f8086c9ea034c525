# =============================================================================
# core/__init__.py
# =============================================================================
# The content adapter: query templates, transport, typed models, projector
# and the operation dispatcher.
#
# Nothing in this package imports FastMCP, Google ADK or any orchestration
# framework.  The only third-party import is httpx, in core/transport.py.
# =============================================================================
