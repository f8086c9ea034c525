# =============================================================================
# agent/__init__.py
# =============================================================================
# A demo documentation assistant built on Google ADK.
#
# It spawns tools/mcp_server.py over stdio, discovers the five content tools
# and uses them to answer questions about the published documentation.  It
# holds no content logic of its own: that lives in core/.
# =============================================================================
