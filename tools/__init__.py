# =============================================================================
# tools/__init__.py
# =============================================================================
# FastMCP wrappers around the content operations in core/.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between MCP callers and core/.  It:
#     1. Registers each ContentService operation as a named MCP tool
#     2. Keeps the caller-facing names and argument names stable
#     3. Logs every call and response to stderr
#
# WHAT TOOLS DO NOT DO:
#   - No query building, mapping or error handling (that's in core/)
#   - No knowledge of the demo agent in agent/
# =============================================================================
