# =============================================================================
# agent/docs_agent.py  —  Google ADK Agent Configuration (with OpenRouter LLM)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the documentation-assistant agent: an ADK Agent whose only
#   capabilities are the five content tools served by tools/mcp_server.py.
#
#   ┌────────────────────────────┐        stdio        ┌─────────────────────┐
#   │  Google ADK Agent          │ ──────────────────▶ │  FastMCP Server     │
#   │  (LiteLlm → OpenRouter)    │                     │  (tools/mcp_server) │
#   └────────────────────────────┘                     └─────────────────────┘
#                                                                │
#                                                                ▼
#                                                      ┌─────────────────────┐
#                                                      │  core/ → GraphQL    │
#                                                      │  content service    │
#                                                      └─────────────────────┘
#
# ENVIRONMENT:
#   OPENROUTER_API_KEY   read by LiteLlm
#   DOCS_AGENT_MODEL     LiteLlm model string (default openrouter/openai/gpt-4o)
#   DXD_*                passed through to the spawned server (core/config.py)
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset, StdioServerParameters

from agent.prompt import get_docs_assistant_prompt

DEFAULT_MODEL = "openrouter/openai/gpt-4o"


def create_agent() -> Agent:
    """Create the documentation assistant agent.

    The MCP server is started as a subprocess with the project root as its
    working directory and the current interpreter, so it sees the same
    environment (and the same DXD_* settings) as this process.
    """
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    mcp_tools = MCPToolset(
        connection_params=StdioServerParameters(
            command=sys.executable,
            args=["-m", "tools.mcp_server"],
            cwd=project_root,
            env=dict(os.environ, DXD_MCP_TRANSPORT="stdio"),
        ),
    )

    return Agent(
        name="dxd_docs_assistant",
        model=LiteLlm(model=os.environ.get("DOCS_AGENT_MODEL", DEFAULT_MODEL)),
        instruction=get_docs_assistant_prompt(),
        tools=[mcp_tools],
    )
