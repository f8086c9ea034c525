# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the five content operations as MCP tools.  Each tool is a thin
#   wrapper around core.content_service.ContentService: it logs the call,
#   forwards the scalar arguments, and returns the service's string as-is.
#
# TOOL SURFACE (names and argument names are part of the contract):
#   getToc(publicationId)                     → JSON object, "{}" or error
#   getTopicContentById(publicationId, topicId)
#   getTopicContentByUrl(publicationId, url)
#   searchTopics(term)                        → JSON array, "[]" or error
#   getRecommendations(topic)                 → JSON array, "[]" or error
#
#   Errors come back as "Error: [Request failed]" or "Error: [<message>]".
#   A tool never raises.
#
# RUNNING THIS SERVER:
#     a) stdio (default):  python -m tools.mcp_server
#     b) network:          DXD_MCP_TRANSPORT=http DXD_MCP_PORT=8085 python -m tools.mcp_server
#     c) spawned by the demo agent (agent/docs_agent.py) over stdio
# =============================================================================

import logging
import sys
from functools import lru_cache

from dotenv import load_dotenv
from fastmcp import FastMCP

from core.config import Settings
from core.content_service import ContentService, Failure, is_error, render
from core.errors import ContentServiceError

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: with the stdio transport, STDOUT carries the MCP
# message stream.
#
#   CYAN    incoming tool calls
#   GREEN   responses
#   YELLOW  status
#   RED     error responses
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

# Response previews are cut here; topic bodies can be large
_PREVIEW_CHARS = 500


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: str) -> str:
    """Log a preview of the tool response, then return it unchanged."""
    colour = _RED if is_error(result) else _GREEN
    preview = result if len(result) <= _PREVIEW_CHARS else result[:_PREVIEW_CHARS] + "…"
    logging.info(f"{colour}  ← {tool_name} response ({len(result)} chars): {preview}{_RESET}")
    return result


# =============================================================================
# Service wiring
# =============================================================================
# Built on first use so importing this module needs no environment.
# =============================================================================
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def get_service() -> ContentService:
    settings = get_settings()
    _log_status(f"Content service at {settings.content_url} "
                f"(auth {'on' if settings.auth_enabled else 'off'})")
    return ContentService.from_settings(settings)


def _call(tool_name: str, method: str, *args) -> str:
    """Run one service operation; a bad configuration becomes an error string."""
    try:
        service = get_service()
    except ContentServiceError as exc:
        logging.error(f"{tool_name}: content service unavailable: {exc}")
        return _log_response(tool_name, render(Failure(str(exc))))
    return _log_response(tool_name, getattr(service, method)(*args))


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP(
    "dxd-content-service",
    instructions="This server provides tools to interact with a Tridion Docs DXD Content Service",
)


# =============================================================================
# TOOL 1: getToc
# =============================================================================
@mcp.tool(name="getToc")
def get_toc(publicationId: int) -> str:
    """Gets the Table of Contents for a given publication ID.

    Returns a JSON object with an `entries` array.  Each entry has id, tocId,
    url, title, hasChildren and, up to three levels deep, its own `entries`.
    Returns "{}" if the publication has no table of contents.

    Args:
        publicationId: The publication ID.
    """
    _log_request("getToc", publicationId=publicationId)
    return _call("getToc", "get_toc", publicationId)


# =============================================================================
# TOOLS 2 & 3: topic content, by id or by URL (same output shape)
# =============================================================================
@mcp.tool(name="getTopicContentById")
def get_topic_content_by_id(publicationId: int, topicId: int) -> str:
    """Get the content for a specific topic given its publication ID and topic ID.

    Returns a JSON object with __typename, publicationId, itemId, title,
    shortDescription, url, xhtml (the body), links and relatedLinks.  Task
    topics also carry `steps`.  Returns "{}" if the topic does not exist.

    Args:
        publicationId: The publication ID.
        topicId: The topic ID.
    """
    _log_request("getTopicContentById", publicationId=publicationId, topicId=topicId)
    return _call("getTopicContentById", "get_topic_content_by_id", publicationId, topicId)


@mcp.tool(name="getTopicContentByUrl")
def get_topic_content_by_url(publicationId: int, url: str) -> str:
    """Get the content for a specific topic given its publication ID and URL.

    Same output as getTopicContentById.  Returns "{}" if nothing lives at
    that URL.

    Args:
        publicationId: The publication ID.
        url: The topic URL.
    """
    _log_request("getTopicContentByUrl", publicationId=publicationId, url=url)
    return _call("getTopicContentByUrl", "get_topic_content_by_url", publicationId, url)


# =============================================================================
# TOOL 4: searchTopics
# =============================================================================
@mcp.tool(name="searchTopics")
def search_topics(term: str) -> str:
    """Search all topics.

    Returns a JSON array of up to 10 matches, best first, each with score,
    id, locale, url and title.  Returns "[]" when nothing matches.

    Args:
        term: The terms to search for.
    """
    _log_request("searchTopics", term=term)
    return _call("searchTopics", "search_topics", term)


# =============================================================================
# TOOL 5: getRecommendations
# =============================================================================
@mcp.tool(name="getRecommendations")
def get_recommendations(topic: str) -> str:
    """Get recommendations for a given topic.

    Returns a JSON array of recommended topics, each with id, url, locale,
    title, publicationId and publicationTitle.  Returns "[]" when there are
    none.

    Args:
        topic: The topic to get recommendations for, in the format
            'ish_<publicationId>-<topicId>-16'.
    """
    _log_request("getRecommendations", topic=topic)
    return _call("getRecommendations", "get_recommendations", topic)


# =============================================================================
# Server entry point
# =============================================================================
def main() -> None:
    load_dotenv()
    settings = get_settings()
    configure_logging(settings.log_level)
    # keep httpx request lines out of the tool log unless debugging
    logging.getLogger("httpx").setLevel(max(logging.WARNING, logging.getLogger().level))

    try:
        if settings.mcp_transport == "stdio":
            mcp.run()
        else:
            _log_status(f"Listening on {settings.mcp_host}:{settings.mcp_port} ({settings.mcp_transport})")
            mcp.run(transport=settings.mcp_transport, host=settings.mcp_host, port=settings.mcp_port)
    finally:
        if get_service.cache_info().currsize:
            get_service().close()
            get_service.cache_clear()


if __name__ == "__main__":
    main()
