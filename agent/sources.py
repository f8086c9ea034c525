# =============================================================================
# agent/sources.py  —  Topic citations pulled from tool responses
# =============================================================================
#
# The ADK runner hands back each MCP tool result as a dict shaped like an MCP
# CallToolResult: {"content": [{"type": "text", "text": "<tool string>"}], ...}.
# The tool string is JSON ("{}", "[]", a topic, a TOC, a hit list) or an
# "Error: [...]" sentinel.  Only topics that were actually read count as
# sources; search hits and recommendations are candidates, not citations.
# =============================================================================

import json
from dataclasses import dataclass
from typing import Any, List, Optional

from core.content_service import is_error

# Tools whose result is a topic the agent read
TOPIC_TOOLS = ("getTopicContentById", "getTopicContentByUrl")


@dataclass(frozen=True)
class Source:
    title: str
    url: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.title} ({self.url})" if self.url else self.title


def tool_text(response: Any) -> Optional[str]:
    """Return the text payload of a tool response, or None if there is none."""
    if isinstance(response, str):
        return response
    if not isinstance(response, dict):
        return None
    if isinstance(response.get("result"), str):
        return response["result"]
    for block in response.get("content") or []:
        if isinstance(block, dict) and block.get("type") == "text":
            return block.get("text")
    return None


def sources_from_response(tool_name: str, response: Any) -> List[Source]:
    if tool_name not in TOPIC_TOOLS:
        return []
    text = tool_text(response)
    if not text or is_error(text):
        return []
    try:
        topic = json.loads(text)
    except ValueError:
        return []
    if not isinstance(topic, dict) or not topic.get("title"):
        return []
    return [Source(title=topic["title"], url=topic.get("url"))]


class SourceCollector:
    """Accumulates distinct sources across one agent turn, in first-seen order."""

    def __init__(self):
        self._sources: List[Source] = []

    def add(self, tool_name: str, response: Any) -> None:
        for source in sources_from_response(tool_name, response):
            if source not in self._sources:
                self._sources.append(source)

    @property
    def sources(self) -> List[Source]:
        return list(self._sources)
