# =============================================================================
# core/content_service.py  —  Operation Dispatcher
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Implements the five content operations.  Each one:
#     1. validates its arguments
#     2. binds them to the operation's query template
#     3. runs the query through the transport client
#     4. hands the typed result to the projector
#   and comes back with an Outcome (Success or Failure).  `render()` turns
#   the outcome into the single string the caller sees.
#
# THE ERROR CONTRACT (the only two error strings ever returned):
#   "Error: [Request failed]"  anything going wrong in steps 3-4
#   "Error: [<message>]"       anything going wrong before the query is sent
#
#   Every failure is logged exactly once, here, with the operation name and
#   its key arguments.  Nothing is raised to the caller.
#
# STATE:
#   None between calls.  The transport client is the only shared object and
#   it holds no response data.
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from core.config import Settings
from core.errors import InvalidArgument
from core.models import Recommendation, SearchConnection, Toc, Topic
from core.projector import (
    project_recommendations,
    project_search,
    project_toc,
    project_topic,
)
from core.queries import get_template
from core.transport import GraphQLClient

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error: ["
REQUEST_FAILED = "Request failed"


# -----------------------------------------------------------------------------
# Outcome: the internal result type, rendered once at the boundary
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Success:
    payload: str


@dataclass(frozen=True)
class Failure:
    message: str


Outcome = Union[Success, Failure]


def render(outcome: Outcome) -> str:
    if isinstance(outcome, Success):
        return outcome.payload
    return f"{ERROR_PREFIX}{outcome.message}]"


def is_error(text: str) -> bool:
    """True when `text` is one of the sentinel error strings."""
    return text.startswith(ERROR_PREFIX) and text.endswith("]")


# -----------------------------------------------------------------------------
# Argument checks (type/shape only)
# -----------------------------------------------------------------------------
def _require_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    return value


def _require_text(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f"{name} must be a non-empty string, got {value!r}")
    return value


class ContentService:
    """The five content operations, each returning a JSON or error string."""

    def __init__(self, client: GraphQLClient) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "ContentService":
        return cls(GraphQLClient.from_settings(settings))

    def close(self) -> None:
        self._client.close()

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------
    def get_toc(self, publication_id: int) -> str:
        """Table of contents of a publication, or "{}" when it has none."""
        return render(self._dispatch(
            "getToc",
            lambda: {"publicationId": _require_int("publicationId", publication_id)},
            Toc.from_dict,
            project_toc,
            context={"publicationId": publication_id},
        ))

    def get_topic_content_by_id(self, publication_id: int, topic_id: int) -> str:
        """Full topic content by publication and topic id, or "{}"."""
        return render(self._dispatch(
            "getTopicContentById",
            lambda: {
                "publicationId": _require_int("publicationId", publication_id),
                "topicId": _require_int("topicId", topic_id),
            },
            Topic.from_dict,
            project_topic,
            context={"publicationId": publication_id, "topicId": topic_id},
        ))

    def get_topic_content_by_url(self, publication_id: int, url: str) -> str:
        """Full topic content by publication id and topic URL, or "{}"."""
        return render(self._dispatch(
            "getTopicContentByUrl",
            lambda: {
                "publicationId": _require_int("publicationId", publication_id),
                "url": _require_text("url", url),
            },
            Topic.from_dict,
            project_topic,
            context={"publicationId": publication_id, "url": url},
        ))

    def search_topics(self, term: str) -> str:
        """Top matches for `term`, in the service's ranking order, or "[]"."""
        return render(self._dispatch(
            "searchTopics",
            lambda: {"term": _require_text("term", term)},
            SearchConnection.from_dict,
            project_search,
            context={"term": term},
        ))

    def get_recommendations(self, topic: str) -> str:
        """Topics recommended for `topic` (ish_<publicationId>-<topicId>-16), or "[]"."""
        return render(self._dispatch(
            "getRecommendations",
            lambda: {"topic": _require_text("topic", topic)},
            Recommendation.from_dict,
            project_recommendations,
            context={"topic": topic},
        ))

    # -------------------------------------------------------------------------
    # invoked → querying → (mapped | failed)
    # -------------------------------------------------------------------------
    def _dispatch(
        self,
        operation: str,
        bind: Callable[[], dict],
        decode: Callable[[Any], Any],
        project: Callable[[Optional[Any]], str],
        context: dict,
    ) -> Outcome:
        try:
            template = get_template(operation)
            variables = template.bind(**bind())
        except Exception as exc:
            logger.error("Error creating GraphQL request for %s %s: %s", operation, context, exc, exc_info=True)
            return Failure(str(exc))

        try:
            result = self._client.execute(template.document, variables, template.result_path, decode)
            return Success(project(result))
        except Exception:
            logger.error("Request failed for %s %s", operation, context, exc_info=True)
            return Failure(REQUEST_FAILED)
