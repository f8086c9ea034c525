# =============================================================================
# core/projector.py  —  Response Projector
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns the typed result objects from core/models.py into canonical JSON
#   text, one function per operation.
#
# ABSENCE IS NOT FAILURE:
#   A missing TOC or topic becomes "{}", a missing search/recommendation
#   result becomes "[]".  The error strings are reserved for failures, so a
#   caller can tell "no content" from "request failed" by shape alone.
#
# OUTPUT SHAPE:
#   - Keys are the GraphQL field names (camelCase).
#   - None fields are omitted, never written as null.
#   - Topics and linked items carry `__typename`; which extra fields appear
#     is decided by the variant `kind`.
#   - Upstream order is preserved everywhere.  Nothing is re-sorted.
#
# Serialization errors propagate to the dispatcher, which reports them as a
# failed request.
# =============================================================================

import json
import logging
from typing import Any, Iterable, Optional

from core.models import (
    Item,
    Kind,
    Link,
    Recommendation,
    RecommendedTopic,
    SearchConnection,
    SearchResult,
    Step,
    Toc,
    TocEntry,
    Topic,
    Variant,
)

logger = logging.getLogger(__name__)

EMPTY_OBJECT = "{}"
EMPTY_LIST = "[]"


def _dumps(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, allow_nan=False)


def _compact(pairs: Iterable[tuple[str, Any]]) -> dict:
    """Build a dict, dropping keys whose value is None."""
    return {key: value for key, value in pairs if value is not None}


def _each(values: Optional[list], convert) -> Optional[list]:
    if values is None:
        return None
    return [convert(value) for value in values if value is not None]


# -----------------------------------------------------------------------------
# Table of Contents
# -----------------------------------------------------------------------------
def toc_entry_to_dict(entry: TocEntry) -> dict:
    return _compact([
        ("id", entry.id),
        ("tocId", entry.toc_id),
        ("url", entry.url),
        ("title", entry.title),
        ("hasChildren", entry.has_children),
        ("entries", _each(entry.entries, toc_entry_to_dict)),
    ])


def toc_to_dict(toc: Toc) -> dict:
    return _compact([("entries", _each(toc.entries, toc_entry_to_dict))])


def project_toc(toc: Optional[Toc]) -> str:
    if toc is None:
        logger.info("No TOC found")
        return EMPTY_OBJECT

    logger.info("Processing TOC with %d top-level entries (%d total)",
                len(toc.entries or []), toc.count_entries())
    childless = toc.childless_parents()
    if childless:
        logger.debug("TOC entries flagged hasChildren without children: %s", childless)
    return _dumps(toc_to_dict(toc))


# -----------------------------------------------------------------------------
# Topics and linked items
# -----------------------------------------------------------------------------
def _variant_to_dict(variant: Variant) -> dict:
    return _compact([("binaryId", variant.binary_id), ("downloadUrl", variant.download_url)])


def item_to_dict(item: Item) -> dict:
    fields = [
        ("__typename", item.typename),
        ("publicationId", item.publication_id),
        ("itemId", item.item_id),
        ("title", item.title),
    ]
    if item.kind is Kind.BINARY_COMPONENT:
        fields.append(("variants", _each(item.variants, _variant_to_dict)))
    elif item.kind in (Kind.TOPIC, Kind.TASK_TOPIC):
        fields.append(("shortDescription", item.short_description))
    return _compact(fields)


def _link_to_dict(link: Link) -> dict:
    return _compact([("item", None if link.item is None else item_to_dict(link.item))])


def _step_to_dict(step: Step) -> dict:
    return _compact([("__typename", step.typename), ("title", step.title), ("xhtml", step.xhtml)])


def topic_to_dict(topic: Topic) -> dict:
    fields = [
        ("__typename", topic.typename),
        ("publicationId", topic.publication_id),
        ("itemId", topic.item_id),
        ("title", topic.title),
        ("shortDescription", topic.short_description),
        ("url", topic.url),
        ("xhtml", topic.xhtml),
    ]
    if topic.kind is Kind.TASK_TOPIC:
        # an empty list still marks the variant; a missing body does not
        fields.append(("steps", _each(topic.steps, _step_to_dict) or []))
    fields.append(("links", _each(topic.links, _link_to_dict)))
    fields.append(("relatedLinks", _each(topic.related_links, _link_to_dict)))
    return _compact(fields)


def project_topic(topic: Optional[Topic]) -> str:
    if topic is None:
        logger.info("No topic content found")
        return EMPTY_OBJECT

    logger.info("Processing topic content for item ID: %s (%s)", topic.item_id, topic.typename)
    return _dumps(topic_to_dict(topic))


# -----------------------------------------------------------------------------
# Search
# -----------------------------------------------------------------------------
def search_result_to_dict(result: SearchResult) -> dict:
    return _compact([
        ("score", result.score),
        ("id", result.id),
        ("locale", result.locale),
        ("url", result.url),
        ("title", result.title),
    ])


def unwrap_search_edges(connection: SearchConnection) -> list[SearchResult]:
    """Pull `node.search` out of each edge, skipping edges with nothing inside."""
    return [
        edge.node.search
        for edge in connection.edges or []
        if edge is not None and edge.node is not None and edge.node.search is not None
    ]


def project_search(connection: Optional[SearchConnection]) -> str:
    if connection is None or connection.edges is None:
        logger.info("No search results found")
        return EMPTY_LIST

    results = unwrap_search_edges(connection)
    logger.info("Processing %d search results (%s total hits)", len(results), connection.hits)
    return _dumps([search_result_to_dict(result) for result in results])


# -----------------------------------------------------------------------------
# Recommendations (only `results` is returned; `sourceTopic` is not)
# -----------------------------------------------------------------------------
def recommended_topic_to_dict(topic: RecommendedTopic) -> dict:
    return _compact([
        ("id", topic.id),
        ("url", topic.url),
        ("locale", topic.locale),
        ("title", topic.title),
        ("publicationId", topic.publication_id),
        ("publicationTitle", topic.publication_title),
    ])


def project_recommendations(recommendation: Optional[Recommendation]) -> str:
    if recommendation is None or recommendation.results is None:
        logger.info("No recommendation results found")
        return EMPTY_LIST

    results = _each(recommendation.results, recommended_topic_to_dict)
    logger.info("Processing %d recommendation results", len(results))
    return _dumps(results)
