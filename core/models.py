# =============================================================================
# core/models.py  —  Data Models (the typed shape of every response)
# =============================================================================
#
# These dataclasses are the typed result objects the transport produces from
# the raw GraphQL subtree.  They are request-scoped: built once from the
# response, read once by the projector, then discarded.
#
# POLYMORPHISM:
#   Topics and linked items are a closed set of tagged variants.  Every
#   variant carries its GraphQL `__typename` plus a `kind` tag; the
#   projector switches on `kind` to decide which optional fields exist.
#
#     Topic            IshGenericTopic, IshConceptTopic, ... (anything but task)
#     TaskTopic        IshTaskTopic  (adds `steps`)
#     Item             any linked item we don't model specially
#     TopicItem        a linked Ish*Topic (adds `short_description`)
#     BinaryComponent  BinaryComponent (adds `variants`)
#
# ABSENCE:
#   Every field defaults to None, meaning "not in the response".  An empty
#   list means the service sent an empty list.  The projector omits None.
#
# PARSING:
#   `from_dict` raises TypeError when the payload has the wrong shape; the
#   transport reports that as a failed request.
# =============================================================================

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Optional, TypeVar

T = TypeVar("T")

TASK_TOPIC_TYPENAME = "IshTaskTopic"
BINARY_COMPONENT_TYPENAME = "BinaryComponent"


class Kind(str, Enum):
    """Discriminant tag for the polymorphic topic/item variants."""

    ITEM = "item"
    TOPIC = "topic"
    TASK_TOPIC = "task_topic"
    BINARY_COMPONENT = "binary_component"


def kind_of(typename: Optional[str]) -> Kind:
    """Map a GraphQL `__typename` onto its variant tag."""
    if typename == TASK_TOPIC_TYPENAME:
        return Kind.TASK_TOPIC
    if typename == BINARY_COMPONENT_TYPENAME:
        return Kind.BINARY_COMPONENT
    if typename and typename.startswith("Ish") and typename.endswith("Topic"):
        return Kind.TOPIC
    return Kind.ITEM


# -----------------------------------------------------------------------------
# Parsing helpers
# -----------------------------------------------------------------------------
def _mapping(raw: Any, what: str) -> dict:
    if not isinstance(raw, dict):
        raise TypeError(f"Expected an object for {what}, got {type(raw).__name__}")
    return raw


def _scalar(raw: dict, key: str, types: tuple, what: str) -> Any:
    value = raw.get(key)
    if value is None:
        return None
    # bool is an int subclass; only accept it where bool is expected
    if isinstance(value, bool) and bool not in types:
        raise TypeError(f"{what}.{key} must be {'/'.join(t.__name__ for t in types)}, got bool")
    if not isinstance(value, types):
        raise TypeError(
            f"{what}.{key} must be {'/'.join(t.__name__ for t in types)}, got {type(value).__name__}"
        )
    return value


def _string(raw: dict, key: str, what: str) -> Optional[str]:
    return _scalar(raw, key, (str,), what)


def _integer(raw: dict, key: str, what: str) -> Optional[int]:
    return _scalar(raw, key, (int,), what)


def _identifier(raw: dict, key: str, what: str) -> Optional[Any]:
    # GraphQL ID values arrive as strings or numbers depending on the type
    return _scalar(raw, key, (str, int), what)


def _list(raw: dict, key: str, parse: Callable[[Any], T], what: str) -> Optional[list[Optional[T]]]:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise TypeError(f"{what}.{key} must be a list, got {type(value).__name__}")
    return [None if element is None else parse(element) for element in value]


def _nested(raw: dict, key: str, parse: Callable[[Any], T]) -> Optional[T]:
    value = raw.get(key)
    return None if value is None else parse(value)


# -----------------------------------------------------------------------------
# Table of Contents
# -----------------------------------------------------------------------------
@dataclass
class TocEntry:
    """One node of the table of contents; `entries` holds the children."""

    id: Optional[Any] = None
    toc_id: Optional[Any] = None
    url: Optional[str] = None
    title: Optional[str] = None
    has_children: Optional[bool] = None
    entries: Optional[list[Optional["TocEntry"]]] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "TocEntry":
        raw = _mapping(raw, "TocEntry")
        return cls(
            id=_identifier(raw, "id", "TocEntry"),
            toc_id=_identifier(raw, "tocId", "TocEntry"),
            url=_string(raw, "url", "TocEntry"),
            title=_string(raw, "title", "TocEntry"),
            has_children=_scalar(raw, "hasChildren", (bool,), "TocEntry"),
            entries=_list(raw, "entries", cls.from_dict, "TocEntry"),
        )


@dataclass
class Toc:
    entries: Optional[list[Optional[TocEntry]]] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "Toc":
        raw = _mapping(raw, "Toc")
        return cls(entries=_list(raw, "entries", TocEntry.from_dict, "Toc"))

    def count_entries(self) -> int:
        """Total number of entries at every level that was returned."""

        def _count(entries):
            return sum(1 + _count(entry.entries or []) for entry in entries if entry is not None)

        return _count(self.entries or [])

    def childless_parents(self) -> list:
        """Ids of entries that claim children but came back with an empty list.

        Entries whose children were not requested (`entries is None`) are
        never reported.
        """
        found = []

        def _walk(entries):
            for entry in entries:
                if entry is None:
                    continue
                if entry.has_children and entry.entries is not None and not any(entry.entries):
                    found.append(entry.id)
                _walk(entry.entries or [])

        _walk(self.entries or [])
        return found


# -----------------------------------------------------------------------------
# Linked items
# -----------------------------------------------------------------------------
@dataclass
class Variant:
    """A downloadable rendition of a binary component."""

    binary_id: Optional[Any] = None
    download_url: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "Variant":
        raw = _mapping(raw, "Variant")
        return cls(
            binary_id=_identifier(raw, "binaryId", "Variant"),
            download_url=_string(raw, "downloadUrl", "Variant"),
        )


@dataclass
class Item:
    kind: ClassVar[Kind] = Kind.ITEM

    typename: Optional[str] = None
    publication_id: Optional[int] = None
    item_id: Optional[int] = None
    title: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "Item":
        """Build whichever item variant `__typename` selects."""
        raw = _mapping(raw, "Item")
        typename = _string(raw, "__typename", "Item")
        common = dict(
            typename=typename,
            publication_id=_integer(raw, "publicationId", "Item"),
            item_id=_integer(raw, "itemId", "Item"),
            title=_string(raw, "title", "Item"),
        )
        kind = kind_of(typename)
        if kind is Kind.BINARY_COMPONENT:
            return BinaryComponent(variants=_variants(raw), **common)
        if kind in (Kind.TOPIC, Kind.TASK_TOPIC):
            return TopicItem(short_description=_string(raw, "shortDescription", "Item"), **common)
        return Item(**common)


@dataclass
class TopicItem(Item):
    kind: ClassVar[Kind] = Kind.TOPIC

    short_description: Optional[str] = None


@dataclass
class BinaryComponent(Item):
    kind: ClassVar[Kind] = Kind.BINARY_COMPONENT

    variants: Optional[list[Optional[Variant]]] = None


def _variants(raw: dict) -> Optional[list[Optional[Variant]]]:
    # variants { edges { node { ... } } }  →  [Variant, ...]
    connection = raw.get("variants")
    if connection is None:
        return None
    connection = _mapping(connection, "BinaryComponent.variants")
    edges = _list(connection, "edges", lambda edge: _mapping(edge, "VariantEdge"), "BinaryComponent.variants")
    if edges is None:
        return None
    return [
        None if edge is None else _nested(edge, "node", Variant.from_dict)
        for edge in edges
    ]


@dataclass
class Link:
    item: Optional[Item] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "Link":
        raw = _mapping(raw, "Link")
        return cls(item=_nested(raw, "item", Item.from_dict))


def _related_links(raw: dict) -> Optional[list[Optional[Link]]]:
    # relatedLinks is either one { links } group or a list of groups
    value = raw.get("relatedLinks")
    if value is None:
        return None
    groups = value if isinstance(value, list) else [value]
    links: list[Optional[Link]] = []
    for group in groups:
        if group is None:
            continue
        group = _mapping(group, "RelatedLinks")
        links.extend(_list(group, "links", Link.from_dict, "RelatedLinks") or [])
    return links


# -----------------------------------------------------------------------------
# Topics
# -----------------------------------------------------------------------------
@dataclass
class Step:
    """One step of a task topic."""

    typename: Optional[str] = None
    title: Optional[str] = None
    xhtml: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "Step":
        raw = _mapping(raw, "Step")
        return cls(
            typename=_string(raw, "__typename", "Step"),
            title=_string(raw, "title", "Step"),
            xhtml=_string(raw, "xhtml", "Step"),
        )


@dataclass
class Topic:
    kind: ClassVar[Kind] = Kind.TOPIC

    typename: Optional[str] = None
    publication_id: Optional[int] = None
    item_id: Optional[int] = None
    title: Optional[str] = None
    short_description: Optional[str] = None
    url: Optional[str] = None
    xhtml: Optional[str] = None
    links: Optional[list[Optional[Link]]] = None
    related_links: Optional[list[Optional[Link]]] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "Topic":
        """Build a Topic, or a TaskTopic when `__typename` is IshTaskTopic."""
        raw = _mapping(raw, "Topic")
        typename = _string(raw, "__typename", "Topic")
        common = dict(
            typename=typename,
            publication_id=_integer(raw, "publicationId", "Topic"),
            item_id=_integer(raw, "itemId", "Topic"),
            title=_string(raw, "title", "Topic"),
            short_description=_string(raw, "shortDescription", "Topic"),
            url=_string(raw, "url", "Topic"),
            xhtml=_string(raw, "xhtml", "Topic"),
            links=_list(raw, "links", Link.from_dict, "Topic"),
            related_links=_related_links(raw),
        )
        if kind_of(typename) is Kind.TASK_TOPIC:
            body = raw.get("body")
            steps = None
            if body is not None:
                steps = _list(_mapping(body, "TaskBody"), "steps", Step.from_dict, "TaskBody")
            return TaskTopic(steps=steps, **common)
        return Topic(**common)


@dataclass
class TaskTopic(Topic):
    kind: ClassVar[Kind] = Kind.TASK_TOPIC

    steps: Optional[list[Optional[Step]]] = None


# -----------------------------------------------------------------------------
# Search (paginated connection: results { hits edges { node { search } } })
# -----------------------------------------------------------------------------
@dataclass
class SearchResult:
    score: Optional[float] = None
    id: Optional[Any] = None
    locale: Optional[str] = None
    url: Optional[str] = None
    title: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "SearchResult":
        raw = _mapping(raw, "SearchResult")
        return cls(
            score=_scalar(raw, "score", (int, float), "SearchResult"),
            id=_identifier(raw, "id", "SearchResult"),
            locale=_string(raw, "locale", "SearchResult"),
            url=_string(raw, "url", "SearchResult"),
            title=_string(raw, "title", "SearchResult"),
        )


@dataclass
class SearchNode:
    search: Optional[SearchResult] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "SearchNode":
        raw = _mapping(raw, "SearchNode")
        return cls(search=_nested(raw, "search", SearchResult.from_dict))


@dataclass
class SearchEdge:
    node: Optional[SearchNode] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "SearchEdge":
        raw = _mapping(raw, "SearchEdge")
        return cls(node=_nested(raw, "node", SearchNode.from_dict))


@dataclass
class SearchConnection:
    hits: Optional[int] = None
    edges: Optional[list[Optional[SearchEdge]]] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "SearchConnection":
        raw = _mapping(raw, "SearchConnection")
        return cls(
            hits=_integer(raw, "hits", "SearchConnection"),
            edges=_list(raw, "edges", SearchEdge.from_dict, "SearchConnection"),
        )


# -----------------------------------------------------------------------------
# Recommendations
# -----------------------------------------------------------------------------
@dataclass
class SourceTopic:
    id: Optional[Any] = None
    url: Optional[str] = None
    locale: Optional[str] = None
    title: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "SourceTopic":
        raw = _mapping(raw, "SourceTopic")
        return cls(
            id=_identifier(raw, "id", "SourceTopic"),
            url=_string(raw, "url", "SourceTopic"),
            locale=_string(raw, "locale", "SourceTopic"),
            title=_string(raw, "title", "SourceTopic"),
        )


@dataclass
class RecommendedTopic:
    id: Optional[Any] = None
    url: Optional[str] = None
    locale: Optional[str] = None
    title: Optional[str] = None
    publication_id: Optional[Any] = None
    publication_title: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "RecommendedTopic":
        raw = _mapping(raw, "RecommendedTopic")
        return cls(
            id=_identifier(raw, "id", "RecommendedTopic"),
            url=_string(raw, "url", "RecommendedTopic"),
            locale=_string(raw, "locale", "RecommendedTopic"),
            title=_string(raw, "title", "RecommendedTopic"),
            publication_id=_identifier(raw, "publicationId", "RecommendedTopic"),
            publication_title=_string(raw, "publicationTitle", "RecommendedTopic"),
        )


@dataclass
class Recommendation:
    source_topic: Optional[SourceTopic] = None
    results: Optional[list[Optional[RecommendedTopic]]] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "Recommendation":
        raw = _mapping(raw, "Recommendation")
        return cls(
            source_topic=_nested(raw, "sourceTopic", SourceTopic.from_dict),
            results=_list(raw, "results", RecommendedTopic.from_dict, "Recommendation"),
        )
