# =============================================================================
# core/queries.py  —  Query Template Library
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Holds the fixed GraphQL documents sent to the content service, one per
#   operation.  Each template declares the variables it needs and the
#   dotted path of the result subtree the transport should resolve.
#
# RULES:
#   - Documents are literal text.  Caller input only ever travels in the
#     variables map, never inside the document.
#   - The TOC document requests three levels of entries; deeper levels are
#     not requested.
#   - The search document requests the first 10 matches.
# =============================================================================

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from core.errors import InvalidArgument


@dataclass(frozen=True)
class QueryTemplate:
    """A parameterized GraphQL document.

    Attributes:
        name: The operation this template serves (e.g. "getToc").
        document: The GraphQL query text, sent verbatim.
        variables: Variable name → GraphQL type, in declaration order.
        result_path: Dotted path of the subtree to resolve from `data`.
    """

    name: str
    document: str
    variables: Mapping[str, str]
    result_path: str

    def bind(self, **values: Any) -> dict[str, Any]:
        """Build the variables map, requiring exactly the declared names."""
        missing = [key for key in self.variables if values.get(key) is None]
        if missing:
            raise InvalidArgument(f"Missing required variable(s) for {self.name}: {', '.join(missing)}")
        unknown = sorted(set(values) - set(self.variables))
        if unknown:
            raise InvalidArgument(f"Unknown variable(s) for {self.name}: {', '.join(unknown)}")
        return {key: values[key] for key in self.variables}


# -----------------------------------------------------------------------------
# Table of Contents
# -----------------------------------------------------------------------------
TOC_QUERY = """
query ishToc($publicationId: Int!) {
    ishToc(publicationId: $publicationId) {
        entries {
            id
            tocId
            url
            title
            hasChildren
            entries {
                id
                tocId
                url
                title
                hasChildren
                entries {
                    id
                    tocId
                    url
                    title
                    hasChildren
                }
            }
        }
    }
}
"""


# -----------------------------------------------------------------------------
# Topic content (shared selection for the by-id and by-url lookups)
# -----------------------------------------------------------------------------
_TOPIC_SELECTION = """
        __typename
        publicationId
        itemId
        title
        shortDescription
        url
        xhtml
        ... on IshTaskTopic {
            body {
                steps {
                    __typename
                    title
                    xhtml
                }
            }
        }
        links {
            item {
                __typename
                publicationId
                itemId
                title
                ... on BinaryComponent {
                    variants {
                        edges {
                            node {
                                binaryId
                                downloadUrl
                            }
                        }
                    }
                }
            }
        }
        relatedLinks {
            links {
                item {
                    __typename
                    publicationId
                    itemId
                    title
                    ... on IshGenericTopic {
                        shortDescription
                    }
                }
            }
        }
"""

TOPIC_BY_ID_QUERY = (
    """
query ishTopicById($publicationId: Int!, $topicId: Int!) {
    ishTopic(publicationId: $publicationId, topicId: $topicId) {"""
    + _TOPIC_SELECTION
    + """    }
}
"""
)

TOPIC_BY_URL_QUERY = (
    """
query ishTopicByUrl($publicationId: Int!, $url: String!) {
    ishTopic(publicationId: $publicationId, url: $url) {"""
    + _TOPIC_SELECTION
    + """    }
}
"""
)


# -----------------------------------------------------------------------------
# Full-text search: strict English match on content AND itemType = page
# -----------------------------------------------------------------------------
SEARCH_QUERY = """
query searchTopics($term: String!) {
    search(
        criteria: {
            languageField: {
                key: "content"
                value: $term
                language: "english"
                strict: true
            }
            and: { field: { key: "itemType", value: "page" } }
        }
    ) {
        results(first: 10) {
            hits
            edges {
                node {
                    search {
                        score
                        id
                        locale
                        url
                        title
                    }
                }
            }
        }
    }
}
"""


# -----------------------------------------------------------------------------
# Recommendations for a composite topic id: ish_<publicationId>-<topicId>-16
# -----------------------------------------------------------------------------
RECOMMEND_QUERY = """
query recommendTopics($topic: String!) {
    ishRecommend(topicId: $topic) {
        sourceTopic {
            id
            url
            locale
            title
        }
        results {
            id
            url
            locale
            title
            publicationId
            publicationTitle
        }
    }
}
"""


def _template(name: str, document: str, variables: dict[str, str], result_path: str) -> QueryTemplate:
    return QueryTemplate(name, document, MappingProxyType(dict(variables)), result_path)


TEMPLATES: Mapping[str, QueryTemplate] = MappingProxyType({
    "getToc": _template(
        "getToc", TOC_QUERY, {"publicationId": "Int!"}, "ishToc"
    ),
    "getTopicContentById": _template(
        "getTopicContentById", TOPIC_BY_ID_QUERY,
        {"publicationId": "Int!", "topicId": "Int!"}, "ishTopic",
    ),
    "getTopicContentByUrl": _template(
        "getTopicContentByUrl", TOPIC_BY_URL_QUERY,
        {"publicationId": "Int!", "url": "String!"}, "ishTopic",
    ),
    "searchTopics": _template(
        "searchTopics", SEARCH_QUERY, {"term": "String!"}, "search.results"
    ),
    "getRecommendations": _template(
        "getRecommendations", RECOMMEND_QUERY, {"topic": "String!"}, "ishRecommend"
    ),
})


def get_template(operation: str) -> QueryTemplate:
    """Look up the template for an operation name."""
    try:
        return TEMPLATES[operation]
    except KeyError:
        raise InvalidArgument(f"Unknown operation: {operation}") from None
