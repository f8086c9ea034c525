"""
Tests for the response projector: absence handling and output shape.
"""

import json

from core.models import (
    Recommendation,
    RecommendedTopic,
    SearchConnection,
    SearchEdge,
    SearchNode,
    SearchResult,
    SourceTopic,
    Step,
    TaskTopic,
    Toc,
    TocEntry,
    Topic,
)
from core.projector import (
    project_recommendations,
    project_search,
    project_toc,
    project_topic,
    unwrap_search_edges,
)


class TestAbsence:
    def test_toc(self):
        assert project_toc(None) == "{}"

    def test_topic(self):
        assert project_topic(None) == "{}"

    def test_search(self):
        assert project_search(None) == "[]"
        assert project_search(SearchConnection(hits=0, edges=None)) == "[]"

    def test_recommendations(self):
        assert project_recommendations(None) == "[]"
        assert project_recommendations(Recommendation(source_topic=SourceTopic(id="x"))) == "[]"


def test_toc_omits_unrequested_levels():
    toc = Toc(entries=[
        TocEntry(id="1", toc_id="t1", url="/1", title="One", has_children=False, entries=[]),
        TocEntry(id="2", title="Two", has_children=True),
    ])

    result = json.loads(project_toc(toc))

    assert result == {"entries": [
        {"id": "1", "tocId": "t1", "url": "/1", "title": "One", "hasChildren": False, "entries": []},
        {"id": "2", "title": "Two", "hasChildren": True},
    ]}


def test_toc_empty_entries_is_kept():
    assert json.loads(project_toc(Toc(entries=[]))) == {"entries": []}


def test_task_topic_with_empty_steps_still_has_steps():
    topic = TaskTopic(typename="IshTaskTopic", item_id=5, steps=None)

    assert json.loads(project_topic(topic)) == {"__typename": "IshTaskTopic", "itemId": 5, "steps": []}


def test_generic_topic_never_has_steps_key():
    topic = Topic(typename="IshGenericTopic", item_id=5, title="T")

    result = json.loads(project_topic(topic))

    assert result == {"__typename": "IshGenericTopic", "itemId": 5, "title": "T"}


def test_step_fields():
    topic = TaskTopic(typename="IshTaskTopic", steps=[Step(typename="IshStep", title="Go", xhtml="<p/>"), None])

    assert json.loads(project_topic(topic))["steps"] == [{"__typename": "IshStep", "title": "Go", "xhtml": "<p/>"}]


def test_unicode_is_kept_readable():
    topic = Topic(typename="IshGenericTopic", title="Übersicht")

    assert "Übersicht" in project_topic(topic)


def test_unwrap_search_edges_keeps_order():
    first, second = SearchResult(id="1", score=0.1), SearchResult(id="2", score=0.9)
    connection = SearchConnection(edges=[
        SearchEdge(node=SearchNode(search=first)),
        SearchEdge(node=None),
        None,
        SearchEdge(node=SearchNode(search=None)),
        SearchEdge(node=SearchNode(search=second)),
    ])

    assert unwrap_search_edges(connection) == [first, second]
    assert json.loads(project_search(connection)) == [{"id": "1", "score": 0.1}, {"id": "2", "score": 0.9}]


def test_recommendations_drop_source_and_nulls():
    recommendation = Recommendation(
        source_topic=SourceTopic(id="ish_1-2-16", title="Source"),
        results=[None, RecommendedTopic(id="ish_1-3-16", title="Three", publication_id="1")],
    )

    assert json.loads(project_recommendations(recommendation)) == [
        {"id": "ish_1-3-16", "title": "Three", "publicationId": "1"}
    ]
