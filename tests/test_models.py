"""
Tests for the tagged-variant models and their deserializers.
"""

import pytest

from core.models import (
    BinaryComponent,
    Item,
    Kind,
    Recommendation,
    SearchConnection,
    TaskTopic,
    Toc,
    Topic,
    TopicItem,
    Variant,
    kind_of,
)


@pytest.mark.parametrize("typename,kind", [
    ("IshTaskTopic", Kind.TASK_TOPIC),
    ("IshGenericTopic", Kind.TOPIC),
    ("IshConceptTopic", Kind.TOPIC),
    ("BinaryComponent", Kind.BINARY_COMPONENT),
    ("Page", Kind.ITEM),
    (None, Kind.ITEM),
])
def test_kind_of(typename, kind):
    assert kind_of(typename) is kind


class TestTopic:
    def test_task_topic_variant(self, task_topic_data):
        topic = Topic.from_dict(task_topic_data)

        assert isinstance(topic, TaskTopic)
        assert topic.kind is Kind.TASK_TOPIC
        assert [step.title for step in topic.steps] == ["Download", "Run"]

    def test_generic_topic_variant(self, generic_topic_data):
        topic = Topic.from_dict(generic_topic_data)

        assert type(topic) is Topic
        assert topic.kind is Kind.TOPIC
        assert topic.links == []
        assert topic.related_links == []

    def test_linked_item_variants(self, task_topic_data):
        topic = Topic.from_dict(task_topic_data)

        binary, page = (link.item for link in topic.links)
        assert isinstance(binary, BinaryComponent)
        assert binary.variants == [Variant(binary_id=7, download_url="/binary/42/2001/7"), None]
        assert type(page) is Item
        assert page.kind is Kind.ITEM

        (related,) = topic.related_links
        assert isinstance(related.item, TopicItem)
        assert related.item.short_description == "How to configure."

    def test_related_links_as_list_of_groups(self, generic_topic_data):
        generic_topic_data["relatedLinks"] = [
            {"links": [{"item": {"__typename": "IshGenericTopic", "itemId": 1}}]},
            None,
            {"links": [{"item": {"__typename": "IshGenericTopic", "itemId": 2}}]},
        ]

        topic = Topic.from_dict(generic_topic_data)

        assert [link.item.item_id for link in topic.related_links] == [1, 2]

    def test_task_topic_without_body(self, task_topic_data):
        del task_topic_data["body"]

        topic = Topic.from_dict(task_topic_data)

        assert isinstance(topic, TaskTopic)
        assert topic.steps is None

    def test_wrong_scalar_type(self, generic_topic_data):
        generic_topic_data["itemId"] = "1002"

        with pytest.raises(TypeError, match="itemId"):
            Topic.from_dict(generic_topic_data)

    def test_bool_is_not_an_item_id(self, generic_topic_data):
        generic_topic_data["itemId"] = True

        with pytest.raises(TypeError):
            Topic.from_dict(generic_topic_data)


class TestToc:
    def test_nested_entries(self):
        toc = Toc.from_dict({
            "entries": [
                {"id": "1", "hasChildren": True, "entries": [
                    {"id": "1.1", "hasChildren": True, "entries": [
                        {"id": "1.1.1", "hasChildren": True},
                    ]},
                ]},
            ]
        })

        assert toc.count_entries() == 3
        assert toc.entries[0].entries[0].entries[0].entries is None

    def test_childless_parents_only_where_children_were_requested(self):
        toc = Toc.from_dict({
            "entries": [
                {"id": "a", "hasChildren": True, "entries": []},
                {"id": "b", "hasChildren": True},
                {"id": "c", "hasChildren": False, "entries": []},
            ]
        })

        assert toc.childless_parents() == ["a"]

    def test_has_children_must_be_bool(self):
        with pytest.raises(TypeError, match="hasChildren"):
            Toc.from_dict({"entries": [{"id": "1", "hasChildren": "yes"}]})


class TestSearchConnection:
    def test_edges_and_hits(self):
        connection = SearchConnection.from_dict({
            "hits": 2,
            "edges": [{"node": {"search": {"score": 1, "id": "a"}}}, {"node": None}],
        })

        assert connection.hits == 2
        assert connection.edges[0].node.search.id == "a"
        assert connection.edges[1].node is None

    def test_edges_must_be_a_list(self):
        with pytest.raises(TypeError):
            SearchConnection.from_dict({"edges": {"node": None}})


class TestRecommendation:
    def test_results_keep_nulls_for_projector(self):
        recommendation = Recommendation.from_dict({
            "sourceTopic": {"id": "ish_1-2-16", "title": "Source"},
            "results": [{"id": "ish_1-3-16", "publicationTitle": "Guide"}, None],
        })

        assert recommendation.source_topic.title == "Source"
        assert recommendation.results[0].publication_title == "Guide"
        assert recommendation.results[1] is None
