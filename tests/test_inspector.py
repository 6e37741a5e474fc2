"""
Tests for graphql_query_visualizer.inspector module.
"""

from graphql_query_visualizer.editor import delete_by_id
from graphql_query_visualizer.inspector import collect_stats
from graphql_query_visualizer.parser import parse_or_raise


def test_collect_stats():
    root = parse_or_raise(
        "query Q($id: ID!) { user(id: $id) { id ...F } } fragment F on User { posts(first: 2) { title } }",
        {"id": "abc", "extra": 1},
    )
    stats = collect_stats(root)

    assert stats.depth == 4  # user > ...F > posts > title
    assert stats.node_count == 7
    assert stats.field_count == 4
    assert stats.fragment_count == 1
    assert stats.argument_count == 2
    assert stats.variable_count == 2


def test_stats_follow_edits():
    root = parse_or_raise("{ a { b { c } } d }")
    assert collect_stats(root).depth == 3

    edited = delete_by_id(root, "node_2")
    stats = collect_stats(edited)
    assert stats.depth == 1
    assert stats.field_count == 2


def test_empty_operation_stats():
    root = parse_or_raise("{ a }")
    stats = collect_stats(delete_by_id(root, "node_1"))
    assert stats.depth == 0
    assert stats.node_count == 1
