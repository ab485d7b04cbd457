import pytest

from core.exceptions import GraphContractViolation
from core.planning.task_graph import TaskGraph


def test_graph_ok():
    graph = TaskGraph({1: "a", 2: "b", 3: "c"}, {2: [1], 3: [1, 2]})
    roots = list(graph.roots())
    assert [r.id for r in roots] == [1]
    assert graph.topological_order() == [1, 2, 3]
    assert graph.nodes[1].succ == [2, 3]
    assert graph.nodes[3].earliest_start == 2
    assert graph.nodes[3].critical is True
    assert graph.nodes[1].critical is False


def test_unknown_ends_are_ignored():
    graph = TaskGraph({1: "a", 2: "b"}, {2: [1, 9], 8: [1]})
    assert graph.to_node_link()["links"] == [{"source": 1, "target": 2}]


def test_node_link_export():
    graph = TaskGraph({2: "b", 1: "a"}, {2: [1]})
    data = graph.to_node_link()
    assert data["nodes"] == [
        {"id": 1, "title": "a", "earliestStart": 0, "critical": False},
        {"id": 2, "title": "b", "earliestStart": 1, "critical": True},
    ]


def test_cycle_ko():
    with pytest.raises(GraphContractViolation):
        TaskGraph({1: "a", 2: "b"}, {1: [2], 2: [1]})
