import logging

import pytest

from connectors.mock_host_connector import MockSolution
from projinfo.enumerator import END, NodeEnumerator
from projinfo.errors import EnumerationError


@pytest.fixture
def solution():
    solution = MockSolution()
    for name in ("A", "B", "C"):
        solution.add_project({"name": name})
    return solution


def test_cursor_yields_every_node_then_end(solution):
    cursor = NodeEnumerator(solution).open()
    labels = []
    while (node := cursor.next()) is not END:
        labels.append(node.label)
    assert labels == ["A", "B", "C"]
    assert cursor.next() is END


def test_cursor_is_forward_only(solution):
    cursor = NodeEnumerator(solution).open()
    assert [node.label for node in cursor] == ["A", "B", "C"]
    assert list(cursor) == []


def test_each_open_starts_a_new_pass(solution):
    enumerator = NodeEnumerator(solution)
    assert len(list(enumerator.open())) == 3
    assert len(list(enumerator.open())) == 3
    assert solution.call_log.operations().count("enumerate") == 2


def test_unreachable_provider():
    with pytest.raises(EnumerationError, match="No solution is open"):
        NodeEnumerator(MockSolution(is_open=False)).open()


def test_failure_while_advancing(solution):
    solution.fail_after = 2
    cursor = NodeEnumerator(solution).open()
    assert cursor.next().label == "A"
    assert cursor.next().label == "B"
    with pytest.raises(EnumerationError):
        cursor.next()
    assert cursor.next() is END


def test_empty_provider():
    assert NodeEnumerator(MockSolution()).open().next() is END


def test_open_logs_provider_workspace(solution, caplog):
    solution.name = "Demo"
    with caplog.at_level(logging.INFO):
        NodeEnumerator(solution).open()
    assert "Enumerating projects of mock_host workspace 'Demo'" in caplog.text
