import pytest

from TraceTSP.solvers.exact.frontier import Frontier


def test_pops_smallest_bound_first():
    frontier = Frontier()
    for bound, item in [(5.0, "e"), (1.0, "a"), (3.0, "c")]:
        frontier.push(bound, item)
    assert [frontier.pop() for _ in range(3)] == ["a", "c", "e"]


def test_ties_break_by_insertion_order():
    frontier = Frontier()
    for item in ["first", "second", "third"]:
        frontier.push(2.0, item)
    frontier.push(1.0, "best")
    assert [frontier.pop() for _ in range(4)] == ["best", "first", "second", "third"]


def test_infinite_bounds_sort_last():
    frontier = Frontier()
    frontier.push(float("inf"), "never")
    frontier.push(10.0, "soon")
    assert frontier.pop() == "soon"


def test_len_and_truthiness():
    frontier = Frontier()
    assert not frontier
    frontier.push(1.0, {"unorderable": True})
    frontier.push(1.0, {"unorderable": True})
    assert len(frontier) == 2
    frontier.pop()
    frontier.pop()
    assert len(frontier) == 0


def test_pop_empty_raises():
    with pytest.raises(IndexError):
        Frontier().pop()
