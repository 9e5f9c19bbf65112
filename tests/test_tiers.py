from collections import Counter

from mindmap.layout.tiers import assign_tiers, group_by_tier
from mindmap.models import ImportanceScore


def _scores(values: list[float]) -> dict[str, ImportanceScore]:
    return {f"n{i}": ImportanceScore(composite_score=v) for i, v in enumerate(values)}


def test_hundred_nodes_split_10_20_30_40() -> None:
    scores = _scores([float(100 - i) for i in range(100)])
    tiers = assign_tiers(scores)

    assert Counter(tiers.values()) == {0: 10, 1: 20, 2: 30, 3: 40}
    assert tiers["n0"] == 0
    assert tiers["n9"] == 0
    assert tiers["n10"] == 1
    assert tiers["n59"] == 2
    assert tiers["n99"] == 3


def test_every_node_gets_exactly_one_tier() -> None:
    scores = _scores([3.0, 1.0, 2.0, 7.0, 5.0])
    tiers = assign_tiers(scores)

    assert set(tiers) == set(scores)
    assert all(t in (0, 1, 2, 3) for t in tiers.values())


def test_result_is_ordered_by_rank() -> None:
    tiers = assign_tiers(_scores([1.0, 9.0, 5.0]))
    assert list(tiers) == ["n1", "n2", "n0"]
    assert tiers["n1"] == 0


def test_ties_keep_input_order() -> None:
    tiers = assign_tiers(_scores([4.0] * 10))

    assert list(tiers) == [f"n{i}" for i in range(10)]
    assert tiers["n0"] == 0
    assert tiers["n1"] == 1
    assert tiers["n9"] == 3


def test_single_node_is_tier_zero() -> None:
    assert assign_tiers(_scores([0.0])) == {"n0": 0}
    assert assign_tiers({}) == {}


def test_group_by_tier_always_has_four_groups() -> None:
    groups = group_by_tier({"a": 0, "b": 3, "c": 3})
    assert groups == {0: ["a"], 1: [], 2: [], 3: ["b", "c"]}
