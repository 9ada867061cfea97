from __future__ import annotations

import numpy as np
import pytest

from freerig_lab.partitions import Partition, PartitionCorruptedError


def test_discrete_partition() -> None:
    p = Partition.discrete(8)
    assert [p.find(x) for x in range(8)] == list(range(8))
    assert p.num_classes() == 8


def test_merge_picks_minimum_root() -> None:
    p = Partition.discrete(10)
    assert p.merge(7, 3) is True
    assert p.find(7) == 3
    assert p.merge(9, 2) is True
    assert p.merge(9, 7) is True
    assert p.find(3) == 2
    assert p.merge(3, 9) is False
    assert p.classes()[2] == [2, 3, 7, 9]


def test_merge_compresses_both_paths() -> None:
    p = Partition.discrete(8)
    p.merge(5, 3)
    p.merge(3, 1)
    # 5 is not on either walked path
    assert int(p.parent[5]) == 3
    assert p.find(5) == 1
    p.merge(5, 7)
    assert int(p.parent[5]) == 1
    assert int(p.parent[3]) == 1
    assert int(p.parent[7]) == 1


def test_find_is_idempotent() -> None:
    rng = np.random.default_rng(3)
    p = Partition.discrete(200)
    for a, b in rng.integers(0, 200, size=(120, 2)):
        p.merge(int(a), int(b))
        for x in range(0, 200, 7):
            assert p.find(p.find(x)) == p.find(x)
    assert np.all(p.parent <= np.arange(200))


def test_merge_order_does_not_matter() -> None:
    rng = np.random.default_rng(4)
    pairs = [tuple(int(v) for v in pair) for pair in rng.integers(0, 300, size=(150, 2))]

    p1 = Partition.discrete(300)
    for a, b in pairs:
        p1.merge(a, b)

    p2 = Partition.discrete(300)
    for k in rng.permutation(len(pairs)):
        b, a = pairs[int(k)]
        p2.merge(a, b)

    assert p1 == p2
    assert np.array_equal(p1.roots(), p2.roots())
    assert p1.canonical_label_map() == p2.canonical_label_map()


def test_roots_and_compress() -> None:
    p = Partition.discrete(6)
    p.merge(4, 5)
    p.merge(5, 2)
    roots = p.roots()
    assert roots.tolist() == [p.find(x) for x in range(6)]
    p.compress()
    assert p.parent.tolist() == roots.tolist()


def test_canonical_labels_follow_minimum_member() -> None:
    p = Partition.discrete(5)
    p.merge(4, 1)
    assert p.canonical_label_map() == {0: 0, 1: 1, 2: 2, 3: 3, 4: 1}
    assert p.num_classes() == 4


def test_copy_is_independent() -> None:
    p = Partition.discrete(4)
    q = p.copy()
    q.merge(0, 3)
    assert p.find(3) == 3
    assert p != q


def test_corrupted_pointer_is_fatal() -> None:
    p = Partition.discrete(6)
    p.parent[2] = 5
    with pytest.raises(PartitionCorruptedError):
        p.find(2)
    with pytest.raises(PartitionCorruptedError):
        p.validate()
    with pytest.raises(RuntimeError):
        p.roots()
