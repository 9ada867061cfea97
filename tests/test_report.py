from __future__ import annotations

import pytest

from freerig_lab.algebra import RigAlgebra
from freerig_lab.congruence import CongruenceResult, compute_congruence
from freerig_lab.partitions import Partition
from freerig_lab.quotient import QuotientRig, quotient_labels
from freerig_lab.report import class_sizes, format_classes, quotient_loss, size_histogram, summarize


@pytest.fixture(scope="module")
def one_a() -> RigAlgebra:
    return RigAlgebra.sub(["", "a"])


@pytest.fixture(scope="module")
def result(one_a: RigAlgebra) -> CongruenceResult:
    return compute_congruence(one_a)


def test_class_sizes_descending() -> None:
    p = Partition.discrete(6)
    p.merge(0, 5)
    p.merge(5, 3)
    p.merge(1, 2)
    assert class_sizes(p) == [3, 2, 1]
    assert size_histogram(class_sizes(p)) == {1: 1, 2: 1, 3: 1}
    assert quotient_loss(p) == pytest.approx(0.5)


def test_summarize(one_a: RigAlgebra, result: CongruenceResult) -> None:
    summary = summarize(one_a, result)
    assert summary["slots"] == ["i", "a"]
    assert summary["n_elements"] == 16
    assert summary["n_classes"] == 13
    assert summary["class_sizes"] == [2, 2, 2] + [1] * 10
    assert summary["size_histogram"] == {1: 10, 2: 3}
    assert summary["quotient_loss"] == pytest.approx(3 / 16)
    assert summary["passes"] == len(summary["merges_per_pass"])


def test_format_classes(one_a: RigAlgebra, result: CongruenceResult) -> None:
    lines = format_classes(one_a, result.partition)
    assert len(lines) == 13
    assert lines[0] == "0: 0"
    assert lines[1] == "1: 1"
    assert lines[5] == "5: 1 + a, 1 + 3a"
    assert lines[7] == "7: 3 + a, 3 + 3a"

    short = format_classes(one_a, result.partition, max_members=1)
    assert short[5] == "5: 1 + a, ... (1 more)"


def test_quotient_operations_are_well_defined(one_a: RigAlgebra, result: CongruenceResult) -> None:
    q = QuotientRig.from_partition(one_a, result.partition)
    assert q.order == 13
    assert q.label(13) == q.label(5)
    assert q.representative(q.label(13)) == 5
    assert q.render(q.label(14)) == "[2 + a]"

    for x in range(16):
        for y in range(16):
            lx, ly = q.label(x), q.label(y)
            assert q.add(lx, ly) == q.label(one_a.apply("add", x, y))
            assert q.multiply(lx, ly) == q.label(one_a.apply("multiply", x, y))


def test_quotient_requires_matching_universe(one_a: RigAlgebra) -> None:
    with pytest.raises(ValueError):
        QuotientRig.from_partition(one_a, Partition.discrete(4))


def test_quotient_labels(result: CongruenceResult) -> None:
    assert quotient_labels(result.partition, [0, 5, 13, 15]) == [0, 5, 5, 7]
