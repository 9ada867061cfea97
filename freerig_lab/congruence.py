from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .algebra import OPERATIONS, RigAlgebra
from .partitions import Partition


@dataclass
class CongruenceConfig:
    # fixed point iteration; None runs until a pass changes nothing
    max_passes: Optional[int] = None

    # print a progress line every this many rows of a pass (0 = silent)
    progress_every: int = 0

    # per-pass summaries
    verbose: bool = False


@dataclass
class CongruenceResult:
    partition: Partition
    passes: int
    seed_merges: int
    merges_per_pass: List[int] = field(default_factory=list)


@dataclass(frozen=True)
class Violation:
    """op(x, other) and op(x_equiv, other) fall in different classes (side='left'),
    or op(other, x) and op(other, x_equiv) do (side='right')."""

    op: str
    side: str
    x: int
    x_equiv: int
    other: int


def seed_squares(algebra: RigAlgebra, partition: Partition) -> int:
    """Identify every element with its square."""
    squares = algebra.square_indices()
    merges = 0
    for x in range(algebra.size):
        if partition.merge(x, int(squares[x])):
            merges += 1
    return merges


def _merge_rows(partition: Partition, lhs: np.ndarray, rhs: np.ndarray, roots: np.ndarray) -> int:
    differ = roots[lhs] != roots[rhs]
    if not differ.any():
        return 0
    pairs = np.unique(np.stack([roots[lhs[differ]], roots[rhs[differ]]], axis=1), axis=0)
    merges = 0
    for a, b in pairs:
        if partition.merge(int(a), int(b)):
            merges += 1
    return merges


def saturation_pass(
    algebra: RigAlgebra,
    partition: Partition,
    cfg: CongruenceConfig,
    pass_index: int = 0,
) -> int:
    """One sweep over all ordered pairs (i, j) for both operations.

    Where i or j is not its own root, op(i, j) is merged with op(find(i), find(j)).
    Row i is evaluated at once against every j. Returns the number of merges.
    """
    idx = algebra.indices
    roots = partition.roots()
    moved = np.flatnonzero(roots != idx)
    merges = 0

    for name in OPERATIONS:
        row_op = algebra.row_operation(name)
        for i in range(algebra.size):
            if cfg.progress_every and (i % int(cfg.progress_every) == 0):
                print(f"Pass {pass_index:3d} {name:>8s} row {i:6d}: merges={merges}")

            ri = int(roots[i])
            if ri == i:
                # only columns whose j has moved contribute
                if moved.size == 0:
                    continue
                row = row_op(i)
                lhs = row[moved]
                rhs = row[roots[moved]]
            else:
                lhs = row_op(i)
                rhs = row_op(ri)[roots]

            m = _merge_rows(partition, lhs, rhs, roots)
            if m:
                merges += m
                roots = partition.roots()
                moved = np.flatnonzero(roots != idx)
    return merges


def saturate(algebra: RigAlgebra, partition: Partition, cfg: CongruenceConfig) -> List[int]:
    """Run passes until one leaves the classes unchanged. Returns merges per pass."""
    history: List[int] = []
    while True:
        if cfg.max_passes is not None and len(history) >= int(cfg.max_passes):
            raise RuntimeError(f"Congruence did not converge within {cfg.max_passes} passes")
        snapshot = partition.roots()
        merges = saturation_pass(algebra, partition, cfg, pass_index=len(history))
        history.append(merges)
        if cfg.verbose:
            print(f"Pass {len(history) - 1}: {merges} merges, {partition.num_classes()} classes")
        if np.array_equal(snapshot, partition.roots()):
            break
    return history


def compute_congruence(algebra: RigAlgebra, cfg: Optional[CongruenceConfig] = None) -> CongruenceResult:
    """Coarsest congruence containing x ~ x*x for every element x."""
    if cfg is None:
        cfg = CongruenceConfig()
    partition = Partition.discrete(algebra.size)

    seed_merges = seed_squares(algebra, partition)
    if cfg.verbose:
        print(f"Seed: {seed_merges} merges, {partition.num_classes()} classes")

    history = saturate(algebra, partition, cfg)
    partition.compress()
    return CongruenceResult(
        partition=partition,
        passes=len(history),
        seed_merges=seed_merges,
        merges_per_pass=history,
    )


def saturate_pairs(algebra: RigAlgebra, partition: Partition, max_passes: Optional[int] = None) -> int:
    """Pair-by-pair saturation on scalar ops. Returns the number of passes.

    Brute force over size**2 pairs per pass; intended for small sub-algebras.
    """
    ops = [algebra.operation(name) for name in OPERATIONS]
    decoded = [algebra.decode(x) for x in range(algebra.size)]
    passes = 0
    while True:
        if max_passes is not None and passes >= int(max_passes):
            raise RuntimeError(f"Congruence did not converge within {max_passes} passes")
        snapshot = partition.parent.copy()
        for i in range(algebra.size):
            for j in range(algebra.size):
                for op in ops:
                    ri, rj = partition.find(i), partition.find(j)
                    if ri == i and rj == j:
                        continue
                    a = algebra.encode(op(decoded[i], decoded[j]))
                    b = algebra.encode(op(decoded[ri], decoded[rj]))
                    partition.merge(a, b)
        passes += 1
        if np.array_equal(snapshot, partition.parent):
            return passes


def congruence_violations(algebra: RigAlgebra, partition: Partition, limit: int = 10) -> List[Violation]:
    """Witnesses that the partition is not compatible with add / multiply."""
    roots = partition.roots()
    out: List[Violation] = []
    for name in OPERATIONS:
        row_op = algebra.row_operation(name)
        for i in range(algebra.size):
            row = row_op(i)
            ri = int(roots[i])
            if ri != i:
                bad = np.flatnonzero(roots[row] != roots[row_op(ri)])
                for j in bad[: max(0, limit - len(out))]:
                    out.append(Violation(op=name, side="left", x=i, x_equiv=ri, other=int(j)))
            bad = np.flatnonzero(roots[row] != roots[row[roots]])
            for j in bad[: max(0, limit - len(out))]:
                out.append(Violation(op=name, side="right", x=int(j), x_equiv=int(roots[j]), other=i))
            if len(out) >= limit:
                return out
    return out
