from __future__ import annotations

from typing import Dict, List

import numpy as np


class PartitionCorruptedError(RuntimeError):
    """A parent pointer failed to strictly decrease along a chain."""


class Partition:
    """Union-Find partition for a finite set {0,1,...,n-1}.

    Every slot points to itself (a root) or to a strictly smaller index, and
    merges always re-point toward the smallest index of the merged class, so
    the root of a class is its minimum element regardless of merge order.
    The parent array is owned by this object and only mutated by ``merge``
    and ``compress``.
    """

    def __init__(self, parent: np.ndarray):
        self.parent = np.asarray(parent, dtype=np.int64)
        self.n = int(self.parent.shape[0])

    @classmethod
    def discrete(cls, n: int) -> "Partition":
        return cls(np.arange(int(n), dtype=np.int64))

    def copy(self) -> "Partition":
        return Partition(self.parent.copy())

    def find(self, a: int) -> int:
        x = int(a)
        parent = self.parent
        while True:
            p = int(parent[x])
            if p == x:
                return x
            if p > x:
                raise PartitionCorruptedError(f"Pointer {x} -> {p} does not decrease")
            x = p

    def merge(self, a: int, b: int) -> bool:
        """Join the classes of a and b; returns False if they already coincide."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        target = min(ra, rb)
        parent = self.parent
        # repoint both paths, old roots included
        for x in (int(a), int(b)):
            while int(parent[x]) != x:
                nxt = int(parent[x])
                parent[x] = target
                x = nxt
            parent[x] = target
        return True

    def validate(self) -> None:
        idx = np.arange(self.n, dtype=np.int64)
        bad = np.flatnonzero(self.parent > idx)
        if bad.size:
            x = int(bad[0])
            raise PartitionCorruptedError(f"Pointer {x} -> {int(self.parent[x])} does not decrease")

    def roots(self) -> np.ndarray:
        """Root of every element, by pointer jumping on the whole array."""
        self.validate()
        r = self.parent.copy()
        while True:
            nxt = r[r]
            if np.array_equal(nxt, r):
                return r
            r = nxt

    def compress(self) -> None:
        self.parent = self.roots()

    def classes(self) -> Dict[int, List[int]]:
        roots = self.roots()
        d: Dict[int, List[int]] = {}
        for a in range(self.n):
            d.setdefault(int(roots[a]), []).append(a)
        return d

    def num_classes(self) -> int:
        return int(np.count_nonzero(self.roots() == np.arange(self.n)))

    def canonical_label_map(self) -> Dict[int, int]:
        """Stable map element -> class_id in {0..k-1}, classes ordered by minimum element."""
        roots = self.roots()
        labels: Dict[int, int] = {}
        elem_to_id: Dict[int, int] = {}
        for a in range(self.n):
            r = int(roots[a])
            if r not in labels:
                labels[r] = len(labels)
            elem_to_id[a] = labels[r]
        return elem_to_id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Partition) or self.n != other.n:
            return False
        return bool(np.array_equal(self.roots(), other.roots()))
