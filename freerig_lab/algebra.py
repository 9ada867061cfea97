from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set, Tuple

import numpy as np

from .rig import COEFF_RANGE, normalize_array, normalize_value, render_slots
from .words import (
    BASIS_WORDS,
    ProductTerms,
    derive_product_terms,
    parse_word,
    verify_product_table,
    word_to_slot_name,
)


OPERATIONS = ("add", "multiply")

Slots = Tuple[int, ...]
ScalarOp = Callable[[Slots, Slots], Slots]
RowOp = Callable[[int], np.ndarray]


class RigAlgebra:
    """Finite universe of coefficient vectors over a multiplicatively closed set of basis words.

    Element ``x`` with slots ``(c_0, ..., c_{k-1})`` has index ``sum c_s * 4**s``.
    The full algebra uses all seven reduced words and matches the packing of
    :func:`freerig_lab.rig.encode`.
    """

    def __init__(self, words: Sequence[str], product_terms: Optional[ProductTerms] = None):
        self.words: Tuple[str, ...] = tuple(words)
        if not self.words:
            raise ValueError("Need at least one basis word")
        self.slot_names: Tuple[str, ...] = tuple(word_to_slot_name(w) for w in self.words)
        self.n_slots = len(self.words)
        self.size = COEFF_RANGE ** self.n_slots

        if product_terms is None:
            product_terms = derive_product_terms(self.words)
        self.product_terms = product_terms
        # flat (out, p, q) triples for the row kernel
        self._triples: List[Tuple[int, int, int]] = [
            (s, p, q) for s, pairs in sorted(product_terms.items()) for (p, q) in pairs
        ]

        self.weights = COEFF_RANGE ** np.arange(self.n_slots, dtype=np.int64)
        self.indices = np.arange(self.size, dtype=np.int64)
        shifts = 2 * np.arange(self.n_slots, dtype=np.int64)
        self.slots = (self.indices[:, None] >> shifts[None, :]) & 3

    @classmethod
    def full(cls) -> "RigAlgebra":
        return cls(BASIS_WORDS, product_terms=verify_product_table())

    @classmethod
    def sub(cls, words: Iterable[str]) -> "RigAlgebra":
        return cls(tuple(words))

    def __repr__(self) -> str:
        return f"RigAlgebra(slots={list(self.slot_names)}, size={self.size})"

    # ----------------------------
    # scalar ops
    # ----------------------------

    def _check_index(self, index: int) -> int:
        index = int(index)
        if not (0 <= index < self.size):
            raise ValueError(f"Index {index} outside universe [0, {self.size})")
        return index

    def decode(self, index: int) -> Slots:
        index = self._check_index(index)
        return tuple(int(v) for v in self.slots[index])

    def encode(self, x: Sequence[int]) -> int:
        if len(x) != self.n_slots:
            raise ValueError(f"Expected {self.n_slots} slots, got {len(x)}")
        out = 0
        for s, v in enumerate(x):
            v = int(v)
            if not (0 <= v < COEFF_RANGE):
                raise ValueError(f"Slot {self.slot_names[s]}={v} outside [0, {COEFF_RANGE - 1}]")
            out += v * int(self.weights[s])
        return out

    def add(self, x: Slots, y: Slots) -> Slots:
        return tuple(normalize_value(u + v) for u, v in zip(x, y))

    def multiply(self, x: Slots, y: Slots) -> Slots:
        raw = [0] * self.n_slots
        for s, p, q in self._triples:
            raw[s] += int(x[p]) * int(y[q])
        return tuple(normalize_value(v) for v in raw)

    def operation(self, name: str) -> ScalarOp:
        if name == "add":
            return self.add
        if name == "multiply":
            return self.multiply
        raise ValueError(f"Unknown operation: {name}")

    def apply(self, name: str, i: int, j: int) -> int:
        """Index of op(decode(i), decode(j))."""
        op = self.operation(name)
        return self.encode(op(self.decode(i), self.decode(j)))

    def render(self, index: int) -> str:
        return render_slots(self.decode(index), self.slot_names)

    # ----------------------------
    # row ops: op(i, j) for every j at once
    # ----------------------------

    def _pack(self, raw: np.ndarray) -> np.ndarray:
        return normalize_array(raw) @ self.weights

    def add_row(self, i: int) -> np.ndarray:
        i = self._check_index(i)
        return self._pack(self.slots[i][None, :] + self.slots)

    def multiply_row(self, i: int) -> np.ndarray:
        i = self._check_index(i)
        x = self.slots[i]
        raw = np.zeros_like(self.slots)
        for s, p, q in self._triples:
            c = int(x[p])
            if c:
                raw[:, s] += c * self.slots[:, q]
        return self._pack(raw)

    def row_operation(self, name: str) -> RowOp:
        if name == "add":
            return self.add_row
        if name == "multiply":
            return self.multiply_row
        raise ValueError(f"Unknown operation: {name}")

    def square_indices(self) -> np.ndarray:
        """Index of x*x for every x in the universe."""
        raw = np.zeros_like(self.slots)
        for s, p, q in self._triples:
            raw[:, s] += self.slots[:, p] * self.slots[:, q]
        return self._pack(raw)

    # ----------------------------
    # element discovery
    # ----------------------------

    def basis_indices(self) -> List[int]:
        return [int(self.weights[s]) for s in range(self.n_slots)]

    def reachable(self, start: Optional[Iterable[int]] = None, max_rounds: Optional[int] = None) -> Set[int]:
        """Indices generated from ``start`` (default: the basis) under add and multiply.

        Each round combines every pair of known elements; stops when a round adds nothing.
        """
        seen: Set[int] = set(self.basis_indices() if start is None else (self._check_index(i) for i in start))
        frontier: Set[int] = set(seen)
        rounds = 0
        while frontier:
            if max_rounds is not None and rounds >= int(max_rounds):
                break
            members = np.array(sorted(seen), dtype=np.int64)
            new: Set[int] = set()
            for i in members:
                for name in OPERATIONS:
                    row = self.row_operation(name)(int(i))[members]
                    new.update(int(v) for v in np.unique(row))
            frontier = new - seen
            seen |= frontier
            rounds += 1
        return seen


def parse_words(text: Optional[str]) -> Tuple[str, ...]:
    """Comma-separated basis words; None / 'all' selects the full basis."""
    if text is None or str(text).strip().lower() == "all":
        return BASIS_WORDS
    return tuple(parse_word(tok) for tok in str(text).split(","))


def build_algebra(words: Sequence[str]) -> RigAlgebra:
    if tuple(words) == BASIS_WORDS:
        return RigAlgebra.full()
    return RigAlgebra.sub(words)


def operation_tables(algebra: RigAlgebra) -> Dict[str, np.ndarray]:
    """Full Cayley tables (size x size); only sensible for small sub-algebras."""
    return {
        name: np.stack([algebra.row_operation(name)(i) for i in range(algebra.size)])
        for name in OPERATIONS
    }
