from __future__ import annotations

from dataclasses import astuple, dataclass, fields
from typing import Iterable, Tuple

import numpy as np


# Basis monomials in packing order: identity, generators, reduced alternating words.
SLOT_NAMES: Tuple[str, ...] = ("i", "a", "b", "ab", "ba", "aba", "bab")
N_SLOTS = len(SLOT_NAMES)
COEFF_RANGE = 4
NUM_ELEMENTS = COEFF_RANGE ** N_SLOTS  # 16384

Slots = Tuple[int, ...]


def normalize_value(v: int) -> int:
    """Fold a raw coefficient back into [0, 3].

    x + x = (x + x)(x + x) = 4x under idempotency, so 4x may be read as 2x;
    4xy = 2xy as well, so the fold keeps the same elements reachable.
    """
    v = int(v)
    if v < COEFF_RANGE:
        return v
    return v % 2 + 2


def normalize_array(values: np.ndarray) -> np.ndarray:
    """Vectorized normalize_value."""
    values = np.asarray(values)
    return np.where(values < COEFF_RANGE, values, values % 2 + 2)


@dataclass(frozen=True, order=True)
class Rig:
    """Element of the free idempotent rig on {a, b} with coefficients in [0, 3]."""

    i: int = 0
    a: int = 0
    b: int = 0
    ab: int = 0
    ba: int = 0
    aba: int = 0
    bab: int = 0

    def __post_init__(self) -> None:
        for f in fields(self):
            v = getattr(self, f.name)
            if not (0 <= int(v) < COEFF_RANGE):
                raise ValueError(f"Slot {f.name}={v} outside [0, {COEFF_RANGE - 1}]")

    @classmethod
    def from_slots(cls, slots: Iterable[int]) -> "Rig":
        return cls(*(int(s) for s in slots))

    def slots(self) -> Slots:
        return astuple(self)

    def __str__(self) -> str:
        return render(self)


ZERO = Rig()
ONE = Rig(i=1)
BASIS: Tuple[Rig, ...] = tuple(
    Rig.from_slots(1 if k == s else 0 for k in range(N_SLOTS)) for s in range(N_SLOTS)
)


def normalize(values: Iterable[int]) -> Rig:
    return Rig.from_slots(normalize_value(v) for v in values)


def decode(index: int) -> Rig:
    """Unpack a universe index (slot k in bits 2k, 2k+1)."""
    index = int(index)
    if not (0 <= index < NUM_ELEMENTS):
        raise ValueError(f"Index {index} outside universe [0, {NUM_ELEMENTS})")
    return Rig.from_slots((index >> (2 * k)) & 3 for k in range(N_SLOTS))


def encode(x: Rig) -> int:
    out = 0
    for k, v in enumerate(x.slots()):
        out += int(v) << (2 * k)
    return out


def add(x: Rig, y: Rig) -> Rig:
    return normalize(u + v for u, v in zip(x.slots(), y.slots()))


def multiply(x: Rig, y: Rig) -> Rig:
    """Closed-form product; each output slot collects the basis products reducing to it."""
    xi, xa, xb, xab, xba, xaba, xbab = x.slots()
    yi, ya, yb, yab, yba, yaba, ybab = y.slots()
    return normalize((
        xi * yi,

        xi * ya + xa * yi + xa * ya,

        xi * yb + xb * yi + xb * yb,

        xi * yab + xab * yi + xab * yab
        + xa * yb + xa * yab + xa * ybab
        + xab * yb + xab * ybab
        + xaba * yb + xaba * yab + xaba * ybab,

        xi * yba + xba * yi + xba * yba
        + xb * ya + xb * yba + xb * yaba
        + xba * ya + xba * yaba
        + xbab * ya + xbab * yba + xbab * yaba,

        xi * yaba + xaba * yi + xaba * yaba
        + xa * yba + xa * yaba
        + xab * ya + xab * yba + xab * yaba
        + xaba * ya + xaba * yba,

        xi * ybab + xbab * yi + xbab * ybab
        + xb * yab + xb * ybab
        + xba * yb + xba * yab + xba * ybab
        + xbab * yb + xbab * yab,
    ))


def render_slots(slots: Iterable[int], names: Iterable[str]) -> str:
    """Render coefficients as a sum of monomials, e.g. ``1 + 2a + bab``."""
    terms = []
    for v, name in zip(slots, names):
        v = int(v)
        label = "" if name == "i" else name
        if v == 0:
            continue
        if v == 1:
            terms.append(label or "1")
        else:
            terms.append(f"{v}{label}")
    if not terms:
        return "0"
    return " + ".join(terms)


def render(x: Rig) -> str:
    return render_slots(x.slots(), SLOT_NAMES)
