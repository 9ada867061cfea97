from __future__ import annotations

"""Word reduction for the free band on two generators.

Monomials of the rig are words in {a, b} modulo the idempotent law xx = x.
Reduced words are the empty word (identity), a, b, ab, ba, aba, bab; the
product table used by :func:`freerig_lab.rig.multiply` is exactly the
concatenate-and-reduce table on these seven words.
"""

from typing import Dict, List, Sequence, Tuple

from .rig import BASIS, SLOT_NAMES, multiply

GENERATORS = ("a", "b")
BASIS_WORDS: Tuple[str, ...] = ("", "a", "b", "ab", "ba", "aba", "bab")

ProductTerms = Dict[int, List[Tuple[int, int]]]


def word_to_slot_name(word: str) -> str:
    return word if word else "i"


def parse_word(token: str) -> str:
    """CLI-friendly word parsing: '1', 'i' and '' all mean the identity."""
    token = str(token).strip()
    if token in ("", "1", "i"):
        return ""
    return token


def reduce_word(word: str) -> str:
    for ch in word:
        if ch not in GENERATORS:
            raise ValueError(f"Unknown generator {ch!r} in word {word!r}")

    collapsed: List[str] = []
    for ch in word:
        if not collapsed or collapsed[-1] != ch:
            collapsed.append(ch)

    # alternating words: (xy)^n -> xy, (xy)^n x -> xyx
    if len(collapsed) > 3:
        if collapsed[0] != collapsed[-1]:
            collapsed = collapsed[:2]
        else:
            collapsed = collapsed[:3]
    return "".join(collapsed)


def derive_product_terms(words: Sequence[str]) -> ProductTerms:
    """Group ordered pairs of basis slots by the slot their product reduces to."""
    words = list(words)
    slot_of = {w: k for k, w in enumerate(words)}
    if len(slot_of) != len(words):
        raise ValueError(f"Duplicate basis words: {words}")
    for w in words:
        if reduce_word(w) != w:
            raise ValueError(f"Basis word {w!r} is not reduced")

    terms: ProductTerms = {k: [] for k in range(len(words))}
    for p, u in enumerate(words):
        for q, v in enumerate(words):
            w = reduce_word(u + v)
            if w not in slot_of:
                raise ValueError(
                    f"Basis {words} is not closed under multiplication: "
                    f"{u or '1'}*{v or '1'} = {w or '1'}"
                )
            terms[slot_of[w]].append((p, q))
    return terms


def verify_product_table() -> ProductTerms:
    """Check the closed-form multiply against the reduction-derived table.

    Returns the derived terms for the full basis.
    """
    terms = derive_product_terms(BASIS_WORDS)
    target: Dict[Tuple[int, int], int] = {}
    for s, pairs in terms.items():
        for pq in pairs:
            target[pq] = s

    for p, x in enumerate(BASIS):
        for q, y in enumerate(BASIS):
            got = multiply(x, y)
            expected = BASIS[target[(p, q)]]
            if got != expected:
                raise RuntimeError(
                    f"Product table mismatch: {SLOT_NAMES[p]}*{SLOT_NAMES[q]} "
                    f"gives {got}, word reduction gives {expected}"
                )
    return terms
