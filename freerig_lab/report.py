from __future__ import annotations

from collections import Counter
from typing import Any, Dict, List, Optional

from .algebra import RigAlgebra
from .congruence import CongruenceResult
from .partitions import Partition


def class_sizes(partition: Partition) -> List[int]:
    """Sizes of all equivalence classes, largest first."""
    return sorted((len(members) for members in partition.classes().values()), reverse=True)


def size_histogram(sizes: List[int]) -> Dict[int, int]:
    """size -> number of classes of that size."""
    return dict(sorted(Counter(int(s) for s in sizes).items()))


def quotient_loss(partition: Partition) -> float:
    """Fraction of the universe collapsed: 1 - |classes| / |universe|.

    0.0 means no identifications, values near 1.0 mean almost everything collapsed.
    """
    return float(1.0 - partition.num_classes() / max(1, partition.n))


def summarize(algebra: RigAlgebra, result: CongruenceResult) -> Dict[str, Any]:
    sizes = class_sizes(result.partition)
    return {
        "slots": list(algebra.slot_names),
        "n_elements": int(algebra.size),
        "n_classes": len(sizes),
        "class_sizes": sizes,
        "size_histogram": size_histogram(sizes),
        "quotient_loss": quotient_loss(result.partition),
        "seed_merges": int(result.seed_merges),
        "passes": int(result.passes),
        "merges_per_pass": [int(m) for m in result.merges_per_pass],
    }


def format_classes(algebra: RigAlgebra, partition: Partition, max_members: Optional[int] = None) -> List[str]:
    """One line per class, ordered by smallest member: ``k: elt, elt, ...``."""
    lines: List[str] = []
    for k, members in enumerate(partition.classes().values()):
        shown = members if max_members is None else members[: int(max_members)]
        text = ", ".join(algebra.render(x) for x in shown)
        if len(shown) < len(members):
            text += f", ... ({len(members) - len(shown)} more)"
        lines.append(f"{k}: {text}")
    return lines
