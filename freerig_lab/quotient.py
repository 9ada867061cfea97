from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from .algebra import RigAlgebra
from .partitions import Partition


class QuotientRig:
    r"""Operations induced on the classes of a congruence.

    Class labels are 0..k-1 ordered by minimum member; each class is
    represented by that minimum. \bar{op}(A, B) = [op(rep A, rep B)], computed
    on demand since the full k x k table can be large.
    """

    def __init__(
        self,
        *,
        algebra: RigAlgebra,
        label_map: Dict[int, int],
        reps: List[int],
        cache_limit: int = 200_000,
    ):
        self._algebra = algebra
        self._label = dict(label_map)
        self._reps = list(reps)
        self._cache_limit = int(cache_limit)
        self._cache: Dict[Tuple[str, int, int], int] = {}

    @classmethod
    def from_partition(cls, algebra: RigAlgebra, partition: Partition, cache_limit: int = 200_000) -> "QuotientRig":
        if partition.n != algebra.size:
            raise ValueError(f"Partition over {partition.n} elements, algebra has {algebra.size}")
        label_map = partition.canonical_label_map()
        reps = [members[0] for members in partition.classes().values()]
        return cls(algebra=algebra, label_map=label_map, reps=reps, cache_limit=cache_limit)

    @property
    def order(self) -> int:
        return len(self._reps)

    def label(self, index: int) -> int:
        return int(self._label[int(index)])

    def representative(self, label: int) -> int:
        return int(self._reps[int(label)])

    def _apply(self, name: str, la: int, lb: int) -> int:
        key = (name, int(la), int(lb))
        if key in self._cache:
            return int(self._cache[key])

        raw_out = self._algebra.apply(name, self.representative(la), self.representative(lb))
        out = self.label(raw_out)

        if len(self._cache) < self._cache_limit:
            self._cache[key] = out
        return out

    def add(self, la: int, lb: int) -> int:
        return self._apply("add", la, lb)

    def multiply(self, la: int, lb: int) -> int:
        return self._apply("multiply", la, lb)

    def render(self, label: int) -> str:
        return f"[{self._algebra.render(self.representative(label))}]"


def quotient_labels(partition: Partition, indices: Iterable[int]) -> List[int]:
    label_map = partition.canonical_label_map()
    return [int(label_map[int(x)]) for x in indices]
