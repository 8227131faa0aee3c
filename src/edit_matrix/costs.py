"""Per-position cost callbacks consumed by the matrix builder.

A deletion or insertion callback maps a sequence index to a cost. A
substitution callback maps a (source, target) index pair to a cost, or to
``None`` when the two elements are considered identical.
"""
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, TypeVar, Union

T = TypeVar('T')

ZERO = 0

IndexCost = Callable[[int], Any]
PairCost = Callable[[int, int], Optional[Any]]
ElementCost = Callable[[Any, Any], Optional[Any]]


def one(_index: int) -> int:
    return 1


def one_elements(a: Any, b: Any) -> Optional[int]:
    if a == b:
        return None
    return 1


def one_slice(a: Sequence[T], b: Sequence[T]) -> PairCost:
    def substitution(x: int, y: int) -> Optional[int]:
        if a[x] == b[y]:
            return None
        return 1
    return substitution


def one_string(a: Union[str, bytes], b: Union[str, bytes]) -> PairCost:
    # indices address UTF-8 bytes, not code points
    raw_a = a.encode('utf-8') if isinstance(a, str) else a
    raw_b = b.encode('utf-8') if isinstance(b, str) else b
    return one_slice(raw_a, raw_b)


def _no_cost(_x: int, _y: int) -> None:
    return None


@dataclass(frozen=True)
class CostModel:
    deletion: Optional[IndexCost] = None
    insertion: Optional[IndexCost] = None
    substitution: Optional[PairCost] = None

    @classmethod
    def for_sequences(cls, a: Sequence[T], b: Sequence[T],
                      deletion: Optional[IndexCost] = None,
                      insertion: Optional[IndexCost] = None,
                      substitution: Optional[ElementCost] = None) -> 'CostModel':
        element_cost = substitution or one_elements

        def pair_cost(x: int, y: int):
            return element_cost(a[x], b[y])

        return cls(deletion=deletion, insertion=insertion, substitution=pair_cost)

    @classmethod
    def constant(cls, deletion: Any = 1, insertion: Any = 1) -> 'CostModel':
        return cls(deletion=lambda _i: deletion, insertion=lambda _j: insertion)

    def deletion_cost(self, i: int):
        cost = (self.deletion or one)(i)
        return ZERO if cost is None else cost

    def insertion_cost(self, j: int):
        cost = (self.insertion or one)(j)
        return ZERO if cost is None else cost

    def substitution_cost(self, i: int, j: int):
        return (self.substitution or _no_cost)(i, j)

    def transposed(self) -> 'CostModel':
        substitution = self.substitution
        if substitution is not None:
            def mirrored(x: int, y: int):
                return substitution(y, x)
        else:
            mirrored = None
        return CostModel(deletion=self.insertion, insertion=self.deletion, substitution=mirrored)

    def reversed(self, m: int, n: int) -> 'CostModel':
        deletion, insertion, substitution = self.deletion, self.insertion, self.substitution
        return CostModel(
            deletion=(lambda i: deletion(m - 1 - i)) if deletion else None,
            insertion=(lambda j: insertion(n - 1 - j)) if insertion else None,
            substitution=(lambda x, y: substitution(m - 1 - x, n - 1 - y)) if substitution else None,
        )


def resolve_costs(costs: Optional[CostModel] = None,
                  deletion: Optional[IndexCost] = None,
                  insertion: Optional[IndexCost] = None,
                  substitution: Optional[PairCost] = None) -> CostModel:
    if costs is None:
        return CostModel(deletion=deletion, insertion=insertion, substitution=substitution)
    if deletion is not None or insertion is not None or substitution is not None:
        raise ValueError("Pass either a CostModel or individual cost callbacks, not both")
    return costs
