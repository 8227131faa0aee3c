import logging
from collections.abc import Sequence
from typing import Any, Callable, List, Optional, Sequence as SequenceT, TypeVar

from .costs import CostModel, ElementCost, IndexCost, PairCost, ZERO, resolve_costs

logger = logging.getLogger(__name__)

T = TypeVar('T')

Kernel = Callable[[List[Any], int, int, int, Any, Any, Any], Any]


class DistanceMatrix(Sequence):
    """Dense row-major grid of cumulative edit costs.

    Cell ``(i, j)`` holds the minimum cost of turning the first ``i`` source
    elements into the first ``j`` target elements. Indexing with an int or a
    slice addresses the flat buffer; indexing with ``(i, j)`` addresses a cell.
    """

    def __init__(self, cells: List[Any], width: int):
        if width < 0:
            raise ValueError(f"Negative matrix width: {width}")
        if width == 0 and cells:
            raise ValueError("Zero-width matrix cannot hold cells")
        if width and len(cells) % width:
            raise ValueError(f"{len(cells)} cells do not fill rows of width {width}")
        self._cells = cells
        self.width = width
        self.height = len(cells) // width if width else 0

    def __len__(self) -> int:
        return len(self._cells)

    def __getitem__(self, key):
        if isinstance(key, tuple):
            i, j = key
            if not (0 <= i < self.height and 0 <= j < self.width):
                raise IndexError(f"Cell ({i}, {j}) outside {self.height}x{self.width} matrix")
            return self._cells[self.width * i + j]
        return self._cells[key]

    def __eq__(self, other) -> bool:
        if isinstance(other, DistanceMatrix):
            return self.width == other.width and self._cells == other._cells
        return NotImplemented

    def __repr__(self) -> str:
        return f"DistanceMatrix({self.height}x{self.width})"

    @property
    def source_length(self) -> int:
        return self.height - 1

    @property
    def target_length(self) -> int:
        return self.width - 1

    def row(self, i: int) -> List[Any]:
        return self._cells[self.width * i:self.width * (i + 1)]

    def rows(self) -> List[List[Any]]:
        return [self.row(i) for i in range(self.height)]

    def transpose(self) -> 'DistanceMatrix':
        cells = [self._cells[self.width * i + j] for j in range(self.width) for i in range(self.height)]
        return DistanceMatrix(cells, self.height)


def kernel(d: List[Any], i: int, j: int, n: int, cost, del_cost, ins_cost):
    dele = d[n * (i - 1) + j] + del_cost
    ins = d[n * i + (j - 1)] + ins_cost
    sub = d[n * (i - 1) + (j - 1)] + cost
    # substitution wins every tie it is part of, insertion beats deletion
    if dele < ins:
        return dele if dele < sub else sub
    return ins if ins < sub else sub


DEFAULT_KERNEL = kernel


def build_matrix(m: int, n: int,
                 deletion: Optional[IndexCost] = None,
                 insertion: Optional[IndexCost] = None,
                 substitution: Optional[PairCost] = None,
                 kernel: Optional[Kernel] = None,
                 costs: Optional[CostModel] = None) -> DistanceMatrix:
    if m < 0 or n < 0:
        raise ValueError(f"Sequence lengths must be non-negative, got {m} and {n}")
    model = resolve_costs(costs, deletion, insertion, substitution)
    combine = kernel or DEFAULT_KERNEL
    height, width = m + 1, n + 1
    d: List[Any] = [ZERO] * (height * width)
    for i in range(1, height):
        d[width * i] = d[width * (i - 1)] + model.deletion_cost(i - 1)
    for j in range(1, width):
        d[j] = d[j - 1] + model.insertion_cost(j - 1)
    for j in range(1, width):
        ins_cost = model.insertion_cost(j - 1)
        for i in range(1, height):
            cost = model.substitution_cost(i - 1, j - 1)
            if cost is None:
                cost = ZERO
            d[width * i + j] = combine(d, i, j, width, cost, model.deletion_cost(i - 1), ins_cost)
    matrix = DistanceMatrix(d, width)
    logger.debug("Built %dx%d matrix, distance %s", height, width, d[-1])
    return matrix


def build_matrix_t(m: int, n: int,
                   deletion: Optional[IndexCost] = None,
                   insertion: Optional[IndexCost] = None,
                   substitution: Optional[PairCost] = None,
                   kernel: Optional[Kernel] = None,
                   costs: Optional[CostModel] = None) -> DistanceMatrix:
    model = resolve_costs(costs, deletion, insertion, substitution)
    return build_matrix(n, m, kernel=kernel, costs=model.transposed())


def build_matrix_r(m: int, n: int,
                   deletion: Optional[IndexCost] = None,
                   insertion: Optional[IndexCost] = None,
                   substitution: Optional[PairCost] = None,
                   kernel: Optional[Kernel] = None,
                   costs: Optional[CostModel] = None) -> DistanceMatrix:
    model = resolve_costs(costs, deletion, insertion, substitution)
    return build_matrix(m, n, kernel=kernel, costs=model.reversed(m, n))


def build_matrix_slices(a: SequenceT[T], b: SequenceT[T],
                        deletion: Optional[IndexCost] = None,
                        insertion: Optional[IndexCost] = None,
                        substitution: Optional[ElementCost] = None,
                        kernel: Optional[Kernel] = None) -> DistanceMatrix:
    model = CostModel.for_sequences(a, b, deletion, insertion, substitution)
    return build_matrix(len(a), len(b), kernel=kernel, costs=model)


def build_matrix_t_slices(a: SequenceT[T], b: SequenceT[T],
                          deletion: Optional[IndexCost] = None,
                          insertion: Optional[IndexCost] = None,
                          substitution: Optional[ElementCost] = None,
                          kernel: Optional[Kernel] = None) -> DistanceMatrix:
    model = CostModel.for_sequences(a, b, deletion, insertion, substitution)
    return build_matrix_t(len(a), len(b), kernel=kernel, costs=model)


def distance(matrix: SequenceT[Any]) -> Optional[Any]:
    if len(matrix) == 0:
        return None
    return matrix[-1]
