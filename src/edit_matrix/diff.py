import logging
from typing import Any, List, Optional, Sequence, TypeVar

from .backtrack import classify_path, reconstruct_path
from .costs import CostModel
from .matrix import Kernel, build_matrix, distance
from .utils import DiffResult, EditKind, EditScript, Sink

logger = logging.getLogger(__name__)

T = TypeVar('T')


def diff(matrix: Sequence[Any], width: int, sink: Sink) -> None:
    path = reconstruct_path(matrix, width)
    for kind, x, y in classify_path(matrix, width, path):
        if not sink(kind, x, y):
            logger.debug("Sink stopped emission at %s (%d, %d)", kind.value, x, y)
            return


def edit_script(matrix: Sequence[Any], width: Optional[int] = None) -> EditScript:
    if width is None:
        width = matrix.width
    path = reconstruct_path(matrix, width)
    return list(classify_path(matrix, width, path))


def patch(source: Sequence[T], target: Sequence[T], script: EditScript) -> List[T]:
    result: List[T] = []
    consumed = 0
    for kind, x, y in script:
        if kind == EditKind.INSERT:
            if x != consumed:
                raise ValueError(f"INSERT at source position {x}, expected {consumed}")
            result.append(target[y])
            continue
        if x != consumed or x >= len(source):
            raise ValueError(f"{kind.value.upper()} at source index {x}, expected {consumed}")
        if kind == EditKind.SKIP:
            if source[x] != target[y]:
                raise ValueError(f"SKIP mismatch at {x}, {y}: {source[x]!r} != {target[y]!r}")
            result.append(source[x])
        elif kind == EditKind.REPLACE:
            result.append(target[y])
        consumed += 1
    if consumed != len(source):
        raise ValueError(f"Script incomplete: consumed {consumed} of {len(source)}")
    return result


def compare(source: Sequence[T], target: Sequence[T],
            costs: Optional[CostModel] = None,
            kernel: Optional[Kernel] = None) -> DiffResult:
    if costs is None or costs.substitution is None:
        base = costs or CostModel()
        costs = CostModel.for_sequences(source, target, base.deletion, base.insertion)
    matrix = build_matrix(len(source), len(target), kernel=kernel, costs=costs)
    script = edit_script(matrix)
    return DiffResult.from_script(script, len(source), len(target), distance(matrix))
