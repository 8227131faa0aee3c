import logging
from typing import Any, Iterator, List, Sequence

from .utils import EditAction, PathStep, make_delete, make_insert, make_replace, make_skip

logger = logging.getLogger(__name__)


def reconstruct_path(matrix: Sequence[Any], width: int) -> List[PathStep]:
    if width <= 0 or len(matrix) <= 1:
        return []
    i, j = len(matrix) // width - 1, width - 1
    path: List[PathStep] = []
    while True:
        path.append(PathStep(i, j))
        if i == 0 and j == 0:
            break
        if i == 0:
            j -= 1
            continue
        if j == 0:
            i -= 1
            continue
        diag = matrix[width * (i - 1) + (j - 1)]
        left = matrix[width * i + (j - 1)]
        up = matrix[width * (i - 1) + j]
        # diagonal beats left beats up on ties
        if diag <= left and diag <= up:
            i -= 1
            j -= 1
        elif left <= up:
            j -= 1
        else:
            i -= 1
    path.reverse()
    logger.debug("Reconstructed path of %d steps through %d-wide matrix", len(path), width)
    return path


def classify_step(matrix: Sequence[Any], width: int, prev: PathStep, cur: PathStep) -> EditAction:
    d_row = cur.row - prev.row
    d_col = cur.col - prev.col
    if d_row not in (0, 1) or d_col not in (0, 1) or not (d_row or d_col):
        raise ValueError(f"Path step {prev} -> {cur} is not a unit step")
    if d_row and d_col:
        before = matrix[width * prev.row + prev.col]
        after = matrix[width * cur.row + cur.col]
        make = make_skip if before == after else make_replace
        return make(cur.row - 1, cur.col - 1)
    if d_col:
        return make_insert(cur.row, cur.col - 1)
    return make_delete(cur.row - 1, cur.col)


def classify_path(matrix: Sequence[Any], width: int, path: Sequence[PathStep]) -> Iterator[EditAction]:
    for prev, cur in zip(path, path[1:]):
        yield classify_step(matrix, width, prev, cur)
