from .costs import CostModel, one, one_elements, one_slice, one_string
from .matrix import (
    DistanceMatrix, DEFAULT_KERNEL, kernel, build_matrix, build_matrix_t, build_matrix_r,
    build_matrix_slices, build_matrix_t_slices, distance
)
from .backtrack import reconstruct_path, classify_path, classify_step
from .diff import diff, edit_script, patch, compare
from .utils import EditKind, EditAction, EditScript, PathStep, DiffResult, TokenType


__all__ = [
    "CostModel", "one", "one_elements", "one_slice", "one_string",
    "DistanceMatrix", "DEFAULT_KERNEL", "kernel", "build_matrix", "build_matrix_t", "build_matrix_r",
    "build_matrix_slices", "build_matrix_t_slices", "distance",
    "reconstruct_path", "classify_path", "classify_step",
    "diff", "edit_script", "patch", "compare",
    "EditKind", "EditAction", "EditScript", "PathStep", "DiffResult", "TokenType",
]

__version__ = "1.0.0"
