from helpers.naive_diff import (
    NaiveEditDistance,
    AlignmentEnumerator,
    apply_script,
    naive_distance,
    optimal_scripts,
    unit,
    unit_substitution,
)


__all__ = [
    "NaiveEditDistance",
    "AlignmentEnumerator",
    "apply_script",
    "naive_distance",
    "optimal_scripts",
    "unit",
    "unit_substitution",
]
