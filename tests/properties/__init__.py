from properties.generators import (
    GeneratorConfig,
    GeneratorMode,
    SequenceGenerator,
    SimilarSequenceGenerator,
    CostGenerator,
    EdgeCaseGenerator,
    CaseGenerator,
    DiffCase,
    all_sequences,
    all_pairs,
)


__all__ = [
    "GeneratorConfig",
    "GeneratorMode",
    "SequenceGenerator",
    "SimilarSequenceGenerator",
    "CostGenerator",
    "EdgeCaseGenerator",
    "CaseGenerator",
    "DiffCase",
    "all_sequences",
    "all_pairs",
]
