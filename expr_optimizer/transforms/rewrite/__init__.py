from .distributive import find_expansion_sites, single_step_expansions
from .associative import collect_terms, single_step_factorings

__all__ = [
    "find_expansion_sites",
    "single_step_expansions",
    "collect_terms",
    "single_step_factorings",
]
