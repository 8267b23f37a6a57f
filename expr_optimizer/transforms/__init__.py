"""
Expression Transforms
=====================

Normalization passes and single-step rewrite laws, grouped by kind:

transforms/
├── scalar/              # Local rewrites
│   ├── constant_fold.py    # compute: constant folding to a fixed point
│   ├── canonicalize.py     # transform: subtraction/division canonical form
│   └── fold.py             # fold: readable form for output
│
├── combine/             # Chain restructuring
│   └── balance.py          # balance: minimal-height +/* chains
│
└── rewrite/             # Equivalence laws used by the search
    ├── distributive.py     # bracket expansion
    └── associative.py      # common factor extraction

Default normalization order:
1. compute -> transform -> compute -> balance -> compute  (search seed)
2. fold -> compute                                        (presentation)
"""

# Normalization passes (registered on import)
from .scalar import (
    ConstantFoldPass,
    CanonicalizePass,
    FoldPass,
)
from .combine import (
    BalancePass,
)

# Rewrite laws
from .rewrite import (
    single_step_expansions,
    single_step_factorings,
)

__all__ = [
    # Scalar
    'ConstantFoldPass',
    'CanonicalizePass',
    'FoldPass',
    # Combine
    'BalancePass',
    # Rewrite
    'single_step_expansions',
    'single_step_factorings',
]
