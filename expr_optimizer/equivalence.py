"""
Equivalence-Class Explorer
==========================

Purpose:
--------
Enumerates the distinct forms (by canonical string) of an expression that
are reachable with the distributive and associative rewrite laws.

Algorithm:
----------
1. Expansion BFS: starting from the input, apply every single-step
   distributive expansion. Every new canonical form is recorded; the first
   dequeued form with no expansion left is the fully expanded seed.
2. Flattening: the seed goes through ``transform`` and ``fold`` once to get a
   flat signed sum, recorded if new.
3. Factoring BFS: from the flattened seed, apply every single-step
   associative factoring until no new form appears.

The ``visited`` set of canonical strings bounds both searches, so the result
holds each form exactly once and starts with the input. Discovery order is
deterministic.

Complexity:
-----------
- Exponential in the number of brackets/shared factors in the worst case;
  ``max_forms`` caps the result size.
"""

import collections
from typing import List, Optional

from .core import PassRegistry
from .errors import AstError, ConfigurationError
from .tree import AbstractSyntaxTree
from .transforms.rewrite.associative import single_step_factorings
from .transforms.rewrite.distributive import single_step_expansions
from .utils.logger import logger


class EquivalenceExplorer:
    """Breadth-first search over distributive and associative rewrites."""

    def __init__(self, max_forms: Optional[int] = None):
        if max_forms is not None and max_forms < 1:
            raise ConfigurationError(f"max_forms must be at least 1, got {max_forms}")
        self.max_forms = max_forms
        self._visited = set()
        self._forms: List[AbstractSyntaxTree] = []
        self._truncated = False

    @property
    def truncated(self) -> bool:
        """True when the last search stopped at ``max_forms``."""
        return self._truncated

    def _record(self, tree: AbstractSyntaxTree) -> bool:
        """Adds ``tree`` to the result if its canonical form is new."""
        if self._truncated:
            return False
        key = tree.to_canonical_string()
        if key in self._visited:
            return False
        if self.max_forms is not None and len(self._forms) >= self.max_forms:
            logger.warning(
                f"Equivalent form search reached max forms ({self.max_forms}). Stopping."
            )
            self._truncated = True
            return False
        self._visited.add(key)
        self._forms.append(tree)
        return True

    def explore(self, tree: AbstractSyntaxTree) -> List[AbstractSyntaxTree]:
        self._visited = set()
        self._forms = []
        self._truncated = False

        self._record(tree)
        expanded = self._expand_fully(tree)
        seed = self._flatten(expanded)
        self._record(seed)
        self._factor(seed)

        logger.info(f"Found {len(self._forms)} distinct forms")
        return list(self._forms)

    def _expand_fully(self, tree: AbstractSyntaxTree) -> AbstractSyntaxTree:
        queue = collections.deque([tree])
        fully_expanded = None
        while queue and not self._truncated:
            current = queue.popleft()
            candidates = single_step_expansions(current)
            if not candidates and fully_expanded is None:
                fully_expanded = current
            for candidate in candidates:
                if self._record(candidate):
                    queue.append(candidate)
        # A truncated search may stop before any fully expanded form is dequeued
        return fully_expanded if fully_expanded is not None else self._forms[-1]

    def _flatten(self, tree: AbstractSyntaxTree) -> AbstractSyntaxTree:
        try:
            canonical = PassRegistry.get_pass("transform").transform(tree)
            return PassRegistry.get_pass("fold").transform(canonical)
        except AstError as e:
            logger.error(f"Flattening the expanded form failed, factoring it as is: {e}")
            return tree

    def _factor(self, seed: AbstractSyntaxTree):
        queue = collections.deque([seed])
        while queue and not self._truncated:
            current = queue.popleft()
            for candidate in single_step_factorings(current):
                if self._record(candidate):
                    queue.append(candidate)


def find_equivalent_forms(tree: AbstractSyntaxTree, max_forms: Optional[int] = None) -> List[AbstractSyntaxTree]:
    """Convenience wrapper around ``EquivalenceExplorer.explore``."""
    return EquivalenceExplorer(max_forms=max_forms).explore(tree)
