"""
Optimization Research
=====================

Purpose:
--------
Simulates every equivalent form of an expression under one machine
configuration and ranks them: fastest makespan (``tp``) first, ties broken
by higher efficiency, then by the form's position in the input list.

Simulations are independent of each other, so with ``max_workers`` > 1 they
are spread over a ``ProcessPoolExecutor``; results are put back in input
order before ranking, so the outcome does not depend on the worker count.
"""

import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..tree import AbstractSyntaxTree
from ..utils.logger import logger
from .config import SystemConfiguration
from .scheduler import SimulationResult, simulate


@dataclass(frozen=True)
class ResearchEntry:
    index: int
    tree: AbstractSyntaxTree
    canonical: str
    result: SimulationResult


@dataclass(frozen=True)
class ResearchResult:
    configuration: SystemConfiguration
    # Entries in input order; ``ranking`` holds their indices, best first
    entries: Tuple[ResearchEntry, ...]
    ranking: Tuple[int, ...]

    @property
    def best(self) -> Optional[ResearchEntry]:
        if not self.ranking:
            return None
        return self.entries[self.ranking[0]]

    def ranked(self) -> List[ResearchEntry]:
        return [self.entries[i] for i in self.ranking]


def _simulation_worker(task):
    index, tree, configuration = task
    return index, simulate(tree, configuration)


def rank_results(results: Sequence[SimulationResult]) -> Tuple[int, ...]:
    """Indices of ``results`` ordered by tp asc, efficiency desc, index asc."""
    if not results:
        return ()
    tp = np.array([r.tp for r in results])
    efficiency = np.array([r.efficiency for r in results])
    # lexsort uses the last key as the primary one
    order = np.lexsort((np.arange(len(results)), -efficiency, tp))
    return tuple(int(i) for i in order)


class Researcher:
    def __init__(self, configuration: Optional[SystemConfiguration] = None, max_workers: Optional[int] = None):
        self.configuration = configuration or SystemConfiguration()
        self.max_workers = max_workers

    def _simulate_all(self, forms: Sequence[AbstractSyntaxTree]) -> List[SimulationResult]:
        tasks = [(index, form, self.configuration) for index, form in enumerate(forms)]
        results: List[Optional[SimulationResult]] = [None] * len(tasks)

        workers = self.max_workers
        if workers is None or workers <= 1 or len(tasks) <= 1:
            for task in tasks:
                index, result = _simulation_worker(task)
                results[index] = result
            return results

        workers = max(1, min(len(tasks), workers, os.cpu_count() or 1))
        logger.info(f"Simulating {len(tasks)} forms on {workers} workers")
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(_simulation_worker, task) for task in tasks]
            for future in as_completed(futures):
                index, result = future.result()
                results[index] = result
        return results

    def run(self, forms: Sequence[AbstractSyntaxTree]) -> ResearchResult:
        """
        Simulates and ranks ``forms``.

        Raises:
            SchedulingError: when any form cannot be scheduled.
        """
        results = self._simulate_all(forms)
        entries = tuple(
            ResearchEntry(index, form, form.to_canonical_string(), result)
            for index, (form, result) in enumerate(zip(forms, results))
        )
        ranking = rank_results(results)
        if ranking:
            best = entries[ranking[0]]
            logger.info(
                f"Optimal form #{best.index}: Tp={best.result.tp} "
                f"Efficiency={best.result.efficiency:.4f}"
            )
        return ResearchResult(configuration=self.configuration, entries=entries, ranking=ranking)
