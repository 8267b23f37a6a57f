import os
import time
import datetime
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .core import PassRegistry
from .equivalence import EquivalenceExplorer
from .errors import AstError, ExpressionTooDeep
from .reports import equivalence_report, research_report, simulation_report, stages_report
from .schedule.config import SystemConfiguration
from .schedule.research import ResearchResult, Researcher
from .schedule.scheduler import SimulationResult, simulate
from .tree import AbstractSyntaxTree
from .utils import load_tree, save_tree, logger as custom_logger
from .utils.logger import LOG_FORMAT
from .utils.tree_utils import count_nodes

DEFAULT_PASSES = ["compute", "transform", "compute", "balance", "compute"]
PRESENTATION_PASSES = ["fold", "compute"]


@dataclass(frozen=True)
class StageResult:
    """Outcome of one pass run: the new tree, or the error that stopped it."""

    name: str
    run: int
    tree: Optional[AbstractSyntaxTree] = None
    error: Optional[AstError] = None
    duration: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class PipelineResult:
    stages: List[StageResult] = field(default_factory=list)
    # Unfolded tree the search starts from; None when a stage failed
    normalized: Optional[AbstractSyntaxTree] = None
    presentation: Optional[AbstractSyntaxTree] = None
    finalized: bool = False
    forms: List[AbstractSyntaxTree] = field(default_factory=list)
    simulation: Optional[SimulationResult] = None
    research: Optional[ResearchResult] = None
    reports: Dict[str, str] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        return any(not stage.ok for stage in self.stages)


class OptimizationPipeline:
    """
    A facade class to configure and run normalization, the equivalent-form
    search and the scheduling research for one expression tree.
    """

    def __init__(
        self,
        tree: Optional[AbstractSyntaxTree] = None,
        input_tree: Optional[str] = None,
        passes: Optional[List[str]] = None,
        presentation_passes: Optional[List[str]] = None,
        system: Optional[SystemConfiguration] = None,
        max_workers: Optional[int] = None,
        max_forms: Optional[int] = None,
        debug: bool = False,
        log_file: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            tree (AbstractSyntaxTree, optional): Input tree (takes priority over input_tree).
            input_tree (str, optional): Path to a JSON-encoded input tree.
            passes (list[str]): Normalization passes producing the search seed.
            presentation_passes (list[str]): Passes applied afterwards for display only.
            system (SystemConfiguration): Machine used for scheduling. Defaults apply if None.
            max_workers (int): Worker processes for candidate simulation (None or 1 = inline).
            max_forms (int): Upper bound on equivalent forms collected by the search.
            debug (bool): Dump every stage's tree as JSON into a run directory.
            log_file (str): Path to log file.
            config (dict): Optional dictionary containing configuration overrides.
                           Keys match constructor args; "system" may be a dict.
        """
        self.tree = tree
        self.input_tree = input_tree
        self.passes = list(passes) if passes else list(DEFAULT_PASSES)
        self.presentation_passes = (
            list(presentation_passes) if presentation_passes is not None else list(PRESENTATION_PASSES)
        )
        self.system = system or SystemConfiguration()
        self.max_workers = max_workers
        self.max_forms = max_forms
        self.debug = debug
        self.log_file = log_file

        # Apply config overrides if provided
        if config:
            self._apply_config(config)

        self.debug_dir = None
        self._file_handler = None

    def _apply_config(self, config):
        """Merges configuration dict into instance attributes."""
        if "input_tree" in config and not self.input_tree:
            self.input_tree = config["input_tree"]
        if "passes" in config:
            self.passes = list(config["passes"])
        if "presentation_passes" in config:
            self.presentation_passes = list(config["presentation_passes"])
        if "system" in config:
            self.system = SystemConfiguration.from_dict(config["system"])
        if "max_workers" in config and self.max_workers is None:
            self.max_workers = config["max_workers"]
        if "max_forms" in config and self.max_forms is None:
            self.max_forms = config["max_forms"]
        if "debug" in config:
            self.debug = config["debug"] or self.debug
        if "log_file" in config and not self.log_file:
            self.log_file = config["log_file"]

    def _setup_logging_and_debug(self):
        """Configures logging and creates debug directory."""
        if self.debug:
            timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
            self.debug_dir = f"run_{timestamp}"
            os.makedirs(self.debug_dir, exist_ok=True)
            # Redirect log to debug dir if not explicit
            if not self.log_file:
                self.log_file = os.path.join(self.debug_dir, "optimization.log")

        if self.log_file and self._file_handler is None:
            self._file_handler = logging.FileHandler(self.log_file)
            self._file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            custom_logger.addHandler(self._file_handler)
            custom_logger.info(f"Logging to file: {self.log_file}")

    def _teardown_logging(self):
        if self._file_handler is not None:
            custom_logger.removeHandler(self._file_handler)
            self._file_handler.close()
            self._file_handler = None

    def _load_input(self) -> AbstractSyntaxTree:
        # Priority: tree > input_tree
        if self.tree is not None:
            custom_logger.debug("Using provided tree object")
            return self.tree
        if self.input_tree:
            custom_logger.info(f"Loading tree from {self.input_tree}")
            return load_tree(self.input_tree)
        raise ValueError("Either tree or input_tree must be provided.")

    def _dump(self, tree, filename):
        if self.debug_dir:
            save_tree(tree, os.path.join(self.debug_dir, filename))

    def _run_passes(self, tree, pass_names, result: PipelineResult):
        """
        Runs ``pass_names`` in order, appending a StageResult per pass.

        Returns the final tree, or None when a pass failed or the tree was
        solved to a number (``result.finalized``).
        """
        for pass_name in pass_names:
            if pass_name not in PassRegistry.list_available_passes():
                custom_logger.warning(f"Pass '{pass_name}' not found in registry. Skipping.")
                continue

            run = 1 + sum(1 for stage in result.stages if stage.name == pass_name)

            start_time = time.time()
            try:
                tree = PassRegistry.get_pass(pass_name).transform(tree)
            except (AstError, RecursionError) as e:
                # Recursive passes overflow on very deep chains
                error = e if isinstance(e, AstError) else ExpressionTooDeep(count_nodes(tree.root))
                custom_logger.error(f"Error applying pass '{pass_name}': {error}")
                result.stages.append(
                    StageResult(pass_name, run, error=error, duration=time.time() - start_time)
                )
                return None

            result.stages.append(StageResult(pass_name, run, tree=tree, duration=time.time() - start_time))
            self._dump(tree, f"{len(result.stages):02d}_{pass_name}.json")

            if pass_name == "compute" and tree.is_finalized():
                custom_logger.info("Tree is fully solved by computation")
                result.finalized = True
                return None
        return tree

    def normalize(self, tree: AbstractSyntaxTree) -> PipelineResult:
        """Runs the normalization and presentation passes only."""
        result = PipelineResult()
        normalized = self._run_passes(tree, self.passes, result)
        if normalized is None:
            return result
        result.normalized = normalized

        result.presentation = self._run_passes(normalized, self.presentation_passes, result)
        return result

    def run(self) -> PipelineResult:
        """Executes the full pipeline and builds every report."""
        self._setup_logging_and_debug()
        try:
            return self._run()
        finally:
            self._teardown_logging()

    def _run(self) -> PipelineResult:
        tree = self._load_input()
        initial_node_count = count_nodes(tree.root)
        self._dump(tree, "00_initial.json")
        custom_logger.info(f"Applying passes: {self.passes} then {self.presentation_passes}")

        start_time = time.time()
        result = self.normalize(tree)
        result.reports["stages"] = stages_report(result.stages, result.finalized)

        if result.normalized is not None and not result.finalized:
            explorer = EquivalenceExplorer(max_forms=self.max_forms)
            result.forms = explorer.explore(result.normalized)
            result.reports["forms"] = equivalence_report(result.forms)

            result.simulation = simulate(result.normalized, self.system)
            result.reports["schedule"] = simulation_report(result.simulation)

            result.research = Researcher(self.system, max_workers=self.max_workers).run(result.forms)
            result.reports["research"] = research_report(result.research)

        self._log_final_summary(result, initial_node_count, time.time() - start_time)
        return result

    def _log_final_summary(self, result: PipelineResult, initial_node_count, total_time):
        """Log final summary with per-stage statistics."""
        custom_logger.info("")
        custom_logger.info("=" * 70)
        custom_logger.info("OPTIMIZATION SUMMARY")
        custom_logger.info("=" * 70)

        if result.stages:
            custom_logger.info("")
            custom_logger.info("Per-Stage Statistics:")
            custom_logger.info("-" * 70)
            custom_logger.info(f"{'Stage':<30} {'Status':>8} {'Nodes':>15} {'Time':>8}")
            custom_logger.info("-" * 70)
            for stage in result.stages:
                label = f"{stage.name} #{stage.run}" if stage.name == "compute" else stage.name
                status = "ok" if stage.ok else "FAILED"
                nodes = str(count_nodes(stage.tree.root)) if stage.ok else "N/A"
                custom_logger.info(f"  {label:<28} {status:>8} {nodes:>15} {stage.duration:>7.3f}s")
            custom_logger.info("-" * 70)

        custom_logger.info("")
        custom_logger.info("Overall:")
        custom_logger.info(f"  Total time: {total_time:.3f}s")
        custom_logger.info(f"  Initial nodes: {initial_node_count}")
        if result.finalized:
            custom_logger.info("  Tree solved to a constant")
        if result.forms:
            custom_logger.info(f"  Equivalent forms: {len(result.forms)}")
        if result.research is not None and result.research.best is not None:
            best = result.research.best
            custom_logger.info(
                f"  Optimal form: #{best.index} (Tp={best.result.tp}, "
                f"Efficiency={best.result.efficiency:.4f})"
            )
        custom_logger.info("=" * 70)
