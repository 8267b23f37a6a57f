import argparse
import json
import sys

from . import transforms  # Register all passes
from .schedule.config import OPERATOR_KEYS
from .schedule.task_graph import build_task_graph
from .utils.logger import DEBUG, logger as custom_logger, set_log_level
from .utils.visualize import save_dot

# Prevent unused import warning
_ = transforms

REPORT_ORDER = ("stages", "forms", "schedule", "research")


def build_parser():
    parser = argparse.ArgumentParser(
        description="Expression Optimizer CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Normalize, search and schedule an expression stored as JSON
  python -m expr_optimizer.main --input expr.json

  # Only the research table, on a machine with two adders and multipliers
  python -m expr_optimizer.main --input expr.json --report research --add 2 --mul 2

  # Slower divider, parallel simulation and a DOT graph of the optimal form
  python -m expr_optimizer.main --config config.json --time-div 8 --workers 4 --dot best.dot

Config file format (JSON):
  {
    "input_tree": "path/to/expr.json",
    "passes": ["compute", "transform", "compute", "balance", "compute"],
    "presentation_passes": ["fold", "compute"],
    "system": {
      "time": {"add": 1, "sub": 1, "mul": 2, "div": 4},
      "processors": {"add": 1, "sub": 1, "mul": 1, "div": 1}
    },
    "max_workers": 4,
    "max_forms": 500,
    "debug": false,
    "log_file": "optimization.log"
  }

Tree format (JSON):
  ["+", "a", ["*", "b", 2]]   ->   a + b * 2
        """,
    )
    parser.add_argument("--config", help="Path to JSON configuration file")
    parser.add_argument("--input", help="Override input tree path")
    parser.add_argument(
        "--report",
        choices=REPORT_ORDER + ("all",),
        default="all",
        help="Report to print (default: all)",
    )
    for key in OPERATOR_KEYS:
        parser.add_argument(f"--{key}", type=int, help=f"Number of {key.upper()} processors")
    for key in OPERATOR_KEYS:
        parser.add_argument(f"--time-{key}", type=int, help=f"Latency of {key.upper()} in ticks")
    parser.add_argument(
        "--workers",
        type=int,
        help="Worker processes for simulating equivalent forms (default: inline)",
    )
    parser.add_argument("--max-forms", type=int, help="Upper bound on equivalent forms")
    parser.add_argument("--dot", help="Write the optimal form's task graph as GraphViz DOT")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (dump intermediate trees)",
    )
    parser.add_argument("--log-file", help="Path to log file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def merge_system_overrides(config, args):
    """Folds the per-operator command line flags into ``config["system"]``."""
    system = dict(config.get("system") or {})
    processors = dict(system.get("processors") or {})
    time = dict(system.get("time") or {})
    for key in OPERATOR_KEYS:
        count = getattr(args, key)
        if count is not None:
            processors[key] = count
        latency = getattr(args, f"time_{key}")
        if latency is not None:
            time[key] = latency

    if processors:
        system["processors"] = processors
    if time:
        system["time"] = time
    if system:
        config["system"] = system
    return config


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(DEBUG)

    # Load config if specified
    config = {}
    if args.config:
        try:
            with open(args.config, "r") as f:
                config = json.load(f)
        except Exception as e:
            custom_logger.error(f"Failed to load config file: {e}")
            sys.exit(1)

    try:
        from .runner import OptimizationPipeline

        pipeline = OptimizationPipeline(
            input_tree=args.input,           # Override from command line
            max_workers=args.workers,
            max_forms=args.max_forms,
            debug=args.debug,
            log_file=args.log_file,
            config=merge_system_overrides(config, args),
            # Command line args take precedence over config file
        )
        result = pipeline.run()
    except Exception as e:
        custom_logger.error(f"Optimization failed: {e}")
        sys.exit(1)

    selected = REPORT_ORDER if args.report == "all" else (args.report,)
    for name in selected:
        if name in result.reports:
            print(result.reports[name])

    if args.dot:
        if result.research is None or result.research.best is None:
            custom_logger.warning("No optimal form to export; skipping DOT output")
        else:
            best = result.research.best
            tasks = build_task_graph(best.tree)
            save_dot(tasks, args.dot, highlight_tasks={task.id for task in tasks.values() if not task.is_load})
            custom_logger.info(f"Task graph of form #{best.index} written to {args.dot}")

    if result.failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
