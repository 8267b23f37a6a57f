import logging
import functools
import time

# Define Log Levels
DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR

LOG_FORMAT = "%(asctime)s - [%(levelname)s] - %(name)s - [%(filename)s:%(lineno)d] - %(message)s"


# Singleton logger setup
def get_logger(name="ExprOptimizer"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


logger = get_logger()


def set_log_level(level):
    logger.setLevel(level)


def _count_nodes(tree):
    from .tree_utils import count_nodes

    return count_nodes(tree.root)


def log_pass(func):
    """Aspect: Log a normalization pass run over a whole tree."""

    @functools.wraps(func)
    def wrapper(self, tree, *args, **kwargs):
        prefix = f"[{self.name}] "
        logger.debug(f"{prefix}Starting normalization pass...")
        original_node_count = _count_nodes(tree)
        start_time = time.time()

        result_tree = func(self, tree, *args, **kwargs)

        duration = time.time() - start_time
        logger.debug(
            f"{prefix}Pass finished in {duration:.3f}s. "
            f"Nodes: {original_node_count} -> {_count_nodes(result_tree)}"
        )
        return result_tree

    return wrapper


def trace_rewrite(func):
    """Aspect: Log how many candidates a single-step rewrite generator produced."""

    @functools.wraps(func)
    def wrapper(tree, *args, **kwargs):
        start_time = time.time()
        result = func(tree, *args, **kwargs)
        duration = (time.time() - start_time) * 1000

        # Only log at debug level when nothing applied
        if result:
            logger.debug(
                f"Rewriter {func.__name__} generated {len(result)} candidates ({duration:.2f}ms)"
            )
        else:
            logger.debug(f"Rewriter {func.__name__} found no candidates")
        return result

    return wrapper


def log_simulation(func):
    """Aspect: Log the outcome of a scheduling simulation (DEBUG level)."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        result = func(*args, **kwargs)
        duration = (time.time() - start_time) * 1000
        logger.debug(
            f"Simulated {len(result.schedule)} operations in {duration:.2f}ms: "
            f"Tp={result.tp} Speedup={result.speedup:.4f}"
        )
        return result

    return wrapper
