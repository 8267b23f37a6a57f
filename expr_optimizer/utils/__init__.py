from .tree_io import (
    build_tree,
    from_json_data,
    to_json_data,
    save_tree,
    load_tree,
)
from .tree_utils import (
    count_nodes,
    tree_height,
    map_children,
    node_at,
    replace_at,
    collect_chain,
    collect_left_chain,
    build_left_associative,
    build_balanced_tree,
)
from .logger import logger
from .visualize import export_to_dot, save_dot

__all__ = [
    # tree_io
    "build_tree",
    "from_json_data",
    "to_json_data",
    "save_tree",
    "load_tree",
    # tree_utils
    "count_nodes",
    "tree_height",
    "map_children",
    "node_at",
    "replace_at",
    "collect_chain",
    "collect_left_chain",
    "build_left_associative",
    "build_balanced_tree",
    # logger
    "logger",
    # visualize
    "export_to_dot",
    "save_dot",
]
