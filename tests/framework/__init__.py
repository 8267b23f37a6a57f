"""
Framework Tests
===============

- test_tree.py            : node values, outline, pretty and canonical strings
- test_tree_utils.py      : path addressing, chain flattening, balanced trees
- test_tree_io.py         : JSON encoding and file round trip
- test_infrastructure.py  : OptimizationPipeline stages, config merge, debug dumps
- test_logging.py         : logger configuration and level switching
- test_reports.py         : text reports
- test_visualize.py       : task graph DOT export
"""
