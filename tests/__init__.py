"""
Expression Optimizer Test Suite
===============================

Layout:

tests/
├── framework/           # Core framework tests
│   ├── test_tree.py              # Node types, outline, pretty and canonical strings
│   ├── test_tree_utils.py        # Paths, chains, balanced construction
│   ├── test_tree_io.py           # JSON tree format
│   ├── test_infrastructure.py    # OptimizationPipeline and pass registry
│   ├── test_logging.py           # Logger setup and level control
│   ├── test_reports.py           # Report text
│   └── test_visualize.py         # DOT export
│
├── transforms/          # Normalization passes and rewrite laws
│   ├── scalar/                   # compute, transform, fold
│   ├── combine/                  # balance
│   └── rewrite/                  # distributive, associative
│
├── schedule/            # Task graph, scheduler, research, configuration
├── test_equivalence.py  # Equivalent form search
├── test_cli.py          # Command line entry point
└── test_edge_cases.py   # Cross-module corner cases

Running tests:
    python -m pytest tests/ -v
    python -m pytest tests/transforms/ -v
"""
