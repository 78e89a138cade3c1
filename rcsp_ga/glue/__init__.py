"""Glue helpers exposed for CLI and integration harnesses."""

from .io import (
    edges_from_records,
    infer_num_nodes,
    load_config,
    load_edges,
)
from .pipeline import (
    assemble_graph,
    build_arg_parser,
    build_params,
    main,
    run_cli,
    run_config_file,
    run_pipeline,
    summarize,
)

__all__ = [
    "assemble_graph",
    "build_arg_parser",
    "build_params",
    "edges_from_records",
    "infer_num_nodes",
    "run_cli",
    "run_config_file",
    "summarize",
    "load_config",
    "load_edges",
    "main",
    "run_pipeline",
]
