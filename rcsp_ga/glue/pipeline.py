"""Command line pipeline orchestrating graph loading and the GA run."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np

from ..config.config import DEFAULTS
from ..config.enums import M_BEST_FIT, M_GEN, M_MEAN_FIT
from ..data.generate_data import EXAMPLE_LIMITS, example_edges, generate_data
from ..engine.dimension import as_limits
from ..engine.ga import run_ga
from ..engine.graph import build_graph
from ..logging.metrics import Metrics, save_metrics_json, save_path_csv
from .io import edges_from_records, infer_num_nodes, load_config, load_edges


def _table_path(base: Path, relative: str) -> Path:
    # edge tables are located relative to the config file
    return (base / relative).resolve()


def assemble_graph(cfg: Dict[str, Any], base_dir: Path) -> Dict[str, Any]:
    """Build the graph and resource limits following the configuration contract.

    ``graph`` accepts one of ``example: true`` (built-in demo instance),
    ``generate: {n_nodes, n_resources, density, seed}`` or ``edges`` given
    as a CSV/Parquet path or an inline list. ``resource_limits`` may be
    omitted for the example and generated instances.
    """

    graph_cfg = cfg.get("graph", {}) or {}
    resource_names = None
    limits = cfg.get("resource_limits")

    if graph_cfg.get("example", False):
        edges = example_edges()
        num_nodes = infer_num_nodes(edges, graph_cfg.get("num_nodes"))
        if limits is None:
            limits = list(EXAMPLE_LIMITS)
    elif "generate" in graph_cfg:
        gen = generate_data(**graph_cfg["generate"])
        edges = gen["edges"]
        num_nodes = gen["num_nodes"]
        if limits is None:
            limits = gen["resource_limits"]
    elif "edges" in graph_cfg:
        source = graph_cfg["edges"]
        if isinstance(source, str):
            edges, resource_names = load_edges(_table_path(base_dir, source))
        else:
            edges = edges_from_records(source)
        num_nodes = infer_num_nodes(edges, graph_cfg.get("num_nodes"))
    else:
        raise ValueError("graph.example, graph.generate or graph.edges must be provided")

    if limits is None:
        raise ValueError("resource_limits must be provided")

    graph = build_graph(num_nodes, edges, n_resources=graph_cfg.get("n_resources"))
    limits = as_limits(graph, limits)
    if resource_names is None:
        resource_names = [f"res_{i}" for i in range(graph.n_resources)]

    return {
        "graph": graph,
        "resource_limits": limits,
        "resource_names": resource_names,
    }


def build_params(cfg: Dict[str, Any]) -> Dict[str, Any]:
    params = DEFAULTS.copy()
    params.update(cfg.get("params", {}) or {})
    if "generations" in cfg:
        params["generations"] = int(cfg["generations"])
    if "population_size" in cfg:
        params["population_size"] = int(cfg["population_size"])
    if "log_period" in cfg:
        params["log_period"] = int(cfg["log_period"])
    return params


def run_pipeline(
    cfg: Dict[str, Any],
    *,
    base_dir: Path,
    outdir: Path,
    export_trace: bool = False,
) -> Dict[str, Any]:
    """Execute the GA according to ``cfg`` and return the best solution."""

    outdir.mkdir(parents=True, exist_ok=True)

    seed = int(cfg.get("seed", 0))
    rng = np.random.default_rng(seed)

    data = assemble_graph(cfg, base_dir)
    graph = data["graph"]
    params = build_params(cfg)
    metrics = Metrics()

    result = run_ga(graph, data["resource_limits"], params, metrics, rng)

    meta = {
        "seed": seed,
        "config_version": cfg.get("version", "dev"),
        "num_nodes": graph.num_nodes,
        "num_edges": graph.n_edges,
        "resource_limits": data["resource_limits"].tolist(),
        "feasible": result["path"] is not None,
        "generations_completed": result["meta"]["generations_completed"],
        "stopped_early": result["meta"]["stopped_early"],
        "invalid_chromosomes": result["meta"]["invalid_chromosomes"],
    }

    if export_trace:
        trace_path = outdir / "trace.npz"
        np.savez(
            trace_path,
            generation=metrics.column(M_GEN).astype(np.int32),
            best_fitness=metrics.column(M_BEST_FIT),
            mean_fitness=metrics.column(M_MEAN_FIT),
            population_genes=np.vstack([c["genes"] for c in result["population"]]),
            population_fitness=np.array([c["fitness"] for c in result["population"]]),
        )
        meta["trace"] = str(trace_path)

    save_metrics_json(outdir / "metrics.json", metrics, result, params, extra=meta)
    save_path_csv(outdir / "path.csv", result, data["resource_names"])
    metrics.save_csv(outdir / "metrics_log.csv")

    return {
        "result": result,
        "metrics": metrics,
        "params": params,
        "meta": meta,
    }


def run_config_file(
    config_path: Path,
    outdir: Path,
    *,
    seed_override: Optional[int] = None,
    export_trace: bool = False,
) -> Dict[str, Any]:
    """Run the GA described by a YAML/JSON file; edge tables resolve next to it."""

    cfg = load_config(config_path)
    if seed_override is not None:
        cfg["seed"] = int(seed_override)

    config_dir = Path(config_path).resolve().parent
    return run_pipeline(cfg, base_dir=config_dir, outdir=outdir, export_trace=export_trace)


def build_arg_parser():
    import argparse

    ap = argparse.ArgumentParser(
        prog="rcsp-ga",
        description="Search a resource-constrained shortest path with a genetic algorithm",
    )
    ap.add_argument("--config", required=True, help="Run file (graph, resource_limits, params)")
    ap.add_argument("--outdir", required=True, help="Directory for metrics.json, path.csv and logs")
    ap.add_argument("--seed", type=int, default=None, help="Replace the seed from the run file")
    ap.add_argument(
        "--trace",
        action="store_true",
        help="Also write the fitness curve and final population to trace.npz",
    )
    return ap


def summarize(run: Dict[str, Any]) -> Dict[str, Any]:
    result = run["result"]
    if result["path"] is None:
        summary = {"status": "no feasible path found under these constraints"}
    else:
        summary = {
            "status": "feasible",
            "path": result["path"],
            "cost": float(result["cost"]),
            "resources_used": result["resources_along"][-1].tolist(),
        }
    summary["generations"] = run["meta"]["generations_completed"]
    return summary


def run_cli(argv: Optional[list[str]] = None) -> Dict[str, Any]:
    """Parse ``argv``, run the GA and print the JSON summary. Returns the run."""

    args = build_arg_parser().parse_args(argv)
    run = run_config_file(
        Path(args.config).resolve(),
        Path(args.outdir).resolve(),
        seed_override=args.seed,
        export_trace=args.trace,
    )

    print("\n[DONE]")
    print(json.dumps(summarize(run), indent=2))
    return run


def main(argv: Optional[list[str]] = None) -> int:
    # console-script entry point: the return value becomes the exit status
    run_cli(argv)
    return 0


__all__ = [
    "assemble_graph",
    "build_params",
    "build_arg_parser",
    "main",
    "run_cli",
    "run_config_file",
    "run_pipeline",
    "summarize",
]
