"""Dataset and configuration helpers for the command-line glue layer.

Configuration files are YAML or JSON. Edge tables are CSV or Parquet with
``from``, ``to`` and ``cost`` columns; every other column, in table order, is
one resource dimension.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import yaml

from ..engine.errors import InvalidEdge

EDGE_KEY_COLUMNS = ("from", "to", "cost")


def load_config(path_cfg: Path) -> Dict:
    """Parse a GA run file.

    ``.json`` files are read with :mod:`json`, anything else (``.yaml``,
    ``.yml``) with PyYAML. A blank file is an empty run description.
    """

    path = Path(path_cfg)
    if not path.is_file():
        raise FileNotFoundError(path)

    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    if path.suffix.lower() == ".json":
        return json.loads(text)
    return yaml.safe_load(text) or {}


def _read_frame(path_like: Path) -> pd.DataFrame:
    """Return a Pandas ``DataFrame`` from CSV or Parquet input."""

    path = Path(path_like)
    if path.suffix.lower() in {".parquet", ".pq"}:
        df = pd.read_parquet(path)
    else:
        df = pd.read_csv(path)
    return df


def _node_column(df: pd.DataFrame, name: str, path_table: Path) -> np.ndarray:
    values = df[name].to_numpy(dtype=np.float64, copy=True)
    ids = values.astype(np.int64)
    bad = np.flatnonzero(values != ids)
    if bad.size:
        raise InvalidEdge(
            f"edge table {path_table} row {int(bad[0])} has non-integer '{name}' node {values[bad[0]]}"
        )
    return ids


def load_edges(path_table: Path) -> Tuple[List[Tuple[int, int, float, List[float]]], List[str]]:
    """Load an edge table into ``(edges, resource_names)``."""

    df = _read_frame(path_table)
    df.columns = [str(c).strip() for c in df.columns]
    if not set(EDGE_KEY_COLUMNS).issubset(df.columns):
        raise ValueError("edge table must contain 'from', 'to' and 'cost' columns")
    if df.empty:
        raise ValueError(f"empty table: {path_table}")

    resource_names = [c for c in df.columns if c not in EDGE_KEY_COLUMNS]
    if df.isna().any().any():
        raise InvalidEdge(f"edge table {path_table} has missing values")

    froms = _node_column(df, "from", path_table)
    tos = _node_column(df, "to", path_table)
    costs = df["cost"].to_numpy(dtype=np.float64, copy=True)
    if resource_names:
        res = df[resource_names].to_numpy(dtype=np.float64, copy=True)
    else:
        res = np.zeros((len(df.index), 0), dtype=np.float64)

    edges = [
        (int(froms[k]), int(tos[k]), float(costs[k]), res[k].tolist())
        for k in range(len(df.index))
    ]
    return edges, resource_names


def edges_from_records(records: Sequence) -> List[Tuple[int, int, float, List[float]]]:
    """Normalise inline edges given as ``[from, to, cost, [r0, r1, ...]]``
    lists or ``{from, to, cost, resources}`` mappings."""

    edges = []
    for k, rec in enumerate(records):
        if isinstance(rec, dict):
            try:
                u, v, cost = rec["from"], rec["to"], rec["cost"]
            except KeyError as exc:
                raise InvalidEdge(f"inline edge {k} is missing {exc}") from exc
            resources = rec.get("resources", [])
        else:
            if len(rec) != 4:
                raise InvalidEdge(f"inline edge {k} must be [from, to, cost, resources]")
            u, v, cost, resources = rec
        edges.append((int(u), int(v), float(cost), [float(x) for x in resources]))
    return edges


def infer_num_nodes(edges: Sequence, num_nodes: Optional[int] = None) -> int:
    if num_nodes is not None:
        return int(num_nodes)
    if not edges:
        return 0
    return 1 + max(max(int(u), int(v)) for u, v, _, _ in edges)


__all__ = [
    "load_config",
    "load_edges",
    "edges_from_records",
    "infer_num_nodes",
]
