import csv
import json
import numpy as np


class Metrics:
    def __init__(self):
        self.rows = []

    def append(
        self,
        gen,
        best_fitness,
        mean_fitness,
        best_cost,
        feasible=0,
        diversity=0,
    ):
        self.rows.append(
            (
                int(gen),
                float(best_fitness),
                float(mean_fitness),
                float(best_cost),
                int(feasible),
                int(diversity),
            )
        )

    def column(self, idx):
        return np.array([row[idx] for row in self.rows])

    def save_csv(self, path):
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(
                [
                    "generation",
                    "best_fitness",
                    "mean_fitness",
                    "best_cost",
                    "feasible",
                    "diversity",
                ]
            )
            for row in self.rows:
                w.writerow(list(row))


def _json_float(val):
    # JSON has no infinity literal
    val = float(val)
    return val if np.isfinite(val) else None


def save_metrics_json(path, metrics, result, params, *, extra=None):
    data = {
        "final_best_cost": _json_float(result["cost"]),
        "final_best_fitness": _json_float(result["best"]["fitness"]),
        "best_path": result["path"],
        "best_genes": [int(g) for g in result["best"]["genes"]],
        "generations_logged": len(metrics.rows),
        "params": params,
    }
    if extra:
        data.update(extra)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def save_path_csv(path, result, resource_names=None):
    resources = result["resources_along"]
    n_res = resources.shape[1] if resources.ndim == 2 else 0
    if resource_names is None:
        resource_names = [f"res_{i}" for i in range(n_res)]
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["step", "node", "cum_cost", *resource_names])
        if result["path"] is None:
            return
        for k, node in enumerate(result["path"]):
            w.writerow(
                [k, int(node), float(result["costs_along"][k])]
                + [float(x) for x in resources[k]]
            )
