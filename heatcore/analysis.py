import argparse
import glob
import json
import logging
import os
from datetime import datetime, timezone

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from heatcore.result import HeatResult, as_grid, center_slice, sup_norm_history

logger = logging.getLogger(__name__)


def result_summary(result: HeatResult, duration=None):
    cfg = result.config
    summary = {
        "dim": result.dim,
        "n": result.n,
        "grid_size": result.grid_size,
        "h": result.h,
        "steps": result.steps,
        "dt": result.dt,
        "num_snapshots": len(result.snapshots),
        "times": list(result.times),
        "sup_norm": sup_norm_history(result),
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }
    if cfg is not None:
        summary.update(
            {
                "alpha": cfg.alpha,
                "requested_dt": cfg.dt,
                "t_end": cfg.t_end,
                "initial": cfg.initial.value,
                "backend": cfg.backend,
                "precision": cfg.precision,
                "max_snapshots": cfg.max_snapshots,
            }
        )
    if duration is not None:
        summary["duration"] = duration
        if duration > 0:
            # Million interior point updates per second
            points = result.n**result.dim
            summary["performance_metric"] = (points * result.steps / duration) / 1e6
            summary["performance_unit"] = "Mpts/s"
    return summary


def save_summary(summary, path):
    with open(path, "w") as f:
        json.dump(summary, f, indent=4)


def load_runs(directory="results"):
    """
    Search for all run summary JSON files under ``directory``.
    """
    runs = []
    pattern = os.path.join(directory, "**/*.json")
    for path in sorted(glob.glob(pattern, recursive=True)):
        try:
            with open(path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Skipping unreadable summary %s: %s", path, e)
            continue
        if isinstance(data, dict) and "times" in data and "sup_norm" in data:
            runs.append(data)
    return runs


def filter_runs(runs, dim=None, initial=None, backend=None):
    filtered = runs
    if dim:
        filtered = [r for r in filtered if r.get("dim") == dim]
    if initial:
        filtered = [r for r in filtered if r.get("initial") == initial]
    if backend:
        filtered = [r for r in filtered if r.get("backend") == backend]
    return filtered


def plot_decay(runs, output_path):
    if not runs:
        logger.warning("No runs to plot")
        return None

    fig = plt.figure(figsize=(10, 6))
    for r in sorted(runs, key=lambda x: (x.get("dim", 0), x.get("n", 0))):
        label = f"{r.get('dim')}D {r.get('initial', '?')} (N={r.get('n')})"
        plt.plot(r["times"], r["sup_norm"], "-", label=label, alpha=0.8)

    plt.yscale("log")
    plt.xlabel("Time")
    plt.ylabel("max |u|")
    plt.title("Heat equation decay")
    plt.legend(loc="upper right")
    plt.grid(True, which="both", ls="--", alpha=0.5)
    plt.tight_layout()
    plt.savefig(output_path)
    plt.close(fig)
    logger.info("Saved decay plot to %s", output_path)
    return output_path


def plot_snapshot(result: HeatResult, snapshot_index, output_path):
    t = result.times[snapshot_index]
    fig = plt.figure(figsize=(7, 6))

    match result.dim:
        case 1:
            x = [i * result.h for i in range(result.grid_size)]
            plt.plot(x, result.snapshots[snapshot_index], "-")
            plt.xlabel("x")
            plt.ylabel("u")
        case 2:
            plt.imshow(as_grid(result, snapshot_index), origin="lower", cmap="inferno")
            plt.colorbar(label="u")
        case 3:
            plt.imshow(
                center_slice(result, snapshot_index), origin="lower", cmap="inferno"
            )
            plt.colorbar(label="u (centre slice)")

    plt.title(f"{result.dim}D heat equation, t = {t:.4f}")
    plt.tight_layout()
    plt.savefig(output_path)
    plt.close(fig)
    logger.info("Saved snapshot plot to %s", output_path)
    return output_path


def main():
    parser = argparse.ArgumentParser(description="Heat run decay analysis CLI")
    parser.add_argument(
        "--dir", type=str, default="results", help="Directory containing JSON results"
    )
    parser.add_argument(
        "--output", type=str, default="decay.png", help="Output image filename"
    )
    parser.add_argument(
        "--dim", type=int, choices=[1, 2, 3], help="Filter by dimension"
    )
    parser.add_argument("--initial", type=str, help="Filter by initial condition")

    args = parser.parse_args()

    runs = filter_runs(load_runs(args.dir), dim=args.dim, initial=args.initial)
    print(f"Loaded {len(runs)} run summaries from {args.dir}")

    if not runs:
        return

    plot_decay(runs, args.output)
    print(f"Saved plot to {args.output}")


if __name__ == "__main__":
    main()
