import argparse
import logging

from heatcore.analysis import plot_snapshot, result_summary, save_summary
from heatcore.configs import HeatConfig
from heatcore.logging_config import setup_logging
from heatcore.presets import PRESETS
from heatcore.profiler import Profiler
from heatcore.sampler import run


def run_heat(args):
    cfg = HeatConfig.with_defaults(
        args.dim,
        n=args.n,
        alpha=args.alpha,
        dt=args.dt,
        t_end=args.t_end,
        initial=args.initial,
        max_snapshots=args.max_snapshots,
        backend=args.backend,
        precision=args.precision,
    )
    print(
        f"Running {cfg.dim}D heat equation | Initial: {cfg.initial.value} | "
        f"N: {cfg.n} | Backend: {cfg.backend}"
    )

    with Profiler(f"heat{cfg.dim}d_{cfg.backend}") as p:
        result = run(cfg)

    print(
        f"Completed {result.steps} steps of dt={result.dt:.6g} "
        f"in {p.duration:.4f} seconds"
    )
    print(f"Recorded {len(result.snapshots)} snapshots up to t={result.times[-1]:.6g}")

    summary = result_summary(result, duration=p.duration)
    if "performance_metric" in summary:
        print(
            f"Performance: {summary['performance_metric']:.2f} "
            f"{summary['performance_unit']}"
        )

    if args.output_json:
        save_summary(summary, args.output_json)
        print(f"Results saved to {args.output_json}")

    if args.plot:
        plot_snapshot(result, len(result.snapshots) - 1, args.plot)
        print(f"Final snapshot plot saved to {args.plot}")

    return result


def main(argv=None):
    presets = sorted({p.value for enum in PRESETS.values() for p in enum})

    parser = argparse.ArgumentParser(
        description="Explicit finite-difference heat solver"
    )
    parser.add_argument(
        "--dim", type=int, required=True, choices=[1, 2, 3], help="Spatial dimensions"
    )
    parser.add_argument("--n", type=int, help="Interior grid points per axis")
    parser.add_argument("--alpha", type=float, help="Diffusivity")
    parser.add_argument("--dt", type=float, help="Requested time step")
    parser.add_argument("--t-end", type=float, help="Total simulated time")
    parser.add_argument(
        "--initial", type=str, choices=presets, help="Initial condition preset"
    )
    parser.add_argument(
        "--max-snapshots", type=int, help="Snapshot cap (default depends on --dim)"
    )
    parser.add_argument(
        "--backend",
        type=str,
        default="numpy",
        choices=["numpy", "jax"],
        help="Stepper backend",
    )
    parser.add_argument(
        "--precision",
        type=str,
        default="f64",
        choices=["f32", "f64"],
        help="Precision (f32 or f64)",
    )
    parser.add_argument(
        "--output-json", type=str, help="Path to save the run summary as JSON"
    )
    parser.add_argument("--plot", type=str, help="Path to save a final snapshot plot")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    args = parser.parse_args(argv)
    setup_logging(getattr(logging, args.log_level))

    return run_heat(args)


if __name__ == "__main__":
    main()
