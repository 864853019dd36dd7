from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import parse_config_file
from .processing import run_pipeline


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oni-index",
        description="Compute the Oceanic Nino Index from gridded sea-surface temperature.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="Path to plain-text configuration file (key=value per line).",
    )
    parser.add_argument("--no-plots", action="store_true", help="Skip plotting.")
    parser.add_argument("--show-plots", action="store_true", help="Display plots interactively.")
    parser.add_argument(
        "--unweighted",
        action="store_true",
        help="Use the plain area mean instead of the cos(lat) weighted mean.",
    )
    parser.add_argument("--window", type=int, help="Running-mean window (odd, default 3).")
    parser.add_argument("--quiet", action="store_true", help="Only print the final summary.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    config = parse_config_file(args.config)
    if args.unweighted:
        config.weighted = False
    if args.window is not None:
        config.window = args.window

    results = run_pipeline(
        config,
        make_plots=not args.no_plots,
        show_plots=args.show_plots,
        verbose=not args.quiet,
    )

    oni = results["oni"]
    table = results["table"]

    summary_lines = [
        f"Loaded data shape: {results['data_shape']}",
        f"Monthly climatology entries: {results['climatology'].sizes['month']}",
        f"ONI length: {oni.sizes['time']}",
    ]
    if len(table):
        latest = table.iloc[-1]
        summary_lines.append(
            f"Latest ONI ({latest['season']} {latest['year']}): "
            f"{latest['oni']:+.2f} [{latest['phase']}, {latest['intensity']}]"
        )
    for key, label in (
        ("area_plot", "Area-mean plot"),
        ("climatology_plot", "Climatology plot"),
        ("oni_plot", "ONI plot"),
    ):
        if results.get(key):
            summary_lines.append(f"{label} saved to: {results[key]}")

    print("\n".join(summary_lines))
    return 0


if __name__ == "__main__":
    sys.exit(main())
