from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .loader import dump_routes, load_routes, parse_stats_file
from .model import RouteSizes, Thresholds
from .report import budget_violation, build_rows, render_rows, summarize


def _add_stats_args(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--stats", required=True, type=Path)
    cmd.add_argument("--build-dir", type=Path, default=Path(".next"))
    cmd.add_argument("--no-gzip", action="store_true")
    cmd.add_argument("-v", "--verbose", action="store_true")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bundle-size-report",
        description="Per-route bundle size report from Turbopack stats",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    report_cmd = subparsers.add_parser("report")
    _add_stats_args(report_cmd)
    baseline = report_cmd.add_mutually_exclusive_group()
    baseline.add_argument("--baseline", type=Path, default=None)
    baseline.add_argument("--baseline-stats", type=Path, default=None)
    report_cmd.add_argument("--minimum-change-threshold", type=int, default=0)
    report_cmd.add_argument("--budget-percent-increase-red", type=float, default=0.0)
    report_cmd.add_argument("--output", type=Path, default=None)
    report_cmd.add_argument("--snapshot-out", type=Path, default=None)
    report_cmd.add_argument("--fail-on-critical", action="store_true")

    snapshot_cmd = subparsers.add_parser("snapshot")
    _add_stats_args(snapshot_cmd)
    snapshot_cmd.add_argument("--output", required=True, type=Path)

    return parser


def _load_baseline(args: argparse.Namespace) -> RouteSizes:
    if args.baseline is not None:
        return load_routes(args.baseline)
    if args.baseline_stats is not None:
        return parse_stats_file(args.baseline_stats, calculate_gzip=False)
    return {}


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        current = parse_stats_file(
            args.stats,
            calculate_gzip=not args.no_gzip,
            build_dir=args.build_dir,
        )
        if args.command == "snapshot":
            dump_routes(current, args.output)
            print(json.dumps({"routes": len(current)}, sort_keys=True))
            return 0

        thresholds = Thresholds(
            minimum_change_threshold=args.minimum_change_threshold,
            budget_percent_increase_red=args.budget_percent_increase_red,
        )
        thresholds.validate()
        baseline = _load_baseline(args)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    rows = build_rows(current, baseline, thresholds)
    markdown = render_rows(rows)
    if args.snapshot_out is not None:
        dump_routes(current, args.snapshot_out)
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(markdown, encoding="utf-8")
        print(json.dumps(summarize(rows), sort_keys=True))
    else:
        print(markdown, end="")

    violates, message = budget_violation(rows, fail_on_critical=args.fail_on_critical)
    if violates:
        raise SystemExit(message)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
