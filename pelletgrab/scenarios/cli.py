"""pelletgrab/scenarios/cli — Run scenario files from the command line.

Usage::

    pelletgrab-scenarios scenarios/seek_pellet_left.yaml
    pelletgrab-scenarios --all --agent hold_right
    pelletgrab-scenarios --all -o results/run.json --trajectory
    pelletgrab-scenarios --all --compare results/run.json

Exits 0 when every scenario passes, 1 otherwise. With ``--compare`` the
exit code is the comparison's instead.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pelletgrab.scenarios.compare import compare_results
from pelletgrab.scenarios.loader import SCENARIO_DIR, load_scenarios
from pelletgrab.scenarios.output import print_outcome, print_summary, save_results
from pelletgrab.scenarios.runner import run_scenario


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pelletgrab-scenarios", description="Run Pellet Grabber scenarios",
    )
    parser.add_argument("scenarios", nargs="*", type=Path, help="scenario YAML files")
    parser.add_argument(
        "--all", action="store_true", help="run every scenario in --dir",
    )
    parser.add_argument(
        "--dir", type=Path, default=SCENARIO_DIR,
        help=f"scenario directory for --all (default: {SCENARIO_DIR})",
    )
    parser.add_argument("--agent", help="play every scenario with this agent")
    parser.add_argument("-o", "--output", help="write results JSON here")
    parser.add_argument(
        "--trajectory", action="store_true", help="keep per-step records in the JSON",
    )
    parser.add_argument("--compare", metavar="BASELINE", help="diff against a results JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.scenarios and not args.all:
        parser.error("give scenario files or --all")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    results = []
    for scenario_def in load_scenarios(args.scenarios, run_all=args.all, base=args.dir):
        if args.agent:
            scenario_def.agent = args.agent
            scenario_def.agent_params = None
        outcome = run_scenario(scenario_def)
        print_outcome(outcome)
        results.append(outcome)
    print_summary(results)

    if args.output:
        save_results(results, args.output, include_trajectory=args.trajectory)
    if args.compare:
        sys.exit(compare_results(results, args.compare))
    sys.exit(0 if all(r.success for r in results) else 1)


if __name__ == "__main__":
    main()
