"""pelletgrab/scenarios/output — Result lines, event tallies and JSON export.

Each run is reported by how its episode ended: the terminal event, the
reward it earned and the slot the pellet was in.
"""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING

from pelletgrab.rewards import TerminalEvent

if TYPE_CHECKING:
    from pelletgrab.scenarios.runner import ScenarioOutcome


def format_outcome(outcome: ScenarioOutcome) -> str:
    """One result line, e.g. ``PASS  name  right  pellet_reached  +2.0  82 steps``."""
    status = "PASS" if outcome.success else "FAIL"
    line = (
        f"{status}  {outcome.name:<25s} {outcome.target_slot:<5s}  "
        f"{outcome.terminal_event:<14s} {outcome.total_reward:+5.1f}  "
        f"{outcome.steps_elapsed:>4d} steps"
    )
    if outcome.reason != outcome.terminal_event:
        line += f"  ({outcome.reason})"
    return line


def print_outcome(outcome: ScenarioOutcome) -> None:
    print(format_outcome(outcome))


def tally_events(results: list[ScenarioOutcome]) -> Counter:
    """Count runs per terminal event; every event is present, zeros included."""
    counts = Counter({event.value: 0 for event in TerminalEvent})
    counts.update(r.terminal_event for r in results)
    return counts


def print_summary(results: list[ScenarioOutcome]) -> None:
    passed = sum(1 for r in results if r.success)
    counts = tally_events(results)
    print(f"\n{len(results)} scenarios: {passed} passed, {len(results) - passed} failed")
    print(
        f"pellet {counts['pellet_reached']}  wall {counts['wall_hit']}  "
        f"step limit {counts['step_limit']}  unfinished {counts['none']}"
    )


def save_results(
    results: list[ScenarioOutcome],
    path: Path | str,
    include_trajectory: bool = False,
) -> None:
    """Write outcomes as a JSON list; trajectories only on request."""
    data = []
    for outcome in results:
        entry = asdict(outcome)
        if not include_trajectory:
            del entry["trajectory"]
        data.append(entry)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n")
