"""pelletgrab/scenarios/compare — Diff a run against a saved baseline.

Exit codes: 0 when nothing got worse, 1 when a scenario went from PASS to
FAIL, 2 when a directional metric regressed past the threshold.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pelletgrab.scenarios.runner import ScenarioOutcome

# Metrics with a better direction; everything else is shown but never flagged
METRIC_DIRECTION: dict[str, str] = {
    "steps": "lower",
    "total_reward": "higher",
    "path_length": "lower",
}


def _gain(metric: str, old_val: float, new_val: float) -> float | None:
    """Relative change toward the better direction, or None if undirected."""
    direction = METRIC_DIRECTION.get(metric)
    if direction is None or old_val == 0:
        return None
    change = (new_val - old_val) / abs(old_val)
    return change if direction == "higher" else -change


def is_regression(
    metric: str, old_val: float, new_val: float, threshold: float = 0.05,
) -> bool:
    gain = _gain(metric, old_val, new_val)
    return gain is not None and gain < -threshold


def _is_number(val: object) -> bool:
    return isinstance(val, (int, float)) and not isinstance(val, bool)


def _metric_lines(
    current: dict, baseline: dict, threshold: float,
) -> tuple[list[str], bool]:
    lines: list[str] = []
    regressed = False
    for key in sorted(set(current) & set(baseline)):
        old_val, new_val = baseline[key], current[key]
        if old_val == new_val or isinstance(old_val, list) or isinstance(new_val, list):
            continue
        note = ""
        if _is_number(old_val) and _is_number(new_val):
            gain = _gain(key, old_val, new_val)
            if gain is not None and gain < -threshold:
                note = "  ⚠ regression"
                regressed = True
            elif gain is not None and gain > threshold:
                note = "  ✓ improved"
        lines.append(f"  {key:<14s} {old_val} → {new_val}{note}")
    return lines, regressed


def compare_results(
    current: list[ScenarioOutcome],
    baseline_path: Path | str,
    threshold: float = 0.05,
) -> int:
    """Print what changed against *baseline_path* and return an exit code."""
    entries = json.loads(Path(baseline_path).read_text())
    baseline = {e["name"]: e for e in entries}
    flipped = regressed = False

    for outcome in sorted(current, key=lambda o: o.name):
        base = baseline.pop(outcome.name, None)
        if base is None:
            print(f"{outcome.name}: NEW (not in baseline)")
            continue

        lines: list[str] = []
        if base["success"] != outcome.success:
            if base["success"]:
                lines.append("  status         PASS → FAIL  (REGRESSION)")
                flipped = True
            else:
                lines.append("  status         FAIL → PASS  (fixed)")
        old_event = base.get("terminal_event")
        if old_event is not None and old_event != outcome.terminal_event:
            lines.append(f"  event          {old_event} → {outcome.terminal_event}")
        metric_lines, worse = _metric_lines(
            outcome.metrics, base.get("metrics", {}), threshold,
        )
        regressed = regressed or worse
        lines.extend(metric_lines)

        if lines:
            print(f"{outcome.name}:")
            print("\n".join(lines))

    for name in sorted(baseline):
        print(f"{name}: MISSING (in baseline but not in current run)")

    if flipped:
        return 1
    if regressed:
        return 2
    return 0
