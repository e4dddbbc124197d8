"""pelletgrab/scenarios/runner — Run a ScenarioDef through PelletGrabberEnv.

The runner only uses the env's public reset/step contract, so a scenario
exercises exactly what a trainer would.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

import numpy as np

from pelletgrab.agents.registry import resolve_agent
from pelletgrab.env import PelletGrabberEnv
from pelletgrab.observation import agent_x
from pelletgrab.scenarios.conditions import STUCK_TOLERANCE, STUCK_WINDOW, check_conditions
from pelletgrab.scenarios.loader import ScenarioDef

logger = logging.getLogger(__name__)


@dataclass
class StepRecord:
    """What one env.step produced."""

    step: int
    x: float
    action: float
    reward: float
    event: str
    done: bool


@dataclass
class ScenarioOutcome:
    name: str
    success: bool
    reason: str
    steps_elapsed: int
    target_slot: str
    terminal_event: str
    total_reward: float
    metrics: dict[str, Any]
    trajectory: list[StepRecord]
    wall_time_ms: float


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------

def _xs(trajectory: list[StepRecord], start_x: float) -> list[float]:
    return [start_x, *(r.x for r in trajectory)]


def _stuck_at(trajectory: list[StepRecord], start_x: float) -> float | None:
    """Final x if the last STUCK_WINDOW steps barely moved, else None."""
    if not trajectory:
        return None
    xs = [r.x for r in trajectory[-STUCK_WINDOW:]]
    if max(xs) - min(xs) < STUCK_TOLERANCE:
        return xs[-1]
    return None


# (trajectory, start_x) -> value
METRICS: dict[str, Callable[[list[StepRecord], float], Any]] = {
    "steps": lambda traj, x0: len(traj),
    "total_reward": lambda traj, x0: sum(r.reward for r in traj),
    "final_x": lambda traj, x0: traj[-1].x if traj else x0,
    "min_x": lambda traj, x0: min(_xs(traj, x0)),
    "max_x": lambda traj, x0: max(_xs(traj, x0)),
    "terminal_event": lambda traj, x0: traj[-1].event if traj else "none",
    "path_length": lambda traj, x0: float(np.abs(np.diff(_xs(traj, x0))).sum()),
    "stuck_at": _stuck_at,
    "x_profile": lambda traj, x0: [r.x for r in traj],
}


def compute_metrics(
    requested: list[str], trajectory: list[StepRecord], start_x: float,
) -> dict[str, Any]:
    unknown = [name for name in requested if name not in METRICS]
    if unknown:
        raise ValueError(f"Unknown metric: {unknown[0]!r}. Valid metrics: {sorted(METRICS)}")
    return {name: METRICS[name](trajectory, start_x) for name in requested}


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

def run_scenario(scenario_def: ScenarioDef) -> ScenarioOutcome:
    """Play one episode until a condition fires, the episode ends or steps run out.

    A finished episode accepts no further steps, so the episode ending
    stops the run even when no condition fired; the reason then names the
    terminal event.
    """
    env = PelletGrabberEnv(config=scenario_def.config)
    options = None
    if scenario_def.target_slot is not None:
        options = {"target_slot": scenario_def.target_slot}
    obs, info = env.reset(seed=scenario_def.seed, options=options)
    start_x = agent_x(obs)

    agent = resolve_agent(scenario_def.agent, scenario_def.agent_params)
    agent.reset()

    trajectory: list[StepRecord] = []
    success, reason = None, None
    done = False
    started = time.perf_counter()

    step = 0
    while step < scenario_def.max_steps and success is None and not done:
        action = float(agent.act(obs))
        obs, reward, terminated, truncated, info = env.step([action])
        done = terminated or truncated
        trajectory.append(
            StepRecord(step, info["agent_x"], action, reward, info["event"], done)
        )
        success, reason = check_conditions(
            scenario_def.success, scenario_def.failure, trajectory, step,
            scenario_def.max_steps,
        )
        step += 1

    wall_time_ms = (time.perf_counter() - started) * 1000
    if reason is None:
        reason = f"episode_ended:{info['event']}" if done else "timed_out"
    logger.debug(
        "scenario %s: %s after %d steps", scenario_def.name, reason, len(trajectory),
    )

    return ScenarioOutcome(
        name=scenario_def.name,
        success=bool(success),
        reason=reason,
        steps_elapsed=len(trajectory),
        target_slot=info["target_slot"],
        terminal_event=trajectory[-1].event if trajectory else "none",
        total_reward=sum(r.reward for r in trajectory),
        metrics=compute_metrics(scenario_def.metrics, trajectory, start_x),
        trajectory=trajectory,
        wall_time_ms=wall_time_ms,
    )
