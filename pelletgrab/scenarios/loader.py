"""pelletgrab/scenarios/loader — ScenarioDef and YAML loading.

A scenario file pins everything an episode depends on: the agent, the
target slot or the seed that samples it, and any EnvConfig overrides.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from pelletgrab.config import EnvConfig
from pelletgrab.scenarios.conditions import FailureCondition, SuccessCondition
from pelletgrab.world import TargetSlot, parse_target_slot

SCENARIO_DIR = Path("scenarios")


@dataclass
class ScenarioDef:
    name: str
    description: str
    agent: str
    agent_params: dict | None
    max_steps: int
    success: SuccessCondition
    failure: FailureCondition
    metrics: list[str]
    seed: int | None = None
    target_slot: TargetSlot | None = None
    config: EnvConfig | None = None

    @classmethod
    def from_dict(cls, data: dict) -> ScenarioDef:
        seed = data.get("seed")
        config = data.get("config")
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            agent=data["agent"],
            agent_params=data.get("agent_params"),
            max_steps=int(data["max_steps"]),
            success=SuccessCondition.from_dict(data["success"]),
            failure=FailureCondition.from_dict(data["failure"]),
            metrics=list(data.get("metrics", [])),
            seed=None if seed is None else int(seed),
            target_slot=parse_target_slot(data.get("target_slot")),
            config=None if config is None else EnvConfig.from_dict(config),
        )


def load_scenario(path: Path) -> ScenarioDef:
    with open(path) as f:
        return ScenarioDef.from_dict(yaml.safe_load(f))


def load_scenarios(
    paths: list[Path] | None = None,
    run_all: bool = False,
    base: Path = SCENARIO_DIR,
) -> list[ScenarioDef]:
    """Load *paths*, or every ``*.yaml`` under *base* when *run_all* is set."""
    if run_all:
        paths = sorted(base.glob("*.yaml"))
    return [load_scenario(p) for p in paths or []]
