"""Tests for pelletgrab.scenarios — YAML format, loader, conditions, runner, output, compare, CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from pelletgrab.config import EnvConfig
from pelletgrab.errors import ConfigurationError
from pelletgrab.scenarios import (
    VALID_FAILURE_TYPES,
    VALID_SUCCESS_TYPES,
    FailureCondition,
    ScenarioDef,
    ScenarioOutcome,
    StepRecord,
    SuccessCondition,
    check_conditions,
    compare_results,
    format_outcome,
    load_scenario,
    load_scenarios,
    print_outcome,
    print_summary,
    run_scenario,
    save_results,
    tally_events,
)
from pelletgrab.scenarios.cli import main as cli_main
from pelletgrab.scenarios.compare import METRIC_DIRECTION, is_regression
from pelletgrab.scenarios.runner import METRICS, compute_metrics
from pelletgrab.world import TargetSlot

SCENARIOS_DIR = Path(__file__).resolve().parent.parent / "scenarios"

# How each shipped scenario file should end: (terminal event, episode reward)
EXPECTED_ENDINGS = {
    "hold_left_hits_wall": ("wall_hit", -1.0),
    "hold_right_pellet_right": ("pellet_reached", 2.0),
    "idle_step_cap": ("step_limit", 0.0),
    "scripted_overshoot": ("pellet_reached", 2.0),
    "seek_pellet_left": ("pellet_reached", 2.0),
    "seek_pellet_random": ("pellet_reached", 2.0),
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _write_yaml(tmp_path: Path, name: str, data: dict) -> Path:
    p = tmp_path / f"{name}.yaml"
    p.write_text(yaml.dump(data))
    return p


def _minimal_scenario(**overrides) -> dict:
    """Return a minimal valid scenario dict, with optional overrides."""
    base = {
        "name": "test_scenario",
        "description": "A test scenario",
        "agent": "hold_right",
        "max_steps": 200,
        "target_slot": "right",
        "success": {"type": "pellet_reached"},
        "failure": {"type": "wall_hit"},
        "metrics": ["steps"],
    }
    base.update(overrides)
    return base


def _record(step: int, x: float, reward: float = 0.0, event: str = "none") -> StepRecord:
    return StepRecord(
        step=step, x=x, action=0.0, reward=reward, event=event, done=event != "none",
    )


def _outcome(
    name: str,
    success: bool = True,
    event: str = "pellet_reached",
    reward: float = 2.0,
    **metrics,
) -> ScenarioOutcome:
    return ScenarioOutcome(
        name=name,
        success=success,
        reason=event if success else "wall_hit",
        steps_elapsed=82,
        target_slot="right",
        terminal_event=event,
        total_reward=reward,
        metrics=metrics,
        trajectory=[_record(0, 0.04)],
        wall_time_ms=1.5,
    )


def _write_baseline(tmp_path: Path, entries: list[dict]) -> Path:
    p = tmp_path / "baseline.json"
    p.write_text(json.dumps(entries))
    return p


# ---------------------------------------------------------------------------
# Real scenario files
# ---------------------------------------------------------------------------

class TestLoadRealScenarios:
    def test_all_yaml_files_parse(self):
        paths = sorted(SCENARIOS_DIR.glob("*.yaml"))
        assert paths
        for p in paths:
            s = load_scenario(p)
            assert s.name == p.stem

    def test_load_scenarios_run_all(self):
        defs = load_scenarios(run_all=True, base=SCENARIOS_DIR)
        assert len(defs) == len(list(SCENARIOS_DIR.glob("*.yaml")))

    def test_load_scenarios_explicit_paths(self):
        p = SCENARIOS_DIR / "seek_pellet_left.yaml"
        defs = load_scenarios(paths=[p])
        assert [d.name for d in defs] == ["seek_pellet_left"]
        assert defs[0].target_slot is TargetSlot.LEFT
        assert defs[0].failure.type == "any"

    def test_idle_scenario_has_config(self):
        s = load_scenario(SCENARIOS_DIR / "idle_step_cap.yaml")
        assert s.config == EnvConfig(max_steps=100)
        assert s.seed == 3

    def test_every_real_scenario_passes(self):
        for s in load_scenarios(run_all=True, base=SCENARIOS_DIR):
            outcome = run_scenario(s)
            assert outcome.success, f"{s.name}: {outcome.reason}"

    @pytest.mark.parametrize("name, event, reward", [
        (name, event, reward) for name, (event, reward) in sorted(EXPECTED_ENDINGS.items())
    ])
    def test_real_scenario_terminal_event(self, name, event, reward):
        outcome = run_scenario(load_scenario(SCENARIOS_DIR / f"{name}.yaml"))
        assert outcome.terminal_event == event
        assert outcome.total_reward == reward
        assert outcome.trajectory[-1].done

    def test_every_scenario_file_has_an_expected_ending(self):
        assert {p.stem for p in SCENARIOS_DIR.glob("*.yaml")} == set(EXPECTED_ENDINGS)

    def test_wall_scenario_passes_on_contact_not_position(self):
        outcome = run_scenario(load_scenario(SCENARIOS_DIR / "hold_left_hits_wall.yaml"))
        assert outcome.success
        assert outcome.reason == "wall_hit"
        assert outcome.trajectory[-1].x < -4.25


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

class TestLoader:
    def test_minimal(self, tmp_path):
        s = load_scenario(_write_yaml(tmp_path, "sc", _minimal_scenario()))
        assert isinstance(s, ScenarioDef)
        assert s.agent == "hold_right"
        assert s.max_steps == 200
        assert s.target_slot is TargetSlot.RIGHT
        assert s.seed is None
        assert s.config is None

    def test_success_value(self, tmp_path):
        data = _minimal_scenario(success={"type": "position_x_gte", "value": 3.0})
        s = load_scenario(_write_yaml(tmp_path, "sc", data))
        assert s.success == SuccessCondition(type="position_x_gte", value=3.0)

    def test_any_compound(self, tmp_path):
        data = _minimal_scenario(
            failure={
                "type": "any",
                "conditions": [
                    {"type": "wall_hit"},
                    {"type": "stuck", "tolerance": 0.2, "window": 30},
                ],
            }
        )
        s = load_scenario(_write_yaml(tmp_path, "sc", data))
        assert [c.type for c in s.failure.conditions] == ["wall_hit", "stuck"]
        assert s.failure.conditions[1].window == 30

    def test_description_and_metrics_default(self, tmp_path):
        data = _minimal_scenario()
        del data["description"]
        del data["metrics"]
        s = load_scenario(_write_yaml(tmp_path, "sc", data))
        assert s.description == ""
        assert s.metrics == []

    def test_invalid_success_type(self, tmp_path):
        data = _minimal_scenario(success={"type": "goal_reached"})
        with pytest.raises(ValueError, match="Unknown success condition type"):
            load_scenario(_write_yaml(tmp_path, "sc", data))

    def test_invalid_nested_failure_type(self, tmp_path):
        data = _minimal_scenario(
            failure={"type": "any", "conditions": [{"type": "player_dead"}]}
        )
        with pytest.raises(ValueError, match="Unknown failure condition type"):
            load_scenario(_write_yaml(tmp_path, "sc", data))

    def test_invalid_target_slot(self, tmp_path):
        data = _minimal_scenario(target_slot="up")
        with pytest.raises(ValueError, match="Unknown target slot"):
            load_scenario(_write_yaml(tmp_path, "sc", data))

    def test_invalid_config(self, tmp_path):
        data = _minimal_scenario(config={"move_speed": 0})
        with pytest.raises(ConfigurationError):
            load_scenario(_write_yaml(tmp_path, "sc", data))

    def test_missing_agent(self, tmp_path):
        data = _minimal_scenario()
        del data["agent"]
        with pytest.raises(KeyError):
            load_scenario(_write_yaml(tmp_path, "sc", data))

    def test_constants(self):
        assert "pellet_reached" in VALID_SUCCESS_TYPES
        assert "wall_hit" in VALID_SUCCESS_TYPES
        assert VALID_FAILURE_TYPES == {"wall_hit", "stuck", "any"}


# ---------------------------------------------------------------------------
# check_conditions
# ---------------------------------------------------------------------------

class TestCheckConditions:
    def test_empty_trajectory(self):
        result = check_conditions(
            SuccessCondition("pellet_reached"), FailureCondition("wall_hit"), [], 0, 10,
        )
        assert result == (None, None)

    def test_pellet_reached(self):
        traj = [_record(0, 3.3, 2.0, "pellet_reached")]
        result = check_conditions(
            SuccessCondition("pellet_reached"), FailureCondition("wall_hit"), traj, 0, 10,
        )
        assert result == (True, "pellet_reached")

    def test_wall_hit(self):
        traj = [_record(0, -4.3, -1.0, "wall_hit")]
        result = check_conditions(
            SuccessCondition("pellet_reached"), FailureCondition("wall_hit"), traj, 0, 10,
        )
        assert result == (False, "wall_hit")

    def test_wall_hit_as_success(self):
        cond = SuccessCondition("wall_hit")
        fail = FailureCondition("stuck")
        assert check_conditions(cond, fail, [_record(0, -4.2)], 0, 10) == (None, None)
        traj = [_record(0, -4.3, -1.0, "wall_hit")]
        assert check_conditions(cond, fail, traj, 0, 10) == (True, "wall_hit")

    def test_total_reward_gte(self):
        traj = [_record(0, 0.0), _record(1, 3.3, 2.0, "pellet_reached")]
        cond = SuccessCondition("total_reward_gte", value=2.0)
        assert check_conditions(cond, FailureCondition("wall_hit"), traj, 1, 10)[0] is True

    def test_position_bounds(self):
        traj = [_record(0, -4.25)]
        fail = FailureCondition("wall_hit")
        assert check_conditions(SuccessCondition("position_x_lte", -4.2), fail, traj, 0, 10)[0]
        assert check_conditions(SuccessCondition("position_x_gte", 1.0), fail, traj, 0, 10) == (None, None)

    def test_alive_at_end(self):
        cond = SuccessCondition("alive_at_end")
        fail = FailureCondition("wall_hit")
        assert check_conditions(cond, fail, [_record(8, 0.0)], 8, 10) == (None, None)
        assert check_conditions(cond, fail, [_record(9, 0.0)], 9, 10) == (True, "alive_at_end")

    def test_stuck(self):
        traj = [_record(i, 1.0) for i in range(20)]
        fail = FailureCondition("stuck", tolerance=0.1, window=20)
        assert check_conditions(SuccessCondition("pellet_reached"), fail, traj, 19, 100) == (False, "stuck")

    def test_stuck_not_enough_steps(self):
        traj = [_record(i, 1.0) for i in range(5)]
        fail = FailureCondition("stuck", tolerance=0.1, window=20)
        assert check_conditions(SuccessCondition("pellet_reached"), fail, traj, 4, 100) == (None, None)

    def test_any_first_triggers(self):
        traj = [_record(0, -4.3, -1.0, "wall_hit")]
        fail = FailureCondition(
            "any", conditions=[FailureCondition("stuck"), FailureCondition("wall_hit")],
        )
        assert check_conditions(SuccessCondition("pellet_reached"), fail, traj, 0, 10) == (False, "wall_hit")

    def test_success_takes_priority(self):
        traj = [_record(i, 1.0) for i in range(20)]
        fail = FailureCondition("stuck", tolerance=0.1, window=20)
        cond = SuccessCondition("position_x_gte", value=1.0)
        assert check_conditions(cond, fail, traj, 19, 100)[0] is True


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------

class TestMetrics:
    def test_basic_metrics(self):
        traj = [_record(0, 0.5), _record(1, 1.0), _record(2, 0.25, -1.0, "wall_hit")]
        m = compute_metrics(
            ["steps", "total_reward", "final_x", "min_x", "max_x", "terminal_event",
             "path_length", "x_profile"],
            traj, 0.0,
        )
        assert m["steps"] == 3
        assert m["total_reward"] == -1.0
        assert m["final_x"] == 0.25
        assert m["min_x"] == 0.0
        assert m["max_x"] == 1.0
        assert m["terminal_event"] == "wall_hit"
        assert m["path_length"] == pytest.approx(1.75)
        assert m["x_profile"] == [0.5, 1.0, 0.25]

    def test_empty_trajectory(self):
        m = compute_metrics(["steps", "final_x", "terminal_event", "stuck_at"], [], 0.0)
        assert m == {"steps": 0, "final_x": 0.0, "terminal_event": "none", "stuck_at": None}

    def test_stuck_at(self):
        traj = [_record(i, 2.0) for i in range(60)]
        assert compute_metrics(["stuck_at"], traj, 0.0)["stuck_at"] == 2.0

    def test_unknown_metric(self):
        with pytest.raises(ValueError, match="Unknown metric"):
            compute_metrics(["max_speed"], [], 0.0)


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

class TestRunner:
    def test_hold_right_reaches_pellet(self, tmp_path):
        s = load_scenario(_write_yaml(tmp_path, "sc", _minimal_scenario(
            metrics=["steps", "total_reward", "terminal_event"],
        )))
        outcome = run_scenario(s)
        assert outcome.success
        assert outcome.reason == "pellet_reached"
        assert outcome.target_slot == "right"
        assert outcome.metrics["total_reward"] == 2.0
        assert outcome.metrics["terminal_event"] == "pellet_reached"
        assert outcome.steps_elapsed == len(outcome.trajectory)
        assert outcome.trajectory[-1].done

    def test_wall_hit_fails(self, tmp_path):
        s = load_scenario(_write_yaml(tmp_path, "sc", _minimal_scenario(agent="hold_left")))
        outcome = run_scenario(s)
        assert not outcome.success
        assert outcome.reason == "wall_hit"

    def test_timed_out(self, tmp_path):
        s = load_scenario(_write_yaml(tmp_path, "sc", _minimal_scenario(
            agent="idle", max_steps=20,
        )))
        outcome = run_scenario(s)
        assert not outcome.success
        assert outcome.reason == "timed_out"
        assert outcome.steps_elapsed == 20

    def test_episode_end_without_condition(self, tmp_path):
        s = load_scenario(_write_yaml(tmp_path, "sc", _minimal_scenario(
            agent="hold_left",
            success={"type": "position_x_gte", "value": 10.0},
            failure={"type": "stuck"},
        )))
        outcome = run_scenario(s)
        assert not outcome.success
        assert outcome.reason == "episode_ended:wall_hit"

    def test_seeded_runs_identical(self, tmp_path):
        data = _minimal_scenario(agent="seek_pellet", seed=11, metrics=["x_profile"])
        del data["target_slot"]
        s = load_scenario(_write_yaml(tmp_path, "sc", data))
        a = run_scenario(s)
        b = run_scenario(s)
        assert a.target_slot == b.target_slot
        assert a.metrics["x_profile"] == b.metrics["x_profile"]

    def test_wall_time_measured(self, tmp_path):
        s = load_scenario(_write_yaml(tmp_path, "sc", _minimal_scenario()))
        assert run_scenario(s).wall_time_ms >= 0.0


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

class TestOutput:
    def test_format_pass(self):
        line = format_outcome(_outcome("a"))
        assert line.startswith("PASS  a ")
        assert "right" in line
        assert "pellet_reached" in line
        assert "+2.0" in line
        assert "82 steps" in line
        # Reason matches the event, so it is not repeated
        assert "(" not in line

    def test_format_fail_shows_reason(self):
        outcome = _outcome("a", success=False, event="none", reward=0.0)
        line = format_outcome(outcome)
        assert line.startswith("FAIL")
        assert "+0.0" in line
        assert "(wall_hit)" in line

    def test_print_outcome(self, capsys):
        print_outcome(_outcome("a", success=False, event="wall_hit", reward=-1.0))
        out = capsys.readouterr().out
        assert "FAIL" in out
        assert "-1.0" in out

    def test_tally_events(self):
        counts = tally_events([
            _outcome("a"),
            _outcome("b"),
            _outcome("c", event="wall_hit", reward=-1.0),
        ])
        assert counts == {"pellet_reached": 2, "wall_hit": 1, "step_limit": 0, "none": 0}

    def test_summary(self, capsys):
        print_summary([
            _outcome("a"),
            _outcome("b", success=False, event="step_limit", reward=0.0),
        ])
        out = capsys.readouterr().out
        assert "2 scenarios: 1 passed, 1 failed" in out
        assert "pellet 1  wall 0  step limit 1  unfinished 0" in out

    def test_save_without_trajectory(self, tmp_path):
        path = tmp_path / "out" / "results.json"
        save_results([_outcome("a", steps=82)], path)
        data = json.loads(path.read_text())
        assert data[0]["name"] == "a"
        assert data[0]["terminal_event"] == "pellet_reached"
        assert data[0]["total_reward"] == 2.0
        assert data[0]["metrics"] == {"steps": 82}
        assert "trajectory" not in data[0]

    def test_save_with_trajectory(self, tmp_path):
        path = tmp_path / "results.json"
        save_results([_outcome("a")], path, include_trajectory=True)
        data = json.loads(path.read_text())
        assert data[0]["trajectory"][0]["x"] == 0.04


# ---------------------------------------------------------------------------
# Compare
# ---------------------------------------------------------------------------

class TestCompare:
    def test_directed_metrics_exist(self):
        assert set(METRIC_DIRECTION) <= set(METRICS)

    def test_terminal_event_change_shown(self, tmp_path, capsys):
        base = _write_baseline(tmp_path, [
            {"name": "a", "success": True, "terminal_event": "wall_hit", "metrics": {}},
        ])
        assert compare_results([_outcome("a")], base) == 0
        assert "wall_hit → pellet_reached" in capsys.readouterr().out

    def test_fixed_status_not_a_failure(self, tmp_path, capsys):
        base = _write_baseline(tmp_path, [
            {"name": "a", "success": False, "metrics": {}},
        ])
        assert compare_results([_outcome("a")], base) == 0
        assert "FAIL → PASS" in capsys.readouterr().out

    def test_is_regression(self):
        assert is_regression("total_reward", 2.0, 1.0)
        assert not is_regression("total_reward", 2.0, 1.99)
        assert is_regression("steps", 80, 100)
        assert not is_regression("steps", 100, 80)
        assert not is_regression("final_x", 1.0, -5.0)
        assert not is_regression("steps", 0, 50)

    def test_no_regression_exit_0(self, tmp_path, capsys):
        base = _write_baseline(tmp_path, [
            {"name": "a", "success": True, "metrics": {"steps": 82}},
        ])
        assert compare_results([_outcome("a", steps=82)], base) == 0

    def test_status_flip_exit_1(self, tmp_path, capsys):
        base = _write_baseline(tmp_path, [
            {"name": "a", "success": True, "metrics": {}},
        ])
        assert compare_results([_outcome("a", success=False)], base) == 1
        assert "REGRESSION" in capsys.readouterr().out

    def test_metric_regression_exit_2(self, tmp_path, capsys):
        base = _write_baseline(tmp_path, [
            {"name": "a", "success": True, "metrics": {"steps": 82}},
        ])
        assert compare_results([_outcome("a", steps=120)], base) == 2
        assert "⚠ regression" in capsys.readouterr().out

    def test_improvement_annotated(self, tmp_path, capsys):
        base = _write_baseline(tmp_path, [
            {"name": "a", "success": True, "metrics": {"steps": 120}},
        ])
        assert compare_results([_outcome("a", steps=82)], base) == 0
        assert "✓ improved" in capsys.readouterr().out

    def test_categorical_change_shown_not_flagged(self, tmp_path, capsys):
        base = _write_baseline(tmp_path, [
            {"name": "a", "success": True, "metrics": {"terminal_event": "wall_hit"}},
        ])
        assert compare_results([_outcome("a", terminal_event="pellet_reached")], base) == 0
        assert "pellet_reached" in capsys.readouterr().out

    def test_new_and_missing(self, tmp_path, capsys):
        base = _write_baseline(tmp_path, [
            {"name": "old", "success": True, "metrics": {}},
        ])
        compare_results([_outcome("new")], base)
        out = capsys.readouterr().out
        assert "old: MISSING" in out
        assert "new: NEW" in out


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

class TestCli:
    def test_no_args_exit_2(self):
        with pytest.raises(SystemExit) as exc:
            cli_main([])
        assert exc.value.code == 2

    def test_run_single_scenario(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli_main([str(SCENARIOS_DIR / "hold_right_pellet_right.yaml")])
        assert exc.value.code == 0
        assert "PASS" in capsys.readouterr().out

    def test_agent_override_fails(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli_main([
                str(SCENARIOS_DIR / "hold_right_pellet_right.yaml"), "--agent", "hold_left",
            ])
        assert exc.value.code == 1

    def test_output_and_compare(self, tmp_path, capsys):
        out = tmp_path / "run.json"
        scenario = str(SCENARIOS_DIR / "seek_pellet_left.yaml")
        with pytest.raises(SystemExit):
            cli_main([scenario, "-o", str(out)])
        assert json.loads(out.read_text())[0]["name"] == "seek_pellet_left"

        with pytest.raises(SystemExit) as exc:
            cli_main([scenario, "--compare", str(out)])
        assert exc.value.code == 0

    def test_all_from_directory(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli_main(["--all", "--dir", str(SCENARIOS_DIR)])
        assert exc.value.code == 0
        out = capsys.readouterr().out
        assert f"{len(EXPECTED_ENDINGS)} scenarios: {len(EXPECTED_ENDINGS)} passed" in out
