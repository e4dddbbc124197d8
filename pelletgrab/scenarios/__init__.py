"""pelletgrab/scenarios — Scenario definition, loading, conditions, and runner."""

from pelletgrab.scenarios.conditions import (
    VALID_FAILURE_TYPES,
    VALID_SUCCESS_TYPES,
    FailureCondition,
    SuccessCondition,
    check_conditions,
)
from pelletgrab.scenarios.loader import ScenarioDef, load_scenario, load_scenarios
from pelletgrab.scenarios.runner import ScenarioOutcome, StepRecord, run_scenario
from pelletgrab.scenarios.compare import compare_results
from pelletgrab.scenarios.output import (
    format_outcome,
    print_outcome,
    print_summary,
    save_results,
    tally_events,
)

__all__ = [
    "VALID_SUCCESS_TYPES",
    "VALID_FAILURE_TYPES",
    "SuccessCondition",
    "FailureCondition",
    "check_conditions",
    "ScenarioDef",
    "load_scenario",
    "load_scenarios",
    "StepRecord",
    "ScenarioOutcome",
    "run_scenario",
    "format_outcome",
    "print_outcome",
    "print_summary",
    "save_results",
    "tally_events",
    "compare_results",
]
