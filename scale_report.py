import argparse
import logging

import pandas as pd

from axisscale.exceptions import AxisScaleError
from axisscale.logging_config import setup_logging
from axisscale.pipeline.pipeline import compute_from_snapshot
from axisscale.utils import find_project_root, load_scenarios_from_yaml, save_results_json

logger = logging.getLogger("axisscale.report")


def build_report(scenarios, scenario_ids: list[str] | None = None):
    """
    Evaluate scenarios and collect factors in a table.

    Args:
        scenarios: ScenarioSet to evaluate.
        scenario_ids: Restrict the report to these IDs (all if None).

    Returns:
        Tuple (table, results) where results maps scenario IDs to results or
        error messages.
    """
    ids = scenario_ids or scenarios.list_scenarios()

    rows = []
    results = {}
    for scenario_id in ids:
        scenario = scenarios.get_scenario(scenario_id)
        if scenario is None:
            raise ValueError(f"Scenario '{scenario_id}' not found")

        try:
            result = compute_from_snapshot(scenario.axes)
        except AxisScaleError as e:
            logger.error("Scenario %s failed: %s", scenario_id, e)
            results[scenario_id] = str(e)
            rows.append({"id": scenario_id, "label": scenario.label, "error": str(e)})
            continue

        results[scenario_id] = result
        rows.append(
            {
                "id": scenario_id,
                "label": scenario.label,
                "xppt": result.xppt,
                "yppt": result.yppt,
                "zppt": result.zppt,
                "notes": "; ".join(d.kind.name for d in result.diagnostics),
            }
        )

    return pd.DataFrame(rows), results


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Report axis units per point for 3D axes scenarios"
    )
    parser.add_argument(
        "scenarios",
        nargs="?",
        default=str(find_project_root() / "data" / "scenarios.yaml"),
        help="Path to the scenario YAML file",
    )
    parser.add_argument("--scenario", nargs="+", help="Scenario IDs to evaluate (default: all)")
    parser.add_argument("--output", help="Path to save the results as JSON")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")

    args = parser.parse_args()
    setup_logging(args.log_level)

    scenarios = load_scenarios_from_yaml(args.scenarios)
    table, results = build_report(scenarios, args.scenario)

    print(table.to_string(index=False))

    if args.output:
        save_results_json(results, args.output)
        print(f"Results saved to {args.output}")


if __name__ == "__main__":
    main()
