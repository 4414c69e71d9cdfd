import json
from pathlib import Path
from typing import Any

import yaml

from axisscale.configs.scale_result import AxisScaleResult
from axisscale.models.scenario import ScenarioSet


def find_project_root() -> Path:
    """Find the project root by looking for marker files."""
    current = Path(__file__).resolve()

    # Project root markers
    markers = ["pyproject.toml", "README.md"]

    for parent in [current] + list(current.parents):
        if any((parent / marker).exists() for marker in markers):
            return parent

    return current.parent


def load_scenarios_from_yaml(path: str | Path) -> ScenarioSet:
    """
    Load axes scenarios from a YAML file.

    Args:
        path: File path to the YAML file

    Returns:
        ScenarioSet populated with the scenarios of the file

    Raises:
        FileNotFoundError: If the specified file does not exist
        yaml.YAMLError: If the file contains invalid YAML syntax
        RuntimeError: If the data does not match the scenario schema

    Expected YAML structure:
        ```yaml
        scenarios:
          - id: "iso"
            label: "Default 3D view"
            axes:
              xlim: {min: -1, max: 1}
              ylim: {min: -2, max: 2}
              zlim: {min: -3, max: 3}
              aspect: [2, 3, 5]
              view: {azimuth: -37.5, elevation: 30}
              viewport: {width: 4, height: 3, units: in}
        ```
    """
    try:
        with open(path, "r", encoding="utf-8") as file:
            raw_data: dict[str, Any] = yaml.safe_load(file) or {}

        return ScenarioSet(**raw_data)

    except FileNotFoundError:
        raise FileNotFoundError(f"Scenario YAML file not found: {path}")
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Invalid YAML syntax in file {path}: {e}")
    except Exception as e:
        raise RuntimeError(f"Failed to load scenarios from {path}: {e}")


def save_results_json(results: dict[str, AxisScaleResult | str], path: str | Path) -> None:
    """
    Save scale results keyed by scenario ID to a JSON file.

    Args:
        results: Scenario ID to result, or to an error message for scenarios
            that failed.
        path: Output file path. Parent directories are created.
    """
    data = {
        key: value.to_dict() if isinstance(value, AxisScaleResult) else {"error": value}
        for key, value in results.items()
    }

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
