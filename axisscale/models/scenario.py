from pydantic import BaseModel, Field

from axisscale.models.axes_state import AxesSnapshot


class Scenario(BaseModel):
    """
    A named axes configuration to evaluate.

    Attributes:
        id: Unique identifier for the scenario
        label: Human-readable description
        axes: Snapshot of the axes state
    """

    id: str = Field(..., description="Unique identifier for the scenario")
    label: str | None = Field(None, description="Human-readable scenario name")
    axes: AxesSnapshot

    def __str__(self) -> str:
        return f"[{self.id}] {self.label or 'no label'}\n* axes: {self.axes}"


class ScenarioSet(BaseModel):
    """
    Container for the scenarios of one YAML file.

    Attributes:
        scenarios: Scenarios in the order they were defined
    """

    scenarios: list[Scenario] = Field(
        default_factory=list, description="Axes configurations to evaluate"
    )

    def get_scenario(self, scenario_id: str) -> Scenario | None:
        """
        Retrieve a scenario by its unique ID.

        Args:
            scenario_id: Unique identifier of the scenario to retrieve

        Returns:
            Scenario object if found, None otherwise
        """
        for scenario in self.scenarios:
            if scenario.id == scenario_id:
                return scenario
        return None

    def list_scenarios(self) -> list[str]:
        """Get the scenario IDs in the order they were defined."""
        return [s.id for s in self.scenarios]
