"""Golden Data Provider for replaying recorded HTTP calls.

This module implements loading and saving golden data scenarios as JSON
files and creating replay transports for them.

File format::

    {
        "metadata": {"description": ..., "functionName": ..., "kwargs": {...}, "createdAt": ...},
        "recordings": [{"request": {...}, "response": {...}, "timestamp": ...}, ...]
    }
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Union

from pydantic import ValidationError as PydanticValidationError

from .transports import ReplayTransport
from .types import GoldenDataScenario, HttpCall

logger = logging.getLogger(__name__)


class GoldenDataProvider:
    """Provider for loading and replaying golden data scenarios.

    Scenario names are file paths relative to the golden data directory,
    without the ``.json`` extension.
    """

    def __init__(self, goldenDataDir: Union[str, Path]):
        """Initialize the GoldenDataProvider with a directory containing golden data files.

        Args:
            goldenDataDir: Path to directory containing golden data JSON files
        """
        self.goldenDataDir = Path(goldenDataDir)
        self.scenarios: Dict[str, GoldenDataScenario] = {}
        self.usedScenarios: set = set()

    def loadScenario(self, filename: str) -> GoldenDataScenario:
        """Load a specific scenario file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file isn't json or its content is invalid
        """
        if not filename.endswith(".json"):
            raise ValueError("Only json files allowed")

        scenario = loadGoldenData(self.goldenDataDir / filename)
        self.scenarios[filename[:-5]] = scenario
        return scenario

    def loadAllScenarios(self) -> Dict[str, GoldenDataScenario]:
        """Load all scenarios from the golden data directory."""
        self.scenarios.clear()
        for filepath in findGoldenDataFiles(self.goldenDataDir):
            self.loadScenario(str(filepath.relative_to(self.goldenDataDir)))
        return self.scenarios

    def getScenario(self, name: str) -> GoldenDataScenario:
        """Get a loaded scenario by name.

        Raises:
            KeyError: If scenario is not loaded
        """
        if name not in self.scenarios:
            raise KeyError(f"Scenario '{name}' not loaded. Call loadScenario() or loadAllScenarios() first.")

        self.usedScenarios.add(name)
        return self.scenarios[name]

    def createTransport(self, scenarioName: str) -> ReplayTransport:
        """Create a transport replaying the specified scenario.

        The transport serves both httpx.Client and httpx.AsyncClient.
        """
        return ReplayTransport(self.getScenario(scenarioName).recordings)


def loadGoldenData(filepath: Union[str, Path]) -> GoldenDataScenario:
    """Load and parse a single golden data JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file content doesn't match expected structure
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Golden data file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict) or "metadata" not in data or "recordings" not in data:
        raise ValueError(f"Invalid golden data format in {path}: expected dict with metadata/recordings")

    metadata = data["metadata"]
    try:
        return GoldenDataScenario(
            description=metadata.get("description", "Unknown scenario"),
            functionName=metadata.get("functionName", "unknown"),
            kwargs=metadata.get("kwargs", {}),
            recordings=[HttpCall.model_validate(call) for call in data["recordings"]],
            createdAt=metadata["createdAt"],
        )
    except (KeyError, PydanticValidationError) as e:
        raise ValueError(f"Invalid golden data in {path}: {e}") from e


def saveGoldenData(scenario: GoldenDataScenario, filepath: Union[str, Path]) -> None:
    """Save scenario as golden data JSON file, creating parent directories."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    goldenData = {
        "metadata": scenario.model_dump(mode="json", exclude={"recordings"}),
        "recordings": [call.model_dump(mode="json") for call in scenario.recordings],
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(goldenData, f, indent=2, ensure_ascii=False)
    logger.info(f"Saved {len(scenario.recordings)} recordings to {path}")


def findGoldenDataFiles(directory: Union[str, Path]) -> List[Path]:
    """Recursively find all .json files in the directory."""
    directoryPath = Path(directory)
    if not directoryPath.exists():
        return []
    return sorted(directoryPath.rglob("*.json"))
