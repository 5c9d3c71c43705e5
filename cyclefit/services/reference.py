"""
Service module for loading the static reference tables.

The tables are read once per process and shared read-only. Callers that
need a different table (tests, experiments) build their own ReferenceData
and inject it into the engine instead of replacing the shared instance.

Typical usage:
    reference = get_reference_data()
    phase = reference.phase_by_id(1)
"""
import json
import os
from pathlib import Path
from typing import Optional, Union

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from cyclefit.models.reference import ReferenceData
from cyclefit.services.constants import REFERENCE_DATA_ENV, REFERENCE_DATA_FILE
from cyclefit.services.exceptions import ReferenceDataError

logger = Logger()

DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / REFERENCE_DATA_FILE

# Singleton instance
_reference_instance = None

def load_reference_data(path: Optional[Union[str, Path]] = None) -> ReferenceData:
    """
    Load and validate reference data from a JSON file.

    Args:
        path: Optional file path. Falls back to the CYCLEFIT_REFERENCE_DATA
            environment variable, then to the packaged tables.

    Returns:
        Validated ReferenceData instance

    Raises:
        ReferenceDataError: If the file cannot be read or fails validation

    Example:
        >>> reference = load_reference_data()
        >>> len(reference.cycle_phases)
        4
    """
    if path is None:
        path = os.environ.get(REFERENCE_DATA_ENV) or DEFAULT_DATA_PATH
    data_path = Path(path)

    try:
        with data_path.open(encoding="utf-8") as data_file:
            raw = json.load(data_file)
    except (OSError, json.JSONDecodeError) as e:
        raise ReferenceDataError(f"Could not read reference data from {data_path}: {e}") from e

    try:
        reference = ReferenceData.model_validate(raw)
    except ValidationError as e:
        raise ReferenceDataError(f"Invalid reference data in {data_path}: {e}") from e

    logger.info(
        "Reference data loaded",
        extra={
            "path": str(data_path),
            "phases": len(reference.cycle_phases),
            "health_goals": len(reference.health_goals),
            "health_conditions": len(reference.health_conditions),
            "fitness_levels": len(reference.fitness_levels)
        }
    )
    return reference

def get_reference_data() -> ReferenceData:
    """
    Get or create the process-wide reference data instance.

    Returns:
        ReferenceData: Shared read-only tables

    Raises:
        ReferenceDataError: If the tables cannot be loaded
    """
    global _reference_instance
    if _reference_instance is None:
        _reference_instance = load_reference_data()
    return _reference_instance
