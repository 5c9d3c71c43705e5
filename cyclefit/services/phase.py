"""
Service module for resolving a cycle day to its phase and base templates.

Typical usage:
    >>> resolution = resolve_phase(3, reference)
    >>> resolution.phase.phase_name
    'Menstrual'
"""
from dataclasses import dataclass

from aws_lambda_powertools import Logger

from cyclefit.models.phase import CyclePhase
from cyclefit.models.reference import NutritionTemplate, ReferenceData, WorkoutTemplate
from cyclefit.services.exceptions import ReferenceDataError

logger = Logger()

@dataclass(frozen=True)
class PhaseResolution:
    """Phase matched for a cycle day together with its base templates."""
    phase: CyclePhase
    workout_template: WorkoutTemplate
    nutrition_template: NutritionTemplate

def determine_cycle_phase(day_of_cycle: int, reference: ReferenceData) -> CyclePhase:
    """
    Find the phase whose inclusive day range contains the cycle day.

    If no range matches, the last defined phase is returned and a warning
    is logged. The packaged tables cover every day, so this only triggers
    with malformed reference data.

    Args:
        day_of_cycle: Day in the cycle (1-based)
        reference: Reference tables to search

    Returns:
        Matching CyclePhase
    """
    for phase in reference.cycle_phases:
        if phase.contains(day_of_cycle):
            return phase

    fallback = reference.cycle_phases[-1]
    logger.warning(
        "No phase range contains cycle day, using last phase",
        extra={"day_of_cycle": day_of_cycle, "fallback_phase": fallback.phase_name}
    )
    return fallback

def resolve_phase(day_of_cycle: int, reference: ReferenceData) -> PhaseResolution:
    """
    Resolve the phase and its base workout and nutrition templates.

    Args:
        day_of_cycle: Day in the cycle (1-based)
        reference: Reference tables to search

    Returns:
        PhaseResolution for the day

    Raises:
        ReferenceDataError: If the phase has no workout or nutrition template
    """
    phase = determine_cycle_phase(day_of_cycle, reference)
    workout_template = reference.workout_for(phase.phase_id)
    nutrition_template = reference.nutrition_for(phase.phase_id)

    if workout_template is None or nutrition_template is None:
        raise ReferenceDataError(
            f"Missing base templates for phase {phase.phase_name} (id {phase.phase_id})"
        )

    return PhaseResolution(
        phase=phase,
        workout_template=workout_template,
        nutrition_template=nutrition_template
    )
