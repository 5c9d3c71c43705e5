"""
Reference data models: base templates, modifiers and catalog entries.

All records are frozen and hold tuples, so nothing can be changed in place.
A ReferenceData instance is built once from the packaged JSON tables and
shared read-only by every request.
"""
from typing import Dict, Iterable, List, Optional, Tuple

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, model_validator

from cyclefit.models.phase import CyclePhase

logger = Logger()

class ReferenceRecord(BaseModel):
    """Base class for immutable reference records."""
    model_config = ConfigDict(frozen=True)

class WorkoutTemplate(ReferenceRecord):
    """
    Phase-default workout before any modifiers are applied.
    """
    phase_id: int
    workout_type: str
    intensity: str
    duration_min: int = Field(..., gt=0)
    focus_areas: Tuple[str, ...]
    recommended_activities: Tuple[str, ...]

class NutritionTemplate(ReferenceRecord):
    """
    Phase-default nutrition guidance before any modifiers are applied.
    """
    phase_id: int
    key_nutrients: Tuple[str, ...]
    focus_foods: Tuple[str, ...]
    avoid_foods: Tuple[str, ...]
    reason: str

class HealthGoalModifier(ReferenceRecord):
    """
    Additive adjustments for a user-selected health goal.

    workout_intensity_change is carried from the source tables but is not
    applied; goal modifiers only add tags and notes.
    """
    goal_id: int
    goal_name: str
    workout_focus_add: Tuple[str, ...] = ()
    workout_intensity_change: float = 0
    workout_activities_add: Tuple[str, ...] = ()
    nutrition_nutrients_add: Tuple[str, ...] = ()
    nutrition_foods_add: Tuple[str, ...] = ()
    special_notes: Optional[str] = None

class HealthConditionModifier(ReferenceRecord):
    """
    Additive adjustments for a user-reported health condition.
    """
    condition_id: int
    condition_name: str
    workout_focus_add: Tuple[str, ...] = ()
    workout_activities_add: Tuple[str, ...] = ()
    workout_activities_avoid: Tuple[str, ...] = ()
    nutrition_nutrients_add: Tuple[str, ...] = ()
    nutrition_foods_add: Tuple[str, ...] = ()
    nutrition_foods_avoid: Tuple[str, ...] = ()
    special_instructions: Optional[str] = None

class FitnessLevelModifier(ReferenceRecord):
    """
    Duration scaling and focus additions for a fitness level.
    """
    fitness_id: int
    fitness_level: str
    duration_multiplier: float = Field(..., gt=0)
    intensity_multiplier: float = Field(1.0, gt=0)
    focus_areas_add: Tuple[str, ...] = ()
    progression_notes: Optional[str] = None

class DailyEnergyModifier(ReferenceRecord):
    """
    Same-day adjustment driven by the user's self-reported energy or mood.
    """
    energy_id: int
    energy_level: str
    intensity_multiplier: float = Field(1.0, gt=0)
    duration_multiplier: float = Field(1.0, gt=0)
    focus_areas_add: Tuple[str, ...] = ()
    activities_add: Tuple[str, ...] = ()
    daily_message: str

class SampleWorkout(ReferenceRecord):
    """A ready-made workout routine."""
    workout_id: int
    workout_name: str
    category: str
    duration_min: int = Field(..., gt=0)
    equipment_needed: str
    warmup_exercises: Tuple[str, ...]
    main_exercises: Tuple[str, ...]
    cooldown_exercises: Tuple[str, ...]

class SampleMeal(ReferenceRecord):
    """A meal suggestion targeted at a phase or a health goal."""
    meal_id: int
    meal_name: str
    meal_type: str
    target_phase_id: Optional[int] = None
    target_goal_id: Optional[int] = None
    ingredients: Tuple[str, ...]
    nutrients_provided: Tuple[str, ...]
    reason: str

class ReferenceData(ReferenceRecord):
    """
    Complete set of static lookup tables used to build recommendations.

    Lookups return None on a miss so callers can treat unknown keys as
    no-ops.
    """
    cycle_phases: Tuple[CyclePhase, ...]
    base_workouts: Tuple[WorkoutTemplate, ...]
    base_nutrition: Tuple[NutritionTemplate, ...]
    health_goals: Tuple[HealthGoalModifier, ...] = ()
    health_conditions: Tuple[HealthConditionModifier, ...] = ()
    fitness_levels: Tuple[FitnessLevelModifier, ...] = ()
    daily_energy: Tuple[DailyEnergyModifier, ...] = ()
    sample_workouts: Tuple[SampleWorkout, ...] = ()
    sample_meals: Tuple[SampleMeal, ...] = ()

    @model_validator(mode="after")
    def check_phase_coverage(self) -> "ReferenceData":
        if not self.cycle_phases:
            raise ValueError("Reference data must define at least one cycle phase")

        gaps = self.phase_coverage_gaps()
        if gaps:
            logger.warning(
                "Cycle phases do not partition the cycle",
                extra={"uncovered_or_overlapping_days": gaps}
            )
        return self

    def phase_coverage_gaps(self, cycle_length: int = 28) -> List[int]:
        """
        Days in 1..cycle_length not covered by exactly one phase.

        Returns:
            Sorted list of days with no matching phase or more than one
        """
        return [
            day for day in range(1, cycle_length + 1)
            if sum(1 for phase in self.cycle_phases if phase.contains(day)) != 1
        ]

    def phase_by_id(self, phase_id: int) -> Optional[CyclePhase]:
        return _find(self.cycle_phases, "phase_id", phase_id)

    def workout_for(self, phase_id: int) -> Optional[WorkoutTemplate]:
        return _find(self.base_workouts, "phase_id", phase_id)

    def nutrition_for(self, phase_id: int) -> Optional[NutritionTemplate]:
        return _find(self.base_nutrition, "phase_id", phase_id)

    def health_goal(self, name: str) -> Optional[HealthGoalModifier]:
        return _find(self.health_goals, "goal_name", name)

    def health_condition(self, name: str) -> Optional[HealthConditionModifier]:
        return _find(self.health_conditions, "condition_name", name)

    def fitness_level(self, name: str) -> Optional[FitnessLevelModifier]:
        return _find(self.fitness_levels, "fitness_level", name)

    def energy_modifier(self, name: str) -> Optional[DailyEnergyModifier]:
        return _find(self.daily_energy, "energy_level", name)

    def goal_ids(self, names: Iterable[str]) -> Dict[str, int]:
        """Map known goal names to their ids, skipping unknown names."""
        ids = {}
        for name in names:
            goal = self.health_goal(name)
            if goal:
                ids[name] = goal.goal_id
        return ids

def _find(records, attribute: str, value):
    """Return the first record whose attribute equals value."""
    for record in records:
        if getattr(record, attribute) == value:
            return record
    return None
