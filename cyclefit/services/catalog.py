"""
Service module for sample workout and meal suggestions.

Suggestions are extras shown alongside a daily recommendation; they do not
change the recommendation itself.
"""
from typing import Iterable, List, Optional

from cyclefit.models.reference import ReferenceData, SampleMeal, SampleWorkout

def suggest_meals(
    reference: ReferenceData,
    phase_id: int,
    health_goals: Iterable[str] = ()
) -> List[SampleMeal]:
    """
    Get sample meals targeted at the phase or at one of the user's goals.

    Args:
        reference: Reference tables
        phase_id: Current phase identifier
        health_goals: User goal names, unknown names are ignored

    Returns:
        Matching meals in catalog order

    Example:
        >>> [m.meal_name for m in suggest_meals(reference, 1)]
        ['Iron-Rich Spinach Omelet']
    """
    goal_ids = set(reference.goal_ids(list(health_goals)).values())
    return [
        meal for meal in reference.sample_meals
        if meal.target_phase_id == phase_id
        or (meal.target_goal_id is not None and meal.target_goal_id in goal_ids)
    ]

def suggest_workouts(
    reference: ReferenceData,
    max_duration: Optional[int] = None
) -> List[SampleWorkout]:
    """
    Get sample workouts that fit within the recommended duration.

    Args:
        reference: Reference tables
        max_duration: Recommended duration in minutes; None returns all

    Returns:
        Sample workouts no longer than max_duration, shortest first
    """
    workouts = reference.sample_workouts
    if max_duration is not None:
        workouts = [w for w in workouts if w.duration_min <= max_duration]
    return sorted(workouts, key=lambda w: w.duration_min)
