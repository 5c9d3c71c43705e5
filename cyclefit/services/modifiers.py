"""
Service module for layering profile modifiers onto base recommendations.

Modifiers are applied in a fixed order: health goals, health conditions,
fitness level, then the optional same-day energy signal. Each step returns
new recommendation objects; tags are concatenated in order of appearance
and duplicates are kept. Unknown modifier keys are skipped.

Typical usage:
    result = apply_modifiers(workout, nutrition, profile, reference)
    print(result.workout.duration, result.nutrition.avoid_foods)
"""
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from aws_lambda_powertools import Logger

from cyclefit.models.recommendation import NutritionRecommendation, WorkoutRecommendation
from cyclefit.models.reference import ReferenceData
from cyclefit.models.user import UserProfile

logger = Logger()

RecommendationPair = Tuple[WorkoutRecommendation, NutritionRecommendation]

@dataclass(frozen=True)
class ModifierResult:
    """Final state of the pipeline."""
    workout: WorkoutRecommendation
    nutrition: NutritionRecommendation
    energy_message: Optional[str] = None

def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (12.5 -> 13)."""
    return int(math.floor(value + 0.5))

def scale_duration(duration: int, multiplier: float) -> int:
    """Scale a workout duration in minutes."""
    return round_half_up(duration * multiplier)

def apply_health_goals(
    workout: WorkoutRecommendation,
    nutrition: NutritionRecommendation,
    health_goals: Iterable[str],
    reference: ReferenceData
) -> RecommendationPair:
    """
    Add focus areas, activities, nutrients and foods for each health goal.

    Goal notes go to the workout notes.

    Args:
        workout: Current workout recommendation
        nutrition: Current nutrition recommendation
        health_goals: Goal names in the order supplied by the user
        reference: Reference tables

    Returns:
        New (workout, nutrition) pair
    """
    for goal_name in health_goals:
        goal = reference.health_goal(goal_name)
        if goal is None:
            logger.debug("Skipping unknown health goal", extra={"health_goal": goal_name})
            continue

        special_notes = list(workout.special_notes)
        if goal.special_notes:
            special_notes.append(goal.special_notes)

        workout = workout.model_copy(update={
            "focus": [*workout.focus, *goal.workout_focus_add],
            "activities": [*workout.activities, *goal.workout_activities_add],
            "special_notes": special_notes
        })
        nutrition = nutrition.model_copy(update={
            "key_nutrients": [*nutrition.key_nutrients, *goal.nutrition_nutrients_add],
            "focus_foods": [*nutrition.focus_foods, *goal.nutrition_foods_add]
        })

    return workout, nutrition

def apply_health_conditions(
    workout: WorkoutRecommendation,
    nutrition: NutritionRecommendation,
    health_conditions: Iterable[str],
    reference: ReferenceData
) -> RecommendationPair:
    """
    Add workout and nutrition adjustments for each health condition.

    Foods to avoid are appended to the phase list, never replacing it.
    Condition instructions go to the nutrition notes.

    Args:
        workout: Current workout recommendation
        nutrition: Current nutrition recommendation
        health_conditions: Condition names in the order supplied by the user
        reference: Reference tables

    Returns:
        New (workout, nutrition) pair
    """
    for condition_name in health_conditions:
        condition = reference.health_condition(condition_name)
        if condition is None:
            logger.debug("Skipping unknown health condition", extra={"health_condition": condition_name})
            continue

        special_notes = list(nutrition.special_notes)
        if condition.special_instructions:
            special_notes.append(condition.special_instructions)

        workout = workout.model_copy(update={
            "focus": [*workout.focus, *condition.workout_focus_add],
            "activities": [*workout.activities, *condition.workout_activities_add],
            "avoid_activities": [*workout.avoid_activities, *condition.workout_activities_avoid]
        })
        nutrition = nutrition.model_copy(update={
            "key_nutrients": [*nutrition.key_nutrients, *condition.nutrition_nutrients_add],
            "focus_foods": [*nutrition.focus_foods, *condition.nutrition_foods_add],
            "avoid_foods": [*nutrition.avoid_foods, *condition.nutrition_foods_avoid],
            "special_notes": special_notes
        })

    return workout, nutrition

def apply_fitness_level(
    workout: WorkoutRecommendation,
    fitness_level: Optional[str],
    reference: ReferenceData
) -> WorkoutRecommendation:
    """
    Scale duration and add focus areas for the user's fitness level.

    Example:
        >>> apply_fitness_level(menstrual_workout, "just_starting", reference).duration
        13
    """
    if not fitness_level:
        return workout

    level = reference.fitness_level(fitness_level)
    if level is None:
        logger.debug("Skipping unknown fitness level", extra={"fitness_level": fitness_level})
        return workout

    return workout.model_copy(update={
        "duration": scale_duration(workout.duration, level.duration_multiplier),
        "focus": [*workout.focus, *level.focus_areas_add],
        "progression_note": level.progression_notes
    })

def apply_daily_energy(
    workout: WorkoutRecommendation,
    daily_energy: Optional[str],
    reference: ReferenceData
) -> Tuple[WorkoutRecommendation, Optional[str]]:
    """
    Adjust the workout for today's self-reported energy.

    Returns:
        Tuple of (adjusted workout, energy message or None when no known
        energy signal was supplied)
    """
    if not daily_energy:
        return workout, None

    energy = reference.energy_modifier(daily_energy)
    if energy is None:
        logger.debug("Skipping unknown daily energy", extra={"daily_energy": daily_energy})
        return workout, None

    adjusted = workout.model_copy(update={
        "duration": scale_duration(workout.duration, energy.duration_multiplier),
        "intensity_factor": round(workout.intensity_factor * energy.intensity_multiplier, 2),
        "focus": [*workout.focus, *energy.focus_areas_add],
        "activities": [*workout.activities, *energy.activities_add]
    })
    return adjusted, energy.daily_message

def apply_modifiers(
    workout: WorkoutRecommendation,
    nutrition: NutritionRecommendation,
    profile: UserProfile,
    reference: ReferenceData
) -> ModifierResult:
    """
    Run every modifier step in order for a user profile.

    Args:
        workout: Base workout recommendation
        nutrition: Base nutrition recommendation
        profile: User profile with modifier selections
        reference: Reference tables

    Returns:
        ModifierResult with the final workout, nutrition and energy message
    """
    workout, nutrition = apply_health_goals(workout, nutrition, profile.health_goals, reference)
    workout, nutrition = apply_health_conditions(workout, nutrition, profile.health_conditions, reference)
    workout = apply_fitness_level(workout, profile.fitness_level, reference)
    workout, energy_message = apply_daily_energy(workout, profile.daily_energy, reference)

    return ModifierResult(workout=workout, nutrition=nutrition, energy_message=energy_message)
