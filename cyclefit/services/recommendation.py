"""
Service module for generating daily personalized recommendations.

The engine ties together the cycle calculator, phase resolver and modifier
pipeline. Reference data, the random source for daily messages and the
clock are all injectable so tests can pin every input.

Typical usage:
    engine = RecommendationEngine()
    recommendation = engine.generate_recommendation(profile)
    if recommendation is None:
        ...  # prompt the user to finish onboarding
"""
import random
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, List, Mapping, Optional, Union

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from cyclefit.models.recommendation import (
    DailyRecommendation,
    NutritionRecommendation,
    WorkoutRecommendation
)
from cyclefit.models.reference import (
    NutritionTemplate,
    ReferenceData,
    SampleMeal,
    SampleWorkout,
    WorkoutTemplate
)
from cyclefit.models.user import UserProfile
from cyclefit.services.catalog import suggest_meals, suggest_workouts
from cyclefit.services.cycle import calculate_day_of_cycle
from cyclefit.services.exceptions import InvalidInputError, ReferenceDataError
from cyclefit.services.messages import select_daily_message
from cyclefit.services.modifiers import apply_modifiers
from cyclefit.services.phase import resolve_phase
from cyclefit.services.reference import get_reference_data
from cyclefit.utils.logging import log_exception

logger = Logger()

ProfileInput = Union[UserProfile, Mapping[str, Any]]
Clock = Callable[[], Union[date, datetime]]

@dataclass(frozen=True)
class Suggestions:
    """Sample meals and workouts to show next to a recommendation."""
    meals: List[SampleMeal]
    workouts: List[SampleWorkout]

def coerce_profile(profile: ProfileInput) -> UserProfile:
    """
    Validate a mapping into a UserProfile, passing UserProfile through.

    Raises:
        ValidationError: If profile fields have invalid values
    """
    if isinstance(profile, UserProfile):
        return profile
    return UserProfile.model_validate(profile)

def build_base_workout(template: WorkoutTemplate) -> WorkoutRecommendation:
    """Create the unmodified workout recommendation for a phase."""
    return WorkoutRecommendation(
        workout_type=template.workout_type,
        intensity=template.intensity,
        duration=template.duration_min,
        focus=list(template.focus_areas),
        activities=list(template.recommended_activities)
    )

def build_base_nutrition(template: NutritionTemplate) -> NutritionRecommendation:
    """Create the unmodified nutrition recommendation for a phase."""
    return NutritionRecommendation(
        key_nutrients=list(template.key_nutrients),
        focus_foods=list(template.focus_foods),
        avoid_foods=list(template.avoid_foods),
        reason=template.reason
    )

class RecommendationEngine:
    """Engine for generating daily recommendations from a user profile."""

    def __init__(
        self,
        reference: Optional[ReferenceData] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None
    ):
        self.reference = reference if reference is not None else get_reference_data()
        self.rng = rng
        self.clock = clock or date.today

    def generate_recommendation(
        self,
        profile: ProfileInput,
        now: Optional[Union[date, datetime]] = None
    ) -> Optional[DailyRecommendation]:
        """
        Generate the recommendation for a profile on a given day.

        Args:
            profile: UserProfile or mapping with profile fields
            now: Date to calculate for, defaults to the engine clock

        Returns:
            DailyRecommendation, or None when the profile is invalid or the
            last period date is missing or unparsable

        Example:
            >>> engine = RecommendationEngine()
            >>> rec = engine.generate_recommendation({"last_period_date": "2024-01-01"}, date(2024, 1, 4))
            >>> rec.phase, rec.day
            ('Menstrual', 3)
        """
        try:
            profile = coerce_profile(profile)
        except ValidationError as e:
            logger.info(
                "Recommendation unavailable",
                extra={"reason": "Invalid profile", "errors": e.errors(include_url=False)}
            )
            return None
        if now is None:
            now = self.clock()

        try:
            day_of_cycle = calculate_day_of_cycle(profile.last_period_date, now)
        except InvalidInputError as e:
            logger.info(
                "Recommendation unavailable",
                extra={"reason": str(e), "last_period_date": profile.last_period_date}
            )
            return None

        try:
            resolution = resolve_phase(day_of_cycle, self.reference)
        except ReferenceDataError as e:
            log_exception(
                logger,
                "Reference data incomplete for cycle day",
                exc_info=e,
                extra={"day_of_cycle": day_of_cycle}
            )
            return None

        phase = resolution.phase
        result = apply_modifiers(
            build_base_workout(resolution.workout_template),
            build_base_nutrition(resolution.nutrition_template),
            profile,
            self.reference
        )
        daily_message = result.energy_message or select_daily_message(phase.energy_level, self.rng)

        logger.debug(
            "Recommendation generated",
            extra={
                "day_of_cycle": day_of_cycle,
                "phase": phase.phase_name,
                "duration": result.workout.duration,
                "health_goals": profile.health_goals,
                "health_conditions": profile.health_conditions,
                "fitness_level": profile.fitness_level,
                "daily_energy": profile.daily_energy
            }
        )

        return DailyRecommendation(
            phase=phase.phase_name,
            phase_type=phase.phase_type,
            day=day_of_cycle,
            insight=phase.description,
            hormone_status=phase.hormone_status,
            energy_level=phase.energy_level,
            workout=result.workout,
            nutrition=result.nutrition,
            daily_message=daily_message,
            daily_energy=profile.daily_energy if result.energy_message else None
        )

    def suggest_for(
        self,
        recommendation: DailyRecommendation,
        profile: ProfileInput
    ) -> Suggestions:
        """
        Get sample meals and workouts matching a generated recommendation.

        Args:
            recommendation: Recommendation returned by generate_recommendation
            profile: Profile the recommendation was generated for

        Returns:
            Suggestions with meals for the phase or goals and workouts that
            fit the recommended duration

        Raises:
            ValidationError: If a mapping profile has invalid values
        """
        profile = coerce_profile(profile)

        phase_ids = [
            phase.phase_id for phase in self.reference.cycle_phases
            if phase.phase_type == recommendation.phase_type
        ]
        meals = suggest_meals(self.reference, phase_ids[0], profile.health_goals) if phase_ids else []
        return Suggestions(
            meals=meals,
            workouts=suggest_workouts(self.reference, recommendation.workout.duration)
        )

_default_engine = None

def get_engine() -> RecommendationEngine:
    """Get or create the shared engine backed by the packaged reference data."""
    global _default_engine
    if _default_engine is None:
        _default_engine = RecommendationEngine()
    return _default_engine

def generate_recommendation(
    profile: ProfileInput,
    now: Optional[Union[date, datetime]] = None
) -> Optional[DailyRecommendation]:
    """
    Generate a recommendation with the shared engine.

    See RecommendationEngine.generate_recommendation.
    """
    return get_engine().generate_recommendation(profile, now)
