"""
Recommendation models for cycle-based workout and nutrition suggestions.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from cyclefit.models.phase import CyclePhaseType, EnergyLevel

class WorkoutRecommendation(BaseModel):
    """
    Workout suggestion built from a phase template plus modifiers.

    intensity_factor starts at 1.0 and is only scaled by the daily energy
    adjustment; the intensity label always comes from the phase template.
    """
    model_config = ConfigDict(frozen=True)

    workout_type: str
    intensity: str
    duration: int = Field(..., ge=0)
    intensity_factor: float = 1.0
    focus: List[str]
    activities: List[str]
    avoid_activities: List[str] = Field(default_factory=list)
    special_notes: List[str] = Field(default_factory=list)
    progression_note: Optional[str] = None

class NutritionRecommendation(BaseModel):
    """
    Nutrition suggestion built from a phase template plus modifiers.
    """
    model_config = ConfigDict(frozen=True)

    key_nutrients: List[str]
    focus_foods: List[str]
    avoid_foods: List[str]
    reason: str
    special_notes: List[str] = Field(default_factory=list)

class DailyRecommendation(BaseModel):
    """
    Represents the personalized recommendation for one day of the cycle.

    Re-derived on every request and never stored. Tag lists are fresh
    copies owned by this recommendation, never views of the reference tables.
    """
    model_config = ConfigDict(frozen=True)

    phase: str
    phase_type: CyclePhaseType
    day: int = Field(..., ge=1, le=28)
    insight: str
    hormone_status: str
    energy_level: EnergyLevel
    workout: WorkoutRecommendation
    nutrition: NutritionRecommendation
    daily_message: str
    daily_energy: Optional[str] = None
