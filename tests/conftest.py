"""
Pytest configuration and shared fixtures.
"""
import pytest
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional

from cyclefit.models.phase import CyclePhase
from cyclefit.models.reference import NutritionTemplate, ReferenceData, WorkoutTemplate
from cyclefit.models.user import UserProfile
from cyclefit.services.recommendation import RecommendationEngine
from cyclefit.services.reference import load_reference_data

TODAY = date(2025, 6, 1)

PHASE_ENERGY = {
    "menstrual": "low",
    "follicular": "rising",
    "ovulatory": "peak",
    "luteal": "declining"
}

class FirstChoice:
    """Random source stand-in that always picks the first candidate."""

    def choice(self, seq):
        return seq[0]

@dataclass
class FakeLambdaContext:
    function_name: str = "cyclefit-recommendation"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:eu-west-1:123456789012:function:cyclefit-recommendation"
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"

def days_ago(days: int, today: date = TODAY) -> str:
    """ISO date string for a period that started the given days before today."""
    return (today - timedelta(days=days)).isoformat()

def make_phase(phase_id: int, name: str, start_day: int, end_day: int, energy: str = "low") -> CyclePhase:
    return CyclePhase(
        phase_id=phase_id,
        phase_type=name.lower(),
        phase_name=name.title(),
        start_day=start_day,
        end_day=end_day,
        hormone_status=f"{name} hormones",
        energy_level=energy,
        description=f"{name} description"
    )

def make_reference(
    ranges: Optional[List[tuple]] = None,
    with_templates: bool = True
) -> ReferenceData:
    """
    Build a small synthetic reference table.

    Args:
        ranges: (phase_type, start_day, end_day) per phase
        with_templates: Whether to add workout and nutrition templates
    """
    ranges = ranges or [
        ("menstrual", 1, 5),
        ("follicular", 6, 14),
        ("ovulatory", 15, 17),
        ("luteal", 18, 28)
    ]
    phases = [
        make_phase(i + 1, name, start, end, PHASE_ENERGY[name])
        for i, (name, start, end) in enumerate(ranges)
    ]
    workouts = []
    nutrition = []
    if with_templates:
        workouts = [
            WorkoutTemplate(
                phase_id=phase.phase_id,
                workout_type=f"{phase.phase_name} workout",
                intensity="medium",
                duration_min=10 * phase.phase_id,
                focus_areas=[f"{phase.phase_type.value} focus"],
                recommended_activities=[f"{phase.phase_type.value} activity"]
            )
            for phase in phases
        ]
        nutrition = [
            NutritionTemplate(
                phase_id=phase.phase_id,
                key_nutrients=[f"{phase.phase_type.value} nutrient"],
                focus_foods=[f"{phase.phase_type.value} food"],
                avoid_foods=[f"{phase.phase_type.value} avoid"],
                reason=f"{phase.phase_name} reason"
            )
            for phase in phases
        ]
    return ReferenceData(cycle_phases=phases, base_workouts=workouts, base_nutrition=nutrition)

@pytest.fixture(scope="session")
def reference() -> ReferenceData:
    """Packaged reference tables."""
    return load_reference_data()

@pytest.fixture
def engine(reference) -> RecommendationEngine:
    """Engine pinned to TODAY with a deterministic message picker."""
    return RecommendationEngine(reference=reference, rng=FirstChoice(), clock=lambda: TODAY)

@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    return FakeLambdaContext()

@pytest.fixture
def base_profile() -> UserProfile:
    """Profile with only a period date, three days before TODAY."""
    return UserProfile(last_period_date=days_ago(3))
