"""
Phase model definition for menstrual cycle phases.
"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, model_validator

class CyclePhaseType(str, Enum):
    """
    The four segments of a normalized 28-day cycle.
    """
    MENSTRUAL = "menstrual"
    FOLLICULAR = "follicular"
    OVULATORY = "ovulatory"
    LUTEAL = "luteal"

class EnergyLevel(str, Enum):
    """
    Typical energy trend for a phase.
    """
    LOW = "low"
    RISING = "rising"
    PEAK = "peak"
    DECLINING = "declining"

class CyclePhase(BaseModel):
    """
    Represents a phase of the cycle with its inclusive day range and
    hormonal context.
    """
    model_config = ConfigDict(frozen=True)

    phase_id: int
    phase_type: CyclePhaseType
    phase_name: str
    start_day: int = Field(..., ge=1, le=28)
    end_day: int = Field(..., ge=1, le=28)
    hormone_status: str
    energy_level: EnergyLevel
    description: str

    @model_validator(mode="after")
    def check_day_range(self) -> "CyclePhase":
        if self.start_day > self.end_day:
            raise ValueError(
                f"Phase {self.phase_name} starts on day {self.start_day} "
                f"after it ends on day {self.end_day}"
            )
        return self

    def contains(self, day_of_cycle: int) -> bool:
        """Check whether the cycle day falls inside this phase (inclusive)."""
        return self.start_day <= day_of_cycle <= self.end_day

    @property
    def length(self) -> int:
        return self.end_day - self.start_day + 1
