"""
User profile model consumed by the recommendation engine.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserProfile(BaseModel):
    """
    Profile attributes supplied by the calling application for one request.

    The period date is kept as text so that malformed values reach the
    cycle calculator and are absorbed there instead of failing validation.
    """
    model_config = ConfigDict(extra="ignore")

    age: Optional[int] = Field(None, ge=0, le=120)
    fitness_level: Optional[str] = None
    health_goals: List[str] = Field(default_factory=list)
    health_conditions: List[str] = Field(default_factory=list)
    last_period_date: Optional[str] = None
    daily_energy: Optional[str] = None

    @field_validator("health_goals", "health_conditions", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return [] if value is None else value

    @field_validator("last_period_date", mode="before")
    @classmethod
    def stringify_date(cls, value):
        # date/datetime objects from a database row arrive here too
        if value is None or isinstance(value, str):
            return value
        if hasattr(value, "isoformat"):
            return value.isoformat()
        return str(value)
