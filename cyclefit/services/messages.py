"""
Daily nudge messages keyed by the phase's energy level.

Messages are presentation flavor. The random source is injectable so
callers that need repeatable output can pass a seeded random.Random.
"""
import random
from typing import Optional, Union

from cyclefit.models.phase import EnergyLevel
from cyclefit.services.constants import DAILY_MESSAGES, FALLBACK_MESSAGE_LEVEL

def message_pool(energy_level: Union[EnergyLevel, str, None]) -> list:
    """Candidate messages for an energy level, rising pool for unknown levels."""
    try:
        level = EnergyLevel(energy_level)
    except ValueError:
        level = FALLBACK_MESSAGE_LEVEL
    return DAILY_MESSAGES[level]

def select_daily_message(
    energy_level: Union[EnergyLevel, str, None],
    rng: Optional[random.Random] = None
) -> str:
    """
    Pick one message for the energy level.

    Args:
        energy_level: Phase energy level
        rng: Object with a choice() method, defaults to the random module

    Returns:
        One of the candidate messages
    """
    chooser = rng if rng is not None else random
    return chooser.choice(message_pool(energy_level))
