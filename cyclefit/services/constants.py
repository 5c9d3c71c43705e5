"""
Constants and shared data for cycle-related services.
"""
from typing import Dict, List

from cyclefit.models.phase import EnergyLevel

CYCLE_LENGTH = 28

# Same-day logs and future period dates both count as the first cycle day
FIRST_CYCLE_DAY = 1

REFERENCE_DATA_ENV = "CYCLEFIT_REFERENCE_DATA"
REFERENCE_DATA_FILE = "fitness_database.json"

FALLBACK_MESSAGE_LEVEL = EnergyLevel.RISING

DAILY_MESSAGES: Dict[EnergyLevel, List[str]] = {
    EnergyLevel.LOW: [
        "Take it easy today - gentle movement will help you feel better.",
        "Your body needs rest. Focus on nurturing activities.",
        "Low energy is normal. Be kind to yourself."
    ],
    EnergyLevel.RISING: [
        "Your energy is building! Great time to start new activities.",
        "Feeling more energetic? Perfect for moderate workouts.",
        "Your body is preparing for action!"
    ],
    EnergyLevel.PEAK: [
        "Peak energy time! Go for that challenging workout.",
        "You're unstoppable today - make the most of it!",
        "Perfect day for your most intense activities."
    ],
    EnergyLevel.DECLINING: [
        "Steady and sustainable is the way to go today.",
        "Focus on consistent, manageable activities.",
        "Your body is preparing for rest - honor that."
    ]
}
