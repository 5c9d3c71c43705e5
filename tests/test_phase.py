"""
Tests for phase resolution and phase range integrity.
"""
import pytest
from pydantic import ValidationError

from cyclefit.models.phase import CyclePhaseType, EnergyLevel
from cyclefit.services.exceptions import ReferenceDataError
from cyclefit.services.phase import determine_cycle_phase, resolve_phase
from tests.conftest import make_phase, make_reference

def test_phase_ranges_partition_cycle(reference):
    """Every day 1..28 belongs to exactly one packaged phase."""
    for day in range(1, 29):
        matches = [phase for phase in reference.cycle_phases if phase.contains(day)]
        assert len(matches) == 1, f"day {day} matched {len(matches)} phases"
    assert reference.phase_coverage_gaps() == []
    assert sum(phase.length for phase in reference.cycle_phases) == 28

@pytest.mark.parametrize("day,expected", [
    (1, CyclePhaseType.MENSTRUAL),
    (5, CyclePhaseType.MENSTRUAL),
    (6, CyclePhaseType.FOLLICULAR),
    (14, CyclePhaseType.FOLLICULAR),
    (15, CyclePhaseType.OVULATORY),
    (17, CyclePhaseType.OVULATORY),
    (18, CyclePhaseType.LUTEAL),
    (28, CyclePhaseType.LUTEAL),
])
def test_phase_transition_days(reference, day, expected):
    assert determine_cycle_phase(day, reference).phase_type == expected

def test_resolve_phase_returns_matching_templates(reference):
    resolution = resolve_phase(3, reference)

    assert resolution.phase.phase_name == "Menstrual"
    assert resolution.phase.energy_level == EnergyLevel.LOW
    assert resolution.workout_template.phase_id == resolution.phase.phase_id
    assert resolution.workout_template.duration_min == 25
    assert resolution.nutrition_template.phase_id == resolution.phase.phase_id
    assert "iron" in resolution.nutrition_template.key_nutrients

@pytest.mark.parametrize("day,duration", [(3, 25), (10, 40), (16, 50), (20, 35)])
def test_base_durations(reference, day, duration):
    assert resolve_phase(day, reference).workout_template.duration_min == duration

def test_gap_in_ranges_falls_back_to_last_phase():
    """Ovulatory range missing: days 15-17 resolve to the last phase."""
    reference = make_reference(ranges=[
        ("menstrual", 1, 5),
        ("follicular", 6, 14),
        ("luteal", 18, 28)
    ])

    assert reference.phase_coverage_gaps() == [15, 16, 17]
    for day in (15, 16, 17):
        assert determine_cycle_phase(day, reference).phase_type == CyclePhaseType.LUTEAL
    assert determine_cycle_phase(14, reference).phase_type == CyclePhaseType.FOLLICULAR

def test_out_of_range_day_falls_back_to_last_phase(reference):
    assert determine_cycle_phase(40, reference).phase_type == CyclePhaseType.LUTEAL

def test_overlapping_ranges_are_reported():
    reference = make_reference(ranges=[
        ("menstrual", 1, 6),
        ("follicular", 6, 14),
        ("ovulatory", 15, 17),
        ("luteal", 18, 28)
    ])
    assert reference.phase_coverage_gaps() == [6]
    # First matching phase wins
    assert determine_cycle_phase(6, reference).phase_type == CyclePhaseType.MENSTRUAL

def test_missing_templates_raise_reference_error():
    reference = make_reference(with_templates=False)
    with pytest.raises(ReferenceDataError, match="Missing base templates"):
        resolve_phase(3, reference)

def test_phase_range_must_be_ordered():
    with pytest.raises(ValidationError):
        make_phase(1, "menstrual", 5, 1)

def test_phase_days_must_be_in_cycle():
    with pytest.raises(ValidationError):
        make_phase(1, "menstrual", 0, 5)
