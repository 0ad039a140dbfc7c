from math import floor, isfinite
from typing import Any, List, Mapping, Optional
from ..constants import (
    EMISSION_FACTORS, BASELINE_MODE, ZERO_BASELINE_EPSILON,
    EMISSION_DECIMALS, PERCENT_DECIMALS
)
from ..models import ModeComparison, SavingsResult
import logging

logger = logging.getLogger(__name__)


def round_half_up(value: float, decimals: int) -> float:
    """
    Round to a fixed number of decimals, halves going up on the scaled value:
    floor(value * 10**decimals + 0.5) / 10**decimals.
    Non-finite values give 0. Values too large to scale are returned as is,
    since they carry no fractional digits.
    """
    if not isfinite(value):
        return 0.0
    scale = 10 ** decimals
    scaled = value * scale + 0.5
    if not isfinite(scaled):
        return value
    return floor(scaled) / scale


def is_valid_amount(value: Any) -> bool:
    """
    True for finite, non-negative int/float values (bools are not amounts).
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isfinite(value) and value >= 0


def normalize_mode(mode: Any) -> str:
    return str(mode).strip().casefold()


# ============================================================================
# EMISSION CALCULATOR
# ============================================================================
# All functions below are total: invalid inputs degrade to zero (or an empty
# comparison) instead of raising.

def calculate_emission(
    distance_km: float,
    mode: str,
    factors: Optional[Mapping[str, float]] = None
) -> float:
    """
    Emission in kg CO2 for a trip: distance * factor(mode), rounded to 2 decimals.
    Invalid distance returns 0. An unknown mode returns 0 and logs a warning.
    """
    if not is_valid_amount(distance_km):
        return 0.0

    table = EMISSION_FACTORS if factors is None else factors
    key = normalize_mode(mode)
    if key not in table:
        logger.warning(f"Unknown transport mode: '{key}'")
        return 0.0

    return round_half_up(distance_km * table[key], EMISSION_DECIMALS)


def calculate_all_modes(
    distance_km: float,
    factors: Optional[Mapping[str, float]] = None
) -> List[ModeComparison]:
    """
    Emission for every configured mode, lowest first (stable on table order),
    each with its percentage of the car emission. The car row is always 100%.
    A zero car emission is replaced by a small epsilon divisor.
    """
    if not is_valid_amount(distance_km):
        return []

    table = EMISSION_FACTORS if factors is None else factors

    car_emission = calculate_emission(distance_km, BASELINE_MODE, table)
    if car_emission == 0:
        car_emission = ZERO_BASELINE_EPSILON

    results = []
    for mode in table:
        emission = calculate_emission(distance_km, mode, table)
        if mode == BASELINE_MODE:
            percentage = 100.0
        else:
            percentage = round_half_up(emission / car_emission * 100, PERCENT_DECIMALS)
        results.append(ModeComparison(mode=mode, emission=emission, percentage_vs_car=percentage))

    return sorted(results, key=lambda r: r.emission)


def calculate_savings(emission: float, baseline: float) -> SavingsResult:
    """
    Reduction of an emission against a baseline (typically car).
    Negative or non-numeric inputs count as 0; savings never go below 0.
    """
    if not is_valid_amount(emission):
        emission = 0.0
    if not is_valid_amount(baseline):
        baseline = 0.0

    saved_kg = max(0.0, baseline - emission)
    percentage = saved_kg / baseline * 100 if baseline > 0 else 0.0

    return SavingsResult(
        saved_kg=round_half_up(saved_kg, EMISSION_DECIMALS),
        percentage=round_half_up(percentage, PERCENT_DECIMALS)
    )
