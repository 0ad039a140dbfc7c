import logging
from typing import Any, List, Optional
from .constants import EMISSION_FACTORS, BASELINE_MODE
from .models import EmissionResult, TripAssessment
from .routes import RouteDirectory, DEFAULT_DIRECTORY
from .credits import estimate_credits
from .utils.calculations import (
    calculate_emission, calculate_all_modes, calculate_savings, normalize_mode
)

logger = logging.getLogger(__name__)


class TripInputError(ValueError):
    """Raised when a trip query cannot be assessed as entered."""


def assess_trip(
    origin: str,
    destination: str,
    mode: str,
    distance_km: Optional[float] = None,
    directory: Optional[RouteDirectory] = None
) -> TripAssessment:
    """
    Assess one trip end to end.

    The distance comes from the route table unless ``distance_km`` is given.
    Unlike the calculator functions this validates its input and raises
    TripInputError, so callers can ask the user again.
    """
    if directory is None:
        directory = DEFAULT_DIRECTORY

    origin = "" if origin is None else str(origin).strip()
    destination = "" if destination is None else str(destination).strip()
    if not origin or not destination:
        raise TripInputError("Origin and destination are required.")

    # 1. Distance
    if distance_km is None:
        distance_km = directory.find_distance(origin, destination)
        if distance_km is None:
            raise TripInputError(
                f"No stored route between {origin} and {destination}. Enter the distance manually."
            )
        source = "route_table"
    else:
        source = "manual"
        if isinstance(distance_km, bool) or not isinstance(distance_km, (int, float)) or not distance_km > 0:
            raise TripInputError(f"Invalid distance: {distance_km!r}. It must be a positive number of km.")

    # 2. Mode
    key = normalize_mode(mode)
    if key not in EMISSION_FACTORS:
        options = ", ".join(EMISSION_FACTORS)
        raise TripInputError(f"Unknown transport mode '{mode}'. Choose one of: {options}.")

    # 3. Emissions, savings vs car, comparison, offset
    emission = calculate_emission(distance_km, key)
    baseline = calculate_emission(distance_km, BASELINE_MODE)

    assessment = TripAssessment(
        origin=origin,
        destination=destination,
        distance_km=distance_km,
        distance_source=source,
        result=EmissionResult(mode=key, distance_km=distance_km, emission_kg=emission),
        baseline_emission_kg=baseline,
        savings=calculate_savings(emission, baseline),
        credits=estimate_credits(emission),
        comparison=calculate_all_modes(distance_km),
    )

    logger.debug(
        f"{origin} -> {destination} ({distance_km} km, {source}) by {key}: "
        f"{emission} kgCO2, {assessment.credits.credits} credits"
    )
    return assessment


def assess_route_table(mode: Any, directory: Optional[RouteDirectory] = None) -> List[TripAssessment]:
    """
    Assess every stored route for one mode. Repeated pairs are skipped,
    matching the first-entry-wins lookup.
    """
    if directory is None:
        directory = DEFAULT_DIRECTORY

    assessments = []
    for route in directory.unique_routes():
        assessments.append(assess_trip(route.origin, route.destination, mode, directory=directory))

    logger.info(f"Assessed {len(assessments)} routes for mode '{normalize_mode(mode)}'")
    return assessments
