from .models import (
    Route,
    TransportModeInfo,
    CreditPriceConfig,
    EmissionResult,
    ModeComparison,
    SavingsResult,
    PriceEstimate,
    CreditEstimate,
    TripAssessment
)
from .constants import (
    EMISSION_FACTORS,
    BASELINE_MODE
)
from .routes import RouteDirectory, all_cities, find_distance
from .utils.calculations import calculate_emission, calculate_all_modes, calculate_savings
from .credits import to_credits, estimate_price, estimate_credits
from .trip import assess_trip, assess_route_table, TripInputError

__all__ = [
    "Route",
    "TransportModeInfo",
    "CreditPriceConfig",
    "EmissionResult",
    "ModeComparison",
    "SavingsResult",
    "PriceEstimate",
    "CreditEstimate",
    "TripAssessment",
    "EMISSION_FACTORS",
    "BASELINE_MODE",
    "RouteDirectory",
    "all_cities",
    "find_distance",
    "calculate_emission",
    "calculate_all_modes",
    "calculate_savings",
    "to_credits",
    "estimate_price",
    "estimate_credits",
    "assess_trip",
    "assess_route_table",
    "TripInputError",
]
