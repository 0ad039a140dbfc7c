from dataclasses import dataclass, field
from typing import List, Optional
from .constants import DistanceSource


@dataclass(frozen=True)
class Route:
    """
    A stored city-pair distance. City names use the "City, Region" form
    (e.g. "São Paulo, SP"); the pair is direction-agnostic under lookup.
    """
    origin: str
    destination: str
    distance_km: float


@dataclass(frozen=True)
class TransportModeInfo:
    """Display metadata for a transport mode."""
    label: str
    icon: str = ""
    color: str = "#5D6D7E"


@dataclass(frozen=True)
class CreditPriceConfig:
    """
    Carbon credit conversion and market price range:
    - kg_per_credit: kg CO2 represented by one credit (> 0)
    - price_min_per_credit / price_max_per_credit: price range per credit (min <= max)
    - currency: ISO code the prices are expressed in
    """
    kg_per_credit: float
    price_min_per_credit: float
    price_max_per_credit: float
    currency: str = "BRL"

    def __post_init__(self):
        if self.kg_per_credit <= 0:
            raise ValueError("kg_per_credit must be > 0")
        if self.price_min_per_credit < 0:
            raise ValueError("price_min_per_credit must be >= 0")
        if self.price_min_per_credit > self.price_max_per_credit:
            raise ValueError("price_min_per_credit must not exceed price_max_per_credit")


@dataclass
class EmissionResult:
    mode: str
    distance_km: float
    emission_kg: float


@dataclass
class ModeComparison:
    """One row of the all-modes comparison, relative to the car baseline."""
    mode: str
    emission: float
    percentage_vs_car: float


@dataclass
class SavingsResult:
    saved_kg: float = 0.0
    percentage: float = 0.0


@dataclass
class PriceEstimate:
    min_price: float = 0.0
    max_price: float = 0.0
    average_price: float = 0.0


@dataclass
class CreditEstimate:
    """
    Credits needed to offset an emission and their estimated cost range.
    """
    credits: float
    price_min: float
    price_max: float
    price_average: float
    currency: str = "BRL"


@dataclass
class TripAssessment:
    """
    Summary of one trip query: selected mode result, car baseline,
    savings, comparison across all modes and offset estimate.
    """
    origin: str
    destination: str
    distance_km: float
    distance_source: DistanceSource
    result: EmissionResult
    baseline_emission_kg: float
    savings: SavingsResult
    credits: CreditEstimate
    comparison: List[ModeComparison] = field(default_factory=list)

    @property
    def mode(self) -> str:
        return self.result.mode

    @property
    def emission_kg(self) -> float:
        return self.result.emission_kg

    def comparison_for(self, mode: str) -> Optional[ModeComparison]:
        for row in self.comparison:
            if row.mode == mode:
                return row
        return None
