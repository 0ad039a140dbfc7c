import logging
import unicodedata
from typing import Any, Dict, Iterable, List, Optional, Tuple
from .models import Route

logger = logging.getLogger(__name__)

# ============================================================================
# ROUTE TABLE
# ============================================================================
# Road distances between Brazilian cities, "City, ST" names.
# Direction does not matter; for a repeated pair the first entry wins.

ROUTES: Tuple[Route, ...] = (
    Route("São Paulo, SP", "Rio de Janeiro, RJ", 430),
    Route("São Paulo, SP", "Brasília, DF", 1015),
    Route("Rio de Janeiro, RJ", "Brasília, DF", 1148),
    Route("São Paulo, SP", "Campinas, SP", 95),
    Route("Rio de Janeiro, RJ", "Niterói, RJ", 13),
    Route("Belo Horizonte, MG", "Ouro Preto, MG", 100),
    Route("Porto Alegre, RS", "Florianópolis, SC", 460),
    Route("Porto Alegre, RS", "Curitiba, PR", 710),
    Route("Curitiba, PR", "Florianópolis, SC", 300),
    Route("Salvador, BA", "Feira de Santana, BA", 100),
    Route("Salvador, BA", "Recife, PE", 800),
    Route("Recife, PE", "João Pessoa, PB", 120),
    Route("Fortaleza, CE", "Natal, RN", 530),
    Route("Fortaleza, CE", "São Luís, MA", 870),
    Route("Manaus, AM", "Belém, PA", 1740),
    Route("Belém, PA", "Macapá, AP", 520),
    Route("Goiânia, GO", "Brasília, DF", 200),
    Route("Goiânia, GO", "Uberlândia, MG", 450),
    Route("Uberlândia, MG", "Ribeirão Preto, SP", 320),
    Route("Ribeirão Preto, SP", "São José do Rio Preto, SP", 220),
    Route("Maceió, AL", "Aracaju, SE", 270),
    Route("Teresina, PI", "São Luís, MA", 320),
    Route("Campo Grande, MS", "Cuiabá, MT", 700),
    Route("Cuiabá, MT", "Porto Velho, RO", 780),
    Route("Belém, PA", "Manaus, AM", 1740),
    Route("Belo Horizonte, MG", "Rio de Janeiro, RJ", 440),
    Route("Belo Horizonte, MG", "São Paulo, SP", 586),
    Route("Porto Alegre, RS", "São Paulo, SP", 1120),
    Route("Recife, PE", "Fortaleza, CE", 815),
    Route("São Paulo, SP", "Santos, SP", 75),
    Route("Campina Grande, PB", "João Pessoa, PB", 120),
    Route("Natal, RN", "Fortaleza, CE", 535),
    Route("Caxias do Sul, RS", "Porto Alegre, RS", 130),
    Route("Vitória, ES", "Belo Horizonte, MG", 520),
    Route("Campos dos Goytacazes, RJ", "Rio de Janeiro, RJ", 280),
    Route("Petrolina, PE", "Juazeiro, BA", 10),
)


def normalize_city(name: Any) -> str:
    """Comparison form of a city name: trimmed and case-folded."""
    return str(name).strip().casefold()


def collation_key(name: str) -> Tuple[str, str, str]:
    """
    Sort key approximating locale collation: accents ignored first,
    then case, then the exact text as a final tie-break.
    """
    decomposed = unicodedata.normalize("NFD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), name.casefold(), name)


def _pair_key(a: str, b: str) -> Tuple[str, str]:
    x, y = normalize_city(a), normalize_city(b)
    return (x, y) if x <= y else (y, x)


class RouteDirectory:
    """
    Read-only distance lookup over an ordered route table.

    Lookups go through a symmetric index keyed by the unordered city pair.
    Repeated pairs keep the first distance; they are recorded in
    ``duplicates`` and logged when the distances disagree.
    """

    def __init__(self, routes: Iterable[Route]):
        self._routes: Tuple[Route, ...] = tuple(routes)
        self._index: Dict[Tuple[str, str], float] = {}
        self._unique: List[Route] = []
        self.duplicates: List[Route] = []

        for route in self._routes:
            distance = route.distance_km
            if isinstance(distance, bool) or not isinstance(distance, (int, float)) or not distance > 0:
                raise ValueError(
                    f"Route {route.origin} -> {route.destination} has invalid distance {distance!r}"
                )

            key = _pair_key(route.origin, route.destination)
            if key in self._index:
                self.duplicates.append(route)
                kept = self._index[key]
                if kept != distance:
                    logger.warning(
                        f"Conflicting route {route.origin} <-> {route.destination}: "
                        f"{distance} km ignored, keeping {kept} km"
                    )
                else:
                    logger.debug(f"Duplicate route {route.origin} <-> {route.destination} ({distance} km)")
                continue
            self._index[key] = distance
            self._unique.append(route)

        cities = {r.origin for r in self._routes} | {r.destination for r in self._routes}
        self._cities: Tuple[str, ...] = tuple(sorted(cities, key=collation_key))

    @property
    def routes(self) -> Tuple[Route, ...]:
        return self._routes

    def unique_routes(self) -> List[Route]:
        """Routes whose pair is seen for the first time, in table order."""
        return list(self._unique)

    def __len__(self) -> int:
        return len(self._routes)

    def all_cities(self) -> List[str]:
        """Unique city names from both route ends, in collation order."""
        return list(self._cities)

    def find_distance(self, origin: Any, destination: Any) -> Optional[float]:
        """
        Distance in km between two cities in either direction, or None if
        either name is blank or the pair is not in the table. Never raises.
        """
        if origin is None or destination is None:
            return None
        if not normalize_city(origin) or not normalize_city(destination):
            return None
        return self._index.get(_pair_key(origin, destination))


DEFAULT_DIRECTORY = RouteDirectory(ROUTES)


def all_cities() -> List[str]:
    return DEFAULT_DIRECTORY.all_cities()


def find_distance(origin: Any, destination: Any) -> Optional[float]:
    return DEFAULT_DIRECTORY.find_distance(origin, destination)
