import logging
import pytest

from trip_carbon.models import Route
from trip_carbon.routes import (
    ROUTES, DEFAULT_DIRECTORY, RouteDirectory, all_cities, find_distance, collation_key
)


def test_find_distance_case_and_whitespace_insensitive():
    assert find_distance(" são paulo, sp ", "RIO DE JANEIRO, RJ") == 430


def test_find_distance_is_symmetric_for_every_stored_pair():
    for route in ROUTES:
        forward = find_distance(route.origin, route.destination)
        backward = find_distance(route.destination, route.origin)
        assert forward is not None, f"{route.origin} -> {route.destination}"
        assert forward == backward


def test_find_distance_not_found_is_none_not_zero():
    assert find_distance("São Paulo, SP", "Lisboa, PT") is None
    assert find_distance("", "Rio de Janeiro, RJ") is None
    assert find_distance("São Paulo, SP", "   ") is None
    assert find_distance(None, "Rio de Janeiro, RJ") is None
    assert find_distance(42, 17) is None


def test_first_entry_wins_for_conflicting_pair():
    # Stored twice: Fortaleza -> Natal 530, later Natal -> Fortaleza 535
    assert find_distance("Natal, RN", "Fortaleza, CE") == 530
    assert find_distance("Fortaleza, CE", "Natal, RN") == 530


def test_default_table_duplicates_are_recorded():
    dup_pairs = {(r.origin, r.destination) for r in DEFAULT_DIRECTORY.duplicates}
    assert ("Belém, PA", "Manaus, AM") in dup_pairs
    assert ("Natal, RN", "Fortaleza, CE") in dup_pairs
    assert len(DEFAULT_DIRECTORY.unique_routes()) == len(ROUTES) - len(DEFAULT_DIRECTORY.duplicates)


def test_conflicting_duplicate_logs_warning(caplog):
    routes = [
        Route("A, XX", "B, XX", 100),
        Route("b, xx", "a, xx", 120),
        Route("A, XX", "B, XX", 100),
    ]
    with caplog.at_level(logging.DEBUG, logger="trip_carbon.routes"):
        directory = RouteDirectory(routes)

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "Conflicting route" in warnings[0].getMessage()
    assert len(directory.duplicates) == 2
    assert directory.find_distance("B, XX", "A, XX") == 100


def test_invalid_route_distance_rejected_at_load():
    with pytest.raises(ValueError):
        RouteDirectory([Route("A, XX", "B, XX", 0)])
    with pytest.raises(ValueError):
        RouteDirectory([Route("A, XX", "B, XX", -10)])
    with pytest.raises(ValueError):
        RouteDirectory([Route("A, XX", "B, XX", "100")])


def test_all_cities_unique_and_complete():
    cities = all_cities()
    expected = {r.origin for r in ROUTES} | {r.destination for r in ROUTES}
    assert len(cities) == len(set(cities))
    assert set(cities) == expected


def test_all_cities_uses_collation_not_code_points():
    cities = all_cities()
    # Code-point order would put "Belo" before "Belém" ('o' < 'é')
    assert cities.index("Belém, PA") < cities.index("Belo Horizonte, MG")
    assert cities.index("Campina Grande, PB") < cities.index("Campinas, SP")
    assert cities.index("Santos, SP") < cities.index("São José do Rio Preto, SP")
    assert cities.index("São José do Rio Preto, SP") < cities.index("São Luís, MA") < cities.index("São Paulo, SP")
    assert cities == sorted(cities, key=collation_key)


def test_all_cities_returns_a_copy():
    cities = all_cities()
    cities.clear()
    assert len(all_cities()) > 0


def test_empty_directory():
    directory = RouteDirectory([])
    assert directory.all_cities() == []
    assert directory.find_distance("A", "B") is None
    assert len(directory) == 0
