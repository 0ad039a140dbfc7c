import pytest

from trip_carbon.models import Route
from trip_carbon.routes import RouteDirectory, DEFAULT_DIRECTORY
from trip_carbon.credits import estimate_price
from trip_carbon.trip import assess_trip, assess_route_table, TripInputError


def test_assess_trip_from_route_table():
    a = assess_trip("São Paulo, SP", "Rio de Janeiro, RJ", "bus")

    assert a.distance_km == 430
    assert a.distance_source == "route_table"
    assert a.mode == "bus"
    assert a.emission_kg == 38.27
    assert a.baseline_emission_kg == 51.6
    assert a.savings.saved_kg == 13.33
    assert a.savings.percentage == 25.83
    assert a.credits.credits == 0.0383

    price = estimate_price(a.credits.credits)
    assert a.credits.price_min == price.min_price
    assert a.credits.price_max == price.max_price
    assert a.credits.price_min <= a.credits.price_average <= a.credits.price_max

    assert [c.mode for c in a.comparison] == ["bicycle", "bus", "car", "truck"]
    assert a.comparison_for("car").percentage_vs_car == 100.0
    assert a.comparison_for("plane") is None


def test_assess_trip_manual_distance():
    a = assess_trip("Cidade A", "Cidade B", " CAR ", distance_km=100)
    assert a.distance_source == "manual"
    assert a.mode == "car"
    assert a.emission_kg == 12.0
    assert a.savings.saved_kg == 0
    assert a.credits.credits == 0.012


def test_assess_trip_bicycle_saves_everything():
    a = assess_trip("rio de janeiro, rj", "NITERÓI, RJ", "bicycle")
    assert a.distance_km == 13
    assert a.emission_kg == 0
    assert a.savings.percentage == 100.0
    assert a.credits.credits == 0
    assert a.credits.price_average == 0


def test_assess_trip_requires_cities():
    with pytest.raises(TripInputError):
        assess_trip("", "Rio de Janeiro, RJ", "car")
    with pytest.raises(TripInputError):
        assess_trip("São Paulo, SP", "   ", "car", distance_km=10)


def test_assess_trip_unknown_route_needs_manual_distance():
    with pytest.raises(TripInputError) as excinfo:
        assess_trip("São Paulo, SP", "Lisboa, PT", "car")
    assert "manually" in str(excinfo.value)


@pytest.mark.parametrize("distance", [0, -10, "100", True, float("nan")])
def test_assess_trip_rejects_invalid_distance(distance):
    with pytest.raises(TripInputError):
        assess_trip("A", "B", "car", distance_km=distance)


def test_assess_trip_rejects_unknown_mode():
    with pytest.raises(TripInputError) as excinfo:
        assess_trip("São Paulo, SP", "Rio de Janeiro, RJ", "plane")
    assert "bicycle" in str(excinfo.value)


def test_trip_input_error_is_value_error():
    assert issubclass(TripInputError, ValueError)


def test_assess_trip_custom_directory():
    directory = RouteDirectory([Route("Porto, PT", "Lisboa, PT", 313)])
    a = assess_trip("lisboa, pt", "porto, pt", "truck", directory=directory)
    assert a.distance_km == 313
    assert a.emission_kg == 300.48


def test_assess_route_table_skips_repeated_pairs():
    assessments = assess_route_table("car")
    assert len(assessments) == len(DEFAULT_DIRECTORY.unique_routes())
    assert all(a.distance_source == "route_table" for a in assessments)
    assert all(a.mode == "car" for a in assessments)
    assert all(a.savings.saved_kg == 0 for a in assessments)


def test_assess_route_table_unknown_mode():
    with pytest.raises(TripInputError):
        assess_route_table("plane")
