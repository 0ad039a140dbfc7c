import logging
import pandas as pd
import pytest

from trip_carbon import config
from trip_carbon.config import (
    DEFAULT_PARAMETERS, load_excel_config, load_parameters, validate_parameters,
    emission_factors_from, write_parameter_template, resolve_config_path
)


def test_defaults_validate():
    params = validate_parameters(dict(DEFAULT_PARAMETERS))
    assert emission_factors_from(params) == {"bicycle": 0.0, "car": 0.12, "bus": 0.089, "truck": 0.96}
    assert params["KG_PER_CREDIT"] == 1000.0
    assert params["PRICE_MIN_PER_CREDIT"] == 50.0
    assert params["PRICE_MAX_PER_CREDIT"] == 150.0
    assert params["CURRENCY"] == "BRL"


def test_missing_workbook_uses_defaults(tmp_path):
    missing = tmp_path / "nope.xlsx"
    assert load_excel_config(str(missing)) == {}
    assert load_parameters(str(missing)) == validate_parameters(dict(DEFAULT_PARAMETERS))


def test_template_round_trip_with_overrides(tmp_path):
    print("Testing Parameter Loading...")
    path = str(tmp_path / "params" / "project_parameters.xlsx")
    write_parameter_template(path, overrides={
        "EMISSION_FACTOR_CAR": 0.2,
        "EMISSION_FACTOR_TRAIN": 0.041,
        "CURRENCY": "usd",
    })

    raw = load_excel_config(path)
    assert float(raw["EMISSION_FACTOR_CAR"]) == 0.2

    params = load_parameters(path)
    factors = emission_factors_from(params)
    assert factors["car"] == 0.2
    assert factors["bus"] == 0.089
    assert list(factors) == ["bicycle", "car", "bus", "truck", "train"]
    assert params["CURRENCY"] == "USD"
    print("PASS")


def test_workbook_without_key_column_is_ignored(tmp_path, caplog):
    path = str(tmp_path / "bad.xlsx")
    pd.DataFrame({"Name": ["KG_PER_CREDIT"], "Amount": [1]}).to_excel(path, index=False)
    with caplog.at_level(logging.WARNING, logger="trip_carbon.config"):
        assert load_excel_config(path) == {}
    assert any("missing 'Key' or 'Value'" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize("overrides", [
    {"EMISSION_FACTOR_CAR": -0.1},
    {"EMISSION_FACTOR_BUS": "lots"},
    {"KG_PER_CREDIT": 0},
    {"PRICE_MIN_PER_CREDIT": 200},
    {"PRICE_MIN_PER_CREDIT": -5},
    {"CURRENCY": "  "},
    {"KG_PER_CREDIT": float("nan")},
    {"CURRENCY": float("nan")},
    {"CURRENCY": None},
])
def test_invalid_parameters_rejected(overrides):
    params = dict(DEFAULT_PARAMETERS)
    params.update(overrides)
    with pytest.raises(ValueError):
        validate_parameters(params)


def test_unknown_keys_are_dropped():
    params = dict(DEFAULT_PARAMETERS)
    params["SOMETHING_ELSE"] = 3
    assert "SOMETHING_ELSE" not in validate_parameters(params)


def test_config_path_from_environment(monkeypatch, tmp_path):
    target = str(tmp_path / "custom.xlsx")
    monkeypatch.setenv(config.CONFIG_PATH_ENV_VAR, target)
    assert resolve_config_path() == target

    monkeypatch.delenv(config.CONFIG_PATH_ENV_VAR)
    assert resolve_config_path() == config.DEFAULT_CONFIG_PATH


def test_blank_currency_cell_is_rejected(tmp_path):
    path = str(tmp_path / "blank_currency.xlsx")
    pd.DataFrame({"Key": ["CURRENCY"], "Value": [None]}).to_excel(path, index=False)

    assert pd.isna(load_excel_config(path)["CURRENCY"])
    with pytest.raises(ValueError, match="CURRENCY"):
        load_parameters(path)
