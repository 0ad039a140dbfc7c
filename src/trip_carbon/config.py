import os
import pandas as pd
import logging
from typing import Dict, Any, List

logger = logging.getLogger(__name__)

# Parameter workbook location. The project root is two levels above this package
# (src/trip_carbon/config.py); TRIP_CARBON_PARAMETERS overrides it.
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, "data", "project_parameters.xlsx")
CONFIG_PATH_ENV_VAR = "TRIP_CARBON_PARAMETERS"

EMISSION_FACTOR_PREFIX = "EMISSION_FACTOR_"

# KEY: (Value, Unit, Section, Description)
# Keys are identical to the ones read back by load_parameters().
PARAMETER_ROWS: List[Dict[str, Any]] = [
    # --- SECTION: EMISSION FACTORS ---
    {
        "Key": "EMISSION_FACTOR_BICYCLE",
        "Value": 0.0,
        "Unit": "kgCO2/km",
        "Section": "1. Emission Factors",
        "Description": "Bicycle emission factor (zero tailpipe emissions)."
    },
    {
        "Key": "EMISSION_FACTOR_CAR",
        "Value": 0.12,
        "Unit": "kgCO2/km",
        "Section": "1. Emission Factors",
        "Description": "Average passenger car. Baseline for savings and comparisons."
    },
    {
        "Key": "EMISSION_FACTOR_BUS",
        "Value": 0.089,
        "Unit": "kgCO2/km",
        "Section": "1. Emission Factors",
        "Description": "Intercity bus, per passenger."
    },
    {
        "Key": "EMISSION_FACTOR_TRUCK",
        "Value": 0.96,
        "Unit": "kgCO2/km",
        "Section": "1. Emission Factors",
        "Description": "Heavy goods truck."
    },

    # --- SECTION: CARBON CREDITS ---
    {
        "Key": "KG_PER_CREDIT",
        "Value": 1000,
        "Unit": "kgCO2",
        "Section": "2. Carbon Credits",
        "Description": "Mass of CO2 represented by one carbon credit (1 tonne)."
    },
    {
        "Key": "PRICE_MIN_PER_CREDIT",
        "Value": 50.0,
        "Unit": "Currency",
        "Section": "2. Carbon Credits",
        "Description": "Lower bound of the market price of one credit."
    },
    {
        "Key": "PRICE_MAX_PER_CREDIT",
        "Value": 150.0,
        "Unit": "Currency",
        "Section": "2. Carbon Credits",
        "Description": "Upper bound of the market price of one credit."
    },
    {
        "Key": "CURRENCY",
        "Value": "BRL",
        "Unit": "Text",
        "Section": "2. Carbon Credits",
        "Description": "ISO currency code of the credit prices."
    },
]

DEFAULT_PARAMETERS: Dict[str, Any] = {row["Key"]: row["Value"] for row in PARAMETER_ROWS}

_SCALAR_KEYS = ("KG_PER_CREDIT", "PRICE_MIN_PER_CREDIT", "PRICE_MAX_PER_CREDIT", "CURRENCY")


def resolve_config_path() -> str:
    return os.environ.get(CONFIG_PATH_ENV_VAR) or DEFAULT_CONFIG_PATH


def load_excel_config(path: str) -> Dict[str, Any]:
    """
    Load configuration from Excel file.
    Expected columns: Key, Value (Unit, Section, Description are informative only).
    Returns a dictionary of Key -> Value; empty if the file is missing or unreadable.
    """
    config = {}
    if not os.path.exists(path):
        logger.info(f"No parameter workbook at {path}. Using defaults.")
        return config

    try:
        df = pd.read_excel(path)
        if "Key" in df.columns and "Value" in df.columns:
            for _, row in df.iterrows():
                key = str(row["Key"]).strip()
                if not key or key.lower() == "nan":
                    continue
                config[key] = row["Value"]
            logger.info(f"Loaded {len(config)} parameters from {path}")
        else:
            logger.warning(f"Excel file {path} missing 'Key' or 'Value' columns.")
    except Exception as e:
        logger.error(f"Failed to load config from {path}: {e}")

    return config


def _as_number(key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"Parameter '{key}' must be numeric, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Parameter '{key}' must be numeric, got {value!r}")
    if number != number:
        raise ValueError(f"Parameter '{key}' is empty")
    return number


def validate_parameters(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check a merged parameter set and return a normalised copy:
    numeric values as floats, the currency upper-cased, emission factor keys
    upper-cased. Raises ValueError on the first invalid entry.
    """
    clean: Dict[str, Any] = {}
    for key, value in params.items():
        if key.upper().startswith(EMISSION_FACTOR_PREFIX):
            factor = _as_number(key, value)
            if factor < 0:
                raise ValueError(f"Emission factor '{key}' must be >= 0, got {factor}")
            clean[key.upper()] = factor
        elif key == "CURRENCY":
            # An empty workbook cell reads back as NaN
            is_blank = value is None or (isinstance(value, float) and value != value)
            currency = "" if is_blank else str(value).strip().upper()
            if not currency:
                raise ValueError("Parameter 'CURRENCY' is empty")
            clean[key] = currency
        elif key in _SCALAR_KEYS:
            clean[key] = _as_number(key, value)
        else:
            logger.debug(f"Ignoring unknown parameter '{key}'")

    if clean["KG_PER_CREDIT"] <= 0:
        raise ValueError(f"KG_PER_CREDIT must be > 0, got {clean['KG_PER_CREDIT']}")
    if clean["PRICE_MIN_PER_CREDIT"] < 0:
        raise ValueError("PRICE_MIN_PER_CREDIT must be >= 0")
    if clean["PRICE_MIN_PER_CREDIT"] > clean["PRICE_MAX_PER_CREDIT"]:
        raise ValueError(
            f"PRICE_MIN_PER_CREDIT ({clean['PRICE_MIN_PER_CREDIT']}) exceeds "
            f"PRICE_MAX_PER_CREDIT ({clean['PRICE_MAX_PER_CREDIT']})"
        )
    return clean


def load_parameters(path: str = None) -> Dict[str, Any]:
    """
    Defaults overlaid with the parameter workbook (if any), validated.
    """
    params = dict(DEFAULT_PARAMETERS)
    params.update(load_excel_config(path or resolve_config_path()))
    return validate_parameters(params)


def emission_factors_from(params: Dict[str, Any]) -> Dict[str, float]:
    """
    Extract the mode -> factor table from a validated parameter set.
    Order follows the parameter order, so defaults come first and workbook-only
    modes are appended.
    """
    factors = {}
    for key, value in params.items():
        if key.startswith(EMISSION_FACTOR_PREFIX):
            mode = key[len(EMISSION_FACTOR_PREFIX):].strip().lower()
            if mode:
                factors[mode] = value
    return factors


def write_parameter_template(path: str, overrides: Dict[str, Any] = None) -> str:
    """
    Write the default parameters (optionally with overrides) as an editable,
    formatted workbook. Returns the path written.
    """
    rows = []
    for row in PARAMETER_ROWS:
        row = dict(row)
        if overrides and row["Key"] in overrides:
            row["Value"] = overrides[row["Key"]]
        rows.append(row)
    for key, value in (overrides or {}).items():
        if key not in DEFAULT_PARAMETERS:
            rows.append({"Key": key, "Value": value, "Unit": "-", "Section": "3. Custom", "Description": ""})

    df = pd.DataFrame(rows)
    df = df[["Key", "Value", "Unit", "Section", "Description"]]

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    writer = pd.ExcelWriter(path, engine="xlsxwriter")
    df.to_excel(writer, index=False, sheet_name="Parameters")

    workbook = writer.book
    worksheet = writer.sheets["Parameters"]

    header_fmt = workbook.add_format({
        "bold": True,
        "text_wrap": True,
        "valign": "top",
        "fg_color": "#4F81BD",
        "font_color": "#FFFFFF",
        "border": 1
    })
    value_fmt = workbook.add_format({
        "bg_color": "#FFFFCC",  # editable cells
        "border": 1
    })

    worksheet.set_column("A:A", 30)
    worksheet.set_column("B:B", 12, value_fmt)
    worksheet.set_column("C:C", 12)
    worksheet.set_column("D:D", 22)
    worksheet.set_column("E:E", 60)

    for col_num, value in enumerate(df.columns.values):
        worksheet.write(0, col_num, value, header_fmt)

    writer.close()
    logger.info(f"Parameter template written to {path}")
    return path
