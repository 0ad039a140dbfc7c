from types import MappingProxyType
from typing import Literal
from .config import load_parameters, emission_factors_from

# ============================================================================
# SETTINGS & CONSTANTS
# ============================================================================

# Load configuration once at import: defaults overlaid with the optional
# parameter workbook. Invalid parameters raise ValueError here.
_config = load_parameters()

# Emission factors (kg CO2 per km), read-only, in configured order
EMISSION_FACTORS = MappingProxyType(emission_factors_from(_config))

# Baseline mode for savings and comparison percentages
BASELINE_MODE = "car"

# Divisor substituted when the baseline emission is exactly zero
ZERO_BASELINE_EPSILON = 0.001

# Carbon credits
KG_PER_CREDIT = _config["KG_PER_CREDIT"]
PRICE_MIN_PER_CREDIT = _config["PRICE_MIN_PER_CREDIT"]
PRICE_MAX_PER_CREDIT = _config["PRICE_MAX_PER_CREDIT"]
CURRENCY = _config["CURRENCY"]

# Rounding
EMISSION_DECIMALS = 2
PERCENT_DECIMALS = 2
CREDIT_DECIMALS = 4
PRICE_DECIMALS = 2

# Display metadata (label, icon, colour) per mode
TRANSPORT_MODE_META = MappingProxyType({
    "bicycle": {"label": "Bicycle", "icon": "🚲", "color": "#10b981"},
    "car": {"label": "Car", "icon": "🚗", "color": "#f59e0b"},
    "bus": {"label": "Bus", "icon": "🚌", "color": "#3b82f6"},
    "truck": {"label": "Truck", "icon": "🚚", "color": "#ef4444"},
})

CURRENCY_SYMBOLS = MappingProxyType({
    "BRL": "R$",
    "USD": "US$",
    "EUR": "€",
})

# ============================================================================
# TYPES (Code constructs, not workbook parameters)
# ============================================================================

TransportMode = Literal["bicycle", "car", "bus", "truck"]
DistanceSource = Literal["route_table", "manual"]
