from typing import Any
from ..constants import CURRENCY, CURRENCY_SYMBOLS, TRANSPORT_MODE_META
from ..models import TransportModeInfo


def format_number(value: Any, decimals: int = 0) -> str:
    """
    Format a number pt-BR style: '.' groups thousands, ',' separates decimals.
    Non-numeric values are shown as 0.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value != value:
        value = 0
    text = f"{value:,.{decimals}f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_currency(value: Any, currency: str = CURRENCY) -> str:
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    return f"{symbol} {format_number(value, 2)}"


def mode_info(mode: str) -> TransportModeInfo:
    """Display metadata for a mode; unknown modes use their identifier as label."""
    meta = TRANSPORT_MODE_META.get(mode)
    if meta is None:
        return TransportModeInfo(label=mode)
    return TransportModeInfo(**meta)


def mode_label(mode: str, with_icon: bool = False) -> str:
    info = mode_info(mode)
    if with_icon and info.icon:
        return f"{info.icon} {info.label}"
    return info.label
