from typing import Optional
from .constants import (
    KG_PER_CREDIT, PRICE_MIN_PER_CREDIT, PRICE_MAX_PER_CREDIT, CURRENCY,
    CREDIT_DECIMALS, PRICE_DECIMALS
)
from .models import CreditPriceConfig, PriceEstimate, CreditEstimate
from .utils.calculations import round_half_up, is_valid_amount

DEFAULT_CREDIT_CONFIG = CreditPriceConfig(
    kg_per_credit=KG_PER_CREDIT,
    price_min_per_credit=PRICE_MIN_PER_CREDIT,
    price_max_per_credit=PRICE_MAX_PER_CREDIT,
    currency=CURRENCY,
)


def to_credits(emission_kg: float, config: Optional[CreditPriceConfig] = None) -> float:
    """
    Carbon credits needed to offset an emission, rounded to 4 decimals.
    Negative or non-numeric emissions give 0.
    """
    if not is_valid_amount(emission_kg):
        return 0.0
    cfg = config or DEFAULT_CREDIT_CONFIG
    return round_half_up(emission_kg / cfg.kg_per_credit, CREDIT_DECIMALS)


def estimate_price(credits: float, config: Optional[CreditPriceConfig] = None) -> PriceEstimate:
    """
    Market price range for a number of credits: min, max and their midpoint,
    each rounded to 2 decimals. Negative or non-numeric credits give all zeros.
    """
    if not is_valid_amount(credits):
        return PriceEstimate()
    cfg = config or DEFAULT_CREDIT_CONFIG

    min_price = credits * cfg.price_min_per_credit
    max_price = credits * cfg.price_max_per_credit
    average = min_price / 2 + max_price / 2

    return PriceEstimate(
        min_price=round_half_up(min_price, PRICE_DECIMALS),
        max_price=round_half_up(max_price, PRICE_DECIMALS),
        average_price=round_half_up(average, PRICE_DECIMALS)
    )


def estimate_credits(emission_kg: float, config: Optional[CreditPriceConfig] = None) -> CreditEstimate:
    cfg = config or DEFAULT_CREDIT_CONFIG
    credits = to_credits(emission_kg, cfg)
    price = estimate_price(credits, cfg)
    return CreditEstimate(
        credits=credits,
        price_min=price.min_price,
        price_max=price.max_price,
        price_average=price.average_price,
        currency=cfg.currency
    )
