import logging
from typing import List, Optional
from colorama import Fore, Style, Back
from ..models import TripAssessment, ModeComparison, CreditEstimate
from ..constants import KG_PER_CREDIT
from .formatting import format_number, format_currency, mode_label

logger = logging.getLogger(__name__)

# Style Constants
C_HEADER = Fore.CYAN + Style.BRIGHT
C_PROMPT = Fore.YELLOW
C_CHOICE = Fore.MAGENTA
C_ERROR = Fore.RED
C_SUCCESS = Fore.GREEN
C_RESET = Style.RESET_ALL


def style_prompt(prompt_text: str) -> str:
    """Helper to wrap input prompt in color."""
    return f"{C_PROMPT}{prompt_text}{C_RESET}"


def print_header(text: str):
    """Print a styled header."""
    print(f"\n{C_HEADER}{'='*60}")
    print(f"{text.center(60)}")
    print(f"{'='*60}{C_RESET}")


def prompt_choice(label: str, options: List[str], default: str) -> str:
    """
    Prompt user to pick one value from a list of options; returns the chosen option.
    Supports selecting by index (1-based) or typing the name.
    """
    display_parts = []
    for idx, opt in enumerate(options, 1):
        display_parts.append(f"[{C_SUCCESS}{idx}{C_PROMPT}] {C_CHOICE}{opt}{C_PROMPT}")

    opts_str = " / ".join(display_parts)

    while True:
        print(f"\n{C_PROMPT}{label} options:{C_RESET} {opts_str}")
        s = input(style_prompt(f"Select option (name or number) [default={default}]: ")).strip().lower()

        if not s:
            return default

        if s.isdigit():
            idx = int(s)
            if 1 <= idx <= len(options):
                return options[idx-1]

        for opt in options:
            if s == opt.lower():
                return opt

        logger.warning(f"Invalid choice '{s}'. Please enter a number 1-{len(options)} or the option name.")


def prompt_yes_no(label: str, default: bool) -> bool:
    """
    Prompt user for yes/no answer, returning True/False.
    """
    d = "y" if default else "n"
    opts = f"{C_CHOICE}y{C_PROMPT}/{C_CHOICE}n{C_PROMPT}"
    while True:
        s = input(style_prompt(f"{label} [{opts}] (default={d}): ")).strip().lower()
        if not s:
            return default
        if s in ("y", "yes"):
            return True
        if s in ("n", "no"):
            return False
        logger.warning("Please answer y or n.")


def prompt_positive_float(label: str) -> float:
    """
    Prompt until a positive number is entered. Accepts ',' as decimal separator.
    """
    while True:
        s = input(style_prompt(f"{label}: ")).strip().replace(",", ".")
        try:
            value = float(s)
        except ValueError:
            logger.warning(f"'{s}' is not a number.")
            continue
        if value > 0 and value == value and value != float("inf"):
            return value
        logger.warning("Value must be greater than zero.")


def prompt_city(label: str, known_cities: List[str]) -> str:
    """
    Prompt for a city name. A number picks from the known city list;
    anything else is taken as typed.
    """
    while True:
        s = input(style_prompt(f"{label} (name or number from the list): ")).strip()
        if not s:
            logger.warning(f"{label} is required.")
            continue
        if s.isdigit():
            idx = int(s)
            if 1 <= idx <= len(known_cities):
                return known_cities[idx-1]
            logger.warning(f"Pick a number between 1 and {len(known_cities)}.")
            continue
        return s


def print_city_list(cities: List[str], columns: int = 3):
    print(f"\n{C_HEADER}Known cities:{C_RESET}")
    width = max((len(c) for c in cities), default=0) + 6
    for start in range(0, len(cities), columns):
        chunk = cities[start:start + columns]
        line = "".join(f"{start + i + 1:>3}. {city:<{width}}" for i, city in enumerate(chunk))
        print(line.rstrip())


def print_trip_overview(assessment: TripAssessment):
    """
    Result card for one trip.
    """
    print(f"\n{Back.BLACK}{C_HEADER}{'='*60}")
    print(f"   TRIP RESULT: {assessment.origin} -> {assessment.destination}")
    print(f"{'='*60}{Style.RESET_ALL}")

    source = "route table" if assessment.distance_source == "route_table" else "entered manually"
    print(f"  Distance:            {format_number(assessment.distance_km, 1)} km ({source})")
    print(f"  Transport:           {mode_label(assessment.mode, with_icon=True)}")
    print(f"  {Style.BRIGHT}Estimated emission:  {C_SUCCESS}{format_number(assessment.emission_kg, 2)}{C_RESET} {Style.BRIGHT}kg CO2{C_RESET}")

    if assessment.savings.saved_kg > 0:
        print(f"  Saved vs car:        {format_number(assessment.savings.saved_kg, 2)} kg "
              f"({format_number(assessment.savings.percentage, 2)}%)")
    print(f"{'='*60}\n")


def print_mode_comparison(comparison: List[ModeComparison], selected_mode: Optional[str] = None):
    print(f"\n{C_HEADER}Comparison by transport mode:{C_RESET}")
    print(f"  {'Mode':<16} | {'Emission (kg CO2)':>18} | {'% vs car':>9}")
    print(f"  {'-'*50}")
    for row in comparison:
        marker = f"{C_SUCCESS}*{C_RESET}" if row.mode == selected_mode else " "
        print(f"{marker} {mode_label(row.mode, with_icon=True):<16} | "
              f"{format_number(row.emission, 2):>18} | {format_number(row.percentage_vs_car, 2):>8}%")


def print_credit_estimate(estimate: CreditEstimate, kg_per_credit: float = KG_PER_CREDIT):
    print(f"\n{C_HEADER}Carbon credits:{C_RESET}")
    print(f"  Credits needed:      {format_number(estimate.credits, 4)} "
          f"(1 credit = {format_number(kg_per_credit, 0)} kg CO2)")
    print(f"  Estimated price:     {format_currency(estimate.price_average, estimate.currency)}")
    print(f"  Range:               {format_currency(estimate.price_min, estimate.currency)} - "
          f"{format_currency(estimate.price_max, estimate.currency)}")
