import argparse
import logging
import sys
from typing import List, Optional

import pandas as pd

from .constants import EMISSION_FACTORS, BASELINE_MODE
from .models import TripAssessment
from .routes import RouteDirectory, DEFAULT_DIRECTORY
from .trip import assess_trip, assess_route_table, TripInputError
from .reporting import route_table_dataframe, summarize_route_table
from .visualization import Visualizer
from .logging_conf import setup_logging
from .utils.formatting import format_number
from .utils.input_helpers import (
    prompt_choice, prompt_yes_no, prompt_positive_float, prompt_city, print_city_list,
    print_header, print_trip_overview, print_mode_comparison, print_credit_estimate,
    C_HEADER, C_RESET
)

logger = logging.getLogger(__name__)

MODE_SINGLE = "Single Trip (Interactive)"
MODE_BATCH = "Route Table Overview (Batch)"


def run_single_trip(
    directory: RouteDirectory = DEFAULT_DIRECTORY,
    chart_root: Optional[str] = None
) -> Optional[TripAssessment]:
    """
    Interactive flow for one trip: cities, distance (auto or manual), mode, results.
    """
    # 1. ROUTE
    print_header("Step 1: Route")
    cities = directory.all_cities()
    print_city_list(cities)

    distance_km = None
    while True:
        origin = prompt_city("Origin", cities)
        destination = prompt_city("Destination", cities)

        found = directory.find_distance(origin, destination)
        if found is not None:
            logger.info(f"Distance found automatically: {format_number(found, 1)} km")
            break

        logger.warning(f"Route {origin} -> {destination} not found in the route table.")
        if prompt_yes_no("Enter the distance manually?", default=True):
            distance_km = prompt_positive_float("Distance (km)")
            break

    # 2. TRANSPORT MODE
    print_header("Step 2: Transport Mode")
    mode = prompt_choice("Transport mode", list(EMISSION_FACTORS), default=BASELINE_MODE)

    # 3. RESULTS
    try:
        assessment = assess_trip(origin, destination, mode, distance_km=distance_km, directory=directory)
    except TripInputError as e:
        logger.error(str(e))
        return None

    print_trip_overview(assessment)
    print_mode_comparison(assessment.comparison, selected_mode=assessment.mode)
    print_credit_estimate(assessment.credits)

    # 4. VISUALIZATION
    if prompt_yes_no("\nSave comparison chart?", default=False):
        vis = Visualizer(output_root=chart_root)
        vis.plot_mode_comparison(
            assessment.comparison,
            selected_mode=assessment.mode,
            title=f"{assessment.origin} -> {assessment.destination}"
        )

    return assessment


def run_route_table_overview(directory: RouteDirectory = DEFAULT_DIRECTORY) -> pd.DataFrame:
    """
    Assess every stored route for one mode and print the report.
    """
    print_header("Route Table Overview")
    mode = prompt_choice("Transport mode", list(EMISSION_FACTORS), default=BASELINE_MODE)

    df = route_table_dataframe(assess_route_table(mode, directory=directory))
    summary = summarize_route_table(df)

    with pd.option_context("display.max_rows", None, "display.width", 200):
        print(df.to_string(index=False))

    print(f"\n{C_HEADER}Totals:{C_RESET}")
    print(f"  Routes:     {summary['routes']}")
    print(f"  Distance:   {format_number(summary['distance_km'], 1)} km")
    print(f"  Emission:   {format_number(summary['emission_kg'], 2)} kg CO2")
    print(f"  Credits:    {format_number(summary['credits'], 4)}")
    return df


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="trip-carbon",
        description="Estimate CO2 emissions and carbon credits for a trip between two cities."
    )
    parser.add_argument("--log-file", help="Also write a detailed log to this file.")
    parser.add_argument("--no-color", action="store_true", help="Disable coloured console output.")
    parser.add_argument("--verbose", action="store_true", help="Show debug messages on the console.")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    # 1. LOGGING SETUP
    setup_logging(
        console_level=logging.DEBUG if args.verbose else logging.INFO,
        file_path=args.log_file,
        no_color=args.no_color
    )

    # 2. START BANNER
    print_header("Trip carbon calculator - Start")

    print("Welcome! Select operation mode:")
    try:
        mode = prompt_choice("Mode", [MODE_SINGLE, MODE_BATCH], default=MODE_SINGLE)
        if mode == MODE_BATCH:
            run_route_table_overview()
        else:
            run_single_trip()
    except (KeyboardInterrupt, EOFError):
        print()
        logger.info("Cancelled.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
