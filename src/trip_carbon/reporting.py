import logging
from typing import List, Optional
import pandas as pd
from .models import ModeComparison, TripAssessment
from .utils.formatting import mode_label

logger = logging.getLogger(__name__)

COMPARISON_COLUMNS = ["Mode", "Label", "Emission (kgCO2)", "% vs Car", "Selected"]

ROUTE_TABLE_COLUMNS = [
    "Origin",
    "Destination",
    "Distance (km)",
    "Mode",
    "Emission (kgCO2)",
    "Car Baseline (kgCO2)",
    "Saved vs Car (kgCO2)",
    "Saved vs Car (%)",
    "Credits",
    "Price Avg",
]


def comparison_dataframe(comparison: List[ModeComparison], selected_mode: Optional[str] = None) -> pd.DataFrame:
    """
    Tabulate an all-modes comparison, keeping its order (lowest emission first).
    """
    rows = [
        {
            "Mode": row.mode,
            "Label": mode_label(row.mode),
            "Emission (kgCO2)": row.emission,
            "% vs Car": row.percentage_vs_car,
            "Selected": row.mode == selected_mode,
        }
        for row in comparison
    ]
    return pd.DataFrame(rows, columns=COMPARISON_COLUMNS)


def route_table_dataframe(assessments: List[TripAssessment]) -> pd.DataFrame:
    """
    One row per assessed route, highest emission first.
    """
    rows = []
    for a in assessments:
        rows.append({
            "Origin": a.origin,
            "Destination": a.destination,
            "Distance (km)": a.distance_km,
            "Mode": a.mode,
            "Emission (kgCO2)": a.emission_kg,
            "Car Baseline (kgCO2)": a.baseline_emission_kg,
            "Saved vs Car (kgCO2)": a.savings.saved_kg,
            "Saved vs Car (%)": a.savings.percentage,
            "Credits": a.credits.credits,
            "Price Avg": a.credits.price_average,
        })

    df = pd.DataFrame(rows, columns=ROUTE_TABLE_COLUMNS)
    if df.empty:
        logger.warning("No assessments to report.")
        return df

    # Stable sort keeps table order for equal emissions
    df = df.sort_values("Emission (kgCO2)", ascending=False, kind="mergesort").reset_index(drop=True)
    return df


def summarize_route_table(df: pd.DataFrame) -> dict:
    """Totals over a route table report."""
    if df.empty:
        return {"routes": 0, "distance_km": 0.0, "emission_kg": 0.0, "credits": 0.0}
    return {
        "routes": int(len(df)),
        "distance_km": float(df["Distance (km)"].sum()),
        "emission_kg": round(float(df["Emission (kgCO2)"].sum()), 2),
        "credits": round(float(df["Credits"].sum()), 4),
    }
