"""
Multi-year reduction of per-year irradiance summaries.
"""

import numpy as np

from solar_snapshot.models.solar import MultiYearResult, ParsedYearSummary


def summarize_years(summaries: list[ParsedYearSummary]) -> MultiYearResult:
    """
    Combine per-year summaries into mean daily averages and the population
    standard deviation (divide by N) of the GHI daily averages.

    Order of ``summaries`` is preserved in ``per_year``.
    """
    if not summaries:
        raise ValueError("Cannot summarize an empty list of years.")

    ghi_daily = np.array([s.ghi_daily_avg for s in summaries])
    dni_daily = np.array([s.dni_daily_avg for s in summaries])

    return MultiYearResult(
        per_year=list(summaries),
        avg_ghi_daily=float(ghi_daily.mean()),
        avg_dni_daily=float(dni_daily.mean()),
        std_dev_ghi_daily=float(ghi_daily.std(ddof=0)),
        years_included=len(summaries),
    )
