"""
Pydantic models for parsed irradiance series and solar-resource results.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class Location(BaseModel):
    """Validated query point."""
    lat: float
    lng: float

    @property
    def wkt(self) -> str:
        # WKT points are longitude first
        return f"POINT({self.lng} {self.lat})"


class ParsedYearSummary(BaseModel):
    """Totals for one dataset-year. Never built with zero samples."""
    model_config = ConfigDict(frozen=True)

    year: int
    ghi_total: float       # kWh/m²
    dni_total: float       # kWh/m²
    sample_count: int      # valid hourly rows
    ghi_daily_avg: float   # kWh/m²/day
    dni_daily_avg: float   # kWh/m²/day


class MultiYearResult(BaseModel):
    """Statistics over one or more parsed years, in fetch-attempt order."""
    model_config = ConfigDict(frozen=True)

    per_year: list[ParsedYearSummary]
    avg_ghi_daily: float
    avg_dni_daily: float
    std_dev_ghi_daily: float  # population standard deviation
    years_included: int


class SkippedYear(BaseModel):
    """A candidate year that produced no summary, and why."""
    year: int
    reason: str               # error code
    message: str
    status: Optional[int] = None


class SolarSummary(BaseModel):
    """Single-year solar resource figures returned to the caller."""
    year: int
    annual_ghi: float     # kWh/m²
    annual_dni: float     # kWh/m²
    avg_ghi_daily: float  # kWh/m²/day
    avg_dni_daily: float  # kWh/m²/day
    hours_recorded: int

    @classmethod
    def from_summary(cls, summary: ParsedYearSummary) -> "SolarSummary":
        return cls(
            year=summary.year,
            annual_ghi=summary.ghi_total,
            annual_dni=summary.dni_total,
            avg_ghi_daily=summary.ghi_daily_avg,
            avg_dni_daily=summary.dni_daily_avg,
            hours_recorded=summary.sample_count,
        )


class DatasetMeta(BaseModel):
    """Dataset annotation attached to a best-available-year result."""
    name: str
    type: Optional[str] = None
    resolution: Optional[str] = None


class SolarSnapshotOutput(BaseModel):
    """Result of the best-available and fallback modes."""
    location: Location
    solar: SolarSummary
    dataset: Optional[DatasetMeta] = None
    source: str


class MultiYearOutput(BaseModel):
    """Result of the multi-year mode. ``status`` is "no_data" when no year parsed."""
    status: Literal["ok", "no_data"]
    location: Location
    years: list[ParsedYearSummary]
    avg_ghi: Optional[float] = None
    avg_dni: Optional[float] = None
    std_dev: Optional[float] = None
    years_included: int
    skipped: list[SkippedYear] = []
    source: str
