"""
Solar Snapshot configuration and constants.
"""

import os
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from solar_snapshot.engine.errors import ConfigurationError


class AggregationMode(str, Enum):
    BEST_AVAILABLE = "best_available"  # newest year offered by the catalog
    FALLBACK = "fallback"              # fixed year list, first fetch that succeeds
    MULTI_YEAR = "multi_year"          # every year in a fixed list, averaged


# NSRDB (National Solar Radiation Database) developer API
NSRDB_BASE_URL = "https://developer.nrel.gov/api/nsrdb/v2/solar"
NSRDB_CATALOG_PATH = "nsrdb_data_query.json"
DEFAULT_DATASET = "nsrdb-GOES-aggregated-v4-0-0"
DEFAULT_DATASET_LABEL = "NSRDB GOES Aggregated v4"

# Fixed download parameters
REQUESTED_ATTRIBUTES = "ghi,dni"
SAMPLE_INTERVAL_MINUTES = 60
USE_UTC = "false"
INCLUDE_LEAP_DAY = "false"

# Requester identity sent with every download (required by NSRDB)
DEFAULT_EMAIL = "snapshot@example.com"
DEFAULT_FULL_NAME = "Snapshot Analysis"
DEFAULT_AFFILIATION = "Internal Tool"
DEFAULT_REASON = "Solar feasibility analysis"

# Series parsing
MIN_PAYLOAD_LINES = 10
HEADER_SCAN_LINES = 15
WH_PER_KWH = 1000.0
DAYS_PER_YEAR = 365  # not leap-year aware

# Candidate years, most recent first
FALLBACK_YEARS: tuple[int, ...] = (2023, 2022)
MULTI_YEAR_YEARS: tuple[int, ...] = (2019, 2020, 2021, 2022, 2023)

# Upstream statuses that move the fallback mode on to the next candidate year
RETRYABLE_STATUSES: frozenset[int] = frozenset({400, 404})

UPSTREAM_DETAIL_CHARS = 200
DEFAULT_TIMEOUT_S = 60.0


class NSRDBSettings(BaseModel):
    """Explicit configuration handed to the client and the source strategies."""

    api_key: Optional[str] = None
    email: str = DEFAULT_EMAIL
    full_name: str = DEFAULT_FULL_NAME
    affiliation: str = DEFAULT_AFFILIATION
    reason: str = DEFAULT_REASON
    mode: AggregationMode = AggregationMode.FALLBACK
    fallback_years: list[int] = Field(default_factory=lambda: list(FALLBACK_YEARS))
    multi_year_years: list[int] = Field(default_factory=lambda: list(MULTI_YEAR_YEARS))
    base_url: str = NSRDB_BASE_URL
    timeout_s: float = Field(DEFAULT_TIMEOUT_S, gt=0)

    @classmethod
    def from_env(cls) -> "NSRDBSettings":
        """Build settings from the process environment (application edge only)."""
        values: dict = {"api_key": os.environ.get("NSRDB_KEY") or None}
        if os.environ.get("NSRDB_MODE"):
            values["mode"] = os.environ["NSRDB_MODE"]
        if os.environ.get("NSRDB_EMAIL"):
            values["email"] = os.environ["NSRDB_EMAIL"]
        if os.environ.get("NSRDB_TIMEOUT"):
            values["timeout_s"] = os.environ["NSRDB_TIMEOUT"]
        try:
            return cls(**values)
        except (ValidationError, ValueError) as e:
            raise ConfigurationError(f"Invalid NSRDB configuration: {e}")

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError("Missing NSRDB_KEY env var")
        return self.api_key
