"""
API routes for point solar-resource lookups backed by NSRDB.
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query

from solar_snapshot.api.deps import get_client, get_settings
from solar_snapshot.config import AggregationMode, NSRDBSettings
from solar_snapshot.engine.errors import (
    ConfigurationError,
    InvalidInputError,
    NoDataAvailableError,
    NoRecentYearError,
    SeriesParseError,
    SolarDataError,
    UpstreamQueryFailure,
)
from solar_snapshot.engine.location import parse_location
from solar_snapshot.engine.nsrdb_client import NSRDBClient
from solar_snapshot.engine.source_policy import build_strategy
from solar_snapshot.models.solar import MultiYearOutput, SolarSnapshotOutput

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["solar"])

# Error category -> HTTP status
_STATUS_CODES = {
    InvalidInputError: 400,
    ConfigurationError: 500,
    UpstreamQueryFailure: 502,
    NoDataAvailableError: 404,
    NoRecentYearError: 404,
    SeriesParseError: 422,
}


def status_code_for(e: SolarDataError) -> int:
    for error_type, status_code in _STATUS_CODES.items():
        if isinstance(e, error_type):
            return status_code
    return 500


def _http_error(e: SolarDataError) -> HTTPException:
    return HTTPException(status_code=status_code_for(e), detail=e.to_detail())


def _run(
    mode: AggregationMode,
    lat: Optional[str],
    lng: Optional[str],
    client: NSRDBClient,
    settings: NSRDBSettings,
) -> Union[SolarSnapshotOutput, MultiYearOutput]:
    try:
        location = parse_location(lat, lng)
        return build_strategy(mode, client, settings).run(location)
    except SolarDataError as e:
        raise _http_error(e)
    except Exception as e:
        logger.exception("Unexpected error during %s lookup", mode.value)
        raise HTTPException(
            status_code=500,
            detail={"error": "internal_error", "message": f"Server error: {e}"},
        )


@router.get("/solar/snapshot", response_model=Union[SolarSnapshotOutput, MultiYearOutput])
def solar_snapshot(
    lat: Optional[str] = Query(None, description="Latitude in decimal degrees"),
    lng: Optional[str] = Query(None, description="Longitude in decimal degrees"),
    mode: Optional[AggregationMode] = Query(None, description="Overrides the configured mode"),
    client: NSRDBClient = Depends(get_client),
    settings: NSRDBSettings = Depends(get_settings),
):
    """
    Annual GHI/DNI totals and daily averages for a point, using the configured
    source-selection mode.
    """
    return _run(mode or settings.mode, lat, lng, client, settings)


@router.get("/solar/multi-year", response_model=MultiYearOutput)
def solar_multi_year(
    lat: Optional[str] = Query(None, description="Latitude in decimal degrees"),
    lng: Optional[str] = Query(None, description="Longitude in decimal degrees"),
    client: NSRDBClient = Depends(get_client),
    settings: NSRDBSettings = Depends(get_settings),
):
    """Average daily GHI/DNI over every candidate year that could be fetched and parsed."""
    return _run(AggregationMode.MULTI_YEAR, lat, lng, client, settings)
