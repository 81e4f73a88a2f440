"""
Thin NSRDB HTTP client.

Two calls are consumed by the source-selection strategies: the dataset
catalog query (which datasets/years exist at a point) and the CSV series
download. Any non-success answer, transport error or timeout surfaces as
UpstreamQueryFailure.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from solar_snapshot.config import (
    DEFAULT_DATASET,
    INCLUDE_LEAP_DAY,
    NSRDB_CATALOG_PATH,
    REQUESTED_ATTRIBUTES,
    SAMPLE_INTERVAL_MINUTES,
    UPSTREAM_DETAIL_CHARS,
    USE_UTC,
    NSRDBSettings,
)
from solar_snapshot.engine.errors import UpstreamQueryFailure
from solar_snapshot.models.nsrdb import DatasetInfo
from solar_snapshot.models.solar import Location

logger = logging.getLogger(__name__)


class NSRDBClient:
    """Blocking client; requests are issued one at a time."""

    def __init__(self, settings: NSRDBSettings, http_client: Optional[httpx.Client] = None):
        self.settings = settings
        self._http = http_client or httpx.Client(timeout=settings.timeout_s)

    def close(self) -> None:
        self._http.close()

    def fetch_available_datasets(self, location: Location) -> list[DatasetInfo]:
        """Query the catalog for datasets covering ``location``."""
        url = f"{self.settings.base_url}/{NSRDB_CATALOG_PATH}"
        params = {
            "api_key": self.settings.require_api_key(),
            "wkt": location.wkt,
        }
        response = self._get(url, params=params, what="NSRDB data query")

        try:
            payload = response.json()
        except ValueError:
            raise UpstreamQueryFailure(
                "NSRDB data query returned invalid JSON",
                status=response.status_code,
                detail=response.text[:UPSTREAM_DETAIL_CHARS],
            )

        if not isinstance(payload, dict):
            raise UpstreamQueryFailure(
                "NSRDB data query returned an unexpected payload",
                status=response.status_code,
                detail=response.text[:UPSTREAM_DETAIL_CHARS],
            )

        errors = payload.get("errors") or []
        if errors:
            raise UpstreamQueryFailure(
                "NSRDB data query reported errors",
                status=response.status_code,
                detail="; ".join(str(e) for e in errors)[:UPSTREAM_DETAIL_CHARS],
            )

        outputs = payload.get("outputs") or []
        try:
            if not isinstance(outputs, list):
                raise ValueError(f"outputs is {type(outputs).__name__}, expected a list")
            return [DatasetInfo.model_validate(item) for item in outputs]
        except (ValidationError, ValueError) as e:
            raise UpstreamQueryFailure(
                "NSRDB data query returned malformed datasets",
                status=response.status_code,
                detail=str(e)[:UPSTREAM_DETAIL_CHARS],
            )

    def fetch_series_text(self, url: str) -> str:
        """Download one year's CSV series."""
        return self._get(url, what="NSRDB API request").text

    def download_url(self, location: Location, year: int, dataset: str = DEFAULT_DATASET) -> str:
        """Full CSV download URL for one year of ``dataset`` at ``location``."""
        params = {
            "api_key": self.settings.require_api_key(),
            "wkt": location.wkt,
            "names": str(year),
            "attributes": REQUESTED_ATTRIBUTES,
            "interval": str(SAMPLE_INTERVAL_MINUTES),
            "utc": USE_UTC,
            "leap_day": INCLUDE_LEAP_DAY,
            **self._requester_params(),
        }
        url = httpx.URL(f"{self.settings.base_url}/{dataset}-download.csv", params=params)
        return str(url)

    def authorize_link(self, link: str) -> str:
        """Fill credential and requester fields into a catalog-provided link."""
        params = {
            "api_key": self.settings.require_api_key(),
            "attributes": REQUESTED_ATTRIBUTES,
            **self._requester_params(),
        }
        return str(httpx.URL(link).copy_merge_params(params))

    def _requester_params(self) -> dict:
        return {
            "email": self.settings.email,
            "full_name": self.settings.full_name,
            "affiliation": self.settings.affiliation,
            "reason": self.settings.reason,
        }

    def _get(self, url: str, what: str, params: Optional[dict] = None) -> httpx.Response:
        logger.debug("%s: GET %s", what, httpx.URL(url).copy_remove_param("api_key"))
        try:
            response = self._http.get(url, params=params)
        except httpx.HTTPError as e:
            logger.warning("%s failed: %s", what, e)
            raise UpstreamQueryFailure(f"{what} failed", status=None, detail=str(e)[:UPSTREAM_DETAIL_CHARS])

        if not response.is_success:
            logger.warning("%s failed with status %d", what, response.status_code)
            raise UpstreamQueryFailure(
                f"{what} failed",
                status=response.status_code,
                detail=response.text[:UPSTREAM_DETAIL_CHARS],
            )
        return response
