"""
Shared fixtures: inline NSRDB-style CSV payloads and an in-memory NSRDB client.
"""

import pytest

from solar_snapshot.config import NSRDBSettings
from solar_snapshot.engine.errors import UpstreamQueryFailure


def _make_series(rows, preamble=("Source,Location ID,Latitude,Longitude", "NSRDB,123456,40.0,-105.0")):
    """CSV text: metadata lines, a Year..GHI,DNI header, then ``rows`` of (ghi, dni)."""
    lines = list(preamble)
    lines.append("Year,Month,Day,Hour,Minute,GHI,DNI")
    for i, (ghi, dni) in enumerate(rows):
        lines.append(f"2022,1,{i // 24 + 1},{i % 24},0,{ghi},{dni}")
    return "\n".join(lines) + "\n"


class FakeNSRDBClient:
    """Stands in for NSRDBClient; answers by year from canned payloads."""

    def __init__(self, settings, series=None, datasets=None, catalog_failure=None):
        self.settings = settings
        self.series = series or {}          # year -> text or UpstreamQueryFailure
        self.datasets = datasets or []
        self.catalog_failure = catalog_failure
        self.fetched_urls = []
        self.catalog_calls = 0

    def fetch_available_datasets(self, location):
        self.catalog_calls += 1
        if self.catalog_failure is not None:
            raise self.catalog_failure
        return self.datasets

    def fetch_series_text(self, url):
        self.fetched_urls.append(url)
        year = int(url.rsplit("/", 1)[-1].split("?")[0])
        answer = self.series.get(year, UpstreamQueryFailure("NSRDB API request failed", status=404))
        if isinstance(answer, UpstreamQueryFailure):
            raise answer
        return answer

    def download_url(self, location, year, dataset="nsrdb-GOES-aggregated-v4-0-0"):
        self.settings.require_api_key()
        return f"https://nsrdb.test/{dataset}/{year}"

    def authorize_link(self, link):
        self.settings.require_api_key()
        return link + "?api_key=" + self.settings.api_key

    @property
    def fetched_years(self):
        return [int(url.rsplit("/", 1)[-1].split("?")[0]) for url in self.fetched_urls]


@pytest.fixture
def settings():
    return NSRDBSettings(api_key="test-key")


@pytest.fixture
def fake_client_factory(settings):
    def factory(settings_override=None, **kwargs):
        return FakeNSRDBClient(settings_override if settings_override is not None else settings, **kwargs)
    return factory


@pytest.fixture
def make_series():
    return _make_series


@pytest.fixture
def year_series():
    """Builds a day of hourly rows whose GHI total is ghi_per_hour * hours Wh/m²."""
    def build(ghi_per_hour, hours=24):
        return _make_series([(ghi_per_hour, ghi_per_hour / 2)] * hours)
    return build
