"""
Source-selection strategies: which dataset-years to request, in what order,
and how to reduce what comes back.

- BestAvailableYearStrategy: ask the catalog, take the newest numeric year,
  fetch it once. Any failure is terminal.
- FallbackYearStrategy: walk a fixed year list and stop at the first
  successful download. Only retryable statuses move on to the next year; a
  download that succeeds but does not parse is terminal.
- MultiYearAverageStrategy: attempt every year in a fixed list, skip the ones
  that fail, and average the rest.

Downloads are always issued sequentially.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from solar_snapshot.config import (
    DEFAULT_DATASET_LABEL,
    RETRYABLE_STATUSES,
    SAMPLE_INTERVAL_MINUTES,
    AggregationMode,
    NSRDBSettings,
)
from solar_snapshot.engine.aggregation import summarize_years
from solar_snapshot.engine.errors import (
    NoDataAvailableError,
    NoRecentYearError,
    SeriesParseError,
    UpstreamQueryFailure,
)
from solar_snapshot.engine.nsrdb_client import NSRDBClient
from solar_snapshot.engine.series_parser import parse_series
from solar_snapshot.models.nsrdb import DatasetInfo
from solar_snapshot.models.solar import (
    DatasetMeta,
    Location,
    MultiYearOutput,
    ParsedYearSummary,
    SkippedYear,
    SolarSnapshotOutput,
    SolarSummary,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """One dataset-year to try."""
    year: int
    url: str
    label: str


@dataclass(frozen=True)
class FetchAttempt:
    candidate: Candidate
    text: Optional[str] = None
    failure: Optional[UpstreamQueryFailure] = None


def attempt_candidates(client: NSRDBClient, candidates: list[Candidate]) -> Iterator[FetchAttempt]:
    """
    Fetch candidates in order, one at a time, yielding each outcome.

    Lazy: a caller that stops iterating never triggers the remaining fetches.
    """
    for candidate in candidates:
        try:
            text = client.fetch_series_text(candidate.url)
        except UpstreamQueryFailure as e:
            yield FetchAttempt(candidate=candidate, failure=e)
            continue
        yield FetchAttempt(candidate=candidate, text=text)


def numeric_year(value: Union[int, str]) -> Optional[int]:
    """Year as an int, or None for markers such as "tmy" or "tmy-2022"."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    return None


def select_latest_dataset(datasets: list[DatasetInfo]) -> tuple[DatasetInfo, int]:
    """
    Pick the dataset offering the largest numeric year.

    Ties go to the dataset listed first by the provider.
    """
    if not datasets:
        raise NoDataAvailableError("No NSRDB datasets available for this location")

    best: Optional[tuple[DatasetInfo, int]] = None
    for dataset in datasets:
        for raw_year in dataset.available_years:
            year = numeric_year(raw_year)
            if year is None:
                continue
            if best is None or year > best[1]:
                best = (dataset, year)

    if best is None:
        raise NoRecentYearError("No dataset reports a numeric available year")
    return best


class SourceStrategy(ABC):
    """Base class for all source-selection strategies."""

    def __init__(self, client: NSRDBClient, settings: NSRDBSettings):
        self.client = client
        self.settings = settings

    @abstractmethod
    def run(self, location: Location) -> Union[SolarSnapshotOutput, MultiYearOutput]:
        """Fetch, parse and reduce series for ``location``."""
        ...

    def _fixed_candidates(self, location: Location, years: list[int]) -> list[Candidate]:
        return [
            Candidate(
                year=year,
                url=self.client.download_url(location, year),
                label=f"{DEFAULT_DATASET_LABEL} ({year})",
            )
            for year in years
        ]


class BestAvailableYearStrategy(SourceStrategy):
    """Newest year from the catalog, one attempt, no fallback."""

    def run(self, location: Location) -> SolarSnapshotOutput:
        self.settings.require_api_key()

        datasets = self.client.fetch_available_datasets(location)
        dataset, year = select_latest_dataset(datasets)
        name = dataset.display_name or dataset.name
        logger.info("Selected %s year %d at %s", name, year, location.wkt)

        candidate = Candidate(
            year=year,
            url=self._download_url(dataset, year, location),
            label=f"NSRDB {name} ({year})",
        )
        text = self.client.fetch_series_text(candidate.url)
        summary = parse_series(text, year=year)

        return SolarSnapshotOutput(
            location=location,
            solar=SolarSummary.from_summary(summary),
            dataset=DatasetMeta(
                name=name,
                type=dataset.type,
                resolution=None if dataset.resolution is None else str(dataset.resolution),
            ),
            source=candidate.label,
        )

    def _download_url(self, dataset: DatasetInfo, year: int, location: Location) -> str:
        """Catalog link for ``year`` (hourly preferred), else one built from the dataset name."""
        links = [link for link in dataset.links if numeric_year(link.year) == year]
        if links:
            hourly = [link for link in links if link.interval == SAMPLE_INTERVAL_MINUTES]
            return self.client.authorize_link((hourly or links)[0].link)
        if not dataset.name:
            raise NoDataAvailableError(f"No download link for year {year}")
        return self.client.download_url(location, year, dataset=dataset.name)


class FallbackYearStrategy(SourceStrategy):
    """Fixed year list; first successful download wins."""

    def run(self, location: Location) -> SolarSnapshotOutput:
        self.settings.require_api_key()

        years = self.settings.fallback_years
        candidates = self._fixed_candidates(location, years)
        last_failure: Optional[UpstreamQueryFailure] = None

        for attempt in attempt_candidates(self.client, candidates):
            candidate = attempt.candidate
            if attempt.failure is None:
                # Parse errors here are terminal, not a reason to try the next year
                summary = parse_series(attempt.text, year=candidate.year)
                return SolarSnapshotOutput(
                    location=location,
                    solar=SolarSummary.from_summary(summary),
                    source=candidate.label,
                )

            if attempt.failure.status not in RETRYABLE_STATUSES:
                raise attempt.failure
            logger.warning(
                "Year %d unavailable (status %s), trying next candidate",
                candidate.year,
                attempt.failure.status,
            )
            last_failure = attempt.failure

        if last_failure is None:
            raise NoDataAvailableError("No candidate years configured")
        tried = " or ".join(str(y) for y in years)
        raise UpstreamQueryFailure(
            f"NSRDB data not available for {tried}",
            status=last_failure.status,
            detail=last_failure.detail,
        )


class MultiYearAverageStrategy(SourceStrategy):
    """Every year in a fixed list; failures are skipped, survivors averaged."""

    def run(self, location: Location) -> MultiYearOutput:
        self.settings.require_api_key()

        candidates = self._fixed_candidates(location, self.settings.multi_year_years)
        summaries: list[ParsedYearSummary] = []
        skipped: list[SkippedYear] = []

        for attempt in attempt_candidates(self.client, candidates):
            year = attempt.candidate.year
            if attempt.failure is not None:
                skipped.append(SkippedYear(
                    year=year,
                    reason=attempt.failure.code,
                    message=attempt.failure.message,
                    status=attempt.failure.status,
                ))
                logger.warning("Skipping year %d: %s", year, attempt.failure.message)
                continue

            try:
                summaries.append(parse_series(attempt.text, year=year))
            except SeriesParseError as e:
                skipped.append(SkippedYear(year=year, reason=e.code, message=e.message))
                logger.warning("Skipping year %d: %s", year, e.message)

        source = f"{DEFAULT_DATASET_LABEL} multi-year"
        if not summaries:
            return MultiYearOutput(
                status="no_data",
                location=location,
                years=[],
                years_included=0,
                skipped=skipped,
                source=source,
            )

        result = summarize_years(summaries)
        return MultiYearOutput(
            status="ok",
            location=location,
            years=result.per_year,
            avg_ghi=result.avg_ghi_daily,
            avg_dni=result.avg_dni_daily,
            std_dev=result.std_dev_ghi_daily,
            years_included=result.years_included,
            skipped=skipped,
            source=source,
        )


# Strategy dispatch table: aggregation mode -> strategy class
STRATEGIES: dict[AggregationMode, type[SourceStrategy]] = {
    AggregationMode.BEST_AVAILABLE: BestAvailableYearStrategy,
    AggregationMode.FALLBACK: FallbackYearStrategy,
    AggregationMode.MULTI_YEAR: MultiYearAverageStrategy,
}


def build_strategy(mode: AggregationMode, client: NSRDBClient, settings: NSRDBSettings) -> SourceStrategy:
    return STRATEGIES[mode](client, settings)
