# geoharvest\core\use_cases\collect_geography.py
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import closing
from dataclasses import dataclass, field
from typing import Deque, Generator, List, Sequence, Union

import structlog

from geoharvest.core.domain.exceptions import GeoSourceError
from geoharvest.core.domain.models import (
    STATE_CITY_COLUMNS,
    STATE_COLUMNS,
    AdminArea,
    CollectionReport,
    CollectionVariant,
    Country,
    CountryStateCityRecord,
    CountryStateRecord,
    Settlement,
)
from geoharvest.core.ports.geo_source import IGeoSource
from geoharvest.core.ports.table_store import ITableStore
from geoharvest.shared.observability import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

Record = Union[CountryStateRecord, CountryStateCityRecord]


@dataclass
class _CountryHarvest:
    """Everything one worker produced for one country, in document order."""
    country: Country
    records: List[Record] = field(default_factory=list)
    states: int = 0
    cities: int = 0
    failed_fetches: int = 0


class CollectGeography:
    """
    Use Case: Crawls countries -> states (-> cities) and writes one CSV table.

    Responsibilities:
    1. Walk the seed countries in their fixed order.
    2. Fetch subdivisions (and, for the cities variant, their settlements).
    3. Skip any entity whose fetch fails, logging a diagnostic.
    4. Write the records through a single writer, grouped per country and
       per subdivision exactly as a sequential crawl would.

    Countries are fetched on a bounded thread pool. At most ``max_workers``
    countries are in flight ahead of the writer and results are consumed in
    submission order, so the output never depends on timing. A fatal error
    (or Ctrl-C) while writing cancels every country not yet started.
    """

    def __init__(
        self,
        geo_source: IGeoSource,
        table_store: ITableStore,
        countries: Sequence[Country],
        max_workers: int = 1,
    ):
        self.geo_source = geo_source
        self.table_store = table_store
        self.countries = list(countries)
        self.max_workers = max(1, max_workers)

    def execute(self, output_path: str, variant: CollectionVariant) -> CollectionReport:
        header = STATE_COLUMNS if variant == CollectionVariant.STATES else STATE_CITY_COLUMNS

        with tracer.start_as_current_span("use_case.collect_geography") as span:
            span.set_attribute("app.variant", variant.value)
            span.set_attribute("app.countries", len(self.countries))

            logger.info(
                "collection_started",
                variant=variant.value,
                countries=len(self.countries),
                workers=self.max_workers,
                output=str(output_path),
            )

            states = cities = failed = 0

            with self.table_store.open_writer(output_path, header) as writer, \
                    closing(self._harvest_in_order(variant)) as harvests:
                for harvest in harvests:
                    for record in harvest.records:
                        writer.write_row(record.as_row())
                    states += harvest.states
                    cities += harvest.cities
                    failed += harvest.failed_fetches

                rows_written = writer.rows_written

            report = CollectionReport(
                variant=variant,
                countries=len(self.countries),
                states=states,
                cities=cities,
                rows_written=rows_written,
                failed_fetches=failed,
            )
            logger.info("collection_finished", **report.model_dump(mode="json"))
            return report

    def _harvest_in_order(self, variant: CollectionVariant) -> Generator[_CountryHarvest, None, None]:
        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        pending: Deque[Future] = deque()
        countries = iter(self.countries)

        def submit_next() -> None:
            country = next(countries, None)
            if country is not None:
                pending.append(executor.submit(self._harvest_country, country, variant))

        try:
            for _ in range(self.max_workers):
                submit_next()
            while pending:
                harvest = pending.popleft().result()
                submit_next()
                yield harvest
        finally:
            # Normal exit: nothing is pending. Error exit: drop queued countries.
            executor.shutdown(wait=False, cancel_futures=True)

    # --- Per-country work (runs on the pool) ---

    def _harvest_country(self, country: Country, variant: CollectionVariant) -> _CountryHarvest:
        harvest = _CountryHarvest(country=country)
        log = logger.bind(country_code=country.code)
        log.info("country_processing", country_name=country.name)

        try:
            areas = self.geo_source.fetch_subdivisions(country.code)
        except GeoSourceError as e:
            log.warning("subdivision_fetch_failed", country_name=country.name, error=e.reason)
            harvest.failed_fetches += 1
            return harvest

        for area in areas:
            harvest.states += 1
            log.info("state_found", state_name=area.name, state_code=area.subdivision_code)

            if variant == CollectionVariant.STATES:
                harvest.records.append(CountryStateRecord.from_area(area))
                continue

            settlements = self._fetch_settlements(area, harvest)
            for settlement in settlements:
                harvest.cities += 1
                log.info("city_found", state_code=area.subdivision_code, city_name=settlement.name)
                harvest.records.append(CountryStateCityRecord.from_area(area, settlement))

        return harvest

    def _fetch_settlements(self, area: AdminArea, harvest: _CountryHarvest) -> List[Settlement]:
        try:
            return self.geo_source.fetch_settlements(area.subdivision_code)
        except GeoSourceError as e:
            logger.warning(
                "settlement_fetch_failed",
                country_code=area.country_code,
                state_code=area.subdivision_code,
                state_name=area.name,
                error=e.reason,
            )
            harvest.failed_fetches += 1
            return []
