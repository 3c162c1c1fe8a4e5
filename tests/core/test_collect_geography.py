# tests\core\test_collect_geography.py
from unittest.mock import MagicMock

import pytest

from geoharvest.adapters.persistence.csv_tables import CsvTableStore
from geoharvest.core.domain.exceptions import TableAccessError
from geoharvest.core.domain.models import AdminArea, CollectionVariant, Country, Settlement
from geoharvest.core.use_cases import collect_geography
from geoharvest.core.use_cases.collect_geography import CollectGeography
from tests.fakes import FailingTableStore, FakeGeoSource, read_csv


class TestCollectStates:

    def test_writes_state_rows_in_seed_order(self, container, tmp_path):
        """
        Scenario: Three seeds, one of them without subdivisions.
        Expected: One row per valid state, grouped by country in seed order.
        """
        output = tmp_path / "states.csv"
        use_case = container.collect_geography_use_case()

        report = use_case.execute(str(output), CollectionVariant.STATES)

        assert read_csv(output) == [
            ["country_code", "state_code", "state_name"],
            ["BR", "BR-SP", "São Paulo"],
            ["BR", "BR-RJ", "Rio de Janeiro"],
            ["US", "US-CA", "California"],
        ]
        assert report.countries == 3
        assert report.states == 3
        assert report.cities == 0
        assert report.rows_written == 3
        assert report.failed_fetches == 0

    def test_states_variant_never_fetches_settlements(self, container, fake_geo_source, tmp_path):
        use_case = container.collect_geography_use_case()

        use_case.execute(str(tmp_path / "states.csv"), CollectionVariant.STATES)

        assert all(kind == "subdivisions" for kind, _ in fake_geo_source.calls)

    def test_failed_country_is_skipped(self, container, fake_geo_source, tmp_path):
        """
        Scenario: The subdivision fetch for BR fails.
        Expected: BR contributes nothing, US is still written, the failure is counted.
        """
        fake_geo_source.failing.add("BR")
        output = tmp_path / "states.csv"
        use_case = container.collect_geography_use_case()

        report = use_case.execute(str(output), CollectionVariant.STATES)

        assert read_csv(output)[1:] == [["US", "US-CA", "California"]]
        assert report.failed_fetches == 1


class TestCollectCities:

    def test_writes_one_row_per_settlement(self, container, tmp_path):
        output = tmp_path / "states_and_cities.csv"
        use_case = container.collect_geography_use_case()

        report = use_case.execute(str(output), CollectionVariant.CITIES)

        assert read_csv(output) == [
            ["country_code", "state_code", "state_name", "city_name"],
            ["BR", "BR-SP", "São Paulo", "Campinas"],
            ["BR", "BR-SP", "São Paulo", "Santos"],
            ["BR", "BR-RJ", "Rio de Janeiro", "Niterói"],
            ["US", "US-CA", "California", "Los Angeles"],
        ]
        assert report.states == 3
        assert report.cities == 4
        assert report.rows_written == 4

    def test_failed_settlement_fetch_skips_only_that_state(self, container, fake_geo_source, tmp_path):
        fake_geo_source.failing.add("BR-SP")
        output = tmp_path / "states_and_cities.csv"
        use_case = container.collect_geography_use_case()

        report = use_case.execute(str(output), CollectionVariant.CITIES)

        assert [row[1] for row in read_csv(output)[1:]] == ["BR-RJ", "US-CA"]
        assert report.failed_fetches == 1

    def test_state_without_settlements_writes_no_row(self, tmp_path):
        source = FakeGeoSource(
            subdivisions={"SG": [AdminArea(country_code="SG", subdivision_code="SG-01", name="Central Singapore")]},
            settlements={},
        )
        use_case = CollectGeography(source, CsvTableStore(), [Country(code="SG", name="Singapura")])
        output = tmp_path / "states_and_cities.csv"

        report = use_case.execute(str(output), CollectionVariant.CITIES)

        assert read_csv(output) == [["country_code", "state_code", "state_name", "city_name"]]
        assert report.states == 1
        assert report.rows_written == 0


class TestWorkerPool:

    def test_parallel_run_matches_sequential_output(self, fake_geo_source, seed_countries, tmp_path):
        """
        Scenario: The same crawl with 1 and with 4 workers.
        Expected: Byte-identical files; fan-in preserves seed order.
        """
        store = CsvTableStore()
        sequential = tmp_path / "sequential.csv"
        parallel = tmp_path / "parallel.csv"

        CollectGeography(fake_geo_source, store, seed_countries, max_workers=1).execute(
            str(sequential), CollectionVariant.CITIES
        )
        CollectGeography(fake_geo_source, store, seed_countries, max_workers=4).execute(
            str(parallel), CollectionVariant.CITIES
        )

        assert parallel.read_bytes() == sequential.read_bytes()

    def test_worker_count_is_at_least_one(self, fake_geo_source, seed_countries):
        use_case = CollectGeography(fake_geo_source, CsvTableStore(), seed_countries, max_workers=0)
        assert use_case.max_workers == 1

    def test_write_failure_stops_the_crawl(self):
        """
        Scenario: The first row cannot be written (disk full).
        Expected: The error surfaces at once; queued countries are never fetched.
        """
        countries = [Country(code=f"C{i}", name=f"Country {i}") for i in range(10)]
        source = FakeGeoSource(
            subdivisions={
                c.code: [AdminArea(country_code=c.code, subdivision_code=f"{c.code}-1", name="State")]
                for c in countries
            },
            settlements={},
        )
        use_case = CollectGeography(source, FailingTableStore(), countries, max_workers=1)

        with pytest.raises(TableAccessError):
            use_case.execute("states.csv", CollectionVariant.STATES)

        # The first country, plus at most the one submitted before the write
        assert len(source.calls) <= 2


class TestProgressLogging:

    def test_each_city_is_reported_at_info(self, fake_geo_source, seed_countries, tmp_path, monkeypatch):
        mock_logger = MagicMock()
        monkeypatch.setattr(collect_geography, "logger", mock_logger)
        use_case = CollectGeography(fake_geo_source, CsvTableStore(), seed_countries)

        use_case.execute(str(tmp_path / "states_and_cities.csv"), CollectionVariant.CITIES)

        country_log = mock_logger.bind.return_value
        cities = [
            kwargs["city_name"]
            for args, kwargs in country_log.info.call_args_list
            if args == ("city_found",)
        ]
        assert cities == ["Campinas", "Santos", "Niterói", "Los Angeles"]
        assert not any(args == ("city_found",) for args, _ in country_log.debug.call_args_list)
