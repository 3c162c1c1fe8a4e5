# tests\conftest.py
from typing import Dict, List

import pytest

from geoharvest.core.domain.models import AdminArea, Country, Settlement
from geoharvest.shared.config import Settings
from geoharvest.shared.container import build_container
from tests.fakes import FakeGeoSource


@pytest.fixture
def seed_countries() -> List[Country]:
    return [
        Country(code="BR", name="Brasil"),
        Country(code="US", name="Estados Unidos"),
        Country(code="XX", name="Nowhere"),
    ]


@pytest.fixture
def language_map() -> Dict[str, str]:
    return {"BR": "pt", "US": "en", "AE": "ar"}


@pytest.fixture
def fake_geo_source() -> FakeGeoSource:
    return FakeGeoSource(
        subdivisions={
            "BR": [
                AdminArea(country_code="BR", subdivision_code="BR-SP", name="São Paulo"),
                AdminArea(country_code="BR", subdivision_code="BR-RJ", name="Rio de Janeiro"),
            ],
            "US": [
                AdminArea(country_code="US", subdivision_code="US-CA", name="California"),
            ],
        },
        settlements={
            "BR-SP": [Settlement(name="Campinas"), Settlement(name="Santos")],
            "BR-RJ": [Settlement(name="Niterói")],
            "US-CA": [Settlement(name="Los Angeles")],
        },
    )


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        APP_ENV="testing",
        OUTPUT_DIR=str(tmp_path),
        OVERPASS_MAX_ATTEMPTS=1,
        WORKER_CONCURRENCY=1,
    )


@pytest.fixture(scope="function")
def container(test_settings, fake_geo_source, seed_countries, language_map):
    """
    Sets up the Dependency Injection Container for testing.
    The Overpass gateway and the reference tables are replaced by fixtures;
    the CSV table store is real and writes under tmp_path.
    """
    container = build_container(test_settings)

    container.geo_source.override(fake_geo_source)
    container.countries.override(seed_countries)
    container.language_map.override(language_map)

    yield container

    container.reset_override()
