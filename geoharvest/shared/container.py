# geoharvest\shared\container.py
from typing import Optional

from dependency_injector import containers, providers

from geoharvest.adapters.overpass_adapter import OverpassAdapter
from geoharvest.adapters.persistence.csv_tables import CsvTableStore
from geoharvest.adapters.persistence.reference_data import resolve_countries, resolve_language_map
from geoharvest.core.use_cases.annotate_cities import AnnotateCities
from geoharvest.core.use_cases.annotate_states import AnnotateStates
from geoharvest.core.use_cases.collect_geography import CollectGeography
from geoharvest.shared.config import Settings, settings


class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container.

    This declarative container defines the assembly instructions for a run.
    Tests override the gateway providers with fakes.
    """

    # 1. Configuration (filled from Settings by build_container)
    config = providers.Configuration()

    # 2. Reference Data (loaded once per run)
    countries = providers.Singleton(resolve_countries, config.COUNTRIES_FILE)
    language_map = providers.Singleton(resolve_language_map, config.LANGUAGE_MAP_FILE)

    # 3. Gateways (Infrastructure Adapters)
    geo_source = providers.Singleton(
        OverpassAdapter,
        base_url=config.OVERPASS_URL,
        timeout=config.OVERPASS_TIMEOUT,
        max_attempts=config.OVERPASS_MAX_ATTEMPTS,
        backoff_max=config.OVERPASS_BACKOFF_MAX,
        user_agent=config.USER_AGENT,
    )

    table_store = providers.Singleton(CsvTableStore)

    # 4. Use Cases (Application Logic)
    collect_geography_use_case = providers.Factory(
        CollectGeography,
        geo_source=geo_source,
        table_store=table_store,
        countries=countries,
        max_workers=config.WORKER_CONCURRENCY,
    )

    annotate_states_use_case = providers.Factory(
        AnnotateStates,
        table_store=table_store,
        language_map=language_map,
        translate_function=config.TRANSLATE_FUNCTION,
    )

    annotate_cities_use_case = providers.Factory(
        AnnotateCities,
        table_store=table_store,
        language_map=language_map,
        translate_function=config.TRANSLATE_FUNCTION,
    )


def build_container(app_settings: Optional[Settings] = None) -> Container:
    """Creates a container configured from ``app_settings`` (default: environment)."""
    container = Container()
    container.config.from_dict((app_settings or settings).model_dump(mode="json"))
    return container
