# geoharvest\cli.py
"""
Command line entry point.

    geoharvest collect --variant states          -> states.csv
    geoharvest collect --variant cities          -> states_and_cities.csv
    geoharvest annotate-states                   -> formula_states.csv
    geoharvest annotate-cities                   -> formula_country_states_cities.csv

Exit codes: 0 success, 1 fatal setup error, 2 usage error (argparse).
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import structlog

from geoharvest import __version__
from geoharvest.core.domain.exceptions import SetupError
from geoharvest.core.domain.models import AnnotationReport, CollectionReport, CollectionVariant
from geoharvest.shared.config import Settings, settings
from geoharvest.shared.container import Container, build_container
from geoharvest.shared.logging_config import configure_logging
from geoharvest.shared.observability import setup_observability

logger = structlog.get_logger()

# Default file names, resolved against OUTPUT_DIR
STATES_FILE = "states.csv"
STATES_AND_CITIES_FILE = "states_and_cities.csv"
FORMULA_STATES_FILE = "formula_states.csv"
FORMULA_CITIES_FILE = "formula_country_states_cities.csv"
TRANSLATED_STATES_FILE = "translated_states.csv"

COLLECT_OUTPUTS = {
    CollectionVariant.STATES: STATES_FILE,
    CollectionVariant.CITIES: STATES_AND_CITIES_FILE,
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--countries", help="JSON file with the seed countries (default: built-in list).")
    common.add_argument("--language-map", help="JSON file mapping country code to language (default: built-in map).")
    common.add_argument("--output-dir", help="Directory for default file names (default: OUTPUT_DIR or '.').")
    common.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR (default: LOG_LEVEL).")

    parser = argparse.ArgumentParser(
        prog="geoharvest",
        description="Harvest administrative geography from Overpass and annotate it with translation formulas.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    collect = subparsers.add_parser("collect", parents=[common], help="Fetch states (and cities) into a CSV table.")
    collect.add_argument(
        "--variant",
        choices=[v.value for v in CollectionVariant],
        default=CollectionVariant.STATES.value,
        help="'states' for country/state rows, 'cities' to also fetch each state's settlements.",
    )
    collect.add_argument("--output", help="Output CSV path.")
    collect.add_argument("--workers", type=int, help="Countries fetched in parallel (default: WORKER_CONCURRENCY).")

    states = subparsers.add_parser("annotate-states", parents=[common], help="Add state translation formulas.")
    states.add_argument("--input", help=f"States table (default: {STATES_FILE}).")
    states.add_argument("--output", help=f"Output CSV path (default: {FORMULA_STATES_FILE}).")

    cities = subparsers.add_parser("annotate-cities", parents=[common], help="Add localized states and city formulas.")
    cities.add_argument("--input", help=f"States and cities table (default: {STATES_AND_CITIES_FILE}).")
    cities.add_argument(
        "--states",
        help=f"Finalized translated states table (default: {TRANSLATED_STATES_FILE}).",
    )
    cities.add_argument("--output", help=f"Output CSV path (default: {FORMULA_CITIES_FILE}).")

    return parser.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> Settings:
    overrides: Dict[str, Any] = {}
    if args.countries:
        overrides["COUNTRIES_FILE"] = args.countries
    if args.language_map:
        overrides["LANGUAGE_MAP_FILE"] = args.language_map
    if args.output_dir:
        overrides["OUTPUT_DIR"] = args.output_dir
    if args.log_level:
        overrides["LOG_LEVEL"] = args.log_level
    if getattr(args, "workers", None):
        overrides["WORKER_CONCURRENCY"] = args.workers
    return settings.model_copy(update=overrides)


def _resolve(explicit: Optional[str], app_settings: Settings, default_name: str) -> Path:
    if explicit:
        return Path(explicit)
    return Path(app_settings.OUTPUT_DIR) / default_name


def run(
    args: argparse.Namespace, container: Container, app_settings: Settings
) -> Union[CollectionReport, AnnotationReport]:
    if args.command == "collect":
        variant = CollectionVariant(args.variant)
        output = _resolve(args.output, app_settings, COLLECT_OUTPUTS[variant])
        use_case = container.collect_geography_use_case()
        return use_case.execute(str(output), variant)

    elif args.command == "annotate-states":
        use_case = container.annotate_states_use_case()
        return use_case.execute(
            str(_resolve(args.input, app_settings, STATES_FILE)),
            str(_resolve(args.output, app_settings, FORMULA_STATES_FILE)),
        )

    else:
        use_case = container.annotate_cities_use_case()
        return use_case.execute(
            str(_resolve(args.input, app_settings, STATES_AND_CITIES_FILE)),
            str(_resolve(args.output, app_settings, FORMULA_CITIES_FILE)),
            translated_states_path=str(_resolve(args.states, app_settings, TRANSLATED_STATES_FILE)),
        )


def main(argv: Optional[List[str]] = None, container: Optional[Container] = None) -> int:
    args = parse_args(argv)
    app_settings = _settings_from_args(args)
    configure_logging(app_settings.LOG_LEVEL, app_settings.LOG_FORMAT)
    setup_observability(app_settings)

    if container is None:
        container = build_container(app_settings)

    try:
        report = run(args, container, app_settings)
    except SetupError as e:
        logger.error("run_aborted", command=args.command, error=e.message)
        return 1

    logger.info("run_completed", command=args.command, **report.model_dump(mode="json"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
