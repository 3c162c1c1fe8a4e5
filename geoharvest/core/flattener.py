"""
geoharvest/core/flattener.py

Flattens Overpass elements into records.

An Overpass element is a loosely-typed JSON object whose useful payload
lives in a free-form ``tags`` bag. Only a fixed set of tags is extracted;
an element lacking any required tag (absent, non-string or empty) is
dropped silently. Output order always follows input order and nothing is
deduplicated.
"""

from typing import Any, Dict, Iterable, Iterator, List, Sequence

from geoharvest.core.domain.models import AdminArea, Settlement

# --- Overpass Tag Keys ---
TAG_NAME = "name"
TAG_ISO_SUBDIVISION = "ISO3166-2"

ADMIN_AREA_TAGS = (TAG_NAME, TAG_ISO_SUBDIVISION)
SETTLEMENT_TAGS = (TAG_NAME,)


def flatten(elements: Iterable[Any], required_tags: Sequence[str]) -> Iterator[Dict[str, str]]:
    """
    Yields ``{tag: value}`` for every element carrying all required tags.

    Args:
        elements: The ``elements`` list of an Overpass JSON response.
        required_tags: Tag keys that must be present and non-empty.
    """
    for element in elements:
        if not isinstance(element, dict):
            continue
        tags = element.get("tags")
        if not isinstance(tags, dict):
            continue

        flat: Dict[str, str] = {}
        for key in required_tags:
            value = tags.get(key)
            if not isinstance(value, str) or value == "":
                break
            flat[key] = value
        else:
            yield flat


def flatten_admin_areas(country_code: str, elements: Iterable[Any]) -> List[AdminArea]:
    """Subdivisions need both a name and an ISO 3166-2 code."""
    return [
        AdminArea(
            country_code=country_code,
            subdivision_code=flat[TAG_ISO_SUBDIVISION],
            name=flat[TAG_NAME],
        )
        for flat in flatten(elements, ADMIN_AREA_TAGS)
    ]


def flatten_settlements(elements: Iterable[Any]) -> List[Settlement]:
    return [Settlement(name=flat[TAG_NAME]) for flat in flatten(elements, SETTLEMENT_TAGS)]
