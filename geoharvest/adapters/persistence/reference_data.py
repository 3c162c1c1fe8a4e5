# geoharvest\adapters\persistence\reference_data.py
"""
Reference tables that drive a run.

- Seed countries: the crawl visits them in this order.
- Language map: country code -> ISO 639-1 code of the names Overpass
  returns for that country, used to pick the translation formulas.

Both have built-in defaults and can be replaced by JSON files:

    countries.json      [{"code": "BR", "name": "Brasil"}, ...]
                        or {"BR": "Brasil", ...}
    language_map.json   {"BR": "pt", "US": "en", ...}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from geoharvest.core.domain.exceptions import ReferenceDataError
from geoharvest.core.domain.models import Country, LanguageMap

PathLike = Union[str, Path]

# (code, display name); names are Portuguese, as in the sheets that consume the output
DEFAULT_COUNTRIES: List[Country] = [
    Country(code="BR", name="Brasil"),
    Country(code="US", name="Estados Unidos"),
    Country(code="AE", name="Emirados Árabes Unidos"),
    Country(code="AL", name="Albânia"),
    Country(code="SE", name="Suécia"),
    Country(code="ZA", name="Africa do Sul"),
    Country(code="VE", name="Venezuela"),
    Country(code="BA", name="Bósnia e Herzegóvina"),
    Country(code="SG", name="Singapura"),
    Country(code="KR", name="República da Coréia"),
    Country(code="BD", name="Bangladesh"),
    Country(code="IR", name="Irã"),
]

DEFAULT_LANGUAGE_MAP: LanguageMap = {
    "BR": "pt",
    "US": "en",
    "AE": "ar",
    "AL": "sq",
    "SE": "sv",
    "ZA": "en",
    "VE": "es",
    "BA": "bs",
    "SG": "en",
    "KR": "ko",
    "BD": "bn",
    "IR": "fa",
}


def _read_json(path: PathLike) -> Any:
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise ReferenceDataError(str(path), e.strerror or str(e)) from e
    except json.JSONDecodeError as e:
        raise ReferenceDataError(str(path), f"invalid JSON: {e}") from e


def load_countries(path: PathLike) -> List[Country]:
    raw = _read_json(path)

    if isinstance(raw, dict):
        items = [{"code": code, "name": name} for code, name in raw.items()]
    elif isinstance(raw, list):
        items = raw
    else:
        raise ReferenceDataError(str(path), "expected a list of countries or a code->name object")

    countries: List[Country] = []
    for position, item in enumerate(items):
        try:
            country = Country.model_validate(item)
        except ValidationError as e:
            raise ReferenceDataError(str(path), f"entry {position}: {e.errors()[0]['msg']}") from e
        code = country.code.strip().upper()
        if not code:
            raise ReferenceDataError(str(path), f"entry {position}: empty country code")
        countries.append(Country(code=code, name=country.name.strip()))

    return countries


def load_language_map(path: PathLike) -> LanguageMap:
    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise ReferenceDataError(str(path), "expected an object mapping country code to language code")

    language_map: LanguageMap = {}
    for code, lang in raw.items():
        if not isinstance(lang, str) or not lang.strip():
            raise ReferenceDataError(str(path), f"language for '{code}' must be a non-empty string")
        language_map[str(code).strip().upper()] = lang.strip().lower()
    return language_map


def resolve_countries(path: Optional[PathLike] = None) -> List[Country]:
    """Seed list from ``path`` when given, else the built-in defaults."""
    if path:
        return load_countries(path)
    return list(DEFAULT_COUNTRIES)


def resolve_language_map(path: Optional[PathLike] = None) -> LanguageMap:
    if path:
        return load_language_map(path)
    return dict(DEFAULT_LANGUAGE_MAP)
