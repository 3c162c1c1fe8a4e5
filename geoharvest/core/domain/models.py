# geoharvest\core\domain\models.py
from enum import Enum
from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

# --- Table Schemas ---

STATE_COLUMNS: Tuple[str, ...] = ("country_code", "state_code", "state_name")
STATE_CITY_COLUMNS: Tuple[str, ...] = STATE_COLUMNS + ("city_name",)

# Columns appended by the annotation passes, in output order
STATE_TRANSLATION_COLUMNS: Tuple[str, ...] = ("state_name_br", "state_name_en")
CITY_TRANSLATION_COLUMNS: Tuple[str, ...] = STATE_TRANSLATION_COLUMNS + (
    "city_name_br",
    "city_name_en",
)

# Required columns of the finalized translated-states table
TRANSLATED_STATE_COLUMNS: Tuple[str, ...] = ("state_name",) + STATE_TRANSLATION_COLUMNS


class CollectionVariant(str, Enum):
    """Which levels the collection pipeline walks."""
    STATES = "states"   # country -> state
    CITIES = "cities"   # country -> state -> city


# --- Entities ---

class Country(BaseModel):
    """
    A crawl seed. Identity is the ISO 3166-1 alpha-2 code.
    """
    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="ISO 3166-1 alpha-2 code (e.g., 'BR')")
    name: str = Field(..., description="Display name (e.g., 'Brasil')")


class AdminArea(BaseModel):
    """
    A first-level subdivision (state/province) of a country.
    The subdivision code is the join key used by the annotation passes.
    """
    model_config = ConfigDict(frozen=True)

    country_code: str
    subdivision_code: str = Field(..., description="ISO 3166-2 code (e.g., 'BR-SP')")
    name: str


class Settlement(BaseModel):
    """A populated place (city, town, village...) inside an AdminArea."""
    model_config = ConfigDict(frozen=True)

    name: str


# --- Records (durable CSV rows) ---

class CountryStateRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    country_code: str
    state_code: str
    state_name: str

    @classmethod
    def from_area(cls, area: AdminArea) -> "CountryStateRecord":
        return cls(
            country_code=area.country_code,
            state_code=area.subdivision_code,
            state_name=area.name,
        )

    def as_row(self) -> List[str]:
        return [self.country_code, self.state_code, self.state_name]


class CountryStateCityRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    country_code: str
    state_code: str
    state_name: str
    city_name: str

    @classmethod
    def from_area(cls, area: AdminArea, settlement: Settlement) -> "CountryStateCityRecord":
        return cls(
            country_code=area.country_code,
            state_code=area.subdivision_code,
            state_name=area.name,
            city_name=settlement.name,
        )

    def as_row(self) -> List[str]:
        return [self.country_code, self.state_code, self.state_name, self.city_name]


# --- Lookup Tables ---

class LocalizedName(BaseModel):
    """A state name as finalized in Portuguese (br) and English (en)."""
    model_config = ConfigDict(frozen=True)

    br: str = ""
    en: str = ""


# country_code -> ISO 639-1 language code
LanguageMap = Dict[str, str]

# state_name -> localized names
StateTranslationIndex = Dict[str, LocalizedName]


# --- Run Reports ---

class CollectionReport(BaseModel):
    """Counters for one collection run."""
    model_config = ConfigDict(frozen=True)

    variant: CollectionVariant
    countries: int = 0
    states: int = 0
    cities: int = 0
    rows_written: int = 0
    failed_fetches: int = 0


class AnnotationReport(BaseModel):
    """Counters for one annotation run."""
    model_config = ConfigDict(frozen=True)

    rows_read: int = 0
    rows_written: int = 0
    rows_skipped: int = 0
    missing_state_translations: int = 0
