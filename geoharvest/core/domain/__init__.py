from .exceptions import (
    DomainError,
    GeoSourceError,
    MissingColumnError,
    ReferenceDataError,
    SetupError,
    TableAccessError,
)
from .models import (
    AdminArea,
    AnnotationReport,
    CollectionReport,
    CollectionVariant,
    Country,
    CountryStateCityRecord,
    CountryStateRecord,
    LanguageMap,
    LocalizedName,
    Settlement,
    StateTranslationIndex,
)

__all__ = [
    "AdminArea",
    "AnnotationReport",
    "CollectionReport",
    "CollectionVariant",
    "Country",
    "CountryStateCityRecord",
    "CountryStateRecord",
    "DomainError",
    "GeoSourceError",
    "LanguageMap",
    "LocalizedName",
    "MissingColumnError",
    "ReferenceDataError",
    "Settlement",
    "SetupError",
    "StateTranslationIndex",
    "TableAccessError",
]
