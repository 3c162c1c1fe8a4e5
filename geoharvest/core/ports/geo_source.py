# geoharvest\core\ports\geo_source.py
from typing import List, Protocol

from geoharvest.core.domain.models import AdminArea, Settlement


class IGeoSource(Protocol):
    """
    Port for the hierarchical geography source.
    Implementations: OverpassAdapter (HTTP), in-memory fakes in tests.

    Both methods raise GeoSourceError when the remote query fails or the
    response cannot be decoded. Callers treat that as an empty result for
    the one entity and move on; a failure must never abort the whole run.
    """

    def fetch_subdivisions(self, country_code: str) -> List[AdminArea]:
        """
        Returns the first-level subdivisions of a country.

        Args:
            country_code: ISO 3166-1 alpha-2 code (e.g., 'BR').
        """
        ...

    def fetch_settlements(self, subdivision_code: str) -> List[Settlement]:
        """
        Returns the populated places inside a subdivision.

        Args:
            subdivision_code: ISO 3166-2 code (e.g., 'BR-SP').
        """
        ...
