# geoharvest\adapters\overpass_adapter.py
import threading
from typing import Any, List, Optional
from urllib.parse import urlencode

import requests
import structlog

from geoharvest.core.domain.exceptions import GeoSourceError
from geoharvest.core.domain.models import AdminArea, Settlement
from geoharvest.core.flattener import flatten_admin_areas, flatten_settlements
from geoharvest.shared.config import settings
from geoharvest.shared.observability import get_tracer
from geoharvest.shared.resilience import (
    RETRYABLE_STATUS_CODES,
    TransientHTTPError,
    build_retrying,
)

logger = structlog.get_logger()
tracer = get_tracer(__name__)

# --- Overpass QL Templates ---
# Admin level 2 is the country boundary, level 4 the first-level subdivision.

SETTLEMENT_PLACE_TYPES = ("city", "town", "village", "hamlet", "suburb", "neighbourhood")

SUBDIVISION_QUERY = (
    '[out:json];area["ISO3166-1"="{code}"][admin_level=2];'
    '(relation["admin_level"="4"](area););out body;'
)

SETTLEMENT_QUERY = (
    '[out:json];area["ISO3166-2"="{code}"][admin_level=4];'
    '(node["place"~"' + "|".join(SETTLEMENT_PLACE_TYPES) + '"](area););out body;'
)


def build_subdivision_query(country_code: str) -> str:
    return SUBDIVISION_QUERY.format(code=country_code)


def build_settlement_query(subdivision_code: str) -> str:
    return SETTLEMENT_QUERY.format(code=subdivision_code)


def build_query_url(base_url: str, query: str) -> str:
    """Percent-encodes the query into the ``data`` parameter."""
    return f"{base_url}?{urlencode({'data': query})}"


class OverpassAdapter:
    """
    Driven Adapter: Fetches administrative geography from the Overpass API.

    Each fetch is a single GET whose whole answer arrives in one JSON body
    (no pagination). Transient transport errors are retried a bounded number
    of times; anything else raises GeoSourceError so the caller can skip the
    entity and continue.

    requests.Session is not thread-safe, so each worker thread gets its own.
    An injected session (tests) is used by every thread.
    """

    def __init__(
        self,
        base_url: str = settings.OVERPASS_URL,
        timeout: int = settings.OVERPASS_TIMEOUT,
        max_attempts: int = settings.OVERPASS_MAX_ATTEMPTS,
        backoff_max: float = settings.OVERPASS_BACKOFF_MAX,
        user_agent: str = settings.USER_AGENT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.headers = {"User-Agent": user_agent, "Accept": "application/json"}
        self._injected_session = session
        self._local = threading.local()
        self._sessions: List[requests.Session] = []
        self._sessions_lock = threading.Lock()
        self.retrying = build_retrying(max_attempts, backoff_max)

    def fetch_subdivisions(self, country_code: str) -> List[AdminArea]:
        elements = self._run_query(country_code, build_subdivision_query(country_code))
        return flatten_admin_areas(country_code, elements)

    def fetch_settlements(self, subdivision_code: str) -> List[Settlement]:
        elements = self._run_query(subdivision_code, build_settlement_query(subdivision_code))
        return flatten_settlements(elements)

    @property
    def session(self) -> requests.Session:
        """The session of the calling thread, created on first use."""
        if self._injected_session is not None:
            return self._injected_session

        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session

    def close(self) -> None:
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
        if self._injected_session is not None:
            self._injected_session.close()

    # --- Internals ---

    def _run_query(self, target: str, query: str) -> List[Any]:
        url = build_query_url(self.base_url, query)

        with tracer.start_as_current_span("overpass.query") as span:
            span.set_attribute("overpass.target", target)
            logger.debug("overpass_query", target=target)

            try:
                response = self.retrying(self._get, url)
            except (TransientHTTPError, requests.RequestException) as e:
                self._log_failure(target, "fetch", e)
                raise GeoSourceError(target, f"fetch error: {e}") from e

            if response.status_code >= 400:
                error = f"HTTP {response.status_code}"
                self._log_failure(target, "fetch", error)
                raise GeoSourceError(target, f"fetch error: {error}")

            try:
                payload = response.json()
            except ValueError as e:
                self._log_failure(target, "decode", e)
                raise GeoSourceError(target, f"decode error: {e}") from e

            elements = payload.get("elements") if isinstance(payload, dict) else None
            if not isinstance(elements, list):
                error = "response has no 'elements' list"
                self._log_failure(target, "decode", error)
                raise GeoSourceError(target, f"decode error: {error}")

            span.set_attribute("overpass.elements", len(elements))
            return elements

    def _get(self, url: str) -> requests.Response:
        response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        if response.status_code in RETRYABLE_STATUS_CODES:
            raise TransientHTTPError(response.status_code, url)
        return response

    @staticmethod
    def _log_failure(target: str, stage: str, error: Any) -> None:
        logger.debug("overpass_fetch_failed", target=target, stage=stage, error=str(error))
