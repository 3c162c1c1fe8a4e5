# geoharvest\shared\resilience.py
import requests
import structlog
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = structlog.get_logger()

# --- 1. Custom Exceptions ---

class ResilienceError(Exception):
    """Base class for resilience-related errors."""
    pass


class TransientHTTPError(ResilienceError):
    """Raised for HTTP statuses that signal an overloaded or rate-limiting server."""
    def __init__(self, status_code: int, url: str):
        self.status_code = status_code
        self.url = url
        super().__init__(f"Transient HTTP {status_code} from {url}")


# Overpass answers 429 when the slot quota is exhausted and 504 when the
# server queue is full.
RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})

TRANSIENT_ERRORS = (
    requests.ConnectionError,
    requests.Timeout,
    TransientHTTPError,
)

# --- 2. Retry Policies (Tenacity) ---

def _log_before_sleep(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "external_call_retry",
        attempt=retry_state.attempt_number,
        wait_s=round(retry_state.next_action.sleep, 2) if retry_state.next_action else None,
        error=str(exc),
    )


def build_retrying(max_attempts: int = 3, backoff_max: float = 30.0) -> Retrying:
    """
    Retry policy for external API calls (e.g., Overpass).
    Strategy:
    - Wait: Exponential Backoff (1s, 2s, 4s...) up to backoff_max.
    - Stop: After max_attempts (at least one attempt is always made).
    - Retry: Only network errors and throttling statuses, never decode errors.
    - Log: Logs retries using structlog.

    Usage:
        retrying = build_retrying(3)
        response = retrying(session.get, url, timeout=30)
    """
    return Retrying(
        stop=stop_after_attempt(max(1, max_attempts)),
        wait=wait_exponential(multiplier=1, min=1, max=backoff_max),
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        before_sleep=_log_before_sleep,
        reraise=True,
    )
