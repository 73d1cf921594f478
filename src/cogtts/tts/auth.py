"""Bearer token acquisition and renewal.

Exchanges a Speech API key for a short-lived access token and keeps it fresh
with a background timer. Tokens expire after 10 minutes; they are renewed
every 9 so a reader always holds a usable one.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import UTC, datetime

import httpx

from .errors import AuthError

logger = logging.getLogger(__name__)

SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"
TOKEN_RENEW_INTERVAL_SECONDS = 9 * 60
DEFAULT_TIMEOUT_SECONDS = 10.0


def token_endpoint(region: str) -> str:
    """Return the regional issueToken URL."""
    return f"https://{region}.api.cognitive.microsoft.com/sts/v1.0/issueToken"


@dataclass(frozen=True)
class TokenState:
    """An access token and when it was issued."""

    token: str
    issued_at: datetime


class TokenAuthenticator:
    """Obtains an access token and renews it on a fixed schedule.

    Renewal runs on a one-shot threading.Timer that is re-armed only after the
    previous attempt has finished, so at most one renewal is in flight. A
    failed renewal is logged and the schedule continues.
    """

    def __init__(
        self,
        http_client: httpx.Client | None = None,
        renew_interval: float = TOKEN_RENEW_INTERVAL_SECONDS,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the authenticator.

        Args:
            http_client: Shared client; one is created (and owned) if omitted
            renew_interval: Seconds between renewals
            timeout: Request timeout in seconds
        """
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)
        self._renew_interval = renew_interval
        self._endpoint: str | None = None
        self._api_key: str | None = None
        self._state: TokenState | None = None
        self._timer: threading.Timer | None = None
        self._stopped = False
        self._lock = threading.Lock()

    @property
    def renew_interval(self) -> float:
        """Seconds between renewals."""
        return self._renew_interval

    @property
    def is_ready(self) -> bool:
        """True once a token has been obtained."""
        with self._lock:
            return self._state is not None

    @property
    def token_state(self) -> TokenState | None:
        """Snapshot of the current token and its issue time."""
        with self._lock:
            return self._state

    def current_token(self) -> str | None:
        """Return the latest token, or None if authentication has not completed."""
        with self._lock:
            return self._state.token if self._state is not None else None

    def authenticate(self, endpoint: str, api_key: str) -> str:
        """Fetch a token and start the renewal schedule.

        Args:
            endpoint: issueToken URL
            api_key: Speech resource key

        Returns:
            The access token

        Raises:
            AuthError: On transport failure or a non-success status
        """
        token = self._request_token(endpoint, api_key)

        with self._lock:
            self._endpoint = endpoint
            self._api_key = api_key
            self._state = TokenState(token=token, issued_at=datetime.now(UTC))
            self._stopped = False
            self._schedule_renewal_unsafe()

        logger.info(f"Authenticated against {endpoint}")
        return token

    def renew(self) -> str:
        """Fetch a fresh token with the stored credentials and swap it in.

        Raises:
            AuthError: If not yet authenticated or the request fails
        """
        with self._lock:
            endpoint = self._endpoint
            api_key = self._api_key

        if endpoint is None or api_key is None:
            raise AuthError("Cannot renew token before authenticate() has succeeded")

        token = self._request_token(endpoint, api_key)
        with self._lock:
            self._state = TokenState(token=token, issued_at=datetime.now(UTC))

        logger.info("Renewed access token")
        return token

    def stop(self) -> None:
        """Cancel the renewal timer. Safe to call more than once."""
        with self._lock:
            self._stopped = True
            self._cancel_timer_unsafe()

    def close(self) -> None:
        """Stop renewal and release the HTTP client if owned."""
        self.stop()
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "TokenAuthenticator":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request_token(self, endpoint: str, api_key: str) -> str:
        headers = {SUBSCRIPTION_KEY_HEADER: api_key}
        try:
            response = self._client.post(endpoint, headers=headers, content=b"")
        except httpx.HTTPError as e:
            raise AuthError(f"Token request to {endpoint} failed: {e}") from e

        logger.debug(f"Authentication response status code: {response.status_code}")

        if not response.is_success:
            raise AuthError(
                f"Token endpoint returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        token = response.text.strip()
        if not token:
            raise AuthError("Token endpoint returned an empty token", status_code=response.status_code)
        return token

    def _schedule_renewal_unsafe(self) -> None:
        """Arm the next renewal (must hold lock when calling)."""
        self._cancel_timer_unsafe()
        self._timer = threading.Timer(self._renew_interval, self._on_renew_timer)
        self._timer.daemon = True
        self._timer.start()

    def _cancel_timer_unsafe(self) -> None:
        """Cancel timer without lock (must hold lock when calling)."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_renew_timer(self) -> None:
        """Renew the token, then re-arm regardless of the outcome."""
        try:
            self.renew()
        except AuthError as e:
            logger.warning(f"Failed renewing access token: {e}")
        except Exception as e:
            logger.error(f"Unexpected error renewing access token: {e}")
        finally:
            with self._lock:
                if not self._stopped:
                    self._schedule_renewal_unsafe()


__all__ = [
    "SUBSCRIPTION_KEY_HEADER",
    "TOKEN_RENEW_INTERVAL_SECONDS",
    "TokenAuthenticator",
    "TokenState",
    "token_endpoint",
]
