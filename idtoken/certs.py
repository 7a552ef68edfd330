"""Google key set client and snapshot cache."""

import logging
import threading
import time

import requests
from pydantic import ValidationError

from . import oidc
from .errors import KeyNotFoundError
from .models import KeySet, TokenClaims

logger = logging.getLogger(__name__)

GOOGLE_CERTS_URL = "https://www.googleapis.com/oauth2/v3/certs"


class CertsFetchError(Exception):
    """Raised when the provider key set cannot be fetched."""


def fetch_key_set(
    session: requests.Session,
    url: str = GOOGLE_CERTS_URL,
    timeout: float = 10,
) -> KeySet:
    """Fetch the provider key set.

    Args:
        session: HTTP session used for the request
        url: Key set (JWKS) endpoint
        timeout: Request timeout in seconds

    Returns:
        Parsed key set

    Raises:
        CertsFetchError: If the request fails or the response is not a key set
    """
    try:
        response = session.get(url, timeout=timeout)
        response.raise_for_status()

    except requests.RequestException as e:
        raise CertsFetchError(f"Failed to fetch key set from {url}: {e}") from e

    try:
        return KeySet.from_json(response.content)

    except ValidationError as e:
        raise CertsFetchError(f"Invalid key set from {url}: {e}") from e


class KeySetCache:
    """Current key set snapshot, refetched when older than ttl seconds.

    Snapshots are replaced, never mutated, so verifications in flight keep
    the snapshot they started with.
    """

    def __init__(
        self,
        session: requests.Session,
        url: str = GOOGLE_CERTS_URL,
        ttl: float = 3600,
        timeout: float = 10,
        min_refresh_interval: float = 60,
    ):
        self.session = session
        self.url = url
        self.ttl = ttl
        self.timeout = timeout
        self.min_refresh_interval = min_refresh_interval
        self._key_set: KeySet | None = None
        self._fetched_at = 0.0
        self._lock = threading.Lock()

    def age(self) -> float:
        """Seconds since the current snapshot was fetched."""
        return time.monotonic() - self._fetched_at

    def get(self) -> KeySet:
        key_set = self._key_set
        if key_set is None or self.age() >= self.ttl:
            key_set = self.refresh(stale=key_set)

        return key_set

    def refresh(self, stale: KeySet | None = None, min_age: float = 0) -> KeySet:
        """Fetch and publish a new key set snapshot.

        Args:
            stale: Snapshot the caller wants replaced. If another thread
                already replaced it, that newer snapshot is returned instead
                of fetching again.
            min_age: Return the current snapshot without fetching if it is
                younger than this many seconds.
        """
        with self._lock:
            current = self._key_set
            if current is not None:
                if stale is not None and current is not stale:
                    return current
                if self.age() < min_age:
                    return current

            key_set = fetch_key_set(self.session, self.url, self.timeout)
            self._key_set = key_set
            self._fetched_at = time.monotonic()

        logger.info(f"Fetched {len(key_set.keys)} keys from {self.url}")
        return key_set


def verify(
    token: str,
    expected_audience: str,
    cache: KeySetCache,
    now: int | None = None,
) -> TokenClaims:
    """Verify a token against the cached key set.

    If no key matches the token's key ID, the key set is refreshed and the
    verification retried once, to pick up rotated provider keys. Such
    refreshes happen at most once per cache.min_refresh_interval seconds,
    since unknown key IDs can be sent by anyone.

    Raises:
        TokenVerificationError: If verification fails
        CertsFetchError: If the key set cannot be fetched
    """
    key_set = cache.get()
    try:
        return oidc.verify_token(token, key_set, expected_audience, now)

    except KeyNotFoundError as e:
        logger.info(f"{e}, refreshing key set")

    key_set = cache.refresh(stale=key_set, min_age=cache.min_refresh_interval)
    return oidc.verify_token(token, key_set, expected_audience, now)
