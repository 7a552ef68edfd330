"""Application settings."""

from pydantic import HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

from .certs import GOOGLE_CERTS_URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables

    e.g. IDTOKEN_CLIENT_ID -> client_id
    """

    client_id: str
    """
    Google OAuth client ID, the expected value for the "aud" claim
    """

    certs_url: HttpUrl = GOOGLE_CERTS_URL  # type: ignore[assignment]
    """
    Google public key set (JWKS) URL
    """

    certs_timeout: float = 10
    """
    Timeout in seconds for key set requests
    """

    certs_cache_ttl: float = 3600
    """
    Seconds before a cached key set is refetched
    """

    certs_min_refresh_interval: float = 60
    """
    Minimum seconds between refetches triggered by an unknown key ID
    """

    model_config = SettingsConfigDict(
        env_prefix="IDTOKEN_", use_attribute_docstrings=True
    )
