"""API endpoints for ID token verification."""

import logging
from contextlib import asynccontextmanager

import requests
from fastapi import FastAPI, HTTPException, Request, status

from . import __version__, certs, errors
from .config import Settings
from .models import TokenClaims, VerifyPayload

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# Load settings
settings = Settings()


# Create one HTTP session and key set cache per process
# See https://fastapi.tiangolo.com/advanced/events/
@asynccontextmanager
async def lifespan(app: FastAPI):
    with requests.Session() as session:
        app.state.key_set_cache = certs.KeySetCache(
            session,
            str(settings.certs_url),
            ttl=settings.certs_cache_ttl,
            timeout=settings.certs_timeout,
            min_refresh_interval=settings.certs_min_refresh_interval,
        )
        logger.info(f"Using key set from {settings.certs_url}")
        yield


app = FastAPI(
    title="ID Token Verifier",
    description="Verifies Google ID tokens for a relying service",
    version=__version__,
    lifespan=lifespan,
)
logger.info("ID token verifier initialized successfully")


_FAILURE_DETAILS: dict[type[errors.TokenVerificationError], str] = {
    errors.MalformedTokenError: "Malformed token",
    errors.AudienceMismatchError: "Token audience mismatch",
    errors.IssuerMismatchError: "Token issuer not allowed",
    errors.TokenExpiredError: "Token expired",
    errors.KeyNotFoundError: "Token signing key not found",
    errors.InvalidKeyMaterialError: "Invalid signing key",
    errors.InvalidSignatureError: "Invalid token signature",
}


def _unauthorized(msg: str):
    """Return 401"""
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=msg,
    )


@app.post("/verify", status_code=status.HTTP_200_OK)
def verify(payload: VerifyPayload, request: Request) -> TokenClaims:
    """Verify an ID token and return its claims."""
    cache: certs.KeySetCache = request.app.state.key_set_cache

    try:
        claims = certs.verify(payload.token, settings.client_id, cache)

    except errors.TokenVerificationError as e:
        logger.warning(f"Token verification failed: {e}")
        _unauthorized(_FAILURE_DETAILS.get(type(e), "Token verification failed"))

    except certs.CertsFetchError as e:
        logger.error(f"Key set fetch failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to fetch signing keys",
        ) from e

    logger.info(f"Verified token for subject {claims.sub}")
    return claims
