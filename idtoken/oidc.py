"""ID token signature verification."""

import time

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa, utils
from pydantic import ValidationError

from . import codec
from .claims import validate_claims
from .errors import InvalidSignatureError, MalformedTokenError
from .keys import build_public_key, select_key
from .models import KeySet, TokenClaims, TokenHeader


def verify_signature(
    public_key: rsa.RSAPublicKey,
    signed_digest: bytes,
    signature: bytes,
) -> None:
    """Verify an RSASSA-PKCS1-v1_5 SHA-256 signature over a digest.

    Raises:
        InvalidSignatureError: If the signature does not verify
    """
    try:
        public_key.verify(
            signature,
            signed_digest,
            padding.PKCS1v15(),
            utils.Prehashed(hashes.SHA256()),
        )
    except InvalidSignature as e:
        raise InvalidSignatureError("Token signature does not verify") from e


def verify_token(
    token: str,
    key_set: KeySet,
    expected_audience: str,
    now: int | None = None,
) -> TokenClaims:
    """Verify a Google ID token against an already fetched key set.

    This performs full verification, stopping at the first failure:
    1. Splits and decodes the compact token
    2. Validates audience, issuer and validity window of the payload
    3. Selects the signing key by the header "kid"
    4. Rebuilds the RSA public key from the key record
    5. Verifies the RS256 signature

    Args:
        token: Compact ID token
        key_set: Provider key set snapshot
        expected_audience: Expected value for "aud", i.e. our client ID
        now: Current time in seconds since epoch, defaults to wall clock

    Returns:
        Fully verified token claims

    Raises:
        TokenVerificationError: Subclass naming the failed step
    """
    if now is None:
        now = int(time.time())

    segments = codec.split(token)

    try:
        claims = TokenClaims.model_validate_json(segments.payload)
    except ValidationError as e:
        raise MalformedTokenError(f"Invalid token payload: {e}") from e

    validate_claims(claims, expected_audience, now)

    try:
        header = TokenHeader.model_validate_json(segments.header)
    except ValidationError as e:
        raise MalformedTokenError(f"Invalid token header: {e}") from e

    key = select_key(key_set, header.kid)
    public_key = build_public_key(key.n, key.e)
    verify_signature(public_key, segments.signed_digest, segments.signature)

    return claims
