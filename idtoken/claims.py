"""ID token claim validation."""

from .errors import AudienceMismatchError, IssuerMismatchError, TokenExpiredError
from .models import TokenClaims

# Google issues ID tokens with either form
GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")


def validate_claims(claims: TokenClaims, expected_audience: str, now: int) -> None:
    """Check audience, issuer and validity window, in that order.

    Raises:
        AudienceMismatchError: If "aud" is not expected_audience
        IssuerMismatchError: If "iss" is not a Google issuer
        TokenExpiredError: If now is outside ["iat", "exp"]
    """
    if claims.aud != expected_audience:
        raise AudienceMismatchError(
            f"Token audience {claims.aud!r} does not match {expected_audience!r}"
        )

    if claims.iss not in GOOGLE_ISSUERS:
        raise IssuerMismatchError(f"Token issuer {claims.iss!r} not allowed")

    # Not yet valid tokens are rejected like expired ones
    if not claims.iat <= now <= claims.exp:
        raise TokenExpiredError(
            f"Token valid from {claims.iat} to {claims.exp}, now is {now}"
        )
