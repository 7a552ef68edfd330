"""Token verification errors."""


class TokenVerificationError(Exception):
    """Raised when token verification fails."""


class MalformedTokenError(TokenVerificationError):
    """Raised when a token cannot be split or decoded."""


class ClaimValidationError(TokenVerificationError):
    """Raised when a token claim does not match expectations."""

    claim: str = ""


class AudienceMismatchError(ClaimValidationError):
    claim = "aud"


class IssuerMismatchError(ClaimValidationError):
    claim = "iss"


class TokenExpiredError(ClaimValidationError):
    claim = "exp"


class KeyNotFoundError(TokenVerificationError):
    """Raised when no key in the key set matches the token key ID.

    Usually means the provider rotated its keys and the key set is stale.
    """


class InvalidKeyMaterialError(TokenVerificationError):
    """Raised when a key record cannot be turned into an RSA public key."""


class InvalidSignatureError(TokenVerificationError):
    """Raised when the token signature does not verify."""
