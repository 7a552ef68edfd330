"""Data models for tokens and provider key sets."""

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


class BaseWireModel(BaseModel):
    """Immutable model decoded once from provider JSON, ignoring unknown fields."""

    model_config = ConfigDict(
        frozen=True, extra="ignore", use_attribute_docstrings=True
    )


class TokenHeader(BaseWireModel):
    """Decoded header segment of a compact token."""

    kid: str
    """
    ID of the provider key that signed the token
    """

    alg: str = ""
    typ: str = ""


class TokenClaims(BaseWireModel):
    """Decoded payload segment of a Google ID token."""

    aud: str
    """
    Client ID the token was issued for
    """

    iss: str
    """
    Issuer, either "accounts.google.com" or "https://accounts.google.com"
    """

    iat: int
    """
    Issued-at time, seconds since epoch
    """

    exp: int
    """
    Expiry time, seconds since epoch
    """

    sub: str = ""
    """
    Stable Google account ID of the user
    """

    azp: str = ""
    at_hash: str = ""
    email: str = ""
    email_verified: bool = False
    name: str = ""
    given_name: str = ""
    family_name: str = ""
    picture: str = ""
    locale: str = ""

    @field_validator(
        "sub",
        "azp",
        "at_hash",
        "email",
        "email_verified",
        "name",
        "given_name",
        "family_name",
        "picture",
        "locale",
        mode="before",
    )
    @classmethod
    def null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        """Treat JSON null in an optional claim as an absent claim."""
        if value is None:
            return cls.model_fields[info.field_name].default

        return value


class SigningKeyRecord(BaseWireModel):
    """One JSON Web Key from the provider key set."""

    kty: str = ""
    alg: str = ""
    use: str = ""
    kid: str = ""

    n: str = ""
    """
    RSA modulus, base64url-encoded big-endian unsigned integer
    """

    e: str = ""
    """
    RSA public exponent, base64url-encoded big-endian unsigned integer
    """


class KeySet(BaseWireModel):
    """Snapshot of the provider key set.

    Snapshots are never mutated; a refresh publishes a new KeySet.
    """

    keys: tuple[SigningKeyRecord, ...] = ()

    def find_key(self, kid: str) -> SigningKeyRecord | None:
        """Find the first key in the set with the given key ID."""
        for key in self.keys:
            if key.kid == kid:
                return key

        return None

    @classmethod
    def from_json(cls, data: str | bytes) -> "KeySet":
        """Load KeySet from the provider's JSON document."""
        return cls.model_validate_json(data)


class VerifyPayload(BaseModel):
    """Payload for token verification requests."""

    token: str
    """
    Compact ID token presented by the user
    """
