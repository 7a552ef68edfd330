"""Tests for claims module."""

import pytest

from idtoken.claims import validate_claims
from idtoken.errors import (
    AudienceMismatchError,
    IssuerMismatchError,
    TokenExpiredError,
)
from idtoken.models import TokenClaims


@pytest.fixture
def claims(test_claims):
    return TokenClaims(**test_claims)


class TestValidateClaims:
    def test_valid(self, claims):
        validate_claims(claims, "client-123", 1500)

    @pytest.mark.parametrize("iss", ["accounts.google.com", "https://accounts.google.com"])
    def test_google_issuers(self, test_claims, iss):
        validate_claims(TokenClaims(**{**test_claims, "iss": iss}), "client-123", 1500)

    @pytest.mark.parametrize("now", [1000, 2000])
    def test_window_bounds_inclusive(self, claims, now):
        validate_claims(claims, "client-123", now)

    @pytest.mark.parametrize("now", [999, 2001, 2500, 0])
    def test_expired(self, claims, now):
        with pytest.raises(TokenExpiredError) as exc_info:
            validate_claims(claims, "client-123", now)

        assert exc_info.value.claim == "exp"

    def test_audience_mismatch(self, claims):
        with pytest.raises(AudienceMismatchError, match="other-client") as exc_info:
            validate_claims(claims, "other-client", 1500)

        assert exc_info.value.claim == "aud"

    @pytest.mark.parametrize(
        "iss",
        [
            "http://accounts.google.com",
            "https://accounts.google.com/",
            "https://evil.example.com",
            "",
        ],
    )
    def test_issuer_mismatch(self, test_claims, iss):
        claims = TokenClaims(**{**test_claims, "iss": iss})

        with pytest.raises(IssuerMismatchError) as exc_info:
            validate_claims(claims, "client-123", 1500)

        assert exc_info.value.claim == "iss"

    def test_check_order(self, test_claims):
        """Audience is checked before issuer, issuer before time window."""
        claims = TokenClaims(**{**test_claims, "iss": "evil.example.com"})

        with pytest.raises(AudienceMismatchError):
            validate_claims(claims, "other-client", 2500)

        with pytest.raises(IssuerMismatchError):
            validate_claims(claims, "client-123", 2500)
