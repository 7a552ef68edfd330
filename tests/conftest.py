"""Pytest configuration and shared fixtures."""

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import RSAAlgorithm

from idtoken.models import KeySet

TEST_KID = "test-kid"
TEST_AUDIENCE = "client-123"


@pytest.fixture(scope="session")
def private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


def make_jwk(private_key, kid):
    """Public JWK for private_key as published by Google."""
    jwk = RSAAlgorithm.to_jwk(private_key.public_key(), as_dict=True)
    jwk.update({"kid": kid, "alg": "RS256", "use": "sig"})
    return jwk


@pytest.fixture
def test_jwks(private_key, other_private_key):
    return {
        "keys": [
            make_jwk(other_private_key, "other-kid"),
            make_jwk(private_key, TEST_KID),
        ]
    }


@pytest.fixture
def key_set(test_jwks):
    return KeySet.model_validate(test_jwks)


@pytest.fixture
def test_claims():
    return {
        "sub": "110169484474386276334",
        "email": "user@example.com",
        "email_verified": True,
        "name": "Test User",
        "given_name": "Test",
        "family_name": "User",
        "picture": "https://example.com/user.png",
        "locale": "en",
        "iss": "accounts.google.com",
        "azp": TEST_AUDIENCE,
        "aud": TEST_AUDIENCE,
        "iat": 1000,
        "exp": 2000,
        "at_hash": "HK6E_P6Dh8Y93mRNtsDB1Q",
    }


@pytest.fixture
def make_token(private_key, test_claims):
    """Factory for RS256 tokens signed with private_key by default."""

    def _make_token(key=None, kid=TEST_KID, **claims):
        return jwt.encode(
            {**test_claims, **claims},
            key or private_key,
            algorithm="RS256",
            headers={"kid": kid},
        )

    return _make_token
