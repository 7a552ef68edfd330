"""Provider key selection and RSA public key reconstruction."""

from cryptography.hazmat.primitives.asymmetric import rsa

from .codec import b64url_decode
from .errors import InvalidKeyMaterialError, KeyNotFoundError
from .models import KeySet, SigningKeyRecord

# Exponents are read as unsigned 64-bit integers
EXPONENT_WIDTH = 8


def select_key(key_set: KeySet, kid: str) -> SigningKeyRecord:
    """Select the key that signed a token.

    Raises:
        KeyNotFoundError: If no key in key_set has the key ID
    """
    key = key_set.find_key(kid)
    if key is None:
        raise KeyNotFoundError(f"No key with kid {kid!r} in key set")

    return key


def build_public_key(modulus_b64: str, exponent_b64: str) -> rsa.RSAPublicKey:
    """Build an RSA public key from base64url modulus and exponent.

    Args:
        modulus_b64: "n" member of the key record
        exponent_b64: "e" member of the key record

    Returns:
        RSA public key

    Raises:
        InvalidKeyMaterialError: If the numbers cannot be decoded or do not
            form a valid RSA public key
    """
    try:
        modulus_bytes = b64url_decode(modulus_b64)
        exponent_bytes = b64url_decode(exponent_b64)
    except ValueError as e:
        raise InvalidKeyMaterialError(f"Invalid base64url key number: {e}") from e

    if len(exponent_bytes) > EXPONENT_WIDTH:
        raise InvalidKeyMaterialError(
            f"Exponent is {len(exponent_bytes)} bytes, "
            f"at most {EXPONENT_WIDTH} supported"
        )

    modulus = int.from_bytes(modulus_bytes, "big")
    exponent = int.from_bytes(exponent_bytes.rjust(EXPONENT_WIDTH, b"\x00"), "big")

    try:
        return rsa.RSAPublicNumbers(exponent, modulus).public_key()
    except ValueError as e:
        raise InvalidKeyMaterialError(f"Invalid RSA public key: {e}") from e
