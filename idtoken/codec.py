"""Compact token encoding."""

import base64
import hashlib
import re
from typing import NamedTuple

from .errors import MalformedTokenError

_B64URL_RE = re.compile(r"[A-Za-z0-9_-]*")


class TokenSegments(NamedTuple):
    header: bytes
    payload: bytes
    signature: bytes
    # SHA-256 of the encoded "header.payload" segments
    signed_digest: bytes


def b64url_decode(data: str) -> bytes:
    """Decode unpadded base64url data.

    Only the canonical encoding is accepted, so no two distinct strings
    decode to the same bytes.

    Raises:
        ValueError: If data is not valid unpadded base64url
    """
    if not _B64URL_RE.fullmatch(data):
        raise ValueError("Invalid base64url characters")

    padded = data
    if rem := len(data) % 4:
        padded += "=" * (4 - rem)

    decoded = base64.urlsafe_b64decode(padded)

    # Rejects non-zero unused bits, e.g. "YR" for "YQ"
    if base64.urlsafe_b64encode(decoded).rstrip(b"=") != data.encode("ascii"):
        raise ValueError("Non-canonical base64url encoding")

    return decoded


def split(token: str) -> TokenSegments:
    """Split a compact token into its decoded segments.

    Raises:
        MalformedTokenError: If the token does not have exactly three
            segments, or a segment is not valid base64url
    """
    segments = token.split(".")
    if len(segments) != 3:
        raise MalformedTokenError(
            f"Token must have 3 segments, got {len(segments)}"
        )

    header_segment, payload_segment, signature_segment = segments
    try:
        header = b64url_decode(header_segment)
        payload = b64url_decode(payload_segment)
        signature = b64url_decode(signature_segment)
    except ValueError as e:
        raise MalformedTokenError(f"Invalid base64url segment: {e}") from e

    signing_input = f"{header_segment}.{payload_segment}".encode("utf-8")

    return TokenSegments(
        header=header,
        payload=payload,
        signature=signature,
        signed_digest=hashlib.sha256(signing_input).digest(),
    )
