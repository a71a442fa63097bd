"""
Encoding Helpers
Standard base64 for envelopes, unpadded base64url for key tokens.

Envelopes travel as standard base64 inside JSON bodies. Key tokens travel
in URL fragments, so they use the RFC 4648 section 5 alphabet with the
trailing '=' padding removed. Decoding restores the padding before handing
the string to the strict decoder.
"""

import base64
import binascii


def padding_for(length: int) -> str:
    """Return the '=' padding a base64 string of `length` characters needs."""
    return "=" * ((4 - length % 4) % 4)


def b64encode(data: bytes) -> str:
    """Encode bytes as standard base64 text."""
    return base64.b64encode(data).decode("ascii")


def b64decode(data: str | bytes) -> bytes:
    """
    Strictly decode standard base64.

    Characters outside the alphabet are rejected instead of being
    silently discarded.

    Raises:
        binascii.Error: If the input is not valid base64.
    """
    if isinstance(data, str):
        try:
            data = data.encode("ascii")
        except UnicodeEncodeError as e:
            raise binascii.Error("non-ascii character in base64 input") from e
    return base64.b64decode(data, validate=True)


def urlsafe_encode(data: bytes) -> str:
    """Encode bytes as base64url with padding stripped."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def urlsafe_decode(token: str) -> bytes:
    """
    Decode an unpadded base64url token.

    Maps the URL-safe alphabet back to the standard one, appends the
    missing padding, then decodes strictly.

    Raises:
        binascii.Error: If the token is not valid unpadded base64url.
    """
    if "=" in token or "+" in token or "/" in token:
        raise binascii.Error("token is not unpadded base64url")
    if len(token) % 4 == 1:
        raise binascii.Error("invalid base64url token length")
    standard = token.replace("-", "+").replace("_", "/")
    return b64decode(standard + padding_for(len(standard)))
