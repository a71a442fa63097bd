"""
Key Manager
Generates, exports and imports the symmetric keys that protect each secret.

A key is 128 bits of AES material used for AES-GCM. It never leaves the
client except as a key token in a URL fragment, which browsers do not send
to the server. The token is the raw key in unpadded base64url, so a 16-byte
key always becomes exactly 22 characters.
"""

import binascii
import logging
from dataclasses import dataclass

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from seqre.encoding import urlsafe_decode, urlsafe_encode
from seqre.errors import InvalidKeyEncoding, KeyGenerationFailure

logger = logging.getLogger(__name__)

KEY_SIZE = 16        # 128 bits
KEY_BITS = KEY_SIZE * 8
TOKEN_LENGTH = 22    # unpadded base64url of 16 bytes


@dataclass(frozen=True)
class SymmetricKey:
    """
    Opaque handle to AES-128 key material.

    Usable for both encryption and decryption. Two keys compare equal when
    their bytes match. The repr never shows the key bytes.
    """

    material: bytes

    def __post_init__(self):
        if not isinstance(self.material, bytes) or len(self.material) != KEY_SIZE:
            raise InvalidKeyEncoding(f"key must be exactly {KEY_SIZE} bytes")

    def aead(self) -> AESGCM:
        """Build an AES-GCM primitive bound to this key."""
        return AESGCM(self.material)

    def __repr__(self) -> str:
        return f"SymmetricKey(<{KEY_BITS}-bit>)"


def generate_key() -> SymmetricKey:
    """
    Generate a fresh 128-bit AES-GCM key from the OS secure random source.

    Raises:
        KeyGenerationFailure: If the platform cannot produce key material.
    """
    try:
        material = AESGCM.generate_key(bit_length=KEY_BITS)
    except (OSError, NotImplementedError) as e:
        raise KeyGenerationFailure("secure key generation is unavailable") from e
    logger.debug("generated %d-bit key", KEY_BITS)
    return SymmetricKey(material)


def export_key(key: SymmetricKey) -> str:
    """Serialize a key to an unpadded base64url token."""
    return urlsafe_encode(key.material)


def import_key(token: str) -> SymmetricKey:
    """
    Rebuild a key from a token produced by `export_key`.

    Args:
        token: Unpadded base64url string, usually taken from a URL fragment.

    Returns:
        The SymmetricKey the token encodes.

    Raises:
        InvalidKeyEncoding: If the token is not base64url or does not
            decode to exactly 16 bytes.
    """
    if not isinstance(token, str):
        raise InvalidKeyEncoding("key token must be a string")
    token = token.strip()
    if not token:
        raise InvalidKeyEncoding("key token is empty")

    try:
        material = urlsafe_decode(token)
    except (binascii.Error, ValueError):
        logger.debug("rejected key token of length %d", len(token))
        raise InvalidKeyEncoding("key token is not valid base64url") from None

    if len(material) != KEY_SIZE:
        logger.debug("rejected key token decoding to %d bytes", len(material))
        raise InvalidKeyEncoding(
            f"key token decodes to {len(material)} bytes, expected {KEY_SIZE}"
        )

    if urlsafe_encode(material) != token:
        logger.debug("rejected non-canonical key token")
        raise InvalidKeyEncoding("key token is not canonical base64url")
    return SymmetricKey(material)
