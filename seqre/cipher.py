"""
Cipher
AES-GCM authenticated encryption with a self-contained binary envelope.

Envelope layout (wire-exact):
  bytes[0:12]   IV, fresh from os.urandom for every call
  bytes[12:]    AES-GCM ciphertext with the 16-byte tag at its end

No key identifier is embedded. An envelope only opens with the exact key
that sealed it. Decryption is all-or-nothing: a bad tag raises and no
plaintext is returned.

Text helpers add UTF-8 and base64 at the boundary so the result can sit in
a JSON body. Binary helpers keep the envelope as raw bytes and leave the
transport encoding to the caller.
"""

import binascii
import logging
import os

from cryptography.exceptions import InvalidTag

from seqre.encoding import b64decode, b64encode
from seqre.errors import (
    AuthenticationFailure,
    EncryptionFailure,
    InvalidEncoding,
    MalformedEnvelope,
)
from seqre.keys import SymmetricKey

logger = logging.getLogger(__name__)

IV_SIZE = 12    # 96-bit GCM nonce
TAG_SIZE = 16   # 128-bit authentication tag
MIN_ENVELOPE_SIZE = IV_SIZE + TAG_SIZE


def encrypt(plaintext: bytes, key: SymmetricKey) -> bytes:
    """
    Encrypt bytes with AES-GCM under a fresh random IV.

    Args:
        plaintext: Payload of any length, including empty.
        key: The secret's key.

    Returns:
        The envelope: IV followed by ciphertext and tag.

    Raises:
        EncryptionFailure: If the random source or AEAD backend fails.
    """
    try:
        iv = os.urandom(IV_SIZE)
        ciphertext = key.aead().encrypt(iv, bytes(plaintext), None)
    except (OSError, ValueError, OverflowError) as e:
        raise EncryptionFailure("encryption failed") from e
    logger.debug("sealed %d plaintext bytes", len(plaintext))
    return iv + ciphertext


def decrypt(envelope: bytes, key: SymmetricKey) -> bytes:
    """
    Open an envelope produced by `encrypt`.

    Raises:
        MalformedEnvelope: If the envelope cannot hold an IV and a tag.
        AuthenticationFailure: If the tag does not verify. The same error
            covers a wrong key and a modified envelope.
    """
    envelope = bytes(envelope)
    if len(envelope) < IV_SIZE:
        raise MalformedEnvelope(f"envelope shorter than {IV_SIZE}-byte IV")
    if len(envelope) < MIN_ENVELOPE_SIZE:
        raise MalformedEnvelope(f"envelope shorter than {MIN_ENVELOPE_SIZE} bytes")

    iv = envelope[:IV_SIZE]
    ciphertext = envelope[IV_SIZE:]
    try:
        plaintext = key.aead().decrypt(iv, ciphertext, None)
    except InvalidTag:
        logger.debug("tag verification failed for %d-byte envelope", len(envelope))
        raise AuthenticationFailure() from None
    return plaintext


def encode_envelope(envelope: bytes) -> str:
    """Encode an envelope as standard base64 for text transport."""
    return b64encode(envelope)


def decode_envelope(data: str | bytes) -> bytes:
    """
    Decode a base64 envelope received from text transport.

    Raises:
        InvalidEncoding: If `data` is not valid base64.
    """
    try:
        return b64decode(data)
    except (binascii.Error, ValueError):
        raise InvalidEncoding("envelope is not valid base64") from None


def encrypt_text(text: str, key: SymmetricKey) -> str:
    """UTF-8 encode, encrypt, and return the envelope as base64."""
    return encode_envelope(encrypt(text.encode("utf-8"), key))


def decrypt_text(data: str, key: SymmetricKey) -> str:
    """
    Exact inverse of `encrypt_text`.

    Raises:
        InvalidEncoding: If the base64 or UTF-8 step fails.
        MalformedEnvelope: If the decoded envelope is too short.
        AuthenticationFailure: If the tag does not verify.
    """
    plaintext = decrypt(decode_envelope(data), key)
    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError:
        raise InvalidEncoding("decrypted payload is not valid UTF-8") from None


def encrypt_file(data: bytes, key: SymmetricKey) -> bytes:
    """Encrypt binary data (e.g. image bytes). The envelope stays binary."""
    return encrypt(data, key)


def decrypt_file(envelope: bytes, key: SymmetricKey) -> bytes:
    """Decrypt a binary envelope produced by `encrypt_file`."""
    return decrypt(envelope, key)
