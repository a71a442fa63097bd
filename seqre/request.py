"""
Secret Requests
Tagged requests that say explicitly what is being encrypted.

A request carries its kind (text, URL or binary) next to the payload bytes,
so nothing downstream has to guess the kind from which fields happen to be
present. Sealing a request produces the two halves of a secret:

  submission: base64 envelope plus non-secret metadata, sent to the server
  token:      the key, which only ever travels in the link fragment
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import urlsplit

from seqre.cipher import decode_envelope, decrypt, encode_envelope, encrypt
from seqre.errors import InvalidEncoding
from seqre.keys import SymmetricKey, export_key, generate_key, import_key

logger = logging.getLogger(__name__)

ALLOWED_URL_SCHEMES = {"http", "https"}


class SecretKind(Enum):
    """What a sealed payload holds."""
    TEXT = "text"
    URL = "url"
    BINARY = "binary"


def validate_url(url: str) -> str:
    """Require an absolute http(s) URL with a host."""
    parts = urlsplit(url.strip())
    if parts.scheme.lower() not in ALLOWED_URL_SCHEMES:
        raise ValueError(f"URL scheme must be http or https, got {parts.scheme!r}")
    if not parts.netloc:
        raise ValueError("URL must include a host")
    return url.strip()


@dataclass(frozen=True)
class SecretRequest:
    """A payload and the kind of content it carries."""
    kind: SecretKind
    payload: bytes

    @classmethod
    def text(cls, content: str) -> "SecretRequest":
        return cls(SecretKind.TEXT, content.encode("utf-8"))

    @classmethod
    def url(cls, url: str) -> "SecretRequest":
        return cls(SecretKind.URL, validate_url(url).encode("utf-8"))

    @classmethod
    def binary(cls, data: bytes) -> "SecretRequest":
        return cls(SecretKind.BINARY, bytes(data))

    def as_text(self) -> str:
        """Return the payload as a string. Only valid for text and URL kinds."""
        if self.kind is SecretKind.BINARY:
            raise TypeError("binary payloads have no text form")
        return self.payload.decode("utf-8")


@dataclass
class SealedSecret:
    """
    Result of sealing a request.

    `data` is safe to send to the server. `token` must only ever be
    placed in a URL fragment.
    """
    kind: SecretKind
    data: str
    token: str = field(repr=False)

    def submission(self, **metadata) -> dict:
        """
        Build the body handed to the server collaborator.

        Args:
            **metadata: Non-secret fields such as `onetime` or `expires_in`.

        Returns:
            A JSON-serializable dict. Never contains the key token.
        """
        body = {"kind": self.kind.value, "data": self.data}
        for name, value in metadata.items():
            if name in body or name in ("token", "key"):
                raise ValueError(f"metadata field {name!r} is reserved")
            body[name] = value
        return body


def seal(request: SecretRequest, key: SymmetricKey = None) -> SealedSecret:
    """
    Encrypt a request's payload.

    Args:
        request: The tagged request.
        key: Key to use. A fresh one is generated when omitted, which is
            the normal one-key-per-secret flow.

    Returns:
        SealedSecret with the base64 envelope and the exported key token.
    """
    if key is None:
        key = generate_key()
    envelope = encrypt(request.payload, key)
    logger.debug("sealed %s secret, envelope %d bytes", request.kind.value, len(envelope))
    return SealedSecret(
        kind=request.kind,
        data=encode_envelope(envelope),
        token=export_key(key),
    )


def open_sealed(data: str, token: str, kind: SecretKind = SecretKind.BINARY) -> SecretRequest:
    """
    Decrypt a sealed payload back into a request.

    Args:
        data: Base64 envelope as stored by the server.
        token: Key token from the link fragment.
        kind: The kind the server recorded for this secret.

    Raises:
        InvalidKeyEncoding: If the token is malformed.
        InvalidEncoding: If `data` is not base64, or a text/URL payload is
            not UTF-8.
        MalformedEnvelope: If the envelope is truncated.
        AuthenticationFailure: If the tag does not verify.
    """
    key = import_key(token)
    payload = decrypt(decode_envelope(data), key)
    if kind is not SecretKind.BINARY:
        try:
            payload.decode("utf-8")
        except UnicodeDecodeError:
            raise InvalidEncoding("decrypted payload is not valid UTF-8") from None
    return SecretRequest(kind, payload)
