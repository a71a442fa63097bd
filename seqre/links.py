"""
Share Links
Carry the key token in the URL fragment of a viewing link.

The fragment (everything after '#') is never sent in an HTTP request, so
the server that serves the viewing page never sees the key.
"""

from urllib.parse import urldefrag

from seqre.errors import InvalidKeyEncoding
from seqre.keys import SymmetricKey, import_key
from seqre.request import SecretKind

VIEW_PREFIXES = {
    SecretKind.TEXT: "s",
    SecretKind.URL: "",
    SecretKind.BINARY: "i",
}


def build_share_link(url: str, token: str) -> str:
    """Append `#token` to a resource URL, replacing any existing fragment."""
    if not token:
        raise InvalidKeyEncoding("key token is empty")
    base, _ = urldefrag(url)
    return f"{base}#{token}"


def split_share_link(link: str) -> tuple[str, str]:
    """
    Split a share link into its resource URL and key token.

    Raises:
        InvalidKeyEncoding: If the link has no fragment.
    """
    url, fragment = urldefrag(link.strip())
    if not fragment:
        raise InvalidKeyEncoding("link has no key fragment")
    return url, fragment


def key_from_link(link: str) -> SymmetricKey:
    """Import the key carried in a share link's fragment."""
    _, token = split_share_link(link)
    return import_key(token)


def resource_url(base: str, short: str, kind: SecretKind = SecretKind.TEXT) -> str:
    """
    Join the server base URL with a resource's viewing path.

    Text secrets are viewed under /s/, images under /i/, and shortened
    URLs redirect straight from the root.

    >>> resource_url("https://seq.re/", "abc123")
    'https://seq.re/s/abc123'
    """
    parts = [base.rstrip("/")]
    prefix = VIEW_PREFIXES[kind]
    if prefix:
        parts.append(prefix)
    parts.append(short.strip("/"))
    return "/".join(parts)
