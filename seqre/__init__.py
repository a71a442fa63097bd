"""
seqre — Fragment-Key Secret Sharing
Client-side encryption where the key travels in the URL fragment.

Content is sealed with AES-128-GCM on the client. The server receives only
the base64 envelope. The key is exported as an unpadded base64url token and
appended to the share link after '#', which browsers never send to the
server. The server stores ciphertext it cannot read.

Usage:
    from seqre import SecretRequest, seal, build_share_link
    sealed = seal(SecretRequest.text("hello world"))
    body = sealed.submission()          # send to the server
    link = build_share_link(url, sealed.token)
"""

from seqre.keys import SymmetricKey, generate_key, export_key, import_key
from seqre.cipher import (
    encrypt,
    decrypt,
    encrypt_text,
    decrypt_text,
    encrypt_file,
    decrypt_file,
    encode_envelope,
    decode_envelope,
)
from seqre.request import SecretKind, SecretRequest, SealedSecret, seal, open_sealed
from seqre.links import build_share_link, split_share_link, key_from_link, resource_url
from seqre.errors import (
    SeqreError,
    KeyGenerationFailure,
    EncryptionFailure,
    InvalidKeyEncoding,
    MalformedEnvelope,
    AuthenticationFailure,
    InvalidEncoding,
)

__version__ = "0.1.0"
__all__ = [
    "SymmetricKey",
    "generate_key",
    "export_key",
    "import_key",
    "encrypt",
    "decrypt",
    "encrypt_text",
    "decrypt_text",
    "encrypt_file",
    "decrypt_file",
    "encode_envelope",
    "decode_envelope",
    "SecretKind",
    "SecretRequest",
    "SealedSecret",
    "seal",
    "open_sealed",
    "build_share_link",
    "split_share_link",
    "key_from_link",
    "resource_url",
    "SeqreError",
    "KeyGenerationFailure",
    "EncryptionFailure",
    "InvalidKeyEncoding",
    "MalformedEnvelope",
    "AuthenticationFailure",
    "InvalidEncoding",
]
