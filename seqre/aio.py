"""
Async Facade
Awaitable versions of the key and cipher operations.

Each coroutine runs the synchronous primitive in a worker thread. Calls
share no state, so any number may run concurrently without locks.
Cancelling an awaiting caller leaves nothing to roll back: an envelope is
produced whole or not at all.
"""

import asyncio

from seqre import cipher, keys, request
from seqre.keys import SymmetricKey
from seqre.request import SealedSecret, SecretKind, SecretRequest


async def generate_key() -> SymmetricKey:
    """Generate a fresh 128-bit key."""
    return await asyncio.to_thread(keys.generate_key)


async def encrypt(plaintext: bytes, key: SymmetricKey) -> bytes:
    """Encrypt bytes into an envelope."""
    return await asyncio.to_thread(cipher.encrypt, plaintext, key)


async def decrypt(envelope: bytes, key: SymmetricKey) -> bytes:
    """Open an envelope. Raises the same errors as the synchronous call."""
    return await asyncio.to_thread(cipher.decrypt, envelope, key)


async def encrypt_text(text: str, key: SymmetricKey) -> str:
    """Encrypt text and return the envelope as base64."""
    return await asyncio.to_thread(cipher.encrypt_text, text, key)


async def decrypt_text(data: str, key: SymmetricKey) -> str:
    """Decrypt a base64 envelope back to text."""
    return await asyncio.to_thread(cipher.decrypt_text, data, key)


async def seal(secret: SecretRequest, key: SymmetricKey = None) -> SealedSecret:
    """Seal a tagged request, generating a key when none is given."""
    return await asyncio.to_thread(request.seal, secret, key)


async def open_sealed(data: str, token: str, kind: SecretKind = SecretKind.BINARY) -> SecretRequest:
    """Open a sealed payload with the token from a share link."""
    return await asyncio.to_thread(request.open_sealed, data, token, kind)
