"""
Errors
Failure taxonomy for key handling and envelope encryption.

Every failure is terminal for the operation that raised it. Nothing is
retried and no partial output is ever returned. Decryption failures carry
one fixed message so a caller cannot learn whether the key was wrong or the
ciphertext was tampered with.
"""


class SeqreError(Exception):
    """Base class for all seqre failures."""


class KeyGenerationFailure(SeqreError):
    """The secure random source or AEAD backend could not produce a key."""


class EncryptionFailure(SeqreError):
    """The AEAD backend failed while encrypting."""


class InvalidKeyEncoding(SeqreError, ValueError):
    """A key token is not base64url of exactly 16 bytes."""


class MalformedEnvelope(SeqreError, ValueError):
    """An envelope is too short to hold an IV and an authentication tag."""


class AuthenticationFailure(SeqreError):
    """The authentication tag did not verify."""

    def __init__(self, message: str = "cannot decrypt"):
        super().__init__(message)


class InvalidEncoding(SeqreError, ValueError):
    """Transport base64 or UTF-8 decoding failed."""
