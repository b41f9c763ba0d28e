"""Type definitions for signal_envelope."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# Key material sizes
SIGNALING_KEY_SIZE = 52
SIGNALING_AES_KEY_SIZE = 32
ATTACHMENT_KEYS_SIZE = 64
ATTACHMENT_AES_KEY_SIZE = 32
PROFILE_KEY_SIZE = 32

# Envelope layout constants
SIGNALING_VERSION = 0x01
IV_SIZE = 16
SIGNALING_MAC_SIZE = 10  # truncated HMAC-SHA256
ATTACHMENT_MAC_SIZE = 32
DIGEST_SIZE = 32
PROFILE_NONCE_SIZE = 12
PROFILE_TAG_SIZE = 16  # 128-bit GCM tag
PROFILE_NAME_PADDED_LENGTH = 26

# Minimum envelope sizes
SIGNALING_MIN_SIZE = 1 + IV_SIZE + SIGNALING_MAC_SIZE
ATTACHMENT_MIN_SIZE = IV_SIZE + ATTACHMENT_MAC_SIZE
PROFILE_MIN_SIZE = PROFILE_NONCE_SIZE + PROFILE_TAG_SIZE + 1


@dataclass(frozen=True)
class EncryptedAttachment:
    """Result of attachment encryption.

    ``ciphertext`` is the full ``iv || ciphertext || mac`` envelope and
    ``digest`` is the SHA-256 over all of it.
    """
    ciphertext: bytes
    digest: bytes


class ErrorKind(str, Enum):
    """Failure classification carried by every codec exception."""
    INVALID_KEY_LENGTH = "invalid_key_length"
    INVALID_IV_LENGTH = "invalid_iv_length"
    INVALID_ENVELOPE_LENGTH = "invalid_envelope_length"
    MALFORMED_ENVELOPE = "malformed_envelope"
    UNSUPPORTED_VERSION = "unsupported_version"
    INTEGRITY_FAILURE = "integrity_failure"
    DIGEST_MISMATCH = "digest_mismatch"
    AUTHENTICATION_FAILURE = "authentication_failure"
    INVALID_INPUT_TYPE = "invalid_input_type"
    NAME_TOO_LONG = "name_too_long"
    INVALID_CIPHERTEXT = "invalid_ciphertext"


# Exception types
class EnvelopeCodecError(Exception):
    """Base exception for signal_envelope errors."""
    kind: Optional[ErrorKind] = None


class InvalidKeyLengthError(EnvelopeCodecError):
    """Key material does not have the exact size the envelope type needs."""
    kind = ErrorKind.INVALID_KEY_LENGTH

    def __init__(self, name: str, expected: int, actual: int) -> None:
        super().__init__(f"Got invalid length {name}: {actual} bytes (expected {expected})")
        self.expected = expected
        self.actual = actual


class InvalidIVLengthError(EnvelopeCodecError):
    """IV does not have the exact size the cipher needs."""
    kind = ErrorKind.INVALID_IV_LENGTH

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Got invalid length iv: {actual} bytes (expected {expected})")
        self.expected = expected
        self.actual = actual


class InvalidEnvelopeLengthError(EnvelopeCodecError):
    """Envelope is shorter than its structural minimum."""
    kind = ErrorKind.INVALID_ENVELOPE_LENGTH

    def __init__(self, name: str, minimum: int, actual: int) -> None:
        super().__init__(f"Got invalid length {name}: {actual} bytes (minimum {minimum})")
        self.minimum = minimum
        self.actual = actual


class MalformedEnvelopeError(EnvelopeCodecError):
    """Envelope text could not be decoded into bytes."""
    kind = ErrorKind.MALFORMED_ENVELOPE


class UnsupportedVersionError(EnvelopeCodecError):
    """Signaling envelope carries an unknown version byte."""
    kind = ErrorKind.UNSUPPORTED_VERSION

    def __init__(self, version: int) -> None:
        super().__init__(f"Got bad version number: {version}")
        self.version = version


class IntegrityError(EnvelopeCodecError):
    """MAC verification failed."""
    kind = ErrorKind.INTEGRITY_FAILURE


class DigestMismatchError(EnvelopeCodecError):
    """Attachment digest does not match the pinned value."""
    kind = ErrorKind.DIGEST_MISMATCH


class ProfileDecryptError(EnvelopeCodecError):
    """Profile ciphertext failed authentication.

    This is the expected outcome after a contact rotates their profile key,
    so callers usually refetch the key instead of treating it as an attack.
    """
    kind = ErrorKind.AUTHENTICATION_FAILURE

    def __init__(self) -> None:
        super().__init__(
            "Failed to decrypt profile data. Most likely the profile key has changed."
        )


class InvalidInputTypeError(EnvelopeCodecError, TypeError):
    """Plaintext is not a concrete byte buffer."""
    kind = ErrorKind.INVALID_INPUT_TYPE


class ProfileNameTooLongError(EnvelopeCodecError):
    """Profile name does not fit in the padded field."""
    kind = ErrorKind.NAME_TOO_LONG

    def __init__(self, maximum: int, actual: int) -> None:
        super().__init__(f"Profile name too long: {actual} bytes (max {maximum})")
        self.maximum = maximum
        self.actual = actual


class InvalidCiphertextError(EnvelopeCodecError):
    """Authenticated ciphertext could not be decrypted.

    The MAC matched, so the holder of the keys produced a ciphertext that is
    not block aligned or carries bad padding.
    """
    kind = ErrorKind.INVALID_CIPHERTEXT
