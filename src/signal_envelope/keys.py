"""Key material validation and sub-key slicing."""

from dataclasses import dataclass
from typing import Union

from .types import (
    SIGNALING_KEY_SIZE,
    SIGNALING_AES_KEY_SIZE,
    ATTACHMENT_KEYS_SIZE,
    ATTACHMENT_AES_KEY_SIZE,
    PROFILE_KEY_SIZE,
    InvalidInputTypeError,
    InvalidKeyLengthError,
)

BytesLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class SubKeys:
    """Encryption and MAC halves of a combined key buffer."""
    aes_key: bytes
    mac_key: bytes


def as_bytes(data: BytesLike, name: str) -> bytes:
    """
    Copy a byte buffer into immutable bytes.

    Args:
        data: bytes, bytearray or memoryview
        name: Argument name used in the error message

    Returns:
        An immutable copy of the buffer

    Raises:
        InvalidInputTypeError: If data is not a byte buffer
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise InvalidInputTypeError(
        f"`{name}` must be bytes, bytearray or memoryview; got: {type(data).__name__}"
    )


def _check_length(key: bytes, expected: int, name: str) -> None:
    if len(key) != expected:
        raise InvalidKeyLengthError(name, expected, len(key))


def split_signaling_key(signaling_key: BytesLike) -> SubKeys:
    """
    Split a 52-byte signaling key into its AES and MAC sub-keys.

    Layout: [0:32) AES-256 key, [32:52) HMAC key.
    """
    key = as_bytes(signaling_key, "signalingKey")
    _check_length(key, SIGNALING_KEY_SIZE, "signalingKey")
    return SubKeys(
        aes_key=key[:SIGNALING_AES_KEY_SIZE],
        mac_key=key[SIGNALING_AES_KEY_SIZE:SIGNALING_KEY_SIZE],
    )


def split_attachment_keys(keys: BytesLike) -> SubKeys:
    """
    Split 64 bytes of attachment keys into AES and MAC sub-keys.

    Layout: [0:32) AES-256 key, [32:64) HMAC key.
    """
    key = as_bytes(keys, "attachment keys")
    _check_length(key, ATTACHMENT_KEYS_SIZE, "attachment keys")
    return SubKeys(
        aes_key=key[:ATTACHMENT_AES_KEY_SIZE],
        mac_key=key[ATTACHMENT_AES_KEY_SIZE:ATTACHMENT_KEYS_SIZE],
    )


def check_profile_key(key: BytesLike) -> bytes:
    """Validate a profile key, which is used whole as an AES-256-GCM key."""
    profile_key = as_bytes(key, "profile key")
    _check_length(profile_key, PROFILE_KEY_SIZE, "profile key")
    return profile_key
