"""Profile field encryption with AES-256-GCM."""

import base64
import binascii
from typing import Union

from cryptography.exceptions import InvalidTag

from ._logging import get_logger
from .envelope import ProfileEnvelope, decode_profile_envelope, encode_profile_envelope
from .keys import BytesLike, as_bytes, check_profile_key
from .primitives import CryptoPrimitives
from .types import (
    PROFILE_NAME_PADDED_LENGTH,
    PROFILE_NONCE_SIZE,
    EnvelopeCodecError,
    MalformedEnvelopeError,
    ProfileDecryptError,
    ProfileNameTooLongError,
)

_logger = get_logger(__name__)


async def encrypt_profile(
    data: BytesLike,
    key: BytesLike,
    *,
    primitives: CryptoPrimitives,
) -> bytes:
    """
    Encrypt a profile field under a fresh random nonce.

    Args:
        data: Field contents
        key: 32-byte profile key
        primitives: Primitive provider

    Returns:
        nonce(12) || ciphertext || tag(16)

    Raises:
        InvalidKeyLengthError: If key is not 32 bytes
    """
    try:
        profile_key = check_profile_key(key)
        plaintext = as_bytes(data, "data")
    except EnvelopeCodecError as e:
        _logger.debug("Rejected profile data for encryption: error_type=%s", type(e).__name__)
        raise

    nonce = await primitives.get_random_bytes(PROFILE_NONCE_SIZE)
    ciphertext = await primitives.aead_encrypt(profile_key, nonce, plaintext)

    return encode_profile_envelope(ProfileEnvelope(nonce=nonce, ciphertext=ciphertext))


async def decrypt_profile(
    data: BytesLike,
    key: BytesLike,
    *,
    primitives: CryptoPrimitives,
) -> bytes:
    """
    Decrypt a profile field.

    Args:
        data: nonce(12) || ciphertext || tag(16)
        key: 32-byte profile key
        primitives: Primitive provider

    Returns:
        Field contents

    Raises:
        InvalidEnvelopeLengthError: If data is shorter than 29 bytes
        InvalidKeyLengthError: If key is not 32 bytes
        ProfileDecryptError: If the tag does not verify, usually because
            the profile key has changed
    """
    try:
        envelope = decode_profile_envelope(data)
        profile_key = check_profile_key(key)
    except EnvelopeCodecError as e:
        _logger.debug("Rejected profile data for decryption: error_type=%s", type(e).__name__)
        raise

    try:
        return await primitives.aead_decrypt(profile_key, envelope.nonce, envelope.ciphertext)
    except InvalidTag as e:
        _logger.debug("Profile data failed authentication")
        raise ProfileDecryptError() from e


async def encrypt_profile_name(
    name: BytesLike,
    key: BytesLike,
    *,
    primitives: CryptoPrimitives,
    padded_length: int = PROFILE_NAME_PADDED_LENGTH,
) -> bytes:
    """
    Zero-pad a profile name to a fixed width and encrypt it.

    Raises:
        ValueError: If padded_length is less than 1
        ProfileNameTooLongError: If name is longer than padded_length
    """
    if padded_length < 1:
        raise ValueError(f"padded_length must be at least 1, got {padded_length}")

    name_bytes = as_bytes(name, "name")
    if len(name_bytes) > padded_length:
        _logger.debug("Rejected profile name: length=%d max=%d", len(name_bytes), padded_length)
        raise ProfileNameTooLongError(padded_length, len(name_bytes))

    padded = name_bytes.ljust(padded_length, b"\x00")
    return await encrypt_profile(padded, key, primitives=primitives)


async def decrypt_profile_name(
    encrypted_name: Union[BytesLike, str],
    key: BytesLike,
    *,
    primitives: CryptoPrimitives,
) -> bytes:
    """
    Decrypt a profile name and strip its zero padding.

    Args:
        encrypted_name: Envelope bytes, or the base64 text the service stores
        key: 32-byte profile key
        primitives: Primitive provider

    Returns:
        The name without trailing zero bytes
    """
    if isinstance(encrypted_name, str):
        data = _b64decode(encrypted_name)
    else:
        data = encrypted_name

    padded = await decrypt_profile(data, key, primitives=primitives)
    return padded.rstrip(b"\x00")


def _b64decode(text: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        _logger.debug("Rejected profile name: error_type=%s", type(e).__name__)
        raise MalformedEnvelopeError(f"Profile name is not valid base64: {e}") from e
