"""Attachment encryption and decryption.

An encrypted attachment is ``iv(16) || ciphertext || mac(32)`` where the MAC
is HMAC-SHA256 over ``iv || ciphertext``. The encryptor also returns a
SHA-256 digest of the whole blob, MAC included, which the sender publishes
out of band (in the attachment pointer) so the receiver can pin the exact
bytes it downloads.
"""

from typing import Optional

from cryptography.hazmat.primitives.constant_time import bytes_eq

from ._logging import get_logger
from .envelope import (
    AttachmentEnvelope,
    decode_attachment_envelope,
    encode_attachment_envelope,
)
from .keys import BytesLike, as_bytes, split_attachment_keys
from .primitives import CryptoPrimitives
from .types import (
    ATTACHMENT_KEYS_SIZE,
    ATTACHMENT_MAC_SIZE,
    IV_SIZE,
    DigestMismatchError,
    EncryptedAttachment,
    EnvelopeCodecError,
    InvalidCiphertextError,
    InvalidIVLengthError,
)

_logger = get_logger(__name__)


async def encrypt_attachment(
    plaintext: BytesLike,
    keys: BytesLike,
    iv: BytesLike,
    *,
    primitives: CryptoPrimitives,
) -> EncryptedAttachment:
    """
    Encrypt an attachment.

    Args:
        plaintext: Attachment contents
        keys: 64 bytes, AES key followed by MAC key
        iv: 16-byte CBC IV
        primitives: Primitive provider

    Returns:
        EncryptedAttachment with the full envelope and its SHA-256 digest

    Raises:
        InvalidInputTypeError: If plaintext is not a byte buffer
        InvalidKeyLengthError: If keys is not 64 bytes
        InvalidIVLengthError: If iv is not 16 bytes
    """
    try:
        data = as_bytes(plaintext, "plaintext")
        sub_keys = split_attachment_keys(keys)
        iv_bytes = as_bytes(iv, "iv")
        if len(iv_bytes) != IV_SIZE:
            raise InvalidIVLengthError(IV_SIZE, len(iv_bytes))
    except EnvelopeCodecError as e:
        _logger.debug("Rejected attachment for encryption: error_type=%s", type(e).__name__)
        raise

    ciphertext = await primitives.encrypt(sub_keys.aes_key, data, iv_bytes)
    mac = await primitives.calculate_mac(sub_keys.mac_key, iv_bytes + ciphertext)

    encrypted = encode_attachment_envelope(
        AttachmentEnvelope(iv=iv_bytes, ciphertext=ciphertext, mac=mac)
    )
    digest = await primitives.digest(encrypted)

    return EncryptedAttachment(ciphertext=encrypted, digest=digest)


async def decrypt_attachment(
    encrypted: BytesLike,
    keys: BytesLike,
    their_digest: Optional[BytesLike] = None,
    *,
    primitives: CryptoPrimitives,
) -> bytes:
    """
    Verify and decrypt an attachment.

    The MAC is checked first, then the digest when one is given, and only
    then is the ciphertext decrypted.

    Args:
        encrypted: iv(16) || ciphertext || mac(32)
        keys: 64 bytes, AES key followed by MAC key
        their_digest: Expected SHA-256 of `encrypted`, or None to skip
        primitives: Primitive provider

    Returns:
        Attachment plaintext

    Raises:
        InvalidKeyLengthError: If keys is not 64 bytes
        InvalidEnvelopeLengthError: If encrypted is shorter than 48 bytes
        IntegrityError: If the MAC does not match
        DigestMismatchError: If the digest does not match their_digest
        InvalidCiphertextError: If the authenticated ciphertext does not decrypt
    """
    try:
        sub_keys = split_attachment_keys(keys)
        blob = as_bytes(encrypted, "attachment")
        envelope = decode_attachment_envelope(blob)
        expected_digest = None if their_digest is None else as_bytes(their_digest, "digest")
    except EnvelopeCodecError as e:
        _logger.debug("Rejected attachment for decryption: error_type=%s", type(e).__name__)
        raise

    try:
        await primitives.verify_mac(
            envelope.authenticated_data, sub_keys.mac_key, envelope.mac, ATTACHMENT_MAC_SIZE
        )
        if expected_digest is not None:
            await _verify_digest(blob, expected_digest, primitives)
    except EnvelopeCodecError as e:
        _logger.debug("Attachment failed verification: error_type=%s", type(e).__name__)
        raise

    try:
        return await primitives.decrypt(sub_keys.aes_key, envelope.ciphertext, envelope.iv)
    except ValueError as e:
        _logger.debug("Attachment failed decryption: error_type=%s", type(e).__name__)
        raise InvalidCiphertextError("Failed to decrypt attachment") from e


async def _verify_digest(data: bytes, their_digest: bytes, primitives: CryptoPrimitives) -> None:
    """Compare SHA-256 of data against their_digest in constant time."""
    our_digest = await primitives.digest(data)
    if not bytes_eq(our_digest, their_digest):
        raise DigestMismatchError("Bad digest")


async def generate_attachment_keys(*, primitives: CryptoPrimitives) -> bytes:
    """Draw fresh 64-byte attachment keys."""
    return await primitives.get_random_bytes(ATTACHMENT_KEYS_SIZE)


async def generate_attachment_iv(*, primitives: CryptoPrimitives) -> bytes:
    """Draw a fresh 16-byte attachment IV."""
    return await primitives.get_random_bytes(IV_SIZE)
