"""Decryption of websocket signaling messages."""

from ._logging import get_logger
from .envelope import decode_signaling_envelope
from .keys import BytesLike, split_signaling_key
from .primitives import CryptoPrimitives
from .types import SIGNALING_MAC_SIZE, EnvelopeCodecError, InvalidCiphertextError

_logger = get_logger(__name__)


async def decrypt_websocket_message(
    message: BytesLike,
    signaling_key: BytesLike,
    *,
    primitives: CryptoPrimitives,
) -> bytes:
    """
    Decrypt a websocket message into its raw payload.

    The truncated MAC over version || iv || ciphertext is checked before
    anything is decrypted.

    Args:
        message: version(1) || iv(16) || ciphertext || mac(10)
        signaling_key: 52-byte signaling key
        primitives: Primitive provider

    Returns:
        Decrypted payload bytes

    Raises:
        InvalidKeyLengthError: If the signaling key is not 52 bytes
        InvalidEnvelopeLengthError: If the message is shorter than 27 bytes
        UnsupportedVersionError: If the version byte is not 0x01
        IntegrityError: If the MAC does not match
        InvalidCiphertextError: If the authenticated ciphertext does not decrypt
    """
    try:
        keys = split_signaling_key(signaling_key)
        envelope = decode_signaling_envelope(message)
    except EnvelopeCodecError as e:
        _logger.debug("Rejected websocket message: error_type=%s", type(e).__name__)
        raise

    try:
        await primitives.verify_mac(
            envelope.authenticated_data, keys.mac_key, envelope.mac, SIGNALING_MAC_SIZE
        )
    except EnvelopeCodecError as e:
        _logger.debug("Websocket message failed verification: error_type=%s", type(e).__name__)
        raise

    try:
        return await primitives.decrypt(keys.aes_key, envelope.ciphertext, envelope.iv)
    except ValueError as e:
        _logger.debug("Websocket message failed decryption: error_type=%s", type(e).__name__)
        raise InvalidCiphertextError("Failed to decrypt websocket message") from e
