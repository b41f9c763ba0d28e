"""Wire layouts for signaling, attachment and profile envelopes."""

from dataclasses import dataclass

from .keys import BytesLike, as_bytes
from .types import (
    SIGNALING_VERSION,
    SIGNALING_MIN_SIZE,
    SIGNALING_MAC_SIZE,
    ATTACHMENT_MIN_SIZE,
    ATTACHMENT_MAC_SIZE,
    PROFILE_MIN_SIZE,
    PROFILE_NONCE_SIZE,
    IV_SIZE,
    InvalidEnvelopeLengthError,
    UnsupportedVersionError,
)


@dataclass(frozen=True)
class SignalingEnvelope:
    """Websocket signaling message envelope."""
    version: int
    iv: bytes  # 16 bytes
    ciphertext: bytes  # variable
    mac: bytes  # 10 bytes, truncated HMAC-SHA256

    @property
    def authenticated_data(self) -> bytes:
        """Bytes covered by the MAC: version || iv || ciphertext."""
        return bytes([self.version]) + self.iv + self.ciphertext


@dataclass(frozen=True)
class AttachmentEnvelope:
    """Encrypted attachment blob."""
    iv: bytes  # 16 bytes
    ciphertext: bytes  # variable, PKCS#7 padded
    mac: bytes  # 32 bytes

    @property
    def authenticated_data(self) -> bytes:
        """Bytes covered by the MAC: iv || ciphertext."""
        return self.iv + self.ciphertext


@dataclass(frozen=True)
class ProfileEnvelope:
    """Encrypted profile field."""
    nonce: bytes  # 12 bytes
    ciphertext: bytes  # variable, GCM tag appended


def encode_signaling_envelope(envelope: SignalingEnvelope) -> bytes:
    """
    Encode a signaling envelope to bytes.

    Format:
        [0]        version (0x01)
        [1-16]     iv (16 bytes)
        [17..-10]  ciphertext (variable)
        [-10..]    mac (10 bytes)
    """
    return envelope.authenticated_data + envelope.mac


def decode_signaling_envelope(data: BytesLike) -> SignalingEnvelope:
    """
    Decode bytes into a signaling envelope.

    Args:
        data: Raw websocket message

    Returns:
        Decoded SignalingEnvelope

    Raises:
        InvalidEnvelopeLengthError: If data is shorter than version + iv + mac
        UnsupportedVersionError: If the version byte is not 0x01
    """
    message = as_bytes(data, "message")

    if len(message) < SIGNALING_MIN_SIZE:
        raise InvalidEnvelopeLengthError("message", SIGNALING_MIN_SIZE, len(message))

    if message[0] != SIGNALING_VERSION:
        raise UnsupportedVersionError(message[0])

    mac_offset = len(message) - SIGNALING_MAC_SIZE
    return SignalingEnvelope(
        version=message[0],
        iv=message[1 : 1 + IV_SIZE],
        ciphertext=message[1 + IV_SIZE : mac_offset],
        mac=message[mac_offset:],
    )


def encode_attachment_envelope(envelope: AttachmentEnvelope) -> bytes:
    """
    Encode an attachment envelope to bytes.

    Format:
        [0-15]     iv (16 bytes)
        [16..-32]  ciphertext (variable)
        [-32..]    mac (32 bytes)
    """
    return envelope.iv + envelope.ciphertext + envelope.mac


def decode_attachment_envelope(data: BytesLike) -> AttachmentEnvelope:
    """
    Decode bytes into an attachment envelope.

    Raises:
        InvalidEnvelopeLengthError: If data is shorter than iv + mac
    """
    blob = as_bytes(data, "attachment")

    if len(blob) < ATTACHMENT_MIN_SIZE:
        raise InvalidEnvelopeLengthError("attachment", ATTACHMENT_MIN_SIZE, len(blob))

    mac_offset = len(blob) - ATTACHMENT_MAC_SIZE
    return AttachmentEnvelope(
        iv=blob[:IV_SIZE],
        ciphertext=blob[IV_SIZE:mac_offset],
        mac=blob[mac_offset:],
    )


def encode_profile_envelope(envelope: ProfileEnvelope) -> bytes:
    """
    Encode a profile envelope to bytes.

    Format:
        [0-11]  nonce (12 bytes)
        [12..]  ciphertext + 16-byte tag
    """
    return envelope.nonce + envelope.ciphertext


def decode_profile_envelope(data: BytesLike) -> ProfileEnvelope:
    """
    Decode bytes into a profile envelope.

    Raises:
        InvalidEnvelopeLengthError: If data cannot hold nonce, tag and one byte
    """
    blob = as_bytes(data, "profile data")

    if len(blob) < PROFILE_MIN_SIZE:
        raise InvalidEnvelopeLengthError("profile data", PROFILE_MIN_SIZE, len(blob))

    return ProfileEnvelope(
        nonce=blob[:PROFILE_NONCE_SIZE],
        ciphertext=blob[PROFILE_NONCE_SIZE:],
    )


def is_signaling_message(data: bytes) -> bool:
    """
    Check if data looks like a signaling envelope.

    Args:
        data: Bytes to check

    Returns:
        True if data is long enough and carries the supported version
    """
    if len(data) < SIGNALING_MIN_SIZE:
        return False

    return data[0] == SIGNALING_VERSION
