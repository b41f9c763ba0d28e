"""
signal_envelope - Authenticated encryption envelopes for a messaging service

Python implementation of the signaling, attachment and profile envelope
formats using AES-CBC + HMAC-SHA256 and AES-GCM.
"""

from .codec import CodecConfig, EnvelopeCodec
from .primitives import CryptoPrimitives, DefaultCryptoPrimitives
from .signaling import decrypt_websocket_message
from .attachment import (
    encrypt_attachment,
    decrypt_attachment,
    generate_attachment_keys,
    generate_attachment_iv,
)
from .profile import (
    encrypt_profile,
    decrypt_profile,
    encrypt_profile_name,
    decrypt_profile_name,
)
from .keys import SubKeys, split_signaling_key, split_attachment_keys, check_profile_key
from .envelope import (
    SignalingEnvelope,
    AttachmentEnvelope,
    ProfileEnvelope,
    encode_signaling_envelope,
    decode_signaling_envelope,
    encode_attachment_envelope,
    decode_attachment_envelope,
    encode_profile_envelope,
    decode_profile_envelope,
    is_signaling_message,
)
from .types import (
    EncryptedAttachment,
    ErrorKind,
    SIGNALING_KEY_SIZE,
    ATTACHMENT_KEYS_SIZE,
    PROFILE_KEY_SIZE,
    SIGNALING_VERSION,
    IV_SIZE,
    SIGNALING_MAC_SIZE,
    ATTACHMENT_MAC_SIZE,
    DIGEST_SIZE,
    PROFILE_NONCE_SIZE,
    PROFILE_TAG_SIZE,
    PROFILE_NAME_PADDED_LENGTH,
    EnvelopeCodecError,
    InvalidKeyLengthError,
    InvalidIVLengthError,
    InvalidEnvelopeLengthError,
    MalformedEnvelopeError,
    UnsupportedVersionError,
    IntegrityError,
    DigestMismatchError,
    ProfileDecryptError,
    InvalidInputTypeError,
    ProfileNameTooLongError,
    InvalidCiphertextError,
)

__version__ = "0.1.0"

__all__ = [
    # Codec
    "CodecConfig",
    "EnvelopeCodec",
    # Primitives
    "CryptoPrimitives",
    "DefaultCryptoPrimitives",
    # Signaling
    "decrypt_websocket_message",
    # Attachment
    "encrypt_attachment",
    "decrypt_attachment",
    "generate_attachment_keys",
    "generate_attachment_iv",
    # Profile
    "encrypt_profile",
    "decrypt_profile",
    "encrypt_profile_name",
    "decrypt_profile_name",
    # Keys
    "SubKeys",
    "split_signaling_key",
    "split_attachment_keys",
    "check_profile_key",
    # Envelope
    "SignalingEnvelope",
    "AttachmentEnvelope",
    "ProfileEnvelope",
    "encode_signaling_envelope",
    "decode_signaling_envelope",
    "encode_attachment_envelope",
    "decode_attachment_envelope",
    "encode_profile_envelope",
    "decode_profile_envelope",
    "is_signaling_message",
    # Types
    "EncryptedAttachment",
    "ErrorKind",
    # Constants
    "SIGNALING_KEY_SIZE",
    "ATTACHMENT_KEYS_SIZE",
    "PROFILE_KEY_SIZE",
    "SIGNALING_VERSION",
    "IV_SIZE",
    "SIGNALING_MAC_SIZE",
    "ATTACHMENT_MAC_SIZE",
    "DIGEST_SIZE",
    "PROFILE_NONCE_SIZE",
    "PROFILE_TAG_SIZE",
    "PROFILE_NAME_PADDED_LENGTH",
    # Errors
    "EnvelopeCodecError",
    "InvalidKeyLengthError",
    "InvalidIVLengthError",
    "InvalidEnvelopeLengthError",
    "MalformedEnvelopeError",
    "UnsupportedVersionError",
    "IntegrityError",
    "DigestMismatchError",
    "ProfileDecryptError",
    "InvalidInputTypeError",
    "ProfileNameTooLongError",
    "InvalidCiphertextError",
]
