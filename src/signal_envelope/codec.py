"""
Envelope codec.

This module binds the envelope operations to a primitive provider so callers
hold one object instead of passing the provider to every call.
"""

from dataclasses import dataclass
from typing import Optional, Union

from .attachment import (
    decrypt_attachment,
    encrypt_attachment,
    generate_attachment_iv,
    generate_attachment_keys,
)
from .keys import BytesLike
from .primitives import CryptoPrimitives, DefaultCryptoPrimitives
from .profile import (
    decrypt_profile,
    decrypt_profile_name,
    encrypt_profile,
    encrypt_profile_name,
)
from .signaling import decrypt_websocket_message
from .types import EncryptedAttachment, PROFILE_NAME_PADDED_LENGTH


@dataclass(frozen=True)
class CodecConfig:
    """Configuration for the envelope codec."""

    profile_name_padded_length: int = PROFILE_NAME_PADDED_LENGTH
    """Width profile names are zero-padded to before encryption."""

    def __post_init__(self) -> None:
        if self.profile_name_padded_length < 1:
            raise ValueError(
                f"profile_name_padded_length must be at least 1, got {self.profile_name_padded_length}"
            )


class EnvelopeCodec:
    """Encrypts and decrypts signaling, attachment and profile envelopes."""

    def __init__(
        self,
        primitives: Optional[CryptoPrimitives] = None,
        config: Optional[CodecConfig] = None,
    ) -> None:
        self._primitives = primitives or DefaultCryptoPrimitives()
        self._config = config or CodecConfig()

    @property
    def primitives(self) -> CryptoPrimitives:
        """Returns the primitive provider."""
        return self._primitives

    @property
    def config(self) -> CodecConfig:
        """Returns the codec configuration."""
        return self._config

    async def decrypt_websocket_message(
        self, message: BytesLike, signaling_key: BytesLike
    ) -> bytes:
        """Decrypts a websocket signaling message."""
        return await decrypt_websocket_message(
            message, signaling_key, primitives=self._primitives
        )

    async def encrypt_attachment(
        self, plaintext: BytesLike, keys: BytesLike, iv: BytesLike
    ) -> EncryptedAttachment:
        """Encrypts an attachment and returns it with its digest."""
        return await encrypt_attachment(plaintext, keys, iv, primitives=self._primitives)

    async def decrypt_attachment(
        self,
        encrypted: BytesLike,
        keys: BytesLike,
        their_digest: Optional[BytesLike] = None,
    ) -> bytes:
        """Verifies and decrypts an attachment."""
        return await decrypt_attachment(
            encrypted, keys, their_digest, primitives=self._primitives
        )

    async def generate_attachment_keys(self) -> bytes:
        """Returns fresh 64-byte attachment keys."""
        return await generate_attachment_keys(primitives=self._primitives)

    async def generate_attachment_iv(self) -> bytes:
        """Returns a fresh 16-byte attachment IV."""
        return await generate_attachment_iv(primitives=self._primitives)

    async def encrypt_profile(self, data: BytesLike, key: BytesLike) -> bytes:
        """Encrypts a profile field."""
        return await encrypt_profile(data, key, primitives=self._primitives)

    async def decrypt_profile(self, data: BytesLike, key: BytesLike) -> bytes:
        """Decrypts a profile field."""
        return await decrypt_profile(data, key, primitives=self._primitives)

    async def encrypt_profile_name(self, name: BytesLike, key: BytesLike) -> bytes:
        """Pads and encrypts a profile name."""
        return await encrypt_profile_name(
            name,
            key,
            primitives=self._primitives,
            padded_length=self._config.profile_name_padded_length,
        )

    async def decrypt_profile_name(
        self, encrypted_name: Union[BytesLike, str], key: BytesLike
    ) -> bytes:
        """Decrypts a profile name and strips its padding."""
        return await decrypt_profile_name(encrypted_name, key, primitives=self._primitives)

    async def get_random_bytes(self, size: int) -> bytes:
        """Returns `size` random bytes from the primitive provider."""
        return await self._primitives.get_random_bytes(size)
