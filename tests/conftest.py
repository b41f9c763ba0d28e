"""Shared test fixtures for signal_envelope tests."""

import logging
from typing import Optional

import pytest

from signal_envelope import EnvelopeCodec
from signal_envelope.primitives import DefaultCryptoPrimitives

# Enable signal_envelope debug logging during tests
logging.getLogger("signal_envelope").setLevel(logging.DEBUG)
logging.getLogger("signal_envelope").addHandler(logging.StreamHandler())


class RecordingPrimitives(DefaultCryptoPrimitives):
    """
    DefaultCryptoPrimitives that records every call.

    Args:
        random_bytes: Returned (truncated) by get_random_bytes instead of
            fresh randomness, for deterministic envelopes
        passthrough_cipher: Make encrypt/decrypt return their input, so a
            ciphertext of any length can be exercised
    """

    def __init__(
        self,
        random_bytes: Optional[bytes] = None,
        passthrough_cipher: bool = False,
    ) -> None:
        self.calls: list[str] = []
        self._random_bytes = random_bytes
        self._passthrough_cipher = passthrough_cipher

    async def encrypt(self, key: bytes, plaintext: bytes, iv: bytes) -> bytes:
        self.calls.append("encrypt")
        if self._passthrough_cipher:
            return plaintext
        return await super().encrypt(key, plaintext, iv)

    async def decrypt(self, key: bytes, ciphertext: bytes, iv: bytes) -> bytes:
        self.calls.append("decrypt")
        if self._passthrough_cipher:
            return ciphertext
        return await super().decrypt(key, ciphertext, iv)

    async def calculate_mac(self, key: bytes, data: bytes) -> bytes:
        self.calls.append("calculate_mac")
        return await super().calculate_mac(key, data)

    async def verify_mac(self, data: bytes, key: bytes, mac: bytes, length: int) -> None:
        self.calls.append("verify_mac")
        await super().verify_mac(data, key, mac, length)

    async def digest(self, data: bytes) -> bytes:
        self.calls.append("digest")
        return await super().digest(data)

    async def get_random_bytes(self, size: int) -> bytes:
        self.calls.append("get_random_bytes")
        if self._random_bytes is not None:
            return self._random_bytes[:size]
        return await super().get_random_bytes(size)

    async def aead_encrypt(self, key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
        self.calls.append("aead_encrypt")
        return await super().aead_encrypt(key, nonce, plaintext)

    async def aead_decrypt(self, key: bytes, nonce: bytes, ciphertext: bytes) -> bytes:
        self.calls.append("aead_decrypt")
        return await super().aead_decrypt(key, nonce, ciphertext)


@pytest.fixture
def primitives() -> RecordingPrimitives:
    """Recording primitives backed by the real implementation."""
    return RecordingPrimitives()


@pytest.fixture
def passthrough_primitives() -> RecordingPrimitives:
    """Recording primitives whose block cipher is the identity."""
    return RecordingPrimitives(passthrough_cipher=True)


@pytest.fixture
def fixed_nonce_primitives() -> RecordingPrimitives:
    """Recording primitives that always draw zero bytes for nonces."""
    return RecordingPrimitives(random_bytes=bytes(64))


@pytest.fixture
def codec(primitives: RecordingPrimitives) -> EnvelopeCodec:
    """Codec bound to the recording primitives."""
    return EnvelopeCodec(primitives=primitives)
