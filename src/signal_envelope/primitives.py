"""Cryptographic primitive interface and the default implementation."""

import os
from abc import ABC, abstractmethod

from cryptography.hazmat.primitives import hashes, hmac, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.constant_time import bytes_eq

from ._logging import get_logger
from .types import IntegrityError

_logger = get_logger(__name__)


class CryptoPrimitives(ABC):
    """
    Interface for the primitives the envelope operations are built on.

    Implementations must be stateless so a single instance can serve
    concurrent calls.
    """

    @abstractmethod
    async def encrypt(self, key: bytes, plaintext: bytes, iv: bytes) -> bytes:
        """Encrypt with AES-256-CBC (PKCS#7 padded)."""
        ...

    @abstractmethod
    async def decrypt(self, key: bytes, ciphertext: bytes, iv: bytes) -> bytes:
        """
        Decrypt AES-256-CBC and strip PKCS#7 padding.

        Raises:
            ValueError: If the ciphertext is not block aligned or the
                padding is invalid
        """
        ...

    @abstractmethod
    async def calculate_mac(self, key: bytes, data: bytes) -> bytes:
        """Compute HMAC-SHA256 over data."""
        ...

    @abstractmethod
    async def verify_mac(self, data: bytes, key: bytes, mac: bytes, length: int) -> None:
        """
        Verify a (possibly truncated) HMAC-SHA256 in constant time.

        Raises:
            IntegrityError: If mac is not `length` bytes or does not match
        """
        ...

    @abstractmethod
    async def digest(self, data: bytes) -> bytes:
        """Compute SHA-256 over data."""
        ...

    @abstractmethod
    async def get_random_bytes(self, size: int) -> bytes:
        """Return `size` bytes from a CSPRNG."""
        ...

    @abstractmethod
    async def aead_encrypt(self, key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
        """Encrypt with AES-256-GCM, returning ciphertext || 16-byte tag."""
        ...

    @abstractmethod
    async def aead_decrypt(self, key: bytes, nonce: bytes, ciphertext: bytes) -> bytes:
        """
        Decrypt AES-256-GCM ciphertext || tag.

        Raises:
            cryptography.exceptions.InvalidTag: If authentication fails
        """
        ...


class DefaultCryptoPrimitives(CryptoPrimitives):
    """CryptoPrimitives backed by the `cryptography` package."""

    async def encrypt(self, key: bytes, plaintext: bytes, iv: bytes) -> bytes:
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(plaintext) + padder.finalize()

        encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        return encryptor.update(padded) + encryptor.finalize()

    async def decrypt(self, key: bytes, ciphertext: bytes, iv: bytes) -> bytes:
        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()

        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        return unpadder.update(padded) + unpadder.finalize()

    async def calculate_mac(self, key: bytes, data: bytes) -> bytes:
        h = hmac.HMAC(key, hashes.SHA256())
        h.update(data)
        return h.finalize()

    async def verify_mac(self, data: bytes, key: bytes, mac: bytes, length: int) -> None:
        calculated = await self.calculate_mac(key, data)

        if len(mac) != length:
            _logger.debug("MAC length mismatch: got=%d expected=%d", len(mac), length)
            raise IntegrityError("Bad MAC length")

        if not bytes_eq(calculated[:length], mac):
            raise IntegrityError("Bad MAC")

    async def digest(self, data: bytes) -> bytes:
        h = hashes.Hash(hashes.SHA256())
        h.update(data)
        return h.finalize()

    async def get_random_bytes(self, size: int) -> bytes:
        return os.urandom(size)

    async def aead_encrypt(self, key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
        return AESGCM(key).encrypt(nonce, plaintext, None)

    async def aead_decrypt(self, key: bytes, nonce: bytes, ciphertext: bytes) -> bytes:
        return AESGCM(key).decrypt(nonce, ciphertext, None)
