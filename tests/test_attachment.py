"""Tests for attachment encryption and decryption."""

import pytest
from cryptography.hazmat.primitives import hashes, hmac

from signal_envelope.attachment import (
    decrypt_attachment,
    encrypt_attachment,
    generate_attachment_iv,
    generate_attachment_keys,
)
from signal_envelope.types import (
    DigestMismatchError,
    ErrorKind,
    IntegrityError,
    InvalidCiphertextError,
    InvalidEnvelopeLengthError,
    InvalidInputTypeError,
    InvalidIVLengthError,
    InvalidKeyLengthError,
)
from .conftest import RecordingPrimitives
from .test_vectors import (
    ATTACHMENT_DIGEST_HEX,
    ATTACHMENT_ENVELOPE_HEX,
    ATTACHMENT_PLAINTEXT,
    ZERO_ATTACHMENT_KEYS_HEX,
    ZERO_IV_HEX,
)


def _signed_blob(mac_key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
    h = hmac.HMAC(mac_key, hashes.SHA256())
    h.update(iv + ciphertext)
    return iv + ciphertext + h.finalize()


@pytest.fixture
def keys() -> bytes:
    return bytes.fromhex(ZERO_ATTACHMENT_KEYS_HEX)


@pytest.fixture
def iv() -> bytes:
    return bytes.fromhex(ZERO_IV_HEX)


@pytest.fixture
def envelope() -> bytes:
    return bytes.fromhex(ATTACHMENT_ENVELOPE_HEX)


class TestEncryptAttachment:
    """Test attachment encryption."""

    async def test_encrypt_vector(self, primitives, keys, iv) -> None:
        """Zero keys and iv produce the known envelope and digest."""
        result = await encrypt_attachment(ATTACHMENT_PLAINTEXT, keys, iv, primitives=primitives)

        assert result.ciphertext.hex() == ATTACHMENT_ENVELOPE_HEX
        assert result.digest.hex() == ATTACHMENT_DIGEST_HEX

    async def test_layout(self, primitives) -> None:
        """Envelope is iv || ciphertext || 32-byte mac."""
        iv = bytes(range(16))
        result = await encrypt_attachment(b"x" * 100, bytes(range(64)), iv, primitives=primitives)

        assert result.ciphertext[:16] == iv
        assert len(result.ciphertext) == 16 + 112 + 32
        assert len(result.digest) == 32

    async def test_digest_covers_mac(self, primitives, keys, iv) -> None:
        """Digest is taken over the whole envelope, MAC included."""
        result = await encrypt_attachment(ATTACHMENT_PLAINTEXT, keys, iv, primitives=primitives)

        assert result.digest == await primitives.digest(result.ciphertext)
        assert result.digest != await primitives.digest(result.ciphertext[:-32])

    async def test_accepts_memoryview(self, primitives, keys, iv) -> None:
        """memoryview plaintext is a byte buffer."""
        result = await encrypt_attachment(
            memoryview(ATTACHMENT_PLAINTEXT), keys, iv, primitives=primitives
        )
        assert result.ciphertext.hex() == ATTACHMENT_ENVELOPE_HEX

    @pytest.mark.parametrize("plaintext", ["hello", None, 12345, [104, 105]])
    async def test_rejects_non_buffer(self, primitives, keys, iv, plaintext) -> None:
        """Plaintext must be a byte buffer."""
        with pytest.raises(InvalidInputTypeError, match="plaintext"):
            await encrypt_attachment(plaintext, keys, iv, primitives=primitives)
        assert primitives.calls == []

    async def test_input_type_error_is_type_error(self, primitives, keys, iv) -> None:
        """InvalidInputTypeError can be caught as TypeError."""
        with pytest.raises(TypeError):
            await encrypt_attachment("hello", keys, iv, primitives=primitives)

    @pytest.mark.parametrize("length", [0, 32, 63, 65])
    async def test_rejects_bad_key_length(self, primitives, iv, length) -> None:
        """Keys must be exactly 64 bytes."""
        with pytest.raises(InvalidKeyLengthError):
            await encrypt_attachment(b"data", bytes(length), iv, primitives=primitives)
        assert primitives.calls == []

    @pytest.mark.parametrize("length", [0, 12, 15, 17, 32])
    async def test_rejects_bad_iv_length(self, primitives, keys, length) -> None:
        """IV must be exactly 16 bytes."""
        with pytest.raises(InvalidIVLengthError):
            await encrypt_attachment(b"data", keys, bytes(length), primitives=primitives)
        assert primitives.calls == []


class TestDecryptAttachment:
    """Test attachment decryption."""

    async def test_decrypt_vector_without_digest(self, primitives, keys, envelope) -> None:
        """Known envelope decrypts to b"hello" when no digest is pinned."""
        plaintext = await decrypt_attachment(envelope, keys, None, primitives=primitives)

        assert plaintext == ATTACHMENT_PLAINTEXT
        assert "digest" not in primitives.calls

    async def test_decrypt_vector_with_digest(self, primitives, keys, envelope) -> None:
        """Known envelope decrypts when its digest is pinned."""
        digest = bytes.fromhex(ATTACHMENT_DIGEST_HEX)
        plaintext = await decrypt_attachment(envelope, keys, digest, primitives=primitives)

        assert plaintext == ATTACHMENT_PLAINTEXT

    async def test_round_trip(self, primitives) -> None:
        """Random keys and iv round-trip a larger payload."""
        keys = await generate_attachment_keys(primitives=primitives)
        iv = await generate_attachment_iv(primitives=primitives)
        payload = bytes(range(256)) * 40

        result = await encrypt_attachment(payload, keys, iv, primitives=primitives)
        plaintext = await decrypt_attachment(
            result.ciphertext, keys, result.digest, primitives=primitives
        )

        assert plaintext == payload

    async def test_wrong_digest(self, primitives, keys, envelope) -> None:
        """A valid MAC with a wrong pinned digest fails and nothing is decrypted."""
        with pytest.raises(DigestMismatchError, match="Bad digest"):
            await decrypt_attachment(envelope, keys, b"\xff" * 32, primitives=primitives)

        assert primitives.calls.index("verify_mac") < primitives.calls.index("digest")
        assert "decrypt" not in primitives.calls

    async def test_short_digest(self, primitives, keys, envelope) -> None:
        """A truncated digest never matches."""
        digest = bytes.fromhex(ATTACHMENT_DIGEST_HEX)[:16]
        with pytest.raises(DigestMismatchError):
            await decrypt_attachment(envelope, keys, digest, primitives=primitives)

    async def test_mac_checked_before_digest(self, primitives, keys, envelope) -> None:
        """With a bad MAC the digest is never computed."""
        tampered = envelope[:-1] + bytes([envelope[-1] ^ 0x01])

        with pytest.raises(IntegrityError):
            await decrypt_attachment(tampered, keys, b"\xff" * 32, primitives=primitives)

        assert "digest" not in primitives.calls
        assert "decrypt" not in primitives.calls

    async def test_wrong_keys(self, primitives, envelope) -> None:
        """A different MAC key fails verification."""
        keys = bytes(32) + b"\x01" * 32
        with pytest.raises(IntegrityError):
            await decrypt_attachment(envelope, keys, primitives=primitives)

    async def test_rejects_bad_key_length(self, primitives, envelope) -> None:
        """Keys must be exactly 64 bytes."""
        with pytest.raises(InvalidKeyLengthError, match="attachment keys"):
            await decrypt_attachment(envelope, bytes(52), primitives=primitives)
        assert primitives.calls == []

    async def test_rejects_short_envelope(self, primitives, keys) -> None:
        """Envelope must hold at least iv and mac."""
        with pytest.raises(InvalidEnvelopeLengthError):
            await decrypt_attachment(bytes(47), keys, primitives=primitives)
        assert primitives.calls == []


class TestUndecryptableCiphertext:
    """Authenticated ciphertext that AES-CBC cannot decrypt."""

    async def test_empty_ciphertext(self, primitives, keys, iv) -> None:
        """A 48-byte envelope with a valid MAC fails with a codec error."""
        blob = _signed_blob(bytes(32), iv, b"")
        assert len(blob) == 48

        with pytest.raises(InvalidCiphertextError) as exc_info:
            await decrypt_attachment(blob, keys, primitives=primitives)

        assert exc_info.value.kind == ErrorKind.INVALID_CIPHERTEXT
        assert isinstance(exc_info.value.__cause__, ValueError)
        assert primitives.calls.index("verify_mac") < primitives.calls.index("decrypt")

    async def test_misaligned_ciphertext(self, primitives, keys, iv) -> None:
        """A ciphertext that is not a whole number of blocks fails with a codec error."""
        blob = _signed_blob(bytes(32), iv, b"\xaa" * 20)

        with pytest.raises(InvalidCiphertextError):
            await decrypt_attachment(blob, keys, primitives=primitives)

    async def test_bad_padding_with_pinned_digest(self, primitives, keys, iv) -> None:
        """Bad padding is reported after both the MAC and digest checks pass."""
        ciphertext = await primitives.encrypt(bytes(32), b"x" * 16, iv)
        blob = _signed_blob(bytes(32), iv, ciphertext[:16])
        digest = await primitives.digest(blob)

        with pytest.raises(InvalidCiphertextError):
            await decrypt_attachment(blob, keys, digest, primitives=primitives)

        assert primitives.calls.index("digest") < primitives.calls.index("decrypt")


class TestTamperDetection:
    """Every bit of the envelope is authenticated."""

    async def test_any_bit_flip_fails(self, keys, envelope) -> None:
        """Flipping any single bit raises IntegrityError before decryption."""
        for position in range(len(envelope)):
            for bit in range(8):
                tampered = bytearray(envelope)
                tampered[position] ^= 1 << bit
                primitives = RecordingPrimitives()

                with pytest.raises(IntegrityError):
                    await decrypt_attachment(bytes(tampered), keys, primitives=primitives)
                assert "decrypt" not in primitives.calls
