"""ECDH key agreement on P-256 and AES-CBC encryption."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod

from cryptography.hazmat.primitives import padding, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

_CURVE = ec.SECP256R1
_AES_KEY_SIZES = (16, 24, 32)
_IV_SIZE = 16
_BYTE_ORDER = "big"


def gen_ecdh_key() -> tuple[bytes, bytes]:
    """Generate a P-256 key pair as (private scalar bytes, uncompressed public point)."""
    own = ec.generate_private_key(_CURVE())
    value = own.private_numbers().private_value
    scalar = value.to_bytes((value.bit_length() + 7) // 8, _BYTE_ORDER)
    point = own.public_key().public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint,
    )
    return scalar, point


def gen_ecdh_shared_secret(client_pri: bytes, server_pub: bytes) -> bytes:
    """Derive the ECDH shared secret from our private scalar and the peer's public point."""
    scalar_value = int.from_bytes(bytes(client_pri), _BYTE_ORDER)
    try:
        own = ec.derive_private_key(scalar_value, _CURVE())
    except (ValueError, TypeError) as exc:
        raise ValueError(f"invalid private scalar: {exc}") from exc
    try:
        peer = ec.EllipticCurvePublicKey.from_encoded_point(_CURVE(), bytes(server_pub))
    except (ValueError, TypeError) as exc:
        raise ValueError(f"invalid public point: {exc}") from exc
    return own.exchange(ec.ECDH(), peer)


def binary_key_to_hex(binary_key: bytes) -> str:
    """Return the lower-case hexadecimal form of ``binary_key``."""
    return bytes(binary_key).hex()


def hex_key_to_binary(hex_key: str) -> bytes:
    """Parse hexadecimal text two digits at a time; a trailing odd digit is one byte."""
    pairs = (hex_key[start:start + 2] for start in range(0, len(hex_key), 2))
    try:
        return bytes(int(pair, 16) for pair in pairs)
    except ValueError as exc:
        raise ValueError(f"invalid hexadecimal text: {hex_key!r}") from exc


class Crypt(ABC):
    """Symmetric encryption of byte strings."""

    @abstractmethod
    def encrypt(self, data: bytes) -> bytes:
        """Return ``data`` encrypted."""

    @abstractmethod
    def decrypt(self, data: bytes) -> bytes:
        """Return ``data`` decrypted."""


class AESCrypt(Crypt):
    """AES in CBC mode with PKCS#7 padding; the key size picks AES-128/192/256."""

    def __init__(self, key: bytes) -> None:
        material = bytes(key)
        if len(material) not in _AES_KEY_SIZES:
            raise ValueError("AES key must be 16, 24, or 32 bytes long")
        self._material = material
        self.iv = self.generate_iv()

    @staticmethod
    def generate_key() -> bytes:
        """Return a new random 128-bit key."""
        return os.urandom(16)

    def generate_iv(self) -> bytes:
        """Generate a new random IV, make it current and return it."""
        self.iv = os.urandom(_IV_SIZE)
        return self.iv

    def _cipher(self) -> Cipher:
        if len(self.iv) != _IV_SIZE:
            raise ValueError(f"AES IV must be {_IV_SIZE} bytes long")
        return Cipher(algorithms.AES(self._material), modes.CBC(self.iv))

    def encrypt(self, data: bytes) -> bytes:
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(bytes(data)) + padder.finalize()
        encryptor = self._cipher().encryptor()
        return encryptor.update(padded) + encryptor.finalize()

    def decrypt(self, data: bytes) -> bytes:
        decryptor = self._cipher().decryptor()
        padded = decryptor.update(bytes(data)) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        return unpadder.update(padded) + unpadder.finalize()