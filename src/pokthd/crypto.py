"""
Cryptographic primitives for pokthd.

Thin wrappers around external libraries so the rest of the package only
deals with bytes:
- Hash functions (sha256, hash256, ripemd160, hash160, hmac_sha512)
- ed25519 public key computation
- SLIP-0010 ed25519 master key and hardened child step
- Base58Check encoding

Uses external libraries for security-critical operations:
- cryptography: ed25519, PBKDF2
- base58: Base58 alphabet encoding
"""

from __future__ import annotations

import hashlib
import hmac

import base58
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

# SLIP-0010 master key HMAC key for the ed25519 curve
ED25519_SEED_KEY = b"ed25519 seed"

HARDENED_BIT = 0x80000000

KEY_LENGTH = 32
CHECKSUM_LENGTH = 4


# =============================================================================
# Hash Functions
# =============================================================================


def sha256(data: bytes) -> bytes:
    """
    Single SHA256 hash.

    Args:
        data: Input data to hash

    Returns:
        32-byte hash
    """
    return hashlib.sha256(data).digest()


def hash256(data: bytes) -> bytes:
    """
    SHA256(SHA256(data)) - Used for Base58Check checksums.

    Args:
        data: Input data to hash

    Returns:
        32-byte hash
    """
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def ripemd160(data: bytes) -> bytes:
    return hashlib.new("ripemd160", data).digest()


def hash160(data: bytes) -> bytes:
    """
    RIPEMD160(SHA256(data)) - Used for key fingerprints.

    Args:
        data: Input data to hash

    Returns:
        20-byte hash
    """
    return ripemd160(sha256(data))


def hmac_sha512(key: bytes, data: bytes) -> bytes:
    return hmac.new(key, data, hashlib.sha512).digest()


def pbkdf2_sha512(password: bytes, salt: bytes, iterations: int, length: int) -> bytes:
    """
    PBKDF2 with HMAC-SHA512 as the pseudorandom function.

    Args:
        password: Password bytes
        salt: Salt bytes
        iterations: Iteration count
        length: Output length in bytes

    Returns:
        Derived key of the requested length
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA512(),
        length=length,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(password)


# =============================================================================
# ed25519
# =============================================================================


def ed25519_public_key(private_key: bytes) -> bytes:
    """
    Compute the raw 32-byte ed25519 public key for a 32-byte private key.

    Args:
        private_key: 32-byte ed25519 private key (the RFC 8032 seed)

    Returns:
        32-byte public key
    """
    if len(private_key) != KEY_LENGTH:
        raise ValueError(f"ed25519 private key must be {KEY_LENGTH} bytes")
    signing_key = Ed25519PrivateKey.from_private_bytes(private_key)
    return signing_key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


def slip10_master_key(seed: bytes) -> tuple[bytes, bytes]:
    """
    Derive the SLIP-0010 ed25519 master key from a seed.

    Args:
        seed: Seed bytes (usually the 64-byte BIP39 seed)

    Returns:
        Tuple of (32-byte private key, 32-byte chain code)
    """
    digest = hmac_sha512(ED25519_SEED_KEY, seed)
    return digest[:32], digest[32:]


def slip10_derive_hardened(
    private_key: bytes, chain_code: bytes, index: int
) -> tuple[bytes, bytes]:
    """
    One SLIP-0010 ed25519 child step.

    ed25519 only defines hardened derivation, so the hardened bit is always
    set on the index fed to the HMAC, whether or not the caller set it.

    Args:
        private_key: Parent 32-byte private key
        chain_code: Parent 32-byte chain code
        index: Child index, with or without the hardened bit

    Returns:
        Tuple of (child private key, child chain code)
    """
    data = b"\x00" + private_key + (index | HARDENED_BIT).to_bytes(4, "big")
    digest = hmac_sha512(chain_code, data)
    return digest[:32], digest[32:]


# =============================================================================
# Base58Check
# =============================================================================


def checksum(payload: bytes) -> bytes:
    """First 4 bytes of the double SHA256 of the payload."""
    return hash256(payload)[:CHECKSUM_LENGTH]


def base58check_encode(payload: bytes) -> str:
    return base58.b58encode(payload + checksum(payload)).decode("ascii")


def base58_decode(text: str) -> bytes:
    """
    Decode a Base58 string without verifying any checksum.

    Raises:
        ValueError: If the string contains characters outside the alphabet
    """
    return base58.b58decode(text)


__all__ = [
    "ED25519_SEED_KEY",
    "HARDENED_BIT",
    "sha256",
    "hash256",
    "ripemd160",
    "hash160",
    "hmac_sha512",
    "pbkdf2_sha512",
    "ed25519_public_key",
    "slip10_master_key",
    "slip10_derive_hardened",
    "checksum",
    "base58check_encode",
    "base58_decode",
]
