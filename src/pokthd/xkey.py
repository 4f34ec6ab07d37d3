"""
Extended key (xprv/xpub) serialization.

Wire format, 78-byte payload followed by a 4-byte double-SHA256 checksum,
Base58 encoded:

    version (4) || depth (1) || parent fingerprint (4) || index (4, BE)
    || chain code (32) || key field (33)

The key field is ``0x00 || key`` for both private and public keys: ed25519
public keys are 32 bytes with no parity to encode, and SLIP-0010 pads them
with a zero byte to keep the BIP32 33-byte layout. Only mainnet version
bytes are supported.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from pokthd.crypto import CHECKSUM_LENGTH, base58_decode, base58check_encode, checksum
from pokthd.errors import DepthOverflow, InvalidExtendedKey, UnknownVersionPrefix

if TYPE_CHECKING:
    from pokthd.hdnode import HDNode

MAINNET_PRIVATE = bytes.fromhex("0488ADE4")
MAINNET_PUBLIC = bytes.fromhex("0488B21E")

PAYLOAD_LENGTH = 78
SERIALIZED_LENGTH = PAYLOAD_LENGTH + CHECKSUM_LENGTH
MAX_DEPTH = 255
KEY_PREFIX = b"\x00"


@dataclass(frozen=True)
class ExtendedKeyPayload:
    """Decoded fields of an extended key."""

    version: bytes
    depth: int
    parent_fingerprint: bytes
    index: int
    chain_code: bytes
    key: bytes = b""

    @property
    def is_private(self) -> bool:
        return self.version == MAINNET_PRIVATE

    def __repr__(self) -> str:
        kind = "private" if self.is_private else "public"
        return (
            f"ExtendedKeyPayload({kind}, depth={self.depth}, "
            f"parent_fingerprint={self.parent_fingerprint.hex()}, index={self.index})"
        )

    def to_bytes(self) -> bytes:
        if self.depth > MAX_DEPTH:
            raise DepthOverflow(f"Depth {self.depth} does not fit in one byte")
        return b"".join(
            [
                self.version,
                self.depth.to_bytes(1, "big"),
                self.parent_fingerprint,
                self.index.to_bytes(4, "big"),
                self.chain_code,
                KEY_PREFIX + self.key,
            ]
        )


def encode_extended_key(node: HDNode) -> str:
    """
    Serialize a node as a Base58Check extended key.

    Full nodes serialize as xprv, neutered nodes as xpub.

    Raises:
        DepthOverflow: If the node depth does not fit in one byte
    """
    if node.private_key is not None:
        version, key = MAINNET_PRIVATE, node.private_key
    else:
        version, key = MAINNET_PUBLIC, node.public_key

    payload = ExtendedKeyPayload(
        version=version,
        depth=node.depth,
        parent_fingerprint=node.parent_fingerprint,
        index=node.index,
        chain_code=node.chain_code,
        key=key,
    )
    return base58check_encode(payload.to_bytes())


def decode_extended_key(extended_key: str) -> ExtendedKeyPayload:
    """
    Parse and verify a Base58Check extended key.

    Args:
        extended_key: xprv/xpub string

    Returns:
        The decoded payload fields

    Raises:
        InvalidExtendedKey: Bad alphabet, wrong length, checksum mismatch or
            key field without the leading zero byte
        UnknownVersionPrefix: Version bytes are neither xprv nor xpub
    """
    # Messages never echo the key: it may be a private one
    try:
        data = base58_decode(extended_key.strip())
    except ValueError as e:
        raise InvalidExtendedKey("Extended key is not valid Base58") from e

    if len(data) != SERIALIZED_LENGTH:
        logger.debug(f"Extended key decoded to {len(data)} bytes")
        raise InvalidExtendedKey(
            f"Extended key must decode to {SERIALIZED_LENGTH} bytes, got {len(data)}"
        )

    payload, check = data[:PAYLOAD_LENGTH], data[PAYLOAD_LENGTH:]
    if checksum(payload) != check:
        raise InvalidExtendedKey("Extended key checksum mismatch")

    version = payload[0:4]
    if version not in (MAINNET_PRIVATE, MAINNET_PUBLIC):
        raise UnknownVersionPrefix(f"Unknown extended key version {version.hex()}")

    key_field = payload[45:78]
    if key_field[:1] != KEY_PREFIX:
        raise InvalidExtendedKey("Extended key field must start with a zero byte")

    return ExtendedKeyPayload(
        version=version,
        depth=payload[4],
        parent_fingerprint=payload[5:9],
        index=int.from_bytes(payload[9:13], "big"),
        chain_code=payload[13:45],
        key=key_field[1:],
    )


__all__ = [
    "MAINNET_PRIVATE",
    "MAINNET_PUBLIC",
    "PAYLOAD_LENGTH",
    "SERIALIZED_LENGTH",
    "ExtendedKeyPayload",
    "encode_extended_key",
    "decode_extended_key",
]
