"""
Hierarchical deterministic ed25519 key nodes for Pocket Network.

Implements SLIP-0010 hardened derivation over BIP39 seeds, with BIP32
extended key serialization. Default account paths follow BIP44 with the
Pocket coin type: m/44'/635'/{account}'/0/0.

Nodes are immutable. Deriving, neutering or parsing always builds a new
node; a parent is never touched.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from pokthd.bip39 import Mnemonic, mnemonic_to_seed, normalize_mnemonic
from pokthd.crypto import (
    HARDENED_BIT,
    KEY_LENGTH,
    ed25519_public_key,
    hash160,
    sha256,
    slip10_derive_hardened,
    slip10_master_key,
)
from pokthd.errors import DepthOverflow, InvalidPath, InvalidSeed, NeuteredDerivationError
from pokthd.path import ROOT, DerivationPath, is_index
from pokthd.wordlist import Wordlist, get_wordlist
from pokthd.xkey import MAX_DEPTH, decode_extended_key, encode_extended_key

FINGERPRINT_LENGTH = 4
ADDRESS_LENGTH = 20
ZERO_FINGERPRINT = b"\x00" * FINGERPRINT_LENGTH

MIN_SEED_LENGTH = 16
MAX_SEED_LENGTH = 64


def compute_fingerprint(public_key: bytes) -> bytes:
    """First 4 bytes of RIPEMD160(SHA256(public_key))."""
    return hash160(public_key)[:FINGERPRINT_LENGTH]


def address_from_public_key(public_key: bytes) -> str:
    """Pocket account address: hex of the first 20 bytes of SHA256(public_key)."""
    return sha256(public_key)[:ADDRESS_LENGTH].hex()


@dataclass(frozen=True, kw_only=True)
class HDNode:
    """
    One node of an ed25519 HD key tree.

    A node either holds a 32-byte private key (full node) or only the public
    key (neutered). Only full nodes can derive children, since ed25519 has
    no public derivation.

    Do not build nodes directly; use from_mnemonic, from_seed,
    from_extended_key, derive_child or neuter.
    """

    public_key: bytes
    chain_code: bytes
    parent_fingerprint: bytes = ZERO_FINGERPRINT
    index: int = 0
    depth: int = 0
    private_key: bytes | None = field(default=None, repr=False)
    mnemonic: Mnemonic | None = field(default=None, repr=False)
    path: str | None = None

    def __post_init__(self) -> None:
        if len(self.public_key) != KEY_LENGTH:
            raise ValueError(f"Public key must be {KEY_LENGTH} bytes")
        if len(self.chain_code) != KEY_LENGTH:
            raise ValueError(f"Chain code must be {KEY_LENGTH} bytes")
        if len(self.parent_fingerprint) != FINGERPRINT_LENGTH:
            raise ValueError(f"Parent fingerprint must be {FINGERPRINT_LENGTH} bytes")
        if not 0 <= self.index <= 0xFFFFFFFF:
            raise ValueError(f"Index {self.index} does not fit in 32 bits")
        if self.depth < 0:
            raise ValueError("Depth must not be negative")
        if self.depth > MAX_DEPTH:
            raise DepthOverflow(f"Depth {self.depth} exceeds {MAX_DEPTH}")
        if self.private_key is not None and ed25519_public_key(self.private_key) != self.public_key:
            raise ValueError("Public key does not match private key")

    # --- CONSTRUCTORS --- #

    @classmethod
    def _from_private_key(cls, private_key: bytes, chain_code: bytes, **kwargs: Any) -> HDNode:
        return cls(
            private_key=private_key,
            public_key=ed25519_public_key(private_key),
            chain_code=chain_code,
            **kwargs,
        )

    @classmethod
    def from_seed(cls, seed: bytes, mnemonic: Mnemonic | None = None) -> HDNode:
        """
        Create the root node from a seed.

        Args:
            seed: 16 to 64 seed bytes (64 when produced from a mnemonic)
            mnemonic: Provenance to attach to the root

        Returns:
            Root node at depth 0 with path "m"

        Raises:
            InvalidSeed: If the seed length is out of range
        """
        seed = bytes(seed)
        if not MIN_SEED_LENGTH <= len(seed) <= MAX_SEED_LENGTH:
            raise InvalidSeed(
                f"Seed must be {MIN_SEED_LENGTH} to {MAX_SEED_LENGTH} bytes, got {len(seed)}"
            )

        key, chain_code = slip10_master_key(seed)
        node = cls._from_private_key(key, chain_code, mnemonic=mnemonic, path=ROOT)
        logger.debug(f"Created root node, fingerprint {node.fingerprint.hex()}")
        return node

    @classmethod
    def from_mnemonic(
        cls,
        phrase: str,
        passphrase: str | None = None,
        wordlist: Wordlist | str | None = None,
    ) -> HDNode:
        """
        Create the root node from a BIP39 phrase.

        The phrase is validated and normalized (case, spacing) before the
        seed is derived, so differently typed forms of one phrase give the
        same tree.

        Args:
            phrase: BIP39 mnemonic phrase
            passphrase: Optional BIP39 passphrase
            wordlist: Wordlist or locale code (defaults to English)

        Raises:
            InvalidMnemonic: Bad word count or unknown word
            InvalidChecksum: Checksum mismatch
        """
        wordlist = get_wordlist(wordlist)
        phrase = normalize_mnemonic(phrase, wordlist)
        mnemonic = Mnemonic(phrase=phrase, path=ROOT, locale=wordlist.locale)
        return cls.from_seed(mnemonic_to_seed(phrase, passphrase), mnemonic=mnemonic)

    @classmethod
    def from_extended_key(cls, extended_key: str) -> HDNode:
        """
        Rebuild a node from an xprv or xpub string.

        The mnemonic and path cannot be recovered from the serialized form,
        so both are None. An xpub yields a neutered node.

        Raises:
            InvalidExtendedKey: Malformed string
            UnknownVersionPrefix: Not an xprv/xpub version
        """
        payload = decode_extended_key(extended_key)
        fields: dict[str, Any] = {
            "chain_code": payload.chain_code,
            "parent_fingerprint": payload.parent_fingerprint,
            "index": payload.index,
            "depth": payload.depth,
        }
        if payload.is_private:
            return cls._from_private_key(payload.key, **fields)
        return cls(public_key=payload.key, **fields)

    # --- PROPERTIES --- #

    @property
    def fingerprint(self) -> bytes:
        return compute_fingerprint(self.public_key)

    @property
    def address(self) -> str:
        return address_from_public_key(self.public_key)

    @property
    def is_neutered(self) -> bool:
        return self.private_key is None

    @property
    def hardened_index(self) -> int:
        return self.index | HARDENED_BIT

    @property
    def secret_key(self) -> bytes | None:
        """64-byte NaCl-style secret key (private key || public key), None when neutered."""
        if self.private_key is None:
            return None
        return self.private_key + self.public_key

    @property
    def extended_key(self) -> str:
        """xprv for full nodes, xpub for neutered nodes."""
        return encode_extended_key(self)

    # --- DERIVATION --- #

    def neuter(self) -> HDNode:
        """Copy of this node without private key material or mnemonic."""
        return dataclasses.replace(self, private_key=None, mnemonic=None)

    def derive_child(self, path_or_index: int | str) -> HDNode:
        """
        Derive a descendant node.

        Args:
            path_or_index: An index (int or digit string) for the next child
                under this node, a relative path ("0'/1"), or an absolute
                path ("m/44'/635'/0'/0/0") that extends this node's path.
                Every segment is derived hardened.

        Returns:
            The derived node

        Raises:
            NeuteredDerivationError: If this node has no private key
            InvalidPath: Malformed path, or an absolute path that does not
                reach past this node's path
            DepthOverflow: If the depth would reach 256
        """
        if self.private_key is None:
            raise NeuteredDerivationError("Cannot derive child of neutered node")

        if is_index(path_or_index):
            index = int(path_or_index)
            if index >= HARDENED_BIT:
                raise InvalidPath(f"Child index {index} must be below {HARDENED_BIT}")
            return self._derive_step(index)

        if not isinstance(path_or_index, str):
            raise InvalidPath(f"Invalid child index or path: {path_or_index!r}")

        path = DerivationPath.parse(path_or_index)
        if path.absolute:
            if self.path is None:
                raise InvalidPath("Node has no path provenance; use a relative path")
            path = path.relative_to(DerivationPath.parse(self.path))
            if not path.indices:
                raise InvalidPath(f"Path {path_or_index!r} names no child of {self.path}")

        node = self
        for index in path.indices:
            node = node._derive_step(index)
        return node

    def derive_path(self, path: str) -> HDNode:
        """Derive along a path string. See derive_child."""
        return self.derive_child(path)

    def _derive_step(self, index: int) -> HDNode:
        if self.private_key is None:
            raise NeuteredDerivationError("Cannot derive child of neutered node")

        depth = self.depth + 1
        if depth > MAX_DEPTH:
            raise DepthOverflow(f"Depth {depth} exceeds {MAX_DEPTH}")

        key, chain_code = slip10_derive_hardened(self.private_key, self.chain_code, index)

        path = None
        if self.path is not None:
            path = str(DerivationPath.parse(self.path).child(index))

        mnemonic = None
        if self.mnemonic is not None:
            mnemonic = Mnemonic(
                phrase=self.mnemonic.phrase, path=path, locale=self.mnemonic.locale
            )

        child = self._from_private_key(
            key,
            chain_code,
            parent_fingerprint=self.fingerprint,
            index=index,
            depth=depth,
            mnemonic=mnemonic,
            path=path,
        )
        logger.trace(f"Derived {path or index} at depth {depth}")
        return child

    # --- DISPLAY --- #

    def to_dict(self, include_private: bool = False) -> dict[str, Any]:
        """Plain dict of the node fields, private material only when asked."""
        result: dict[str, Any] = {
            "path": self.path,
            "depth": self.depth,
            "index": self.index,
            "public_key": self.public_key.hex(),
            "address": self.address,
            "fingerprint": self.fingerprint.hex(),
            "parent_fingerprint": self.parent_fingerprint.hex(),
            "chain_code": self.chain_code.hex(),
            "xpub": self.neuter().extended_key,
        }
        if include_private and self.private_key is not None:
            result["private_key"] = self.private_key.hex()
            result["xprv"] = self.extended_key
        return result


__all__ = [
    "HDNode",
    "compute_fingerprint",
    "address_from_public_key",
    "ZERO_FINGERPRINT",
]
