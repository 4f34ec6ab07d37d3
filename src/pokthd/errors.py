"""
Exceptions raised by pokthd.

Every error carries a ``kind`` so callers can branch on the failure without
matching message strings:

    try:
        node = HDNode.from_mnemonic(phrase)
    except HDKeyError as e:
        if e.kind is ErrorKind.INVALID_CHECKSUM:
            ...  # ask the user to re-check the last word

All errors also subclass ``ValueError``: they describe bad input, never an
internal failure. Messages must not contain secret material.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    INVALID_SEED = "invalid_seed"
    INVALID_ENTROPY = "invalid_entropy"
    INVALID_MNEMONIC = "invalid_mnemonic"
    INVALID_CHECKSUM = "invalid_checksum"
    NEUTERED_DERIVATION = "neutered_derivation"
    DEPTH_OVERFLOW = "depth_overflow"
    INVALID_EXTENDED_KEY = "invalid_extended_key"
    UNKNOWN_VERSION_PREFIX = "unknown_version_prefix"
    INVALID_PATH = "invalid_path"
    UNKNOWN_LOCALE = "unknown_locale"


class HDKeyError(ValueError):
    """Base class for all pokthd errors."""

    kind: ClassVar[ErrorKind]


class InvalidSeed(HDKeyError):
    """Seed length outside 16..64 bytes."""

    kind = ErrorKind.INVALID_SEED


class InvalidEntropy(HDKeyError):
    """Entropy length outside 16..32 bytes or not a multiple of 4."""

    kind = ErrorKind.INVALID_ENTROPY


class MnemonicError(HDKeyError):
    """Parent class for phrase decoding errors."""


class InvalidMnemonic(MnemonicError):
    """Bad word count or a word missing from the wordlist."""

    kind = ErrorKind.INVALID_MNEMONIC


class InvalidChecksum(MnemonicError):
    """All words are known but the embedded checksum does not match."""

    kind = ErrorKind.INVALID_CHECKSUM


class UnknownLocale(MnemonicError):
    kind = ErrorKind.UNKNOWN_LOCALE


class NeuteredDerivationError(HDKeyError):
    """Child derivation requested on a public-only node."""

    kind = ErrorKind.NEUTERED_DERIVATION


class DepthOverflow(HDKeyError):
    """Depth would reach 256, which does not fit the serialized depth byte."""

    kind = ErrorKind.DEPTH_OVERFLOW


class InvalidPath(HDKeyError):
    kind = ErrorKind.INVALID_PATH


class ExtendedKeyError(HDKeyError):
    """Parent class for extended key decoding errors."""


class InvalidExtendedKey(ExtendedKeyError):
    """Wrong length, bad checksum or malformed key field."""

    kind = ErrorKind.INVALID_EXTENDED_KEY


class UnknownVersionPrefix(ExtendedKeyError):
    """Version bytes match neither the public nor the private constant."""

    kind = ErrorKind.UNKNOWN_VERSION_PREFIX


__all__ = [
    "ErrorKind",
    "HDKeyError",
    "InvalidSeed",
    "InvalidEntropy",
    "MnemonicError",
    "InvalidMnemonic",
    "InvalidChecksum",
    "UnknownLocale",
    "NeuteredDerivationError",
    "DepthOverflow",
    "InvalidPath",
    "ExtendedKeyError",
    "InvalidExtendedKey",
    "UnknownVersionPrefix",
]
