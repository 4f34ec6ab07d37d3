"""
pokthd - HD ed25519 key derivation for Pocket Network

BIP39 mnemonics, SLIP-0010 hardened derivation on m/44'/635'/... paths and
BIP32 style extended keys.
"""

from pokthd.bip39 import (
    Mnemonic,
    entropy_to_mnemonic,
    generate_mnemonic,
    is_valid_mnemonic,
    mnemonic_to_entropy,
    mnemonic_to_seed,
    normalize_mnemonic,
)
from pokthd.crypto import HARDENED_BIT
from pokthd.errors import (
    DepthOverflow,
    ErrorKind,
    ExtendedKeyError,
    HDKeyError,
    InvalidChecksum,
    InvalidEntropy,
    InvalidExtendedKey,
    InvalidMnemonic,
    InvalidPath,
    InvalidSeed,
    MnemonicError,
    NeuteredDerivationError,
    UnknownLocale,
    UnknownVersionPrefix,
)
from pokthd.hdnode import HDNode
from pokthd.path import COIN_TYPE, DEFAULT_PATH, account_path
from pokthd.version import __version__
from pokthd.wordlist import Wordlist, WordlistRegistry, get_wordlist
from pokthd.xkey import decode_extended_key, encode_extended_key

__all__ = [
    "__version__",
    "HDNode",
    "Mnemonic",
    "Wordlist",
    "WordlistRegistry",
    "get_wordlist",
    "entropy_to_mnemonic",
    "mnemonic_to_entropy",
    "mnemonic_to_seed",
    "is_valid_mnemonic",
    "normalize_mnemonic",
    "generate_mnemonic",
    "account_path",
    "DEFAULT_PATH",
    "HARDENED_BIT",
    "COIN_TYPE",
    "encode_extended_key",
    "decode_extended_key",
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
