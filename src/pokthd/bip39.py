"""
BIP39 mnemonic codec and seed derivation.

Converts entropy to a word phrase and back with checksum verification, and
stretches a phrase plus optional passphrase into the 64-byte seed that roots
the HD key tree. Bit-exact with the BIP39 reference vectors.
"""

from __future__ import annotations

import secrets
import unicodedata

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from pokthd.bits import pack_indices, unpack_indices
from pokthd.crypto import pbkdf2_sha512, sha256
from pokthd.errors import InvalidChecksum, InvalidEntropy, InvalidMnemonic, MnemonicError
from pokthd.wordlist import DEFAULT_LOCALE, Wordlist, get_wordlist

SEED_ITERATIONS = 2048
SEED_LENGTH = 64
SEED_SALT_PREFIX = "mnemonic"

# Word count -> entropy length in bytes
ENTROPY_LENGTHS = {12: 16, 15: 20, 18: 24, 21: 28, 24: 32}
WORD_COUNTS = tuple(ENTROPY_LENGTHS)


class Mnemonic(BaseModel):
    """
    A phrase together with where it was used.

    Provenance only: the phrase is checked for a plausible word count, not
    re-validated against a wordlist on every use.
    """

    model_config = ConfigDict(frozen=True)

    phrase: str = Field(..., repr=False)
    path: str | None = None
    locale: str = DEFAULT_LOCALE

    @field_validator("phrase")
    @classmethod
    def validate_word_count(cls, v: str) -> str:
        count = len(unicodedata.normalize("NFKD", v).split())
        if count not in WORD_COUNTS:
            raise ValueError(f"Mnemonic must have 12, 15, 18, 21 or 24 words, got {count}")
        return v

    @property
    def word_count(self) -> int:
        return len(unicodedata.normalize("NFKD", self.phrase).split())


def _checksum(entropy: bytes, checksum_bits: int) -> int:
    # Top checksum_bits of the first SHA256 byte, right-aligned
    return sha256(entropy)[0] >> (8 - checksum_bits)


def entropy_to_mnemonic(entropy: bytes, wordlist: Wordlist | str | None = None) -> str:
    """
    Encode entropy as a BIP39 phrase.

    Args:
        entropy: 16, 20, 24, 28 or 32 bytes
        wordlist: Wordlist or locale code (defaults to English)

    Returns:
        The phrase, words joined with the wordlist delimiter

    Raises:
        InvalidEntropy: If the entropy length is not allowed
    """
    entropy = bytes(entropy)
    if len(entropy) % 4 != 0 or not 16 <= len(entropy) <= 32:
        raise InvalidEntropy(
            f"Entropy must be 16 to 32 bytes in steps of 4, got {len(entropy)} bytes"
        )

    wordlist = get_wordlist(wordlist)
    checksum_bits = len(entropy) // 4
    indices = pack_indices(entropy, _checksum(entropy, checksum_bits), checksum_bits)
    return wordlist.join([wordlist.get_word(i) for i in indices])


def mnemonic_to_entropy(phrase: str, wordlist: Wordlist | str | None = None) -> bytes:
    """
    Decode a BIP39 phrase back to its entropy, verifying the checksum.

    Args:
        phrase: Space (or ideographic space) separated words
        wordlist: Wordlist or locale code (defaults to English)

    Returns:
        The verified entropy bytes

    Raises:
        InvalidMnemonic: Bad word count or a word outside the wordlist
        InvalidChecksum: Words are known but the checksum does not match
    """
    wordlist = get_wordlist(wordlist)
    words = wordlist.split(phrase)

    if len(words) % 3 != 0:
        raise InvalidMnemonic(f"Mnemonic has {len(words)} words, expected a multiple of 3")

    checksum_bits = len(words) // 3
    if 4 * checksum_bits not in ENTROPY_LENGTHS.values():
        raise InvalidMnemonic(f"Mnemonic must have 12, 15, 18, 21 or 24 words, got {len(words)}")

    indices = []
    for position, word in enumerate(words, start=1):
        index = wordlist.get_word_index(word)
        if index < 0:
            raise InvalidMnemonic(f"Word {position} is not in the {wordlist.locale} wordlist")
        indices.append(index)

    entropy, checksum = unpack_indices(indices, checksum_bits)
    if checksum != _checksum(entropy, checksum_bits):
        raise InvalidChecksum("Mnemonic checksum does not match")

    return entropy


def is_valid_mnemonic(phrase: str, wordlist: Wordlist | str | None = None) -> bool:
    """
    Check a phrase without raising.

    Args:
        phrase: The phrase to check
        wordlist: Wordlist or locale code (defaults to English)

    Returns:
        True if the phrase decodes with a valid checksum
    """
    try:
        mnemonic_to_entropy(phrase, wordlist)
    except MnemonicError as e:
        logger.debug(f"Mnemonic rejected: {e.kind.value}")
        return False
    return True


def normalize_mnemonic(phrase: str, wordlist: Wordlist | str | None = None) -> str:
    """Canonical form of a valid phrase: lower case, single delimiters."""
    wordlist = get_wordlist(wordlist)
    return entropy_to_mnemonic(mnemonic_to_entropy(phrase, wordlist), wordlist)


def generate_mnemonic(word_count: int = 24, wordlist: Wordlist | str | None = None) -> str:
    """
    Generate a BIP39 phrase from secure entropy.

    Args:
        word_count: Number of words (12, 15, 18, 21, or 24)
        wordlist: Wordlist or locale code (defaults to English)

    Returns:
        BIP39 phrase with valid checksum
    """
    if word_count not in ENTROPY_LENGTHS:
        raise InvalidEntropy("word_count must be 12, 15, 18, 21, or 24")
    return entropy_to_mnemonic(secrets.token_bytes(ENTROPY_LENGTHS[word_count]), wordlist)


def mnemonic_to_seed(phrase: str, passphrase: str | None = None) -> bytes:
    """
    Convert a BIP39 phrase to its 64-byte seed.

    The phrase is not validated here; pass it through mnemonic_to_entropy
    first when it comes from user input.

    Args:
        phrase: The mnemonic phrase
        passphrase: Optional BIP39 passphrase (13th/25th word)

    Returns:
        64-byte seed
    """
    password = unicodedata.normalize("NFKD", phrase).encode("utf-8")
    salt = unicodedata.normalize("NFKD", SEED_SALT_PREFIX + (passphrase or "")).encode("utf-8")
    return pbkdf2_sha512(password, salt, SEED_ITERATIONS, SEED_LENGTH)


__all__ = [
    "SEED_ITERATIONS",
    "SEED_LENGTH",
    "ENTROPY_LENGTHS",
    "WORD_COUNTS",
    "Mnemonic",
    "entropy_to_mnemonic",
    "mnemonic_to_entropy",
    "is_valid_mnemonic",
    "normalize_mnemonic",
    "generate_mnemonic",
    "mnemonic_to_seed",
]
