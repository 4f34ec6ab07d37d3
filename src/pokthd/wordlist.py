"""
BIP39 wordlists.

The word tables themselves come from the python-mnemonic package. This module
wraps them in an immutable ``Wordlist`` that owns the phrase rules (Unicode
normalization, splitting, joining) and a ``WordlistRegistry`` that maps
locale codes to tables. Nothing here is mutable after construction: loading
is a memoized pure function, so registries can be shared between threads.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable, Mapping, Sequence
from functools import lru_cache
from types import MappingProxyType

from loguru import logger
from mnemonic import Mnemonic as Bip39Tables

from pokthd.errors import UnknownLocale

WORDLIST_SIZE = 2048
DEFAULT_LOCALE = "en"

IDEOGRAPHIC_SPACE = "\u3000"

# Locale codes as used by ethers-style wallets -> python-mnemonic language names
LOCALE_LANGUAGES: Mapping[str, str] = MappingProxyType(
    {
        "en": "english",
        "es": "spanish",
        "fr": "french",
        "it": "italian",
        "ja": "japanese",
        "ko": "korean",
        "zh_cn": "chinese_simplified",
        "zh_tw": "chinese_traditional",
        "cz": "czech",
        "pt": "portuguese",
    }
)


def normalize_word(word: str) -> str:
    """NFKD-normalize and lower-case a single word."""
    return unicodedata.normalize("NFKD", word).lower()


class Wordlist:
    """
    An ordered table of 2048 words for one locale.

    Words map to indices after NFKD normalization and lower-casing, so
    phrases typed with composed accents or capital letters still resolve.
    """

    __slots__ = ("locale", "delimiter", "_words", "_indices")

    def __init__(self, locale: str, words: Iterable[str], delimiter: str = " ") -> None:
        words = tuple(w.strip() for w in words)
        if len(words) != WORDLIST_SIZE:
            raise ValueError(
                f"Wordlist {locale!r} has {len(words)} words, expected {WORDLIST_SIZE}"
            )

        indices = {normalize_word(w): i for i, w in enumerate(words)}
        if len(indices) != WORDLIST_SIZE:
            raise ValueError(f"Wordlist {locale!r} contains duplicate words")

        self.locale = locale
        self.delimiter = delimiter
        self._words = words
        self._indices: Mapping[str, int] = MappingProxyType(indices)

    def __repr__(self) -> str:
        return f"Wordlist(locale={self.locale!r})"

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and normalize_word(word) in self._indices

    @property
    def words(self) -> tuple[str, ...]:
        return self._words

    def get_word(self, index: int) -> str:
        """
        Get the word at a given index.

        Raises:
            IndexError: If index is outside [0, 2047]
        """
        if not 0 <= index < WORDLIST_SIZE:
            raise IndexError(f"Word index {index} out of range")
        return self._words[index]

    def get_word_index(self, word: str) -> int:
        """Get the index of a word, or -1 when the word is not in the list."""
        return self._indices.get(normalize_word(word), -1)

    def split(self, phrase: str) -> list[str]:
        """Split a phrase into normalized words on any whitespace."""
        return [normalize_word(w) for w in unicodedata.normalize("NFKD", phrase).split()]

    def join(self, words: Sequence[str]) -> str:
        return self.delimiter.join(words)


@lru_cache(maxsize=None)
def load_wordlist(language: str) -> Wordlist:
    """
    Load the wordlist for a python-mnemonic language name.

    Args:
        language: Language name such as "english" or "japanese"

    Returns:
        The immutable Wordlist

    Raises:
        UnknownLocale: If python-mnemonic has no table for the language
    """
    if language not in Bip39Tables.list_languages():
        raise UnknownLocale(f"No BIP39 wordlist for language {language!r}")

    locale = next((code for code, name in LOCALE_LANGUAGES.items() if name == language), language)
    delimiter = IDEOGRAPHIC_SPACE if language == "japanese" else " "

    logger.debug(f"Loading BIP39 wordlist {language} (locale {locale})")
    return Wordlist(locale, Bip39Tables(language).wordlist, delimiter=delimiter)


class WordlistRegistry:
    """
    Read-only lookup of wordlists by locale code or language name.

    A registry is passed explicitly to the codec functions; the default one
    knows the ethers-style locale codes plus every python-mnemonic language.
    """

    def __init__(self, locales: Mapping[str, str] | None = None) -> None:
        self._locales: Mapping[str, str] = MappingProxyType(
            dict(LOCALE_LANGUAGES if locales is None else locales)
        )

    @property
    def locales(self) -> tuple[str, ...]:
        return tuple(self._locales)

    def get(self, locale: str) -> Wordlist:
        """
        Resolve a locale code ("en") or language name ("english").

        Raises:
            UnknownLocale: If the locale is not known
        """
        language = self._locales.get(locale.lower(), locale.lower())
        return load_wordlist(language)


DEFAULT_REGISTRY = WordlistRegistry()


def get_wordlist(
    wordlist: Wordlist | str | None = None,
    registry: WordlistRegistry | None = None,
) -> Wordlist:
    """
    Resolve a wordlist argument.

    Args:
        wordlist: A Wordlist, a locale code/language name, or None for English
        registry: Registry used for string lookups (defaults to DEFAULT_REGISTRY)

    Returns:
        The resolved Wordlist
    """
    if isinstance(wordlist, Wordlist):
        return wordlist
    registry = registry or DEFAULT_REGISTRY
    return registry.get(DEFAULT_LOCALE if wordlist is None else wordlist)


__all__ = [
    "WORDLIST_SIZE",
    "DEFAULT_LOCALE",
    "LOCALE_LANGUAGES",
    "Wordlist",
    "WordlistRegistry",
    "DEFAULT_REGISTRY",
    "get_wordlist",
    "load_wordlist",
    "normalize_word",
]
