"""
Derivation path parsing for hardened-only ed25519 key trees.

Paths follow BIP32 notation (``m/44'/635'/0'/0/0``) but ed25519 under
SLIP-0010 has no public derivation, so every segment is hardened whether or
not it carries a ``'`` or ``h`` marker. The canonical string form marks
every segment with ``'``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pokthd.crypto import HARDENED_BIT
from pokthd.errors import InvalidPath

ROOT = "m"
SEPARATOR = "/"
HARDENED_MARKERS = ("'", "h", "H")

# SLIP-0044 coin type for Pocket Network
PURPOSE = 44
COIN_TYPE = 635

DEFAULT_PATH = f"{ROOT}/{PURPOSE}'/{COIN_TYPE}'/0'/0"

_SEGMENT_RE = re.compile(r"\d+", re.ASCII)


def parse_segment(segment: str) -> int:
    """
    Parse one path segment into its index without the hardened bit.

    Args:
        segment: "44", "44'" or "44h"

    Returns:
        The index in [0, 2**31)

    Raises:
        InvalidPath: If the segment is not a non-negative integer below 2**31
    """
    value = segment.strip()
    if value.endswith(HARDENED_MARKERS):
        value = value[:-1]
    if not _SEGMENT_RE.fullmatch(value):
        raise InvalidPath(f"Invalid path segment: {segment!r}")
    index = int(value)
    if index >= HARDENED_BIT:
        raise InvalidPath(f"Path segment {segment!r} must be below {HARDENED_BIT}")
    return index


@dataclass(frozen=True)
class DerivationPath:
    """A parsed path: segment indices (hardened bit stripped) and whether it starts at m."""

    indices: tuple[int, ...] = ()
    absolute: bool = True

    @classmethod
    def parse(cls, path: str) -> DerivationPath:
        """
        Parse ``m/...`` (absolute) or ``a/b/...`` (relative) notation.

        Raises:
            InvalidPath: On empty input or malformed segments
        """
        text = path.strip()
        if not text:
            raise InvalidPath("Empty derivation path")

        parts = text.split(SEPARATOR)
        absolute = parts[0] in (ROOT, ROOT.upper())
        if absolute:
            parts = parts[1:]
        return cls(tuple(parse_segment(part) for part in parts), absolute)

    def __str__(self) -> str:
        segments = [f"{index}'" for index in self.indices]
        if self.absolute:
            segments.insert(0, ROOT)
        return SEPARATOR.join(segments)

    def __len__(self) -> int:
        return len(self.indices)

    @property
    def hardened_indices(self) -> tuple[int, ...]:
        return tuple(index | HARDENED_BIT for index in self.indices)

    def child(self, index: int) -> DerivationPath:
        return DerivationPath((*self.indices, index), self.absolute)

    def relative_to(self, base: DerivationPath) -> DerivationPath:
        """
        Strip ``base`` from the front of this absolute path.

        Raises:
            InvalidPath: If ``base`` is not a prefix of this path
        """
        if self.indices[: len(base.indices)] != base.indices:
            raise InvalidPath(f"Path {self} does not extend {base}")
        return DerivationPath(self.indices[len(base.indices) :], absolute=False)


def parse_path(path: str) -> DerivationPath:
    return DerivationPath.parse(path)


def format_path(path: str) -> str:
    """Canonical form of a path string, every segment marked hardened."""
    return str(DerivationPath.parse(path))


def is_absolute_path(path: str) -> bool:
    """True when the path starts at the root (``m/...``)."""
    head = path.strip().split(SEPARATOR, 1)[0]
    return head in (ROOT, ROOT.upper())


def is_index(value: object) -> bool:
    """True for a non-negative int or a string of decimal digits."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    if not isinstance(value, str):
        return False
    return bool(_SEGMENT_RE.fullmatch(value.strip()))


def account_path(index: int) -> str:
    """
    BIP44 path of the first address of a Pocket account.

    Args:
        index: Account index in [0, 2**31)

    Returns:
        "m/44'/635'/{index}'/0/0"

    Raises:
        InvalidPath: If index is not an integer in range
    """
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < HARDENED_BIT:
        raise InvalidPath(f"Invalid account index: {index!r}")
    return f"{ROOT}/{PURPOSE}'/{COIN_TYPE}'/{index}'/0/0"


__all__ = [
    "ROOT",
    "SEPARATOR",
    "PURPOSE",
    "COIN_TYPE",
    "DEFAULT_PATH",
    "DerivationPath",
    "parse_segment",
    "parse_path",
    "format_path",
    "is_absolute_path",
    "is_index",
    "account_path",
]
