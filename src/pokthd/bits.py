"""
Bit packing for BIP39 word indices.

A phrase encodes ``entropy || checksum`` as a big-endian bitstream cut into
11-bit groups, one group per word.
"""

from __future__ import annotations

from collections.abc import Sequence

WORD_BITS = 11
WORD_MASK = (1 << WORD_BITS) - 1


def pack_indices(entropy: bytes, checksum: int, checksum_bits: int) -> list[int]:
    """
    Split ``entropy || checksum`` into 11-bit word indices.

    The caller guarantees ``len(entropy) * 8 + checksum_bits`` is a multiple
    of 11, which holds for every BIP39 entropy length.

    Args:
        entropy: Entropy bytes
        checksum: Checksum value, right-aligned in ``checksum_bits`` bits
        checksum_bits: Number of checksum bits appended after the entropy

    Returns:
        List of word indices in [0, 2047]
    """
    total_bits = len(entropy) * 8 + checksum_bits
    stream = (int.from_bytes(entropy, "big") << checksum_bits) | checksum
    word_count = total_bits // WORD_BITS

    return [
        (stream >> (WORD_BITS * (word_count - 1 - i))) & WORD_MASK for i in range(word_count)
    ]


def unpack_indices(indices: Sequence[int], checksum_bits: int) -> tuple[bytes, int]:
    """
    Join 11-bit word indices back into entropy bytes and the trailing checksum.

    Args:
        indices: Word indices in [0, 2047]
        checksum_bits: Number of trailing bits that hold the checksum

    Returns:
        Tuple of (entropy bytes, checksum value right-aligned)

    Raises:
        ValueError: If an index does not fit in 11 bits
    """
    stream = 0
    for index in indices:
        if not 0 <= index <= WORD_MASK:
            raise ValueError(f"Word index {index} does not fit in {WORD_BITS} bits")
        stream = (stream << WORD_BITS) | index

    entropy_bits = len(indices) * WORD_BITS - checksum_bits
    checksum = stream & ((1 << checksum_bits) - 1)
    entropy = (stream >> checksum_bits).to_bytes(entropy_bits // 8, "big")
    return entropy, checksum


__all__ = ["WORD_BITS", "pack_indices", "unpack_indices"]
