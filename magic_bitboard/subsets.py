# ==================================================
# magic_bitboard/subsets.py
# ==================================================
"""
Subset enumeration over the set bits of a 64-bit mask.

``masked_subsets`` walks every subset of ``mask`` in increasing order
using the carry trick::

    nxt = mask & ((state | ~mask) + 1)

OR-ing the complement of the mask turns every position outside the mask
into a 1, so the increment carries straight through them and lands on the
next value whose bits are all inside the mask. The final ``& mask`` drops
the carry-filled positions again. Once the full mask has been produced the
increment overflows every relevant bit and ``nxt`` becomes 0.

Example, ``mask = 0b101``: 0b000, 0b001, 0b100, 0b101.
"""
from typing import Iterator

from .const import MASK64, check_mask


def masked_subsets(mask:int) -> Iterator[int]:
    """Yield every subset of ``mask``, the empty subset first."""
    mask = check_mask(mask)
    reverse_mask = ~mask & MASK64
    state = 0
    yield state
    while True:
        state = mask & ((state | reverse_mask) + 1)
        if state == 0:
            return
        yield state


def count_bits(mask:int) -> int:
    return bin(mask).count("1")


def subset_count(mask:int) -> int:
    """Number of values ``masked_subsets(mask)`` produces."""
    return 1 << count_bits(check_mask(mask))


def magic_range(mask:int) -> int:
    """
    Largest multiplier worth testing for ``mask``.

    Every subset is a multiple of the lowest set bit ``2^t``, so only the
    low ``64 - t`` bits of a multiplier reach the 64-bit product. Two
    multipliers that agree on those bits index every subset identically.
    Zero mask: only the zero multiplier matters.
    """
    mask = check_mask(mask)
    if mask == 0:
        return 0
    return (1 << 64) // (mask & -mask) - 1


def canonical_magic(mask:int, magic:int) -> int:
    """Reduce ``magic`` to the equivalent multiplier inside ``magic_range``."""
    return int(magic) & magic_range(mask)
