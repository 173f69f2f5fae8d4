# ==================================================
# magic_bitboard/search.py
# ==================================================
"""
Randomised search for a multiplicative perfect hash.

The search starts at ``initial_shift`` (a 2^16 slot table by default) and
draws candidates until one verifies. Every ``guess_limit`` consecutive
failures cost one bit of shift (the table doubles) until ``shift_minimum``
is passed, at which point the search gives up. A success on the very first
level is followed by a shrink phase that keeps raising the shift for as
long as a fresh budget still finds a multiplier.
"""
import logging
from typing import Optional, Tuple

import numpy as np

from .answers import AnswerFn
from .const import BITS, GUESS_LIMIT, INITIAL_SHIFT, MASK64, SHIFT_MINIMUM, check_mask
from .subsets import canonical_magic
from .verify import AnswerTable, verify_magic

log = logging.getLogger(__name__)


class MagicNotFoundError(RuntimeError):
    """No multiplier verified at any shift >= shift_minimum."""


def draw_candidate(rng:np.random.Generator, mask:int) -> int:
    """AND of three random words: few set bits suit sparse domains."""
    r = rng.integers(0, MASK64, size=3, dtype=np.uint64, endpoint=True)
    return canonical_magic(mask, int(r[0] & r[1] & r[2]))


def _search_level(table:AnswerTable, mask:int, shift:int, guess_limit:int,
                  rng:np.random.Generator, carry:Optional[int] = None) -> Optional[int]:
    # the carried multiplier does not count against the budget
    if carry is not None and verify_magic(table, carry, shift):
        return carry
    for _ in range(guess_limit):
        magic = draw_candidate(rng, mask)
        if verify_magic(table, magic, shift):
            return magic
    return None


def find_magic(mask:int, fn:AnswerFn, *, shift_minimum:int = SHIFT_MINIMUM,
               guess_limit:int = GUESS_LIMIT, initial_shift:int = INITIAL_SHIFT,
               rng=None) -> Tuple[int, int]:
    """
    Find ``(magic, shift)`` such that every subset of ``mask`` with a
    concrete answer lands on a slot holding only equal answers.

    ``rng`` is anything ``numpy.random.default_rng`` accepts; pass a seed or
    a Generator for reproducible results.

    Raises MagicNotFoundError when the shift would drop below
    ``shift_minimum``.
    """
    mask = check_mask(mask)
    return search_table(AnswerTable.from_function(mask, fn), mask,
                        shift_minimum=shift_minimum, guess_limit=guess_limit,
                        initial_shift=initial_shift, rng=rng)


def search_table(table:AnswerTable, mask:int, *, shift_minimum:int = SHIFT_MINIMUM,
                 guess_limit:int = GUESS_LIMIT, initial_shift:int = INITIAL_SHIFT,
                 rng=None) -> Tuple[int, int]:
    """``find_magic`` on an already enumerated answer table."""
    if guess_limit < 1:
        raise ValueError(f"guess_limit must be positive, got {guess_limit}")
    if not 0 <= shift_minimum <= BITS:
        raise ValueError(f"shift_minimum must be in [0, {BITS}], got {shift_minimum}")
    if not 0 <= initial_shift < BITS:
        raise ValueError(f"initial_shift must be in [0, {BITS}), got {initial_shift}")

    if table.is_trivial:
        # zero multiplier sends everything to the single slot
        log.debug("mask %#x has %d distinct answer(s); one-slot table", mask, len(table.distinct))
        return 0, BITS

    rng = np.random.default_rng(rng)
    start = shift = max(initial_shift, shift_minimum)

    # -- grow: lose one bit of shift per exhausted budget --------------------
    while True:
        magic = _search_level(table, mask, shift, guess_limit, rng)
        if magic is not None:
            break
        if shift - 1 < shift_minimum:
            log.warning("no magic for mask %#x with %d answers down to shift %d",
                        mask, len(table), shift_minimum)
            raise MagicNotFoundError(
                f"Cannot find magic bitboard for mask {mask:#x} with a table of at most "
                f"2^{BITS - shift_minimum} slots (shift_minimum={shift_minimum})")
        shift -= 1
        log.debug("mask %#x: budget of %d exhausted, growing to shift %d", mask, guess_limit, shift)
    best = (magic, shift)

    # -- shrink: only when the first level already succeeded -----------------
    if shift == start:
        while shift + 1 < BITS:
            shift += 1
            magic = _search_level(table, mask, shift, guess_limit, rng, carry=best[0])
            if magic is None:
                break
            best = (magic, shift)
            log.debug("mask %#x: shrunk to shift %d", mask, shift)

    log.info("mask %#x: magic %#018x shift %d (%d slots, %d answers)",
             mask, best[0], best[1], 1 << (BITS - best[1]), len(table))
    return best
