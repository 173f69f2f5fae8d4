# ==================================================
# magic_bitboard/board.py
# ==================================================
import logging
from dataclasses import dataclass
from typing import Any, Sequence, Tuple

import numpy as np

from .answers import DONT_CARE, AnswerFn, same_answer
from .const import BITS, MASK64, check_mask, table_size
from .search import find_magic
from .subsets import masked_subsets

log = logging.getLogger(__name__)


def fill_table(mask:int, magic:int, shift:int, fn:AnswerFn, *, dtype=None, fill=None):
    """
    Dense answer table for a verified ``(magic, shift)``.

    Slots that no concrete answer reaches hold ``fill`` (``None`` for
    object tables, ``0`` when a numpy ``dtype`` is given). Object tables are
    returned as a tuple, numpy tables as a read-only array.
    """
    mask = check_mask(mask)
    size = table_size(shift)
    if dtype is None:
        array = [fill] * size
    else:
        array = np.full(size, 0 if fill is None else fill, dtype=dtype)
    written = 0
    for subset in masked_subsets(mask):
        ans = fn(subset)
        if ans is not DONT_CARE:
            array[((subset * magic) & MASK64) >> shift] = ans
            written += 1
    log.debug("filled %d of %d slots for mask %#x", written, size, mask)
    if dtype is None:
        return tuple(array)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class MagicBitboard:
    """
    Constant-time lookup table keyed by the subset of ``mask`` set in a
    query. Immutable once built and safe to share between threads.
    """
    table: Sequence[Any]
    mask: int
    magic: int
    shift: int

    def __post_init__(self):
        check_mask(self.mask)
        if not 0 <= self.shift <= BITS:
            raise ValueError(f"shift must be in [0, {BITS}], got {self.shift}")
        if len(self.table) != table_size(self.shift):
            raise ValueError(f"table has {len(self.table)} slots, shift {self.shift} "
                             f"needs {table_size(self.shift)}")

    # ------------------------------------------------------------------
    @classmethod
    def build(cls, mask:int, fn:AnswerFn, *, dtype=None, fill=None, **search_kwargs) -> "MagicBitboard":
        """Search a magic for ``fn`` over ``mask`` and fill the table."""
        magic, shift = find_magic(mask, fn, **search_kwargs)
        return cls.from_magic(mask, magic, shift, fn, dtype=dtype, fill=fill)

    @classmethod
    def from_magic(cls, mask:int, magic:int, shift:int, fn:AnswerFn, *, dtype=None, fill=None) -> "MagicBitboard":
        """Rebuild from a known ``(mask, magic, shift)`` without searching."""
        table = fill_table(mask, magic, shift, fn, dtype=dtype, fill=fill)
        return cls(table, mask, magic, shift)

    # ------------------------------------------------------------------
    def index(self, query:int) -> int:
        return (((int(query) & self.mask) * self.magic) & MASK64) >> self.shift

    def lookup(self, query:int):
        return self.table[(((int(query) & self.mask) * self.magic) & MASK64) >> self.shift]

    __getitem__ = lookup

    def __len__(self):
        return len(self.table)

    def triple(self) -> Tuple[int, int, int]:
        """``(mask, magic, shift)``: all a caller needs to persist."""
        return self.mask, self.magic, self.shift

    def check(self, fn:AnswerFn) -> bool:
        """True when every concrete answer of ``fn`` is looked up unchanged."""
        for subset in masked_subsets(self.mask):
            ans = fn(subset)
            if ans is not DONT_CARE and not same_answer(self.lookup(subset), ans):
                return False
        return True


def build_board(mask:int, fn:AnswerFn, **kwargs) -> MagicBitboard:
    return MagicBitboard.build(mask, fn, **kwargs)


def lookup(board:MagicBitboard, query:int):
    return board.table[(((int(query) & board.mask) * board.magic) & MASK64) >> board.shift]
