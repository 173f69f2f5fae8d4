# ==================================================
# magic_bitboard/verify.py
# ==================================================
"""
Collision check for a candidate ``(magic, shift)``.

Two subsets may share a slot only when their answers are equal, which is
weaker than full injectivity and is what makes Don't-Care heavy domains
cheap to hash.
"""
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Tuple, Union

import numpy as np

from .answers import DONT_CARE, AnswerFn, answer_table, intern_answers, same_answer
from .const import BITS, DENSE_SLOT_LIMIT, MASK64, table_size


@dataclass(frozen=True)
class AnswerTable:
    """Sparse answer table prepared for vectorised verification."""
    subsets: np.ndarray                 # uint64, one entry per concrete answer
    codes: np.ndarray                   # int64, interned answer per subset
    distinct: List[Any] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, mapping:Mapping[int, Any]) -> "AnswerTable":
        subsets = np.fromiter((int(s) & MASK64 for s in mapping.keys()),
                              dtype=np.uint64, count=len(mapping))
        codes, distinct = intern_answers(mapping.values())
        return cls(subsets, np.asarray(codes, dtype=np.int64), distinct)

    @classmethod
    def from_function(cls, mask:int, fn:AnswerFn) -> "AnswerTable":
        return cls.from_mapping(answer_table(mask, fn))

    def __len__(self):
        return len(self.subsets)

    @property
    def is_trivial(self) -> bool:
        """At most one distinct answer: any multiplier works."""
        return len(self.distinct) <= 1

    def items(self) -> Iterator[Tuple[int, Any]]:
        for subset, code in zip(self.subsets.tolist(), self.codes.tolist()):
            yield subset, self.distinct[code]


def _check_shift(shift:int) -> int:
    shift = int(shift)
    if not 0 <= shift <= BITS:
        raise ValueError(f"shift must be in [0, {BITS}], got {shift}")
    return shift


def slot_indices(subsets, magic:int, shift:int) -> np.ndarray:
    """``(subset * magic mod 2^64) >> shift`` for every subset."""
    subsets = np.asarray(subsets, dtype=np.uint64)
    shift = _check_shift(shift)
    if shift == BITS:
        return np.zeros(subsets.shape, dtype=np.uint64)
    # uint64 array arithmetic wraps silently
    return (subsets * np.uint64(int(magic) & MASK64)) >> np.uint64(shift)


def verify_magic(table:Union[AnswerTable, Mapping[int, Any]], magic:int, shift:int) -> bool:
    """True when no two subsets with different answers share a slot."""
    if not isinstance(table, AnswerTable):
        table = AnswerTable.from_mapping(table)
    shift = _check_shift(shift)
    if table.is_trivial:
        return True
    idx = slot_indices(table.subsets, magic, shift)
    size = table_size(shift)
    if size <= DENSE_SLOT_LIMIT:
        # any code survives per slot; a conflict leaves some subset disagreeing with it
        slots = np.full(size, -1, dtype=np.int64)
        slots[idx] = table.codes
        return bool(np.array_equal(slots[idx], table.codes))
    order = np.argsort(idx, kind="stable")
    idx, codes = idx[order], table.codes[order]
    clash = (idx[1:] == idx[:-1]) & (codes[1:] != codes[:-1])
    return not bool(clash.any())


def verify_magic_scalar(table:Mapping[int, Any], magic:int, shift:int) -> bool:
    """One subset at a time, stopping at the first conflict."""
    shift = _check_shift(shift)
    slots = {}
    for subset, ans in table.items():
        index = ((int(subset) * magic) & MASK64) >> shift
        current = slots.get(index, DONT_CARE)
        if current is DONT_CARE:
            slots[index] = ans
        elif not same_answer(current, ans):
            return False
    return True
