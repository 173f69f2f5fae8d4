# ==================================================
# magic_bitboard/answers.py
# ==================================================
from typing import Any, Callable, Dict, Hashable, Iterable, List, Tuple

import numpy as np

from .subsets import masked_subsets


class DontCare:
    """
    Marker returned by an answer function for subsets that never occur.

    Any value at the slot of such a subset is acceptable. There is exactly
    one instance, ``DONT_CARE``; test with ``answer is DONT_CARE``.
    """
    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "DONT_CARE"

    def __reduce__(self):
        return (DontCare, ())


DONT_CARE = DontCare()

AnswerFn = Callable[[int], Any]


def answer_table(mask:int, fn:AnswerFn) -> Dict[int, Any]:
    """Sparse subset -> answer mapping, Don't-Care subsets left out."""
    table = {}
    for subset in masked_subsets(mask):
        ans = fn(subset)
        if ans is not DONT_CARE:
            table[subset] = ans
    return table


def intern_answers(answers:Iterable[Any]) -> Tuple[List[int], List[Any]]:
    """
    Give every answer a small integer code, equal answers sharing one.

    Returns ``(codes, distinct)`` with ``distinct[codes[i]] == answers[i]``.
    Unhashable answers are matched with ``==`` against what was seen so far.
    """
    codes:List[int] = []
    distinct:List[Any] = []
    seen:Dict[Hashable, int] = {}
    for ans in answers:
        try:
            code = seen.get(ans)
            hashable = True
        except TypeError:
            code = _scan(distinct, ans)
            hashable = False
        if code is None:
            code = len(distinct)
            distinct.append(ans)
            if hashable:
                seen[ans] = code
        codes.append(code)
    return codes, distinct


def _scan(distinct:List[Any], ans:Any):
    for code, other in enumerate(distinct):
        if same_answer(other, ans):
            return code
    return None


def same_answer(a:Any, b:Any) -> bool:
    """``a == b`` reduced to one bool; arrays compare as a whole."""
    if a is b:
        return True
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return bool(np.array_equal(a, b))
    return bool(a == b)
