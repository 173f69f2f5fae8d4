from .answers import DONT_CARE, DontCare
from .board import MagicBitboard, build_board, fill_table, lookup
from .codec import dump_triple, dumps, loads
from .search import MagicNotFoundError, find_magic
from .subsets import magic_range, masked_subsets
from .verify import AnswerTable, verify_magic

__all__ = [
    "DONT_CARE", "DontCare",
    "MagicBitboard", "build_board", "fill_table", "lookup",
    "dump_triple", "dumps", "loads",
    "MagicNotFoundError", "find_magic",
    "magic_range", "masked_subsets",
    "AnswerTable", "verify_magic",
]
