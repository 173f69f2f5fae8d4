# ==================================================
# magic_bitboard/const.py
# ==================================================
import operator
import os

BITS = 64
MASK64 = (1 << BITS) - 1      # all 64 bits set, used to emulate uint64 wraparound

# -------- search defaults (env overridable) --------------------------------
GUESS_LIMIT   = int(os.getenv("MAGIC_BITBOARD_GUESS_LIMIT",   "10000"))
INITIAL_SHIFT = int(os.getenv("MAGIC_BITBOARD_INITIAL_SHIFT", "48"))   # 2^16 slots
SHIFT_MINIMUM = int(os.getenv("MAGIC_BITBOARD_SHIFT_MINIMUM", "32"))
ZSTD_LEVEL    = int(os.getenv("MAGIC_BITBOARD_ZSTD_LEVEL",    "3"))

# -------- binary encoding ---------------------------------------------------
MAGIC = b"MBB1"           # 4-byte magic + version major «1»
HEADER_FMT = "<4sHHHxxQQQ"  # magic, version_minor (H), dtype_code (H), shift (H), pad, mask (Q), multiplier (Q), slots (Q)
HEADER_SIZE = 36          # bytes (4+2+2+2+2pad+8+8+8)
VERSION_MINOR = 0

# dtype codes stored in the header; 0 is reserved for "unknown"
DTYPE_CODES = {
    "bool": 1,
    "int8": 2, "int16": 3, "int32": 4, "int64": 5,
    "uint8": 6, "uint16": 7, "uint32": 8, "uint64": 9,
    "float32": 10, "float64": 11,
}
DTYPE_NAMES = {code: name for name, code in DTYPE_CODES.items()}


def u64(x:int) -> int:
    """Truncate a python int to its low 64 bits."""
    return x & MASK64


def check_mask(mask:int) -> int:
    mask = operator.index(mask)
    if not 0 <= mask <= MASK64:
        raise ValueError(f"mask must fit in 64 unsigned bits, got {mask:#x}")
    return mask


def table_size(shift:int) -> int:
    return 1 << (BITS - shift)


# verifier switches from a dense scratch array to a sort when the table grows past this
DENSE_SLOT_LIMIT = 1 << 22
