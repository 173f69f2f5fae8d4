# ==================================================
# magic_bitboard/codec.py
# ==================================================
"""
Byte encoding of a numeric MagicBitboard.

Layout: a fixed little-endian header (see ``const.HEADER_FMT``) followed by
the zstd-compressed table, stored little-endian. Writing the bytes
somewhere is up to the caller.
"""
import logging
import struct

import numpy as np
import zstandard as zstd

from .board import MagicBitboard
from .const import (BITS, DTYPE_CODES, DTYPE_NAMES, HEADER_FMT, HEADER_SIZE,
                    MAGIC, VERSION_MINOR, ZSTD_LEVEL, table_size)

log = logging.getLogger(__name__)

# frames record their content size
_compressor = zstd.ZstdCompressor(level=ZSTD_LEVEL, write_content_size=True)
_decompressor = zstd.ZstdDecompressor()


def dumps(board:MagicBitboard) -> bytes:
    table = board.table
    if not isinstance(table, np.ndarray):
        raise TypeError("only numpy-backed tables can be encoded; build with dtype=...")
    code = DTYPE_CODES.get(table.dtype.name)
    if code is None:
        raise TypeError(f"unsupported table dtype {table.dtype}")
    header = struct.pack(HEADER_FMT, MAGIC, VERSION_MINOR, code, board.shift,
                         board.mask, board.magic, len(table))
    raw = table.astype(table.dtype.newbyteorder("<"), copy=False).tobytes()
    payload = _compressor.compress(raw)
    log.debug("encoded %d slots: %d -> %d bytes", len(table), len(raw), len(payload))
    return header + payload


def loads(data:bytes) -> MagicBitboard:
    if len(data) < HEADER_SIZE:
        raise ValueError("Truncated magic bitboard")
    magic_bytes, ver_minor, code, shift, mask, magic, slots = struct.unpack_from(HEADER_FMT, data, 0)
    if magic_bytes != MAGIC:
        raise ValueError("Invalid magic bitboard data")
    if ver_minor > VERSION_MINOR:
        raise ValueError(f"Unsupported version minor {ver_minor}")
    name = DTYPE_NAMES.get(code)
    if name is None:
        raise ValueError(f"Unknown dtype code {code}")
    if shift > BITS or slots != table_size(shift):
        raise ValueError(f"Slot count {slots} does not match shift {shift}")
    dtype = np.dtype(name)
    try:
        raw = _decompressor.decompress(bytes(data[HEADER_SIZE:]))
    except zstd.ZstdError as exc:
        raise ValueError(f"Corrupt table payload: {exc}") from exc
    if len(raw) != slots * dtype.itemsize:
        raise ValueError("Table payload size mismatch")
    table = np.frombuffer(raw, dtype=dtype.newbyteorder("<")).astype(dtype)
    table.setflags(write=False)
    return MagicBitboard(table, mask, magic, shift)


def dump_triple(board:MagicBitboard):
    """``(mask, magic, shift)`` for callers that refill the table themselves."""
    return board.triple()
