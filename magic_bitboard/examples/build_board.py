# ==================================================
# examples/build_board.py
# ==================================================
import argparse, logging
from pathlib import Path

import numpy as np

from magic_bitboard import DONT_CARE, MagicBitboard, dumps
from magic_bitboard.subsets import count_bits

ANSWERS = {
    "popcount": count_bits,
    "lowbit":   lambda s: (s & -s).bit_length(),
    "parity":   lambda s: count_bits(s) & 1,
}

def answer_fn(name:str, sparse:bool):
    base = ANSWERS[name]
    if not sparse:
        return base
    # odd-sized subsets never occur
    return lambda s: DONT_CARE if count_bits(s) & 1 else base(s)

def main(argv=None):
    p = argparse.ArgumentParser(description="search a magic bitboard for a mask")
    p.add_argument("mask", type=lambda x: int(x, 0), help="64-bit mask, e.g. 0x8100000000000081")
    p.add_argument("--answer", choices=sorted(ANSWERS), default="popcount")
    p.add_argument("--sparse", action="store_true", help="mark odd-sized subsets as don't-care")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--guess-limit", type=int, default=None)
    p.add_argument("--shift-minimum", type=int, default=None)
    p.add_argument("--out", type=Path, help="write the encoded board here")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    search = {"rng": args.seed}
    if args.guess_limit is not None:
        search["guess_limit"] = args.guess_limit
    if args.shift_minimum is not None:
        search["shift_minimum"] = args.shift_minimum

    fn = answer_fn(args.answer, args.sparse)
    board = MagicBitboard.build(args.mask, fn, dtype=np.uint8, **search)
    print(f"mask={board.mask:#018x} magic={board.magic:#018x} shift={board.shift} slots={len(board)}")
    if args.out:
        args.out.write_bytes(dumps(board))
        print("  ⋄ wrote", args.out)

if __name__ == "__main__":
    main()
