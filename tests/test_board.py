"""Tests for the table builder and lookups."""

import threading

import numpy as np
import pytest

from magic_bitboard import DONT_CARE, MagicBitboard, build_board, fill_table, lookup
from magic_bitboard.subsets import count_bits, masked_subsets


def sparse_popcount(subset: int):
    """Odd-sized subsets never occur."""
    return DONT_CARE if count_bits(subset) & 1 else count_bits(subset)


class TestBuild:
    """Test cases for MagicBitboard.build."""

    @pytest.mark.parametrize(
        "mask, fn",
        [
            (0b101, lambda s: {0b001: "A", 0b100: "B", 0b101: "C"}.get(s, DONT_CARE)),
            (0b1101001, count_bits),
            (0x8100000000000081, sparse_popcount),
            (0x00FF000000000000, lambda s: s >> 48),
        ],
    )
    def test_every_concrete_answer_is_found(self, mask: int, fn) -> None:
        board = MagicBitboard.build(mask, fn, guess_limit=500, rng=2024)
        for subset in masked_subsets(mask):
            expected = fn(subset)
            if expected is not DONT_CARE:
                assert board.lookup(subset) == expected
                assert board[subset] == expected
                assert lookup(board, subset) == expected
        assert board.check(fn)

    def test_bits_outside_mask_are_ignored(self) -> None:
        mask = 0b1010
        board = build_board(mask, count_bits, guess_limit=300, rng=9)
        for subset in masked_subsets(mask):
            noise = 0xFFFF_0000_0000_0101
            assert board.lookup(subset | noise) == count_bits(subset)

    def test_zero_mask_single_slot(self) -> None:
        board = MagicBitboard.build(0, lambda s: "only", guess_limit=1)
        assert len(board) == 1
        assert board.triple() == (0, 0, 64)
        assert board.lookup(0) == "only"
        assert board.lookup(0xDEADBEEF) == "only"

    def test_same_seed_same_table(self) -> None:
        mask = 0b110011
        a = MagicBitboard.build(mask, count_bits, dtype=np.int64, guess_limit=300, rng=17)
        b = MagicBitboard.build(mask, count_bits, dtype=np.int64, guess_limit=300, rng=17)
        assert a.triple() == b.triple()
        assert np.array_equal(a.table, b.table)

    def test_numpy_table_is_read_only(self) -> None:
        board = MagicBitboard.build(0b11, count_bits, dtype=np.uint8, guess_limit=300, rng=1)
        assert board.table.dtype == np.uint8
        with pytest.raises(ValueError):
            board.table[0] = 9

    def test_object_table_is_immutable(self) -> None:
        board = MagicBitboard.build(0b11, count_bits, guess_limit=300, rng=1)
        assert isinstance(board.table, tuple)

    def test_concurrent_readers(self) -> None:
        mask = 0b111100
        board = MagicBitboard.build(mask, count_bits, guess_limit=300, rng=4)
        errors = []

        def reader() -> None:
            for subset in masked_subsets(mask):
                if board.lookup(subset) != count_bits(subset):
                    errors.append(subset)

        threads = [threading.Thread(target=reader) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert errors == []


class TestFillTable:
    """Test cases for fill_table and from_magic."""

    def test_unwritten_slots_hold_fill(self) -> None:
        # magic 1 << 61 puts 0b001 at 1, 0b100 at 4, 0b101 at 5 with shift 61
        fn = lambda s: {0b001: "A", 0b100: "B", 0b101: "C"}.get(s, DONT_CARE)
        table = fill_table(0b101, 1 << 61, 61, fn, fill="-")
        assert table == ("-", "A", "-", "-", "B", "C", "-", "-")

    def test_numeric_default_fill_is_zero(self) -> None:
        table = fill_table(0b1, 1 << 63, 63, lambda s: DONT_CARE if s == 0 else 5, dtype=np.int32)
        assert table.tolist() == [0, 5]

    def test_from_magic_reuses_triple(self) -> None:
        mask = 0b1011
        original = MagicBitboard.build(mask, count_bits, guess_limit=300, rng=8)
        rebuilt = MagicBitboard.from_magic(*original.triple(), count_bits)
        assert rebuilt.table == original.table

    def test_rejects_mismatched_table(self) -> None:
        with pytest.raises(ValueError):
            MagicBitboard((1, 2, 3), 0b11, 1, 62)

    def test_check_detects_wrong_table(self) -> None:
        board = MagicBitboard(("x",) * 4, 0b11, 1 << 62, 62)
        assert not board.check(count_bits)


class TestArrayAnswers:
    """Boards whose answers are numpy arrays."""

    def test_build_and_lookup(self) -> None:
        fn = lambda s: np.array([s & 1, s >> 1])
        board = MagicBitboard.build(0b11, fn, guess_limit=200, rng=0)
        for subset in masked_subsets(0b11):
            assert np.array_equal(board.lookup(subset), fn(subset))
        assert board.check(fn)

    def test_check_detects_wrong_array(self) -> None:
        board = MagicBitboard((np.array([9, 9]),), 0, 0, 64)
        assert not board.check(lambda s: np.array([0, 0]))
