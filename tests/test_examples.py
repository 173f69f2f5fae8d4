"""Smoke test for the example builder script."""

from magic_bitboard import loads
from magic_bitboard.examples.build_board import main
from magic_bitboard.subsets import count_bits, masked_subsets


def test_build_board_writes_encoded_board(tmp_path, capsys) -> None:
    out = tmp_path / "board.mbb"
    main(["0b1011", "--sparse", "--seed", "3", "--guess-limit", "200", "--out", str(out)])
    assert "magic=" in capsys.readouterr().out

    board = loads(out.read_bytes())
    for subset in masked_subsets(0b1011):
        if count_bits(subset) % 2 == 0:
            assert board.lookup(subset) == count_bits(subset)
