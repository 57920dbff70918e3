import pytest

from src.game.board import CellKind, Direction, Orientation, Piece
from src.game.exceptions import IllegalMoveError
from src.game.movement import (Move, apply_move, generate_moves,
                               is_legal_move, piece_label, target_cell)
from src.game.pieces import PieceRegistry


def one_blocker():
    """Prisoner at (2, 0) with a vertical blocker at (2, 3)."""
    return PieceRegistry(
        [
            Piece(0, CellKind.PRISONER, Orientation.HORIZONTAL, 2, 2, 0),
            Piece(1, CellKind.BLOCK, Orientation.VERTICAL, 2, 2, 3),
        ]
    )


class TestMove:
    def test_reversed(self):
        move = Move(3, Direction.UP)
        assert move.reversed() == Move(3, Direction.DOWN)
        assert move.reversed().reversed() == move

    def test_hashable_and_str(self):
        assert len({Move(1, Direction.LEFT), Move(1, Direction.LEFT)}) == 1
        assert str(Move(1, Direction.LEFT)) == "piece 1 left"

    def test_piece_label(self):
        assert piece_label(0) == "A"
        assert piece_label(24) == "Y"
        assert piece_label(25) == "a"


class TestTargetCell:
    def test_horizontal_length_offsets(self):
        short = Piece(1, CellKind.BLOCK, Orientation.HORIZONTAL, 2, 1, 1)
        long = Piece(2, CellKind.BLOCK, Orientation.HORIZONTAL, 3, 1, 1)
        assert target_cell(short, Direction.LEFT) == (1, 0)
        assert target_cell(short, Direction.RIGHT) == (1, 3)
        assert target_cell(long, Direction.RIGHT) == (1, 4)

    def test_vertical_length_offsets(self):
        piece = Piece(1, CellKind.BLOCK, Orientation.VERTICAL, 3, 1, 4)
        assert target_cell(piece, Direction.UP) == (0, 4)
        assert target_cell(piece, Direction.DOWN) == (4, 4)

    def test_orientation_mismatch(self):
        piece = Piece(1, CellKind.BLOCK, Orientation.VERTICAL, 2, 1, 4)
        assert target_cell(piece, Direction.LEFT) is None
        assert target_cell(piece, Direction.RIGHT) is None


class TestGenerateMoves:
    def test_successors_in_registry_and_direction_order(self):
        pieces = one_blocker()
        successors = generate_moves(pieces, pieces.render())
        moves = [move for _, move in successors]
        assert moves == [
            Move(0, Direction.RIGHT),
            Move(1, Direction.UP),
            Move(1, Direction.DOWN),
        ]

    def test_successors_are_copies_with_one_piece_shifted(self):
        pieces = one_blocker()
        for next_pieces, move in generate_moves(pieces, pieces.render()):
            assert next_pieces is not pieces
            for before, after in zip(pieces, next_pieces):
                assert before.piece_id == after.piece_id
                if before.piece_id == move.piece_id:
                    assert after.x - before.x == move.direction.dx
                    assert after.y - before.y == move.direction.dy
                else:
                    assert after == before
            assert next_pieces.validate() == []

        # The source state is untouched
        assert pieces == one_blocker()

    def test_edge_blocks_movement(self):
        pieces = PieceRegistry(
            [
                Piece(0, CellKind.PRISONER, Orientation.HORIZONTAL, 2, 2, 4),
                Piece(1, CellKind.BLOCK, Orientation.VERTICAL, 3, 3, 0),
            ]
        )
        moves = [move for _, move in generate_moves(pieces, pieces.render())]
        assert moves == [Move(0, Direction.LEFT), Move(1, Direction.UP)]

    def test_adjacent_pieces_block_each_other(self):
        pieces = PieceRegistry(
            [
                Piece(0, CellKind.PRISONER, Orientation.HORIZONTAL, 3, 2, 0),
                Piece(1, CellKind.BLOCK, Orientation.HORIZONTAL, 3, 2, 3),
            ]
        )
        assert generate_moves(pieces, pieces.render()) == []

    def test_stacked_column_is_stuck(self):
        pieces = PieceRegistry(
            [
                Piece(0, CellKind.PRISONER, Orientation.HORIZONTAL, 2, 2, 0),
                Piece(1, CellKind.BLOCK, Orientation.VERTICAL, 2, 0, 2),
                Piece(2, CellKind.BLOCK, Orientation.VERTICAL, 2, 2, 2),
                Piece(3, CellKind.BLOCK, Orientation.VERTICAL, 2, 4, 2),
            ]
        )
        assert generate_moves(pieces, pieces.render()) == []


class TestApplyMove:
    def test_apply_legal_move(self):
        pieces = one_blocker()
        moved = apply_move(pieces, Move(1, Direction.DOWN))
        assert moved.get(1).position == (3, 3)
        assert pieces.get(1).position == (2, 3)

    def test_is_legal_move(self):
        pieces = one_blocker()
        board = pieces.render()
        assert is_legal_move(pieces, board, Move(1, Direction.UP))
        assert not is_legal_move(pieces, board, Move(0, Direction.LEFT))
        assert not is_legal_move(pieces, board, Move(1, Direction.LEFT))
        assert not is_legal_move(pieces, board, Move(5, Direction.UP))

    def test_blocked_move_raises(self):
        pieces = one_blocker()
        pieces = apply_move(pieces, Move(0, Direction.RIGHT))
        with pytest.raises(IllegalMoveError, match="blocked or off the board"):
            apply_move(pieces, Move(0, Direction.RIGHT))

    def test_off_board_move_raises(self):
        with pytest.raises(IllegalMoveError):
            apply_move(one_blocker(), Move(0, Direction.LEFT))

    def test_orientation_mismatch_raises(self):
        with pytest.raises(IllegalMoveError, match="cannot move left"):
            apply_move(one_blocker(), Move(1, Direction.LEFT))

    def test_unknown_piece_raises(self):
        with pytest.raises(IllegalMoveError, match="No piece with id 7"):
            apply_move(one_blocker(), Move(7, Direction.UP))
