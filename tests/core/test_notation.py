# tests/core/test_notation.py
import pytest

from san_notation.core.notation import Notation, render_san
from san_notation.exceptions import InvalidSyntaxError, PreconditionViolationError
from san_notation.types import Annotation, Castling, NotationForm, Piece


def test_king_side_castling():
    notation = Notation("O-O")
    assert notation.castling == Castling.KING_SIDE
    assert notation.is_castling_move
    assert notation.is_castling_king_side
    assert not notation.is_castling_queen_side
    assert not notation.is_check
    assert not notation.is_checkmate
    assert notation.annotation is None
    assert notation.moved_piece is None
    assert notation.target_notation is None
    assert notation.target_column_index is None


def test_queen_side_castling_with_check_and_annotation():
    notation = Notation("O-O-O+!")
    assert notation.castling == Castling.QUEEN_SIDE
    assert notation.is_castling_queen_side
    assert notation.is_check
    assert notation.annotation == Annotation.GOOD


def test_zero_castling_means_the_same_as_letter_castling():
    assert Notation("0-0").castling == Notation("O-O").castling
    assert Notation("0-0-0").castling == Notation("O-O-O").castling
    assert Notation("0-0").form == NotationForm.CASTLING_ZERO


def test_pawn_move():
    notation = Notation("e4")
    assert notation.moved_piece == Piece.PAWN
    assert notation.target_column == "e"
    assert notation.target_row == 4
    assert notation.target_column_index == 4
    assert notation.target_notation == "e4"
    assert not notation.is_castling_move
    assert not notation.is_capture
    assert not notation.is_long_form


def test_disambiguated_knight_move_with_annotation():
    notation = Notation("Nbd7?!")
    assert notation.moved_piece == Piece.KNIGHT
    assert notation.disambiguation_column == "b"
    assert notation.disambiguation_row is None
    assert notation.target_column == "d"
    assert notation.target_row == 7
    assert notation.annotation == Annotation.INTERESTING


def test_pawn_capture_with_promotion_and_check():
    notation = Notation("exd8=Q+")
    assert notation.moved_piece == Piece.PAWN
    assert notation.disambiguation_column == "e"
    assert notation.target_column == "d"
    assert notation.target_row == 8
    assert notation.is_capture
    assert notation.promoted_piece == Piece.QUEEN
    assert notation.is_check
    assert not notation.is_checkmate


def test_long_form_requires_the_full_origin_square():
    assert Notation("Ng1f3").is_long_form
    assert Notation("e2e4").is_long_form
    assert not Notation("Ngf3").is_long_form
    assert not Notation("N1f3").is_long_form


def test_invalid_value_raises():
    with pytest.raises(InvalidSyntaxError) as exc_info:
        Notation("Z9")
    assert exc_info.value.raw_value == "Z9"
    assert "Z9" in str(exc_info.value)


def test_string_conversion_echoes_the_raw_value():
    for raw in ("0-0-0", "e8Q", "Nbd7?!"):
        notation = Notation(raw)
        assert str(notation) == raw
        assert notation.raw_value == raw
    assert repr(Notation("e4")) == "Notation('e4')"


def test_equality_and_hashing():
    assert Notation("e4") == Notation("e4")
    assert Notation("e4") != Notation("e4+")
    # Same meaning, different spelling.
    assert Notation("O-O") != Notation("0-0")
    assert Notation("e4") != "e4"
    with pytest.raises(TypeError):
        hash(Notation("e4"))


def test_as_dict_flattens_enums():
    data = Notation("exd8=Q+").as_dict()
    assert data["raw_value"] == "exd8=Q+"
    assert data["form"] == "pawn_capture"
    assert data["moved_piece"] == "P"
    assert data["promoted_piece"] == "Q"
    assert data["castling"] is None
    assert data["is_check"] is True


class TestTargetDerivation:
    def test_with_target_column_index(self):
        derived = Notation("e4").with_target_column_index(3)
        assert derived == Notation("d4")
        assert derived.moved_piece == Piece.PAWN
        assert derived.target_column == "d"
        assert derived.target_row == 4

    def test_with_target_row(self):
        derived = Notation("e4").with_target_row(6)
        assert derived.raw_value == "e6"
        assert derived.target_row == 6

    def test_derivation_is_idempotent(self):
        original = Notation("c5")
        assert original.with_target_column_index(6) == original.with_target_column_index(6)
        once = original.with_target_row(2)
        assert once.with_target_row(2) == once

    def test_derivation_does_not_mutate_the_receiver(self):
        original = Notation("Nbd7?!")
        original.with_target_column_index(0)
        original.with_target_row(1)
        assert original == Notation("Nbd7?!")

    def test_derivation_drops_everything_but_the_square(self):
        derived = Notation("Nbxd7+?!").with_target_row(5)
        assert derived.raw_value == "d5"
        assert derived.form == NotationForm.PAWN_MOVE
        assert derived.moved_piece == Piece.PAWN
        assert derived.disambiguation_column is None
        assert not derived.is_capture
        assert not derived.is_check
        assert derived.annotation is None

        promoted = Notation("exd8=Q").with_target_column_index(7)
        assert promoted.raw_value == "h8"
        assert promoted.promoted_piece is None

    def test_column_index_requires_a_target_row(self):
        with pytest.raises(PreconditionViolationError):
            Notation("O-O").with_target_column_index(3)

    def test_row_on_castling_is_invalid_syntax(self):
        with pytest.raises(InvalidSyntaxError):
            Notation("O-O-O").with_target_row(4)

    @pytest.mark.parametrize("index", [-1, 8, -98, 10**7])
    def test_column_index_outside_the_board(self, index):
        with pytest.raises(InvalidSyntaxError):
            Notation("e4").with_target_column_index(index)

    @pytest.mark.parametrize("row", [0, 9])
    def test_row_outside_the_board(self, row):
        with pytest.raises(InvalidSyntaxError):
            Notation("e4").with_target_row(row)


class TestDisambiguation:
    def test_setters_overwrite_fields_but_not_the_raw_value(self):
        notation = Notation("Nbd7")
        notation.disambiguation_column = "f"
        notation.disambiguation_row = 6
        assert notation.disambiguation_column == "f"
        assert notation.disambiguation_row == 6
        assert str(notation) == "Nbd7"
        # Parse-time classification is not re-derived.
        assert not notation.is_long_form
        assert notation.form == NotationForm.PIECE_MOVE_FROM_COLUMN

    def test_setters_accept_none(self):
        notation = Notation("Ng1f3")
        notation.disambiguation_column = None
        notation.disambiguation_row = None
        assert notation.disambiguation_column is None
        assert notation.disambiguation_row is None
        assert notation != Notation("Ng1f3")

    def test_with_disambiguation_keeps_text_and_fields_consistent(self):
        original = Notation("Nbd7?!")
        derived = original.with_disambiguation(row=8)
        assert derived.raw_value == "Nb8d7?!"
        assert derived.is_long_form
        assert derived.annotation == Annotation.INTERESTING
        assert original.raw_value == "Nbd7?!"

    def test_with_disambiguation_can_clear_a_component(self):
        by_row = Notation("Rd1xd4+").with_disambiguation(column=None)
        assert by_row.raw_value == "R1xd4+"
        assert by_row.form == NotationForm.PIECE_CAPTURE_FROM_ROW

        plain = Notation("Rd1xd4+").with_disambiguation(column=None, row=None)
        assert plain.raw_value == "Rxd4+"
        assert plain.form == NotationForm.PIECE_CAPTURE

    def test_with_disambiguation_rejects_invalid_results(self):
        with pytest.raises(InvalidSyntaxError):
            Notation("exd5").with_disambiguation(column=None)


@pytest.mark.parametrize("raw, rendered", [
    ("O-O", "O-O"),
    ("0-0-0#", "O-O-O#"),
    ("e4", "e4"),
    ("e8Q", "e8=Q"),
    ("e7xd8N+!!", "e7xd8=N+!!"),
    ("Nbd7?!", "Nbd7?!"),
    ("R1e2", "R1e2"),
])
def test_render_san(raw, rendered):
    assert render_san(Notation(raw).fields) == rendered
