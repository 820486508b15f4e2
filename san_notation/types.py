# san_notation/types.py
"""
A central module for the enums and data contracts shared across the package.

Every field that may be absent is modelled as `Optional[...]` and is `None`
when unset. No sentinel values are used.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Piece(str, Enum):
    PAWN = "P"; KNIGHT = "N"; BISHOP = "B"; ROOK = "R"; QUEEN = "Q"; KING = "K"

    @property
    def san_letter(self) -> str:
        """The letter used for this piece in SAN. Pawns have none."""
        return "" if self is Piece.PAWN else self.value

    @classmethod
    def from_san_letter(cls, letter: Optional[str]) -> "Piece":
        """Maps a SAN piece letter to a `Piece`; a missing letter denotes a pawn."""
        if not letter:
            return cls.PAWN
        return cls(letter)


class Castling(str, Enum):
    KING_SIDE = "O-O"; QUEEN_SIDE = "O-O-O"


class Annotation(str, Enum):
    BLUNDER = "??"; MISTAKE = "?"; INTERESTING = "?!"; GOOD = "!"; BRILLIANT = "!!"


class NotationForm(str, Enum):
    """The grammar rule a SAN token was matched by, in precedence order."""
    CASTLING = "castling"
    CASTLING_ZERO = "castling_zero"
    PAWN_MOVE = "pawn_move"
    PAWN_MOVE_LONG = "pawn_move_long"
    PIECE_MOVE = "piece_move"
    PIECE_MOVE_FROM_COLUMN = "piece_move_from_column"
    PIECE_MOVE_FROM_ROW = "piece_move_from_row"
    PIECE_MOVE_LONG = "piece_move_long"
    PAWN_CAPTURE = "pawn_capture"
    PAWN_CAPTURE_LONG = "pawn_capture_long"
    PIECE_CAPTURE = "piece_capture"
    PIECE_CAPTURE_FROM_COLUMN = "piece_capture_from_column"
    PIECE_CAPTURE_FROM_ROW = "piece_capture_from_row"
    PIECE_CAPTURE_LONG = "piece_capture_long"
    PAWN_PROMOTION = "pawn_promotion"


@dataclass(frozen=True, slots=True)
class NotationFields:
    """The structured components extracted from a single SAN token."""
    form: NotationForm
    castling: Optional[Castling] = None
    target_column: Optional[str] = None
    target_row: Optional[int] = None
    moved_piece: Optional[Piece] = None
    disambiguation_column: Optional[str] = None
    disambiguation_row: Optional[int] = None
    promoted_piece: Optional[Piece] = None
    is_capture: bool = False
    is_check: bool = False
    is_checkmate: bool = False
    annotation: Optional[Annotation] = None
    is_long_form: bool = False

    def as_dict(self) -> Dict[str, Any]:
        """Returns the fields as a plain dictionary with enum members flattened to values."""
        return {
            key: value.value if isinstance(value, Enum) else value
            for key, value in asdict(self).items()
        }
