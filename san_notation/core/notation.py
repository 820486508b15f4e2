# san_notation/core/notation.py
"""
The `Notation` value type: one parsed SAN token and its components.

A `Notation` is built atomically from a string by the grammar in
`san_notation.core.grammar`; construction either succeeds completely or
raises `InvalidSyntaxError`. New notations are derived by synthesising a
string and parsing it again, never by mutating the receiver. The two
disambiguation setters are the only in-place mutation the type allows, and
they do not touch the stored raw string.
"""

from dataclasses import replace
from typing import Any, Dict, Optional

import structlog

from san_notation.core.grammar import parse_notation
from san_notation.exceptions import InvalidSyntaxError, PreconditionViolationError
from san_notation.types import (Annotation, Castling, NotationFields,
                                NotationForm, Piece)

logger = structlog.get_logger(__name__)

# Marks a `with_disambiguation` argument that was not given, since `None`
# is a meaningful value (clear the field).
_KEEP: Any = object()

_COLUMNS = "abcdefgh"


def render_san(fields: NotationFields) -> str:
    """
    Composes canonical SAN text from a field record.

    Castling is always rendered with the letter O and promotions always use
    the `=` separator. The result is only guaranteed to parse if the fields
    describe a form the grammar accepts.
    """
    if fields.castling is not None:
        text = fields.castling.value
    else:
        parts = [fields.moved_piece.san_letter if fields.moved_piece else ""]
        if fields.disambiguation_column is not None:
            parts.append(fields.disambiguation_column)
        if fields.disambiguation_row is not None:
            parts.append(str(fields.disambiguation_row))
        if fields.is_capture:
            parts.append("x")
        parts.append(f"{fields.target_column or ''}{fields.target_row or ''}")
        if fields.promoted_piece is not None:
            parts.append(f"={fields.promoted_piece.san_letter}")
        text = "".join(parts)

    if fields.is_checkmate:
        text += "#"
    elif fields.is_check:
        text += "+"
    if fields.annotation is not None:
        text += fields.annotation.value
    return text


class Notation:
    """
    A single move in Standard Algebraic Notation.

    Example:
        >>> move = Notation("Nbd7?!")
        >>> move.moved_piece, move.disambiguation_column, move.target_notation
        (<Piece.KNIGHT: 'N'>, 'b', 'd7')
    """

    __slots__ = ("_raw_value", "_fields")

    def __init__(self, raw_value: str):
        """
        Parses `raw_value` into its components.

        Raises:
            InvalidSyntaxError: If the value is not valid SAN.
        """
        self._fields: NotationFields = parse_notation(raw_value)
        self._raw_value: str = raw_value

    # --- Original value ---

    @property
    def raw_value(self) -> str:
        return self._raw_value

    @property
    def fields(self) -> NotationFields:
        """The current field record, including any disambiguation overrides."""
        return self._fields

    @property
    def form(self) -> NotationForm:
        return self._fields.form

    # --- Castling ---

    @property
    def castling(self) -> Optional[Castling]:
        return self._fields.castling

    @property
    def is_castling_move(self) -> bool:
        return self._fields.castling is not None

    @property
    def is_castling_king_side(self) -> bool:
        return self._fields.castling is Castling.KING_SIDE

    @property
    def is_castling_queen_side(self) -> bool:
        return self._fields.castling is Castling.QUEEN_SIDE

    # --- Destination square ---

    @property
    def target_column(self) -> Optional[str]:
        return self._fields.target_column

    @property
    def target_column_index(self) -> Optional[int]:
        """The 0-based index of the target column (a=0 ... h=7), or None for castling."""
        if self._fields.target_column is None:
            return None
        return ord(self._fields.target_column) - ord("a")

    @property
    def target_row(self) -> Optional[int]:
        return self._fields.target_row

    @property
    def target_notation(self) -> Optional[str]:
        """The destination square as text, e.g. "d7", or None for castling."""
        if self._fields.target_column is None or self._fields.target_row is None:
            return None
        return f"{self._fields.target_column}{self._fields.target_row}"

    def with_target_column_index(self, index: int) -> "Notation":
        """
        Derives a notation for the same target row but another column.

        The derived value is a plain pawn move to the new square: the moved
        piece, disambiguation, capture, promotion, check and annotation of
        this notation are not carried over.

        Args:
            index: The column index, 0 for "a" through 7 for "h".

        Raises:
            PreconditionViolationError: If this notation has no target row.
            InvalidSyntaxError: If `index` does not name a board column.
        """
        if self._fields.target_row is None:
            raise PreconditionViolationError("No row has been set.")
        if not 0 <= index < len(_COLUMNS):
            raise InvalidSyntaxError(f"{index}{self._fields.target_row}")
        return Notation(f"{_COLUMNS[index]}{self._fields.target_row}")

    def with_target_row(self, row: int) -> "Notation":
        """
        Derives a notation for the same target column but another row.

        Like `with_target_column_index`, the result is a plain pawn move.

        Raises:
            InvalidSyntaxError: If this notation has no target column or
                `row` is outside 1-8.
        """
        return Notation(f"{self._fields.target_column or ''}{row}")

    # --- Moved piece and its origin ---

    @property
    def moved_piece(self) -> Optional[Piece]:
        return self._fields.moved_piece

    @property
    def disambiguation_column(self) -> Optional[str]:
        return self._fields.disambiguation_column

    @disambiguation_column.setter
    def disambiguation_column(self, column: Optional[str]) -> None:
        # Neither validated nor reflected in the raw value.
        logger.debug(
            "Overwriting disambiguation column.", token=self._raw_value, column=column
        )
        self._fields = replace(self._fields, disambiguation_column=column)

    @property
    def disambiguation_row(self) -> Optional[int]:
        return self._fields.disambiguation_row

    @disambiguation_row.setter
    def disambiguation_row(self, row: Optional[int]) -> None:
        logger.debug("Overwriting disambiguation row.", token=self._raw_value, row=row)
        self._fields = replace(self._fields, disambiguation_row=row)

    @property
    def is_long_form(self) -> bool:
        return self._fields.is_long_form

    def with_disambiguation(self, column: Optional[str] = _KEEP, row: Optional[int] = _KEEP) -> "Notation":
        """
        Derives a notation with a different origin disambiguation.

        Unlike the setters, the raw text of the result is rendered from the
        updated fields and parsed again, so text and fields agree. Passing
        None clears a component; omitting an argument keeps it.

        Raises:
            InvalidSyntaxError: If the updated fields do not form valid SAN,
                e.g. a pawn capture without an origin column.
        """
        changes: Dict[str, Any] = {}
        if column is not _KEEP:
            changes["disambiguation_column"] = column
        if row is not _KEEP:
            changes["disambiguation_row"] = row
        return Notation(render_san(replace(self._fields, **changes)))

    # --- Markers ---

    @property
    def promoted_piece(self) -> Optional[Piece]:
        return self._fields.promoted_piece

    @property
    def is_capture(self) -> bool:
        return self._fields.is_capture

    @property
    def is_check(self) -> bool:
        return self._fields.is_check

    @property
    def is_checkmate(self) -> bool:
        return self._fields.is_checkmate

    @property
    def annotation(self) -> Optional[Annotation]:
        return self._fields.annotation

    # --- Conversion ---

    def as_dict(self) -> Dict[str, Any]:
        """Returns the raw value and every field, suitable for logging or JSON output."""
        return {"raw_value": self._raw_value, **self._fields.as_dict()}

    def __str__(self) -> str:
        return self._raw_value

    def __repr__(self) -> str:
        return f"Notation({self._raw_value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Notation):
            return NotImplemented
        return self._raw_value == other._raw_value and self._fields == other._fields

    # Mutable through the disambiguation setters, so not hashable.
    __hash__ = None  # type: ignore[assignment]
