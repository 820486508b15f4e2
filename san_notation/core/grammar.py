# san_notation/core/grammar.py
"""
The SAN grammar: an ordered table of anchored patterns and the extraction of
their captured groups into a `NotationFields` record.

The table is evaluated top to bottom and the first full match wins. The
order is part of the grammar, not an optimisation: several forms are textual
neighbours of others (`e4` / `e4=Q`, `Nd7` / `Nbd7`), and keeping the table
ordered makes the outcome deterministic should two patterns ever overlap.

Every pattern shares the same trailing suffix: at most one check marker
(`+` or `#`), then an optional move-quality annotation.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import structlog

from san_notation.exceptions import InvalidSyntaxError
from san_notation.types import Annotation, Castling, NotationFields, NotationForm, Piece

logger = structlog.get_logger(__name__)

# Building blocks for the rule patterns. Named groups drive the extraction,
# so every rule that captures a component uses the same group name for it.
_PIECE = r"(?P<piece>[KQBNR])"
_FROM_COLUMN = r"(?P<from_column>[a-h])"
_FROM_ROW = r"(?P<from_row>[1-8])"
_TARGET = r"(?P<target_column>[a-h])(?P<target_row>[1-8])"
_CAPTURE = r"(?P<capture>x)"
_PROMOTION = r"=?(?P<promotion>[QRBN])"
_OPTIONAL_PROMOTION = rf"(?:{_PROMOTION})?"
_SUFFIX = (
    r"(?P<check>[+#])?"                      # Check or checkmate, never both
    r"(?P<annotation>\?\?|\?!|!!|\?|!)?"     # Move-quality annotation, always last
)

_CASTLING_SPELLINGS: Dict[str, Castling] = {
    "O-O": Castling.KING_SIDE,
    "O-O-O": Castling.QUEEN_SIDE,
    "0-0": Castling.KING_SIDE,
    "0-0-0": Castling.QUEEN_SIDE,
}


@dataclass(frozen=True, slots=True)
class GrammarRule:
    """A single alternative of the grammar: the form it recognises and its compiled pattern."""
    form: NotationForm
    pattern: "re.Pattern[str]"

    def match(self, raw: str) -> Optional["re.Match[str]"]:
        return self.pattern.fullmatch(raw)


def _rule(form: NotationForm, body: str) -> GrammarRule:
    return GrammarRule(form=form, pattern=re.compile(body + _SUFFIX))


GRAMMAR: Tuple[GrammarRule, ...] = (
    _rule(NotationForm.CASTLING, r"(?P<castling>O-O-O|O-O)"),
    _rule(NotationForm.CASTLING_ZERO, r"(?P<castling>0-0-0|0-0)"),
    _rule(NotationForm.PAWN_MOVE, _TARGET),
    _rule(NotationForm.PAWN_MOVE_LONG, _FROM_COLUMN + _FROM_ROW + _TARGET),
    _rule(NotationForm.PIECE_MOVE, _PIECE + _TARGET),
    _rule(NotationForm.PIECE_MOVE_FROM_COLUMN, _PIECE + _FROM_COLUMN + _TARGET),
    _rule(NotationForm.PIECE_MOVE_FROM_ROW, _PIECE + _FROM_ROW + _TARGET),
    _rule(NotationForm.PIECE_MOVE_LONG, _PIECE + _FROM_COLUMN + _FROM_ROW + _TARGET),
    _rule(NotationForm.PAWN_CAPTURE, _FROM_COLUMN + _CAPTURE + _TARGET + _OPTIONAL_PROMOTION),
    _rule(
        NotationForm.PAWN_CAPTURE_LONG,
        _FROM_COLUMN + _FROM_ROW + _CAPTURE + _TARGET + _OPTIONAL_PROMOTION,
    ),
    _rule(NotationForm.PIECE_CAPTURE, _PIECE + _CAPTURE + _TARGET),
    _rule(NotationForm.PIECE_CAPTURE_FROM_COLUMN, _PIECE + _FROM_COLUMN + _CAPTURE + _TARGET),
    _rule(NotationForm.PIECE_CAPTURE_FROM_ROW, _PIECE + _FROM_ROW + _CAPTURE + _TARGET),
    _rule(
        NotationForm.PIECE_CAPTURE_LONG,
        _PIECE + _FROM_COLUMN + _FROM_ROW + _CAPTURE + _TARGET,
    ),
    _rule(NotationForm.PAWN_PROMOTION, _TARGET + _PROMOTION),
)


def _optional_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value is not None else None


def _extract(form: NotationForm, match: "re.Match[str]") -> NotationFields:
    """Builds the field record implied by the groups that took part in `match`."""
    groups = match.groupdict()
    check = groups["check"]
    annotation = Annotation(groups["annotation"]) if groups["annotation"] else None

    if groups.get("castling") is not None:
        return NotationFields(
            form=form,
            castling=_CASTLING_SPELLINGS[groups["castling"]],
            is_check=check == "+",
            is_checkmate=check == "#",
            annotation=annotation,
        )

    from_column = groups.get("from_column")
    from_row = _optional_int(groups.get("from_row"))
    promotion = groups.get("promotion")

    return NotationFields(
        form=form,
        target_column=groups["target_column"],
        target_row=int(groups["target_row"]),
        moved_piece=Piece.from_san_letter(groups.get("piece")),
        disambiguation_column=from_column,
        disambiguation_row=from_row,
        promoted_piece=Piece(promotion) if promotion else None,
        is_capture=groups.get("capture") is not None,
        is_check=check == "+",
        is_checkmate=check == "#",
        annotation=annotation,
        # The full origin square can only come from a single rule stating both parts.
        is_long_form=from_column is not None and from_row is not None,
    )


def parse_notation(raw: str) -> NotationFields:
    """
    Matches `raw` against the grammar and extracts its components.

    Args:
        raw: A single SAN token, e.g. "Nbd7?!" or "exd8=Q+".

    Returns:
        The `NotationFields` of the first rule that matches the whole string.

    Raises:
        InvalidSyntaxError: If no rule matches. Nothing is partially applied.
    """
    if not isinstance(raw, str):
        raise InvalidSyntaxError(raw)

    for rule in GRAMMAR:
        match = rule.match(raw)
        if match is not None:
            return _extract(rule.form, match)

    logger.debug("Rejected SAN token.", token=raw)
    raise InvalidSyntaxError(raw)


def matching_forms(raw: str) -> List[NotationForm]:
    """Returns every form whose pattern accepts `raw`, in precedence order."""
    return [rule.form for rule in GRAMMAR if rule.match(raw) is not None]
