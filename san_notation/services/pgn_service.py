# san_notation/services/pgn_service.py
"""
Turns the mainline of PGN games into parsed `Notation` values.

This module is an adapter between `python-chess` and the notation grammar.
python-chess reads the game record and supplies the SAN text of each move;
the move-quality NAGs attached to a move are folded back into the token as
its trailing annotation before the token is parsed. Any failure is reported
with the offending token and ply, so a caller importing a large PGN file
can tell which move broke.
"""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List

import chess
import chess.pgn
import structlog

from san_notation.core.notation import Notation
from san_notation.exceptions import (InvalidSyntaxError, PgnNotationError,
                                     PgnParsingError, PgnServiceError)
from san_notation.types import Annotation

logger = structlog.get_logger(__name__)

# Move-quality NAGs and the SAN suffix each one stands for. $5 ("!?") has
# no counterpart in the grammar and is ignored like every other NAG.
_NAG_ANNOTATIONS: Dict[int, Annotation] = {
    chess.pgn.NAG_GOOD_MOVE: Annotation.GOOD,
    chess.pgn.NAG_MISTAKE: Annotation.MISTAKE,
    chess.pgn.NAG_BRILLIANT_MOVE: Annotation.BRILLIANT,
    chess.pgn.NAG_BLUNDER: Annotation.BLUNDER,
    chess.pgn.NAG_DUBIOUS_MOVE: Annotation.INTERESTING,
}


@dataclass(frozen=True, slots=True)
class MoveNotation:
    """A parsed mainline move together with its position in the game."""
    ply: int
    move_number: int
    player_color: str
    notation: Notation


def _get_move_number(ply: int) -> int:
    """Calculates the 1-indexed move number from a 0-indexed ply."""
    return ply // 2 + 1


def annotation_suffix(nags: Iterable[int]) -> str:
    """Returns the SAN suffix for the lowest move-quality NAG in `nags`, or ""."""
    for nag in sorted(nags):
        if nag in _NAG_ANNOTATIONS:
            return _NAG_ANNOTATIONS[nag].value
    return ""


class PgnService:
    """A stateless service that reads PGN games and parses their mainline moves."""

    def notations_from_game(self, game: chess.pgn.Game) -> List[MoveNotation]:
        """
        Parses every mainline move of `game` into a `MoveNotation`.

        Null moves are skipped. The board starts from the game's own setup,
        so games with a FEN header are handled.

        Raises:
            PgnParsingError: If the mainline contains an illegal move.
            PgnNotationError: If a move's SAN is rejected by the grammar.
        """
        if game.errors:
            # python-chess stops reading a line at its first bad move and
            # records the error instead of raising it.
            logger.warning("Aborting game with PGN read errors.", errors=[str(e) for e in game.errors])
            raise PgnParsingError(f"Corrupt game record: {game.errors[0]}")

        board = game.board()
        notations: List[MoveNotation] = []

        for node in game.mainline():
            move = node.move
            if not move:
                logger.debug("Skipping null move.", ply=board.ply())
                board.push(move)
                continue

            ply = board.ply()
            player_color = 'w' if board.turn == chess.WHITE else 'b'
            try:
                if not board.is_legal(move):
                    raise chess.IllegalMoveError(f"illegal move {move.uci()} in {board.fen()}")
                token = board.san(move) + annotation_suffix(node.nags)
                board.push(move)
            except (AssertionError, chess.IllegalMoveError, ValueError) as e:
                logger.warning(
                    "Aborting game due to PGN integrity error.",
                    ply=ply, move=move.uci(), error=str(e)
                )
                raise PgnParsingError(f"Illegal move {move.uci()} at ply {ply}.") from e

            try:
                notation = Notation(token)
            except InvalidSyntaxError as e:
                logger.warning("Mainline move is not valid SAN.", ply=ply, token=token)
                raise PgnNotationError(token, ply) from e

            notations.append(
                MoveNotation(
                    ply=ply,
                    move_number=_get_move_number(ply),
                    player_color=player_color,
                    notation=notation,
                )
            )

        return notations

    def notations_from_pgn_text(self, pgn_text: str) -> List[MoveNotation]:
        """Parses the mainline of the first game in `pgn_text`; an empty text yields []."""
        game = chess.pgn.read_game(io.StringIO(pgn_text))
        if game is None:
            return []
        return self.notations_from_game(game)

    def read_games(self, pgn_filepath: Path) -> Iterator[chess.pgn.Game]:
        """
        Streams games from a PGN file one by one.

        Raises:
            PgnServiceError: If the file cannot be opened or read.
        """
        try:
            with pgn_filepath.open("r", encoding="utf-8", errors="replace") as pgn_file:
                while True:
                    game = chess.pgn.read_game(pgn_file)
                    if game is None:
                        break
                    yield game
        except OSError as e:
            raise PgnServiceError(f"Could not read PGN file {pgn_filepath}: {e}") from e

    def read_notations(self, pgn_filepath: Path) -> List[List[MoveNotation]]:
        """Parses the mainline of every game in a PGN file, one list per game."""
        return [self.notations_from_game(game) for game in self.read_games(pgn_filepath)]
