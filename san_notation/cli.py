# san_notation/cli.py
"""
Command-line front end: parse SAN tokens or the mainline of PGN files and
print the components of every move.
"""
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from san_notation.config.settings import Settings, settings
from san_notation.core.notation import Notation
from san_notation.exceptions import InvalidSyntaxError, PgnError
from san_notation.services.pgn_service import PgnService
from san_notation.utils.logging_config import setup_logging

logger = structlog.get_logger(__name__)


def format_record(record: Dict[str, Any], output_format: str, include_unset: bool) -> str:
    """Renders one notation record as a JSON object or a `key=value` text line."""
    if not include_unset:
        record = {key: value for key, value in record.items() if value is not None and value is not False}
    if output_format == "json":
        return json.dumps(record)
    return " ".join(f"{key}={value}" for key, value in record.items())


def _parse_tokens(tokens: List[str], output_format: str, include_unset: bool) -> int:
    failures = 0
    for token in tokens:
        try:
            notation = Notation(token)
        except InvalidSyntaxError as e:
            failures += 1
            print(f"error: {e}", file=sys.stderr)
            continue
        print(format_record(notation.as_dict(), output_format, include_unset))
    return 1 if failures else 0


def _parse_pgn(pgn_filepath: Path, output_format: str, include_unset: bool) -> int:
    service = PgnService()
    try:
        for game_index, game in enumerate(service.read_games(pgn_filepath), start=1):
            for move in service.notations_from_game(game):
                record = {
                    "game": game_index,
                    "ply": move.ply,
                    "move_number": move.move_number,
                    "player_color": move.player_color,
                    **move.notation.as_dict(),
                }
                print(format_record(record, output_format, include_unset))
    except PgnError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


def build_parser(config: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="san-notation",
        description="Parse chess moves written in Standard Algebraic Notation.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        default=config.log_level,
        help="Log level for messages written to stderr",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=config.output.format == "json",
        help="Print one JSON object per move instead of a text line",
    )
    parser.add_argument(
        "--skip-unset",
        action="store_true",
        default=not config.output.include_unset,
        help="Leave out fields that are unset",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="Parse SAN tokens given as arguments")
    parse_cmd.add_argument("tokens", nargs="+", help="SAN tokens, e.g. Nbd7?! exd8=Q+ O-O")

    pgn_cmd = subparsers.add_parser("pgn", help="Parse the mainline moves of a PGN file")
    pgn_cmd.add_argument("path", type=Path, help="Path to the PGN file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser(settings).parse_args(argv)
    setup_logging(
        log_level=args.log_level,
        log_file=settings.log_file,
        force_json_console=settings.log_json,
    )
    output_format = "json" if args.json else "text"
    include_unset = not args.skip_unset
    logger.debug("Starting command.", command=args.command, output_format=output_format)

    if args.command == "parse":
        return _parse_tokens(args.tokens, output_format, include_unset)
    return _parse_pgn(args.path, output_format, include_unset)
