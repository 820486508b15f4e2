# san_notation/exceptions.py
"""
Defines custom exceptions for the san-notation package.

All errors raised by the package derive from `SanNotationError`, so callers
can catch everything the package signals with a single clause, or pick the
specific kind they care about.
"""

from typing import Optional


class SanNotationError(Exception):
    """Base class for all package-specific, catchable errors."""
    pass


class InvalidSyntaxError(SanNotationError, ValueError):
    """
    Raised when a string does not match any alternative of the SAN grammar.

    Attributes:
        raw_value: The rejected input, kept for diagnostics.
    """
    def __init__(self, raw_value: object):
        super().__init__(f"The value {raw_value!r} could not be parsed.")
        self.raw_value = raw_value


class PreconditionViolationError(SanNotationError, RuntimeError):
    """
    Raised when a derived construction is requested on a notation that lacks
    a field the derivation needs, e.g. a target row.
    """
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PgnError(SanNotationError):
    """Base class for errors raised while turning PGN games into notations."""
    pass


class PgnParsingError(PgnError):
    """
    Raised when a game's mainline cannot be replayed, e.g. python-chess
    recorded read errors or a move is illegal in its position.
    """
    pass


class PgnNotationError(PgnError):
    """
    Raised when a mainline move of a PGN game yields a SAN token the grammar rejects.

    Attributes:
        token: The SAN token that failed to parse.
        ply: The 0-indexed half-move at which the token occurred, if known.
    """
    def __init__(self, token: str, ply: Optional[int] = None):
        location = f" at ply {ply}" if ply is not None else ""
        super().__init__(f"Move {token!r}{location} is not valid SAN.")
        self.token = token
        self.ply = ply


class PgnServiceError(PgnError):
    """
    Raised when a PGN file cannot be opened or read; chained from the `OSError`.
    """
    pass
