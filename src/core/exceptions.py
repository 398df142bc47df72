"""
Exceptions shared by all layers.

Move rejections (MoveError and its subclasses) are expected, recoverable outcomes of a move request.
They are always raised before the board gets touched, so the game is left exactly as it was.
"""

from typing import Optional


class ChessError(Exception):
    """Base class for everything raised on purpose by this application."""


# --- MOVE REJECTIONS ---
class MoveError(ChessError):
    """A move request got rejected. `code` is a stable identifier the outer layers can send over the wire."""

    code = "GeneralError"
    message = "Invalid move"

    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(detail or self.message)
        self.detail = detail or self.message


class NoPieceSelectedError(MoveError):
    code = "NoPieceSelected"
    message = "You have not selected any piece"


class OutOfBoundsError(MoveError):
    code = "OutOfBounds"
    message = "The selected square is not inside the bounds of the chessboard"


class InvalidFieldError(MoveError):
    code = "InvalidField"
    message = "The square in your request is incorrect"


class GeneralMoveError(MoveError):
    """The piece cannot move like that (wrong geometry for its type)."""


class PieceInTheWayError(MoveError):
    code = "PieceInTheWay"
    message = "There is a piece in the way of your move"


class CaptureOwnPieceError(MoveError):
    code = "CaptureOwnPiece"
    message = "You cannot capture your own piece"


class InvalidCastleError(MoveError):
    code = "InvalidCastle"
    message = "That castle move is invalid"


class PromotionRequiredError(MoveError):
    code = "PromotionRequired"
    message = "No promotion piece specified"


class OwnKingInCheckError(MoveError):
    code = "OwnKingInCheck"
    message = "Your king is in check"


# --- STATE / INFRASTRUCTURE ---
class InvariantViolationError(ChessError):
    """The game data is corrupt (e.g. a king went missing). Never caught inside the engine."""


class GameStateError(ChessError):
    """The request does not fit the current state of the game (e.g. moving after the game concluded)."""


class RepositoryError(ChessError):
    """Unknown record or failing database."""


class InvalidRequestError(ChessError):
    """Malformed request at the boundary."""


class AuthenticationError(ChessError):
    """Missing or rejected credentials."""
