"""
Geometry/Base movement and capturing rules, one validator per piece type.

Key idea: Use strategy pattern to look up the rules for the type of the moving piece.
Every validator either returns quietly or raises the MoveError describing why the move is not allowed.
Validators only read the game; the board is mutated later by the Game itself.

Whether the move leaves your own king in check is verified afterwards by the Game (see simulation.py).
"""

from typing import Callable, Protocol

from src.chess.attacks import is_square_attacked
from src.chess.board import Board
from src.chess.castling import (
    CASTLING_COLOR,
    CASTLING_RULES,
    CastlingRights,
    castling_direction_for,
)
from src.chess.moves import (
    PAWN_FORWARD,
    PAWN_HOME_ROW,
    PROMOTION_ROW,
    Move,
    squares_between,
)
from src.chess.notation import notation_from_square
from src.chess.pieces import Piece
from src.chess.square import Square
from src.core.exceptions import (
    CaptureOwnPieceError,
    GeneralMoveError,
    InvalidCastleError,
    NoPieceSelectedError,
    PieceInTheWayError,
    PromotionRequiredError,
)
from src.core.shared_types import Color, PieceType


class GameView(Protocol):
    """Just the parts of the game the validators need"""

    board: Board
    next_to_move: Color
    castling_rights: CastlingRights
    can_en_passant: bool
    previous_move: str


# --- SHARED RULES ---
def assert_not_capturing_own_piece(move: Move, game: GameView) -> None:
    target = game.board.piece(move.to_square)
    if target is not None and target.color == game.next_to_move:
        raise CaptureOwnPieceError()


def assert_path_is_clear(move: Move, game: GameView) -> None:
    """Sliding pieces cannot jump: every square strictly in between must be empty."""
    for square in squares_between(move.from_square, move.to_square):
        if not game.board.is_empty(square):
            raise PieceInTheWayError()


# --- MOVEMENT RULES ---
def validate_bishop_move(move: Move, game: GameView) -> None:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    if abs(move.row_diff) != abs(move.col_diff) or move.row_diff == 0:
        raise GeneralMoveError()
    assert_path_is_clear(move, game)
    assert_not_capturing_own_piece(move, game)


def validate_rook_move(move: Move, game: GameView) -> None:
    """Rooks move either horizontally or vertically"""
    stays_on_row = move.row_diff == 0
    stays_on_col = move.col_diff == 0
    if stays_on_row == stays_on_col:
        # either not moving at all, or moving along both axes
        raise GeneralMoveError()
    assert_path_is_clear(move, game)
    assert_not_capturing_own_piece(move, game)


def validate_queen_move(move: Move, game: GameView) -> None:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    if abs(move.row_diff) == abs(move.col_diff):
        validate_bishop_move(move, game)
    else:
        validate_rook_move(move, game)


def validate_knight_move(move: Move, game: GameView) -> None:
    """Knights always move such that {|delta_row|, |delta_col|} = {1, 2}. Nothing can be in their way."""
    if (abs(move.row_diff), abs(move.col_diff)) not in ((1, 2), (2, 1)):
        raise GeneralMoveError()
    assert_not_capturing_own_piece(move, game)


def validate_king_move(move: Move, game: GameView) -> None:
    """
    The king can move by a single square at the time.

    Castling is modelled as a king move by two columns (the rook gets moved along by the Game).
    """
    distance = (abs(move.row_diff), abs(move.col_diff))
    if distance in ((1, 0), (0, 1), (1, 1)):
        assert_not_capturing_own_piece(move, game)
    elif distance == (0, 2):
        validate_castling(move, game)
    else:
        raise GeneralMoveError()


def validate_castling(move: Move, game: GameView) -> None:
    """
    **you are allowed to castle if**

    * Castling rights in this direction are not yet revoked (king and rook never moved).
    * The rook is still standing on its starting square.
    * All squares in between king and rook are empty.
    * The king does not start from, pass through or land on an attacked square.
    """
    color = game.next_to_move
    direction = castling_direction_for(move.from_square, move.to_square)
    if direction is None or CASTLING_COLOR[direction] != color:
        raise InvalidCastleError()

    if not game.castling_rights.allows(direction):
        raise InvalidCastleError("Castling rights in this direction have been revoked")

    squares = CASTLING_RULES[direction]
    if game.board.piece(squares.rook_from) != Piece(PieceType.ROOK, color):
        raise InvalidCastleError()

    if any(not game.board.is_empty(square) for square in squares.between):
        raise InvalidCastleError("There is a piece in between king and rook")

    if any(is_square_attacked(color, square, game.board) for square in squares.king_path):
        raise InvalidCastleError("You cannot castle out of, through or into check")


def validate_pawn_move(move: Move, game: GameView) -> None:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - can move by two in their first move (so when on their starting rank)
    - takes diagonally, including en passant
    - must promote when reaching the final rank
    """
    color = game.next_to_move
    forward = PAWN_FORWARD[color]
    target = game.board.piece(move.to_square)

    if move.col_diff == 0 and move.row_diff == forward:
        # pawn push
        if target is not None:
            raise PieceInTheWayError()

    elif move.col_diff == 0 and move.row_diff == 2 * forward:
        # double pawn push
        if move.from_square.row != PAWN_HOME_ROW[color]:
            raise GeneralMoveError()
        passed_square = move.from_square.offset(forward, 0)
        if target is not None or not game.board.is_empty(passed_square):
            raise PieceInTheWayError()

    elif abs(move.col_diff) == 1 and move.row_diff == forward:
        # pawns take diagonally
        if target is not None and target.color == color:
            raise CaptureOwnPieceError()
        if target is None and not is_en_passant_capture(move, game):
            raise GeneralMoveError()

    else:
        raise GeneralMoveError()

    if move.to_square.row == PROMOTION_ROW[color] and move.promote_to is None:
        raise PromotionRequiredError()


def is_en_passant_capture(move: Move, game: GameView) -> bool:
    """
    En passant is only possible directly after the opponent's pawn advanced by two squares,
    landing next to your pawn. Then the last move's notation is exactly the square of that pawn
    (possibly followed by a check marker).
    """
    passed_pawn_square = Square(move.from_square.row, move.to_square.col)
    return game.can_en_passant and game.previous_move.rstrip(
        "+"
    ) == notation_from_square(passed_pawn_square)


# --- STRATEGY PATTERN: VALIDATION RULES ---
ValidateFn = Callable[[Move, GameView], None]
VALIDATION_RULES: dict[PieceType, ValidateFn] = {
    PieceType.PAWN: validate_pawn_move,
    PieceType.KNIGHT: validate_knight_move,
    PieceType.BISHOP: validate_bishop_move,
    PieceType.ROOK: validate_rook_move,
    PieceType.QUEEN: validate_queen_move,
    PieceType.KING: validate_king_move,
}


def validate_piece_move(move: Move, game: GameView) -> None:
    """Look up the rules for the selected piece. You can only select a piece of your own."""
    piece = game.board.piece(move.from_square)
    if piece is None:
        raise NoPieceSelectedError()
    if piece.color != game.next_to_move:
        raise NoPieceSelectedError(f"It is {game.next_to_move}'s turn to move")

    validation_rule = VALIDATION_RULES[piece.type]
    validation_rule(move, game)
