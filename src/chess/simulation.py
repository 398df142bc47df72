"""
Look-ahead: what would happen if a move were played?

Instead of reasoning about pins, discovered checks and the like, we copy the game, really make the move
on the copy and then ask the attack rules whether the mover's king is attacked.
The same trick is used to decide whether a check is mate.
"""

from copy import deepcopy
from typing import Protocol

from src.chess.attacks import AttackingPiece, attackers_of
from src.chess.board import Board
from src.chess.moves import (
    KING_DELTAS,
    PAWN_FORWARD,
    PAWN_HOME_ROW,
    PROMOTION_ROW,
    Move,
    squares_between,
)
from src.chess.pieces import Piece
from src.chess.square import Square
from src.core.shared_types import Color, PieceType

# Only these pieces attack along a line, so only their checks can be blocked
SLIDING_PIECES = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP)


class KingTracker(Protocol):
    def of(self, color: Color) -> Square: ...


class SimulatedGame(Protocol):
    """Just the parts of the game needed to play moves on a copy"""

    board: Board
    next_to_move: Color
    king_position: KingTracker
    can_en_passant: bool
    previous_move: str

    def apply_move(self, move: Move, evaluate_outcome: bool = True) -> str: ...


def is_king_attacked_after(game: SimulatedGame, move: Move) -> list[AttackingPiece]:
    """
    Play the move on a copy of the game (without any validation) and return all pieces
    that attack the mover's king in the resulting position. An empty list means the move is safe.
    """
    mover = game.next_to_move
    lookahead = deepcopy(game)
    lookahead.apply_move(move, evaluate_outcome=False)
    return attackers_of(mover, lookahead.king_position.of(mover), lookahead.board)


def is_checkmate(game: SimulatedGame, allow_interposition: bool = True) -> bool:
    """
    Is the side to move checkmated?

    1. Not in check: no mate.
    2. The king can step onto a safe, empty neighbouring square: no mate.
       Taking the checking piece with the king is covered by step 4.
    3. Double check: only a king move could help, so it is mate.
    4. The single attacker can be captured safely: no mate.
    5. A sliding attacker's check can be blocked safely: no mate.
    6. Otherwise: mate.

    With `allow_interposition=False` step 5 is skipped.
    """
    defender = game.next_to_move
    king_square = game.king_position.of(defender)
    checking_pieces = attackers_of(defender, king_square, game.board)
    if not checking_pieces:
        return False

    if _king_can_escape(game, king_square):
        return False

    if len(checking_pieces) > 1:
        return True

    attacker = checking_pieces[0]
    if _attacker_can_be_captured(game, attacker):
        return False

    if (
        allow_interposition
        and attacker.piece_type in SLIDING_PIECES
        and _check_can_be_blocked(game, attacker, king_square)
    ):
        return False

    return True


def _king_can_escape(game: SimulatedGame, king_square: Square) -> bool:
    for d_row, d_col in KING_DELTAS:
        escape_square = king_square.offset(d_row, d_col)
        if not escape_square.is_within_bounds():
            continue

        if not game.board.is_empty(escape_square):
            continue

        if not is_king_attacked_after(game, Move(king_square, escape_square)):
            return True
    return False


def _attacker_can_be_captured(game: SimulatedGame, attacker: AttackingPiece) -> bool:
    """Swap the colors: whoever 'attacks' the checking piece may be able to take it."""
    attacker_color = game.next_to_move.opponent
    capturing_pieces = attackers_of(attacker_color, attacker.square, game.board)
    for capturing_piece in capturing_pieces:
        move = _rescue_move(game, capturing_piece.square, attacker.square)
        if not is_king_attacked_after(game, move):
            return True

    # a pawn that just advanced two squares could also be taken en passant
    if attacker.piece_type == PieceType.PAWN:
        for move in _en_passant_captures_of(game, attacker.square):
            if not is_king_attacked_after(game, move):
                return True
    return False


def _check_can_be_blocked(
    game: SimulatedGame, attacker: AttackingPiece, king_square: Square
) -> bool:
    attacker_color = game.next_to_move.opponent
    for blocking_square in squares_between(attacker.square, king_square):
        # pawns capture diagonally but cannot move there onto an empty square, the king cannot block itself
        blockers = [
            piece.square
            for piece in attackers_of(attacker_color, blocking_square, game.board)
            if piece.piece_type not in (PieceType.PAWN, PieceType.KING)
        ]
        blockers += _pawn_pushes_onto(game, blocking_square)

        for from_square in blockers:
            move = _rescue_move(game, from_square, blocking_square)
            if not is_king_attacked_after(game, move):
                return True
    return False


def _pawn_pushes_onto(game: SimulatedGame, target: Square) -> list[Square]:
    """Squares of the defender's pawns that can push (by one or two squares) onto the empty target."""
    defender = game.next_to_move
    pawn = Piece(PieceType.PAWN, defender)
    forward = PAWN_FORWARD[defender]
    pushing_pawns: list[Square] = []

    one_back = target.offset(-forward, 0)
    if not one_back.is_within_bounds():
        return pushing_pawns
    if game.board.piece(one_back) == pawn:
        pushing_pawns.append(one_back)
    elif game.board.is_empty(one_back):
        two_back = target.offset(-2 * forward, 0)
        if two_back.row == PAWN_HOME_ROW[defender] and game.board.piece(two_back) == pawn:
            pushing_pawns.append(two_back)
    return pushing_pawns


def _en_passant_captures_of(game: SimulatedGame, pawn_square: Square) -> list[Move]:
    if not game.can_en_passant:
        return []

    defender = game.next_to_move
    forward = PAWN_FORWARD[defender]
    captures: list[Move] = []
    for side in (-1, 1):
        capturing_square = pawn_square.offset(0, side)
        if not capturing_square.is_within_bounds():
            continue
        if game.board.piece(capturing_square) == Piece(PieceType.PAWN, defender):
            captures.append(Move(capturing_square, pawn_square.offset(forward, 0)))
    return captures


def _rescue_move(game: SimulatedGame, from_square: Square, to_square: Square) -> Move:
    """A pawn reaching the last rank while rescuing its king promotes to a queen."""
    moving_piece = game.board.piece(from_square)
    promotes = (
        moving_piece is not None
        and moving_piece.type == PieceType.PAWN
        and to_square.row == PROMOTION_ROW[moving_piece.color]
    )
    return Move(from_square, to_square, PieceType.QUEEN if promotes else None)
