"""
Capturing rules / attacking rules
---

Reverse move generation: starting from the square that might get captured, look outward along every
direction a piece could have come from. A piece attacks the square if, seen from that square, it sits
where its own movement pattern would allow it to capture.

Used for check detection, for the castling rules (no castling through attacked squares)
and by the checkmate detection.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from src.chess.moves import DIAGONALS, KNIGHT_DELTAS, PAWN_FORWARD, STRAIGHTS, Vector
from src.chess.pieces import Piece
from src.chess.square import Square
from src.core.shared_types import Color, PieceType


class Board(Protocol):
    """Just the parts the attack rules need"""

    def piece(self, square: Square) -> Optional[Piece]: ...


@dataclass(frozen=True)
class AttackingPiece:
    square: Square
    piece_type: PieceType


def attackers_of(defender_color: Color, square: Square, board: Board) -> list[AttackingPiece]:
    """All pieces of the opponent of `defender_color` that could capture on `square` on their next move."""
    by_color = defender_color.opponent
    return (
        knight_attackers(square, by_color, board)
        + diagonal_attackers(square, by_color, board)
        + straight_attackers(square, by_color, board)
    )


def is_square_attacked(defender_color: Color, square: Square, board: Board) -> bool:
    return len(attackers_of(defender_color, square, board)) > 0


def first_piece_along(
    square: Square, direction: Vector, board: Board
) -> Optional[tuple[Square, Piece, int]]:
    """
    Raycasting algorithm
    ---
    Move along the direction until we hit a piece or the edge of the board.
    Returns the square and piece found, and how many steps it took to get there.
    """
    d_row, d_col = direction
    distance = 0
    target_square = square
    while True:
        distance += 1
        target_square = target_square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            return None

        piece_found = board.piece(target_square)
        if piece_found is not None:
            return target_square, piece_found, distance


def knight_attackers(square: Square, by_color: Color, board: Board) -> list[AttackingPiece]:
    """Knights jump, so only the 8 landing squares matter."""
    attackers: list[AttackingPiece] = []
    for d_row, d_col in KNIGHT_DELTAS:
        target_square = square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            continue

        if board.piece(target_square) == Piece(PieceType.KNIGHT, by_color):
            attackers.append(AttackingPiece(target_square, PieceType.KNIGHT))
    return attackers


def diagonal_attackers(square: Square, by_color: Color, board: Board) -> list[AttackingPiece]:
    """
    Along a diagonal the first piece found is an attacker if it is a queen or bishop (any distance),
    or a king / pawn right next to the square.

    NOTE: Pawn captures are not symmetric. A white pawn captures UP the board, so it attacks the square
    when it is standing one row DOWN the board from it (and the other way around for black).
    """
    attackers: list[AttackingPiece] = []
    for direction in DIAGONALS:
        found = first_piece_along(square, direction, board)
        if found is None:
            continue

        # same-colored pieces block the ray without counting
        target_square, piece_found, distance = found
        if piece_found.color != by_color:
            continue

        is_attacker = False
        if piece_found.type in (PieceType.QUEEN, PieceType.BISHOP):
            is_attacker = True
        elif piece_found.type == PieceType.KING:
            is_attacker = distance == 1
        elif piece_found.type == PieceType.PAWN:
            moves_toward_square = direction[0] == -PAWN_FORWARD[by_color]
            is_attacker = distance == 1 and moves_toward_square

        if is_attacker:
            attackers.append(AttackingPiece(target_square, piece_found.type))
    return attackers


def straight_attackers(square: Square, by_color: Color, board: Board) -> list[AttackingPiece]:
    """Along ranks and files: queens and rooks at any distance, the king right next to the square."""
    attackers: list[AttackingPiece] = []
    for direction in STRAIGHTS:
        found = first_piece_along(square, direction, board)
        if found is None:
            continue

        target_square, piece_found, distance = found
        if piece_found.color != by_color:
            continue

        if piece_found.type in (PieceType.QUEEN, PieceType.ROOK) or (
            piece_found.type == PieceType.KING and distance == 1
        ):
            attackers.append(AttackingPiece(target_square, piece_found.type))
    return attackers
