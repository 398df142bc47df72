"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game -->
passes this information to the service layer, which can then pass it onwards to the API layer.
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.attacks import AttackingPiece, attackers_of
from src.chess.board import Board
from src.chess.castling import (
    CASTLING_COLOR,
    CASTLING_NOTATION,
    CASTLING_RULES,
    CastlingRights,
    castling_direction_for,
    castling_directions,
)
from src.chess.moves import PROMOTION_ROW, Move
from src.chess.notation import notation_from_square
from src.chess.pieces import Piece
from src.chess.simulation import is_checkmate, is_king_attacked_after
from src.chess.square import Square
from src.chess.validation import validate_piece_move
from src.core.exceptions import InvariantViolationError, OwnKingInCheckError
from src.core.models import MoveOutcome
from src.core.shared_types import Color, GameResult, PieceType


@dataclass
class KingPosition:
    """Cached king squares: finding the king is needed on every move, scanning the board for it is not."""

    white: Square
    black: Square

    @classmethod
    def from_board(cls, board: Board) -> Self:
        return cls(board.locate_king(Color.WHITE), board.locate_king(Color.BLACK))

    def of(self, color: Color) -> Square:
        return self.white if color == Color.WHITE else self.black

    def update(self, color: Color, square: Square) -> None:
        if color == Color.WHITE:
            self.white = square
        else:
            self.black = square


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    admin_color: Color
    king_position: KingPosition
    next_to_move: Color = Color.WHITE
    turn_number: int = 1
    castling_rights: CastlingRights = field(default_factory=CastlingRights)
    can_en_passant: bool = False
    previous_move: str = ""
    previous_move_was_en_passant: bool = False
    result: Optional[GameResult] = None

    @classmethod
    def new_game(cls, admin_color: Color = Color.WHITE) -> Self:
        """Standard starting position, white to move, all castling rights."""
        board = Board.starting_position()
        return cls(
            board=board,
            admin_color=admin_color,
            king_position=KingPosition.from_board(board),
        )

    @classmethod
    def from_fen(
        cls,
        placement: str,
        next_to_move: Color = Color.WHITE,
        castling_rights: str = "-",
        admin_color: Color = Color.WHITE,
    ) -> Self:
        """
        Set up an arbitrary position from the piece placement part of a FEN string
        and the castling part ('KQkq', '-', ...).
        """
        board = Board.from_fen(placement)
        return cls(
            board=board,
            admin_color=admin_color,
            king_position=KingPosition.from_board(board),
            next_to_move=next_to_move,
            castling_rights=CastlingRights.from_fen(castling_rights),
        )

    @property
    def is_concluded(self) -> bool:
        return self.result is not None

    def validate_move(self, from_notation: str, to_notation: str, promotion: str = "") -> Move:
        """
        Parse and check a move request, without changing anything.
        ---

        1. resolve the squares (InvalidField / OutOfBounds)
        2. the piece on the from-square must belong to the side to move, and be able to move like that
        3. after the move your own king must not be attacked
        """
        move = Move.from_notation(from_notation, to_notation, promotion)
        validate_piece_move(move, self)
        if is_king_attacked_after(self, move):
            raise OwnKingInCheckError()
        return move

    def validate_and_make_move(
        self, from_notation: str, to_notation: str, promotion: str = ""
    ) -> MoveOutcome:
        move = self.validate_move(from_notation, to_notation, promotion)
        return self.make_move(move)

    def make_move(self, move: Move) -> MoveOutcome:
        """Apply an already validated move and report what happened."""
        player = self.next_to_move
        turn = self.turn_number
        notation = self.apply_move(move)
        return MoveOutcome(
            move_notation=notation,
            player=player,
            next_to_move=self.next_to_move,
            turn_number=turn,
            is_check=notation.endswith("+"),
            en_passant=self.previous_move_was_en_passant,
            result=self.result,
        )

    def apply_move(self, move: Move, evaluate_outcome: bool = True) -> str:
        """
        Perform a move on the board, without checking whether it is allowed.
        ---

        1. capture (including en passant)
        2. relocate the piece, together with the side effects for the type of piece that moved
        3. hand the turn to the opponent
        4. unless evaluate_outcome is False: mark check and detect checkmate

        Returns the notation of the move, e.g. 'Nc3', 'xd5', '0-0', 'e8=Q', 'Qxf7+'
        """
        mover = self.next_to_move
        piece = self.board.piece(move.from_square)
        if piece is None:
            raise InvariantViolationError(
                f"No piece to move on {notation_from_square(move.from_square)}"
            )

        self.can_en_passant = False
        self.previous_move_was_en_passant = False

        notation = "" if self.board.is_empty(move.to_square) else "x"
        if self._is_en_passant(move, piece):
            # the captured pawn stands next to the moving pawn, not on the target square
            self.board.remove_piece(Square(move.from_square.row, move.to_square.col))
            notation = "x"
            self.previous_move_was_en_passant = True

        notation += notation_from_square(move.to_square)
        self.board.move_piece(move.from_square, move.to_square)

        if piece.type == PieceType.KING:
            notation = self._make_king_move(move, mover, notation)
        elif piece.type == PieceType.ROOK:
            notation = self._make_rook_move(move, mover, notation)
        elif piece.type == PieceType.PAWN:
            notation = self._make_pawn_move(move, mover, notation)
        else:
            notation = piece.letter + notation

        self.next_to_move = mover.opponent
        if mover == Color.BLACK:
            self.turn_number += 1

        if evaluate_outcome:
            if self.is_in_check(self.next_to_move):
                notation += "+"
            if is_checkmate(self):
                self.result = GameResult.won_by(mover)

        self.previous_move = notation
        return notation

    def attackers_of_king(self, color: Color) -> list[AttackingPiece]:
        return attackers_of(color, self.king_position.of(color), self.board)

    def is_in_check(self, color: Color) -> bool:
        return len(self.attackers_of_king(color)) > 0

    def serialize_board(self) -> list[list[str]]:
        return self.board.serialize()

    # -- PRIVATE HELPERS ---
    def _is_en_passant(self, move: Move, piece: Piece) -> bool:
        return (
            piece.type == PieceType.PAWN
            and move.col_diff != 0
            and self.board.is_empty(move.to_square)
        )

    def _make_king_move(self, move: Move, mover: Color, notation: str) -> str:
        """
        Once the king moved, castling rights in both directions get revoked.
        When castling, the rook is moved along and the notation is replaced entirely.
        """
        self.king_position.update(mover, move.to_square)
        self.castling_rights.revoke_all(mover)

        direction = castling_direction_for(move.from_square, move.to_square)
        if direction is not None and CASTLING_COLOR[direction] == mover:
            squares = CASTLING_RULES[direction]
            self.board.move_piece(squares.rook_from, squares.rook_to)
            return CASTLING_NOTATION[direction]
        return "K" + notation

    def _make_rook_move(self, move: Move, mover: Color, notation: str) -> str:
        """Once a rook leaves its starting square, castling on its side is no longer possible."""
        for direction in castling_directions(mover):
            if CASTLING_RULES[direction].rook_from == move.from_square:
                self.castling_rights.revoke(direction)
        return "R" + notation

    def _make_pawn_move(self, move: Move, mover: Color, notation: str) -> str:
        """Double pushes allow en passant on the next move, reaching the last rank promotes the pawn."""
        if abs(move.row_diff) == 2:
            self.can_en_passant = True

        if move.to_square.row == PROMOTION_ROW[mover]:
            if move.promote_to is None:
                raise InvariantViolationError(
                    f"Pawn reached {notation_from_square(move.to_square)} without a promotion piece"
                )
            promoted = Piece(move.promote_to, mover)
            self.board.place_piece(promoted, move.to_square)
            notation += "=" + promoted.letter
        return notation
