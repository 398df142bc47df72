"""The Game board: an 8x8 grid of (optional) pieces. Knows nothing about the rules."""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.pieces import Piece
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import InvariantViolationError
from src.core.shared_types import Color, PieceType

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

Grid = list[list[Optional[Piece]]]


@dataclass
class Board:
    grid: Grid

    @classmethod
    def empty(cls) -> Self:
        rows, cols = BOARD_DIMENSIONS
        return cls([[None] * cols for _ in range(rows)])

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_POSITION)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 0), starting with the rook on a8
        * black pawns cover the 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * the white pieces are on the 1st rank (row 7)
        """
        board = cls.empty()
        fen_by_ranks = fen_str.split("/")
        if len(fen_by_ranks) != BOARD_DIMENSIONS[0]:
            raise InvariantViolationError(
                f"Piece placement must describe {BOARD_DIMENSIONS[0]} ranks: {fen_str!r}"
            )

        # FEN string is read from the top rank (8th), which is the first row of the grid
        for row, fen_one_rank in enumerate(fen_by_ranks):
            col = 0
            for character in fen_one_rank:
                if character.isalpha():
                    # a letter directly denotes the piece that should be placed
                    board.place_piece(Piece.from_fen(character), Square(row, col))
                    col += 1
                else:
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._rank_to_fen(row) for row in range(BOARD_DIMENSIONS[0]))

    def _rank_to_fen(self, row: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for piece in self.grid[row]:
            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def piece(self, square: Square) -> Optional[Piece]:
        return self.grid[square.row][square.col]

    def is_empty(self, square: Square) -> bool:
        return self.piece(square) is None

    def place_piece(self, piece: Piece, square: Square) -> None:
        self.grid[square.row][square.col] = piece

    def remove_piece(self, square: Square) -> Optional[Piece]:
        removed = self.piece(square)
        self.grid[square.row][square.col] = None
        return removed

    def move_piece(self, from_square: Square, to_square: Square) -> Optional[Piece]:
        """Relocate a piece. Returns whatever stood on the target square (the captured piece)."""
        piece_that_moved = self.remove_piece(from_square)
        captured = self.remove_piece(to_square)
        if piece_that_moved is not None:
            self.place_piece(piece_that_moved, to_square)
        return captured

    def locate_pieces(self, piece: Piece) -> list[Square]:
        return [
            Square(row, col)
            for row, pieces_on_row in enumerate(self.grid)
            for col, occupant in enumerate(pieces_on_row)
            if occupant == piece
        ]

    def locate_king(self, color: Color) -> Square:
        """Full scan, only needed when setting up a position. Exactly one king per color must be present."""
        kings = self.locate_pieces(Piece(PieceType.KING, color))
        if len(kings) != 1:
            raise InvariantViolationError(
                f"Expected exactly one {color} king on the board, found {len(kings)}"
            )
        return kings[0]

    def serialize(self) -> list[list[str]]:
        """8x8 grid of piece codes ('wK', 'bP', ...); empty squares are empty strings."""
        return [
            [piece.to_code() if piece is not None else "" for piece in pieces_on_row]
            for pieces_on_row in self.grid
        ]
