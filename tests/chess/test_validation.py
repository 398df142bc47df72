"""Unit tests for /src/chess/validation.py"""

from typing import Optional
from unittest.mock import Mock, patch

import pytest

from src.chess.game import Game
from src.chess.moves import Move
from src.chess.validation import VALIDATION_RULES, validate_piece_move
from src.core.exceptions import (
    CaptureOwnPieceError,
    GeneralMoveError,
    InvalidCastleError,
    MoveError,
    NoPieceSelectedError,
    PieceInTheWayError,
    PromotionRequiredError,
)
from src.core.shared_types import Color, PieceType

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
CASTLING_POSITION = "r3k2r/8/8/8/8/8/8/R3K2R"


def _validate(
    placement: str,
    from_name: str,
    to_name: str,
    promotion: str = "",
    color: Color = Color.WHITE,
    castling: str = "-",
) -> None:
    game = Game.from_fen(placement, next_to_move=color, castling_rights=castling)
    validate_piece_move(Move.from_notation(from_name, to_name, promotion), game)


@pytest.mark.parametrize(
    "placement, from_name, to_name, error",
    [
        # bishop
        ("4k3/8/8/8/8/8/8/2B1K3", "c1", "f4", None),
        ("4k3/8/8/8/8/8/8/2B1K3", "c1", "c4", GeneralMoveError),
        ("4k3/8/8/8/8/8/3P4/2B1K3", "c1", "f4", PieceInTheWayError),
        ("4k3/8/8/8/8/8/3P4/2B1K3", "c1", "d2", CaptureOwnPieceError),
        # rook
        ("4k3/8/8/8/8/8/8/R3K3", "a1", "a8", None),
        ("4k3/8/8/8/8/8/8/R3K3", "a1", "b2", GeneralMoveError),
        ("4k3/8/8/8/8/8/8/R3K3", "a1", "e1", CaptureOwnPieceError),
        ("4k3/8/8/8/8/8/8/R1N1K3", "a1", "d1", PieceInTheWayError),
        # queen
        ("4k3/8/8/8/8/8/8/3QK3", "d1", "h5", None),
        ("4k3/8/8/8/8/8/8/3QK3", "d1", "d8", None),
        ("4k3/8/8/8/8/8/8/3QK3", "d1", "e3", GeneralMoveError),
        # knight: jumps over everything, but cannot take its own pieces
        (STARTING_POSITION, "b1", "c3", None),
        (STARTING_POSITION, "b1", "d2", CaptureOwnPieceError),
        (STARTING_POSITION, "b1", "b3", GeneralMoveError),
        # king
        ("4k3/8/8/8/8/8/8/4K3", "e1", "e2", None),
        ("4k3/8/8/8/8/8/8/4K3", "e1", "f2", None),
        ("4k3/8/8/8/8/8/8/4K3", "e1", "e3", GeneralMoveError),
        ("4k3/8/8/8/8/8/8/3QK3", "e1", "d1", CaptureOwnPieceError),
    ],
)
def test_piece_geometry(
    placement: str, from_name: str, to_name: str, error: Optional[type[MoveError]]
) -> None:
    if error is None:
        _validate(placement, from_name, to_name)
    else:
        with pytest.raises(error):
            _validate(placement, from_name, to_name)


@pytest.mark.parametrize(
    "placement, from_name, to_name, error",
    [
        (STARTING_POSITION, "e2", "e3", None),
        (STARTING_POSITION, "e2", "e4", None),
        (STARTING_POSITION, "e2", "e5", GeneralMoveError),
        # diagonal onto an empty square is only possible en passant
        (STARTING_POSITION, "e2", "d3", GeneralMoveError),
        ("4k3/8/8/8/8/4p3/4P3/4K3", "e2", "e3", PieceInTheWayError),
        ("4k3/8/8/8/8/4p3/4P3/4K3", "e2", "e4", PieceInTheWayError),
        ("4k3/8/8/8/4p3/8/4P3/4K3", "e2", "e4", PieceInTheWayError),
        # only from the starting rank a pawn can advance by two
        ("4k3/8/8/8/8/4P3/8/4K3", "e3", "e5", GeneralMoveError),
        # never backwards
        ("4k3/8/8/8/8/4P3/8/4K3", "e3", "e2", GeneralMoveError),
        ("4k3/8/8/8/8/3p4/4P3/4K3", "e2", "d3", None),
        ("4k3/8/8/8/8/3N4/4P3/4K3", "e2", "d3", CaptureOwnPieceError),
    ],
)
def test_white_pawn_moves(
    placement: str, from_name: str, to_name: str, error: Optional[type[MoveError]]
) -> None:
    if error is None:
        _validate(placement, from_name, to_name)
    else:
        with pytest.raises(error):
            _validate(placement, from_name, to_name)


def test_black_pawns_move_down_the_board() -> None:
    _validate(STARTING_POSITION, "d7", "d5", color=Color.BLACK)
    with pytest.raises(GeneralMoveError):
        _validate("4k3/8/8/3p4/8/8/8/4K3", "d5", "d6", color=Color.BLACK)


def test_promotion_piece_is_required() -> None:
    with pytest.raises(PromotionRequiredError):
        _validate("k7/4P3/8/8/8/8/8/4K3", "e7", "e8")

    # unknown promotion characters count as no promotion piece
    with pytest.raises(PromotionRequiredError):
        _validate("k7/4P3/8/8/8/8/8/4K3", "e7", "e8", "K")

    _validate("k7/4P3/8/8/8/8/8/4K3", "e7", "e8", "N")


@pytest.mark.parametrize(
    "placement, to_name, castling",
    [
        (CASTLING_POSITION, "g1", "KQkq"),
        (CASTLING_POSITION, "c1", "KQkq"),
        (CASTLING_POSITION, "c1", "Q"),
        # the b1 square is not on the king's path, it may be attacked (knight a3)
        ("r3k2r/8/8/8/8/n7/8/R3K2R", "c1", "KQ"),
    ],
)
def test_castling_allowed(placement: str, to_name: str, castling: str) -> None:
    _validate(placement, "e1", to_name, castling=castling)


@pytest.mark.parametrize(
    "placement, to_name, castling",
    [
        # rights revoked
        (CASTLING_POSITION, "g1", "Qkq"),
        (CASTLING_POSITION, "c1", "Kkq"),
        (CASTLING_POSITION, "c1", "-"),
        # pieces in between
        ("r3k2r/8/8/8/8/8/8/R3KB1R", "g1", "KQkq"),
        ("r3k2r/8/8/8/8/8/8/RN2K2R", "c1", "KQkq"),
        # passing through an attacked square
        ("4kr2/8/8/8/8/8/8/R3K2R", "g1", "KQ"),
        # landing on an attacked square
        ("2r1k3/8/8/8/8/8/8/R3K2R", "c1", "KQ"),
        # castling out of check
        ("4k3/8/8/8/8/8/4r3/R3K2R", "g1", "KQ"),
        ("4k3/8/8/8/8/8/4r3/R3K2R", "c1", "KQ"),
        # no rook on its starting square
        ("4k3/8/8/8/8/8/8/4K2R", "c1", "KQ"),
    ],
)
def test_castling_rejected(placement: str, to_name: str, castling: str) -> None:
    with pytest.raises(InvalidCastleError):
        _validate(placement, "e1", to_name, castling=castling)


def test_black_castling() -> None:
    _validate(CASTLING_POSITION, "e8", "g8", color=Color.BLACK, castling="kq")
    _validate(CASTLING_POSITION, "e8", "c8", color=Color.BLACK, castling="kq")
    with pytest.raises(InvalidCastleError):
        _validate(CASTLING_POSITION, "e8", "g8", color=Color.BLACK, castling="KQ")


def test_king_moving_two_squares_elsewhere_is_not_castling() -> None:
    with pytest.raises(InvalidCastleError):
        _validate("4k3/8/8/8/8/8/4K3/8", "e2", "g2", castling="KQ")


def test_empty_square_selected() -> None:
    with pytest.raises(NoPieceSelectedError):
        _validate(STARTING_POSITION, "e4", "e5")


def test_opponents_piece_selected() -> None:
    with pytest.raises(NoPieceSelectedError):
        _validate(STARTING_POSITION, "e7", "e5")


def test_dispatch_by_piece_type() -> None:
    """Strategy pattern: only the rule for the moving piece gets called"""
    mock_rules = {piece_type: Mock(return_value=None) for piece_type in PieceType}
    with patch.dict("src.chess.validation.VALIDATION_RULES", mock_rules):
        _validate(STARTING_POSITION, "g1", "f3")

    mock_rules[PieceType.KNIGHT].assert_called_once()
    for piece_type, rule in mock_rules.items():
        if piece_type != PieceType.KNIGHT:
            rule.assert_not_called()


def test_every_piece_type_has_a_rule() -> None:
    assert set(VALIDATION_RULES) == set(PieceType)
