"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.core.shared_types import Color, GameResult


@dataclass
class MoveOutcome:
    """What the domain layer reports back after an accepted move."""

    move_notation: str
    player: Color
    next_to_move: Color
    turn_number: int
    is_check: bool
    en_passant: bool
    result: Optional[GameResult] = None


@dataclass
class GameRecord:
    game_id: UUID
    admin_color: Color
    created_at: datetime
    result: Optional[GameResult] = None


@dataclass
class MoveRecord:
    game_id: UUID
    turn: int
    move_notation: str
    player: Color
    created_at: datetime


@dataclass
class ActiveGame:
    """An unfinished game + the color of whoever moved last (None if no move was made yet)"""

    game_id: UUID
    admin_color: Color
    created_at: datetime
    last_moved: Optional[Color] = None
