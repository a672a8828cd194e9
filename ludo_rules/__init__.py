"""
Ludo rules engine.
Pure game state plus the movement, capture and win rules for four players.
"""

from .board import Board
from .config import config
from .errors import IllegalMoveError, InvalidStateError, LudoError, OutOfTurnError
from .game import Game, GameState
from .piece import Piece
from .player import Player
from .simulator import Simulator
from .types import Color, Move, MoveResult, Position, TokenRef, Zone

__all__ = [
    "Board",
    "Color",
    "config",
    "Game",
    "GameState",
    "IllegalMoveError",
    "InvalidStateError",
    "LudoError",
    "Move",
    "MoveResult",
    "OutOfTurnError",
    "Piece",
    "Player",
    "Position",
    "Simulator",
    "TokenRef",
    "Zone",
]
