from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .config import config
from .piece import Piece
from .player import Player
from .types import Color, Position

_SAFE = frozenset(config.SAFE_SQUARES)


@dataclass(slots=True)
class Board:
    """Owns path arithmetic and occupancy queries (no rule logic).

    ``players`` is indexed by color value, so ``players[Color.BLUE]`` is blue.
    """

    players: Sequence[Player]

    def __post_init__(self) -> None:
        for idx, pl in enumerate(self.players):
            if int(pl.color) != idx:
                raise ValueError("Board.players must be ordered by color value")

    # --- Fixed squares ---
    @staticmethod
    def start_square(color: Color) -> int:
        return config.START_SQUARES[int(color)]

    @staticmethod
    def home_entry(color: Color) -> int:
        return config.HOME_ENTRY[int(color)]

    @staticmethod
    def is_safe(position: Position) -> bool:
        """Safe from capture: the 8 safe track squares and the whole home lane."""
        if position.is_home:
            return True
        return position.is_track and position.index in _SAFE

    @staticmethod
    def distance_to_home_entry(color: Color, index: int) -> int:
        """Forward steps from track ``index`` to the color's home-entry square."""
        return (Board.home_entry(color) - index + config.TRACK_LENGTH) % config.TRACK_LENGTH

    # --- Geometry ---
    @staticmethod
    def destination(color: Color, position: Position, dice: int) -> Position | None:
        """Where a token would land, ignoring occupancy. None if it cannot move."""
        if not config.DICE_MIN <= dice <= config.DICE_MAX:
            return None
        if position.is_base:
            if dice != config.EXIT_ROLL:
                return None
            return Position.track(Board.start_square(color))
        if position.is_track:
            dist = Board.distance_to_home_entry(color, position.index)
            if dice <= dist:
                return Position.track((position.index + dice) % config.TRACK_LENGTH)
            lane = dice - dist - 1
            if lane > config.HOME_FINISH:
                return None
            return Position.home(lane)
        # home lane; Finished has nowhere left to go
        target = position.index + dice
        if target > config.HOME_FINISH:
            return None
        return Position.home(target)

    @staticmethod
    def path(color: Color, position: Position, dice: int) -> List[Position]:
        """Every square visited in order, ending on the destination.

        Empty when ``destination`` is None.
        """
        if Board.destination(color, position, dice) is None:
            return []
        if position.is_base:
            return [Position.track(Board.start_square(color))]
        if position.is_home:
            return [Position.home(position.index + k) for k in range(1, dice + 1)]
        dist = Board.distance_to_home_entry(color, position.index)
        on_track = min(dice, dist)
        steps = [
            Position.track((position.index + k) % config.TRACK_LENGTH)
            for k in range(1, on_track + 1)
        ]
        steps.extend(Position.home(k) for k in range(dice - on_track))
        return steps

    # --- Occupancy ---
    def is_occupied_by(self, color: Color, position: Position) -> bool:
        return self.players[int(color)].occupies(position)

    def pieces_at_track(
        self, index: int, *, exclude_color: Color | None = None
    ) -> list[Piece]:
        target = Position.track(index)
        out: list[Piece] = []
        for pl in self.players:
            if exclude_color is not None and pl.color == exclude_color:
                continue
            out.extend(pl.pieces_at(target))
        return out

    def occupancy_matrix(self) -> np.ndarray:
        """(players, TRACK_LENGTH) count of each color's pieces per track square."""
        grid = np.zeros((len(self.players), config.TRACK_LENGTH), dtype=np.int64)
        for pl in self.players:
            for pc in pl.pieces:
                if pc.position.is_track:
                    grid[int(pl.color), pc.position.index] += 1
        return grid

    def home_matrix(self) -> np.ndarray:
        """(players, HOME_COLUMN_SIZE) count of each color's pieces per lane square."""
        grid = np.zeros((len(self.players), config.HOME_COLUMN_SIZE), dtype=np.int64)
        for pl in self.players:
            for pc in pl.pieces:
                if pc.position.is_home:
                    grid[int(pl.color), pc.position.index] += 1
        return grid

    def contested_squares(self) -> list[int]:
        """Non-safe track squares held by more than one color.

        Capture keeps this empty in every reachable state.
        """
        colors_present = (self.occupancy_matrix() > 0).sum(axis=0)
        hits = np.flatnonzero(colors_present > 1)
        return [int(i) for i in hits if int(i) not in _SAFE]
