from __future__ import annotations

from dataclasses import dataclass, field

from .config import config
from .piece import Piece
from .types import Color, Position


@dataclass(slots=True)
class Player:
    color: Color
    pieces: list[Piece] = field(init=False)

    def __post_init__(self) -> None:
        self.color = Color.parse(self.color)
        self.pieces = [
            Piece(color=self.color, slot=i) for i in range(config.PIECES_PER_PLAYER)
        ]

    def positions(self) -> list[Position]:
        return [p.position for p in self.pieces]

    def finished_count(self) -> int:
        return sum(1 for p in self.pieces if p.is_finished())

    def has_won(self) -> bool:
        return self.finished_count() == len(self.pieces)

    def pieces_at(self, position: Position) -> list[Piece]:
        return [p for p in self.pieces if p.position == position]

    def occupies(self, position: Position) -> bool:
        """True if one of our pieces sits on ``position``. Base never counts."""
        if position.is_base:
            return False
        return any(p.position == position for p in self.pieces)

    def to_dict(self) -> dict:
        return {
            "color": self.color.label,
            "pieces": [p.to_dict() for p in self.pieces],
            "finished": self.finished_count(),
            "has_won": self.has_won(),
        }
