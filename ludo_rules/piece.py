from __future__ import annotations

from dataclasses import dataclass, field

from .types import Color, Position, TokenRef


@dataclass(slots=True)
class Piece:
    """Lightweight token model. Holds state only.

    Rule logic (legal destinations, captures, finishing) is handled by the
    engine; path arithmetic lives on the Board.
    """

    color: Color
    slot: int  # 0..3 per player
    position: Position = field(default_factory=Position.base)

    @property
    def ref(self) -> TokenRef:
        return TokenRef(self.color, self.slot)

    def move_to(self, new_position: Position) -> None:
        self.position = new_position

    def send_home(self) -> None:
        self.position = Position.base()

    def is_finished(self) -> bool:
        return self.position.is_finished

    def to_dict(self) -> dict:
        return {
            "id": str(self.ref),
            "color": self.color.label,
            "slot": self.slot,
            "position": self.position.to_dict(),
        }

    def __str__(self) -> str:
        return f"Piece({self.ref} at {self.position})"
