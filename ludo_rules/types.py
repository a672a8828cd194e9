from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional

from .config import config


class Color(IntEnum):
    """Player colors; the value order is the fixed turn order."""

    RED = 0
    BLUE = 1
    GREEN = 2
    YELLOW = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    def next(self) -> "Color":
        return Color((int(self) + 1) % len(Color))

    @classmethod
    def parse(cls, value: "Color | int | str") -> "Color":
        """Accept a Color, its int value or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown color: {value!r}") from None
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise ValueError(f"Unknown color: {value!r}") from None


class Zone(Enum):
    BASE = "base"  # not yet in play
    TRACK = "track"  # shared 52-square ring
    HOME = "home"  # color-private home lane


@dataclass(frozen=True, slots=True)
class Position:
    """Where a token is. Finished is Home(HOME_FINISH)."""

    zone: Zone
    index: int = -1

    def __post_init__(self) -> None:
        if self.zone is Zone.BASE:
            if self.index != -1:
                raise ValueError("Base positions carry no index")
        elif self.zone is Zone.TRACK:
            if not 0 <= self.index < config.TRACK_LENGTH:
                raise ValueError(f"Track index out of range: {self.index}")
        elif not 0 <= self.index <= config.HOME_FINISH:
            raise ValueError(f"Home index out of range: {self.index}")

    @classmethod
    def base(cls) -> "Position":
        return cls(Zone.BASE)

    @classmethod
    def track(cls, index: int) -> "Position":
        return cls(Zone.TRACK, index)

    @classmethod
    def home(cls, index: int) -> "Position":
        return cls(Zone.HOME, index)

    @classmethod
    def finished(cls) -> "Position":
        return cls(Zone.HOME, config.HOME_FINISH)

    @property
    def is_base(self) -> bool:
        return self.zone is Zone.BASE

    @property
    def is_track(self) -> bool:
        return self.zone is Zone.TRACK

    @property
    def is_home(self) -> bool:
        return self.zone is Zone.HOME

    @property
    def is_finished(self) -> bool:
        return self.zone is Zone.HOME and self.index == config.HOME_FINISH

    def to_dict(self) -> dict:
        return {"zone": self.zone.value, "index": self.index}

    def __str__(self) -> str:
        if self.is_base:
            return "Base"
        if self.is_finished:
            return "Finished"
        return f"{self.zone.name.capitalize()}({self.index})"


@dataclass(frozen=True, slots=True)
class TokenRef:
    color: Color
    slot: int

    def __str__(self) -> str:
        return f"{self.color.label}-{self.slot}"


@dataclass(slots=True)
class Move:
    color: Color
    slot: int
    dice: int
    destination: Position


@dataclass(slots=True)
class MoveResult:
    """Outcome of an applied move, for the presentation layer.

    ``steps`` is the ordered sequence of positions the token passes through,
    ending on ``new_position``; only the final position is authoritative.
    """

    color: Color
    slot: int
    dice: int
    old_position: Position
    new_position: Position
    steps: List[Position] = field(default_factory=list)
    captured: List[TokenRef] = field(default_factory=list)
    extra_turn: bool = False
    next_color: Optional[Color] = None
    winner: Optional[Color] = None

    @property
    def exited_base(self) -> bool:
        return self.old_position.is_base and not self.new_position.is_base

    @property
    def finished(self) -> bool:
        return self.new_position.is_finished

    def to_dict(self) -> dict:
        return {
            "color": self.color.label,
            "slot": self.slot,
            "dice": self.dice,
            "old_position": self.old_position.to_dict(),
            "new_position": self.new_position.to_dict(),
            "steps": [p.to_dict() for p in self.steps],
            "captured": [str(ref) for ref in self.captured],
            "extra_turn": self.extra_turn,
            "next_color": self.next_color.label if self.next_color is not None else None,
            "winner": self.winner.label if self.winner is not None else None,
        }
