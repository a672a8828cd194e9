import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


@dataclass(slots=True)
class Config:
    # --- Board ---
    TRACK_LENGTH: int = 52
    HOME_COLUMN_SIZE: int = 6
    PIECES_PER_PLAYER: int = 4
    NUM_PLAYERS: int = 4

    # --- Dice ---
    DICE_MIN: int = 1
    DICE_MAX: int = 6
    EXIT_ROLL: int = 6  # needed to leave base
    BONUS_ROLL: int = 6  # keeps the turn

    # Absolute track indices, in turn order: Red, Blue, Green, Yellow
    START_SQUARES: list[int] = field(default_factory=lambda: [0, 13, 26, 39])
    # Last shared square before turning into the home lane
    HOME_ENTRY: list[int] = field(default_factory=lambda: [50, 11, 24, 37])
    # Start squares plus the four star squares
    SAFE_SQUARES: list[int] = field(
        default_factory=lambda: [0, 8, 13, 21, 26, 34, 39, 47]
    )

    # --- Runtime ---
    SEED: int | None = field(default_factory=lambda: _optional_int("LUDO_SEED"))
    LOG_LEVEL: str = field(
        default_factory=lambda: os.getenv("LUDO_LOG_LEVEL", "INFO").upper()
    )
    MAX_TURNS: int = field(default_factory=lambda: int(os.getenv("MAX_TURNS", 1000)))

    # Derived (populated in __post_init__ due to slots)
    QUARTER: int = 0
    HOME_FINISH: int = 0

    def __post_init__(self) -> None:
        self.QUARTER = self.TRACK_LENGTH // self.NUM_PLAYERS
        self.HOME_FINISH = self.HOME_COLUMN_SIZE - 1

        if self.NUM_PLAYERS != 4:
            raise ValueError("NUM_PLAYERS must be 4")
        if self.TRACK_LENGTH % self.NUM_PLAYERS:
            raise ValueError("TRACK_LENGTH must split evenly between players")
        for name in ("START_SQUARES", "HOME_ENTRY"):
            squares = getattr(self, name)
            if len(squares) != self.NUM_PLAYERS:
                raise ValueError(f"{name} needs one square per player")
            for i, sq in enumerate(squares):
                if not 0 <= sq < self.TRACK_LENGTH:
                    raise ValueError(f"{name}[{i}]={sq} is off the track")
                expected = (squares[0] + i * self.QUARTER) % self.TRACK_LENGTH
                if sq != expected:
                    raise ValueError(
                        f"{name} must be {self.QUARTER} squares apart, got {squares}"
                    )

        safe = set(self.SAFE_SQUARES)
        if len(safe) != 2 * self.NUM_PLAYERS:
            raise ValueError("SAFE_SQUARES must hold 8 distinct squares")
        if not set(self.START_SQUARES) <= safe:
            raise ValueError("every start square must be safe")
        rotated = {(sq + self.QUARTER) % self.TRACK_LENGTH for sq in safe}
        if rotated != safe:
            raise ValueError("SAFE_SQUARES must be symmetric under a quarter turn")
        if self.DICE_MIN > self.DICE_MAX:
            raise ValueError("DICE_MIN must not exceed DICE_MAX")


config = Config()
