from __future__ import annotations

import random
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from loguru import logger

from .board import Board
from .config import config
from .errors import IllegalMoveError, InvalidStateError, OutOfTurnError
from .piece import Piece
from .player import Player
from .types import Color, Move, MoveResult, Position


@dataclass(slots=True)
class GameState:
    """All mutable state of one game. Only ``Game`` operations change it."""

    players: List[Player] = field(
        default_factory=lambda: [Player(color=c) for c in Color]
    )
    current_index: int = 0
    dice_roll: Optional[int] = None  # None when no roll is pending
    roll_count: int = 0  # rolls taken in the current turn
    winner: Optional[Color] = None
    busy: bool = False

    @property
    def current_color(self) -> Color:
        return Color(self.current_index)

    def to_dict(self) -> dict:
        return {
            "players": [pl.to_dict() for pl in self.players],
            "current_color": self.current_color.label,
            "dice_roll": self.dice_roll,
            "roll_count": self.roll_count,
            "winner": self.winner.label if self.winner is not None else None,
        }


@dataclass(slots=True)
class Game:
    """Rules engine for one four-player game.

    Operations are synchronous and atomic: each either completes or raises
    without touching ``state``. The presentation layer reads positions, asks
    ``legal_move`` and calls ``apply_move``; the returned ``MoveResult``
    carries the step sequence to animate.
    """

    seed: Optional[int] = None
    state: GameState = field(default_factory=GameState)
    rng: random.Random = field(init=False, repr=False)
    board: Board = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.seed is None:
            self.seed = config.SEED
        self.rng = random.Random(self.seed)
        self.board = Board(players=self.state.players)

    def reset(self) -> None:
        """Discard the current game and start a new one."""
        if self.state.busy:
            raise InvalidStateError("Cannot reset while a move is in flight")
        self.state = GameState()
        self.board = Board(players=self.state.players)
        logger.debug("New game started")

    # --- Read accessors ---
    @property
    def current_color(self) -> Color:
        return self.state.current_color

    @property
    def dice_roll(self) -> Optional[int]:
        return self.state.dice_roll

    @property
    def roll_count(self) -> int:
        return self.state.roll_count

    @property
    def winner(self) -> Optional[Color]:
        return self.state.winner

    @property
    def is_over(self) -> bool:
        return self.state.winner is not None

    @property
    def busy(self) -> bool:
        return self.state.busy

    @property
    def must_pass(self) -> bool:
        """A roll is pending and the current color has nothing to move."""
        dice = self.state.dice_roll
        if dice is None or self.is_over:
            return False
        return not self.any_legal_move(self.current_color, dice)

    def player(self, color: Color | int | str) -> Player:
        return self.state.players[int(Color.parse(color))]

    def position_of(self, color: Color | int | str, slot: int) -> Position:
        return self._piece(color, slot).position

    def snapshot(self) -> dict:
        return self.state.to_dict()

    # --- Single-flight guard ---
    @contextmanager
    def hold(self) -> Iterator["Game"]:
        """Mark the engine busy; overlapping commands are rejected meanwhile."""
        if self.state.busy:
            raise InvalidStateError("Another command is already in flight")
        self.state.busy = True
        try:
            yield self
        finally:
            self.state.busy = False

    # --- Dice ---
    def roll_dice(self, value: Optional[int] = None) -> int:
        """Roll for the current color. ``value`` scripts the outcome."""
        self._ensure_accepting()
        if self.state.dice_roll is not None:
            self._reject(InvalidStateError("A roll is already pending"))
        if value is None:
            value = self.rng.randint(config.DICE_MIN, config.DICE_MAX)
        elif not config.DICE_MIN <= value <= config.DICE_MAX:
            raise ValueError(f"Dice value out of range: {value}")
        self.state.dice_roll = value
        self.state.roll_count += 1
        logger.debug(
            f"{self.current_color.label} rolled {value} (roll #{self.state.roll_count})"
        )
        return value

    # --- Rules: legality ---
    def legal_move(self, color: Color | int | str, slot: int, dice: int) -> bool:
        color = Color.parse(color)
        piece = self._piece(color, slot)
        dest = Board.destination(color, piece.position, dice)
        if dest is None:
            return False
        if dest.is_finished:
            return True  # finished tokens stack
        # only own pieces block; opponents on the destination get captured
        return not self.board.is_occupied_by(color, dest)

    def any_legal_move(self, color: Color | int | str, dice: int) -> bool:
        color = Color.parse(color)
        return any(
            self.legal_move(color, pc.slot, dice) for pc in self.player(color).pieces
        )

    def legal_moves(self, color: Color | int | str, dice: int) -> List[Move]:
        color = Color.parse(color)
        moves: List[Move] = []
        for pc in self.player(color).pieces:
            if self.legal_move(color, pc.slot, dice):
                moves.append(
                    Move(
                        color=color,
                        slot=pc.slot,
                        dice=dice,
                        destination=Board.destination(color, pc.position, dice),
                    )
                )
        return moves

    # --- Applying a move ---
    def apply_move(
        self, color: Color | int | str, slot: int, dice: Optional[int] = None
    ) -> MoveResult:
        color = Color.parse(color)
        dice = self._check_turn(color, dice)
        if not self.legal_move(color, slot, dice):
            self._reject(
                IllegalMoveError(
                    f"{color.label}-{slot} cannot move {dice} from "
                    f"{self.position_of(color, slot)}",
                    color=color,
                    slot=slot,
                    dice=dice,
                )
            )

        with self.hold():
            piece = self._piece(color, slot)
            old = piece.position
            steps = Board.path(color, old, dice)
            dest = steps[-1]
            piece.move_to(dest)

            captured = []
            if dest.is_track and not Board.is_safe(dest):
                for victim in self.board.pieces_at_track(dest.index, exclude_color=color):
                    victim.send_home()
                    captured.append(victim.ref)
                    logger.debug(f"{piece.ref} captured {victim.ref} on {dest}")

            extra = self._advance_turn(dice)

            if self.player(color).has_won():
                self.state.winner = color
                logger.info(f"{color.label} wins the game")

        logger.debug(f"{piece.ref} moved {dice}: {old} -> {dest}")
        return MoveResult(
            color=color,
            slot=slot,
            dice=dice,
            old_position=old,
            new_position=dest,
            steps=steps,
            captured=captured,
            extra_turn=extra,
            next_color=self.current_color,
            winner=self.state.winner,
        )

    def pass_turn(self, color: Color | int | str, dice: Optional[int] = None) -> bool:
        """Give up a roll that has no legal move. Returns True if the turn is kept."""
        color = Color.parse(color)
        dice = self._check_turn(color, dice)
        if self.any_legal_move(color, dice):
            self._reject(
                IllegalMoveError(
                    f"{color.label} has a legal move for {dice}; cannot pass",
                    color=color,
                    dice=dice,
                )
            )
        extra = self._advance_turn(dice)
        logger.debug(f"{color.label} passed on {dice}")
        return extra

    # --- Internals ---
    def _piece(self, color: Color | int | str, slot: int) -> Piece:
        pieces = self.player(color).pieces
        if not 0 <= slot < len(pieces):
            raise ValueError(f"No token slot {slot}")
        return pieces[slot]

    def _reject(self, err: Exception) -> None:
        logger.warning(f"Rejected: {err}")
        raise err

    def _ensure_accepting(self) -> None:
        if self.state.winner is not None:
            self._reject(
                InvalidStateError(f"Game is over; {self.state.winner.label} won")
            )
        if self.state.busy:
            self._reject(InvalidStateError("Another command is already in flight"))

    def _check_turn(self, color: Color, dice: Optional[int]) -> int:
        """Shared preconditions of apply_move/pass_turn; returns the dice to use."""
        self._ensure_accepting()
        if color != self.current_color:
            self._reject(
                OutOfTurnError(
                    f"It is {self.current_color.label}'s turn, not {color.label}'s",
                    color=color,
                    expected=self.current_color,
                )
            )
        pending = self.state.dice_roll
        if pending is None:
            self._reject(InvalidStateError("Roll the dice before moving"))
        if dice is None:
            return pending
        if dice != pending:
            self._reject(
                InvalidStateError(f"Dice {dice} does not match the pending roll {pending}")
            )
        return dice

    def _advance_turn(self, dice: int) -> bool:
        """Clear the roll; a bonus roll keeps the turn. Returns True if kept."""
        self.state.dice_roll = None
        self.state.roll_count = 0
        if dice == config.BONUS_ROLL:
            return True
        self.state.current_index = (self.state.current_index + 1) % len(self.state.players)
        return False
