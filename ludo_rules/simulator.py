from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from .config import config
from .game import Game
from .types import Color, MoveResult


@dataclass(slots=True)
class Simulator:
    """Plays whole games by picking uniformly among legal moves.

    A soak-test harness for the rules, not a playing strategy.
    """

    game: Game
    rng: random.Random = field(default_factory=random.Random)
    history: List[MoveResult] = field(default_factory=list)
    turns: int = 0

    @classmethod
    def for_game(cls, game: Game, seed: Optional[int] = None) -> "Simulator":
        """
        Create a Simulator driving ``game``.

        :param game: The Game instance to play.
        :param seed: Seed for move selection; dice use the game's own RNG.
        :return: A Simulator bound to ``game``.
        """
        return cls(game=game, rng=random.Random(seed))

    def play_turn(self) -> List[Optional[MoveResult]]:
        """Play the current color's turn, bonus rolls included.

        Returns one entry per roll: the MoveResult, or None for a pass.
        """
        game = self.game
        color = game.current_color
        outcomes: List[Optional[MoveResult]] = []
        keep_turn = True
        while keep_turn and not game.is_over:
            dice = game.roll_dice()
            moves = game.legal_moves(color, dice)
            if not moves:
                keep_turn = game.pass_turn(color)
                outcomes.append(None)
                continue
            mv = self.rng.choice(moves)
            result = game.apply_move(color, mv.slot)
            self.history.append(result)
            outcomes.append(result)
            keep_turn = result.extra_turn
        self.turns += 1
        return outcomes

    def run(self, max_turns: Optional[int] = None) -> Optional[Color]:
        """Play until someone wins or ``max_turns`` turns have passed."""
        limit = config.MAX_TURNS if max_turns is None else max_turns
        while not self.game.is_over and self.turns < limit:
            self.play_turn()
        if self.game.winner is None:
            logger.warning(f"No winner after {self.turns} turns")
        return self.game.winner
