import argparse
import sys
import time
from collections import Counter

from loguru import logger

from ludo_rules import Game, Simulator, config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play random Ludo games to exercise the rules")
    parser.add_argument("--games", type=int, default=10, help="Number of games to play")
    parser.add_argument(
        "--seed",
        type=int,
        default=config.SEED if config.SEED is not None else 42,
        help="Base seed; game i uses seed + i",
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=config.MAX_TURNS,
        help="Turn cap per game",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    logger.remove()
    logger.add(sys.stderr, level=config.LOG_LEVEL)

    wins: Counter = Counter()
    violations = 0
    start_time = time.time()

    for i in range(args.games):
        game = Game(seed=args.seed + i)
        sim = Simulator.for_game(game, seed=args.seed + i)
        while not game.is_over and sim.turns < args.max_turns:
            sim.play_turn()
            contested = game.board.contested_squares()
            if contested:
                violations += 1
                logger.error(f"Game {i}: squares {contested} held by two colors")
        winner = game.winner
        wins[winner.label if winner is not None else "none"] += 1
        logger.info(
            f"Game {i}: winner={winner.label if winner else None} "
            f"turns={sim.turns} moves={len(sim.history)}"
        )

    print("\n--- SIMULATION COMPLETE ---")
    for label, count in sorted(wins.items()):
        print(f"{label}: {count}")
    print(f"Invariant violations: {violations}")
    print(f"Simulation Time: {time.time() - start_time:.2f} seconds")


if __name__ == "__main__":
    main()
