import unittest

from ludo_rules.board import Board
from ludo_rules.errors import IllegalMoveError, InvalidStateError
from ludo_rules.game import Game
from ludo_rules.types import Color, Position, TokenRef


class TestCapturesAndWins(unittest.TestCase):
    def setUp(self):
        self.game = Game(seed=11)

    def place(self, color, slot, position):
        self.game.player(color).pieces[slot].move_to(position)

    def turn_to(self, color):
        self.game.state.current_index = int(color)

    def test_capture(self):
        self.place(Color.GREEN, 0, Position.track(5))
        self.place(Color.RED, 0, Position.track(2))
        self.game.roll_dice(3)
        res = self.game.apply_move(Color.RED, 0)
        self.assertEqual(res.new_position, Position.track(5))
        self.assertEqual(res.captured, [TokenRef(Color.GREEN, 0)])
        self.assertTrue(self.game.position_of(Color.GREEN, 0).is_base)

    def test_capture_clears_every_opponent(self):
        self.place(Color.GREEN, 0, Position.track(5))
        self.place(Color.GREEN, 1, Position.track(5))
        self.place(Color.YELLOW, 2, Position.track(5))
        self.place(Color.RED, 0, Position.track(1))
        self.game.roll_dice(4)
        res = self.game.apply_move(Color.RED, 0)
        self.assertEqual(len(res.captured), 3)
        self.assertEqual(self.game.board.pieces_at_track(5, exclude_color=Color.RED), [])
        self.assertEqual(self.game.board.contested_squares(), [])

    def test_no_capture_on_safe_square(self):
        self.place(Color.RED, 0, Position.track(5))
        self.place(Color.RED, 1, Position.track(20))
        self.place(Color.BLUE, 0, Position.track(8))
        self.game.roll_dice(3)
        res = self.game.apply_move(Color.RED, 0)
        self.assertEqual(res.new_position, Position.track(8))
        self.assertEqual(res.captured, [])
        self.assertEqual(self.game.position_of(Color.BLUE, 0), Position.track(8))

    def test_no_capture_on_any_safe_square(self):
        for sq in (0, 8, 13, 21, 26, 34, 39, 47):
            game = Game(seed=0)
            game.state.current_index = int(Color.GREEN)
            mover = game.player(Color.GREEN).pieces[0]
            victim = game.player(Color.YELLOW).pieces[0]
            start = (sq - 2) % 52
            if Board.distance_to_home_entry(Color.GREEN, start) < 2:
                continue
            mover.move_to(Position.track(start))
            victim.move_to(Position.track(sq))
            game.roll_dice(2)
            res = game.apply_move(Color.GREEN, 0)
            self.assertEqual(res.captured, [], sq)
            self.assertEqual(victim.position, Position.track(sq))

    def test_spawn_on_start_with_opponent_does_not_capture(self):
        self.turn_to(Color.BLUE)
        self.place(Color.RED, 0, Position.track(13))
        self.game.roll_dice(6)
        self.assertTrue(self.game.legal_move(Color.BLUE, 0, 6))
        res = self.game.apply_move(Color.BLUE, 0)
        self.assertTrue(res.exited_base)
        self.assertEqual(res.steps, [Position.track(13)])
        self.assertEqual(res.captured, [])
        self.assertEqual(self.game.position_of(Color.RED, 0), Position.track(13))

    def test_home_lane_is_never_captured(self):
        # the same lane index for two colors is two different squares
        self.place(Color.RED, 0, Position.home(1))
        self.place(Color.GREEN, 0, Position.home(0))
        self.turn_to(Color.GREEN)
        self.game.roll_dice(1)
        res = self.game.apply_move(Color.GREEN, 0)
        self.assertEqual(res.captured, [])
        self.assertEqual(self.game.position_of(Color.RED, 0), Position.home(1))

    def test_illegal_move_changes_nothing(self):
        self.place(Color.RED, 0, Position.track(5))
        self.place(Color.RED, 1, Position.track(8))
        self.game.roll_dice(3)
        before = self.game.snapshot()
        with self.assertRaises(IllegalMoveError) as ctx:
            self.game.apply_move(Color.RED, 0)
        self.assertEqual(ctx.exception.slot, 0)
        self.assertEqual(ctx.exception.dice, 3)
        self.assertEqual(self.game.snapshot(), before)

    def test_win(self):
        self.turn_to(Color.YELLOW)
        for slot in range(3):
            self.place(Color.YELLOW, slot, Position.finished())
        self.place(Color.YELLOW, 3, Position.home(4))
        self.game.roll_dice(1)
        res = self.game.apply_move(Color.YELLOW, 3)
        self.assertTrue(res.finished)
        self.assertIs(res.winner, Color.YELLOW)
        self.assertIs(self.game.winner, Color.YELLOW)
        self.assertTrue(self.game.player(Color.YELLOW).has_won())
        self.assertTrue(self.game.is_over)

    def test_win_from_track_into_finish(self):
        for slot in range(3):
            self.place(Color.RED, slot, Position.finished())
        self.place(Color.RED, 3, Position.track(50))
        self.game.roll_dice(6)
        res = self.game.apply_move(Color.RED, 3)
        self.assertEqual(res.steps[0], Position.home(0))
        self.assertTrue(res.finished)
        self.assertIs(self.game.winner, Color.RED)
        with self.assertRaises(InvalidStateError):
            self.game.roll_dice()

    def test_tokens_finish_one_after_another(self):
        for slot in range(4):
            self.place(Color.RED, slot, Position.home(4))
        # every move passes the turn; bring it back to red each time
        for slot in range(4):
            self.turn_to(Color.RED)
            self.game.roll_dice(1)
            self.game.apply_move(Color.RED, slot)
            self.assertEqual(self.game.player(Color.RED).finished_count(), slot + 1)
        self.assertIs(self.game.winner, Color.RED)

    def test_no_commands_after_win(self):
        for slot in range(3):
            self.place(Color.RED, slot, Position.finished())
        self.place(Color.RED, 3, Position.home(0))
        self.game.roll_dice(5)
        self.game.apply_move(Color.RED, 3)
        self.assertIs(self.game.winner, Color.RED)
        before = self.game.snapshot()
        with self.assertRaises(InvalidStateError):
            self.game.roll_dice()
        with self.assertRaises(InvalidStateError):
            self.game.apply_move(self.game.current_color, 0, 1)
        with self.assertRaises(InvalidStateError):
            self.game.pass_turn(self.game.current_color, 1)
        self.assertEqual(self.game.snapshot(), before)
        self.assertFalse(self.game.must_pass)

    def test_three_finished_is_not_a_win(self):
        for slot in range(3):
            self.place(Color.RED, slot, Position.finished())
        self.place(Color.RED, 3, Position.home(0))
        self.game.roll_dice(2)
        res = self.game.apply_move(Color.RED, 3)
        self.assertIsNone(res.winner)
        self.assertFalse(self.game.is_over)

    def test_move_result_to_dict(self):
        self.place(Color.GREEN, 0, Position.track(5))
        self.place(Color.RED, 0, Position.track(2))
        self.game.roll_dice(3)
        data = self.game.apply_move(Color.RED, 0).to_dict()
        self.assertEqual(data["captured"], ["green-0"])
        self.assertEqual(data["next_color"], "blue")
        self.assertEqual(len(data["steps"]), 3)
        self.assertIsNone(data["winner"])


if __name__ == "__main__":
    unittest.main()
