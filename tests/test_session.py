import random

import numpy as np

from game.game_2048 import grid_from_array, grid_to_array
from game.model import Direction
from game.session import GameSession, SessionStatus
from utils.storage import MemoryRepository, SavedState

NEARLY_LOCKED = [
    [2, 4, 2, 4],
    [4, 2, 4, 2],
    [2, 4, 2, 4],
    [8, 16, 8, 0]]


def count_tiles(grid):
    return sum(tile is not None for row in grid for tile in row)


def make_session(four_probability=0.1, seed=7, repository=None):
    repository = repository if repository is not None else MemoryRepository()
    return GameSession(repository, rng=random.Random(seed), four_probability=four_probability)


def row_board(*values):
    return grid_from_array([list(values), [0] * 4, [0] * 4, [0] * 4])


class FakeSource:
    def __init__(self):
        self.calls = []

    def start(self):
        self.calls.append("start")

    def stop(self):
        self.calls.append("stop")


class TestNewGame:
    def test_starts_with_two_tiles(self):
        session = make_session()
        session.start_new_game()

        assert count_tiles(session.grid) == 2
        assert len(session.grid_tile_movements) == 2
        assert all(m.is_add for m in session.grid_tile_movements)
        assert session.state.current_score == 0
        assert session.state.move_count == 0
        assert session.state.status == SessionStatus.IN_PROGRESS
        assert session.repository.save_count == 1

    def test_idle_session_rejects_moves(self):
        session = make_session()
        assert session.state.status == SessionStatus.IDLE
        assert not session.apply_move(Direction.WEST)

    def test_best_score_survives_new_game(self):
        session = make_session()
        session.start_new_game()
        session.grid = row_board(2, 2, 0, 0)
        session.apply_move(Direction.WEST)
        session.start_new_game()
        assert session.state.current_score == 0
        assert session.state.best_score == 4


class TestApplyMove:
    def test_score_excludes_spawned_tile(self):
        session = make_session(four_probability=1.0)
        session.start_new_game()
        session.grid = row_board(2, 2, 0, 0)

        assert session.apply_move(Direction.WEST)
        assert session.state.current_score == 4
        assert session.state.best_score == 4
        assert session.state.move_count == 1

        movements = session.grid_tile_movements
        spawned = movements[-1]
        assert spawned.is_add and spawned.to_grid_tile.tile.num == 4
        assert [m.to_grid_tile.tile.num for m in movements if m.is_add] == [4, 4]
        assert session.repository.saved_state.current_score == 4

    def test_rejected_move_changes_nothing(self):
        session = make_session()
        session.start_new_game()
        session.grid = row_board(2, 4, 2, 4)
        grid, movements, saves = session.grid, session.grid_tile_movements, session.repository.save_count

        assert not session.apply_move(Direction.WEST)
        assert session.grid is grid
        assert session.grid_tile_movements is movements
        assert session.state.current_score == 0
        assert session.state.move_count == 0
        assert session.repository.save_count == saves
        assert session.state.direction == "WEST"

    def test_tile_count_conservation(self):
        session = make_session()
        session.start_new_game()
        session.grid = grid_from_array([[2, 2, 4, 4], [0, 2, 0, 2], [8, 0, 0, 0], [0, 0, 0, 0]])
        before = count_tiles(session.grid)

        session.apply_move(Direction.WEST)
        merges = sum(m.is_add for m in session.grid_tile_movements) - 1
        assert merges == 3
        assert count_tiles(session.grid) == before - merges + 1

    def test_game_over_after_last_move(self):
        session = make_session(four_probability=1.0)
        session.start_new_game()
        session.grid = grid_from_array(NEARLY_LOCKED)

        assert session.apply_move(Direction.EAST)
        assert np.array_equal(grid_to_array(session.grid)[3], [4, 8, 16, 8])
        assert session.state.is_game_over
        assert session.state.status == SessionStatus.GAME_OVER
        for direction in Direction:
            assert not session.apply_move(direction)

    def test_listeners_receive_movements(self):
        session = make_session()
        received = []
        session.add_listener(lambda movements, state: received.append((len(movements), state.move_count)))
        session.start_new_game()
        session.grid = row_board(0, 0, 0, 2)
        session.apply_move(Direction.WEST)
        assert received == [(2, 0), (2, 1)]


class TestResume:
    def test_restores_saved_game(self):
        saved = SavedState(grid_from_array([[2, 4, 0, 0], [0] * 4, [0] * 4, [0, 0, 0, 8]]), 120, 300)
        session = make_session(repository=MemoryRepository(saved))

        assert session.resume()
        assert session.state.current_score == 120
        assert session.state.best_score == 300
        assert session.state.status == SessionStatus.IN_PROGRESS
        assert len(session.grid_tile_movements) == 3
        assert all(m.is_noop for m in session.grid_tile_movements)

    def test_restores_finished_game(self):
        locked = [[2, 4, 8, 16], [4, 8, 16, 2], [8, 16, 2, 4], [16, 2, 4, 8]]
        session = make_session(repository=MemoryRepository(SavedState(grid_from_array(locked), 10, 10)))
        session.resume()
        assert session.state.is_game_over
        assert session.state.status == SessionStatus.GAME_OVER

    def test_starts_new_game_without_save(self):
        session = make_session()
        assert not session.resume()
        assert count_tiles(session.grid) == 2
        assert session.repository.saved_state is not None


class TestVoiceCommands:
    def test_recognized_command_moves(self):
        session = make_session()
        session.start_new_game()
        session.grid = row_board(0, 0, 0, 2)
        assert session.apply_voice_command("please go LEFT")
        assert session.state.move_count == 1
        assert session.state.direction == "WEST"

    def test_unrecognized_command_is_ignored(self):
        session = make_session()
        session.start_new_game()
        grid = session.grid
        assert not session.apply_voice_command("hello there")
        assert session.grid is grid
        assert session.state.direction == ""

    def test_recognized_but_blocked_command(self):
        session = make_session()
        session.start_new_game()
        session.grid = row_board(2, 0, 0, 0)
        assert session.apply_voice_command("west")
        assert session.state.move_count == 0

    def test_enable_voice_drives_source(self):
        session = make_session()
        source = FakeSource()
        session.set_direction_source(source)
        session.enable_voice(True)
        session.enable_voice(False)
        assert source.calls == ["start", "stop"]
        assert not session.state.is_voice_on

    def test_debug_flag(self):
        session = make_session()
        session.set_debug(True)
        assert session.state.is_debug_on
