import random

import numpy as np
import pytest

from game.game_2048 import grid_to_array
from game.model import Direction
from game.session import GameSession
from utils.game_log import GameRecorder, ReplayMismatchError, load_game_log, replay_game
from utils.storage import MemoryRepository

DIRECTIONS = [Direction.WEST, Direction.SOUTH, Direction.EAST, Direction.SOUTH, Direction.NORTH] * 4


def record_game(tmp_path, seed=21):
    session = GameSession(MemoryRepository(), rng=random.Random(seed))
    recorder = GameRecorder(seed, log_dir=tmp_path)
    recorder.attach(session)
    session.start_new_game()
    for direction in DIRECTIONS:
        session.apply_move(direction)
    return session, recorder


class TestGameRecorder:
    def test_records_accepted_moves(self, tmp_path):
        session, recorder = record_game(tmp_path)
        assert recorder.game_log[0]['step'] == 0
        assert len(recorder.game_log) == session.state.move_count + 1
        assert recorder.game_log[-1]['board'] == grid_to_array(session.grid).tolist()
        assert recorder.game_log[-1]['score'] == session.state.current_score

    def test_save_and_load(self, tmp_path):
        session, recorder = record_game(tmp_path)
        path = recorder.save_log()
        data = load_game_log(path.name, log_dir=tmp_path)
        assert data['seed'] == 21
        assert data['final_score'] == session.state.current_score
        assert data['steps'] == session.state.move_count
        assert data['max_tile'] == int(np.max(grid_to_array(session.grid)))


class TestReplay:
    def test_replay_reproduces_game(self, tmp_path):
        session, recorder = record_game(tmp_path)
        data = load_game_log(recorder.save_log())

        steps = []
        replayed = replay_game(data, on_step=lambda step, _: steps.append(step))
        assert np.array_equal(grid_to_array(replayed.grid), grid_to_array(session.grid))
        assert replayed.state.current_score == session.state.current_score
        assert steps == list(range(session.state.move_count + 1))

    def test_replay_detects_divergence(self, tmp_path):
        _, recorder = record_game(tmp_path)
        data = load_game_log(recorder.save_log())
        data['log'][1]['board'][0][0] = 2048
        with pytest.raises(ReplayMismatchError) as excinfo:
            replay_game(data)
        assert excinfo.value.step == 1
