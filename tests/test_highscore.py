"""Tests for the high-score stores."""

import json

import pytest

from snake_arcade.highscore import JsonFileHighScoreStore, MemoryHighScoreStore


class TestMemoryStore:
    def test_defaults_to_zero(self):
        assert MemoryHighScoreStore().get_high_score() == 0

    def test_only_higher_scores_kept(self):
        store = MemoryHighScoreStore()
        store.save_high_score(50)
        store.save_high_score(30)
        assert store.get_high_score() == 50

    def test_negative_initial_rejected(self):
        with pytest.raises(ValueError, match=">= 0"):
            MemoryHighScoreStore(-1)


class TestJsonFileStore:
    def test_missing_file_reads_zero(self, tmp_path):
        store = JsonFileHighScoreStore(tmp_path / "missing.json")
        assert store.get_high_score() == 0

    @pytest.mark.parametrize(
        "content",
        [
            "not json",
            "[1, 2]",
            '{"snakeHighScore": "abc"}',
            '{"snakeHighScore": -5}',
            '{"snakeHighScore": 1.5}',
            '{"snakeHighScore": true}',
            '{"other": 10}',
        ],
    )
    def test_unparsable_values_read_zero(self, tmp_path, content):
        path = tmp_path / "scores.json"
        path.write_text(content)
        assert JsonFileHighScoreStore(path).get_high_score() == 0

    def test_numeric_string_accepted(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text('{"snakeHighScore": "120"}')
        assert JsonFileHighScoreStore(path).get_high_score() == 120

    def test_save_creates_file(self, tmp_path):
        path = tmp_path / "nested" / "scores.json"
        store = JsonFileHighScoreStore(path)
        store.save_high_score(40)
        assert json.loads(path.read_text()) == {"snakeHighScore": 40}
        assert JsonFileHighScoreStore(path).get_high_score() == 40

    def test_lower_score_not_written(self, tmp_path):
        path = tmp_path / "scores.json"
        store = JsonFileHighScoreStore(path)
        store.save_high_score(40)
        store.save_high_score(10)
        assert store.get_high_score() == 40

    def test_other_keys_preserved(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text('{"theme": "dark", "snakeHighScore": 5}')
        JsonFileHighScoreStore(path).save_high_score(60)
        assert json.loads(path.read_text()) == {
            "theme": "dark", "snakeHighScore": 60,
        }

    def test_overwrites_corrupt_file(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text("garbage")
        store = JsonFileHighScoreStore(path)
        store.save_high_score(20)
        assert store.get_high_score() == 20

    def test_unwritable_path_does_not_raise(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a regular file")
        store = JsonFileHighScoreStore(blocker / "scores.json")
        store.save_high_score(30)
        assert store.get_high_score() == 0

    def test_clear(self, tmp_path):
        path = tmp_path / "scores.json"
        store = JsonFileHighScoreStore(path)
        store.save_high_score(20)
        store.clear()
        assert store.get_high_score() == 0

    def test_custom_key(self, tmp_path):
        path = tmp_path / "scores.json"
        JsonFileHighScoreStore(path, key="hard").save_high_score(7)
        assert JsonFileHighScoreStore(path).get_high_score() == 0
        assert JsonFileHighScoreStore(path, key="hard").get_high_score() == 7
