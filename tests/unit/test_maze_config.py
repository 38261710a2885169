"""
Unit tests for maze generation configuration and config file IO.
"""

import json

import pytest

import yaml
from pydantic import ValidationError

from mazegen.algorithms import MazeAlgorithm
from mazegen.config import (
    DEFAULT_MAX_AUTO_RETRIES,
    MazeConfig,
    load_config_file,
    merge_configs,
    save_config_file,
    time_seed,
)


class TestMazeConfig:
    """Test MazeConfig validation and defaults."""

    def test_defaults(self):
        config = MazeConfig()

        assert config.size == 21
        assert config.seed is None
        assert config.algorithm is MazeAlgorithm.PRIM
        assert config.max_auto_retries == DEFAULT_MAX_AUTO_RETRIES == 5
        assert config.loop_probability == pytest.approx(0.15)
        assert config.place_bonuses is True
        assert config.bonus_count is None

    @pytest.mark.parametrize("size", [5, 7, 21, 49, 51])
    def test_valid_sizes(self, size):
        assert MazeConfig(size=size).size == size

    @pytest.mark.parametrize("size", [3, 4, 6, 20, 52, 53])
    def test_invalid_sizes(self, size):
        with pytest.raises(ValidationError):
            MazeConfig(size=size)

    def test_even_size_message(self):
        with pytest.raises(ValidationError, match="must be odd"):
            MazeConfig(size=10)

    @pytest.mark.parametrize("seed", [-1, 2**32])
    def test_invalid_seeds(self, seed):
        with pytest.raises(ValidationError):
            MazeConfig(seed=seed)

    def test_algorithm_parsing(self):
        assert MazeConfig(algorithm="KRUSKAL").algorithm is MazeAlgorithm.KRUSKAL
        assert MazeConfig(algorithm="backtracker_loop").algorithm is MazeAlgorithm.BACKTRACKER_LOOP

        with pytest.raises(ValidationError):
            MazeConfig(algorithm="eller")

    @pytest.mark.parametrize(
        ("field", "value"),
        [("max_auto_retries", 0), ("loop_probability", 1.5), ("loop_probability", -0.1), ("bonus_count", -1)],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            MazeConfig(**{field: value})

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            MazeConfig(width=21)

    def test_validate_assignment(self):
        config = MazeConfig()

        with pytest.raises(ValidationError):
            config.size = 22

    def test_resolved_seed(self):
        assert MazeConfig(seed=9).resolved_seed() == 9
        assert MazeConfig().resolved_seed() >= 1

    def test_time_seed_nonzero(self):
        assert time_seed() >= 1

    def test_to_dict(self):
        data = MazeConfig(size=9, seed=4, algorithm="wilson").to_dict()

        assert data["size"] == 9
        assert data["seed"] == 4
        assert data["algorithm"] == "wilson"

    @pytest.mark.parametrize("suffix", [".json", ".yaml"])
    def test_save_and_load(self, tmp_path, suffix):
        path = tmp_path / f"maze{suffix}"
        config = MazeConfig(size=15, seed=123, algorithm="kruskal", place_bonuses=False)

        config.save(path)
        loaded = MazeConfig.from_file(path)

        assert loaded == config


class TestConfigFiles:
    """Test config file IO helpers."""

    def test_load_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"size": 11, "algorithm": "prim"}))

        assert load_config_file(path) == {"size": 11, "algorithm": "prim"}

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text(yaml.safe_dump({"size": 13, "seed": 5}))

        assert load_config_file(path) == {"size": 13, "seed": 5}

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config_file(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_file(tmp_path / "missing.yaml")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("size = 11")

        with pytest.raises(ValueError, match="Unsupported"):
            load_config_file(path)

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")

        with pytest.raises(ValueError, match="Error loading"):
            load_config_file(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ValueError, match="mapping"):
            load_config_file(path)

    def test_save_creates_parent(self, tmp_path):
        path = save_config_file({"size": 7}, tmp_path / "nested" / "out.json")

        assert json.loads(path.read_text()) == {"size": 7}

    def test_merge_configs(self):
        base = {"size": 11, "seed": 3, "extra": {"a": 1, "b": 2}}
        override = {"size": 15, "seed": None, "extra": {"b": 5}}

        merged = merge_configs(base, override)

        assert merged == {"size": 15, "seed": 3, "extra": {"a": 1, "b": 5}}
        assert base["size"] == 11
