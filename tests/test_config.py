"""Tests for src/relic_raider/config.py."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from relic_raider.config import BattleConfig, load_config


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "absent.toml") == BattleConfig()

    def test_overrides(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[battle]\nenergy_regen = 10\nspecial_accuracy = 0.8\n")
        config = load_config(path)
        assert config.energy_regen == 10
        assert config.special_accuracy == 0.8
        assert config.max_energy == 100

    def test_unknown_keys_ignored(self, tmp_path, caplog):
        path = tmp_path / "config.toml"
        path.write_text("[battle]\nmana = 5\n")
        assert load_config(path) == BattleConfig()
        assert "mana" in caplog.text

    def test_bundled_config_matches_defaults(self):
        config = load_config()
        assert config.action_energy_cost == 30
        assert config.special_cooldown == 2


class TestBattleConfig:
    def test_frozen(self):
        with pytest.raises(ValidationError):
            BattleConfig().max_energy = 5
