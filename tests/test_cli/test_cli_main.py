"""Tests for src/relic_raider/cli/main.py."""
from __future__ import annotations

import pytest
from typer.testing import CliRunner

from relic_raider.cli.main import app, choose_auto_action
from relic_raider.models.skill import EquippedSkill, SkillDefinition
from relic_raider.systems.combat.system import CombatSystem

runner = CliRunner()


class TestChooseAutoAction:
    @pytest.fixture
    def actions(self):
        meteor = EquippedSkill(skill=SkillDefinition(id="meteor", name="Meteor", skill_type="ULTIMATE"))
        return CombatSystem.list_available_actions([meteor])

    def test_ultimate_skill_first(self, make_battle, actions):
        _, state = make_battle()
        state.ultimate_ready = True
        assert choose_auto_action(state, actions) == "skill:meteor"

    def test_plain_ultimate_without_skill(self, make_battle):
        _, state = make_battle()
        state.ultimate_ready = True
        assert choose_auto_action(state, CombatSystem.list_available_actions()) == "ultimate"

    def test_special_when_affordable(self, make_battle, actions):
        _, state = make_battle()
        assert choose_auto_action(state, actions) == "special"

    def test_defend_when_low(self, make_battle, actions):
        _, state = make_battle()
        state.energy = 0
        state.player_hp = 40
        assert choose_auto_action(state, actions) == "defend"

    def test_attack_otherwise(self, make_battle, actions):
        _, state = make_battle()
        state.action_cooldowns.special = 1
        assert choose_auto_action(state, actions) == "attack"


class TestListingCommands:
    def test_zones(self):
        result = runner.invoke(app, ["zones"])
        assert result.exit_code == 0
        assert "Jungle Ruins" in result.output

    def test_opponents(self):
        result = runner.invoke(app, ["opponents", "--zone", "Frozen Crypt"])
        assert result.exit_code == 0
        assert "Norse" in result.output

    def test_opponents_unknown_zone(self):
        result = runner.invoke(app, ["opponents", "--zone", "Nowhere"])
        assert result.exit_code == 1


@pytest.mark.usefixtures("seeded_rng")
class TestSimulate:
    def test_runs_to_completion(self):
        result = runner.invoke(app, ["simulate", "--seed", "7", "--level", "3"])
        assert result.exit_code == 0
        assert "Round 1" in result.output
        assert "rounds" in result.output

    def test_seed_is_reproducible(self):
        args = ["simulate", "--seed", "11", "--class", "Rogue"]
        first = runner.invoke(app, args)
        second = runner.invoke(app, args)
        assert first.output == second.output

    def test_boss_fight(self):
        result = runner.invoke(app, ["simulate", "--boss", "--seed", "3", "--class", "Mage"])
        assert result.exit_code == 0
        assert "BOSS FIGHT" in result.output

    def test_unknown_class(self):
        result = runner.invoke(app, ["simulate", "--class", "Bard"])
        assert result.exit_code == 1

    def test_unknown_zone(self):
        result = runner.invoke(app, ["simulate", "--zone", "Nowhere"])
        assert result.exit_code == 1

    def test_config_file(self, tmp_path):
        config = tmp_path / "battle.toml"
        config.write_text("[battle]\nenergy_regen = 10\n")
        result = runner.invoke(app, ["simulate", "--seed", "5", "--config", str(config)])
        assert result.exit_code == 0
