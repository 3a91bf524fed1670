"""Tests for src/relic_raider/mechanics/skills.py."""
from __future__ import annotations

import pytest

from relic_raider.mechanics.skills import classify_skill_entry, infer_effect_kind, infer_stat_bonus
from relic_raider.models.skill import EffectKind
from relic_raider.models.status import StatusType


class TestInferEffectKind:
    @pytest.mark.parametrize("name, description, expected", [
        ("Divine Heal", "", (EffectKind.HEAL, None)),
        ("Sunfire Blessing", "", (EffectKind.HEAL, None)),
        ("Beacon of Light", "Bathe yourself in light.", (EffectKind.STATUS_EFFECT, StatusType.DEFENSE_BOOST)),
        ("Mana Ward", "A shimmering barrier.", (EffectKind.STATUS_EFFECT, StatusType.DEFENSE_BOOST)),
        ("Flame Lance", "Set the target ablaze so it will burn.", (EffectKind.STATUS_EFFECT, StatusType.BURN)),
        ("Envenom", "Coat your blade and poison the target.", (EffectKind.STATUS_EFFECT, StatusType.POISON)),
        ("Frost Trap", "Trap the target and freeze it in place.", (EffectKind.STATUS_EFFECT, StatusType.FREEZE)),
        ("Hammer of Justice", "A blow that will stun the target.", (EffectKind.STATUS_EFFECT, StatusType.STUN)),
        ("Meteor", "Pull a falling star from the sky.", (EffectKind.DAMAGE, None)),
    ])
    def test_classification(self, name, description, expected):
        assert infer_effect_kind(name, description) == expected

    def test_status_looking_without_effect_is_damage(self):
        assert infer_effect_kind("Shield Bash", "Strike with your shield.") == (EffectKind.DAMAGE, None)

    def test_heal_wins_over_status(self):
        assert infer_effect_kind("Healing Ward", "") == (EffectKind.HEAL, None)


class TestInferStatBonus:
    @pytest.mark.parametrize("name, stat", [
        ("Lethal Power", "attack"),
        ("Guard Training", "defense"),
        ("Holy Vitality", "hp"),
        ("Smite", None),
    ])
    def test_stat(self, name, stat):
        assert infer_stat_bonus(name) == stat


class TestClassifyEntry:
    def test_explicit_kind_untouched(self):
        entry = {"id": "consecrate", "name": "Consecrate", "effect_kind": "damage"}
        assert classify_skill_entry(entry) is entry

    def test_active_entry(self):
        entry = {"id": "flame_lance", "name": "Flame Lance", "description": "It will burn.", "skill_type": "ACTIVE"}
        classified = classify_skill_entry(entry)
        assert classified["effect_kind"] == "status_effect"
        assert classified["status_type"] == "burn"
        assert "effect_kind" not in entry

    def test_passive_stat_bonus(self):
        classified = classify_skill_entry({"id": "hv", "name": "Holy Vitality", "skill_type": "PASSIVE"})
        assert classified["effect_kind"] == "stat_bonus"
        assert classified["stat"] == "hp"

    def test_named_passive_left_alone(self):
        classified = classify_skill_entry({"id": "bulwark", "name": "Bulwark", "skill_type": "PASSIVE"})
        assert "effect_kind" not in classified

    def test_non_combat_passive_not_a_stat_bonus(self):
        classified = classify_skill_entry(
            {"id": "trail", "name": "Trail Power", "skill_type": "PASSIVE", "category": "EXPLORATION"}
        )
        assert "stat" not in classified
