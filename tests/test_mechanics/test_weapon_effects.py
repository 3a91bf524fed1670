"""Tests for src/relic_raider/mechanics/weapon_effects.py."""
from __future__ import annotations

import pytest

from relic_raider.mechanics.combat_math import AttackResult
from relic_raider.mechanics.weapon_effects import (
    apply_weapon_effects_to_attack,
    apply_weapon_effects_to_defense,
    collect_weapon_effects,
    loot_bonus,
    parse_weapon_effects,
    stealth_bonus,
)
from relic_raider.models.item import Equipment, EquipmentType, WeaponEffect, WeaponEffectStats
from relic_raider.models.status import StatusType


def _weapon(name: str, **effects) -> WeaponEffect:
    return WeaponEffect(weapon_name=name, effects=WeaponEffectStats(**effects))


class TestParse:
    def test_json_text(self):
        stats = parse_weapon_effects('{"crit_chance": 0.1, "loot_bonus": 0.05}')
        assert stats.crit_chance == 0.1
        assert stats.loot_bonus == 0.05

    def test_mapping(self):
        assert parse_weapon_effects({"evasion": 0.2}).evasion == 0.2

    def test_unknown_keys_ignored(self):
        assert parse_weapon_effects('{"glow": true, "stun_chance": 0.1}').stun_chance == 0.1

    def test_garbage(self):
        assert parse_weapon_effects("not json") is None
        assert parse_weapon_effects(None) is None
        assert parse_weapon_effects("{}") is None


class TestCollect:
    def test_only_weapons_count(self):
        gear = [
            Equipment(id="mace", name="Mace", special_effect='{"stun_chance": 0.1}'),
            Equipment(id="charm", name="Charm", equipment_type=EquipmentType.ACCESSORY, special_effect='{"evasion": 0.5}'),
            Equipment(id="plain", name="Plain Sword"),
        ]
        effects = collect_weapon_effects(gear)
        assert [e.weapon_name for e in effects] == ["Mace"]


class TestAttackProcs:
    def test_dodged_attack_skips_procs(self, fixed_rng, make_battle):
        _, state = make_battle(weapon_effects=[_weapon("Staff", fire_damage=0.5)])
        result = apply_weapon_effects_to_attack(state, AttackResult(dodged=True))
        assert result.dodged
        assert result.damage == 0

    def test_fire_damage_always_applies(self, fixed_rng, make_battle):
        _, state = make_battle(weapon_effects=[_weapon("Staff", fire_damage=0.2)])
        result = apply_weapon_effects_to_attack(state, AttackResult(damage=30))
        assert result.damage == 36

    def test_poison_proc(self, fixed_rng, make_battle):
        fixed_rng.outcomes[0.25] = True
        _, state = make_battle(weapon_effects=[_weapon("Dagger", poison_chance=0.25, poison_damage=6)])
        apply_weapon_effects_to_attack(state, AttackResult(damage=10))
        poison = state.beast_status_effects[StatusType.POISON]
        assert (poison.duration, poison.damage) == (4, 6)

    def test_bleed_proc(self, fixed_rng, make_battle):
        fixed_rng.hit = True
        _, state = make_battle(weapon_effects=[_weapon("Saber", bleed_chance=0.2)])
        apply_weapon_effects_to_attack(state, AttackResult(damage=25))
        bleed = state.beast_status_effects[StatusType.BLEED]
        assert (bleed.duration, bleed.damage) == (3, 7)

    def test_burn_proc_uses_boosted_damage(self, fixed_rng, make_battle):
        fixed_rng.hit = True
        _, state = make_battle(weapon_effects=[_weapon("Torch", fire_damage=0.5, burn_chance=0.2)])
        result = apply_weapon_effects_to_attack(state, AttackResult(damage=20))
        burn = state.beast_status_effects[StatusType.BURN]
        assert result.damage == 30
        assert (burn.duration, burn.damage) == (3, 12)

    def test_chain_lightning_hits(self, fixed_rng, make_battle):
        fixed_rng.hit = True
        fixed_rng.roll = 3
        _, state = make_battle(weapon_effects=[_weapon("Rod", chain_lightning=0.1)])
        result = apply_weapon_effects_to_attack(state, AttackResult(damage=25))
        assert result.damage == 25 + 15 * 3
        assert "Rod chain lightning hit 3 times!" in result.messages

    def test_chain_lightning_minimum_hits(self, fixed_rng, make_battle):
        fixed_rng.hit = True
        _, state = make_battle(weapon_effects=[_weapon("Rod", chain_lightning=0.1)])
        result = apply_weapon_effects_to_attack(state, AttackResult(damage=10))
        assert result.damage == 10 + 6 * 2

    def test_stun_proc(self, fixed_rng, make_battle):
        fixed_rng.hit = True
        _, state = make_battle(weapon_effects=[_weapon("Mace", stun_chance=0.1)])
        apply_weapon_effects_to_attack(state, AttackResult(damage=10))
        assert state.beast_stunned == 2

    def test_freeze_proc_slows(self, fixed_rng, make_battle):
        fixed_rng.hit = True
        _, state = make_battle(weapon_effects=[_weapon("Bow", freeze_chance=0.1)])
        apply_weapon_effects_to_attack(state, AttackResult(damage=10))
        assert state.beast_stunned == 1
        assert StatusType.SLOW in state.beast_status_effects

    def test_crit_proc(self, fixed_rng, make_battle):
        fixed_rng.hit = True
        _, state = make_battle(weapon_effects=[_weapon("Bow", crit_chance=0.1)])
        result = apply_weapon_effects_to_attack(state, AttackResult(damage=20))
        assert result.critical
        assert result.damage == 30


class TestDefenseProcs:
    def test_block_halves(self, fixed_rng, make_battle):
        fixed_rng.hit = True
        _, state = make_battle(weapon_effects=[_weapon("Mace", block_chance=0.15)])
        assert apply_weapon_effects_to_defense(state, 21).damage == 10

    def test_evasion_negates(self, fixed_rng, make_battle):
        fixed_rng.hit = True
        _, state = make_battle(weapon_effects=[_weapon("Cloak", evasion=0.3)])
        assert apply_weapon_effects_to_defense(state, 21).damage == 0

    def test_no_procs(self, fixed_rng, make_battle):
        _, state = make_battle(weapon_effects=[_weapon("Mace", block_chance=0.15)])
        assert apply_weapon_effects_to_defense(state, 21).damage == 21


class TestBonuses:
    def test_stealth_and_loot_sum(self, make_battle):
        effects = [_weapon("A", stealth_bonus=0.1, loot_bonus=0.05), _weapon("B", stealth_bonus=0.05)]
        _, state = make_battle(weapon_effects=effects)
        assert stealth_bonus(state) == pytest.approx(0.15)
        assert loot_bonus(effects) == 0.05
