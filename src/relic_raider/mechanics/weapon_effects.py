"""Equipped-weapon special effects — on-hit procs, block and evasion, stealth."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable

from pydantic import ValidationError

from relic_raider.mechanics import rng
from relic_raider.mechanics.combat_math import AttackResult
from relic_raider.mechanics.status_effects import DEFAULT_SLOW_PERCENT, apply_beast_status
from relic_raider.models.combat import BattleState
from relic_raider.models.item import Equipment, EquipmentType, WeaponEffect, WeaponEffectStats
from relic_raider.models.status import StatusEffect, StatusType
from relic_raider.utils import safe_json

logger = logging.getLogger(__name__)


@dataclass
class WeaponAttackResult:
    damage: int = 0
    critical: bool = False
    dodged: bool = False
    messages: list[str] = field(default_factory=list)


@dataclass
class WeaponDefenseResult:
    damage: int = 0
    messages: list[str] = field(default_factory=list)


def parse_weapon_effects(special_effect: str | dict[str, Any] | None) -> WeaponEffectStats | None:
    """Parse a weapon's special-effect descriptor (JSON text or mapping)."""
    data = safe_json(special_effect, None)
    if not isinstance(data, dict) or not data:
        if special_effect:
            logger.warning(f"Unparseable weapon effect descriptor: {special_effect!r}")
        return None
    try:
        return WeaponEffectStats.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Invalid weapon effect descriptor {special_effect!r}: {e}")
        return None


def collect_weapon_effects(equipment: Iterable[Equipment]) -> list[WeaponEffect]:
    """Build the weapon-effect snapshot for a set of equipped gear."""
    effects: list[WeaponEffect] = []
    for gear in equipment:
        if gear.equipment_type != EquipmentType.WEAPON:
            continue
        parsed = parse_weapon_effects(gear.special_effect)
        if parsed:
            effects.append(WeaponEffect(weapon_name=gear.name, effects=parsed))
    return effects


def apply_weapon_effects_to_attack(state: BattleState, attack: AttackResult) -> WeaponAttackResult:
    """Roll every equipped weapon's on-hit effects against the opponent."""
    result = WeaponAttackResult(damage=attack.damage, critical=attack.critical, dodged=attack.dodged)
    if attack.dodged:
        return result

    for weapon in state.weapon_effects:
        fx = weapon.effects
        name = weapon.weapon_name

        if fx.crit_chance and rng.chance(fx.crit_chance):
            result.critical = True
            result.damage = math.floor(result.damage * 1.5)
            result.messages.append(f"{name} critical hit!")

        if fx.bleed_chance and rng.chance(fx.bleed_chance):
            apply_beast_status(state, StatusType.BLEED, StatusEffect(
                duration=3, damage=math.floor(result.damage * 0.3), source=name,
            ))
            result.messages.append(f"{name} caused bleeding!")

        if fx.poison_chance and rng.chance(fx.poison_chance):
            apply_beast_status(state, StatusType.POISON, StatusEffect(
                duration=4, damage=fx.poison_damage, source=name,
            ))
            result.messages.append(f"{name} poisoned the beast!")

        if fx.stun_chance and rng.chance(fx.stun_chance):
            state.beast_stunned = 2
            result.messages.append(f"{name} stunned the beast!")

        if fx.fire_damage:
            fire = math.floor(result.damage * fx.fire_damage)
            result.damage += fire
            result.messages.append(f"{name} dealt {fire} fire damage!")

        if fx.burn_chance and rng.chance(fx.burn_chance):
            apply_beast_status(state, StatusType.BURN, StatusEffect(
                duration=3, damage=math.floor(result.damage * 0.4), source=name,
            ))
            result.messages.append(f"{name} set the beast on fire!")

        if fx.freeze_chance and rng.chance(fx.freeze_chance):
            state.beast_stunned = 1
            apply_beast_status(state, StatusType.SLOW, StatusEffect(
                duration=2, value=DEFAULT_SLOW_PERCENT, source=name,
            ))
            result.messages.append(f"{name} froze the beast!")

        if fx.chain_lightning and rng.chance(fx.chain_lightning):
            hits = rng.randint(2, 4)
            result.damage += math.floor(result.damage * 0.6) * hits
            result.messages.append(f"{name} chain lightning hit {hits} times!")

    return result


def apply_weapon_effects_to_defense(state: BattleState, incoming: int) -> WeaponDefenseResult:
    """Roll block (halve) and evasion (negate) against an incoming hit."""
    result = WeaponDefenseResult(damage=incoming)
    for weapon in state.weapon_effects:
        fx = weapon.effects
        if fx.block_chance and rng.chance(fx.block_chance):
            result.damage = math.floor(result.damage * 0.5)
            result.messages.append(f"{weapon.weapon_name} blocked the attack!")
        if fx.evasion and rng.chance(fx.evasion):
            result.damage = 0
            result.messages.append(f"{weapon.weapon_name} helped you evade!")
    return result


def stealth_bonus(state: BattleState) -> float:
    """Total stealth from equipped weapons, used as the opponent's miss chance."""
    return sum(w.effects.stealth_bonus for w in state.weapon_effects)


def loot_bonus(weapon_effects: Iterable[WeaponEffect]) -> float:
    return sum(w.effects.loot_bonus for w in weapon_effects)
