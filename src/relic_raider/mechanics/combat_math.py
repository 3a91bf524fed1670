"""Combat math — pure functions, no I/O."""
from __future__ import annotations

import math
from dataclasses import dataclass

from relic_raider.config import BattleConfig
from relic_raider.mechanics import rng

_DEFAULTS = BattleConfig()


@dataclass
class AttackResult:
    damage: int = 0
    critical: bool = False
    dodged: bool = False


def calculate_attack(
    attack: int,
    defense: int,
    attacker: str,
    config: BattleConfig = _DEFAULTS,
) -> AttackResult:
    """Resolve one basic attack roll.

    Damage is ``max(1, attack - defense + 1d3)``. A dodge zeroes the attack and
    skips the damage roll; otherwise a critical multiplies damage by 1.5.
    ``attacker`` is ``"player"`` or ``"beast"`` and selects the crit/dodge odds.
    """
    is_player = attacker == "player"
    dodge_chance = config.player_dodge_chance if is_player else config.beast_dodge_chance
    crit_chance = config.player_crit_chance if is_player else config.beast_crit_chance

    if rng.chance(dodge_chance):
        return AttackResult(damage=0, critical=False, dodged=True)

    damage = max(1, attack - defense + rng.randint(1, 3))
    if rng.chance(crit_chance):
        return AttackResult(damage=math.floor(damage * config.crit_multiplier), critical=True)
    return AttackResult(damage=damage)


def base_damage(attack: int, defense: int) -> int:
    """Attack/defense difference used by special, ultimate and damage skills (min 1)."""
    return max(1, attack - defense)


def special_damage(attack: int, defense: int, config: BattleConfig = _DEFAULTS) -> tuple[int, float]:
    """Roll special-attack damage. Returns (damage, multiplier)."""
    multiplier = rng.uniform(config.special_min_multiplier, config.special_max_multiplier)
    bonus = rng.uniform(0, config.special_flat_bonus)
    return math.floor(base_damage(attack, defense) * multiplier + bonus), multiplier


def ultimate_damage(attack: int, defense: int, config: BattleConfig = _DEFAULTS) -> tuple[int, float]:
    """Roll ultimate damage. Returns (damage, multiplier)."""
    multiplier = rng.uniform(config.ultimate_min_multiplier, config.ultimate_max_multiplier)
    bonus = rng.uniform(0, config.ultimate_flat_bonus)
    return math.floor(base_damage(attack, defense) * multiplier + bonus), multiplier


def skill_damage(attack: int, defense: int, magnitude: float) -> int:
    """Damage of a damage-kind skill: base difference plus ``magnitude`` percent, plus up to 5."""
    diff = base_damage(attack, defense)
    bonus = math.floor(diff * (magnitude / 100))
    return math.floor(diff + bonus + rng.uniform(0, 5))


def defend_damage_factor(consecutive_defends: int, config: BattleConfig = _DEFAULTS) -> float:
    """Incoming-damage multiplier while defending: 0.7, 0.6, 0.5 ... floored at 0.3."""
    factor = config.defend_reduction_base - config.defend_reduction_step * consecutive_defends
    return round(max(config.defend_reduction_floor, factor), 4)


def defend_stun_chance(consecutive_defends: int, config: BattleConfig = _DEFAULTS) -> float:
    """Chance a defend stuns the opponent: 20%, 25%, 30%, capped at 35%."""
    chance = config.defend_stun_base + config.defend_stun_step * consecutive_defends
    return round(min(config.defend_stun_cap, chance), 4)


def beast_rage(current_round: int, config: BattleConfig = _DEFAULTS) -> float:
    """Opponent attack bonus that grows 5% per round, capped at 50%."""
    return round(min(config.rage_cap, current_round * config.rage_per_round), 4)


def enraged_attack(attack: int, rage: float) -> int:
    return math.floor(attack * (1 + rage))
