"""Player stat aggregation — class base + level scaling + gear + passive bonuses."""
from __future__ import annotations

import math
from typing import Iterable

from relic_raider.models.combat import CombatantStats
from relic_raider.models.character import PlayerClass
from relic_raider.models.item import Equipment
from relic_raider.models.skill import EffectKind, LearnedSkill


def base_stats(player_class: PlayerClass, level: int) -> tuple[float, float, float]:
    """Class base stats grown by ``level`` times the per-level gains (unfloored)."""
    return (
        player_class.base_hp + level * player_class.hp_per_level,
        player_class.base_attack + level * player_class.attack_per_level,
        player_class.base_defense + level * player_class.defense_per_level,
    )


def compute_combatant_stats(
    player_class: PlayerClass,
    level: int,
    equipment: Iterable[Equipment] = (),
    learned_skills: Iterable[LearnedSkill] = (),
) -> CombatantStats:
    hp, attack, defense = base_stats(player_class, level)
    bonus = {"hp": 0, "attack": 0, "defense": 0}

    for gear in equipment:
        bonus["hp"] += gear.hp_bonus
        bonus["attack"] += gear.attack_bonus
        bonus["defense"] += gear.defense_bonus

    base = {"hp": hp, "attack": attack, "defense": defense}
    for learned in learned_skills:
        skill = learned.skill
        if skill.effect_kind != EffectKind.STAT_BONUS or skill.stat not in base:
            continue
        bonus[skill.stat] += math.floor(base[skill.stat] * learned.magnitude)

    return CombatantStats(
        hp=math.floor(hp + bonus["hp"]),
        attack=math.floor(attack + bonus["attack"]),
        defense=math.floor(defense + bonus["defense"]),
    )
