"""Opponent stat scaling — rolled once when a beast is encountered."""
from __future__ import annotations

import math

from relic_raider.config import BattleConfig
from relic_raider.mechanics import rng
from relic_raider.models.combat import BeastStats
from relic_raider.models.opponent import OpponentDefinition, Zone

_DEFAULTS = BattleConfig()


def sparkle_eligible(player_level: int, zone: Zone | None) -> bool:
    """Sparkling beasts only appear for players above the zone's middle level."""
    if zone is None:
        return False
    return player_level > zone.middle_level


def calculate_beast_stats(
    opponent: OpponentDefinition,
    player_level: int,
    zone: Zone | None = None,
    config: BattleConfig = _DEFAULTS,
) -> BeastStats:
    """Scale an opponent's base stats to the player.

    ``multiplier = (1 + level * 0.1) * U(0.2, 2.0) + sparkle``, where sparkle is
    0.5 with 50% chance for players above the zone's middle level. The same
    multiplier is applied to hp, attack and defense.
    """
    level_multiplier = 1 + player_level * 0.1
    rng_modifier = rng.uniform(config.beast_min_multiplier, config.beast_max_multiplier)

    sparkle_modifier = 0.0
    is_sparkling = False
    if sparkle_eligible(player_level, zone) and rng.chance(config.sparkle_chance):
        sparkle_modifier = config.sparkle_bonus
        is_sparkling = True

    final_multiplier = level_multiplier * rng_modifier + sparkle_modifier
    return BeastStats(
        hp=max(1, math.floor(opponent.base_hp * final_multiplier)),
        attack=math.floor(opponent.base_attack * final_multiplier),
        defense=math.floor(opponent.base_defense * final_multiplier),
        is_sparkling=is_sparkling,
        level_multiplier=final_multiplier,
        rng_modifier=rng_modifier,
        sparkle_modifier=sparkle_modifier,
    )
