"""Loot and reward math — pure calculations over an opponent's loot table."""
from __future__ import annotations

import math

from relic_raider.mechanics import rng
from relic_raider.models.item import Item, Rarity
from relic_raider.models.opponent import OpponentDefinition, Zone
from relic_raider.models.reward import LootEntry

# Guaranteed (min, max) drops per item tier, keyed by the opponent's rarity.
BASE_LOOT_TIERS: dict[Rarity, dict[Rarity, tuple[int, int]]] = {
    Rarity.UNCOMMON: {
        Rarity.COMMON: (3, 6),
        Rarity.UNCOMMON: (2, 3),
    },
    Rarity.RARE: {
        Rarity.COMMON: (4, 7),
        Rarity.UNCOMMON: (3, 4),
        Rarity.RARE: (2, 3),
    },
    Rarity.LEGENDARY: {
        Rarity.COMMON: (5, 8),
        Rarity.UNCOMMON: (3, 5),
        Rarity.RARE: (3, 4),
        Rarity.LEGENDARY: (2, 3),
    },
    Rarity.MYTHIC: {
        Rarity.COMMON: (6, 10),
        Rarity.UNCOMMON: (4, 6),
        Rarity.RARE: (3, 5),
        Rarity.LEGENDARY: (3, 4),
        Rarity.MYTHIC: (2, 3),
    },
}

# Independent chances at an extra higher-tier item.
BONUS_DROP_CHANCES: dict[Rarity, dict[Rarity, float]] = {
    Rarity.UNCOMMON: {Rarity.RARE: 0.25, Rarity.LEGENDARY: 0.10, Rarity.MYTHIC: 0.02},
    Rarity.RARE: {Rarity.LEGENDARY: 0.30, Rarity.MYTHIC: 0.15},
    Rarity.LEGENDARY: {Rarity.MYTHIC: 0.35},
    Rarity.MYTHIC: {Rarity.LEGENDARY: 0.50},
}

COIN_MULTIPLIERS: dict[Rarity, int] = {
    Rarity.UNCOMMON: 3,
    Rarity.RARE: 5,
    Rarity.LEGENDARY: 10,
    Rarity.MYTHIC: 20,
}

BASE_XP: dict[Rarity, int] = {
    Rarity.UNCOMMON: 250,
    Rarity.RARE: 500,
    Rarity.LEGENDARY: 1000,
    Rarity.MYTHIC: 2000,
}

SPARKLE_QUANTITY_MULTIPLIER = 1.5
SPARKLE_CHANCE_BONUS = 0.3
BOSS_QUANTITY_MULTIPLIER = 2.0
BOSS_CHANCE_BONUS = 0.5
BOSS_COIN_MULTIPLIER = 3
BOSS_XP_MULTIPLIER = 2
FRAGMENT_CHANCE = 0.25
DEFEAT_PENALTY_RATE = 0.25
DEFEAT_PENALTY_CAP = 100


def _add_item(loot: list[LootEntry], item: Item) -> None:
    for entry in loot:
        if entry.item.id == item.id:
            entry.quantity += 1
            return
    loot.append(LootEntry(item=item, quantity=1))


def generate_loot(
    opponent: OpponentDefinition,
    is_sparkling: bool = False,
    is_boss: bool | None = None,
    extra_chance: float = 0.0,
) -> list[LootEntry]:
    """Roll the loot dropped by a defeated opponent.

    Guaranteed drops for every tier in the opponent's table, then independent
    bonus-tier rolls, then the boss fragment roll. If nothing dropped at all,
    one common item is awarded.
    """
    boss = opponent.is_boss if is_boss is None else is_boss
    sparkle_mult = SPARKLE_QUANTITY_MULTIPLIER if is_sparkling else 1.0
    sparkle_bonus = SPARKLE_CHANCE_BONUS if is_sparkling else 0.0
    boss_mult = BOSS_QUANTITY_MULTIPLIER if boss else 1.0
    boss_bonus = BOSS_CHANCE_BONUS if boss else 0.0

    loot: list[LootEntry] = []
    tiers = BASE_LOOT_TIERS.get(opponent.rarity, BASE_LOOT_TIERS[Rarity.UNCOMMON])
    for tier, (low, high) in tiers.items():
        items = opponent.items_of(tier)
        if not items:
            continue
        min_count = math.floor(low * sparkle_mult * boss_mult)
        max_count = math.floor(high * sparkle_mult * boss_mult)
        for _ in range(rng.randint(min_count, max_count)):
            _add_item(loot, rng.pick(items))

    for tier, chance in BONUS_DROP_CHANCES.get(opponent.rarity, {}).items():
        adjusted = (chance + sparkle_bonus + boss_bonus + extra_chance) * sparkle_mult
        if rng.chance(adjusted):
            items = opponent.items_of(tier)
            if items:
                _add_item(loot, rng.pick(items))

    if opponent.rarity == Rarity.MYTHIC and boss:
        fragments = [i for i in opponent.items_of(Rarity.LEGENDARY) if "Fragment" in i.name]
        if fragments and rng.chance(FRAGMENT_CHANCE + sparkle_bonus * 0.5):
            _add_item(loot, rng.pick(fragments))

    if not loot:
        commons = opponent.items_of(Rarity.COMMON)
        if commons:
            _add_item(loot, rng.pick(commons))

    return loot


def calculate_coin_reward(opponent: OpponentDefinition, base_coins: int, is_boss: bool | None = None) -> int:
    boss = opponent.is_boss if is_boss is None else is_boss
    reward = math.floor(base_coins * COIN_MULTIPLIERS.get(opponent.rarity, 3))
    if boss:
        reward = math.floor(reward * BOSS_COIN_MULTIPLIER)
    return reward


def calculate_xp_reward(opponent: OpponentDefinition, zone: Zone | None, is_boss: bool | None = None) -> int:
    """XP by opponent rarity, scaled by the zone multiplier (1.0 when unknown)."""
    boss = opponent.is_boss if is_boss is None else is_boss
    multiplier = zone.xp_multiplier if zone else 1.0
    reward = math.floor(BASE_XP.get(opponent.rarity, 250) * multiplier)
    if boss:
        reward = math.floor(reward * BOSS_XP_MULTIPLIER)
    return reward


def calculate_defeat_penalty(base_coins: int) -> int:
    """Coins lost on defeat: 25% of the base, at most 100."""
    return min(DEFEAT_PENALTY_CAP, math.floor(base_coins * DEFEAT_PENALTY_RATE))
