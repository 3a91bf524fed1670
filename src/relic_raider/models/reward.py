from __future__ import annotations

from dataclasses import dataclass, field

from relic_raider.models.item import Item


@dataclass
class LootEntry:
    item: Item
    quantity: int = 1


@dataclass
class BossNotification:
    """Boss outcome payload handed back to the caller for broadcasting."""

    boss_name: str
    zone: str | None
    boss_won: bool
    cooldown_hours: int = 0
    player_id: str | None = None


@dataclass
class RewardResult:
    victory: bool
    loot: list[LootEntry] = field(default_factory=list)
    coins: int = 0
    xp: int = 0
    coin_penalty: int = 0
    message: str = ""
    notification: BossNotification | None = None
