from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from relic_raider.models.item import Item, Rarity


class Zone(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    theme: str = ""
    min_level: int
    max_level: int
    xp_multiplier: float = 1.0
    boss: Optional[str] = None

    @computed_field
    @property
    def middle_level(self) -> float:
        return (self.min_level + self.max_level) / 2


class OpponentDefinition(BaseModel):
    """A beast or boss as authored in the opponent catalog."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    description: str = ""
    zone: Optional[str] = None
    rarity: Rarity = Rarity.UNCOMMON
    base_hp: int
    base_attack: int
    base_defense: int
    is_boss: bool = False
    boss_cooldown_hours: int = 0
    loot_table: list[Item] = Field(default_factory=list)

    def items_of(self, rarity: Rarity) -> list[Item]:
        return [item for item in self.loot_table if item.rarity == rarity]
