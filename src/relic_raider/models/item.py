from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Rarity(str, Enum):
    COMMON = "COMMON"
    UNCOMMON = "UNCOMMON"
    RARE = "RARE"
    LEGENDARY = "LEGENDARY"
    MYTHIC = "MYTHIC"


class EquipmentType(str, Enum):
    WEAPON = "WEAPON"
    ARMOR = "ARMOR"
    ACCESSORY = "ACCESSORY"


class Item(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str = ""
    rarity: Rarity = Rarity.COMMON
    value: int = 0


class WeaponEffectStats(BaseModel):
    """Chance/magnitude fields of a weapon's special effect descriptor."""

    model_config = ConfigDict(extra="ignore")

    crit_chance: float = 0.0
    bleed_chance: float = 0.0
    poison_chance: float = 0.0
    poison_damage: int = 5
    stun_chance: float = 0.0
    fire_damage: float = 0.0
    burn_chance: float = 0.0
    freeze_chance: float = 0.0
    chain_lightning: float = 0.0
    block_chance: float = 0.0
    evasion: float = 0.0
    stealth_bonus: float = 0.0
    loot_bonus: float = 0.0


class WeaponEffect(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    weapon_name: str
    effects: WeaponEffectStats = Field(default_factory=WeaponEffectStats)


class Equipment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str = ""
    equipment_type: EquipmentType = EquipmentType.WEAPON
    rarity: Rarity = Rarity.COMMON
    level: int = 1
    hp_bonus: int = 0
    attack_bonus: int = 0
    defense_bonus: int = 0
    special_effect: Optional[str] = None
