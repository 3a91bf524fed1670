from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from relic_raider.models.item import Equipment
from relic_raider.models.skill import EquippedSkill, LearnedSkill


class PlayerClass(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    description: str = ""
    base_hp: int
    base_attack: int
    base_defense: int
    hp_per_level: float = 0.0
    attack_per_level: float = 0.0
    defense_per_level: float = 0.0


class PlayerProfile(BaseModel):
    """Everything the stat and skill collaborators read about one player."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str = "Adventurer"
    player_class: str
    level: int = 1
    equipment: list[Equipment] = Field(default_factory=list)
    learned_skills: list[LearnedSkill] = Field(default_factory=list)
    equipped_skills: list[EquippedSkill] = Field(default_factory=list)
