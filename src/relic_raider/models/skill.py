from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from relic_raider.models.status import StatusType


class SkillType(str, Enum):
    ACTIVE = "ACTIVE"
    PASSIVE = "PASSIVE"
    ULTIMATE = "ULTIMATE"


class SkillCategory(str, Enum):
    COMBAT = "COMBAT"
    UTILITY = "UTILITY"
    EXPLORATION = "EXPLORATION"
    CRAFTING = "CRAFTING"


class EffectKind(str, Enum):
    HEAL = "heal"
    STATUS_EFFECT = "status_effect"
    DAMAGE = "damage"
    STAT_BONUS = "stat_bonus"


class SkillDefinition(BaseModel):
    """A skill as authored in the catalog.

    ``effect_kind`` decides what the skill does when cast; ``status_type`` is
    required for status skills and ``stat`` for passive stat bonuses.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str = ""
    skill_type: SkillType = SkillType.ACTIVE
    category: SkillCategory = SkillCategory.COMBAT
    class_name: Optional[str] = None
    effect_kind: EffectKind = EffectKind.DAMAGE
    status_type: Optional[StatusType] = None
    stat: Optional[str] = None
    base_effect: float = 0.0
    effect_per_level: float = 0.0
    cooldown: int = 2

    @model_validator(mode="after")
    def _check_variant(self) -> SkillDefinition:
        if self.effect_kind == EffectKind.STATUS_EFFECT and self.status_type is None:
            raise ValueError(f"Skill '{self.id}' is a status skill without a status_type")
        if self.effect_kind == EffectKind.STAT_BONUS and self.stat not in ("hp", "attack", "defense"):
            raise ValueError(f"Skill '{self.id}' is a stat bonus without a valid stat")
        return self

    def magnitude(self, level: int = 1) -> float:
        """Effect magnitude at the given learned level."""
        return self.base_effect + self.effect_per_level * (max(level, 1) - 1)


class LearnedSkill(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    skill: SkillDefinition
    level: int = 1

    @property
    def magnitude(self) -> float:
        return self.skill.magnitude(self.level)


class BattleSkillEffects(BaseModel):
    """Read-only snapshot of a player's learned skills, taken at battle start."""

    model_config = ConfigDict(from_attributes=True)

    passive_bonuses: dict[str, float] = Field(default_factory=dict)
    active_skills: list[LearnedSkill] = Field(default_factory=list)
    ultimate_skill: Optional[LearnedSkill] = None

    def find(self, skill_id: str) -> LearnedSkill | None:
        for learned in self.active_skills:
            if learned.skill.id == skill_id:
                return learned
        if self.ultimate_skill and self.ultimate_skill.skill.id == skill_id:
            return self.ultimate_skill
        return None


class EquippedSkill(LearnedSkill):
    """A learned skill placed in an action-bar slot."""

    slot: int = 1
