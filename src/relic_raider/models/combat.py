from __future__ import annotations

import uuid
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from relic_raider.models.item import WeaponEffect
from relic_raider.models.skill import BattleSkillEffects
from relic_raider.models.status import StatusEffect, StatusType


class CombatantStats(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    hp: int
    attack: int
    defense: int


class BeastStats(CombatantStats):
    """Opponent stats plus the multiplier trace used to roll them."""

    is_sparkling: bool = False
    level_multiplier: float = 1.0
    rng_modifier: float = 1.0
    sparkle_modifier: float = 0.0


class ActionCooldowns(BaseModel):
    special: int = 0
    defend: int = 0


class BattleLogEntry(BaseModel):
    """One narrated step of a round. Never consulted for game logic."""

    round: int
    event: str
    actor: str = "player"
    damage: int = 0
    healing: int = 0
    critical: bool = False
    blocked: bool = False
    reason: Optional[str] = None
    skill_name: Optional[str] = None
    damage_reduction: Optional[float] = None
    messages: list[str] = Field(default_factory=list)
    details: dict[str, Any] = Field(default_factory=dict)
    player_hp: int = 0
    beast_hp: int = 0


class BattleState(BaseModel):
    """Mutable aggregate for a single battle, owned by the turn loop."""

    model_config = ConfigDict(from_attributes=True, validate_assignment=False)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    beast_name: str
    zone: Optional[str] = None
    is_boss: bool = False

    player_hp: int
    player_max_hp: int
    beast_hp: int
    beast_max_hp: int
    player_stats: CombatantStats
    beast_stats: BeastStats

    current_round: int = 1
    is_complete: bool = False
    player_won: bool = False
    beast_won: bool = False

    energy: int = 100
    ultimate_progress: int = 0
    ultimate_ready: bool = False
    action_cooldowns: ActionCooldowns = Field(default_factory=ActionCooldowns)
    skill_cooldowns: dict[str, int] = Field(default_factory=dict)
    consecutive_defends: int = 0
    beast_rage: float = 0.0
    beast_stunned: int = 0

    player_status_effects: dict[StatusType, StatusEffect] = Field(default_factory=dict)
    beast_status_effects: dict[StatusType, StatusEffect] = Field(default_factory=dict)
    battle_log: list[BattleLogEntry] = Field(default_factory=list)

    skill_effects: BattleSkillEffects = Field(default_factory=BattleSkillEffects)
    weapon_effects: list[WeaponEffect] = Field(default_factory=list)

    def log(self, event: str, **fields: Any) -> BattleLogEntry:
        """Append a log entry stamped with the current round and HP totals."""
        entry = BattleLogEntry(
            round=self.current_round,
            event=event,
            player_hp=max(0, self.player_hp),
            beast_hp=max(0, self.beast_hp),
            **fields,
        )
        self.battle_log.append(entry)
        return entry

    def damage_beast(self, amount: int) -> int:
        """Subtract damage from the opponent, clamped at 0. Returns damage dealt."""
        before = self.beast_hp
        self.beast_hp = max(0, self.beast_hp - max(0, amount))
        return before - self.beast_hp

    def damage_player(self, amount: int) -> int:
        before = self.player_hp
        self.player_hp = max(0, self.player_hp - max(0, amount))
        return before - self.player_hp

    def heal_player(self, amount: int) -> int:
        """Restore player HP, clamped at max. Returns HP actually restored."""
        before = self.player_hp
        self.player_hp = min(self.player_max_hp, self.player_hp + max(0, amount))
        return self.player_hp - before
