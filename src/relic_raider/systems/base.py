"""Collaborator interfaces the combat engine reads from at battle start."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from relic_raider.models.character import PlayerProfile
    from relic_raider.models.combat import CombatantStats
    from relic_raider.models.item import WeaponEffect
    from relic_raider.models.opponent import OpponentDefinition, Zone
    from relic_raider.models.skill import BattleSkillEffects


class StatAggregator(ABC):
    """Turns a stored player into the stats a battle starts from."""

    @abstractmethod
    def compute_combatant_stats(self, profile: PlayerProfile) -> CombatantStats: ...


class SkillEffectSource(ABC):
    @abstractmethod
    def get_battle_skill_effects(self, profile: PlayerProfile) -> BattleSkillEffects: ...


class WeaponEffectSource(ABC):
    @abstractmethod
    def get_weapon_effects(self, profile: PlayerProfile) -> list[WeaponEffect]: ...


class OpponentCatalog(ABC):
    """Static opponent and zone lookups."""

    @abstractmethod
    def get_opponent(self, name: str) -> OpponentDefinition: ...

    @abstractmethod
    def get_zone(self, name: str | None) -> Zone: ...
