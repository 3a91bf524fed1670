"""Combat system — the public face of the battle engine."""
from __future__ import annotations

import logging
from typing import Iterable

from relic_raider.config import BattleConfig
from relic_raider.engine.action_dispatcher import ActionDispatcher
from relic_raider.engine.turn_loop import BattleStateError, TurnLoop
from relic_raider.mechanics import loot as loot_math
from relic_raider.mechanics.weapon_effects import loot_bonus
from relic_raider.models.action import Action, ActionDescriptor
from relic_raider.models.character import PlayerProfile
from relic_raider.models.combat import BattleState, BeastStats, CombatantStats
from relic_raider.models.item import WeaponEffect
from relic_raider.models.opponent import OpponentDefinition, Zone
from relic_raider.models.reward import BossNotification, RewardResult
from relic_raider.models.skill import BattleSkillEffects, EquippedSkill, SkillType
from relic_raider.systems.base import OpponentCatalog, SkillEffectSource, StatAggregator, WeaponEffectSource

logger = logging.getLogger(__name__)

MAX_ACTIVE_SLOT = 4

BASIC_ACTIONS = [
    ActionDescriptor(id="attack", name="Attack", description="Basic attack"),
    ActionDescriptor(id="defend", name="Defend", description="Reduce damage + chance to stun (cooldown increases)"),
    ActionDescriptor(id="special", name="Special", description="3-5x damage (30 energy, 2 round cooldown)"),
    ActionDescriptor(id="ultimate", name="Ultimate", description="Devastating attack (requires 100% ultimate charge)"),
]


class CombatSystem:
    def __init__(
        self,
        config: BattleConfig | None = None,
        catalog: OpponentCatalog | None = None,
        stats: StatAggregator | None = None,
        skills: SkillEffectSource | None = None,
        weapons: WeaponEffectSource | None = None,
    ):
        self.config = config or BattleConfig()
        self.catalog = catalog
        self.stats = stats
        self.skills = skills
        self.weapons = weapons
        self.turn_loop = TurnLoop(ActionDispatcher(self.config), self.config)

    # -- battle lifecycle ------------------------------------------------

    def initialize_battle(
        self,
        player_stats: CombatantStats,
        opponent: OpponentDefinition,
        skill_effects: BattleSkillEffects | None = None,
        weapon_effects: list[WeaponEffect] | None = None,
        beast_stats: BeastStats | None = None,
        player_level: int = 1,
    ) -> BattleState:
        return self.turn_loop.initialize_battle(
            player_stats,
            opponent,
            skill_effects=skill_effects,
            weapon_effects=weapon_effects,
            beast_stats=beast_stats,
            player_level=player_level,
            zone=self._zone_for(opponent),
        )

    def start_battle(self, profile: PlayerProfile, opponent: OpponentDefinition, beast_stats: BeastStats | None = None) -> BattleState:
        """Snapshot the player's collaborators once and open a battle."""
        if self.stats is None:
            raise BattleStateError("start_battle needs a stat aggregator")
        player_stats = self.stats.compute_combatant_stats(profile)
        skill_effects = self.skills.get_battle_skill_effects(profile) if self.skills else None
        weapon_effects = self.weapons.get_weapon_effects(profile) if self.weapons else None
        return self.initialize_battle(
            player_stats,
            opponent,
            skill_effects=skill_effects,
            weapon_effects=weapon_effects,
            beast_stats=beast_stats,
            player_level=profile.level,
        )

    def submit_action(self, state: BattleState, action: Action | str) -> BattleState:
        return self.turn_loop.submit_action(state, action)

    @staticmethod
    def list_available_actions(equipped_skills: Iterable[EquippedSkill] = ()) -> list[ActionDescriptor]:
        """Basic actions plus equipped actives (slots 1-4) and the slot-1 ultimate."""
        actions = list(BASIC_ACTIONS)
        equipped = sorted(equipped_skills, key=lambda e: e.slot)
        for entry in equipped:
            skill = entry.skill
            if skill.skill_type != SkillType.ACTIVE or not 1 <= entry.slot <= MAX_ACTIVE_SLOT:
                continue
            actions.append(_skill_descriptor(entry))
        ultimate = next(
            (e for e in equipped if e.skill.skill_type == SkillType.ULTIMATE and e.slot == 1), None,
        )
        if ultimate is not None:
            actions.append(_skill_descriptor(ultimate))
        return actions

    # -- rewards ---------------------------------------------------------

    def resolve_rewards(
        self,
        state: BattleState,
        opponent: OpponentDefinition,
        base_coins: int,
        zone: Zone | None = None,
        player_id: str | None = None,
    ) -> RewardResult:
        """Loot, coins and XP for a finished battle, or the coin penalty for a loss."""
        if not state.is_complete:
            raise BattleStateError(f"Battle {state.id} is still in progress")

        notification = None
        if state.is_boss:
            notification = BossNotification(
                boss_name=opponent.name,
                zone=state.zone,
                boss_won=state.beast_won,
                cooldown_hours=opponent.boss_cooldown_hours,
                player_id=player_id,
            )

        if not state.player_won:
            penalty = loot_math.calculate_defeat_penalty(base_coins)
            return RewardResult(
                victory=False,
                coin_penalty=penalty,
                message=f"{opponent.name} defeated you. You lost {penalty} coins.",
                notification=notification,
            )

        zone = zone or self._zone_for(opponent)
        drops = loot_math.generate_loot(
            opponent,
            is_sparkling=state.beast_stats.is_sparkling,
            is_boss=state.is_boss,
            extra_chance=loot_bonus(state.weapon_effects),
        )
        coins = loot_math.calculate_coin_reward(opponent, base_coins, is_boss=state.is_boss)
        xp = loot_math.calculate_xp_reward(opponent, zone, is_boss=state.is_boss)
        logger.info(f"Rewards vs {opponent.name}: {coins} coins, {xp} xp, {len(drops)} item stacks")
        return RewardResult(
            victory=True,
            loot=drops,
            coins=coins,
            xp=xp,
            message=f"You defeated {opponent.name}!",
            notification=notification,
        )

    def _zone_for(self, opponent: OpponentDefinition) -> Zone | None:
        if self.catalog is None:
            return None
        return self.catalog.get_zone(opponent.zone)


def _skill_descriptor(entry: EquippedSkill) -> ActionDescriptor:
    skill = entry.skill
    details = {"level": entry.level, "effect": entry.magnitude, "cooldown": skill.cooldown}
    if skill.status_type is not None:
        details["status_type"] = skill.status_type.value
    return ActionDescriptor(
        id=f"skill:{skill.id}",
        name=skill.name,
        description=f"{skill.description} (Level {entry.level}, {entry.magnitude:g} effect)",
        skill_id=skill.id,
        slot=entry.slot,
        skill_type=skill.skill_type.value,
        details=details,
    )
