"""Action dispatcher — resolves the player's half of a round."""
from __future__ import annotations

import logging
import math
from typing import Callable

from relic_raider.config import BattleConfig
from relic_raider.mechanics import combat_math, resources, rng
from relic_raider.mechanics.passives import PassiveTrigger, apply_passive_effects
from relic_raider.mechanics.status_effects import (
    apply_beast_status,
    apply_defense_boost,
    skill_status_effect,
)
from relic_raider.mechanics.weapon_effects import apply_weapon_effects_to_attack
from relic_raider.models.action import Action, ActionError, ActionKind, ActionOutcome, ActionResult
from relic_raider.models.combat import BattleState
from relic_raider.models.skill import EffectKind, LearnedSkill, SkillType
from relic_raider.models.status import StatusType

logger = logging.getLogger(__name__)

_DEFAULTS = BattleConfig()


class ActionDispatcher:
    """Routes a parsed action to its handler.

    Handlers mutate the battle state for what the player does and return an
    ``ActionOutcome``, or an ``ActionError`` when the action was not allowed.
    Blocked actions are never raised; the turn loop logs them and the
    opponent still gets its counter-turn.
    """

    def __init__(self, config: BattleConfig = _DEFAULTS):
        self.config = config
        self._handlers: dict[ActionKind, Callable[[BattleState], ActionResult]] = {
            ActionKind.ATTACK: self.attack,
            ActionKind.DEFEND: self.defend,
            ActionKind.SPECIAL: self.special,
            ActionKind.ULTIMATE: self.ultimate,
        }

    def dispatch(self, state: BattleState, action: Action) -> ActionResult:
        if action.kind == ActionKind.SKILL:
            lookup = self.lookup_skill(state, action.skill_id or "")
            if isinstance(lookup, ActionError):
                logger.warning(f"Skill '{action.skill_id}' unavailable ({lookup.reason}), falling back to attack")
                return self.attack(state)
            return self.use_skill(state, lookup)
        return self._handlers[action.kind](state)

    # -- lookups ---------------------------------------------------------

    def lookup_skill(self, state: BattleState, skill_id: str) -> LearnedSkill | ActionError:
        learned = state.skill_effects.find(skill_id)
        if learned is None:
            return ActionError(ActionKind.SKILL, "unknown_skill")
        return learned

    # -- handlers --------------------------------------------------------

    def attack(self, state: BattleState) -> ActionResult:
        passive = apply_passive_effects(state, PassiveTrigger.ATTACK)
        roll = combat_math.calculate_attack(
            state.player_stats.attack, state.beast_stats.defense, "player", self.config,
        )
        weapon = apply_weapon_effects_to_attack(state, roll)

        if weapon.dodged:
            state.log("attack", reason="dodged")
            return ActionOutcome(ActionKind.ATTACK, messages=["The beast dodged your attack"])

        total = weapon.damage + passive.damage_bonus
        dealt = state.damage_beast(total)
        messages = passive.messages + weapon.messages
        state.log(
            "attack",
            damage=dealt,
            critical=weapon.critical,
            messages=messages,
            details={"bonus_damage": passive.damage_bonus},
        )
        logger.debug(f"Round {state.current_round}: attack for {dealt} (crit={weapon.critical})")
        return ActionOutcome(
            ActionKind.ATTACK,
            damage=dealt,
            beast_defeated=state.beast_hp <= 0,
            messages=messages,
        )

    def defend(self, state: BattleState) -> ActionResult:
        if not resources.defend_ready(state):
            return ActionError(ActionKind.DEFEND, "defend_on_cooldown")

        streak = resources.register_defend(state, self.config)
        stunned = rng.chance(combat_math.defend_stun_chance(streak, self.config))
        if stunned and state.beast_stunned <= 0:
            state.beast_stunned = self.config.defend_stun_rounds

        passive = apply_passive_effects(state, PassiveTrigger.DEFEND)
        factor = combat_math.defend_damage_factor(streak, self.config)
        messages = list(passive.messages)
        if stunned:
            messages.insert(0, f"Your guard staggered {state.beast_name}")
        state.log(
            "defend",
            healing=passive.healing,
            damage_reduction=factor,
            messages=messages,
            details={"stunned": stunned, "consecutive_defends": streak},
        )
        return ActionOutcome(
            ActionKind.DEFEND,
            healing=passive.healing,
            player_defended=True,
            damage_reduction=factor,
            messages=messages,
        )

    def special(self, state: BattleState) -> ActionResult:
        if not resources.special_ready(state):
            return ActionError(ActionKind.SPECIAL, "special_on_cooldown")
        if not resources.has_energy(state, self.config):
            return ActionError(ActionKind.SPECIAL, "not_enough_energy")

        resources.spend_energy(state, self.config)
        resources.start_special_cooldown(state, self.config)

        accuracy = 1.0 if state.beast_stunned > 0 else self.config.special_accuracy
        if not rng.chance(accuracy):
            state.log("special", reason="missed")
            return ActionOutcome(ActionKind.SPECIAL, messages=["Your special attack missed"])

        damage, multiplier = combat_math.special_damage(
            state.player_stats.attack, state.beast_stats.defense, self.config,
        )
        dealt = state.damage_beast(damage)
        state.log("special", damage=dealt, details={"multiplier": round(multiplier, 1)})
        return ActionOutcome(ActionKind.SPECIAL, damage=dealt, beast_defeated=state.beast_hp <= 0)

    def ultimate(self, state: BattleState) -> ActionResult:
        if not state.ultimate_ready:
            return ActionError(ActionKind.ULTIMATE, "ultimate_not_ready")

        resources.consume_ultimate(state)
        damage, multiplier = combat_math.ultimate_damage(
            state.player_stats.attack, state.beast_stats.defense, self.config,
        )
        dealt = state.damage_beast(damage)
        state.log("ultimate", damage=dealt, details={"multiplier": round(multiplier, 1)})
        return ActionOutcome(ActionKind.ULTIMATE, damage=dealt, beast_defeated=state.beast_hp <= 0)

    def use_skill(self, state: BattleState, learned: LearnedSkill) -> ActionResult:
        skill = learned.skill
        if not resources.skill_ready(state, skill.id):
            return ActionError(ActionKind.SKILL, "skill_on_cooldown", skill.name)
        if skill.skill_type == SkillType.ACTIVE and not resources.has_energy(state, self.config):
            return ActionError(ActionKind.SKILL, "not_enough_energy", skill.name)
        if skill.skill_type == SkillType.ULTIMATE and not state.ultimate_ready:
            return ActionError(ActionKind.SKILL, "ultimate_not_ready", skill.name)

        if skill.skill_type == SkillType.ACTIVE:
            resources.spend_energy(state, self.config)
        elif skill.skill_type == SkillType.ULTIMATE:
            resources.consume_ultimate(state)

        magnitude = learned.magnitude
        outcome = ActionOutcome(ActionKind.SKILL)
        details: dict = {"skill_type": skill.skill_type.value, "effect": magnitude}

        if skill.effect_kind == EffectKind.HEAL:
            amount = math.floor(state.player_max_hp * (magnitude / 100))
            outcome.healing = state.heal_player(amount)
        elif skill.effect_kind == EffectKind.STATUS_EFFECT and skill.status_type is not None:
            self._apply_skill_status(state, skill.status_type, magnitude, skill.name)
            details["status_type"] = skill.status_type.value
            outcome.messages.append(f"{skill.name} applied {skill.status_type.value}")
        else:
            damage = combat_math.skill_damage(
                state.player_stats.attack, state.beast_stats.defense, magnitude,
            )
            outcome.damage = state.damage_beast(damage)
            outcome.beast_defeated = state.beast_hp <= 0

        resources.start_skill_cooldown(state, skill.id, skill.cooldown, self.config)
        state.log(
            "skill",
            skill_name=skill.name,
            damage=outcome.damage,
            healing=outcome.healing,
            messages=list(outcome.messages),
            details=details,
        )
        logger.debug(f"Round {state.current_round}: {skill.name} (magnitude {magnitude})")
        return outcome

    def _apply_skill_status(self, state: BattleState, status: StatusType, magnitude: float, source: str) -> None:
        if status == StatusType.DEFENSE_BOOST:
            apply_defense_boost(state, magnitude, source=source)
            return
        apply_beast_status(state, status, skill_status_effect(status, magnitude, source))
