"""Battle turn loop — one player action plus the opponent's counter-turn per call."""
from __future__ import annotations

import logging
import math

from relic_raider.config import BattleConfig
from relic_raider.engine.action_dispatcher import ActionDispatcher
from relic_raider.mechanics import combat_math, resources, rng
from relic_raider.mechanics.passives import PassiveTrigger, apply_passive_effects
from relic_raider.mechanics.scaling import calculate_beast_stats
from relic_raider.mechanics.status_effects import slow_multiplier, tick_beast_effects, tick_player_effects
from relic_raider.mechanics.weapon_effects import apply_weapon_effects_to_defense, stealth_bonus
from relic_raider.models.action import Action, ActionError, ActionOutcome, ActionResult
from relic_raider.models.combat import BattleState, BeastStats, CombatantStats
from relic_raider.models.item import WeaponEffect
from relic_raider.models.opponent import OpponentDefinition, Zone
from relic_raider.models.skill import BattleSkillEffects

logger = logging.getLogger(__name__)

_DEFAULTS = BattleConfig()


class BattleStateError(RuntimeError):
    """A battle state was used in a way its lifecycle does not allow."""


class BattleCompleteError(BattleStateError):
    """An action was submitted to a battle that has already ended."""


class TurnLoop:
    def __init__(self, dispatcher: ActionDispatcher | None = None, config: BattleConfig = _DEFAULTS):
        self.config = config
        self.dispatcher = dispatcher or ActionDispatcher(config)

    def initialize_battle(
        self,
        player_stats: CombatantStats,
        opponent: OpponentDefinition,
        skill_effects: BattleSkillEffects | None = None,
        weapon_effects: list[WeaponEffect] | None = None,
        beast_stats: BeastStats | None = None,
        player_level: int = 1,
        zone: Zone | None = None,
    ) -> BattleState:
        """Create a fresh battle at round 1 with full HP and resources.

        ``beast_stats`` may be supplied when the opponent was already rolled
        (e.g. shown to the player before they chose to fight); otherwise the
        opponent is scaled to ``player_level`` here.
        """
        if beast_stats is None:
            beast_stats = calculate_beast_stats(opponent, player_level, zone, self.config)

        state = BattleState(
            beast_name=opponent.name,
            zone=opponent.zone or (zone.name if zone else None),
            is_boss=opponent.is_boss,
            player_hp=player_stats.hp,
            player_max_hp=player_stats.hp,
            beast_hp=beast_stats.hp,
            beast_max_hp=beast_stats.hp,
            player_stats=player_stats.model_copy(),
            beast_stats=beast_stats,
            energy=self.config.max_energy,
            skill_effects=skill_effects or BattleSkillEffects(),
            weapon_effects=list(weapon_effects or []),
        )
        logger.info(
            f"Battle {state.id[:8]} started vs {opponent.name} "
            f"(hp {beast_stats.hp}, sparkling={beast_stats.is_sparkling})"
        )
        return state

    def submit_action(self, state: BattleState, action: Action | str) -> BattleState:
        """Resolve one player action and the opponent's answer, in place."""
        if state.is_complete:
            raise BattleCompleteError(f"Battle {state.id} is already complete")
        if isinstance(action, str):
            action = Action.parse(action)

        if not action.keeps_defend_streak:
            resources.reset_defend_streak(state)
        resources.tick_cooldowns(state)
        resources.regenerate(state, self.config)

        expired = tick_player_effects(state)
        if expired.messages:
            state.log("status_expired", messages=expired.messages)

        dot = tick_beast_effects(state)
        if dot.messages:
            state.log("status_tick", damage=dot.total_damage, messages=dot.messages)
        if state.beast_hp <= 0:
            self._finish(state, player_won=True)
            return state

        start = apply_passive_effects(state, PassiveTrigger.TURN_START)
        if start.messages:
            state.log("passive", healing=start.healing, messages=start.messages)

        outcome = self.dispatcher.dispatch(state, action)
        if isinstance(outcome, ActionError):
            state.log("blocked", reason=outcome.reason, skill_name=outcome.skill_name, blocked=True)
            logger.debug(f"Round {state.current_round}: {action.action_id} blocked ({outcome.reason})")

        if outcome.beast_defeated or state.beast_hp <= 0:
            self._finish(state, player_won=True)
            return state

        self.resolve_beast_turn(state, outcome)

        if state.player_hp <= 0:
            self._finish(state, player_won=False)
            return state

        state.current_round += 1
        return state

    def resolve_beast_turn(self, state: BattleState, outcome: ActionResult | None = None) -> None:
        """The opponent's counter-turn, after the player's action."""
        if state.beast_stunned > 0:
            state.beast_stunned -= 1
            state.log("beast_stunned", actor="beast", details={"stun_remaining": state.beast_stunned})
            return

        state.beast_rage = combat_math.beast_rage(state.current_round, self.config)
        attack = combat_math.enraged_attack(state.beast_stats.attack, state.beast_rage)
        attack = math.floor(attack * slow_multiplier(state))

        stealth = stealth_bonus(state)
        if stealth and rng.chance(stealth):
            state.log("beast_attack", actor="beast", reason="stealth_miss", messages=["The beast lost track of you"])
            return

        roll = combat_math.calculate_attack(attack, state.player_stats.defense, "beast", self.config)
        if roll.dodged:
            state.log("beast_attack", actor="beast", reason="dodged")
            return

        damage = roll.damage
        defended = isinstance(outcome, ActionOutcome) and outcome.player_defended
        if defended and outcome.damage_reduction is not None:
            damage = math.floor(damage * outcome.damage_reduction)

        weapon = apply_weapon_effects_to_defense(state, damage)
        damage = weapon.damage

        passive = apply_passive_effects(state, PassiveTrigger.DAMAGE_TAKEN)
        if passive.damage_reduction > 0:
            damage = math.floor(damage * (1 - passive.damage_reduction))

        dealt = state.damage_player(damage)
        state.log(
            "beast_attack",
            actor="beast",
            damage=dealt,
            critical=roll.critical,
            messages=weapon.messages + passive.messages,
            details={"defended": defended, "rage": state.beast_rage},
        )

    def _finish(self, state: BattleState, player_won: bool) -> None:
        state.is_complete = True
        state.player_won = player_won
        state.beast_won = not player_won
        winner = "player" if player_won else state.beast_name
        logger.info(f"Battle {state.id[:8]} over after {state.current_round} rounds, winner: {winner}")
