"""Passive skill triggers — named passives react to what happens in a round."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from relic_raider.models.combat import BattleState

# Bulwark only kicks in below this share of max HP.
_BULWARK_HP_THRESHOLD = 30
_MAX_DAMAGE_REDUCTION = 0.9


class PassiveTrigger(str, Enum):
    ATTACK = "attack"
    DEFEND = "defend"
    TURN_START = "turn_start"
    DAMAGE_TAKEN = "damage_taken"


@dataclass
class PassiveResult:
    healing: int = 0
    damage_bonus: int = 0
    damage_reduction: float = 0.0
    messages: list[str] = field(default_factory=list)


def apply_passive_effects(state: BattleState, trigger: PassiveTrigger) -> PassiveResult:
    """Apply every learned passive that reacts to ``trigger``.

    Healing is applied to the state directly; damage bonus and reduction are
    returned for the caller to fold into its own damage math.
    """
    result = PassiveResult()
    bonuses = state.skill_effects.passive_bonuses
    if not bonuses:
        return result

    if trigger == PassiveTrigger.DEFEND:
        _heal_percent(state, bonuses, "Radiant Shield", "healed", result)
        _heal_percent(state, bonuses, "Sanctified Armor", "regenerated", result)
        _bulwark(state, bonuses, result)
    elif trigger == PassiveTrigger.ATTACK:
        _offensive(state, bonuses, result)
    elif trigger == PassiveTrigger.TURN_START:
        if bonuses.get("Daylight Aura"):
            result.messages.append("Daylight Aura boosted your stats")
    elif trigger == PassiveTrigger.DAMAGE_TAKEN:
        _bulwark(state, bonuses, result)

    result.damage_reduction = min(_MAX_DAMAGE_REDUCTION, result.damage_reduction)
    return result


def _heal_percent(state: BattleState, bonuses: dict[str, float], name: str, verb: str, result: PassiveResult) -> None:
    percent = bonuses.get(name)
    if not percent:
        return
    amount = math.floor(state.player_max_hp * (percent / 100))
    healed = state.heal_player(amount)
    result.healing += healed
    result.messages.append(f"{name} {verb} {healed} HP")


def _bulwark(state: BattleState, bonuses: dict[str, float], result: PassiveResult) -> None:
    percent = bonuses.get("Bulwark")
    if not percent or state.player_max_hp <= 0:
        return
    hp_percent = state.player_hp / state.player_max_hp * 100
    if hp_percent < _BULWARK_HP_THRESHOLD:
        reduction = percent / 100
        result.damage_reduction += reduction
        result.messages.append(f"Bulwark reduced incoming damage by {math.floor(reduction * 100)}%")


def _offensive(state: BattleState, bonuses: dict[str, float], result: PassiveResult) -> None:
    smite = bonuses.get("Smite")
    if smite and state.is_boss:
        bonus = math.floor(state.player_stats.attack * (smite / 100))
        result.damage_bonus += bonus
        result.messages.append(f"Smite added {bonus} bonus damage vs boss")
    if bonuses.get("Crusade"):
        result.messages.append("Crusade increased attack speed")
    if bonuses.get("Glory Strike"):
        result.messages.append("Glory Strike increased critical damage")
