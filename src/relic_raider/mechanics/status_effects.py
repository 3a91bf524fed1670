"""Status effect ledger — timed effects on either side of a battle.

Reapplying an effect of the same type overwrites the existing entry; the
magnitudes of two burns (or two poisons) never add up.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

from relic_raider.models.combat import BattleState
from relic_raider.models.status import StatusEffect, StatusType

logger = logging.getLogger(__name__)

DEFAULT_DURATION = 3
DEFAULT_SLOW_PERCENT = 20.0

STATUS_EFFECTS: dict[StatusType, dict[str, Any]] = {
    StatusType.BURN: {
        "damage_over_time": True,
        "skill_damage_factor": 2.0,
        "label": "Burning",
        "duration": DEFAULT_DURATION,
    },
    StatusType.POISON: {
        "damage_over_time": True,
        "skill_damage_factor": 1.5,
        "label": "Poison",
        "duration": DEFAULT_DURATION,
    },
    StatusType.BLEED: {
        "damage_over_time": True,
        "skill_damage_factor": 1.2,
        "label": "Bleeding",
        "duration": DEFAULT_DURATION,
    },
    StatusType.FREEZE: {
        "skips_turn": True,
        "label": "Frozen",
        "duration": 1,
    },
    StatusType.STUN: {
        "skips_turn": True,
        "label": "Stunned",
        "duration": 1,
    },
    StatusType.SLOW: {
        "weakens_attack": True,
        "label": "Slowed",
        "duration": DEFAULT_DURATION,
    },
    StatusType.DEFENSE_BOOST: {
        "targets_player": True,
        "label": "Defense boost",
        "duration": DEFAULT_DURATION,
    },
}


@dataclass
class StatusTickResult:
    total_damage: int = 0
    expired: list[StatusType] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)


def default_duration(status: StatusType) -> int:
    return STATUS_EFFECTS[status]["duration"]


def is_damage_over_time(status: StatusType) -> bool:
    return bool(STATUS_EFFECTS[status].get("damage_over_time"))


def skips_turn(status: StatusType) -> bool:
    return bool(STATUS_EFFECTS[status].get("skips_turn"))


def skill_status_effect(status: StatusType, magnitude: float, source: str | None = None) -> StatusEffect:
    """Build the ledger entry a status skill of the given magnitude applies."""
    duration = default_duration(status)
    if is_damage_over_time(status):
        damage = math.floor(magnitude * STATUS_EFFECTS[status]["skill_damage_factor"])
        return StatusEffect(duration=duration, damage=damage, source=source)
    return StatusEffect(duration=duration, value=magnitude, source=source)


def apply_beast_status(state: BattleState, status: StatusType, effect: StatusEffect) -> None:
    """Put an effect on the opponent, overwriting any effect of the same type.

    Freeze and stun also hold the opponent's counter-turns for their duration.
    """
    if STATUS_EFFECTS[status].get("targets_player"):
        raise ValueError(f"{status.value} cannot be applied to the opponent")
    state.beast_status_effects[status] = effect
    if skips_turn(status):
        state.beast_stunned = max(state.beast_stunned, effect.duration)
    logger.debug(f"Applied {status.value} to {state.beast_name}: {effect}")


def apply_defense_boost(state: BattleState, percent: float, duration: int = DEFAULT_DURATION, source: str | None = None) -> int:
    """Raise the player's defense by ``percent`` for ``duration`` rounds.

    Returns the boosted defense. A reapplied boost starts from the unboosted
    value so that expiry restores the original defense exactly.
    """
    existing = state.player_status_effects.get(StatusType.DEFENSE_BOOST)
    original = existing.original_defense if existing and existing.original_defense is not None else state.player_stats.defense
    boosted = math.floor(original * (1 + percent / 100))
    state.player_status_effects[StatusType.DEFENSE_BOOST] = StatusEffect(
        duration=duration,
        value=percent,
        original_defense=original,
        source=source,
    )
    state.player_stats = state.player_stats.model_copy(update={"defense": boosted})
    return boosted


def tick_player_effects(state: BattleState) -> StatusTickResult:
    """Advance the player's effects one round and undo expired ones."""
    result = StatusTickResult()
    for status, effect in list(state.player_status_effects.items()):
        if effect.duration <= 0:
            continue
        effect.duration -= 1
        if effect.duration > 0:
            continue
        if status == StatusType.DEFENSE_BOOST and effect.original_defense is not None:
            state.player_stats = state.player_stats.model_copy(update={"defense": effect.original_defense})
        del state.player_status_effects[status]
        result.expired.append(status)
        result.messages.append(f"{STATUS_EFFECTS[status]['label']} wore off")
    return result


def tick_beast_effects(state: BattleState) -> StatusTickResult:
    """Deal damage-over-time to the opponent and advance its effects one round."""
    result = StatusTickResult()
    for status, effect in list(state.beast_status_effects.items()):
        if effect.duration <= 0:
            continue
        if effect.damage:
            dealt = state.damage_beast(effect.damage)
            result.total_damage += dealt
            result.messages.append(f"{STATUS_EFFECTS[status]['label']} dealt {effect.damage} damage")
        effect.duration -= 1
        if effect.duration <= 0:
            del state.beast_status_effects[status]
            result.expired.append(status)
    return result


def slow_multiplier(state: BattleState) -> float:
    """Attack multiplier for a slowed opponent (1.0 when not slowed)."""
    slow = state.beast_status_effects.get(StatusType.SLOW)
    if slow is None or slow.duration <= 0:
        return 1.0
    percent = slow.value or DEFAULT_SLOW_PERCENT
    return max(0.0, 1 - percent / 100)
