"""Battle resources — energy, ultimate charge, cooldowns and the defend streak."""
from __future__ import annotations

from relic_raider.config import BattleConfig
from relic_raider.models.combat import BattleState

_DEFAULTS = BattleConfig()


# ---------------------------------------------------------------------------
# Start-of-action bookkeeping
# ---------------------------------------------------------------------------

def tick_cooldowns(state: BattleState) -> None:
    """Decrement the special, defend and every skill cooldown by 1 (floor 0)."""
    cd = state.action_cooldowns
    cd.special = max(0, cd.special - 1)
    cd.defend = max(0, cd.defend - 1)
    for skill_id, remaining in state.skill_cooldowns.items():
        state.skill_cooldowns[skill_id] = max(0, remaining - 1)


def regenerate(state: BattleState, config: BattleConfig = _DEFAULTS) -> None:
    """Regenerate energy and build ultimate charge for one action."""
    state.energy = min(config.max_energy, state.energy + config.energy_regen)
    state.ultimate_progress = min(config.max_ultimate, state.ultimate_progress + config.ultimate_gain)
    if state.ultimate_progress >= config.max_ultimate:
        state.ultimate_ready = True


def reset_defend_streak(state: BattleState) -> None:
    state.consecutive_defends = 0


# ---------------------------------------------------------------------------
# Energy
# ---------------------------------------------------------------------------

def has_energy(state: BattleState, config: BattleConfig = _DEFAULTS) -> bool:
    return state.energy >= config.action_energy_cost


def spend_energy(state: BattleState, config: BattleConfig = _DEFAULTS) -> None:
    state.energy = max(0, state.energy - config.action_energy_cost)


# ---------------------------------------------------------------------------
# Ultimate charge
# ---------------------------------------------------------------------------

def consume_ultimate(state: BattleState) -> None:
    state.ultimate_progress = 0
    state.ultimate_ready = False


# ---------------------------------------------------------------------------
# Cooldowns
# ---------------------------------------------------------------------------

def special_ready(state: BattleState) -> bool:
    return state.action_cooldowns.special == 0


def start_special_cooldown(state: BattleState, config: BattleConfig = _DEFAULTS) -> None:
    state.action_cooldowns.special = config.special_cooldown


def defend_ready(state: BattleState) -> bool:
    return state.action_cooldowns.defend == 0


def register_defend(state: BattleState, config: BattleConfig = _DEFAULTS) -> int:
    """Count a successful defend; the defend cooldown grows with the streak (max 3).

    Returns the new streak length.
    """
    state.consecutive_defends += 1
    state.action_cooldowns.defend = min(config.max_defend_cooldown, state.consecutive_defends)
    return state.consecutive_defends


def skill_ready(state: BattleState, skill_id: str) -> bool:
    return state.skill_cooldowns.get(skill_id, 0) == 0


def start_skill_cooldown(state: BattleState, skill_id: str, cooldown: int | None, config: BattleConfig = _DEFAULTS) -> None:
    state.skill_cooldowns[skill_id] = cooldown or config.default_skill_cooldown
