"""Battle tuning constants, optionally overridden from config.toml."""
from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config.toml"


class BattleConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Resources
    max_energy: int = 100
    energy_regen: int = 5
    action_energy_cost: int = 30
    max_ultimate: int = 100
    ultimate_gain: int = 10

    # Cooldowns
    special_cooldown: int = 2
    default_skill_cooldown: int = 2
    max_defend_cooldown: int = 3

    # Attack roll
    player_crit_chance: float = 0.15
    beast_crit_chance: float = 0.10
    player_dodge_chance: float = 0.05
    beast_dodge_chance: float = 0.03
    crit_multiplier: float = 1.5

    # Special / ultimate
    special_accuracy: float = 0.65
    special_min_multiplier: float = 3.0
    special_max_multiplier: float = 5.0
    special_flat_bonus: float = 5.0
    ultimate_min_multiplier: float = 5.0
    ultimate_max_multiplier: float = 8.0
    ultimate_flat_bonus: float = 10.0

    # Defend
    defend_reduction_base: float = 0.8
    defend_reduction_step: float = 0.1
    defend_reduction_floor: float = 0.3
    defend_stun_base: float = 0.15
    defend_stun_step: float = 0.05
    defend_stun_cap: float = 0.35
    defend_stun_rounds: int = 2

    # Opponent
    rage_per_round: float = 0.05
    rage_cap: float = 0.5
    beast_min_multiplier: float = 0.2
    beast_max_multiplier: float = 2.0
    sparkle_bonus: float = 0.5
    sparkle_chance: float = 0.5


def load_config(path: Path | str | None = None) -> BattleConfig:
    """Load the ``[battle]`` table from a TOML file.

    Missing files yield the default configuration; unknown keys are ignored.
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        return BattleConfig()
    with open(config_path, "rb") as f:
        data: dict[str, Any] = tomllib.load(f)
    overrides = data.get("battle", {})
    known = {k: v for k, v in overrides.items() if k in BattleConfig.model_fields}
    skipped = set(overrides) - set(known)
    if skipped:
        logger.warning(f"Ignoring unknown battle config keys: {', '.join(sorted(skipped))}")
    return BattleConfig(**known)
