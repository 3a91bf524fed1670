from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class StatusType(str, Enum):
    BURN = "burn"
    POISON = "poison"
    BLEED = "bleed"
    FREEZE = "freeze"
    STUN = "stun"
    SLOW = "slow"
    DEFENSE_BOOST = "defense_boost"


class StatusEffect(BaseModel):
    """A timed modifier on one side of a battle.

    DoT effects use ``damage``; slow and defense boost use ``value``;
    defense boost also remembers the defense it replaced.
    """

    model_config = ConfigDict(from_attributes=True)

    duration: int
    damage: int = 0
    value: float = 0.0
    original_defense: Optional[int] = None
    source: Optional[str] = None
