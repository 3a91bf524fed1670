from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionKind(str, Enum):
    ATTACK = "attack"
    DEFEND = "defend"
    SPECIAL = "special"
    ULTIMATE = "ultimate"
    SKILL = "skill"


_SKILL_PREFIXES = ("skill:", "skill_")


@dataclass(frozen=True)
class Action:
    """A parsed player action id: ``attack``, ``defend``, ``special``,
    ``ultimate`` or ``skill:<id>``."""

    kind: ActionKind
    skill_id: str | None = None

    @classmethod
    def parse(cls, action_id: str) -> Action:
        raw = action_id.strip()
        for prefix in _SKILL_PREFIXES:
            if raw.startswith(prefix):
                skill_id = raw[len(prefix):]
                if not skill_id:
                    raise ValueError(f"Missing skill id in action: {action_id!r}")
                return cls(ActionKind.SKILL, skill_id)
        try:
            kind = ActionKind(raw.lower())
        except ValueError:
            raise ValueError(f"Unknown action: {action_id!r}") from None
        if kind == ActionKind.SKILL:
            raise ValueError(f"Missing skill id in action: {action_id!r}")
        return cls(kind)

    @property
    def action_id(self) -> str:
        if self.kind == ActionKind.SKILL:
            return f"skill:{self.skill_id}"
        return self.kind.value

    @property
    def keeps_defend_streak(self) -> bool:
        return self.kind in (ActionKind.DEFEND, ActionKind.SKILL)


@dataclass
class ActionOutcome:
    """What a successful action handler did, as seen by the turn loop."""

    kind: ActionKind
    damage: int = 0
    healing: int = 0
    beast_defeated: bool = False
    player_defended: bool = False
    damage_reduction: float | None = None
    messages: list[str] = field(default_factory=list)


@dataclass
class ActionError:
    """Why an action could not be performed. Never raised."""

    kind: ActionKind
    reason: str
    skill_name: str | None = None

    @property
    def beast_defeated(self) -> bool:
        return False


ActionResult = ActionOutcome | ActionError


@dataclass
class ActionDescriptor:
    id: str
    name: str
    description: str
    skill_id: str | None = None
    slot: int | None = None
    skill_type: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
