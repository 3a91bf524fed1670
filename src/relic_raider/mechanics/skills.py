"""Skill classification — keyword rules applied once when the catalog loads."""
from __future__ import annotations

from relic_raider.models.skill import EffectKind, SkillType
from relic_raider.models.status import StatusType

HEAL_KEYWORDS = ("Heal", "Restore", "Sunfire")

# Capitalised name keywords / lowercase description keywords that mark a status skill.
STATUS_NAME_KEYWORDS = (
    "Beacon", "Boost", "Defense", "Ward", "Shield", "Seal",
    "Burn", "Poison", "Bleed", "Freeze", "Stun", "Slow",
)
STATUS_DESC_KEYWORDS = (
    "boost", "reduce", "apply",
    "burn", "poison", "bleed", "freeze", "stun", "slow",
)

# Checked in order against the lowercased name and description.
STATUS_RULES: list[tuple[StatusType, tuple[str, ...], tuple[str, ...]]] = [
    (StatusType.DEFENSE_BOOST, ("beacon", "ward"), ("defense", "defence")),
    (StatusType.BURN, ("burn", "flame"), ("burn",)),
    (StatusType.POISON, ("poison", "toxic"), ("poison",)),
    (StatusType.BLEED, ("bleed",), ("bleed",)),
    (StatusType.FREEZE, ("freeze", "frost"), ("freeze",)),
    (StatusType.STUN, ("stun",), ("stun",)),
    (StatusType.SLOW, ("slow",), ("slow",)),
]

STAT_BONUS_KEYWORDS: dict[str, tuple[str, ...]] = {
    "attack": ("Attack", "Power"),
    "defense": ("Defense", "Guard"),
    "hp": ("Health", "Vitality"),
}


def _status_type(name: str, description: str) -> StatusType | None:
    lname, ldesc = name.lower(), description.lower()
    for status, name_words, desc_words in STATUS_RULES:
        if any(w in lname for w in name_words) or any(w in ldesc for w in desc_words):
            return status
    return None


def infer_effect_kind(name: str, description: str = "") -> tuple[EffectKind, StatusType | None]:
    """Classify an active/ultimate skill from its name and description.

    Returns ``(effect_kind, status_type)``. A skill that looks like a status
    skill but names no recognised effect is treated as a damage skill.
    """
    if any(k in name for k in HEAL_KEYWORDS):
        return EffectKind.HEAL, None

    looks_like_status = any(k in name for k in STATUS_NAME_KEYWORDS) or any(
        k in description for k in STATUS_DESC_KEYWORDS
    )
    if looks_like_status:
        status = _status_type(name, description)
        if status is not None:
            return EffectKind.STATUS_EFFECT, status

    return EffectKind.DAMAGE, None


def infer_stat_bonus(name: str) -> str | None:
    """Stat boosted by a passive combat skill, or None if it boosts none."""
    for stat, keywords in STAT_BONUS_KEYWORDS.items():
        if any(k in name for k in keywords):
            return stat
    return None


def classify_skill_entry(entry: dict) -> dict:
    """Fill in ``effect_kind``/``status_type``/``stat`` for a raw catalog entry.

    Entries that already carry an ``effect_kind`` are returned unchanged.
    """
    if entry.get("effect_kind"):
        return entry
    classified = dict(entry)
    skill_type = str(entry.get("skill_type", SkillType.ACTIVE.value)).upper()
    name = entry.get("name", "")
    if skill_type == SkillType.PASSIVE.value:
        stat = infer_stat_bonus(name)
        if stat is not None and entry.get("category", "COMBAT") == "COMBAT":
            classified["effect_kind"] = EffectKind.STAT_BONUS.value
            classified["stat"] = stat
        return classified
    kind, status = infer_effect_kind(name, entry.get("description", ""))
    classified["effect_kind"] = kind.value
    if status is not None:
        classified["status_type"] = status.value
    return classified
