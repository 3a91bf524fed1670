"""Content catalog — typed opponents, zones, skills and gear built once at load time."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from relic_raider.content import loader
from relic_raider.mechanics import rng
from relic_raider.mechanics.stats import compute_combatant_stats
from relic_raider.mechanics.weapon_effects import collect_weapon_effects
from relic_raider.models.character import PlayerClass, PlayerProfile
from relic_raider.models.combat import CombatantStats
from relic_raider.models.item import Equipment, Item, Rarity, WeaponEffect
from relic_raider.models.opponent import OpponentDefinition, Zone
from relic_raider.models.skill import BattleSkillEffects, EquippedSkill, LearnedSkill, SkillDefinition, SkillType
from relic_raider.systems.base import OpponentCatalog, SkillEffectSource, StatAggregator, WeaponEffectSource

logger = logging.getLogger(__name__)

SPAWN_WEIGHTS: dict[Rarity, float] = {
    Rarity.UNCOMMON: 0.4,
    Rarity.RARE: 0.3,
    Rarity.LEGENDARY: 0.2,
    Rarity.MYTHIC: 0.1,
}

MAX_ACTIVE_SLOTS = 4


@dataclass
class OpponentPool:
    """The regular opponents and the boss of one zone."""

    zone: Zone
    opponents: list[OpponentDefinition] = field(default_factory=list)
    boss: OpponentDefinition | None = None

    def pick(self) -> OpponentDefinition:
        """Draw a regular opponent, weighted by rarity."""
        if not self.opponents:
            raise LookupError(f"Zone '{self.zone.name}' has no regular opponents")
        weights = [SPAWN_WEIGHTS.get(o.rarity, 0.0) for o in self.opponents]
        return rng.weighted_choice(self.opponents, weights)


class ContentCatalog(OpponentCatalog, StatAggregator, SkillEffectSource, WeaponEffectSource):
    def __init__(self, content_dir: Path = loader.CONTENT_DIR):
        self.items: dict[str, Item] = {
            item_id: Item.model_validate(data) for item_id, data in loader.load_all_items(content_dir).items()
        }
        self.zones: dict[str, Zone] = {}
        zone_loot: dict[str, list[str]] = {}
        for data in loader.load_all_zones(content_dir):
            zone_loot[data["name"]] = data.pop("loot", [])
            self.zones[data["name"]] = Zone.model_validate(data)

        self.opponents: dict[str, OpponentDefinition] = {}
        for data in loader.load_all_opponents(content_dir):
            loot_ids = zone_loot.get(data.get("zone"), []) + data.pop("loot", [])
            data["loot_table"] = self._resolve_items(loot_ids, data["name"])
            self.opponents[data["name"]] = OpponentDefinition.model_validate(data)

        self.classes: dict[str, PlayerClass] = {
            name: PlayerClass.model_validate(data) for name, data in loader.load_all_classes(content_dir).items()
        }
        self.skills: dict[str, SkillDefinition] = {
            skill_id: SkillDefinition.model_validate(data) for skill_id, data in loader.load_all_skills(content_dir).items()
        }
        self.equipment: dict[str, Equipment] = {
            gear_id: Equipment.model_validate(data) for gear_id, data in loader.load_all_equipment(content_dir).items()
        }
        self.loadouts = loader.load_loadouts(content_dir)
        self.pools = self._build_pools()
        logger.debug(
            f"Loaded {len(self.zones)} zones, {len(self.opponents)} opponents, "
            f"{len(self.skills)} skills, {len(self.items)} items"
        )

    def _resolve_items(self, item_ids: list[str], owner: str) -> list[Item]:
        resolved: list[Item] = []
        for item_id in dict.fromkeys(item_ids):
            if item_id not in self.items:
                raise KeyError(f"Unknown item '{item_id}' in loot table of {owner}")
            resolved.append(self.items[item_id])
        return resolved

    def _build_pools(self) -> dict[str, OpponentPool]:
        pools = {name: OpponentPool(zone=zone) for name, zone in self.zones.items()}
        for opponent in self.opponents.values():
            pool = pools.get(opponent.zone or "")
            if pool is None:
                logger.warning(f"Opponent {opponent.name} belongs to unknown zone {opponent.zone!r}")
                continue
            if opponent.is_boss:
                pool.boss = opponent
            else:
                pool.opponents.append(opponent)
        return pools

    # -- opponent catalog ------------------------------------------------

    def get_opponent(self, name: str) -> OpponentDefinition:
        return self.opponents[name]

    def get_zone(self, name: str | None) -> Zone:
        """Zone by name; unknown names resolve to the first zone."""
        if name in self.zones:
            return self.zones[name]
        first = next(iter(self.zones.values()))
        logger.debug(f"Unknown zone {name!r}, using {first.name}")
        return first

    def pool(self, zone_name: str) -> OpponentPool:
        return self.pools[zone_name]

    # -- player collaborators ------------------------------------------------

    def build_profile(self, class_name: str, level: int = 1, player_id: str = "local", name: str = "Adventurer") -> PlayerProfile:
        """A player of ``class_name`` at ``level`` carrying the class's default loadout."""
        if class_name not in self.classes:
            raise KeyError(f"Unknown class '{class_name}'")
        loadout = self.loadouts.get(class_name, {})
        equipment = [self.equipment[gear_id] for gear_id in loadout.get("equipment", [])]
        learned = [LearnedSkill(skill=self.skills[skill_id]) for skill_id in loadout.get("skills", [])]

        equipped: list[EquippedSkill] = []
        actives = [ls for ls in learned if ls.skill.skill_type == SkillType.ACTIVE]
        for slot, ls in enumerate(actives[:MAX_ACTIVE_SLOTS], start=1):
            equipped.append(EquippedSkill(skill=ls.skill, level=ls.level, slot=slot))
        ultimate = next((ls for ls in learned if ls.skill.skill_type == SkillType.ULTIMATE), None)
        if ultimate is not None:
            equipped.append(EquippedSkill(skill=ultimate.skill, level=ultimate.level, slot=1))

        return PlayerProfile(
            id=player_id,
            name=name,
            player_class=class_name,
            level=level,
            equipment=equipment,
            learned_skills=learned,
            equipped_skills=equipped,
        )

    def compute_combatant_stats(self, profile: PlayerProfile) -> CombatantStats:
        return compute_combatant_stats(
            self.classes[profile.player_class],
            profile.level,
            profile.equipment,
            profile.learned_skills,
        )

    def get_battle_skill_effects(self, profile: PlayerProfile) -> BattleSkillEffects:
        passives = {
            ls.skill.name: ls.magnitude
            for ls in profile.learned_skills
            if ls.skill.skill_type == SkillType.PASSIVE
        }
        actives = [e for e in profile.equipped_skills if e.skill.skill_type == SkillType.ACTIVE]
        ultimate = next(
            (e for e in profile.equipped_skills if e.skill.skill_type == SkillType.ULTIMATE and e.slot == 1), None,
        )
        return BattleSkillEffects(passive_bonuses=passives, active_skills=actives, ultimate_skill=ultimate)

    def get_weapon_effects(self, profile: PlayerProfile) -> list[WeaponEffect]:
        return collect_weapon_effects(profile.equipment)
