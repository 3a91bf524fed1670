"""Shared fixtures for the Relic Raider test suite."""
from __future__ import annotations

import random
from dataclasses import dataclass, field

import pytest

from relic_raider.config import BattleConfig
from relic_raider.engine.turn_loop import TurnLoop
from relic_raider.mechanics import rng
from relic_raider.models.combat import BattleState, BeastStats, CombatantStats
from relic_raider.models.item import Item, Rarity
from relic_raider.models.opponent import OpponentDefinition, Zone
from relic_raider.models.skill import BattleSkillEffects, LearnedSkill, SkillDefinition


@dataclass
class FixedRng:
    """Deterministic stand-in for the ``rng`` helpers.

    ``chance`` answers from ``outcomes`` (keyed by probability) and falls back
    to ``hit``; certain and impossible events keep their usual answers.
    ``randint`` returns ``roll`` (or the low bound), ``uniform`` returns the
    point ``fraction`` of the way through its range and ``pick`` returns the
    first element.
    """

    hit: bool = False
    outcomes: dict[float, bool] = field(default_factory=dict)
    roll: int | None = None
    fraction: float = 0.0
    asked: list[float] = field(default_factory=list)

    def chance(self, probability: float) -> bool:
        self.asked.append(probability)
        if probability <= 0:
            return False
        if probability >= 1:
            return True
        return self.outcomes.get(probability, self.hit)

    def randint(self, low: int, high: int) -> int:
        return low if self.roll is None else self.roll

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self.fraction

    def pick(self, items):
        return items[0]


@pytest.fixture
def seeded_rng():
    state = random.getstate()
    random.seed(42)
    yield
    random.setstate(state)


@pytest.fixture
def fixed_rng(monkeypatch) -> FixedRng:
    fixed = FixedRng()
    monkeypatch.setattr(rng, "chance", fixed.chance)
    monkeypatch.setattr(rng, "randint", fixed.randint)
    monkeypatch.setattr(rng, "uniform", fixed.uniform)
    monkeypatch.setattr(rng, "pick", fixed.pick)
    return fixed


@pytest.fixture
def config() -> BattleConfig:
    return BattleConfig()


@pytest.fixture
def relics() -> dict[Rarity, Item]:
    return {
        Rarity.COMMON: Item(id="tablet_of_aztec", name="Tablet of Aztec", rarity=Rarity.COMMON, value=5),
        Rarity.UNCOMMON: Item(id="idol_of_aztec", name="Idol of Aztec", rarity=Rarity.UNCOMMON, value=15),
        Rarity.RARE: Item(id="statue_of_aztec", name="Statue of Aztec", rarity=Rarity.RARE, value=40),
        Rarity.LEGENDARY: Item(id="jaguar_pelt", name="Jaguar Pelt", rarity=Rarity.LEGENDARY, value=120),
    }


@pytest.fixture
def jungle_zone() -> Zone:
    return Zone(name="Jungle Ruins", theme="Aztec", min_level=1, max_level=10, xp_multiplier=1.5)


@pytest.fixture
def stalker(relics) -> OpponentDefinition:
    return OpponentDefinition(
        name="Jungle Stalker",
        zone="Jungle Ruins",
        rarity=Rarity.UNCOMMON,
        base_hp=100,
        base_attack=20,
        base_defense=10,
        loot_table=list(relics.values()),
    )


@pytest.fixture
def heal_skill() -> LearnedSkill:
    return LearnedSkill(skill=SkillDefinition(
        id="divine_heal", name="Divine Heal", effect_kind="heal", base_effect=10.0, cooldown=3,
    ))


@pytest.fixture
def make_battle(stalker):
    """Factory for a battle with fixed stats (no scaling roll)."""

    def _make(
        player: CombatantStats | None = None,
        beast: BeastStats | None = None,
        skill_effects: BattleSkillEffects | None = None,
        weapon_effects=None,
        config: BattleConfig | None = None,
        opponent: OpponentDefinition | None = None,
    ) -> tuple[TurnLoop, BattleState]:
        loop = TurnLoop(config=config or BattleConfig())
        state = loop.initialize_battle(
            player or CombatantStats(hp=200, attack=50, defense=20),
            opponent or stalker,
            skill_effects=skill_effects,
            weapon_effects=weapon_effects,
            beast_stats=beast or BeastStats(hp=300, attack=30, defense=20),
        )
        return loop, state

    return _make
