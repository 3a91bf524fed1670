"""Tests for src/relic_raider/models/action.py."""
from __future__ import annotations

import pytest

from relic_raider.models.action import Action, ActionError, ActionKind


class TestParse:
    @pytest.mark.parametrize("raw, kind", [
        ("attack", ActionKind.ATTACK),
        ("DEFEND", ActionKind.DEFEND),
        (" special ", ActionKind.SPECIAL),
        ("ultimate", ActionKind.ULTIMATE),
    ])
    def test_basic(self, raw, kind):
        action = Action.parse(raw)
        assert action.kind == kind
        assert action.skill_id is None

    @pytest.mark.parametrize("raw", ["skill:flame_lance", "skill_flame_lance"])
    def test_skill_prefixes(self, raw):
        action = Action.parse(raw)
        assert action.kind == ActionKind.SKILL
        assert action.skill_id == "flame_lance"
        assert action.action_id == "skill:flame_lance"

    @pytest.mark.parametrize("raw", ["dance", "skill:", "skill", ""])
    def test_rejects(self, raw):
        with pytest.raises(ValueError):
            Action.parse(raw)


class TestDefendStreak:
    def test_defend_and_skills_keep_streak(self):
        assert Action.parse("defend").keeps_defend_streak
        assert Action.parse("skill:envenom").keeps_defend_streak

    def test_other_actions_break_it(self):
        assert not Action.parse("attack").keeps_defend_streak
        assert not Action.parse("special").keeps_defend_streak


def test_action_error_never_defeats():
    assert ActionError(ActionKind.SPECIAL, "not_enough_energy").beast_defeated is False
