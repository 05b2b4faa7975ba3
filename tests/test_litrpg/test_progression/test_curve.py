import pytest

from litrpg.config import MonsterRank, ProgressionConfig
from litrpg.progression.curve import (
    ADVANCED_CLASS_SELECTION,
    COMBAT_CLASS_UPGRADE,
    PROFESSION_CLASS_SELECTION,
    LevelRewards,
    apply_xp_gain,
    cumulative_points,
    level_for_xp,
    level_rewards,
    monster_credits,
    monster_xp,
    total_xp_for_level,
    xp_for_step,
    xp_progress,
)


def test_xp_for_step():
    assert xp_for_step(0) == 0
    assert xp_for_step(1) == 200
    assert xp_for_step(2) == 230

def test_total_xp_for_level():
    assert total_xp_for_level(0) == 0
    assert total_xp_for_level(1) == 0
    assert total_xp_for_level(2) == 200
    assert total_xp_for_level(3) == 430

def test_total_xp_steps_match():
    for n in range(1, 60):
        assert total_xp_for_level(n + 1) - total_xp_for_level(n) == xp_for_step(n)

def test_level_for_xp():
    assert level_for_xp(0) == 1
    assert level_for_xp(199) == 1
    assert level_for_xp(200) == 2
    assert level_for_xp(429) == 2
    assert level_for_xp(430) == 3
    assert level_for_xp(total_xp_for_level(25)) == 25

@pytest.mark.parametrize("level, rewards", [
    (1, LevelRewards()),
    (2, LevelRewards(2, 0)),
    (3, LevelRewards(2, 1)),
    (10, LevelRewards(5, 4, (ADVANCED_CLASS_SELECTION,))),
    (16, LevelRewards(5, 5, (PROFESSION_CLASS_SELECTION,))),
    (31, LevelRewards(2, 1)),
    (32, LevelRewards(10, 5, (COMBAT_CLASS_UPGRADE,))),
    (33, LevelRewards(4, 1)),
    (40, LevelRewards(4, 0)),
])
def test_level_rewards(level, rewards):
    assert level_rewards(level) == rewards

def test_cumulative_points_monotonic():
    previous = cumulative_points(1)
    assert previous.attribute_points == 0
    for level in range(2, 80):
        current = cumulative_points(level)
        assert current.attribute_points >= previous.attribute_points
        assert current.ability_points >= previous.ability_points
        previous = current

def test_level_one_to_ten_aggregates_each_level():
    result = apply_xp_gain(1, 0, total_xp_for_level(10))

    assert result.new_level == 10
    assert result.levels_gained == 9
    # Levels 2..9 give 2 each, level 10 gives 5
    assert result.attribute_points == 21
    # Levels 3, 5, 7, 9 give 1 each, level 10 gives 4
    assert result.ability_points == 8
    assert result.unlocks == [ADVANCED_CLASS_SELECTION]
    assert result.attribute_points == cumulative_points(10).attribute_points

def test_xp_gain_one_short():
    result = apply_xp_gain(1, 0, total_xp_for_level(10) - 1)
    assert result.new_level == 9
    assert ADVANCED_CLASS_SELECTION not in result.unlocks

def test_xp_gain_without_level_up():
    result = apply_xp_gain(3, 430, 10)
    assert not result.leveled_up
    assert result.xp == 440
    assert result.attribute_points == 0

def test_negative_xp_gain_rejected():
    with pytest.raises(ValueError):
        apply_xp_gain(1, 0, -5)

def test_xp_progress():
    progress = xp_progress(1, 100)
    assert progress.level_start == 0
    assert progress.next_level == 200
    assert progress.into_level == 100
    assert progress.required == 200
    assert progress.percent == 50

    assert xp_progress(1, 500).percent == 100
    assert xp_progress(2, 0).percent == 0

def test_monster_rewards():
    assert monster_xp(1, MonsterRank.BOSS) == 0
    assert monster_xp(2, MonsterRank.BOSS) == 30
    assert monster_xp(2, MonsterRank.TRASH) == 2
    assert monster_credits(30) == 75
    # Half rounds up
    assert monster_credits(3) == 8

def test_config_overrides():
    config = ProgressionConfig(xp_base=100, monster_rank_multipliers={MonsterRank.BOSS: 0.5})
    assert xp_for_step(1, config) == 100
    assert monster_xp(2, MonsterRank.BOSS, config) == 50
    assert monster_xp(2, MonsterRank.TRASH, config) == 1
