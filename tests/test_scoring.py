import pytest

from posecheck.angles import AngleDefinition
from posecheck.scoring import NOT_COMPUTED, average_score, linear_score, rank, round_half_up, sub_score


@pytest.mark.parametrize("value, expected", [(2.5, 3), (1.49, 1), (-0.5, 0), (12.5, 13)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_linear_score_missing_value():
    assert linear_score(None, 10, 0) == 0
    assert linear_score(None, 0, 170) == 0


@pytest.mark.parametrize("value, expected", [(0, 100), (-3, 100), (10, 0), (15, 0), (5, 50), (2.5, 75)])
def test_linear_score_descending(value, expected):
    assert linear_score(value, 10, 0) == expected


@pytest.mark.parametrize("value, expected", [(0, 0), (-5, 0), (170, 100), (200, 100), (85, 50)])
def test_linear_score_ascending(value, expected):
    assert linear_score(value, 0, 170) == expected


def test_linear_score_ascending_ignores_min():
    assert linear_score(10, 50, 100) == 10


def test_linear_score_rounds_half_up():
    assert linear_score(1, 0, 8) == 13


def test_average_score_skips_not_computed():
    assert average_score([100, NOT_COMPUTED, 50]) == 75
    assert average_score([1, 2]) == 2
    assert average_score([]) == 0
    assert average_score([NOT_COMPUTED, NOT_COMPUTED]) == 0


def test_sub_score():
    definition = AngleDefinition.of("leftShoulder", "leftBiceps", "leftChest", 0, 170)
    assert sub_score([None, None], [definition, definition]) == NOT_COMPUTED
    # 일부만 측정된 그룹: 빠진 값은 0점
    assert sub_score([None, 170], [definition, definition]) == 50
    assert sub_score([170, 85], [definition, definition]) == 75


@pytest.mark.parametrize("score, letter", [
    (100, "A"), (90, "A"), (89, "B"), (80, "B"), (50, "E"), (10, "I"), (9, "J"), (0, "J"),
])
def test_rank(score, letter):
    assert rank(score) == letter
