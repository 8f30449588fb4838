import numpy as np
import pytest

from posecheck.angles import (
    AngleDefinition, angle_between, evaluate, horizontal_deviation, joint_angle, vertical_deviation,
)
from posecheck.models import Point
from posecheck.skeleton import AxisToken, Axis, enrich_skeleton


def test_angle_between_is_signed():
    assert angle_between(np.array([1.0, 0.0]), np.array([0.0, 1.0])) == pytest.approx(90)
    assert angle_between(np.array([0.0, 1.0]), np.array([1.0, 0.0])) == pytest.approx(270)
    assert angle_between(np.array([1.0, 0.0]), np.array([1.0, 0.0])) == pytest.approx(0)


def test_definition_parses_tokens():
    definition = AngleDefinition.of("manubrium", "-vertical", "neck", 0, 45)
    assert definition.joint1 == AxisToken(Axis.VERTICAL, inverted=True)
    assert str(definition.joint2) == "neck"
    assert (definition.min, definition.max) == (0, 45)


def test_evaluate_measures_from_joint2_to_joint1():
    definition = AngleDefinition.of("x", "horizontal", "vertical", 0, 180)
    assert evaluate(definition, {}) == pytest.approx(270)


def test_evaluate_missing_keypoint():
    definition = AngleDefinition.of("leftShoulder", "leftBiceps", "leftChest", 0, 170)
    assert evaluate(definition, {"leftShoulder": Point(0.4, 0.3)}) is None


def _left_arm(elbow, wrist):
    skeleton = {
        "leftShoulder": Point(0.4, 0.3),
        "rightShoulder": Point(0.6, 0.3),
        "leftHip": Point(0.4, 0.6),
        "rightHip": Point(0.6, 0.6),
        "leftElbow": elbow,
        "leftWrist": wrist,
    }
    return enrich_skeleton(skeleton)


@pytest.mark.parametrize("elbow, expected", [
    (Point(0.4, 0.45), 0),     # 팔 내림
    (Point(0.25, 0.3), 90),    # 수평
    (Point(0.4, 0.15), 180),   # 머리 위
])
def test_left_shoulder_flexion(elbow, expected):
    definition = AngleDefinition.of("leftShoulder", "leftBiceps", "leftChest", 0, 170)
    value = evaluate(definition, _left_arm(elbow, Point(elbow.x, elbow.y)))
    assert value % 360 == pytest.approx(expected, abs=1e-6)


def test_straight_elbow_is_180():
    definition = AngleDefinition.of("leftElbow", "-leftBiceps", "leftForarm", 0, 180)
    value = evaluate(definition, _left_arm(Point(0.4, 0.15), Point(0.4, 0.0)))
    assert value == pytest.approx(180)


def test_horizontal_deviation():
    assert horizontal_deviation(Point(0.3, 0.4), Point(0.7, 0.42)) == 3
    assert horizontal_deviation(Point(0.3, 0.4), Point(0.7, 0.4)) == 0
    assert horizontal_deviation(Point(0.3, 0.42), Point(0.7, 0.4)) == 3


def test_vertical_deviation():
    assert vertical_deviation(Point(0.5, 0.1), Point(0.5, 0.9)) == 0
    assert vertical_deviation(Point(0.55, 0.1), Point(0.5, 0.9)) == 4
    assert vertical_deviation(Point(0.5, 0.2), Point(0.6, 0.4)) == 27


def test_joint_angle_folds_to_180():
    center = Point(0, 0)
    assert joint_angle(Point(1, 0), center, Point(0, 1)) == 90
    assert joint_angle(Point(1, 0), center, Point(0, -1)) == 90
    assert joint_angle(Point(0, 1), center, Point(-1, -1)) == 135
    assert joint_angle(Point(0, -1), center, Point(0, 1)) == 180
