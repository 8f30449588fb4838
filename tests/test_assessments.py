import pytest

from posecheck.assessments import (
    BodyAlignmentTest, ForwardHeadTest, LegAlignmentTest, NeckMobilityTest, PlumbLineTest,
    ShoulderLevelTest, ShoulderMobilityTest, WristMobilityTest, find_test, get_tests,
)
from posecheck.assessments.posture import ear_ankle_shift_cm
from posecheck.config import AnalysisConfig
from posecheck.models import Point, WarningLevel


def shoulders(right_y):
    return {"leftShoulder": Point(0.3, 0.4), "rightShoulder": Point(0.7, right_y)}


def test_test_library_order():
    assert [test.id for test in get_tests()] == [
        "shoulder_level",
        "forward_head",
        "leg_alignment",
        "shoulder_mobility",
        "neck_mobility",
        "body_alignment",
        "plumb_line",
        "wrist_mobility",
    ]


def test_find_test_uses_config():
    test = find_test("plumb_line", AnalysisConfig(body_height_cm=180))
    assert test.body_height_cm == 180
    assert find_test("nope") is None


def test_metadata_is_translated(t):
    test = NeckMobilityTest()
    assert test.name(t) == "Neck Mobility"
    assert test.required_poses == 2
    assert test.instruction(t, 1) == "Face the camera and tilt your head towards your right shoulder."
    assert ShoulderLevelTest().instruction(t).startswith("Stand facing the camera")


def test_empty_pose_list(t):
    assert ShoulderLevelTest().analyze([], t) is None


# --- shoulder level ---

def test_shoulder_level_balanced(t):
    report = ShoulderLevelTest().analyze(shoulders(0.4), t)
    assert report.score == 100
    assert report.title == "Balanced shoulders"
    assert report.warnings == ()
    assert report.details == ("Shoulder tilt: 0°",)


def test_shoulder_level_mild(t):
    report = ShoulderLevelTest().analyze(shoulders(0.42), t)
    assert report.score == 90
    assert report.rank == "A"
    assert report.title == "Mild shoulder imbalance"
    (warning,) = report.warnings
    assert warning.level == WarningLevel.LOW
    assert "3°" in warning.message


def test_shoulder_level_significant(t):
    report = ShoulderLevelTest().analyze(shoulders(0.449), t)
    assert report.score == 65
    assert report.warnings[0].level == WarningLevel.MEDIUM

    report = ShoulderLevelTest().analyze(shoulders(0.485), t)
    assert report.score == 40
    assert report.title == "Significant shoulder imbalance"
    assert report.warnings[0].level == WarningLevel.HIGH


def test_shoulder_level_missing_keypoint(t):
    assert ShoulderLevelTest().analyze({"leftShoulder": Point(0.3, 0.4)}, t) is None


# --- forward head ---

@pytest.mark.parametrize("ear_x, score, level", [
    (0.6, 100, None),
    (0.55, 100, None),
    (0.53, 75, WarningLevel.MEDIUM),
    (0.5, 50, WarningLevel.HIGH),
])
def test_forward_head(t, ear_x, score, level):
    pose = {"leftEar": Point(ear_x, 0.2), "leftShoulder": Point(0.6, 0.4)}
    report = ForwardHeadTest().analyze(pose, t)
    assert report.score == score
    assert [w.level for w in report.warnings] == ([level] if level else [])


def test_forward_head_falls_back_to_right_side(t):
    pose = {"rightEar": Point(0.6, 0.2), "rightShoulder": Point(0.6, 0.4)}
    assert ForwardHeadTest().analyze(pose, t).score == 100
    assert ForwardHeadTest().analyze({"rightEar": Point(0.6, 0.2)}, t) is None


# --- legs ---

def legs(left_knee_x):
    return {
        "leftHip": Point(0.4, 0.5), "leftKnee": Point(left_knee_x, 0.7), "leftAnkle": Point(0.4, 0.9),
        "rightHip": Point(0.6, 0.5), "rightKnee": Point(0.6, 0.7), "rightAnkle": Point(0.6, 0.9),
    }


def test_leg_alignment_straight(t):
    report = LegAlignmentTest().analyze(legs(0.4), t)
    assert report.score == 100
    assert report.details == ("Left knee angle: 180°", "Right knee angle: 180°")


def test_leg_alignment_valgus(t):
    report = LegAlignmentTest().analyze(legs(0.45), t)
    assert report.score == 60
    assert report.title == "Knock knees (valgus)"
    assert report.warnings[0].message == "Knee angles: left 152°, right 180°."


def test_leg_alignment_missing(t):
    pose = legs(0.4)
    del pose["rightAnkle"]
    assert LegAlignmentTest().analyze(pose, t) is None


# --- shoulder mobility ---

def arms(left_elbow, left_wrist, right_elbow, right_wrist):
    return {
        "leftShoulder": Point(0.4, 0.3), "rightShoulder": Point(0.6, 0.3),
        "leftHip": Point(0.4, 0.6), "rightHip": Point(0.6, 0.6),
        "leftElbow": left_elbow, "leftWrist": left_wrist,
        "rightElbow": right_elbow, "rightWrist": right_wrist,
    }


def test_shoulder_mobility_full(t):
    pose = arms(Point(0.4, 0.15), Point(0.4, 0.0), Point(0.6, 0.15), Point(0.6, 0.0))
    report = ShoulderMobilityTest().analyze(pose, t)
    assert report.score == 100
    assert report.title == "Full shoulder mobility"
    assert report.warnings == ()
    assert "Left shoulder flexion: 180°" in report.details
    assert "Right elbow extension: 180°" in report.details


def test_shoulder_mobility_arms_horizontal(t):
    pose = arms(Point(0.25, 0.3), Point(0.1, 0.3), Point(0.75, 0.3), Point(0.9, 0.3))
    report = ShoulderMobilityTest().analyze(pose, t)
    # 어깨 90° -> 53점, 팔꿈치 펴짐 -> 100점
    assert report.score == 77
    assert report.title == "Restricted shoulder mobility"
    (warning,) = report.warnings
    assert warning.level == WarningLevel.MEDIUM
    assert warning.message == "Shoulder flexion score is 53/100."


def test_shoulder_mobility_nothing_measurable(t):
    assert ShoulderMobilityTest().analyze({"nose": Point(0.5, 0.2)}, t) is None


# --- neck mobility ---

def neck_pose(nose_x, nose_y=0.3):
    return {
        "leftShoulder": Point(0.4, 0.4), "rightShoulder": Point(0.6, 0.4),
        "nose": Point(nose_x, nose_y),
    }


def test_neck_mobility_both_sides(t):
    report = NeckMobilityTest().analyze([neck_pose(0.4), neck_pose(0.6)], t)
    assert report.score == 100
    assert report.details == ("Left side bend: 45°", "Right side bend: 45°")


def test_neck_mobility_upright(t):
    report = NeckMobilityTest().analyze([neck_pose(0.5), neck_pose(0.5)], t)
    assert report.score == 0
    assert [w.level for w in report.warnings] == [WarningLevel.HIGH, WarningLevel.HIGH]


def test_neck_mobility_second_photo_missing(t):
    report = NeckMobilityTest().analyze([neck_pose(0.4)], t)
    assert report.score == 100
    assert report.details == ("Left side bend: 45°",)


# --- body alignment ---

def body(right_shoulder_y=0.4, hips=True):
    pose = {"leftShoulder": Point(0.3, 0.4), "rightShoulder": Point(0.7, right_shoulder_y)}
    if hips:
        pose.update(leftHip=Point(0.35, 0.7), rightHip=Point(0.65, 0.7))
    return pose


def test_body_alignment_level(t):
    report = BodyAlignmentTest().analyze(body(), t)
    assert report.score == 100
    assert report.title == "Balanced body"


def test_body_alignment_tilted_shoulders(t):
    report = BodyAlignmentTest().analyze(body(0.435), t)
    assert report.score == 75
    assert report.title == "Imbalanced body"
    (warning,) = report.warnings
    assert warning.level == WarningLevel.MEDIUM
    assert warning.message == "Shoulder line score is 50/100."


def test_body_alignment_without_hips(t):
    report = BodyAlignmentTest().analyze(body(0.435, hips=False), t)
    assert report.score == 50
    assert report.details == ("Shoulder tilt: 5°",)


def test_body_alignment_nothing_measurable(t):
    assert BodyAlignmentTest().analyze({}, t) is None


# --- plumb line ---

def test_ear_ankle_shift_cm():
    assert ear_ankle_shift_cm(Point(0.5, 0.1), Point(0.5, 0.9), 170) == 0
    assert ear_ankle_shift_cm(Point(0.55, 0.1), Point(0.5, 0.9), 170) == 9.2
    assert ear_ankle_shift_cm(Point(0.5, 0.9), Point(0.5, 0.1), 170) is None


def test_plumb_line_upright(t):
    pose = {"leftEar": Point(0.5, 0.1), "leftAnkle": Point(0.5, 0.9)}
    report = PlumbLineTest().analyze(pose, t)
    assert report.score == 100
    assert report.details == ("Ear-to-ankle lean: 0°", "Ear-to-ankle shift: 0 cm")


def test_plumb_line_leaning(t):
    pose = {"rightEar": Point(0.55, 0.1), "rightAnkle": Point(0.5, 0.9)}
    report = PlumbLineTest().analyze(pose, t)
    # 기울기 4° -> 60점, 이동량 9.2cm -> 0점
    assert report.score == 30
    assert report.details == ("Ear-to-ankle lean: 4°", "Ear-to-ankle shift: 9.2 cm")
    assert [w.level for w in report.warnings] == [WarningLevel.MEDIUM, WarningLevel.HIGH]


def test_plumb_line_missing(t):
    assert PlumbLineTest().analyze({"leftEar": Point(0.5, 0.1)}, t) is None


# --- wrist ---

def test_wrist_is_unavailable(t, standing_front):
    report = WristMobilityTest().analyze(standing_front, t)
    assert report.available is False
    assert report.title == "Wrist test unavailable"
    assert report.score == 0
