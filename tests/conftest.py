import os

# Qt 위젯 테스트는 화면 없이 실행
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from posecheck.i18n import build_translator
from posecheck.models import Point


@pytest.fixture
def t():
    return build_translator("en")


@pytest.fixture
def standing_front():
    """정면, 팔을 내리고 바로 선 자세 (좌우 반전된 셀피 기준: 왼쪽이 x가 작음)"""
    return {
        "nose": Point(0.5, 0.2),
        "leftEye": Point(0.48, 0.18),
        "rightEye": Point(0.52, 0.18),
        "leftEar": Point(0.46, 0.2),
        "rightEar": Point(0.54, 0.2),
        "leftShoulder": Point(0.4, 0.3),
        "rightShoulder": Point(0.6, 0.3),
        "leftElbow": Point(0.4, 0.45),
        "rightElbow": Point(0.6, 0.45),
        "leftWrist": Point(0.4, 0.6),
        "rightWrist": Point(0.6, 0.6),
        "leftHip": Point(0.4, 0.6),
        "rightHip": Point(0.6, 0.6),
        "leftKnee": Point(0.4, 0.75),
        "rightKnee": Point(0.6, 0.75),
        "leftAnkle": Point(0.4, 0.9),
        "rightAnkle": Point(0.6, 0.9),
    }
