"""
Posture test library.
"""

from typing import List, Optional

from ..config import AnalysisConfig
from .base import GOOD_SCORE, AngleTest, Category, Measurement, PostureTest, ScoredTest, View
from .legs import LegAlignmentTest
from .neck import ForwardHeadTest, NeckMobilityTest
from .posture import BodyAlignmentTest, PlumbLineTest
from .shoulder import ShoulderLevelTest, ShoulderMobilityTest
from .wrist import WristMobilityTest


def get_tests(config: Optional[AnalysisConfig] = None) -> List[PostureTest]:
    """검사 목록 (선택 화면 표시 순서)"""
    config = config or AnalysisConfig()
    return [
        ShoulderLevelTest(),
        ForwardHeadTest(),
        LegAlignmentTest(),
        ShoulderMobilityTest(),
        NeckMobilityTest(),
        BodyAlignmentTest(),
        PlumbLineTest(body_height_cm=config.body_height_cm),
        WristMobilityTest(),
    ]


def find_test(test_id: str, config: Optional[AnalysisConfig] = None) -> Optional[PostureTest]:
    for test in get_tests(config):
        if test.id == test_id:
            return test
    return None


__all__ = [
    "GOOD_SCORE",
    "AngleTest",
    "BodyAlignmentTest",
    "Category",
    "ForwardHeadTest",
    "LegAlignmentTest",
    "Measurement",
    "NeckMobilityTest",
    "PlumbLineTest",
    "PostureTest",
    "ScoredTest",
    "ShoulderLevelTest",
    "ShoulderMobilityTest",
    "View",
    "WristMobilityTest",
    "find_test",
    "get_tests",
]
