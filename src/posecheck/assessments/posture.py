"""
Body tilt tests computed directly from keypoint pairs.

- body_alignment (front): shoulder-line and hip-line tilt from horizontal.
- plumb_line (side): ear-to-ankle lean from vertical, and the horizontal
  ear-to-ankle shift converted to centimetres from an assumed body height.
"""

from typing import Dict, List, Optional

from ..angles import horizontal_deviation, vertical_deviation
from ..models import Point, SkeletonData
from .base import Category, Measurement, ScoredTest, View

# 귀~발목 높이가 키에서 차지하는 비율
EAR_TO_ANKLE_RATIO = 0.87


def _tilt(data: SkeletonData, left_name: str, right_name: str) -> Optional[float]:
    left, right = data.get(left_name), data.get(right_name)
    if left is None or right is None:
        return None
    return float(horizontal_deviation(left, right))


class BodyAlignmentTest(ScoredTest):
    """어깨/골반 수평 기울기 (정면)"""

    id = "body_alignment"
    key = "alignment"
    category = Category.POSTURE
    required_view = View.FRONT

    def _measure(self, skeletons: List[SkeletonData]) -> Dict[str, List[Measurement]]:
        data = skeletons[0]
        return {
            "shoulder": [Measurement(
                "detail.alignment.shoulder", _tilt(data, "leftShoulder", "rightShoulder"), 10, 0)],
            "hip": [Measurement(
                "detail.alignment.hip", _tilt(data, "leftHip", "rightHip"), 10, 0)],
        }


def ear_ankle_shift_cm(ear: Point, ankle: Point, body_height_cm: float) -> Optional[float]:
    """귀-발목 수평 이동량(cm). 귀가 발목보다 위에 있어야 환산 가능"""
    height = ankle.y - ear.y
    if height <= 0:
        return None
    cm_per_unit = body_height_cm * EAR_TO_ANKLE_RATIO / height
    return round(abs(ear.x - ankle.x) * cm_per_unit, 1)


class PlumbLineTest(ScoredTest):
    """측면 수직선 정렬 (귀-발목)"""

    id = "plumb_line"
    key = "plumb"
    category = Category.SPINE
    required_view = View.SIDE

    def __init__(self, body_height_cm: float = 170.0):
        self.body_height_cm = body_height_cm

    def _measure(self, skeletons: List[SkeletonData]) -> Dict[str, List[Measurement]]:
        data = skeletons[0]
        lean = shift = None
        for side in ("left", "right"):
            ear, ankle = data.get(f"{side}Ear"), data.get(f"{side}Ankle")
            if ear is not None and ankle is not None:
                lean = float(vertical_deviation(ear, ankle))
                shift = ear_ankle_shift_cm(ear, ankle, self.body_height_cm)
                break

        return {
            "lean": [Measurement("detail.plumb.lean", lean, 10, 0)],
            "shift": [Measurement("detail.plumb.shift", shift, 8, 0)],
        }
