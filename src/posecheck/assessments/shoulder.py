"""
Shoulder tests: shoulder level (front view) and overhead shoulder mobility.
"""

from typing import List, Optional

from ..angles import AngleDefinition, horizontal_deviation
from ..i18n import Translator
from ..models import HealthReport, HealthWarning, SkeletonData, WarningLevel
from .base import AngleTest, Category, PostureTest, View


class ShoulderLevelTest(PostureTest):
    """어깨 높이 균형 (정면)"""

    id = "shoulder_level"
    key = "shoulder"
    category = Category.SHOULDER
    required_view = View.FRONT

    def _analyze(self, skeletons: List[SkeletonData], t: Translator) -> Optional[HealthReport]:
        data = skeletons[0]
        left, right = data.get("leftShoulder"), data.get("rightShoulder")
        if left is None or right is None:
            return None

        deviation = horizontal_deviation(left, right)

        score = 100
        title = t("diag.shoulder.balanced")
        warnings = []
        if deviation > 5:
            score = max(0, 100 - deviation * 5)
            title = t("diag.shoulder.significant")
            warnings.append(HealthWarning(
                level=WarningLevel.HIGH if deviation > 10 else WarningLevel.MEDIUM,
                message=t("diag.shoulder.msg_significant", deviation),
                future_risk=t("risk.shoulder.chronic"),
            ))
        elif deviation > 2:
            score = 90
            title = t("diag.shoulder.mild")
            warnings.append(HealthWarning(
                level=WarningLevel.LOW,
                message=t("diag.shoulder.msg_mild", deviation),
                future_risk=t("risk.shoulder.muscle"),
            ))

        return HealthReport(
            score=score,
            title=title,
            description=t("desc.shoulder.good") if deviation <= 2 else t("desc.shoulder.bad"),
            details=(t("detail.shoulder.angle", deviation),),
            warnings=tuple(warnings),
        )


class ShoulderMobilityTest(AngleTest):
    """양팔 머리 위로 들기: 어깨 굴곡 + 팔꿈치 신전"""

    id = "shoulder_mobility"
    key = "mobility"
    category = Category.SHOULDER
    required_view = View.FRONT

    groups = {
        "shoulder": (
            ("detail.mobility.left_shoulder",
             AngleDefinition.of("leftShoulder", "leftBiceps", "leftChest", 0, 170), 0),
            ("detail.mobility.right_shoulder",
             AngleDefinition.of("rightShoulder", "rightChest", "rightBiceps", 0, 170), 0),
        ),
        "elbow": (
            ("detail.mobility.left_elbow",
             AngleDefinition.of("leftElbow", "-leftBiceps", "leftForarm", 0, 180), 0),
            ("detail.mobility.right_elbow",
             AngleDefinition.of("rightElbow", "rightForarm", "-rightBiceps", 0, 180), 0),
        ),
    }
