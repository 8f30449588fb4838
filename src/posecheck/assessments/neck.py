"""
Neck tests: forward head posture (side view) and lateral neck mobility.
"""

from typing import List, Optional

from ..angles import AngleDefinition, vertical_deviation
from ..i18n import Translator
from ..models import HealthReport, HealthWarning, SkeletonData, WarningLevel
from .base import AngleTest, Category, PostureTest, View


class ForwardHeadTest(PostureTest):
    """거북목 (측면): 귀-어깨 수직 편차"""

    id = "forward_head"
    key = "head"
    category = Category.POSTURE
    required_view = View.SIDE

    def _analyze(self, skeletons: List[SkeletonData], t: Translator) -> Optional[HealthReport]:
        data = skeletons[0]
        # 왼쪽 우선, 없으면 오른쪽
        ear = data.get("leftEar") or data.get("rightEar")
        shoulder = data.get("leftShoulder") or data.get("rightShoulder")
        if ear is None or shoulder is None:
            return None

        deviation = vertical_deviation(ear, shoulder)

        score = 100
        title = t("diag.head.good")
        warnings = []
        if deviation > 25:
            score = 50
            title = t("diag.head.severe")
            warnings.append(HealthWarning(
                level=WarningLevel.HIGH,
                message=t("diag.head.msg_severe", deviation),
                future_risk=t("risk.head.severe"),
            ))
        elif deviation > 15:
            score = 75
            title = t("diag.head.mild")
            warnings.append(HealthWarning(
                level=WarningLevel.MEDIUM,
                message=t("diag.head.msg_mild", deviation),
                future_risk=t("risk.head.mild"),
            ))

        return HealthReport(
            score=score,
            title=title,
            description=t("desc.head.good") if deviation <= 15 else t("desc.head.bad"),
            details=(t("detail.head.angle", deviation),),
            warnings=tuple(warnings),
        )


class NeckMobilityTest(AngleTest):
    """
    Lateral neck flexion, one photo per side.

    Photo 1: head tilted to the left. Photo 2: head tilted to the right.
    """

    id = "neck_mobility"
    key = "neck"
    category = Category.SPINE
    required_view = View.FRONT
    required_poses = 2

    groups = {
        "left": (
            ("detail.neck.left", AngleDefinition.of("manubrium", "-vertical", "neck", 0, 45), 0),
        ),
        "right": (
            ("detail.neck.right", AngleDefinition.of("manubrium", "neck", "-vertical", 0, 45), 1),
        ),
    }
