"""
Leg alignment (front view): knee valgus from the hip-knee-ankle angle.
"""

from typing import List, Optional

from ..angles import joint_angle
from ..i18n import Translator
from ..models import HealthReport, HealthWarning, SkeletonData, WarningLevel
from .base import Category, PostureTest, View

# 이 각도 미만이면 X자 다리(외반슬)
VALGUS_ANGLE = 165


class LegAlignmentTest(PostureTest):
    """다리 정렬 (정면)"""

    id = "leg_alignment"
    key = "leg"
    category = Category.LEGS
    required_view = View.FRONT

    def _analyze(self, skeletons: List[SkeletonData], t: Translator) -> Optional[HealthReport]:
        data = skeletons[0]
        names = ("leftHip", "leftKnee", "leftAnkle", "rightHip", "rightKnee", "rightAnkle")
        points = [data.get(name) for name in names]
        if any(p is None for p in points):
            return None
        l_hip, l_knee, l_ankle, r_hip, r_knee, r_ankle = points

        left_angle = joint_angle(l_hip, l_knee, l_ankle)
        right_angle = joint_angle(r_hip, r_knee, r_ankle)

        score = 100
        title = t("diag.leg.good")
        description = t("diag.leg.desc_good")
        warnings = []
        if left_angle < VALGUS_ANGLE or right_angle < VALGUS_ANGLE:
            score = 60
            title = t("diag.leg.valgus")
            description = t("diag.leg.desc_valgus")
            warnings.append(HealthWarning(
                level=WarningLevel.MEDIUM,
                message=t("diag.leg.msg", left_angle, right_angle),
                future_risk=t("risk.leg.acl"),
            ))

        return HealthReport(
            score=score,
            title=title,
            description=description,
            details=(t("detail.leg.left", left_angle), t("detail.leg.right", right_angle)),
            warnings=tuple(warnings),
        )
