"""
Wrist mobility. Needs hand keypoints, which the pose estimator does not
provide yet, so the test always reports itself as unavailable.
"""

from typing import List, Optional

from ..i18n import Translator
from ..models import HealthReport, SkeletonData
from .base import Category, PostureTest, View


class WristMobilityTest(PostureTest):
    id = "wrist_mobility"
    key = "wrist"
    category = Category.WRIST
    required_view = View.FRONT

    def _analyze(self, skeletons: List[SkeletonData], t: Translator) -> Optional[HealthReport]:
        return HealthReport.unavailable(
            title=t("diag.wrist.unavailable"),
            description=t("desc.wrist.unavailable"),
        )
