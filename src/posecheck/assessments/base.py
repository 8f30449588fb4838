"""
Base classes for posture tests.

A test turns one or more skeletons (one per required photo) into a
``HealthReport``, or ``None`` when the keypoints it needs are missing.

``ScoredTest`` covers the common shape: measurements are grouped into
sub-scores, each sub-score is the average of its linear scores, and the
overall score is the average of the sub-scores that could be computed.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..angles import AngleDefinition, evaluate
from ..i18n import Translator
from ..models import HealthReport, HealthWarning, Point, SkeletonData, WarningLevel
from ..scoring import NOT_COMPUTED, average_score, sub_score
from ..skeleton import enrich_skeleton

logger = logging.getLogger(__name__)

# 이 점수 이상이면 "양호"
GOOD_SCORE = 80
# 이 점수 미만의 sub-score는 high 경고
HIGH_RISK_SCORE = 50

Poses = Union[SkeletonData, Sequence[SkeletonData]]


class Category(str, Enum):
    POSTURE = "Posture"
    LEGS = "Legs"
    SPINE = "Spine"
    SHOULDER = "Shoulder"
    WRIST = "Wrist"


class View(str, Enum):
    FRONT = "Front"
    SIDE = "Side"


def as_skeletons(poses: Poses) -> List[SkeletonData]:
    """단일 스켈레톤 또는 스켈레톤 목록 -> 목록"""
    if isinstance(poses, Mapping):
        return [poses]
    return list(poses)


class PostureTest:
    """검사 항목 기본 클래스"""

    id: str = ""
    key: str = ""
    category: Category = Category.POSTURE
    required_view: View = View.FRONT
    required_poses: int = 1

    def name(self, t: Translator) -> str:
        return t(f"test.{self.key}.name")

    def description(self, t: Translator) -> str:
        return t(f"test.{self.key}.desc")

    def instruction(self, t: Translator, pose_index: int = 0) -> str:
        if self.required_poses > 1:
            return t(f"test.{self.key}.instr.{pose_index}")
        return t(f"test.{self.key}.instr")

    def analyze(self, poses: Poses, t: Translator) -> Optional[HealthReport]:
        skeletons = as_skeletons(poses)
        if not skeletons:
            return None
        return self._analyze(skeletons, t)

    def _analyze(self, skeletons: List[SkeletonData], t: Translator) -> Optional[HealthReport]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"


@dataclass(frozen=True)
class Measurement:
    """측정값 하나와 점수 범위"""
    detail_key: str
    value: Optional[float]
    min: float
    max: float


def pose_at(skeletons: List[SkeletonData], index: int) -> SkeletonData:
    return skeletons[index] if index < len(skeletons) else {}


class ScoredTest(PostureTest):
    """sub-score 평균 방식의 검사"""

    def _measure(self, skeletons: List[SkeletonData]) -> Dict[str, List[Measurement]]:
        raise NotImplementedError

    def _analyze(self, skeletons: List[SkeletonData], t: Translator) -> Optional[HealthReport]:
        groups = self._measure(skeletons)

        sub_scores: List[Tuple[str, int]] = []
        details: List[str] = []
        for group, measurements in groups.items():
            values = [m.value for m in measurements]
            sub_scores.append((group, sub_score(values, measurements)))
            details.extend(
                t(m.detail_key, round(m.value, 1)) for m in measurements if m.value is not None
            )

        if all(s == NOT_COMPUTED for _, s in sub_scores):
            logger.debug("%s: no measurable keypoints", self.id)
            return None

        score = average_score(s for _, s in sub_scores)
        good = score >= GOOD_SCORE

        warnings = []
        for group, s in sub_scores:
            if s == NOT_COMPUTED or s >= GOOD_SCORE:
                continue
            warnings.append(HealthWarning(
                level=WarningLevel.HIGH if s < HIGH_RISK_SCORE else WarningLevel.MEDIUM,
                message=t(f"warn.{self.key}.{group}", s),
                future_risk=t(f"risk.{self.key}.{group}"),
            ))

        return HealthReport(
            score=score,
            title=t(f"diag.{self.key}.good" if good else f"diag.{self.key}.bad"),
            description=t(f"desc.{self.key}.good" if good else f"desc.{self.key}.bad"),
            details=tuple(details),
            warnings=tuple(warnings),
        )


class AngleTest(ScoredTest):
    """
    Test driven entirely by angle definitions.

    ``groups`` maps a sub-score name to its measurements, each given as
    ``(detail_key, definition, pose_index)``.
    """

    groups: Dict[str, Tuple[Tuple[str, AngleDefinition, int], ...]] = {}

    def _measure(self, skeletons: List[SkeletonData]) -> Dict[str, List[Measurement]]:
        enriched: Dict[int, Dict[str, Point]] = {}
        result = {}
        for group, entries in self.groups.items():
            measurements = []
            for detail_key, definition, pose_index in entries:
                if pose_index not in enriched:
                    enriched[pose_index] = enrich_skeleton(pose_at(skeletons, pose_index))
                value = evaluate(definition, enriched[pose_index])
                measurements.append(Measurement(detail_key, value, definition.min, definition.max))
            result[group] = measurements
        return result
