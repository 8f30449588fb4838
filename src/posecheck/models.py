"""
Data models for posture assessment and skeleton editing.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .constants import KEYPOINT_NAMES
from .scoring import rank


@dataclass(frozen=True)
class Point:
    """2D 좌표 (픽셀 또는 정규화 [0,1])"""
    x: float
    y: float


# 키포인트 이름 -> 좌표 (검출되지 않은 키포인트는 None 또는 누락)
SkeletonData = Mapping[str, Optional[Point]]


@dataclass(frozen=True)
class BoundingBox:
    """정규화 좌표의 얼굴 영역"""
    xmin: float
    ymin: float
    xmax: float
    ymax: float


@dataclass(frozen=True)
class PoseAnalysis:
    """포즈 추정기 출력 (스켈레톤 + 얼굴 영역 + 신뢰도)"""
    skeleton: Dict[str, Point]
    face_box: Optional[BoundingBox] = None
    confidence: float = 0.0

    @classmethod
    def from_dict(cls, data: Any, min_score: float = 0.5) -> "PoseAnalysis":
        """
        Parse the estimator JSON shape:
        {"skeleton": {name: {"x", "y"[, "score"]}}, "faceBox": {...}, "confidence": c}

        Keypoints scoring below ``min_score`` are dropped. Raises ValueError on a
        structurally malformed document.
        """
        if not isinstance(data, dict):
            raise ValueError("pose data must be a JSON object")
        raw_skeleton = data.get("skeleton")
        if not isinstance(raw_skeleton, dict):
            raise ValueError("pose data has no 'skeleton' object")

        skeleton: Dict[str, Point] = {}
        for name in KEYPOINT_NAMES:
            raw = raw_skeleton.get(name)
            if raw is None:
                continue
            try:
                x, y = float(raw["x"]), float(raw["y"])
                score = float(raw.get("score", 1.0))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise ValueError(f"invalid keypoint {name!r}: {raw!r}") from e
            if math.isnan(x) or math.isnan(y) or score < min_score:
                continue
            skeleton[name] = Point(x, y)

        face_box = None
        raw_box = data.get("faceBox")
        if raw_box is not None:
            try:
                face_box = BoundingBox(
                    xmin=float(raw_box["xmin"]),
                    ymin=float(raw_box["ymin"]),
                    xmax=float(raw_box["xmax"]),
                    ymax=float(raw_box["ymax"]),
                )
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"invalid faceBox: {raw_box!r}") from e

        return cls(
            skeleton=skeleton,
            face_box=face_box,
            confidence=float(data.get("confidence", 0.0) or 0.0),
        )


class WarningLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class HealthWarning:
    """건강 경고 항목"""
    level: WarningLevel
    message: str
    future_risk: str


@dataclass(frozen=True)
class HealthReport:
    """검사 결과 리포트 (생성 후 변경 불가)"""
    score: int
    title: str
    description: str
    details: Tuple[str, ...] = ()
    warnings: Tuple[HealthWarning, ...] = ()
    available: bool = True

    @property
    def rank(self) -> str:
        return rank(self.score)

    @classmethod
    def unavailable(cls, title: str, description: str) -> "HealthReport":
        return cls(score=0, title=title, description=description, available=False)


@dataclass
class EditorPoint:
    """에디터 점 (정규화 좌표, 드래그 중 x/y 변경)"""
    id: str
    x: float
    y: float


@dataclass(frozen=True)
class EditorConnection:
    """두 점을 잇는 선"""
    id: str
    from_id: str
    to_id: str

    def other(self, point_id: str) -> Optional[str]:
        if point_id == self.from_id:
            return self.to_id
        if point_id == self.to_id:
            return self.from_id
        return None


@dataclass(frozen=True)
class EditorAngle:
    """p1 -> center -> p2 각도 (값은 항상 현재 위치에서 재계산)"""
    id: str
    p1: str
    center: str
    p2: str

    @property
    def arms(self) -> Tuple[str, str]:
        return (self.p1, self.p2)


@dataclass(frozen=True)
class EditorLayout:
    """정규화 좌표 -> 렌더 좌표 변환 정보"""
    render_w: float = 0.0
    render_h: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    @classmethod
    def fit(cls, image_w: float, image_h: float, view_w: float, view_h: float) -> "EditorLayout":
        """이미지 비율을 유지하며 뷰 안에 맞춤 (letterbox / pillarbox)"""
        if image_w <= 0 or image_h <= 0 or view_w <= 0 or view_h <= 0:
            return cls()

        image_aspect = image_w / image_h
        view_aspect = view_w / view_h
        if image_aspect < view_aspect:
            render_h = float(view_h)
            render_w = view_h * image_aspect
            return cls(render_w, render_h, (view_w - render_w) / 2, 0.0)

        render_w = float(view_w)
        render_h = view_w / image_aspect
        return cls(render_w, render_h, 0.0, (view_h - render_h) / 2)

    @property
    def is_empty(self) -> bool:
        return self.render_w <= 0 or self.render_h <= 0

    def project(self, x: float, y: float) -> Point:
        return Point(self.offset_x + x * self.render_w, self.offset_y + y * self.render_h)

    def unproject(self, x: float, y: float) -> Point:
        return Point((x - self.offset_x) / self.render_w, (y - self.offset_y) / self.render_h)

