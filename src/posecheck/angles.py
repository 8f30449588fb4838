"""
Angle engine.

``angle_between`` is a signed, direction-sensitive angle in [0, 360).
``evaluate`` applies an ``AngleDefinition`` to an enriched skeleton; note that it
measures from joint2's vector to joint1's vector, and every definition in
``posecheck.assessments`` is authored against that order.

The point-pair helpers (``horizontal_deviation``, ``vertical_deviation``,
``joint_angle``) measure unsigned deviations directly from keypoints.
"""

import math
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from .models import Point
from .scoring import round_half_up
from .skeleton import Token, parse_token, resolve_vector


def angle_between(v1: np.ndarray, v2: np.ndarray) -> float:
    """v1 -> v2 부호 있는 각도 (0~360°)"""
    cross = v1[0] * v2[1] - v1[1] * v2[0]
    dot = v1[0] * v2[0] + v1[1] * v2[1]
    angle = float(np.degrees(np.arctan2(cross, dot)))
    return angle + 360.0 if angle < 0 else angle


@dataclass(frozen=True)
class AngleDefinition:
    """
    Declarative angle measurement.

    ``center`` names the vertex for labelling only; the angle itself is taken
    between the directions of ``joint1`` and ``joint2``. ``min``/``max`` are the
    scoring range handed to ``linear_score``.
    """
    center: str
    joint1: Token
    joint2: Token
    min: float
    max: float

    @classmethod
    def of(cls, center: str, joint1: str, joint2: str, min: float, max: float) -> "AngleDefinition":
        return cls(center, parse_token(joint1), parse_token(joint2), min, max)


def evaluate(definition: AngleDefinition, enriched: Dict[str, Point]) -> Optional[float]:
    v1 = resolve_vector(definition.joint1, enriched)
    v2 = resolve_vector(definition.joint2, enriched)
    if v1 is None or v2 is None:
        return None
    return angle_between(v2, v1)


def horizontal_deviation(left: Point, right: Point) -> int:
    """수평선 대비 기울기 (어깨/골반 라인)"""
    rad = math.atan2(right.y - left.y, right.x - left.x)
    return round_half_up(abs(math.degrees(rad)))


def vertical_deviation(top: Point, bottom: Point) -> int:
    """수직선 대비 기울기 (0° = 정확히 위아래)"""
    rad = math.atan2(bottom.x - top.x, bottom.y - top.y)
    return round_half_up(abs(math.degrees(rad)))


def joint_angle(p1: Point, center: Point, p2: Point) -> int:
    """p1 -> center -> p2 내각 (0~180°, 정수)"""
    rad = math.atan2(p2.y - center.y, p2.x - center.x) - math.atan2(p1.y - center.y, p1.x - center.x)
    degrees = abs(math.degrees(rad))
    if degrees > 180:
        degrees = 360 - degrees
    return round_half_up(degrees)
