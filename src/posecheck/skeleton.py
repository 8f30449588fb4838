"""
Skeleton enrichment and joint/axis vector resolution.

Joint and axis references are parsed once into tokens (``AxisToken`` or
``JointToken``) carrying an ``inverted`` flag for the ``-`` prefix of the
textual form, and then resolved against an enriched skeleton.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

import numpy as np

from .models import Point, SkeletonData


def midpoint(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def enrich_skeleton(skeleton: SkeletonData) -> Dict[str, Point]:
    """검출된 키포인트 + 합성 키포인트(manubrium, pubis)"""
    enriched = {name: p for name, p in skeleton.items() if p is not None}

    left, right = enriched.get("leftShoulder"), enriched.get("rightShoulder")
    if left is not None and right is not None:
        enriched["manubrium"] = midpoint(left, right)

    left, right = enriched.get("leftHip"), enriched.get("rightHip")
    if left is not None and right is not None:
        enriched["pubis"] = midpoint(left, right)

    return enriched


class Axis(Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class Joint(Enum):
    LEFT_BICEPS = "leftBiceps"
    RIGHT_BICEPS = "rightBiceps"
    LEFT_FOREARM = "leftForarm"
    RIGHT_FOREARM = "rightForarm"
    LEFT_THIGH = "leftThigh"
    RIGHT_THIGH = "rightThigh"
    LEFT_TIBIA = "leftTibia"
    RIGHT_TIBIA = "rightTibia"
    LEFT_CHEST = "leftChest"
    RIGHT_CHEST = "rightChest"
    LEFT_LEG = "leftLeg"
    RIGHT_LEG = "rightLeg"
    LEFT_NECK = "leftNeck"
    RIGHT_NECK = "rightNeck"
    NECK = "neck"


# 관절 -> (시작 키포인트, 끝 키포인트). 벡터는 끝 - 시작
JOINT_SEGMENTS: Dict[Joint, Tuple[str, str]] = {
    Joint.LEFT_BICEPS: ("leftShoulder", "leftElbow"),
    Joint.RIGHT_BICEPS: ("rightShoulder", "rightElbow"),
    Joint.LEFT_FOREARM: ("leftElbow", "leftWrist"),
    Joint.RIGHT_FOREARM: ("rightElbow", "rightWrist"),
    Joint.LEFT_THIGH: ("leftHip", "leftKnee"),
    Joint.RIGHT_THIGH: ("rightHip", "rightKnee"),
    Joint.LEFT_TIBIA: ("leftKnee", "leftAnkle"),
    Joint.RIGHT_TIBIA: ("rightKnee", "rightAnkle"),
    Joint.LEFT_CHEST: ("leftShoulder", "leftHip"),
    Joint.RIGHT_CHEST: ("rightShoulder", "rightHip"),
    Joint.LEFT_LEG: ("leftHip", "leftAnkle"),
    Joint.RIGHT_LEG: ("rightHip", "rightAnkle"),
    Joint.LEFT_NECK: ("manubrium", "leftEar"),
    Joint.RIGHT_NECK: ("manubrium", "rightEar"),
    Joint.NECK: ("manubrium", "nose"),
}

# 이미지 좌표계 (y 아래 방향 증가)
AXIS_VECTORS: Dict[Axis, Tuple[float, float]] = {
    Axis.VERTICAL: (0.0, 1.0),
    Axis.HORIZONTAL: (1.0, 0.0),
}


@dataclass(frozen=True)
class AxisToken:
    axis: Axis
    inverted: bool = False

    def __str__(self) -> str:
        return ("-" if self.inverted else "") + self.axis.value


@dataclass(frozen=True)
class JointToken:
    joint: Joint
    inverted: bool = False

    def __str__(self) -> str:
        return ("-" if self.inverted else "") + self.joint.value


Token = Union[AxisToken, JointToken]

_AXES_BY_NAME = {a.value: a for a in Axis}
_JOINTS_BY_NAME = {j.value: j for j in Joint}


def parse_token(text: str) -> Token:
    """'-leftBiceps', 'vertical' 등의 문자열을 토큰으로 변환"""
    inverted = text.startswith("-")
    name = text[1:] if inverted else text
    if name in _AXES_BY_NAME:
        return AxisToken(_AXES_BY_NAME[name], inverted)
    if name in _JOINTS_BY_NAME:
        return JointToken(_JOINTS_BY_NAME[name], inverted)
    raise ValueError(f"unknown joint or axis token: {text!r}")


def resolve_vector(token: Token, enriched: Dict[str, Point]) -> Optional[np.ndarray]:
    """토큰 -> 방향 벡터 [dx, dy]. 끝점이 없으면 None"""
    sign = -1.0 if token.inverted else 1.0

    if isinstance(token, AxisToken):
        return sign * np.array(AXIS_VECTORS[token.axis], dtype=float)

    start_name, end_name = JOINT_SEGMENTS[token.joint]
    start = enriched.get(start_name)
    end = enriched.get(end_name)
    if start is None or end is None:
        return None
    return sign * np.array([end.x - start.x, end.y - start.y], dtype=float)
