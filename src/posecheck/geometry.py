"""
Editor geometry: projection into render space and hit-testing.

Editor points are stored in normalized [0, 1] coordinates; every hit test
projects them through the current ``EditorLayout`` and compares distances in
render pixels. The first matching element in collection order wins.
"""

import math
from typing import Iterable, Mapping, NamedTuple, Optional

from .angles import joint_angle as unsigned_angle  # noqa: F401 (표시용 각도 크기)
from .constants import ANGLE_LABEL_RADIUS
from .models import EditorAngle, EditorConnection, EditorLayout, EditorPoint, Point


def project(p: EditorPoint, layout: EditorLayout) -> Point:
    """정규화 좌표 -> 렌더 좌표"""
    return layout.project(p.x, p.y)


def distance(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def distance_point_to_segment(p: Point, v: Point, w: Point) -> float:
    """점 p와 선분 v-w 사이 최단 거리"""
    l2 = (v.x - w.x) ** 2 + (v.y - w.y) ** 2
    if l2 == 0:
        return distance(p, v)

    t = ((p.x - v.x) * (w.x - v.x) + (p.y - v.y) * (w.y - v.y)) / l2
    t = max(0.0, min(1.0, t))
    return distance(p, Point(v.x + t * (w.x - v.x), v.y + t * (w.y - v.y)))


class ArcGeometry(NamedTuple):
    start: float  # 시작 방위 (rad)
    sweep: float  # 짧은 호 방향의 부호 있는 각 (-pi, pi]
    label: Point  # 라벨 위치


def arc_geometry(center: Point, a: Point, b: Point, label_radius: float = ANGLE_LABEL_RADIUS) -> ArcGeometry:
    """center에서 a, b 방향 사이 짧은 호와 그 중앙의 라벨 위치"""
    start = math.atan2(a.y - center.y, a.x - center.x)
    end = math.atan2(b.y - center.y, b.x - center.x)

    sweep = end - start
    if sweep > math.pi:
        sweep -= 2 * math.pi
    elif sweep <= -math.pi:
        sweep += 2 * math.pi

    mid = start + sweep / 2
    label = Point(center.x + math.cos(mid) * label_radius, center.y + math.sin(mid) * label_radius)
    return ArcGeometry(start, sweep, label)


def hit_test_point(
    cursor: Point,
    points: Iterable[EditorPoint],
    layout: EditorLayout,
    tolerance: float = 20.0,
) -> Optional[str]:
    for p in points:
        if distance(cursor, project(p, layout)) < tolerance:
            return p.id
    return None


def hit_test_connection(
    cursor: Point,
    connections: Iterable[EditorConnection],
    points: Mapping[str, EditorPoint],
    layout: EditorLayout,
    tolerance: float = 15.0,
) -> Optional[str]:
    for conn in connections:
        p1, p2 = points.get(conn.from_id), points.get(conn.to_id)
        if p1 is None or p2 is None:
            continue
        if distance_point_to_segment(cursor, project(p1, layout), project(p2, layout)) < tolerance:
            return conn.id
    return None


def hit_test_angle(
    cursor: Point,
    angles: Iterable[EditorAngle],
    points: Mapping[str, EditorPoint],
    layout: EditorLayout,
    tolerance: float = 25.0,
) -> Optional[str]:
    """각도 라벨(호 중앙, ANGLE_LABEL_RADIUS 위치) 근처 클릭 판정"""
    for angle in angles:
        p1, pc, p2 = points.get(angle.p1), points.get(angle.center), points.get(angle.p2)
        if p1 is None or pc is None or p2 is None:
            continue
        arc = arc_geometry(project(pc, layout), project(p1, layout), project(p2, layout))
        if distance(cursor, arc.label) < tolerance:
            return angle.id
    return None
