"""
Editable skeleton graph and the pointer-driven tool state machine.

``EditorGraph`` holds points, connections and angles in insertion order and
keeps a dependency index (point -> connections, point -> angles,
connection -> angles, point pair -> connection) so that deletes cascade by
lookup instead of scanning every element.

``EditorSession`` feeds pointer events to the graph according to the active
``EditorTool``. Each tool owns one immutable state value; switching tools
replaces it, which drops any pending drag, connection start or selection.
"""

import logging
import uuid
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, FrozenSet, Optional, Set, Tuple, Union

from .config import EditorConfig
from .constants import DEFAULT_CONNECTIONS, FACE_PARTS, KEYPOINT_NAMES
from .geometry import hit_test_angle, hit_test_connection, hit_test_point, unsigned_angle
from .models import EditorAngle, EditorConnection, EditorLayout, EditorPoint, Point, SkeletonData

logger = logging.getLogger(__name__)


def generate_id() -> str:
    return uuid.uuid4().hex[:9]


class EditorGraph:
    """에디터 점/선/각도 그래프"""

    def __init__(self, id_factory: Callable[[], str] = generate_id):
        self._new_id = id_factory
        self.points: Dict[str, EditorPoint] = {}
        self.connections: Dict[str, EditorConnection] = {}
        self.angles: Dict[str, EditorAngle] = {}

        self._point_connections: Dict[str, Set[str]] = defaultdict(set)
        self._point_angles: Dict[str, Set[str]] = defaultdict(set)
        self._connection_angles: Dict[str, Set[str]] = defaultdict(set)
        self._pairs: Dict[FrozenSet[str], str] = {}

    @classmethod
    def from_skeleton(cls, skeleton: SkeletonData, id_factory: Callable[[], str] = generate_id) -> "EditorGraph":
        """검출 결과로 초기 그래프 생성 (얼굴 키포인트 제외, 기본 연결 추가)"""
        graph = cls(id_factory)
        for name, p in skeleton.items():
            if p is None or name in FACE_PARTS:
                continue
            graph.add_point(p.x, p.y, point_id=name)
        for a, b in DEFAULT_CONNECTIONS:
            if a in graph.points and b in graph.points:
                graph.add_connection(a, b)
        return graph

    # --- points ---

    def add_point(self, x: float, y: float, point_id: Optional[str] = None) -> EditorPoint:
        point_id = point_id or self._new_id()
        if point_id in self.points:
            raise ValueError(f"duplicate point id: {point_id!r}")
        point = EditorPoint(point_id, x, y)
        self.points[point_id] = point
        logger.debug("add point %s (%.3f, %.3f)", point_id, x, y)
        return point

    def move_point(self, point_id: str, x: float, y: float) -> bool:
        point = self.points.get(point_id)
        if point is None:
            return False
        point.x, point.y = x, y
        return True

    def remove_point(self, point_id: str) -> bool:
        """점 삭제 + 이 점을 쓰는 선/각도 모두 삭제"""
        if point_id not in self.points:
            return False
        for angle_id in list(self._point_angles.get(point_id, ())):
            self.remove_angle(angle_id)
        for connection_id in list(self._point_connections.get(point_id, ())):
            self._drop_connection(connection_id)
        del self.points[point_id]
        self._point_angles.pop(point_id, None)
        self._point_connections.pop(point_id, None)
        logger.debug("remove point %s", point_id)
        return True

    # --- connections ---

    def find_connection(self, a: str, b: str) -> Optional[EditorConnection]:
        connection_id = self._pairs.get(frozenset((a, b)))
        return self.connections.get(connection_id) if connection_id else None

    def add_connection(self, from_id: str, to_id: str) -> Optional[EditorConnection]:
        """중복(방향 무관)/자기 연결/없는 점이면 None"""
        if from_id == to_id or from_id not in self.points or to_id not in self.points:
            return None
        pair = frozenset((from_id, to_id))
        if pair in self._pairs:
            return None

        connection = EditorConnection(self._new_id(), from_id, to_id)
        self.connections[connection.id] = connection
        self._pairs[pair] = connection.id
        self._point_connections[from_id].add(connection.id)
        self._point_connections[to_id].add(connection.id)

        # 이미 있는 각도 중 이 선을 팔로 쓰는 것 연결
        for angle_id in self._point_angles.get(from_id, set()) & self._point_angles.get(to_id, set()):
            if _uses_as_arm(self.angles[angle_id], connection):
                self._connection_angles[connection.id].add(angle_id)

        logger.debug("add connection %s: %s-%s", connection.id, from_id, to_id)
        return connection

    def remove_connection(self, connection_id: str) -> bool:
        """선 삭제 + 이 선을 팔로 쓰는 각도 삭제"""
        if connection_id not in self.connections:
            return False
        for angle_id in list(self._connection_angles.get(connection_id, ())):
            self.remove_angle(angle_id)
        self._drop_connection(connection_id)
        logger.debug("remove connection %s", connection_id)
        return True

    def _drop_connection(self, connection_id: str) -> None:
        connection = self.connections.pop(connection_id)
        del self._pairs[frozenset((connection.from_id, connection.to_id))]
        self._point_connections[connection.from_id].discard(connection_id)
        self._point_connections[connection.to_id].discard(connection_id)
        self._connection_angles.pop(connection_id, None)

    # --- angles ---

    def find_angle(self, center: str, a: str, b: str) -> Optional[EditorAngle]:
        """center가 같고 두 팔이 {a, b}인 각도 (팔 순서 무관)"""
        for angle_id in self._point_angles.get(center, ()):
            angle = self.angles[angle_id]
            if angle.center == center and {angle.p1, angle.p2} == {a, b}:
                return angle
        return None

    def add_angle(self, p1: str, center: str, p2: str) -> Optional[EditorAngle]:
        if len({p1, center, p2}) != 3:
            return None
        if any(pid not in self.points for pid in (p1, center, p2)):
            return None
        if self.find_angle(center, p1, p2) is not None:
            return None

        angle = EditorAngle(self._new_id(), p1, center, p2)
        self.angles[angle.id] = angle
        for pid in (p1, center, p2):
            self._point_angles[pid].add(angle.id)
        for arm in angle.arms:
            connection = self.find_connection(center, arm)
            if connection is not None:
                self._connection_angles[connection.id].add(angle.id)

        logger.debug("add angle %s: %s-%s-%s", angle.id, p1, center, p2)
        return angle

    def remove_angle(self, angle_id: str) -> bool:
        angle = self.angles.pop(angle_id, None)
        if angle is None:
            return False
        for pid in (angle.p1, angle.center, angle.p2):
            self._point_angles[pid].discard(angle_id)
        for arm in angle.arms:
            connection = self.find_connection(angle.center, arm)
            if connection is not None:
                self._connection_angles[connection.id].discard(angle_id)
        logger.debug("remove angle %s", angle_id)
        return True

    def angle_value(self, angle_id: str) -> Optional[int]:
        """현재 점 위치로 각도 재계산 (정규화 좌표 기준)"""
        angle = self.angles.get(angle_id)
        if angle is None:
            return None
        p1, pc, p2 = (self.points[pid] for pid in (angle.p1, angle.center, angle.p2))
        return unsigned_angle(Point(p1.x, p1.y), Point(pc.x, pc.y), Point(p2.x, p2.y))

    def to_skeleton(self) -> Dict[str, Point]:
        """키포인트 이름을 id로 가진 점만 스켈레톤으로 변환"""
        return {
            pid: Point(p.x, p.y) for pid, p in self.points.items() if pid in KEYPOINT_NAMES
        }

    def to_dict(self) -> dict:
        """렌더러/내보내기용 스냅샷"""
        return {
            "points": [{"id": p.id, "x": p.x, "y": p.y} for p in self.points.values()],
            "connections": [
                {"id": c.id, "from": c.from_id, "to": c.to_id} for c in self.connections.values()
            ],
            "angles": [
                {"id": a.id, "p1": a.p1, "center": a.center, "p2": a.p2, "value": self.angle_value(a.id)}
                for a in self.angles.values()
            ],
        }


def _uses_as_arm(angle: EditorAngle, connection: EditorConnection) -> bool:
    a, b = connection.from_id, connection.to_id
    return (angle.center == a and b in angle.arms) or (angle.center == b and a in angle.arms)


def shared_vertex(c1: EditorConnection, c2: EditorConnection) -> Optional[Tuple[str, str, str]]:
    """두 선의 공유 꼭짓점 -> (p1, center, p2). 없으면 None"""
    if c1.from_id == c2.from_id:
        return c1.to_id, c1.from_id, c2.to_id
    if c1.from_id == c2.to_id:
        return c1.to_id, c1.from_id, c2.from_id
    if c1.to_id == c2.from_id:
        return c1.from_id, c1.to_id, c2.to_id
    if c1.to_id == c2.to_id:
        return c1.from_id, c1.to_id, c2.from_id
    return None


class EditorTool(str, Enum):
    MOVE = "MOVE"
    ADD_POINT = "ADD_POINT"
    CONNECT = "CONNECT"
    ANGLE = "ANGLE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class IdleState:
    pass


@dataclass(frozen=True)
class MoveState:
    dragging_point_id: Optional[str] = None


@dataclass(frozen=True)
class ConnectState:
    start_id: Optional[str] = None


@dataclass(frozen=True)
class AngleState:
    selected: Tuple[str, ...] = ()


ToolState = Union[IdleState, MoveState, ConnectState, AngleState]

_INITIAL_STATES = {
    EditorTool.MOVE: MoveState,
    EditorTool.ADD_POINT: IdleState,
    EditorTool.CONNECT: ConnectState,
    EditorTool.ANGLE: AngleState,
    EditorTool.DELETE: IdleState,
}


class EditorSession:
    """포인터 이벤트 -> 그래프 편집"""

    def __init__(
        self,
        graph: Optional[EditorGraph] = None,
        layout: Optional[EditorLayout] = None,
        config: Optional[EditorConfig] = None,
    ):
        self.graph = graph if graph is not None else EditorGraph()
        self.layout = layout or EditorLayout()
        self.config = config or EditorConfig()
        self._tool = EditorTool.MOVE
        self._state: ToolState = MoveState()

    @property
    def tool(self) -> EditorTool:
        return self._tool

    @property
    def state(self) -> ToolState:
        return self._state

    def set_tool(self, tool: EditorTool) -> None:
        """도구 변경 시 임시 상태는 항상 초기화"""
        self._tool = EditorTool(tool)
        self._state = _INITIAL_STATES[self._tool]()

    def set_layout(self, layout: EditorLayout) -> None:
        self.layout = layout

    @property
    def dragging_point_id(self) -> Optional[str]:
        return self._state.dragging_point_id if isinstance(self._state, MoveState) else None

    @property
    def connecting_start_id(self) -> Optional[str]:
        return self._state.start_id if isinstance(self._state, ConnectState) else None

    @property
    def selected_connection_ids(self) -> Tuple[str, ...]:
        return self._state.selected if isinstance(self._state, AngleState) else ()

    # --- hit tests ---

    def _hit_point(self, cursor: Point) -> Optional[str]:
        return hit_test_point(cursor, self.graph.points.values(), self.layout, self.config.point_tolerance)

    def _hit_connection(self, cursor: Point) -> Optional[str]:
        return hit_test_connection(
            cursor, self.graph.connections.values(), self.graph.points, self.layout,
            self.config.connection_tolerance,
        )

    def _hit_angle(self, cursor: Point) -> Optional[str]:
        return hit_test_angle(
            cursor, self.graph.angles.values(), self.graph.points, self.layout,
            self.config.angle_tolerance,
        )

    # --- pointer events ---

    def pointer_down(self, x: float, y: float) -> bool:
        """렌더 좌표 클릭 처리. 그래프가 바뀌면 True"""
        if self.layout.is_empty:
            return False
        cursor = Point(x, y)
        handler = {
            EditorTool.MOVE: self._down_move,
            EditorTool.ADD_POINT: self._down_add_point,
            EditorTool.CONNECT: self._down_connect,
            EditorTool.ANGLE: self._down_angle,
            EditorTool.DELETE: self._down_delete,
        }[self._tool]
        return handler(cursor)

    def pointer_move(self, x: float, y: float) -> bool:
        """드래그 중인 점 이동 (범위 제한 없음)"""
        point_id = self.dragging_point_id
        if self._tool != EditorTool.MOVE or point_id is None or self.layout.is_empty:
            return False
        norm = self.layout.unproject(x, y)
        return self.graph.move_point(point_id, norm.x, norm.y)

    def pointer_up(self) -> None:
        if isinstance(self._state, MoveState):
            self._state = MoveState()

    def _down_move(self, cursor: Point) -> bool:
        hit = self._hit_point(cursor)
        if hit is not None:
            self._state = MoveState(hit)
        return False

    def _down_add_point(self, cursor: Point) -> bool:
        if self._hit_point(cursor) is not None:
            return False
        norm = self.layout.unproject(cursor.x, cursor.y)
        if 0 <= norm.x <= 1 and 0 <= norm.y <= 1:
            self.graph.add_point(norm.x, norm.y)
            return True
        return False

    def _down_connect(self, cursor: Point) -> bool:
        hit = self._hit_point(cursor)
        if hit is None:
            self._state = ConnectState()
            return False

        start = self.connecting_start_id
        if start is None or start == hit:
            self._state = ConnectState(hit)
            return False

        created = self.graph.add_connection(start, hit) is not None
        self._state = ConnectState()
        return created

    def _down_angle(self, cursor: Point) -> bool:
        hit = self._hit_connection(cursor)
        if hit is None:
            self._state = AngleState()
            return False

        selected = list(self.selected_connection_ids)
        if hit in selected:
            selected.remove(hit)
        else:
            selected.append(hit)

        created = False
        if len(selected) == 2:
            c1 = self.graph.connections.get(selected[0])
            c2 = self.graph.connections.get(selected[1])
            if c1 is not None and c2 is not None:
                vertex = shared_vertex(c1, c2)
                if vertex is not None:
                    p1, center, p2 = vertex
                    if self.graph.find_angle(center, p1, p2) is None:
                        created = self.graph.add_angle(p1, center, p2) is not None
                    selected = []
                else:
                    # 공유 꼭짓점 없음: 마지막 선만 남겨 다시 짝 맞추기
                    selected = [hit]

        self._state = AngleState(tuple(selected))
        return created

    def _down_delete(self, cursor: Point) -> bool:
        angle_id = self._hit_angle(cursor)
        if angle_id is not None:
            return self.graph.remove_angle(angle_id)
        point_id = self._hit_point(cursor)
        if point_id is not None:
            return self.graph.remove_point(point_id)
        connection_id = self._hit_connection(cursor)
        if connection_id is not None:
            return self.graph.remove_connection(connection_id)
        return False
