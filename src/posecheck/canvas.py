"""
EditorCanvas - photo + editable skeleton widget.
"""

import math
from typing import Optional

from PySide6.QtWidgets import QWidget
from PySide6.QtCore import Qt, Signal, QPointF, QRectF
from PySide6.QtGui import QPainter, QColor, QPen, QBrush, QFont, QPixmap

from .config import EditorConfig
from .constants import ANGLE_ARC_RADIUS, BODY_PART_COLORS, get_body_part, get_connection_part
from .editor import EditorGraph, EditorSession, EditorTool
from .geometry import arc_geometry, project
from .models import EditorLayout


class EditorCanvas(QWidget):
    """사진 위에 스켈레톤을 그리고 편집하는 캔버스 위젯"""

    # 시그널: 점/선/각도가 추가, 삭제, 이동되었을 때 발생
    graph_changed = Signal()

    def __init__(self, config: Optional[EditorConfig] = None, parent=None):
        super().__init__(parent)
        self.session = EditorSession(config=config)
        self.pixmap: Optional[QPixmap] = None
        self.image_size = (0, 0)
        self.show_skeleton: bool = True

        # 시각화 옵션
        self.point_radius: int = 6
        self.line_width: int = 3
        self.label_font_size: int = 10

        self.setMouseTracking(True)
        self.setMinimumSize(640, 480)
        self.setStyleSheet("background-color: #1a1a2e;")

    @property
    def graph(self) -> EditorGraph:
        return self.session.graph

    def set_graph(self, graph: EditorGraph):
        self.session.graph = graph
        self.session.set_tool(self.session.tool)
        self.update()

    def set_tool(self, tool: EditorTool):
        self.session.set_tool(tool)
        self.update()

    def set_show_skeleton(self, show: bool):
        self.show_skeleton = show
        self.update()

    def set_image(self, pixmap: Optional[QPixmap]):
        """배경 사진 설정 (레이아웃 재계산)"""
        self.pixmap = pixmap if pixmap is not None and not pixmap.isNull() else None
        if self.pixmap is None:
            self.set_image_size(0, 0)
        else:
            self.set_image_size(self.pixmap.width(), self.pixmap.height())

    def set_image_size(self, width: int, height: int):
        self.image_size = (width, height)
        self._update_layout()

    def _update_layout(self):
        image_w, image_h = self.image_size
        self.session.set_layout(EditorLayout.fit(image_w, image_h, self.width(), self.height()))
        self.update()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._update_layout()

    def mousePressEvent(self, event):
        if not self.show_skeleton or event.button() != Qt.MouseButton.LeftButton:
            return
        pos = event.position()
        if self.session.pointer_down(pos.x(), pos.y()):
            self.graph_changed.emit()
        self.update()

    def mouseMoveEvent(self, event):
        if not self.show_skeleton:
            return
        pos = event.position()
        if self.session.pointer_move(pos.x(), pos.y()):
            self.graph_changed.emit()
            self.update()

    def mouseReleaseEvent(self, event):
        self.session.pointer_up()
        self.update()

    def paintEvent(self, event):
        """캔버스 렌더링"""
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.fillRect(self.rect(), QColor("#1a1a2e"))

            layout = self.session.layout
            if self.pixmap is None or layout.is_empty:
                painter.setPen(QColor("#ffffff"))
                painter.setFont(QFont("Segoe UI", 14))
                painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, "Open a photo to start")
                return

            target = QRectF(layout.offset_x, layout.offset_y, layout.render_w, layout.render_h)
            painter.drawPixmap(target, self.pixmap, QRectF(self.pixmap.rect()))

            if self.show_skeleton:
                self._draw_connections(painter, layout)
                self._draw_angles(painter, layout)
                self._draw_points(painter, layout)
        finally:
            painter.end()

    def _draw_connections(self, painter: QPainter, layout: EditorLayout):
        selected = set(self.session.selected_connection_ids)
        for conn in self.graph.connections.values():
            p1 = self.graph.points.get(conn.from_id)
            p2 = self.graph.points.get(conn.to_id)
            if p1 is None or p2 is None:
                continue
            if conn.id in selected:
                color = QColor(BODY_PART_COLORS["selected"])
                width = self.line_width + 2
            else:
                color = QColor(BODY_PART_COLORS[get_connection_part(conn.from_id, conn.to_id)])
                width = self.line_width
            a, b = project(p1, layout), project(p2, layout)
            painter.setPen(QPen(color, width))
            painter.drawLine(QPointF(a.x, a.y), QPointF(b.x, b.y))

    def _draw_angles(self, painter: QPainter, layout: EditorLayout):
        """각도 호 + 값 라벨"""
        painter.setFont(QFont("Segoe UI", self.label_font_size, QFont.Weight.Bold))
        for angle in self.graph.angles.values():
            ids = (angle.p1, angle.center, angle.p2)
            if any(pid not in self.graph.points for pid in ids):
                continue
            p1, pc, p2 = (project(self.graph.points[pid], layout) for pid in ids)
            arc = arc_geometry(pc, p1, p2)

            # Qt 각도: 1/16도 단위, 반시계 방향이 양수 (y축 반전)
            r = ANGLE_ARC_RADIUS
            rect = QRectF(pc.x - r, pc.y - r, r * 2, r * 2)
            painter.setPen(QPen(QColor(BODY_PART_COLORS["selected"]), 2))
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawArc(
                rect,
                int(round(-math.degrees(arc.start) * 16)),
                int(round(-math.degrees(arc.sweep) * 16)),
            )

            value = self.graph.angle_value(angle.id)
            label = f"{value}°"
            label_rect = QRectF(arc.label.x - 25, arc.label.y - 10, 50, 20)
            painter.fillRect(label_rect, QColor(0, 0, 0, 160))
            painter.setPen(QColor("#ffffff"))
            painter.drawText(label_rect, Qt.AlignmentFlag.AlignCenter, label)

    def _draw_points(self, painter: QPainter, layout: EditorLayout):
        highlighted = {self.session.connecting_start_id, self.session.dragging_point_id}
        radius = self.point_radius
        for point in self.graph.points.values():
            if point.id in highlighted:
                color = QColor(BODY_PART_COLORS["selected"])
            else:
                color = QColor(BODY_PART_COLORS[get_body_part(point.id)])
            p = project(point, layout)
            painter.setPen(QPen(QColor("#1a1a2e"), 2))
            painter.setBrush(QBrush(color))
            painter.drawEllipse(QPointF(p.x, p.y), radius, radius)
