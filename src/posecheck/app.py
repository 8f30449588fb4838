"""
Posture Check - Main Application Window
"""

import sys
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from PySide6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QFileDialog, QStatusBar, QSplitter, QComboBox, QLabel
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap

from .assessments import PostureTest, get_tests
from .canvas import EditorCanvas
from .config import AppConfig, get_config
from .constants import FACE_PARTS
from .controls import ToolBar, ReportPanel
from .editor import EditorGraph, EditorTool
from .i18n import build_translator
from .models import HealthReport, Point, PoseAnalysis

logger = logging.getLogger(__name__)

TOOL_KEYS = [
    (Qt.Key.Key_1, EditorTool.MOVE),
    (Qt.Key.Key_2, EditorTool.ADD_POINT),
    (Qt.Key.Key_3, EditorTool.CONNECT),
    (Qt.Key.Key_4, EditorTool.ANGLE),
    (Qt.Key.Key_5, EditorTool.DELETE),
]


@dataclass
class PhotoSlot:
    """검사 사진 한 장 (사진 + 검출 결과 + 편집 그래프)"""
    image_path: Optional[str] = None
    pixmap: Optional[QPixmap] = None
    pose: Optional[PoseAnalysis] = None
    graph: EditorGraph = field(default_factory=EditorGraph)

    def skeleton(self) -> Optional[Dict[str, Point]]:
        """얼굴 키포인트는 검출값, 나머지는 편집된 점 사용"""
        if self.pose is None:
            return None
        skeleton = {
            name: p for name, p in self.pose.skeleton.items() if name in FACE_PARTS
        }
        skeleton.update(self.graph.to_skeleton())
        return skeleton


def load_pose_file(path: str, min_score: float) -> PoseAnalysis:
    """포즈 JSON 파일 읽기 (형식 오류 시 ValueError)"""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return PoseAnalysis.from_dict(data, min_score=min_score)


class PostureWindow(QMainWindow):
    """메인 윈도우"""

    def __init__(self, config: Optional[AppConfig] = None):
        super().__init__()
        self.config = config or get_config()
        self.t = build_translator(self.config.analysis.language)
        self.tests = get_tests(self.config.analysis)
        self.current_test: PostureTest = self.tests[0]
        self.slots: List[PhotoSlot] = [PhotoSlot()]
        self.slot_index: int = 0

        self._setup_ui()
        self._connect_signals()
        self._on_test_changed(self.current_test.id)

    def _setup_ui(self):
        self.setWindowTitle(self.t("app.title"))
        self.setMinimumSize(1200, 800)
        self.setStyleSheet("""
            QMainWindow {
                background-color: #1a1a2e;
            }
            QStatusBar {
                background-color: #16213e;
                color: #e0e0e0;
            }
        """)

        central = QWidget()
        self.setCentralWidget(central)

        outer_layout = QVBoxLayout(central)
        outer_layout.setContentsMargins(0, 0, 0, 0)
        outer_layout.setSpacing(0)

        self.tool_bar = ToolBar(self.tests, self.t)
        outer_layout.addWidget(self.tool_bar)

        content_widget = QWidget()
        content_layout = QHBoxLayout(content_widget)
        content_layout.setContentsMargins(10, 10, 10, 10)
        content_layout.setSpacing(10)

        self.canvas = EditorCanvas(self.config.editor)

        # 우측: 사진 선택 + 안내 + 결과
        side = QWidget()
        side.setFixedWidth(320)
        side_layout = QVBoxLayout(side)
        side_layout.setContentsMargins(0, 0, 0, 0)

        self.slot_combo = QComboBox()
        side_layout.addWidget(self.slot_combo)

        self.instruction_label = QLabel()
        self.instruction_label.setWordWrap(True)
        self.instruction_label.setStyleSheet("color: #FFD93D;")
        side_layout.addWidget(self.instruction_label)

        self.report_panel = ReportPanel(self.t)
        side_layout.addWidget(self.report_panel, 1)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self.canvas)
        splitter.addWidget(side)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 0)

        content_layout.addWidget(splitter)
        outer_layout.addWidget(content_widget, 1)

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)

    def _connect_signals(self):
        self.tool_bar.open_image_requested.connect(self._open_image)
        self.tool_bar.open_pose_requested.connect(self._open_pose)
        self.tool_bar.analyze_requested.connect(self.analyze)
        self.tool_bar.tool_changed.connect(self.canvas.set_tool)
        self.tool_bar.show_skeleton_changed.connect(self.canvas.set_show_skeleton)
        self.tool_bar.test_changed.connect(self._on_test_changed)
        self.slot_combo.currentIndexChanged.connect(self._select_slot)
        self.canvas.graph_changed.connect(self.report_panel.clear)

    def keyPressEvent(self, event):
        """숫자 키 1-5로 편집 도구 선택"""
        for key, tool in TOOL_KEYS:
            if event.key() == key:
                self.canvas.set_tool(tool)
                self.tool_bar.set_tool(tool)
                return
        super().keyPressEvent(event)

    def _on_test_changed(self, test_id: str):
        for test in self.tests:
            if test.id == test_id:
                self.current_test = test
                break

        # 필요한 사진 수만큼 슬롯 유지
        while len(self.slots) < self.current_test.required_poses:
            self.slots.append(PhotoSlot())

        self.slot_combo.blockSignals(True)
        self.slot_combo.clear()
        for i in range(self.current_test.required_poses):
            self.slot_combo.addItem(self.t("app.photo", i + 1))
        self.slot_combo.setVisible(self.current_test.required_poses > 1)
        self.slot_combo.blockSignals(False)

        self._select_slot(min(self.slot_index, self.current_test.required_poses - 1))
        self.report_panel.clear()

    def _select_slot(self, index: int):
        if index < 0:
            return
        self.slot_index = index
        if self.slot_combo.currentIndex() != index:
            self.slot_combo.setCurrentIndex(index)
        slot = self.slots[index]
        self.canvas.set_graph(slot.graph)
        self.canvas.set_image(slot.pixmap)
        self.instruction_label.setText(self.current_test.instruction(self.t, index))

    def _open_image(self):
        path, _ = QFileDialog.getOpenFileName(
            self, self.t("app.open_image"), "", "Images (*.png *.jpg *.jpeg *.bmp)"
        )
        if path:
            self.load_image(path)

    def _open_pose(self):
        path, _ = QFileDialog.getOpenFileName(
            self, self.t("app.open_pose"), "", "JSON (*.json)"
        )
        if path:
            self.load_pose(path)

    def load_image(self, path: str) -> bool:
        pixmap = QPixmap(path)
        if pixmap.isNull():
            logger.warning("Could not read image %s", path)
            self.status_bar.showMessage(self.t("app.status.load_error", os.path.basename(path), "invalid image"))
            return False
        slot = self.slots[self.slot_index]
        slot.image_path = path
        slot.pixmap = pixmap
        self.canvas.set_image(pixmap)
        return True

    def load_pose(self, path: str) -> bool:
        """포즈 JSON으로 현재 사진의 편집 그래프 초기화"""
        try:
            pose = load_pose_file(path, self.config.analysis.min_keypoint_score)
        except (OSError, ValueError) as e:
            logger.warning("Could not load pose data %s: %s", path, e)
            self.status_bar.showMessage(self.t("app.status.load_error", os.path.basename(path), e))
            return False

        slot = self.slots[self.slot_index]
        slot.pose = pose
        slot.graph = EditorGraph.from_skeleton(pose.skeleton)
        self.canvas.set_graph(slot.graph)
        self.report_panel.clear()

        logger.info("Loaded %d keypoints from %s", len(pose.skeleton), path)
        self.status_bar.showMessage(
            self.t("app.status.loaded", len(pose.skeleton), os.path.basename(path))
        )
        return True

    def analyze(self) -> Optional[HealthReport]:
        """편집된 스켈레톤으로 선택된 검사 실행"""
        needed = self.current_test.required_poses
        skeletons = [slot.skeleton() for slot in self.slots[:needed]]
        if any(s is None for s in skeletons):
            report = None
        else:
            report = self.current_test.analyze(skeletons, self.t)
        if report is None:
            logger.debug("%s: insufficient keypoints", self.current_test.id)
        self.report_panel.set_report(report)
        return report


def main(argv: Optional[List[str]] = None):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    argv = sys.argv if argv is None else argv

    app = QApplication(argv)
    app.setStyle("Fusion")

    window = PostureWindow()
    # 인자: [사진 경로] [포즈 JSON 경로]
    args = argv[1:]
    if len(args) >= 1:
        window.load_image(args[0])
    if len(args) >= 2:
        window.load_pose(args[1])
    window.show()
    sys.exit(app.exec())


def run_app():
    """Entry point for the application."""
    main()


if __name__ == "__main__":
    main()
