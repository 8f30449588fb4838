"""
Control widgets for the posture checker - ToolBar and ReportPanel.
"""

from typing import List, Optional

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QButtonGroup,
    QGroupBox, QComboBox, QCheckBox, QScrollArea
)
from PySide6.QtCore import Qt, Signal

from .assessments import PostureTest
from .editor import EditorTool
from .i18n import Translator
from .models import HealthReport, WarningLevel

# 도구 버튼 순서와 번역 키
TOOL_LABELS = [
    (EditorTool.MOVE, "app.tool.move"),
    (EditorTool.ADD_POINT, "app.tool.add_point"),
    (EditorTool.CONNECT, "app.tool.connect"),
    (EditorTool.ANGLE, "app.tool.angle"),
    (EditorTool.DELETE, "app.tool.delete"),
]

WARNING_COLORS = {
    WarningLevel.LOW: "#4ECDC4",
    WarningLevel.MEDIUM: "#FFB347",
    WarningLevel.HIGH: "#FF6B6B",
}


class ToolBar(QWidget):
    """상단 도구 바 (파일 열기, 편집 도구, 검사 선택)"""

    tool_changed = Signal(object)
    test_changed = Signal(str)
    show_skeleton_changed = Signal(bool)
    open_image_requested = Signal()
    open_pose_requested = Signal()
    analyze_requested = Signal()

    def __init__(self, tests: List[PostureTest], t: Translator, parent=None):
        super().__init__(parent)
        self.tests = tests
        self.t = t
        self._setup_ui()

    def _setup_ui(self):
        self.setFixedHeight(60)
        self.setObjectName("toolBar")
        self.setStyleSheet("""
            #toolBar {
                background-color: #16213e;
                border-bottom: 1px solid #3d3d5c;
            }
            QLabel {
                background-color: transparent;
                border: none;
                color: #e0e0e0;
            }
        """)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(15, 8, 15, 8)
        layout.setSpacing(10)

        open_image_btn = QPushButton(self.t("app.open_image"))
        open_image_btn.setStyleSheet(self._get_button_style())
        open_image_btn.clicked.connect(self.open_image_requested.emit)
        layout.addWidget(open_image_btn)

        open_pose_btn = QPushButton(self.t("app.open_pose"))
        open_pose_btn.setStyleSheet(self._get_button_style())
        open_pose_btn.clicked.connect(self.open_pose_requested.emit)
        layout.addWidget(open_pose_btn)

        layout.addSpacing(20)

        # 편집 도구 (하나만 선택)
        self.tool_group = QButtonGroup(self)
        self.tool_group.setExclusive(True)
        self.tool_buttons = {}
        for tool, key in TOOL_LABELS:
            btn = QPushButton(self.t(key))
            btn.setCheckable(True)
            btn.setStyleSheet(self._get_tool_style())
            btn.clicked.connect(lambda checked, tool=tool: self.tool_changed.emit(tool))
            self.tool_group.addButton(btn)
            self.tool_buttons[tool] = btn
            layout.addWidget(btn)
        self.tool_buttons[EditorTool.MOVE].setChecked(True)

        self.skeleton_check = QCheckBox("Skeleton")
        self.skeleton_check.setChecked(True)
        self.skeleton_check.setStyleSheet("color: #e0e0e0;")
        self.skeleton_check.toggled.connect(self.show_skeleton_changed.emit)
        layout.addWidget(self.skeleton_check)

        layout.addStretch()

        test_label = QLabel(f"{self.t('app.test')}:")
        layout.addWidget(test_label)

        self.test_combo = QComboBox()
        for test in self.tests:
            self.test_combo.addItem(test.name(self.t), test.id)
        self.test_combo.currentIndexChanged.connect(
            lambda i: self.test_changed.emit(self.test_combo.itemData(i))
        )
        self.test_combo.setStyleSheet(self._get_combo_style())
        layout.addWidget(self.test_combo)

        analyze_btn = QPushButton(self.t("app.analyze"))
        analyze_btn.setStyleSheet(self._get_button_style())
        analyze_btn.clicked.connect(self.analyze_requested.emit)
        layout.addWidget(analyze_btn)

    def current_test_id(self) -> Optional[str]:
        return self.test_combo.currentData()

    def set_tool(self, tool: EditorTool):
        """시그널 없이 버튼 상태만 변경"""
        self.tool_buttons[tool].setChecked(True)

    def _get_button_style(self):
        return """
            QPushButton {
                background-color: #4ECDC4;
                color: #1a1a2e;
                border: none;
                padding: 8px 16px;
                font-size: 12px;
                font-weight: bold;
                border-radius: 6px;
            }
            QPushButton:hover {
                background-color: #5FE6DD;
            }
            QPushButton:pressed {
                background-color: #3DBDB5;
            }
        """

    def _get_tool_style(self):
        return """
            QPushButton {
                background-color: #2d2d44;
                color: #e0e0e0;
                border: 1px solid #3d3d5c;
                padding: 6px 12px;
                font-size: 12px;
                border-radius: 6px;
            }
            QPushButton:hover {
                border-color: #4ECDC4;
            }
            QPushButton:checked {
                background-color: #4ECDC4;
                color: #1a1a2e;
                font-weight: bold;
            }
        """

    def _get_combo_style(self):
        return """
            QComboBox {
                background-color: #2d2d44;
                color: #e0e0e0;
                border: 1px solid #3d3d5c;
                border-radius: 6px;
                padding: 6px 12px;
                font-size: 12px;
                min-width: 180px;
            }
            QComboBox:hover {
                border-color: #4ECDC4;
            }
            QComboBox QAbstractItemView {
                background-color: #2d2d44;
                color: #e0e0e0;
                border: 1px solid #3d3d5c;
                selection-background-color: #4ECDC4;
                selection-color: #1a1a2e;
            }
        """


class ReportPanel(QWidget):
    """검사 결과 패널"""

    def __init__(self, t: Translator, parent=None):
        super().__init__(parent)
        self.t = t
        self.report: Optional[HealthReport] = None
        self._setup_ui()
        self.clear()

    def _setup_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)

        scroll_area = QScrollArea()
        scroll_area.setWidgetResizable(True)
        scroll_area.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        scroll_area.setStyleSheet("""
            QScrollArea {
                border: none;
                background-color: transparent;
            }
        """)

        content = QWidget()
        layout = QVBoxLayout(content)
        layout.setSpacing(12)
        layout.setContentsMargins(5, 5, 5, 5)

        # === 요약 ===
        self.title_label = QLabel()
        self.title_label.setWordWrap(True)
        self.title_label.setStyleSheet("color: #ffffff; font-size: 16px; font-weight: bold;")
        layout.addWidget(self.title_label)

        self.score_label = QLabel()
        self.score_label.setStyleSheet("color: #4ECDC4; font-size: 14px; font-weight: bold;")
        layout.addWidget(self.score_label)

        self.description_label = QLabel()
        self.description_label.setWordWrap(True)
        self.description_label.setStyleSheet("color: #e0e0e0;")
        layout.addWidget(self.description_label)

        # === 측정값 ===
        details_group = QGroupBox(self.t("app.technical_details"))
        details_group.setStyleSheet(self._get_group_style())
        self.details_layout = QVBoxLayout(details_group)
        layout.addWidget(details_group)

        # === 경고 ===
        warnings_group = QGroupBox(self.t("app.warnings"))
        warnings_group.setStyleSheet(self._get_group_style())
        self.warnings_layout = QVBoxLayout(warnings_group)
        layout.addWidget(warnings_group)

        layout.addStretch()

        scroll_area.setWidget(content)
        main_layout.addWidget(scroll_area)

    def clear(self):
        self.report = None
        self.title_label.setText("")
        self.score_label.setText("")
        self.description_label.setText("")
        self._clear_layout(self.details_layout)
        self._clear_layout(self.warnings_layout)

    def set_report(self, report: Optional[HealthReport]):
        """결과 표시. None이면 키포인트 부족 안내"""
        self.clear()
        self.report = report
        if report is None:
            self.title_label.setText(self.t("app.insufficient_data"))
            return

        self.title_label.setText(report.title)
        self.description_label.setText(report.description)
        if not report.available:
            self.score_label.setText(self.t("app.unavailable"))
            return
        self.score_label.setText(self.t("app.score", report.score, report.rank))

        for detail in report.details:
            label = QLabel(detail)
            label.setStyleSheet("color: #e0e0e0;")
            self.details_layout.addWidget(label)

        for warning in report.warnings:
            color = WARNING_COLORS[warning.level]
            label = QLabel(f"{warning.message}\n{warning.future_risk}")
            label.setWordWrap(True)
            label.setStyleSheet(f"color: {color}; border-left: 3px solid {color}; padding-left: 6px;")
            self.warnings_layout.addWidget(label)

    def _clear_layout(self, layout):
        while layout.count():
            item = layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

    def _get_group_style(self):
        return """
            QGroupBox {
                color: #e0e0e0;
                font-size: 13px;
                font-weight: bold;
                border: 1px solid #3d3d5c;
                border-radius: 8px;
                margin-top: 10px;
                padding-top: 10px;
            }
            QGroupBox::title {
                subcontrol-origin: margin;
                left: 10px;
                padding: 0 5px;
            }
        """
