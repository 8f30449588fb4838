"""
posecheck - Posture assessment from 2D pose keypoints
A PySide6-based tool for scoring posture tests and editing detected skeletons.
"""

__version__ = "0.1.0"

# Lazy imports to avoid pulling in Qt for headless use
def __getattr__(name):
    if name in ("Point", "PoseAnalysis", "HealthReport", "HealthWarning"):
        from . import models
        return getattr(models, name)
    elif name in ("get_tests", "find_test"):
        from . import assessments
        return getattr(assessments, name)
    elif name in ("EditorGraph", "EditorSession", "EditorTool"):
        from . import editor
        return getattr(editor, name)
    elif name == "build_translator":
        from .i18n import build_translator
        return build_translator
    elif name == "PostureWindow":
        from .app import PostureWindow
        return PostureWindow
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Point",
    "PoseAnalysis",
    "HealthReport",
    "HealthWarning",
    "get_tests",
    "find_test",
    "EditorGraph",
    "EditorSession",
    "EditorTool",
    "build_translator",
    "PostureWindow",
    "__version__",
]


def main():
    """Entry point for the application."""
    from .app import run_app
    run_app()
