"""
Constants shared by the analysis engine and the skeleton editor.
"""

from typing import List, Tuple


# 포즈 추정기(PoseNet) 키포인트 이름
KEYPOINT_NAMES = (
    "nose",
    "leftEye",
    "rightEye",
    "leftEar",
    "rightEar",
    "leftShoulder",
    "rightShoulder",
    "leftElbow",
    "rightElbow",
    "leftWrist",
    "rightWrist",
    "leftHip",
    "rightHip",
    "leftKnee",
    "rightKnee",
    "leftAnkle",
    "rightAnkle",
)

# 에디터에서 제외하는 얼굴 키포인트
FACE_PARTS = ("nose", "leftEye", "rightEye", "leftEar", "rightEar")

# 에디터 초기 연결 (PoseNet 기본 스켈레톤)
DEFAULT_CONNECTIONS: List[Tuple[str, str]] = [
    ("leftShoulder", "rightShoulder"),
    ("leftShoulder", "leftHip"),
    ("rightShoulder", "rightHip"),
    ("leftHip", "rightHip"),
    ("leftShoulder", "leftElbow"),
    ("leftElbow", "leftWrist"),
    ("rightShoulder", "rightElbow"),
    ("rightElbow", "rightWrist"),
    ("leftHip", "leftKnee"),
    ("leftKnee", "leftAnkle"),
    ("rightHip", "rightKnee"),
    ("rightKnee", "rightAnkle"),
]

# 각도 라벨/호 반지름 (px)
ANGLE_LABEL_RADIUS = 45.0
ANGLE_ARC_RADIUS = 30.0

# 신체 부위별 색상
BODY_PART_COLORS = {
    'left': "#00FFFF",
    'right': "#FF00FF",
    'center': "#FFFFFF",
    'selected': "#FFFF00",
}


def get_body_part(point_id: str) -> str:
    """키포인트 id로 좌/우/중심 구분"""
    name = point_id.lower()
    if 'left' in name:
        return 'left'
    if 'right' in name:
        return 'right'
    return 'center'


def get_connection_part(from_id: str, to_id: str) -> str:
    """양 끝이 같은 쪽일 때만 좌/우, 가로지르는 연결은 중심"""
    part = get_body_part(from_id)
    if part != 'center' and part == get_body_part(to_id):
        return part
    return 'center'
