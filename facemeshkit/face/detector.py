from __future__ import annotations
import numpy as np
import cv2
from typing import Dict, Optional
from .frame import Bounds, LandmarkName, Point, RawLandmarkFrame, Size
from .headpose import estimate_head_pose, eye_line_roll

# FaceMesh (refine_landmarks=True) index for each named landmark
MESH_INDEX: Dict[LandmarkName, int] = {
    LandmarkName.LEFT_EYE: 468,       # iris centre
    LandmarkName.RIGHT_EYE: 473,
    LandmarkName.NOSE_BASE: 2,
    LandmarkName.LEFT_MOUTH: 61,
    LandmarkName.RIGHT_MOUTH: 291,
    LandmarkName.BOTTOM_MOUTH: 17,
    LandmarkName.LEFT_CHEEK: 205,
    LandmarkName.RIGHT_CHEEK: 425,
    LandmarkName.LEFT_EAR: 234,
    LandmarkName.RIGHT_EAR: 454,
}

# eye contours for the eye aspect ratio: outer, top x2, inner, bottom x2
LEFT_EYE_CONTOUR = [33, 160, 158, 133, 153, 144]
RIGHT_EYE_CONTOUR = [362, 385, 387, 263, 373, 380]

EAR_CLOSED, EAR_OPEN = 0.15, 0.30
SMILE_NEUTRAL, SMILE_FULL = 0.85, 1.25  # mouth width / eye distance

def ear(eye_pts: np.ndarray) -> float:
    A = np.linalg.norm(eye_pts[1] - eye_pts[5])
    B = np.linalg.norm(eye_pts[2] - eye_pts[4])
    C = np.linalg.norm(eye_pts[0] - eye_pts[3])
    return float((A + B) / (2.0 * max(C, 1e-6)))

def _ramp(v: float, lo: float, hi: float) -> float:
    return float(np.clip((v - lo) / (hi - lo), 0.0, 1.0))

def frame_from_mesh(pts: np.ndarray, frame_w: int, frame_h: int, face_id: Optional[int] = None) -> RawLandmarkFrame:
    """pts: (478,2) refined FaceMesh points in pixels of the analysed frame."""
    landmarks = {name: Point(x=float(pts[i, 0]), y=float(pts[i, 1])) for name, i in MESH_INDEX.items()}
    x0, y0 = pts.min(axis=0); x1, y1 = pts.max(axis=0)
    bounds = Bounds(origin=Point(x=float(x0), y=float(y0)), size=Size(width=float(x1 - x0), height=float(y1 - y0)))

    le, re = pts[MESH_INDEX[LandmarkName.LEFT_EYE]], pts[MESH_INDEX[LandmarkName.RIGHT_EYE]]
    yaw, _pitch = estimate_head_pose(pts, frame_w, frame_h)
    eye_dist = float(np.linalg.norm(re - le))
    mouth_w = float(np.linalg.norm(pts[MESH_INDEX[LandmarkName.RIGHT_MOUTH]] - pts[MESH_INDEX[LandmarkName.LEFT_MOUTH]]))
    smile = _ramp(mouth_w / eye_dist, SMILE_NEUTRAL, SMILE_FULL) if eye_dist > 0 else None
    return RawLandmarkFrame(
        bounds=bounds, landmarks=landmarks,
        roll_angle=eye_line_roll(le, re), yaw_angle=yaw,
        smiling_probability=smile,
        left_eye_open_probability=_ramp(ear(pts[LEFT_EYE_CONTOUR]), EAR_CLOSED, EAR_OPEN),
        right_eye_open_probability=_ramp(ear(pts[RIGHT_EYE_CONTOUR]), EAR_CLOSED, EAR_OPEN),
        face_id=face_id,
    )

class FaceMeshDetector:
    """MediaPipe FaceMesh -> RawLandmarkFrame for the largest face, or None."""
    def __init__(self, static_image_mode=False, max_num_faces=1):
        import mediapipe as mp
        self.mesh = mp.solutions.face_mesh.FaceMesh(static_image_mode=static_image_mode,
                                                    refine_landmarks=True,
                                                    max_num_faces=max_num_faces)

    def __call__(self, frame_bgr) -> Optional[RawLandmarkFrame]:
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        res = self.mesh.process(rgb)
        if not res.multi_face_landmarks: return None
        h, w = frame_bgr.shape[:2]
        faces = [np.array([(lm.x * w, lm.y * h) for lm in lms.landmark], dtype=np.float64)
                 for lms in res.multi_face_landmarks]
        # largest bbox area = closest face
        areas = [float(np.prod(f.max(axis=0) - f.min(axis=0))) for f in faces]
        idx = int(np.argmax(areas))
        return frame_from_mesh(faces[idx], w, h, face_id=idx)

    def close(self):
        self.mesh.close()
