from __future__ import annotations
import numpy as np
import cv2
from typing import Tuple

# FaceMesh index -> frontal template point (arbitrary units, +y up)
POSE_TEMPLATE = {
    1:   (0.0, 0.0, 0.0),        # nose tip
    33:  (-30.0, 35.0, -30.0),   # outer eye corners
    263: (30.0, 35.0, -30.0),
    133: (-10.0, 35.0, -30.0),   # inner eye corners
    362: (10.0, 35.0, -30.0),
    152: (0.0, -55.0, -15.0),    # chin
}
_TEMPLATE = np.array(list(POSE_TEMPLATE.values()), dtype=np.float64)
_TEMPLATE_IDX = list(POSE_TEMPLATE)

def pinhole(frame_w: int, frame_h: int, focal_scale: float = 0.9) -> np.ndarray:
    """Uncalibrated camera: focal length from the frame width, principal point at the centre."""
    f = focal_scale * frame_w
    return np.array([[f, 0.0, frame_w / 2.0], [0.0, f, frame_h / 2.0], [0.0, 0.0, 1.0]])

def estimate_head_pose(pts_px: np.ndarray, frame_w: int, frame_h: int) -> Tuple[float, float]:
    """pts_px: (N,2) FaceMesh points in pixels -> (yaw, pitch) degrees, (0, 0) if PnP fails."""
    image_pts = np.ascontiguousarray(pts_px[_TEMPLATE_IDX], dtype=np.float64)
    ok, rvec, _tvec = cv2.solvePnP(_TEMPLATE, image_pts, pinhole(frame_w, frame_h), None,
                                   flags=cv2.SOLVEPNP_ITERATIVE)
    if not ok:
        return 0.0, 0.0
    rot, _ = cv2.Rodrigues(rvec)
    # template +y is up, image +y is down: measure yaw about the rotated template's vertical
    pitch = np.degrees(np.arctan2(-rot[2, 1], -rot[2, 2]))
    yaw = np.degrees(np.arcsin(np.clip(rot[2, 0], -1.0, 1.0)))
    return float(yaw), float(pitch)

def eye_line_roll(left_eye: np.ndarray, right_eye: np.ndarray) -> float:
    """In-plane rotation of the eye line, degrees; positive when the right-hand eye sits lower."""
    a, b = sorted((left_eye, right_eye), key=lambda p: p[0])
    dx, dy = b[0] - a[0], b[1] - a[1]
    return float(np.degrees(np.arctan2(dy, dx)))
