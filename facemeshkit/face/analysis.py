from __future__ import annotations
from typing import Any, List, Mapping, Optional
from pydantic import BaseModel
from .frame import LandmarkName, RawLandmarkFrame
from ..log import get_logger

log = get_logger(__name__)

class DetectionDetails(BaseModel):
    has_bounds: bool
    has_left_eye: bool
    has_right_eye: bool
    has_nose: bool
    face_id: Optional[int] = None
    roll_angle: Optional[float] = None
    yaw_angle: Optional[float] = None

class DetectionAnalysis(BaseModel):
    detected: bool
    complete: bool = False
    message: str
    details: Optional[DetectionDetails] = None

def analyze_detection(result: Optional[Mapping[str, Any]]) -> DetectionAnalysis:
    """Describe what a raw detector result contains, for debugging and status text."""
    if not result or "faces" not in result or result["faces"] is None:
        return DetectionAnalysis(detected=False, message="No face data received!")
    if len(result["faces"]) == 0:
        return DetectionAnalysis(detected=False, message="No faces detected in frame!")
    face = RawLandmarkFrame.from_detector(result["faces"][0])
    details = DetectionDetails(
        has_bounds=face.bounds is not None,
        has_left_eye=face.point(LandmarkName.LEFT_EYE) is not None,
        has_right_eye=face.point(LandmarkName.RIGHT_EYE) is not None,
        has_nose=face.point(LandmarkName.NOSE_BASE) is not None,
        face_id=face.face_id, roll_angle=face.roll_angle, yaw_angle=face.yaw_angle,
    )
    complete = details.has_bounds and details.has_left_eye and details.has_right_eye and details.has_nose
    message = "Face with complete landmarks detected" if complete else "Face detected but missing some landmarks"
    return DetectionAnalysis(detected=True, complete=complete, message=message, details=details)

def log_detection(result: Optional[Mapping[str, Any]]) -> DetectionAnalysis:
    analysis = analyze_detection(result)
    log.debug("face detection analysis: %s", analysis.model_dump_json())
    if analysis.detected:
        face = RawLandmarkFrame.from_detector(result["faces"][0])
        for name in (LandmarkName.LEFT_EYE, LandmarkName.RIGHT_EYE, LandmarkName.NOSE_BASE):
            p = face.point(name)
            if p is not None:
                log.debug("%s position: (%.1f, %.1f)", name.value, p.x, p.y)
        if face.bounds is not None:
            log.debug("face bounds: %s", face.bounds.model_dump())
    return analysis

def _pct(p: Optional[float]) -> Optional[int]:
    return None if p is None else int(round(p * 100))

class FaceSummary(BaseModel):
    roll: Optional[float] = None
    yaw: Optional[float] = None
    smile_pct: Optional[int] = None
    left_eye_open_pct: Optional[int] = None
    right_eye_open_pct: Optional[int] = None

    def lines(self) -> List[str]:
        def deg(v): return "--" if v is None else f"{v:.2f}°"
        def pct(v): return "--" if v is None else f"{v}%"
        return [f"Roll: {deg(self.roll)}", f"Yaw: {deg(self.yaw)}", f"Smile: {pct(self.smile_pct)}",
                f"Left Eye: {pct(self.left_eye_open_pct)}", f"Right Eye: {pct(self.right_eye_open_pct)}"]

def summarize(canonical) -> FaceSummary:
    """Pose and classification readout for a normalized face (CanonicalLandmarks)."""
    return FaceSummary(
        roll=canonical.roll_angle, yaw=canonical.yaw_angle,
        smile_pct=_pct(canonical.smiling_probability),
        left_eye_open_pct=_pct(canonical.left_eye_open_probability),
        right_eye_open_pct=_pct(canonical.right_eye_open_probability),
    )
