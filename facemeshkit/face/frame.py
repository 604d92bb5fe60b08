from __future__ import annotations
import math
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional
from pydantic import BaseModel, ConfigDict, ValidationError
from ..log import get_logger

log = get_logger(__name__)

class LandmarkName(str, Enum):
    LEFT_EYE = "LEFT_EYE"
    RIGHT_EYE = "RIGHT_EYE"
    NOSE_BASE = "NOSE_BASE"
    LEFT_MOUTH = "LEFT_MOUTH"
    RIGHT_MOUTH = "RIGHT_MOUTH"
    BOTTOM_MOUTH = "BOTTOM_MOUTH"
    LEFT_CHEEK = "LEFT_CHEEK"
    RIGHT_CHEEK = "RIGHT_CHEEK"
    LEFT_EAR = "LEFT_EAR"
    RIGHT_EAR = "RIGHT_EAR"

# camelCase keys used by mobile face detector payloads
PAYLOAD_KEYS: Dict[LandmarkName, str] = {
    LandmarkName.LEFT_EYE: "leftEyePosition",
    LandmarkName.RIGHT_EYE: "rightEyePosition",
    LandmarkName.NOSE_BASE: "noseBasePosition",
    LandmarkName.LEFT_MOUTH: "leftMouthPosition",
    LandmarkName.RIGHT_MOUTH: "rightMouthPosition",
    LandmarkName.BOTTOM_MOUTH: "bottomMouthPosition",
    LandmarkName.LEFT_CHEEK: "leftCheekPosition",
    LandmarkName.RIGHT_CHEEK: "rightCheekPosition",
    LandmarkName.LEFT_EAR: "leftEarPosition",
    LandmarkName.RIGHT_EAR: "rightEarPosition",
}

class Point(BaseModel):
    model_config = ConfigDict(frozen=True)
    x: float; y: float

    def finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

class Size(BaseModel):
    model_config = ConfigDict(frozen=True)
    width: float; height: float

class Bounds(BaseModel):
    model_config = ConfigDict(frozen=True)
    origin: Point
    size: Size

    def valid(self) -> bool:
        return (self.origin.finite() and math.isfinite(self.size.width) and math.isfinite(self.size.height)
                and self.size.width >= 0 and self.size.height >= 0)

    def corners(self) -> List[Point]:
        x, y = self.origin.x, self.origin.y
        w, h = self.size.width, self.size.height
        return [Point(x=x, y=y), Point(x=x+w, y=y), Point(x=x+w, y=y+h), Point(x=x, y=y+h)]

class RawLandmarkFrame(BaseModel):
    """One face as reported by the detector for a single callback."""
    model_config = ConfigDict(frozen=True)
    bounds: Optional[Bounds] = None
    landmarks: Dict[LandmarkName, Optional[Point]] = {}
    roll_angle: Optional[float] = None
    yaw_angle: Optional[float] = None
    smiling_probability: Optional[float] = None
    left_eye_open_probability: Optional[float] = None
    right_eye_open_probability: Optional[float] = None
    face_id: Optional[int] = None

    def point(self, name: LandmarkName | str) -> Optional[Point]:
        return self.landmarks.get(LandmarkName(name))

    @classmethod
    def from_detector(cls, face: Mapping[str, Any]) -> "RawLandmarkFrame":
        """
        Build a frame from a camelCase detector payload. Malformed points are
        dropped one by one; the rest of the face is kept.
        """
        points: Dict[LandmarkName, Optional[Point]] = {}
        for name, key in PAYLOAD_KEYS.items():
            p = _point(face.get(key), key)
            if p is not None: points[name] = p
        face_id = face.get("faceID")
        return cls(
            bounds=_bounds(face.get("bounds")),
            landmarks=points,
            roll_angle=_num(face.get("rollAngle")),
            yaw_angle=_num(face.get("yawAngle")),
            smiling_probability=_prob(face.get("smilingProbability")),
            left_eye_open_probability=_prob(face.get("leftEyeOpenProbability")),
            right_eye_open_probability=_prob(face.get("rightEyeOpenProbability")),
            face_id=face_id if isinstance(face_id, int) and not isinstance(face_id, bool) else None,
        )

def first_face(result: Optional[Mapping[str, Any]]) -> Optional[RawLandmarkFrame]:
    """Pick faces[0] out of a detector result; a bare face payload is accepted too."""
    if not result: return None
    faces = result.get("faces") if "faces" in result else [result]
    if not faces: return None
    return RawLandmarkFrame.from_detector(faces[0])

def _num(v: Any) -> Optional[float]:
    if isinstance(v, bool) or not isinstance(v, (int, float)): return None
    return float(v)

def _prob(v: Any) -> Optional[float]:
    p = _num(v)
    if p is None or not (0.0 <= p <= 1.0): return None
    return p

def _point(raw: Any, key: str) -> Optional[Point]:
    if raw is None: return None
    if isinstance(raw, Point): return raw
    x = _num(raw.get("x")) if isinstance(raw, Mapping) else None
    y = _num(raw.get("y")) if isinstance(raw, Mapping) else None
    if x is None or y is None:
        log.debug("dropping malformed landmark %s=%r", key, raw)
        return None
    return Point(x=x, y=y)

def _bounds(raw: Any) -> Optional[Bounds]:
    if raw is None: return None
    try:
        return Bounds.model_validate(raw)
    except ValidationError:
        log.debug("dropping malformed bounds %r", raw)
        return None
