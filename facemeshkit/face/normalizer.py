from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional, Tuple
from .frame import Bounds, LandmarkName, Point, RawLandmarkFrame

REQUIRED_LANDMARKS: Tuple[LandmarkName, ...] = (
    LandmarkName.LEFT_EYE, LandmarkName.RIGHT_EYE, LandmarkName.NOSE_BASE)

@dataclass(frozen=True)
class CanonicalLandmarks:
    """Validated subset of a raw frame: every point here has finite x, y."""
    points: Dict[LandmarkName, Point] = field(default_factory=dict)
    bounds: Optional[Bounds] = None
    roll_angle: Optional[float] = None
    yaw_angle: Optional[float] = None
    smiling_probability: Optional[float] = None
    left_eye_open_probability: Optional[float] = None
    right_eye_open_probability: Optional[float] = None
    face_id: Optional[int] = None

    def __contains__(self, name) -> bool:
        return LandmarkName(name) in self.points

    def __iter__(self) -> Iterator[LandmarkName]:
        return iter(self.points)

    def __len__(self) -> int:
        return len(self.points)

    def get(self, name) -> Optional[Point]:
        return self.points.get(LandmarkName(name))

def normalize(frame: Optional[RawLandmarkFrame],
              required: Iterable[LandmarkName] = REQUIRED_LANDMARKS) -> Optional[CanonicalLandmarks]:
    if frame is None: return None
    # keep detector order so downstream output is stable
    points = {name: p for name, p in frame.landmarks.items() if p is not None and p.finite()}
    if any(LandmarkName(r) not in points for r in required):
        return None
    bounds = frame.bounds if frame.bounds is not None and frame.bounds.valid() else None
    return CanonicalLandmarks(
        points=points, bounds=bounds,
        roll_angle=frame.roll_angle, yaw_angle=frame.yaw_angle,
        smiling_probability=frame.smiling_probability,
        left_eye_open_probability=frame.left_eye_open_probability,
        right_eye_open_probability=frame.right_eye_open_probability,
        face_id=frame.face_id,
    )
