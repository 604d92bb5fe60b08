from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict

class Resolution(BaseModel):
    """Working resolution of the detector frame (the space landmarks are reported in)."""
    model_config = ConfigDict(frozen=True)
    width: float
    height: float

@dataclass(frozen=True)
class ScaleFactors:
    sx: float
    sy: float

    def apply(self, x: float, y: float) -> Tuple[float, float]:
        return x * self.sx, y * self.sy

    def inverse(self) -> "ScaleFactors":
        return ScaleFactors(1.0 / self.sx, 1.0 / self.sy)

IDENTITY = ScaleFactors(1.0, 1.0)

def _positive(v) -> bool:
    return v is not None and math.isfinite(v) and v > 0

class CoordinateScaler:
    """
    Maps detector-frame coordinates onto the render surface with independent
    x/y factors. No letterboxing: differing aspect ratios distort the overlay.
    """
    def __init__(self, detector: Optional[Resolution] = None):
        self.detector = detector

    def factors(self, render_width: float, render_height: float) -> Optional[ScaleFactors]:
        """Return the scale factors, or None when the frame cannot be scaled."""
        d = self.detector
        if d is None or not (_positive(d.width) and _positive(d.height)):
            return None
        if not (_positive(render_width) and _positive(render_height)):
            return None
        return ScaleFactors(render_width / d.width, render_height / d.height)
