from __future__ import annotations
import numpy as np
from typing import Dict, Optional, Sequence, Tuple
from ..config import OverlayStyle
from ..face.frame import Bounds, Point, Size
from ..face.normalizer import CanonicalLandmarks
from ..geometry.scaler import ScaleFactors
from .topology import Mesh, MeshPoint, build_edges

XY = Tuple[float, float]

# offsets in detector pixels: (outward x, y); negative y is up
BROW_OFFSET = (20.0, -15.0)
TEMPLE_OFFSET = (40.0, -45.0)
FOREHEAD_RATIOS = (0.0, 0.25, 0.5, 0.75, 1.0)
CHEEK_RATIOS = (0.0, 0.5, 1.0)

def lerp_chain(a: XY, b: XY, ratios: Sequence[float]) -> np.ndarray:
    """(len(ratios), 2) points along a->b."""
    a = np.asarray(a, dtype=np.float64); b = np.asarray(b, dtype=np.float64)
    t = np.asarray(ratios, dtype=np.float64)[:, None]
    return a + t * (b - a)

def _outward(eye: XY, other: Optional[XY], default: float) -> float:
    if other is None or eye[0] == other[0]: return default
    return 1.0 if eye[0] > other[0] else -1.0

def synthetic_points(scaled: Dict[str, XY], f: ScaleFactors) -> Dict[str, XY]:
    """Derived points from already-scaled canonical points; only where inputs exist."""
    out: Dict[str, XY] = {}
    le, re = scaled.get("LEFT_EYE"), scaled.get("RIGHT_EYE")
    for side, eye, other, default in (("LEFT", le, re, -1.0), ("RIGHT", re, le, 1.0)):
        if eye is None: continue
        d = _outward(eye, other, default)
        out[f"{side}_BROW_OUTER"] = (eye[0] + d*BROW_OFFSET[0]*f.sx, eye[1] + BROW_OFFSET[1]*f.sy)
        out[f"{side}_BROW_INNER"] = (eye[0] - d*BROW_OFFSET[0]*f.sx, eye[1] + BROW_OFFSET[1]*f.sy)
        out[f"{side}_TEMPLE"] = (eye[0] + d*TEMPLE_OFFSET[0]*f.sx, eye[1] + TEMPLE_OFFSET[1]*f.sy)

    lt, rt = out.get("LEFT_TEMPLE"), out.get("RIGHT_TEMPLE")
    if lt is not None and rt is not None:
        chain = lerp_chain(lt, rt, FOREHEAD_RATIOS)[1:-1]  # ends are the temples
        for name, (x, y) in zip(("FOREHEAD_LEFT", "FOREHEAD_CENTER", "FOREHEAD_RIGHT"), chain):
            out[name] = (float(x), float(y))

    for side, eye in (("LEFT", le), ("RIGHT", re)):
        mouth = scaled.get(f"{side}_MOUTH")
        if eye is None or mouth is None: continue
        x, y = lerp_chain(eye, mouth, CHEEK_RATIOS)[1]
        out[f"{side}_CHEEK_MID"] = (float(x), float(y))
    return out

def scale_bounds(bounds: Optional[Bounds], f: ScaleFactors) -> Optional[Bounds]:
    if bounds is None: return None
    x, y = f.apply(bounds.origin.x, bounds.origin.y)
    w, h = f.apply(bounds.size.width, bounds.size.height)
    return Bounds(origin=Point(x=x, y=y), size=Size(width=w, height=h))

def synthesize(canonical: CanonicalLandmarks, factors: ScaleFactors,
               style: Optional[OverlayStyle] = None) -> Mesh:
    style = style or OverlayStyle()
    scaled: Dict[str, XY] = {}
    for name, p in canonical.points.items():
        scaled[name.value] = factors.apply(p.x, p.y)
    points: Dict[str, MeshPoint] = {n: MeshPoint(n, x, y) for n, (x, y) in scaled.items()}
    for n, (x, y) in synthetic_points(scaled, factors).items():
        points[n] = MeshPoint(n, x, y, synthetic=True)
    return Mesh(points=points, edges=build_edges(points, style),
                bounds=scale_bounds(canonical.bounds, factors))
