from __future__ import annotations
from typing import List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict
from ..config import OverlayStyle
from ..mesh.topology import Mesh

class Circle(BaseModel):
    model_config = ConfigDict(frozen=True)
    type: Literal["circle"] = "circle"
    cx: float; cy: float; r: float
    stroke_color: str
    fill_color: str

class Line(BaseModel):
    model_config = ConfigDict(frozen=True)
    type: Literal["line"] = "line"
    x1: float; y1: float; x2: float; y2: float
    stroke_color: str
    stroke_width: float = 2.0
    opacity: float = 1.0

class Rect(BaseModel):
    model_config = ConfigDict(frozen=True)
    type: Literal["rect"] = "rect"
    x: float; y: float; width: float; height: float
    stroke_color: str
    stroke_width: float = 2.0
    fill_color: str = "none"

Primitive = Union[Rect, Line, Circle]

def render(mesh: Optional[Mesh], style: Optional[OverlayStyle] = None) -> List[Primitive]:
    """
    Flatten a mesh into draw order: bounds rect, edge lines, then point
    circles on top. A missing mesh renders nothing.
    """
    if mesh is None: return []
    style = style or OverlayStyle()
    out: List[Primitive] = []
    if mesh.bounds is not None:
        b = mesh.bounds
        out.append(Rect(x=b.origin.x, y=b.origin.y, width=b.size.width, height=b.size.height,
                        stroke_color=style.bounds_color, stroke_width=style.bounds_width))
    for e in mesh.edges:
        out.append(Line(x1=e.a[0], y1=e.a[1], x2=e.b[0], y2=e.b[1],
                        stroke_color=e.color, stroke_width=e.width, opacity=e.opacity))
    for p in mesh.points.values():
        if p.synthetic:
            out.append(Circle(cx=p.x, cy=p.y, r=style.synthetic_radius,
                              stroke_color=style.synthetic_color, fill_color=style.synthetic_color))
        else:
            out.append(Circle(cx=p.x, cy=p.y, r=style.landmark_radius,
                              stroke_color=style.landmark_color, fill_color=style.landmark_color))
    if mesh.bounds is not None:
        for c in mesh.bounds.corners():
            out.append(Circle(cx=c.x, cy=c.y, r=style.landmark_radius,
                              stroke_color=style.bounds_color, fill_color=style.bounds_color))
    return out
