from __future__ import annotations
from typing import Iterable
from xml.sax.saxutils import quoteattr

def _f(v: float) -> str:
    return f"{v:.2f}".rstrip("0").rstrip(".")

def to_svg(primitives: Iterable, width: float, height: float) -> str:
    parts = [f'<svg xmlns="http://www.w3.org/2000/svg" width="{_f(width)}" height="{_f(height)}" '
             f'viewBox="0 0 {_f(width)} {_f(height)}">']
    for p in primitives:
        if p.type == "rect":
            parts.append(f'<rect x="{_f(p.x)}" y="{_f(p.y)}" width="{_f(p.width)}" height="{_f(p.height)}" '
                         f'stroke={quoteattr(p.stroke_color)} stroke-width="{_f(p.stroke_width)}" fill={quoteattr(p.fill_color)}/>')
        elif p.type == "line":
            parts.append(f'<line x1="{_f(p.x1)}" y1="{_f(p.y1)}" x2="{_f(p.x2)}" y2="{_f(p.y2)}" '
                         f'stroke={quoteattr(p.stroke_color)} stroke-width="{_f(p.stroke_width)}" opacity="{_f(p.opacity)}"/>')
        elif p.type == "circle":
            parts.append(f'<circle cx="{_f(p.cx)}" cy="{_f(p.cy)}" r="{_f(p.r)}" '
                         f'stroke={quoteattr(p.stroke_color)} fill={quoteattr(p.fill_color)}/>')
    parts.append("</svg>")
    return "\n".join(parts)
