from __future__ import annotations
import cv2
import numpy as np
from typing import Iterable, Optional, Tuple

NAMED = {
    "black": "#000000", "white": "#ffffff", "red": "#ff0000", "green": "#008000", "lime": "#00ff00",
    "blue": "#0000ff", "yellow": "#ffff00", "orange": "#ffa500", "cyan": "#00ffff",
    "magenta": "#ff00ff", "deepskyblue": "#00bfff", "gray": "#808080",
}

def to_bgr(color: str) -> Optional[Tuple[int, int, int]]:
    """'#rrggbb' / '#rgb' / SVG name -> BGR tuple; None for 'none'/'transparent'."""
    c = color.strip().lower()
    if c in ("none", "transparent"): return None
    c = NAMED.get(c, c)
    if not c.startswith("#") or len(c) not in (4, 7):
        raise ValueError(f"unsupported color: {color!r}")
    h = c[1:]
    if len(h) == 3: h = "".join(ch*2 for ch in h)
    r, g, b = int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
    return (b, g, r)

def _pt(x: float, y: float) -> Tuple[int, int]:
    return int(round(x)), int(round(y))

def draw_primitives(image: np.ndarray, primitives: Iterable) -> np.ndarray:
    """Rasterize overlay primitives onto a BGR image in place."""
    for p in primitives:
        if p.type == "rect":
            fill = to_bgr(p.fill_color)
            a, b = _pt(p.x, p.y), _pt(p.x + p.width, p.y + p.height)
            if fill is not None: cv2.rectangle(image, a, b, fill, -1)
            stroke = to_bgr(p.stroke_color)
            if stroke is not None: cv2.rectangle(image, a, b, stroke, max(1, int(round(p.stroke_width))))
        elif p.type == "line":
            color = to_bgr(p.stroke_color)
            if color is None or p.opacity <= 0: continue
            thick = max(1, int(round(p.stroke_width)))
            if p.opacity >= 1.0:
                cv2.line(image, _pt(p.x1, p.y1), _pt(p.x2, p.y2), color, thick, cv2.LINE_AA)
            else:
                layer = image.copy()
                cv2.line(layer, _pt(p.x1, p.y1), _pt(p.x2, p.y2), color, thick, cv2.LINE_AA)
                cv2.addWeighted(layer, p.opacity, image, 1.0 - p.opacity, 0, dst=image)
        elif p.type == "circle":
            r = max(1, int(round(p.r)))
            fill = to_bgr(p.fill_color)
            if fill is not None: cv2.circle(image, _pt(p.cx, p.cy), r, fill, -1, cv2.LINE_AA)
            stroke = to_bgr(p.stroke_color)
            if stroke is not None: cv2.circle(image, _pt(p.cx, p.cy), r, stroke, 1, cv2.LINE_AA)
    return image
