import numpy as np, pytest
from facemeshkit.render.draw import draw_primitives, to_bgr
from facemeshkit.render.overlay import Circle, Line, Rect

def test_colors():
    assert to_bgr("#ff0000") == (0, 0, 255)
    assert to_bgr("red") == (0, 0, 255)
    assert to_bgr("#fff") == (255, 255, 255)
    assert to_bgr("none") is None
    with pytest.raises(ValueError):
        to_bgr("chartreuse-ish")

def test_draws_onto_image():
    img = np.zeros((100, 100, 3), np.uint8)
    prims = [
        Rect(x=5, y=5, width=90, height=90, stroke_color="#0000ff", stroke_width=1),
        Line(x1=10, y1=50, x2=90, y2=50, stroke_color="#ffffff", stroke_width=3, opacity=0.5),
        Circle(cx=30, cy=30, r=4, stroke_color="#00ff00", fill_color="#00ff00"),
    ]
    out = draw_primitives(img, prims)
    assert out is img
    assert tuple(img[5, 50]) == (255, 0, 0)
    assert tuple(img[30, 30]) == (0, 255, 0)
    assert 60 < img[50, 50, 0] < 200  # half-transparent white
    assert tuple(img[80, 20]) == (0, 0, 0)
