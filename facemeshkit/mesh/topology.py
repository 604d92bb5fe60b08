from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple
from ..config import OverlayStyle
from ..face.frame import Bounds

ANCHOR = "NOSE_BASE"

# static edges: (a, b, kind), in draw order
EDGES: Sequence[Tuple[str, str, str]] = (
    ("LEFT_EYE", "RIGHT_EYE", "eyes"),
    ("LEFT_EYE", "LEFT_BROW_OUTER", "brow"),
    ("LEFT_EYE", "LEFT_BROW_INNER", "brow"),
    ("RIGHT_EYE", "RIGHT_BROW_OUTER", "brow"),
    ("RIGHT_EYE", "RIGHT_BROW_INNER", "brow"),
    ("LEFT_BROW_OUTER", "LEFT_BROW_INNER", "brow"),
    ("RIGHT_BROW_OUTER", "RIGHT_BROW_INNER", "brow"),
    ("LEFT_BROW_OUTER", "LEFT_TEMPLE", "brow"),
    ("RIGHT_BROW_OUTER", "RIGHT_TEMPLE", "brow"),
    ("LEFT_EYE", "NOSE_BASE", "nose"),
    ("RIGHT_EYE", "NOSE_BASE", "nose"),
    ("NOSE_BASE", "LEFT_MOUTH", "mouth"),
    ("NOSE_BASE", "RIGHT_MOUTH", "mouth"),
    ("LEFT_MOUTH", "RIGHT_MOUTH", "mouth"),
    ("LEFT_MOUTH", "BOTTOM_MOUTH", "mouth"),
    ("RIGHT_MOUTH", "BOTTOM_MOUTH", "mouth"),
    ("LEFT_CHEEK", "LEFT_MOUTH", "cheek"),
    ("RIGHT_CHEEK", "RIGHT_MOUTH", "cheek"),
    ("LEFT_TEMPLE", "LEFT_EAR", "forehead"),
    ("RIGHT_TEMPLE", "RIGHT_EAR", "forehead"),
)

# interpolated chains: each point links to its neighbour and back to ANCHOR
CHAINS: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("LEFT_TEMPLE", "FOREHEAD_LEFT", "FOREHEAD_CENTER", "FOREHEAD_RIGHT", "RIGHT_TEMPLE"), "forehead"),
    (("LEFT_EYE", "LEFT_CHEEK_MID", "LEFT_MOUTH"), "cheek"),
    (("RIGHT_EYE", "RIGHT_CHEEK_MID", "RIGHT_MOUTH"), "cheek"),
)

@dataclass(frozen=True)
class MeshPoint:
    name: str
    x: float
    y: float
    synthetic: bool = False

@dataclass(frozen=True)
class MeshEdge:
    a: Tuple[float, float]
    b: Tuple[float, float]
    a_name: str
    b_name: str
    kind: str
    color: str
    width: float
    opacity: float

@dataclass(frozen=True)
class Mesh:
    points: Dict[str, MeshPoint]
    edges: List[MeshEdge]
    bounds: Optional[Bounds] = None

    def kinds(self) -> List[str]:
        return [e.kind for e in self.edges]

    def has_edge(self, a: str, b: str) -> bool:
        return any({e.a_name, e.b_name} == {a, b} for e in self.edges)

def build_edges(points: Mapping[str, MeshPoint], style: OverlayStyle) -> List[MeshEdge]:
    """Edges whose endpoints both exist in `points`, each unordered pair once."""
    edges: List[MeshEdge] = []
    seen = set()

    def add(a: str, b: str, kind: str):
        key = frozenset((a, b))
        if a not in points or b not in points or key in seen: return
        seen.add(key)
        pa, pb = points[a], points[b]
        s = style.edge(kind)
        edges.append(MeshEdge(a=(pa.x, pa.y), b=(pb.x, pb.y), a_name=a, b_name=b,
                              kind=kind, color=s.color, width=s.width, opacity=s.opacity))

    for a, b, kind in EDGES:
        add(a, b, kind)
    for chain, kind in CHAINS:
        for a, b in zip(chain, chain[1:]):
            add(a, b, kind)
        for p in chain:
            add(p, ANCHOR, kind)
    return edges
