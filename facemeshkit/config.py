from __future__ import annotations
import os
import yaml
from pathlib import Path
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from .geometry.scaler import Resolution

ENV_VAR = "FACEMESHKIT_CONFIG"

class ConfigError(ValueError):
    pass

class EdgeStyle(BaseModel):
    model_config = ConfigDict(frozen=True)
    color: str = "#ffff00"
    width: float = Field(2.0, gt=0)
    opacity: float = Field(1.0, ge=0.0, le=1.0)

EDGE_KINDS = ("eyes", "brow", "nose", "mouth", "cheek", "forehead")

def _default_edges() -> Dict[str, EdgeStyle]:
    return {
        "eyes": EdgeStyle(color="#ffff00"),
        "brow": EdgeStyle(color="#ffa500", width=1.5),
        "nose": EdgeStyle(color="#ff0000"),
        "mouth": EdgeStyle(color="#ffffff"),
        "cheek": EdgeStyle(color="#00bfff", width=1.5, opacity=0.8),
        "forehead": EdgeStyle(color="#00ff00", width=1.0, opacity=0.6),
    }

class OverlayStyle(BaseModel):
    edges: Dict[str, EdgeStyle] = Field(default_factory=_default_edges)
    bounds_color: str = "#0000ff"
    bounds_width: float = Field(2.0, gt=0)
    landmark_color: str = "#0000ff"
    synthetic_color: str = "#ffffff"
    landmark_radius: float = Field(5.0, gt=0)
    synthetic_radius: float = Field(2.0, gt=0)

    @field_validator("edges", mode="before")
    @classmethod
    def _merge_edges(cls, v):
        # a partial mapping only overrides the kinds it names
        if isinstance(v, dict):
            unknown = sorted(set(v) - set(EDGE_KINDS))
            if unknown:
                raise ValueError(f"unknown edge kind(s) {unknown}; expected one of {list(EDGE_KINDS)}")
            return {**_default_edges(), **v}
        return v

    def edge(self, kind: str) -> EdgeStyle:
        return self.edges.get(kind) or EdgeStyle()

class SessionConfig(BaseModel):
    acquire_frames: int = Field(1, ge=1)
    release_frames: int = Field(1, ge=1)
    log_size: int = Field(10, ge=1)

class OverlayConfig(BaseModel):
    detector: Optional[Resolution] = None
    style: OverlayStyle = Field(default_factory=OverlayStyle)
    session: SessionConfig = Field(default_factory=SessionConfig)

def load_config(path: str | Path | None = None) -> OverlayConfig:
    """Load an overlay config from YAML; no path (and no env override) gives the defaults."""
    if path is None:
        path = os.environ.get(ENV_VAR)
        if not path: return OverlayConfig()
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")
    try:
        with open(p, "r", encoding="utf-8") as f: cfg = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML format in {p}: {e}") from e
    if not isinstance(cfg, dict):
        raise ConfigError(f"Config root must be a mapping: {p}")
    try:
        return OverlayConfig.model_validate(cfg)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {p}: {e}") from e
