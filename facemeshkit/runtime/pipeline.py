from __future__ import annotations
from typing import Annotated, Any, Callable, List, Mapping, Optional
from pydantic import BaseModel, Field
from ..config import OverlayConfig, OverlayStyle
from ..face.analysis import FaceSummary, summarize
from ..face.frame import RawLandmarkFrame, first_face
from ..face.normalizer import CanonicalLandmarks, normalize
from ..geometry.scaler import CoordinateScaler, Resolution, ScaleFactors
from ..log import get_logger
from ..mesh.synth import synthesize
from ..render.overlay import Primitive, render
from .events import Event
from .session import DetectionSession, DetectionState

log = get_logger(__name__)

class FrameResult(BaseModel):
    primitives: List[Annotated[Primitive, Field(discriminator="type")]] = []
    state: DetectionState
    events: List[Event] = []
    scalable: bool = True
    face: Optional[FaceSummary] = None

def compute_primitives(canonical: Optional[CanonicalLandmarks], factors: Optional[ScaleFactors],
                       style: Optional[OverlayStyle] = None) -> List[Primitive]:
    """Pure per-frame overlay: nothing to draw without a face or a usable scale."""
    if canonical is None or factors is None: return []
    return render(synthesize(canonical, factors, style), style)

class OverlayPipeline:
    """
    Runs one detector callback through normalize -> scale -> synthesize -> render
    and keeps the only cross-frame state, the detection session. One instance
    per camera stream.
    """
    def __init__(self, config: Optional[OverlayConfig] = None):
        self.config = config or OverlayConfig()
        self.scaler = CoordinateScaler(self.config.detector)
        s = self.config.session
        self.session = DetectionSession(s.acquire_frames, s.release_frames, s.log_size)

    @property
    def state(self) -> DetectionState:
        return self.session.state

    def set_detector_resolution(self, width: float, height: float):
        self.scaler = CoordinateScaler(Resolution(width=width, height=height))

    def process(self, frame: Optional[RawLandmarkFrame], render_width: float, render_height: float,
                fault: bool = False) -> FrameResult:
        events = [Event(type="detector_fault")] if fault else []
        factors = self.scaler.factors(render_width, render_height)
        if factors is None:
            log.debug("unscalable frame (render %sx%s, detector %s)", render_width, render_height, self.scaler.detector)
            return FrameResult(state=self.session.state, events=events, scalable=False)
        canonical = normalize(frame)
        events += self.session.update(canonical)
        style = self.config.style
        return FrameResult(
            primitives=compute_primitives(canonical, factors, style),
            state=self.session.state, events=events,
            face=summarize(canonical) if canonical is not None else None,
        )

    def step(self, detect: Callable[[], Optional[RawLandmarkFrame]],
             render_width: float, render_height: float) -> FrameResult:
        """Call the detector at the boundary; a failing call counts as no face this tick."""
        fault = False
        try:
            frame = detect()
        except Exception:
            log.warning("detector call failed; treating frame as empty", exc_info=True)
            frame, fault = None, True
        return self.process(frame, render_width, render_height, fault=fault)

    def process_payload(self, payload: Optional[Mapping[str, Any]],
                        render_width: float, render_height: float) -> FrameResult:
        return self.step(lambda: first_face(payload), render_width, render_height)
