from __future__ import annotations
import time
from collections import deque
from datetime import datetime
from enum import Enum
from typing import Deque, List, Optional
from ..face.analysis import summarize
from ..log import get_logger
from .events import Event

log = get_logger(__name__)

class DetectionState(str, Enum):
    NO_FACE = "no_face"
    FACE_DETECTED = "face_detected"

class DetectionLog:
    """Bounded, timestamped transition log; newest entry first."""
    def __init__(self, maxlen: int = 10):
        self.entries: Deque[str] = deque(maxlen=maxlen)

    def add(self, message: str, t: Optional[float] = None):
        stamp = datetime.fromtimestamp(time.time() if t is None else t).strftime("%H:%M:%S")
        self.entries.appendleft(f"{stamp}: {message}")

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return len(self.entries)

class DetectionSession:
    """
    Presence state machine over {NO_FACE, FACE_DETECTED}.
    With the default frame counts of 1 every single-frame change flips the
    state; larger counts require that many consecutive frames to switch.
    """
    def __init__(self, acquire_frames: int = 1, release_frames: int = 1, log_size: int = 10):
        if acquire_frames < 1 or release_frames < 1:
            raise ValueError("acquire_frames and release_frames must be >= 1")
        self.acquire_frames = acquire_frames
        self.release_frames = release_frames
        self.state = DetectionState.NO_FACE
        self.log = DetectionLog(log_size)
        self._streak = 0  # consecutive frames disagreeing with the current state

    @property
    def face_detected(self) -> bool:
        return self.state is DetectionState.FACE_DETECTED

    def update(self, canonical) -> List[Event]:
        """Feed one frame's normalized face (or None); returns transition events."""
        t = time.time()
        present = canonical is not None
        if present == self.face_detected:
            self._streak = 0
            return []
        self._streak += 1
        needed = self.acquire_frames if present else self.release_frames
        if self._streak < needed:
            return []
        self._streak = 0
        if present:
            self.state = DetectionState.FACE_DETECTED
            self.log.add("Face detected! Starting real-time tracking...", t)
            log.info("face acquired")
            return [Event(ts=t, type="face_acquired", face=summarize(canonical))]
        self.state = DetectionState.NO_FACE
        self.log.add("Face lost from view", t)
        log.info("face lost")
        return [Event(ts=t, type="face_lost")]

    def reset(self):
        self.state = DetectionState.NO_FACE
        self._streak = 0
