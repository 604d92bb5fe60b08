from __future__ import annotations
import cv2, time
import numpy as np
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

@dataclass
class CameraFrame:
    image: np.ndarray
    index: int
    ts: float = field(default_factory=time.time)

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) of the captured image: the detector resolution."""
        h, w = self.image.shape[:2]
        return w, h

def open_capture(source: int|str=0, width: int=1280, height: int=720):
    cap = cv2.VideoCapture(source)
    # requested size is a hint; the driver may pick another, read it back from the frames
    if width:  cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    if height: cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    if not cap.isOpened():
        cap.release()
        raise RuntimeError(f"Cannot open camera {source!r}")
    return cap

def frames(source: int|str=0, width: int=1280, height: int=720,
           max_frames: Optional[int]=None) -> Iterator[CameraFrame]:
    """Yield frames until the capture ends or max_frames have been read."""
    cap = open_capture(source, width, height)
    try:
        index = 0
        while max_frames is None or index < max_frames:
            ok, image = cap.read()
            if not ok: break
            yield CameraFrame(image=image, index=index)
            index += 1
    finally:
        cap.release()
