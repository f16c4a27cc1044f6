from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import numpy as np
from .geometry import distance, denormalize

THUMB_TIP=4; INDEX_TIP=8; MIDDLE_TIP=12

@dataclass(frozen=True)
class FrameObservation:
    """One classified frame: 21 normalized keypoints plus the classifier's verdict."""
    pts: np.ndarray
    label: int
    confidence: float
    width: int
    height: int

    def __post_init__(self):
        pts = np.asarray(self.pts, dtype=float)
        if pts.shape != (21,3):
            raise ValueError(f"expected (21, 3) landmarks, got {pts.shape}")
        object.__setattr__(self, "pts", pts)

@dataclass(frozen=True)
class Signals:
    pinch: float
    spread: float
    fingertip: Tuple[float,float]

def analyze(obs: FrameObservation, scale: float=10.0) -> Signals:
    """
    Pinch = thumb/index tip distance, spread = perimeter of the thumb/index/middle
    tip triangle; both in pixels divided by `scale`.
    """
    w, h = obs.width, obs.height
    thumb, index, middle = obs.pts[THUMB_TIP], obs.pts[INDEX_TIP], obs.pts[MIDDLE_TIP]
    d_ti = distance(thumb, index, w, h)
    d_im = distance(index, middle, w, h)
    d_tm = distance(thumb, middle, w, h)
    tip = denormalize(index, w, h)
    return Signals(pinch=d_ti/scale,
                   spread=(d_ti + d_im + d_tm)/scale,
                   fingertip=(float(tip[0]), float(tip[1])))
