from __future__ import annotations
import cv2
from typing import Callable, Iterable, Iterator, Optional, Tuple, Dict, Any
from ..hand.analyzer import FrameObservation

# MediaPipe 21-point hand skeleton
HAND_CONNECTIONS = [
    (0,1),(1,2),(2,3),(3,4), (0,5),(5,6),(6,7),(7,8), (0,9),(9,10),(10,11),(11,12),
    (0,13),(13,14),(14,15),(15,16), (0,17),(17,18),(18,19),(19,20), (5,9),(9,13),(13,17),
]

def _close(it):
    close = getattr(it, "close", None)
    if close is not None: close()

def observations(frame_iter: Iterable[Dict[str,Any]], hands: Callable,
                 classify: Callable[..., Tuple[int,float]]) -> Iterator[Tuple[Any, Optional[FrameObservation]]]:
    """Camera frames -> (image, observation) pairs; observation is None when no hand is found."""
    try:
        for f in frame_iter:
            img = f["image"]
            h, w = img.shape[:2]
            pts = hands(img)
            obs = None
            if pts is not None:
                label, conf = classify(pts)
                obs = FrameObservation(pts=pts, label=label, confidence=conf, width=w, height=h)
            yield img, obs
    finally:
        _close(frame_iter)

def with_preview(pairs: Iterable[Tuple[Any, Optional[FrameObservation]]],
                 view: Optional["Preview"]=None) -> Iterator[Optional[FrameObservation]]:
    """Strip the images, showing each one first. Runs on the thread that consumes observations."""
    try:
        for img, obs in pairs:
            if view is not None:
                view.show(img, obs)
            yield obs
    finally:
        _close(pairs)

class Preview:
    """Debug window; pressing `quit_key` requests a stop."""
    def __init__(self, title: str="gesturemouse", quit_key: str="q"):
        self.title = title
        self.quit_key = quit_key
        self.stop_requested = False

    def show(self, img, obs: Optional[FrameObservation]):
        dbg = img.copy()
        if obs is not None:
            px = [(int(p[0]*obs.width), int(p[1]*obs.height)) for p in obs.pts]
            for a, b in HAND_CONNECTIONS:
                cv2.line(dbg, px[a], px[b], (255,255,255), 1)
            for p in px:
                cv2.circle(dbg, p, 3, (0,0,255), -1)
            cv2.putText(dbg, f"label {obs.label} ({obs.confidence:.2f})", (10,30),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.8, (0,255,0), 2)
        cv2.imshow(self.title, dbg)
        if cv2.waitKey(1) & 0xFF == ord(self.quit_key):
            self.stop_requested = True

    def close(self):
        cv2.destroyWindow(self.title)
