from __future__ import annotations
import cv2, logging, time
from typing import Iterator, Dict, Any
from ..errors import AcquisitionError, InitializationError

log = logging.getLogger(__name__)

def frames(camera: int|str=0, width: int=640, height: int=480, mirror: bool=True,
           max_read_failures: int=10) -> Iterator[Dict[str,Any]]:
    """
    Yield mirrored BGR frames. Isolated read failures are retried; after
    `max_read_failures` in a row the stream is considered lost.
    """
    cap = cv2.VideoCapture(camera)
    if width:  cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    if height: cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    if not cap.isOpened():
        raise InitializationError(f"Cannot open camera {camera!r}")
    failures = 0
    try:
        while True:
            ok, frame = cap.read()
            if not ok or frame is None:
                failures += 1
                if failures > max_read_failures:
                    raise AcquisitionError(f"camera {camera!r} stopped delivering frames")
                log.warning("frame read failed (%d/%d), retrying", failures, max_read_failures)
                continue
            failures = 0
            if mirror:
                frame = cv2.flip(frame, 1)
            yield {"image": frame, "meta": {"ts": time.time()}}
    finally:
        cap.release()
