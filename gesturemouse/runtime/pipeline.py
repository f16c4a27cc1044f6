from __future__ import annotations
import logging, threading
from typing import Any, Iterable, Iterator, Optional

log = logging.getLogger(__name__)

_EMPTY = object()

class LatestSlot:
    """
    Single-slot channel: put() overwrites an unconsumed item, so the
    consumer always sees the newest frame and latency never backs up.
    """
    def __init__(self):
        self._cond = threading.Condition()
        self._item: Any = _EMPTY
        self._error: Optional[BaseException] = None
        self._closed = False
        self.dropped = 0

    def put(self, item):
        with self._cond:
            if self._item is not _EMPTY:
                self.dropped += 1
            self._item = item
            self._cond.notify()

    def fail(self, err: BaseException):
        with self._cond:
            self._error = err
            self._closed = True
            self._cond.notify_all()

    def close(self):
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    @property
    def closed(self) -> bool:
        return self._closed

    def get(self, timeout: Optional[float]=None):
        """Newest item; raises the producer's error, or StopIteration once closed and drained."""
        with self._cond:
            if not self._cond.wait_for(lambda: self._item is not _EMPTY or self._closed, timeout):
                raise TimeoutError("no frame within timeout")
            if self._item is not _EMPTY:
                item, self._item = self._item, _EMPTY
                return item
            if self._error is not None:
                raise self._error
            raise StopIteration

    def __iter__(self) -> Iterator[Any]:
        while True:
            try:
                yield self.get()
            except StopIteration:
                return

class CaptureThread(threading.Thread):
    """Drains a blocking observation source into a LatestSlot on its own thread."""
    def __init__(self, source: Iterable[Any], slot: Optional[LatestSlot]=None):
        super().__init__(name="gesturemouse-capture", daemon=True)
        self.source = source
        self.slot = slot or LatestSlot()
        self._stop_evt = threading.Event()

    def run(self):
        try:
            for item in self.source:
                if self._stop_evt.is_set(): break
                self.slot.put(item)
        except Exception as e:
            log.error("capture failed: %s", e)
            self.slot.fail(e)
            return
        finally:
            # a generator can only be closed from the thread that drives it
            close = getattr(self.source, "close", None)
            if close is not None: close()
        self.slot.close()

    def stop(self, timeout: Optional[float]=2.0) -> bool:
        """Ask the thread to finish and wait for it; False if it is still stuck in the source."""
        self._stop_evt.set()
        self.join(timeout)
        if self.is_alive():
            log.warning("capture thread did not stop within %.1fs", timeout)
            return False
        return True
