from __future__ import annotations
import logging
from typing import Callable, Iterable, List, Optional
from ..hand.analyzer import FrameObservation, analyze
from ..fuse.state import GestureStateMachine
from .dispatch import Dispatcher
from .events import ActionIntent

log = logging.getLogger(__name__)

class FrameLoop:
    """
    Frame-synchronous driver: one observation is analyzed, stepped and
    dispatched to completion before the next is pulled from `source`.
    `source` yields FrameObservation, or None for frames without a hand.
    """
    def __init__(self, source: Iterable[Optional[FrameObservation]], machine: GestureStateMachine,
                 dispatcher: Dispatcher, should_stop: Optional[Callable[[], bool]]=None,
                 on_intents: Optional[Callable[[int, FrameObservation, List[ActionIntent]], None]]=None):
        self.source = source
        self.machine = machine
        self.dispatcher = dispatcher
        self.should_stop = should_stop or (lambda: False)
        self.on_intents = on_intents
        self.frames = 0
        self.skipped = 0

    @property
    def min_confidence(self) -> float:
        return self.machine.cfg.min_confidence

    def process(self, obs: FrameObservation) -> List[ActionIntent]:
        if obs.confidence <= self.min_confidence:
            self.skipped += 1
            return []
        sig = analyze(obs, scale=self.machine.cfg.distance_scale)
        intents = self.machine.step(obs.label, sig)
        if intents:
            self.dispatcher.apply(intents)
        return intents

    def run(self) -> int:
        """
        Blocks until the stop signal or the end of the source; returns the exit code.
        However the loop ends, a held press is released before returning.
        """
        try:
            for obs in self.source:
                self.frames += 1
                if obs is not None:
                    intents = self.process(obs)
                    if intents and self.on_intents:
                        self.on_intents(self.frames, obs, intents)
                if self.should_stop():
                    log.info("stop requested after %d frames", self.frames)
                    break
        finally:
            held = self.machine.release_all()
            if held:
                log.info("releasing held press on shutdown")
                self.dispatcher.apply(held)
        log.debug("processed %d frames, %d below confidence", self.frames, self.skipped)
        return 0
