from __future__ import annotations

class GestureMouseError(Exception):
    """Base class for controller failures."""

class InitializationError(GestureMouseError):
    """Camera, landmark model, classifier or actuator could not be set up."""

class AcquisitionError(GestureMouseError):
    """A frame could not be obtained or decoded."""

class ActuatorError(GestureMouseError):
    """The OS refused an input-injection call."""
    def __init__(self, call: str, cause: BaseException|None=None):
        self.call = call
        self.cause = cause
        msg = f"actuator call {call} failed"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)
