from __future__ import annotations
import yaml
from pathlib import Path
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, model_validator
from ..hand.classifier import PINCH, SCROLL

class ControllerConfig(BaseModel):
    """
    Thresholds for the gesture engine. Distances are pixel distances
    divided by `distance_scale`.
    """
    model_config = ConfigDict(extra="forbid")

    distance_scale: float = Field(10.0, gt=0)
    press_threshold: float = 8.0
    release_threshold: float = 12.0
    movement_threshold: float = 15.0
    deadzone_px: float = Field(5.0, ge=0)
    # "any": either axis beyond the dead-zone moves; "both": both axes must
    deadzone_mode: Literal["any","both"] = "any"
    scroll_min: float = Field(1.0, ge=0)
    scroll_max: float = 30.0
    scroll_divisor: float = Field(5.0, gt=0)
    min_confidence: float = Field(0.95, ge=0, le=1)
    pinch_label: int = PINCH
    scroll_label: int = SCROLL

    @model_validator(mode="after")
    def _check_bands(self):
        if self.press_threshold >= self.release_threshold:
            raise ValueError("press_threshold must be below release_threshold")
        if self.scroll_min >= self.scroll_max:
            raise ValueError("scroll_min must be below scroll_max")
        if self.pinch_label == self.scroll_label:
            raise ValueError("pinch_label and scroll_label must differ")
        return self

def load_config(path: str|Path|None) -> ControllerConfig:
    if path is None or not Path(path).exists():
        return ControllerConfig()
    with open(path,"r") as f: cfg=yaml.safe_load(f) or {}
    return ControllerConfig(**cfg)
