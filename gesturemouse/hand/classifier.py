from __future__ import annotations
import logging
from pathlib import Path
from typing import Tuple
import numpy as np
from ..errors import InitializationError

log = logging.getLogger(__name__)

PINCH=0; SCROLL=1

def flatten(pts) -> np.ndarray:
    """(21,3) landmarks -> 63 floats in landmark order (x0,y0,z0,x1,...)."""
    pts = np.asarray(pts, dtype=np.float32)
    if pts.shape != (21,3):
        raise ValueError(f"expected (21, 3) landmarks, got {pts.shape}")
    return pts.reshape(-1)

def softmax(logits) -> np.ndarray:
    z = np.asarray(logits, dtype=np.float64).reshape(-1)
    z = np.exp(z - z.max())
    return z / z.sum()

class GestureClassifier:
    """
    TorchScript gesture model: 63 floats in, one logit per label out.
    """
    def __init__(self, model_path: str|Path="./my_model/model.pt", device: str="cpu"):
        try:
            import torch
        except ImportError as e:
            raise InitializationError("torch is required for the gesture model (pip install gesturemouse[model])") from e
        if not Path(model_path).exists():
            raise InitializationError(f"gesture model not found: {model_path}")
        try:
            self.model = torch.jit.load(str(model_path), map_location=device)
        except Exception as e:
            raise InitializationError(f"gesture model failed to load: {e}") from e
        self.model.eval()
        self._torch = torch
        self.device = device
        log.info("loaded gesture model %s", model_path)

    def __call__(self, pts) -> Tuple[int,float]:
        torch = self._torch
        x = torch.from_numpy(flatten(pts)).unsqueeze(0).to(self.device)
        with torch.no_grad():
            logits = self.model(x)
        p = softmax(logits.cpu().numpy())
        label = int(np.argmax(p))
        return label, float(p[label])
