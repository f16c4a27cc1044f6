from __future__ import annotations
import numpy as np

def denormalize(p, width: int, height: int) -> np.ndarray:
    """Normalized landmark (x, y[, z]) -> pixel (x, y)."""
    p = np.asarray(p, dtype=float)
    return np.array([p[0]*width, p[1]*height], dtype=float)

def distance(p1, p2, width: int=1, height: int=1) -> float:
    """Euclidean distance of two landmarks in pixel space (x/y only)."""
    d = denormalize(p1, width, height) - denormalize(p2, width, height)
    return float(np.hypot(d[0], d[1]))
