from __future__ import annotations
import mediapipe as mp
import numpy as np
import cv2
from ..errors import InitializationError

class HandLandmarks:
    """Single-hand MediaPipe detector returning a (21,3) normalized array or None."""
    def __init__(self, min_detection_confidence=0.7):
        try:
            self.hands = mp.solutions.hands.Hands(max_num_hands=1, model_complexity=0,
                                                  min_detection_confidence=min_detection_confidence)
        except Exception as e:
            raise InitializationError(f"hand landmark model failed to load: {e}") from e
    def __call__(self, frame_bgr):
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        res = self.hands.process(rgb)
        if not res.multi_hand_landmarks: return None
        lm = res.multi_hand_landmarks[0]
        return np.array([(p.x,p.y,p.z) for p in lm.landmark], dtype=float)
