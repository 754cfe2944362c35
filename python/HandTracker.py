import mediapipe as mp
from HandData import HandData, NUM_LANDMARKS


class HandTracker:
    """
    Landmark source: one hand's 21 normalized points per frame, or None.
    If MediaPipe can't start, every frame reports no hand.
    """

    def __init__(
        self,
        cfg,
    ):
        self.cfg = cfg or {}
        tcfg = self.cfg.get("tracker", {})
        self.available = True

        try:
            self.mp_hands = mp.solutions.hands.Hands(
                model_complexity=tcfg.get("model_complexity", 1),
                min_detection_confidence=tcfg.get("min_detection_confidence", 0.2),
                min_tracking_confidence=tcfg.get("min_tracking_confidence", 0.2),
                max_num_hands=1,
            )
        except (AttributeError, RuntimeError, ValueError) as e:
            print("[TRACK] MediaPipe Hands unavailable, running without hand input:", e)
            self.mp_hands = None
            self.available = False

    def process_frame(self, frame_rgb, timestamp, frame_id=-1):
        """
        Process an RGB frame (caller converts BGR->RGB).
        Returns a HandData for the first detected hand, or None.
        timestamp: monotonic time (seconds) for this frame.
        """
        if not self.available:
            return None

        try:
            result = self.mp_hands.process(frame_rgb)
        except (RuntimeError, ValueError) as e:
            print("[TRACK] detection failed:", e)
            return None

        if not result.multi_hand_landmarks:
            return None

        lm = result.multi_hand_landmarks[0]
        if len(lm.landmark) < NUM_LANDMARKS:
            return None

        h = HandData()
        h.raw_landmarks = lm
        h.landmarks = lm.landmark
        if result.multi_handedness:
            h.handedness = result.multi_handedness[0].classification[0].label
        h.visible = True
        h.timestamp = timestamp
        h.frame_id = frame_id
        return h

    def close(self):
        if self.mp_hands is not None:
            self.mp_hands.close()
