FIST = "fist"
PINCH = "pinch"
OPEN = "open"
NONE = "none"

CENTER = (0.5, 0.5)

# MediaPipe hand landmark indices used by the classifier
WRIST = 0
THUMB_TIP = 4
INDEX_MCP = 5
INDEX_TIP = 8
MIDDLE_MCP = 9
MIDDLE_TIP = 12
RING_MCP = 13
RING_TIP = 16
PINKY_MCP = 17
PINKY_TIP = 20
NUM_LANDMARKS = 21


class GestureVerdict:
    """
    Per-frame classification result. Built fresh every frame, never mutated
    by the controller.
    """

    def __init__(
        self,
        gesture=NONE,
        position=CENTER,
        visible=False,
        avg_ratio=0.0,
        non_index_ratio=0.0,
        pinch_distance=0.0,
        spread_factor=0.0,
    ):
        self.gesture = gesture
        # normalized pointer, x already mirrored for display
        self.position = (float(position[0]), float(position[1]))
        self.visible = visible

        # features that produced the verdict
        self.avg_ratio = avg_ratio
        self.non_index_ratio = non_index_ratio
        self.pinch_distance = pinch_distance
        self.spread_factor = spread_factor

    @classmethod
    def absent(cls):
        return cls()

    @property
    def is_fist(self):
        return self.gesture == FIST

    @property
    def is_pinch(self):
        return self.gesture == PINCH

    @property
    def is_open(self):
        return self.gesture == OPEN

    def to_dict(self):
        """Serialize to JSON-friendly dict."""
        return {
            "gesture": self.gesture,
            "is_fist": self.is_fist,
            "is_open": self.is_open,
            "is_pinch": self.is_pinch,
            "visible": self.visible,
            "position": {"x": self.position[0], "y": self.position[1]},
            "avg_ratio": self.avg_ratio,
            "non_index_ratio": self.non_index_ratio,
            "pinch_distance": self.pinch_distance,
            "spread_factor": self.spread_factor,
        }

    def __eq__(self, other):
        if not isinstance(other, GestureVerdict):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        x, y = self.position
        return f"GestureVerdict({self.gesture!r}, position=({x:.3f}, {y:.3f}))"


class HandData:
    """
    Simple container for the tracked hand flowing from the capture thread
    to the frame loop.
    """

    def __init__(self):
        # raw mediapipe landmark object (for drawing)
        self.raw_landmarks = None

        # list of normalized landmarks (landmark objects)
        self.landmarks = None

        # "Left" / "Right"
        self.handedness = "Unknown"

        self.visible = False

        # timing
        self.timestamp = 0.0  # monotonic time (seconds)
        self.frame_id = -1

        # classification result
        self.verdict = GestureVerdict.absent()

    def to_dict(self):
        return {
            "handedness": self.handedness,
            "visible": self.visible,
            "timestamp": self.timestamp,
            "frame_id": self.frame_id,
            "verdict": self.verdict.to_dict(),
        }
