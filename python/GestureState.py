from enum import Enum

from HandData import GestureVerdict


class AppState(str, Enum):
    CHAOS = "CHAOS"
    FORMED = "FORMED"
    PHOTO_VIEW = "PHOTO_VIEW"


def parse_app_state(value, default=AppState.CHAOS):
    """AppState from a config value; case-insensitive, unknown names give default."""
    if isinstance(value, AppState):
        return value
    try:
        return AppState(str(value).strip().upper())
    except ValueError:
        print(f"[CFG] Unknown app state {value!r}, using {default.value}")
        return default


# ==========================================
# PERSISTENT STATE
# ==========================================
class GestureState:
    """
    Everything the controller remembers between frames. One instance is
    threaded through GestureProcessor.process() once per frame.
    """

    def __init__(self, app_state=AppState.CHAOS):
        self.app_state = parse_app_state(app_state)

        # earliest time (monotonic seconds) a fist/open may switch state
        self.next_actionable_time = 0.0

        # rising-edge detection for pinch
        self.was_pinching = False

        # pinch ray waiting for the picker (consume-on-read)
        self.pending_ray = None

        # candidate id shown in PHOTO_VIEW
        self.selection = None

        self.last_verdict = GestureVerdict.absent()

    def to_dict(self):
        return {
            "app_state": self.app_state.value,
            "next_actionable_time": self.next_actionable_time,
            "was_pinching": self.was_pinching,
            "selection": self.selection,
            "gesture": self.last_verdict.to_dict(),
        }
