from GestureState import AppState, GestureState
from HandData import GestureVerdict


class FrameEvents:
    """What one processed frame produced, for the picker and the output stream."""

    def __init__(self, verdict, app_state):
        self.verdict = verdict
        self.app_state = app_state
        self.transition = None  # (previous AppState, new AppState)
        self.pinch_ray = None

    def to_dict(self):
        return {
            "app_state": self.app_state.value,
            "gesture": self.verdict.to_dict(),
            "transition": (
                [self.transition[0].value, self.transition[1].value]
                if self.transition
                else None
            ),
            "pinch_ray": self.pinch_ray.to_dict() if self.pinch_ray is not None else None,
        }


# ==========================================
# DEBOUNCED STATE CONTROLLER
# ==========================================
class GestureProcessor:
    """
    Turns the per-frame verdict stream into rare app-state transitions and
    one-shot pinch rays. The only writer of GestureState.app_state.

    Per frame, in order:
      1. pinch rising edge -> ray for the picker; any pinching frame holds
         off switching for `pinch_cooldown`
      2. fist in CHAOS -> FORMED, open in FORMED/PHOTO_VIEW -> CHAOS, only
         after the cooldown and never in a pinching frame
    """

    def __init__(self, camera, cfg=None, state=None):
        self.camera = camera
        self.pinch_cooldown = 0.5
        self.switch_cooldown = 1.0
        self.log_transitions = True
        self.update_config(cfg)

        if state is None:
            initial = (cfg or {}).get("controller", {}).get("initial_state", AppState.CHAOS)
            state = GestureState(initial)
        self.state = state

    def update_config(self, cfg):
        c = (cfg or {}).get("controller", {})
        self.pinch_cooldown = float(c.get("pinch_cooldown", self.pinch_cooldown))
        self.switch_cooldown = float(c.get("switch_cooldown", self.switch_cooldown))
        self.log_transitions = bool(
            (cfg or {}).get("debug", {}).get("log_transitions", self.log_transitions)
        )

    @property
    def app_state(self):
        return self.state.app_state

    @property
    def selection(self):
        return self.state.selection

    def process(self, verdict, now):
        s = self.state
        if verdict is None or not verdict.visible:
            # lost tracking counts as "not pinching" so reacquiring a pinch
            # is a fresh rising edge
            verdict = GestureVerdict.absent()
        s.last_verdict = verdict
        events = FrameEvents(verdict, s.app_state)

        # 1. Pinch
        if verdict.is_pinch:
            if not s.was_pinching:
                ray = self.camera.ray_from_pointer(*verdict.position)
                s.pending_ray = ray
                events.pinch_ray = ray
            self._hold_off(now + self.pinch_cooldown)
        s.was_pinching = verdict.is_pinch

        # 2. State switching
        if now > s.next_actionable_time and not verdict.is_pinch:
            if verdict.is_fist and s.app_state == AppState.CHAOS:
                events.transition = self._transition(AppState.FORMED)
                self._hold_off(now + self.switch_cooldown)
            elif verdict.is_open and s.app_state in (AppState.FORMED, AppState.PHOTO_VIEW):
                events.transition = self._transition(AppState.CHAOS)
                self._hold_off(now + self.switch_cooldown)

        events.app_state = s.app_state
        return events

    def take_ray(self):
        """Return the pending pinch ray and clear it."""
        ray = self.state.pending_ray
        self.state.pending_ray = None
        return ray

    def select(self, candidate_id):
        """Picker hit: pin the candidate and enter PHOTO_VIEW."""
        if self.state.app_state == AppState.PHOTO_VIEW:
            return None
        self.state.selection = candidate_id
        if self.log_transitions:
            print(f"[STATE] picked candidate {candidate_id}")
        return self._transition(AppState.PHOTO_VIEW)

    def reset(self, app_state=AppState.CHAOS):
        self.state = GestureState(app_state)

    def _hold_off(self, until):
        # cooldown only ever moves forward
        if until > self.state.next_actionable_time:
            self.state.next_actionable_time = until

    def _transition(self, target):
        s = self.state
        previous = s.app_state
        s.app_state = target
        if previous == AppState.PHOTO_VIEW:
            s.selection = None
        if self.log_transitions:
            print(f"[STATE] {previous.value} -> {target.value}")
        return (previous, target)
