# GestureClassifier.py
from HandData import (
    FIST,
    PINCH,
    OPEN,
    NONE,
    NUM_LANDMARKS,
    WRIST,
    THUMB_TIP,
    INDEX_MCP,
    INDEX_TIP,
    MIDDLE_MCP,
    MIDDLE_TIP,
    RING_MCP,
    RING_TIP,
    PINKY_MCP,
    PINKY_TIP,
    GestureVerdict,
)
from helpers import dist, midpoint, safe_ratio

DEFAULT_THRESHOLDS = {
    # avg curl ratio below this -> fist
    "fist_ratio": 1.35,
    # thumb tip <-> index tip distance for a pinch candidate
    "pinch_distance": 0.08,
    # middle/ring/pinky must stay extended above this for a pinch
    "pinch_guard_ratio": 1.2,
    "open_ratio": 1.5,
    "spread_factor": 1.6,
    "spread_open_ratio": 1.25,
    # looser zone, only decides where the pointer sits
    "pointer_pinch_distance": 0.15,
}

# (tip, mcp) pairs for index, middle, ring, pinky
FINGER_PAIRS = (
    (INDEX_TIP, INDEX_MCP),
    (MIDDLE_TIP, MIDDLE_MCP),
    (RING_TIP, RING_MCP),
    (PINKY_TIP, PINKY_MCP),
)


def curl_ratio(lm, tip, mcp):
    """Wrist->tip over wrist->MCP. Below 1.0 curled, above 1.2 clearly extended."""
    wrist = lm[WRIST]
    return safe_ratio(dist(wrist, lm[tip]), dist(wrist, lm[mcp]))


def hand_features(lm):
    ratios = [curl_ratio(lm, tip, mcp) for tip, mcp in FINGER_PAIRS]
    palm_width = dist(lm[INDEX_MCP], lm[PINKY_MCP])
    spread_width = dist(lm[INDEX_TIP], lm[PINKY_TIP])
    return {
        "ratios": ratios,
        "avg_ratio": sum(ratios) / 4.0,
        "non_index_ratio": sum(ratios[1:]) / 3.0,
        "pinch_distance": dist(lm[THUMB_TIP], lm[INDEX_TIP]),
        "spread_factor": spread_width / (palm_width or 1.0),
    }


def _is_fist(f, t):
    return f["avg_ratio"] < t["fist_ratio"]


def _is_pinch(f, t):
    # a pinch while the other fingers curl in is the start of a fist
    return (
        f["pinch_distance"] < t["pinch_distance"]
        and f["non_index_ratio"] > t["pinch_guard_ratio"]
    )


def _is_open(f, t):
    if f["avg_ratio"] > t["open_ratio"]:
        return True
    return f["spread_factor"] > t["spread_factor"] and f["avg_ratio"] > t["spread_open_ratio"]


# Evaluated top to bottom, first match wins. Order is the precedence.
RULES = (
    (FIST, _is_fist),
    (PINCH, _is_pinch),
    (OPEN, _is_open),
)


def pointer_position(lm, gesture, pinch_distance, t):
    if gesture == PINCH or pinch_distance < t["pointer_pinch_distance"]:
        raw_x, raw_y = midpoint(lm[THUMB_TIP], lm[INDEX_TIP])
    else:
        raw_x, raw_y = midpoint(lm[INDEX_MCP], lm[PINKY_MCP])
    # front camera view is mirrored
    return (1.0 - raw_x, raw_y)


def classify_landmarks(landmarks, thresholds=None):
    """
    Map one hand's landmarks (or None) to a GestureVerdict.
    Pure: no state is read or kept between calls.
    """
    t = DEFAULT_THRESHOLDS if thresholds is None else thresholds
    if landmarks is None or len(landmarks) < NUM_LANDMARKS:
        return GestureVerdict.absent()

    f = hand_features(landmarks)
    gesture = NONE
    for label, rule in RULES:
        if rule(f, t):
            gesture = label
            break

    return GestureVerdict(
        gesture=gesture,
        position=pointer_position(landmarks, gesture, f["pinch_distance"], t),
        visible=True,
        avg_ratio=f["avg_ratio"],
        non_index_ratio=f["non_index_ratio"],
        pinch_distance=f["pinch_distance"],
        spread_factor=f["spread_factor"],
    )


class GestureClassifier:
    def __init__(self, cfg=None):
        self.thresholds = dict(DEFAULT_THRESHOLDS)
        if cfg:
            self.update_config(cfg)

    def update_config(self, cfg):
        c = (cfg or {}).get("classifier", {})
        for key in DEFAULT_THRESHOLDS:
            if key in c:
                self.thresholds[key] = float(c[key])

    def classify(self, landmarks):
        return classify_landmarks(landmarks, self.thresholds)

    def classify_hand(self, hand):
        """Classify a HandData (or None) and store the verdict on it."""
        if hand is None or not hand.visible:
            return GestureVerdict.absent()
        hand.verdict = self.classify(hand.landmarks)
        return hand.verdict
