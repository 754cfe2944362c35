import cv2
import mediapipe as mp

from HandData import FIST, PINCH

GOLD = (0, 215, 255)  # BGR
EMERALD = (37, 66, 0)


def draw_hand_debug(frame, hand, verdict, app_state, fps=None):
    """
    Landmarks, the raw (unmirrored) pointer and a short text block.
    The frame itself is not mirrored, so the pointer is drawn at 1 - x.
    """
    h, w, _ = frame.shape
    if hand is not None and hand.raw_landmarks is not None:
        mp.solutions.drawing_utils.draw_landmarks(
            frame,
            hand.raw_landmarks,
            mp.solutions.hands.HAND_CONNECTIONS,
            mp.solutions.drawing_utils.DrawingSpec(color=EMERALD, thickness=1, circle_radius=3),
            mp.solutions.drawing_utils.DrawingSpec(color=GOLD, thickness=3),
        )

    if verdict.visible:
        raw_x = 1.0 - verdict.position[0]
        center = (int(raw_x * w), int(verdict.position[1] * h))
        if verdict.gesture == PINCH:
            color, radius = (0, 0, 255), 10
        elif verdict.gesture == FIST:
            color, radius = (170, 170, 170), 5
        else:
            color, radius = (255, 255, 255), 5
        cv2.circle(frame, center, radius, color, -1)
        cv2.circle(frame, center, radius, GOLD, 1)

    info = [
        f"state: {app_state.value}",
        f"gesture: {verdict.gesture}",
        f"avg: {verdict.avg_ratio:.2f} rest: {verdict.non_index_ratio:.2f}",
        f"pinch: {verdict.pinch_distance:.3f} spread: {verdict.spread_factor:.2f}",
    ]
    if fps is not None:
        info.append(f"FPS: {fps:.1f}")
    for i, line in enumerate(info):
        cv2.putText(
            frame,
            line,
            (10, 30 + i * 22),
            cv2.FONT_HERSHEY_SIMPLEX,
            0.55,
            (0, 255, 0),
            1,
            cv2.LINE_AA,
        )
