import pytest

from GestureClassifier import GestureClassifier, classify_landmarks, hand_features
from HandData import FIST, NONE, OPEN, PINCH


def test_no_hand_is_none_at_center():
    v = classify_landmarks(None)
    assert v.gesture == NONE
    assert v.position == (0.5, 0.5)
    assert not v.visible


def test_partial_landmark_list_counts_as_no_hand(make_hand):
    v = classify_landmarks(make_hand()[:10])
    assert v.gesture == NONE
    assert not v.visible


def test_curl_ratios_match_construction(make_hand):
    f = hand_features(make_hand(ratios=(1.0, 1.2, 1.4, 1.6)))
    assert f["ratios"] == pytest.approx([1.0, 1.2, 1.4, 1.6])
    assert f["avg_ratio"] == pytest.approx(1.3)
    assert f["non_index_ratio"] == pytest.approx(1.4)


@pytest.mark.parametrize(
    "ratios",
    [(0.9, 0.9, 0.9, 0.9), (1.3, 1.3, 1.3, 1.3), (0.6, 1.5, 1.5, 1.5), (2.0, 1.0, 1.0, 1.3)],
)
@pytest.mark.parametrize("thumb_tip", [None, ("index", 0.01, 0.0), ("index", 0.05, 0.02)])
def test_curled_hand_is_fist_whatever_the_pinch_distance(make_hand, ratios, thumb_tip):
    v = classify_landmarks(make_hand(ratios=ratios, thumb_tip=thumb_tip))
    assert v.avg_ratio < 1.35
    assert v.gesture == FIST


def test_pinch_with_other_fingers_extended(make_hand):
    v = classify_landmarks(make_hand(ratios=(1.0, 1.6, 1.6, 1.6), thumb_tip=("index", 0.03, 0.0)))
    assert v.pinch_distance == pytest.approx(0.03)
    assert v.gesture == PINCH
    assert v.is_pinch and not v.is_fist and not v.is_open


def test_pinch_rejected_while_other_fingers_curl(make_hand):
    v = classify_landmarks(make_hand(ratios=(2.2, 1.15, 1.15, 1.15), thumb_tip=("index", 0.03, 0.0)))
    assert v.avg_ratio >= 1.35
    assert v.non_index_ratio <= 1.2
    assert v.pinch_distance < 0.08
    assert v.gesture != PINCH


def test_pinch_needs_close_tips(make_hand):
    v = classify_landmarks(make_hand(ratios=(1.0, 1.6, 1.6, 1.6), thumb_tip=("index", 0.1, 0.0)))
    assert v.gesture != PINCH


def test_extended_hand_is_open(make_hand):
    v = classify_landmarks(make_hand(ratios=(1.6, 1.6, 1.6, 1.6)))
    assert v.gesture == OPEN


def test_spread_fingers_open_below_open_ratio(make_hand):
    v = classify_landmarks(make_hand(ratios=(1.4, 1.4, 1.4, 1.4), splay=0.5))
    assert v.avg_ratio < 1.5
    assert v.spread_factor > 1.6
    assert v.gesture == OPEN


def test_half_open_unspread_hand_is_ambiguous(make_hand):
    v = classify_landmarks(make_hand(ratios=(1.4, 1.4, 1.4, 1.4)))
    assert v.spread_factor == pytest.approx(1.4)
    assert v.gesture == NONE
    assert v.visible


def test_zero_palm_width_does_not_divide_by_zero(make_hand):
    pts = make_hand(ratios=(1.6, 1.6, 1.6, 1.6))
    pts[17] = pts[5]
    v = classify_landmarks(pts)
    assert v.spread_factor == pytest.approx(0.15 * 1.6 / 1.0)


def test_pointer_is_mirrored_palm_center(make_hand):
    # palm center sits at wrist + (0.025, -0.2)
    v = classify_landmarks(make_hand(wrist=(0.275, 0.9)))
    assert v.position[0] == pytest.approx(0.7)
    assert v.position[1] == pytest.approx(0.7)


def test_pointer_follows_pinch_midpoint(make_hand):
    pts = make_hand(ratios=(1.0, 1.6, 1.6, 1.6), thumb_tip=("index", 0.04, 0.0))
    v = classify_landmarks(pts)
    mid_x = (pts[4][0] + pts[8][0]) / 2
    mid_y = (pts[4][1] + pts[8][1]) / 2
    assert v.position == pytest.approx((1 - mid_x, mid_y))


def test_loose_pinch_zone_moves_pointer_without_pinching(make_hand):
    # 0.12 apart: outside the pinch threshold, inside the pointer zone
    pts = make_hand(ratios=(1.0, 1.6, 1.6, 1.6), thumb_tip=("index", 0.12, 0.0))
    v = classify_landmarks(pts)
    assert v.gesture != PINCH
    assert v.position[0] == pytest.approx(1 - (pts[4][0] + pts[8][0]) / 2)


def test_dict_and_object_landmarks_agree(make_hand):
    class Lm:
        def __init__(self, x, y):
            self.x, self.y, self.z = x, y, 0.0

    pts = make_hand(ratios=(1.0, 1.6, 1.6, 1.6), thumb_tip=("index", 0.03, 0.0))
    as_objects = [Lm(x, y) for x, y in pts]
    as_dicts = [{"x": x, "y": y} for x, y in pts]
    assert classify_landmarks(as_objects) == classify_landmarks(pts)
    assert classify_landmarks(as_dicts) == classify_landmarks(pts)


def test_classifier_is_pure(make_hand):
    pts = make_hand(ratios=(1.0, 1.6, 1.6, 1.6), thumb_tip=("index", 0.03, 0.0))
    classifier = GestureClassifier()
    first = classifier.classify(pts)
    classifier.classify(make_hand(ratios=(0.9, 0.9, 0.9, 0.9)))
    classifier.classify(None)
    assert classifier.classify(pts) == first


def test_thresholds_come_from_config(make_hand):
    pts = make_hand(ratios=(1.4, 1.4, 1.4, 1.4))
    assert GestureClassifier().classify(pts).gesture == NONE
    tuned = GestureClassifier({"classifier": {"open_ratio": 1.3}})
    assert tuned.classify(pts).gesture == OPEN
    assert tuned.thresholds["fist_ratio"] == 1.35


def test_classify_hand_stores_verdict(make_hand):
    from HandData import HandData

    hand = HandData()
    hand.visible = True
    hand.landmarks = make_hand(ratios=(0.9, 0.9, 0.9, 0.9))
    verdict = GestureClassifier().classify_hand(hand)
    assert verdict.gesture == FIST
    assert hand.verdict is verdict
    assert GestureClassifier().classify_hand(None).gesture == NONE
