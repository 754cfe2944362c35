import threading

from FrameQueue import FrameQueue, FrameSample, ReadWatchdog


def sample(frame_id):
    return FrameSample(frame_id, frame=None, hand=None, timestamp=float(frame_id))


def test_poll_returns_newest_sample():
    q = FrameQueue()
    q.put(sample(1))
    q.put(sample(2))
    got = q.poll(-1, timeout=0)
    assert got.frame_id == 2
    assert q.poll(2, timeout=0) is None


def test_repeated_frame_is_skipped():
    q = FrameQueue()
    q.put(sample(5))
    assert q.poll(4, timeout=0).frame_id == 5
    q.put(sample(5))
    assert q.poll(5, timeout=0) is None


def test_empty_queue_times_out():
    assert FrameQueue().poll(-1, timeout=0.01) is None


def test_next_yields_no_hand_samples_once_source_lost():
    q = FrameQueue()
    lost = threading.Event()
    assert q.next(3, lost, timeout=0) is None

    lost.set()
    got = q.next(3, lost, timeout=0)
    assert got.frame_id == 3
    assert got.hand is None and got.frame is None

    # a late frame still wins over the placeholder
    q.put(sample(4))
    assert q.next(3, lost, timeout=0).frame_id == 4


def test_watchdog_trips_on_consecutive_failures():
    dog = ReadWatchdog(3)
    assert not dog.record(False)
    assert not dog.record(False)
    assert not dog.record(True)  # a good read resets the count
    assert not dog.record(False)
    assert not dog.record(False)
    assert dog.record(False)
    assert dog.tripped and dog.failures == 3


def test_watchdog_limit_is_at_least_one():
    dog = ReadWatchdog(0)
    assert dog.record(False)
