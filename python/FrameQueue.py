import time
from queue import Queue, Empty, Full


class FrameSample:
    def __init__(self, frame_id, frame, hand, timestamp, fps=0.0):
        self.frame_id = frame_id
        self.frame = frame
        self.hand = hand  # HandData or None
        self.timestamp = timestamp
        self.fps = fps


class FrameQueue:
    """
    Latest-frame-only handoff between the capture thread and the frame loop.
    put() overwrites an unread sample; poll() skips frames already processed.
    """

    def __init__(self, maxsize=1):
        self._queue = Queue(maxsize=maxsize)

    def put(self, sample):
        if self._queue.full():
            try:
                self._queue.get_nowait()  # remove older frame
            except Empty:
                pass
        try:
            self._queue.put_nowait(sample)
        except Full:
            # the consumer never takes more than one, so only a racing put lands here
            pass

    def poll(self, last_frame_id, timeout=0.1):
        """Newest sample, or None if nothing new arrived since last_frame_id."""
        try:
            sample = self._queue.get(timeout=timeout) if timeout else self._queue.get_nowait()
        except Empty:
            return None
        if sample.frame_id == last_frame_id:
            return None
        return sample

    def next(self, last_frame_id, source_lost, timeout=0.1):
        """
        Like poll(), but once the source is lost every call yields a
        no-hand sample so the frame loop keeps stepping.
        """
        sample = self.poll(last_frame_id, timeout)
        if sample is None and source_lost.is_set():
            return FrameSample(last_frame_id, None, None, time.monotonic())
        return sample


class ReadWatchdog:
    """Counts consecutive failed camera reads; trips past max_failures."""

    def __init__(self, max_failures=50):
        self.max_failures = max(1, int(max_failures))
        self.failures = 0

    def record(self, ok):
        if ok:
            self.failures = 0
        else:
            self.failures += 1
        return self.tripped

    @property
    def tripped(self):
        return self.failures >= self.max_failures
