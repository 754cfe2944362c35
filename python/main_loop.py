import time
import cv2
import threading
from collections import deque

from HandTracker import HandTracker
from FrameQueue import FrameQueue, FrameSample, ReadWatchdog
from Pipeline import FramePipeline
from Network import NetworkBridge
from DebugDraw import draw_hand_debug
from helpers import load_config, ConfigWatcher

CONFIG_PATH = "config.json"


# --------------------------------------------------------
# CAPTURE THREAD
# --------------------------------------------------------
def capture_thread(frame_queue, stop_event, source_lost, cfg, cap=None, tracker=None):
    tcfg = cfg.get("tracker", {})
    if cap is None:
        cap = cv2.VideoCapture(tcfg.get("camera_index", 0))
    if not cap.isOpened():
        # no camera: the frame loop keeps running with no hand
        print("[PY] ERROR: Cannot open camera, continuing without hand input")
        source_lost.set()
        return

    camera_cfg = cfg.get("camera", {})
    cap.set(cv2.CAP_PROP_FRAME_WIDTH, camera_cfg.get("capture_width", 320))
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, camera_cfg.get("capture_height", 240))

    if tracker is None:
        tracker = HandTracker(cfg)
    debug_cfg = cfg.get("debug", {})
    watchdog = ReadWatchdog(tcfg.get("max_failed_reads", 50))

    # FPS calculation
    fps_window = debug_cfg.get("fps_window", 20)
    fps_times = deque(maxlen=fps_window)
    current_fps = 0.0
    frame_id = 0

    print("[PY] Capture thread started.")

    while not stop_event.is_set():
        ok, frame = cap.read()
        if watchdog.record(ok):
            # unplugged or stalled: hand the frame loop over to no-hand frames
            print(f"[PY] ERROR: camera stopped delivering frames "
                  f"({watchdog.failures} failed reads), continuing without hand input")
            source_lost.set()
            break
        if not ok:
            time.sleep(0.01)
            continue

        now = time.monotonic()
        frame_id += 1

        fps_times.append(now)
        if len(fps_times) > 1 and fps_times[-1] > fps_times[0]:
            current_fps = (len(fps_times) - 1) / (fps_times[-1] - fps_times[0])

        # Convert frame -> RGB for MediaPipe
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        hand = tracker.process_frame(rgb, now, frame_id)

        frame_queue.put(FrameSample(frame_id, frame, hand, now, current_fps))

    cap.release()
    tracker.close()
    print("[PY] Capture thread exiting.")


# --------------------------------------------------------
# FRAME THREAD
# --------------------------------------------------------
def frame_thread(frame_queue, stop_event, source_lost, cfg):
    cfg_watcher = ConfigWatcher(CONFIG_PATH)
    current_cfg = cfg_watcher.get_config() or cfg or {}

    pipeline = FramePipeline(current_cfg)
    network = NetworkBridge.from_config(current_cfg)

    debug_window = "Gesture Debug"
    show_window = current_cfg.get("debug", {}).get("show_window", True)
    if show_window:
        cv2.namedWindow(debug_window, cv2.WINDOW_NORMAL)

    last_frame_id = -1
    print("[PY] Frame thread started.")

    while not stop_event.is_set():
        sample = frame_queue.next(last_frame_id, source_lost)
        if sample is None:
            continue
        if sample.hand is None and sample.frame is None:
            # camera gone: keep publishing "no hand" frames
            time.sleep(0.03)
        last_frame_id = sample.frame_id

        new_cfg = cfg_watcher.check_reload()
        if new_cfg and new_cfg != current_cfg:
            current_cfg = new_cfg
            pipeline.update_config(current_cfg)

        payload = pipeline.step(sample.hand, sample.timestamp)
        payload["fps"] = sample.fps

        network.update()
        network.send_event(payload)

        if show_window and sample.frame is not None:
            verdict = pipeline.processor.state.last_verdict
            draw_hand_debug(
                sample.frame, sample.hand, verdict, pipeline.processor.app_state, sample.fps
            )
            cv2.imshow(debug_window, sample.frame)
            if cv2.waitKey(1) & 0xFF == 27:
                stop_event.set()
                break

    network.close()
    cv2.destroyAllWindows()
    print("[PY] Frame thread exiting.")


# --------------------------------------------------------
# MAIN ENTRY
# --------------------------------------------------------
def main():
    cfg = load_config(CONFIG_PATH)
    if not cfg:
        print("[PY] WARNING: no config.json or failed to load.")

    frame_queue = FrameQueue()
    stop_event = threading.Event()
    source_lost = threading.Event()

    cap_thread = threading.Thread(
        target=capture_thread, args=(frame_queue, stop_event, source_lost, cfg), daemon=True
    )
    loop_thread = threading.Thread(
        target=frame_thread, args=(frame_queue, stop_event, source_lost, cfg), daemon=True
    )

    cap_thread.start()
    loop_thread.start()

    # Keep main thread alive
    try:
        while not stop_event.is_set():
            time.sleep(0.1)
    except KeyboardInterrupt:
        stop_event.set()

    cap_thread.join(timeout=1.0)
    loop_thread.join(timeout=1.0)

    print("[PY] Shutdown complete.")


if __name__ == "__main__":
    main()
