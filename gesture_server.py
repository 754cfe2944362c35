"""
Unified entry point for the holiday-tree gesture controller.

Usage examples:
    python gesture_server.py --mode full    # default, threaded capture + JSON stream
    python gesture_server.py --mode simple  # single-threaded ZeroMQ state/gesture demo
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
PY_DIR = ROOT / "python"
if str(PY_DIR) not in sys.path:
    sys.path.insert(0, str(PY_DIR))


def run_simple_mode(port: int) -> None:
    """Publish state transitions and gesture changes as ZeroMQ strings."""
    import time

    import cv2
    import zmq

    from FrameQueue import ReadWatchdog
    from HandTracker import HandTracker
    from Pipeline import FramePipeline
    from helpers import load_config

    cfg = load_config(str(PY_DIR / "config.json"))
    tracker = HandTracker(cfg)
    pipeline = FramePipeline(cfg)

    context = zmq.Context()
    socket = context.socket(zmq.PUB)
    socket.bind(f"tcp://*:{port}")

    tcfg = cfg.get("tracker", {})
    cap = cv2.VideoCapture(tcfg.get("camera_index", 0))
    watchdog = ReadWatchdog(tcfg.get("max_failed_reads", 50))
    if not cap.isOpened():
        print("[PY] ERROR: Cannot open camera, publishing without hand input")

    print("[PY] Running simple server (ZeroMQ). Press ESC to stop.")

    last_gesture = None
    frame_id = 0
    try:
        while True:
            frame = None
            hand = None
            if cap.isOpened():
                ok, frame = cap.read()
                if watchdog.record(ok):
                    print("[PY] ERROR: camera stopped delivering frames, publishing without hand input")
                    cap.release()  # later iterations step with no hand
                    continue
                if not ok:
                    time.sleep(0.01)
                    continue
                frame_id += 1
                frame_rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
                hand = tracker.process_frame(frame_rgb, time.monotonic(), frame_id)
            else:
                time.sleep(0.03)

            payload = pipeline.step(hand, time.monotonic())

            if payload["transition"]:
                socket.send_string(f"state:{payload['app_state']}")
            gesture = payload["gesture"]["gesture"]
            if gesture != last_gesture:
                socket.send_string(f"gesture:{gesture}")
                last_gesture = gesture
            if payload["picked"] is not None:
                socket.send_string(f"picked:{payload['picked']}")

            if frame is not None:
                cv2.imshow("Holiday Tree Gestures", frame)
                if cv2.waitKey(1) & 0xFF == 27:
                    break
    except KeyboardInterrupt:
        pass
    finally:
        cap.release()
        tracker.close()
        socket.close()
        context.term()
        cv2.destroyAllWindows()


def run_full_mode() -> None:
    """Delegate to the threaded capture + TCP JSON publisher (python/main_loop)."""
    from main_loop import main as run_main_loop

    prev_cwd = os.getcwd()
    os.chdir(str(PY_DIR))
    try:
        run_main_loop()
    finally:
        os.chdir(prev_cwd)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Holiday tree gesture controller")
    parser.add_argument(
        "--mode",
        choices=("full", "simple"),
        default="full",
        help="Select backend: 'full' runs python/main_loop.py, 'simple' runs the ZeroMQ demo.",
    )
    parser.add_argument(
        "--zmq-port",
        type=int,
        default=5556,
        help="PUB port for --mode simple.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    if args.mode == "simple":
        run_simple_mode(args.zmq_port)
    else:
        run_full_mode()


if __name__ == "__main__":
    main()
