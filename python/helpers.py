import math
import json
import os
import time


# ---------- landmark access ----------
def point_xy(entry):
    """Return (x, y) for a MediaPipe landmark, a dict or an (x, y[, z]) sequence."""
    if hasattr(entry, "x") and hasattr(entry, "y"):
        return (float(entry.x), float(entry.y))
    if isinstance(entry, dict):
        return (float(entry.get("x", 0.0)), float(entry.get("y", 0.0)))
    return (float(entry[0]), float(entry[1]))


# ---------- vector & geometry ----------
def dist(a, b):
    """Euclidean distance in the normalized image plane between two landmarks."""
    ax, ay = point_xy(a)
    bx, by = point_xy(b)
    return math.hypot(ax - bx, ay - by)


def midpoint(a, b):
    ax, ay = point_xy(a)
    bx, by = point_xy(b)
    return ((ax + bx) / 2.0, (ay + by) / 2.0)


def safe_ratio(num, den):
    if den <= 1e-9:
        return 0.0
    return num / den


# ---------- config ----------
def load_config(path="config.json"):
    if not os.path.exists(path):
        print(f"[CFG] config '{path}' not found, using defaults.")
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        print("[CFG] Failed to load config:", e)
        return {}


class ConfigWatcher:
    """
    Watches a JSON config file and reloads it when the file changes.
    Usage:
        watcher = ConfigWatcher("config.json")
        cfg = watcher.get_config()        # initial load
        # later:
        cfg = watcher.check_reload()      # returns new cfg or same dict
    """

    def __init__(self, path="config.json", min_check_interval=0.5, clock=time.monotonic):
        self.path = path
        self._cfg = {}
        self._mtime = 0.0
        self._last_checked = None
        self._min_check_interval = min_check_interval
        self._clock = clock
        self._load()

    def _load(self):
        if not os.path.exists(self.path):
            self._cfg = {}
            self._mtime = 0.0
            return
        try:
            m = os.path.getmtime(self.path)
            with open(self.path, "r", encoding="utf-8") as f:
                self._cfg = json.load(f)
            self._mtime = m
        except (OSError, ValueError) as e:
            print("[CFG] failed to load config:", e)

    def get_config(self):
        return self._cfg

    def check_reload(self):
        """
        Call frequently (cheap). Will only stat the file every min_check_interval seconds.
        Returns current config (reloaded if changed).
        """
        now = self._clock()
        if self._last_checked is not None and now - self._last_checked < self._min_check_interval:
            return self._cfg
        self._last_checked = now

        try:
            if not os.path.exists(self.path):
                # file missing -> keep existing config
                return self._cfg
            m = os.path.getmtime(self.path)
            if m != self._mtime:
                print(f"[CFG] Detected {self.path} change, reloading...")
                self._load()
        except OSError as e:
            print("[CFG] check_reload error:", e)

        return self._cfg
