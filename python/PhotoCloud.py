import math
import numpy as np

from GestureState import AppState

TREE_HEIGHT = 10.0
TREE_RADIUS_BASE = 3.5
CHAOS_RADIUS = 15.0


class Photo:
    def __init__(self, photo_id, chaos_pos, target_pos):
        self.id = photo_id
        self.chaos_pos = np.asarray(chaos_pos, dtype=np.float64)
        self.target_pos = np.asarray(target_pos, dtype=np.float64)
        self.position = self.chaos_pos.copy()
        self.scale = 1.0


class PhotoCloud:
    """
    Presentation-side model of the pickable photos. Only positions and
    selection live here; drawing is the renderer's job.
    """

    def __init__(self, cfg=None, seed=None):
        s = (cfg or {}).get("scene", {})
        self.count = int(s.get("photo_count", 12))
        self.morph_rate = 8.0
        self.follow_rate = 6.0
        self.view_distance = 8.0
        self.update_config(cfg)
        rng = np.random.default_rng(s.get("seed", seed))

        self.progress = 0.0
        self.active_id = None
        self.photos = []
        for i in range(self.count):
            angle = (i / self.count) * math.pi * 2
            y = (i / self.count) * TREE_HEIGHT * 0.8 + 2
            r = (1 - y / TREE_HEIGHT) * TREE_RADIUS_BASE + 1.5
            target = (math.cos(angle * 2) * r, y, math.sin(angle * 2) * r)

            chaos = (
                (rng.random() - 0.5) * CHAOS_RADIUS * 1.2,
                (rng.random() - 0.5) * CHAOS_RADIUS + 8,
                (rng.random() - 0.5) * CHAOS_RADIUS * 1.2,
            )
            self.photos.append(Photo(i, chaos, target))

    def update_config(self, cfg):
        # layout (photo_count, seed) is fixed at construction; rates are live
        s = (cfg or {}).get("scene", {})
        self.morph_rate = float(s.get("morph_rate", self.morph_rate))
        self.follow_rate = float(s.get("follow_rate", self.follow_rate))
        self.view_distance = float(s.get("view_distance", self.view_distance))

    def candidates(self):
        return [(p.id, p.position.copy()) for p in self.photos]

    def update(self, app_state, selection, delta, camera):
        goal = 1.0 if app_state == AppState.FORMED else 0.0
        self.progress += (goal - self.progress) * min(1.0, self.morph_rate * delta)

        self.active_id = selection if app_state == AppState.PHOTO_VIEW else None
        follow = min(1.0, self.follow_rate * delta)

        for p in self.photos:
            scale = 1.0
            if p.id == self.active_id:
                cam_pos = np.asarray(camera.position, dtype=np.float64)
                target = cam_pos + camera.forward() * self.view_distance
                scale = 3.0
            else:
                mix = 0.0 if app_state == AppState.PHOTO_VIEW else self.progress
                target = p.chaos_pos + (p.target_pos - p.chaos_pos) * mix
            p.position += (target - p.position) * follow

            target_scale = scale * (0.8 if app_state == AppState.FORMED else 1.2)
            p.scale += (target_scale - p.scale) * min(1.0, 4.0 * delta)


def drift(verdict, app_state, delta):
    """Group (yaw, pitch) change this frame from hand steering or idle spin."""
    if app_state == AppState.CHAOS and verdict.is_open:
        x = (verdict.position[0] - 0.5) * 2
        y = (verdict.position[1] - 0.5) * 2
        return (x * delta * 6, y * delta * 2)
    if app_state == AppState.CHAOS:
        return (delta * 0.1, 0.0)
    if app_state == AppState.FORMED:
        return (delta * 0.2, 0.0)
    return (0.0, 0.0)
