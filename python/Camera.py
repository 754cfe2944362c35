import numpy as np
from pyrr import Matrix44, Vector3


class Ray:
    """Origin + unit direction in world space."""

    def __init__(self, origin, direction):
        self.origin = np.asarray(origin, dtype=np.float64).reshape(3)
        d = np.asarray(direction, dtype=np.float64).reshape(3)
        length = np.linalg.norm(d)
        if length <= 1e-12:
            d = np.array([0.0, 0.0, -1.0])
            length = 1.0
        self.direction = d / length

    def at(self, t):
        return self.origin + self.direction * t

    def distance_sq_to_point(self, point):
        """
        Squared distance from point to the ray. Points behind the origin
        measure to the origin itself.
        """
        p = np.asarray(point, dtype=np.float64).reshape(3)
        rel = p - self.origin
        t = float(np.dot(rel, self.direction))
        if t < 0.0:
            return float(np.dot(rel, rel))
        diff = p - self.at(t)
        return float(np.dot(diff, diff))

    def to_dict(self):
        return {"origin": self.origin.tolist(), "direction": self.direction.tolist()}

    def __repr__(self):
        return f"Ray(origin={self.origin.tolist()}, direction={self.direction.tolist()})"


class Camera:
    """
    Perspective camera matching the scene's default view. Converts the
    normalized pointer into a world-space ray.

    Matrices use pyrr's row-vector convention: clip = [x, y, z, 1] @ view @ projection.
    """

    def __init__(self, cfg=None):
        self.position = Vector3([0.0, 1.0, 22.0])
        self.target = Vector3([0.0, 0.0, 0.0])
        self.up = Vector3([0.0, 1.0, 0.0])
        self.fov = 40.0
        self.aspect = 16.0 / 9.0
        self.near = 0.1
        self.far = 1000.0
        self.update_config(cfg)

    def update_config(self, cfg):
        c = (cfg or {}).get("camera", {})
        self.position = Vector3(c.get("position", list(self.position)))
        self.target = Vector3(c.get("target", list(self.target)))
        self.fov = float(c.get("fov", self.fov))
        if "frame_width" in c and "frame_height" in c and c["frame_height"]:
            self.aspect = float(c["frame_width"]) / float(c["frame_height"])
        self.aspect = float(c.get("aspect", self.aspect))
        self.near = float(c.get("near", self.near))
        self.far = float(c.get("far", self.far))
        self._rebuild()

    def set_position(self, position):
        self.position = Vector3(position)
        self._rebuild()

    def _rebuild(self):
        self.view = Matrix44.look_at(self.position, self.target, self.up)
        self.projection = Matrix44.perspective_projection(
            self.fov, self.aspect, self.near, self.far
        )
        self.view_projection = np.dot(np.asarray(self.view), np.asarray(self.projection))
        self.inverse_view_projection = np.linalg.inv(self.view_projection)

    def forward(self):
        d = np.asarray(self.target, dtype=np.float64) - np.asarray(self.position, dtype=np.float64)
        return d / np.linalg.norm(d)

    def unproject(self, ndc_x, ndc_y, ndc_z=0.5):
        world = np.dot(np.array([ndc_x, ndc_y, ndc_z, 1.0]), self.inverse_view_projection)
        return world[:3] / world[3]

    def ray_from_pointer(self, x, y):
        """Ray from the camera through a normalized (already mirrored) pointer."""
        ndc_x = x * 2.0 - 1.0
        ndc_y = -(y * 2.0) + 1.0
        origin = np.asarray(self.position, dtype=np.float64)
        return Ray(origin, self.unproject(ndc_x, ndc_y) - origin)

    def project(self, point):
        """World point -> normalized pointer (x, y), or None when behind the camera."""
        p = np.asarray(point, dtype=np.float64).reshape(3)
        clip = np.dot(np.append(p, 1.0), self.view_projection)
        if clip[3] <= 1e-9:
            return None
        ndc = clip[:3] / clip[3]
        return ((ndc[0] + 1.0) / 2.0, (1.0 - ndc[1]) / 2.0)
