from GestureState import AppState


def pick(ray, candidates, threshold=5.0):
    """
    Nearest candidate to the ray with squared distance below threshold.
    candidates: ordered iterable of (id, world_position). Ties keep the first.
    Returns the id or None.
    """
    if ray is None:
        return None
    closest_dist = threshold
    closest_id = None
    for candidate_id, position in candidates:
        d = ray.distance_sq_to_point(position)
        if d < closest_dist:
            closest_dist = d
            closest_id = candidate_id
    return closest_id


class ObjectPicker:
    def __init__(self, cfg=None):
        self.threshold = 5.0
        self.update_config(cfg)

    def update_config(self, cfg):
        c = (cfg or {}).get("picker", {})
        self.threshold = float(c.get("threshold", self.threshold))

    def update(self, processor, candidates):
        """
        Consume the controller's pending ray and resolve it against this
        frame's candidates. Returns the picked id or None.
        """
        if processor.app_state == AppState.PHOTO_VIEW:
            # selection stays pinned; drop the ray so it can't fire after exit
            processor.take_ray()
            return None

        ray = processor.take_ray()
        if ray is None:
            return None

        hit = pick(ray, candidates, self.threshold)
        if hit is not None:
            processor.select(hit)
        return hit
