from Camera import Camera
from GestureClassifier import GestureClassifier
from GestureProcessor import GestureProcessor
from ObjectPicker import ObjectPicker
from PhotoCloud import PhotoCloud, drift


class FramePipeline:
    """
    One frame's worth of logic, strictly in order:
    classifier -> controller -> picker -> photo model.
    """

    def __init__(self, cfg=None, camera=None, cloud=None):
        self.camera = camera or Camera(cfg)
        self.classifier = GestureClassifier(cfg)
        self.processor = GestureProcessor(self.camera, cfg)
        self.picker = ObjectPicker(cfg)
        self.cloud = cloud or PhotoCloud(cfg)
        self.rotation = [0.0, 0.0]  # group yaw, pitch
        self.last_time = None

    def update_config(self, cfg):
        self.camera.update_config(cfg)
        self.classifier.update_config(cfg)
        self.processor.update_config(cfg)
        self.picker.update_config(cfg)
        self.cloud.update_config(cfg)

    def step(self, hand, now):
        """hand: HandData or None. now: monotonic seconds."""
        delta = 0.0 if self.last_time is None else max(0.0, now - self.last_time)
        self.last_time = now

        verdict = self.classifier.classify_hand(hand)
        events = self.processor.process(verdict, now)
        picked = self.picker.update(self.processor, self.cloud.candidates())

        app_state = self.processor.app_state
        self.cloud.update(app_state, self.processor.selection, delta, self.camera)
        yaw, pitch = drift(events.verdict, app_state, delta)
        self.rotation[0] += yaw
        self.rotation[1] += pitch

        payload = events.to_dict()
        payload["app_state"] = app_state.value
        payload["picked"] = picked
        payload["selection"] = self.processor.selection
        payload["progress"] = self.cloud.progress
        payload["rotation"] = list(self.rotation)
        payload["candidates"] = [
            {"id": cid, "position": pos.tolist()} for cid, pos in self.cloud.candidates()
        ]
        return payload
