"""Camera module for view configuration, ray generation and rendering.

Components:
    camera: Thin-lens camera with look-at positioning, vertical field of
        view, optional depth of field and the render loop

Ray generation uses pixel coordinates:
    i in [0, image_width): left to right
    j in [0, image_height): top to bottom
"""

from .camera import Camera, CameraConfig, CameraState, ProgressCallback

__all__ = [
    "Camera",
    "CameraConfig",
    "CameraState",
    "ProgressCallback",
]
