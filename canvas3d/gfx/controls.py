"""OrbitControls: damped orbit of a camera around a target point.

Input layers call rotate()/zoom() to set targets; update() eases the
camera toward them once per frame.
"""

from __future__ import annotations

import math

from .math3d import Vector3


class OrbitControls:
    def __init__(self, camera, target=None, *, enable_damping: bool = True, damping_factor: float = 0.05):
        self.camera = camera
        self.target = Vector3(0, 0, 0) if target is None else target
        self.enable_damping = enable_damping
        self.damping_factor = float(damping_factor)
        self.min_distance = 0.5
        self.max_distance = 500.0

        offset = camera.position - self.target
        self.radius = offset.length() or 1.0
        self.theta = math.atan2(offset.x, offset.z)  # azimuth
        self.phi = math.acos(max(-1.0, min(1.0, offset.y / self.radius)))  # polar

        self._theta_delta = 0.0
        self._phi_delta = 0.0
        self._zoom_scale = 1.0

    def rotate(self, d_theta: float, d_phi: float = 0.0):
        self._theta_delta += d_theta
        self._phi_delta += d_phi

    def zoom(self, scale: float):
        self._zoom_scale *= scale

    def update(self) -> bool:
        """Advance the orbit by one frame. Returns True if the camera moved."""
        factor = self.damping_factor if self.enable_damping else 1.0
        step_theta = self._theta_delta * factor
        step_phi = self._phi_delta * factor

        self.theta += step_theta
        self.phi = max(1e-6, min(math.pi - 1e-6, self.phi + step_phi))
        radius = max(self.min_distance, min(self.max_distance, self.radius * self._zoom_scale))
        moved = bool(step_theta or step_phi or radius != self.radius)
        self.radius = radius

        if self.enable_damping:
            self._theta_delta *= 1.0 - factor
            self._phi_delta *= 1.0 - factor
        else:
            self._theta_delta = self._phi_delta = 0.0
        self._zoom_scale = 1.0

        sin_phi = math.sin(self.phi)
        self.camera.position.set(
            self.target.x + self.radius * sin_phi * math.sin(self.theta),
            self.target.y + self.radius * math.cos(self.phi),
            self.target.z + self.radius * sin_phi * math.cos(self.theta),
        )
        self.camera.look_at(self.target)
        return moved
