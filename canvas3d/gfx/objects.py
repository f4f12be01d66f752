"""Scene graph nodes: Object3D and everything that hangs off it."""

from __future__ import annotations

import math
import uuid
from typing import Callable, Iterator, List, Optional

from .math3d import Color, Vector3


class Object3D:
    type = "Object3D"

    def __init__(self, position=None, rotation=None):
        self.uuid = uuid.uuid4().hex
        self.name = ""
        self.position = Vector3(0, 0, 0) if position is None else position
        self.rotation = Vector3(0, 0, 0) if rotation is None else rotation  # pitch (x), yaw (y), roll (z)
        self.scale = Vector3(1, 1, 1)
        self.visible = True
        self.user_data = {}
        self.parent: Optional[Object3D] = None
        self.children: List[Object3D] = []

    def add(self, *objects: "Object3D") -> "Object3D":
        for obj in objects:
            if obj is self:
                raise ValueError("An object cannot be added as a child of itself")
            if not isinstance(obj, Object3D):
                raise TypeError(f"{obj!r} is not an Object3D")
            if obj.parent is not None:
                obj.parent.remove(obj)
            obj.parent = self
            self.children.append(obj)
        return self

    def remove(self, *objects: "Object3D") -> "Object3D":
        for obj in objects:
            if obj in self.children:
                self.children.remove(obj)
                obj.parent = None
        return self

    def clear(self) -> "Object3D":
        return self.remove(*list(self.children))

    def traverse(self, callback: Callable[["Object3D"], None]):
        callback(self)
        for child in list(self.children):
            child.traverse(callback)

    def iter_descendants(self) -> Iterator["Object3D"]:
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def get_object_by_name(self, name: str) -> Optional["Object3D"]:
        for obj in self.iter_descendants():
            if obj.name == name:
                return obj
        return None

    def get_objects_by(self, **user_data) -> List["Object3D"]:
        """Descendants whose user_data contains every given key/value."""
        return [
            obj for obj in self.iter_descendants()
            if all(obj.user_data.get(k) == v for k, v in user_data.items())
        ]

    def look_at(self, target: Vector3):
        dx = target.x - self.position.x
        dy = target.y - self.position.y
        dz = target.z - self.position.z
        self.rotation.y = math.atan2(dx, dz)
        self.rotation.x = -math.atan2(dy, math.hypot(dx, dz))

    def __repr__(self):
        label = f" {self.name!r}" if self.name else ""
        return f"<{self.type}{label} children={len(self.children)}>"


class Scene(Object3D):
    type = "Scene"

    def __init__(self):
        super().__init__()
        self.background: Optional[Color] = None


class Group(Object3D):
    type = "Group"


class Mesh(Object3D):
    type = "Mesh"

    def __init__(self, geometry=None, material=None):
        super().__init__()
        self.geometry = geometry
        self.material = material


class Light(Object3D):
    type = "Light"

    def __init__(self, color=0xFFFFFF, intensity: float = 1.0):
        super().__init__()
        self.color = Color(color)
        self.intensity = float(intensity)


class AmbientLight(Light):
    type = "AmbientLight"


class DirectionalLight(Light):
    type = "DirectionalLight"


class PointLight(Light):
    type = "PointLight"

    def __init__(self, color=0xFFFFFF, intensity: float = 1.0, distance: float = 0.0):
        super().__init__(color, intensity)
        self.distance = float(distance)


class PerspectiveCamera(Object3D):
    type = "PerspectiveCamera"

    def __init__(self, fov: float = 75, aspect: float = 1.0, near: float = 0.1, far: float = 1000):
        super().__init__()
        self.fov = fov
        self.aspect = aspect
        self.near = near
        self.far = far

    def update_projection_matrix(self):
        # Projection lives in the renderer; kept for API parity.
        pass
