"""Geometry and material descriptors.

These only carry parameters; building vertex data is the renderer's job.
"""

from __future__ import annotations

from .math3d import Color


class Geometry:
    type = "Geometry"

    def __init__(self, **parameters):
        self.parameters = parameters

    def __repr__(self):
        params = ", ".join(f"{k}={v!r}" for k, v in self.parameters.items())
        return f"{self.type}({params})"


class BoxGeometry(Geometry):
    type = "BoxGeometry"

    def __init__(self, width=1.0, height=1.0, depth=1.0):
        super().__init__(width=width, height=height, depth=depth)


class SphereGeometry(Geometry):
    type = "SphereGeometry"

    def __init__(self, radius=1.0, width_segments=32, height_segments=16):
        super().__init__(radius=radius, width_segments=width_segments, height_segments=height_segments)


class PlaneGeometry(Geometry):
    type = "PlaneGeometry"

    def __init__(self, width=1.0, height=1.0):
        super().__init__(width=width, height=height)


class CylinderGeometry(Geometry):
    type = "CylinderGeometry"

    def __init__(self, radius_top=1.0, radius_bottom=1.0, height=1.0, radial_segments=32):
        super().__init__(
            radius_top=radius_top,
            radius_bottom=radius_bottom,
            height=height,
            radial_segments=radial_segments,
        )


class ConeGeometry(Geometry):
    type = "ConeGeometry"

    def __init__(self, radius=1.0, height=1.0, radial_segments=32):
        super().__init__(radius=radius, height=height, radial_segments=radial_segments)


class TorusGeometry(Geometry):
    type = "TorusGeometry"

    def __init__(self, radius=1.0, tube=0.4, radial_segments=12, tubular_segments=48):
        super().__init__(
            radius=radius,
            tube=tube,
            radial_segments=radial_segments,
            tubular_segments=tubular_segments,
        )


class Material:
    type = "Material"

    def __init__(self, color=0xFFFFFF, opacity: float = 1.0, transparent: bool = False,
                 wireframe: bool = False, **extra):
        self.color = Color(color)
        self.opacity = float(opacity)
        self.transparent = transparent
        self.wireframe = wireframe
        self.extra = extra

    def __repr__(self):
        return f"{self.type}(color={self.color!r})"


class MeshBasicMaterial(Material):
    type = "MeshBasicMaterial"


class MeshStandardMaterial(Material):
    type = "MeshStandardMaterial"

    def __init__(self, color=0xFFFFFF, roughness: float = 1.0, metalness: float = 0.0, **kwargs):
        super().__init__(color, **kwargs)
        self.roughness = float(roughness)
        self.metalness = float(metalness)


class MeshPhongMaterial(Material):
    type = "MeshPhongMaterial"

    def __init__(self, color=0xFFFFFF, shininess: float = 30.0, **kwargs):
        super().__init__(color, **kwargs)
        self.shininess = float(shininess)
