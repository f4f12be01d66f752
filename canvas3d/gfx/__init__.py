"""gfx package: the rendering library namespace handed to every module.

Modules reach everything through the single `gfx` name, e.g.:

    cube = gfx.Mesh(gfx.BoxGeometry(1, 1, 1), gfx.MeshStandardMaterial(color=0x44aa88))
    scene.add(cube)
"""

from .math3d import Vector3, Color, MathUtils, Clock
from .objects import (
    Object3D,
    Scene,
    Group,
    Mesh,
    Light,
    AmbientLight,
    DirectionalLight,
    PointLight,
    PerspectiveCamera,
)
from .geometry import (
    Geometry,
    BoxGeometry,
    SphereGeometry,
    PlaneGeometry,
    CylinderGeometry,
    ConeGeometry,
    TorusGeometry,
    Material,
    MeshBasicMaterial,
    MeshStandardMaterial,
    MeshPhongMaterial,
)
from .controls import OrbitControls
from .renderer import Renderer, HeadlessRenderer

__all__ = [
    "Vector3",
    "Color",
    "MathUtils",
    "Clock",
    "Object3D",
    "Scene",
    "Group",
    "Mesh",
    "Light",
    "AmbientLight",
    "DirectionalLight",
    "PointLight",
    "PerspectiveCamera",
    "Geometry",
    "BoxGeometry",
    "SphereGeometry",
    "PlaneGeometry",
    "CylinderGeometry",
    "ConeGeometry",
    "TorusGeometry",
    "Material",
    "MeshBasicMaterial",
    "MeshStandardMaterial",
    "MeshPhongMaterial",
    "OrbitControls",
    "Renderer",
    "HeadlessRenderer",
]
