"""Tests for the scene graph namespace handed to modules."""

import math
import pygame
import pytest
from canvas3d import gfx


class TestObject3D:
    """Test parent/child bookkeeping."""

    def test_add_and_remove(self):
        scene = gfx.Scene()
        mesh = gfx.Mesh(gfx.BoxGeometry(), gfx.MeshBasicMaterial())

        scene.add(mesh)
        assert mesh.parent is scene
        assert scene.children == [mesh]

        scene.remove(mesh)
        assert mesh.parent is None
        assert scene.children == []

    def test_reparenting_moves_child(self):
        a, b, mesh = gfx.Group(), gfx.Group(), gfx.Mesh()
        a.add(mesh)
        b.add(mesh)
        assert a.children == []
        assert b.children == [mesh]

    def test_cannot_add_self_or_non_object(self):
        group = gfx.Group()
        with pytest.raises(ValueError):
            group.add(group)
        with pytest.raises(TypeError):
            group.add("cube")

    def test_lookup_helpers(self):
        scene = gfx.Scene()
        group = gfx.Group()
        cube = gfx.Mesh()
        cube.name = "cube_1"
        cube.user_data["type"] = "cube"
        group.add(cube)
        scene.add(group)

        assert scene.get_object_by_name("cube_1") is cube
        assert scene.get_object_by_name("missing") is None
        assert scene.get_objects_by(type="cube") == [cube]

        visited = []
        scene.traverse(visited.append)
        assert visited == [scene, group, cube]


class TestMath:
    """Test vectors, colors and helpers."""

    def test_vector_ops(self):
        v = gfx.Vector3(1, 2, 3)
        v.add(gfx.Vector3(1, 1, 1))
        assert v == gfx.Vector3(2, 3, 4)
        assert (gfx.Vector3(3, 4, 0)).length() == 5
        assert gfx.Vector3(1, 0, 0).distance_to(gfx.Vector3(4, 4, 0)) == 5

    def test_color_from_hex(self):
        color = gfx.Color(0xFF8000)
        assert color.r == 1.0
        assert color.b == 0.0
        assert color.get_hex() == 0xFF8000
        assert gfx.Color("#ff8000") == color

    def test_vector_is_pygame_vector(self):
        v = gfx.Vector3(3, 4, 0)
        assert isinstance(v, pygame.math.Vector3)
        assert v.normalize() is v
        assert v.length() == pytest.approx(1)
        assert gfx.Vector3().normalize() == gfx.Vector3(0, 0, 0)

    def test_vector_arithmetic_keeps_type(self):
        a = gfx.Vector3(1, 2, 3)
        total = a + gfx.Vector3(1, 1, 1)
        assert isinstance(total, gfx.Vector3)
        assert total.clone().multiply_scalar(2) == gfx.Vector3(4, 6, 8)
        assert a == gfx.Vector3(1, 2, 3)
        assert a * 2 == gfx.Vector3(2, 4, 6)
        assert a.copy() is not a

    def test_zero_position_kept(self):
        origin = gfx.Vector3(0, 0, 0)
        assert gfx.Object3D(position=origin).position is origin

    def test_color_named_and_pygame(self):
        assert gfx.Color("red").get_hex() == 0xFF0000
        assert gfx.Color(0x00FF00).to_pygame() == pygame.Color(0, 255, 0)
        assert gfx.Color(0.5, 0.5, 0.5).get_hex() == 0x808080

    def test_clock_delta(self):
        clock = gfx.Clock()
        assert clock.get_delta() >= 0
        assert clock.get_elapsed_time() >= 0

    def test_math_utils(self):
        assert gfx.MathUtils.deg_to_rad(180) == pytest.approx(math.pi)
        assert gfx.MathUtils.clamp(5, 0, 1) == 1
        assert gfx.MathUtils.lerp(0, 10, 0.25) == 2.5


class TestControlsAndRenderer:
    """Test per-frame helpers."""

    def test_orbit_controls_keep_radius(self):
        camera = gfx.PerspectiveCamera()
        camera.position.z = 5
        controls = gfx.OrbitControls(camera)

        controls.rotate(0.5)
        assert controls.update()
        assert camera.position.length() == pytest.approx(5)
        assert camera.position.x != 0

    def test_orbit_controls_idle(self):
        camera = gfx.PerspectiveCamera()
        camera.position.z = 5
        controls = gfx.OrbitControls(camera)
        assert not controls.update()

    def test_headless_renderer_skips_hidden(self):
        scene = gfx.Scene()
        hidden = gfx.Group()
        hidden.visible = False
        hidden.add(gfx.Mesh())
        scene.add(gfx.Mesh(), hidden)

        renderer = gfx.HeadlessRenderer()
        renderer.render(scene, None)

        assert renderer.frames == 1
        assert renderer.last_draw_count == 1
