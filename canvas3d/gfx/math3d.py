"""Vector / color / math helpers used by the scene graph.

Vector3 and Color sit on pygame's types; the extra methods give modules the
chainable, in-place names they expect (set, add, multiply_scalar, ...).
"""

from __future__ import annotations

import math
import random

import pygame
from pygame.math import Vector3 as _PgVector3


class Vector3(_PgVector3):
    """pygame Vector3 with in-place, chainable helpers."""

    def set(self, x: float, y: float, z: float) -> "Vector3":
        self.update(x, y, z)
        return self

    def copy(self, other=None) -> "Vector3":
        """copy() clones; copy(other) overwrites self with other."""
        if other is None:
            return Vector3(self)
        self.update(other)
        return self

    def clone(self) -> "Vector3":
        return Vector3(self)

    def add(self, other) -> "Vector3":
        self.update(self.x + other.x, self.y + other.y, self.z + other.z)
        return self

    def sub(self, other) -> "Vector3":
        self.update(self.x - other.x, self.y - other.y, self.z - other.z)
        return self

    def multiply_scalar(self, s: float) -> "Vector3":
        self.update(self.x * s, self.y * s, self.z * s)
        return self

    def normalize(self) -> "Vector3":
        # In place, and a zero vector stays zero instead of raising
        if self.length_squared():
            self.normalize_ip()
        return self

    def to_tuple(self):
        return (self.x, self.y, self.z)

    def __add__(self, other) -> "Vector3":
        return self.clone().add(Vector3(other))

    def __sub__(self, other) -> "Vector3":
        return self.clone().sub(Vector3(other))

    def __mul__(self, other):
        if isinstance(other, (int, float)):
            return self.clone().multiply_scalar(other)
        return self.dot(other)


def _channel(value: float) -> int:
    return max(0, min(255, round(float(value) * 255)))


class Color:
    """
    RGB color with float channels in [0, 1], stored as a pygame.Color.

    Accepts 0xRRGGBB ints, "#rrggbb" or named strings ("red"), another
    Color or pygame.Color, a single float (grey) or three floats.
    """

    def __init__(self, r=1.0, g=None, b=None):
        self._rgb = pygame.Color(255, 255, 255)
        if g is None and b is None:
            self.set(r)
        else:
            self.set_rgb(r, g, b)

    def set(self, value) -> "Color":
        if isinstance(value, Color):
            self._rgb = pygame.Color(value._rgb)
        elif isinstance(value, pygame.Color):
            self._rgb = pygame.Color(value)
        elif isinstance(value, str):
            self._rgb = pygame.Color(value)
        elif isinstance(value, int):
            self.set_hex(value)
        else:
            grey = _channel(value)
            self._rgb = pygame.Color(grey, grey, grey)
        return self

    def set_hex(self, value: int) -> "Color":
        # pygame.Color(int) reads 0xRRGGBBAA, so split the channels here
        self._rgb = pygame.Color((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)
        return self

    def set_rgb(self, r: float, g: float, b: float) -> "Color":
        self._rgb = pygame.Color(_channel(r), _channel(g), _channel(b))
        return self

    @property
    def r(self) -> float:
        return self._rgb.r / 255.0

    @r.setter
    def r(self, value: float):
        self._rgb.r = _channel(value)

    @property
    def g(self) -> float:
        return self._rgb.g / 255.0

    @g.setter
    def g(self, value: float):
        self._rgb.g = _channel(value)

    @property
    def b(self) -> float:
        return self._rgb.b / 255.0

    @b.setter
    def b(self, value: float):
        self._rgb.b = _channel(value)

    def get_hex(self) -> int:
        return (self._rgb.r << 16) | (self._rgb.g << 8) | self._rgb.b

    def to_pygame(self) -> pygame.Color:
        return pygame.Color(self._rgb)

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return self.get_hex() == other.get_hex()

    def __repr__(self):
        return f"Color(0x{self.get_hex():06x})"


class MathUtils:
    pi = math.pi
    sin = staticmethod(math.sin)
    cos = staticmethod(math.cos)
    sqrt = staticmethod(math.sqrt)
    atan2 = staticmethod(math.atan2)

    @staticmethod
    def deg_to_rad(degrees: float) -> float:
        return math.radians(degrees)

    @staticmethod
    def rad_to_deg(radians: float) -> float:
        return math.degrees(radians)

    @staticmethod
    def clamp(value: float, low: float, high: float) -> float:
        return max(low, min(high, value))

    @staticmethod
    def lerp(a: float, b: float, t: float) -> float:
        return a + (b - a) * t

    @staticmethod
    def rand_float(low: float, high: float) -> float:
        return random.uniform(low, high)


class Clock:
    """Elapsed / delta time tracker for animations, on pygame.time.Clock."""

    def __init__(self, autostart: bool = True):
        self._clock = pygame.time.Clock()
        self.elapsed_time = 0.0
        self.running = False
        if autostart:
            self.start()

    def start(self):
        self._clock.tick()  # reset the reference tick
        self.elapsed_time = 0.0
        self.running = True

    def get_delta(self) -> float:
        """Seconds since the previous call (or since start)."""
        if not self.running:
            self.start()
            return 0.0
        delta = self._clock.tick() / 1000.0
        self.elapsed_time += delta
        return delta

    def get_elapsed_time(self) -> float:
        self.get_delta()
        return self.elapsed_time
