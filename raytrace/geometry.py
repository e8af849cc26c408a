"""Vectors, colours and rays."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import NamedTuple, Union

_Number = Union[int, float]


def _clamp(x: float, low: float, high: float) -> float:
    if x < low:
        return low
    if x > high:
        return high
    return x


@dataclass(frozen=True, slots=True)
class Vec3:
    """An immutable three-component vector, also used for points and colours."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3 | _Number) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)
        if isinstance(other, (int, float)):
            return Vec3(self.x + other, self.y + other, self.z + other)
        return NotImplemented

    def __sub__(self, other: Vec3 | _Number) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, (int, float)):
            return Vec3(self.x - other, self.y - other, self.z - other)
        return NotImplemented

    def __mul__(self, other: Vec3 | _Number) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, (int, float)):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: _Number) -> Vec3:
        if isinstance(other, (int, float)):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __truediv__(self, other: Vec3 | _Number) -> Vec3:
        if isinstance(other, Vec3):
            if other.x == 0 or other.y == 0 or other.z == 0:
                raise ZeroDivisionError("Vec3 division by a vector with a zero component")
            return Vec3(self.x / other.x, self.y / other.y, self.z / other.z)
        if isinstance(other, (int, float)):
            if other == 0:
                raise ZeroDivisionError("Vec3 division by zero")
            return Vec3(self.x / other, self.y / other, self.z / other)
        return NotImplemented

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __abs__(self) -> Vec3:
        return Vec3(abs(self.x), abs(self.y), abs(self.z))

    def sum(self) -> float:
        """Sum of the components."""
        return self.x + self.y + self.z

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def squared(self) -> Vec3:
        """Component-wise square."""
        return Vec3(self.x * self.x, self.y * self.y, self.z * self.z)

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def unit(self) -> Vec3:
        """The vector scaled to length one; raises ZeroDivisionError for the zero vector."""
        return self / self.length()

    def near_zero(self) -> bool:
        """True if every component is smaller than 1e-8 in magnitude."""
        eps = 1e-8
        a = abs(self)
        return a.x < eps and a.y < eps and a.z < eps

    def to_rgb(self, scale: float) -> RGB:
        """Average a summed colour by ``scale``, gamma-correct it and quantise to 0..255."""
        v = self / scale
        return RGB(
            *(
                int(255.999 * _clamp(math.sqrt(max(c, 0.0)), 0.0, 0.999))
                for c in (v.x, v.y, v.z)
            )
        )


Point3 = Vec3
Color = Vec3


class RGB(NamedTuple):
    """An 8-bit colour."""

    r: int
    g: int
    b: int


@dataclass(frozen=True, slots=True)
class Ray:
    """A ray ``origin + t * direction``."""

    origin: Vec3
    direction: Vec3

    def at(self, t: float) -> Vec3:
        return self.origin + self.direction * t


def random_vec3(low: float, high: float) -> Vec3:
    """A vector whose components are uniform in [low, high)."""
    scale = high - low
    return Vec3(
        low + random.random() * scale,
        low + random.random() * scale,
        low + random.random() * scale,
    )


def random_in_unit_sphere() -> Vec3:
    """A point uniformly distributed inside the unit sphere."""
    while True:
        x = -1 + 2 * random.random()
        y = -1 + 2 * random.random()
        z = -1 + 2 * random.random()
        if x * x + y * y + z * z < 1:
            return Vec3(x, y, z)


def random_unit_vector() -> Vec3:
    """A uniformly distributed direction of length one."""
    return random_in_unit_sphere().unit()