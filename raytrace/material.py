"""Surface materials and how they scatter light."""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .geometry import Ray, Vec3, random_in_unit_sphere, random_unit_vector

if TYPE_CHECKING:
    from .hittable import HitRecord


class Material(ABC):
    """How a surface responds to an incoming ray."""

    @abstractmethod
    def scatter(self, ray: Ray, record: HitRecord) -> tuple[Vec3, Ray] | None:
        """Return (attenuation, scattered ray), or None if the ray is absorbed."""


@dataclass(frozen=True)
class Metal(Material):
    """A reflective surface; ``fuzz`` blurs the reflection."""

    albedo: Vec3
    fuzz: float = 0.0

    def scatter(self, ray: Ray, record: HitRecord) -> tuple[Vec3, Ray] | None:
        reflected = reflect(ray.direction.unit(), record.normal)
        scattered = Ray(record.point, reflected + random_in_unit_sphere() * self.fuzz)
        if scattered.direction.dot(record.normal) > 0:
            return self.albedo, scattered
        return None


@dataclass(frozen=True)
class Dielectric(Material):
    """A transparent surface such as glass, with index of refraction ``ir``."""

    albedo: Vec3
    ir: float = 1.0

    def scatter(self, ray: Ray, record: HitRecord) -> tuple[Vec3, Ray] | None:
        ratio = 1.0 / self.ir if record.front_face else self.ir
        unit_dir = ray.direction.unit()
        cos_theta = min((-unit_dir).dot(record.normal), 1.0)
        sin_theta = math.sqrt(1 - cos_theta * cos_theta)

        if ratio * sin_theta > 1 or schlick_reflectance(cos_theta, ratio) > random.random():
            direction = reflect(unit_dir, record.normal)
        else:
            direction = refract(unit_dir, record.normal, ratio)
        return self.albedo, Ray(record.point, direction)


class DiffusionType(Enum):
    LAMBERTIAN = 0
    SIMPLE = 1


@dataclass(frozen=True)
class Diffusion(Material):
    """A matte surface."""

    albedo: Vec3
    diffusion_type: DiffusionType = DiffusionType.LAMBERTIAN

    def __post_init__(self) -> None:
        object.__setattr__(self, "diffusion_type", DiffusionType(self.diffusion_type))

    def scatter(self, ray: Ray, record: HitRecord) -> tuple[Vec3, Ray] | None:
        direction = record.normal + self._diffuse(record)
        if direction.near_zero():
            direction = record.normal
        return self.albedo, Ray(record.point, direction)

    def _diffuse(self, record: HitRecord) -> Vec3:
        if self.diffusion_type is DiffusionType.LAMBERTIAN:
            return random_unit_vector()
        r = random_in_unit_sphere()
        return -r if r.dot(record.normal) < 0 else r


def schlick_reflectance(cosine: float, ratio: float) -> float:
    """Schlick's approximation of reflectance."""
    r0 = (1 - ratio) / (1 + ratio)
    r0 = r0 * r0
    return r0 + (1 - r0) * math.pow(1 - cosine, 5)


def reflect(v: Vec3, n: Vec3) -> Vec3:
    """Reflect ``v`` about the normal ``n``."""
    return v - n * 2 * v.dot(n)


def refract(uv: Vec3, n: Vec3, eta: float) -> Vec3:
    """Refract the unit vector ``uv`` through a surface with normal ``n``."""
    cos_theta = min((-uv).dot(n), 1.0)
    perp = (n * cos_theta + uv) * eta
    parallel = n * -math.sqrt(abs(1 - perp.length_squared()))
    return perp + parallel